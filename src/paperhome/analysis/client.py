from typing import Optional, Type, TypeVar

from openai import OpenAI
from pydantic import BaseModel

from paperhome.core.config import LLMConfig
from paperhome.utils.exceptions import ConfigurationError

T = TypeVar("T", bound=BaseModel)


class LLMClient:
    """Wrapper for structured LLM calls."""

    def __init__(self, config: LLMConfig, client: Optional[OpenAI] = None):
        self.model = config.model
        self.api_key = config.api_key

        if client is None and not self.api_key:
            raise ConfigurationError(
                "OpenAI API key not found. Set OPENAI_API_KEY env var.", config_key="llm.api_key"
            )

        self.client = client or OpenAI(api_key=self.api_key, base_url=config.base_url)

    def parse(self, system_prompt: str, user_prompt: str, response_model: Type[T]) -> Optional[T]:
        """Send a prompt and parse the reply into ``response_model``."""
        completion = self.client.beta.chat.completions.parse(
            model=self.model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            response_format=response_model,
        )

        return completion.choices[0].message.parsed
