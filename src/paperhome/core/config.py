"""
Configuration management for PaperHome.

This module provides configuration models and utilities for loading
and validating configuration from YAML files and environment variables.
The resulting ``AppConfig`` is built once at start-up and handed to the
ranking engine; it is frozen so no request can mutate it.
"""

import os
import re
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from paperhome.utils.exceptions import ConfigurationError

ENV_API_KEY = "ELSEVIER_API_KEY"
ENV_DIRECTORY = "PAPERHOME_DIRECTORY"


class ProviderConfig(BaseModel):
    """Configuration for the external bibliographic API."""

    enabled: bool = True
    base_url: str = Field(
        default="https://api.elsevier.com/content", description="API root URL"
    )
    timeout: float = Field(default=10.0, gt=0, le=300, description="Request timeout in seconds")
    api_key: Optional[str] = Field(default=None, description="API key; absent disables the provider")

    model_config = ConfigDict(
        frozen=True,
        extra="allow",
        str_strip_whitespace=True,
    )

    @property
    def is_configured(self) -> bool:
        """True when the provider is enabled and a credential is present."""
        return self.enabled and bool(self.api_key)


class RankingConfig(BaseModel):
    """Constants of the relevance-ranking engine."""

    top_keywords: int = Field(default=3, ge=1, description="Keywords used in the external search")
    search_count: int = Field(default=8, ge=1, le=200, description="Search results requested")
    max_detail_fetches: int = Field(
        default=5, ge=0, description="Distinct identifiers enriched per request"
    )
    field_boost: int = Field(default=20, ge=0, le=100)
    national_field_baseline: int = Field(default=50, ge=0, le=100)
    international_field_baseline: int = Field(default=40, ge=0, le=100)
    detail_timeout: float = Field(
        default=15.0, gt=0, description="Deadline in seconds for the detail fan-out"
    )
    max_workers: int = Field(default=5, ge=1, le=32)

    model_config = ConfigDict(frozen=True, extra="forbid")


class DirectoryConfig(BaseModel):
    """Configuration for the local curated journal directory."""

    path: Optional[Path] = Field(
        default=None, description="Directory YAML file (bundled SINTA list if unset)"
    )
    fuzzy_threshold: int = Field(default=85, ge=0, le=100)

    model_config = ConfigDict(frozen=True, extra="forbid")


class LLMConfig(BaseModel):
    """Configuration for the paper analysis model."""

    api_key: Optional[str] = None
    base_url: Optional[str] = None
    model: str = "gpt-4o-mini"
    max_chars: int = Field(default=30000, gt=0)

    model_config = ConfigDict(frozen=True, extra="forbid")


class AppConfig(BaseModel):
    """Main configuration for PaperHome."""

    scopus: ProviderConfig = Field(default_factory=ProviderConfig)
    ranking: RankingConfig = Field(default_factory=RankingConfig)
    directory: DirectoryConfig = Field(default_factory=DirectoryConfig)
    llm: LLMConfig = Field(default_factory=LLMConfig)

    model_config = ConfigDict(frozen=True, extra="forbid")

    @classmethod
    def from_env(cls, overrides: Optional[Dict[str, Any]] = None) -> "AppConfig":
        """Build the configuration from environment variables.

        Args:
            overrides: Optional nested dictionary merged over the environment values

        Returns:
            Validated AppConfig instance
        """
        data: Dict[str, Any] = {
            "scopus": {"api_key": os.getenv(ENV_API_KEY) or None},
            "llm": {
                "api_key": os.getenv("OPENAI_API_KEY") or None,
                "base_url": os.getenv("LLM_BASE_URL") or None,
            },
        }
        if os.getenv("LLM_MODEL"):
            data["llm"]["model"] = os.getenv("LLM_MODEL")
        if os.getenv(ENV_DIRECTORY):
            data["directory"] = {"path": os.getenv(ENV_DIRECTORY)}

        if overrides:
            data = _deep_merge(data, overrides)

        return load_config_from_dict(data)


def load_config(config_path: Path) -> AppConfig:
    """Load configuration from a YAML file.

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Validated AppConfig instance

    Raises:
        FileNotFoundError: If config file doesn't exist
        ConfigurationError: If config is invalid

    Example:
        >>> config = load_config(Path("paperhome.yml"))
        >>> print(config.ranking.max_detail_fetches)
        5
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        try:
            raw_config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {config_path}: {e}") from e

    if not isinstance(raw_config, dict):
        raise ConfigurationError(f"Configuration root must be a mapping: {config_path}")

    return load_config_from_dict(raw_config)


def load_config_from_dict(config_dict: Dict[str, Any]) -> AppConfig:
    """Load configuration from a dictionary.

    Args:
        config_dict: Configuration dictionary

    Returns:
        Validated AppConfig instance

    Example:
        >>> config = load_config_from_dict({"scopus": {"api_key": "${ELSEVIER_API_KEY}"}})
    """
    expanded_config = _expand_env_vars(config_dict)

    try:
        return AppConfig(**expanded_config)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e


def _expand_env_vars(config: Any) -> Any:
    """Recursively expand environment variables in config.

    Supports ${VAR_NAME} and ${VAR_NAME:-default} syntax. An unset
    variable without a default expands to an empty string, so an unset
    credential stays unset.
    """
    if isinstance(config, dict):
        return {k: _expand_env_vars(v) for k, v in config.items()}
    elif isinstance(config, list):
        return [_expand_env_vars(item) for item in config]
    elif isinstance(config, str):

        def replace_env_var(match: Any) -> str:
            var_expr = match.group(1)

            if ":-" in var_expr:
                var_name, default = var_expr.split(":-", 1)
                return str(os.getenv(var_name.strip(), default.strip()))
            return os.getenv(var_expr.strip(), "")

        return re.sub(r"\$\{([^}]+)\}", replace_env_var, config)
    else:
        return config


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Deep merge two dictionaries."""
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value

    return result
