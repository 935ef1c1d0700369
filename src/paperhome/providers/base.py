"""
Base provider module for PaperHome.

This module defines the base class for external bibliographic
API clients. Each call is a single attempt: a failure is final for the
request that made it, and it is up to the caller to degrade.
"""

import logging
from typing import Any, Dict, Optional

import requests

from paperhome.core.config import ProviderConfig
from paperhome.utils.exceptions import (
    AuthenticationError,
    NetworkError,
    ProviderError,
    RateLimitError,
)

logger = logging.getLogger(__name__)

USER_AGENT = "PaperHome/0.3 (journal recommender)"


class BaseProvider:
    """Base class for external API clients.

    Provides the HTTP plumbing and error mapping shared by providers.
    Instances hold only read-only configuration and are safe to share
    between threads.

    Attributes:
        config: Provider configuration
        name: Provider name
    """

    def __init__(self, config: ProviderConfig):
        """Initialize the provider.

        Args:
            config: Provider configuration with base URL, timeout and key

        Raises:
            ValueError: If config is invalid
        """
        if not isinstance(config, ProviderConfig):
            raise ValueError("config must be a ProviderConfig instance")

        self.config = config

        logger.debug(
            f"Initialized {self.name} provider "
            f"(timeout={config.timeout}s, configured={config.is_configured})"
        )

    @property
    def name(self) -> str:
        return self.__class__.__name__.lower()

    @property
    def is_configured(self) -> bool:
        return self.config.is_configured

    def _auth_headers(self) -> Dict[str, str]:
        """Provider-specific authentication headers."""
        return {}

    def _make_request(
        self,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Dict[str, Any]:
        """Make one HTTP GET request and parse the JSON body.

        Args:
            url: Request URL
            params: Query parameters
            headers: Extra request headers

        Returns:
            Parsed JSON response

        Raises:
            RateLimitError: On 429 status
            AuthenticationError: On 401/403 status
            NetworkError: On timeouts, connection errors and other non-success statuses
            ProviderError: On malformed responses
        """
        request_headers = {
            "User-Agent": USER_AGENT,
            "Accept": "application/json",
        }
        request_headers.update(self._auth_headers())
        if headers:
            request_headers.update(headers)

        try:
            response = requests.get(
                url,
                params=params,
                headers=request_headers,
                timeout=self.config.timeout,
            )
        except requests.exceptions.Timeout:
            raise NetworkError(self.name, f"Request timeout after {self.config.timeout}s", url=url)
        except requests.exceptions.ConnectionError as e:
            raise NetworkError(self.name, f"Connection error: {e}", url=url)
        except requests.exceptions.RequestException as e:
            raise ProviderError(self.name, f"Request failed: {e}", url=url)

        if response.status_code == 429:
            retry_after = response.headers.get("Retry-After")
            raise RateLimitError(
                self.name,
                retry_after=int(retry_after) if retry_after and retry_after.isdigit() else None,
            )

        if response.status_code in (401, 403):
            raise AuthenticationError(
                self.name,
                "Authentication failed - check API key",
                status_code=response.status_code,
            )

        if not response.ok:
            raise NetworkError(
                self.name,
                f"HTTP {response.status_code}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise ProviderError(self.name, f"Invalid JSON response: {e}", url=url)

        if not isinstance(data, dict):
            raise ProviderError(self.name, "Unexpected JSON payload (not an object)", url=url)
        return data

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"name='{self.name}', "
            f"configured={self.is_configured})"
        )
