"""
Exception hierarchy for PaperHome.

Errors fall into three families: bad input from the caller, unavailable
collaborators (local directory, external bibliographic API, analysis
model), and unexpected internal failures. Only the first and the last
ever reach the caller; collaborator failures are recovered where they
happen.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional


class PaperHomeError(Exception):
    """Base exception for all PaperHome errors.

    Provides common functionality for error details and timestamps.
    """

    def __init__(self, message: str, details: Optional[Dict] = None):
        """Initialize the exception.

        Args:
            message: Human-readable error message
            details: Optional dictionary with additional error context
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc)

    def __str__(self) -> str:
        """String representation of the exception."""
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message

    def to_dict(self) -> Dict:
        """Convert exception to dictionary for logging/serialization."""
        return {
            "type": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
            "timestamp": self.timestamp.isoformat(),
        }


class InputError(PaperHomeError):
    """Malformed or missing request body.

    Raised before any collaborator is called.
    """

    def __init__(
        self, message: str = "Invalid request", field: Optional[str] = None, **kwargs: Any
    ) -> None:
        """Initialize the input error.

        Args:
            message: Human-readable error message
            field: Optional name of the offending request field
            **kwargs: Additional details
        """
        details = kwargs
        if field:
            details["field"] = field
        super().__init__(message, details)
        self.field = field


class ProviderError(PaperHomeError):
    """An external collaborator could not serve a request.

    Base class for all errors raised while talking to the external
    bibliographic API. The ranking pipelines catch these and degrade.
    """

    def __init__(self, provider: str, message: str, **kwargs: Any) -> None:
        """Initialize the provider error.

        Args:
            provider: Name of the provider (e.g., 'scopus')
            message: Human-readable error message
            **kwargs: Additional details to store
        """
        super().__init__(f"[{provider}] {message}", kwargs)
        self.provider = provider


class RateLimitError(ProviderError):
    """Hit the API rate limit (HTTP 429)."""

    def __init__(
        self,
        provider: str,
        message: str = "Rate limit exceeded",
        retry_after: Optional[int] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(provider, message, retry_after=retry_after, **kwargs)
        self.retry_after = retry_after


class AuthenticationError(ProviderError):
    """API key invalid or not entitled (HTTP 401/403)."""

    def __init__(
        self, provider: str, message: str = "Authentication failed", **kwargs: Any
    ) -> None:
        super().__init__(provider, message, **kwargs)


class NetworkError(ProviderError):
    """Transport failure, timeout or non-success HTTP status."""

    def __init__(
        self,
        provider: str,
        message: str = "Network error",
        status_code: Optional[int] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(provider, message, status_code=status_code, **kwargs)
        self.status_code = status_code


class DirectoryError(PaperHomeError):
    """The local curated directory could not be loaded."""

    def __init__(
        self, message: str = "Directory unavailable", path: Optional[str] = None, **kwargs: Any
    ) -> None:
        details = kwargs
        if path:
            details["path"] = path
        super().__init__(message, details)
        self.path = path


class AnalysisError(PaperHomeError):
    """Text extraction or paper analysis failed."""

    def __init__(self, message: str = "Analysis failed", **kwargs: Any) -> None:
        super().__init__(message, kwargs)


class ConfigurationError(PaperHomeError):
    """Configuration error.

    Raised when the application configuration is invalid or incomplete.
    """

    def __init__(
        self,
        message: str = "Configuration error",
        config_key: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        details = kwargs
        if config_key:
            details["config_key"] = config_key
        super().__init__(message, details)
        self.config_key = config_key


class InternalError(PaperHomeError):
    """Unexpected failure in scoring or merging logic.

    The caller only ever sees a generic message; the wrapped exception
    is kept for logging.
    """

    def __init__(
        self,
        message: str = "Internal Server Error",
        cause: Optional[BaseException] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, kwargs)
        self.cause = cause
