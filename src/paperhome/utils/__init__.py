"""
Utility modules for PaperHome.

This package contains:
- The exception hierarchy
- Logging configuration
"""

from .exceptions import (
    AnalysisError,
    AuthenticationError,
    ConfigurationError,
    DirectoryError,
    InputError,
    InternalError,
    NetworkError,
    PaperHomeError,
    ProviderError,
    RateLimitError,
)
from .logging import (
    ColoredFormatter,
    PerformanceLogger,
    configure_library_logging,
    setup_logging,
)

__all__ = [
    # Exceptions
    "PaperHomeError",
    "InputError",
    "ProviderError",
    "RateLimitError",
    "AuthenticationError",
    "NetworkError",
    "DirectoryError",
    "AnalysisError",
    "ConfigurationError",
    "InternalError",
    # Logging
    "setup_logging",
    "configure_library_logging",
    "PerformanceLogger",
    "ColoredFormatter",
]
