"""
Provider implementations for PaperHome.

Available Providers:
    - Scopus: Elsevier bibliographic search and serial title metadata

Example:
    >>> from paperhome.providers import get_provider
    >>> provider = get_provider("scopus", config.scopus)
"""

from paperhome.core.config import ProviderConfig

from .base import BaseProvider
from .schemas import SearchResponse, SerialEntry, SerialResponse
from .scopus import (
    ScopusProvider,
    build_search_query,
    distinct_identifiers,
    entry_to_candidate,
    profile_url,
)


def get_provider(name: str, config: ProviderConfig) -> BaseProvider:
    """Get a provider instance by name.

    Args:
        name: Provider name (scopus, elsevier)
        config: Provider configuration

    Returns:
        Provider instance

    Raises:
        ValueError: If provider name is unknown
    """
    provider_map = {
        "scopus": ScopusProvider,
        "elsevier": ScopusProvider,  # Alias
    }

    name_lower = name.lower()
    if name_lower not in provider_map:
        raise ValueError(
            f"Unknown provider '{name}'. " f"Available: {', '.join(provider_map.keys())}"
        )

    return provider_map[name_lower](config)


__all__ = [
    "BaseProvider",
    "ScopusProvider",
    "get_provider",
    "build_search_query",
    "distinct_identifiers",
    "entry_to_candidate",
    "profile_url",
    "SearchResponse",
    "SerialEntry",
    "SerialResponse",
]
