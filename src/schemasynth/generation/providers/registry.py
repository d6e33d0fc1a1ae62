"""Provider registry for leaf value providers."""

from typing import Callable, Dict, Optional
from .base import LeafProvider
from .faker_provider import FakerLeafProvider
from schemasynth.generation.constants import DEFAULT_PROVIDER
from schemasynth.config.logging import get_logger

logger = get_logger(__name__)

ProviderFactory = Callable[[int, Optional[str]], LeafProvider]

# Registry of provider factories: (seed, locale) -> provider
PROVIDERS: Dict[str, ProviderFactory] = {
    DEFAULT_PROVIDER: lambda seed, locale: FakerLeafProvider(seed, locale),
}


def get_provider(
    seed: int,
    locale: Optional[str] = None,
    name: str = DEFAULT_PROVIDER,
) -> LeafProvider:
    """
    Get a seeded provider instance by name.

    Args:
        seed: Seed for the provider's random stream
        locale: Locale hint
        name: Registered provider name

    Returns:
        LeafProvider instance

    Raises:
        KeyError: If provider name is not found
    """
    if name not in PROVIDERS:
        available = ", ".join(sorted(PROVIDERS.keys()))
        raise KeyError(
            f"Provider '{name}' not found. Available providers: {available}"
        )
    return PROVIDERS[name](seed, locale)


def register_provider(name: str, factory: ProviderFactory):
    """
    Register a new provider factory.

    Args:
        name: Provider name
        factory: Callable taking (seed, locale) and returning a LeafProvider
    """
    PROVIDERS[name] = factory
    logger.info(f"Registered provider: {name}")


def list_providers() -> list[str]:
    """
    List all registered provider names.

    Returns:
        List of provider names
    """
    return sorted(PROVIDERS.keys())
