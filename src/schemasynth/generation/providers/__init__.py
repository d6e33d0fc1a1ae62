"""Leaf value providers for built-in archetypes."""

from .base import LeafProvider
from .faker_provider import FakerLeafProvider, LOCALE_MAP, resolve_locale
from .registry import PROVIDERS, get_provider, register_provider, list_providers

__all__ = [
    "LeafProvider",
    "FakerLeafProvider",
    "LOCALE_MAP",
    "resolve_locale",
    "PROVIDERS",
    "get_provider",
    "register_provider",
    "list_providers",
]
