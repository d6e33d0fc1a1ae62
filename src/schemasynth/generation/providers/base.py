"""Base protocol for leaf value providers."""

from typing import Any, Dict, Protocol
from schemasynth.ir.schema import Archetype


class LeafProvider(Protocol):
    """
    Protocol for providers that fill the fields of built-in archetypes.

    Providers are constructed from a seed and a locale; repeated calls on
    providers built with the same seed must return the same sequence of
    records.
    """

    seed: int
    locale: str

    def generate(self, archetype: Archetype, **options: Any) -> Dict[str, Any]:
        """
        Generate the fields of one record.

        Args:
            archetype: PERSON or COMPANY
            **options: Archetype-specific switches (e.g. include_address)

        Returns:
            Field name -> value mapping (no ``id``)
        """
        ...
