"""Per-entity id pools and foreign key sampling."""

import numpy as np
from typing import Dict, List, Optional, Tuple
from schemasynth.errors import EmptyReferencePoolError
from schemasynth.generation.constants import DEFAULT_NULL_PROBABILITY
from schemasynth.config.logging import get_logger

logger = get_logger(__name__)


class IdPool:
    """
    Ordered, append-only identifier pools for one generation call.

    Ids have the form ``{entity_name}_{n}`` with ``n`` counting from 1.
    Referencing entities only read pools through ``ids_for`` and
    ``sample_foreign_key``.
    """

    def __init__(self, null_probability: float = DEFAULT_NULL_PROBABILITY):
        if not 0.0 <= null_probability <= 1.0:
            raise ValueError(
                f"null_probability must be within [0, 1], got {null_probability}"
            )
        self.null_probability = null_probability
        self._pools: Dict[str, List[str]] = {}

    def open(self, entity_name: str) -> None:
        """Create the (empty) pool for an entity about to be generated."""
        if self._pools.get(entity_name):
            raise ValueError(f"ID pool for '{entity_name}' is already populated")
        self._pools[entity_name] = []

    def next_id(self, entity_name: str) -> str:
        """Append and return the next sequential id for an entity."""
        pool = self._pools.setdefault(entity_name, [])
        new_id = f"{entity_name}_{len(pool) + 1}"
        pool.append(new_id)
        return new_id

    def ids_for(self, entity_name: str) -> Tuple[str, ...]:
        """All ids generated so far for an entity."""
        return tuple(self._pools.get(entity_name, ()))

    def __len__(self) -> int:
        return sum(len(pool) for pool in self._pools.values())

    def sample_foreign_key(
        self,
        target_entity: str,
        rng: np.random.Generator,
        nullable: bool = False,
        limit: Optional[int] = None,
    ) -> Optional[str]:
        """
        Pick a foreign key value from the target entity's pool.

        Args:
            target_entity: Referenced entity
            rng: Random stream of the referencing entity
            nullable: Whether the field may be null
            limit: Only consider the first ``limit`` ids (self references)

        Returns:
            A referenced id, or None for a nullable field

        Raises:
            EmptyReferencePoolError: If the target has no ids to choose from
        """
        pool = self._pools.get(target_entity, [])
        candidates = pool if limit is None else pool[:limit]

        if not candidates:
            if nullable and limit is not None:
                # First record of a nullable self reference has nothing earlier to point at
                return None
            raise EmptyReferencePoolError(target_entity)

        if nullable and rng.random() < self.null_probability:
            return None

        return candidates[int(rng.integers(len(candidates)))]
