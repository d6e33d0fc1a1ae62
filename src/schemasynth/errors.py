"""Exception types raised by the generation engine."""

from typing import Iterable, List


class SchemaSynthError(Exception):
    """Base class for all SchemaSynth errors."""


class SchemaInvalidError(SchemaSynthError, ValueError):
    """Dataset schema failed validation. Carries every violation found."""

    def __init__(self, errors: Iterable[str]):
        self.errors: List[str] = list(errors)
        super().__init__(f"Invalid dataset schema: {'; '.join(self.errors)}")


class InvalidSeedError(SchemaSynthError, ValueError):
    """Seed is not a non-negative safe integer, or seed text is unusable."""


class EmptyReferencePoolError(SchemaSynthError, ValueError):
    """Foreign key requested from an entity that has no generated ids yet."""

    def __init__(self, entity_name: str):
        self.entity_name = entity_name
        super().__init__(f"No IDs available for entity '{entity_name}'")


class EmptyEnumError(SchemaSynthError, ValueError):
    """Enumeration pattern has no values to choose from."""


class InvalidPatternError(SchemaSynthError, ValueError):
    """Regular expression or template pattern cannot be used."""


class InvalidRangeError(SchemaSynthError, ValueError):
    """Numeric range pattern is empty (min > max) or malformed."""


class UnsupportedLocaleError(SchemaSynthError, ValueError):
    """Locale has no leaf data tables."""


class InternalOrderingError(SchemaSynthError, RuntimeError):
    """Resolver produced an incomplete order for a schema that passed validation."""
