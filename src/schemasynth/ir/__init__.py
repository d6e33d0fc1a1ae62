"""Schema, pattern and result models."""

from .schema import (
    Archetype,
    Cardinality,
    DatasetSchema,
    EntityDefinition,
    RelationshipDefinition,
)
from .patterns import (
    EnumPattern,
    FormatPattern,
    PatternSpec,
    RangePattern,
    RangeSpec,
    RegexPattern,
)
from .result import GenerationResult

__all__ = [
    "Archetype",
    "Cardinality",
    "DatasetSchema",
    "EntityDefinition",
    "RelationshipDefinition",
    "EnumPattern",
    "FormatPattern",
    "PatternSpec",
    "RangePattern",
    "RangeSpec",
    "RegexPattern",
    "GenerationResult",
]
