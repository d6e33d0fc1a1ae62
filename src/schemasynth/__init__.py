"""SchemaSynth: deterministic multi-entity test data from a declarative schema."""

from schemasynth.errors import (
    SchemaSynthError,
    SchemaInvalidError,
    InvalidSeedError,
    EmptyReferencePoolError,
    EmptyEnumError,
    InvalidPatternError,
    InvalidRangeError,
    UnsupportedLocaleError,
    InternalOrderingError,
)
from schemasynth.ir.schema import DatasetSchema, EntityDefinition, RelationshipDefinition
from schemasynth.ir.result import GenerationResult
from schemasynth.ir.validators import validate_schema
from schemasynth.generation.engine import (
    generate_dataset,
    generate_custom,
    generate_people,
    generate_companies,
)

__version__ = "0.1.0"

__all__ = [
    "SchemaSynthError",
    "SchemaInvalidError",
    "InvalidSeedError",
    "EmptyReferencePoolError",
    "EmptyEnumError",
    "InvalidPatternError",
    "InvalidRangeError",
    "UnsupportedLocaleError",
    "InternalOrderingError",
    "DatasetSchema",
    "EntityDefinition",
    "RelationshipDefinition",
    "GenerationResult",
    "validate_schema",
    "generate_dataset",
    "generate_custom",
    "generate_people",
    "generate_companies",
]
