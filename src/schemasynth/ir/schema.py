"""Dataset schema models: entities, archetypes and relationships."""

from enum import Enum
from typing import Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field
from .patterns import PatternSpec

MIN_ENTITY_COUNT = 1
MAX_ENTITY_COUNT = 10_000


def _lookup_normalized(enum_cls, value):
    """Accept "PERSON" or "ONE_TO_MANY" spellings of enum values."""
    if isinstance(value, str):
        key = value.strip().lower().replace("_", "-")
        for member in enum_cls:
            if member.value == key:
                return member
    return None


class Archetype(str, Enum):
    """Built-in entity category that picks the default field strategy."""

    PERSON = "person"
    COMPANY = "company"
    CUSTOM = "custom"

    @classmethod
    def _missing_(cls, value):
        return _lookup_normalized(cls, value)


class Cardinality(str, Enum):
    """Relationship kind. Both are stored as one sampled id per field."""

    ONE_TO_MANY = "one-to-many"
    MANY_TO_MANY = "many-to-many"

    @classmethod
    def _missing_(cls, value):
        return _lookup_normalized(cls, value)


class RelationshipDefinition(BaseModel):
    """Foreign key field pointing at another entity."""

    model_config = ConfigDict(populate_by_name=True)

    references: str = Field(min_length=1)
    cardinality: Cardinality = Field(default=Cardinality.ONE_TO_MANY, alias="type")
    nullable: bool = False


class EntityDefinition(BaseModel):
    """Definition of one entity in a dataset schema."""

    model_config = ConfigDict(populate_by_name=True)

    count: int  # Range is checked by the validator so every violation is reported
    archetype: Archetype = Field(alias="type")
    fields: Optional[List[str]] = None
    relationships: Dict[str, RelationshipDefinition] = Field(default_factory=dict)
    patterns: Dict[str, PatternSpec] = Field(default_factory=dict)

    def is_self_reference_exempt(self, entity_name: str, rel: RelationshipDefinition) -> bool:
        """Nullable self references impose no ordering constraint."""
        return rel.references == entity_name and rel.nullable


class DatasetSchema(BaseModel):
    """Complete schema: entity name -> definition, in declaration order."""

    entities: Dict[str, EntityDefinition]
