"""Validators for dataset schemas."""

from dataclasses import dataclass, field
from typing import Any, Collection, Dict, List, Mapping, Sequence, Tuple, Union
from pydantic import ValidationError
from .schema import Archetype, DatasetSchema, EntityDefinition, MIN_ENTITY_COUNT, MAX_ENTITY_COUNT
from schemasynth.generation.dependency import build_dependency_graph, find_cycles, format_cycle
from schemasynth.errors import SchemaInvalidError
from schemasynth.config.logging import get_logger

logger = get_logger(__name__)

SchemaInput = Union[DatasetSchema, Mapping[str, Any]]


@dataclass
class SchemaValidation:
    """Outcome of schema validation: every violation found."""

    errors: List[str] = field(default_factory=list)
    schema: DatasetSchema | None = None

    @property
    def valid(self) -> bool:
        return not self.errors


def format_validation_error(exc: ValidationError, prefix: Sequence[Any] = ()) -> List[str]:
    """Turn pydantic errors into 'entities.orders.count: ...' messages."""
    messages = []
    for err in exc.errors():
        location = ".".join(str(part) for part in (*prefix, *err["loc"]))
        messages.append(f"{location}: {err['msg']}" if location else err["msg"])
    return messages


def _wrap(schema: Any) -> Any:
    # A mapping without an "entities" key is the entity map itself
    if isinstance(schema, Mapping) and "entities" not in schema:
        return {"entities": schema}
    return schema


def coerce_schema(schema: Mapping[str, Any]) -> DatasetSchema:
    """Parse a raw schema. A mapping without an "entities" key is the entity map itself."""
    return DatasetSchema.model_validate(_wrap(schema))


def validate_entity_count(count: int) -> str | None:
    """Error message for a bad record count, or None."""
    if isinstance(count, bool) or not isinstance(count, int):
        return "Count must be an integer"
    if count < MIN_ENTITY_COUNT:
        return f"Count must be at least {MIN_ENTITY_COUNT}"
    if count > MAX_ENTITY_COUNT:
        return f"Count must not exceed {MAX_ENTITY_COUNT}"
    return None


def _parse_entities(
    raw_entities: Mapping[str, Any],
) -> Tuple[Dict[str, EntityDefinition], List[str]]:
    """Parse entities one by one so a malformed entity does not hide the rest."""
    entities: Dict[str, EntityDefinition] = {}
    errors: List[str] = []
    for entity_name, raw in raw_entities.items():
        try:
            entities[entity_name] = EntityDefinition.model_validate(raw)
        except ValidationError as e:
            errors.extend(format_validation_error(e, prefix=("entities", entity_name)))
    return entities, errors


def _check_entities(
    entities: Mapping[str, EntityDefinition],
    entity_names: Collection[str],
) -> List[str]:
    """
    Semantic checks over parsed entities.

    Relationship targets are resolved against ``entity_names``, which also
    holds entities that failed to parse.
    """
    errors: List[str] = []

    for entity_name, entity in entities.items():
        if not entity_name:
            errors.append("Entity names must be non-empty")

        count_error = validate_entity_count(entity.count)
        if count_error:
            errors.append(f"Entity '{entity_name}': {count_error}")

        if entity.archetype == Archetype.CUSTOM and not entity.fields:
            errors.append(f"Custom entity '{entity_name}' must have fields defined")

        for field_name, rel in entity.relationships.items():
            if rel.references not in entity_names:
                errors.append(
                    f"Entity '{entity_name}' field '{field_name}' references "
                    f"non-existent entity '{rel.references}'"
                )

    cycles = find_cycles(build_dependency_graph(DatasetSchema(entities=dict(entities))))
    if cycles:
        errors.append(
            "Circular dependencies detected: "
            + ", ".join(format_cycle(cycle) for cycle in cycles)
        )
    return errors


def validate_schema(schema: SchemaInput) -> SchemaValidation:
    """
    Validate a dataset schema, collecting all problems in one pass.

    Checks that the schema has entities, every count is within range, custom
    entities declare fields, relationships point at existing entities and
    there is no dependency cycle. An entity that fails to parse is reported
    with its parse errors while the other entities are still checked.

    Args:
        schema: DatasetSchema or a raw mapping with an ``entities`` key

    Returns:
        SchemaValidation with the parsed schema (only when it parsed) and errors
    """
    if not isinstance(schema, DatasetSchema):
        raw = _wrap(schema)
        try:
            schema = DatasetSchema.model_validate(raw)
        except ValidationError as e:
            raw_entities = raw.get("entities") if isinstance(raw, Mapping) else None
            if not isinstance(raw_entities, Mapping):
                return SchemaValidation(errors=format_validation_error(e))
            entities, errors = _parse_entities(raw_entities)
            errors.extend(_check_entities(entities, set(raw_entities)))
            logger.debug(f"Schema validation found {len(errors)} issue(s)")
            return SchemaValidation(errors=errors)

    if not schema.entities:
        return SchemaValidation(
            errors=["Schema must contain at least one entity"], schema=schema
        )

    errors = _check_entities(schema.entities, set(schema.entities))
    if errors:
        logger.debug(f"Schema validation found {len(errors)} issue(s)")
    return SchemaValidation(errors=errors, schema=schema)


def ensure_valid_schema(schema: SchemaInput) -> DatasetSchema:
    """
    Validate and return the parsed schema.

    Raises:
        SchemaInvalidError: With every violation if the schema is invalid
    """
    result = validate_schema(schema)
    if not result.valid:
        raise SchemaInvalidError(result.errors)
    return result.schema
