"""Dataset orchestration: validate, order, generate each entity, aggregate."""

import time
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Tuple
import numpy as np
from faker import Faker
from schemasynth.config.settings import Settings, get_settings
from schemasynth.errors import SchemaSynthError
from schemasynth.ir.schema import Archetype, DatasetSchema, EntityDefinition
from schemasynth.ir.result import GenerationResult
from schemasynth.ir.validators import SchemaInput, ensure_valid_schema
from schemasynth.generation.constants import DEFAULT_PROVIDER
from schemasynth.generation.dependency import resolve_generation_order
from schemasynth.generation.error_logging import log_error
from schemasynth.generation.heuristics import heuristic_value
from schemasynth.generation.id_pool import IdPool
from schemasynth.generation.patterns import PatternSampler, get_pattern_sampler
from schemasynth.generation.providers import LeafProvider, get_provider, resolve_locale
from schemasynth.generation.seeds import derive_child_seed, make_rng, resolve_seed
from schemasynth.config.logging import get_logger

logger = get_logger(__name__)


class GenerationStage(str, Enum):
    """Lifecycle of one dataset generation call."""

    VALIDATING = "validating"
    ORDERING = "ordering"
    GENERATING = "generating"
    AGGREGATING = "aggregating"
    DONE = "done"
    FAILED = "failed"


def iter_chunks(count: int, chunk_rows: int) -> Iterator[Tuple[int, int]]:
    """Yield (start, stop) index pairs covering range(count)."""
    for start in range(0, count, chunk_rows):
        yield start, min(count, start + chunk_rows)


class EntityContext:
    """Random streams and compiled field plan for one entity."""

    def __init__(
        self,
        name: str,
        definition: EntityDefinition,
        seed: int,
        locale: str,
        samplers: Dict[str, PatternSampler],
        provider_name: str = DEFAULT_PROVIDER,
    ):
        self.name = name
        self.definition = definition
        self.seed = seed
        self.rng: np.random.Generator = make_rng(seed)
        self.provider: Optional[LeafProvider] = None
        if definition.archetype != Archetype.CUSTOM:
            self.provider = get_provider(seed, locale, name=provider_name)
        self.field_faker = Faker(locale)
        self.field_faker.seed_instance(derive_child_seed(seed, "fields"))
        self.samplers = samplers

    def field_names(self, leaf: Dict[str, Any]) -> List[str]:
        """Declared (or leaf) fields, then any relationship/pattern fields not yet listed."""
        declared = self.definition.fields
        base = list(declared) if declared else list(leaf)
        names = base + list(self.definition.patterns) + list(self.definition.relationships)
        return [name for name in dict.fromkeys(names) if name != "id"]


class DatasetOrchestrator:
    """
    Generates one dataset. Build a new instance per call; nothing is shared
    between calls.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self.stage = GenerationStage.VALIDATING
        self.id_pool = IdPool(null_probability=self.settings.null_probability)
        self.current_field: Optional[str] = None

    def _enter(self, stage: GenerationStage) -> None:
        logger.debug(f"Generation stage: {self.stage.value} -> {stage.value}")
        self.stage = stage

    def generate(
        self,
        schema: SchemaInput,
        seed: Optional[int] = None,
        locale: Optional[str] = None,
        seed_text: Optional[str] = None,
    ) -> GenerationResult:
        """
        Generate every entity of a schema.

        Args:
            schema: DatasetSchema or raw mapping
            seed: Explicit seed (falls back to settings.default_seed)
            locale: Locale hint for leaf providers
            seed_text: Text hashed to a seed when no seed is given

        Returns:
            GenerationResult with records per entity and counts

        Raises:
            SchemaInvalidError: With every schema violation, before generation
            SchemaSynthError: Any other failure; no partial dataset is returned
        """
        start = time.time()
        current_entity: Optional[str] = None
        try:
            self._enter(GenerationStage.VALIDATING)
            parsed = ensure_valid_schema(schema)
            self._check_patterns(parsed)
            if seed is None and seed_text is None:
                seed = self.settings.default_seed
            parent_seed = resolve_seed(seed, seed_text)
            faker_locale = resolve_locale(locale or self.settings.default_locale)

            self._enter(GenerationStage.ORDERING)
            order = resolve_generation_order(parsed)
            logger.info(
                f"Starting dataset generation (seed={parent_seed}, locale={faker_locale}, "
                f"entities={len(order)}, chunk_rows={self.settings.chunk_rows})"
            )

            self._enter(GenerationStage.GENERATING)
            dataset: Dict[str, List[Dict[str, Any]]] = {}
            for idx, entity_name in enumerate(order, 1):
                current_entity = entity_name
                definition = parsed.entities[entity_name]
                entity_start = time.time()
                logger.info(
                    f"[{idx}/{len(order)}] Generating entity '{entity_name}' "
                    f"({definition.archetype.value}, {definition.count} records)"
                )
                dataset[entity_name] = self._generate_entity(
                    entity_name, definition, parent_seed, faker_locale
                )
                logger.debug(
                    f"  Generated '{entity_name}' in {time.time() - entity_start:.3f}s"
                )
            current_entity = None

            self._enter(GenerationStage.AGGREGATING)
            result = self._aggregate(parsed, dataset, parent_seed)

            self._enter(GenerationStage.DONE)
            logger.info(
                f"Dataset generation completed: {result.total_records:,} records across "
                f"{len(result.dataset)} entities (total time: {time.time() - start:.3f}s)"
            )
            return result
        except Exception as e:
            failed_stage = self.stage
            self._enter(GenerationStage.FAILED)
            log_error(
                error=e,
                context={"stage": failed_stage.value},
                operation="dataset generation",
                entity_name=current_entity,
                field_name=self.current_field,
                log_level="warning" if isinstance(e, SchemaSynthError) else "error",
            )
            raise

    def _check_patterns(self, schema: DatasetSchema) -> None:
        """Surface pattern errors before any entity is generated."""
        for definition in schema.entities.values():
            for spec in definition.patterns.values():
                self._sampler(spec)

    def _sampler(self, spec) -> PatternSampler:
        return get_pattern_sampler(
            spec,
            repeat_limit=self.settings.regex_repeat_limit,
            max_placeholder_length=self.settings.max_placeholder_length,
        )

    def _generate_entity(
        self,
        entity_name: str,
        definition: EntityDefinition,
        parent_seed: int,
        locale: str,
    ) -> List[Dict[str, Any]]:
        ctx = EntityContext(
            entity_name,
            definition,
            derive_child_seed(parent_seed, entity_name),
            locale,
            {name: self._sampler(spec) for name, spec in definition.patterns.items()},
            provider_name=self.settings.provider,
        )
        self.id_pool.open(entity_name)

        records: List[Dict[str, Any]] = []
        for chunk_num, (chunk_start, chunk_stop) in enumerate(
            iter_chunks(definition.count, self.settings.chunk_rows), 1
        ):
            records.extend(
                self._generate_record(ctx, index) for index in range(chunk_start, chunk_stop)
            )
            logger.debug(
                f"  '{entity_name}' chunk {chunk_num}: records {chunk_start + 1}-{chunk_stop}"
            )
        return records

    def _generate_record(self, ctx: EntityContext, index: int) -> Dict[str, Any]:
        record: Dict[str, Any] = {"id": self.id_pool.next_id(ctx.name)}
        leaf: Dict[str, Any] = {}
        if ctx.provider is not None:
            leaf = ctx.provider.generate(ctx.definition.archetype)

        for field_name in ctx.field_names(leaf):
            self.current_field = field_name
            record[field_name] = self._field_value(ctx, field_name, leaf, index)
        self.current_field = None
        return record

    def _field_value(
        self,
        ctx: EntityContext,
        field_name: str,
        leaf: Dict[str, Any],
        index: int,
    ) -> Any:
        rel = ctx.definition.relationships.get(field_name)
        if rel is not None:
            # Self references only see records generated before this one
            limit = index if rel.references == ctx.name else None
            return self.id_pool.sample_foreign_key(
                rel.references, ctx.rng, nullable=rel.nullable, limit=limit
            )

        sampler = ctx.samplers.get(field_name)
        if sampler is not None:
            return sampler.sample(ctx.rng)

        if field_name in leaf:
            return leaf[field_name]

        return heuristic_value(field_name, ctx.field_faker)

    def _aggregate(
        self,
        schema: DatasetSchema,
        dataset: Dict[str, List[Dict[str, Any]]],
        seed: int,
    ) -> GenerationResult:
        # Report entities in schema order rather than generation order
        ordered = {name: dataset[name] for name in schema.entities}
        entity_counts = {name: len(records) for name, records in ordered.items()}
        return GenerationResult(
            dataset=ordered,
            entity_counts=entity_counts,
            total_records=sum(entity_counts.values()),
            seed=seed,
        )


def generate_dataset(
    schema: SchemaInput,
    seed: Optional[int] = None,
    locale: Optional[str] = None,
    seed_text: Optional[str] = None,
    settings: Optional[Settings] = None,
) -> GenerationResult:
    """
    Generate a multi-entity dataset with referential integrity.

    Args:
        schema: DatasetSchema or raw mapping (``{"entities": {...}}``)
        seed: Explicit seed for reproducible output
        locale: Locale hint for person/company values (en, fr, de, es, ja)
        seed_text: Text hashed to a seed when no explicit seed is given
        settings: Settings override (defaults to the global settings)

    Returns:
        GenerationResult
    """
    return DatasetOrchestrator(settings).generate(
        schema, seed=seed, locale=locale, seed_text=seed_text
    )
