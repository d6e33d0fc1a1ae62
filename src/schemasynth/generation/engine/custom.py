"""Batch generation of pattern-driven and archetype records."""

import time
from typing import Any, Dict, List, Mapping, Optional
from schemasynth.config.settings import Settings, get_settings
from schemasynth.errors import SchemaInvalidError, InvalidPatternError
from schemasynth.ir.schema import Archetype
from schemasynth.ir.validators import validate_entity_count
from schemasynth.generation.id_pool import IdPool
from schemasynth.generation.patterns import get_pattern_sampler, parse_patterns
from schemasynth.generation.providers import get_provider, resolve_locale
from schemasynth.generation.seeds import make_rng, resolve_seed
from schemasynth.config.logging import get_logger

logger = get_logger(__name__)


def _check_count(count: int) -> None:
    error = validate_entity_count(count)
    if error:
        raise SchemaInvalidError([error])


def _seed_for_call(settings: Settings, seed: Optional[int], seed_text: Optional[str]) -> int:
    if seed is None and seed_text is None:
        seed = settings.default_seed
    return resolve_seed(seed, seed_text)


def generate_custom(
    count: int,
    patterns: Mapping[str, Any],
    seed: Optional[int] = None,
    seed_text: Optional[str] = None,
    settings: Optional[Settings] = None,
) -> List[Dict[str, Any]]:
    """
    Generate records whose fields follow pattern specifications.

    Fields are filled in the order of ``patterns`` from a single seeded stream.

    Args:
        count: Number of records (1-10000)
        patterns: Field name -> pattern spec (model or ``{"type", "value"}`` mapping)
        seed: Explicit seed for reproducible output
        seed_text: Text hashed to a seed when no explicit seed is given
        settings: Settings override

    Returns:
        Records with ids ``custom_1`` .. ``custom_{count}``

    Raises:
        SchemaInvalidError: If count is out of range
        InvalidPatternError, EmptyEnumError, InvalidRangeError: For bad patterns
    """
    settings = settings or get_settings()
    start = time.time()
    _check_count(count)
    if not patterns:
        raise InvalidPatternError("At least one pattern must be defined")

    samplers = {
        field_name: get_pattern_sampler(
            spec,
            repeat_limit=settings.regex_repeat_limit,
            max_placeholder_length=settings.max_placeholder_length,
        )
        for field_name, spec in parse_patterns(patterns).items()
    }
    resolved_seed = _seed_for_call(settings, seed, seed_text)
    rng = make_rng(resolved_seed)
    pool = IdPool()

    records: List[Dict[str, Any]] = []
    for _ in range(count):
        record: Dict[str, Any] = {"id": pool.next_id("custom")}
        for field_name, sampler in samplers.items():
            record[field_name] = sampler.sample(rng)
        records.append(record)

    logger.info(
        f"Generated {len(records)} custom record(s) with {len(samplers)} pattern(s) "
        f"(seed={resolved_seed}, time: {time.time() - start:.3f}s)"
    )
    return records


def generate_archetype_records(
    archetype: Archetype,
    count: int,
    seed: Optional[int] = None,
    locale: Optional[str] = None,
    seed_text: Optional[str] = None,
    settings: Optional[Settings] = None,
    **options: Any,
) -> List[Dict[str, Any]]:
    """
    Generate standalone person or company records.

    Args:
        archetype: PERSON or COMPANY
        count: Number of records (1-10000)
        seed: Explicit seed for reproducible output
        locale: Locale hint (en, fr, de, es, ja)
        seed_text: Text hashed to a seed when no explicit seed is given
        settings: Settings override
        **options: Provider switches such as include_address

    Returns:
        Records with ids ``{archetype}_1`` .. ``{archetype}_{count}``
    """
    settings = settings or get_settings()
    archetype = Archetype(archetype)
    if archetype == Archetype.CUSTOM:
        raise ValueError("Use generate_custom for custom records")
    _check_count(count)

    resolved_seed = _seed_for_call(settings, seed, seed_text)
    provider = get_provider(
        resolved_seed,
        resolve_locale(locale or settings.default_locale),
        name=settings.provider,
    )
    pool = IdPool()

    records = [
        {"id": pool.next_id(archetype.value), **provider.generate(archetype, **options)}
        for _ in range(count)
    ]
    logger.info(
        f"Generated {len(records)} {archetype.value} record(s) "
        f"(seed={resolved_seed}, locale={provider.locale})"
    )
    return records


def generate_people(
    count: int = 1,
    seed: Optional[int] = None,
    locale: Optional[str] = None,
    **options: Any,
) -> List[Dict[str, Any]]:
    """Person records (first/last/full name, email, phone, address, date of birth)."""
    return generate_archetype_records(Archetype.PERSON, count, seed=seed, locale=locale, **options)


def generate_companies(
    count: int = 1,
    seed: Optional[int] = None,
    locale: Optional[str] = None,
    **options: Any,
) -> List[Dict[str, Any]]:
    """Company records (name, industry, email, phone, website, address, ...)."""
    return generate_archetype_records(Archetype.COMPANY, count, seed=seed, locale=locale, **options)
