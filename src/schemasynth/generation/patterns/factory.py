"""Factory for creating pattern samplers."""

from typing import Any, Dict, Mapping, Optional
import numpy as np
from pydantic import TypeAdapter, ValidationError
from schemasynth.ir.patterns import (
    PatternSpec,
    EnumPattern,
    RegexPattern,
    FormatPattern,
    RangePattern,
)
from schemasynth.errors import InvalidPatternError
from schemasynth.generation.constants import (
    DEFAULT_REGEX_REPEAT_LIMIT,
    DEFAULT_MAX_PLACEHOLDER_LENGTH,
)
from .base import PatternSampler
from .categorical import EnumSampler
from .regex import RegexSampler
from .template import TemplateSampler
from .numeric import RangeSampler

_PATTERN_ADAPTER = TypeAdapter(PatternSpec)


def parse_pattern(spec: Any) -> PatternSpec:
    """
    Parse a raw ``{"type": ..., "value": ...}`` mapping into a pattern spec.

    Raises:
        InvalidPatternError: If the mapping is not a known pattern shape
    """
    if isinstance(spec, (EnumPattern, RegexPattern, FormatPattern, RangePattern)):
        return spec
    try:
        return _PATTERN_ADAPTER.validate_python(spec)
    except ValidationError as e:
        raise InvalidPatternError(f"Invalid pattern definition: {e}") from e


def parse_patterns(patterns: Mapping[str, Any]) -> Dict[str, PatternSpec]:
    """Parse a field -> pattern mapping, naming the field on failure."""
    parsed: Dict[str, PatternSpec] = {}
    for field_name, spec in patterns.items():
        try:
            parsed[field_name] = parse_pattern(spec)
        except InvalidPatternError as e:
            raise InvalidPatternError(
                f"Invalid pattern for field '{field_name}': {e}"
            ) from e
    return parsed


def get_pattern_sampler(
    spec: PatternSpec,
    repeat_limit: int = DEFAULT_REGEX_REPEAT_LIMIT,
    max_placeholder_length: Optional[int] = DEFAULT_MAX_PLACEHOLDER_LENGTH,
) -> PatternSampler:
    """
    Create a sampler for a pattern specification.

    Args:
        spec: Pattern specification
        repeat_limit: Cap on extra repetitions for open-ended regex repeats
        max_placeholder_length: Largest N accepted in template placeholders (None: no cap)

    Returns:
        Sampler instance

    Raises:
        EmptyEnumError, InvalidPatternError, InvalidRangeError: For unusable specs
    """
    spec = parse_pattern(spec)

    if isinstance(spec, EnumPattern):
        return EnumSampler(spec.value)

    if isinstance(spec, RegexPattern):
        return RegexSampler(spec.value, repeat_limit=repeat_limit)

    if isinstance(spec, FormatPattern):
        return TemplateSampler(spec.value, max_length=max_placeholder_length)

    if isinstance(spec, RangePattern):
        return RangeSampler(spec.value.min, spec.value.max, spec.value.precision)

    raise NotImplementedError(f"Pattern type {type(spec)} not supported")


def validate_pattern(spec: Any) -> None:
    """Raise the pattern's error now instead of at generation time."""
    get_pattern_sampler(spec)


def generate_pattern_value(spec: Any, rng: np.random.Generator) -> Any:
    """Produce one value for a pattern specification."""
    return get_pattern_sampler(spec).sample(rng)
