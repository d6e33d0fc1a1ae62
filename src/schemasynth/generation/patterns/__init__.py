"""Pattern engine: enum, regex, template and range samplers."""

from .base import PatternSampler
from .categorical import EnumSampler
from .regex import RegexSampler
from .template import TemplateSampler
from .numeric import RangeSampler
from .factory import (
    get_pattern_sampler,
    generate_pattern_value,
    parse_pattern,
    parse_patterns,
    validate_pattern,
)

__all__ = [
    "PatternSampler",
    "EnumSampler",
    "RegexSampler",
    "TemplateSampler",
    "RangeSampler",
    "get_pattern_sampler",
    "generate_pattern_value",
    "parse_pattern",
    "parse_patterns",
    "validate_pattern",
]
