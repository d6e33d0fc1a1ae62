"""Pattern specifications for constrained field values."""

from __future__ import annotations

from typing import List, Optional, Literal, Union, Any, Annotated
from pydantic import BaseModel, Field, Discriminator, field_validator


class RangeSpec(BaseModel):
    """Numeric range bounds with optional decimal precision."""

    min: float
    max: float
    precision: Optional[int] = None  # None or 0 means integers


class EnumPattern(BaseModel):
    """Uniform pick from a list of strings."""

    type: Literal["enum"] = "enum"
    value: List[str] = Field(default_factory=list)

    @field_validator("value", mode="before")
    @classmethod
    def convert_values_to_strings(cls, v: Any) -> List[str]:
        """Convert all values to strings (handles bool, int, float, etc.)."""
        if isinstance(v, (list, tuple)):
            return [str(val) for val in v]
        return v


class RegexPattern(BaseModel):
    """String built to match a regular expression."""

    type: Literal["regex"] = "regex"
    value: str


class FormatPattern(BaseModel):
    """Template with {{year}}, {{random:N}} and {{number:N}} placeholders."""

    type: Literal["format"] = "format"
    value: str


class RangePattern(BaseModel):
    """Number drawn uniformly from a range."""

    type: Literal["range"] = "range"
    value: RangeSpec


PatternSpec = Annotated[
    Union[
        EnumPattern,
        RegexPattern,
        FormatPattern,
        RangePattern,
    ],
    Discriminator("type"),
]
