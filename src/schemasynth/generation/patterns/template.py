"""Template expansion sampler.

Recognized placeholders:

- ``{{year}}``: current calendar year
- ``{{random:N}}``: N alphanumeric characters
- ``{{number:N}}``: N decimal digits

Anything else between braces is copied through unchanged.
"""

import re
import string
from datetime import date
from typing import Optional
import numpy as np
from .base import PatternSampler
from schemasynth.errors import InvalidPatternError
from schemasynth.generation.constants import DEFAULT_MAX_PLACEHOLDER_LENGTH

PLACEHOLDER_RE = re.compile(r"\{\{(?:(year)|(random|number):(\d+))\}\}")

ALPHANUMERIC = string.ascii_letters + string.digits
DIGITS = string.digits


class TemplateSampler(PatternSampler):
    """Fill a template's placeholders from the seeded stream."""

    def __init__(
        self,
        template: str,
        max_length: Optional[int] = DEFAULT_MAX_PLACEHOLDER_LENGTH,
    ):
        if not isinstance(template, str) or not template:
            raise InvalidPatternError("Format pattern must be a non-empty string")
        for match in PLACEHOLDER_RE.finditer(template):
            if match.group(2):
                length = int(match.group(3))
                if length < 1:
                    raise InvalidPatternError(
                        f"Invalid placeholder length in '{match.group(0)}': "
                        "must be a positive integer"
                    )
                if max_length is not None and length > max_length:
                    raise InvalidPatternError(
                        f"Invalid placeholder length in '{match.group(0)}': "
                        f"must not exceed {max_length}"
                    )
        self.template = template

    def sample(self, rng: np.random.Generator) -> str:
        year = str(date.today().year)

        # re.sub walks matches left to right, so draws happen in template order
        def replace(match: re.Match) -> str:
            if match.group(1):
                return year
            alphabet = ALPHANUMERIC if match.group(2) == "random" else DIGITS
            length = int(match.group(3))
            indices = rng.integers(len(alphabet), size=length)
            return "".join(alphabet[i] for i in indices)

        return PLACEHOLDER_RE.sub(replace, self.template)
