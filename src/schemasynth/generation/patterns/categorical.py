"""Enumeration pattern sampler."""

import numpy as np
from typing import List
from .base import PatternSampler, pick
from schemasynth.errors import EmptyEnumError


class EnumSampler(PatternSampler):
    """Uniform choice from a fixed list of strings."""

    def __init__(self, values: List[str]):
        if not values:
            raise EmptyEnumError("Enum pattern must have at least one value")
        self.values = list(values)

    def sample(self, rng: np.random.Generator) -> str:
        return pick(rng, self.values)
