"""Base pattern sampler interface."""

from abc import ABC, abstractmethod
from typing import Any, Sequence
import numpy as np


class PatternSampler(ABC):
    """Base class for all pattern samplers."""

    @abstractmethod
    def sample(self, rng: np.random.Generator) -> Any:
        """
        Generate one value satisfying the pattern.

        Args:
            rng: Seeded random stream; every choice is drawn from it

        Returns:
            Generated value
        """
        pass


def pick(rng: np.random.Generator, options: Sequence[Any]) -> Any:
    """Uniformly pick one element of a non-empty sequence."""
    return options[int(rng.integers(len(options)))]
