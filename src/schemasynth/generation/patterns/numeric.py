"""Numeric range sampler."""

import math
from typing import Optional, Union
import numpy as np
from .base import PatternSampler
from schemasynth.errors import InvalidRangeError

# rng.integers works on int64 bounds
INT64_MAX = np.iinfo(np.int64).max
WORD_BITS = 32


def draw_below(rng: np.random.Generator, span: int) -> int:
    """
    Uniform integer in ``[0, span]`` from the seeded stream.

    Spans beyond int64 are drawn as 32-bit words with rejection, so any
    Python int bound works.
    """
    if span < INT64_MAX:
        return int(rng.integers(0, span + 1))

    bits = span.bit_length()
    words = -(-bits // WORD_BITS)
    excess = words * WORD_BITS - bits
    while True:
        value = 0
        for word in rng.integers(0, 2**WORD_BITS, size=words, dtype=np.uint64):
            value = (value << WORD_BITS) | int(word)
        value >>= excess
        if value <= span:
            return value


class RangeSampler(PatternSampler):
    """
    Uniform value in ``[min, max]``.

    Without a precision (or precision 0) the value is an integer. With a
    precision ``p`` it is a uniformly chosen multiple of ``10**-p`` rounded to
    ``p`` decimal places.
    """

    def __init__(self, low: float, high: float, precision: Optional[int] = None):
        if low > high:
            raise InvalidRangeError(
                f"Invalid range: min ({low}) must be less than or equal to max ({high})"
            )
        if precision is not None and precision < 0:
            raise InvalidRangeError(f"Precision must be non-negative, got {precision}")

        self.low = low
        self.high = high
        self.precision = precision or 0
        scale = 10 ** self.precision
        # Work on an integer grid of 10**-precision steps
        try:
            self.grid_low = math.ceil(round(low * scale, 9))
            self.grid_high = math.floor(round(high * scale, 9))
        except (OverflowError, ValueError) as e:
            raise InvalidRangeError(
                f"Invalid range: [{low}, {high}] cannot be sampled with precision "
                f"{self.precision}"
            ) from e
        if self.grid_low > self.grid_high:
            raise InvalidRangeError(
                f"Invalid range: no value with precision {self.precision} "
                f"lies between {low} and {high}"
            )

    def sample(self, rng: np.random.Generator) -> Union[int, float]:
        step = self.grid_low + draw_below(rng, self.grid_high - self.grid_low)
        if self.precision == 0:
            return step
        return round(step / 10 ** self.precision, self.precision)
