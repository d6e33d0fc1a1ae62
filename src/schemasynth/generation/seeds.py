"""Seed resolution and per-entity seed derivation."""

import hashlib
import time
from typing import Optional
import numpy as np
from schemasynth.errors import InvalidSeedError
from schemasynth.config.logging import get_logger

logger = get_logger(__name__)

# Largest integer a double represents exactly (2**53 - 1)
MAX_SAFE_SEED = 9_007_199_254_740_991
MAX_SEED_TEXT_LENGTH = 100


def hash_text_to_seed(text: str) -> int:
    """Hash a string to a seed using the first 32 bits of its SHA-256 digest."""
    digest = hashlib.sha256(text.encode("utf-8")).hexdigest()
    return int(digest[:8], 16) % MAX_SAFE_SEED


def validate_seed(seed) -> bool:
    """True for non-negative integers within the safe-integer range."""
    if isinstance(seed, bool) or not isinstance(seed, (int, np.integer)):
        return False
    return 0 <= int(seed) <= MAX_SAFE_SEED


def timestamp_seed() -> int:
    """Seed from wall-clock milliseconds. Not reproducible."""
    return int(time.time() * 1000) % MAX_SAFE_SEED


def resolve_seed(explicit_seed: Optional[int] = None, seed_text: Optional[str] = None) -> int:
    """
    Resolve the seed for one generation call.

    Args:
        explicit_seed: Seed supplied by the caller; wins when present
        seed_text: Text hashed to a seed when no explicit seed is given

    Returns:
        Non-negative integer seed

    Raises:
        InvalidSeedError: If the explicit seed or the seed text is unusable
    """
    if explicit_seed is not None:
        if not validate_seed(explicit_seed):
            raise InvalidSeedError(
                f"Invalid seed: {explicit_seed!r}. Seed must be a non-negative safe integer."
            )
        return int(explicit_seed)

    if seed_text is not None:
        if not isinstance(seed_text, str) or len(seed_text) == 0:
            raise InvalidSeedError("Seed text must be a non-empty string")
        if len(seed_text) > MAX_SEED_TEXT_LENGTH:
            raise InvalidSeedError(
                f"Seed text must be {MAX_SEED_TEXT_LENGTH} characters or less"
            )
        seed = hash_text_to_seed(seed_text)
        logger.debug(f"Derived seed {seed} from seed text")
        return seed

    seed = timestamp_seed()
    logger.info(f"No seed given, using time-based seed {seed}")
    return seed


def derive_child_seed(parent_seed: int, label: str) -> int:
    """Stable seed for one entity (or other label) under a parent seed."""
    return hash_text_to_seed(f"{parent_seed}_{label}")


def make_rng(seed: int) -> np.random.Generator:
    """Random stream for a seed."""
    return np.random.default_rng(seed)
