"""Regex-bounded string sampler.

Strings are built by walking the parsed expression and drawing every choice
(class member, repetition count, alternation branch) from the seeded stream,
so a seed always produces the same string and no candidate is ever rejected.
"""

import re
import string
from typing import Dict, List
import exrex
import numpy as np
from .base import PatternSampler, pick
from schemasynth.errors import InvalidPatternError
from schemasynth.generation.constants import DEFAULT_REGEX_REPEAT_LIMIT
from schemasynth.config.logging import get_logger

logger = get_logger(__name__)

PRINTABLE = [chr(c) for c in range(32, 127)]
WORD_CHARS = list(string.ascii_letters + string.digits + "_")
SPACE_CHARS = [" ", "\t", "\n"]

CATEGORIES: Dict[str, List[str]] = {
    "CATEGORY_DIGIT": list(string.digits),
    "CATEGORY_NOT_DIGIT": [c for c in PRINTABLE if not c.isdigit()],
    "CATEGORY_SPACE": SPACE_CHARS,
    "CATEGORY_NOT_SPACE": [c for c in PRINTABLE if c != " "],
    "CATEGORY_WORD": WORD_CHARS,
    "CATEGORY_NOT_WORD": [c for c in PRINTABLE if c not in WORD_CHARS],
    "CATEGORY_LINEBREAK": ["\n"],
    "CATEGORY_NOT_LINEBREAK": PRINTABLE,
}


def _opname(op) -> str:
    return getattr(op, "name", str(op))


class RegexSampler(PatternSampler):
    """Generate strings that fully match a regular expression."""

    def __init__(self, pattern: str, repeat_limit: int = DEFAULT_REGEX_REPEAT_LIMIT):
        if not isinstance(pattern, str) or not pattern:
            raise InvalidPatternError("Regex pattern must be a non-empty string")
        try:
            re.compile(pattern)
            self.tree = exrex.parse(pattern)
        except re.error as e:
            raise InvalidPatternError(f"Invalid regex pattern: {pattern}. Error: {e}") from e
        self.pattern = pattern
        self.repeat_limit = repeat_limit

    def sample(self, rng: np.random.Generator) -> str:
        groups: Dict[int, str] = {}
        return self._expand(self.tree, rng, groups)

    def _expand(self, tokens, rng: np.random.Generator, groups: Dict[int, str]) -> str:
        return "".join(self._expand_token(op, value, rng, groups) for op, value in tokens)

    def _expand_token(self, op, value, rng: np.random.Generator, groups: Dict[int, str]) -> str:
        name = _opname(op)

        if name == "LITERAL":
            return chr(value)

        if name == "NOT_LITERAL":
            return pick(rng, [c for c in PRINTABLE if c != chr(value)])

        if name == "ANY":
            return pick(rng, PRINTABLE)

        if name == "IN":
            return pick(rng, self._class_members(value))

        if name == "CATEGORY":
            return pick(rng, CATEGORIES.get(_opname(value), PRINTABLE))

        if name == "BRANCH":
            _, alternatives = value
            return self._expand(pick(rng, alternatives), rng, groups)

        if name == "SUBPATTERN":
            group, sub = value[0], value[-1]
            text = self._expand(sub, rng, groups)
            if group is not None:
                groups[group] = text
            return text

        if name == "ATOMIC_GROUP":
            return self._expand(value, rng, groups)

        if name in ("MAX_REPEAT", "MIN_REPEAT", "POSSESSIVE_REPEAT"):
            low, high, sub = value
            # Wide or unbounded repeats are capped; fewer repetitions still match
            high = min(high, low + self.repeat_limit)
            times = int(rng.integers(low, high + 1))
            return "".join(self._expand(sub, rng, groups) for _ in range(times))

        if name == "GROUPREF":
            return groups.get(value, "")

        if name == "GROUPREF_EXISTS":
            group, yes, no = value
            if group in groups:
                return self._expand(yes, rng, groups)
            return self._expand(no, rng, groups) if no else ""

        if name in ("AT", "ASSERT", "ASSERT_NOT"):
            # Anchors and lookarounds consume no characters
            return ""

        raise InvalidPatternError(
            f"Unsupported regex construct '{name}' in pattern: {self.pattern}"
        )

    def _class_members(self, items) -> List[str]:
        members: List[str] = []
        negate = False
        for op, value in items:
            name = _opname(op)
            if name == "NEGATE":
                negate = True
            elif name == "LITERAL":
                members.append(chr(value))
            elif name in ("RANGE", "RANGE_UNI_IGNORE"):
                low, high = value
                members.extend(chr(c) for c in range(low, high + 1))
            elif name == "CATEGORY":
                members.extend(CATEGORIES.get(_opname(value), []))

        if negate:
            excluded = set(members)
            members = [c for c in PRINTABLE if c not in excluded]
        else:
            # Keep first occurrence order so draws are stable
            members = list(dict.fromkeys(members))

        if not members:
            raise InvalidPatternError(
                f"Character class in pattern '{self.pattern}' has no printable members"
            )
        return members
