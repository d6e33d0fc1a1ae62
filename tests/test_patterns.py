"""Tests for the pattern engine."""

import re
from datetime import date
import numpy as np
import pytest
from schemasynth.errors import EmptyEnumError, InvalidPatternError, InvalidRangeError
from schemasynth.ir.patterns import EnumPattern, RangePattern, RangeSpec
from schemasynth.generation.patterns import (
    EnumSampler,
    RangeSampler,
    RegexSampler,
    TemplateSampler,
    generate_pattern_value,
    get_pattern_sampler,
    parse_pattern,
    parse_patterns,
    validate_pattern,
)


@pytest.fixture
def rng():
    return np.random.default_rng(42)


def test_single_value_enum(rng):
    """A one-value enum always yields that value."""
    sampler = EnumSampler(["x"])
    assert [sampler.sample(rng) for _ in range(5)] == ["x"] * 5


def test_enum_values_become_strings(rng):
    """Non-string enum values are stored as strings."""
    spec = EnumPattern(value=[1, True, 2.5])
    assert spec.value == ["1", "True", "2.5"]
    assert get_pattern_sampler(spec).sample(rng) in {"1", "True", "2.5"}


def test_empty_enum():
    with pytest.raises(EmptyEnumError):
        get_pattern_sampler({"type": "enum", "value": []})


def test_enum_covers_values(rng):
    sampler = EnumSampler(["a", "b", "c"])
    assert {sampler.sample(rng) for _ in range(200)} == {"a", "b", "c"}


def test_degenerate_range(rng):
    """min == max always yields min."""
    sampler = RangeSampler(5, 5)
    assert [sampler.sample(rng) for _ in range(10)] == [5] * 10


def test_inverted_range():
    with pytest.raises(InvalidRangeError):
        get_pattern_sampler(RangePattern(value=RangeSpec(min=10, max=1)))


def test_integer_range(rng):
    """Without precision values are integers within bounds."""
    sampler = RangeSampler(1, 6)
    values = [sampler.sample(rng) for _ in range(300)]
    assert all(isinstance(v, int) and 1 <= v <= 6 for v in values)
    assert set(values) == {1, 2, 3, 4, 5, 6}


def test_precision_range(rng):
    """With a precision values are rounded to that many decimals."""
    sampler = RangeSampler(0.5, 2.5, precision=2)
    for _ in range(200):
        value = sampler.sample(rng)
        assert 0.5 <= value <= 2.5
        assert round(value, 2) == value


def test_negative_precision():
    with pytest.raises(InvalidRangeError):
        RangeSampler(1, 2, precision=-1)


def test_regex_matches(rng):
    """Every generated string fully matches its expression."""
    sampler = RegexSampler(r"[A-Z]{3}-[0-9]{2}")
    for _ in range(100):
        assert re.fullmatch(r"[A-Z]{3}-[0-9]{2}", sampler.sample(rng))


@pytest.mark.parametrize(
    "pattern",
    [
        r"^ORD-\d{4,6}$",
        r"(foo|bar)_[a-z]+",
        r"\w{2}\s?\W",
        r"[^a-z]{3}",
        r"(ab)\1",
        r"colou?r\.",
        r"[A-F0-9]{8}(-[A-F0-9]{4}){3}",
        r"x*y+z?",
    ],
)
def test_regex_constructs(pattern, rng):
    sampler = RegexSampler(pattern)
    for _ in range(30):
        assert re.fullmatch(pattern, sampler.sample(rng)), pattern


def test_regex_repeat_cap(rng):
    """Open-ended repeats draw at most low + repeat_limit copies."""
    sampler = RegexSampler(r"a+", repeat_limit=3)
    assert all(1 <= len(sampler.sample(rng)) <= 4 for _ in range(50))


def test_regex_is_deterministic():
    sampler = RegexSampler(r"[a-z0-9]{12}")
    a = [sampler.sample(np.random.default_rng(7)) for _ in range(3)]
    b = [sampler.sample(np.random.default_rng(7)) for _ in range(3)]
    assert a == b


def test_malformed_regex():
    with pytest.raises(InvalidPatternError):
        get_pattern_sampler({"type": "regex", "value": "[A-Z"})


def test_template_placeholders(rng):
    """year, random and number placeholders are filled; others stay verbatim."""
    sampler = TemplateSampler("INV-{{year}}-{{number:4}}-{{random:3}}-{{unknown}}")
    value = sampler.sample(rng)
    year = date.today().year
    assert re.fullmatch(rf"INV-{year}-\d{{4}}-[A-Za-z0-9]{{3}}-\{{\{{unknown\}}\}}", value)


def test_template_draws_independently():
    """Two placeholders in one template get separate draws."""
    sampler = TemplateSampler("{{number:20}}/{{number:20}}")
    first, second = sampler.sample(np.random.default_rng(1)).split("/")
    assert first != second


def test_template_without_placeholders(rng):
    assert TemplateSampler("plain").sample(rng) == "plain"


@pytest.mark.parametrize("template", ["{{random:0}}", "X-{{number:0}}"])
def test_template_length_must_be_positive(template):
    with pytest.raises(InvalidPatternError):
        TemplateSampler(template)


def test_template_long_placeholders(rng):
    """Any positive N is accepted by default."""
    value = get_pattern_sampler({"type": "format", "value": "X-{{number:150}}"}).sample(rng)
    assert re.fullmatch(r"X-\d{150}", value)
    assert len(TemplateSampler("{{random:500}}").sample(rng)) == 500


def test_template_optional_length_cap():
    TemplateSampler("{{number:10}}", max_length=10)
    with pytest.raises(InvalidPatternError):
        TemplateSampler("{{number:11}}", max_length=10)
    with pytest.raises(InvalidPatternError):
        get_pattern_sampler({"type": "format", "value": "{{random:11}}"}, max_placeholder_length=10)


def test_range_beyond_int64():
    """Grids wider than int64 are still sampled from the seeded stream."""
    spec = {"type": "range", "value": {"min": 0, "max": 1e9, "precision": 10}}
    sampler = get_pattern_sampler(spec)
    values = [sampler.sample(np.random.default_rng(4)) for _ in range(3)]
    assert values[0] == values[1] == values[2]

    rng = np.random.default_rng(4)
    for _ in range(100):
        value = sampler.sample(rng)
        assert 0 <= value <= 1e9
        assert round(value, 10) == value


def test_range_huge_integer_grid(rng):
    sampler = RangeSampler(-1e30, 1e30)
    values = [sampler.sample(rng) for _ in range(50)]
    assert all(isinstance(v, int) and int(-1e30) <= v <= int(1e30) for v in values)
    assert len(set(values)) > 1


def test_range_precision_overflow():
    with pytest.raises(InvalidRangeError):
        RangeSampler(0.0, 1.0, precision=400)


def test_unknown_pattern_type():
    with pytest.raises(InvalidPatternError):
        parse_pattern({"type": "markov", "value": "abc"})


def test_parse_patterns_names_field():
    with pytest.raises(InvalidPatternError, match="sku"):
        parse_patterns({"sku": {"type": "range", "value": "oops"}})


def test_validate_and_generate_pattern(rng):
    validate_pattern({"type": "format", "value": "{{year}}"})
    value = generate_pattern_value({"type": "range", "value": {"min": 1, "max": 3}}, rng)
    assert value in {1, 2, 3}
