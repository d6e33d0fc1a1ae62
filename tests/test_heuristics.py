"""Tests for name-driven fallback values. Only value types are checked."""

from datetime import datetime
import pytest
from faker import Faker
from schemasynth.generation.heuristics import heuristic_value


@pytest.fixture
def fk():
    faker = Faker("en_US")
    faker.seed_instance(1)
    return faker


@pytest.mark.parametrize(
    "field_name,expected_type",
    [
        ("externalId", str),
        ("productName", str),
        ("contactEmail", str),
        ("phoneNumber", str),
        ("unitPrice", float),
        ("status", str),
        ("description", str),
        ("isVerified", bool),
        ("quantity", int),
        ("website", str),
        ("colour", str),
    ],
)
def test_value_types(fk, field_name, expected_type):
    assert isinstance(heuristic_value(field_name, fk), expected_type)


def test_dates_are_iso(fk):
    value = heuristic_value("createdDate", fk)
    assert datetime.fromisoformat(value) <= datetime.now()


def test_email_shape(fk):
    assert "@" in heuristic_value("email", fk)
