"""Fallback values for custom fields, picked from the field name.

Best effort only: the first matching rule wins, checked in this order
(case-insensitive substring match unless noted):

- ``id`` or ending in ``id``: UUID string
- ``name``, ``title``: a few capitalised words
- ``email``: email address
- ``phone``, ``tel``: phone number
- ``price``, ``amount``, ``cost``: float with two decimals
- ``date``, ``time``: ISO datetime within the last 30 days
- ``status``: one of active / inactive / pending / completed
- ``description``, ``notes``: a sentence
- starting with ``is`` or ``has``, or containing ``active``: bool
- ``quantity``, ``count``: int from 1 to 100
- ``url``, ``website``: URL
- anything else: one word
"""

from datetime import datetime, time, timedelta, date
from typing import Any
from faker import Faker
from schemasynth.generation.constants import (
    PRICE_RANGE,
    QUANTITY_RANGE,
    RECENT_DAYS,
    STATUS_VALUES,
)


def _recent_datetime(fk: Faker) -> str:
    # Window is anchored to midnight so values are stable within a day
    end = datetime.combine(date.today(), time.min)
    start = end - timedelta(days=RECENT_DAYS)
    return fk.date_time_between_dates(start, end).isoformat()


def heuristic_value(field_name: str, fk: Faker) -> Any:
    """
    Generate a plausible value for a field from its name.

    Args:
        field_name: Field name
        fk: Seeded Faker instance of the entity being generated

    Returns:
        Generated value
    """
    name = field_name.lower()

    if name == "id" or name.endswith("id"):
        return fk.uuid4()

    if "name" in name or "title" in name:
        return " ".join(word.capitalize() for word in fk.words(nb=3))

    if "email" in name:
        return fk.email().lower()

    if "phone" in name or "tel" in name:
        return fk.phone_number()

    if "price" in name or "amount" in name or "cost" in name:
        low, high = PRICE_RANGE
        return round(fk.pyfloat(min_value=low, max_value=high, right_digits=2), 2)

    if "date" in name or "time" in name:
        return _recent_datetime(fk)

    if "status" in name:
        return fk.random_element(STATUS_VALUES)

    if "description" in name or "notes" in name:
        return fk.sentence()

    if name.startswith("is") or name.startswith("has") or "active" in name:
        return fk.pybool()

    if "quantity" in name or "count" in name:
        return fk.random_int(*QUANTITY_RANGE)

    if "url" in name or "website" in name:
        return fk.url()

    return fk.word()
