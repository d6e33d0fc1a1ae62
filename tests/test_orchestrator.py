"""Tests for dataset generation."""

import pytest
from schemasynth.config.settings import Settings
from schemasynth.errors import (
    InvalidPatternError,
    InvalidSeedError,
    SchemaInvalidError,
    UnsupportedLocaleError,
)
from schemasynth.generation.engine import (
    DatasetOrchestrator,
    GenerationStage,
    generate_dataset,
    generate_people,
)
from schemasynth.generation.engine import orchestrator as orchestrator_module
from schemasynth.generation.engine.orchestrator import iter_chunks
from schemasynth.generation.providers.registry import PROVIDERS
from schemasynth.ir.result import GenerationResult


@pytest.fixture
def shop_schema():
    return {
        "entities": {
            "orders": {
                "count": 40,
                "type": "custom",
                "fields": ["orderNumber", "status", "totalAmount", "createdDate"],
                "relationships": {
                    "userId": {"references": "users"},
                    "companyId": {"references": "companies", "nullable": True},
                },
                "patterns": {
                    "orderNumber": {"type": "format", "value": "ORD-{{number:6}}"},
                    "status": {"type": "enum", "value": ["new", "paid", "shipped"]},
                },
            },
            "users": {"count": 10, "type": "person"},
            "companies": {"count": 5, "type": "company"},
        }
    }


def test_determinism(shop_schema):
    """Same schema and seed give identical datasets."""
    first = generate_dataset(shop_schema, seed=42)
    second = generate_dataset(shop_schema, seed=42)
    assert first.dataset == second.dataset
    assert first.seed == second.seed == 42


def test_seed_sensitivity(shop_schema):
    first = generate_dataset(shop_schema, seed=1)
    second = generate_dataset(shop_schema, seed=2)
    assert first.dataset != second.dataset


def test_seed_text(shop_schema):
    first = generate_dataset(shop_schema, seed_text="demo")
    second = generate_dataset(shop_schema, seed_text="demo")
    assert first.dataset == second.dataset


def test_counts_and_metadata(shop_schema):
    """Record counts match the schema and the metadata agrees."""
    result = generate_dataset(shop_schema, seed=7)
    assert isinstance(result, GenerationResult)
    assert result.entity_counts == {"orders": 40, "users": 10, "companies": 5}
    assert result.total_records == 55
    # Schema order, not generation order
    assert list(result.dataset) == ["orders", "users", "companies"]

    payload = result.to_payload()
    assert payload["metadata"] == {
        "entityCounts": {"orders": 40, "users": 10, "companies": 5},
        "totalRecords": 55,
        "seed": 7,
    }


def test_ids_are_sequential(shop_schema):
    result = generate_dataset(shop_schema, seed=7)
    assert [r["id"] for r in result.dataset["users"]] == [f"users_{n}" for n in range(1, 11)]
    assert len({r["id"] for r in result.dataset["orders"]}) == 40


def test_referential_integrity(shop_schema):
    """Every foreign key points at an existing record."""
    result = generate_dataset(shop_schema, seed=11)
    user_ids = {r["id"] for r in result.dataset["users"]}
    company_ids = {r["id"] for r in result.dataset["companies"]}
    for order in result.dataset["orders"]:
        assert order["userId"] in user_ids
        assert order["companyId"] is None or order["companyId"] in company_ids


def test_nullable_foreign_keys_are_sometimes_null():
    schema = {
        "users": {"count": 5, "type": "person"},
        "posts": {
            "count": 300,
            "type": "custom",
            "fields": ["title"],
            "relationships": {"authorId": {"references": "users", "nullable": True}},
        },
    }
    values = [r["authorId"] for r in generate_dataset(schema, seed=3).dataset["posts"]]
    assert None in values
    assert any(v is not None for v in values)


def test_null_probability_setting():
    schema = {
        "users": {"count": 5, "type": "person"},
        "posts": {
            "count": 50,
            "type": "custom",
            "fields": ["title"],
            "relationships": {"authorId": {"references": "users", "nullable": True}},
        },
    }
    result = generate_dataset(schema, seed=3, settings=Settings(null_probability=0.0))
    assert all(r["authorId"] is not None for r in result.dataset["posts"])


def test_field_values(shop_schema):
    """Patterns, leaf fields and heuristics fill the declared fields in order."""
    result = generate_dataset(shop_schema, seed=5)
    order = result.dataset["orders"][0]
    assert list(order) == [
        "id", "orderNumber", "status", "totalAmount", "createdDate", "userId", "companyId",
    ]
    assert order["orderNumber"].startswith("ORD-") and len(order["orderNumber"]) == 10
    assert order["status"] in {"new", "paid", "shipped"}
    assert isinstance(order["totalAmount"], float)
    assert isinstance(order["createdDate"], str)

    user = result.dataset["users"][0]
    for key in ("firstName", "lastName", "fullName", "email", "phone", "address"):
        assert key in user
    assert "name" in result.dataset["companies"][0]


def test_declared_fields_on_person():
    """A person entity with fields only emits those fields."""
    schema = {"users": {"count": 3, "type": "person", "fields": ["fullName", "email", "nickname"]}}
    user = generate_dataset(schema, seed=1).dataset["users"][0]
    assert list(user) == ["id", "fullName", "email", "nickname"]
    assert isinstance(user["nickname"], str)


def test_chunk_size_does_not_change_output(shop_schema):
    small = generate_dataset(shop_schema, seed=9, settings=Settings(chunk_rows=3))
    large = generate_dataset(shop_schema, seed=9, settings=Settings(chunk_rows=1000))
    assert small.dataset == large.dataset


def test_self_reference():
    """Nullable self references only point at earlier records."""
    schema = {
        "employees": {
            "count": 30,
            "type": "person",
            "fields": ["fullName"],
            "relationships": {"managerId": {"references": "employees", "nullable": True}},
        }
    }
    records = generate_dataset(schema, seed=4).dataset["employees"]
    assert records[0]["managerId"] is None
    for index, record in enumerate(records):
        if record["managerId"] is not None:
            manager_number = int(record["managerId"].split("_")[1])
            assert manager_number <= index


def test_long_dependency_chain():
    schema = {
        "d": {"count": 2, "type": "custom", "fields": ["x"], "relationships": {"cId": {"references": "c"}}},
        "c": {"count": 2, "type": "custom", "fields": ["x"], "relationships": {"bId": {"references": "b"}}},
        "b": {"count": 2, "type": "custom", "fields": ["x"], "relationships": {"aId": {"references": "a"}}},
        "a": {"count": 2, "type": "custom", "fields": ["x"]},
    }
    result = generate_dataset(schema, seed=1)
    assert result.dataset["d"][0]["cId"] in {"c_1", "c_2"}


@pytest.mark.parametrize("locale", ["en", "fr", "de", "es", "ja"])
def test_locales(locale):
    schema = {"users": {"count": 2, "type": "person"}, "orgs": {"count": 2, "type": "company"}}
    result = generate_dataset(schema, seed=1, locale=locale)
    assert result.total_records == 4
    assert "@" in result.dataset["users"][0]["email"]


def test_unsupported_locale():
    with pytest.raises(UnsupportedLocaleError):
        generate_dataset({"users": {"count": 1, "type": "person"}}, seed=1, locale="xx")


def test_invalid_schema_raises_before_generation():
    orchestrator = DatasetOrchestrator()
    with pytest.raises(SchemaInvalidError) as exc_info:
        orchestrator.generate(
            {
                "A": {"count": 1, "type": "custom", "fields": ["x"],
                      "relationships": {"bId": {"references": "B"}}},
                "B": {"count": 1, "type": "custom", "fields": ["x"],
                      "relationships": {"aId": {"references": "A"}}},
            },
            seed=1,
        )
    assert "Circular dependencies detected: A -> B -> A" in exc_info.value.errors
    assert orchestrator.stage == GenerationStage.FAILED


def test_bad_pattern_fails_whole_call():
    schema = {
        "items": {
            "count": 2,
            "type": "custom",
            "fields": ["code"],
            "patterns": {"code": {"type": "regex", "value": "(unclosed"}},
        }
    }
    with pytest.raises(InvalidPatternError):
        generate_dataset(schema, seed=1)


def test_invalid_seed():
    with pytest.raises(InvalidSeedError):
        generate_dataset({"users": {"count": 1, "type": "person"}}, seed=-5)


def test_default_seed_setting():
    schema = {"users": {"count": 2, "type": "person"}}
    result = generate_dataset(schema, settings=Settings(default_seed=99))
    assert result.seed == 99


def test_stage_reaches_done():
    orchestrator = DatasetOrchestrator()
    orchestrator.generate({"users": {"count": 1, "type": "person"}}, seed=1)
    assert orchestrator.stage == GenerationStage.DONE


def test_frames(shop_schema):
    frames = generate_dataset(shop_schema, seed=2).to_frames()
    assert len(frames["orders"]) == 40
    assert "userId" in frames["orders"].columns


def test_iter_chunks():
    assert list(iter_chunks(7, 3)) == [(0, 3), (3, 6), (6, 7)]
    assert list(iter_chunks(3, 10)) == [(0, 3)]


def test_failing_field_is_logged(monkeypatch):
    """A failure inside a field reports the entity and field it happened in."""
    logged = {}

    def fake_log_error(error, **kwargs):
        logged.update(kwargs, error=error)

    def broken_heuristic(field_name, fk):
        raise RuntimeError("boom")

    monkeypatch.setattr(orchestrator_module, "log_error", fake_log_error)
    monkeypatch.setattr(orchestrator_module, "heuristic_value", broken_heuristic)

    orchestrator = DatasetOrchestrator()
    with pytest.raises(RuntimeError):
        orchestrator.generate(
            {"items": {"count": 2, "type": "custom", "fields": ["label"]}}, seed=1
        )
    assert logged["entity_name"] == "items"
    assert logged["field_name"] == "label"
    assert logged["context"] == {"stage": "generating"}


class StubProvider:
    def __init__(self, seed, locale):
        self.seed = seed
        self.locale = locale

    def generate(self, archetype, **options):
        return {"nickname": f"stub-{archetype.value}"}


def test_configured_provider_is_used(monkeypatch):
    """Settings.provider selects a registered leaf provider."""
    monkeypatch.setitem(PROVIDERS, "stub", StubProvider)
    result = generate_dataset(
        {"users": {"count": 2, "type": "person"}},
        seed=1,
        settings=Settings(provider="stub"),
    )
    assert result.dataset["users"] == [
        {"id": "users_1", "nickname": "stub-person"},
        {"id": "users_2", "nickname": "stub-person"},
    ]

    people = generate_people(1, seed=1, settings=Settings(provider="stub"))
    assert people == [{"id": "person_1", "nickname": "stub-person"}]
