"""Typer CLI application."""

import json
from pathlib import Path
from typing import Any, Optional

import typer

from schemasynth.config.logging import setup_logging
from schemasynth.config.settings import get_settings
from schemasynth.errors import SchemaSynthError
from schemasynth.ir.validators import validate_schema
from schemasynth.generation.engine import (
    generate_dataset,
    generate_custom,
    generate_people,
    generate_companies,
)
from schemasynth.generation.seeds import resolve_seed

app = typer.Typer(help="SchemaSynth: deterministic test datasets from a declarative schema")


def _read_json(path: Path) -> Any:
    return json.loads(path.read_text(encoding="utf-8"))


def _emit(payload: Any, out: Optional[Path]) -> None:
    text = json.dumps(payload, indent=2, ensure_ascii=False, default=str)
    if out is None:
        typer.echo(text)
        return
    out = Path(out)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(text, encoding="utf-8")
    typer.echo(f"✓ Complete! Output written to {out}", err=True)


def _resolve_seed(seed: Optional[int], seed_text: Optional[str] = None) -> int:
    # Same precedence as dataset generation: seed, seed text, configured default, clock
    if seed is None and seed_text is None:
        seed = get_settings().default_seed
    return resolve_seed(seed, seed_text)


def _fail(error: Exception) -> None:
    typer.echo(f"Error: {error}", err=True)
    raise typer.Exit(1)


@app.command()
def dataset(
    schema_json: Path,
    seed: Optional[int] = typer.Option(None, help="Seed for reproducible output"),
    seed_text: Optional[str] = typer.Option(None, help="Text hashed into a seed"),
    locale: Optional[str] = typer.Option(None, help="Locale: en, fr, de, es, ja"),
    out: Optional[Path] = typer.Option(None, help="Write JSON here instead of stdout"),
    preview: bool = typer.Option(False, help="Print the first rows of each entity"),
):
    """
    Generate a multi-entity dataset from a schema JSON file.

    Args:
        schema_json: Path to the dataset schema ({"entities": {...}})
    """
    setup_logging()
    try:
        result = generate_dataset(
            _read_json(schema_json), seed=seed, locale=locale, seed_text=seed_text
        )
    except SchemaSynthError as e:
        _fail(e)

    if preview:
        for name, frame in result.to_frames().items():
            typer.echo(f"== {name} ({result.entity_counts[name]} records)", err=True)
            typer.echo(frame.head().to_string(), err=True)

    _emit(result.to_payload(), out)


@app.command()
def custom(
    patterns_json: Path,
    count: int = typer.Option(1, help="Number of records"),
    seed: Optional[int] = typer.Option(None, help="Seed for reproducible output"),
    seed_text: Optional[str] = typer.Option(None, help="Text hashed into a seed"),
    out: Optional[Path] = typer.Option(None, help="Write JSON here instead of stdout"),
):
    """
    Generate records from a field -> pattern JSON file.

    Args:
        patterns_json: Path to {"field": {"type": ..., "value": ...}, ...}
    """
    setup_logging()
    try:
        resolved_seed = _resolve_seed(seed, seed_text)
        data = generate_custom(count, _read_json(patterns_json), seed=resolved_seed)
    except SchemaSynthError as e:
        _fail(e)

    _emit({"data": data, "metadata": {"count": len(data), "seed": resolved_seed}}, out)


@app.command()
def person(
    count: int = typer.Option(1, help="Number of records"),
    seed: Optional[int] = typer.Option(None, help="Seed for reproducible output"),
    locale: Optional[str] = typer.Option(None, help="Locale: en, fr, de, es, ja"),
    include_address: bool = typer.Option(True, help="Include address"),
    include_phone: bool = typer.Option(True, help="Include phone number"),
    include_date_of_birth: bool = typer.Option(False, help="Include date of birth"),
    out: Optional[Path] = typer.Option(None, help="Write JSON here instead of stdout"),
):
    """Generate person records."""
    setup_logging()
    try:
        resolved_seed = _resolve_seed(seed)
        data = generate_people(
            count,
            seed=resolved_seed,
            locale=locale,
            include_address=include_address,
            include_phone=include_phone,
            include_date_of_birth=include_date_of_birth,
        )
    except SchemaSynthError as e:
        _fail(e)

    _emit({"data": data, "metadata": {"count": len(data), "seed": resolved_seed}}, out)


@app.command()
def company(
    count: int = typer.Option(1, help="Number of records"),
    seed: Optional[int] = typer.Option(None, help="Seed for reproducible output"),
    locale: Optional[str] = typer.Option(None, help="Locale: en, fr, de, es, ja"),
    include_founded_year: bool = typer.Option(False, help="Include founding year"),
    include_employee_count: bool = typer.Option(False, help="Include employee count"),
    out: Optional[Path] = typer.Option(None, help="Write JSON here instead of stdout"),
):
    """Generate company records."""
    setup_logging()
    try:
        resolved_seed = _resolve_seed(seed)
        data = generate_companies(
            count,
            seed=resolved_seed,
            locale=locale,
            include_founded_year=include_founded_year,
            include_employee_count=include_employee_count,
        )
    except SchemaSynthError as e:
        _fail(e)

    _emit({"data": data, "metadata": {"count": len(data), "seed": resolved_seed}}, out)


@app.command()
def validate(schema_json: Path):
    """
    Check a schema and list every problem found.

    Args:
        schema_json: Path to the dataset schema
    """
    setup_logging()
    result = validate_schema(_read_json(schema_json))
    if result.valid:
        typer.echo("✓ Schema is valid")
        return
    typer.echo(f"Schema has {len(result.errors)} problem(s):")
    for error in result.errors:
        typer.echo(f"  - {error}")
    raise typer.Exit(1)


def main():
    """Entry point for CLI."""
    app()


if __name__ == "__main__":
    main()
