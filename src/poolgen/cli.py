"""
poolgen command line.

Commands:
- generate: Write one pool file per entity of the registry snapshot
- describe: List entities, or show the descriptor of one entity
"""

from __future__ import annotations

import logging
from pathlib import Path

import typer

from poolgen._version import get_version
from poolgen.config import DEFAULT_CONFIG_FILE, GeneratorConfig, load_config
from poolgen.errors import PoolgenError
from poolgen.generator import PoolGenerator
from poolgen.schema import load_metadata, load_schema

app = typer.Typer(
    help="poolgen - typed pool generator for entity registries",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Display version."""
    if value:
        typer.echo(f"poolgen {get_version()}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version",
    ),
) -> None:
    """poolgen CLI main callback for global options."""
    pass


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def _load_generator(
    config_file: str,
    schema: str | None,
    metadata: str | None,
) -> tuple[PoolGenerator, GeneratorConfig, Path]:
    """Load configuration and inputs, exiting with code 1 on failure."""
    config_path = Path(config_file).resolve()
    root = config_path.parent
    try:
        config = load_config(config_path)
        schema_path = Path(schema) if schema else config.get_schema_path(root)
        metadata_path = Path(metadata) if metadata else config.get_metadata_path(root)
        generator = PoolGenerator(load_schema(schema_path), load_metadata(metadata_path), config)
    except PoolgenError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1) from e
    return generator, config, root


@app.command("generate")
def generate_command(
    config_file: str = typer.Option(
        DEFAULT_CONFIG_FILE, "--config", "-c", help="Path to poolgen.toml"
    ),
    schema: str | None = typer.Option(None, "--schema", "-s", help="Registry snapshot (JSON)"),
    metadata: str | None = typer.Option(
        None, "--metadata", "-m", help="Method metadata table (JSON)"
    ),
    output: str | None = typer.Option(None, "--output", "-o", help="Output directory"),
    workers: int | None = typer.Option(
        None, "--workers", "-j", min=1, help="Number of entities generated in parallel"
    ),
    clean: bool = typer.Option(False, "--clean", help="Remove previously generated files"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log each generated file"),
) -> None:
    """
    Generate one pool file per entity.
    """
    _setup_logging(verbose)
    generator, config, root = _load_generator(config_file, schema, metadata)
    output_dir = Path(output) if output else config.get_output_path(root)
    result = generator.generate(output_dir, workers=workers, clean=clean or None)

    for path in result.files_created:
        typer.echo(f"Generated: {path}")
    for warning in result.warnings:
        typer.echo(f"Warning: {warning}", err=True)
    for error in result.errors:
        typer.echo(f"Error: {error}", err=True)

    typer.echo(result.summary)
    if not result.success:
        raise typer.Exit(code=1)


@app.command("describe")
def describe_command(
    entity: str | None = typer.Argument(None, help="Entity to describe"),
    config_file: str = typer.Option(
        DEFAULT_CONFIG_FILE, "--config", "-c", help="Path to poolgen.toml"
    ),
    schema: str | None = typer.Option(None, "--schema", "-s", help="Registry snapshot (JSON)"),
    metadata: str | None = typer.Option(
        None, "--metadata", "-m", help="Method metadata table (JSON)"
    ),
) -> None:
    """
    List entities, or print the descriptor of ENTITY as JSON.
    """
    generator, _, _ = _load_generator(config_file, schema, metadata)
    if entity is None:
        for name in generator.entity_names():
            typer.echo(name)
        return

    try:
        descriptor = generator.describe(entity)
    except PoolgenError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1) from e
    typer.echo(descriptor.model_dump_json(indent=2))


def main() -> None:
    app()
