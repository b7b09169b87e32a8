"""CLI for entitygen entity generation."""

import logging
from pathlib import Path

import typer

from entitygen import __version__
from entitygen.config import EntitygenConfig, find_config, load_config


def version_callback(value: bool):
    """Print version and exit."""
    if value:
        typer.echo(f"entitygen {__version__}")
        raise typer.Exit()


app = typer.Typer(
    help="entitygen: generate JPA entities from OpenAPI schemas",
    no_args_is_help=True,
)

# Global state for config (set in callback, used in commands)
_loaded_config: EntitygenConfig | None = None


@app.callback()
def main(
    version: bool = typer.Option(
        None, "--version", "-v", callback=version_callback, is_eager=True, help="Show version"
    ),
    config: Path = typer.Option(None, "--config", "-c", help="Path to config file (entitygen.yaml)"),
):
    """entitygen CLI.

    You can use a config file (entitygen.yaml or entitygen.json) to set default values.
    CLI arguments override config file values.
    """
    global _loaded_config

    config_path = config or find_config()

    _loaded_config = None
    if config_path:
        try:
            _loaded_config = load_config(config_path)
            typer.echo(f"Loaded config from: {config_path}", err=True)
        except Exception as e:
            typer.echo(f"Warning: Failed to load config: {e}", err=True)


def _resolve_spec_file(spec_file: Path | None) -> Path:
    if spec_file is None and _loaded_config and _loaded_config.spec_file:
        spec_file = Path(_loaded_config.spec_file)

    if spec_file is None:
        typer.echo("Error: SPEC_FILE is required (or set spec_file in entitygen.yaml)", err=True)
        raise typer.Exit(1)

    if not spec_file.exists():
        typer.echo(f"Error: {spec_file} does not exist", err=True)
        raise typer.Exit(1)

    return spec_file


def _resolve_package(package: str | None) -> str:
    if package:
        return package
    if _loaded_config:
        return _loaded_config.package_name
    return EntitygenConfig().package_name


@app.command()
def generate(
    spec_file: Path = typer.Argument(None, help="OpenAPI document (YAML or JSON)"),
    package: str = typer.Option(None, "--package", "-p", help="Java package of generated classes"),
    output: Path = typer.Option(None, "--output", "-o", help="Root directory for generated sources"),
    verbose: bool = typer.Option(False, "--verbose", help="Show debug logging"),
):
    """
    Generate JPA entity classes from an OpenAPI document.

    Every schema annotated with x-persist becomes one Java class written
    under OUTPUT/<package path>/.

    Examples:
      entitygen generate api.yaml --package com.example.entities --output build/generated
      entitygen generate --config entitygen.yaml
    """
    from entitygen.core.generator import EntityGenerator

    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO, format="%(levelname)s %(message)s")

    spec_file = _resolve_spec_file(spec_file)
    package_name = _resolve_package(package)
    if output is None:
        output = Path(_loaded_config.output_dir if _loaded_config else EntitygenConfig().output_dir)

    generator = EntityGenerator(package_name=package_name, output_dir=output)
    try:
        result = generator.generate_from_file(spec_file)
    except (ValueError, OSError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    for name, error in result.errors.items():
        typer.echo(f"Error in {name}: {error}", err=True)

    typer.echo(f"✓ Generated {len(result.written)} entities in {output}", err=True)

    if result.errors and not result.descriptors:
        raise typer.Exit(1)


@app.command()
def inspect(
    spec_file: Path = typer.Argument(None, help="OpenAPI document (YAML or JSON)"),
    package: str = typer.Option(None, "--package", "-p", help="Java package of generated classes"),
):
    """
    Show resolved entity descriptors without writing any files.

    Lists every persistable schema with its fields, resolved types, relations
    and column constraints, followed by relation inference diagnostics.
    Structural problems of the document are reported as warnings first.
    """
    from entitygen.adapters.openapi import OpenAPIAdapter
    from entitygen.core.generator import EntityGenerator

    spec_file = _resolve_spec_file(spec_file)

    adapter = OpenAPIAdapter()
    try:
        graph = adapter.parse(spec_file)
    except (ValueError, OSError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    for issue in adapter.validate(graph):
        typer.echo(f"Warning: {issue}", err=True)

    result = EntityGenerator(package_name=_resolve_package(package)).resolve(graph)

    for descriptor in result.descriptors:
        header = f"{descriptor.package_name}.{descriptor.class_name} [{descriptor.persistence_kind}]"
        if descriptor.superclass:
            header += f" extends {descriptor.superclass}"
        if descriptor.table_name:
            header += f" table={descriptor.table_name}"
        typer.echo(header)
        for group in descriptor.unique_constraints:
            typer.echo(f"  unique({', '.join(group)})")
        for field in descriptor.fields:
            line = f"  {field.name}: {field.type}"
            if field.collection:
                line = f"  {field.name}: List<{field.type}>"
            if field.relation:
                line += f" [{field.relation}]"
            if field.constraints:
                line += f" ({field.constraints.summary})"
            typer.echo(line)

    report = result.report
    typer.echo(
        f"\nRelations: {report.inferred_count} inferred, "
        f"{report.missing_target_count} missing targets, {report.unmatched_count} unmatched"
    )
    for gap in report.unmatched:
        typer.echo(f"  unmatched: {gap}")
    for gap in report.missing_targets:
        typer.echo(f"  missing target: {gap}")

    for name, error in result.errors.items():
        typer.echo(f"Error in {name}: {error}", err=True)


if __name__ == "__main__":
    app()
