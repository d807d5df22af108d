"""Command line interface entry point."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from schema_composer.composition import SchemaComposer, UnknownTypeError, build_components
from schema_composer.configuration import (
    DEFAULT_CONFIG_FILENAME,
    ConfigurationError,
    load_configuration,
    write_placeholder_configuration,
)
from schema_composer.schema_ir import render_json, to_components_document

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


class CliError(Exception):
    """Custom CLI error."""


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="schema-composer")
@click.option(
    "--log-level",
    type=click.Choice(_LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    show_default=True,
    help="Diagnostics verbosity written to stderr",
)
def cli(log_level: str) -> None:
    """Compose OpenAPI-style schemas from declared data types."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
    )


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML configuration template to write",
)
def generate_config(output_path: str) -> None:
    """Generate a placeholder YAML configuration with guidance comments."""
    try:
        resolved_output = write_placeholder_configuration(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="compose")
@click.option(
    "--config",
    "config_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to YAML/JSON configuration file",
)
@click.option(
    "--type",
    "type_names",
    multiple=True,
    help="Declared type to emit; repeat for several (defaults to output.types or all)",
)
@click.option(
    "--output",
    "output_path",
    required=False,
    type=click.Path(path_type=str),
    help="Optional file for the composed components document",
)
def compose(config_path: str, type_names: tuple[str, ...], output_path: str | None) -> None:
    """Compose component schemas for the configured type declarations."""
    try:
        configuration = load_configuration(config_path)
        catalog = configuration.catalog
        selected = type_names or configuration.output.type_names or None
        components = build_components(catalog, composer=SchemaComposer(catalog), names=selected)
    except (ConfigurationError, UnknownTypeError) as exc:
        raise CliError(str(exc)) from exc

    rendered = render_json(
        to_components_document(components), indent=configuration.output.indent
    )
    if output_path is None:
        click.echo(rendered)
        return
    destination = Path(output_path)
    try:
        destination.write_text(rendered + "\n", encoding="utf-8")
    except OSError as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(destination.resolve()))


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=list(argv), standalone_mode=False)
    except CliError as exc:
        click.echo(str(exc), err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
