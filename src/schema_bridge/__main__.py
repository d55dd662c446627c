"""CLI entry point for schema-bridge."""

import json
import sys
from pathlib import Path
from typing import Optional, TextIO

import click

from .config import Config
from .schema_gen.schema_converter_service import SchemaConverterService
from .utils.log_setup import setup_logging
from .workspace import DEFAULT_SCHEMA_SOURCE

EXIT_CONSTRUCTION_FAILED = 1
EXIT_FALLBACKS_IN_STRICT_MODE = 2


@click.group()
@click.option(
    "--config-file", "-c",
    type=click.Path(exists=True, dir_okay=False, resolve_path=True),
    help="Path to a JSON configuration file.",
    envvar="SCHEMA_BRIDGE_CONFIG_FILE"
)
@click.option(
    "--log-level", "-l",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    default=None, # Default will be taken from Config object's default, then overridden if this is set
    help="Override the logging level (e.g., DEBUG, INFO)."
)
@click.option(
    "--log-format",
    type=click.Choice(["console", "json"], case_sensitive=False),
    default=None,
    help="Override logging format."
)
@click.pass_context
def cli(ctx: click.Context, config_file: Optional[str], log_level: Optional[str], log_format: Optional[str]) -> None:
    """schema-bridge - Converts Zod-style schemas to JSON-Schema-like descriptors."""
    try:
        if config_file:
            # Load from specified file only
            cfg = Config.from_file(Path(config_file))
        else:
            # Load from environment variables (and .env file if present)
            cfg = Config()
    except (OSError, ValueError) as e:
        click.echo(f"Error loading configuration: {e}", err=True)
        sys.exit(1)

    # Override from CLI options if provided
    if log_level:
        cfg.logging.level = log_level.upper()
    if log_format:
        cfg.logging.format = log_format.lower()

    setup_logging(cfg)
    ctx.ensure_object(dict)
    ctx.obj["config"] = cfg


@cli.command()
@click.argument("source_file", type=click.File("r", encoding="utf-8"), default="-")
@click.option(
    "--output-file", "-o",
    type=click.Path(dir_okay=False, writable=True, resolve_path=True),
    help="Output file path for the generated descriptor (JSON format)."
)
@click.option("--indent", type=click.IntRange(0, 8), default=None, help="Override JSON indentation (0 for compact output).")
@click.option("--max-depth", type=click.IntRange(1, 200), default=None, help="Override the deepest schema nesting accepted.")
@click.option("--strict", is_flag=True, help="Exit with status 2 if any construct fell back to the generic descriptor.")
@click.pass_context
def convert(
    ctx: click.Context,
    source_file: TextIO,
    output_file: Optional[str],
    indent: Optional[int],
    max_depth: Optional[int],
    strict: bool,
) -> None:
    """Converts a schema definition (file or stdin) to a descriptor."""
    config: Config = ctx.obj["config"]
    if indent is not None:
        config.output.indent = indent
    if max_depth is not None:
        config.translator.max_depth = max_depth

    service = SchemaConverterService(app_config=config)
    result = service.convert_source(source_file.read())

    if result.error_message is not None:
        click.echo(f"Error: {result.error_message}", err=True)
        sys.exit(EXIT_CONSTRUCTION_FAILED)

    for issue in result.issues:
        click.echo(f"Warning: {issue.path}: {issue.message}", err=True)

    if output_file:
        try:
            with open(output_file, "w", encoding="utf-8") as f:
                f.write(f"{result.output}\n")
            click.echo(f"Descriptor written to {output_file}")
        except OSError as e:
            click.echo(f"Error writing output file {output_file}: {e}", err=True)
            sys.exit(1)
    else:
        click.echo(result.output)

    if strict and result.issues:
        sys.exit(EXIT_FALLBACKS_IN_STRICT_MODE)


@cli.command()
def example() -> None:
    """Print a sample schema definition."""
    click.echo(DEFAULT_SCHEMA_SOURCE)


@cli.command()
def version() -> None:
    """Show version information."""
    from . import __version__
    click.echo(f"schema-bridge v{__version__}")


@cli.command()
@click.pass_context
def config_show(ctx: click.Context) -> None:
    """Show current configuration."""
    config: Config = ctx.obj["config"]
    click.echo(json.dumps(config.model_dump(mode="json"), indent=2))


if __name__ == "__main__":
    cli()
