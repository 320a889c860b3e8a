"""FLTR CLI entry point and global options."""

import sys
from typing import Literal

import click

from fltr import __version__
from fltr.cli.output import OutputFormat, OutputFormatter, set_output_format
from fltr.cli.timeline import export, show, stats, timeline
from fltr.core.errors import FltrError, handle_error
from fltr.core.logging import configure_logging


@click.group()
@click.option(
    "--format",
    "-f",
    type=click.Choice(["json", "jsonl", "human"]),
    default="human",
    help="Output format (default: human)",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    default=False,
    help="Enable verbose logging to stderr",
)
@click.option(
    "--quiet",
    "-q",
    is_flag=True,
    default=False,
    help="Suppress notifications on stderr",
)
@click.option(
    "--log-format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Log format for stderr (default: text)",
)
@click.version_option(version=__version__, prog_name="fltr")
@click.pass_context
def cli(
    ctx: click.Context,
    format: OutputFormat,
    verbose: bool,
    quiet: bool,
    log_format: Literal["text", "json"],
) -> None:
    """FLTR: normalize security logs into a filterable, annotatable timeline.

    Accepts CSV, plaintext logs and (simulated) EVTX files.
    """
    ctx.ensure_object(dict)
    ctx.obj = {
        "format": format,
        "verbose": verbose,
        "quiet": quiet,
        "log_format": log_format,
        "formatter": OutputFormatter(format=format),
    }

    set_output_format(format)
    configure_logging(log_format=log_format, verbose=verbose, quiet=quiet)


cli.add_command(timeline)
cli.add_command(stats)
cli.add_command(show)
cli.add_command(export)


EXIT_ERROR = 1


def main() -> None:
    """Main entry point."""
    try:
        cli()
    except FltrError as e:
        handle_error(e, EXIT_ERROR)
    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(EXIT_ERROR)


if __name__ == "__main__":
    main()
