"""Timeline CLI commands.

Every command loads the given files into a fresh session, in order,
then renders a view of it. Nothing persists between invocations.
"""

import asyncio
from collections.abc import Callable
from pathlib import Path
from typing import Any

import click

from fltr.cli.output import CliRenderer, OutputFormatter
from fltr.core import logging
from fltr.core.digest import format_file_size, truncate_hash
from fltr.core.errors import FltrError
from fltr.core.export import EXPORT_FILENAME, details_text, raw_view
from fltr.core.presets import load_bootstrap, load_preset
from fltr.core.session import TimelineSession
from fltr.core.store import EventStore
from fltr.models.event import SEVERITY_LEVELS

_existing_file = click.Path(exists=True, dir_okay=False, path_type=Path)


def session_options(command: Callable[..., Any]) -> Callable[..., Any]:
    """Attach the FILES argument and session configuration options."""
    command = click.option(
        "--bootstrap",
        type=_existing_file,
        default=None,
        help="YAML/JSON list of sample events restored on reset",
    )(command)
    command = click.argument("files", nargs=-1, type=_existing_file)(command)
    return command


def open_session(
    ctx: click.Context,
    files: tuple[Path, ...],
    bootstrap: Path | None = None,
    preset: Path | None = None,
) -> tuple[TimelineSession, CliRenderer]:
    """Build a session and ingest the files one after another."""
    formatter: OutputFormatter = ctx.obj["formatter"]

    store = EventStore(bootstrap=load_bootstrap(bootstrap) if bootstrap else None)
    filters = load_preset(preset) if preset else None
    renderer = CliRenderer(formatter)
    session = TimelineSession(store=store, filters=filters, renderer=renderer)

    reports = asyncio.run(session.load_paths(files))
    failed = [report.name for report in reports if not report.ok]
    if failed:
        logging.warning(f"{len(failed)} file(s) could not be loaded: {', '.join(failed)}")

    return session, renderer


@click.command()
@session_options
@click.option("--keyword", "-k", multiple=True, help="Keyword filter (can be repeated)")
@click.option(
    "--severity",
    "-s",
    multiple=True,
    type=click.Choice(SEVERITY_LEVELS),
    help="Enabled severity (can be repeated; default: all)",
)
@click.option("--host", "-H", multiple=True, help="Host filter (can be repeated)")
@click.option("--search", default="", help="Search term matched against event and detail")
@click.option(
    "--preset",
    type=_existing_file,
    default=None,
    help="YAML filter preset (keywords, severities, hosts)",
)
@click.pass_context
def timeline(
    ctx: click.Context,
    files: tuple[Path, ...],
    bootstrap: Path | None,
    keyword: tuple[str, ...],
    severity: tuple[str, ...],
    host: tuple[str, ...],
    search: str,
    preset: Path | None,
) -> None:
    """Load files and print the filtered timeline.

    \b
    Examples:
      fltr timeline auth.log Security.evtx
      fltr -f jsonl timeline events.csv -s critical -s high --search admin
    """
    formatter: OutputFormatter = ctx.obj["formatter"]

    try:
        session, renderer = open_session(ctx, files, bootstrap, preset)
        for kw in keyword:
            session.add_keyword(kw)
        if severity:
            session.set_severities(severity)
        if host:
            session.set_hosts(host)
        session.set_search(search)
        renderer.flush()
    except FltrError as e:
        formatter.error(e.to_structured_error())
        ctx.exit(1)


@click.command()
@session_options
@click.pass_context
def stats(
    ctx: click.Context,
    files: tuple[Path, ...],
    bootstrap: Path | None,
) -> None:
    """Print severity counts, hosts and loaded files."""
    formatter: OutputFormatter = ctx.obj["formatter"]

    try:
        session, _ = open_session(ctx, files, bootstrap)
    except FltrError as e:
        formatter.error(e.to_structured_error())
        ctx.exit(1)

    formatter.output({
        "total_events": len(session.store),
        "severity_counts": session.severity_counts(),
        "hosts": sorted(session.all_hosts()),
        "annotations": session.store.annotation_count(),
        "loaded_files": [
            {
                "name": f.name,
                "size": format_file_size(f.size),
                "sha256": f.hash if not formatter.is_human() else truncate_hash(f.hash),
            }
            for f in session.store.loaded_files
        ],
    })


@click.command()
@session_options
@click.option("--id", "event_id", type=int, required=True, help="Event id to show")
@click.pass_context
def show(
    ctx: click.Context,
    files: tuple[Path, ...],
    bootstrap: Path | None,
    event_id: int,
) -> None:
    """Print the details block and raw record of one event."""
    formatter: OutputFormatter = ctx.obj["formatter"]

    try:
        session, _ = open_session(ctx, files, bootstrap)
        event, view = session.view_event(event_id)
    except FltrError as e:
        formatter.error(e.to_structured_error())
        ctx.exit(1)

    loaded = session.store.loaded_files
    file_hash = truncate_hash(loaded[-1].hash) if loaded else ""
    details = details_text(event, view.viewed_at, file_hash)

    if formatter.is_human():
        click.echo(details)
        click.echo("")
        click.echo(raw_view(event))
    else:
        formatter.output({
            "event": event.to_json_dict(),
            "viewed_at": view.viewed_at,
            "details": details,
            "raw": raw_view(event),
        })


def _parse_annotation(value: str) -> tuple[int, str]:
    event_id, sep, text = value.partition("=")
    if not sep or not event_id.strip().isdigit():
        raise click.BadParameter(f"expected ID=TEXT, got {value!r}", param_hint="--annotate")
    return int(event_id), text


@click.command()
@session_options
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=EXPORT_FILENAME,
    help=f"Export path (default: {EXPORT_FILENAME})",
)
@click.option("--annotate", multiple=True, help="Annotate an event, ID=TEXT (can be repeated)")
@click.pass_context
def export(
    ctx: click.Context,
    files: tuple[Path, ...],
    bootstrap: Path | None,
    output: Path,
    annotate: tuple[str, ...],
) -> None:
    """Write every loaded event, with annotations, to CSV."""
    formatter: OutputFormatter = ctx.obj["formatter"]
    annotations = [_parse_annotation(value) for value in annotate]

    try:
        session, _ = open_session(ctx, files, bootstrap)
        for event_id, text in annotations:
            session.set_annotation(event_id, text)
        path = session.write_export(output)
    except OSError as e:
        raise click.ClickException(f"Cannot write {output}: {e}")
    except FltrError as e:
        formatter.error(e.to_structured_error())
        ctx.exit(1)

    logging.info("CSV exported successfully")
    formatter.output({"path": str(path), "events": len(session.store)})
