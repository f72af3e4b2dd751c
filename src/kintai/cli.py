"""Command-line interface for the attendance log."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer

from .config import ReportSettings
from .logfile import LogParseError, load_events, record_event
from .models import EventKind, Session
from .paths import default_export_path
from .sessions import build_sessions

app = typer.Typer(help="kintai: attendance record manager.")

logger = logging.getLogger(__name__)


@app.callback(no_args_is_help=True)
def main(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log skipped lines, ignored punches and discarded sessions to stderr.",
    ),
) -> None:
    """Punch in and out, then summarize the punch log."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


LogOption = typer.Option(
    None,
    "--log",
    path_type=Path,
    help="Append the punch to this file instead of printing it.",
)


def _punch(kind: EventKind, content: Optional[str], log_path: Optional[Path]) -> None:
    if log_path is None:
        record_event(kind, content)
        return
    try:
        with log_path.open("a", encoding="utf-8") as handle:
            record_event(kind, content, sink=handle)
    except OSError as exc:
        typer.echo(f"Error: cannot write to {log_path}: {exc}", err=True)
        raise typer.Exit(code=1) from exc


@app.command()
def start(log_path: Optional[Path] = LogOption) -> None:
    """Record the start of a work session."""
    _punch(EventKind.START, None, log_path)


@app.command()
def finish(
    content: Optional[str] = typer.Argument(None, help="Note describing the work done."),
    log_path: Optional[Path] = LogOption,
) -> None:
    """Record the end of a work session."""
    _punch(EventKind.FINISH, content, log_path)


@app.command("break-start")
def break_start(log_path: Optional[Path] = LogOption) -> None:
    """Record the start of a break."""
    _punch(EventKind.BREAK_START, None, log_path)


@app.command("break-end")
def break_end(log_path: Optional[Path] = LogOption) -> None:
    """Record the end of a break."""
    _punch(EventKind.BREAK_END, None, log_path)


InputOption = typer.Option(
    None,
    "--input",
    "-i",
    path_type=Path,
    help="Punch log to read. Defaults to standard input.",
)


def _load_sessions(input_path: Optional[Path]) -> list[Session]:
    try:
        events = load_events(input_path)
    except LogParseError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc
    except OSError as exc:
        typer.echo(f"Error: cannot read {input_path}: {exc}", err=True)
        raise typer.Exit(code=1) from exc
    return build_sessions(events)


@app.command()
def summary(
    input_path: Optional[Path] = InputOption,
    rate: Optional[float] = typer.Option(
        None,
        "--rate",
        "-r",
        min=0.0,
        envvar="KINTAI_HOURLY_RATE",
        help="Hourly rate used to compute the salary column.",
    ),
) -> None:
    """Print the session table and the monthly totals as Markdown."""
    from .reporting import SummaryPrinter

    sessions = _load_sessions(input_path)
    SummaryPrinter(ReportSettings.from_options(rate)).print_summary(sessions)


@app.command()
def export(
    input_path: Optional[Path] = InputOption,
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        path_type=Path,
        help="Spreadsheet to write. Defaults to the application data directory.",
    ),
) -> None:
    """Export the first month found in the log as a spreadsheet."""
    from .export import write_month_workbook
    from .reporting import month_detail

    detail = month_detail(_load_sessions(input_path))
    if detail is None:
        typer.echo("No sessions found; nothing to export.", err=True)
        return

    target = output or default_export_path(detail.month)
    try:
        written = write_month_workbook(detail, target, ReportSettings())
    except OSError as exc:
        typer.echo(f"Error: cannot write {target}: {exc}", err=True)
        raise typer.Exit(code=1) from exc
    typer.echo(f"Exported {len(detail.rows)} sessions to {written}")
