"""Reading and writing the append-only punch log."""

from __future__ import annotations

import logging
import re
import sys
from datetime import datetime
from pathlib import Path
from typing import Iterable, Optional, TextIO

from .models import Event, EventKind

logger = logging.getLogger(__name__)

_LINE_PATTERN = re.compile(
    r'ts=(?P<ts>[^ ]+) type=(?P<kind>[^ ]+)(?: content="(?P<content>.*)")?'
)
_ESCAPED_CHAR_PATTERN = re.compile(r'\\([\\"])')
_FRACTION_PATTERN = re.compile(r"\.(\d+)")

_KINDS = {kind.value: kind for kind in EventKind}


class LogParseError(ValueError):
    """Raised when a recognizable punch line carries a corrupt timestamp."""

    def __init__(self, message: str, line_number: Optional[int] = None, line: str = "") -> None:
        self.line_number = line_number
        self.line = line
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)


def parse_line(line: str, line_number: Optional[int] = None) -> Optional[Event]:
    """Parse one log line, returning ``None`` for lines that are not punches."""
    match = _LINE_PATTERN.search(line)
    if not match:
        return None

    # Foreign ts=... type=... annotations are skipped before their timestamp
    # is validated, so only the four punch kinds can abort a run.
    kind = _KINDS.get(match["kind"])
    if kind is None:
        logger.debug("Skipping line with unknown event type %r", match["kind"])
        return None

    timestamp = parse_timestamp(match["ts"], line_number=line_number, line=line)
    content = match["content"]
    if content is not None:
        content = unescape_content(content)
    return Event(timestamp=timestamp, kind=kind, content=content)


def parse_timestamp(
    value: str, *, line_number: Optional[int] = None, line: str = ""
) -> datetime:
    text = value[:-1] + "+00:00" if value.endswith(("Z", "z")) else value
    # fromisoformat on 3.10 only takes 3 or 6 fractional digits; RFC 3339
    # writers commonly emit nanoseconds.
    text = _FRACTION_PATTERN.sub(_microsecond_fraction, text, count=1)
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError as exc:
        raise LogParseError(
            f"invalid timestamp {value!r}", line_number=line_number, line=line
        ) from exc
    if parsed.utcoffset() is None:
        raise LogParseError(
            f"timestamp {value!r} has no UTC offset", line_number=line_number, line=line
        )
    return parsed


def _microsecond_fraction(match: re.Match) -> str:
    return "." + match.group(1)[:6].ljust(6, "0")


def parse_lines(lines: Iterable[str]) -> list[Event]:
    events: list[Event] = []
    skipped = 0
    for number, raw in enumerate(lines, start=1):
        event = parse_line(raw.rstrip("\r\n"), line_number=number)
        if event is None:
            skipped += 1
            continue
        events.append(event)
    logger.debug("Parsed %d events (%d lines skipped).", len(events), skipped)
    return events


def escape_content(content: str) -> str:
    return content.replace("\\", "\\\\").replace('"', '\\"')


def unescape_content(content: str) -> str:
    # Backslashes not followed by a quote or backslash are kept as written.
    return _ESCAPED_CHAR_PATTERN.sub(r"\1", content)


def format_event_line(
    kind: EventKind, timestamp: datetime, content: Optional[str] = None
) -> str:
    """Render a punch as a single log line."""
    line = f"ts={timestamp.isoformat()} type={EventKind(kind).value}"
    if content is not None:
        line += f' content="{escape_content(content)}"'
    return line


def record_event(
    kind: EventKind,
    content: Optional[str] = None,
    *,
    now: Optional[datetime] = None,
    sink: Optional[TextIO] = None,
) -> str:
    """Write a punch for ``now`` (default: the current local time) to ``sink``."""
    timestamp = now or datetime.now().astimezone().replace(microsecond=0)
    line = format_event_line(kind, timestamp, content)
    target = sink if sink is not None else sys.stdout
    target.write(line + "\n")
    target.flush()
    return line


def read_log_lines(path: Optional[Path] = None) -> list[str]:
    """Read the whole log from ``path`` or standard input."""
    source = path or "<stdin>"
    try:
        if path is None:
            lines = sys.stdin.read().splitlines()
        else:
            with Path(path).open("r", encoding="utf-8") as handle:
                lines = handle.read().splitlines()
    except UnicodeDecodeError as exc:
        raise LogParseError(
            f"{source} is not valid UTF-8 ({exc.reason} at byte {exc.start})"
        ) from exc
    logger.debug("Read %d lines from %s", len(lines), source)
    return lines


def load_events(path: Optional[Path] = None) -> list[Event]:
    return parse_lines(read_log_lines(path))
