"""
Pytest configuration and fixtures for kintai tests.
"""

from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from kintai.models import Event, EventKind

JST = timezone(timedelta(hours=9))


def punch(kind: str, clock: str, day: str = "2026-10-19", content=None, tz=JST) -> Event:
    """Build an Event at ``day`` ``clock`` (HH:MM) in ``tz``."""
    timestamp = datetime.fromisoformat(f"{day}T{clock}:00").replace(tzinfo=tz)
    return Event(timestamp=timestamp, kind=EventKind(kind), content=content)


@pytest.fixture
def sample_log(tmp_path: Path) -> Path:
    """A log with two October sessions, one September session and some noise."""
    path = tmp_path / "kintai.log"
    path.write_text(
        "\n".join(
            [
                "# punches for october",
                "ts=2026-10-01T09:00:00+09:00 type=start",
                "ts=2026-10-01T12:00:00+09:00 type=break_start",
                "ts=2026-10-01T13:00:00+09:00 type=break_end",
                'ts=2026-10-01T15:00:00+09:00 type=finish content="design review"',
                "ts=2026-09-30T10:00:00+09:00 type=start",
                "ts=2026-09-30T12:00:00+09:00 type=finish",
                "unrelated annotation",
                "ts=2026-10-02T09:00:00+09:00 type=start",
                'ts=2026-10-02T13:30:00+09:00 type=finish content="say \\"hi\\""',
            ]
        )
        + "\n",
        encoding="utf-8",
    )
    return path
