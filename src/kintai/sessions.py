"""Reconstruct completed work sessions from a stream of punches."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Iterable, Optional

from .models import ActiveSession, Event, EventKind, Interval, Session

logger = logging.getLogger(__name__)


class SessionBuilder:
    """State machine pairing punches into sessions.

    The only state is the session in progress (``None`` while idle). A
    second ``start`` replaces the open session without emitting it, and a
    break that is still open at ``finish`` is dropped rather than cutting
    the worked time short. Neither case raises; discarded sessions and
    ignored punches are kept on the builder for inspection.
    """

    def __init__(self) -> None:
        self.active: Optional[ActiveSession] = None
        self.sessions: list[Session] = []
        self.discarded: list[ActiveSession] = []
        self.ignored: list[Event] = []

    def feed(self, event: Event) -> Optional[Session]:
        """Apply one event; return the session it completes, if any."""
        handler = {
            EventKind.START: self._on_start,
            EventKind.BREAK_START: self._on_break_start,
            EventKind.BREAK_END: self._on_break_end,
            EventKind.FINISH: self._on_finish,
        }[event.kind]
        return handler(event)

    def build(self, events: Iterable[Event]) -> list[Session]:
        """Process one whole log, starting from an idle builder."""
        self.active = None
        self.sessions = []
        self.discarded = []
        self.ignored = []
        # Stable sort: punches sharing an instant keep their log order.
        for event in sorted(events, key=lambda item: item.timestamp):
            self.feed(event)
        if self.active is not None:
            logger.debug("Log ended with an open session started at %s", self.active.start)
            self.discarded.append(self.active)
            self.active = None
        return self.sessions

    def _on_start(self, event: Event) -> None:
        if self.active is not None:
            logger.debug(
                "Discarding unfinished session started at %s", self.active.start
            )
            self.discarded.append(self.active)
        self.active = ActiveSession(start=event.timestamp)

    def _on_break_start(self, event: Event) -> None:
        if self.active is None or self.active.pending_break_start is not None:
            self._ignore(event)
            return
        self.active.pending_break_start = event.timestamp

    def _on_break_end(self, event: Event) -> None:
        if self.active is None or self.active.pending_break_start is None:
            self._ignore(event)
            return
        self.active.breaks.append((self.active.pending_break_start, event.timestamp))
        self.active.pending_break_start = None

    def _on_finish(self, event: Event) -> Optional[Session]:
        active = self.active
        if active is None:
            self._ignore(event)
            return None
        if active.pending_break_start is not None:
            logger.debug(
                "Dropping break started at %s with no break_end",
                active.pending_break_start,
            )
        session = Session(
            date=active.start.date(),
            intervals=tuple(_split_intervals(active.start, active.breaks, event.timestamp)),
            content=event.content,
        )
        self.sessions.append(session)
        self.active = None
        return session

    def _ignore(self, event: Event) -> None:
        logger.debug("Ignoring %s at %s", event.kind.value, event.timestamp)
        self.ignored.append(event)


def _split_intervals(
    start: datetime, breaks: list[tuple[datetime, datetime]], finish: datetime
) -> list[Interval]:
    intervals: list[Interval] = []
    cursor = start
    for break_start, break_end in breaks:
        intervals.append(Interval.between(cursor, break_start))
        cursor = break_end
    intervals.append(Interval.between(cursor, finish))
    return intervals


def build_sessions(events: Iterable[Event]) -> list[Session]:
    """Sort ``events`` by time and return every completed session."""
    return SessionBuilder().build(events)
