"""Aggregate sessions into tables, monthly totals and pay."""

from __future__ import annotations

import math
from collections import defaultdict
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from .config import ReportSettings
from .models import Session


@dataclass(frozen=True, slots=True)
class SessionRow:
    date: str
    time_range: str
    content: str


@dataclass(frozen=True, slots=True)
class MonthlySummary:
    month: str
    total_minutes: int
    hourly_rate: float = 0.0

    @property
    def hours(self) -> float:
        return self.total_minutes / 60

    @property
    def hours_label(self) -> str:
        return format_hours_minutes(self.total_minutes)

    @property
    def decimal_label(self) -> str:
        return f"{self.hours:.2f}h"

    @property
    def salary(self) -> int:
        return round_half_away(self.hours * self.hourly_rate)


@dataclass(frozen=True, slots=True)
class MonthDetail:
    """Rows for a single month, as laid out in the spreadsheet export."""

    month: str
    title: str
    rows: tuple[SessionRow, ...]
    total_minutes: int

    @property
    def total_label(self) -> str:
        return format_japanese_duration(self.total_minutes)


def round_half_away(value: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def format_hours_minutes(minutes: int) -> str:
    hours, remainder = divmod(minutes, 60)
    return f"{hours}h{remainder:02d}m"


def format_japanese_duration(minutes: int) -> str:
    hours, remainder = divmod(minutes, 60)
    return f"{hours}時間{remainder}分"


def session_rows(sessions: Iterable[Session]) -> list[SessionRow]:
    return [
        SessionRow(
            date=session.date_label,
            time_range=session.time_range,
            content=session.content or "",
        )
        for session in sessions
    ]


def summarize_by_month(
    sessions: Iterable[Session], hourly_rate: float = 0.0
) -> list[MonthlySummary]:
    """Total worked minutes per ``YYYY/MM`` month, oldest month first."""
    totals: defaultdict[str, int] = defaultdict(int)
    for session in sessions:
        totals[session.month_key] += session.total_minutes
    return [
        MonthlySummary(month=month, total_minutes=minutes, hourly_rate=hourly_rate)
        for month, minutes in sorted(totals.items())
    ]


def month_detail(sessions: Sequence[Session]) -> Optional[MonthDetail]:
    """Detail rows for the month of the first session.

    Returns ``None`` when there is nothing to report. Sessions from any other
    month are left out.
    """
    if not sessions:
        return None
    first = sessions[0]
    selected = [session for session in sessions if session.month_key == first.month_key]
    rows = tuple(
        SessionRow(
            date=f"{session.date.month}月{session.date.day}日",
            time_range=session.time_range,
            content=session.content or "",
        )
        for session in selected
    )
    return MonthDetail(
        month=first.month_key,
        title=f"{first.date.year}年{first.date.month}月",
        rows=rows,
        total_minutes=sum(session.total_minutes for session in selected),
    )


def render_session_table(rows: Iterable[SessionRow]) -> str:
    lines = ["| date | time | content |", "|------|------|---------|"]
    lines.extend(f"| {row.date} | {row.time_range} | {row.content} |" for row in rows)
    return "\n".join(lines) + "\n"


def render_monthly_table(summaries: Iterable[MonthlySummary]) -> str:
    lines = ["| month | hours | salary |", "|-------|-------|--------|"]
    lines.extend(
        f"| {summary.month} | {summary.hours_label} ({summary.decimal_label}) | {summary.salary} |"
        for summary in summaries
    )
    return "\n".join(lines) + "\n"


class SummaryPrinter:
    """Render Markdown summaries in the console."""

    def __init__(self, settings: Optional[ReportSettings] = None) -> None:
        self.settings = settings or ReportSettings()

    def print_session_table(self, sessions: Sequence[Session]) -> None:
        print(render_session_table(session_rows(sessions)))

    def print_monthly_summary(self, sessions: Sequence[Session]) -> None:
        summaries = summarize_by_month(sessions, hourly_rate=self.settings.hourly_rate)
        print(render_monthly_table(summaries))

    def print_summary(self, sessions: Sequence[Session]) -> None:
        self.print_session_table(sessions)
        self.print_monthly_summary(sessions)
