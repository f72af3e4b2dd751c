"""Configuration models and helpers for report generation."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class ReportSettings:
    """Options shared by the summary and spreadsheet reports."""

    hourly_rate: float = 0.0
    sheet_title: str = "勤務表"
    title_suffix: str = " 稼働報告"
    headers: tuple[str, str, str] = ("日付", "時間", "内容")
    total_label: str = "合計"

    @classmethod
    def from_options(cls, rate: float | None = None) -> "ReportSettings":
        hourly_rate = rate if rate is not None else 0.0
        if hourly_rate < 0:
            raise ValueError(f"hourly rate must not be negative (got {hourly_rate})")
        return cls(hourly_rate=hourly_rate)
