"""Helpers for locating application directories."""

from __future__ import annotations

from pathlib import Path

from platformdirs import PlatformDirs


APP_NAME = "kintai"


def get_data_dir(*subdirs: str) -> Path:
    """Return kintai's data directory, or a folder inside it, creating it if needed."""
    dirs = PlatformDirs(appname=APP_NAME, appauthor=False)
    path = Path(dirs.user_data_path).joinpath(*subdirs)
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_export_dir() -> Path:
    return get_data_dir("exports")


def default_export_path(month_key: str) -> Path:
    return get_export_dir() / f"kintai-{month_key.replace('/', '-')}.xlsx"
