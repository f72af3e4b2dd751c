"""
Tests for settings and default locations.
"""

import pytest

from kintai import paths
from kintai.config import ReportSettings


class TestReportSettings:
    """Tests for ReportSettings.from_options."""

    def test_missing_rate_is_zero(self):
        assert ReportSettings.from_options().hourly_rate == 0.0
        assert ReportSettings.from_options(None).hourly_rate == 0.0

    def test_rate_is_kept(self):
        assert ReportSettings.from_options(1250.5).hourly_rate == 1250.5

    def test_negative_rate_rejected(self):
        with pytest.raises(ValueError, match="must not be negative"):
            ReportSettings.from_options(-1)

    def test_default_labels(self):
        settings = ReportSettings()
        assert settings.headers == ("日付", "時間", "内容")
        assert settings.total_label == "合計"


class TestPaths:
    """Tests for the platformdirs-based locations."""

    def test_default_export_path(self, tmp_path, monkeypatch):
        monkeypatch.setattr(paths, "get_data_dir", lambda *parts: tmp_path.joinpath(*parts))
        assert paths.default_export_path("2026/10") == tmp_path / "exports" / "kintai-2026-10.xlsx"

    def test_data_dir_is_created(self, tmp_path, monkeypatch):
        class FakeDirs:
            def __init__(self, **kwargs):
                self.user_data_path = tmp_path / "data" / kwargs["appname"]

        monkeypatch.setattr(paths, "PlatformDirs", FakeDirs)
        path = paths.get_data_dir()
        assert path == tmp_path / "data" / "kintai"
        assert path.is_dir()

    def test_data_subdirectory_is_created(self, tmp_path, monkeypatch):
        class FakeDirs:
            def __init__(self, **kwargs):
                self.user_data_path = tmp_path / kwargs["appname"]

        monkeypatch.setattr(paths, "PlatformDirs", FakeDirs)
        assert paths.get_export_dir() == tmp_path / "kintai" / "exports"
        assert (tmp_path / "kintai" / "exports").is_dir()
