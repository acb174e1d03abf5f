"""Tests for environment-driven settings."""

from __future__ import annotations

from pathlib import Path

import pytest

from vsm_classifier.config import Settings

_VARS = ("VSM_FIXTURE_DIR", "VSM_FIXTURE_FILE", "VSM_TRAIN_TIMEOUT", "VSM_LOG_LEVEL")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _VARS:
        # setenv first so values loaded from .env files are undone afterwards
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)


class TestSettings:
    def test_defaults(self) -> None:
        settings = Settings.from_env(dotenv=False)
        assert settings.fixture_dir == Path("testdata")
        assert settings.fixture_file == "training.json"
        assert settings.fixture_path == Path("testdata") / "training.json"
        assert settings.train_timeout == 5.0
        assert settings.log_level == "WARNING"

    def test_overrides(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.setenv("VSM_FIXTURE_DIR", str(tmp_path))
        monkeypatch.setenv("VSM_FIXTURE_FILE", "other.json")
        monkeypatch.setenv("VSM_TRAIN_TIMEOUT", "1.5")
        monkeypatch.setenv("VSM_LOG_LEVEL", "debug")

        settings = Settings.from_env(dotenv=False)
        assert settings.fixture_path == tmp_path / "other.json"
        assert settings.train_timeout == 1.5
        assert settings.log_level == "DEBUG"

    @pytest.mark.parametrize("raw", ["0", "", "  "])
    def test_timeout_disabled(self, monkeypatch: pytest.MonkeyPatch, raw: str) -> None:
        monkeypatch.setenv("VSM_TRAIN_TIMEOUT", raw)
        assert Settings.from_env(dotenv=False).train_timeout is None

    @pytest.mark.parametrize("raw", ["soon", "-1"])
    def test_invalid_timeout(self, monkeypatch: pytest.MonkeyPatch, raw: str) -> None:
        monkeypatch.setenv("VSM_TRAIN_TIMEOUT", raw)
        with pytest.raises(ValueError, match="VSM_TRAIN_TIMEOUT"):
            Settings.from_env(dotenv=False)

    def test_invalid_log_level(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("VSM_LOG_LEVEL", "LOUD")
        with pytest.raises(ValueError, match="VSM_LOG_LEVEL"):
            Settings.from_env(dotenv=False)

    def test_reads_dotenv_file(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        (tmp_path / ".env").write_text("VSM_FIXTURE_FILE=from_dotenv.json\n", encoding="utf-8")
        monkeypatch.chdir(tmp_path)

        assert Settings.from_env().fixture_file == "from_dotenv.json"
