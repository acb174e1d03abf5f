"""Runtime settings read from the environment.

Variables are loaded from a ``.env`` file (if present) before the process
environment is consulted:

- ``VSM_FIXTURE_DIR``: directory holding fixture files (``testdata``)
- ``VSM_FIXTURE_FILE``: default fixture file name (``training.json``)
- ``VSM_TRAIN_TIMEOUT``: seconds allowed for one training run (``5.0``);
  empty or ``0`` disables the limit
- ``VSM_LOG_LEVEL``: logging level used by the CLI (``WARNING``)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import find_dotenv, load_dotenv

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class Settings:
    """Classifier harness configuration."""

    fixture_dir: Path = Path("testdata")
    fixture_file: str = "training.json"
    train_timeout: Optional[float] = 5.0
    log_level: str = "WARNING"

    @property
    def fixture_path(self) -> Path:
        return self.fixture_dir / self.fixture_file

    @classmethod
    def from_env(cls, dotenv: bool = True) -> "Settings":
        """Build settings from ``VSM_*`` environment variables.

        Args:
            dotenv: Load a ``.env`` file first (existing variables win).

        Raises:
            ValueError: If a variable holds an invalid value.
        """
        if dotenv:
            load_dotenv(find_dotenv(usecwd=True))

        return cls(
            fixture_dir=Path(os.getenv("VSM_FIXTURE_DIR", "testdata")),
            fixture_file=os.getenv("VSM_FIXTURE_FILE", "training.json"),
            train_timeout=_parse_timeout(os.getenv("VSM_TRAIN_TIMEOUT", "5.0")),
            log_level=_parse_log_level(os.getenv("VSM_LOG_LEVEL", "WARNING")),
        )


def _parse_timeout(raw: str) -> Optional[float]:
    raw = raw.strip()
    if not raw:
        return None
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"VSM_TRAIN_TIMEOUT must be a number, got {raw!r}") from None
    if value < 0:
        raise ValueError(f"VSM_TRAIN_TIMEOUT must be non-negative, got {raw!r}")
    return value or None


def _parse_log_level(raw: str) -> str:
    level = raw.strip().upper()
    if level not in LOG_LEVELS:
        raise ValueError(f"VSM_LOG_LEVEL must be one of {LOG_LEVELS}, got {raw!r}")
    return level
