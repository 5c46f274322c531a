"""Shared test fixtures."""

from __future__ import annotations

import os
import time
from pathlib import Path

import pytest

from duview.settings import Settings


def make_file(path: Path, size: int, age_seconds: float = 0, now: float | None = None) -> Path:
    """Create a file of *size* bytes last modified *age_seconds* before *now*."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"x" * size)
    if age_seconds:
        mtime = (now if now is not None else time.time()) - age_seconds
        os.utime(path, (mtime, mtime))
    return path


@pytest.fixture
def scenario_tree(tmp_path):
    """Root with A (300 bytes in total), B (100 bytes) and a 50 byte file.

    root/
      f1            50
      A/a1         200
      A/deep/a2    100
      B/b1         100
    """
    root = tmp_path / "root"
    make_file(root / "f1", 50)
    make_file(root / "A" / "a1", 200)
    make_file(root / "A" / "deep" / "a2", 100)
    make_file(root / "B" / "b1", 100)
    return root


@pytest.fixture
def flat_dir(tmp_path):
    """Directory holding files a, b, c, d of distinct sizes."""
    root = tmp_path / "flat"
    for name, size in (("a", 40), ("b", 30), ("c", 20), ("d", 10)):
        make_file(root / name, size)
    return root


@pytest.fixture
def isolate_settings(tmp_path, monkeypatch):
    """Point the settings store at an empty temp config directory."""
    config = tmp_path / "config"
    config.mkdir()
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config))
    monkeypatch.setattr(Settings, "_instance", None)
    return config / "duview" / "settings.json"
