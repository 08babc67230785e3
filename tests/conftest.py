"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

import os
from collections.abc import Iterator
from datetime import datetime
from pathlib import Path

import pytest
from trashctl.core.config import TrashConfig
from trashctl.trash.engine import TrashEngine
from trashctl.trash.models import TrashLayout

FIXED_TIME = datetime(2024, 1, 31, 12, 30, 45)


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path) -> Iterator[Path]:
    """Point HOME and the XDG directories into the test's tmp_path."""
    home = tmp_path / "home"
    home.mkdir()
    saved = {key: os.environ.get(key) for key in ("HOME", "XDG_CONFIG_HOME", "XDG_DATA_HOME")}
    os.environ["HOME"] = str(home)
    os.environ["XDG_CONFIG_HOME"] = str(home / ".config")
    os.environ["XDG_DATA_HOME"] = str(home / ".local" / "share")
    try:
        yield home
    finally:
        for key, value in saved.items():
            if value is None:
                os.environ.pop(key, None)
            else:
                os.environ[key] = value


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """Directory holding files to be trashed."""
    path = tmp_path / "ws"
    path.mkdir()
    return path


@pytest.fixture
def layout(tmp_path: Path) -> TrashLayout:
    """An existing, empty trash area."""
    return TrashLayout.from_root(tmp_path / "Trash").ensure()


@pytest.fixture
def engine(layout: TrashLayout) -> TrashEngine:
    """Trash engine with a fixed clock and default configuration."""
    return TrashEngine(layout, TrashConfig(), clock=lambda: FIXED_TIME)
