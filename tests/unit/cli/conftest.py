"""Fixtures for CLI command tests."""

from pathlib import Path

import pytest
from trashctl.utils.formatting import console, err_console


@pytest.fixture(autouse=True)
def wide_console(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep long tmp_path lines from wrapping in captured output."""
    monkeypatch.setattr(console, "width", 400)
    monkeypatch.setattr(err_console, "width", 400)


@pytest.fixture
def trash_root(tmp_path: Path) -> Path:
    """Trash directory passed with --trash-dir."""
    return tmp_path / "Trash"


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """Config file passed with --config (absent until saved)."""
    return tmp_path / "config.toml"


@pytest.fixture
def base_args(trash_root: Path, config_file: Path) -> list[str]:
    """Global options pointing the CLI at the test trash and config."""
    return ["--trash-dir", str(trash_root), "--config", str(config_file)]


@pytest.fixture
def make_files(tmp_path: Path):
    """Create files in a workspace directory and return their paths."""
    workspace = tmp_path / "ws"
    workspace.mkdir(exist_ok=True)

    def _make(*names: str) -> list[Path]:
        paths = []
        for name in names:
            path = workspace / name
            path.write_text(name)
            paths.append(path)
        return paths

    return _make
