"""Shared types and utilities for CLI commands.

This module provides the per-invocation state built by the root callback
and helpers used across command modules to reach it.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

import typer
from rich.logging import RichHandler

from trashctl.core.config import ConfigError, TrashConfig, load_config
from trashctl.trash.engine import TrashEngine
from trashctl.trash.models import TrashLayout
from trashctl.utils.formatting import err_console, print_error


@dataclass(frozen=True, slots=True)
class CliState:
    """Everything a command needs, built once per invocation.

    Attributes:
        config: Loaded configuration (never mutated).
        config_path: Config file in use, None for the default location.
        engine: Trash engine bound to the configured trash area.
        verbose: Verbose output requested.
        quiet: Summary lines are suppressed.
    """

    config: TrashConfig
    config_path: Path | None
    engine: TrashEngine
    verbose: bool = False
    quiet: bool = False

    @property
    def layout(self) -> TrashLayout:
        """Trash area in use."""
        return self.engine.layout


def configure_logging(verbose: bool) -> None:
    """Route log records to stderr through Rich.

    Args:
        verbose: Log at DEBUG instead of WARNING.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False, markup=False)],
        force=True,
    )


def build_state(
    *,
    config_path: Path | None = None,
    trash_dir: Path | None = None,
    verbose: bool = False,
    quiet: bool = False,
) -> CliState:
    """Load configuration and prepare the trash area.

    Prints the error and exits with status 1 when the configuration is
    invalid or the trash directories cannot be created.

    Args:
        config_path: Config file to load. None uses the default location.
        trash_dir: Trash root overriding the configured one.
        verbose: Verbose output requested.
        quiet: Suppress summary lines.

    Returns:
        CliState for the invocation.
    """
    try:
        config = load_config(config_path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if trash_dir is not None:
        config = config.model_copy(update={"trash_dir": trash_dir})

    try:
        layout = TrashLayout.from_root(config.effective_trash_dir).ensure()
    except RuntimeError as e:
        print_error(f"Trash function disabled: {e}")
        raise typer.Exit(code=1) from e

    return CliState(
        config=config,
        config_path=config_path,
        engine=TrashEngine(layout, config),
        verbose=verbose,
        quiet=quiet,
    )


def get_state(ctx: typer.Context) -> CliState:
    """Return the CliState stored by the root callback.

    Raises:
        RuntimeError: If called outside a trash invocation.
    """
    obj = ctx.find_object(dict) or {}
    state = obj.get("state")
    if not isinstance(state, CliState):
        msg = "CLI state not initialized"
        raise RuntimeError(msg)
    return state
