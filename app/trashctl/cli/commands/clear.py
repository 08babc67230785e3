"""Clear command for emptying the trash can.

This module provides the `trash clear` command (also `trash empty`).
"""

import typer

from trashctl.cli.display import NO_TRASHED_FILES, print_failures
from trashctl.cli.types import CliState, get_state
from trashctl.trash.errors import TrashError
from trashctl.utils.formatting import console, print_error, print_success


def clear_trash(ctx: typer.Context) -> None:
    """Permanently delete everything in the trash can."""
    empty_trash(get_state(ctx))


def empty_trash(state: CliState) -> None:
    """Erase every listed trashed item.

    Failures of single items are reported without stopping the others;
    the command exits with status 1 if any item could not be erased.
    """
    engine = state.engine
    try:
        if not engine.list_names():
            console.print(NO_TRASHED_FILES)
            return
        results = engine.erase_all()
    except TrashError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if print_failures(results):
        raise typer.Exit(code=1)

    if not state.quiet:
        print_success("Trash can emptied")
