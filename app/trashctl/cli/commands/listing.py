"""List command for showing trashed files.

This module provides the `trash ls` command (also `trash list` and plain
`trash`), which prints the trash can contents with ELNs.
"""

from typing import Annotated

import typer

from trashctl.cli.display import NO_TRASHED_FILES
from trashctl.cli.types import CliState, get_state
from trashctl.ordering import SortKey
from trashctl.trash.engine import TrashEngine
from trashctl.trash.errors import TrashError
from trashctl.utils.formatting import console, print_error, print_listing


def list_trash(
    ctx: typer.Context,
    sort: Annotated[
        SortKey | None,
        typer.Option(
            "--sort",
            "-s",
            help="Order entries by this key for this listing only.",
            case_sensitive=False,
        ),
    ] = None,
    reverse: Annotated[
        bool,
        typer.Option(
            "--reverse",
            "-r",
            help="Invert the configured order.",
        ),
    ] = False,
) -> None:
    """List trashed files.

    Examples:
        trash ls                # Configured order
        trash ls --sort mtime   # Oldest modification first
        trash ls -r             # Reverse order
    """
    show_listing(get_state(ctx), sort=sort, reverse=reverse)


def show_listing(state: CliState, *, sort: SortKey | None = None, reverse: bool = False) -> None:
    """Print the numbered trash listing.

    Args:
        state: CLI state of the invocation.
        sort: Sort key overriding the configured one.
        reverse: Invert the configured reversal.
    """
    engine = state.engine
    updates: dict[str, object] = {}
    if sort is not None:
        updates["sort"] = sort
    if reverse:
        updates["sort_reverse"] = not state.config.sort_reverse
    if updates:
        engine = TrashEngine(engine.layout, state.config.model_copy(update=updates))

    try:
        names = engine.list_names()
    except TrashError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if not names:
        console.print(NO_TRASHED_FILES)
        return

    print_listing(names, engine.layout.files_dir)
