"""Delete command for permanently removing trashed files.

This module provides the `trash del` command, which erases trashed files
by name or through an interactive ELN selection.
"""

from typing import Annotated

import typer

from trashctl.cli.commands.clear import empty_trash
from trashctl.cli.display import (
    NO_TRASHED_FILES,
    make_batch_reporter,
    make_listing_renderer,
    print_failures,
    print_summary,
    prompt_reader,
)
from trashctl.cli.types import get_state
from trashctl.trash.errors import TrashError
from trashctl.trash.selection import SelectionMode, SelectionSession
from trashctl.utils.formatting import console, print_error


def delete_files(
    ctx: typer.Context,
    targets: Annotated[
        list[str] | None,
        typer.Argument(
            help="Trashed file names to erase, or '*' for all. Prompts when omitted.",
            show_default=False,
        ),
    ] = None,
) -> None:
    """Permanently remove files from the trash can.

    Without arguments, the trash is listed and ELNs are read from the
    prompt ('q' quits, '*' selects everything, ranges like 2-6 work).

    Examples:
        trash del                       # Interactive selection
        trash del notes.txt.20240131120000
        trash del '*'                   # Erase everything
    """
    state = get_state(ctx)
    engine = state.engine

    if not targets:
        session = SelectionSession(
            engine,
            SelectionMode.ERASE,
            reader=prompt_reader(),
            renderer=make_listing_renderer(engine.layout.files_dir, "removed"),
            reporter=make_batch_reporter("removed from the trash can", quiet=state.quiet),
        )
        try:
            report = session.run()
        except TrashError as e:
            print_error(str(e))
            raise typer.Exit(code=1) from e
        if report.empty:
            console.print(NO_TRASHED_FILES)
        if report.failed:
            raise typer.Exit(code=1)
        return

    if "*" in targets:
        empty_trash(state)
        return

    results = engine.erase_many(targets)
    failed = print_failures(results)
    removed = sum(1 for result in results if result.success)
    try:
        total = engine.count()
    except TrashError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
    print_summary(f"{removed} file(s) removed from the trash can", total, quiet=state.quiet)

    if failed:
        raise typer.Exit(code=1)
