"""Undel command for restoring trashed files.

This module provides `trash undel` and the standalone `undel` program,
which move trashed files back to where they were trashed from.
"""

from typing import Annotated

import typer

from trashctl.cli.display import (
    NO_TRASHED_FILES,
    make_batch_reporter,
    make_listing_renderer,
    print_failures,
    print_summary,
    prompt_reader,
)
from trashctl.cli.types import CliState, get_state
from trashctl.trash.errors import TrashError
from trashctl.trash.selection import SelectionMode, SelectionSession
from trashctl.utils.formatting import console, print_error

# First arguments meaning "restore everything"
ALL_ARGS = ("a", "all", "*")


def undel_files(
    ctx: typer.Context,
    targets: Annotated[
        list[str] | None,
        typer.Argument(
            help="Trashed file names to restore, or a/all/* for everything. "
            "Prompts when omitted.",
            show_default=False,
        ),
    ] = None,
) -> None:
    """Restore trashed files to their original location.

    Without arguments, the trash is listed and ELNs are read from the
    prompt. The prompt is shown again while trashed files remain.

    Examples:
        trash undel                     # Interactive selection
        trash undel all                 # Restore everything
        undel notes.txt.20240131120000
    """
    run_undel(get_state(ctx), targets)


def run_undel(state: CliState, targets: list[str] | None) -> None:
    """Restore named items, all items, or run the interactive session."""
    engine = state.engine

    try:
        if not targets:
            _interactive(state)
            return

        if targets[0] in ALL_ARGS:
            names = engine.list_names()
            if not names:
                console.print(NO_TRASHED_FILES)
                return
        else:
            names = targets

        results = engine.restore_many(names)
        total = engine.count()
    except TrashError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    failed = print_failures(results)
    restored = sum(1 for result in results if result.success)
    print_summary(f"{restored} file(s) untrashed", total, quiet=state.quiet)

    if failed:
        raise typer.Exit(code=1)


def _interactive(state: CliState) -> None:
    session = SelectionSession(
        state.engine,
        SelectionMode.RESTORE,
        reader=prompt_reader(),
        renderer=make_listing_renderer(state.layout.files_dir, "undeleted"),
        reporter=make_batch_reporter("untrashed", quiet=state.quiet),
    )
    report = session.run()
    if report.empty:
        console.print(NO_TRASHED_FILES)
    if report.failed:
        raise typer.Exit(code=1)
