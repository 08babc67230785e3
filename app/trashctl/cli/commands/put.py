"""Put command for moving files to the trash can.

This module provides the `trash put` command. It is also what runs when
`trash` is given file names instead of a subcommand.
"""

from typing import Annotated

import typer

from trashctl.cli.display import print_failures, print_summary
from trashctl.cli.types import get_state
from trashctl.trash.errors import TrashError
from trashctl.utils.formatting import abbreviate_path, console, print_error


def put_files(
    ctx: typer.Context,
    files: Annotated[
        list[str],
        typer.Argument(
            help="Files to move to the trash can.",
            show_default=False,
        ),
    ],
) -> None:
    """Move files to the trash can.

    All files of one invocation share the same deletion timestamp.

    Examples:
        trash put notes.txt build/
        trash notes.txt          # Same as 'trash put notes.txt'
    """
    state = get_state(ctx)
    engine = state.engine

    results = engine.put_many(files)
    failed = print_failures(results)
    trashed = [result for result in results if result.success]

    if trashed and state.config.print_removed_files and not state.quiet:
        for result in trashed:
            console.print(abbreviate_path(result.target), markup=False)

    if trashed or not failed:
        try:
            total = engine.count()
        except TrashError as e:
            print_error(str(e))
            raise typer.Exit(code=1) from e
        print_summary(f"{len(trashed)} file(s) trashed", total, quiet=state.quiet)

    if failed:
        raise typer.Exit(code=1)
