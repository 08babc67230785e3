"""Shared display and prompt functions for trash commands.

Provides the numbered listing used before interactive prompts, the line
reader for ELN input, and printers for batch failures and summaries.
"""

from collections.abc import Callable
from pathlib import Path

import typer

from trashctl.trash.models import TrashActionResult
from trashctl.trash.selection import BatchOutcome, LineReader
from trashctl.utils.formatting import console, print_error, print_header, print_listing

NO_TRASHED_FILES = "trash: No trashed files"


def make_listing_renderer(files_dir: Path, action: str) -> Callable[[list[str]], None]:
    """Build the renderer shown before each selection prompt.

    Args:
        files_dir: Directory holding the listed payloads (for coloring).
        action: Verb for the prompt hint (e.g. "undeleted").

    Returns:
        Callable printing the header, the numbered listing and the hint.
    """

    def _render(names: list[str]) -> None:
        print_header("Trashed files")
        print_listing(names, files_dir)
        console.print(f"\nEnter 'q' to quit\nFile(s) to be {action} (ex: 1 2-6, or *):")

    return _render


def prompt_reader() -> LineReader:
    """Build a line reader on top of typer.prompt.

    End of input (or Ctrl-C) is reported as None, which sessions treat
    like ``q``.
    """

    def _read() -> str | None:
        try:
            return typer.prompt(">", default="", show_default=False, prompt_suffix=" ")
        except typer.Abort:
            console.print()
            return None

    return _read


def print_failures(results: list[TrashActionResult] | tuple[TrashActionResult, ...]) -> bool:
    """Print an error line for every failed result.

    Returns:
        True if any result failed.
    """
    failed = False
    for result in results:
        if not result.success:
            failed = True
            print_error(result.error or f"{result.target}: Unknown error")
    return failed


def print_summary(message: str, total: int, *, quiet: bool = False) -> None:
    """Print a count line followed by the total trashed count."""
    if quiet:
        return
    console.print(message)
    console.print(f"{total} total trashed file(s)")


def make_batch_reporter(verb: str, *, quiet: bool = False) -> Callable[[BatchOutcome], None]:
    """Build the reporter printed after each interactive batch.

    Args:
        verb: Completes "N file(s) <verb>" (e.g. "untrashed").
        quiet: Suppress the summary lines (errors are still printed).
    """

    def _report(outcome: BatchOutcome) -> None:
        if outcome.invalid_token is not None:
            print_error(f"{outcome.invalid_token}: Invalid ELN")
            return
        for eln in outcome.invalid_indices:
            print_error(f"{eln}: Invalid ELN")
        print_failures(outcome.results)
        print_summary(f"{outcome.succeeded} file(s) {verb}", outcome.remaining, quiet=quiet)

    return _report
