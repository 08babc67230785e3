"""Main CLI application entry points.

Defines the `trash` Typer application with its global options, and the
standalone `undel` application.
"""

import locale
import logging
from pathlib import Path
from typing import Annotated

import click
import typer
from typer.core import TyperGroup

from trashctl import __version__
from trashctl.cli.commands import clear, delete, listing, put, sort, undel
from trashctl.cli.types import build_state, configure_logging

logger = logging.getLogger(__name__)

DEFAULT_COMMAND = "put"


class TrashGroup(TyperGroup):
    """Command group that treats unknown first arguments as file names.

    ``trash notes.txt`` runs ``trash put notes.txt``. A file whose name
    matches a command must be trashed with an explicit ``trash put``.
    """

    def resolve_command(
        self, ctx: click.Context, args: list[str]
    ) -> tuple[str | None, click.Command | None, list[str]]:
        if args and self.get_command(ctx, args[0]) is None:
            args = [DEFAULT_COMMAND, *args]
        return super().resolve_command(ctx, args)

    def list_commands(self, ctx: click.Context) -> list[str]:
        # Keep registration order in --help
        return list(self.commands)


# Create main Typer app
app = typer.Typer(
    name="trash",
    cls=TrashGroup,
    help="Move files to a trash can, restore them, or erase them for good.",
    no_args_is_help=False,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"trashctl version {__version__}")
        raise typer.Exit()


def _setup_locale() -> None:
    """Use the user's locale for name collation."""
    try:
        locale.setlocale(locale.LC_COLLATE, "")
    except locale.Error as e:
        logger.debug("Cannot set collation locale: %s", e)


VersionOption = Annotated[
    bool | None,
    typer.Option(
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
]
VerboseOption = Annotated[
    bool,
    typer.Option(
        "--verbose",
        "-v",
        help="Enable verbose output.",
    ),
]
QuietOption = Annotated[
    bool,
    typer.Option(
        "--quiet",
        "-q",
        help="Suppress non-essential output.",
    ),
]
TrashDirOption = Annotated[
    Path | None,
    typer.Option(
        "--trash-dir",
        help="Trash directory to use instead of the configured one.",
        file_okay=False,
        show_default=False,
    ),
]
ConfigOption = Annotated[
    Path | None,
    typer.Option(
        "--config",
        help="Config file to use instead of ~/.config/trashctl/config.toml.",
        dir_okay=False,
        show_default=False,
    ),
]


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: VersionOption = None,
    verbose: VerboseOption = False,
    quiet: QuietOption = False,
    trash_dir: TrashDirOption = None,
    config: ConfigOption = None,
) -> None:
    """trash - Move files to a trash can, restore them, or erase them for good.

    Without a command, the trash can contents are listed. Any other
    argument is taken as a file to trash.
    """
    configure_logging(verbose)
    _setup_locale()

    # Store state in context for subcommands
    ctx.ensure_object(dict)
    state = build_state(config_path=config, trash_dir=trash_dir, verbose=verbose, quiet=quiet)
    ctx.obj["state"] = state

    if ctx.invoked_subcommand is None:
        listing.show_listing(state)


# Register commands
app.command("ls", help="List trashed files.")(listing.list_trash)
app.command("list", hidden=True, help="List trashed files.")(listing.list_trash)
app.command("put", help="Move files to the trash can.")(put.put_files)
app.command("del", help="Permanently remove files from the trash can.")(delete.delete_files)
app.command("clear", help="Permanently delete everything in the trash can.")(clear.clear_trash)
app.command("empty", hidden=True, help="Same as clear.")(clear.clear_trash)
app.command("undel", help="Restore trashed files.")(undel.undel_files)
app.command("sort", help="Show or change the listing order.")(sort.sort_order)


# Standalone `undel` program
undel_app = typer.Typer(
    name="undel",
    help="Restore trashed files to their original location.",
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


@undel_app.command()
def undel_main(
    targets: Annotated[
        list[str] | None,
        typer.Argument(
            help="Trashed file names to restore, or a/all/* for everything. "
            "Prompts when omitted.",
            show_default=False,
        ),
    ] = None,
    version: VersionOption = None,
    verbose: VerboseOption = False,
    quiet: QuietOption = False,
    trash_dir: TrashDirOption = None,
    config: ConfigOption = None,
) -> None:
    """Restore trashed files to their original location.

    Examples:
        undel               # Interactive selection
        undel a             # Restore everything
        undel notes.txt.20240131120000
    """
    configure_logging(verbose)
    _setup_locale()
    state = build_state(config_path=config, trash_dir=trash_dir, verbose=verbose, quiet=quiet)
    undel.run_undel(state, targets)


if __name__ == "__main__":
    app()
