"""Sort command for showing or changing the listing order.

This module provides the `trash sort` command. Keys are accepted by name
or by number (none=0 ... group=11); 'rev' toggles reversal. Changes are
saved to the config file.
"""

from typing import Annotated

import typer

from trashctl.cli.types import CliState, get_state
from trashctl.core.config import ConfigError, TrashConfig, save_config
from trashctl.ordering import SortKey
from trashctl.ordering.models import HAS_BIRTHTIME
from trashctl.utils.formatting import console, print_error, print_info, print_success

REV_ARG = "rev"


def sort_order(
    ctx: typer.Context,
    key: Annotated[
        str | None,
        typer.Argument(
            help="Sort key name or number (0-11), or 'rev' to toggle reversal.",
            show_default=False,
        ),
    ] = None,
    rev: Annotated[
        str | None,
        typer.Argument(
            help="'rev' to toggle reversal along with the new key.",
            show_default=False,
        ),
    ] = None,
) -> None:
    """Show or change the order of trash listings.

    Examples:
        trash sort              # Show the current order
        trash sort mtime        # Sort by modification time
        trash sort 2 rev        # Sort by size, toggle reversal
        trash sort rev          # Toggle reversal only
    """
    state = get_state(ctx)

    if key is None:
        describe_order(state.config)
        return

    update: dict[str, object] = {}
    if key == REV_ARG:
        if rev is not None:
            print_error(f"{rev}: Unexpected argument after '{REV_ARG}'")
            raise typer.Exit(code=1)
    else:
        try:
            update["sort"] = parse_sort_key(key)
        except ValueError as e:
            print_error(str(e))
            raise typer.Exit(code=1) from e
        if rev is not None and rev != REV_ARG:
            print_error(f"{rev}: Expected '{REV_ARG}'")
            raise typer.Exit(code=1)

    if key == REV_ARG or rev == REV_ARG:
        update["sort_reverse"] = not state.config.sort_reverse

    _save(state, state.config.model_copy(update=update))


def parse_sort_key(value: str) -> SortKey:
    """Parse a sort key given by name or by number.

    Raises:
        ValueError: If the value names no sort key.
    """
    if value.isdigit():
        return SortKey.from_index(int(value))
    try:
        return SortKey(value.lower())
    except ValueError:
        valid = ", ".join(key.value for key in SortKey)
        msg = f"{value}: Invalid sort key (valid: {valid}, or 0-{len(SortKey) - 1})"
        raise ValueError(msg) from None


def describe_order(config: TrashConfig) -> None:
    """Print the listing order and any degradation notices."""
    suffix = " [rev]" if config.sort_reverse else ""
    console.print(f"Sorting order: {config.sort.value}{suffix}", markup=False)

    if config.light_mode and config.sort in (SortKey.OWNER, SortKey.GROUP):
        print_info("Owner/group metadata is not read in light mode; sorting by name")
    if config.sort == SortKey.BTIME and not HAS_BIRTHTIME:
        print_info("Birth time is not available on this platform; using change time")


def _save(state: CliState, config: TrashConfig) -> None:
    try:
        path = save_config(config, state.config_path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    describe_order(config)
    if not state.quiet:
        print_success(f"Saved to {path}")
