"""CLI commands for trashctl.

This package contains all subcommand implementations.
"""

from trashctl.cli.commands import clear, delete, listing, put, sort, undel

__all__ = ["clear", "delete", "listing", "put", "sort", "undel"]
