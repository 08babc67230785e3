"""CLI package for trashctl.

This package contains the Typer applications and all subcommands.
"""

from trashctl.cli.main import app, undel_app

__all__ = ["app", "undel_app"]
