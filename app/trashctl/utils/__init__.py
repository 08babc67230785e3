"""Utility modules for trashctl.

This module exports commonly used utility functions.
"""

from trashctl.utils.formatting import (
    abbreviate_path,
    console,
    err_console,
    print_error,
    print_header,
    print_info,
    print_listing,
    print_success,
)
from trashctl.utils.shell import CommandResult, run_command

__all__ = [
    "CommandResult",
    "abbreviate_path",
    "console",
    "err_console",
    "print_error",
    "print_header",
    "print_info",
    "print_listing",
    "print_success",
    "run_command",
]
