"""Shared error output for CLI commands."""

import sys
from typing import NoReturn

import click

from retint.exceptions import format_error_for_display


def exit_with_error(error: Exception, log_file_hint: str | None = None) -> NoReturn:
    """Show a clean error banner (no traceback) and exit with status 1."""
    user_message, recovery_hint = format_error_for_display(error)

    click.echo("\n" + "=" * 70, err=True)
    click.echo(f"ERROR: {user_message}", err=True)
    click.echo("=" * 70, err=True)

    if recovery_hint:
        click.echo(f"\n{recovery_hint}", err=True)

    if log_file_hint:
        click.echo(f"\nFor details, check the log file: {log_file_hint}", err=True)
    click.echo("For logging options, run: retint --help", err=True)

    sys.exit(1)
