"""Output utilities for CLI commands with clear intent.

user_output is for messages meant for the person at the terminal (errors,
warnings, dry-run notices) and goes to stderr. machine_output is the program's
result and goes to stdout.
"""

import click


def user_output(message: str = "") -> None:
    click.echo(message, err=True)


def machine_output(message: str = "") -> None:
    click.echo(message)


def warning_output(message: str) -> None:
    user_output(click.style("Warning: ", fg="yellow") + message)
