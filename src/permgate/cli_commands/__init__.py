"""CLI subcommand registration."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all subcommands on the CLI group."""
    from permgate.cli_commands.check import check
    from permgate.cli_commands.rules import rules
    from permgate.cli_commands.validate import validate

    cli.add_command(check)
    cli.add_command(rules)
    cli.add_command(validate)
