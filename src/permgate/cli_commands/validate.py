"""``permgate validate`` — load and compile configuration files."""

from __future__ import annotations

import sys
from pathlib import Path

import click
from rich.markup import escape

from permgate.cli_commands._output import console
from permgate.config.loader import ConfigLoader
from permgate.errors import PermgateError


@click.command()
@click.argument("paths", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
def validate(paths: tuple[str, ...]) -> None:
    """Validate each configuration file in PATHS.

    Every file is checked; the command exits 1 if any of them fails.
    """
    failures = 0
    for p in paths:
        try:
            gate = ConfigLoader(Path(p)).load().to_gate()
        except PermgateError as exc:
            failures += 1
            console.print(f"[red]FAIL[/red] {p}: {escape(str(exc))}")
            continue
        count = len(gate.pattern_set) + len(gate.ask_patterns)
        console.print(f"[green]OK[/green]   {p}: {count} pattern(s)")

    if failures:
        sys.exit(1)
