"""``permgate rules`` — show the resolved deny, ask and allow patterns."""

from __future__ import annotations

import sys

import click
from rich.markup import escape

from permgate.cli_commands._config import build_config, config_option
from permgate.cli_commands._output import console, print_rules
from permgate.errors import PermgateError


@click.command()
@config_option
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
def rules(config_paths: tuple[str, ...], as_json: bool) -> None:
    """List the patterns that would be used, after layering."""
    try:
        config = build_config(config_paths)
        gate = config.to_gate()
    except PermgateError as exc:
        console.print(f"[red]Error:[/red] {escape(str(exc))}")
        sys.exit(1)

    print_rules(gate, config, as_json=as_json)
