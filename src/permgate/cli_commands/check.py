"""``permgate check`` — evaluate one command line or path."""

from __future__ import annotations

import sys

import click
from rich.markup import escape

from permgate.cli_commands._config import build_config, config_option
from permgate.cli_commands._output import console, print_decision
from permgate.errors import PermgateError
from permgate.matcher.matcher import evaluate
from permgate.matcher.models import Verdict

EXIT_ERROR = 1
EXIT_CODES = {
    Verdict.ALLOWED: 0,
    Verdict.DENIED: 3,
    Verdict.UNSPECIFIED: 4,
}


@click.command()
@click.argument("candidate")
@click.option("--tool", "-t", default=None, help="Only consider patterns with this label.")
@config_option
@click.option("--allow", "allow", multiple=True, help="Extra allow pattern (runtime layer).")
@click.option("--deny", "deny", multiple=True, help="Extra deny pattern (runtime layer).")
@click.option("--exact", is_flag=True, help="Require patterns to cover the whole candidate.")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
def check(
    candidate: str,
    tool: str | None,
    config_paths: tuple[str, ...],
    allow: tuple[str, ...],
    deny: tuple[str, ...],
    exact: bool,
    as_json: bool,
) -> None:
    """Check CANDIDATE against the configured allow and deny patterns.

    Exits 0 when allowed, 3 when denied, 4 when no pattern matched and 1 on
    configuration errors.  A matching ask pattern is reported alongside the
    verdict without changing the exit code.
    """
    try:
        config = build_config(config_paths, allow=allow, deny=deny, exact=exact)
        gate = config.to_gate()
    except PermgateError as exc:
        console.print(f"[red]Error:[/red] {escape(str(exc))}")
        sys.exit(EXIT_ERROR)

    decision = evaluate(candidate, gate.pattern_set, tool=tool)
    asked = None if decision.denied else gate.match_ask(candidate, tool=tool)
    print_decision(candidate, decision, asked=asked, as_json=as_json)
    sys.exit(EXIT_CODES[decision.verdict])
