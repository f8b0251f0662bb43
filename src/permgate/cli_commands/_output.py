"""Shared CLI output formatters."""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from permgate.matcher.models import Decision, Pattern, Verdict  # noqa: TC001

if TYPE_CHECKING:
    from permgate.config.models import PermissionsConfig
    from permgate.matcher.gate import PermissionGate

console = Console()
err_console = Console(stderr=True)

_VERDICT_STYLES = {
    Verdict.ALLOWED: "green",
    Verdict.DENIED: "red",
    Verdict.UNSPECIFIED: "yellow",
}


def print_decision(
    candidate: str,
    decision: Decision,
    *,
    asked: Pattern | None = None,
    as_json: bool = False,
) -> None:
    """Print the verdict for *candidate* and the pattern that produced it.

    *asked* is the ask pattern that also matched, if any.
    """
    if as_json:
        data = {"candidate": candidate, **decision.to_dict()}
        data["ask"] = asked.source if asked is not None else None
        console.print_json(json.dumps(data))
        return

    style = _VERDICT_STYLES[decision.verdict]
    line = f"[{style}]{decision.verdict.value.upper()}[/{style}]: {escape(candidate)}"
    if decision.pattern is not None:
        line += f"  (matched {escape(decision.pattern.source)})"
    console.print(line)
    if asked is not None:
        console.print(f"  [magenta]approval required[/magenta] (matched {escape(asked.source)})")


def _flatten(groups: Mapping[str, tuple[Pattern, ...]]) -> list[Pattern]:
    return [pattern for patterns in groups.values() for pattern in patterns]


def print_rules(
    gate: PermissionGate, config: PermissionsConfig, *, as_json: bool = False
) -> None:
    """Pretty-print the resolved deny, ask and allow patterns."""
    if as_json:
        console.print_json(config.model_dump_json())
        return

    pattern_set = gate.pattern_set
    if not len(pattern_set) and not gate.ask_patterns:
        console.print("[yellow]No permission rules defined.[/yellow]")
        return

    for title, patterns, style in (
        ("Deny", _flatten(pattern_set.deny), "red"),
        ("Ask", list(gate.ask_patterns), "magenta"),
        ("Allow", _flatten(pattern_set.allow), "green"),
    ):
        if not patterns:
            continue
        table = Table(title=title)
        table.add_column("Label", style="cyan")
        table.add_column("Pattern", style=style)
        table.add_column("Kind", style="dim")
        for pattern in patterns:
            kind = "glob" if pattern.has_wildcard else "literal"
            table.add_row(pattern.label, escape(pattern.body), kind)
        console.print(table)

    console.print(
        f"  Match mode: {pattern_set.match_mode.value}"
        f"  Default action: {gate.default_action.value}"
    )
