"""Pydantic models for the permission configuration file."""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from permgate.matcher.gate import PermissionGate
    from permgate.matcher.models import PatternSet


class PermissionsConfig(BaseModel):
    """Allow, deny and ask pattern lists plus the settings that govern them."""

    model_config = ConfigDict(extra="forbid")

    allow: list[str] = Field(
        default_factory=list,
        description="Patterns that grant permission (e.g. 'Bash(npm test*)').",
    )
    deny: list[str] = Field(
        default_factory=list,
        description="Patterns that block permission. Deny always wins over allow.",
    )
    ask: list[str] = Field(
        default_factory=list,
        description="Patterns that need approval even when an allow pattern matches.",
    )
    match_mode: Literal["prefix", "exact"] = Field(
        default="prefix",
        description="Whether a pattern may match a prefix of the candidate or must cover it.",
    )
    allow_empty: bool = Field(
        default=False,
        description="Accept empty pattern entries instead of rejecting them.",
    )
    default_action: Literal["allow", "deny", "ask"] = Field(
        default="deny",
        description="Action for candidates no pattern matches.",
    )

    def to_pattern_set(self) -> PatternSet:
        """Compile the lists.

        Raises:
            InvalidPatternError: If any entry cannot be compiled.
        """
        from permgate.matcher.matcher import load_pattern_set

        return load_pattern_set(
            self.allow,
            self.deny,
            match_mode=self.match_mode,
            allow_empty=self.allow_empty,
        )

    def to_gate(self) -> PermissionGate:
        """Compile all three lists into a gate.

        Raises:
            InvalidPatternError: If any entry cannot be compiled.
        """
        from permgate.matcher.gate import PermissionGate
        from permgate.matcher.matcher import compile_patterns

        pattern_set = self.to_pattern_set()
        ask = compile_patterns(self.ask, list_name="ask", allow_empty=self.allow_empty)
        return PermissionGate(pattern_set, ask=ask, default_action=self.default_action)
