"""Shared error types for pattern compilation, configuration and gating."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from permgate.matcher.models import Decision, Pattern


class PermgateError(Exception):
    """Base error for all permgate failures."""


class InvalidPatternError(PermgateError):
    """A pattern string could not be compiled."""

    def __init__(
        self,
        pattern: object,
        reason: str,
        *,
        list_name: str | None = None,
        index: int | None = None,
    ) -> None:
        self.pattern = pattern
        self.reason = reason
        self.list_name = list_name
        self.index = index
        where = ""
        if list_name is not None:
            where = f" in {list_name}" + (f"[{index}]" if index is not None else "")
        super().__init__(f"Invalid pattern{where} {pattern!r}: {reason}")


class ConfigError(PermgateError):
    """A configuration file could not be read, parsed or validated."""

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        super().__init__("Configuration error" + (f": {detail}" if detail else ""))


class PermissionDeniedError(PermgateError):
    """The gate refused a candidate."""

    def __init__(self, candidate: str, decision: Decision) -> None:
        self.candidate = candidate
        self.decision = decision
        msg = f"Permission denied for: {candidate}"
        if decision.pattern is not None:
            msg += f" (matched {decision.pattern.source!r})"
        super().__init__(msg)


class ApprovalRequiredError(PermgateError):
    """The gate needs an explicit approval before the candidate may proceed."""

    def __init__(
        self, candidate: str, decision: Decision, *, pattern: Pattern | None = None
    ) -> None:
        self.candidate = candidate
        self.decision = decision
        self.pattern = pattern
        msg = f"Approval required for: {candidate}"
        if pattern is not None:
            msg += f" (matched {pattern.source!r})"
        super().__init__(msg)
