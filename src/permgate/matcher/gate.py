"""PermissionGate — turns matcher decisions into allow/deny/ask actions.

The matcher leaves unmatched candidates unspecified; the gate is where an
embedding application plugs in its default policy for them, and where
``ask`` patterns (approval required even when an allow rule matches) are
applied.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from enum import Enum

from permgate.errors import ApprovalRequiredError, PermissionDeniedError
from permgate.matcher.matcher import evaluate
from permgate.matcher.models import Decision, Pattern, PatternSet, Verdict

logger = logging.getLogger(__name__)


class PolicyAction(str, Enum):
    """What the embedding application should do with a candidate."""

    ALLOW = "allow"
    DENY = "deny"
    ASK = "ask"


class PermissionGate:
    """Apply ask patterns and a default policy on top of a :class:`PatternSet`.

    Precedence: a deny match gives ``DENY``; otherwise an ask match gives
    ``ASK``; otherwise an allow match gives ``ALLOW``; otherwise
    *default_action* (deny unless told otherwise).  Ask patterns use the
    pattern set's match mode and tool scoping.
    """

    def __init__(
        self,
        pattern_set: PatternSet,
        *,
        ask: Sequence[Pattern] = (),
        default_action: PolicyAction | str = PolicyAction.DENY,
    ) -> None:
        self._pattern_set = pattern_set
        self._ask = tuple(ask)
        self._default_action = PolicyAction(default_action)

    @property
    def pattern_set(self) -> PatternSet:
        return self._pattern_set

    @property
    def ask_patterns(self) -> tuple[Pattern, ...]:
        return self._ask

    @property
    def default_action(self) -> PolicyAction:
        return self._default_action

    def match_ask(self, candidate: str, *, tool: str | None = None) -> Pattern | None:
        """First ask pattern matching *candidate*, or ``None``."""
        mode = self._pattern_set.match_mode
        for pattern in self._ask:
            if pattern.applies_to(tool) and pattern.matches(candidate, mode):
                return pattern
        return None

    def action_for(self, decision: Decision, asked: Pattern | None = None) -> PolicyAction:
        if decision.verdict is Verdict.DENIED:
            return PolicyAction.DENY
        if asked is not None:
            return PolicyAction.ASK
        if decision.verdict is Verdict.ALLOWED:
            return PolicyAction.ALLOW
        return self._default_action

    def _resolve(
        self, candidate: str, tool: str | None
    ) -> tuple[Decision, Pattern | None, PolicyAction]:
        decision = evaluate(candidate, self._pattern_set, tool=tool)
        asked = None if decision.denied else self.match_ask(candidate, tool=tool)
        return decision, asked, self.action_for(decision, asked)

    def decide(self, candidate: str, *, tool: str | None = None) -> PolicyAction:
        return self._resolve(candidate, tool)[2]

    def enforce(self, candidate: str, *, tool: str | None = None) -> Decision:
        """Evaluate *candidate* and raise unless it may proceed.

        Raises:
            PermissionDeniedError: The resulting action is ``DENY``.
            ApprovalRequiredError: The resulting action is ``ASK``.
        """
        decision, asked, action = self._resolve(candidate, tool)

        if action == PolicyAction.DENY:
            logger.info("Denied %r (%s)", candidate, decision.verdict.value)
            raise PermissionDeniedError(candidate, decision)
        if action == PolicyAction.ASK:
            raise ApprovalRequiredError(candidate, decision, pattern=asked)
        return decision
