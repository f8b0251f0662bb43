"""PermissionMatcher — evaluates a candidate string against allow/deny patterns.

Pure logic, no I/O.  Deny patterns are checked first (first match wins),
then allow patterns; a candidate matching neither is left
:attr:`~permgate.matcher.models.Verdict.UNSPECIFIED` for the caller to
resolve.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING

from permgate.errors import InvalidPatternError
from permgate.matcher.models import Decision, MatchMode, Pattern, PatternSet, Verdict
from permgate.matcher.pattern import compile_pattern
from permgate.utils.telemetry import (
    ATTR_LABEL,
    ATTR_MATCH_MODE,
    ATTR_PATTERN,
    ATTR_TOOL,
    ATTR_VERDICT,
    get_tracer,
)

if TYPE_CHECKING:
    from permgate.config.models import PermissionsConfig

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)


def compile_patterns(
    sources: Sequence[object], *, list_name: str = "patterns", allow_empty: bool = False
) -> tuple[Pattern, ...]:
    """Compile every entry of *sources*, keeping their order.

    Raises:
        InvalidPatternError: On the first bad entry, naming *list_name* and
            its index.
    """
    if isinstance(sources, str):
        raise InvalidPatternError(
            sources, "expected a list of patterns, got a string", list_name=list_name
        )

    compiled: list[Pattern] = []
    for index, source in enumerate(sources):
        try:
            compiled.append(compile_pattern(source, allow_empty=allow_empty))
        except InvalidPatternError as exc:
            raise InvalidPatternError(
                source, exc.reason, list_name=list_name, index=index
            ) from exc
    return tuple(compiled)


def _compile_list(
    list_name: str, sources: Sequence[object], *, allow_empty: bool
) -> dict[str, tuple[Pattern, ...]]:
    grouped: dict[str, list[Pattern]] = {}
    for pattern in compile_patterns(sources, list_name=list_name, allow_empty=allow_empty):
        grouped.setdefault(pattern.label, []).append(pattern)
    return {label: tuple(patterns) for label, patterns in grouped.items()}


def load_pattern_set(
    allow: Sequence[object] = (),
    deny: Sequence[object] = (),
    *,
    match_mode: MatchMode | str = MatchMode.PREFIX,
    allow_empty: bool = False,
) -> PatternSet:
    """Compile *allow* and *deny* pattern strings into a :class:`PatternSet`.

    Raises:
        InvalidPatternError: On the first entry that cannot be compiled.
            No partial set is returned.
    """
    pattern_set = PatternSet(
        allow=_compile_list("allow", allow, allow_empty=allow_empty),
        deny=_compile_list("deny", deny, allow_empty=allow_empty),
        match_mode=MatchMode(match_mode),
    )
    logger.debug(
        "Loaded pattern set: %d pattern(s), labels=%s, mode=%s",
        len(pattern_set),
        pattern_set.labels,
        pattern_set.match_mode.value,
    )
    return pattern_set


def _first_match(
    candidate: str, patterns: Iterable[Pattern], mode: MatchMode
) -> Pattern | None:
    for pattern in patterns:
        if pattern.matches(candidate, mode):
            return pattern
    return None


def evaluate(candidate: str, patterns: PatternSet, *, tool: str | None = None) -> Decision:
    """Return the :class:`Decision` for *candidate*.

    Resolution order:
    1. deny patterns: any match returns ``DENIED``.
    2. allow patterns: any match returns ``ALLOWED``.
    3. otherwise ``UNSPECIFIED``.

    When *tool* is given only patterns labelled with it (or unlabelled
    patterns) take part.
    """
    if not isinstance(candidate, str):
        raise TypeError(f"candidate must be a str, got {type(candidate).__name__}")

    with _tracer.start_as_current_span("permgate.evaluate") as span:
        mode = patterns.match_mode
        span.set_attribute(ATTR_MATCH_MODE, mode.value)
        if tool is not None:
            span.set_attribute(ATTR_TOOL, tool)

        matched = _first_match(candidate, patterns.deny_patterns(tool), mode)
        if matched is not None:
            decision = Decision(Verdict.DENIED, matched)
        else:
            matched = _first_match(candidate, patterns.allow_patterns(tool), mode)
            if matched is not None:
                decision = Decision(Verdict.ALLOWED, matched)
            else:
                decision = Decision(Verdict.UNSPECIFIED)

        span.set_attribute(ATTR_VERDICT, decision.verdict.value)
        if decision.pattern is not None:
            span.set_attribute(ATTR_PATTERN, decision.pattern.source)
            span.set_attribute(ATTR_LABEL, decision.pattern.label)

    logger.debug(
        "evaluate %r (tool=%s) -> %s%s",
        candidate,
        tool,
        decision.verdict.value,
        f" via {decision.pattern.source!r}" if decision.pattern else "",
    )
    return decision


class PermissionMatcher:
    """Evaluate candidates against one fixed :class:`PatternSet`."""

    def __init__(self, pattern_set: PatternSet) -> None:
        self._pattern_set = pattern_set

    @classmethod
    def from_lists(
        cls,
        allow: Sequence[object] = (),
        deny: Sequence[object] = (),
        *,
        match_mode: MatchMode | str = MatchMode.PREFIX,
        allow_empty: bool = False,
    ) -> PermissionMatcher:
        return cls(
            load_pattern_set(allow, deny, match_mode=match_mode, allow_empty=allow_empty)
        )

    @classmethod
    def from_config(cls, config: PermissionsConfig) -> PermissionMatcher:
        return cls(config.to_pattern_set())

    @property
    def pattern_set(self) -> PatternSet:
        return self._pattern_set

    def evaluate(self, candidate: str, *, tool: str | None = None) -> Decision:
        return evaluate(candidate, self._pattern_set, tool=tool)

    def is_allowed(self, candidate: str, *, tool: str | None = None) -> bool:
        """``True`` only for an explicit allow; unspecified counts as not allowed."""
        return self.evaluate(candidate, tool=tool).allowed
