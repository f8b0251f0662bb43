"""Data types for the permission matcher.

Everything here is immutable once constructed, so a single
:class:`PatternSet` can be shared by any number of concurrent callers.
"""

from __future__ import annotations

import re
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any

ANY_LABEL = "*"
"""Label carried by patterns written without a ``Label(...)`` wrapper."""


class Verdict(str, Enum):
    """Outcome of evaluating a candidate against a :class:`PatternSet`."""

    ALLOWED = "allowed"
    DENIED = "denied"
    UNSPECIFIED = "unspecified"


class MatchMode(str, Enum):
    """How much of the candidate a pattern has to cover."""

    PREFIX = "prefix"
    EXACT = "exact"


class TokenKind(str, Enum):
    LITERAL = "literal"
    STAR = "star"
    GLOBSTAR = "globstar"


@dataclass(frozen=True, slots=True)
class Token:
    kind: TokenKind
    text: str


@dataclass(frozen=True, slots=True)
class Pattern:
    """A compiled pattern string.

    ``source`` is the text exactly as configured (``Bash(npm test*)``),
    ``label`` the tool label (``Bash``, or :data:`ANY_LABEL`) and ``body``
    the glob that is matched against candidates.
    """

    source: str
    label: str
    body: str
    tokens: tuple[Token, ...]
    regex: re.Pattern[str] = field(compare=False, repr=False)

    @property
    def literal_prefix(self) -> str:
        """Literal text up to the first wildcard."""
        if self.tokens and self.tokens[0].kind is TokenKind.LITERAL:
            return self.tokens[0].text
        return ""

    @property
    def has_wildcard(self) -> bool:
        return any(t.kind is not TokenKind.LITERAL for t in self.tokens)

    def applies_to(self, tool: str | None) -> bool:
        """Whether this pattern takes part in an evaluation for *tool*."""
        return tool is None or self.label == ANY_LABEL or self.label == tool

    def matches(self, candidate: str, mode: MatchMode = MatchMode.PREFIX) -> bool:
        # An empty body only ever matches the empty candidate.
        if not self.tokens:
            return candidate == ""
        if not candidate.startswith(self.literal_prefix):
            return False
        if mode is MatchMode.EXACT:
            return self.regex.fullmatch(candidate) is not None
        return self.regex.match(candidate) is not None


def _freeze(groups: Mapping[str, tuple[Pattern, ...]]) -> Mapping[str, tuple[Pattern, ...]]:
    return MappingProxyType({label: tuple(patterns) for label, patterns in groups.items()})


@dataclass(frozen=True, slots=True)
class PatternSet:
    """Compiled allow and deny patterns, grouped by label.

    Labels appear in order of first use; patterns keep their configured
    order within a label.  Use :func:`permgate.matcher.load_pattern_set`
    rather than building one by hand.
    """

    allow: Mapping[str, tuple[Pattern, ...]] = field(default_factory=dict)
    deny: Mapping[str, tuple[Pattern, ...]] = field(default_factory=dict)
    match_mode: MatchMode = MatchMode.PREFIX

    def __post_init__(self) -> None:
        object.__setattr__(self, "allow", _freeze(self.allow))
        object.__setattr__(self, "deny", _freeze(self.deny))

    def __len__(self) -> int:
        return sum(len(p) for p in self.allow.values()) + sum(
            len(p) for p in self.deny.values()
        )

    @property
    def labels(self) -> list[str]:
        seen: dict[str, None] = {}
        for label in (*self.deny, *self.allow):
            seen.setdefault(label, None)
        return list(seen)

    def deny_patterns(self, tool: str | None = None) -> Iterator[Pattern]:
        return _iter_applicable(self.deny, tool)

    def allow_patterns(self, tool: str | None = None) -> Iterator[Pattern]:
        return _iter_applicable(self.allow, tool)


def _iter_applicable(
    groups: Mapping[str, tuple[Pattern, ...]], tool: str | None
) -> Iterator[Pattern]:
    for patterns in groups.values():
        for pattern in patterns:
            if pattern.applies_to(tool):
                yield pattern


@dataclass(frozen=True, slots=True)
class Decision:
    """A verdict plus the pattern that produced it (``None`` if unspecified)."""

    verdict: Verdict
    pattern: Pattern | None = None

    @property
    def allowed(self) -> bool:
        return self.verdict is Verdict.ALLOWED

    @property
    def denied(self) -> bool:
        return self.verdict is Verdict.DENIED

    @property
    def unspecified(self) -> bool:
        return self.verdict is Verdict.UNSPECIFIED

    def to_dict(self) -> dict[str, Any]:
        return {
            "verdict": self.verdict.value,
            "pattern": self.pattern.source if self.pattern else None,
            "label": self.pattern.label if self.pattern else None,
        }
