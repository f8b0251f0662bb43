"""Matcher subsystem — allow/deny pattern evaluation and policy gating."""

from permgate.matcher.gate import PermissionGate, PolicyAction
from permgate.matcher.matcher import (
    PermissionMatcher,
    compile_patterns,
    evaluate,
    load_pattern_set,
)
from permgate.matcher.models import (
    ANY_LABEL,
    Decision,
    MatchMode,
    Pattern,
    PatternSet,
    Verdict,
)
from permgate.matcher.pattern import compile_pattern

__all__ = [
    "ANY_LABEL",
    "Decision",
    "MatchMode",
    "Pattern",
    "PatternSet",
    "PermissionGate",
    "PermissionMatcher",
    "PolicyAction",
    "Verdict",
    "compile_pattern",
    "compile_patterns",
    "evaluate",
    "load_pattern_set",
]
