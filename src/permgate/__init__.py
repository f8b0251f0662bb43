"""permgate — allow/deny glob matching for command lines and file paths."""

from __future__ import annotations

from typing import TYPE_CHECKING

__version__ = "0.1.0"

if TYPE_CHECKING:
    from permgate.matcher.gate import PermissionGate as PermissionGate
    from permgate.matcher.matcher import PermissionMatcher as PermissionMatcher
    from permgate.matcher.matcher import evaluate as evaluate
    from permgate.matcher.matcher import load_pattern_set as load_pattern_set

_EXPORTS = {
    "PermissionGate": "permgate.matcher.gate",
    "PermissionMatcher": "permgate.matcher.matcher",
    "evaluate": "permgate.matcher.matcher",
    "load_pattern_set": "permgate.matcher.matcher",
}


def __getattr__(name: str) -> object:
    module_path = _EXPORTS.get(name)
    if module_path is not None:
        import importlib

        mod = importlib.import_module(module_path)
        return getattr(mod, name)
    raise AttributeError(f"module 'permgate' has no attribute {name!r}")
