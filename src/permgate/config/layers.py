"""Layered configuration: user, project, local and runtime settings.

Layers are merged broad-to-specific into one :class:`PermissionsConfig`
before anything is evaluated:

- ``allow``, ``deny`` and ``ask`` lists are concatenated (duplicates
  dropped, first occurrence kept), so a broad layer can never lose a deny
  rule.
- Scalar settings come from the most specific layer that sets them
  explicitly.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from enum import IntEnum
from pathlib import Path

from permgate.config.loader import CONFIG_SUFFIXES, ConfigLoader
from permgate.config.models import PermissionsConfig

logger = logging.getLogger(__name__)

CONFIG_DIRNAME = ".permgate"

_SCALAR_FIELDS = ("match_mode", "allow_empty", "default_action")


class ConfigLayer(IntEnum):
    """Configuration scope; higher values are more specific."""

    USER = 10
    PROJECT = 20
    LOCAL = 30
    RUNTIME = 40


@dataclass(frozen=True)
class LayeredConfig:
    """One configuration layer and where it came from."""

    layer: ConfigLayer
    config: PermissionsConfig
    source: Path | None = None


def _find_settings(directory: Path, stem: str) -> Path | None:
    for suffix in CONFIG_SUFFIXES:
        candidate = directory / f"{stem}{suffix}"
        if candidate.is_file():
            return candidate
    return None


def discover_layers(project_dir: Path, home: Path | None = None) -> list[LayeredConfig]:
    """Load whichever standard settings files exist.

    Looks for ``settings.{yaml,yml,json}`` in ``~/.permgate`` (user) and
    ``<project>/.permgate`` (project), plus ``settings.local.*`` in the
    project directory (local).  Missing files are skipped.

    Raises:
        ConfigError: If a file exists but cannot be loaded.
    """
    home = home if home is not None else Path.home()
    locations = [
        (ConfigLayer.USER, home / CONFIG_DIRNAME, "settings"),
        (ConfigLayer.PROJECT, project_dir / CONFIG_DIRNAME, "settings"),
        (ConfigLayer.LOCAL, project_dir / CONFIG_DIRNAME, "settings.local"),
    ]

    layers: list[LayeredConfig] = []
    seen: set[Path] = set()
    for layer, directory, stem in locations:
        path = _find_settings(directory, stem)
        if path is None:
            continue
        resolved = path.resolve()
        # Running from $HOME makes the user and project files the same file.
        if resolved in seen:
            continue
        seen.add(resolved)
        layers.append(LayeredConfig(layer, ConfigLoader(path).load(), path))
        logger.debug("Loaded %s layer from %s", layer.name.lower(), path)
    return layers


def _extend_unique(target: list[str], items: Iterable[str]) -> None:
    for item in items:
        if item not in target:
            target.append(item)


def resolve_layers(layers: Iterable[LayeredConfig]) -> PermissionsConfig:
    """Merge *layers* into a single configuration.

    Layers are sorted by :class:`ConfigLayer`; layers of the same scope keep
    their given order.
    """
    ordered = sorted(layers, key=lambda lc: lc.layer)

    allow: list[str] = []
    deny: list[str] = []
    ask: list[str] = []
    scalars: dict[str, object] = {}
    for lc in ordered:
        _extend_unique(allow, lc.config.allow)
        _extend_unique(deny, lc.config.deny)
        _extend_unique(ask, lc.config.ask)
        for name in _SCALAR_FIELDS:
            if name in lc.config.model_fields_set:
                scalars[name] = getattr(lc.config, name)

    logger.debug(
        "Resolved %d layer(s): %d allow, %d deny, %d ask, overrides=%s",
        len(ordered),
        len(allow),
        len(deny),
        len(ask),
        sorted(scalars),
    )
    return PermissionsConfig.model_validate(
        {"allow": allow, "deny": deny, "ask": ask, **scalars}
    )
