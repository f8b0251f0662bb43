"""Shared option handling: turn ``--config`` / ``--allow`` / ``--deny`` into one config."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any

import click

from permgate.config.layers import ConfigLayer, LayeredConfig, discover_layers, resolve_layers
from permgate.config.loader import ConfigLoader
from permgate.config.models import PermissionsConfig


def config_option(func: Callable[..., Any]) -> Callable[..., Any]:
    return click.option(
        "--config",
        "-c",
        "config_paths",
        multiple=True,
        type=click.Path(exists=True, dir_okay=False),
        help="Configuration file; repeat to layer several (later files are more specific). "
        "Defaults to the ~/.permgate and ./.permgate settings files.",
    )(func)


def build_config(
    config_paths: Sequence[str],
    *,
    allow: Sequence[str] = (),
    deny: Sequence[str] = (),
    exact: bool = False,
) -> PermissionsConfig:
    """Resolve file layers plus an optional runtime layer from CLI flags.

    Raises:
        ConfigError: If a configuration file cannot be loaded.
    """
    if config_paths:
        layers = [
            LayeredConfig(ConfigLayer.PROJECT, ConfigLoader(Path(p)).load(), Path(p))
            for p in config_paths
        ]
    else:
        layers = discover_layers(Path.cwd())

    if allow or deny or exact:
        overrides: dict[str, Any] = {"allow": list(allow), "deny": list(deny)}
        if exact:
            overrides["match_mode"] = "exact"
        layers.append(
            LayeredConfig(ConfigLayer.RUNTIME, PermissionsConfig.model_validate(overrides))
        )

    return resolve_layers(layers)
