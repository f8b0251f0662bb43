"""Configuration — file schema, loading, and layered resolution."""

from permgate.config.layers import (
    ConfigLayer,
    LayeredConfig,
    discover_layers,
    resolve_layers,
)
from permgate.config.loader import ConfigLoader
from permgate.config.models import PermissionsConfig

__all__ = [
    "ConfigLayer",
    "ConfigLoader",
    "LayeredConfig",
    "PermissionsConfig",
    "discover_layers",
    "resolve_layers",
]
