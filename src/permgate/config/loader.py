"""Load and validate a permission configuration file."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path  # noqa: TC003
from typing import Any

import yaml
from pydantic import ValidationError

from permgate.config.models import PermissionsConfig
from permgate.errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_SUFFIXES = (".yaml", ".yml", ".json")


class ConfigLoader:
    """Load a YAML or JSON file into a :class:`PermissionsConfig`.

    The top-level mapping is either the configuration itself or a mapping
    with a ``permissions`` key holding it (the settings-file layout)::

        permissions:
          allow: ["Bash(git status)"]
          deny: ["Read(**/.env)"]
          ask: ["Bash(git push*)"]
          defaultMode: acceptEdits

    The bare form is validated strictly.  Inside a ``permissions`` section,
    keys this schema does not know are ignored.
    """

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> PermissionsConfig:
        """Read the file, interpolate env vars, and validate.

        Environment variables in the form ``${VAR}`` or ``$VAR`` are expanded
        using :func:`os.path.expandvars` before parsing.  An empty file yields
        an empty configuration.

        Raises:
            ConfigError: On read, parse or schema validation failures.
        """
        try:
            raw = self._path.read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigError(f"Cannot read {self._path}: {exc}") from exc

        if not raw.strip():
            logger.warning("Configuration file %s is empty", self._path)
            return PermissionsConfig()

        data = self._parse(os.path.expandvars(raw))

        if not isinstance(data, dict):
            raise ConfigError(f"{self._path}: top level must be a mapping")
        if "permissions" in data:
            data = self._unwrap(data["permissions"])

        try:
            return PermissionsConfig.model_validate(data)
        except ValidationError as exc:
            raise ConfigError(f"{self._path}: {exc}") from exc

    def _unwrap(self, section: Any) -> dict[str, Any]:
        if not isinstance(section, dict):
            raise ConfigError(f"{self._path}: 'permissions' must be a mapping")
        # Settings files carry keys for other consumers (defaultMode, ...).
        ignored = sorted(set(section) - set(PermissionsConfig.model_fields))
        if ignored:
            logger.debug("Ignoring keys in %s: %s", self._path, ", ".join(ignored))
        return {k: v for k, v in section.items() if k in PermissionsConfig.model_fields}

    def _parse(self, text: str) -> Any:
        if self._path.suffix == ".json":
            try:
                return json.loads(text)
            except json.JSONDecodeError as exc:
                raise ConfigError(f"JSON parse error in {self._path}: {exc}") from exc
        try:
            return yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ConfigError(f"YAML parse error in {self._path}: {exc}") from exc
