"""Settings file for the ``buildpick`` CLI.

Example YAML::

    manifest: https://app.example.com/polymer.json
    matrix: matrix-overrides.yaml
    fetch_timeout: 5
    log_level: INFO
    telemetry:
      enabled: true
      otlp_endpoint: ${OTLP_ENDPOINT}
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from buildpick.errors import ConfigError
from buildpick.manifest.client import is_remote


class TelemetrySettings(BaseModel):
    """Optional telemetry configuration."""

    enabled: bool = False
    otlp_endpoint: str | None = None


class Settings(BaseModel):
    """Top-level settings; every field has a usable default."""

    manifest: str = "polymer.json"
    matrix: str | None = None
    fetch_timeout: float = Field(default=10.0, gt=0)
    log_level: str = "WARNING"
    telemetry: TelemetrySettings = Field(default_factory=TelemetrySettings)

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            msg = f"unknown log level {value!r}"
            raise ValueError(msg)
        return level

    def resolve_paths(self, base_dir: Path) -> Settings:
        """Return a copy with relative local paths anchored at *base_dir*."""
        update: dict[str, Any] = {}
        if not is_remote(self.manifest) and not Path(self.manifest).is_absolute():
            update["manifest"] = str(base_dir / self.manifest)
        if self.matrix and not Path(self.matrix).is_absolute():
            update["matrix"] = str(base_dir / self.matrix)
        return self.model_copy(update=update)


class SettingsLoader:
    """Load and validate a settings YAML file into :class:`Settings`."""

    def __init__(self, path: Path) -> None:
        self._path = path

    def load(self) -> Settings:
        """Read YAML, interpolate env vars, and validate.

        Environment variables in the form ``${VAR}`` or ``$VAR`` are expanded
        using :func:`os.path.expandvars` before YAML parsing.

        Raises:
            ConfigError: On read errors, YAML parse errors or validation failures.
        """
        try:
            raw = self._path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise ConfigError(f"Cannot read {self._path}: {exc}") from exc

        expanded = os.path.expandvars(raw)

        try:
            data: Any = yaml.safe_load(expanded)
        except yaml.YAMLError as exc:
            raise ConfigError(f"YAML parse error: {exc}") from exc

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError("Settings YAML must be a mapping")

        try:
            settings = Settings.model_validate(data)
        except ValidationError as exc:
            raise ConfigError(str(exc)) from exc
        return settings.resolve_paths(self._path.parent)
