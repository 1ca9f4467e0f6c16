"""Manifest models — the ``builds`` list of a ``polymer.json``-style file.

Example JSON::

    {
      "entrypoint": "index.html",
      "builds": [
        {"name": "esm-bundled", "basePath": "/esm-bundled/",
         "browserCapabilities": ["es2018", "modules"]},
        {"name": "es6-bundled", "browserCapabilities": ["es2015"]},
        {"name": "es5-bundled"}
      ]
    }

Keys the selector does not use (``preset``, ``bundle``, ``js`` ...) are
kept as extra fields.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class BuildDescriptor(BaseModel):
    """One compiled variant of the application and what it requires."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    name: str
    base_path: str = Field(default="", alias="basePath")
    browser_capabilities: list[str] = Field(default_factory=list, alias="browserCapabilities")

    @field_validator("base_path", mode="before")
    @classmethod
    def _coerce_base_path(cls, value: Any) -> Any:
        # ``basePath: true`` means "serve under the build name", which is the
        # redirect fallback for an empty base path.
        if value is None or isinstance(value, bool):
            return ""
        return value

    @field_validator("browser_capabilities", mode="before")
    @classmethod
    def _coerce_capabilities(cls, value: Any) -> Any:
        return [] if value is None else value


class Manifest(BaseModel):
    """Validated build manifest; only ``builds`` is interpreted."""

    model_config = ConfigDict(extra="allow")

    builds: list[BuildDescriptor] = []


class BuildSelection(BaseModel):
    """The chosen build as handed to the redirect step."""

    model_config = ConfigDict(frozen=True)

    name: str
    base_path: str = ""

    @classmethod
    def from_build(cls, build: BuildDescriptor) -> BuildSelection:
        return cls(name=build.name, base_path=build.base_path)
