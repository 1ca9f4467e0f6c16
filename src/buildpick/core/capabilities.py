"""Capability vocabulary, browser signatures and capability predicates.

A capability predicate is any callable ``BrowserSignature -> bool``.  The
rule objects defined here (``Since``, ``OsSince``, ``AllOf``, ``Constant``)
are the ones the shipped matrix uses; they are immutable and render a short
description so the matrix can be displayed.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, ConfigDict

from buildpick.core.versions import Version, format_version, make_minimum, parse_version, version_at_least


class Capability(str, Enum):
    """Web-platform features a build may require."""

    PUSH = "push"  # HTTP/2 Server Push
    SERVICEWORKER = "serviceworker"
    MODULES = "modules"  # JavaScript modules, dynamic import() and import.meta
    ES2015 = "es2015"
    ES2016 = "es2016"
    ES2017 = "es2017"
    ES2018 = "es2018"

    def __str__(self) -> str:
        return self.value


# Ordering weights only; satisfaction never looks at these.
CAPABILITY_WEIGHTS: dict[Capability, int] = {
    Capability.PUSH: 0,
    Capability.SERVICEWORKER: 1,
    Capability.ES2015: 2,
    Capability.ES2016: 3,
    Capability.ES2017: 4,
    Capability.ES2018: 5,
    Capability.MODULES: 5,
}


def capability_weight(name: str) -> int:
    """Return the ordering weight for *name*, ``0`` if it is not a known capability."""
    try:
        return CAPABILITY_WEIGHTS[Capability(name)]
    except ValueError:
        return 0


class BrowserSignature(BaseModel):
    """Browser and OS identity extracted from a user-agent string.

    Versions are kept as the dot-delimited strings the parser produced;
    unknown parts are empty strings.
    """

    model_config = ConfigDict(frozen=True)

    browser_name: str = ""
    browser_version: str = ""
    os_name: str = ""
    os_version: str = ""

    def with_family(self, browser_name: str) -> BrowserSignature:
        return self.model_copy(update={"browser_name": browser_name})


CapabilityPredicate = Callable[[BrowserSignature], bool]


@dataclass(frozen=True)
class Since:
    """Browser version is at least ``minimum``."""

    minimum: Version

    def __call__(self, signature: BrowserSignature) -> bool:
        return version_at_least(self.minimum, parse_version(signature.browser_version))

    def __str__(self) -> str:
        return f">= {format_version(self.minimum)}"


@dataclass(frozen=True)
class OsSince:
    """OS version is at least ``minimum``, whatever the browser version."""

    minimum: Version

    def __call__(self, signature: BrowserSignature) -> bool:
        return version_at_least(self.minimum, parse_version(signature.os_version))

    def __str__(self) -> str:
        return f"OS >= {format_version(self.minimum)}"


@dataclass(frozen=True)
class AllOf:
    rules: tuple[CapabilityPredicate, ...]

    def __call__(self, signature: BrowserSignature) -> bool:
        return all(rule(signature) for rule in self.rules)

    def __str__(self) -> str:
        return " and ".join(str(rule) for rule in self.rules)


@dataclass(frozen=True)
class Constant:
    """Fixed answer, for platform limitations that do not depend on version."""

    value: bool

    def __call__(self, signature: BrowserSignature) -> bool:
        return self.value

    def __str__(self) -> str:
        return "yes" if self.value else "no"


NEVER = Constant(False)
ALWAYS = Constant(True)


def since(major: int, minor: int | None = None, patch: int | None = None) -> Since:
    """Predicate: the browser version is at least ``major[.minor[.patch]]``."""
    return Since(make_minimum(major, minor, patch))


def os_since(major: int, minor: int | None = None, patch: int | None = None) -> OsSince:
    """Predicate: the OS version is at least ``major[.minor[.patch]]``."""
    return OsSince(make_minimum(major, minor, patch))
