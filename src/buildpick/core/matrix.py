"""Capability matrix — per-family capability predicates.

The matrix is plain data: a read-only mapping from browser family to a
mapping of :class:`Capability` to predicate.  It can be replaced or layered
with a YAML/JSON override file, so updating browser thresholds never
touches the selection code.

Override file format::

    families:
      Edge:
        serviceworker: "17"           # browser version >= 17
        modules: {browser: "16"}
      Samsung Internet:               # new family
        es2015: "5"
        push: {browser: "4", os: "7"} # both must hold
        modules: false
    aliases:
      SamsungBrowser: Samsung Internet
"""

from __future__ import annotations

import json
import re
from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Any

import yaml

from buildpick.core.capabilities import (
    AllOf,
    Capability,
    CapabilityPredicate,
    Constant,
    OsSince,
    Since,
)
from buildpick.core.versions import parse_version
from buildpick.errors import MatrixConfigError

FamilyPredicates = Mapping[Capability, CapabilityPredicate]

_EMPTY: FamilyPredicates = MappingProxyType({})

_VERSION_RE = re.compile(r"^[0-9]+(\.[0-9]+)*$")


class CapabilityMatrix:
    """Read-only mapping of browser family to capability predicates.

    *aliases* map alternative family names (as reported by other user-agent
    parsers) onto a declared family.
    """

    def __init__(
        self,
        families: Mapping[str, Mapping[Capability, CapabilityPredicate]],
        aliases: Mapping[str, str] | None = None,
    ) -> None:
        self._families: Mapping[str, FamilyPredicates] = MappingProxyType(
            {name: MappingProxyType(dict(preds)) for name, preds in families.items()}
        )
        aliases = dict(aliases or {})
        for alias, target in aliases.items():
            if target not in self._families:
                raise MatrixConfigError(f"alias {alias!r} points to unknown family {target!r}")
        self._aliases: Mapping[str, str] = MappingProxyType(aliases)

    @property
    def families(self) -> tuple[str, ...]:
        return tuple(self._families)

    @property
    def aliases(self) -> Mapping[str, str]:
        return self._aliases

    def __contains__(self, family: object) -> bool:
        return family in self._families or family in self._aliases

    def __len__(self) -> int:
        return len(self._families)

    def predicates_for(self, family: str | None) -> FamilyPredicates:
        """Return the predicates for *family*; empty for unknown or empty names."""
        if not family:
            return _EMPTY
        name = self._aliases.get(family, family)
        return self._families.get(name, _EMPTY)

    def with_overrides(
        self,
        families: Mapping[str, Mapping[Capability, CapabilityPredicate]] | None = None,
        aliases: Mapping[str, str] | None = None,
    ) -> CapabilityMatrix:
        """Return a new matrix with *families* layered over this one.

        Capabilities given for an existing family replace that family's
        entries one by one; new families are added.  ``self`` is unchanged.
        """
        merged: dict[str, dict[Capability, CapabilityPredicate]] = {
            name: dict(preds) for name, preds in self._families.items()
        }
        for name, preds in (families or {}).items():
            merged.setdefault(name, {}).update(preds)
        return CapabilityMatrix(merged, {**self._aliases, **(aliases or {})})


def _config_version(value: Any, where: str) -> tuple[int, ...]:
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        # Floats are rejected: 10.10 would silently become 10.1.
        raise MatrixConfigError(f"{where}: version must be a quoted string or an integer, got {value!r}")
    text = str(value).strip()
    if not _VERSION_RE.match(text):
        raise MatrixConfigError(f"{where}: malformed version {text!r}")
    return parse_version(text)


def rule_from_config(value: Any, where: str = "rule") -> CapabilityPredicate:
    """Build a predicate from its configuration form.

    ``true``/``false`` → constant; a version → browser version at least;
    ``{browser: ..., os: ...}`` → every given bound must hold.
    """
    if isinstance(value, bool):
        return Constant(value)
    if isinstance(value, Mapping):
        unknown = set(value) - {"browser", "os"}
        if unknown:
            raise MatrixConfigError(f"{where}: unknown keys {sorted(unknown)}")
        rules: list[CapabilityPredicate] = []
        if "browser" in value:
            rules.append(Since(_config_version(value["browser"], where)))
        if "os" in value:
            rules.append(OsSince(_config_version(value["os"], where)))
        if not rules:
            raise MatrixConfigError(f"{where}: expected 'browser' and/or 'os'")
        return rules[0] if len(rules) == 1 else AllOf(tuple(rules))
    return Since(_config_version(value, where))


def _family_from_config(family: str, raw: Any) -> dict[Capability, CapabilityPredicate]:
    if not isinstance(raw, Mapping):
        raise MatrixConfigError(f"family {family!r} must be a mapping of capability to rule")
    predicates: dict[Capability, CapabilityPredicate] = {}
    for cap_name, rule in raw.items():
        try:
            capability = Capability(cap_name)
        except ValueError:
            raise MatrixConfigError(f"family {family!r}: unknown capability {cap_name!r}") from None
        predicates[capability] = rule_from_config(rule, f"{family}.{cap_name}")
    return predicates


def matrix_from_config(data: Any, *, base: CapabilityMatrix | None = None) -> CapabilityMatrix:
    """Build a matrix from parsed override data, layered over *base* if given."""
    if not isinstance(data, Mapping):
        raise MatrixConfigError("top level must be a mapping")
    unknown = set(data) - {"families", "aliases"}
    if unknown:
        raise MatrixConfigError(f"unknown top-level keys {sorted(unknown)}")

    raw_families = data.get("families") or {}
    raw_aliases = data.get("aliases") or {}
    if not isinstance(raw_families, Mapping) or not isinstance(raw_aliases, Mapping):
        raise MatrixConfigError("'families' and 'aliases' must be mappings")

    families = {str(name): _family_from_config(str(name), raw) for name, raw in raw_families.items()}
    aliases = {str(alias): str(target) for alias, target in raw_aliases.items()}

    if base is None:
        return CapabilityMatrix(families, aliases)
    return base.with_overrides(families, aliases)


def load_matrix(path: Path, *, base: CapabilityMatrix | None = None) -> CapabilityMatrix:
    """Read a matrix override file (``.json``, ``.yaml`` or ``.yml``)."""
    try:
        raw = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise MatrixConfigError(f"cannot read {path}: {exc}") from exc

    if path.suffix == ".json":
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise MatrixConfigError(f"JSON parse error in {path}: {exc}") from exc
    else:
        try:
            data = yaml.safe_load(raw)
        except yaml.YAMLError as exc:
            raise MatrixConfigError(f"YAML parse error in {path}: {exc}") from exc

    return matrix_from_config(data, base=base)
