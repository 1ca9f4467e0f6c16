"""Static capability matrix data.

Thresholds are data, not behaviour: they must stay as they are so that
manifests generated against them keep selecting the same builds.  Use a
matrix override file (see :mod:`buildpick.core.matrix`) to change them.
"""

from __future__ import annotations

from buildpick.core.capabilities import (
    NEVER,
    AllOf,
    Capability,
    CapabilityPredicate,
    os_since,
    since,
)
from buildpick.core.matrix import CapabilityMatrix

C = Capability

# ---------------------------------------------------------------------------
# Per-family profiles
# ---------------------------------------------------------------------------

CHROME: dict[Capability, CapabilityPredicate] = {
    C.ES2015: since(49),
    C.ES2016: since(58),
    C.ES2017: since(58),
    C.ES2018: since(64),
    C.PUSH: since(41),
    C.SERVICEWORKER: since(45),
    C.MODULES: since(64),
}

OPERA: dict[Capability, CapabilityPredicate] = {
    C.ES2015: since(36),
    C.ES2016: since(45),
    C.ES2017: since(45),
    C.ES2018: since(51),
    C.PUSH: since(28),
    C.SERVICEWORKER: since(32),
    C.MODULES: since(48),
}

VIVALDI: dict[Capability, CapabilityPredicate] = {
    C.ES2015: since(1),
    C.ES2016: since(1, 14),
    C.ES2017: since(1, 14),
    C.ES2018: since(1, 14),
    C.PUSH: since(1),
    C.SERVICEWORKER: since(1),
    C.MODULES: since(1, 14),
}

# Safari says it will freeze its UA string, yet recent releases still change
# the OS part.  Check real user agents rather than release notes.
MOBILE_SAFARI: dict[Capability, CapabilityPredicate] = {
    C.ES2015: since(10),
    C.ES2016: since(10, 3),
    C.ES2017: since(10, 3),
    C.ES2018: NEVER,
    C.PUSH: os_since(9, 2),
    C.SERVICEWORKER: since(11, 3),
    C.MODULES: os_since(11, 3),
}

SAFARI: dict[Capability, CapabilityPredicate] = {
    C.ES2015: since(10),
    C.ES2016: since(10, 1),
    C.ES2017: since(10, 1),
    C.ES2018: NEVER,
    # HTTP/2 on desktop Safari also requires macOS 10.11.
    C.PUSH: AllOf((since(9), os_since(10, 11))),
    C.SERVICEWORKER: since(11, 1),
    C.MODULES: since(11, 1),
}

EDGE: dict[Capability, CapabilityPredicate] = {
    # Edge before 15.15063 has a JIT bug with ES6 constructors
    # (ChakraCore#1496), fixed after its es2016/es2017 support landed.
    C.ES2015: since(15, 15063),
    C.ES2016: since(15, 15063),
    C.ES2017: since(15, 15063),
    C.ES2018: NEVER,
    C.PUSH: since(12),
    C.SERVICEWORKER: NEVER,
    C.MODULES: NEVER,
}

FIREFOX: dict[Capability, CapabilityPredicate] = {
    C.ES2015: since(51),
    C.ES2016: since(52),
    C.ES2017: since(52),
    C.ES2018: since(58),
    # https://bugzilla.mozilla.org/show_bug.cgi?id=1409570
    C.PUSH: NEVER,
    C.SERVICEWORKER: since(44),
    C.MODULES: NEVER,
}

KNOWN_FAMILIES: dict[str, dict[Capability, CapabilityPredicate]] = {
    "Chrome": CHROME,
    "Chromium": CHROME,
    "Chrome Headless": CHROME,
    "Opera": OPERA,
    "Vivaldi": VIVALDI,
    "Mobile Safari": MOBILE_SAFARI,
    "Safari": SAFARI,
    "Edge": EDGE,
    "Firefox": FIREFOX,
}

# Names other user-agent parsers report for the same engines.
KNOWN_ALIASES: dict[str, str] = {
    "OPR": "Opera",
    "HeadlessChrome": "Chrome Headless",
}


def build_default_matrix() -> CapabilityMatrix:
    """Return a ``CapabilityMatrix`` loaded with the known families."""
    return CapabilityMatrix(KNOWN_FAMILIES, KNOWN_ALIASES)


DEFAULT_MATRIX = build_default_matrix()
