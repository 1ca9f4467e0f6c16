"""Selection core: version comparison, capability detection and build choice."""

from buildpick.core.capabilities import (
    CAPABILITY_WEIGHTS,
    BrowserSignature,
    Capability,
    CapabilityPredicate,
    os_since,
    since,
)
from buildpick.core.detector import CapabilityDetector, Detection, browser_capabilities, detect
from buildpick.core.matrix import CapabilityMatrix, load_matrix
from buildpick.core.matrix_data import DEFAULT_MATRIX, build_default_matrix
from buildpick.core.models import BuildDescriptor, BuildSelection, Manifest
from buildpick.core.selector import choose_build, choose_build_or_raise, rank_builds, score_build
from buildpick.core.useragent import RegexUserAgentParser, UserAgentParser, parse_user_agent
from buildpick.core.versions import parse_version, version_at_least

__all__ = [
    "CAPABILITY_WEIGHTS",
    "DEFAULT_MATRIX",
    "BrowserSignature",
    "BuildDescriptor",
    "BuildSelection",
    "Capability",
    "CapabilityDetector",
    "CapabilityMatrix",
    "CapabilityPredicate",
    "Detection",
    "Manifest",
    "RegexUserAgentParser",
    "UserAgentParser",
    "browser_capabilities",
    "build_default_matrix",
    "choose_build",
    "choose_build_or_raise",
    "detect",
    "load_matrix",
    "os_since",
    "parse_user_agent",
    "parse_version",
    "rank_builds",
    "score_build",
    "since",
    "version_at_least",
]
