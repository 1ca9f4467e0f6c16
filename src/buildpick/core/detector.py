"""Capability detection — user-agent string to client capability set."""

from __future__ import annotations

import logging
from typing import NamedTuple

from buildpick.core.capabilities import BrowserSignature, Capability
from buildpick.core.matrix import CapabilityMatrix  # noqa: TC001
from buildpick.core.matrix_data import DEFAULT_MATRIX
from buildpick.core.useragent import DEFAULT_PARSER, UserAgentParser
from buildpick.utils.telemetry import detection_span, get_tracer

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)


class Detection(NamedTuple):
    """The signature a decision was made on, and the resulting capabilities."""

    signature: BrowserSignature
    capabilities: frozenset[Capability]


def effective_signature(signature: BrowserSignature) -> BrowserSignature:
    """Apply family remaps before the matrix lookup.

    Chrome on iOS is a wrapper around the Safari engine, so it is scored
    as Mobile Safari.
    """
    if signature.browser_name == "Chrome" and signature.os_name == "iOS":
        return signature.with_family("Mobile Safari")
    return signature


def capabilities_for(signature: BrowserSignature, matrix: CapabilityMatrix = DEFAULT_MATRIX) -> frozenset[Capability]:
    """Evaluate *matrix* against an already-remapped *signature*."""
    predicates = matrix.predicates_for(signature.browser_name)
    return frozenset(cap for cap, predicate in predicates.items() if predicate(signature))


def detect(
    user_agent: str | None,
    *,
    matrix: CapabilityMatrix = DEFAULT_MATRIX,
    parser: UserAgentParser = DEFAULT_PARSER,
) -> Detection:
    """Parse *user_agent* and evaluate the matrix for it.

    Unknown browsers yield an empty capability set; this never raises for
    any input string.
    """
    with detection_span(_tracer) as span:
        signature = effective_signature(parser.parse(user_agent or ""))
        capabilities = capabilities_for(signature, matrix)
        span.record(signature, capabilities)

    if signature.browser_name not in matrix:
        logger.debug("Unknown browser family %r; no capabilities", signature.browser_name)
    else:
        logger.debug(
            "%s %s on %s %s: %s",
            signature.browser_name,
            signature.browser_version,
            signature.os_name,
            signature.os_version,
            ", ".join(sorted(c.value for c in capabilities)) or "(none)",
        )
    return Detection(signature, capabilities)


def browser_capabilities(
    user_agent: str | None,
    *,
    matrix: CapabilityMatrix = DEFAULT_MATRIX,
    parser: UserAgentParser = DEFAULT_PARSER,
) -> frozenset[Capability]:
    """Return the set of capabilities for a user-agent string."""
    return detect(user_agent, matrix=matrix, parser=parser).capabilities


class CapabilityDetector:
    """A matrix and parser bundled for repeated detection."""

    def __init__(
        self,
        matrix: CapabilityMatrix = DEFAULT_MATRIX,
        parser: UserAgentParser = DEFAULT_PARSER,
    ) -> None:
        self.matrix = matrix
        self.parser = parser

    def detect(self, user_agent: str | None) -> Detection:
        return detect(user_agent, matrix=self.matrix, parser=self.parser)

    def capabilities(self, user_agent: str | None) -> frozenset[Capability]:
        return self.detect(user_agent).capabilities
