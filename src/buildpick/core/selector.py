"""Build selection — pick the most demanding build a client can serve.

Builds are ranked by the summed weight of the capabilities they require,
so "more modern" builds are tried first.  Ranking works on transient
``(build, score)`` pairs; the caller's builds are never mutated or
reordered.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import NamedTuple

from buildpick.core.capabilities import capability_weight
from buildpick.core.models import BuildDescriptor, BuildSelection
from buildpick.errors import NoMatchingBuildError
from buildpick.utils.telemetry import get_tracer, selection_span

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)


class ScoredBuild(NamedTuple):
    build: BuildDescriptor
    score: int


def score_build(build: BuildDescriptor) -> int:
    """Sum of weights of the build's recognised capability requirements."""
    return sum(capability_weight(name) for name in build.browser_capabilities)


def rank_builds(builds: Iterable[BuildDescriptor]) -> list[ScoredBuild]:
    """Order builds by score, highest first.

    ``sorted`` is stable, so equally scored builds keep their manifest
    order and the first declared one wins.
    """
    scored = [ScoredBuild(build, score_build(build)) for build in builds]
    return sorted(scored, key=lambda item: item.score, reverse=True)


def can_serve(client: Iterable[str], requirements: Iterable[str]) -> bool:
    """Return whether every requirement is among the client capabilities.

    Requirements that are not known capability names only pass when the
    client reports that exact string.
    """
    available = set(client)
    return all(req in available for req in requirements)


def choose_build(
    builds: Sequence[BuildDescriptor],
    client: Iterable[str],
) -> BuildSelection | None:
    """Choose the first ranked build the client can serve.

    A build with no requirements always qualifies.  Returns ``None`` when
    nothing qualifies; no default is guessed.
    """
    client_caps = frozenset(client)
    with selection_span(_tracer, len(builds)) as span:
        for build, score in rank_builds(builds):
            if not build.browser_capabilities or can_serve(client_caps, build.browser_capabilities):
                span.chosen(build.name)
                logger.debug("Selected build %r (score %d)", build.name, score)
                return BuildSelection.from_build(build)

    logger.warning("No servable build among %d candidate(s)", len(builds))
    return None


def choose_build_or_raise(
    builds: Sequence[BuildDescriptor],
    client: Iterable[str],
) -> BuildSelection:
    """Like :func:`choose_build` but raise :class:`NoMatchingBuildError` on no match."""
    selection = choose_build(builds, client)
    if selection is None:
        raise NoMatchingBuildError(len(builds))
    return selection
