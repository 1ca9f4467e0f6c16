"""Dotted version parsing and "at least" comparison.

Versions are tuples of ints.  Parsing never raises: a component that does
not start with digits becomes ``-1`` so it sorts below any real release.
"""

from __future__ import annotations

import re

Version = tuple[int, ...]

UNPARSEABLE = -1

# Mirrors parseInt(): optional whitespace and sign, then leading digits.
_LEADING_INT = re.compile(r"\s*([+-]?[0-9]+)")


def _parse_part(part: str) -> int:
    match = _LEADING_INT.match(part)
    if match is None:
        return UNPARSEABLE
    return int(match.group(1))


def parse_version(text: str | None) -> Version:
    """Parse ``"x.y.z"`` of any length into integer parts.

    ``None`` yields an empty version; ``""`` yields ``(-1,)``.
    """
    if text is None:
        return ()
    return tuple(_parse_part(part) for part in text.split("."))


def version_at_least(minimum: Version, actual: Version) -> bool:
    """Return whether *actual* is at least as high as *minimum*.

    Components missing from *actual* count as ``0``.
    """
    for i, required in enumerate(minimum):
        value = actual[i] if i < len(actual) else 0
        if value > required:
            return True
        if value < required:
            return False
    return True


def make_minimum(major: int | None, minor: int | None = None, patch: int | None = None) -> Version:
    """Build a minimum version from the leading present components.

    Absent trailing components are omitted rather than zero-filled, and a
    missing component ends the version (``(10, None, 3)`` gives ``(10,)``).
    """
    parts: list[int] = []
    for component in (major, minor, patch):
        if component is None:
            break
        parts.append(component)
    return tuple(parts)


def format_version(version: Version) -> str:
    return ".".join(str(part) for part in version)
