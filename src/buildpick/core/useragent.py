"""User-agent parsing — browser family, browser version, OS name, OS version.

The detector only needs the narrow :class:`UserAgentParser` interface, so
any parser that reports the matrix's family names (``Chrome``, ``Mobile
Safari``, ``Firefox``, ...) and dot-delimited versions can be swapped in.
"""

from __future__ import annotations

import re
from functools import lru_cache
from typing import Protocol, runtime_checkable

from buildpick.core.capabilities import BrowserSignature

_V = r"(\d+(?:\.\d+)*)"

# First match wins; wrappers that also advertise Chrome/Safari come first.
_BROWSER_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("Edge", re.compile(rf"\b(?:Edge|Edg|EdgA|EdgiOS)/{_V}")),
    ("Opera", re.compile(rf"\bOPR/{_V}")),
    ("Opera", re.compile(rf"\bOpera\b.*\bVersion/{_V}")),
    ("Opera", re.compile(rf"\bOpera[/ ]{_V}")),
    ("Vivaldi", re.compile(rf"\bVivaldi/{_V}")),
    ("Samsung Internet", re.compile(rf"\bSamsungBrowser/{_V}")),
    ("Chrome Headless", re.compile(rf"\bHeadlessChrome/{_V}")),
    ("Chromium", re.compile(rf"\bChromium/{_V}")),
    ("Chrome", re.compile(rf"\bCriOS/{_V}")),
    ("Chrome", re.compile(rf"\bChrome/{_V}")),
    ("Firefox", re.compile(rf"\b(?:FxiOS|Firefox)/{_V}")),
    ("IE", re.compile(rf"\bMSIE {_V}")),
    ("IE", re.compile(rf"\bTrident/.*\brv:{_V}")),
)

_SAFARI_VERSION = re.compile(rf"\bVersion/{_V}.*\bSafari/")
_MOBILE = re.compile(r"\bMobile\b")

_IOS = re.compile(r"\b(?:iPhone|CPU)(?: iPhone)? OS (\d+(?:_\d+)*)")
_MAC = re.compile(r"\bMac OS X(?: (\d+(?:[_.]\d+)*))?")
_WINDOWS = re.compile(r"\bWindows NT (\d+\.\d+)")
_ANDROID = re.compile(rf"\bAndroid {_V}")
_CHROME_OS = re.compile(rf"\bCrOS \S+ {_V}")
_LINUX = re.compile(r"\bLinux\b")

_WINDOWS_VERSIONS: dict[str, str] = {
    "10.0": "10",
    "6.3": "8.1",
    "6.2": "8",
    "6.1": "7",
    "6.0": "Vista",
    "5.2": "XP",
    "5.1": "XP",
}


@runtime_checkable
class UserAgentParser(Protocol):
    """Anything that turns a user-agent string into a :class:`BrowserSignature`."""

    def parse(self, user_agent: str) -> BrowserSignature: ...


def _dotted(version: str | None) -> str:
    return (version or "").replace("_", ".")


def _parse_browser(ua: str) -> tuple[str, str]:
    for name, pattern in _BROWSER_PATTERNS:
        match = pattern.search(ua)
        if match:
            return name, match.group(1)
    match = _SAFARI_VERSION.search(ua)
    if match:
        return ("Mobile Safari" if _MOBILE.search(ua) else "Safari"), match.group(1)
    return "", ""


def _parse_os(ua: str) -> tuple[str, str]:
    if match := _IOS.search(ua):
        return "iOS", _dotted(match.group(1))
    if match := _MAC.search(ua):
        return "Mac OS", _dotted(match.group(1))
    if match := _WINDOWS.search(ua):
        nt = match.group(1)
        return "Windows", _WINDOWS_VERSIONS.get(nt, nt)
    if match := _ANDROID.search(ua):
        return "Android", match.group(1)
    if match := _CHROME_OS.search(ua):
        return "Chromium OS", match.group(1)
    if _LINUX.search(ua):
        return "Linux", ""
    return "", ""


@lru_cache(maxsize=512)
def parse_user_agent(user_agent: str) -> BrowserSignature:
    """Parse *user_agent*; anything unrecognised is left as an empty string.

    >>> parse_user_agent('Mozilla/5.0 (X11; Linux x86_64; rv:58.0) Gecko/20100101 Firefox/58.0')
    BrowserSignature(browser_name='Firefox', browser_version='58.0', os_name='Linux', os_version='')
    """
    browser_name, browser_version = _parse_browser(user_agent)
    os_name, os_version = _parse_os(user_agent)
    return BrowserSignature(
        browser_name=browser_name,
        browser_version=browser_version,
        os_name=os_name,
        os_version=os_version,
    )


class RegexUserAgentParser:
    """Default parser backed by :func:`parse_user_agent`."""

    def parse(self, user_agent: str) -> BrowserSignature:
        return parse_user_agent(user_agent or "")


DEFAULT_PARSER = RegexUserAgentParser()
