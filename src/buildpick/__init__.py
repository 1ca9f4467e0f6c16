"""buildpick — choose the most capable differential build for a user agent."""

from __future__ import annotations

from typing import TYPE_CHECKING

__version__ = "0.1.0"

if TYPE_CHECKING:
    from buildpick.core.detector import browser_capabilities as browser_capabilities
    from buildpick.core.selector import choose_build as choose_build
    from buildpick.serve.redirect import Redirector as Redirector

_LAZY_EXPORTS = {
    "browser_capabilities": "buildpick.core.detector",
    "choose_build": "buildpick.core.selector",
    "Redirector": "buildpick.serve.redirect",
}


def __getattr__(name: str) -> object:
    module_path = _LAZY_EXPORTS.get(name)
    if module_path is not None:
        import importlib

        mod = importlib.import_module(module_path)
        return getattr(mod, name)
    raise AttributeError(f"module 'buildpick' has no attribute {name!r}")
