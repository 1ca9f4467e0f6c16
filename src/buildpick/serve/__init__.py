"""Redirect layer built on the selection core."""

from buildpick.serve.redirect import Redirector, build_redirect_url, redirect_path

__all__ = ["Redirector", "build_redirect_url", "redirect_path"]
