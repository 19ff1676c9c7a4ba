"""Verify that a project's version was bumped since the previous commit."""

from semver_bump_check.version import __version__

__all__ = ['__version__']
