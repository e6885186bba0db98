"""Render browser compatibility data as HTML tables."""

from ._version import __version__

__all__ = ["__version__"]
