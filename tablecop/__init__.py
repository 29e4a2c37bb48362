"""Tablecop: condensation and alignment engine for Ruby source."""

from ._version import __version__

__all__ = ["__version__"]
