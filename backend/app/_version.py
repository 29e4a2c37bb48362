"""
Version import for the tablecop backend.

Single source of truth: tablecop/_version.py
"""

from tablecop._version import __version__
