"""Command-line interface module for slim-xml.

Provides reformatting, tag lookup, statistics and parse checking for XML files.
"""

from .main import main

__all__ = ["main"]
