"""Command-line interface module for Markup Tree Parser.

This module provides the ``markup-tree`` tool for printing parsed trees,
token streams and profiling reports.
"""

from .main import main

__all__ = ["main"]
