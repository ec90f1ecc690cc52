"""Public parsing API: module-level functions and the configured parser class."""

from .parser import MarkupParser, parse, parse_fragment

__all__ = [
    "MarkupParser",
    "parse",
    "parse_fragment",
]
