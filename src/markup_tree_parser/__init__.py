"""Markup Tree Parser.

A strict markup parser turning an HTML-like document into a tree of
elements and text nodes: character stream, then token stream, then tree.

Progressive API Disclosure:
- Level 1: Simple functions - parse(), parse_fragment(), tokenize()
- Level 2: Configured parser - MarkupParser class with ParserConfig
- Level 3: Individual stages - MarkupTokenizer and TreeBuilder
"""

__version__ = "0.1.0"
__author__ = "Markup Tree Parser Team"

from .api import MarkupParser, parse, parse_fragment
from .nodes import Attribute, Element, Node, Text
from .shared.config import ParserConfig, RootPolicy
from .shared.errors import (
    EmptyDocumentError,
    MismatchedTagError,
    MultipleRootsError,
    NestingTooDeepError,
    ParseError,
    StrayCharacterError,
    UnclosedTagError,
    UnexpectedEndOfInputError,
    UnexpectedTokenError,
)
from .tokenization import MarkupTokenizer, iter_tokens, tokenize
from .tree import TreeBuilder, build_tree

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Level 1: Simple parsing functions
    "parse",
    "parse_fragment",
    "tokenize",
    "iter_tokens",
    "build_tree",

    # Level 2 and 3: Configured parser and stages
    "MarkupParser",
    "MarkupTokenizer",
    "TreeBuilder",
    "ParserConfig",
    "RootPolicy",

    # Tree nodes
    "Attribute",
    "Element",
    "Node",
    "Text",

    # Errors
    "ParseError",
    "EmptyDocumentError",
    "MismatchedTagError",
    "MultipleRootsError",
    "NestingTooDeepError",
    "StrayCharacterError",
    "UnclosedTagError",
    "UnexpectedEndOfInputError",
    "UnexpectedTokenError",
]
