"""Tree building stage for markup tree parsing.

Key Components:
    TreeBuilder: Builds nested elements from a token sequence
    build_tree: Functional shortcut around TreeBuilder
"""

from .builder import TreeBuilder, build_tree

__all__ = [
    "TreeBuilder",
    "build_tree",
]
