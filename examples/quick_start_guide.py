#!/usr/bin/env python3
"""
Quick Start Guide for the Markup Tree Parser.

This example walks through the three levels of the API: the simple parse
functions, a configured parser, and the individual pipeline stages.
"""

import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from markup_tree_parser import (
    MarkupParser, ParseError, ParserConfig,
    build_tree, parse, parse_fragment, tokenize
)


def show(node, depth=0):
    """Print a node and its descendants, one per line."""
    indent = "  " * depth
    if node.is_text:
        print(f"{indent}{node.tag_name}: {node.content!r}")
        return
    attributes = "".join(f' {a.name}="{a.value}"' for a in node.attributes)
    print(f"{indent}<{node.tag_name}{attributes}>")
    for child in node.children:
        show(child, depth + 1)


def quick_start_example():
    """Quick start example showing basic usage."""

    print("🚀 QUICK START - Markup Tree Parser")
    print("=" * 40)

    # Step 1: Parse a document
    print("\n📄 Step 1: Parsing a document")
    print("-" * 30)

    root = parse('<div class="container"><p>Hello, world!</p></div>')
    show(root)

    # Step 2: Errors
    print("\n🔍 Step 2: Malformed input")
    print("-" * 30)

    for markup in ["<a><b></a>", "<a></a><b></b>", "", "text<"]:
        try:
            parse(markup)
        except ParseError as e:
            print(f"❌ {markup!r}: {e.kind}: {e}")

    # Step 3: Configuration
    print("\n⚙️ Step 3: Configuration presets")
    print("-" * 30)

    print(f"Lenient: {parse('<a><b>unclosed').tag_name}")
    try:
        MarkupParser(ParserConfig.strict()).parse("<a><b>unclosed")
    except ParseError as e:
        print(f"Strict:  {e.kind}: {e}")
    last = parse("<a></a><b></b>", ParserConfig.reference())
    print(f"Reference keeps the last root: <{last.tag_name}>")
    print(f"Fragment: {[node.tag_name for node in parse_fragment('<a></a> <b></b>')]}")

    # Step 4: Individual stages
    print("\n🧩 Step 4: Tokens and tree building")
    print("-" * 30)

    tokens = tokenize("<ul><li>one</li><li>two</li></ul>")
    for token in tokens:
        print(f"  {token.type.name:<9} at {token.position.line}:{token.position.column}")
    show(build_tree(tokens))

    print("\n✨ Quick start complete!")


if __name__ == "__main__":
    quick_start_example()
