#!/usr/bin/env python3
"""
Markup Parser Tester

Usage:
    python main_tester.py                     # Use built-in example markup
    python main_tester.py <path/to/file.html> # Process markup file
"""

import markup_tree_parser as mtp
from markup_tree_parser.tokenization import TextToken
import sys
from pathlib import Path

# Choose input source
if len(sys.argv) > 1:
    # File path provided as argument
    file_path = sys.argv[1]
    if not Path(file_path).exists():
        print(f"Error: File '{file_path}' not found")
        sys.exit(1)

    print(f"Processing file: {file_path}")
    with open(file_path, 'r', encoding='utf-8') as f:
        markup = f.read()
else:
    print("Using example markup content")
    markup = '<div class="container"><p>Hello, world!</p></div>'


def print_node(node: mtp.Node, depth: int = 0) -> None:
    indent = "  " * depth
    if node.is_text:
        print(f"{indent}#text {node.content!r}")
        return
    attributes = " ".join(f'{a.name}="{a.value}"' for a in node.attributes)
    print(f"{indent}<{node.tag_name}{' ' + attributes if attributes else ''}>")
    for child in node.children:
        print_node(child, depth + 1)


try:
    root = mtp.parse(markup)
except mtp.ParseError as e:
    print(f"Error parsing markup: {e.kind}: {e}")
    sys.exit(1)

print("\nParsed tree:")
print_node(root)

print("\nToken Analysis:")
for token in mtp.tokenize(markup)[:10]:  # Show first 10 tokens
    detail = token.content if isinstance(token, TextToken) else token.tag_name
    print(f"Token: {token.type.name:10} | {token.position.line}:{token.position.column:<4} | {detail!r}")
