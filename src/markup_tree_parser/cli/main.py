"""Main CLI entry point for the markup-tree command-line tool.

Parses markup documents given as files or literal strings and prints the
resulting trees, token streams or profiling reports.
"""

import argparse
import json
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

from markup_tree_parser import __version__
from markup_tree_parser.api import MarkupParser
from markup_tree_parser.shared.config import PRESETS, ConfigError, ParserConfig
from markup_tree_parser.shared.errors import ParseError
from markup_tree_parser.shared.logging import configure_logging, get_logger
from markup_tree_parser.tokenization import OpenTagToken, TextToken, Token
from markup_tree_parser.tools import PerformanceProfiler

INDENT = "  "


@dataclass
class InputDocument:
    """A markup document named by its source."""

    source: str
    text: Optional[str] = None
    read_error: Optional[str] = None


def load_config(preset: str, config_path: Optional[Path]) -> ParserConfig:
    """Build the parser configuration from a preset or a JSON file.

    Raises:
        ConfigError: If the file cannot be read or holds an invalid config
    """
    if config_path is None:
        return PRESETS[preset]()
    try:
        json_text = config_path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Could not read config file {config_path}: {e}") from e
    return ParserConfig.from_json(json_text)


def collect_inputs(args: argparse.Namespace) -> List[InputDocument]:
    """Gather documents from ``--text`` and path arguments, in that order."""
    documents = [
        InputDocument(source=f"<text:{index}>", text=text)
        for index, text in enumerate(args.text or [], start=1)
    ]
    for path in args.paths:
        try:
            documents.append(InputDocument(str(path), path.read_text(encoding="utf-8")))
        except OSError as e:
            documents.append(InputDocument(str(path), read_error=str(e)))
    return documents


def process_document(
    parser: MarkupParser, document: InputDocument, fragment: bool = False
) -> Dict[str, Any]:
    """Parse one document into a JSON-ready result entry."""
    if document.text is None:
        return {
            "source": document.source,
            "success": False,
            "error": {"kind": "ReadError", "message": document.read_error},
        }
    try:
        if fragment:
            tree: Any = [node.to_dict() for node in parser.parse_fragment(document.text)]
        else:
            tree = parser.parse(document.text).to_dict()
    except ParseError as e:
        return {
            "source": document.source,
            "success": False,
            "error": {"kind": e.kind, "message": str(e)},
        }
    return {"source": document.source, "success": True, "tree": tree}


def render_tree(node: Dict[str, Any], depth: int = 0) -> List[str]:
    """Render a node dictionary as indented lines."""
    prefix = INDENT * depth
    if node["type"] == "text":
        return [f"{prefix}{json.dumps(node['content'])}"]

    attributes = "".join(
        f" {name}={json.dumps(value)}" for name, value in node["attributes"]
    )
    lines = [f"{prefix}<{node['tag_name']}{attributes}>"]
    for child in node["children"]:
        lines.extend(render_tree(child, depth + 1))
    return lines


def format_results(results: List[Dict[str, Any]], format_type: str) -> str:
    """Format parse results for output."""
    if format_type == "json":
        return json.dumps(results, indent=2)

    lines = []
    for result in results:
        status = "✓" if result["success"] else "✗"
        lines.append(f"{status} {result['source']}")
        if not result["success"]:
            error = result["error"]
            lines.append(f"{INDENT}{error['kind']}: {error['message']}")
            continue
        tree = result["tree"]
        for node in tree if isinstance(tree, list) else [tree]:
            lines.extend(render_tree(node, 1))
    return "\n".join(lines)


def format_tokens(tokens: List[Token], format_type: str) -> str:
    """Format a token stream for output."""
    entries = []
    for token in tokens:
        entry: Dict[str, Any] = {
            "type": token.type.name,
            "line": token.position.line,
            "column": token.position.column,
        }
        if isinstance(token, TextToken):
            entry["content"] = token.content
        else:
            entry["tag_name"] = token.tag_name
        if isinstance(token, OpenTagToken):
            entry["attributes"] = [list(attribute.to_pair()) for attribute in token.attributes]
        entries.append(entry)

    if format_type == "json":
        return json.dumps(entries, indent=2)

    lines = []
    for entry in entries:
        location = f"{entry['line']}:{entry['column']}"
        if "content" in entry:
            detail = json.dumps(entry["content"])
        else:
            detail = entry["tag_name"] + "".join(
                f" {name}={json.dumps(value)}" for name, value in entry.get("attributes", [])
            )
        lines.append(f"{location:>8} {entry['type']:<9} {detail}")
    return "\n".join(lines)


def write_output(output: str, output_path: Optional[Path]) -> int:
    """Print ``output`` or write it to ``output_path``."""
    if output_path is None:
        print(output)
        return 0
    try:
        output_path.write_text(output + "\n", encoding="utf-8")
    except OSError as e:
        print(f"Error writing output: {e}", file=sys.stderr)
        return 1
    print(f"Results written to {output_path}", file=sys.stderr)
    return 0


def _add_common_arguments(subparser: argparse.ArgumentParser) -> None:
    subparser.add_argument(
        "paths",
        nargs="*",
        type=Path,
        help="Markup files to read"
    )
    subparser.add_argument(
        "--text", "-t",
        action="append",
        help="Literal markup to process (repeatable)"
    )
    subparser.add_argument(
        "--preset",
        choices=sorted(PRESETS),
        default="lenient",
        help="Parser configuration preset (default: lenient)"
    )
    subparser.add_argument(
        "--config", "-c",
        type=Path,
        help="JSON configuration file, takes precedence over --preset"
    )


def create_argument_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog="markup-tree",
        description="Parse HTML-like markup into element trees"
    )

    parser.add_argument("--version", action="version", version=__version__)
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output"
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Quiet output"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Parse command
    parse_parser = subparsers.add_parser("parse", help="Parse documents into trees")
    _add_common_arguments(parse_parser)
    parse_parser.add_argument(
        "--format", "-f",
        choices=["json", "text"],
        default="text",
        help="Output format (default: text)"
    )
    parse_parser.add_argument(
        "--fragment",
        action="store_true",
        help="Output every top-level node instead of a single root"
    )
    parse_parser.add_argument(
        "--output", "-o",
        type=Path,
        help="Output file (default: stdout)"
    )

    # Tokens command
    tokens_parser = subparsers.add_parser("tokens", help="Show the token stream")
    _add_common_arguments(tokens_parser)
    tokens_parser.add_argument(
        "--format", "-f",
        choices=["json", "text"],
        default="text",
        help="Output format (default: text)"
    )

    # Profile command
    profile_parser = subparsers.add_parser("profile", help="Profile parsing stages")
    _add_common_arguments(profile_parser)
    profile_parser.add_argument(
        "--iterations", "-n",
        type=int,
        default=10,
        help="Parses per document (default: 10)"
    )

    return parser


def cmd_parse(args: argparse.Namespace, config: ParserConfig) -> int:
    """Handle parse command."""
    parser = MarkupParser(config)
    results = [
        process_document(parser, document, args.fragment)
        for document in collect_inputs(args)
    ]

    status = write_output(format_results(results, args.format), args.output)
    if status:
        return status
    return 0 if all(result["success"] for result in results) else 1


def cmd_tokens(args: argparse.Namespace, config: ParserConfig) -> int:
    """Handle tokens command."""
    parser = MarkupParser(config)
    exit_code = 0

    for document in collect_inputs(args):
        print(f"# {document.source}")
        if document.text is None:
            print(f"ReadError: {document.read_error}", file=sys.stderr)
            exit_code = 1
            continue
        try:
            tokens = parser.tokenize(document.text)
        except ParseError as e:
            print(f"{e.kind}: {e}", file=sys.stderr)
            exit_code = 1
            continue
        print(format_tokens(tokens, args.format))

    return exit_code


def cmd_profile(args: argparse.Namespace, config: ParserConfig) -> int:
    """Handle profile command."""
    if args.iterations <= 0:
        print("--iterations must be > 0", file=sys.stderr)
        return 2

    profiler = PerformanceProfiler(config)
    exit_code = 0

    for document in collect_inputs(args):
        if document.text is None:
            print(f"{document.source}: ReadError: {document.read_error}", file=sys.stderr)
            exit_code = 1
            continue
        try:
            profiler.profile_parse(document.text, args.iterations)
        except ParseError as e:
            print(f"{document.source}: {e.kind}: {e}", file=sys.stderr)
            exit_code = 1

    print(profiler.generate_report().to_json())
    return exit_code


COMMANDS = {
    "parse": cmd_parse,
    "tokens": cmd_tokens,
    "profile": cmd_profile,
}


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    if not args.paths and not args.text:
        print("No input given: pass file paths or --text", file=sys.stderr)
        return 2

    try:
        config = load_config(args.preset, args.config)
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    if args.verbose:
        configure_logging("DEBUG")
    elif args.quiet:
        configure_logging("ERROR")
    else:
        configure_logging(config.global_.logging_level)

    logger = get_logger(__name__, None, "cli")
    logger.debug("Running command", extra={"command": args.command})

    try:
        return COMMANDS[args.command](args, config)
    except KeyboardInterrupt:
        print("\nOperation interrupted by user", file=sys.stderr)
        return 130  # Standard exit code for SIGINT


if __name__ == "__main__":
    sys.exit(main())
