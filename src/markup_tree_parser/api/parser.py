"""Parse facade chaining the tokenizer and tree builder.

Module-level functions cover the common case; :class:`MarkupParser` keeps a
configuration and correlation ID for repeated use.
"""

from typing import List, Optional

from markup_tree_parser.nodes import Node
from markup_tree_parser.shared import (
    EmptyDocumentError,
    MultipleRootsError,
    ParserConfig,
    RootPolicy,
    get_logger,
)
from markup_tree_parser.tokenization import MarkupTokenizer, Token
from markup_tree_parser.tree import TreeBuilder

PREVIEW_LENGTH = 100  # Max length for content preview in logs


class MarkupParser:
    """Configured markup parser.

    Examples:
        >>> parser = MarkupParser()
        >>> root = parser.parse('<div class="container"><p>Hi</p></div>')
        >>> root.tag_name
        'div'
        >>> root.children[0].children[0].content
        'Hi'

        Every top-level node:
        >>> [node.tag_name for node in parser.parse_fragment('<a></a><b></b>')]
        ['a', 'b']
    """

    def __init__(
        self,
        config: Optional[ParserConfig] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        self.config = config or ParserConfig()
        self.correlation_id = correlation_id
        self.logger = get_logger(__name__, correlation_id, "markup_parser")
        self.tokenizer = MarkupTokenizer(self.config.tokenizer, correlation_id)
        self.builder = TreeBuilder(self.config.tree, correlation_id)

    def tokenize(self, text: str) -> List[Token]:
        """Run only the tokenizer stage."""
        return self.tokenizer.tokenize(text)

    def parse_fragment(self, text: str) -> List[Node]:
        """Parse ``text`` and return every top-level node in document order.

        Whitespace-only text between top-level elements is kept. Empty input
        yields an empty list.
        """
        self.logger.debug(
            "Starting parse",
            extra={
                "content_length": len(text),
                "preview": (
                    text[:PREVIEW_LENGTH] + "..."
                    if len(text) > PREVIEW_LENGTH else text
                )
            }
        )
        tokens = self.tokenizer.tokenize(text)
        root = self.builder.build(tokens)
        return root.children

    def parse(self, text: str) -> Node:
        """Parse ``text`` and return its root node.

        Which top-level node counts as the root is decided by the configured
        root policy.

        Raises:
            EmptyDocumentError: If no top-level node was produced
            MultipleRootsError: Under the single-root policy, if more than one
                non-whitespace top-level node was produced
            ParseError: Any tokenizer or tree builder error, unchanged
        """
        nodes = self.parse_fragment(text)
        policy = self.config.api.root_policy

        if policy is RootPolicy.LAST:
            if not nodes:
                raise EmptyDocumentError()
            if len(nodes) > 1:
                self.logger.warning(
                    "Discarding top-level nodes before the last one",
                    extra={"discarded_count": len(nodes) - 1}
                )
            root = nodes[-1]
        else:
            significant = [
                node for node in nodes if not (node.is_text and node.is_whitespace)
            ]
            if not significant:
                if not nodes:
                    raise EmptyDocumentError()
                # Only whitespace: the text itself is the document
                significant = nodes
            if len(significant) > 1:
                raise MultipleRootsError(len(significant))
            root = significant[0]

        self.logger.info(
            "Parse completed",
            extra={"root_tag": root.tag_name, "top_level_count": len(nodes)}
        )
        return root


def parse(
    text: str,
    config: Optional[ParserConfig] = None,
    correlation_id: Optional[str] = None
) -> Node:
    """Parse a markup document and return its root node.

    Examples:
        >>> root = parse('<a><b>x</b></a>')
        >>> root.tag_name, root.children[0].tag_name
        ('a', 'b')
        >>> root.children[0].children[0].content
        'x'
    """
    return MarkupParser(config, correlation_id).parse(text)


def parse_fragment(
    text: str,
    config: Optional[ParserConfig] = None,
    correlation_id: Optional[str] = None
) -> List[Node]:
    """Parse a markup fragment and return all of its top-level nodes."""
    return MarkupParser(config, correlation_id).parse_fragment(text)
