"""Tree building from token streams.

The builder walks the token sequence once, recursing for each open tag. A
single iterator is shared by every level of the recursion, so each token is
consumed exactly once and in document order. Each level returns the children
it collected instead of mutating its parent, and the caller wraps them in the
finished element.
"""

from typing import Iterable, Iterator, List, Optional, Tuple

from markup_tree_parser.nodes import SYNTHETIC_ROOT_TAG, Element, Node, Text
from markup_tree_parser.shared import (
    MismatchedTagError,
    NestingTooDeepError,
    TreeConfig,
    UnclosedTagError,
    UnexpectedTokenError,
    get_logger,
)
from markup_tree_parser.tokenization import (
    CloseTagToken,
    OpenTagToken,
    TextToken,
    Token,
    TokenPosition,
)

_EXHAUSTED = object()


class TreeBuilder:
    """Builds element trees from token sequences, validating tag balance.

    Malformed structure is never repaired: a close tag that does not match
    the innermost open element aborts the build. Elements still open when the
    tokens run out are accepted unless the configuration rejects them.
    """

    def __init__(
        self,
        config: Optional[TreeConfig] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        """Initialize tree builder.

        Args:
            config: Tree building settings
            correlation_id: Optional correlation ID for request tracking
        """
        self.config = config or TreeConfig()
        self.correlation_id = correlation_id
        self.logger = get_logger(__name__, correlation_id, "tree_builder")

    def build(self, tokens: Iterable[Token], parent: Optional[Element] = None) -> Element:
        """Build a tree from ``tokens`` underneath ``parent``.

        Args:
            tokens: Tokens in document order
            parent: Element collecting the top-level nodes. Defaults to a
                synthetic root with an empty tag name. A named parent may be
                closed by its own close tag; any token after that is an error.

        Returns:
            A new element with the parent's tag and attributes, whose children
            are the parent's existing children followed by the built nodes

        Raises:
            MismatchedTagError: If a close tag does not match the open element
            UnclosedTagError: If unclosed elements are rejected and one remains
            NestingTooDeepError: If nesting exceeds ``max_depth`` or the
                interpreter recursion limit
            UnexpectedTokenError: If a non-token is found, or tokens follow
                the close tag of a named parent
        """
        root = parent if parent is not None else Element(SYNTHETIC_ROOT_TAG)
        cursor = iter(tokens)
        depth = 1 if root.tag_name else 0

        try:
            children, closed = self._build_children(cursor, root.tag_name, depth, None)
        except RecursionError as e:
            # max_depth set above what the interpreter stack can hold
            raise NestingTooDeepError(self.config.max_depth) from e

        if closed:
            leftover = next(cursor, _EXHAUSTED)
            if leftover is not _EXHAUSTED:
                raise UnexpectedTokenError(leftover, getattr(leftover, "position", None))

        self.logger.debug(
            "Tree building completed",
            extra={
                "root_tag": root.tag_name,
                "top_level_count": len(children),
            }
        )
        return Element(
            root.tag_name,
            list(root.attributes),
            list(root.children) + children,
        )

    def _build_children(
        self,
        cursor: Iterator[Token],
        tag_name: str,
        depth: int,
        opened_at: Optional[TokenPosition],
    ) -> Tuple[List[Node], bool]:
        """Collect nodes until ``tag_name`` is closed or tokens run out.

        ``depth`` 0 is the synthetic root, which no close tag can close.
        Returns the children and whether the matching close tag was found.
        """
        children: List[Node] = []

        for token in cursor:
            if isinstance(token, OpenTagToken):
                if depth >= self.config.max_depth:
                    raise NestingTooDeepError(self.config.max_depth, token.position)
                grandchildren, _ = self._build_children(
                    cursor, token.tag_name, depth + 1, token.position
                )
                children.append(
                    Element(token.tag_name, list(token.attributes), grandchildren)
                )
            elif isinstance(token, TextToken):
                children.append(Text(token.content))
            elif isinstance(token, CloseTagToken):
                if depth > 0 and token.tag_name == tag_name:
                    return children, True
                raise MismatchedTagError(tag_name, token.tag_name, token.position)
            else:
                raise UnexpectedTokenError(token)

        if depth > 0:
            if self.config.reject_unclosed_elements:
                raise UnclosedTagError(tag_name, opened_at)
            self.logger.debug(
                "Unclosed element accepted",
                extra={"tag_name": tag_name, "depth": depth}
            )
        return children, False


def build_tree(
    tokens: Iterable[Token],
    parent: Optional[Element] = None,
    config: Optional[TreeConfig] = None
) -> Element:
    """Build a tree from ``tokens`` with a default or given configuration."""
    return TreeBuilder(config).build(tokens, parent)
