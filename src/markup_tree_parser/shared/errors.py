"""Error types raised while parsing markup.

Every failure is fatal for the parse call that raised it: no partial tree is
returned. All errors derive from :class:`ParseError` so callers can handle the
whole family with a single ``except`` clause.
"""

from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from markup_tree_parser.tokenization.tokenizer import TokenPosition


class ParseError(Exception):
    """Base exception for markup parsing failures."""

    kind = "ParseError"

    def __init__(self, message: str, position: Optional["TokenPosition"] = None) -> None:
        super().__init__(message)
        self.message = message
        self.position = position

    def __str__(self) -> str:
        if self.position is None:
            return self.message
        return f"{self.message} (line {self.position.line}, column {self.position.column})"


class UnexpectedEndOfInputError(ParseError):
    """Input ended inside a tag."""

    kind = "UnexpectedEndOfInput"


class StrayCharacterError(ParseError):
    """A tag delimiter appeared outside of any tag."""

    kind = "StrayCharacter"

    def __init__(self, character: str, position: Optional["TokenPosition"] = None) -> None:
        super().__init__(f"Stray {character!r} outside of a tag", position)
        self.character = character


class MismatchedTagError(ParseError):
    """A close tag did not match the innermost open element."""

    kind = "MismatchedTag"

    def __init__(self, expected: str, found: str, position: Optional["TokenPosition"] = None) -> None:
        if expected:
            detail = f"expected </{expected}>"
        else:
            detail = "no element is open"
        super().__init__(f"Mismatched close tag </{found}>: {detail}", position)
        self.expected = expected
        self.found = found


class UnexpectedTokenError(ParseError):
    """The tree builder received something it cannot place in the tree."""

    kind = "UnexpectedToken"

    def __init__(self, token: Any, position: Optional["TokenPosition"] = None) -> None:
        super().__init__(f"Unexpected token: {token!r}", position)
        self.token = token


class UnclosedTagError(ParseError):
    """Input ended while an element was still open."""

    kind = "UnclosedTag"

    def __init__(self, tag_name: str, position: Optional["TokenPosition"] = None) -> None:
        super().__init__(f"Element <{tag_name}> is never closed", position)
        self.tag_name = tag_name


class NestingTooDeepError(ParseError):
    """Elements are nested deeper than the configured limit."""

    kind = "NestingTooDeep"

    def __init__(self, max_depth: int, position: Optional["TokenPosition"] = None) -> None:
        super().__init__(f"Elements nested deeper than {max_depth} levels", position)
        self.max_depth = max_depth


class EmptyDocumentError(ParseError):
    """The document produced no top-level node."""

    kind = "EmptyDocument"

    def __init__(self) -> None:
        super().__init__("Document contains no elements or text")


class MultipleRootsError(ParseError):
    """A single-root parse found more than one top-level node."""

    kind = "MultipleRoots"

    def __init__(self, count: int) -> None:
        super().__init__(f"Expected a single root node, found {count} top-level nodes")
        self.count = count
