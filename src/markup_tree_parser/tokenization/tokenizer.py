"""Markup tokenization.

Converts raw markup text into a flat sequence of structural tokens (open tag,
close tag, text run) in a single left-to-right pass with one character of
lookahead. Tags are parsed leniently; the only unconditional failure is a ``<``
at the very end of the input.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import ClassVar, Iterator, List, Optional, Tuple, Union

from markup_tree_parser.nodes import Attribute
from markup_tree_parser.shared.config import TokenizerConfig
from markup_tree_parser.shared.errors import (
    StrayCharacterError,
    UnexpectedEndOfInputError,
)
from markup_tree_parser.shared.logging import get_logger

TAG_OPEN = "<"
TAG_CLOSE = ">"
CLOSE_TAG_MARKER = "/"
ATTRIBUTE_ASSIGN = "="
TAG_NAME_TERMINATORS = frozenset(" >/")
QUOTE_CHARACTERS = frozenset("\"'")


class TokenType(Enum):
    """Token kinds produced by the tokenizer."""

    TEXT = auto()        # Literal text between tags
    OPEN_TAG = auto()    # <name attr="value">
    CLOSE_TAG = auto()   # </name>


@dataclass(frozen=True)
class TokenPosition:
    """Position of a token's first character in the source text."""

    line: int
    column: int
    offset: int

    def __post_init__(self) -> None:
        """Validate position values."""
        if self.line < 1:
            raise ValueError("Line number must be >= 1")
        if self.column < 1:
            raise ValueError("Column number must be >= 1")
        if self.offset < 0:
            raise ValueError("Offset must be >= 0")


START_POSITION = TokenPosition(1, 1, 0)


@dataclass(frozen=True)
class TextToken:
    """A run of text outside of any tag, preserved exactly."""

    content: str
    position: TokenPosition = field(default=START_POSITION, compare=False)

    type: ClassVar[TokenType] = TokenType.TEXT


@dataclass(frozen=True)
class OpenTagToken:
    """An opening tag with its attributes in source order."""

    tag_name: str
    attributes: Tuple[Attribute, ...] = ()
    position: TokenPosition = field(default=START_POSITION, compare=False)

    type: ClassVar[TokenType] = TokenType.OPEN_TAG


@dataclass(frozen=True)
class CloseTagToken:
    """A closing tag."""

    tag_name: str
    position: TokenPosition = field(default=START_POSITION, compare=False)

    type: ClassVar[TokenType] = TokenType.CLOSE_TAG


Token = Union[TextToken, OpenTagToken, CloseTagToken]


class CharCursor:
    """Character reader with one character of lookahead and position tracking."""

    def __init__(self, text: str) -> None:
        self._text = text
        self._offset = 0
        self._line = 1
        self._column = 1

    @property
    def position(self) -> TokenPosition:
        """Position of the next character to be read."""
        return TokenPosition(self._line, self._column, self._offset)

    def peek(self) -> Optional[str]:
        """Return the next character without consuming it."""
        if self._offset < len(self._text):
            return self._text[self._offset]
        return None

    def advance(self) -> Optional[str]:
        """Consume and return the next character, or None at end of input."""
        char = self.peek()
        if char is None:
            return None
        self._offset += 1
        if char == "\n":
            self._line += 1
            self._column = 1
        else:
            self._column += 1
        return char


class MarkupTokenizer:
    """Tokenizer turning markup text into open tag, close tag and text tokens.

    The tokenizer holds no per-input state, so one instance can tokenize any
    number of documents, including from several threads at once.
    """

    def __init__(
        self,
        config: Optional[TokenizerConfig] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        """Initialize the tokenizer.

        Args:
            config: Strictness settings, lenient by default
            correlation_id: Optional correlation ID for tracking requests
        """
        self.config = config or TokenizerConfig()
        self.correlation_id = correlation_id
        self.logger = get_logger(__name__, correlation_id, "markup_tokenizer")

    def tokenize(self, text: str) -> List[Token]:
        """Tokenize the whole input eagerly.

        Args:
            text: Complete markup document

        Returns:
            Tokens in document order

        Raises:
            UnexpectedEndOfInputError: If the input ends right after ``<``, or
                inside a tag when unterminated tags are rejected
            StrayCharacterError: If stray ``>`` characters are rejected and one
                is found outside a tag
        """
        tokens = list(self.iter_tokens(text))
        self.logger.debug(
            "Tokenization completed",
            extra={
                "character_count": len(text),
                "token_count": len(tokens),
            }
        )
        return tokens

    def iter_tokens(self, text: str) -> Iterator[Token]:
        """Yield tokens lazily as the input is scanned."""
        cursor = CharCursor(text)
        buffer: List[str] = []
        buffer_start = START_POSITION

        while True:
            position = cursor.position
            char = cursor.advance()
            if char is None:
                break

            if char == TAG_OPEN:
                if buffer:
                    yield TextToken("".join(buffer), buffer_start)
                    buffer = []

                following = cursor.peek()
                if following is None:
                    raise UnexpectedEndOfInputError(
                        "Input ends immediately after '<'", position
                    )
                if following == CLOSE_TAG_MARKER:
                    cursor.advance()
                    yield self._read_close_tag(cursor, position)
                else:
                    yield self._read_open_tag(cursor, position)

            elif char == TAG_CLOSE:
                # Tags consume their own '>', so this one is outside any tag
                if self.config.reject_stray_close_brackets:
                    raise StrayCharacterError(char, position)

            else:
                if not buffer:
                    buffer_start = position
                buffer.append(char)

        if buffer:
            yield TextToken("".join(buffer), buffer_start)

    def _read_tag_name(self, cursor: CharCursor) -> str:
        name: List[str] = []
        while True:
            char = cursor.peek()
            if char is None or char in TAG_NAME_TERMINATORS:
                break
            name.append(char)
            cursor.advance()
        return "".join(name)

    def _read_close_tag(self, cursor: CharCursor, start: TokenPosition) -> CloseTagToken:
        tag_name = self._read_tag_name(cursor)

        # Anything between the name and '>' is discarded
        while True:
            char = cursor.advance()
            if char == TAG_CLOSE:
                break
            if char is None:
                self._unterminated(f"Close tag </{tag_name}> is missing '>'", start)
                break

        return CloseTagToken(tag_name, start)

    def _read_open_tag(self, cursor: CharCursor, start: TokenPosition) -> OpenTagToken:
        tag_name = self._read_tag_name(cursor)
        attributes: List[Attribute] = []

        while True:
            char = cursor.peek()
            if char is None:
                self._unterminated(f"Open tag <{tag_name}> is missing '>'", start)
                break
            if char == TAG_CLOSE:
                cursor.advance()
                break
            if char == " ":
                cursor.advance()
            else:
                attributes.append(self._read_attribute(cursor))

        return OpenTagToken(tag_name, tuple(attributes), start)

    def _read_attribute(self, cursor: CharCursor) -> Attribute:
        """Read ``name="value"``; the first character is never ' ' or '>'.

        The name runs up to ``=``, except that a ``>`` ends it early and is
        left for the enclosing tag to consume. A valueless attribute such as
        ``<input disabled>`` therefore closes its tag instead of reading on
        to the next ``=`` in the document.
        """
        start = cursor.position
        name: List[str] = []
        value: List[str] = []

        while True:
            char = cursor.peek()
            if char is None or char == TAG_CLOSE:
                break
            cursor.advance()
            if char == ATTRIBUTE_ASSIGN:
                break
            if not char.isspace():
                name.append(char)

        quote = cursor.peek()
        if quote is not None and quote in QUOTE_CHARACTERS:
            cursor.advance()
            while True:
                char = cursor.advance()
                if char == quote:
                    break
                if char is None:
                    self._unterminated("Attribute value is missing its closing quote", start)
                    break
                value.append(char)

        return Attribute("".join(name).strip(), "".join(value).strip())

    def _unterminated(self, message: str, position: TokenPosition) -> None:
        if self.config.reject_unterminated_tags:
            raise UnexpectedEndOfInputError(message, position)
        self.logger.debug(
            "Unterminated tag accepted",
            extra={"detail": message, "offset": position.offset}
        )


def tokenize(text: str, config: Optional[TokenizerConfig] = None) -> List[Token]:
    """Tokenize ``text`` with a default or given tokenizer configuration."""
    return MarkupTokenizer(config).tokenize(text)


def iter_tokens(text: str, config: Optional[TokenizerConfig] = None) -> Iterator[Token]:
    """Lazily tokenize ``text``; errors surface when the bad input is reached."""
    return MarkupTokenizer(config).iter_tokens(text)
