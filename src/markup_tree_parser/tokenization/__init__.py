"""Tokenization stage for markup tree parsing.

Key Components:
    MarkupTokenizer: Tokenizer class converting markup text into tokens
    Token: Union of TextToken, OpenTagToken and CloseTagToken
    TokenType: Enumeration of the token kinds
    TokenPosition: Line/column/offset of a token in the source text
"""

from .tokenizer import (
    CharCursor,
    CloseTagToken,
    MarkupTokenizer,
    OpenTagToken,
    TextToken,
    Token,
    TokenPosition,
    TokenType,
    iter_tokens,
    tokenize,
)

__all__ = [
    "CharCursor",
    "CloseTagToken",
    "MarkupTokenizer",
    "OpenTagToken",
    "TextToken",
    "Token",
    "TokenPosition",
    "TokenType",
    "iter_tokens",
    "tokenize",
]
