"""Shared utilities for markup tree parsing.

This module provides the configuration objects, error hierarchy and logging
helpers used across the tokenizer, tree builder and parse facade.
"""

from .config import (
    ApiConfig,
    ConfigError,
    ConfigValidationError,
    GlobalConfig,
    ParserConfig,
    RootPolicy,
    TokenizerConfig,
    TreeConfig,
)
from .errors import (
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
from .logging import (
    CorrelationLogger,
    configure_logging,
    get_logger,
)

__all__ = [
    "ApiConfig",
    "ConfigError",
    "ConfigValidationError",
    "GlobalConfig",
    "ParserConfig",
    "RootPolicy",
    "TokenizerConfig",
    "TreeConfig",
    "EmptyDocumentError",
    "MismatchedTagError",
    "MultipleRootsError",
    "NestingTooDeepError",
    "ParseError",
    "StrayCharacterError",
    "UnclosedTagError",
    "UnexpectedEndOfInputError",
    "UnexpectedTokenError",
    "CorrelationLogger",
    "configure_logging",
    "get_logger",
]
