"""Configuration classes for markup tree parsing.

The parser is strict by construction (the first fatal condition aborts the
parse) but by default it is lenient about a handful of malformations.
These configuration objects decide, per stage, whether such input is accepted
or rejected.
"""

import json
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, List, Optional


class RootPolicy(str, Enum):
    """How the parse facade picks "the" root among top-level nodes."""

    SINGLE = "single"   # Exactly one top-level node, whitespace text ignored
    LAST = "last"       # Keep only the last top-level node


VALID_LOGGING_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


@dataclass(frozen=True)
class TokenizerConfig:
    """Configuration for the tokenizer stage."""

    reject_stray_close_brackets: bool = False
    reject_unterminated_tags: bool = False


@dataclass(frozen=True)
class TreeConfig:
    """Configuration for tree building."""

    reject_unclosed_elements: bool = False
    max_depth: int = 500

    def __post_init__(self) -> None:
        """Validate tree configuration."""
        if self.max_depth <= 0:
            raise ValueError("max_depth must be > 0")


@dataclass(frozen=True)
class ApiConfig:
    """Configuration for the parse facade."""

    root_policy: RootPolicy = RootPolicy.SINGLE

    def __post_init__(self) -> None:
        """Validate API configuration."""
        try:
            # Frozen dataclass: coerce plain strings through object.__setattr__
            object.__setattr__(self, "root_policy", RootPolicy(self.root_policy))
        except ValueError as e:
            valid = [policy.value for policy in RootPolicy]
            raise ValueError(f"root_policy must be one of {valid}") from e


@dataclass(frozen=True)
class GlobalConfig:
    """Global configuration settings that apply across all components."""

    logging_level: str = "WARNING"

    def __post_init__(self) -> None:
        """Validate global configuration."""
        if self.logging_level not in VALID_LOGGING_LEVELS:
            raise ValueError(f"logging_level must be one of {VALID_LOGGING_LEVELS}")


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigValidationError(ConfigError):
    """Exception raised when configuration validation fails."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 suggestions: Optional[List[str]] = None):
        super().__init__(message)
        self.field_name = field_name
        self.suggestions = suggestions or []


_COMPONENT_TYPES = {
    "tokenizer": TokenizerConfig,
    "tree": TreeConfig,
    "api": ApiConfig,
    "global_": GlobalConfig,
}
_COMPONENTS = list(_COMPONENT_TYPES)


@dataclass(frozen=True)
class ParserConfig:
    """Configuration for every parser stage.

    Immutable, so a single instance can be shared between threads and parser
    instances.
    """

    tokenizer: TokenizerConfig = field(default_factory=TokenizerConfig)
    tree: TreeConfig = field(default_factory=TreeConfig)
    api: ApiConfig = field(default_factory=ApiConfig)
    global_: GlobalConfig = field(default_factory=GlobalConfig)

    name: Optional[str] = None
    description: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate component types."""
        for field_name, component_type in _COMPONENT_TYPES.items():
            if not isinstance(getattr(self, field_name), component_type):
                raise ConfigValidationError(
                    f"{field_name} must be a {component_type.__name__}",
                    field_name=field_name,
                )

    def override(self, **kwargs: Any) -> "ParserConfig":
        """Create a new configuration with specific overrides.

        Args:
            **kwargs: Keyword arguments for configuration fields to override

        Returns:
            New ParserConfig instance with overrides applied

        Example:
            >>> config = ParserConfig()
            >>> strict_tree = config.override(
            ...     tree__reject_unclosed_elements=True,
            ...     api__root_policy="last"
            ... )
        """
        nested_overrides: Dict[str, Any] = {}
        for key, value in kwargs.items():
            if "__" in key:
                component, field_name = key.split("__", 1)
                if component not in _COMPONENTS:
                    raise ConfigValidationError(
                        f"Unknown configuration component: {component}",
                        field_name=key,
                        suggestions=list(_COMPONENTS),
                    )
                nested_overrides.setdefault(component, {})[field_name] = value
            else:
                nested_overrides[key] = value

        new_fields: Dict[str, Any] = {}
        try:
            for key, value in nested_overrides.items():
                if key in _COMPONENTS and isinstance(value, dict):
                    new_fields[key] = replace(getattr(self, key), **value)
                else:
                    new_fields[key] = value
            return replace(self, **new_fields)
        except (TypeError, ValueError) as e:
            raise ConfigValidationError(str(e)) from e

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary format."""
        def _dataclass_to_dict(obj: Any) -> Any:
            if hasattr(obj, "__dataclass_fields__"):
                return {
                    name: _dataclass_to_dict(getattr(obj, name))
                    for name in obj.__dataclass_fields__
                }
            if isinstance(obj, Enum):
                return obj.value
            return obj

        result = _dataclass_to_dict(self)
        if not isinstance(result, dict):
            raise ConfigValidationError("Configuration serialization failed")
        return result

    def to_json(self, indent: int = 2) -> str:
        """Convert configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ParserConfig":
        """Create configuration from dictionary.

        Missing keys keep their defaults; unknown keys are rejected.
        """
        field_values: Dict[str, Any] = {}
        try:
            for key, value in data.items():
                if key in _COMPONENT_TYPES:
                    if not isinstance(value, dict):
                        raise ConfigValidationError(
                            f"{key} must be an object", field_name=key
                        )
                    field_values[key] = _COMPONENT_TYPES[key](**value)
                elif key in ("name", "description"):
                    field_values[key] = value
                else:
                    raise ConfigValidationError(
                        f"Unknown configuration key: {key}", field_name=key
                    )
        except (TypeError, ValueError) as e:
            raise ConfigValidationError(str(e)) from e

        return cls(**field_values)

    @classmethod
    def from_json(cls, json_str: str) -> "ParserConfig":
        """Create configuration from JSON string."""
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise ConfigValidationError(f"Invalid configuration JSON: {e}") from e
        if not isinstance(data, dict):
            raise ConfigValidationError("Configuration JSON must be an object")
        return cls.from_dict(data)

    # Preset factory methods
    @classmethod
    def lenient(cls) -> "ParserConfig":
        """Accept stray '>', unterminated tags and unclosed elements; single root."""
        return cls(
            name="lenient",
            description="Tolerates stray '>', unterminated tags and unclosed elements",
        )

    @classmethod
    def strict(cls) -> "ParserConfig":
        """Reject every malformation the parser can detect."""
        return cls(
            tokenizer=TokenizerConfig(
                reject_stray_close_brackets=True,
                reject_unterminated_tags=True,
            ),
            tree=TreeConfig(reject_unclosed_elements=True),
            api=ApiConfig(root_policy=RootPolicy.SINGLE),
            name="strict",
            description="Requires well-formed input with exactly one root node",
        )

    @classmethod
    def reference(cls) -> "ParserConfig":
        """Lenient parsing that keeps only the last top-level node."""
        return cls(
            api=ApiConfig(root_policy=RootPolicy.LAST),
            name="reference",
            description="Lenient parsing that returns the last top-level node",
        )


PRESETS = {
    "lenient": ParserConfig.lenient,
    "strict": ParserConfig.strict,
    "reference": ParserConfig.reference,
}
