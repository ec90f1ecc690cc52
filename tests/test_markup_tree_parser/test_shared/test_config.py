"""Tests for the configuration system."""

import json
from dataclasses import FrozenInstanceError

import pytest

from markup_tree_parser.shared.config import (
    PRESETS,
    ApiConfig,
    ConfigError,
    ConfigValidationError,
    GlobalConfig,
    ParserConfig,
    RootPolicy,
    TokenizerConfig,
    TreeConfig,
)


class TestComponentConfigs:
    """Tests for the per-stage configuration classes."""

    def test_defaults_are_lenient(self) -> None:
        """Test default values are lenient."""
        assert TokenizerConfig().reject_stray_close_brackets is False
        assert TokenizerConfig().reject_unterminated_tags is False
        assert TreeConfig().reject_unclosed_elements is False
        assert TreeConfig().max_depth == 500
        assert ApiConfig().root_policy is RootPolicy.SINGLE
        assert GlobalConfig().logging_level == "WARNING"

    @pytest.mark.parametrize("max_depth", [0, -1])
    def test_tree_config_validation(self, max_depth: int) -> None:
        """Test max_depth must be positive."""
        with pytest.raises(ValueError, match="max_depth must be > 0"):
            TreeConfig(max_depth=max_depth)

    def test_root_policy_accepts_strings(self) -> None:
        """Test string policies are coerced to the enum."""
        config = ApiConfig(root_policy="last")  # type: ignore

        assert config.root_policy is RootPolicy.LAST

    def test_root_policy_validation(self) -> None:
        """Test unknown policies are rejected with the valid choices."""
        with pytest.raises(ValueError, match="root_policy must be one of"):
            ApiConfig(root_policy="first")  # type: ignore

    def test_global_config_validation(self) -> None:
        """Test logging levels are checked."""
        with pytest.raises(ValueError, match="logging_level must be one of"):
            GlobalConfig(logging_level="LOUD")

    def test_components_are_frozen(self) -> None:
        """Test configuration objects cannot be mutated."""
        config = TreeConfig()

        with pytest.raises(FrozenInstanceError):
            config.max_depth = 10  # type: ignore


class TestParserConfig:
    """Tests for the main configuration class."""

    def test_default_configuration(self) -> None:
        """Test default configuration creation."""
        config = ParserConfig()

        assert isinstance(config.tokenizer, TokenizerConfig)
        assert isinstance(config.tree, TreeConfig)
        assert isinstance(config.api, ApiConfig)
        assert isinstance(config.global_, GlobalConfig)
        assert config.name is None

    def test_component_type_validation(self) -> None:
        """Test components must have the right type."""
        with pytest.raises(ConfigValidationError) as exc_info:
            ParserConfig(tree={"max_depth": 3})  # type: ignore

        assert exc_info.value.field_name == "tree"

    def test_validation_error_is_config_error(self) -> None:
        """Test the error hierarchy."""
        assert issubclass(ConfigValidationError, ConfigError)


class TestPresets:
    """Tests for configuration presets."""

    def test_lenient_matches_defaults(self) -> None:
        """Test the lenient preset only differs by its label."""
        config = ParserConfig.lenient()

        assert config.name == "lenient"
        assert config.tokenizer == TokenizerConfig()
        assert config.tree == TreeConfig()
        assert config.api == ApiConfig()

    def test_strict_rejects_everything(self) -> None:
        """Test the strict preset turns every rejection on."""
        config = ParserConfig.strict()

        assert config.tokenizer.reject_stray_close_brackets is True
        assert config.tokenizer.reject_unterminated_tags is True
        assert config.tree.reject_unclosed_elements is True
        assert config.api.root_policy is RootPolicy.SINGLE

    def test_reference_uses_last_root(self) -> None:
        """Test the reference preset keeps the last top-level node."""
        config = ParserConfig.reference()

        assert config.api.root_policy is RootPolicy.LAST
        assert config.tree.reject_unclosed_elements is False

    def test_preset_registry(self) -> None:
        """Test every registered preset builds a named configuration."""
        for name, factory in PRESETS.items():
            assert factory().name == name


class TestOverride:
    """Tests for configuration overrides."""

    def test_nested_override(self) -> None:
        """Test component__field overrides build a new configuration."""
        config = ParserConfig()
        new_config = config.override(tree__max_depth=10, api__root_policy="last")

        assert new_config.tree.max_depth == 10
        assert new_config.api.root_policy is RootPolicy.LAST
        assert config.tree.max_depth == 500

    def test_top_level_override(self) -> None:
        """Test plain fields can be overridden."""
        assert ParserConfig().override(name="custom").name == "custom"

    def test_unknown_component(self) -> None:
        """Test unknown components list the valid ones."""
        with pytest.raises(ConfigValidationError) as exc_info:
            ParserConfig().override(parser__max_depth=3)

        assert exc_info.value.field_name == "parser__max_depth"
        assert "tree" in exc_info.value.suggestions

    def test_unknown_field(self) -> None:
        """Test unknown fields are wrapped in a validation error."""
        with pytest.raises(ConfigValidationError):
            ParserConfig().override(tree__colour="blue")

    def test_invalid_value(self) -> None:
        """Test component validation errors are wrapped."""
        with pytest.raises(ConfigValidationError, match="max_depth must be > 0"):
            ParserConfig().override(tree__max_depth=0)


class TestSerialization:
    """Tests for dictionary and JSON conversion."""

    def test_to_dict(self) -> None:
        """Test enums serialize to their values."""
        data = ParserConfig.reference().to_dict()

        assert data["api"] == {"root_policy": "last"}
        assert data["tree"] == {"reject_unclosed_elements": False, "max_depth": 500}
        assert data["name"] == "reference"

    def test_json_round_trip(self) -> None:
        """Test a configuration survives conversion to JSON and back."""
        config = ParserConfig.strict().override(tree__max_depth=42)

        assert ParserConfig.from_json(config.to_json()) == config

    def test_from_dict_partial(self) -> None:
        """Test missing keys keep their defaults."""
        config = ParserConfig.from_dict({"tree": {"max_depth": 7}})

        assert config.tree.max_depth == 7
        assert config.tree.reject_unclosed_elements is False
        assert config.api == ApiConfig()

    def test_from_dict_unknown_key(self) -> None:
        """Test unknown top-level keys are rejected."""
        with pytest.raises(ConfigValidationError) as exc_info:
            ParserConfig.from_dict({"encoding": {}})

        assert exc_info.value.field_name == "encoding"

    def test_from_dict_component_not_object(self) -> None:
        """Test components must be given as objects."""
        with pytest.raises(ConfigValidationError, match="tree must be an object"):
            ParserConfig.from_dict({"tree": 5})

    def test_from_dict_unknown_field(self) -> None:
        """Test unknown component fields are rejected."""
        with pytest.raises(ConfigValidationError):
            ParserConfig.from_dict({"tokenizer": {"strict": True}})

    def test_from_json_invalid(self) -> None:
        """Test malformed JSON is reported as a validation error."""
        with pytest.raises(ConfigValidationError, match="Invalid configuration JSON"):
            ParserConfig.from_json("{not json")

    def test_from_json_not_object(self) -> None:
        """Test the JSON document must be an object."""
        with pytest.raises(ConfigValidationError, match="must be an object"):
            ParserConfig.from_json(json.dumps(["strict"]))
