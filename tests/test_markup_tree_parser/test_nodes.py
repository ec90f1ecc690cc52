"""Tests for the element model."""

import pytest
from dataclasses import FrozenInstanceError

from markup_tree_parser.nodes import (
    SYNTHETIC_ROOT_TAG,
    TEXT_CONTENT_ATTRIBUTE,
    TEXT_TAG_NAME,
    Attribute,
    Element,
    Text,
)


class TestAttribute:
    """Test Attribute value object."""

    def test_attribute_defaults_to_empty_value(self) -> None:
        """Test attribute created without value."""
        assert Attribute("disabled").value == ""

    def test_attribute_is_immutable(self) -> None:
        """Test attributes cannot be reassigned."""
        attribute = Attribute("id", "x")
        with pytest.raises(FrozenInstanceError):
            attribute.value = "y"  # type: ignore

    def test_to_pair(self) -> None:
        """Test pair conversion keeps name then value."""
        assert Attribute("class", "container").to_pair() == ("class", "container")


class TestElement:
    """Test Element node."""

    def test_element_defaults(self) -> None:
        """Test element created with only a tag name."""
        element = Element("div")

        assert element.tag_name == "div"
        assert element.attributes == []
        assert element.children == []
        assert element.is_text is False

    def test_default_lists_are_not_shared(self) -> None:
        """Test each element gets its own children list."""
        first = Element("a")
        second = Element("b")
        first.children.append(Text("x"))

        assert second.children == []

    def test_structural_equality(self) -> None:
        """Test elements compare by tag, attributes and children."""
        left = Element("a", [Attribute("x", "1")], [Text("t")])
        right = Element("a", [Attribute("x", "1")], [Text("t")])

        assert left == right
        assert left != Element("a", [Attribute("x", "2")], [Text("t")])

    def test_to_dict(self) -> None:
        """Test nested dictionary conversion."""
        element = Element(
            "div",
            [Attribute("class", "container"), Attribute("class", "extra")],
            [Element("p", [], [Text("Hello")])],
        )

        assert element.to_dict() == {
            "type": "element",
            "tag_name": "div",
            "attributes": [["class", "container"], ["class", "extra"]],
            "children": [
                {
                    "type": "element",
                    "tag_name": "p",
                    "attributes": [],
                    "children": [{"type": "text", "content": "Hello"}],
                }
            ],
        }

    def test_synthetic_root_tag_is_empty(self) -> None:
        """Test the synthetic container name."""
        assert SYNTHETIC_ROOT_TAG == ""


class TestText:
    """Test Text node and its #text compatibility view."""

    def test_text_answers_to_text_convention(self) -> None:
        """Test text nodes expose the #text tag and content attribute."""
        node = Text("Hello, world!")

        assert node.is_text is True
        assert node.tag_name == TEXT_TAG_NAME == "#text"
        assert node.attributes == [Attribute(TEXT_CONTENT_ATTRIBUTE, "Hello, world!")]
        assert node.children == []

    def test_text_is_immutable(self) -> None:
        """Test text content cannot be reassigned."""
        node = Text("x")
        with pytest.raises(FrozenInstanceError):
            node.content = "y"  # type: ignore

    @pytest.mark.parametrize("content,expected", [
        ("", True),
        (" \n\t", True),
        (" x ", False),
    ])
    def test_is_whitespace(self, content: str, expected: bool) -> None:
        """Test whitespace-only detection."""
        assert Text(content).is_whitespace is expected

    def test_to_dict(self) -> None:
        """Test dictionary conversion."""
        assert Text(" a ").to_dict() == {"type": "text", "content": " a "}

    def test_text_never_equals_element(self) -> None:
        """Test the two node kinds are distinct."""
        assert Text("p") != Element("p")
