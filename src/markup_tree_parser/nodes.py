"""Node types making up a parsed markup tree.

A tree is built from two node kinds: :class:`Element` for markup tags and
:class:`Text` for text runs. Text nodes also answer to the ``#text`` naming
convention (``tag_name``, a single ``content`` attribute, no children) so code
that inspects nodes uniformly does not need to special-case them.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple, Union

TEXT_TAG_NAME = "#text"
TEXT_CONTENT_ATTRIBUTE = "content"
SYNTHETIC_ROOT_TAG = ""


@dataclass(frozen=True)
class Attribute:
    """A name/value pair attached to an element.

    Values are stored as written between the quotes, minus surrounding
    whitespace. No entity decoding takes place.
    """

    name: str
    value: str = ""

    def to_pair(self) -> Tuple[str, str]:
        return (self.name, self.value)


@dataclass
class Element:
    """A markup element with ordered attributes and children."""

    tag_name: str
    attributes: List[Attribute] = field(default_factory=list)
    children: List["Node"] = field(default_factory=list)

    is_text = False

    def to_dict(self) -> Dict[str, Any]:
        """Convert element to dictionary representation."""
        return {
            "type": "element",
            "tag_name": self.tag_name,
            "attributes": [list(attribute.to_pair()) for attribute in self.attributes],
            "children": [child.to_dict() for child in self.children],
        }


@dataclass(frozen=True)
class Text:
    """A run of literal text between tags."""

    content: str

    is_text = True

    @property
    def tag_name(self) -> str:
        return TEXT_TAG_NAME

    @property
    def attributes(self) -> List[Attribute]:
        return [Attribute(TEXT_CONTENT_ATTRIBUTE, self.content)]

    @property
    def children(self) -> List["Node"]:
        return []

    @property
    def is_whitespace(self) -> bool:
        """True for runs made only of whitespace (including the empty run)."""
        return not self.content.strip()

    def to_dict(self) -> Dict[str, Any]:
        """Convert text node to dictionary representation."""
        return {"type": "text", "content": self.content}


Node = Union[Element, Text]
