"""Typed element tree decoupled from the HTML parser.

The extractor never hands lxml nodes to the rest of the package. Parsed
documents are converted once into immutable Element trees that expose only
what selection and reporting need: tag, attributes, element children and the
text around them.

Text is stored the way lxml stores it. ``text`` is the character data before
the first child element and ``tail`` is the character data that follows the
element inside its parent, which is enough to rebuild the descendant text in
document order.
"""

from __future__ import annotations

import re
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType

from lxml.html import HtmlElement

# ASCII whitespace as defined by the HTML standard for class lists.
_CLASS_SEPARATOR = re.compile(r"[ \t\n\f\r]+")


@dataclass(frozen=True, eq=False)
class Element:
    """A parsed HTML element.

    Elements compare by identity: two elements with the same markup in
    different places of a document are distinct matches.

    Attributes:
        tag: Lowercase tag name (e.g., "div").
        attributes: Attribute names mapped to their values.
        children: Child elements in document order.
        text: Character data before the first child element.
        tail: Character data following this element, before its next sibling.
    """

    tag: str
    attributes: Mapping[str, str] = field(
        default_factory=lambda: MappingProxyType({})
    )
    children: tuple[Element, ...] = ()
    text: str = ""
    tail: str = ""

    def get_attribute(self, name: str) -> str | None:
        """Extract an attribute value.

        Args:
            name: Name of the attribute.

        Returns:
            Value of the attribute, or None if it doesn't exist.
        """
        return self.attributes.get(name)

    def class_tokens(self) -> list[str]:
        """Split the class attribute on runs of whitespace.

        Returns:
            The class names in attribute order, without empty entries.
        """
        value = self.attributes.get("class", "")
        return [token for token in _CLASS_SEPARATOR.split(value) if token]

    def text_content(self) -> str:
        """Concatenate the text of this element and all its descendants.

        Tags are ignored; the element's own tail is not part of its content.

        Returns:
            Descendant character data in document order.
        """
        parts = [self.text]
        for child in self.children:
            parts.append(child.text_content())
            parts.append(child.tail)
        return "".join(parts)

    def iter(self) -> Iterator[Element]:
        """Walk the subtree in document (pre-order, depth-first) order.

        Yields:
            This element, then each descendant exactly once.
        """
        stack: list[Element] = [self]
        while stack:
            element = stack.pop()
            yield element
            stack.extend(reversed(element.children))

    def __repr__(self) -> str:
        classes = ".".join(self.class_tokens())
        return f"<Element {self.tag}{'.' + classes if classes else ''}>"


def from_lxml(element: HtmlElement) -> Element:
    """Convert an lxml element and its subtree into an Element.

    Comments and processing instructions are dropped, but the text that
    follows them is kept so that text_content() matches lxml's.

    Args:
        element: The lxml element to convert.

    Returns:
        The equivalent immutable Element tree.
    """
    text = element.text or ""
    children: list[Element] = []

    for child in element:
        if isinstance(child.tag, str):
            children.append(from_lxml(child))
            continue

        # Comment or processing instruction
        if not child.tail:
            continue
        if children:
            children[-1] = replace(
                children[-1], tail=children[-1].tail + child.tail
            )
        else:
            text += child.tail

    return Element(
        tag=element.tag.lower(),
        attributes=MappingProxyType(dict(element.attrib)),
        children=tuple(children),
        text=text,
        tail=element.tail or "",
    )
