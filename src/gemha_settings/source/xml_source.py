"""XML settings documents via ``xml.etree.ElementTree``."""

from __future__ import annotations

import xml.etree.ElementTree as ET

from gemha_settings.source.tree import (
    Node,
    TreeDocumentSource,
    freeze_attributes,
    join_node_path,
)


class XmlDocumentSource(TreeDocumentSource):
    """Document source built from a parsed XML element tree."""

    __slots__ = ()

    @classmethod
    def from_string(cls, text: str, *, location: str = "<string>") -> XmlDocumentSource:
        """Parse ``text``; raises ``xml.etree.ElementTree.ParseError`` on malformed input."""

        return cls(element_to_node(ET.fromstring(text)), location=location)

    @classmethod
    def from_element(cls, element: ET.Element, *, location: str = "<element>") -> XmlDocumentSource:
        return cls(element_to_node(element), location=location)


def element_to_node(element: ET.Element, parent_path: str = "") -> Node:
    name = _local_name(element.tag)
    path = join_node_path(parent_path, name)
    attributes = {_local_name(key): value for key, value in element.attrib.items()}
    children = tuple(
        element_to_node(child, path) for child in element if isinstance(child.tag, str)
    )
    return Node(
        name=name,
        path=path,
        text=element.text,
        attributes=freeze_attributes(attributes),
        children=children,
    )


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


__all__ = ["XmlDocumentSource", "element_to_node"]
