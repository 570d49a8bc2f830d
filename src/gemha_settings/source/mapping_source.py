"""Mapping-shaped settings documents (YAML, TOML, JSON).

Element conventions follow the usual XML-to-mapping layout:

- a key whose value is a list produces repeated sibling elements;
- ``@name`` keys are attributes of the enclosing element;
- ``#text`` is the enclosing element's own value.

The top-level mapping must hold exactly one key, the root element.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Final

from gemha_settings.source.tree import (
    Node,
    TreeDocumentSource,
    freeze_attributes,
    join_node_path,
)

ATTRIBUTE_PREFIX: Final[str] = "@"
TEXT_KEY: Final[str] = "#text"
_RESERVED_NAME_CHARACTERS: Final[frozenset[str]] = frozenset("[]/")


class MappingDocumentSource(TreeDocumentSource):
    """Document source built from a nested mapping."""

    __slots__ = ()

    @classmethod
    def from_mapping(
        cls, payload: Mapping[str, object], *, location: str = "<mapping>"
    ) -> MappingDocumentSource:
        """Build from ``{root_name: {...}}``; raises ``ValueError`` for other shapes."""

        if not isinstance(payload, Mapping) or len(payload) != 1:
            raise ValueError("document must have exactly one root element")
        ((root_name, root_value),) = payload.items()
        if not isinstance(root_name, str) or not root_name:
            raise ValueError("root element name must be a non-empty string")
        if isinstance(root_value, list):
            raise ValueError("root element must not repeat")
        return cls(_build_node(root_name, root_value, ""), location=location)


def _build_node(name: str, value: object, parent_path: str) -> Node:
    _check_element_name(name, parent_path)
    path = join_node_path(parent_path, name)
    if not isinstance(value, Mapping):
        return Node(
            name=name,
            path=path,
            text=_scalar_text(value),
            attributes=freeze_attributes({}),
            children=(),
        )

    attributes: dict[str, str] = {}
    text: str | None = None
    children: list[Node] = []
    for key, item in value.items():
        key_name = str(key)
        if key_name == TEXT_KEY:
            text = _scalar_text(item)
        elif key_name.startswith(ATTRIBUTE_PREFIX):
            attributes[key_name[len(ATTRIBUTE_PREFIX) :]] = _scalar_text(item)
        elif isinstance(item, list):
            children.extend(_build_node(key_name, entry, path) for entry in item)
        else:
            children.append(_build_node(key_name, item, path))

    return Node(
        name=name,
        path=path,
        text=text,
        attributes=freeze_attributes(attributes),
        children=tuple(children),
    )


def _check_element_name(name: str, parent_path: str) -> None:
    """Element names must be addressable by a slash path segment."""

    if not name.strip() or name != name.strip() or _RESERVED_NAME_CHARACTERS & set(name):
        raise ValueError(f"invalid element name {name!r} under {parent_path or '/'}")


def _scalar_text(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, Mapping)):
        raise ValueError(f"expected scalar value, got {type(value).__name__}")
    return str(value)


__all__ = ["ATTRIBUTE_PREFIX", "MappingDocumentSource", "TEXT_KEY"]
