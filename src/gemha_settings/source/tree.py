"""Path-addressable element tree shared by every document source."""

from __future__ import annotations

import re
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Final, Protocol, runtime_checkable

_SEGMENT_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^(?P<name>[^\[\]/]+)(?:\[(?P<index>\d+)\])?$"
)
_EMPTY_ATTRIBUTES: Final[Mapping[str, str]] = MappingProxyType({})


@dataclass(frozen=True, slots=True)
class TagValue:
    """One located element: its absolute path, value, and attributes."""

    path: str
    value: str | None
    attributes: Mapping[str, str] = field(default_factory=lambda: _EMPTY_ATTRIBUTES)

    def attribute(self, name: str) -> str | None:
        return self.attributes.get(name)

    @property
    def name(self) -> str:
        return self.path.rsplit("/", 1)[-1]


@dataclass(frozen=True, slots=True)
class Node:
    """Immutable element node."""

    name: str
    path: str
    text: str | None
    attributes: Mapping[str, str]
    children: tuple[Node, ...]

    @property
    def value(self) -> str:
        if self.children:
            return (self.text or "").strip()
        return self.text or ""

    def as_tag_value(self) -> TagValue:
        return TagValue(path=self.path, value=self.value, attributes=self.attributes)


@runtime_checkable
class DocumentSource(Protocol):
    """Read-only, path-addressable settings document."""

    @property
    def location(self) -> str: ...

    def value_for_path(self, path: str) -> str | None: ...

    def value_with_attributes(self, path: str) -> TagValue | None: ...

    def values_for_path(self, path: str) -> tuple[TagValue, ...]: ...

    def children_values(self, path: str) -> tuple[str, ...]: ...

    def element_paths(self) -> Iterator[str]: ...


@dataclass(frozen=True, slots=True)
class PathSegment:
    name: str
    index: int | None = None


def parse_path(path: str) -> tuple[PathSegment, ...]:
    """Split ``/A/B[2]/C`` into segments; indices are 1-based."""

    segments: list[PathSegment] = []
    for raw in path.strip().strip("/").split("/"):
        if not raw:
            continue
        match = _SEGMENT_PATTERN.fullmatch(raw.strip())
        if match is None:
            raise ValueError(f"invalid path segment {raw!r} in {path!r}")
        index_text = match.group("index")
        index = int(index_text) if index_text is not None else None
        if index is not None and index < 1:
            raise ValueError(f"path index must be >= 1 in {path!r}")
        segments.append(PathSegment(name=match.group("name"), index=index))
    return tuple(segments)


def strip_indices(path: str) -> str:
    """Return ``path`` without ``[n]`` qualifiers and with a leading slash."""

    return "/" + "/".join(segment.name for segment in parse_path(path))


class TreeDocumentSource:
    """``DocumentSource`` over an in-memory ``Node`` tree.

    Paths may start with a slash and may name the root element; both
    ``/Applic/Params/X`` and ``Params/X`` resolve against a root named ``Applic``.
    """

    __slots__ = ("_location", "_root")

    def __init__(self, root: Node, *, location: str = "<memory>") -> None:
        self._root = root
        self._location = location

    @property
    def location(self) -> str:
        return self._location

    @property
    def root(self) -> Node:
        return self._root

    def value_for_path(self, path: str) -> str | None:
        selected = self._select(path)
        if not selected:
            return None
        return selected[0].value

    def value_with_attributes(self, path: str) -> TagValue | None:
        selected = self._select(path)
        if not selected:
            return None
        return selected[0].as_tag_value()

    def values_for_path(self, path: str) -> tuple[TagValue, ...]:
        return tuple(node.as_tag_value() for node in self._select(path))

    def children_values(self, path: str) -> tuple[str, ...]:
        selected = self._select(path)
        if not selected:
            return ()
        return tuple(child.value for child in selected[0].children)

    def element_paths(self) -> Iterator[str]:
        stack = [self._root]
        while stack:
            node = stack.pop()
            yield node.path
            stack.extend(reversed(node.children))

    def _select(self, path: str) -> list[Node]:
        segments = parse_path(path)
        if not segments:
            return [self._root]

        first = segments[0]
        if first.name == self._root.name and first.index in (None, 1):
            segments = segments[1:]

        current = [self._root]
        for segment in segments:
            matches = [
                child for node in current for child in node.children if child.name == segment.name
            ]
            if segment.index is not None:
                if segment.index > len(matches):
                    return []
                matches = [matches[segment.index - 1]]
            if not matches:
                return []
            current = matches
        return current


def freeze_attributes(raw: Mapping[str, str]) -> Mapping[str, str]:
    if not raw:
        return _EMPTY_ATTRIBUTES
    return MappingProxyType(dict(raw))


def join_node_path(parent_path: str, name: str) -> str:
    if not parent_path or parent_path == "/":
        return f"/{name}"
    return f"{parent_path}/{name}"


__all__ = [
    "DocumentSource",
    "Node",
    "PathSegment",
    "TagValue",
    "TreeDocumentSource",
    "freeze_attributes",
    "join_node_path",
    "parse_path",
    "strip_indices",
]
