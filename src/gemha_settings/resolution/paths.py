"""Path resolver: absence-tolerant lookups over a ``DocumentSource``."""

from __future__ import annotations

from collections.abc import Iterator

from gemha_settings.source.tree import DocumentSource, TagValue


class PathResolver:
    """Thin adapter over a document source, optionally scoped to a node.

    A missing path is never an error here; lookups return ``None`` or an
    empty tuple and the field extractor decides what absence means.
    """

    __slots__ = ("_prefix", "_source")

    def __init__(self, source: DocumentSource, *, prefix: str = "") -> None:
        self._source = source
        self._prefix = prefix.rstrip("/")

    @property
    def source(self) -> DocumentSource:
        return self._source

    @property
    def prefix(self) -> str:
        return self._prefix

    def qualify(self, path: str) -> str:
        if not self._prefix:
            return path
        if not path:
            return self._prefix
        return f"{self._prefix}/{path.lstrip('/')}"

    def get(self, path: str) -> str | None:
        return self._source.value_for_path(self.qualify(path))

    def get_with_attributes(self, path: str) -> TagValue | None:
        return self._source.value_with_attributes(self.qualify(path))

    def get_all(self, path: str) -> tuple[TagValue, ...]:
        return self._source.values_for_path(self.qualify(path))

    def children_of(self, path: str) -> tuple[str, ...]:
        return self._source.children_values(self.qualify(path))

    def exists(self, path: str) -> bool:
        return self.get_with_attributes(path) is not None

    def scoped(self, path: str) -> PathResolver:
        return PathResolver(self._source, prefix=self.qualify(path))

    def repeated(self, path: str) -> Iterator[PathResolver]:
        """Yield a scoped resolver for ``path[1]``, ``path[2]``, ... until one is absent."""

        index = 1
        while True:
            indexed = f"{path.rstrip('/')}[{index}]"
            if not self.exists(indexed):
                return
            yield self.scoped(indexed)
            index += 1


__all__ = ["PathResolver"]
