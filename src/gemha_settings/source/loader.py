"""
gemha-settings — settings document loader.

File: src/gemha_settings/source/loader.py
Last updated: 2026-10-18

Purpose
- Load a settings document from disk into a path-addressable ``DocumentSource``.

What should be included in this file
- Format dispatch by file suffix: XML, YAML, TOML, JSON.
- Optional structural validation against a profile's declared path catalogue.

Functional requirements
- Every read or parse failure surfaces as ``SourceUnavailable`` naming the file.
- Structural failures surface as ``SchemaViolation`` with one issue per unknown element.

Non-functional requirements
- No field resolution happens here; the document is fully materialized before assembly.
"""

from __future__ import annotations

import json
import logging
import tomllib
import xml.etree.ElementTree as ET
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Final

import yaml

from gemha_settings.resolution.errors import SchemaIssue, SchemaViolation, SourceUnavailable
from gemha_settings.source.mapping_source import MappingDocumentSource
from gemha_settings.source.tree import TreeDocumentSource, parse_path
from gemha_settings.source.xml_source import XmlDocumentSource

logger = logging.getLogger(__name__)

ANY_DESCENDANT: Final[str] = "*"
XML_SUFFIXES: Final[frozenset[str]] = frozenset({".xml"})
YAML_SUFFIXES: Final[frozenset[str]] = frozenset({".yaml", ".yml"})
TOML_SUFFIXES: Final[frozenset[str]] = frozenset({".toml"})
JSON_SUFFIXES: Final[frozenset[str]] = frozenset({".json"})


def load_document(
    path: str | Path,
    *,
    schema_validation: bool = False,
    known_paths: Iterable[str] = (),
) -> TreeDocumentSource:
    """Load ``path`` and optionally validate its structure against ``known_paths``.

    ``known_paths`` entries are slash paths with or without the root element name.
    A trailing ``/*`` accepts any descendants (used for ordered child lists).
    """

    resolved = Path(path).expanduser()
    location = str(resolved)
    if not resolved.is_file():
        raise SourceUnavailable(location, "file not found")

    suffix = resolved.suffix.lower()
    try:
        if suffix in XML_SUFFIXES:
            source: TreeDocumentSource = XmlDocumentSource.from_element(
                ET.parse(resolved).getroot(), location=location
            )
        elif suffix in YAML_SUFFIXES:
            with resolved.open("r", encoding="utf-8") as handle:
                source = _from_payload(yaml.safe_load(handle), location)
        elif suffix in TOML_SUFFIXES:
            with resolved.open("rb") as handle:
                source = _from_payload(tomllib.load(handle), location)
        elif suffix in JSON_SUFFIXES:
            with resolved.open("r", encoding="utf-8") as handle:
                source = _from_payload(json.load(handle), location)
        else:
            raise SourceUnavailable(location, f"unsupported format {resolved.suffix!r}")
    except ET.ParseError as exc:
        raise SourceUnavailable(location, f"invalid XML: {exc}") from exc
    except yaml.YAMLError as exc:
        raise SourceUnavailable(location, f"invalid YAML: {exc}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise SourceUnavailable(location, f"invalid TOML: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise SourceUnavailable(location, f"invalid JSON: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise SourceUnavailable(location, f"invalid encoding: {exc}") from exc
    except OSError as exc:
        raise SourceUnavailable(location, f"unable to read file: {exc}") from exc

    if schema_validation:
        issues = validate_structure(source, known_paths)
        if issues:
            raise SchemaViolation(location, issues)

    logger.debug("loaded settings document %s", location)
    return source


def validate_structure(
    source: TreeDocumentSource, known_paths: Iterable[str]
) -> tuple[SchemaIssue, ...]:
    """Report every element whose path is not covered by ``known_paths``."""

    root_name = source.root.name
    allowed: set[tuple[str, ...]] = {()}
    open_prefixes: set[tuple[str, ...]] = set()
    for raw in known_paths:
        names = _relative_names(raw, root_name)
        if names and names[-1] == ANY_DESCENDANT:
            open_prefixes.add(names[:-1])
            names = names[:-1]
        for end in range(1, len(names) + 1):
            allowed.add(names[:end])

    issues: dict[str, SchemaIssue] = {}
    for element_path in source.element_paths():
        names = _relative_names(element_path, root_name)
        if names in allowed:
            continue
        if any(
            len(names) > len(prefix) and names[: len(prefix)] == prefix for prefix in open_prefixes
        ):
            continue
        issues.setdefault(element_path, SchemaIssue(path=element_path, message="unknown element"))
    return tuple(issues[key] for key in sorted(issues))


def _relative_names(path: str, root_name: str) -> tuple[str, ...]:
    names = tuple(segment.name for segment in parse_path(path))
    if names and names[0] == root_name:
        return names[1:]
    return names


def _from_payload(payload: object, location: str) -> MappingDocumentSource:
    if not isinstance(payload, Mapping):
        raise SourceUnavailable(
            location, f"document root must be a mapping, got {type(payload).__name__}"
        )
    try:
        return MappingDocumentSource.from_mapping(payload, location=location)
    except ValueError as exc:
        raise SourceUnavailable(location, str(exc)) from exc


__all__ = [
    "ANY_DESCENDANT",
    "load_document",
    "validate_structure",
]
