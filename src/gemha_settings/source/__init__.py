"""Path-addressable settings documents: XML, YAML, TOML, and JSON sources."""

from gemha_settings.source.loader import ANY_DESCENDANT, load_document, validate_structure
from gemha_settings.source.mapping_source import MappingDocumentSource
from gemha_settings.source.tree import (
    DocumentSource,
    Node,
    TagValue,
    TreeDocumentSource,
    parse_path,
    strip_indices,
)
from gemha_settings.source.xml_source import XmlDocumentSource

__all__ = [
    "ANY_DESCENDANT",
    "DocumentSource",
    "MappingDocumentSource",
    "Node",
    "TagValue",
    "TreeDocumentSource",
    "XmlDocumentSource",
    "load_document",
    "parse_path",
    "strip_indices",
    "validate_structure",
]
