"""Field resolution: path lookup, extraction rules, templates, and assembly."""

from gemha_settings.resolution.assembler import ProfileDraft, assemble, describe, emit_report
from gemha_settings.resolution.errors import (
    FieldResolutionError,
    InvalidFieldFormat,
    InvalidFieldValue,
    MissingRequiredField,
    ProfileAssemblyError,
    SchemaIssue,
    SchemaViolation,
    SettingsError,
    SourceUnavailable,
)
from gemha_settings.resolution.fields import FieldKind, FieldSpec, extract_field
from gemha_settings.resolution.paths import PathResolver
from gemha_settings.resolution.templates import (
    SequenceCounter,
    error_file_name,
    log_replacements,
    substitute,
    unresolved_tokens,
)

__all__ = [
    "FieldKind",
    "FieldResolutionError",
    "FieldSpec",
    "InvalidFieldFormat",
    "InvalidFieldValue",
    "MissingRequiredField",
    "PathResolver",
    "ProfileAssemblyError",
    "ProfileDraft",
    "SchemaIssue",
    "SchemaViolation",
    "SequenceCounter",
    "SettingsError",
    "SourceUnavailable",
    "assemble",
    "describe",
    "emit_report",
    "error_file_name",
    "extract_field",
    "log_replacements",
    "substitute",
    "unresolved_tokens",
]
