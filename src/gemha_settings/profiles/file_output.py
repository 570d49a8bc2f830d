"""Settings for the processor that writes message rows to delimited files."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from datetime import datetime
from typing import Final

from gemha_settings.constants import (
    DEFAULT_COLUMNS_LOCATION,
    DEFAULT_FIELD_SEPARATOR,
    DEFAULT_FILE_OPEN_MODE,
    DEFAULT_MESSAGES_FILE_NAME_TEMPLATE,
    ERROR_FILE_TIMESTAMP_FORMAT,
    TOKEN_SEQUENCE,
    TOKEN_TIMESTAMP,
)
from gemha_settings.profiles.common import AuditKeys, audit_key_specs, resolve_audit_keys
from gemha_settings.resolution.assembler import ProfileDraft, assemble, describe
from gemha_settings.resolution.fields import FieldKind, FieldSpec
from gemha_settings.resolution.paths import PathResolver
from gemha_settings.resolution.templates import substitute
from gemha_settings.source.tree import DocumentSource

_PARAMS: Final[str] = "Applic/Params"
_AUDITING: Final[str] = "Applic/Auditing"

FILE_OUTPUT_FIELDS: Final[tuple[FieldSpec, ...]] = (
    FieldSpec(
        name="columns_location",
        path=f"{_PARAMS}/ColumnsLocation",
        default=DEFAULT_COLUMNS_LOCATION,
    ),
    FieldSpec(
        name="messages_file_name_template",
        path=f"{_PARAMS}/MessagesFileNameTemplate",
        default=DEFAULT_MESSAGES_FILE_NAME_TEMPLATE,
    ),
    FieldSpec(
        name="field_separator",
        path=f"{_PARAMS}/FieldSeparator",
        kind=FieldKind.CONTROL_CHAR,
        default=DEFAULT_FIELD_SEPARATOR,
    ),
    FieldSpec(
        name="include_column_names",
        path=f"{_PARAMS}/IncludeColumnNames",
        kind=FieldKind.BOOLEAN,
        default=False,
    ),
    FieldSpec(
        name="file_open_mode",
        path=f"{_PARAMS}/FileOpenMode",
        default=DEFAULT_FILE_OPEN_MODE,
    ),
)


def known_paths() -> tuple[str, ...]:
    return tuple(spec.path for spec in (*FILE_OUTPUT_FIELDS, *audit_key_specs(_AUDITING)))


@dataclass(frozen=True, slots=True)
class FileOutputSettings:
    columns_location: str
    messages_file_name_template: str
    field_separator: str
    include_column_names: bool
    file_open_mode: str
    audit_keys: AuditKeys = field(default_factory=AuditKeys)

    def messages_file_name(self, *, now: datetime, sequence: int | None = None) -> str:
        """Resolve the messages file template for a file opened at ``now``."""

        replacements = {TOKEN_TIMESTAMP: now.strftime(ERROR_FILE_TIMESTAMP_FORMAT)}
        if sequence is not None:
            replacements[TOKEN_SEQUENCE] = str(sequence)
        return substitute(self.messages_file_name_template, replacements)

    def report(self) -> tuple[str, ...]:
        lines = [
            f"Location of Columns in received message is {self.columns_location}",
            f"Messages FileName Template is {self.messages_file_name_template}",
            f"Field Separator is {describe(self.field_separator)}",
            f"Column Names will {'' if self.include_column_names else 'NOT '}"
            "be included in output.",
            f"FileOpenMode is {self.file_open_mode}",
        ]
        lines.extend(self.audit_keys.report())
        return tuple(lines)


def build_file_output_settings(
    source: DocumentSource, *, path_separator: str = os.sep
) -> FileOutputSettings:
    def build(draft: ProfileDraft) -> FileOutputSettings:
        draft.fields(FILE_OUTPUT_FIELDS)
        draft.put("audit_keys", resolve_audit_keys(draft, _AUDITING))
        return draft.finish(FileOutputSettings)

    return assemble("file", PathResolver(source), build, path_separator=path_separator)


__all__ = ["FileOutputSettings", "build_file_output_settings", "known_paths"]
