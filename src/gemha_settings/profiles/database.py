"""
gemha-settings — database processor settings.

File: src/gemha_settings/profiles/database.py
Last updated: 2026-10-18

Purpose
- Resolve connection parameters, prepared statement templates and per-action audit keys.

Functional requirements
- ``PreparedStatements/PreparedStatement[i]`` is read for i = 1, 2, ... until one is absent.
- A statement without ``ParameterOrder`` has an empty parameter list.
- ``Auditing/AuditKeys[i]`` blocks are routed by their ``DbAction`` attribute; blocks with no
  or an unrecognized action are ignored, and a later block for the same action wins.
- The password is never part of the settings report or the repr.

Notes
- Paths are relative to the document root, whatever its name.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from types import MappingProxyType
from typing import Final, cast

from gemha_settings.constants import DEFAULT_JDBC_CLASS, DEFAULT_UPDATE_LOCKING_STRATEGY
from gemha_settings.profiles.common import list_report
from gemha_settings.resolution.assembler import ProfileDraft, assemble, describe
from gemha_settings.resolution.fields import FieldKind, FieldSpec, extract_field
from gemha_settings.resolution.paths import PathResolver
from gemha_settings.source.tree import DocumentSource, TagValue

RETURN_TYPE_ATTRIBUTE: Final[str] = "ReturnType"
DB_ACTION_ATTRIBUTE: Final[str] = "DbAction"
_PREPARED_STATEMENTS: Final[str] = "PreparedStatements/PreparedStatement"
_AUDIT_KEYS: Final[str] = "Auditing/AuditKeys"


class DbAction(StrEnum):
    INSERT = "insert"
    UPDATE = "update"
    DELETE = "delete"
    SELECT = "select"


CONNECTION_FIELDS: Final[tuple[FieldSpec, ...]] = (
    FieldSpec(name="jdbc_class", path="Params/JdbcClass", default=DEFAULT_JDBC_CLASS),
    FieldSpec(name="db_url", path="Params/DbURL"),
    FieldSpec(name="user_name", path="Params/UserName"),
    FieldSpec(name="user_pass", path="Params/UserPass"),
    FieldSpec(
        name="auto_commit",
        path="Params/AutoCommit",
        kind=FieldKind.BOOLEAN,
        default=True,
        true_literal="on",
        case_sensitive=False,
    ),
    FieldSpec(name="default_tablename", path="Params/DefaultTablename"),
    FieldSpec(
        name="update_locking_strategy",
        path="Params/UpdateLockingStrategy",
        default=DEFAULT_UPDATE_LOCKING_STRATEGY,
    ),
    FieldSpec(name="date_format", path="Params/DateFormat"),
    FieldSpec(name="audit_keys_separator", path="Auditing/AuditKeysSeparator"),
)

STATEMENT_NAME_FIELD: Final[FieldSpec] = FieldSpec(
    name="name", path="PreparedStatementName", required=True
)
STATEMENT_SQL_FIELD: Final[FieldSpec] = FieldSpec(
    name="sql", path="PreparedStatementSQL", kind=FieldKind.TAG, required=True
)
PARAMETER_ORDER_FIELD: Final[FieldSpec] = FieldSpec(
    name="parameter_names", path="ParameterOrder", kind=FieldKind.CHILDREN
)
KEY_NAMES_FIELD: Final[FieldSpec] = FieldSpec(
    name="key_names", path="KeyName", kind=FieldKind.TAG_LIST
)


def known_paths() -> tuple[str, ...]:
    return (
        *(spec.path for spec in CONNECTION_FIELDS),
        f"{_PREPARED_STATEMENTS}/{STATEMENT_NAME_FIELD.path}",
        f"{_PREPARED_STATEMENTS}/{STATEMENT_SQL_FIELD.path}",
        f"{_PREPARED_STATEMENTS}/{PARAMETER_ORDER_FIELD.path}/*",
        f"{_AUDIT_KEYS}/{KEY_NAMES_FIELD.path}",
    )


def count_placeholders(sql: str) -> int:
    """Count ``?`` bind markers outside single-quoted literals."""

    count = 0
    quoted = False
    for char in sql:
        if char == "'":
            quoted = not quoted
        elif char == "?" and not quoted:
            count += 1
    return count


@dataclass(frozen=True, slots=True)
class PreparedStatementTemplate:
    """Named SQL text with its ordered bind-parameter names.

    The placeholder count is exposed but not checked against ``parameter_names``;
    that check belongs to whatever executes the statement.
    """

    name: str
    sql: str
    parameter_names: tuple[str, ...] = ()
    return_type: str | None = None

    @property
    def placeholder_count(self) -> int:
        return count_placeholders(self.sql)


_EMPTY_AUDIT_KEYS: Final[Mapping[DbAction, tuple[TagValue, ...]]] = MappingProxyType({})


@dataclass(frozen=True, slots=True)
class DatabaseSettings:
    jdbc_class: str
    db_url: str | None
    user_name: str | None
    user_pass: str | None = field(repr=False)
    auto_commit: bool
    default_tablename: str | None
    update_locking_strategy: str
    date_format: str | None
    audit_keys_separator: str | None
    prepared_statements: tuple[PreparedStatementTemplate, ...] = ()
    audit_keys_by_action: Mapping[DbAction, tuple[TagValue, ...]] = field(
        default_factory=lambda: _EMPTY_AUDIT_KEYS
    )

    def audit_key_names(self, action: str | None) -> tuple[TagValue, ...]:
        """Key locations for ``action``; matching ignores case and unknown actions mean select."""

        if action is None:
            return ()
        try:
            resolved = DbAction(action.lower())
        except ValueError:
            resolved = DbAction.SELECT
        return self.audit_keys_by_action.get(resolved, ())

    def prepared_statement(self, name: str) -> PreparedStatementTemplate | None:
        for statement in self.prepared_statements:
            if statement.name == name:
                return statement
        return None

    def report(self) -> tuple[str, ...]:
        lines = [
            f"Jdbc Class Driver name is {self.jdbc_class}",
            f"Database URL is {describe(self.db_url)}",
            f"UserName is {describe(self.user_name)}",
            f"Application AutoCommit is {'on' if self.auto_commit else 'off'}",
            f"DefaultTablename is {describe(self.default_tablename)}",
            f"UpdateLockingStrategy is {self.update_locking_strategy}",
            "DateFormat for queries and results is "
            f"{self.date_format if self.date_format is not None else 'database default'}",
        ]
        for statement in self.prepared_statements:
            parameters = ", ".join(statement.parameter_names) or "(none)"
            lines.append(
                f"Found Prepared Statement {statement.name} "
                f"(returns {describe(statement.return_type)}): {statement.sql}"
            )
            lines.append(f"Prepared Statement {statement.name} parameter order: {parameters}")
        for action in DbAction:
            lines.extend(
                list_report(f"Audit {action.value.title()} KeyName", self.audit_key_names(action))
            )
        lines.append(f"AuditKeysSeparator is {describe(self.audit_keys_separator)}")
        return tuple(lines)


def build_database_settings(
    source: DocumentSource, *, path_separator: str = os.sep
) -> DatabaseSettings:
    def build(draft: ProfileDraft) -> DatabaseSettings:
        draft.fields(CONNECTION_FIELDS)
        draft.put("prepared_statements", _resolve_prepared_statements(draft))
        draft.put("audit_keys_by_action", _resolve_audit_keys(draft))
        return draft.finish(DatabaseSettings)

    return assemble("database", PathResolver(source), build, path_separator=path_separator)


def _resolve_prepared_statements(draft: ProfileDraft) -> tuple[PreparedStatementTemplate, ...]:
    statements: list[PreparedStatementTemplate] = []
    for scope in draft.resolver.repeated(_PREPARED_STATEMENTS):
        name = extract_field(STATEMENT_NAME_FIELD, scope)
        sql = cast("TagValue", extract_field(STATEMENT_SQL_FIELD, scope))
        parameters = cast("tuple[str, ...]", extract_field(PARAMETER_ORDER_FIELD, scope))
        statements.append(
            PreparedStatementTemplate(
                name=str(name),
                sql=sql.value or "",
                parameter_names=parameters,
                return_type=sql.attribute(RETURN_TYPE_ATTRIBUTE),
            )
        )
    return tuple(statements)


def _resolve_audit_keys(draft: ProfileDraft) -> Mapping[DbAction, tuple[TagValue, ...]]:
    by_action: dict[DbAction, tuple[TagValue, ...]] = {}
    for scope in draft.resolver.repeated(_AUDIT_KEYS):
        block = scope.get_with_attributes("")
        raw_action = block.attribute(DB_ACTION_ATTRIBUTE) if block is not None else None
        if raw_action not in {action.value for action in DbAction}:
            continue
        key_names = cast("tuple[TagValue, ...]", extract_field(KEY_NAMES_FIELD, scope))
        by_action[DbAction(raw_action)] = key_names
    return MappingProxyType(by_action)


__all__ = [
    "DatabaseSettings",
    "DbAction",
    "PreparedStatementTemplate",
    "build_database_settings",
    "count_placeholders",
    "known_paths",
]
