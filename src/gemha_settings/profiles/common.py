"""Pieces shared by several profiles: audit keys and report formatting."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Final, cast

from gemha_settings.resolution.assembler import ProfileDraft, describe
from gemha_settings.resolution.fields import FieldKind, FieldSpec, extract_field
from gemha_settings.resolution.paths import PathResolver
from gemha_settings.source.tree import TagValue

ACTION_ON_ERROR_ATTRIBUTE: Final[str] = "ActionOnError"


class MissingAuditKeyAction(StrEnum):
    """What a handler does with a message whose audit key (or contract) is missing."""

    SHUTDOWN = "shutdown"
    DISCARD = "discard"
    NONE = "none"

    @classmethod
    def parse(cls, raw: str | None) -> MissingAuditKeyAction:
        """Absent means shutdown; any unrecognized value means none."""

        if raw is None or raw == cls.SHUTDOWN.value:
            return cls.SHUTDOWN
        if raw == cls.DISCARD.value:
            return cls.DISCARD
        return cls.NONE


@dataclass(frozen=True, slots=True)
class AuditKeys:
    """Audit-key aggregate: missing-key policy, ordered key locations, separator."""

    action_on_missing: MissingAuditKeyAction = MissingAuditKeyAction.SHUTDOWN
    key_names: tuple[TagValue, ...] = ()
    separator: str | None = None

    @property
    def configured(self) -> bool:
        return bool(self.key_names)

    @property
    def locations(self) -> tuple[str, ...]:
        """Message paths to read the key values from, in concatenation order."""

        return tuple(tag.value or "" for tag in self.key_names)

    def concatenate(self, values: Iterable[str | None]) -> str | None:
        """Join the values found at ``locations``, in order, skipping missing ones.

        Returns ``None`` when no value was found at all.
        """

        present = [value for value in values if value is not None]
        if not present:
            return None
        return (self.separator or "").join(present)

    def concatenate_from(self, message_values: Mapping[str, str]) -> str | None:
        return self.concatenate(message_values.get(location) for location in self.locations)

    def report(self, label: str = "Audit") -> list[str]:
        lines = [f"{label} keys missing from a message trigger: {self.action_on_missing.value}"]
        lines.extend(
            f"Found {label} KeyName Tag at {tag.path} Value={tag.value}" for tag in self.key_names
        )
        lines.append(f"AuditKeysSeparator is {describe(self.separator)}")
        return lines


def audit_key_specs(base: str) -> tuple[FieldSpec, FieldSpec, FieldSpec]:
    return (
        FieldSpec(name="aggregate", path=f"{base}/AuditKeys", kind=FieldKind.TAG),
        FieldSpec(name="key_names", path=f"{base}/AuditKeys/KeyName", kind=FieldKind.TAG_LIST),
        FieldSpec(name="separator", path=f"{base}/AuditKeysSeparator"),
    )


def resolve_audit_keys(
    draft: ProfileDraft, base: str, resolver: PathResolver | None = None
) -> AuditKeys:
    """Resolve ``<base>/AuditKeys`` (policy attribute and ``KeyName`` list) and the separator."""

    aggregate_spec, names_spec, separator_spec = audit_key_specs(base)
    scope = resolver or draft.resolver
    aggregate = extract_field(aggregate_spec, scope, path_separator=draft.path_separator)
    key_names = extract_field(names_spec, scope, path_separator=draft.path_separator)
    separator = extract_field(separator_spec, scope, path_separator=draft.path_separator)
    action_raw = None
    if isinstance(aggregate, TagValue):
        action_raw = aggregate.attribute(ACTION_ON_ERROR_ATTRIBUTE)
    return AuditKeys(
        action_on_missing=MissingAuditKeyAction.parse(action_raw),
        key_names=cast("tuple[TagValue, ...]", key_names),
        separator=cast("str | None", separator),
    )


def list_report(label: str, entries: Iterable[TagValue]) -> list[str]:
    return [f"Found {label} Tag at {tag.path} Value={tag.value}" for tag in entries]


__all__ = [
    "ACTION_ON_ERROR_ATTRIBUTE",
    "AuditKeys",
    "MissingAuditKeyAction",
    "audit_key_specs",
    "list_report",
    "resolve_audit_keys",
]
