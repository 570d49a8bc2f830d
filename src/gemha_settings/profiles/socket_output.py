"""Settings for the processor that forwards messages to a socket server."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Final

from gemha_settings.constants import DEFAULT_SOCKET_HOST_NAME
from gemha_settings.profiles.common import AuditKeys, audit_key_specs, resolve_audit_keys
from gemha_settings.resolution.assembler import ProfileDraft, assemble, describe
from gemha_settings.resolution.fields import FieldKind, FieldSpec
from gemha_settings.resolution.paths import PathResolver
from gemha_settings.source.tree import DocumentSource

_PARAMS: Final[str] = "Applic/Params"
_AUDITING: Final[str] = "Applic/Auditing"

SOCKET_OUTPUT_FIELDS: Final[tuple[FieldSpec, ...]] = (
    FieldSpec(
        name="port_number",
        path=f"{_PARAMS}/PortNumber",
        kind=FieldKind.INTEGER,
        required=True,
        minimum=1,
    ),
    FieldSpec(name="host_name", path=f"{_PARAMS}/HostName", default=DEFAULT_SOCKET_HOST_NAME),
    FieldSpec(name="application_level_response", path=f"{_PARAMS}/ApplicationLevelResponse"),
)


def known_paths() -> tuple[str, ...]:
    return tuple(spec.path for spec in (*SOCKET_OUTPUT_FIELDS, *audit_key_specs(_AUDITING)))


@dataclass(frozen=True, slots=True)
class SocketOutputSettings:
    port_number: int
    host_name: str
    application_level_response: str | None
    audit_keys: AuditKeys = field(default_factory=AuditKeys)

    @property
    def address(self) -> tuple[str, int]:
        return (self.host_name, self.port_number)

    def report(self) -> tuple[str, ...]:
        lines = [
            f"Port Number is {self.port_number}",
            f"Host name {self.host_name}",
            f"ApplicationLevelResponse is {describe(self.application_level_response)}",
        ]
        lines.extend(self.audit_keys.report())
        return tuple(lines)


def build_socket_output_settings(
    source: DocumentSource, *, path_separator: str = os.sep
) -> SocketOutputSettings:
    def build(draft: ProfileDraft) -> SocketOutputSettings:
        draft.fields(SOCKET_OUTPUT_FIELDS)
        draft.put("audit_keys", resolve_audit_keys(draft, _AUDITING))
        return draft.finish(SocketOutputSettings)

    return assemble("socket", PathResolver(source), build, path_separator=path_separator)


__all__ = ["SocketOutputSettings", "build_socket_output_settings", "known_paths"]
