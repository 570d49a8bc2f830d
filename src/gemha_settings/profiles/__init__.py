"""
gemha-settings — profile registry.

File: src/gemha_settings/profiles/__init__.py
Last updated: 2026-10-18

Purpose
- Map each profile kind to its builder and its structural path catalogue.

Key interfaces
- ``build_profile(kind, source)`` for an already-loaded document.
- ``load_profile(kind, path, schema_validation=...)`` for a document on disk.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Final, TypeAlias

from gemha_settings.profiles import database, file_output, handler, socket_output
from gemha_settings.profiles.common import AuditKeys, MissingAuditKeyAction
from gemha_settings.profiles.database import (
    DatabaseSettings,
    DbAction,
    PreparedStatementTemplate,
    build_database_settings,
)
from gemha_settings.profiles.file_output import FileOutputSettings, build_file_output_settings
from gemha_settings.profiles.handler import (
    HandlerSettings,
    InputMode,
    OutputMode,
    ProcessIdentity,
    build_handler_settings,
    build_queue_settings,
)
from gemha_settings.profiles.response import (
    ProcessResponse,
    ResponseCode,
    ResponseOptions,
    build_process_response,
)
from gemha_settings.profiles.socket_output import (
    SocketOutputSettings,
    build_socket_output_settings,
)
from gemha_settings.resolution.assembler import emit_report
from gemha_settings.source.loader import load_document
from gemha_settings.source.tree import DocumentSource

logger = logging.getLogger(__name__)

Profile: TypeAlias = HandlerSettings | FileOutputSettings | SocketOutputSettings | DatabaseSettings


@dataclass(frozen=True, slots=True)
class ProfileKind:
    name: str
    description: str
    build: Callable[..., Profile]
    known_paths: Callable[[], tuple[str, ...]]
    uses_process_identity: bool = False


PROFILE_KINDS: Final[Mapping[str, ProfileKind]] = MappingProxyType(
    {
        "handler": ProfileKind(
            name="handler",
            description="generic message handler",
            build=build_handler_settings,
            known_paths=handler.known_paths,
            uses_process_identity=True,
        ),
        "queue": ProfileKind(
            name="queue",
            description="queue-fed message handler",
            build=build_queue_settings,
            known_paths=handler.known_paths,
            uses_process_identity=True,
        ),
        "file": ProfileKind(
            name="file",
            description="delimited file output processor",
            build=build_file_output_settings,
            known_paths=file_output.known_paths,
        ),
        "socket": ProfileKind(
            name="socket",
            description="socket output processor",
            build=build_socket_output_settings,
            known_paths=socket_output.known_paths,
        ),
        "database": ProfileKind(
            name="database",
            description="database processor",
            build=build_database_settings,
            known_paths=database.known_paths,
        ),
    }
)


def profile_kind(kind: str) -> ProfileKind:
    try:
        return PROFILE_KINDS[kind]
    except KeyError:
        expected = ", ".join(PROFILE_KINDS)
        raise ValueError(f"unknown profile kind {kind!r}; expected one of: {expected}") from None


def build_profile(
    kind: str,
    source: DocumentSource,
    *,
    identity: ProcessIdentity | None = None,
    path_separator: str = os.sep,
    report_logger: logging.Logger | None = None,
) -> Profile:
    """Assemble one profile from ``source``.

    When ``report_logger`` is given, the settings report is written to it once
    the profile is complete.
    """

    entry = profile_kind(kind)
    if entry.uses_process_identity:
        profile = entry.build(source, identity=identity, path_separator=path_separator)
    else:
        profile = entry.build(source, path_separator=path_separator)
    logger.debug("assembled %s settings from %s", kind, source.location)
    if report_logger is not None:
        emit_report(profile, report_logger)
    return profile


def load_profile(
    kind: str,
    path: str | Path,
    *,
    schema_validation: bool = False,
    identity: ProcessIdentity | None = None,
    path_separator: str = os.sep,
    report_logger: logging.Logger | None = None,
) -> Profile:
    """Load the document at ``path`` and assemble a ``kind`` profile from it."""

    entry = profile_kind(kind)
    source = load_document(
        path, schema_validation=schema_validation, known_paths=entry.known_paths()
    )
    return build_profile(
        kind,
        source,
        identity=identity,
        path_separator=path_separator,
        report_logger=report_logger,
    )


__all__ = [
    "AuditKeys",
    "DatabaseSettings",
    "DbAction",
    "FileOutputSettings",
    "HandlerSettings",
    "InputMode",
    "MissingAuditKeyAction",
    "OutputMode",
    "PROFILE_KINDS",
    "PreparedStatementTemplate",
    "ProcessIdentity",
    "ProcessResponse",
    "Profile",
    "ProfileKind",
    "ResponseCode",
    "ResponseOptions",
    "SocketOutputSettings",
    "build_process_response",
    "build_profile",
    "load_profile",
    "profile_kind",
]
