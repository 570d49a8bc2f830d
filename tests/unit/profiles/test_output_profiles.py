"""Unit tests for the file and socket output processor profiles."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

import pytest

from gemha_settings.profiles import (
    FileOutputSettings,
    MissingAuditKeyAction,
    SocketOutputSettings,
    load_profile,
)
from gemha_settings.profiles.file_output import build_file_output_settings
from gemha_settings.profiles.socket_output import build_socket_output_settings
from gemha_settings.resolution.errors import (
    InvalidFieldValue,
    MissingRequiredField,
    ProfileAssemblyError,
)
from gemha_settings.source import XmlDocumentSource

REPO_ROOT = Path(__file__).resolve().parents[3]
SAMPLES = REPO_ROOT / "samples" / "settings"
NOW = datetime(2026, 5, 6, 7, 8, 9, 10)


def _file_settings(params: str = "") -> FileOutputSettings:
    source = XmlDocumentSource.from_string(f"<Applic><Params>{params}</Params></Applic>")
    return build_file_output_settings(source, path_separator="/")


def _socket_settings(params: str) -> SocketOutputSettings:
    source = XmlDocumentSource.from_string(f"<Applic><Params>{params}</Params></Applic>")
    return build_socket_output_settings(source, path_separator="/")


def test_file_output_defaults() -> None:
    settings = _file_settings()

    assert settings.columns_location == "/MESSAGE/FILE_REQUEST/TABLE/ROW/COLUMNS"
    assert settings.messages_file_name_template == "LwProcessMessageForFile_?.txt"
    assert settings.field_separator == "\t"
    assert settings.include_column_names is False
    assert settings.file_open_mode == "create"
    assert settings.audit_keys.configured is False


def test_include_column_names_is_case_sensitive() -> None:
    assert _file_settings("<IncludeColumnNames>true</IncludeColumnNames>").include_column_names
    assert not _file_settings("<IncludeColumnNames>True</IncludeColumnNames>").include_column_names


def test_field_separator_is_unescaped() -> None:
    assert _file_settings("<FieldSeparator>\\r</FieldSeparator>").field_separator == "\r"
    assert _file_settings("<FieldSeparator>;</FieldSeparator>").field_separator == ";"


def test_messages_file_name_resolves_timestamp_and_sequence() -> None:
    settings = _file_settings("<MessagesFileNameTemplate>out_?_#.txt</MessagesFileNameTemplate>")

    assert settings.messages_file_name(now=NOW, sequence=4) == "out_20260506070809000010_4.txt"
    assert settings.messages_file_name(now=NOW) == "out_20260506070809000010_#.txt"


def test_file_output_report() -> None:
    report = _file_settings().report()

    assert "Field Separator is '\\t'" in report
    assert "Column Names will NOT be included in output." in report
    assert "AuditKeysSeparator is (not set)" in report


def test_socket_output_requires_a_port() -> None:
    with pytest.raises(ProfileAssemblyError) as excinfo:
        _socket_settings("<HostName>h</HostName>")

    assert isinstance(excinfo.value.cause, MissingRequiredField)
    assert excinfo.value.profile == "socket"


def test_socket_output_port_zero_is_rejected() -> None:
    with pytest.raises(ProfileAssemblyError) as excinfo:
        _socket_settings("<PortNumber>0</PortNumber>")

    assert isinstance(excinfo.value.cause, InvalidFieldValue)


def test_socket_output_defaults_host_to_localhost() -> None:
    settings = _socket_settings("<PortNumber>7000</PortNumber>")

    assert settings.address == ("localhost", 7000)
    assert settings.application_level_response is None
    assert "Port Number is 7000" in settings.report()


def test_sample_file_output_document() -> None:
    settings = load_profile(
        "file", SAMPLES / "file_output.toml", schema_validation=True, path_separator="/"
    )

    assert isinstance(settings, FileOutputSettings)
    assert settings.columns_location == "/MESSAGE/EXPORT/ROW/COLUMNS"
    assert settings.field_separator == "\t"
    assert settings.include_column_names is True
    assert settings.file_open_mode == "append"
    assert settings.audit_keys.action_on_missing is MissingAuditKeyAction.DISCARD
    assert settings.audit_keys.concatenate(["B-17"]) == "B-17"


def test_sample_socket_output_document() -> None:
    settings = load_profile(
        "socket", SAMPLES / "socket_output.json", schema_validation=True, path_separator="/"
    )

    assert isinstance(settings, SocketOutputSettings)
    assert settings.address == ("relay.internal", 9120)
    assert settings.application_level_response == "ACK"
    assert settings.audit_keys.locations == ("/MESSAGE/ID",)
    assert settings.audit_keys.action_on_missing is MissingAuditKeyAction.SHUTDOWN
