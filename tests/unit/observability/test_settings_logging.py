"""
gemha-settings — unit tests for settings log sinks

File: tests/unit/observability/test_settings_logging.py
Last updated: 2026-10-18

Purpose
- Validate queue-backed settings logging, redaction, and handler log file naming.

What this test file should cover
- Text and JSON-lines output with the CONFIG level name.
- Redaction of password-like keys and assignments.
- Idempotent shutdown and context-manager use.
- Deferred datetime and sequence markers filled in when the handler log opens.

Functional requirements
- Offline operation; every sink writes under ``tmp_path``.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path
from uuid import uuid4

import pytest

from gemha_settings.constants import LOG_LEVEL_CONFIG
from gemha_settings.observability import (
    LoggingConfig,
    default_log_redactor,
    open_handler_log,
    parse_log_level,
    register_level_names,
    setup_settings_logging,
)
from gemha_settings.profiles import ProcessIdentity
from gemha_settings.profiles.handler import build_handler_settings
from gemha_settings.source import XmlDocumentSource

NOW = datetime(2026, 10, 18, 6, 30, 0, 125)


def _logger_name() -> str:
    return f"tests.settings_logging.{uuid4().hex}"


def test_text_sink_uses_config_level_name(tmp_path: Path) -> None:
    log_path = tmp_path / "settings.log"
    handle = setup_settings_logging(LoggingConfig(log_path=log_path, logger_name=_logger_name()))

    handle.logger.log(LOG_LEVEL_CONFIG, "Input Queue Name is %s", "ORDERS.IN")
    handle.logger.debug("below the threshold")
    handle.shutdown()

    lines = log_path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 1
    assert " CONFIG " in lines[0]
    assert lines[0].endswith("Input Queue Name is ORDERS.IN")


def test_json_sink_redacts_secrets_and_carries_context(tmp_path: Path) -> None:
    log_path = tmp_path / "nested" / "settings.jsonl"
    handle = setup_settings_logging(
        LoggingConfig(
            log_path=log_path,
            logger_name=_logger_name(),
            level="FINE",
            log_format="json",
            base_context={"profile": "database"},
        )
    )

    handle.logger.info("connect UserPass=hunter2", extra={"user_pass": "hunter2", "rows": 3})
    handle.shutdown()

    content = log_path.read_text(encoding="utf-8")
    assert "hunter2" not in content
    event = json.loads(content.splitlines()[0])
    assert event["profile"] == "database"
    assert event["level"] == "INFO"
    assert event["message"] == "connect UserPass=***REDACTED***"
    assert event["fields"] == {"rows": 3, "user_pass": "***REDACTED***"}
    assert event["timestamp"].endswith("Z")


def test_shutdown_is_idempotent_and_context_managed(tmp_path: Path) -> None:
    log_path = tmp_path / "settings.log"
    with setup_settings_logging(
        LoggingConfig(log_path=log_path, logger_name=_logger_name(), level="INFO")
    ) as handle:
        for index in range(50):
            handle.logger.info("line %d", index)

    assert handle.is_shutdown
    handle.shutdown()
    assert handle.dropped_records == 0
    assert len(log_path.read_text(encoding="utf-8").splitlines()) == 50
    assert handle.logger.handlers == []


def test_invalid_sink_configuration_is_rejected(tmp_path: Path) -> None:
    with pytest.raises(ValueError, match="log_format"):
        setup_settings_logging(
            LoggingConfig(log_path=tmp_path / "x.log", log_format="xml")  # type: ignore[arg-type]
        )
    with pytest.raises(ValueError, match="queue_size"):
        setup_settings_logging(LoggingConfig(log_path=tmp_path / "x.log", queue_size=0))
    with pytest.raises(ValueError, match="logger_name"):
        setup_settings_logging(LoggingConfig(log_path=tmp_path / "x.log", logger_name="  "))


def test_handler_log_resolves_deferred_markers(tmp_path: Path) -> None:
    source = XmlDocumentSource.from_string(
        "<Applic>"
        f"<Logging><LogFileDir>{tmp_path}</LogFileDir>"
        "<LogFileNameTemplate>h_*_$_?_#.log</LogFileNameTemplate>"
        "<Level><GeneralLoggingLevel>info</GeneralLoggingLevel></Level></Logging>"
        "<Processing><MessageProcessingClassName>Proc</MessageProcessingClassName></Processing>"
        "</Applic>"
    )
    settings = build_handler_settings(
        source, identity=ProcessIdentity(pid="77", ppid="1"), path_separator="/"
    )
    assert settings.log_file_name == f"{tmp_path}/h_Proc_77_[%datetime%]_[%seqno%].log"

    with open_handler_log(settings, now=NOW, sequence=3, logger_name=_logger_name()) as handle:
        handle.logger.info("started")
        handle.logger.log(LOG_LEVEL_CONFIG, "suppressed at INFO")

    expected = tmp_path / "h_Proc_77_20261018063000000125_3.log"
    assert handle.log_path == expected
    assert expected.read_text(encoding="utf-8").count("\n") == 1


@pytest.mark.parametrize(
    ("value", "expected"),
    [("CONFIG", 15), ("finest", 5), (" warning ", 30), ("OFF", 60), (12, 12)],
)
def test_parse_log_level(value: int | str, expected: int) -> None:
    assert parse_log_level(value) == expected


@pytest.mark.parametrize("value", [True, "VERBOSE", 1.5])
def test_parse_log_level_rejects_other_values(value: object) -> None:
    with pytest.raises(ValueError):
        parse_log_level(value)  # type: ignore[arg-type]


def test_register_level_names_adds_java_names() -> None:
    register_level_names()

    assert logging.getLevelName(LOG_LEVEL_CONFIG) == "CONFIG"
    assert logging.getLevelName(8) == "FINER"
    assert logging.getLevelName(5) == "FINEST"


def test_default_redactor_walks_nested_values() -> None:
    redacted = default_log_redactor(
        {"db": {"UserPass": "x", "UserName": "app"}, "notes": ["token=abc", "plain"]}
    )

    assert redacted == {
        "db": {"UserPass": "***REDACTED***", "UserName": "app"},
        "notes": ["token=***REDACTED***", "plain"],
    }
