"""
gemha-settings — unit tests for the CLI router and exit-code contract

File: tests/unit/test_main_exit_codes.py
Last updated: 2026-10-18

Purpose
- Run ``cli_entrypoint`` in-process and check output and exit codes per failure class.

What this test file should cover
- show, show --json, check, and kinds on the bundled samples.
- 2 for settings errors, 3 for unreadable or structurally invalid documents.
- The settings report written to ``--log-file``.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from gemha_settings.main import ExitCode, cli_entrypoint, route_exception
from gemha_settings.resolution.errors import (
    MissingRequiredField,
    ProfileAssemblyError,
    SourceUnavailable,
)

REPO_ROOT = Path(__file__).resolve().parents[2]
SAMPLES = REPO_ROOT / "samples" / "settings"


@pytest.fixture(autouse=True)
def _clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "GEMHA_SETTINGS_FILE",
        "GEMHA_PROFILE",
        "GEMHA_SCHEMA_VALIDATION",
        "GEMHA_LOG_FORMAT",
        "GEMHA_LOG_TO_STDOUT",
        "GEMHA_LOG_LEVEL",
        "GEMHA_PPID",
    ):
        monkeypatch.delenv(name, raising=False)


def test_show_prints_the_report(capsys: pytest.CaptureFixture[str]) -> None:
    code = cli_entrypoint(
        ["show", str(SAMPLES / "handler_queue.xml"), "--profile", "queue", "--ppid", "9001"]
    )

    out = capsys.readouterr().out.splitlines()
    assert code == ExitCode.SUCCESS
    assert "Parent Process ID is 9001" in out
    assert "Log Level initialised to FINE" in out
    assert "Will only accept messages with Data Contract Name=ORDERS_V2" in out


def test_show_json_redacts_the_password(capsys: pytest.CaptureFixture[str]) -> None:
    code = cli_entrypoint(
        ["show", str(SAMPLES / "database.yaml"), "--profile", "database", "--json"]
    )

    out = capsys.readouterr().out
    payload = json.loads(out)
    assert code == ExitCode.SUCCESS
    assert payload["profile"] == "database"
    assert payload["settings"]["user_pass"] == "***REDACTED***"
    assert payload["settings"]["auto_commit"] is False
    assert "change-me" not in out


def test_check_with_schema_validation(capsys: pytest.CaptureFixture[str]) -> None:
    sample = SAMPLES / "socket_output.json"

    code = cli_entrypoint(["check", str(sample), "--profile", "socket", "--schema-validation"])

    assert code == ExitCode.SUCCESS
    assert capsys.readouterr().out.strip() == f"ok: socket settings from {sample}"


def test_path_and_profile_from_environment(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setenv("GEMHA_SETTINGS_FILE", str(SAMPLES / "file_output.toml"))
    monkeypatch.setenv("GEMHA_PROFILE", "file")

    assert cli_entrypoint(["check"]) == ExitCode.SUCCESS
    assert capsys.readouterr().out.startswith("ok: file settings from ")


def test_kinds_lists_every_profile(capsys: pytest.CaptureFixture[str]) -> None:
    assert cli_entrypoint(["kinds"]) == ExitCode.SUCCESS

    names = [line.split()[0] for line in capsys.readouterr().out.splitlines()]
    assert names == ["handler", "queue", "file", "socket", "database"]


def test_missing_document_exits_3(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code = cli_entrypoint(["check", str(tmp_path / "absent.xml")])

    assert code == ExitCode.SOURCE_UNAVAILABLE
    assert "file not found" in capsys.readouterr().err


def test_undecodable_document_exits_3(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    document = tmp_path / "socket.json"
    document.write_bytes(b"\xff\xfe{}")

    code = cli_entrypoint(["check", str(document), "--profile", "socket"])

    assert code == ExitCode.SOURCE_UNAVAILABLE
    assert "invalid encoding" in capsys.readouterr().err


def test_structural_violation_exits_3(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    document = tmp_path / "handler.xml"
    document.write_text("<Applic><Bogus>1</Bogus></Applic>", encoding="utf-8")

    code = cli_entrypoint(["check", str(document), "--schema-validation"])

    assert code == ExitCode.SOURCE_UNAVAILABLE
    assert "- /Applic/Bogus: unknown element" in capsys.readouterr().err


def test_assembly_failure_exits_2(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    document = tmp_path / "queue.xml"
    document.write_text("<Applic><Input/></Applic>", encoding="utf-8")

    code = cli_entrypoint(["check", str(document), "--profile", "queue"])

    assert code == ExitCode.SETTINGS_ERROR
    err = capsys.readouterr().err
    assert err.startswith("error: ")
    assert "QueueName" in err


def test_missing_path_exits_2(capsys: pytest.CaptureFixture[str]) -> None:
    assert cli_entrypoint(["show"]) == ExitCode.SETTINGS_ERROR
    assert "no settings document given" in capsys.readouterr().err


def test_invalid_environment_option_exits_2(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setenv("GEMHA_LOG_FORMAT", "xml")

    code = cli_entrypoint(["check", str(SAMPLES / "database.yaml"), "--profile", "database"])

    assert code == ExitCode.SETTINGS_ERROR
    assert "GEMHA_LOG_FORMAT must be one of" in capsys.readouterr().err


def test_usage_error_exits_2() -> None:
    assert cli_entrypoint(["show", "--profile", "ftp"]) == ExitCode.SETTINGS_ERROR


def test_log_file_receives_the_report(tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "report.log"

    code = cli_entrypoint(
        [
            "check",
            str(SAMPLES / "socket_output.json"),
            "--profile",
            "socket",
            "--log-file",
            str(log_file),
        ]
    )

    assert code == ExitCode.SUCCESS
    lines = log_file.read_text(encoding="utf-8").splitlines()
    assert any(line.endswith("Port Number is 9120") for line in lines)
    assert all(" CONFIG " in line for line in lines)


def test_log_file_level_can_suppress_the_report(tmp_path: Path) -> None:
    log_file = tmp_path / "report.log"

    code = cli_entrypoint(
        [
            "check",
            str(SAMPLES / "socket_output.json"),
            "--profile",
            "socket",
            "--log-file",
            str(log_file),
            "--log-level",
            "INFO",
        ]
    )

    assert code == ExitCode.SUCCESS
    assert log_file.read_text(encoding="utf-8") == ""


@pytest.mark.parametrize(
    ("exc", "expected"),
    [
        (SourceUnavailable("x.xml", "file not found"), ExitCode.SOURCE_UNAVAILABLE),
        (
            ProfileAssemblyError("queue", MissingRequiredField("Applic/Q")),
            ExitCode.SETTINGS_ERROR,
        ),
        (PermissionError("denied"), ExitCode.SOURCE_UNAVAILABLE),
        (ValueError("bad"), ExitCode.SETTINGS_ERROR),
        (KeyError("boom"), ExitCode.INTERNAL_ERROR),
    ],
)
def test_route_exception(exc: BaseException, expected: ExitCode) -> None:
    assert route_exception(exc) is expected


def test_route_exception_follows_the_cause_chain() -> None:
    try:
        try:
            raise SourceUnavailable("x.xml", "unreadable")
        except SourceUnavailable as inner:
            raise RuntimeError("wrapped") from inner
    except RuntimeError as outer:
        assert route_exception(outer) is ExitCode.SOURCE_UNAVAILABLE
