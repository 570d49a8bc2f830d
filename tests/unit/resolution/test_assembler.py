"""Unit tests for catalogue-driven assembly and the settings report."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import pytest

from gemha_settings.constants import LOG_LEVEL_CONFIG
from gemha_settings.resolution import (
    FieldKind,
    FieldSpec,
    MissingRequiredField,
    PathResolver,
    ProfileAssemblyError,
    ProfileDraft,
    assemble,
    describe,
    emit_report,
)
from gemha_settings.source import XmlDocumentSource

SPECS = (
    FieldSpec(name="host", path="Params/HostName", default="localhost"),
    FieldSpec(name="port", path="Params/PortNumber", kind=FieldKind.INTEGER, required=True),
)


@dataclass(frozen=True, slots=True)
class _Endpoint:
    host: str
    port: int

    def report(self) -> tuple[str, ...]:
        return (f"Host name {self.host}", f"Port Number is {self.port}")


def _resolver(xml: str) -> PathResolver:
    return PathResolver(XmlDocumentSource.from_string(xml))


def _build(draft: ProfileDraft) -> _Endpoint:
    draft.fields(SPECS)
    return draft.finish(_Endpoint)


def test_assemble_returns_frozen_profile() -> None:
    endpoint = assemble(
        "endpoint", _resolver("<A><Params><PortNumber>80</PortNumber></Params></A>"), _build
    )

    assert endpoint == _Endpoint(host="localhost", port=80)


def test_field_failures_are_wrapped_once_with_cause() -> None:
    with pytest.raises(ProfileAssemblyError) as excinfo:
        assemble("endpoint", _resolver("<A><Params/></A>"), _build)

    error = excinfo.value
    assert error.profile == "endpoint"
    assert error.field_path == "Params/PortNumber"
    assert error.reason == "missing required field"
    assert isinstance(error.cause, MissingRequiredField)
    assert error.__cause__ is error.cause


def test_draft_put_and_get_round_out_derived_values() -> None:
    draft = ProfileDraft("endpoint", _resolver("<A/>"))
    draft.put("host", "h")

    assert draft.get("host") == "h"
    assert draft.get("missing") is None
    assert draft.profile == "endpoint"


def test_emit_report_logs_each_line_at_config(caplog: pytest.LogCaptureFixture) -> None:
    logger = logging.getLogger("tests.gemha_settings.report")
    caplog.set_level(LOG_LEVEL_CONFIG, logger=logger.name)

    emit_report(_Endpoint(host="h", port=1), logger)

    assert [record.getMessage() for record in caplog.records] == [
        "Host name h",
        "Port Number is 1",
    ]
    assert {record.levelno for record in caplog.records} == {LOG_LEVEL_CONFIG}


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (None, "(not set)"),
        (True, "true"),
        (False, "false"),
        ("plain", "plain"),
        ("\t", "'\\t'"),
        (" padded ", "' padded '"),
        (7, "7"),
    ],
)
def test_describe_renders_report_values(value: object, expected: str) -> None:
    assert describe(value) == expected
