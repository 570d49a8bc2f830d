"""
gemha-settings — unit tests for field extraction

File: tests/unit/resolution/test_field_extraction.py
Last updated: 2026-10-18

Purpose
- Validate lookup, default, required, coercion, and validation rules of ``extract_field``.

What this test file should cover
- ``0`` versus absence for floor-1 integers.
- Strict integer grammar and the 32-bit range.
- Per-field boolean literals and case sensitivity.
- Directory normalization and control-character unescaping.
- Ordered list kinds never resolving to ``None``.
"""

from __future__ import annotations

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from gemha_settings.resolution.errors import (
    FieldResolutionError,
    InvalidFieldFormat,
    InvalidFieldValue,
    MissingRequiredField,
)
from gemha_settings.resolution.fields import (
    FieldKind,
    FieldSpec,
    extract_field,
    extract_fields,
    normalize_directory,
    parse_int,
    unescape_control,
)
from gemha_settings.resolution.paths import PathResolver
from gemha_settings.source import TagValue, XmlDocumentSource

LIMIT = FieldSpec(
    name="input_limit", path="Params/InputLimit", kind=FieldKind.INTEGER, default=0, minimum=1
)


def _resolver(body: str) -> PathResolver:
    return PathResolver(XmlDocumentSource.from_string(f"<Applic><Params>{body}</Params></Applic>"))


def test_absent_optional_field_yields_default() -> None:
    resolver = _resolver("")

    assert extract_field(LIMIT, resolver) == 0
    assert extract_field(FieldSpec(name="x", path="Params/X"), resolver) is None
    assert extract_field(FieldSpec(name="x", path="Params/X", default="d"), resolver) == "d"


def test_absent_required_field_raises_with_path() -> None:
    spec = FieldSpec(name="port", path="Params/PortNumber", kind=FieldKind.INTEGER, required=True)

    with pytest.raises(MissingRequiredField) as excinfo:
        extract_field(spec, _resolver(""))

    assert excinfo.value.path == "Params/PortNumber"
    assert excinfo.value.field == "PortNumber"


def test_zero_is_rejected_for_floor_one_fields() -> None:
    with pytest.raises(InvalidFieldValue, match=r"must be >= 1 \(0 not allowed\)") as excinfo:
        extract_field(LIMIT, _resolver("<InputLimit>0</InputLimit>"))

    assert excinfo.value.field == "InputLimit"
    assert excinfo.value.value == 0


def test_negative_values_are_rejected_without_zero_note() -> None:
    with pytest.raises(InvalidFieldValue) as excinfo:
        extract_field(LIMIT, _resolver("<InputLimit>-4</InputLimit>"))

    assert "0 not allowed" not in str(excinfo.value)


def test_zero_floor_accepts_zero() -> None:
    spec = FieldSpec(name="min", path="Params/Min", kind=FieldKind.INTEGER, default=1, minimum=0)

    assert extract_field(spec, _resolver("<Min>0</Min>")) == 0
    with pytest.raises(InvalidFieldValue):
        extract_field(spec, _resolver("<Min>-1</Min>"))


@pytest.mark.parametrize("raw", ["abc", "1.5", "", " 7", "0x10", "1e3", "++1"])
def test_non_numeric_text_is_a_format_error(raw: str) -> None:
    with pytest.raises(InvalidFieldFormat) as excinfo:
        extract_field(LIMIT, _resolver(f"<InputLimit>{raw}</InputLimit>"))

    assert excinfo.value.raw_value == raw


def test_integer_grammar_and_range() -> None:
    assert parse_int("+42", "p") == 42
    assert parse_int("-7", "p") == -7
    assert parse_int("2147483647", "p") == 2**31 - 1
    with pytest.raises(InvalidFieldFormat, match="32-bit integer"):
        parse_int("2147483648", "p")


@given(value=st.integers(min_value=1, max_value=2**31 - 1))
@settings(max_examples=50, deadline=None)
def test_every_positive_integer_passes_the_floor(value: int) -> None:
    assert extract_field(LIMIT, _resolver(f"<InputLimit>{value}</InputLimit>")) == value


@pytest.mark.parametrize(
    ("raw", "case_sensitive", "expected"),
    [
        ("true", True, True),
        ("TRUE", True, False),
        ("TRUE", False, True),
        ("yes", False, False),
    ],
)
def test_booleans_compare_against_the_field_literal(
    raw: str, case_sensitive: bool, expected: bool
) -> None:
    spec = FieldSpec(
        name="flag", path="Params/Flag", kind=FieldKind.BOOLEAN, case_sensitive=case_sensitive
    )

    assert extract_field(spec, _resolver(f"<Flag>{raw}</Flag>")) is expected


def test_boolean_with_on_literal() -> None:
    spec = FieldSpec(
        name="auto_commit",
        path="Params/AutoCommit",
        kind=FieldKind.BOOLEAN,
        default=True,
        true_literal="on",
        case_sensitive=False,
    )

    assert extract_field(spec, _resolver("<AutoCommit>ON</AutoCommit>")) is True
    assert extract_field(spec, _resolver("<AutoCommit>true</AutoCommit>")) is False
    assert extract_field(spec, _resolver("")) is True


def test_enum_fields_return_the_canonical_choice() -> None:
    spec = FieldSpec(
        name="level",
        path="Params/Level",
        kind=FieldKind.ENUM,
        choices=("FINE", "CONFIG"),
        case_sensitive=False,
    )

    assert extract_field(spec, _resolver("<Level>fine</Level>")) == "FINE"
    with pytest.raises(InvalidFieldValue, match="expected one of: FINE, CONFIG"):
        extract_field(spec, _resolver("<Level>LOUD</Level>"))


def test_directory_values_gain_a_trailing_separator() -> None:
    spec = FieldSpec(name="dir", path="Params/Dir", kind=FieldKind.DIRECTORY, default=".")

    def resolve(body: str) -> object:
        return extract_field(spec, _resolver(body), path_separator="/")

    assert resolve("<Dir>/var/err</Dir>") == "/var/err/"
    assert resolve("<Dir>/var/err/</Dir>") == "/var/err/"
    assert resolve("") == "./"
    assert normalize_directory("", "/") == ""
    assert normalize_directory(r"C:\logs", "\\") == "C:\\logs\\"


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("\\t", "\t"),
        ("\\n", "\n"),
        ("\\r", "\r"),
        ("\\f", "\f"),
        ("\\b", "\b"),
        ("\\\\", "\\"),
        ("\\'", "'"),
        ('\\"', '"'),
        (",", ","),
        ("\\q", "\\q"),
        ("\\tx", "\\tx"),
    ],
)
def test_control_character_escapes(raw: str, expected: str) -> None:
    assert unescape_control(raw) == expected


def test_list_kinds_are_empty_tuples_when_absent() -> None:
    resolver = _resolver("<ColumnOrder><C>a</C><C>b</C></ColumnOrder><K>1</K><K>2</K><K>1</K>")
    children = FieldSpec(name="cols", path="Params/ColumnOrder", kind=FieldKind.CHILDREN)
    tags = FieldSpec(name="keys", path="Params/K", kind=FieldKind.TAG_LIST)

    assert extract_field(children, resolver) == ("a", "b")
    entries = extract_field(tags, resolver)
    assert isinstance(entries, tuple)
    assert [tag.value for tag in entries] == ["1", "2", "1"]
    assert extract_field(children, _resolver("")) == ()
    assert extract_field(tags, _resolver("")) == ()


def test_tag_fields_carry_attributes() -> None:
    spec = FieldSpec(name="contract", path="Params/DataContractName", kind=FieldKind.TAG)
    tag = extract_field(
        spec, _resolver('<DataContractName ActionOnError="discard">V2</DataContractName>')
    )

    assert isinstance(tag, TagValue)
    assert tag.value == "V2"
    assert tag.attribute("ActionOnError") == "discard"


def test_validator_failures_are_value_errors() -> None:
    spec = FieldSpec(
        name="mode",
        path="Params/Mode",
        validator=lambda value: None if value in {"create", "append"} else "unknown mode",
    )

    assert extract_field(spec, _resolver("<Mode>append</Mode>")) == "append"
    with pytest.raises(InvalidFieldValue, match="unknown mode"):
        extract_field(spec, _resolver("<Mode>truncate</Mode>"))


def test_field_spec_rejects_inconsistent_declarations() -> None:
    with pytest.raises(ValueError, match="must declare choices"):
        FieldSpec(name="e", path="P/E", kind=FieldKind.ENUM)
    with pytest.raises(ValueError, match="both required and defaulted"):
        FieldSpec(name="r", path="P/R", required=True, default="x")


def test_extract_fields_returns_values_by_name() -> None:
    values = extract_fields(
        (LIMIT, FieldSpec(name="host", path="Params/HostName", default="localhost")),
        _resolver("<InputLimit>5</InputLimit>"),
    )

    assert values == {"input_limit": 5, "host": "localhost"}


def test_scoped_resolver_qualifies_error_paths() -> None:
    resolver = _resolver("<Block><Port>0</Port></Block>").scoped("Params/Block")
    spec = FieldSpec(name="port", path="Port", kind=FieldKind.INTEGER, minimum=1)

    with pytest.raises(FieldResolutionError) as excinfo:
        extract_field(spec, resolver)

    assert excinfo.value.path == "Params/Block/Port"
