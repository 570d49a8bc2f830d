"""
gemha-settings — field extraction rules.

File: src/gemha_settings/resolution/fields.py
Last updated: 2026-10-18

Purpose
- Describe one settings field declaratively (``FieldSpec``) and resolve it against a document.

What should be included in this file
- Lookup, default substitution, required checks, type coercion, and validation, in that order.
- Coercions for integers, booleans with per-field literals, enums, directories, and
  escaped control characters.
- Ordered-list kinds: repeated tags and child-value lists.

Functional requirements
- ``0`` is a value, distinct from absence; floor rules apply only to present values.
- Integer parsing follows a strict signed-decimal grammar within the 32-bit range.
- List kinds never resolve to ``None``; absence is an empty tuple.

Non-functional requirements
- Pure functions over a ``PathResolver``; no logging, no I/O.
"""

from __future__ import annotations

import os
import re
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Final

from gemha_settings.resolution.errors import (
    InvalidFieldFormat,
    InvalidFieldValue,
    MissingRequiredField,
)
from gemha_settings.resolution.paths import PathResolver

_INTEGER_PATTERN: Final[re.Pattern[str]] = re.compile(r"^[+-]?[0-9]+$")
_INT_MIN: Final[int] = -(2**31)
_INT_MAX: Final[int] = 2**31 - 1

CONTROL_ESCAPES: Final[Mapping[str, str]] = {
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "'": "'",
    '"': '"',
    "\\": "\\",
}

FieldValidator = Callable[[object], str | None]


class FieldKind(StrEnum):
    STRING = "string"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    ENUM = "enum"
    DIRECTORY = "directory"
    CONTROL_CHAR = "control_char"
    TAG = "tag"
    TAG_LIST = "tag_list"
    CHILDREN = "children"


LIST_KINDS: Final[frozenset[FieldKind]] = frozenset({FieldKind.TAG_LIST, FieldKind.CHILDREN})


@dataclass(frozen=True, slots=True)
class FieldSpec:
    """How to extract one field.

    ``name`` is the attribute name on the assembled profile and ``path`` the
    document location. ``default`` is used verbatim when the path is absent,
    except for directories, which are normalized either way. ``validator``
    returns a failure message, or ``None`` when the coerced value is acceptable.
    """

    name: str
    path: str
    kind: FieldKind = FieldKind.STRING
    required: bool = False
    default: object = None
    minimum: int | None = None
    true_literal: str = "true"
    case_sensitive: bool = True
    choices: tuple[str, ...] = ()
    validator: FieldValidator | None = None

    def __post_init__(self) -> None:
        if self.kind is FieldKind.ENUM and not self.choices:
            raise ValueError(f"enum field {self.name!r} must declare choices")
        if self.required and self.default is not None:
            raise ValueError(f"field {self.name!r} cannot be both required and defaulted")


def extract_field(
    spec: FieldSpec,
    resolver: PathResolver,
    *,
    path_separator: str = os.sep,
) -> object:
    """Resolve ``spec`` against ``resolver``; raise a ``FieldResolutionError`` on failure."""

    qualified = resolver.qualify(spec.path)

    if spec.kind is FieldKind.TAG_LIST:
        entries = resolver.get_all(spec.path)
        if not entries and spec.required:
            raise MissingRequiredField(qualified)
        return entries

    if spec.kind is FieldKind.CHILDREN:
        values = resolver.children_of(spec.path)
        if not values and spec.required:
            raise MissingRequiredField(qualified)
        return values

    if spec.kind is FieldKind.TAG:
        tag = resolver.get_with_attributes(spec.path)
        if tag is None and spec.required:
            raise MissingRequiredField(qualified)
        return tag

    raw = resolver.get(spec.path)
    if raw is None:
        if spec.required:
            raise MissingRequiredField(qualified)
        if spec.kind is FieldKind.DIRECTORY and isinstance(spec.default, str):
            return normalize_directory(spec.default, path_separator)
        return spec.default

    value = _coerce(spec, raw, qualified, path_separator)
    _validate(spec, value, qualified)
    return value


def extract_fields(
    specs: Iterable[FieldSpec],
    resolver: PathResolver,
    *,
    path_separator: str = os.sep,
) -> dict[str, object]:
    return {
        spec.name: extract_field(spec, resolver, path_separator=path_separator) for spec in specs
    }


def parse_int(raw: str, path: str) -> int:
    if not _INTEGER_PATTERN.fullmatch(raw):
        raise InvalidFieldFormat(path, raw, "integer")
    parsed = int(raw)
    if parsed < _INT_MIN or parsed > _INT_MAX:
        raise InvalidFieldFormat(path, raw, "32-bit integer")
    return parsed


def parse_bool(raw: str, *, true_literal: str, case_sensitive: bool) -> bool:
    if case_sensitive:
        return raw == true_literal
    return raw.lower() == true_literal.lower()


def normalize_directory(raw: str, separator: str = os.sep) -> str:
    """Append ``separator`` to a non-empty directory that does not already end with it."""

    if raw and not raw.endswith(separator):
        return raw + separator
    return raw


def unescape_control(raw: str) -> str:
    """Turn a literal two-character escape such as ``\\t`` into the character itself."""

    if len(raw) == 2 and raw[0] == "\\":
        return CONTROL_ESCAPES.get(raw[1], raw)
    return raw


def _coerce(spec: FieldSpec, raw: str, path: str, path_separator: str) -> object:
    if spec.kind is FieldKind.INTEGER:
        return parse_int(raw, path)
    if spec.kind is FieldKind.BOOLEAN:
        return parse_bool(raw, true_literal=spec.true_literal, case_sensitive=spec.case_sensitive)
    if spec.kind is FieldKind.ENUM:
        return _as_enum(spec, raw, path)
    if spec.kind is FieldKind.DIRECTORY:
        return normalize_directory(raw, path_separator)
    if spec.kind is FieldKind.CONTROL_CHAR:
        return unescape_control(raw)
    return raw


def _as_enum(spec: FieldSpec, raw: str, path: str) -> str:
    if spec.case_sensitive:
        if raw in spec.choices:
            return raw
    else:
        folded = {choice.lower(): choice for choice in spec.choices}
        match = folded.get(raw.lower())
        if match is not None:
            return match
    expected = ", ".join(spec.choices)
    raise InvalidFieldValue(path, raw, f"expected one of: {expected}")


def _validate(spec: FieldSpec, value: object, path: str) -> None:
    if spec.minimum is not None and isinstance(value, int) and value < spec.minimum:
        rule = f"must be >= {spec.minimum}"
        if value == 0:
            rule += " (0 not allowed)"
        raise InvalidFieldValue(path, value, rule)
    if spec.validator is not None:
        failure = spec.validator(value)
        if failure is not None:
            raise InvalidFieldValue(path, value, failure)


__all__ = [
    "CONTROL_ESCAPES",
    "FieldKind",
    "FieldSpec",
    "FieldValidator",
    "LIST_KINDS",
    "extract_field",
    "extract_fields",
    "normalize_directory",
    "parse_bool",
    "parse_int",
    "unescape_control",
]
