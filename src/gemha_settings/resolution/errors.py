"""
gemha-settings — settings error taxonomy.

File: src/gemha_settings/resolution/errors.py
Last updated: 2026-10-18

Purpose
- Define the typed failures raised while loading documents and resolving fields.

Functional requirements
- Every failure carries the originating field path (or document path) and a reason.
- Assembly failures surface to callers as one ``ProfileAssemblyError`` wrapping the cause.

Non-functional requirements
- Messages are deterministic and safe to log (raw values only, never whole documents).
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass


class SettingsError(Exception):
    """Base class for every settings failure."""


class SourceUnavailable(SettingsError):
    """Raised when a settings document cannot be read or parsed."""

    def __init__(self, location: str, reason: str) -> None:
        self.location = location
        self.reason = reason
        super().__init__(f"settings document {location} unavailable: {reason}")


@dataclass(frozen=True, slots=True)
class SchemaIssue:
    """Single structural violation found in a settings document."""

    path: str
    message: str


class SchemaViolation(SourceUnavailable):
    """Raised when structural validation of a document fails."""

    def __init__(self, location: str, issues: Sequence[SchemaIssue]) -> None:
        self.issues = tuple(issues)
        if not self.issues:
            rendered = "unknown structural failure"
        else:
            rendered = "\n".join(f"- {item.path}: {item.message}" for item in self.issues)
        super().__init__(location, f"structural validation failed:\n{rendered}")


class FieldResolutionError(SettingsError):
    """Base class for per-field failures raised by the field extractor."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")

    @property
    def field(self) -> str:
        """Last path segment, e.g. ``InputLimit``."""

        return self.path.rstrip("/").rsplit("/", 1)[-1]


class MissingRequiredField(FieldResolutionError):
    """Raised when a required field is absent and has no default."""

    def __init__(self, path: str) -> None:
        super().__init__(path, "missing required field")


class InvalidFieldFormat(FieldResolutionError):
    """Raised when a present value cannot be coerced to the declared type."""

    def __init__(self, path: str, raw_value: str, expected: str) -> None:
        self.raw_value = raw_value
        super().__init__(path, f"invalid {expected} {raw_value!r}")


class InvalidFieldValue(FieldResolutionError):
    """Raised when a coerced value fails its validation rule."""

    def __init__(self, path: str, value: object, rule: str) -> None:
        self.value = value
        super().__init__(path, f"invalid value {value!r}; {rule}")


class ProfileAssemblyError(SettingsError):
    """Raised when a profile cannot be assembled; wraps the originating field failure."""

    def __init__(self, profile: str, cause: FieldResolutionError) -> None:
        self.profile = profile
        self.cause = cause
        self.field_path = cause.path
        self.reason = cause.reason
        super().__init__(f"cannot assemble {profile} settings: {cause}")


__all__ = [
    "FieldResolutionError",
    "InvalidFieldFormat",
    "InvalidFieldValue",
    "MissingRequiredField",
    "ProfileAssemblyError",
    "SchemaIssue",
    "SchemaViolation",
    "SettingsError",
    "SourceUnavailable",
]
