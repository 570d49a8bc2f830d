"""
gemha-settings — catalogue-driven profile assembly.

File: src/gemha_settings/resolution/assembler.py
Last updated: 2026-10-18

Purpose
- Drive field extraction for one profile, collect results in a draft, and freeze them.

What should be included in this file
- ``ProfileDraft``: the only mutable stage of assembly, private to one builder call.
- ``assemble``: wraps every field failure into a single ``ProfileAssemblyError``.
- ``emit_report``: write a profile's settings report to an injected logger.

Functional requirements
- No partial profile ever escapes; a failure aborts the whole pass.
- The settings report is emitted at the CONFIG level, once, by the caller.

Non-functional requirements
- No process-wide logger state; the logger is always passed in.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Iterable
from typing import Protocol, TypeVar

from gemha_settings.constants import LOG_LEVEL_CONFIG
from gemha_settings.resolution.errors import FieldResolutionError, ProfileAssemblyError
from gemha_settings.resolution.fields import FieldSpec, extract_field
from gemha_settings.resolution.paths import PathResolver

P = TypeVar("P")


class SupportsReport(Protocol):
    def report(self) -> tuple[str, ...]: ...


class ProfileDraft:
    """Accumulates resolved values for one profile before it is frozen."""

    __slots__ = ("_path_separator", "_profile", "_resolver", "_values")

    def __init__(
        self,
        profile: str,
        resolver: PathResolver,
        *,
        path_separator: str = os.sep,
    ) -> None:
        self._profile = profile
        self._resolver = resolver
        self._path_separator = path_separator
        self._values: dict[str, object] = {}

    @property
    def profile(self) -> str:
        return self._profile

    @property
    def resolver(self) -> PathResolver:
        return self._resolver

    @property
    def path_separator(self) -> str:
        return self._path_separator

    def field(self, spec: FieldSpec, resolver: PathResolver | None = None) -> object:
        value = extract_field(
            spec, resolver or self._resolver, path_separator=self._path_separator
        )
        self._values[spec.name] = value
        return value

    def fields(self, specs: Iterable[FieldSpec]) -> None:
        for spec in specs:
            self.field(spec)

    def put(self, name: str, value: object) -> None:
        self._values[name] = value

    def get(self, name: str) -> object:
        return self._values.get(name)

    def finish(self, factory: Callable[..., P]) -> P:
        return factory(**self._values)


def assemble(
    profile: str,
    resolver: PathResolver,
    build: Callable[[ProfileDraft], P],
    *,
    path_separator: str = os.sep,
) -> P:
    """Run ``build`` over a fresh draft; field failures become ``ProfileAssemblyError``."""

    draft = ProfileDraft(profile, resolver, path_separator=path_separator)
    try:
        return build(draft)
    except FieldResolutionError as exc:
        raise ProfileAssemblyError(profile, exc) from exc


def emit_report(profile: SupportsReport, logger: logging.Logger) -> None:
    for line in profile.report():
        logger.log(LOG_LEVEL_CONFIG, "%s", line)


def describe(value: object) -> str:
    """Render a resolved value for a report line; absence reads as ``(not set)``."""

    if value is None:
        return "(not set)"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return repr(value) if value != value.strip() or not value.isprintable() else value
    return str(value)


__all__ = [
    "ProfileDraft",
    "SupportsReport",
    "assemble",
    "describe",
    "emit_report",
]
