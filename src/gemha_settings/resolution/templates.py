"""
gemha-settings — placeholder template substitution.

File: src/gemha_settings/resolution/templates.py
Last updated: 2026-10-18

Purpose
- Resolve the single-character placeholder tokens used in log, error and message file names.

What should be included in this file
- ``substitute``: literal, single-pass, left-to-right token replacement.
- Replacement-table builders for log file names and per-message error file names.
- A thread-safe monotonic sequence counter for ``#``.

Functional requirements
- Substitution is pure: same template and mapping always give the same output.
- Tokens without a mapped replacement stay in the output verbatim.
- Replacement text is never rescanned; with token-free replacements a resolved template is a
  fixed point.

Non-functional requirements
- No regular expressions; tokens are plain characters, never patterns.
"""

from __future__ import annotations

import itertools
import threading
from collections.abc import Iterable, Mapping
from datetime import datetime

from gemha_settings.constants import (
    DEFERRED_DATETIME_MARKER,
    DEFERRED_SEQUENCE_MARKER,
    ERROR_FILE_TIMESTAMP_FORMAT,
    PLACEHOLDER_TOKENS,
    TOKEN_PROCESS_ID,
    TOKEN_PROCESSOR,
    TOKEN_SEQUENCE,
    TOKEN_TIMESTAMP,
)


def substitute(template: str, replacements: Mapping[str, str]) -> str:
    """Replace every mapped token in ``template`` with its replacement text."""

    for token in replacements:
        if len(token) != 1:
            raise ValueError(f"placeholder tokens are single characters, got {token!r}")
    return "".join(replacements.get(char, char) for char in template)


def unresolved_tokens(text: str, tokens: Iterable[str] = PLACEHOLDER_TOKENS) -> tuple[str, ...]:
    """Return the reserved tokens still present in ``text``, in first-seen order."""

    reserved = set(tokens)
    seen: list[str] = []
    for char in text:
        if char in reserved and char not in seen:
            seen.append(char)
    return tuple(seen)


def log_replacements(processor: str | None, process_id: str | None) -> dict[str, str]:
    """Replacement table for log file names.

    ``?`` and ``#`` become deferred markers that the log sink resolves when it opens.
    A missing processor name or pid leaves its token in place.
    """

    replacements: dict[str, str] = {}
    if processor is not None:
        replacements[TOKEN_PROCESSOR] = processor
    if process_id is not None:
        replacements[TOKEN_PROCESS_ID] = process_id
    replacements[TOKEN_TIMESTAMP] = DEFERRED_DATETIME_MARKER
    replacements[TOKEN_SEQUENCE] = DEFERRED_SEQUENCE_MARKER
    return replacements


def resolve_deferred_markers(name: str, *, now: datetime, sequence: int) -> str:
    """Fill the ``[%datetime%]`` and ``[%seqno%]`` markers of a resolved log file name."""

    stamp = now.strftime(ERROR_FILE_TIMESTAMP_FORMAT)
    return name.replace(DEFERRED_DATETIME_MARKER, stamp).replace(
        DEFERRED_SEQUENCE_MARKER, str(sequence)
    )


def error_file_name(
    template: str,
    audit_key_value: str | None,
    *,
    now: datetime,
    sequence: int,
    process_id: str | None = None,
) -> str:
    """Resolve an error file template for one failed message.

    ``*`` is the concatenated audit key of the message (left in place when the
    message has none), ``?`` the formatted timestamp and ``#`` the sequence number.
    """

    replacements = {
        TOKEN_TIMESTAMP: now.strftime(ERROR_FILE_TIMESTAMP_FORMAT),
        TOKEN_SEQUENCE: str(sequence),
    }
    if audit_key_value is not None:
        replacements[TOKEN_PROCESSOR] = audit_key_value
    if process_id is not None:
        replacements[TOKEN_PROCESS_ID] = process_id
    return substitute(template, replacements)


class SequenceCounter:
    """Monotonic counter shared by everything that names files with ``#``."""

    __slots__ = ("_counter", "_lock")

    def __init__(self, start: int = 1) -> None:
        self._counter = itertools.count(start)
        self._lock = threading.Lock()

    def next(self) -> int:
        with self._lock:
            return next(self._counter)


__all__ = [
    "SequenceCounter",
    "error_file_name",
    "log_replacements",
    "resolve_deferred_markers",
    "substitute",
    "unresolved_tokens",
]
