"""
gemha-settings — runtime options for the command-line tool.

File: src/gemha_settings/runtime.py
Last updated: 2026-10-18

Purpose
- Resolve how the tool itself runs (which document, which profile, how to log).

What should be included in this file
- Precedence logic: CLI > env (GEMHA_) > defaults.
- Deterministic environment variable mapping and coercion.

Functional requirements
- Invalid values raise ``RuntimeOptionsError`` naming the source (flag or variable).
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Final, Literal

from gemha_settings.observability.logging import LOG_FORMATS, LogFormat, parse_log_level
from gemha_settings.profiles import PROFILE_KINDS

ENV_PREFIX: Final[str] = "GEMHA_"
DEFAULT_PROFILE: Final[str] = "handler"

_BOOLEAN_TRUE: Final[frozenset[str]] = frozenset({"1", "true", "t", "yes", "y", "on"})
_BOOLEAN_FALSE: Final[frozenset[str]] = frozenset({"0", "false", "f", "no", "n", "off"})

_ValueType = Literal["str", "bool", "path", "profile", "log_format", "level"]

# option name -> (environment suffix, value type)
_BINDINGS: Final[dict[str, tuple[str, _ValueType]]] = {
    "settings_path": ("SETTINGS_FILE", "path"),
    "profile": ("PROFILE", "profile"),
    "schema_validation": ("SCHEMA_VALIDATION", "bool"),
    "log_format": ("LOG_FORMAT", "log_format"),
    "log_to_stdout": ("LOG_TO_STDOUT", "bool"),
    "log_level": ("LOG_LEVEL", "level"),
    "ppid": ("PPID", "str"),
}


class RuntimeOptionsError(ValueError):
    """Raised when runtime options cannot be coerced."""


@dataclass(frozen=True, slots=True)
class RuntimeOptions:
    settings_path: Path | None = None
    profile: str = DEFAULT_PROFILE
    schema_validation: bool = False
    log_format: LogFormat = "text"
    log_to_stdout: bool = False
    log_level: str = "CONFIG"
    ppid: str | None = None


def load_runtime_options(
    cli_overrides: Mapping[str, object] | None = None,
    environ: Mapping[str, str] | None = None,
) -> RuntimeOptions:
    """Resolve options with deterministic precedence: CLI > env > defaults.

    ``None`` values in ``cli_overrides`` mean "not given on the command line".
    """

    env_map = dict(os.environ if environ is None else environ)
    cli_map = dict(cli_overrides or {})

    unknown = sorted(set(cli_map) - set(_BINDINGS))
    if unknown:
        raise RuntimeOptionsError(f"unknown runtime option(s): {', '.join(unknown)}")

    resolved: dict[str, object] = {}
    for name, (suffix, value_type) in _BINDINGS.items():
        env_name = f"{ENV_PREFIX}{suffix}"
        cli_value = cli_map.get(name)
        if cli_value is not None:
            resolved[name] = _coerce(cli_value, value_type, f"--{name.replace('_', '-')}")
        elif env_name in env_map and env_map[env_name].strip():
            resolved[name] = _coerce(env_map[env_name], value_type, env_name)

    return RuntimeOptions(**resolved)  # type: ignore[arg-type]


def _coerce(raw: object, value_type: _ValueType, source: str) -> object:
    if value_type == "bool":
        if isinstance(raw, bool):
            return raw
        lowered = str(raw).strip().lower()
        if lowered in _BOOLEAN_TRUE:
            return True
        if lowered in _BOOLEAN_FALSE:
            return False
        raise RuntimeOptionsError(
            f"{source} must be a boolean (true/false/1/0/yes/no/on/off)"
        )

    value = str(raw).strip()
    if value_type == "path":
        if not value:
            raise RuntimeOptionsError(f"{source} must not be empty")
        return Path(value).expanduser()
    if value_type == "profile":
        if value not in PROFILE_KINDS:
            raise RuntimeOptionsError(f"{source} must be one of: {', '.join(PROFILE_KINDS)}")
        return value
    if value_type == "log_format":
        lowered = value.lower()
        if lowered not in LOG_FORMATS:
            raise RuntimeOptionsError(f"{source} must be one of: {', '.join(LOG_FORMATS)}")
        return lowered
    if value_type == "level":
        try:
            parse_log_level(value)
        except ValueError as exc:
            raise RuntimeOptionsError(f"{source}: {exc}") from exc
        return value.upper()
    return value


__all__ = [
    "DEFAULT_PROFILE",
    "ENV_PREFIX",
    "RuntimeOptions",
    "RuntimeOptionsError",
    "load_runtime_options",
]
