"""Command-line interface router for gemha-settings."""

from __future__ import annotations

import argparse
import json
import os
import sys
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, fields, is_dataclass
from enum import Enum
from pathlib import Path
from typing import Final

from gemha_settings.observability.logging import (
    LOG_FORMATS,
    LoggingConfig,
    SettingsLogHandle,
    default_log_redactor,
    setup_settings_logging,
)
from gemha_settings.profiles import (
    PROFILE_KINDS,
    ProcessIdentity,
    Profile,
    load_profile,
)
from gemha_settings.resolution.assembler import emit_report
from gemha_settings.runtime import RuntimeOptions, load_runtime_options

REPORT_LOGGER_NAME: Final[str] = "gemha_settings.report"


@dataclass(frozen=True, slots=True)
class CLIError(RuntimeError):
    """Typed CLI failure with an explicit process exit code."""

    message: str
    exit_code: int = 2

    def __str__(self) -> str:
        return self.message


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse command router for all supported CLI workflows."""

    parser = argparse.ArgumentParser(
        prog="gemha-settings",
        description=(
            "gemha-settings — resolve GeMHa settings documents into validated profiles.\n\n"
            "Common workflows:\n"
            "  gemha-settings show settings.xml                 Print the settings report\n"
            "  gemha-settings check db.yaml --profile database  Validate a document\n"
            "  gemha-settings kinds                             List profile kinds\n"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "path",
        nargs="?",
        default=None,
        help="Settings document (default: $GEMHA_SETTINGS_FILE).",
    )
    common.add_argument(
        "--profile",
        default=None,
        choices=sorted(PROFILE_KINDS),
        help="Profile kind to assemble (default: handler).",
    )
    common.add_argument(
        "--schema-validation",
        action="store_const",
        const=True,
        default=None,
        help="Reject elements the profile does not declare.",
    )
    common.add_argument(
        "--ppid",
        default=None,
        help="Parent process id reported by handler profiles.",
    )
    common.add_argument(
        "--log-file",
        default=None,
        help="Also write the settings report to this log file.",
    )
    common.add_argument(
        "--log-format",
        default=None,
        choices=LOG_FORMATS,
        help="Log file format (default: text).",
    )
    common.add_argument(
        "--log-level",
        default=None,
        help="Log level, Java or Python names (default: CONFIG).",
    )
    common.add_argument(
        "--log-to-stdout",
        action="store_const",
        const=True,
        default=None,
        help="Mirror log records to the console (stderr) as well.",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # show ----------------------------------------------------------------
    show_parser = subparsers.add_parser(
        "show",
        parents=[common],
        help="Assemble a profile and print its settings report.",
    )
    show_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Print the profile as JSON instead of the report.",
    )
    show_parser.set_defaults(handler=_cmd_show)

    # check ---------------------------------------------------------------
    check_parser = subparsers.add_parser(
        "check",
        parents=[common],
        help="Assemble a profile and report only success or failure.",
    )
    check_parser.set_defaults(handler=_cmd_check)

    # kinds ---------------------------------------------------------------
    kinds_parser = subparsers.add_parser("kinds", help="List the supported profile kinds.")
    kinds_parser.set_defaults(handler=_cmd_kinds)

    return parser


# ---------------------------------------------------------------------------
# Entrypoints
# ---------------------------------------------------------------------------


def run_cli(argv: Sequence[str] | None = None) -> int:
    """Parse argv, route to a command handler, and return process exit code."""

    parser = build_parser()
    namespace = parser.parse_args(list(argv) if argv is not None else None)
    handler = getattr(namespace, "handler", None)
    if not callable(handler):
        parser.print_help(sys.stderr)
        return 2

    try:
        result = handler(namespace)
    except CLIError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return exc.exit_code
    return int(result)


# ---------------------------------------------------------------------------
# Command handlers
# ---------------------------------------------------------------------------


def _cmd_show(args: argparse.Namespace) -> int:
    options = _runtime_options(args)
    profile = _assemble(options, args.log_file)
    if args.json:
        _emit_json({"profile": options.profile, "settings": profile_payload(profile)})
    else:
        for line in profile.report():
            print(line)
    return 0


def _cmd_check(args: argparse.Namespace) -> int:
    options = _runtime_options(args)
    _assemble(options, args.log_file)
    print(f"ok: {options.profile} settings from {options.settings_path}")
    return 0


def _cmd_kinds(args: argparse.Namespace) -> int:
    del args
    width = max(len(name) for name in PROFILE_KINDS)
    for name, entry in PROFILE_KINDS.items():
        print(f"{name.ljust(width)}  {entry.description}")
    return 0


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _runtime_options(args: argparse.Namespace) -> RuntimeOptions:
    return load_runtime_options(
        {
            "settings_path": args.path,
            "profile": args.profile,
            "schema_validation": args.schema_validation,
            "log_format": args.log_format,
            "log_level": args.log_level,
            "log_to_stdout": args.log_to_stdout,
            "ppid": args.ppid,
        }
    )


def _assemble(options: RuntimeOptions, log_file: str | None) -> Profile:
    path = _require_path(options)
    identity = ProcessIdentity(
        pid=str(os.getpid()),
        ppid=options.ppid if options.ppid is not None else str(os.getppid()),
    )
    if log_file is None:
        return load_profile(
            options.profile, path, schema_validation=options.schema_validation, identity=identity
        )

    with _open_report_log(options, Path(log_file).expanduser()) as handle:
        profile = load_profile(
            options.profile, path, schema_validation=options.schema_validation, identity=identity
        )
        emit_report(profile, handle.logger)
    return profile


def _require_path(options: RuntimeOptions) -> Path:
    if options.settings_path is None:
        raise CLIError("no settings document given (pass PATH or set GEMHA_SETTINGS_FILE)")
    return options.settings_path


def _open_report_log(options: RuntimeOptions, log_file: Path) -> SettingsLogHandle:
    return setup_settings_logging(
        LoggingConfig(
            log_path=log_file,
            logger_name=REPORT_LOGGER_NAME,
            level=options.log_level,
            log_format=options.log_format,
            log_to_stdout=options.log_to_stdout,
            base_context={"profile": options.profile},
        )
    )


def profile_payload(profile: object) -> object:
    """JSON-ready view of a profile with secrets redacted."""

    return default_log_redactor(_plain(profile))  # type: ignore[arg-type]


def _plain(value: object) -> object:
    if is_dataclass(value) and not isinstance(value, type):
        return {item.name: _plain(getattr(value, item.name)) for item in fields(value)}
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Mapping):
        return {str(key): _plain(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(item) for item in value]
    if isinstance(value, Path):
        return str(value)
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    return repr(value)


def _emit_json(payload: Mapping[str, object]) -> None:
    """Emit a JSON payload to stdout with deterministic formatting."""

    print(json.dumps(payload, sort_keys=True, indent=2, ensure_ascii=False))


__all__ = ["CLIError", "build_parser", "profile_payload", "run_cli"]
