"""Settings log sinks with an explicit, caller-owned lifecycle."""

from gemha_settings.observability.logging import (
    LOG_FORMATS,
    LoggingConfig,
    LogRedactor,
    SettingsLogHandle,
    default_log_redactor,
    open_handler_log,
    parse_log_level,
    register_level_names,
    setup_settings_logging,
)

__all__ = [
    "LOG_FORMATS",
    "LogRedactor",
    "LoggingConfig",
    "SettingsLogHandle",
    "default_log_redactor",
    "open_handler_log",
    "parse_log_level",
    "register_level_names",
    "setup_settings_logging",
]
