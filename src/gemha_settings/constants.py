"""Stable constants shared across settings profiles."""

from __future__ import annotations

from typing import Final

# Reserved single-character template tokens.
TOKEN_PROCESSOR: Final[str] = "*"
TOKEN_PROCESS_ID: Final[str] = "$"
TOKEN_TIMESTAMP: Final[str] = "?"
TOKEN_SEQUENCE: Final[str] = "#"
PLACEHOLDER_TOKENS: Final[tuple[str, ...]] = (
    TOKEN_PROCESSOR,
    TOKEN_PROCESS_ID,
    TOKEN_TIMESTAMP,
    TOKEN_SEQUENCE,
)

# Markers left in log file names until the log sink is opened.
DEFERRED_DATETIME_MARKER: Final[str] = "[%datetime%]"
DEFERRED_SEQUENCE_MARKER: Final[str] = "[%seqno%]"

# Java logging level with no stdlib counterpart.
LOG_LEVEL_CONFIG: Final[int] = 15

# Level names accepted in settings documents: java.util.logging names plus the stdlib ones.
LOGGING_LEVELS: Final[dict[str, int]] = {
    "OFF": 60,
    "SEVERE": 40,
    "WARNING": 30,
    "INFO": 20,
    "CONFIG": LOG_LEVEL_CONFIG,
    "FINE": 10,
    "FINER": 8,
    "FINEST": 5,
    "ALL": 0,
    "CRITICAL": 50,
    "ERROR": 40,
    "DEBUG": 10,
    "NOTSET": 0,
}

# Handler defaults.
DEFAULT_EXTERNAL_SHELL: Final[str] = "sh"
DEFAULT_LOG_FILE_NAME_TEMPLATE: Final[str] = "LwGenericMessageHandler.log"
DEFAULT_SHUTDOWN_LOG_FILE_NAME_TEMPLATE: Final[str] = "LwGenericMessageHandler_shutdown.log"
DEFAULT_ERROR_FILE_NAME_TEMPLATE: Final[str] = "ErrorMessage_*_?.txt"
DEFAULT_INPUT_FILE_DIR: Final[str] = "."
DEFAULT_FIELD_SEPARATOR: Final[str] = "\t"
DEFAULT_LOGGING_LEVEL: Final[str] = "CONFIG"
ENVIRONMENT_LOGGING_LEVELS: Final[dict[str, str]] = {
    "Development": "FINER",
    "Test": "FINE",
    "Production": "CONFIG",
}

# File output defaults.
DEFAULT_COLUMNS_LOCATION: Final[str] = "/MESSAGE/FILE_REQUEST/TABLE/ROW/COLUMNS"
DEFAULT_MESSAGES_FILE_NAME_TEMPLATE: Final[str] = "LwProcessMessageForFile_?.txt"
DEFAULT_FILE_OPEN_MODE: Final[str] = "create"

# Socket output defaults.
DEFAULT_SOCKET_HOST_NAME: Final[str] = "localhost"

# Database defaults.
DEFAULT_JDBC_CLASS: Final[str] = "oracle.jdbc.driver.OracleDriver"
DEFAULT_UPDATE_LOCKING_STRATEGY: Final[str] = "optimistic"

# Timestamp layout substituted for ``?`` in per-message file names.
ERROR_FILE_TIMESTAMP_FORMAT: Final[str] = "%Y%m%d%H%M%S%f"

__all__ = [
    "DEFAULT_COLUMNS_LOCATION",
    "DEFAULT_ERROR_FILE_NAME_TEMPLATE",
    "DEFAULT_EXTERNAL_SHELL",
    "DEFAULT_FIELD_SEPARATOR",
    "DEFAULT_FILE_OPEN_MODE",
    "DEFAULT_INPUT_FILE_DIR",
    "DEFAULT_JDBC_CLASS",
    "DEFAULT_LOGGING_LEVEL",
    "DEFAULT_LOG_FILE_NAME_TEMPLATE",
    "DEFAULT_MESSAGES_FILE_NAME_TEMPLATE",
    "DEFAULT_SHUTDOWN_LOG_FILE_NAME_TEMPLATE",
    "DEFAULT_SOCKET_HOST_NAME",
    "DEFAULT_UPDATE_LOCKING_STRATEGY",
    "LOGGING_LEVELS",
    "LOG_LEVEL_CONFIG",
    "DEFERRED_DATETIME_MARKER",
    "DEFERRED_SEQUENCE_MARKER",
    "ENVIRONMENT_LOGGING_LEVELS",
    "ERROR_FILE_TIMESTAMP_FORMAT",
    "PLACEHOLDER_TOKENS",
    "TOKEN_PROCESSOR",
    "TOKEN_PROCESS_ID",
    "TOKEN_SEQUENCE",
    "TOKEN_TIMESTAMP",
]
