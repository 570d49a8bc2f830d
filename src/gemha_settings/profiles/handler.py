"""
gemha-settings — generic message handler settings.

File: src/gemha_settings/profiles/handler.py
Last updated: 2026-10-18

Purpose
- Resolve the handler settings document (root element ``Applic``) into ``HandlerSettings``.

What should be included in this file
- The handler field catalogue, grouped the way the document is laid out.
- Input branch selection (queue, socket, file-set, or programmatic) and output selection.
- Derived values: log and shutdown-log file names, error file template, logging level.
- The ``queue`` variant, which requires the queue input branch.

Functional requirements
- Input branches are tried in the fixed order queue, socket, file-set; later branches are
  never looked up once one is active.
- HTTP output fields are looked up whenever the output queue or the output file template
  is absent.
- The directory is joined to a file name template before tokens are substituted.

Non-functional requirements
- The process identity is injected; nothing here reads process state unless asked to.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from typing import Final

from gemha_settings.constants import (
    DEFAULT_ERROR_FILE_NAME_TEMPLATE,
    DEFAULT_EXTERNAL_SHELL,
    DEFAULT_FIELD_SEPARATOR,
    DEFAULT_INPUT_FILE_DIR,
    DEFAULT_LOG_FILE_NAME_TEMPLATE,
    DEFAULT_LOGGING_LEVEL,
    DEFAULT_SHUTDOWN_LOG_FILE_NAME_TEMPLATE,
    ENVIRONMENT_LOGGING_LEVELS,
    LOGGING_LEVELS,
)
from gemha_settings.profiles.common import (
    ACTION_ON_ERROR_ATTRIBUTE,
    AuditKeys,
    MissingAuditKeyAction,
    audit_key_specs,
    list_report,
    resolve_audit_keys,
)
from gemha_settings.resolution.assembler import ProfileDraft, assemble, describe
from gemha_settings.resolution.fields import FieldKind, FieldSpec, extract_field
from gemha_settings.resolution.paths import PathResolver
from gemha_settings.resolution.templates import error_file_name, log_replacements, substitute
from gemha_settings.source.tree import DocumentSource, TagValue

HANDLER_ROOT: Final[str] = "Applic"
_INPUT_SOURCE: Final[str] = f"{HANDLER_ROOT}/Input/InputSource"
_CSV_PARAMS: Final[str] = f"{_INPUT_SOURCE}/InputFile/CSVParams"
_OUTPUT: Final[str] = f"{HANDLER_ROOT}/Output"
_LOGGING: Final[str] = f"{HANDLER_ROOT}/Logging"
_PROCESSING: Final[str] = f"{HANDLER_ROOT}/Processing"
_AUDITING: Final[str] = f"{HANDLER_ROOT}/Auditing"

CSV_DATA_FORMAT: Final[str] = "CSV"
CONVERTED_DATA_FORMAT: Final[str] = "XML"
INSERT_XML_FORMAT: Final[str] = "INSERT"


class InputMode(StrEnum):
    QUEUE = "queue"
    SOCKET = "socket"
    FILE_SET = "file_set"
    PROGRAMMATIC = "programmatic"


class OutputMode(StrEnum):
    QUEUE = "queue"
    FILE = "file"
    HTTP = "http"
    NONE = "none"


@dataclass(frozen=True, slots=True)
class ProcessIdentity:
    """Process ids used in log file names; ``None`` when unknown."""

    pid: str | None = None
    ppid: str | None = None

    @classmethod
    def current(cls) -> ProcessIdentity:
        return cls(pid=str(os.getpid()), ppid=str(os.getppid()))


# Field catalogue.

IDENTITY_FIELDS: Final[tuple[FieldSpec, ...]] = (
    FieldSpec(
        name="external_shell",
        path=f"{HANDLER_ROOT}/Params/ExternalShell",
        default=DEFAULT_EXTERNAL_SHELL,
    ),
    FieldSpec(
        name="message_processing_class_name",
        path=f"{_PROCESSING}/MessageProcessingClassName",
    ),
    FieldSpec(
        name="message_processing_settings_file_name",
        path=f"{_PROCESSING}/MessageProcessingSettingsFileName",
    ),
)

INPUT_FIELDS: Final[tuple[FieldSpec, ...]] = (
    FieldSpec(
        name="input_limit",
        path=f"{_INPUT_SOURCE}/InputLimit",
        kind=FieldKind.INTEGER,
        default=0,
        minimum=1,
    ),
    FieldSpec(name="input_data_format", path=f"{_INPUT_SOURCE}/DataFormat"),
    FieldSpec(
        name="data_contract_name",
        path=f"{_INPUT_SOURCE}/DataContractName",
        kind=FieldKind.TAG,
    ),
    FieldSpec(
        name="input_url_jms_server",
        path=f"{_INPUT_SOURCE}/InputQueue/UrlJMSserver",
    ),
)

QUEUE_NAME_FIELD: Final[FieldSpec] = FieldSpec(
    name="input_queue_name", path=f"{_INPUT_SOURCE}/InputQueue/QueueName"
)
REQUIRED_QUEUE_NAME_FIELD: Final[FieldSpec] = FieldSpec(
    name="input_queue_name", path=f"{_INPUT_SOURCE}/InputQueue/QueueName", required=True
)
QUIET_FIELD: Final[FieldSpec] = FieldSpec(
    name="milliseconds_before_quiet",
    path=f"{_INPUT_SOURCE}/InputQueue/MilliSecondsBeforeQuiet",
    kind=FieldKind.INTEGER,
    default=3,
    minimum=1,
)
PORT_FIELD: Final[FieldSpec] = FieldSpec(
    name="port_number",
    path=f"{_INPUT_SOURCE}/InputSocket/PortNumber",
    kind=FieldKind.INTEGER,
    default=0,
    minimum=1,
)
FILE_FILTER_FIELD: Final[FieldSpec] = FieldSpec(
    name="input_file_name_filter", path=f"{_INPUT_SOURCE}/InputFile/FileNameFilter"
)
FILE_SET_FIELDS: Final[tuple[FieldSpec, ...]] = (
    FieldSpec(
        name="input_file_dir",
        path=f"{_INPUT_SOURCE}/InputFile/FileDir",
        kind=FieldKind.DIRECTORY,
        default=DEFAULT_INPUT_FILE_DIR,
    ),
    FieldSpec(
        name="sort_filtered_file_names",
        path=f"{_INPUT_SOURCE}/InputFile/SortFilteredFileNames",
        kind=FieldKind.BOOLEAN,
        default=True,
    ),
)

CSV_FIELDS: Final[tuple[FieldSpec, ...]] = (
    FieldSpec(
        name="field_separator",
        path=f"{_CSV_PARAMS}/FieldSeparator",
        kind=FieldKind.CONTROL_CHAR,
        default=DEFAULT_FIELD_SEPARATOR,
    ),
    FieldSpec(
        name="max_recs_per_message",
        path=f"{_CSV_PARAMS}/MaxRecsPerMessage",
        kind=FieldKind.INTEGER,
        default=1,
        minimum=1,
    ),
    FieldSpec(
        name="num_records_to_skip",
        path=f"{_CSV_PARAMS}/NumRecordsToSkip",
        kind=FieldKind.INTEGER,
        default=0,
    ),
    FieldSpec(name="column_order", path=f"{_CSV_PARAMS}/ColumnOrder", kind=FieldKind.CHILDREN),
    FieldSpec(name="xml_format", path=f"{_CSV_PARAMS}/XMLFormat"),
    FieldSpec(name="action_on_error", path=f"{_CSV_PARAMS}/InsertParams/Action_On_Error"),
    FieldSpec(
        name="prepared_statement_name",
        path=f"{_CSV_PARAMS}/InsertParams/Prepared_Statement_Name",
    ),
    FieldSpec(name="immediate_commit", path=f"{_CSV_PARAMS}/InsertParams/Immediate_Commit"),
    FieldSpec(
        name="input_validation",
        path=f"{HANDLER_ROOT}/Input/InputValidation",
        kind=FieldKind.TAG,
    ),
)

OUTPUT_QUEUE_FIELDS: Final[tuple[FieldSpec, ...]] = (
    FieldSpec(name="output_url_jms_server", path=f"{_OUTPUT}/OutputQueue/UrlJMSserver"),
    FieldSpec(name="output_queue_name", path=f"{_OUTPUT}/OutputQueue/QueueName"),
    FieldSpec(name="reply_to_queue_name", path=f"{_OUTPUT}/OutputQueue/ReplyToQueueName"),
)
OUTPUT_FILE_FIELD: Final[FieldSpec] = FieldSpec(
    name="output_file_name_template", path=f"{_OUTPUT}/OutputFile/FileNameTemplate"
)
HTTP_FIELDS: Final[tuple[FieldSpec, ...]] = (
    FieldSpec(name="http_server_url", path=f"{_OUTPUT}/OutputHTTP/ServerUrl"),
    FieldSpec(name="http_end_point_name", path=f"{_OUTPUT}/OutputHTTP/EndPointName"),
    FieldSpec(
        name="http_with_backoff",
        path=f"{_OUTPUT}/OutputHTTP/HTTPWithBackoff",
        kind=FieldKind.BOOLEAN,
        default=True,
        case_sensitive=False,
    ),
)

LOG_FILE_FIELDS: Final[tuple[FieldSpec, ...]] = (
    FieldSpec(name="log_file_dir", path=f"{_LOGGING}/LogFileDir", kind=FieldKind.DIRECTORY),
    FieldSpec(
        name="log_file_name_template",
        path=f"{_LOGGING}/LogFileNameTemplate",
        default=DEFAULT_LOG_FILE_NAME_TEMPLATE,
    ),
    FieldSpec(
        name="shut_down_log_file_name_template",
        path=f"{_LOGGING}/ShutDownLogFileNameTemplate",
        default=DEFAULT_SHUTDOWN_LOG_FILE_NAME_TEMPLATE,
    ),
)
GENERAL_LEVEL_FIELD: Final[FieldSpec] = FieldSpec(
    name="logging_level",
    path=f"{_LOGGING}/Level/GeneralLoggingLevel",
    kind=FieldKind.ENUM,
    choices=tuple(LOGGING_LEVELS),
    case_sensitive=False,
)
ENVIRONMENT_LEVEL_FIELD: Final[FieldSpec] = FieldSpec(
    name="environment_logging_level", path=f"{_LOGGING}/Level/EnvironmentLoggingLevel"
)

PROCESSING_FIELDS: Final[tuple[FieldSpec, ...]] = (
    FieldSpec(
        name="min_responses_expected",
        path=f"{_PROCESSING}/MinResponsesExpected",
        kind=FieldKind.INTEGER,
        default=1,
        minimum=0,
    ),
    FieldSpec(
        name="target_main_doc_element_name",
        path=f"{_PROCESSING}/TargetMainDocElementName",
    ),
    FieldSpec(
        name="response_main_doc_element_name",
        path=f"{_PROCESSING}/ResponseMainDocElementName",
    ),
)

ERROR_FILE_FIELDS: Final[tuple[FieldSpec, ...]] = (
    FieldSpec(
        name="error_files_dir",
        path=f"{_AUDITING}/ErrorFiles/ErrorFilesDir",
        kind=FieldKind.DIRECTORY,
    ),
    FieldSpec(
        name="error_file_name_template",
        path=f"{_AUDITING}/ErrorFiles/ErrorFileNameTemplate",
        default=DEFAULT_ERROR_FILE_NAME_TEMPLATE,
    ),
)

ELEMENT_LIST_FIELDS: Final[tuple[FieldSpec, ...]] = (
    FieldSpec(
        name="mind_elements",
        path=f"{_PROCESSING}/MindElements/ElementName",
        kind=FieldKind.TAG_LIST,
    ),
    FieldSpec(
        name="send_elements",
        path=f"{_PROCESSING}/SendElements/ElementName",
        kind=FieldKind.TAG_LIST,
    ),
    FieldSpec(
        name="response_literals",
        path=f"{_PROCESSING}/ResponseLiterals/ResponseLiteral",
        kind=FieldKind.TAG_LIST,
    ),
)


def handler_catalogue() -> tuple[FieldSpec, ...]:
    return (
        *IDENTITY_FIELDS,
        *INPUT_FIELDS,
        QUEUE_NAME_FIELD,
        QUIET_FIELD,
        PORT_FIELD,
        FILE_FILTER_FIELD,
        *FILE_SET_FIELDS,
        *CSV_FIELDS,
        *OUTPUT_QUEUE_FIELDS,
        OUTPUT_FILE_FIELD,
        *HTTP_FIELDS,
        *LOG_FILE_FIELDS,
        GENERAL_LEVEL_FIELD,
        ENVIRONMENT_LEVEL_FIELD,
        *PROCESSING_FIELDS,
        *audit_key_specs(_AUDITING),
        *ERROR_FILE_FIELDS,
        *ELEMENT_LIST_FIELDS,
    )


def known_paths() -> tuple[str, ...]:
    """Element paths a handler document may contain."""

    paths: list[str] = []
    for spec in handler_catalogue():
        if spec.kind is FieldKind.CHILDREN:
            paths.append(f"{spec.path}/*")
        else:
            paths.append(spec.path)
    return tuple(paths)


@dataclass(frozen=True, slots=True)
class HandlerSettings:
    """Resolved handler settings. Ordered lists are tuples and never ``None``."""

    external_shell: str
    message_processing_class_name: str | None
    message_processing_settings_file_name: str | None
    process: ProcessIdentity
    input_mode: InputMode
    input_limit: int
    input_data_format: str | None
    data_contract_name: TagValue | None
    input_url_jms_server: str | None
    input_queue_name: str | None
    milliseconds_before_quiet: int
    port_number: int
    input_file_name_filter: str | None
    input_file_dir: str | None
    sort_filtered_file_names: bool
    field_separator: str
    max_recs_per_message: int
    num_records_to_skip: int
    column_order: tuple[str, ...]
    xml_format: str | None
    action_on_error: str | None
    prepared_statement_name: str | None
    immediate_commit: str | None
    input_validation: TagValue | None
    output_mode: OutputMode
    output_url_jms_server: str | None
    output_queue_name: str | None
    reply_to_queue_name: str | None
    output_file_name_template: str | None
    http_server_url: str | None
    http_end_point_name: str | None
    http_with_backoff: bool
    log_file_dir: str | None
    log_file_name_template: str
    shut_down_log_file_name_template: str
    log_file_name: str
    shut_down_log_file_name: str
    logging_level: str
    min_responses_expected: int
    target_main_doc_element_name: str | None
    response_main_doc_element_name: str | None
    error_files_dir: str | None
    error_file_name_template: str
    audit_keys: AuditKeys = field(default_factory=AuditKeys)
    mind_elements: tuple[TagValue, ...] = ()
    send_elements: tuple[TagValue, ...] = ()
    response_literals: tuple[TagValue, ...] = ()

    @property
    def pid(self) -> str | None:
        return self.process.pid

    @property
    def ppid(self) -> str | None:
        return self.process.ppid

    @property
    def logging_level_value(self) -> int:
        return LOGGING_LEVELS[self.logging_level]

    @property
    def converted_input_data_format(self) -> str | None:
        """CSV input is converted to XML before processing; other formats pass through."""

        if self.input_data_format == CSV_DATA_FORMAT:
            return CONVERTED_DATA_FORMAT
        return self.input_data_format

    @property
    def data_contract_action(self) -> MissingAuditKeyAction:
        raw = None
        if self.data_contract_name is not None:
            raw = self.data_contract_name.attribute(ACTION_ON_ERROR_ATTRIBUTE)
        return MissingAuditKeyAction.parse(raw)

    def error_file_name(self, audit_key_value: str | None, *, now: datetime, sequence: int) -> str:
        return error_file_name(
            self.error_file_name_template,
            audit_key_value,
            now=now,
            sequence=sequence,
            process_id=self.pid,
        )

    def report(self) -> tuple[str, ...]:
        lines = [
            f"Log file is {self.log_file_name}",
            f"Log Level initialised to {self.logging_level}",
            f"Shut-Down Log file is {self.shut_down_log_file_name}",
            f"Parent Process ID is {self.ppid or 'unknown'}",
            f"Process ID is {self.pid or 'unknown'}",
        ]
        lines.extend(self._input_report())
        if self.input_limit > 0:
            lines.append(f"Input Limit set to {self.input_limit}")
        if self.input_url_jms_server is not None:
            lines.append(f"Input JMS URL is {self.input_url_jms_server}")
        lines.extend(self._output_report())
        if self.data_contract_name is not None:
            lines.append(
                "Will only accept messages with Data Contract Name="
                f"{self.data_contract_name.value}"
            )
            lines.append(f"For Data Contract Name, ActionOnError is {self.data_contract_action}")
        if self.input_validation is not None:
            lines.extend(self._validation_report(self.input_validation))
        processor = describe(self.message_processing_class_name)
        lines.append(f"MessageProcessingClassName is {processor}")
        lines.append(
            f"{self.min_responses_expected} or more Response(s) expected/allowed from "
            f"Processing class {processor}"
        )
        lines.extend(self.audit_keys.report())
        if self.error_files_dir is not None:
            lines.append(f"Error files will be placed in directory {self.error_files_dir}")
        lines.append(
            "Error files will be named according to the following template: "
            f"{self.error_file_name_template}"
        )
        lines.extend(list_report("'Mind' Element", self.mind_elements))
        lines.extend(list_report("Send Element", self.send_elements))
        lines.append(f"TargetMainDocElementName is {describe(self.target_main_doc_element_name)}")
        lines.append(
            f"ResponseMainDocElementName is {describe(self.response_main_doc_element_name)}"
        )
        lines.extend(list_report("Response Literal", self.response_literals))
        return tuple(lines)

    def _input_report(self) -> list[str]:
        if self.input_mode is InputMode.QUEUE:
            return [
                f"Input Queue is {self.input_queue_name}",
                f"MilliSecondsBeforeQuiet {self.milliseconds_before_quiet}",
            ]
        if self.input_mode is InputMode.SOCKET:
            return [f"Socket Server Port Number is {self.port_number}"]
        if self.input_mode is InputMode.FILE_SET:
            lines = [
                f"Input FileName Filter is {self.input_file_name_filter}",
                f"Input Files Directory is {self.input_file_dir}",
                "Input from a fileset will "
                f"{'' if self.sort_filtered_file_names else 'NOT '}be sorted on filename.",
                f"Field Separator (for CSV files) is {describe(self.field_separator)}",
                f"Max records per input message (for CSV files) is {self.max_recs_per_message}",
                f"Number of records to skip (for CSV files) is {self.num_records_to_skip}",
                f"Column order (for CSV files) is {', '.join(self.column_order) or '(not set)'}",
                f"XMLFormat is {describe(self.xml_format)}",
            ]
            if self.xml_format == INSERT_XML_FORMAT:
                lines.append(f"ActionOnError is {describe(self.action_on_error)}")
                lines.append(f"PreparedStatementName is {describe(self.prepared_statement_name)}")
                lines.append(f"ImmediateCommit is {describe(self.immediate_commit)}")
            return lines
        return ["Input will be supplied programmatically"]

    def _output_report(self) -> list[str]:
        lines: list[str] = []
        if self.output_queue_name is not None:
            lines.append(f"Output Queue is {self.output_queue_name}")
        elif self.output_file_name_template is not None:
            lines.append(f"Output FileName Template is {self.output_file_name_template}")
        if self.output_url_jms_server is not None:
            lines.append(f"Output JMS URL is {self.output_url_jms_server}")
        if self.reply_to_queue_name is not None:
            lines.append(f"ReplyTo Queue is {self.reply_to_queue_name}")
        if self.http_server_url is not None:
            lines.append(f"HTTP ServerUrl is {self.http_server_url}")
        if self.http_end_point_name is not None:
            lines.append(f"HTTP EndPointName is {self.http_end_point_name}")
        lines.append(
            f"HTTP Post will {'' if self.http_with_backoff else 'NOT '}"
            "back off incrementally when trying to connect"
        )
        return lines

    @staticmethod
    def _validation_report(settings: TagValue) -> list[str]:
        schema_validation = settings.attribute("SchemaValidation")
        lines = [f"Input message Schema Validation is {describe(schema_validation)}"]
        definition = settings.attribute("SchemaDefinitionFileName")
        if definition is not None:
            negation = "not " if schema_validation in (None, "off") else ""
            lines.append(
                f"Input message Validation will {negation}be performed against file "
                f"{definition} (language={describe(settings.attribute('SchemaLanguage'))}) "
                "and no Schema specification expected in message"
            )
        return lines


def build_handler_settings(
    source: DocumentSource,
    *,
    identity: ProcessIdentity | None = None,
    path_separator: str = os.sep,
) -> HandlerSettings:
    """Assemble ``HandlerSettings``; raises ``ProfileAssemblyError`` on any field failure."""

    return _build(source, "handler", identity, path_separator, require_queue=False)


def build_queue_settings(
    source: DocumentSource,
    *,
    identity: ProcessIdentity | None = None,
    path_separator: str = os.sep,
) -> HandlerSettings:
    """Assemble handler settings for a queue-fed deployment; the input queue name is required."""

    return _build(source, "queue", identity, path_separator, require_queue=True)


def _build(
    source: DocumentSource,
    profile: str,
    identity: ProcessIdentity | None,
    path_separator: str,
    *,
    require_queue: bool,
) -> HandlerSettings:
    process = identity if identity is not None else ProcessIdentity.current()

    def build(draft: ProfileDraft) -> HandlerSettings:
        draft.fields(IDENTITY_FIELDS)
        draft.put("process", process)
        draft.fields(INPUT_FIELDS)
        draft.put("input_mode", _resolve_input_branch(draft, require_queue=require_queue))
        draft.fields(CSV_FIELDS)
        draft.put("output_mode", _resolve_output(draft))
        _resolve_logging(draft, process)
        draft.fields(PROCESSING_FIELDS)
        draft.put("audit_keys", resolve_audit_keys(draft, _AUDITING))
        _resolve_error_files(draft)
        draft.fields(ELEMENT_LIST_FIELDS)
        return draft.finish(HandlerSettings)

    return assemble(profile, PathResolver(source), build, path_separator=path_separator)


def _resolve_input_branch(draft: ProfileDraft, *, require_queue: bool) -> InputMode:
    draft.put("milliseconds_before_quiet", QUIET_FIELD.default)
    draft.put("port_number", PORT_FIELD.default)
    draft.put("input_file_name_filter", None)
    draft.put("input_file_dir", None)
    draft.put("sort_filtered_file_names", True)

    queue_name = draft.field(REQUIRED_QUEUE_NAME_FIELD if require_queue else QUEUE_NAME_FIELD)
    if queue_name is not None:
        draft.field(QUIET_FIELD)
        return InputMode.QUEUE

    port = draft.field(PORT_FIELD)
    if isinstance(port, int) and port > 0:
        return InputMode.SOCKET

    if draft.field(FILE_FILTER_FIELD) is not None:
        draft.fields(FILE_SET_FIELDS)
        return InputMode.FILE_SET

    return InputMode.PROGRAMMATIC


def _resolve_output(draft: ProfileDraft) -> OutputMode:
    draft.fields(OUTPUT_QUEUE_FIELDS)
    queue_name = draft.get("output_queue_name")

    template = None
    if queue_name is None:
        template = draft.field(OUTPUT_FILE_FIELD)
    else:
        draft.put(OUTPUT_FILE_FIELD.name, None)

    # Either the queue name or the template is absent here, so HTTP is always looked up.
    draft.fields(HTTP_FIELDS)

    if queue_name is not None:
        return OutputMode.QUEUE
    if template is not None:
        return OutputMode.FILE
    if draft.get("http_server_url") is not None:
        return OutputMode.HTTP
    return OutputMode.NONE


def _resolve_logging(draft: ProfileDraft, process: ProcessIdentity) -> None:
    draft.fields(LOG_FILE_FIELDS)
    directory = draft.get("log_file_dir") or ""
    replacements = log_replacements(
        _as_optional_str(draft.get("message_processing_class_name")), process.pid
    )
    draft.put(
        "log_file_name",
        substitute(f"{directory}{draft.get('log_file_name_template')}", replacements),
    )
    draft.put(
        "shut_down_log_file_name",
        substitute(f"{directory}{draft.get('shut_down_log_file_name_template')}", replacements),
    )

    level = extract_field(
        GENERAL_LEVEL_FIELD, draft.resolver, path_separator=draft.path_separator
    )
    if level is None:
        environment = extract_field(
            ENVIRONMENT_LEVEL_FIELD, draft.resolver, path_separator=draft.path_separator
        )
        level = ENVIRONMENT_LOGGING_LEVELS.get(str(environment)) if environment else None
    draft.put("logging_level", str(level) if level is not None else DEFAULT_LOGGING_LEVEL)


def _resolve_error_files(draft: ProfileDraft) -> None:
    directory = draft.field(ERROR_FILE_FIELDS[0])
    template = draft.field(ERROR_FILE_FIELDS[1])
    if directory is not None:
        draft.put("error_file_name_template", f"{directory}{template}")


def _as_optional_str(value: object) -> str | None:
    return value if isinstance(value, str) else None


__all__ = [
    "HANDLER_ROOT",
    "HandlerSettings",
    "InputMode",
    "OutputMode",
    "ProcessIdentity",
    "build_handler_settings",
    "build_queue_settings",
    "handler_catalogue",
    "known_paths",
]
