"""Immutable result of processing one message."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from collections.abc import Mapping
from dataclasses import dataclass, fields
from enum import StrEnum

from gemha_settings.source.xml_source import XmlDocumentSource


class ResponseCode(StrEnum):
    SUCCESS = "SUCCESS"
    INTERRUPTED = "INTERRUPTED"
    FAILURE_INVALID_MESSAGE = "FAILURE_INVALID_MESSAGE"
    FAILURE_INVALID_XML = "FAILURE_INVALID_XML"


@dataclass(frozen=True, slots=True)
class ResponseOptions:
    """Optional parts of a response.

    ``input_doc`` is the received message as text, kept so the response never
    shares a mutable document with the caller.
    """

    response: str | None = None
    exception: BaseException | None = None
    input_doc: str | None = None
    audit_key_values: str | None = None


_OPTION_NAMES = frozenset(item.name for item in fields(ResponseOptions))


@dataclass(frozen=True, slots=True)
class ProcessResponse:
    code: ResponseCode
    rows_processed: int
    response: str | None = None
    exception: BaseException | None = None
    input_doc: str | None = None
    audit_key_values: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.code is ResponseCode.SUCCESS

    def input_document(self) -> XmlDocumentSource | None:
        """Re-parse the stored input message; ``None`` when absent or not well-formed XML."""

        if self.input_doc is None:
            return None
        try:
            return XmlDocumentSource.from_string(self.input_doc, location="<input message>")
        except ET.ParseError:
            return None


def build_process_response(
    code: ResponseCode | str,
    rows_processed: int,
    options: ResponseOptions | Mapping[str, object] | None = None,
) -> ProcessResponse:
    """Build a ``ProcessResponse`` in one step.

    ``options`` may be a ``ResponseOptions`` or a mapping of its field names;
    unknown option names raise ``ValueError``.
    """

    resolved_code = ResponseCode(code)
    if isinstance(rows_processed, bool) or not isinstance(rows_processed, int):
        raise TypeError("rows_processed must be an int")
    if options is None:
        resolved = ResponseOptions()
    elif isinstance(options, ResponseOptions):
        resolved = options
    else:
        unknown = sorted(set(options) - _OPTION_NAMES)
        if unknown:
            raise ValueError(f"unknown response option(s): {', '.join(unknown)}")
        resolved = ResponseOptions(**options)  # type: ignore[arg-type]
    return ProcessResponse(
        code=resolved_code,
        rows_processed=rows_processed,
        response=resolved.response,
        exception=resolved.exception,
        input_doc=resolved.input_doc,
        audit_key_values=resolved.audit_key_values,
    )


__all__ = [
    "ProcessResponse",
    "ResponseCode",
    "ResponseOptions",
    "build_process_response",
]
