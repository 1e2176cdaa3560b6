from __future__ import annotations

import codecs
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import IO, Any, Optional, Union

from initag.core.models import Binding, DecodeReport, LineKind, SchemaTree
from initag.parsers.coerce import set_value
from initag.parsers.common import scan_lines
from initag.parsers.errors import IniDecodeError
from initag.parsers.schema import build_schema
from initag.parsers.types import ParsedLine

logger = logging.getLogger(__name__)


@dataclass
class DecodeState:
    """Cursor for one decode call."""
    section: Optional[Binding] = None
    report: DecodeReport = field(default_factory=DecodeReport)


def _enter_section(schema: SchemaTree, state: DecodeState, pl: ParsedLine) -> None:
    binding = schema.get(pl.text)
    if binding is None:
        logger.debug("Line %d: unknown section %s; keys ignored until next header", pl.line, pl.text)
        state.section = None
        state.report.unknown_sections.append(pl.text)
        return

    logger.debug("Line %d: entering section %s", pl.line, pl.text)
    state.section = binding
    state.report.sections += 1


def _assign(section: Binding, state: DecodeState, pl: ParsedLine) -> None:
    key = pl.key or ""
    child = section.children.get(key)
    if child is None:
        logger.debug("Line %d: no field for key %r in %s", pl.line, key, section.tag)
        state.report.unknown_keys.append(f"{section.tag}.{key}")
        return

    if set_value(child, pl.value or "", pl.line):
        state.report.assignments += 1
    else:
        state.report.dropped += 1


def _process(schema: SchemaTree, state: DecodeState, pl: ParsedLine) -> None:
    state.report.lines += 1
    logger.debug("Scanned (%d): %s", pl.line, pl.text)

    if pl.kind == LineKind.BLANK:
        state.report.blank += 1
        return
    if pl.kind == LineKind.COMMENT:
        state.report.comments += 1
        return
    if pl.kind == LineKind.SECTION:
        _enter_section(schema, state, pl)
        return

    if state.section is None:
        logger.debug("Line %d: outside any known section; skipped", pl.line)
        state.report.outside_section += 1
        return

    if pl.kind == LineKind.NO_DELIMITER:
        state.report.no_delimiter += 1
        return

    _assign(state.section, state, pl)


def decode(text: str, record: Any) -> DecodeReport:
    """
    Parse INI `text` and store matched values on `record` in place.

    `record` is a pydantic model or dataclass instance whose fields carry
    ini tags (see IniField / ini_field). Section fields are nested records
    tagged with their bracketed header, e.g. "[Mysql]"; their fields are
    tagged with bare key names.

    A leading BOM is ignored. Unknown sections, unknown keys and lines
    without `=` are skipped and counted in the returned report. Raises
    SchemaError when the record cannot be bound, CoercionError on the
    first malformed or out-of-range number and AssignmentError when a
    validating model rejects a value; values assigned before the error
    are kept.
    """
    if text.startswith("\ufeff"):
        text = text[1:]
    schema = build_schema(record)
    state = DecodeState()
    for pl in scan_lines(text):
        _process(schema, state, pl)
    return state.report


def decode_bytes(data: bytes, record: Any, *, encoding: str = "utf-8") -> DecodeReport:
    if data.startswith(codecs.BOM_UTF8):
        data = data[len(codecs.BOM_UTF8):]
    try:
        text = data.decode(encoding)
    except UnicodeDecodeError as e:
        raise IniDecodeError(f"Input is not valid {encoding}: {e}") from e
    return decode(text, record)


def load(fp: IO[Any], record: Any, *, encoding: str = "utf-8") -> DecodeReport:
    """Read the whole stream (text or binary) and decode it into `record`."""
    data = fp.read()
    if isinstance(data, (bytes, bytearray)):
        return decode_bytes(bytes(data), record, encoding=encoding)
    return decode(data, record)


def load_path(path: Union[str, Path], record: Any, *, encoding: str = "utf-8") -> DecodeReport:
    return decode_bytes(Path(path).read_bytes(), record, encoding=encoding)


class Decoder:
    """
    Decodes INI documents into one destination record.

    The binding tree is rebuilt on every call, so nested records replaced
    between calls are picked up.
    """

    def __init__(self, record: Any, *, encoding: str = "utf-8") -> None:
        self.record = record
        self.encoding = encoding

    def decode(self, data: Union[str, bytes]) -> DecodeReport:
        if isinstance(data, bytes):
            return decode_bytes(data, self.record, encoding=self.encoding)
        return decode(data, self.record)

    def load(self, fp: IO[Any]) -> DecodeReport:
        return load(fp, self.record, encoding=self.encoding)
