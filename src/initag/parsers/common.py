from __future__ import annotations

from typing import Iterator, Optional, Tuple

from initag.core.models import LineKind
from initag.parsers.types import ParsedLine

COMMENT_PREFIXES = (";", "#")


def is_comment(line: str) -> bool:
    return line.startswith(COMMENT_PREFIXES)


def is_section_header(line: str) -> bool:
    """
    `[` ... `]` on a trimmed line. The whole bracketed string is the tag,
    so `[Mysql]` matches a field tagged "[Mysql]" and nothing else.
    """
    return len(line) >= 2 and line[0] == "[" and line[-1] == "]"


def split_assignment(line: str) -> Optional[Tuple[str, str]]:
    """
    Split on the first `=` only:
      "a = b = c" -> ("a", "b = c")
    Returns None when there is no delimiter.
    """
    if "=" not in line:
        return None
    key, val = line.split("=", 1)
    return key.strip(), val.strip()


def iter_raw_lines(text: str) -> Iterator[str]:
    """Yield lines split on `\\n`; a trailing newline does not add an empty line."""
    if not text:
        return
    parts = text.split("\n")
    if parts and parts[-1] == "":
        parts.pop()
    yield from parts


def classify_line(raw: str, line_no: int) -> ParsedLine:
    line = raw.strip()

    if not line:
        return ParsedLine(kind=LineKind.BLANK, line=line_no, text=line)

    if is_comment(line):
        return ParsedLine(kind=LineKind.COMMENT, line=line_no, text=line)

    if is_section_header(line):
        return ParsedLine(kind=LineKind.SECTION, line=line_no, text=line)

    kv = split_assignment(line)
    if kv is None:
        return ParsedLine(kind=LineKind.NO_DELIMITER, line=line_no, text=line)

    key, val = kv
    return ParsedLine(kind=LineKind.ASSIGNMENT, line=line_no, text=line, key=key, value=val)


def scan_lines(text: str) -> Iterator[ParsedLine]:
    """Classify every line of `text`, numbering from 1."""
    for idx, raw in enumerate(iter_raw_lines(text), start=1):
        yield classify_line(raw, idx)
