from __future__ import annotations

from typing import Optional


class IniDecodeError(Exception):
    """Base exception for initag decoding."""


class SchemaError(IniDecodeError):
    """The destination record's shape cannot be populated from INI text."""

    def __init__(self, detail: str, *, field: Optional[str] = None) -> None:
        self.detail = detail
        self.field = field
        msg = detail if field is None else f"{field}: {detail}"
        super().__init__(msg)


class CoercionError(IniDecodeError, ValueError):
    """A value could not be parsed into its field's numeric type, or does not fit it."""

    def __init__(self, text: str, line: int) -> None:
        self.text = text
        self.line = line
        super().__init__(f"Invalid number '{text}' specified on line {line}")


class AssignmentError(IniDecodeError, ValueError):
    """The destination record refused a coerced value (pydantic assignment validation)."""

    def __init__(self, text: str, line: int, *, field: str, detail: str) -> None:
        self.text = text
        self.line = line
        self.field = field
        self.detail = detail
        super().__init__(f"Value '{text}' for {field} on line {line} rejected: {detail}")


class ModelImportError(IniDecodeError):
    """A `module:Class` reference could not be resolved to a record type."""
