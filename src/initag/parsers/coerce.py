from __future__ import annotations

import logging
import math
import re
import struct
from typing import Any, Callable, Dict, Optional

from pydantic import ValidationError

from initag.core.models import DEFAULT_FLOAT_BITS, DEFAULT_INT_BITS, Binding, ScalarKind
from initag.parsers.errors import AssignmentError, CoercionError

logger = logging.getLogger(__name__)

TRUE_VALUES = frozenset({"t", "true", "y", "yes", "1"})

# Base-10 only: no underscores, no base prefixes, ASCII digits.
_INT_RE = re.compile(r"[+-]?[0-9]+")
_UINT_RE = re.compile(r"[0-9]+")
_FLOAT_RE = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_FLOAT_SPECIAL_RE = re.compile(r"[+-]?(?:inf|infinity|nan)", re.IGNORECASE)

# Significant digits in 2**64 - 1; anything longer cannot fit any width.
_MAX_INT_DIGITS = 20


def parse_bool(text: str) -> bool:
    return text.lower() in TRUE_VALUES


def int_range(bits: int, *, signed: bool) -> tuple[int, int]:
    if signed:
        return -(1 << (bits - 1)), (1 << (bits - 1)) - 1
    return 0, (1 << bits) - 1


def _to_int(text: str, line: int) -> int:
    # int() refuses very long digit strings (leading zeros included)
    digits = text.lstrip("+-").lstrip("0") or "0"
    if len(digits) > _MAX_INT_DIGITS:
        raise CoercionError(text, line)
    return -int(digits) if text.startswith("-") else int(digits)


def parse_int(text: str, line: int, bits: Optional[int] = None) -> int:
    bits = bits or DEFAULT_INT_BITS
    if not _INT_RE.fullmatch(text):
        raise CoercionError(text, line)
    n = _to_int(text, line)
    lo, hi = int_range(bits, signed=True)
    if n < lo or n > hi:
        raise CoercionError(text, line)
    return n


def parse_uint(text: str, line: int, bits: Optional[int] = None) -> int:
    bits = bits or DEFAULT_INT_BITS
    if not _UINT_RE.fullmatch(text):
        raise CoercionError(text, line)
    n = _to_int(text, line)
    _, hi = int_range(bits, signed=False)
    if n > hi:
        raise CoercionError(text, line)
    return n


def parse_float(text: str, line: int, bits: Optional[int] = None) -> float:
    """
    Decimal literal (or inf/infinity/nan) at 32- or 64-bit precision.
    Finite text that does not fit the precision is an overflow.
    """
    bits = bits or DEFAULT_FLOAT_BITS
    special = bool(_FLOAT_SPECIAL_RE.fullmatch(text))
    if not special and not _FLOAT_RE.fullmatch(text):
        raise CoercionError(text, line)

    n = float(text)
    if special:
        return n
    if math.isinf(n):
        raise CoercionError(text, line)

    if bits == 32:
        try:
            n = struct.unpack("<f", struct.pack("<f", n))[0]
        except OverflowError as e:
            raise CoercionError(text, line) from e
    return n


Coercer = Callable[[str, int, Optional[int]], Any]

COERCERS: Dict[ScalarKind, Coercer] = {
    ScalarKind.TEXT: lambda text, line, bits: text,
    ScalarKind.BOOL: lambda text, line, bits: parse_bool(text),
    ScalarKind.INT: parse_int,
    ScalarKind.UINT: parse_uint,
    ScalarKind.FLOAT: parse_float,
}


def set_value(binding: Binding, text: str, line: int) -> bool:
    """
    Coerce `text` into the binding's kind and store it.

    Returns False when the kind has no coercer (the value is dropped).
    Raises CoercionError on malformed or out-of-range numbers and
    AssignmentError when a validating model rejects the value.
    """
    coerce = COERCERS.get(binding.kind)
    if coerce is None:
        logger.warning(
            "Line %d: cannot set %s field %r from %r; value dropped",
            line,
            binding.kind.value,
            binding.tag,
            text,
        )
        return False

    value = coerce(text, line, binding.bits)
    logger.debug("SET(%s, %r) line %d -> %s", binding.type_label(), binding.tag, line, value)
    try:
        binding.setter(value)
    except ValidationError as e:
        errors = e.errors()
        detail = errors[0]["msg"] if errors else str(e)
        raise AssignmentError(text, line, field=binding.tag, detail=detail) from e
    return True
