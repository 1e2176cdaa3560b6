"""Tests for scalar coercion."""

from __future__ import annotations

import math
import struct
from typing import Any, List

import pytest

from initag import CoercionError, ScalarKind
from initag.core.models import Binding
from initag.parsers.coerce import parse_bool, parse_float, parse_int, parse_uint, set_value


def _binding(kind: ScalarKind, bits: Any = None) -> "tuple[Binding, List[Any]]":
    stored: List[Any] = []
    b = Binding(tag="k", name="k", kind=kind, bits=bits, setter=stored.append, getter=lambda: stored[-1])
    return b, stored


@pytest.mark.parametrize("text", ["TRUE", "Yes", "1", "y", "t", "true", "YES", "T"])
def test_truthy_values(text: str) -> None:
    assert parse_bool(text) is True


@pytest.mark.parametrize("text", ["", "0", "no", "maybe", "false", "on", "2", "yes please"])
def test_everything_else_is_false(text: str) -> None:
    assert parse_bool(text) is False


@pytest.mark.parametrize(
    ("text", "bits", "expected"),
    [
        ("0", 8, 0),
        ("127", 8, 127),
        ("-128", 8, -128),
        ("+5", 8, 5),
        ("007", 16, 7),
        ("32767", 16, 32767),
        ("-2147483648", 32, -2147483648),
        ("9223372036854775807", 64, 9223372036854775807),
        ("-9223372036854775808", 64, -9223372036854775808),
        ("2000", None, 2000),
    ],
)
def test_signed_within_width(text: str, bits: int, expected: int) -> None:
    assert parse_int(text, 1, bits) == expected


@pytest.mark.parametrize(
    ("text", "bits"),
    [
        ("128", 8),
        ("-129", 8),
        ("32768", 16),
        ("2147483648", 32),
        ("9223372036854775808", 64),
        ("9223372036854775808", None),
    ],
)
def test_signed_overflow(text: str, bits: int) -> None:
    with pytest.raises(CoercionError) as exc:
        parse_int(text, 7, bits)
    assert exc.value.text == text
    assert exc.value.line == 7


@pytest.mark.parametrize("text", ["", "abc", "1.0", "1_000", "0x10", "1e3", "- 1", "٣", "12abc", "--1"])
def test_signed_rejects_bad_format(text: str) -> None:
    with pytest.raises(CoercionError):
        parse_int(text, 1, 64)


@pytest.mark.parametrize(
    ("text", "bits", "expected"),
    [
        ("0", 8, 0),
        ("255", 8, 255),
        ("65535", 16, 65535),
        ("4294967295", 32, 4294967295),
        ("18446744073709551615", 64, 18446744073709551615),
    ],
)
def test_unsigned_within_width(text: str, bits: int, expected: int) -> None:
    assert parse_uint(text, 1, bits) == expected


@pytest.mark.parametrize(
    ("text", "bits"),
    [("256", 8), ("65536", 16), ("4294967296", 32), ("18446744073709551616", 64)],
)
def test_unsigned_overflow(text: str, bits: int) -> None:
    with pytest.raises(CoercionError):
        parse_uint(text, 1, bits)


@pytest.mark.parametrize("text", ["-1", "+1", "", "1.5", "1_0"])
def test_unsigned_rejects_signs_and_bad_format(text: str) -> None:
    with pytest.raises(CoercionError):
        parse_uint(text, 1, 64)


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("1.5", 1.5),
        (".5", 0.5),
        ("5.", 5.0),
        ("42", 42.0),
        ("-2.5E-3", -0.0025),
        ("+1e3", 1000.0),
        ("1e-400", 0.0),
    ],
)
def test_float64_literals(text: str, expected: float) -> None:
    assert parse_float(text, 1, 64) == expected


def test_float_special_values() -> None:
    assert parse_float("inf", 1, 64) == math.inf
    assert parse_float("-Infinity", 1, 32) == -math.inf
    assert math.isnan(parse_float("NaN", 1, 64))


@pytest.mark.parametrize("text", ["", "abc", "1.2.3", "0x1p3", "1_0.0", "e5", "1e", ".", "infinite"])
def test_float_rejects_bad_format(text: str) -> None:
    with pytest.raises(CoercionError):
        parse_float(text, 1, 64)


def test_float64_overflow() -> None:
    with pytest.raises(CoercionError) as exc:
        parse_float("1e400", 9, 64)
    assert exc.value.line == 9


def test_float32_overflow_and_rounding() -> None:
    with pytest.raises(CoercionError):
        parse_float("3.5e38", 1, 32)

    # fits in float64 but not float32
    assert parse_float("3.5e38", 1, 64) == 3.5e38

    single = parse_float("0.1", 1, 32)
    assert single == struct.unpack("<f", struct.pack("<f", 0.1))[0]
    assert single != 0.1
    assert single == pytest.approx(0.1)


def test_error_message_names_text_and_line() -> None:
    err = CoercionError("notanumber", 2)
    assert str(err) == "Invalid number 'notanumber' specified on line 2"
    assert isinstance(err, ValueError)


def test_set_value_stores_coerced_value() -> None:
    b, stored = _binding(ScalarKind.UINT, 16)
    assert set_value(b, "8080", 1) is True
    assert stored == [8080]

    b, stored = _binding(ScalarKind.TEXT)
    set_value(b, '"quoted" ; not a comment', 1)
    assert stored == ['"quoted" ; not a comment']


@pytest.mark.parametrize("kind", [ScalarKind.OTHER, ScalarKind.RECORD])
def test_set_value_drops_unsupported_kinds(kind: ScalarKind) -> None:
    b, stored = _binding(kind)
    assert set_value(b, "anything", 4) is False
    assert stored == []


def test_set_value_does_not_store_on_failure() -> None:
    b, stored = _binding(ScalarKind.INT, 8)
    with pytest.raises(CoercionError):
        set_value(b, "1000", 3)
    assert stored == []


@pytest.mark.parametrize(
    ("parse", "text"),
    [
        (parse_int, "9" * 5000),
        (parse_int, "-" + "9" * 5000),
        (parse_uint, "9" * 5000),
        (parse_uint, "1" + "0" * 20),
    ],
)
def test_huge_digit_runs_are_overflows(parse: Any, text: str) -> None:
    with pytest.raises(CoercionError) as exc:
        parse(text, 3, 8)
    assert exc.value.text == text
    assert exc.value.line == 3


def test_leading_zeros_do_not_count_towards_width() -> None:
    assert parse_int("0" * 5000 + "42", 1, 8) == 42
    assert parse_int("-" + "0" * 30 + "128", 1, 8) == -128
    assert parse_uint("0" * 30 + "18446744073709551615", 1, 64) == 18446744073709551615
