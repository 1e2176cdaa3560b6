from __future__ import annotations

from enum import IntEnum


class ExitCode(IntEnum):
    OK = 0
    UNKNOWN_CONTENT = 1  # --strict and the input had undeclared sections/keys
    ERROR = 2
