from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Annotated, Any, Callable, Dict, List, Literal, Optional

from pydantic import BaseModel, Field, field_validator


# ================================
# Enums
# ================================


class ScalarKind(str, Enum):
    TEXT = "text"
    BOOL = "bool"
    INT = "int"
    UINT = "uint"
    FLOAT = "float"
    RECORD = "record"
    OTHER = "other"


class LineKind(str, Enum):
    BLANK = "blank"
    COMMENT = "comment"
    SECTION = "section"
    ASSIGNMENT = "assignment"
    NO_DELIMITER = "no_delimiter"


# ================================
# Width markers
# ================================


@dataclass(frozen=True)
class Width:
    """
    Annotated marker declaring the storage width of a numeric field.

      cache_size: Annotated[int, Width(ScalarKind.INT, 32)]
    """
    kind: ScalarKind
    bits: int

    def __post_init__(self) -> None:
        if self.kind not in (ScalarKind.INT, ScalarKind.UINT, ScalarKind.FLOAT):
            raise ValueError(f"Width only applies to numeric kinds, got {self.kind.value}")
        allowed = (32, 64) if self.kind == ScalarKind.FLOAT else (8, 16, 32, 64)
        if self.bits not in allowed:
            raise ValueError(f"{self.kind.value} width must be one of {allowed}, got {self.bits}")


Int8 = Annotated[int, Width(ScalarKind.INT, 8)]
Int16 = Annotated[int, Width(ScalarKind.INT, 16)]
Int32 = Annotated[int, Width(ScalarKind.INT, 32)]
Int64 = Annotated[int, Width(ScalarKind.INT, 64)]

UInt8 = Annotated[int, Width(ScalarKind.UINT, 8)]
UInt16 = Annotated[int, Width(ScalarKind.UINT, 16)]
UInt32 = Annotated[int, Width(ScalarKind.UINT, 32)]
UInt64 = Annotated[int, Width(ScalarKind.UINT, 64)]
UInt = UInt64

Float32 = Annotated[float, Width(ScalarKind.FLOAT, 32)]
Float64 = Annotated[float, Width(ScalarKind.FLOAT, 64)]

# Plain `int` / `float` annotations use these widths.
DEFAULT_INT_BITS = 64
DEFAULT_FLOAT_BITS = 64


# ================================
# Schema tree
# ================================

Setter = Callable[[Any], None]
Getter = Callable[[], Any]


@dataclass
class Binding:
    """
    One tagged field of a destination record.

    `setter`/`getter` close over the destination instance, so the record is
    written in place. Section bindings carry their keys in `children`.
    """
    tag: str
    name: str
    kind: ScalarKind
    setter: Setter
    getter: Getter
    bits: Optional[int] = None
    children: Dict[str, "Binding"] = field(default_factory=dict)
    # Reserved for pattern-matched section names; never consulted by the decoder.
    wildcard: bool = False

    @property
    def is_section(self) -> bool:
        return bool(self.children)

    def type_label(self) -> str:
        if self.bits is None:
            return self.kind.value
        return f"{self.kind.value}{self.bits}"


SchemaTree = Dict[str, Binding]


# ================================
# Decode results
# ================================


class DecodeReport(BaseModel):
    """
    Counters describing what a decode call did with each line.
    Purely diagnostic: unknown content never fails a decode.
    """

    lines: int = 0
    blank: int = 0
    comments: int = 0
    sections: int = 0
    assignments: int = 0
    outside_section: int = 0
    no_delimiter: int = 0
    dropped: int = 0

    unknown_sections: List[str] = Field(default_factory=list)
    unknown_keys: List[str] = Field(default_factory=list)

    @property
    def has_unknown(self) -> bool:
        return bool(self.unknown_sections or self.unknown_keys)


# ================================
# Settings (defaults only)
# ================================

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

OutputFormat = Literal["table", "json", "yaml"]


class LogConfig(BaseModel):
    level: str = Field(default="WARNING", description="Root level for the initag logger.")

    @field_validator("level")
    @classmethod
    def _known_level(cls, v: str) -> str:
        v = (v or "").strip().upper()
        if v not in LOG_LEVELS:
            raise ValueError(f"log.level must be one of {', '.join(LOG_LEVELS)}")
        return v


class OutputConfig(BaseModel):
    format: OutputFormat = "table"
    strict: bool = Field(
        default=False,
        description="Exit non-zero when the input holds sections or keys the model does not declare.",
    )


class Settings(BaseModel):
    """
    Defaults live here.
    Repo/global/CLI overrides are merged by core/config.py (do NOT load config in defaults).
    """

    log: LogConfig = Field(default_factory=LogConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
