"""initag: decode INI text into tagged pydantic models and dataclasses."""

from initag.core.models import (
    Binding,
    DecodeReport,
    Float32,
    Float64,
    Int8,
    Int16,
    Int32,
    Int64,
    ScalarKind,
    UInt,
    UInt8,
    UInt16,
    UInt32,
    UInt64,
    Width,
)
from initag.parsers import (
    AssignmentError,
    CoercionError,
    Decoder,
    IniDecodeError,
    IniField,
    ModelImportError,
    SchemaError,
    build_schema,
    decode,
    decode_bytes,
    ini_field,
    load,
    load_path,
)

__all__ = [
    "AssignmentError",
    "Binding",
    "CoercionError",
    "DecodeReport",
    "Decoder",
    "Float32",
    "Float64",
    "IniDecodeError",
    "IniField",
    "Int8",
    "Int16",
    "Int32",
    "Int64",
    "ModelImportError",
    "ScalarKind",
    "SchemaError",
    "UInt",
    "UInt8",
    "UInt16",
    "UInt32",
    "UInt64",
    "Width",
    "build_schema",
    "decode",
    "decode_bytes",
    "ini_field",
    "load",
    "load_path",
]

__version__ = "0.1.0"
