from __future__ import annotations

from initag.parsers.coerce import COERCERS, set_value
from initag.parsers.decoder import Decoder, decode, decode_bytes, load, load_path
from initag.parsers.errors import AssignmentError, CoercionError, IniDecodeError, ModelImportError, SchemaError
from initag.parsers.schema import IniField, build_schema, ini_field

__all__ = [
    "AssignmentError",
    "COERCERS",
    "CoercionError",
    "Decoder",
    "IniDecodeError",
    "IniField",
    "ModelImportError",
    "SchemaError",
    "build_schema",
    "decode",
    "decode_bytes",
    "ini_field",
    "load",
    "load_path",
    "set_value",
]
