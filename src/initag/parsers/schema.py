from __future__ import annotations

import collections.abc
import dataclasses
import logging
import types
import typing
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

from pydantic import BaseModel, Field

from initag.core.models import (
    DEFAULT_FLOAT_BITS,
    DEFAULT_INT_BITS,
    Binding,
    ScalarKind,
    SchemaTree,
    Width,
)
from initag.parsers.errors import SchemaError

logger = logging.getLogger(__name__)

# Key under which the INI tag is stored in field metadata.
INI_TAG = "ini"

_CONTAINER_ORIGINS = (
    list,
    dict,
    set,
    frozenset,
    tuple,
    collections.abc.Sequence,
    collections.abc.MutableSequence,
    collections.abc.Mapping,
    collections.abc.MutableMapping,
    collections.abc.Set,
    collections.abc.MutableSet,
    collections.abc.Iterable,
    collections.abc.Collection,
)

_UNION_TYPES = (Union, types.UnionType)


# ----------------------------
# Field declaration helpers
# ----------------------------


def IniField(tag: str, default: Any = ..., **kwargs: Any) -> Any:
    """
    pydantic field carrying an INI tag:

      class Mysql(BaseModel):
          cache_size: int = IniField("cache_size", default=0)

      class Config(BaseModel):
          mysql: Mysql = IniField("[Mysql]", default_factory=Mysql)
    """
    extra = dict(kwargs.pop("json_schema_extra", None) or {})
    extra[INI_TAG] = tag
    if "default_factory" in kwargs:
        return Field(json_schema_extra=extra, **kwargs)
    return Field(default, json_schema_extra=extra, **kwargs)


def ini_field(tag: str, **kwargs: Any) -> Any:
    """dataclasses.field() carrying an INI tag."""
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[INI_TAG] = tag
    return dataclasses.field(metadata=metadata, **kwargs)


# ----------------------------
# Record introspection
# ----------------------------


def is_record_type(tp: Any) -> bool:
    if not isinstance(tp, type):
        return False
    return issubclass(tp, BaseModel) or dataclasses.is_dataclass(tp)


def is_record(obj: Any) -> bool:
    return is_record_type(type(obj))


def _is_frozen(record: Any) -> bool:
    if isinstance(record, BaseModel):
        return bool(record.model_config.get("frozen", False))
    params = getattr(type(record), "__dataclass_params__", None)
    return bool(getattr(params, "frozen", False))


def _iter_fields(record: Any) -> Iterator[Tuple[str, Any, List[Any], Optional[str], bool]]:
    """
    Yield (name, annotation, extra_metadata, tag, frozen) for each declared field.
    Untagged fields yield tag=None.
    """
    if isinstance(record, BaseModel):
        for name, info in type(record).model_fields.items():
            extra = info.json_schema_extra if isinstance(info.json_schema_extra, dict) else {}
            tag = extra.get(INI_TAG)
            yield name, info.annotation, list(info.metadata), tag, bool(info.frozen)
        return

    try:
        hints = typing.get_type_hints(type(record), include_extras=True)
    except Exception as e:
        raise SchemaError(
            f"cannot resolve field annotations of {type(record).__name__}: {e}"
        ) from e

    for f in dataclasses.fields(record):
        tag = f.metadata.get(INI_TAG)
        yield f.name, hints.get(f.name, f.type), [], tag, False


def _unwrap(annotation: Any, metadata: List[Any], *, field: str) -> Tuple[Any, List[Any]]:
    """Strip Annotated[...] and Optional[...] layers, collecting Annotated extras."""
    while True:
        origin = typing.get_origin(annotation)
        if origin is typing.Annotated:
            args = typing.get_args(annotation)
            metadata = [*metadata, *annotation.__metadata__]
            annotation = args[0]
            continue
        if origin in _UNION_TYPES:
            members = [a for a in typing.get_args(annotation) if a is not type(None)]
            if len(members) != 1:
                raise SchemaError(f"union types are not supported ({annotation!r})", field=field)
            annotation = members[0]
            continue
        return annotation, metadata


def resolve_kind(annotation: Any, metadata: Optional[List[Any]] = None, *, field: str = "") -> Tuple[ScalarKind, Optional[int]]:
    """
    Map a field annotation onto (kind, bits).

    Containers raise SchemaError; unknown leaf types map to OTHER and are
    dropped at decode time.
    """
    annotation, metadata = _unwrap(annotation, list(metadata or []), field=field)

    for m in metadata:
        if isinstance(m, Width):
            return m.kind, m.bits

    origin = typing.get_origin(annotation)
    if annotation in _CONTAINER_ORIGINS or origin in _CONTAINER_ORIGINS:
        raise SchemaError(f"container types are not supported ({annotation!r})", field=field)

    # bool before int: bool is an int subclass
    if annotation is bool:
        return ScalarKind.BOOL, None
    if annotation is str:
        return ScalarKind.TEXT, None
    if annotation is int:
        return ScalarKind.INT, DEFAULT_INT_BITS
    if annotation is float:
        return ScalarKind.FLOAT, DEFAULT_FLOAT_BITS
    if is_record_type(annotation):
        return ScalarKind.RECORD, None
    return ScalarKind.OTHER, None


def _make_accessors(record: Any, name: str):
    def _set(value: Any) -> None:
        setattr(record, name, value)

    def _get() -> Any:
        return getattr(record, name)

    return _set, _get


def _build_into(tree: Dict[str, Binding], record: Any, path: str) -> None:
    if not is_record(record):
        raise SchemaError(
            f"destination must be a pydantic model or dataclass instance, got {type(record).__name__}",
            field=path or None,
        )
    if _is_frozen(record):
        raise SchemaError(f"{type(record).__name__} is frozen and cannot be populated", field=path or None)

    for name, annotation, metadata, tag, frozen in _iter_fields(record):
        dotted = f"{path}.{name}" if path else name
        if tag is None:
            logger.debug("Field %s has no ini tag; not bound", dotted)
            continue
        if frozen:
            raise SchemaError("frozen fields cannot be populated", field=dotted)

        kind, bits = resolve_kind(annotation, metadata, field=dotted)
        setter, getter = _make_accessors(record, name)
        binding = Binding(tag=str(tag), name=name, kind=kind, bits=bits, setter=setter, getter=getter)

        if kind == ScalarKind.RECORD:
            _build_into(binding.children, getattr(record, name), dotted)

        if binding.tag in tree:
            logger.debug("Tag %r on %s shadows field %s", binding.tag, dotted, tree[binding.tag].name)
        tree[binding.tag] = binding


def build_schema(record: Any) -> SchemaTree:
    """
    Walk the destination record once and return its tag -> Binding tree.

    Nested record fields become sections holding their own children. The
    record's nested instances must already exist; they are written in place.
    Raises SchemaError for anything the decoder cannot populate.
    """
    tree: SchemaTree = {}
    _build_into(tree, record, "")
    return tree
