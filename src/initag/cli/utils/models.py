from __future__ import annotations

import importlib
import importlib.util
import sys
from pathlib import Path
from typing import Any

from initag.parsers.errors import ModelImportError
from initag.parsers.schema import is_record_type


def _import_module(module_ref: str) -> Any:
    # "path/to/models.py" is loaded from the file, anything else is a dotted module name
    if module_ref.endswith(".py"):
        path = Path(module_ref).expanduser().resolve()
        if not path.is_file():
            raise ModelImportError(f"Model file not found: {path}")
        # registered under its own name so annotations resolve against this module
        name = f"_initag_models_{path.stem}"
        spec = importlib.util.spec_from_file_location(name, path)
        if spec is None or spec.loader is None:
            raise ModelImportError(f"Cannot load module from {path}")
        module = importlib.util.module_from_spec(spec)
        sys.modules[name] = module
        spec.loader.exec_module(module)
        return module
    return importlib.import_module(module_ref)


def resolve_model(ref: str) -> type:
    """
    Resolve "package.module:Class" (or "models.py:Outer.Inner") to a record class.
    """
    module_ref, sep, attr_path = ref.partition(":")
    if not sep or not module_ref or not attr_path:
        raise ModelImportError(f"Expected 'module:Class', got {ref!r}")

    try:
        obj: Any = _import_module(module_ref)
    except ModelImportError:
        raise
    except Exception as e:
        raise ModelImportError(f"Cannot import {module_ref!r}: {e}") from e

    for part in attr_path.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as e:
            raise ModelImportError(f"{module_ref!r} has no attribute {attr_path!r}") from e

    if not is_record_type(obj):
        raise ModelImportError(f"{ref} is not a pydantic model or dataclass")
    return obj


def instantiate_model(ref: str) -> Any:
    """Resolve `ref` and build an instance from field defaults."""
    cls = resolve_model(ref)
    try:
        return cls()
    except Exception as e:
        raise ModelImportError(f"{cls.__name__} cannot be created from defaults: {e}") from e
