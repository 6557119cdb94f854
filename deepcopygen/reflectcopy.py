"""Generic deep copy and value mutation of plain Python object graphs."""

from __future__ import annotations

import dataclasses
import enum
import types
from typing import Any

_VALUES = (bool, int, float, complex, str, bytes, enum.Enum, type, types.ModuleType)
_UNCOPYABLE = (
    types.FunctionType,
    types.BuiltinFunctionType,
    types.MethodType,
    types.LambdaType,
    types.GeneratorType,
    types.CoroutineType,
)


def _is_namedtuple(obj: Any) -> bool:
    return isinstance(obj, tuple) and hasattr(obj, "_fields")


def _new_like(obj: Any) -> Any:
    return object.__new__(type(obj))


def reflect_deep_copy(obj: Any) -> Any:
    """Return a deep copy of ``obj`` built by walking its structure.

    Immutable values are shared; containers, dataclasses and plain objects are
    rebuilt. Functions, methods and generators raise TypeError.
    """
    if obj is None or isinstance(obj, _VALUES):
        return obj
    if isinstance(obj, _UNCOPYABLE):
        raise TypeError(f"cannot deep copy kind: {type(obj).__name__}")
    if isinstance(obj, dict):
        result = obj.copy()
        for key, value in obj.items():
            result[key] = reflect_deep_copy(value)
        return result
    if isinstance(obj, bytearray):
        return bytearray(obj)
    if _is_namedtuple(obj):
        return type(obj)(*(reflect_deep_copy(item) for item in obj))
    if isinstance(obj, (list, tuple, set, frozenset)):
        return type(obj)(reflect_deep_copy(item) for item in obj)
    if dataclasses.is_dataclass(obj):
        result = _new_like(obj)
        for f in dataclasses.fields(obj):
            object.__setattr__(result, f.name, reflect_deep_copy(getattr(obj, f.name)))
        for key, value in getattr(obj, "__dict__", {}).items():
            if not hasattr(result, key):
                object.__setattr__(result, key, reflect_deep_copy(value))
        return result
    if hasattr(obj, "__dict__"):
        result = _new_like(obj)
        result.__dict__.update(
            {key: reflect_deep_copy(value) for key, value in vars(obj).items()}
        )
        return result
    return obj


def value_fuzz(obj: Any) -> Any:
    """Change every basic value inside ``obj`` and return the result.

    Strings gain an ``x``, booleans flip, floats become ``2*v + 1``, integers
    and bytes grow by one. Mutable containers and objects are changed in place
    and returned themselves; immutable values come back as new values.
    Mapping keys, sets and callables are left alone.
    """
    if obj is None:
        return None
    if isinstance(obj, bool):
        return not obj
    if isinstance(obj, enum.Enum):
        return obj
    if isinstance(obj, int):
        return obj + 1
    if isinstance(obj, float):
        return obj * 2.0 + 1.0
    if isinstance(obj, str):
        return obj + "x"
    if isinstance(obj, bytes):
        return bytes((b + 1) & 0xFF for b in obj)
    if isinstance(obj, bytearray):
        obj[:] = bytes((b + 1) & 0xFF for b in obj)
        return obj
    if isinstance(obj, list):
        obj[:] = [value_fuzz(item) for item in obj]
        return obj
    if _is_namedtuple(obj):
        return type(obj)(*(value_fuzz(item) for item in obj))
    if isinstance(obj, tuple):
        return type(obj)(value_fuzz(item) for item in obj)
    if isinstance(obj, dict):
        obj.update({key: value_fuzz(value) for key, value in obj.items()})
        return obj
    if isinstance(obj, (set, frozenset, type, types.ModuleType)) or callable(obj):
        return obj
    if dataclasses.is_dataclass(obj):
        for f in dataclasses.fields(obj):
            object.__setattr__(obj, f.name, value_fuzz(getattr(obj, f.name)))
        return obj
    if hasattr(obj, "__dict__"):
        for key, value in list(vars(obj).items()):
            setattr(obj, key, value_fuzz(value))
        return obj
    return obj