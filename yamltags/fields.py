# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Dataclass field introspection and zero-value semantics."""

from __future__ import annotations

import dataclasses
import functools
import sys
import typing
from typing import Any, Dict, Mapping, Optional, Tuple

from .config import get_settings

_NONE_TYPE = type(None)
_UNION_TYPES: Tuple[Any, ...] = (typing.Union,)
if sys.version_info >= (3, 10):
    import types as _types

    _UNION_TYPES += (_types.UnionType,)

_SIZED_TYPES = (str, bytes, bytearray, list, tuple, dict, set, frozenset)
_PRIMITIVES = {"str": str, "int": int, "bool": bool, "float": float}


@dataclasses.dataclass(frozen=True)
class FieldInfo:
    """What the processor needs to know about one dataclass field."""

    name: str
    qualified_name: str
    yaml_name: str
    type: Any
    tags: str


def is_struct(value: Any) -> bool:
    """True for dataclass *instances*; dataclass classes do not count."""

    return dataclasses.is_dataclass(value) and not isinstance(value, type)


def _split_top_level(text: str, sep: str) -> list:
    """Split *text* on *sep* outside of square brackets."""

    parts, depth, current = [], 0, []
    for char in text:
        if char == "[":
            depth += 1
        elif char == "]":
            depth -= 1
        if char == sep and depth == 0:
            parts.append("".join(current).strip())
            current = []
        else:
            current.append(char)
    parts.append("".join(current).strip())
    return parts


def _optional_inner_text(text: str) -> Optional[str]:
    text = text.strip()
    for prefix in ("Optional[", "typing.Optional["):
        if text.startswith(prefix) and text.endswith("]"):
            return text[len(prefix):-1].strip()

    members = None
    for prefix in ("Union[", "typing.Union["):
        if text.startswith(prefix) and text.endswith("]"):
            members = _split_top_level(text[len(prefix):-1], ",")
    if members is None:
        members = _split_top_level(text, "|")
    if len(members) < 2 or "None" not in members:
        return None

    rest = [m for m in members if m not in ("None", "NoneType")]
    if len(rest) == 1:
        return rest[0]
    return " | ".join(rest)


def optional_inner(tp: Any) -> Any:
    """Return ``X`` for ``Optional[X]`` (or ``X | None``), else ``None``.

    Unresolved string annotations are understood too; the result is then
    the inner annotation string.
    """

    if isinstance(tp, str):
        return _optional_inner_text(tp)
    if typing.get_origin(tp) not in _UNION_TYPES:
        return None
    args = typing.get_args(tp)
    if _NONE_TYPE not in args:
        return None
    rest = tuple(arg for arg in args if arg is not _NONE_TYPE)
    if len(rest) == 1:
        return rest[0]
    return typing.Union[rest]


def resolve_primitive(tp: Any) -> Any:
    """Map ``"str"``/``"int"``/``"bool"``/``"float"`` annotations to their types."""

    if isinstance(tp, str):
        name = tp.strip()
        if name.startswith("builtins."):
            name = name[len("builtins."):]
        return _PRIMITIVES.get(name, tp)
    return tp


def _resolve_annotation(annotation: Any, globalns: Dict[str, Any], localns: Dict[str, Any]) -> Any:
    if not isinstance(annotation, str):
        return annotation
    try:
        return eval(annotation, globalns, localns)  # noqa: S307
    except Exception:
        # e.g. a class local to a function, or ``X | None`` before 3.10
        return annotation


@functools.lru_cache(maxsize=256)
def _type_hints(cls: type) -> Dict[str, Any]:
    try:
        return typing.get_type_hints(cls)
    except (NameError, TypeError, AttributeError, SyntaxError):
        pass

    # resolve field by field so one bad annotation does not poison the rest
    hints: Dict[str, Any] = {}
    for field in dataclasses.fields(cls):
        owner = next(
            (base for base in cls.__mro__ if field.name in vars(base).get("__annotations__", {})),
            cls,
        )
        module = sys.modules.get(owner.__module__)
        globalns = dict(getattr(module, "__dict__", {}))
        localns = {owner.__name__: owner, cls.__name__: cls}
        hints[field.name] = _resolve_annotation(field.type, globalns, localns)
    return hints


def yaml_name(field: dataclasses.Field, name_key: Optional[str] = None) -> str:
    """Return the document key a field is read from."""

    key = name_key or get_settings().name_key
    declared = field.metadata.get(key)
    if isinstance(declared, str):
        name = declared.split(",", 1)[0].strip()
        if name:
            return name
    return field.name


@functools.lru_cache(maxsize=256)
def describe_fields(
    cls: type,
    tag_key: str,
    name_key: str,
    include_private: bool = False,
) -> Tuple[FieldInfo, ...]:
    """Describe the fields of *cls* in declaration order."""

    hints = _type_hints(cls)
    described = []
    for field in dataclasses.fields(cls):
        if field.name.startswith("_") and not include_private:
            continue
        tags = field.metadata.get(tag_key) or ""
        described.append(
            FieldInfo(
                name=field.name,
                qualified_name=f"{cls.__name__}.{field.name}",
                yaml_name=yaml_name(field, name_key),
                type=hints.get(field.name, field.type),
                tags=str(tags),
            )
        )
    return tuple(described)


def is_zero(value: Any, declared_type: Any = None) -> bool:
    """Return True when *value* is the zero value for its type.

    A field declared ``Optional[...]`` behaves like a pointer: only ``None``
    is zero, whatever the pointee holds.
    """

    if value is None:
        return True
    if declared_type is not None and optional_inner(declared_type) is not None:
        return False
    if isinstance(value, bool):
        return not value
    if isinstance(value, (int, float)):
        return value == 0
    if isinstance(value, _SIZED_TYPES):
        return len(value) == 0
    if is_struct(value):
        hints = _type_hints(type(value))
        return all(
            is_zero(getattr(value, f.name), hints.get(f.name))
            for f in dataclasses.fields(value)
        )
    return False


def tagged(
    tags: str = "",
    *,
    yaml: Optional[str] = None,
    metadata: Optional[Mapping[str, Any]] = None,
    tag_key: Optional[str] = None,
    name_key: Optional[str] = None,
    **field_kwargs: Any,
) -> Any:
    """Build a :func:`dataclasses.field` carrying yamltags metadata.

    .. code-block:: python

        @dataclass
        class Build:
            image: str = tagged("required")
            tag_policy: str = tagged("default=gitCommit", yaml="tagPolicy")
            local: Optional[Local] = tagged("oneOf=builder", default=None)

    The metadata keys are fixed when the class body runs: they come from
    *tag_key*/*name_key* when given, otherwise from the environment
    settings. A :class:`~yamltags.StructProcessor` built with other keys
    only sees fields tagged with matching keys.
    """

    settings = get_settings()
    merged: Dict[str, Any] = dict(metadata or {})
    if tags:
        merged[tag_key or settings.tag_key] = tags
    if yaml:
        merged[name_key or settings.name_key] = yaml

    if "default" not in field_kwargs and "default_factory" not in field_kwargs:
        # leave the field at its zero value so the directives decide
        field_kwargs["default"] = None
    return dataclasses.field(metadata=merged, **field_kwargs)


__all__ = [
    "FieldInfo",
    "describe_fields",
    "is_struct",
    "is_zero",
    "optional_inner",
    "resolve_primitive",
    "tagged",
    "yaml_name",
]
