# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Parsing of ``yamltags`` directive strings and default literals.

A tag string is a comma-separated list of directives::

    required
    default=8080
    oneOf=source
    required,oneOf=source

Unknown or malformed directives are authoring bugs and raise
:class:`~yamltags.exceptions.InvalidTagError` instead of being ignored.
"""

from __future__ import annotations

import functools
from dataclasses import dataclass
from typing import Any, Optional, Tuple

from .exceptions import InvalidTagError, UnsupportedDefaultTypeError
from .fields import optional_inner, resolve_primitive

REQUIRED = "required"
DEFAULT = "default"
ONE_OF = "oneOf"

KNOWN_DIRECTIVES = frozenset({REQUIRED, DEFAULT, ONE_OF})

_TRUE_LITERALS = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_LITERALS = frozenset({"0", "f", "F", "FALSE", "false", "False"})


@dataclass(frozen=True)
class Directive:
    """A single parsed directive, e.g. ``oneOf=set1`` -> ``Directive("oneOf", "set1")``."""

    kind: str
    argument: Optional[str] = None

    def __str__(self) -> str:
        if self.argument is None:
            return self.kind
        return f"{self.kind}={self.argument}"


@functools.lru_cache(maxsize=512)
def _parse(text: str) -> Tuple[Directive, ...]:
    directives = []
    for raw in text.split(","):
        part = raw.strip()
        if not part:
            continue

        kind, sep, argument = part.partition("=")
        kind = kind.strip()
        argument = argument.strip()

        if kind not in KNOWN_DIRECTIVES:
            raise InvalidTagError(text, f"unknown directive '{kind}'")

        if kind == REQUIRED:
            if sep:
                raise InvalidTagError(text, "'required' does not take a value")
            directives.append(Directive(REQUIRED))
        elif kind == DEFAULT:
            if not sep:
                raise InvalidTagError(text, "'default' needs a value, e.g. default=foo")
            directives.append(Directive(DEFAULT, argument))
        else:
            if not argument:
                raise InvalidTagError(text, "'oneOf' needs a group name, e.g. oneOf=set1")
            directives.append(Directive(ONE_OF, argument))

    return tuple(directives)


def parse_tags(text: Optional[str]) -> list[Directive]:
    """Parse *text* into directives, in the order they were written."""

    if not text:
        return []
    return list(_parse(text))


def parse_default(literal: str, field_type: Any, field_name: Optional[str] = None) -> Any:
    """Convert a ``default=`` literal into a value of *field_type*.

    ``Optional[X]`` parses as ``X``. Supported types are ``str``, ``int``,
    ``bool`` and ``float``; anything else raises
    :class:`UnsupportedDefaultTypeError`.
    """

    target = optional_inner(field_type)
    if target is None:
        target = field_type
    target = resolve_primitive(target)

    # bool first: it is an int subclass
    if target is bool:
        if literal in _TRUE_LITERALS:
            return True
        if literal in _FALSE_LITERALS:
            return False
        raise InvalidTagError(f"default={literal}", "not a boolean literal", field_name)

    if target is str:
        return literal

    if target is int:
        try:
            return int(literal, 0)
        except ValueError:
            pass
        try:
            # int(x, 0) rejects leading zeros such as "010"
            return int(literal, 10)
        except ValueError:
            raise InvalidTagError(f"default={literal}", "not an integer literal", field_name) from None

    if target is float:
        try:
            return float(literal)
        except ValueError:
            raise InvalidTagError(f"default={literal}", "not a float literal", field_name) from None

    raise UnsupportedDefaultTypeError(field_name or "<unknown>", field_type)


__all__ = [
    "DEFAULT",
    "Directive",
    "KNOWN_DIRECTIVES",
    "ONE_OF",
    "REQUIRED",
    "parse_default",
    "parse_tags",
]
