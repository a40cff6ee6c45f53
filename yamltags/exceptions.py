# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Exception hierarchy for struct tag processing."""

from __future__ import annotations

from typing import Any, Optional, Sequence


class YamlTagsError(Exception):
    """Base class for every error raised by the tag processor."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotAStructError(YamlTagsError):
    """Raised when the value handed to the processor is not a dataclass instance."""

    def __init__(self, value: Any):
        self.value_type = type(value).__name__
        if isinstance(value, type):
            detail = f"class {value.__name__}"
        else:
            detail = self.value_type
        super().__init__(f"only dataclass instances are supported, got {detail}")


class MissingRequiredFieldError(YamlTagsError):
    """A ``required`` field holds the zero value of its type."""

    def __init__(self, field_name: str, yaml_name: Optional[str] = None):
        self.field_name = field_name
        self.yaml_name = yaml_name or field_name.rsplit(".", 1)[-1]
        super().__init__(f"required value not set: {field_name}")


class MultipleOneOfFieldsError(YamlTagsError):
    """More than one member of a ``oneOf`` group is set."""

    def __init__(self, group: str, fields: Sequence[str]):
        self.group = group
        self.fields = list(fields)
        super().__init__(
            f"only one element in set {group} can be set. got {' and '.join(self.fields)}"
        )

    @property
    def count(self) -> int:
        return len(self.fields)


class TagDefinitionError(YamlTagsError):
    """The tags themselves are wrong. This is a schema authoring bug, not bad data."""


class InvalidTagError(TagDefinitionError):
    """A directive is malformed or its default literal does not parse."""

    def __init__(self, tag: str, reason: str, field_name: Optional[str] = None):
        self.tag = tag
        self.reason = reason
        self.field_name = field_name
        location = f" on {field_name}" if field_name else ""
        super().__init__(f"invalid yamltags '{tag}'{location}: {reason}")


class UnsupportedDefaultTypeError(TagDefinitionError):
    """``default`` was attached to a field whose type cannot be parsed from a literal."""

    def __init__(self, field_name: str, field_type: Any):
        self.field_name = field_name
        self.field_type = field_type
        type_name = getattr(field_type, "__name__", repr(field_type))
        super().__init__(f"default values are not supported for {field_name} of type {type_name}")


__all__ = [
    "YamlTagsError",
    "NotAStructError",
    "MissingRequiredFieldError",
    "MultipleOneOfFieldsError",
    "TagDefinitionError",
    "InvalidTagError",
    "UnsupportedDefaultTypeError",
]
