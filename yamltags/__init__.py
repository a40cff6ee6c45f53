# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""yamltags - declarative required/default/oneOf checks for dataclass configs.

Run :func:`process_struct` on a configuration object right after it has been
built from its YAML/JSON document.
"""

from .config import ProcessorSettings, get_settings
from .exceptions import (
    InvalidTagError,
    MissingRequiredFieldError,
    MultipleOneOfFieldsError,
    NotAStructError,
    TagDefinitionError,
    UnsupportedDefaultTypeError,
    YamlTagsError,
)
from .fields import is_zero, tagged, yaml_name
from .processor import StructProcessor, get_processor, process_struct, validate_struct
from .tags import Directive, parse_default, parse_tags

__version__ = "0.1.0"

__all__ = [
    "Directive",
    "InvalidTagError",
    "MissingRequiredFieldError",
    "MultipleOneOfFieldsError",
    "NotAStructError",
    "ProcessorSettings",
    "StructProcessor",
    "TagDefinitionError",
    "UnsupportedDefaultTypeError",
    "YamlTagsError",
    "get_processor",
    "get_settings",
    "is_zero",
    "parse_default",
    "parse_tags",
    "process_struct",
    "tagged",
    "validate_struct",
    "yaml_name",
]
