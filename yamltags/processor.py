# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Struct walker applying ``required``, ``default`` and ``oneOf`` directives.

The processor walks a dataclass instance depth first, in field declaration
order, and for each public field:

1. checks ``required`` (raises immediately on a zero value),
2. fills ``default=<literal>`` when the value is zero,
3. registers non-zero ``oneOf=<group>`` members,
4. recurses into nested dataclasses and dataclass elements of lists/tuples.

Once a struct's direct fields are scanned, any ``oneOf`` group with more than
one member set is rejected. The first violation found is raised unchanged.

.. code-block:: python

    from dataclasses import dataclass
    from yamltags import process_struct, tagged

    @dataclass
    class Deploy:
        namespace: str = tagged("default=default")
        kubectl: Optional[Kubectl] = tagged("oneOf=deployer")
        helm: Optional[Helm] = tagged("oneOf=deployer")

    config = Deploy(**yaml.safe_load(text))
    process_struct(config)  # raises YamlTagsError subclasses on bad input
"""

from __future__ import annotations

import logging
import time
from typing import Any, Dict, Final, List, Optional

from opentelemetry.trace import Status, StatusCode

from .config import ProcessorSettings, get_settings
from .exceptions import (
    InvalidTagError,
    MissingRequiredFieldError,
    MultipleOneOfFieldsError,
    NotAStructError,
    TagDefinitionError,
    YamlTagsError,
)
from .fields import FieldInfo, describe_fields, is_struct, is_zero
from .tags import DEFAULT, ONE_OF, REQUIRED, parse_default, parse_tags
from .telemetry import default_applied_total, get_tracer, record_process_metrics

logger = logging.getLogger(__name__)


class StructProcessor:
    """Applies yamltags directives to dataclass instances.

    Holds only settings; every call builds its own exclusivity groups, so a
    single instance can be shared freely.
    """

    def __init__(self, settings: Optional[ProcessorSettings] = None):
        self.settings = settings or get_settings()

    def process(self, value: Any) -> None:
        """Validate *value* in place, raising the first violation found."""

        if not is_struct(value):
            raise NotAStructError(value)

        started_at = time.perf_counter()
        struct_name = type(value).__name__
        with get_tracer().start_as_current_span(
            "yamltags.process_struct",
            attributes={"yamltags.struct": struct_name},
        ) as span:
            try:
                self._process_struct(value)
            except YamlTagsError as exc:
                span.set_status(Status(StatusCode.ERROR, exc.message))
                record_process_metrics("invalid", started_at, reason=type(exc).__name__)
                logger.debug("Processing %s failed: %s", struct_name, exc.message)
                raise
            record_process_metrics("ok", started_at)

    def validate(self, value: Any) -> Optional[YamlTagsError]:
        """Like :meth:`process` but return the data violation instead of raising it.

        Tag authoring bugs (:class:`TagDefinitionError`) still raise.
        """

        try:
            self.process(value)
        except TagDefinitionError:
            raise
        except YamlTagsError as exc:
            return exc
        return None

    # ------------------------------------------------------------------
    # Walk
    # ------------------------------------------------------------------

    def _describe(self, value: Any) -> tuple:
        settings = self.settings
        return describe_fields(
            type(value),
            settings.tag_key,
            settings.name_key,
            settings.include_private,
        )

    def _process_struct(self, value: Any) -> None:
        groups: Dict[str, List[str]] = {}

        for info in self._describe(value):
            self._process_field(value, info, groups)
            self._recurse(getattr(value, info.name))

        for group, members in groups.items():
            if len(members) > 1:
                logger.debug("oneOf group '%s' has %d members set: %s", group, len(members), members)
                raise MultipleOneOfFieldsError(group, members)

    def _process_field(self, parent: Any, info: FieldInfo, groups: Dict[str, List[str]]) -> None:
        if not info.tags:
            return

        try:
            directives = parse_tags(info.tags)
        except InvalidTagError as exc:
            raise InvalidTagError(exc.tag, exc.reason, info.qualified_name) from None

        for directive in directives:
            current = getattr(parent, info.name)
            if directive.kind == REQUIRED:
                if is_zero(current, info.type):
                    logger.debug("Required field %s is not set", info.qualified_name)
                    raise MissingRequiredFieldError(info.qualified_name, info.yaml_name)
            elif directive.kind == DEFAULT:
                if is_zero(current, info.type):
                    self._apply_default(parent, info, directive.argument or "")
            elif directive.kind == ONE_OF:
                if not is_zero(current, info.type):
                    groups.setdefault(directive.argument, []).append(info.qualified_name)

    def _apply_default(self, parent: Any, info: FieldInfo, literal: str) -> None:
        parsed = parse_default(literal, info.type, info.qualified_name)
        if type(parent).__dataclass_params__.frozen:
            object.__setattr__(parent, info.name, parsed)
        else:
            setattr(parent, info.name, parsed)
        default_applied_total.add(1, {"struct": type(parent).__name__})
        logger.debug("Applied default %r to %s", parsed, info.qualified_name)

    def _recurse(self, value: Any) -> None:
        if is_struct(value):
            self._process_struct(value)
        elif isinstance(value, (list, tuple)):
            for element in value:
                if is_struct(element):
                    self._process_struct(element)


_PROCESSOR: Final[StructProcessor] = StructProcessor()


def get_processor() -> StructProcessor:
    """Return the process-wide processor instance."""

    return _PROCESSOR


def process_struct(value: Any) -> None:
    """Apply yamltags directives to *value* using the process-wide processor."""

    _PROCESSOR.process(value)


def validate_struct(value: Any) -> Optional[YamlTagsError]:
    """Return the first data violation in *value*, or ``None``."""

    return _PROCESSOR.validate(value)


__all__ = [
    "StructProcessor",
    "get_processor",
    "process_struct",
    "validate_struct",
]
