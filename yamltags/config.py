# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Environment-driven settings for the tag processor."""

from __future__ import annotations

import functools
import os
from dataclasses import dataclass
from typing import Mapping, Optional

DEFAULT_TAG_KEY = "yamltags"
DEFAULT_NAME_KEY = "yaml"

_FALSEY = ("", "0", "false", "no", "off")


def _flag(raw: Optional[str]) -> bool:
    return raw is not None and raw.strip().lower() not in _FALSEY


@dataclass(frozen=True)
class ProcessorSettings:
    """Knobs that change how fields and their tags are discovered."""

    tag_key: str = DEFAULT_TAG_KEY  # metadata key holding the directive string
    name_key: str = DEFAULT_NAME_KEY  # metadata key holding the YAML document name
    include_private: bool = False  # process ``_``-prefixed fields too

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ProcessorSettings":
        env = os.environ if environ is None else environ
        return cls(
            tag_key=env.get("YAMLTAGS_TAG_KEY") or DEFAULT_TAG_KEY,
            name_key=env.get("YAMLTAGS_NAME_KEY") or DEFAULT_NAME_KEY,
            include_private=_flag(env.get("YAMLTAGS_INCLUDE_PRIVATE")),
        )


@functools.lru_cache(maxsize=1)
def get_settings() -> ProcessorSettings:
    """Return the process-wide settings, read from the environment once."""

    return ProcessorSettings.from_env()


__all__ = [
    "DEFAULT_NAME_KEY",
    "DEFAULT_TAG_KEY",
    "ProcessorSettings",
    "get_settings",
]
