"""
Configuration for userextract.

An extractor is built from exactly one source: a single pattern, a rule
file, or nothing (principals pass through unchanged). The source is resolved
once, when the extractor is created.
"""

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional, Union

from .errors import ConfigError

PATTERN_ENV_VAR = "USER_EXTRACTION_PATTERN"
RULE_FILE_ENV_VAR = "USER_EXTRACTION_FILE"


class ExtractionSource(str, Enum):
    """Where the extraction rules come from."""

    PATTERN = "pattern"
    FILE = "file"
    DEFAULT = "default"


@dataclass(frozen=True)
class ExtractionSettings:
    """Raw extraction configuration, before any rule is compiled."""

    pattern: Optional[str] = None
    rule_file: Optional[Union[str, Path]] = None

    @property
    def source(self) -> ExtractionSource:
        """
        Resolve which source is configured.

        Raises:
            ConfigError: If both a pattern and a rule file are set
        """
        if self.pattern is not None:
            if self.rule_file is not None:
                raise ConfigError("user extraction pattern and file can not both be set")
            return ExtractionSource.PATTERN
        if self.rule_file is not None:
            return ExtractionSource.FILE
        return ExtractionSource.DEFAULT

    @classmethod
    def from_env(cls) -> "ExtractionSettings":
        """Read USER_EXTRACTION_PATTERN / USER_EXTRACTION_FILE. Empty values count as unset."""
        return cls(
            pattern=os.getenv(PATTERN_ENV_VAR) or None,
            rule_file=os.getenv(RULE_FILE_ENV_VAR) or None,
        )

    def merged_with(self, fallback: "ExtractionSettings") -> "ExtractionSettings":
        """Fill in from ``fallback`` only when this object sets no source at all."""
        if self.pattern is not None or self.rule_file is not None:
            return self
        return fallback


__all__ = [
    "ExtractionSettings",
    "ExtractionSource",
    "PATTERN_ENV_VAR",
    "RULE_FILE_ENV_VAR",
]
