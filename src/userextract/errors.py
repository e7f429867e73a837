"""Exceptions raised while building or running a user extractor."""

from enum import Enum
from typing import Optional


class ConfigError(ValueError):
    """Invalid extractor configuration. Raised at construction time only."""


class ExtractionErrorKind(str, Enum):
    """Why a principal could not be mapped to a user."""

    DENIED = "denied"
    EMPTY_EXTRACTION = "empty_extraction"
    NO_RULE_MATCHED = "no_rule_matched"


class UserExtractionError(Exception):
    """
    Authentication failure for a single principal.

    Callers must reject the connection or request; there is no partial
    result to fall back on.
    """

    def __init__(
        self,
        kind: ExtractionErrorKind,
        message: str,
        principal: Optional[str] = None,
        rule_index: Optional[int] = None,
    ):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.principal = principal
        self.rule_index = rule_index

    def __repr__(self) -> str:
        return f"UserExtractionError(kind={self.kind.value!r}, message={self.message!r})"
