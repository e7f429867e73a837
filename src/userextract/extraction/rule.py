"""A single principal-to-user extraction rule."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any, Dict

from ..errors import ConfigError
from .base import DENIED, EMPTY, NO_MATCH, RuleResult, extracted
from .template import ReplacementTemplate

if TYPE_CHECKING:
    from ..schemas import RuleDefinition

DEFAULT_USER_TEMPLATE = "$1"


class Rule:
    """
    Pattern + replacement template + allow flag.

    The pattern must match the whole principal; a pattern written for
    ``alice@EXAMPLE.COM`` never matches ``alice@EXAMPLE.COM.evil.org``.

    Usage:
        rule = Rule(r"(\\w+)@EXAMPLE\\.COM")
        rule.extract("alice@EXAMPLE.COM")   # RuleResult(EXTRACTED, "alice")
    """

    __slots__ = ("_pattern", "_user", "_template", "_allow")

    def __init__(self, pattern: str, user: str = DEFAULT_USER_TEMPLATE, allow: bool = True):
        if not isinstance(pattern, str):
            raise ConfigError(f"Rule pattern must be a string, got {type(pattern).__name__}")
        try:
            compiled = re.compile(pattern)
        except re.error as e:
            raise ConfigError(f"Invalid rule pattern {pattern!r}: {e}") from e
        if not isinstance(user, str):
            raise ConfigError(f"Rule user template must be a string, got {type(user).__name__}")
        if not isinstance(allow, bool):
            raise ConfigError(f"Rule allow flag must be a boolean, got {type(allow).__name__}")

        self._pattern = compiled
        self._allow = allow
        self._user = user
        # Deny rules never substitute
        self._template = ReplacementTemplate(user, compiled) if self._allow else None

    @classmethod
    def from_definition(cls, definition: "RuleDefinition") -> "Rule":
        return cls(definition.pattern, definition.user, definition.allow)

    @property
    def pattern(self) -> re.Pattern:
        return self._pattern

    @property
    def user(self) -> str:
        return self._user

    @property
    def allow(self) -> bool:
        return self._allow

    def extract(self, principal: str) -> RuleResult:
        """
        Run this rule against a principal.

        Args:
            principal: Authenticated identity string

        Returns:
            NO_MATCH when the pattern does not cover the whole principal,
            DENIED when it matches a deny rule, EMPTY when the template
            yields nothing but whitespace, otherwise EXTRACTED with the user.
        """
        if not isinstance(principal, str):
            raise TypeError(f"principal must be a string, got {type(principal).__name__}")

        match = self._pattern.fullmatch(principal)
        if match is None:
            return NO_MATCH
        if not self._allow:
            return DENIED

        user = self._template.expand(match).strip()
        if not user:
            return EMPTY
        return extracted(user)

    def to_dict(self) -> Dict[str, Any]:
        return {"pattern": self._pattern.pattern, "user": self.user, "allow": self._allow}

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Rule):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __hash__(self) -> int:
        return hash((self._pattern.pattern, self.user, self._allow))

    def __repr__(self) -> str:
        return f"Rule(pattern={self._pattern.pattern!r}, user={self.user!r}, allow={self._allow})"
