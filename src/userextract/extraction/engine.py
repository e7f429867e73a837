"""Extraction engine that runs an ordered rule list against a principal."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Optional, Tuple, Union

from ..errors import ConfigError, ExtractionErrorKind, UserExtractionError
from .base import RuleOutcome
from .rule import Rule

if TYPE_CHECKING:
    from ..config import ExtractionSettings

logger = logging.getLogger(__name__)

DEFAULT_PATTERN = "(.*)"


class UserExtractor:
    """
    Maps an authenticated principal to a local username.

    Rules are tried in order and the first one whose pattern matches decides:
    it either yields the user, or fails the whole evaluation (deny rule,
    or empty user). Later rules are never consulted once one matches, so
    put specific deny rules before general allow rules.

    Instances are immutable and safe to share across threads.

    Usage:
        extractor = UserExtractor([
            Rule(r"admin@.*", allow=False),
            Rule(r"(\\w+)@EXAMPLE\\.COM"),
        ])
        extractor.extract_user("alice@EXAMPLE.COM")  # "alice"

        # From configuration:
        extractor = UserExtractor.create(pattern=r"CN=([^,]+),.*")
    """

    __slots__ = ("_rules",)

    def __init__(self, rules: Iterable[Rule]):
        if rules is None:
            raise ConfigError("rules is None")
        rules = tuple(rules)
        if not rules:
            raise ConfigError("User extraction requires at least one rule")
        for rule in rules:
            if not isinstance(rule, Rule):
                raise ConfigError(f"Expected Rule, got {type(rule).__name__}")
        self._rules: Tuple[Rule, ...] = rules

    @classmethod
    def create(
        cls,
        pattern: Optional[str] = None,
        rule_file: Optional[Union[str, Path]] = None,
    ) -> "UserExtractor":
        """
        Build an extractor from at most one configuration source.

        Args:
            pattern: Single ad-hoc pattern; the user is its first group
            rule_file: Path to a JSON rule document

        Returns:
            UserExtractor. With neither source, principals pass through unchanged.

        Raises:
            ConfigError: If both sources are set or the source is invalid
        """
        from ..config import ExtractionSettings

        return cls.from_settings(ExtractionSettings(pattern=pattern, rule_file=rule_file))

    @classmethod
    def from_settings(cls, settings: "ExtractionSettings") -> "UserExtractor":
        from ..config import ExtractionSource
        from ..loaders import load_rules

        source = settings.source
        if source == ExtractionSource.PATTERN:
            rules = [Rule(settings.pattern)]
        elif source == ExtractionSource.FILE:
            rules = load_rules(settings.rule_file)
        else:
            rules = [Rule(DEFAULT_PATTERN)]

        extractor = cls(rules)
        logger.info(
            "User extraction configured from %s source with %d rule(s)",
            source.value,
            len(extractor),
        )
        return extractor

    @property
    def rules(self) -> Tuple[Rule, ...]:
        return self._rules

    def __len__(self) -> int:
        return len(self._rules)

    def describe(self) -> List[Dict[str, Any]]:
        """Rules in evaluation order, as plain dicts."""
        return [rule.to_dict() for rule in self._rules]

    def extract_user(self, principal: str) -> str:
        """
        Extract the user for a principal.

        Raises:
            UserExtractionError: DENIED, EMPTY_EXTRACTION or NO_RULE_MATCHED
        """
        for index, rule in enumerate(self._rules):
            result = rule.extract(principal)
            if not result.is_terminal:
                continue

            logger.debug(
                "Rule %d (%r) decided %s for %r",
                index,
                rule.pattern.pattern,
                result.outcome.value,
                principal,
            )

            if result.outcome == RuleOutcome.EXTRACTED:
                return result.user
            if result.outcome == RuleOutcome.DENIED:
                raise UserExtractionError(
                    ExtractionErrorKind.DENIED,
                    "Principal is not allowed",
                    principal=principal,
                    rule_index=index,
                )
            raise UserExtractionError(
                ExtractionErrorKind.EMPTY_EXTRACTION,
                "Principal matched, but extracted user is empty",
                principal=principal,
                rule_index=index,
            )

        logger.debug("No extraction rule matched %r", principal)
        raise UserExtractionError(
            ExtractionErrorKind.NO_RULE_MATCHED,
            "No extraction patterns match the principal",
            principal=principal,
        )

    def __repr__(self) -> str:
        return f"UserExtractor(rules={list(self._rules)!r})"
