"""
Principal-to-user extraction.

Ordered pattern rules map an authenticated principal (certificate subject,
Kerberos principal, OAuth subject) to the local username used for
authorization.
"""

from pathlib import Path
from typing import Optional, Union

from .base import RuleOutcome, RuleResult
from .engine import DEFAULT_PATTERN, UserExtractor
from .rule import DEFAULT_USER_TEMPLATE, Rule
from .template import ReplacementTemplate


def create_user_extractor(
    pattern: Optional[str] = None,
    rule_file: Optional[Union[str, Path]] = None,
) -> UserExtractor:
    """
    Build an extractor from a single pattern, a rule file, or neither.

    Args:
        pattern: Ad-hoc pattern whose first group is the user
        rule_file: Path to a JSON rule document

    Returns:
        UserExtractor

    Raises:
        ConfigError: If both are set, or the pattern/document is invalid
    """
    return UserExtractor.create(pattern=pattern, rule_file=rule_file)


def extract_user(
    principal: str,
    pattern: Optional[str] = None,
    rule_file: Optional[Union[str, Path]] = None,
) -> str:
    """
    One-liner extraction. Builds a fresh extractor on every call, so
    long-running services should hold on to a UserExtractor instead.
    """
    return create_user_extractor(pattern=pattern, rule_file=rule_file).extract_user(principal)


__all__ = [
    "DEFAULT_PATTERN",
    "DEFAULT_USER_TEMPLATE",
    "ReplacementTemplate",
    "Rule",
    "RuleOutcome",
    "RuleResult",
    "UserExtractor",
    "create_user_extractor",
    "extract_user",
]
