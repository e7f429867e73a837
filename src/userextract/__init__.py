"""
userextract - map authenticated principals to local users

Ordered regular-expression rules turn a certificate subject, Kerberos
principal or OAuth subject into the canonical username used for
authorization. Deny rules and blank results fail hard.
"""

__version__ = "0.1.0"

import sys

if sys.version_info < (3, 10):
    raise RuntimeError("userextract requires Python 3.10 or higher")

from .config import ExtractionSettings, ExtractionSource
from .errors import ConfigError, ExtractionErrorKind, UserExtractionError
from .extraction import (
    DEFAULT_PATTERN,
    DEFAULT_USER_TEMPLATE,
    Rule,
    RuleOutcome,
    RuleResult,
    UserExtractor,
    create_user_extractor,
    extract_user,
)
from .loaders import load_rule_document, load_rules, parse_rules
from .schemas import RuleDefinition, RuleDocument

__all__ = [
    "__version__",
    # Main API
    "create_user_extractor",
    "extract_user",
    "UserExtractor",
    "Rule",
    # Result types
    "RuleOutcome",
    "RuleResult",
    # Errors
    "ConfigError",
    "ExtractionErrorKind",
    "UserExtractionError",
    # Config
    "DEFAULT_PATTERN",
    "DEFAULT_USER_TEMPLATE",
    "ExtractionSettings",
    "ExtractionSource",
    # Rule documents
    "RuleDefinition",
    "RuleDocument",
    "load_rule_document",
    "load_rules",
    "parse_rules",
]
