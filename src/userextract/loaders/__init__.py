"""Rule document loading."""

from .rule_file import (
    build_rules,
    load_rule_document,
    load_rules,
    parse_rule_document,
    parse_rules,
)

__all__ = [
    "build_rules",
    "load_rule_document",
    "load_rules",
    "parse_rule_document",
    "parse_rules",
]
