"""Data models for userextract."""

from .base import RuleDefinition, RuleDocument

__all__ = [
    "RuleDefinition",
    "RuleDocument",
]
