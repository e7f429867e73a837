"""Per-rule evaluation results."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class RuleOutcome(str, Enum):
    """What a single rule decided about a principal."""

    NO_MATCH = "no_match"
    EXTRACTED = "extracted"
    DENIED = "denied"
    EMPTY = "empty"


@dataclass(frozen=True)
class RuleResult:
    """Result of running one rule. ``user`` is set only for EXTRACTED."""

    outcome: RuleOutcome
    user: Optional[str] = None

    @property
    def is_terminal(self) -> bool:
        """Whether evaluation stops at this rule."""
        return self.outcome != RuleOutcome.NO_MATCH


NO_MATCH = RuleResult(RuleOutcome.NO_MATCH)
DENIED = RuleResult(RuleOutcome.DENIED)
EMPTY = RuleResult(RuleOutcome.EMPTY)


def extracted(user: str) -> RuleResult:
    return RuleResult(RuleOutcome.EXTRACTED, user)
