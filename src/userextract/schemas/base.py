"""Pydantic models for rule documents."""

from typing import List

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr


class RuleDefinition(BaseModel):
    """One rule as written in a rule document."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    pattern: StrictStr = Field(..., description="Regular expression matched against the whole principal")
    user: StrictStr = Field("$1", description="Replacement template producing the user")
    allow: StrictBool = Field(True, description="False turns a match into a hard denial")


class RuleDocument(BaseModel):
    """
    Top-level rule document.

    Example:
        {
            "rules": [
                {"pattern": "admin@.*", "allow": false},
                {"pattern": "(\\\\w+)@EXAMPLE\\\\.COM", "user": "$1"}
            ]
        }
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    rules: List[RuleDefinition] = Field(..., min_length=1)
