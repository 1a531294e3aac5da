"""
Finding output models.

These Pydantic models define the structured records emitted for every table
that fails a row level security rule.
"""

from enum import Enum

from pydantic import BaseModel, Field

from extraction.models import SourceLocation


class RuleId(str, Enum):
    """Identifier of the rule a table failed."""

    RLS_NOT_ENABLED = "rls-not-enabled"
    RLS_NO_POLICY = "rls-no-policy"


class FindingLocation(BaseModel):
    """Where the offending table is declared."""

    file: str = Field(..., description="Source file name")
    line: int = Field(..., description="1-based line of the declaration")
    column: int = Field(..., description="1-based column of the declaration")

    model_config = {"frozen": True}

    @classmethod
    def from_source(cls, location: SourceLocation) -> "FindingLocation":
        """Build from an extracted fact location."""
        return cls(file=location.file, line=location.line, column=location.column)


class Finding(BaseModel):
    """One reported row level security violation for a single table."""

    message: str = Field(..., description="Human-readable description naming the table")
    location: FindingLocation = Field(..., description="Location of the table declaration")
    table_name: str = Field(..., description="Bare table name")
    rule_id: RuleId = Field(..., description="Rule the table failed")

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "examples": [
                {
                    "message": "Row level security is not enabled on table 'accounts'",
                    "location": {"file": "migrations/001_init.sql", "line": 1, "column": 1},
                    "table_name": "accounts",
                    "rule_id": "rls-not-enabled",
                }
            ]
        },
    }
