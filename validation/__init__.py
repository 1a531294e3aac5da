"""Validation module for row level security checks."""

from validation.rls_checker import (
    TableRecord,
    correlate_facts,
    evaluate_record,
    is_excluded,
    validate_facts,
    validate_rls,
)

__all__ = [
    "validate_rls",
    "validate_facts",
    "correlate_facts",
    "evaluate_record",
    "is_excluded",
    "TableRecord",
]
