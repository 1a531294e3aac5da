"""Finding models and output."""

from report.models import Finding, FindingLocation, RuleId
from report.output import findings_to_json, sort_findings, write_findings

__all__ = [
    "Finding",
    "FindingLocation",
    "RuleId",
    "findings_to_json",
    "sort_findings",
    "write_findings",
]
