"""
Tests for finding output.
"""

import io
import json

from report.models import Finding, FindingLocation, RuleId
from report.output import findings_to_json, sort_findings, write_findings


def make_finding(table_name: str, file: str = "test.sql", line: int = 1) -> Finding:
    return Finding(
        message=f"Row level security is not enabled on table '{table_name}'",
        location=FindingLocation(file=file, line=line, column=1),
        table_name=table_name,
        rule_id=RuleId.RLS_NOT_ENABLED,
    )


class TestWriteFindings:
    """Tests for writing findings to a stream."""

    def test_empty_writes_nothing(self):
        stream = io.StringIO()

        assert write_findings([], stream) is False
        assert stream.getvalue() == ""

    def test_non_empty_signals_failure(self):
        stream = io.StringIO()

        assert write_findings([make_finding("accounts")], stream) is True
        assert stream.getvalue().endswith("\n")

    def test_field_layout(self):
        data = json.loads(findings_to_json([make_finding("accounts", line=4)]))

        assert data == [
            {
                "message": "Row level security is not enabled on table 'accounts'",
                "location": {"file": "test.sql", "line": 4, "column": 1},
                "table_name": "accounts",
                "rule_id": "rls-not-enabled",
            }
        ]
        assert list(data[0]) == ["message", "location", "table_name", "rule_id"]

    def test_two_space_indent(self):
        text = findings_to_json([make_finding("accounts")])
        assert text.startswith('[\n  {\n    "message"')


class TestSortFindings:
    """Tests for deterministic ordering."""

    def test_sort_by_file_line_table(self):
        findings = [
            make_finding("b", file="b.sql", line=1),
            make_finding("z", file="a.sql", line=2),
            make_finding("y", file="a.sql", line=2),
            make_finding("x", file="a.sql", line=9),
        ]
        assert [f.table_name for f in sort_findings(findings)] == ["y", "z", "x", "b"]

    def test_findings_are_hashable(self):
        assert len({make_finding("a"), make_finding("a"), make_finding("b")}) == 2
