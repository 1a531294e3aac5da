"""
JSON emission of findings.

An empty finding list produces no output. A non-empty list is written as one
indented JSON array and reported back as a failure.
"""

import json
import logging
from typing import Iterable, TextIO

from report.models import Finding

logger = logging.getLogger(__name__)


def sort_findings(findings: Iterable[Finding]) -> list[Finding]:
    """Order findings by file, line and table name."""
    return sorted(
        findings,
        key=lambda f: (f.location.file, f.location.line, f.table_name),
    )


def findings_to_json(findings: list[Finding], indent: int = 2) -> str:
    """Serialize findings as a JSON array."""
    return json.dumps(
        [f.model_dump(mode="json") for f in findings],
        indent=indent,
        ensure_ascii=False,
    )


def write_findings(findings: list[Finding], stream: TextIO, indent: int = 2) -> bool:
    """
    Write findings to a stream.

    Returns:
        True if anything was written (the run should fail), False otherwise
    """
    if not findings:
        return False

    stream.write(findings_to_json(findings, indent=indent))
    stream.write("\n")
    logger.info(f"Reported {len(findings)} finding(s)")
    return True
