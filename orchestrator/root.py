"""
Orchestrator for a postgrls run.

Pipeline: Read sources → Extract facts → Aggregate → Validate RLS → Findings

Fully synchronous. A run is all-or-nothing: if any source cannot be read or
parsed, no findings are computed.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, TextIO

from config.settings import get_settings
from extraction.models import ExtractedFacts
from extraction.parser import extract_facts
from report.models import Finding
from report.output import sort_findings
from validation.rls_checker import validate_facts

logger = logging.getLogger(__name__)


# ============================================================================
# Errors
# ============================================================================

class LinterError(Exception):
    """Base class for errors that abort a run."""

    pass


class NoSourcesError(LinterError):
    """Raised when a run has no input source."""

    def __init__(self) -> None:
        super().__init__("no input sources specified")


class SourceReadError(LinterError):
    """Raised when a source cannot be read."""

    def __init__(self, filename: str, reason: str) -> None:
        self.filename = filename
        super().__init__(f"failed to read SQL: {filename}: {reason}")


class SourceParseError(LinterError):
    """Raised when a source contains malformed SQL."""

    def __init__(self, filename: str, reason: str) -> None:
        self.filename = filename
        super().__init__(f"failed to parse SQL: {filename}: {reason}")


# ============================================================================
# Sources
# ============================================================================

@dataclass
class SourceFile:
    """
    One SQL input.

    The text comes from ``text`` if given, otherwise from ``stream``,
    otherwise from the file at ``filename``.
    """

    filename: str
    text: str | None = None
    stream: TextIO | None = None

    def read(self, encoding: str = "utf-8") -> str:
        """Read the SQL text."""
        if self.text is not None:
            return self.text
        if self.stream is not None:
            return self.stream.read()
        return Path(self.filename).read_text(encoding=encoding)


@dataclass
class LinterOptions:
    """Inputs of one run."""

    sources: list[SourceFile] = field(default_factory=list)
    excluded_tables: list[str] = field(default_factory=list)


# ============================================================================
# Pipeline Functions
# ============================================================================

def read_source(source: SourceFile, encoding: str = "utf-8") -> str:
    """Read one source, mapping I/O failures to SourceReadError."""
    try:
        return source.read(encoding=encoding)
    except (OSError, UnicodeDecodeError) as e:
        raise SourceReadError(source.filename, str(e)) from e


def collect_facts(sources: Iterable[SourceFile], encoding: str = "utf-8") -> ExtractedFacts:
    """
    Extract and concatenate facts from every source, in order.

    Raises:
        SourceReadError: On the first source that cannot be read
        SourceParseError: On the first source with malformed SQL
    """
    facts = ExtractedFacts()
    for source in sources:
        sql = read_source(source, encoding=encoding)
        result = extract_facts(source.filename, sql)
        if not result.ok:
            raise SourceParseError(source.filename, result.error)
        if result.facts.is_empty:
            logger.info(f"{source.filename}: no tables, RLS enables or policies found")
        else:
            logger.debug(f"{source.filename}: {result.facts.summary()}")
        facts = facts + result.facts
    return facts


# ============================================================================
# Main Runner
# ============================================================================

def run_linter(options: LinterOptions) -> list[Finding]:
    """
    Run the linter over all sources.

    Stages:
    1. Read and extract every source (fails fast)
    2. Validate the merged facts
    3. Sort findings by location

    Raises:
        NoSourcesError: If no source is given
        SourceReadError, SourceParseError: If a source is unusable
    """
    if not options.sources:
        raise NoSourcesError()

    settings = get_settings()

    logger.info(f"Stage 1: Extracting facts from {len(options.sources)} source(s)")
    facts = collect_facts(options.sources, encoding=settings.encoding)
    logger.info(f"Extracted {facts.summary()}")
    logger.debug(f"Declared tables: {', '.join(facts.get_table_names())}")

    logger.info("Stage 2: Validating row level security")
    findings = validate_facts(facts, options.excluded_tables)

    logger.info(f"Stage 3: Sorting {len(findings)} finding(s)")
    return sort_findings(findings)
