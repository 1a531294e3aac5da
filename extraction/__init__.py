"""SQL fact extraction module."""

from extraction.models import (
    ExtractedFacts,
    ExtractionResult,
    PolicyFact,
    RLSEnableFact,
    SourceLocation,
    TableFact,
)
from extraction.parser import SqlParseError, extract_facts, parse_sql

__all__ = [
    "SourceLocation",
    "TableFact",
    "RLSEnableFact",
    "PolicyFact",
    "ExtractedFacts",
    "ExtractionResult",
    "parse_sql",
    "extract_facts",
    "SqlParseError",
]
