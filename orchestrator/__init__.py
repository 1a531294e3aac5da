"""Orchestrator module for postgrls runs."""

from orchestrator.root import (
    LinterError,
    LinterOptions,
    NoSourcesError,
    SourceFile,
    SourceParseError,
    SourceReadError,
    collect_facts,
    run_linter,
)

__all__ = [
    "run_linter",
    "collect_facts",
    "LinterOptions",
    "SourceFile",
    "LinterError",
    "NoSourcesError",
    "SourceReadError",
    "SourceParseError",
]
