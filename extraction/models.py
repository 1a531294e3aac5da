"""
Fact models extracted from SQL scripts.

These dataclasses are the structured observations the correlator works on.
Every fact carries the location of the statement it was read from.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class SourceLocation:
    """Where a statement was observed."""

    file: str
    line: int
    column: int = 1

    def to_display_string(self) -> str:
        """Format as file:line:column."""
        return f"{self.file}:{self.line}:{self.column}"


@dataclass(frozen=True)
class TableFact:
    """A CREATE TABLE statement."""

    location: SourceLocation
    table_name: str


@dataclass(frozen=True)
class RLSEnableFact:
    """An ALTER TABLE statement turning on row level security."""

    location: SourceLocation
    table_name: str


@dataclass(frozen=True)
class PolicyFact:
    """A CREATE POLICY statement attached to a table."""

    location: SourceLocation
    table_name: str
    policy_name: str


@dataclass(frozen=True)
class ExtractedFacts:
    """
    The three ordered fact sequences read from one or more sources.

    Order of observation is kept. Concatenating two instances keeps the
    location of every fact, so facts from different files can be merged
    before correlation.
    """

    tables: tuple[TableFact, ...] = field(default_factory=tuple)
    rls_enables: tuple[RLSEnableFact, ...] = field(default_factory=tuple)
    policies: tuple[PolicyFact, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        # Convert lists to tuples (for immutability)
        for name in ("tables", "rls_enables", "policies"):
            value = getattr(self, name)
            if isinstance(value, list):
                object.__setattr__(self, name, tuple(value))

    def __add__(self, other: "ExtractedFacts") -> "ExtractedFacts":
        if not isinstance(other, ExtractedFacts):
            return NotImplemented
        return ExtractedFacts(
            tables=self.tables + other.tables,
            rls_enables=self.rls_enables + other.rls_enables,
            policies=self.policies + other.policies,
        )

    @property
    def is_empty(self) -> bool:
        """Check if no fact of any kind was extracted."""
        return not (self.tables or self.rls_enables or self.policies)

    def get_table_names(self) -> list[str]:
        """Get declared table names in order of declaration."""
        return [t.table_name for t in self.tables]

    def summary(self) -> str:
        """Short count summary used in log lines."""
        return (
            f"{len(self.tables)} table(s), "
            f"{len(self.rls_enables)} RLS enable(s), "
            f"{len(self.policies)} policy(ies)"
        )


@dataclass(frozen=True)
class ExtractionResult:
    """
    Outcome of extracting one source: either facts or an error message.

    Exactly one of ``facts`` and ``error`` is set.
    """

    filename: str
    facts: ExtractedFacts | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        """Check if extraction succeeded."""
        return self.error is None
