"""
Row level security checker.

Correlates table declarations, RLS enable statements and policies by bare
table name and reports every table that is left unprotected.
"""

import logging
from dataclasses import dataclass, field
from typing import Collection, Iterable

from extraction.models import ExtractedFacts, PolicyFact, RLSEnableFact, TableFact
from report.models import Finding, FindingLocation, RuleId

logger = logging.getLogger(__name__)


@dataclass
class TableRecord:
    """Everything observed about one table during a single validation run."""

    table_name: str
    declaration: TableFact
    rls_enabled: RLSEnableFact | None = None
    policies: list[PolicyFact] = field(default_factory=list)


def is_excluded(table_name: str, excluded_tables: Collection[str]) -> bool:
    """Check if a table is excluded (exact, case-sensitive match)."""
    return table_name in excluded_tables


def correlate_facts(
    tables: Iterable[TableFact],
    rls_enables: Iterable[RLSEnableFact],
    policies: Iterable[PolicyFact],
    excluded_tables: Collection[str] = (),
) -> dict[str, TableRecord]:
    """
    Group facts by table name.

    The last declaration of a name wins. Enable statements and policies for
    tables that were never declared are dropped, and facts naming an excluded
    table never enter the map.
    """
    excluded = frozenset(excluded_tables)
    records: dict[str, TableRecord] = {}

    for table in tables:
        if is_excluded(table.table_name, excluded):
            logger.debug(f"Skipping excluded table '{table.table_name}'")
            continue
        record = records.get(table.table_name)
        if record is None:
            records[table.table_name] = TableRecord(
                table_name=table.table_name,
                declaration=table,
            )
        else:
            record.declaration = table

    for rls_enable in rls_enables:
        if is_excluded(rls_enable.table_name, excluded):
            continue
        record = records.get(rls_enable.table_name)
        if record is None:
            logger.debug(
                f"Dropping RLS enable for undeclared table '{rls_enable.table_name}' "
                f"at {rls_enable.location.to_display_string()}"
            )
            continue
        record.rls_enabled = rls_enable

    for policy in policies:
        if is_excluded(policy.table_name, excluded):
            continue
        record = records.get(policy.table_name)
        if record is None:
            logger.debug(
                f"Dropping policy '{policy.policy_name}' for undeclared table "
                f"'{policy.table_name}' at {policy.location.to_display_string()}"
            )
            continue
        record.policies.append(policy)

    return records


def evaluate_record(record: TableRecord) -> Finding | None:
    """
    Decide whether a table is compliant.

    A table without RLS enabled is reported first; an enabled table with no
    policy is reported second. At most one finding per table.
    """
    if record.rls_enabled is None:
        rule_id = RuleId.RLS_NOT_ENABLED
        message = f"Row level security is not enabled on table '{record.table_name}'"
    elif not record.policies:
        rule_id = RuleId.RLS_NO_POLICY
        message = (
            f"Row level security is enabled on table '{record.table_name}' "
            f"but no policy is defined"
        )
    else:
        return None

    return Finding(
        message=message,
        location=FindingLocation.from_source(record.declaration.location),
        table_name=record.table_name,
        rule_id=rule_id,
    )


def validate_rls(
    tables: Iterable[TableFact],
    rls_enables: Iterable[RLSEnableFact],
    policies: Iterable[PolicyFact],
    excluded_tables: Collection[str] = (),
) -> list[Finding]:
    """
    Validate row level security for every declared table.

    Args:
        tables: CREATE TABLE facts, in observation order
        rls_enables: RLS enable facts, in observation order
        policies: CREATE POLICY facts, in observation order
        excluded_tables: Table names that are never checked

    Returns:
        One Finding per non-compliant table (possibly empty)
    """
    records = correlate_facts(tables, rls_enables, policies, excluded_tables)

    findings = []
    for record in records.values():
        finding = evaluate_record(record)
        if finding is not None:
            findings.append(finding)

    logger.debug(f"Checked {len(records)} table(s), {len(findings)} finding(s)")
    return findings


def validate_facts(facts: ExtractedFacts, excluded_tables: Collection[str] = ()) -> list[Finding]:
    """Validate aggregated facts."""
    return validate_rls(facts.tables, facts.rls_enables, facts.policies, excluded_tables)
