"""
SQL fact extractor.

Parses a SQL script with postgast (libpg_query, the PostgreSQL grammar) and
classifies each top-level statement as a table declaration, a row level
security enable, a policy declaration, or something we ignore. Any syntax
error fails the whole source.
"""

import logging

from postgast import PgQueryError, parse
from postgast import pg_query_pb2 as pb

from extraction.models import (
    ExtractedFacts,
    ExtractionResult,
    PolicyFact,
    RLSEnableFact,
    SourceLocation,
    TableFact,
)

logger = logging.getLogger(__name__)


class SqlParseError(Exception):
    """Raised when SQL text is malformed."""

    pass


def skip_insignificant(data: bytes, offset: int) -> int:
    """Advance past whitespace and comments starting at ``offset``."""
    while offset < len(data):
        if data[offset:offset + 1].isspace():
            offset += 1
        elif data.startswith(b"--", offset):
            end = data.find(b"\n", offset)
            offset = len(data) if end < 0 else end + 1
        elif data.startswith(b"/*", offset):
            end = data.find(b"*/", offset + 2)
            offset = len(data) if end < 0 else end + 2
        else:
            break
    return offset


def offset_to_location(filename: str, data: bytes, offset: int) -> SourceLocation:
    """Convert a byte offset in UTF-8 encoded SQL to a 1-based line and column."""
    line = data.count(b"\n", 0, offset) + 1
    line_start = data.rfind(b"\n", 0, offset) + 1
    column = len(data[line_start:offset].decode("utf-8", errors="replace")) + 1
    return SourceLocation(file=filename, line=line, column=column)


def is_rls_enable(alter: pb.AlterTableStmt) -> bool:
    """Check if any command of an ALTER TABLE is ENABLE ROW LEVEL SECURITY."""
    for cmd_node in alter.cmds:
        if cmd_node.WhichOneof("node") != "alter_table_cmd":
            continue
        if cmd_node.alter_table_cmd.subtype == pb.AT_EnableRowSecurity:
            return True
    return False


def classify_statement(
    stmt_node: pb.Node,
    location: SourceLocation,
) -> TableFact | RLSEnableFact | PolicyFact | None:
    """
    Classify one parsed statement into at most one fact.

    Args:
        stmt_node: The statement node of a RawStmt
        location: Where the statement starts

    Returns:
        The fact for the statement, or None for statements we ignore
    """
    which = stmt_node.WhichOneof("node")

    # CREATE TABLE ... AS parses as create_table_as_stmt and is not matched here
    if which == "create_stmt":
        create = stmt_node.create_stmt
        return TableFact(location=location, table_name=create.relation.relname)

    if which == "alter_table_stmt":
        alter = stmt_node.alter_table_stmt
        if alter.objtype != pb.OBJECT_TABLE or not is_rls_enable(alter):
            return None
        return RLSEnableFact(location=location, table_name=alter.relation.relname)

    if which == "create_policy_stmt":
        policy = stmt_node.create_policy_stmt
        return PolicyFact(
            location=location,
            table_name=policy.table.relname,
            policy_name=policy.policy_name,
        )

    return None


def parse_sql(filename: str, sql: str) -> ExtractedFacts:
    """
    Extract table, RLS enable and policy facts from a SQL script.

    Table names are the bare relation names reported by the PostgreSQL
    parser: schema qualifiers dropped, unquoted identifiers folded to lower
    case.

    Args:
        filename: Name used in the location of every fact
        sql: The SQL text

    Returns:
        ExtractedFacts with the facts in statement order

    Raises:
        SqlParseError: If the SQL is malformed
    """
    try:
        tree = parse(sql)
    except PgQueryError as e:
        raise SqlParseError(f"{filename}: {e}") from e

    data = sql.encode("utf-8")
    tables: list[TableFact] = []
    rls_enables: list[RLSEnableFact] = []
    policies: list[PolicyFact] = []

    for raw_stmt in tree.stmts:
        start = skip_insignificant(data, raw_stmt.stmt_location)
        location = offset_to_location(filename, data, start)

        fact = classify_statement(raw_stmt.stmt, location)
        if isinstance(fact, TableFact):
            tables.append(fact)
        elif isinstance(fact, RLSEnableFact):
            rls_enables.append(fact)
        elif isinstance(fact, PolicyFact):
            policies.append(fact)

    facts = ExtractedFacts(tables=tables, rls_enables=rls_enables, policies=policies)
    logger.debug(f"Extracted from {filename}: {facts.summary()}")
    return facts


def extract_facts(filename: str, sql: str) -> ExtractionResult:
    """
    Extract facts from one source, mapping parse failures into the result.

    Never raises for malformed SQL; check ``result.ok`` instead.
    """
    try:
        return ExtractionResult(filename=filename, facts=parse_sql(filename, sql))
    except SqlParseError as e:
        logger.debug(f"Extraction failed for {filename}: {e}")
        return ExtractionResult(filename=filename, error=str(e))
