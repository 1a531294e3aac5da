"""
Pytest configuration and fixtures for postgrls tests.
"""

import os
import sys

import pytest

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config.settings import get_settings  # noqa: E402


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch, tmp_path):
    """Isolate every test from POSTGRLS_* variables and any local .env file."""
    for name in list(os.environ):
        if name.upper().startswith("POSTGRLS_"):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def write_sql(tmp_path):
    """Write SQL text to a file under tmp_path and return its path as a string."""

    def _write(name: str, sql: str) -> str:
        path = tmp_path / name
        path.write_text(sql, encoding="utf-8")
        return str(path)

    return _write


@pytest.fixture
def protected_accounts_sql():
    """A table with RLS enabled and a policy."""
    return (
        "CREATE TABLE accounts (\n"
        "    id int,\n"
        "    manager text\n"
        ");\n"
        "\n"
        "ALTER TABLE accounts ENABLE ROW LEVEL SECURITY;\n"
        "CREATE POLICY account_managers ON accounts TO managers\n"
        "    USING (manager = current_user);\n"
    )


@pytest.fixture
def mixed_tables_sql():
    """Two tables, only accounts is protected."""
    return (
        "CREATE TABLE accounts (id int, manager text);\n"
        "CREATE TABLE users (id int, name text);\n"
        "ALTER TABLE accounts ENABLE ROW LEVEL SECURITY;\n"
        "CREATE POLICY account_managers ON accounts USING (manager = current_user);\n"
    )


@pytest.fixture
def supabase_style_sql():
    """Schema-qualified names, quoted identifiers and comments."""
    return (
        "-- profiles are readable by their owner\n"
        "create table if not exists public.profiles (\n"
        "    id uuid primary key,\n"
        "    bio text default 'n/a'\n"
        ");\n"
        "alter table only public.profiles enable row level security;\n"
        'create policy "Owners can read" on public.profiles\n'
        "    for select using (auth.uid() = id);\n"
        "\n"
        '/* audit table, intentionally open */\n'
        'create table public."AuditLog" (id bigserial);\n'
    )
