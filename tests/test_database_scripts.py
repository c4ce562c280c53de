"""
Tests for the Supabase operational scripts using a stand-in client.
"""

import pytest

import check_database
from check_database import NEEDS_SCHEMA, PAUSED, READY, ERROR, check_status, classify_error
from setup_database import build_schema
import setup_database


class FakeAPIError(Exception):
    def __init__(self, message, code=None):
        super().__init__(message)
        self.code = code


class FakeQuery:
    def __init__(self, error=None):
        self.error = error
        self.calls = []

    def select(self, columns):
        self.calls.append(("select", columns))
        return self

    def limit(self, n):
        self.calls.append(("limit", n))
        return self

    def execute(self):
        if self.error:
            raise self.error
        return {"data": []}


class FakeAuth:
    def __init__(self, error=None):
        self.error = error

    def get_session(self):
        if self.error:
            raise self.error
        return None


class FakeClient:
    def __init__(self, auth_error=None, table_error=None):
        self.auth = FakeAuth(auth_error)
        self.query = FakeQuery(table_error)
        self.tables = []

    def table(self, name):
        self.tables.append(name)
        return self.query


def test_ready():
    client = FakeClient()
    status, message = check_status(client)
    assert status == READY
    assert client.tables == ["daily_entries"]
    assert client.query.calls == [("select", "id"), ("limit", 1)]


@pytest.mark.parametrize("code", ["42P01", "PGRST205"])
def test_missing_table_needs_schema(code):
    client = FakeClient(table_error=FakeAPIError("relation does not exist", code=code))
    status, message = check_status(client)
    assert status == NEEDS_SCHEMA
    assert "tables need to be created" in message


def test_paused_project():
    client = FakeClient(auth_error=RuntimeError("521 Web server is down"))
    status, _ = check_status(client)
    assert status == PAUSED
    assert client.tables == []


def test_other_table_error():
    client = FakeClient(table_error=FakeAPIError("permission denied", code="42501"))
    assert check_status(client)[0] == ERROR


def test_classify_error_defaults_to_error():
    assert classify_error(ValueError("boom")) == ERROR


def test_main_without_credentials(monkeypatch, capsys):
    monkeypatch.setattr(check_database, "get_supabase_credentials", lambda: (None, None))
    assert check_database.main() == 1
    assert "credentials not found" in capsys.readouterr().out


def test_main_ready(monkeypatch, capsys):
    monkeypatch.setattr(check_database, "get_supabase_credentials", lambda: ("https://x.supabase.co", "key"))
    monkeypatch.setattr(check_database, "create_supabase_client", lambda: FakeClient())
    assert check_database.main() == 0
    assert "Ready" in capsys.readouterr().out


def test_schema_covers_tables_and_categories():
    schema = build_schema()
    assert "CREATE TABLE daily_entries" in schema
    assert "CREATE TABLE supplements" in schema
    assert "'Uncertain/Trial'" in schema
    assert schema.count("CREATE POLICY") == 8


def test_setup_writes_schema_file(tmp_path, capsys):
    target = tmp_path / "schema.sql"
    assert setup_database.main(["--output", str(target)]) == 0
    assert target.read_text(encoding="utf-8") == build_schema()
    assert "Schema written" in capsys.readouterr().out
