"""Tests for the command-line interface."""

import json

import pytest
from click.testing import CliRunner

from sqlc_gen_core.cli import main


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def schema_file(tmp_path):
    path = tmp_path / "schema.sql"
    path.write_text("""
        CREATE TABLE orders (
            id INTEGER PRIMARY KEY,
            user_id INTEGER REFERENCES users(id)
        );
        CREATE TABLE users (id INTEGER PRIMARY KEY, email TEXT NOT NULL);
        CREATE UNIQUE INDEX idx_email ON users (email);
    """)
    return path


class TestCli:
    """Tests for the sqlc-gen-core command."""

    def test_prints_summary(self, runner, schema_file):
        result = runner.invoke(main, [str(schema_file), "-d", "postgresql"])

        assert result.exit_code == 0, result.output
        assert "Found 1 schemas, 2 tables" in result.output
        assert "Schema (default): 2 tables" in result.output
        lines = result.output.splitlines()
        users = lines.index("  - users: 2 columns, PK (id), 1 indexes")
        orders = lines.index("  - orders: 2 columns, PK (id), 1 FK")
        assert users < orders

    def test_writes_json(self, runner, schema_file, tmp_path):
        output = tmp_path / "catalog.json"

        result = runner.invoke(main, [str(schema_file), "-f", "json", "-o", str(output)])

        assert result.exit_code == 0, result.output
        data = json.loads(output.read_text())
        assert data["name"] == ""
        tables = {t["rel"]["name"]: t for t in data["schemas"][0]["tables"]}
        assert tables["users"]["indexes"][0]["name"] == "idx_email"
        assert tables["orders"]["foreign_keys"][0]["referenced_table"] == "users"

    def test_json_to_stdout(self, runner, schema_file):
        result = runner.invoke(main, [str(schema_file), "--format", "json"])

        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["schemas"][0]["name"] == ""

    def test_dialect_from_environment(self, runner, schema_file):
        result = runner.invoke(main, [str(schema_file)], env={"SQLC_ENGINE": "oracle"})

        assert result.exit_code == 1
        assert "Unknown dialect: 'oracle'" in result.output

    def test_reports_syntax_errors(self, runner, tmp_path):
        path = tmp_path / "broken.sql"
        path.write_text("CREATE TABLE users (id INTEGER")

        result = runner.invoke(main, [str(path)])

        assert result.exit_code == 1
        assert "Error:" in result.output

    def test_requires_schema_file(self, runner):
        result = runner.invoke(main, [])

        assert result.exit_code == 2
