"""Tests for catalog models."""

import pytest
from sqlc_gen_core.models import ForeignKey, Index, PrimaryKey, QualifiedName, Table


class TestTableQualifiedName:
    """Tests for Table.qualified_name."""

    def test_returns_name_when_no_schema(self):
        table = Table(rel=QualifiedName(name="users"))
        assert table.qualified_name() == "users"

    def test_returns_qualified_name_when_schema_present(self):
        table = Table(rel=QualifiedName(schema="public", name="users"))
        assert table.qualified_name() == "public.users"

    def test_handles_empty_string_schema(self):
        table = Table(rel=QualifiedName(schema="", name="users"))
        assert table.qualified_name() == "users"


class TestTableHelpers:
    """Tests for table lookups."""

    @pytest.fixture
    def table(self):
        return Table(rel=QualifiedName(name="users"))

    def test_has_primary_key(self, table):
        assert not table.has_primary_key()
        table.primary_key = PrimaryKey(columns=["id"])
        assert table.has_primary_key()

    def test_get_column_missing(self, table):
        assert table.get_column("id") is None


class TestIndex:
    """Tests for Index helpers."""

    def test_contains(self):
        index = Index(name="idx", columns=["col1", "col2"])

        assert index.contains("col1")
        assert index.contains("col2")
        assert not index.contains("col3")

    def test_is_unique_on(self):
        assert Index(name="idx", columns=["email"], unique=True).is_unique_on("email")

    def test_is_unique_on_requires_unique(self):
        assert not Index(name="idx", columns=["email"]).is_unique_on("email")

    def test_is_unique_on_requires_single_column(self):
        index = Index(name="idx", columns=["first_name", "last_name"], unique=True)
        assert not index.is_unique_on("first_name")

    def test_is_unique_on_wrong_column(self):
        assert not Index(name="idx", columns=["email"], unique=True).is_unique_on("username")


class TestKeys:
    """Tests for PrimaryKey and ForeignKey helpers."""

    def test_primary_key_contains(self):
        pk = PrimaryKey(columns=["id", "tenant_id"])

        assert pk.contains("id")
        assert pk.contains("tenant_id")
        assert not pk.contains("email")

    def test_foreign_key_references(self):
        fk = ForeignKey(columns=["user_id"], referenced_table="users", referenced_columns=["id"])

        assert fk.references("users")
        assert not fk.references("orders")
        assert fk.contains("user_id")
        assert not fk.contains("id")
