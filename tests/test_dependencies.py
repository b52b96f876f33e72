"""Tests for the foreign key dependency graph."""

import pytest

from sqlc_gen_core.catalog import CatalogBuilder
from sqlc_gen_core.dependencies import dependency_order, foreign_key_graph
from sqlc_gen_core.models import Catalog, ForeignKey, QualifiedName, Schema, Table


def build(sql: str) -> Catalog:
    builder = CatalogBuilder("postgresql")
    builder.parse(sql)
    return builder.build()


class TestForeignKeyGraph:
    """Tests for foreign_key_graph."""

    def test_edges_point_from_referenced_table(self):
        catalog = build("""
            CREATE TABLE users (id INTEGER PRIMARY KEY);
            CREATE TABLE orders (id INTEGER PRIMARY KEY, user_id INTEGER REFERENCES users(id));
        """)

        g = foreign_key_graph(catalog)

        assert set(g.nodes) == {"users", "orders"}
        assert list(g.edges) == [("users", "orders")]

    def test_ignores_self_and_unknown_references(self):
        catalog = build("""
            CREATE TABLE employees (
                id INTEGER PRIMARY KEY,
                manager_id INTEGER REFERENCES employees(id),
                company_id INTEGER REFERENCES companies(id)
            );
        """)

        assert list(foreign_key_graph(catalog).edges) == []

    def test_resolves_to_same_schema_when_ambiguous(self):
        catalog = Catalog(schemas=[
            Schema(name="public", tables=[Table(rel=QualifiedName(schema="public", name="users"))]),
            Schema(name="audit", tables=[
                Table(rel=QualifiedName(schema="audit", name="users")),
                Table(
                    rel=QualifiedName(schema="audit", name="events"),
                    foreign_keys=[
                        ForeignKey(columns=["user_id"], referenced_table="users", referenced_columns=["id"]),
                    ],
                ),
            ]),
        ])

        assert list(foreign_key_graph(catalog).edges) == [("audit.users", "audit.events")]

    def test_resolves_qualified_reference(self):
        catalog = build("""
            CREATE TABLE auth.users (id INTEGER PRIMARY KEY);
            CREATE TABLE public.orders (user_id INTEGER REFERENCES auth.users(id));
        """)

        assert list(foreign_key_graph(catalog).edges) == [("auth.users", "public.orders")]


class TestDependencyOrder:
    """Tests for dependency_order."""

    def test_referenced_tables_come_first(self):
        catalog = build("""
            CREATE TABLE order_items (order_id INTEGER REFERENCES orders(id));
            CREATE TABLE orders (id INTEGER PRIMARY KEY, user_id INTEGER REFERENCES users(id));
            CREATE TABLE users (id INTEGER PRIMARY KEY);
        """)

        assert dependency_order(catalog) == ["users", "orders", "order_items"]

    def test_independent_tables_sorted_by_name(self):
        catalog = build("""
            CREATE TABLE zebras (id INTEGER);
            CREATE TABLE apples (id INTEGER);
        """)

        assert dependency_order(catalog) == ["apples", "zebras"]

    def test_cycles_are_grouped(self):
        catalog = build("""
            CREATE TABLE b (id INTEGER, a_id INTEGER);
            CREATE TABLE a (id INTEGER, b_id INTEGER REFERENCES b(id));
            CREATE TABLE c (id INTEGER, a_id INTEGER REFERENCES a(id));
            ALTER TABLE b ADD CONSTRAINT fk_a FOREIGN KEY (a_id) REFERENCES a (id);
        """)

        assert dependency_order(catalog) == ["a", "b", "c"]

    @pytest.mark.parametrize("catalog", [Catalog(), Catalog(schemas=[Schema()])])
    def test_empty_catalog(self, catalog):
        assert dependency_order(catalog) == []
