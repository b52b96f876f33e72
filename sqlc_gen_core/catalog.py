"""Accumulate DDL statements into a sqlc catalog."""

import logging

from sqlglot import exp

from sqlc_gen_core.dialects import Dialect
from sqlc_gen_core.models import Catalog, Schema, Table
from sqlc_gen_core.parsers.ddl import DDLParser, qualify, split_table_name

logger = logging.getLogger(__name__)


class CatalogBuilder:
    """Builds a ``Catalog`` from SQL schema definitions.

    Statements are applied in order as they are parsed, so CREATE INDEX and
    ALTER TABLE only see tables declared before them (in the same text or an
    earlier ``parse`` call). Statements that target an unknown table are
    dropped, never deferred.

    Example::

        builder = CatalogBuilder("postgresql")
        builder.parse("CREATE TABLE users (id INTEGER PRIMARY KEY)")
        catalog = builder.build()
    """

    def __init__(self, dialect: str | Dialect = Dialect.GENERIC):
        self.dialect = dialect if isinstance(dialect, Dialect) else Dialect.from_name(dialect)
        self.schemas: dict[str, Schema] = {}
        self._parser = DDLParser(self.dialect)

    def parse(self, sql: str) -> None:
        """Parse SQL text and apply its statements to the catalog.

        Raises SchemaSyntaxError if the text does not parse, in which case
        nothing from it is applied. MissingIndexNameError aborts the call but
        leaves statements before the offending one applied.
        """
        for stmt in self._parser.parse_statements(sql):
            self.apply(stmt)

    def apply(self, stmt: exp.Expression) -> None:
        """Apply a single parsed statement."""
        if isinstance(stmt, exp.Create):
            kind = (stmt.kind or "").upper()
            if kind == "TABLE":
                self._add_table(self._parser.parse_create_table(stmt))
                return
            if kind == "INDEX":
                schema_name, table_name, index = self._parser.parse_create_index(stmt)
                table = self.get_table(schema_name, table_name)
                if table is None:
                    logger.debug(
                        "Dropping index %s on unknown table %s",
                        index.name, qualify(schema_name, table_name),
                    )
                    return
                table.indexes.append(index)
                return
        elif isinstance(stmt, exp.Alter) and (stmt.args.get("kind") or "TABLE").upper() == "TABLE":
            schema_name, table_name = split_table_name(stmt.this)
            table = self.get_table(schema_name, table_name)
            if table is None:
                logger.debug("Dropping ALTER TABLE on unknown table %s", qualify(schema_name, table_name))
                return
            for name, clause in self._parser.alter_table_constraints(stmt):
                self._parser.apply_constraint(table, clause, name)
            return

        logger.debug("Ignoring %s statement", stmt.key.upper())

    def get_table(self, schema_name: str, table_name: str) -> Table | None:
        schema = self.schemas.get(schema_name)
        return schema.get_table(table_name) if schema else None

    def merge_catalog(self, other: Catalog) -> None:
        """Fold ``other`` into this builder.

        Tables, enums and composite types are added per schema only when no
        entry of the same name exists yet; on a collision the builder's entry
        is kept whole and the incoming one is discarded.
        """
        for other_schema in other.schemas:
            schema = self._schema(other_schema.name)

            existing_tables = {t.rel.name for t in schema.tables}
            for table in other_schema.tables:
                if not table.rel.name:
                    continue
                if table.rel.name in existing_tables:
                    logger.debug("Keeping existing table %s", table.qualified_name())
                    continue
                schema.tables.append(table)
                existing_tables.add(table.rel.name)

            existing_enums = {e.name for e in schema.enums}
            for enum in other_schema.enums:
                if enum.name not in existing_enums:
                    schema.enums.append(enum)
                    existing_enums.add(enum.name)

            existing_composites = {c.name for c in schema.composite_types}
            for composite in other_schema.composite_types:
                if composite.name not in existing_composites:
                    schema.composite_types.append(composite)
                    existing_composites.add(composite.name)

    def build(self) -> Catalog:
        """Return the accumulated catalog.

        The schemas are handed over to the catalog and the builder is left
        empty.
        """
        catalog = Catalog(schemas=list(self.schemas.values()))
        self.schemas = {}
        logger.info(
            "Built catalog with %d schemas and %d tables",
            len(catalog.schemas), sum(len(s.tables) for s in catalog.schemas),
        )
        return catalog

    def _schema(self, name: str) -> Schema:
        if name not in self.schemas:
            self.schemas[name] = Schema(name=name)
        return self.schemas[name]

    def _add_table(self, table: Table) -> None:
        """Insert ``table`` into its schema, replacing a table of the same name."""
        schema = self._schema(table.rel.schema)
        for i, existing in enumerate(schema.tables):
            if existing.rel.name == table.rel.name:
                logger.debug("Replacing table %s", table.qualified_name())
                schema.tables[i] = table
                return
        schema.tables.append(table)


def new_builder(dialect: str = "generic") -> CatalogBuilder:
    """Create an empty builder for ``dialect``; raises UnknownDialectError."""
    return CatalogBuilder(dialect)
