"""DDL statement translation using sqlglot."""

import logging
from bisect import bisect_right
from collections.abc import Iterator

from sqlglot import exp
from sqlglot.dialects.dialect import Dialect as SQLGlotDialect
from sqlglot.errors import ParseError, TokenError
from sqlglot.tokens import Token, TokenType

from sqlc_gen_core.dialects import Dialect
from sqlc_gen_core.errors import MissingIndexNameError, SchemaSyntaxError
from sqlc_gen_core.models import (
    Column,
    ForeignKey,
    Index,
    PrimaryKey,
    QualifiedName,
    Table,
)

logger = logging.getLogger(__name__)

# Words that end a column's type and start its constraints
TYPE_TERMINATORS = {
    "AS",
    "AUTO_INCREMENT",
    "AUTOINCREMENT",
    "CHARACTER",
    "CHARSET",
    "CHECK",
    "COLLATE",
    "COMMENT",
    "CONSTRAINT",
    "DEFAULT",
    "GENERATED",
    "KEY",
    "NOT",
    "NULL",
    "ON",
    "PRIMARY",
    "REFERENCES",
    "UNIQUE",
}


class DDLParser:
    """Translates sqlglot DDL statements into catalog records.

    The parser holds no catalog state. It turns statements into ``Table`` and
    ``Index`` records and applies constraint clauses to tables it is given;
    ``CatalogBuilder`` decides where the results go.
    """

    def __init__(self, dialect: Dialect = Dialect.GENERIC):
        self.dialect = dialect
        # Source text and tokens of the last parse, for copying type text
        self._sql = ""
        self._tokens: list[Token] = []
        self._token_starts: list[int] = []

    def parse_statements(self, sql: str) -> list[exp.Expression]:
        """Parse SQL text into statements, dropping empty ones."""
        dialect = SQLGlotDialect.get_or_raise(self.dialect.sqlglot_dialect)
        try:
            tokens = dialect.tokenize(sql)
            statements = dialect.parser().parse(tokens, sql)
        except ParseError as e:
            raise SchemaSyntaxError(str(e), e.errors) from e
        except TokenError as e:
            raise SchemaSyntaxError(str(e)) from e
        self._sql = sql
        self._tokens = tokens
        self._token_starts = [token.start for token in tokens]
        return [stmt for stmt in statements if stmt is not None]

    def parse_create_table(self, stmt: exp.Create) -> Table:
        """Build a Table from a CREATE TABLE statement."""
        # stmt.this is a Schema wrapping the table and its column/constraint
        # definitions, or a bare Table for CREATE TABLE ... AS SELECT.
        target = stmt.this
        if isinstance(target, exp.Schema):
            table_expr, elements = target.this, target.expressions
        else:
            table_expr, elements = target, []

        schema_name, table_name = split_table_name(table_expr)
        table = Table(rel=QualifiedName(schema=schema_name, name=table_name))

        column_defs = [e for e in elements if isinstance(e, exp.ColumnDef)]
        table.columns = [self._parse_column(col_def) for col_def in column_defs]

        # Inline column constraints
        for col_def in column_defs:
            for constraint in col_def.args.get("constraints") or []:
                kind = constraint.args.get("kind")
                if isinstance(kind, exp.PrimaryKeyColumnConstraint):
                    table.primary_key = PrimaryKey(columns=[col_def.name], name=constraint.name)
                elif isinstance(kind, exp.Reference):
                    table.foreign_keys.append(
                        self._parse_reference([col_def.name], kind, name=constraint.name)
                    )

        # Table-level constraints
        for element in elements:
            if isinstance(element, exp.ColumnDef):
                continue
            for name, clause in constraint_clauses(element):
                self.apply_constraint(table, clause, name)

        return table

    def parse_create_index(self, stmt: exp.Create) -> tuple[str, str, Index]:
        """Build an Index from a CREATE INDEX statement.

        Returns the target (schema, table) along with the index.
        """
        index_expr = stmt.this
        schema_name, table_name = split_table_name(index_expr.args.get("table"))
        if not index_expr.name:
            raise MissingIndexNameError(qualify(schema_name, table_name))

        params = index_expr.args.get("params")
        columns = self._column_names(params.args.get("columns") if params else [])
        unique = bool(stmt.args.get("unique") or index_expr.args.get("unique"))

        return schema_name, table_name, Index(name=index_expr.name, columns=columns, unique=unique)

    def alter_table_constraints(self, stmt: exp.Alter) -> Iterator[tuple[str, exp.Expression]]:
        """Yield (constraint name, clause) for each ADD CONSTRAINT of an ALTER TABLE."""
        for action in stmt.args.get("actions") or []:
            if not isinstance(action, exp.AddConstraint):
                logger.debug("Ignoring ALTER TABLE action %s", action.key)
                continue
            for element in action.expressions:
                yield from constraint_clauses(element)

    def apply_constraint(self, table: Table, clause: exp.Expression, name: str = "") -> None:
        """Apply one table-level constraint clause to ``table``.

        PRIMARY KEY replaces the table's key, FOREIGN KEY appends, and a
        named UNIQUE becomes a unique index. Anything else is ignored.
        """
        if isinstance(clause, exp.PrimaryKey):
            columns = self._column_names(clause.expressions)
            if columns:
                table.primary_key = PrimaryKey(columns=columns, name=name)
        elif isinstance(clause, exp.ForeignKey):
            table.foreign_keys.append(
                self._parse_reference(
                    self._column_names(clause.expressions),
                    clause.args.get("reference"),
                    name=name,
                    on_delete=clause.args.get("delete") or "",
                    on_update=clause.args.get("update") or "",
                )
            )
        elif isinstance(clause, exp.UniqueColumnConstraint):
            # MySQL's UNIQUE KEY name (...) carries the name on the column list
            columns_expr = clause.this
            if not name and isinstance(columns_expr, exp.Schema) and columns_expr.this:
                name = columns_expr.this.name
            if not name:
                logger.debug("Dropping unnamed UNIQUE constraint on %s", table.qualified_name())
                return
            columns = self._column_names(columns_expr.expressions if columns_expr else [])
            table.indexes.append(Index(name=name, columns=columns, unique=True))
        else:
            logger.debug("Ignoring %s constraint on %s", clause.key, table.qualified_name())

    def _parse_column(self, col_def: exp.ColumnDef) -> Column:
        """Parse a column definition."""
        data_type = col_def.args.get("kind")
        type_name = self._type_text(col_def) if data_type else ""

        not_null = False
        for constraint in col_def.args.get("constraints") or []:
            kind = constraint.args.get("kind")
            if isinstance(kind, exp.NotNullColumnConstraint) and not kind.args.get("allow_null"):
                not_null = True
            elif isinstance(kind, exp.PrimaryKeyColumnConstraint):
                not_null = True

        return Column(
            name=col_def.name,
            original_name=col_def.name,
            type=QualifiedName(name=type_name),
            not_null=not_null,
        )

    def _type_text(self, col_def: exp.ColumnDef) -> str:
        """The declared type of a column, exactly as written in the source.

        Scans the tokens after the column name up to the first constraint
        keyword, or a ``,``/``)`` outside the type's own parentheses. Columns
        that were not parsed from text by this parser get the type rendered
        in the bound dialect instead.
        """
        ident = col_def.this
        end = ident.meta.get("end") if isinstance(ident, exp.Identifier) else None
        position = bisect_right(self._token_starts, end) if end is not None else 0
        name_token = self._tokens[position - 1] if position else None
        if name_token is None or name_token.end != end or name_token.text != ident.name:
            return col_def.args["kind"].sql(dialect=self.dialect.sqlglot_dialect)

        first = last = None
        depth = 0
        for token in self._tokens[position:]:
            if depth == 0:
                if token.token_type in (TokenType.COMMA, TokenType.R_PAREN, TokenType.SEMICOLON):
                    break
                words = token.text.upper().split()
                if first is not None and words and words[0] in TYPE_TERMINATORS:
                    break
            if token.token_type in (TokenType.L_PAREN, TokenType.L_BRACKET):
                depth += 1
            elif token.token_type in (TokenType.R_PAREN, TokenType.R_BRACKET):
                depth -= 1
            if first is None:
                first = token
            last = token

        if first is None:
            return ""
        return self._sql[first.start : last.end + 1]

    def _parse_reference(
        self,
        columns: list[str],
        reference: exp.Reference | None,
        name: str = "",
        on_delete: str = "",
        on_update: str = "",
    ) -> ForeignKey:
        """Build a ForeignKey from the local columns and a REFERENCES clause."""
        referenced_table = ""
        referenced_columns: list[str] = []
        if reference is not None:
            # reference.this is a Schema holding the table and its column
            # list, or a bare Table when no columns are given.
            target = reference.this
            if isinstance(target, exp.Schema):
                referenced_table = qualify(*split_table_name(target.this))
                referenced_columns = self._column_names(target.expressions)
            elif isinstance(target, exp.Table):
                referenced_table = qualify(*split_table_name(target))

            for option in reference.args.get("options") or []:
                words = str(option).upper().split()
                if words[:2] == ["ON", "DELETE"]:
                    on_delete = on_delete or " ".join(words[2:])
                elif words[:2] == ["ON", "UPDATE"]:
                    on_update = on_update or " ".join(words[2:])

        return ForeignKey(
            columns=columns,
            referenced_table=referenced_table,
            referenced_columns=referenced_columns,
            name=name,
            on_delete=str(on_delete),
            on_update=str(on_update),
        )

    def _column_names(self, expressions: list[exp.Expression] | None) -> list[str]:
        """Names of the columns in a key or index column list.

        Index entries that are expressions are kept as their SQL text.
        """
        names = []
        for expr in expressions or []:
            if isinstance(expr, exp.Ordered):
                expr = expr.this
            if isinstance(expr, (exp.Column, exp.ColumnDef, exp.Identifier, exp.Var)):
                names.append(expr.name)
            else:
                names.append(expr.sql(dialect=self.dialect.sqlglot_dialect))
        return names


def constraint_clauses(element: exp.Expression) -> Iterator[tuple[str, exp.Expression]]:
    """Yield (name, clause) pairs for a table-level constraint element.

    ``CONSTRAINT name <clause>`` is unwrapped; bare clauses have an empty name.
    """
    if isinstance(element, exp.Constraint):
        for clause in element.expressions:
            yield element.name, clause
    else:
        yield "", element


def split_table_name(table: exp.Expression | None) -> tuple[str, str]:
    """Split a table reference into (schema, table).

    Only a two-part ``schema.table`` name has a schema; bare and
    catalog-qualified names map to the default schema "".
    """
    if not isinstance(table, exp.Table):
        return "", table.name if table is not None else ""
    if table.catalog:
        return "", table.name
    return table.db, table.name


def qualify(schema: str, name: str) -> str:
    return f"{schema}.{name}" if schema else name
