"""Errors raised while building a catalog from DDL."""

from typing import Any


class CatalogError(Exception):
    """Base class for catalog building errors."""


class UnknownDialectError(CatalogError):
    """Raised when a dialect name does not match any supported dialect."""

    def __init__(self, dialect: str, options: list[str]):
        self.dialect = dialect
        self.options = options
        super().__init__(
            f"Unknown dialect: {dialect!r} (expected one of: {', '.join(options)})"
        )


class SchemaSyntaxError(CatalogError):
    """Raised when the SQL parser rejects a schema.

    ``errors`` holds the parser's structured error entries unchanged.
    """

    def __init__(self, message: str, errors: list[dict[str, Any]] | None = None):
        self.errors = errors or []
        super().__init__(message)

    @property
    def line(self) -> int | None:
        return self.errors[0].get("line") if self.errors else None

    @property
    def col(self) -> int | None:
        return self.errors[0].get("col") if self.errors else None


class MissingIndexNameError(CatalogError):
    """Raised for a CREATE INDEX statement that does not name the index."""

    def __init__(self, table: str):
        self.table = table
        super().__init__(f"CREATE INDEX on {table!r} has no index name")
