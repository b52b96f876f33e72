"""SQL dialects understood by the DDL parser."""

from enum import Enum

from sqlc_gen_core.errors import UnknownDialectError


class Dialect(Enum):
    """Supported SQL dialects."""

    MYSQL = "mysql"
    POSTGRES = "postgresql"
    SQLITE = "sqlite"
    GENERIC = "generic"

    @property
    def sqlglot_dialect(self) -> str | None:
        """Dialect name passed to sqlglot (None selects its default dialect)."""
        return _SQLGLOT_DIALECTS[self]

    @classmethod
    def from_name(cls, name: str | None) -> "Dialect":
        """Resolve a dialect name or synonym, case-insensitively.

        An empty name resolves to the generic dialect.
        """
        key = (name or "generic").strip().lower()
        try:
            return _ALIASES[key]
        except KeyError:
            raise UnknownDialectError(name or "", sorted(_ALIASES)) from None


_SQLGLOT_DIALECTS = {
    Dialect.MYSQL: "mysql",
    Dialect.POSTGRES: "postgres",
    Dialect.SQLITE: "sqlite",
    Dialect.GENERIC: None,
}

_ALIASES = {
    "mysql": Dialect.MYSQL,
    "mariadb": Dialect.MYSQL,
    "postgres": Dialect.POSTGRES,
    "postgresql": Dialect.POSTGRES,
    "psql": Dialect.POSTGRES,
    "sqlite": Dialect.SQLITE,
    "sqlite3": Dialect.SQLITE,
    "generic": Dialect.GENERIC,
}
