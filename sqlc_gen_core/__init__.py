"""sqlc-gen-core: build sqlc catalogs from SQL schema files."""

from sqlc_gen_core.catalog import CatalogBuilder, new_builder
from sqlc_gen_core.dialects import Dialect
from sqlc_gen_core.errors import (
    CatalogError,
    MissingIndexNameError,
    SchemaSyntaxError,
    UnknownDialectError,
)
from sqlc_gen_core.models import (
    Catalog,
    Column,
    ForeignKey,
    Index,
    PrimaryKey,
    QualifiedName,
    Schema,
    Table,
)

__version__ = "0.1.0"
__all__ = [
    "CatalogBuilder",
    "new_builder",
    "Dialect",
    "CatalogError",
    "MissingIndexNameError",
    "SchemaSyntaxError",
    "UnknownDialectError",
    "Catalog",
    "Column",
    "ForeignKey",
    "Index",
    "PrimaryKey",
    "QualifiedName",
    "Schema",
    "Table",
]
