"""Catalog representation handed to sqlc code generators."""

from dataclasses import dataclass, field


@dataclass
class QualifiedName:
    """Name of a relation or type, optionally schema-qualified."""
    catalog: str = ""
    schema: str = ""
    name: str = ""


@dataclass
class Column:
    """Table column.

    DDL extraction fills in name, original_name, type and not_null. The other
    fields belong to query analysis and keep their zero values here.
    """
    name: str
    type: QualifiedName = field(default_factory=QualifiedName)
    not_null: bool = False
    original_name: str = ""
    is_array: bool = False
    array_dims: int = 0
    length: int = 0
    unsigned: bool = False
    comment: str = ""
    scope: str = ""
    table: QualifiedName | None = None
    table_alias: str = ""
    is_named_param: bool = False
    is_func_call: bool = False
    is_sqlc_slice: bool = False
    embed_table: QualifiedName | None = None


@dataclass
class PrimaryKey:
    """Primary key constraint."""
    columns: list[str]
    name: str = ""

    def contains(self, column_name: str) -> bool:
        return column_name in self.columns


@dataclass
class ForeignKey:
    """Foreign key constraint."""
    columns: list[str]
    referenced_table: str
    referenced_columns: list[str]
    name: str = ""
    on_delete: str = ""
    on_update: str = ""

    def references(self, table_name: str) -> bool:
        return self.referenced_table == table_name

    def contains(self, column_name: str) -> bool:
        return column_name in self.columns


@dataclass
class Index:
    """Table index."""
    name: str
    columns: list[str]
    unique: bool = False

    def contains(self, column_name: str) -> bool:
        return column_name in self.columns

    def is_unique_on(self, column_name: str) -> bool:
        """True if this is a unique index over exactly ``column_name``."""
        return self.unique and self.columns == [column_name]


@dataclass
class Table:
    """Table definition."""
    rel: QualifiedName
    columns: list[Column] = field(default_factory=list)
    primary_key: PrimaryKey | None = None
    foreign_keys: list[ForeignKey] = field(default_factory=list)
    indexes: list[Index] = field(default_factory=list)
    comment: str = ""

    @property
    def name(self) -> str:
        return self.rel.name

    def qualified_name(self) -> str:
        """Return "schema.name", or just "name" for the default schema."""
        return f"{self.rel.schema}.{self.rel.name}" if self.rel.schema else self.rel.name

    def has_primary_key(self) -> bool:
        return self.primary_key is not None

    def get_column(self, name: str) -> Column | None:
        return next((c for c in self.columns if c.name == name), None)


@dataclass
class EnumType:
    """Enum type definition."""
    name: str
    vals: list[str] = field(default_factory=list)
    comment: str = ""


@dataclass
class CompositeType:
    """Composite type definition."""
    name: str
    comment: str = ""


@dataclass
class Schema:
    """Namespace of tables and types. The default schema has an empty name."""
    name: str = ""
    tables: list[Table] = field(default_factory=list)
    enums: list[EnumType] = field(default_factory=list)
    composite_types: list[CompositeType] = field(default_factory=list)
    comment: str = ""

    def get_table(self, name: str) -> Table | None:
        return next((t for t in self.tables if t.rel.name == name), None)


@dataclass
class Catalog:
    """Complete database catalog."""
    schemas: list[Schema] = field(default_factory=list)
    name: str = ""
    default_schema: str = ""
    comment: str = ""

    def get_schema(self, name: str) -> Schema | None:
        return next((s for s in self.schemas if s.name == name), None)
