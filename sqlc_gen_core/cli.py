"""Command-line interface for sqlc-gen-core."""

import dataclasses
import json
import logging
from pathlib import Path
from typing import Literal

import click

from sqlc_gen_core.catalog import CatalogBuilder
from sqlc_gen_core.dependencies import dependency_order
from sqlc_gen_core.dialects import Dialect
from sqlc_gen_core.errors import CatalogError
from sqlc_gen_core.models import Catalog


@click.command()
@click.argument(
    "schema_files",
    nargs=-1,
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "-d", "--dialect",
    envvar="SQLC_ENGINE",
    default="generic",
    show_default=True,
    help="SQL dialect: mysql, mariadb, postgresql, postgres, psql, sqlite, sqlite3 or generic "
         "(or set SQLC_ENGINE env var)",
)
@click.option(
    "-f", "--format",
    type=click.Choice(["summary", "json"]),
    default="summary",
    help="Output format (default: summary)",
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write JSON output to this file instead of stdout.",
)
@click.option("-v", "--verbose", is_flag=True, help="Log parsing details.")
@click.version_option(version="0.1.0")
def main(
    schema_files: tuple[Path, ...],
    dialect: str,
    format: Literal["summary", "json"],
    output: Path | None,
    verbose: bool,
) -> None:
    """Build a sqlc catalog from SQL schema files.

    SCHEMA_FILES are parsed in the order given, so indexes and ALTER TABLE
    statements must come after the tables they refer to.

    \b
    Examples:
      # Summarize a PostgreSQL schema
      sqlc-gen-core schema.sql -d postgresql

      # Dump the catalog as JSON
      sqlc-gen-core tables.sql indexes.sql -f json -o catalog.json
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        builder = CatalogBuilder(Dialect.from_name(dialect))
        for path in schema_files:
            builder.parse(path.read_text(encoding="utf-8"))
        catalog = builder.build()
    except CatalogError as e:
        raise click.ClickException(str(e))

    if format == "json":
        content = json.dumps(dataclasses.asdict(catalog), indent=2)
        if output:
            output.write_text(content + "\n", encoding="utf-8")
            click.echo(f"Catalog saved to: {output}")
        else:
            click.echo(content)
        return

    _print_summary(catalog)


def _print_summary(catalog: Catalog) -> None:
    tables = {
        table.qualified_name(): table
        for schema in catalog.schemas
        for table in schema.tables
    }
    click.echo(f"Found {len(catalog.schemas)} schemas, {len(tables)} tables")

    for schema in sorted(catalog.schemas, key=lambda s: s.name):
        click.echo(f"Schema {schema.name or '(default)'}: {len(schema.tables)} tables")

    click.echo("\nTables (dependency order):")
    for name in dependency_order(catalog):
        table = tables[name]
        parts = [f"{len(table.columns)} columns"]
        if table.primary_key:
            parts.append(f"PK ({', '.join(table.primary_key.columns)})")
        if table.foreign_keys:
            parts.append(f"{len(table.foreign_keys)} FK")
        if table.indexes:
            parts.append(f"{len(table.indexes)} indexes")
        click.echo(f"  - {name}: {', '.join(parts)}")


if __name__ == "__main__":
    main()
