"""Foreign key dependency graph using NetworkX."""

import networkx as nx

from sqlc_gen_core.models import Catalog, ForeignKey, Table


def foreign_key_graph(catalog: Catalog) -> nx.DiGraph:
    """Build a graph with an edge from each referenced table to its referrers.

    Nodes are qualified table names. Foreign keys whose target cannot be
    resolved to a table in the catalog, and self-references, add no edge.
    """
    g = nx.DiGraph()
    tables = [table for schema in catalog.schemas for table in schema.tables]

    # Map from simple table name to qualified name(s) for FK resolution
    table_name_to_qualified: dict[str, list[str]] = {}
    for table in tables:
        qualified_name = table.qualified_name()
        g.add_node(qualified_name)
        table_name_to_qualified.setdefault(table.rel.name, []).append(qualified_name)

    for table in tables:
        source = table.qualified_name()
        for fk in table.foreign_keys:
            target = _resolve_target(fk, table, g, table_name_to_qualified)
            if target is not None and target != source:
                g.add_edge(target, source)

    return g


def dependency_order(catalog: Catalog) -> list[str]:
    """Qualified table names, each referenced table before its referrers.

    Tables that reference each other in a cycle are emitted together, sorted
    by name. Ties between independent tables are broken by name.
    """
    g = foreign_key_graph(catalog)
    condensed = nx.condensation(g)
    members = nx.get_node_attributes(condensed, "members")

    order: list[str] = []
    for component in nx.lexicographical_topological_sort(
        condensed, key=lambda c: min(members[c])
    ):
        order.extend(sorted(members[component]))
    return order


def _resolve_target(
    fk: ForeignKey,
    table: Table,
    g: nx.DiGraph,
    table_name_to_qualified: dict[str, list[str]],
) -> str | None:
    # First check if already qualified
    if fk.referenced_table in g:
        return fk.referenced_table

    simple_name = fk.referenced_table.rsplit(".", 1)[-1]
    candidates = table_name_to_qualified.get(simple_name, [])
    if not candidates:
        return None
    # Prefer same schema
    if table.rel.schema:
        same_schema = next(
            (c for c in candidates if c.startswith(f"{table.rel.schema}.")), None
        )
        if same_schema:
            return same_schema
    return candidates[0]
