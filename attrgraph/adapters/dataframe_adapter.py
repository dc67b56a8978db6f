from __future__ import annotations

import polars as pl

from ..core.graph import Graph

_NODE_KEY = "node_id"
_EDGE_KEYS = ("source", "target")


def to_dataframes(graph) -> dict[str, pl.DataFrame]:
    """
    Export a graph to Polars DataFrames.

    Returns a dictionary of DataFrames:
    - 'nodes': one row per node, ``node_id`` plus one column per attribute key
    - 'edges': one row per edge (canonical orientation when undirected),
      ``source``, ``target`` plus one column per attribute key

    Missing attributes are null. Attribute keys named like the key columns
    are shadowed by the structural value.

    Args:
        graph: Graph or view to export

    Returns:
        Dictionary mapping table names to Polars DataFrames
    """
    result = {}

    nodes_data = []
    for node_id in graph.nodes():
        row = {str(k): v for k, v in graph.node_attrs(node_id).items()}
        row[_NODE_KEY] = node_id
        nodes_data.append(row)

    result["nodes"] = (
        _frame(nodes_data, [_NODE_KEY]) if nodes_data else pl.DataFrame(schema={_NODE_KEY: pl.Utf8})
    )

    edges_data = []
    for edge in graph.edges():
        row = {str(k): v for k, v in edge.attributes.items()}
        row["source"] = edge.source
        row["target"] = edge.target
        edges_data.append(row)

    result["edges"] = (
        _frame(edges_data, list(_EDGE_KEYS))
        if edges_data
        else pl.DataFrame(schema={"source": pl.Utf8, "target": pl.Utf8})
    )
    return result


def _frame(rows, key_cols):
    df = pl.DataFrame(rows, infer_schema_length=None)
    rest = [c for c in df.columns if c not in key_cols]
    return df.select(key_cols + rest)


def from_dataframes(
    nodes: pl.DataFrame | None = None,
    edges: pl.DataFrame | None = None,
    directed: bool = True,
    **kwargs,
) -> Graph:
    """
    Build a graph from Polars DataFrames shaped like :func:`to_dataframes` output.

    Null cells are treated as absent attributes. Nodes are added before edges,
    so node order follows the ``nodes`` table.

    Args:
        nodes: Table with a ``node_id`` column
        edges: Table with ``source`` and ``target`` columns
        directed: Directedness of the new graph
        **kwargs: Passed to the Graph constructor

    Returns:
        Graph
    """
    graph = Graph(directed=directed, **kwargs)

    if nodes is not None:
        if _NODE_KEY not in nodes.columns:
            raise ValueError(f"nodes table needs a '{_NODE_KEY}' column")
        for row in nodes.iter_rows(named=True):
            node_id = row.pop(_NODE_KEY)
            graph.add_node(node_id, {k: v for k, v in row.items() if v is not None})

    if edges is not None:
        missing = [c for c in _EDGE_KEYS if c not in edges.columns]
        if missing:
            raise ValueError(f"edges table is missing columns: {missing}")
        for row in edges.iter_rows(named=True):
            source = row.pop("source")
            target = row.pop("target")
            graph.add_edge(source, target, {k: v for k, v in row.items() if v is not None})

    return graph
