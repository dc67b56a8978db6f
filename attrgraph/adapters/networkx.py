import warnings

import networkx as nx

from ..core.graph import Graph
from ._utils import _serialize_attrs


def to_nx(graph, *, serializable=False):
    """Export a graph to a NetworkX ``DiGraph`` / ``Graph``.

    Parameters
    ----------
    graph : GraphReader
        Source graph or view.
    serializable : bool, default False
        If True, coerce attribute values to XML-safe scalars and drop ``None``
        values (see ``_serialize_value``).

    Returns
    -------
    networkx.DiGraph | networkx.Graph
        Nodes and edges are added in ``graph.nodes()`` / ``graph.edges()``
        order. A ``networkx.Graph`` does not keep edge orientation; the XML
        exporters write from a ``DiGraph`` for that reason.

    """
    G = nx.DiGraph() if graph.is_directed() else nx.Graph()

    for node_id in graph.nodes():
        attrs = graph.node_attrs(node_id)
        if serializable:
            attrs = _serialize_attrs(attrs)
        G.add_node(node_id)
        G.nodes[node_id].update(attrs)

    for edge in graph.edges():
        attrs = edge.attributes
        if serializable:
            attrs = _serialize_attrs(attrs)
        G.add_edge(edge.source, edge.target)
        G.edges[edge.source, edge.target].update(attrs)

    return G


def from_nx(G, **kwargs) -> Graph:
    """Build a :class:`Graph` from a NetworkX graph.

    Parameters
    ----------
    G : networkx.Graph
        Any NetworkX graph. Node IDs are converted with ``str()``.
    **kwargs
        Passed to the :class:`Graph` constructor (``directed`` defaults to
        ``G.is_directed()``).

    Returns
    -------
    Graph

    Notes
    -----
    Multigraph input collapses parallel edges; the attributes of the last
    one are kept.

    """
    kwargs.setdefault("directed", G.is_directed())
    graph = Graph(**kwargs)

    if G.is_multigraph():
        warnings.warn(
            "Multigraph input: parallel edges are collapsed, the last one wins.",
            stacklevel=2,
        )

    for n, data in G.nodes(data=True):
        graph.add_node(str(n), dict(data))
    for u, v, data in G.edges(data=True):
        graph.add_edge(str(u), str(v), dict(data))
    return graph
