from ._base import GraphExporter


def to_cytoscape(graph):
    """Export a graph as Cytoscape.js elements.

    Parameters
    ----------
    graph : GraphReader

    Returns
    -------
    dict
        ``{"elements": {"nodes": [...], "edges": [...]}}``. Each node is
        ``{"data": {"id": node_id, **attrs}}`` and each edge
        ``{"data": {"source": u, "target": v, **attrs}}``; attribute keys win
        over the structural ones on collision.

    Notes
    -----
    Undirected graphs emit each edge once (canonical orientation).

    """
    nodes = [{"data": {"id": node_id, **graph.node_attrs(node_id)}} for node_id in graph.nodes()]
    edges = [
        {"data": {"source": edge.source, "target": edge.target, **edge.attributes}}
        for edge in graph.edges()
    ]
    return {"elements": {"nodes": nodes, "edges": edges}}


class CytoscapeExporter(GraphExporter):
    """Exporter object wrapping :func:`to_cytoscape`."""

    name = "cytoscape"

    def export(self, graph):
        return to_cytoscape(graph)
