import networkx as nx
from networkx.readwrite.gexf import GEXFWriter
from networkx.readwrite.graphml import GraphMLWriter

from ._base import GraphExporter
from ._utils import _serialize_attrs, _unify_attr_types

# Keys the GEXF writer would read as structure instead of data.
_GEXF_NODE_RESERVED = {"id", "pid", "start", "end", "viz", "parents", "spells", "slices"}
_GEXF_EDGE_RESERVED = {"id", "type", "key", "start", "end", "viz", "spells", "slices"}


def _writer_graph(graph, rename_node=None, rename_edge=None):
    """Build the ``DiGraph`` handed to the networkx XML writers.

    Always directed, so every edge keeps the orientation ``graph.edges()``
    gives it; callers set the document's edge default afterwards. Attribute
    values are serialized and each attribute name gets one scalar type per
    scope (nodes, edges).
    """
    nodes = [(n, _serialize_attrs(graph.node_attrs(n), rename_node)) for n in graph.nodes()]
    edges = [(e.source, e.target, _serialize_attrs(e.attributes, rename_edge)) for e in graph.edges()]
    _unify_attr_types([attrs for _, attrs in nodes])
    _unify_attr_types([attrs for _, _, attrs in edges])

    G = nx.DiGraph()
    G.add_nodes_from(nodes)
    G.add_edges_from(edges)
    return G


def _edge_default(graph):
    return "directed" if graph.is_directed() else "undirected"


def to_graphml(graph, *, prettyprint=True, named_key_ids=False) -> str:
    """Export a graph as a GraphML document.

    Parameters
    ----------
    graph : GraphReader
    prettyprint : bool, default True
    named_key_ids : bool, default False
        If True use the attribute name as ``<key id>``; otherwise ``d0, d1, ...``.

    Returns
    -------
    str
        GraphML text. ``<graph id="G" edgedefault=...>`` follows the graph's
        directedness; one typed ``<key>`` per attribute name and scope.
        ``<edge>`` elements keep the orientation of ``graph.edges()``.

    Notes
    -----
    An attribute whose values differ in type is widened to one type
    (``int`` -> ``double`` -> ``string``; booleans mixed with other types
    become strings).

    """
    G = _writer_graph(graph)
    G.graph["id"] = "G"
    writer = GraphMLWriter(prettyprint=prettyprint, named_key_ids=named_key_ids)
    writer.add_graph_element(G)
    writer.xml.find("graph").set("edgedefault", _edge_default(graph))
    return str(writer)


def to_gexf(graph, *, prettyprint=True, version="1.2draft") -> str:
    """Export a graph as a GEXF document.

    Parameters
    ----------
    graph : GraphReader
    prettyprint : bool, default True
    version : {'1.2draft', '1.1draft'}

    Returns
    -------
    str
        GEXF text with ``defaultedgetype`` set from the graph's directedness
        and ``<attributes class="node"|"edge">`` tables.

    Notes
    -----
    ``label`` (nodes and edges) and ``weight`` (edges) keep their GEXF
    meaning. Other names the writer treats as structure are re-keyed with a
    leading underscore. Mixed-type attributes are widened as in
    :func:`to_graphml`.

    """
    G = _writer_graph(graph, rename_node=_GEXF_NODE_RESERVED, rename_edge=_GEXF_EDGE_RESERVED)
    writer = GEXFWriter(prettyprint=prettyprint, version=version)
    writer.add_graph(G)
    writer.graph_element.set("defaultedgetype", _edge_default(graph))
    return str(writer)


class GraphMLExporter(GraphExporter):
    name = "graphml"

    def __init__(self, *, prettyprint=True, named_key_ids=False):
        self.prettyprint = prettyprint
        self.named_key_ids = named_key_ids

    def export(self, graph) -> str:
        return to_graphml(graph, prettyprint=self.prettyprint, named_key_ids=self.named_key_ids)


class GexfExporter(GraphExporter):
    name = "gexf"

    def __init__(self, *, prettyprint=True, version="1.2draft"):
        self.prettyprint = prettyprint
        self.version = version

    def export(self, graph) -> str:
        return to_gexf(graph, prettyprint=self.prettyprint, version=self.version)
