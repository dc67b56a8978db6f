from .contracts import GraphReader
from .errors import NotFoundError


class SubgraphView(GraphReader):
    """Read-only view of a subset of another graph.

    Filters the underlying graph on the fly without copying its data. Only
    the member set is fixed at construction; every read goes through to the
    underlying graph, so later mutations of that graph are visible.

    Parameters
    ----------
    graph : GraphReader
        Parent graph (a :class:`Graph` or another view).
    nodes : iterable of str
        Node IDs that belong to the view. Not validated against ``graph``.

    Notes
    -----
    - ``has_node`` is membership in the view; it does not consult ``graph``.
    - Node-scoped reads on a non-member raise :class:`NotFoundError` at view
      level; for members, failures of the underlying graph propagate.
    - The view does not own ``graph`` and should not outlive it.

    """

    def __init__(self, graph, nodes):
        self._graph = graph
        self._members = dict.fromkeys(nodes)  # insertion-ordered set

    @property
    def graph(self):
        """The underlying graph."""
        return self._graph

    def _require_member(self, node_id, op):
        if node_id not in self._members:
            raise NotFoundError("node", (node_id,), op, scope="subgraph view")

    # ==================== Read contract ====================

    def is_directed(self) -> bool:
        return self._graph.is_directed()

    def nodes(self):
        return list(self._members)

    def edges(self):
        members = self._members
        return [e for e in self._graph.edges() if e.source in members and e.target in members]

    def successors(self, node_id):
        self._require_member(node_id, "successors")
        members = self._members
        return [s for s in self._graph.successors(node_id) if s in members]

    def predecessors(self, node_id):
        self._require_member(node_id, "predecessors")
        members = self._members
        return [p for p in self._graph.predecessors(node_id) if p in members]

    def has_node(self, node_id) -> bool:
        return node_id in self._members

    def has_edge(self, u, v) -> bool:
        if u not in self._members or v not in self._members:
            return False
        return self._graph.has_edge(u, v)

    def node_attrs(self, node_id):
        self._require_member(node_id, "node_attrs")
        return self._graph.node_attrs(node_id)

    def edge_attrs(self, u, v):
        if u not in self._members or v not in self._members:
            raise NotFoundError("edge", (u, v), "edge_attrs", scope="subgraph view")
        return self._graph.edge_attrs(u, v)

    # ==================== View Methods ====================

    def subview(self, nodes):
        """Narrower view over this view (members outside this view stay invisible)."""
        return SubgraphView(self, nodes)

    def materialize(self):
        """Create a concrete :class:`Graph` from this view.

        Members that do not exist in the underlying graph are skipped.
        """
        from .graph import Graph

        sub = Graph(directed=self.is_directed())
        for node_id in self._members:
            if self._graph.has_node(node_id):
                sub.add_node(node_id, self._graph.node_attrs(node_id))
        for edge in self.edges():
            sub.add_edge(edge.source, edge.target, edge.attributes)
        return sub

    def __len__(self):
        return len(self._members)

    def __contains__(self, node_id):
        return node_id in self._members

    def __repr__(self):
        return f"SubgraphView({len(self)} nodes of {self._graph!r})"
