from abc import ABC, abstractmethod


class GraphReader(ABC):
    """Read-only graph contract.

    Everything downstream of a graph (views, exporters, adapters) is written
    against this interface, so a concrete :class:`~attrgraph.core.graph.Graph`
    and a :class:`~attrgraph.core.views.SubgraphView` are interchangeable.
    Node and edge identifiers are strings.
    """

    @abstractmethod
    def is_directed(self) -> bool:
        pass

    @abstractmethod
    def nodes(self) -> list:
        """All node IDs."""

    @abstractmethod
    def edges(self) -> list:
        """All edges as :class:`~attrgraph.core.structure.Edge` records."""

    @abstractmethod
    def successors(self, node_id) -> list:
        """Direct successors of ``node_id``; raises ``NotFoundError`` if absent."""

    @abstractmethod
    def predecessors(self, node_id) -> list:
        """Direct predecessors of ``node_id``; raises ``NotFoundError`` if absent."""

    @abstractmethod
    def has_node(self, node_id) -> bool:
        pass

    @abstractmethod
    def has_edge(self, u, v) -> bool:
        """True if an edge ``u -> v`` exists (either direction when undirected)."""

    @abstractmethod
    def node_attrs(self, node_id) -> dict:
        """Copy of the node's attributes; raises ``NotFoundError`` if absent."""

    @abstractmethod
    def edge_attrs(self, u, v) -> dict:
        """Copy of the edge's attributes; raises ``NotFoundError`` if absent."""

    # Derived helpers (only use the abstract read methods)

    def number_of_nodes(self) -> int:
        return len(self.nodes())

    def number_of_edges(self) -> int:
        return len(self.edges())

    def view(self, nodes):
        """Zero-copy, read-only view restricted to ``nodes``."""
        from .views import SubgraphView

        return SubgraphView(self, nodes)


class MutableGraph(GraphReader):
    """Read contract plus the four mutators."""

    @abstractmethod
    def add_node(self, node_id, attrs=None, **attributes):
        """Create ``node_id`` if new and merge attributes (new keys win)."""

    @abstractmethod
    def add_edge(self, u, v, attrs=None, **attributes):
        """Create the edge ``u -> v`` (and missing endpoints); replace its attributes."""

    @abstractmethod
    def set_node_attrs(self, node_id, attrs):
        """Replace all attributes of an existing node."""

    @abstractmethod
    def set_edge_attrs(self, u, v, attrs):
        """Replace all attributes of an existing edge."""
