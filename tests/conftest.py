import pytest

from attrgraph import Graph


@pytest.fixture
def simple_graph():
    """Directed: A -> B -> C with node and edge attributes."""
    G = Graph(directed=True)
    G.add_node("A", {"type": "person"})
    G.add_node("B", {"type": "company"})
    G.add_edge("A", "B", {"relationship": "works_for"})
    G.add_edge("B", "C", {"weight": 2})
    return G


@pytest.fixture
def undirected_graph():
    """Undirected path A - B - C plus a self-loop on C."""
    G = Graph(directed=False)
    G.add_edge("B", "A", {"weight": 1})
    G.add_edge("B", "C", {"weight": 2})
    G.add_edge("C", "C")
    return G


@pytest.fixture
def cycle_graph():
    """Directed 3-cycle A -> B -> C -> A."""
    return Graph.from_edge_list([("A", "B"), ("B", "C"), ("C", "A")])
