import polars as pl
import pytest

from attrgraph import Graph
from attrgraph.adapters.dataframe_adapter import from_dataframes, to_dataframes


class TestDataFrameExport:
    def test_tables(self, simple_graph):
        tables = to_dataframes(simple_graph)
        assert set(tables) == {"nodes", "edges"}

        nodes = tables["nodes"]
        assert isinstance(nodes, pl.DataFrame)
        assert nodes.height == 3
        assert nodes.columns == ["node_id", "type"]
        assert nodes["node_id"].to_list() == ["A", "B", "C"]
        assert nodes["type"].to_list() == ["person", "company", None]

        edges = tables["edges"]
        assert edges.height == 2
        assert edges.columns[:2] == ["source", "target"]
        assert set(edges.columns) == {"source", "target", "relationship", "weight"}
        assert edges["weight"].to_list() == [None, 2]

    def test_undirected_canonical_rows(self, undirected_graph):
        edges = to_dataframes(undirected_graph)["edges"]
        assert edges.select("source", "target").rows() == [("B", "C"), ("A", "B"), ("C", "C")]

    def test_empty_graph(self):
        tables = to_dataframes(Graph())
        assert tables["nodes"].height == 0
        assert tables["nodes"].columns == ["node_id"]
        assert tables["nodes"]["node_id"].dtype == pl.Utf8
        assert tables["edges"].columns == ["source", "target"]

    def test_view(self, cycle_graph):
        tables = to_dataframes(cycle_graph.view(["B", "C"]))
        assert tables["nodes"]["node_id"].to_list() == ["B", "C"]
        assert tables["edges"].rows() == [("B", "C")]


class TestDataFrameImport:
    def test_round_trip(self, simple_graph):
        tables = to_dataframes(simple_graph)
        back = from_dataframes(tables["nodes"], tables["edges"])
        assert back.nodes() == simple_graph.nodes()
        assert back.edges() == simple_graph.edges()
        assert back.node_attrs("C") == {}

    def test_edges_only(self):
        edges = pl.DataFrame({"source": ["x", "y"], "target": ["y", "z"], "w": [1.0, None]})
        G = from_dataframes(edges=edges, directed=False)
        assert not G.is_directed()
        assert G.nodes() == ["x", "y", "z"]
        assert G.edge_attrs("y", "x") == {"w": 1.0}
        assert G.edge_attrs("z", "y") == {}

    def test_missing_node_column(self):
        with pytest.raises(ValueError, match="node_id"):
            from_dataframes(nodes=pl.DataFrame({"id": ["a"]}))

    def test_missing_edge_columns(self):
        with pytest.raises(ValueError, match="target"):
            from_dataframes(edges=pl.DataFrame({"source": ["a"]}))
