import numpy as np
import polars as pl
import pytest

from attrgraph import Graph, NotFoundError


class TestHistory:
    def test_records_calls_not_implicit_nodes(self):
        G = Graph()
        G.add_node("A", {"x": 1})
        G.add_edge("A", "B")
        events = G.history()
        assert [e["op"] for e in events] == ["add_node", "add_edge"]
        assert [e["version"] for e in events] == [1, 2]
        assert events[0]["node_id"] == "A"
        assert events[0]["attrs"] == {"x": 1}
        assert events[0]["result"] == "A"
        assert events[1]["u"] == "A"
        assert events[1]["v"] == "B"
        assert events[1]["result"] == ["A", "B"]

    def test_event_clock_fields(self):
        G = Graph()
        G.add_node("A")
        evt = G.history()[0]
        assert evt["ts_utc"].endswith("Z")
        assert isinstance(evt["mono_ns"], int)
        assert evt["mono_ns"] >= 0

    def test_failed_calls_are_not_logged(self):
        G = Graph()
        with pytest.raises(NotFoundError):
            G.set_node_attrs("missing", {"x": 1})
        assert G.history() == []

    def test_disabled(self):
        G = Graph(history=False)
        G.add_edge("A", "B")
        G.mark("nothing")
        assert G.history() == []
        G.enable_history(True)
        G.add_node("C")
        assert [e["op"] for e in G.history()] == ["add_node"]
        assert G.history()[0]["version"] == 1

    def test_mark_and_clear(self):
        G = Graph()
        G.add_node("A")
        G.mark("checkpoint")
        assert G.history()[-1]["op"] == "mark"
        assert G.history()[-1]["label"] == "checkpoint"
        G.clear_history()
        assert G.history() == []
        G.add_node("B")
        # versions keep counting after a clear
        assert G.history()[0]["version"] == 3

    def test_history_is_a_copy(self):
        G = Graph()
        G.add_node("A")
        G.history().clear()
        assert len(G.history()) == 1

    def test_values_are_json_safe(self):
        G = Graph()
        G.add_node("A", {"w": np.int64(3), "tags": {"b", "a"}})
        attrs = G.history()[0]["attrs"]
        assert attrs == {"w": 3, "tags": ["a", "b"]}
        assert type(attrs["w"]) is int

    def test_bulk_helpers_log_each_item(self):
        G = Graph()
        G.add_nodes(["A", "B"])
        G.add_edges([("A", "B")])
        assert [e["op"] for e in G.history()] == ["add_node", "add_node", "add_edge"]

    def test_as_dataframe(self):
        G = Graph()
        G.add_node("A", {"x": 1})
        G.add_edge("A", "B", weight=2.5)
        G.set_edge_attrs("A", "B", {})
        G.mark("done")
        df = G.history(as_df=True)
        assert isinstance(df, pl.DataFrame)
        assert df.height == 4
        assert df["op"].to_list() == ["add_node", "add_edge", "set_edge_attrs", "mark"]
        assert df["version"].to_list() == [1, 2, 3, 4]
        assert {"ts_utc", "mono_ns", "result"} <= set(df.columns)
