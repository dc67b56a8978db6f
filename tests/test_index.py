import pytest

from attrgraph import IndexMap, NotFoundError


class TestIndexMap:
    def test_ids_map_to_dense_indices_in_first_seen_order(self):
        m = IndexMap()
        assert m.index_of("foo") == 0
        assert m.index_of("bar") == 1
        assert m.index_of("foo") == 0
        assert m.index_of("baz") == 2
        assert len(m) == 3

    def test_bijection(self):
        m = IndexMap()
        ids = ["n3", "n1", "x", "", "n1", "ü"]
        for s in ids:
            m.index_of(s)
        for s in ids:
            assert m.id_of(m.index_of(s)) == s
        for i in range(len(m)):
            assert m.index_of(m.id_of(i)) == i

    def test_membership(self):
        m = IndexMap()
        m.index_of("a")
        assert m.has_id("a")
        assert "a" in m
        assert not m.has_id("b")
        assert m.has_index(0)
        assert not m.has_index(1)
        assert not m.has_index(-1)

    def test_get_does_not_allocate(self):
        m = IndexMap()
        assert m.get("a") is None
        assert len(m) == 0
        m.index_of("a")
        assert m.get("a") == 0

    def test_all_ids_in_allocation_order(self):
        m = IndexMap()
        for s in ["c", "a", "b", "a"]:
            m.index_of(s)
        assert m.all_ids() == ["c", "a", "b"]
        assert list(m) == ["c", "a", "b"]
        assert m.ids_of([2, 0]) == ["b", "c"]

    def test_all_ids_returns_a_copy(self):
        m = IndexMap()
        m.index_of("a")
        m.all_ids().append("z")
        assert m.all_ids() == ["a"]

    @pytest.mark.parametrize("bad", [0, 5, -1])
    def test_unknown_index_raises(self, bad):
        m = IndexMap()
        if bad == 5:
            m.index_of("a")
        with pytest.raises(NotFoundError) as exc:
            m.id_of(bad)
        assert exc.value.kind == "index"
        assert exc.value.ids == (bad,)
        assert str(bad) in str(exc.value)

    def test_copy_is_independent(self):
        m = IndexMap()
        m.index_of("a")
        c = m.copy()
        c.index_of("b")
        assert m.all_ids() == ["a"]
        assert c.all_ids() == ["a", "b"]
