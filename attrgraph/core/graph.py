import inspect
import json
import time
from datetime import UTC, datetime
from functools import wraps

import numpy as np
import polars as pl
import scipy.sparse as sp

from ._index import IndexMap
from .contracts import MutableGraph
from .errors import NotFoundError
from .structure import Edge, EdgeType


def _merge_attrs(attrs, attributes):
    merged = dict(attrs) if attrs else {}
    if attributes:
        merged.update(attributes)
    return merged


class CacheManager:
    """Cache manager for data derived from adjacency (edge list, sparse adjacency).

    Every structural mutation of the owning graph calls :meth:`invalidate`;
    entries are rebuilt lazily on the next read, never on write.
    """

    def __init__(self, graph):
        self._G = graph
        self._edges = None
        self._adjacency = {}  # weight key (or None) -> csr_matrix

    # ==================== Edge list ====================

    @property
    def edges(self):
        """Materialized list of :class:`Edge` records.
        Builds and caches on first access after a mutation.
        """
        if self._edges is None:
            self._edges = self._G._build_edges()
        return self._edges

    def has_edges(self) -> bool:
        """True if the edge list is cached and current."""
        return self._edges is not None

    # ==================== Adjacency ====================

    def adjacency(self, weight=None):
        """Sparse adjacency in CSR format, rows/cols in dense index order."""
        mat = self._adjacency.get(weight)
        if mat is None:
            mat = self._G._build_adjacency(weight)
            self._adjacency[weight] = mat
        return mat

    def has_adjacency(self, weight=None) -> bool:
        return weight in self._adjacency

    # ==================== Cache Management ====================

    def invalidate(self):
        """Mark every cached format stale."""
        self._edges = None
        self._adjacency.clear()

    def clear(self):
        """Clear all caches."""
        self.invalidate()

    def info(self):
        """Get cache status.

        Returns
        -------
        dict
            Status of each cached format

        """
        return {
            "edges": {
                "cached": self._edges is not None,
                "count": len(self._edges) if self._edges is not None else 0,
            },
            "adjacency": {
                "cached": bool(self._adjacency),
                "weights": sorted(self._adjacency, key=lambda k: (k is not None, str(k))),
                "nnz": sum(m.nnz for m in self._adjacency.values()),
            },
        }


class Graph(MutableGraph):
    """Mutable attributed graph over string node IDs, backed by dense integer indices.

    Each node ID is mapped once to a dense row index (see :class:`IndexMap`);
    adjacency and attributes are stored in per-index slots, so existence and
    adjacency checks never hash the ID more than once.

    Parameters
    ----------
    directed : bool, default True
        Whether edges are directed. Fixed for the lifetime of the graph.
    history : bool, default True
        Record mutations in the in-memory history log. Every logged call
        binds its arguments, takes a timestamp and appends an event that is
        kept until :meth:`clear_history`; pass ``history=False`` for bulk
        builds.

    Notes
    -----
    - Directed graphs keep independent successor / predecessor sets.
    - Undirected graphs insert both ``u -> v`` and ``v -> u`` on every
      :meth:`add_edge`, so ``successors(x) == predecessors(x)`` for every node.
      Both entries share one attribute dict. A self-loop is a single entry.
    - :meth:`add_node` merges attributes (new keys win, old keys stay);
      :meth:`add_edge` and the ``set_*`` methods replace them.
    - Adjacency lists are returned sorted by Python ``str`` order (code point).

    See Also
    --------
    add_node, add_edge, edges, view

    """

    def __init__(self, directed=True, *, history=True):
        self._directed = bool(directed)

        # Entity mapping; the only string-keyed structure
        self._ids = IndexMap()

        # Per-index slots (dicts used as insertion-ordered sets)
        self._succ = []  # index -> {succ_index: None}
        self._pred = []  # index -> {pred_index: None}
        self._node_attrs = []  # index -> attribute dict
        self._edge_attrs = {}  # (u_index, v_index) -> attribute dict

        self._cache = CacheManager(self)

        # History and Timeline
        self._history_enabled = bool(history)
        self._history = []  # list[dict]
        self._version = 0
        self._history_clock0 = time.perf_counter_ns()
        self._install_history_hooks()  # wrap mutating methods

    # Construction helpers

    @classmethod
    def from_edge_list(cls, edges, directed=True, **kwargs):
        """Create a graph from ``(u, v)`` or ``(u, v, attrs)`` tuples.

        Parameters
        ----------
        edges : iterable of tuple
        directed : bool, default True
        **kwargs
            Passed to the constructor.

        Returns
        -------
        Graph

        """
        graph = cls(directed=directed, **kwargs)
        graph.add_edges(edges)
        return graph

    # Read contract

    @property
    def directed(self) -> bool:
        return self._directed

    @property
    def edge_type(self) -> EdgeType:
        return EdgeType.of(self._directed)

    def is_directed(self) -> bool:
        return self._directed

    def nodes(self):
        """All node IDs in insertion order."""
        return self._ids.all_ids()

    def edges(self):
        """All edges as :class:`Edge` records.

        Returns
        -------
        list[Edge]
            Edges in source-index order, then insertion order per source. For
            undirected graphs each logical edge appears once, oriented so
            that ``source <= target``.

        Notes
        -----
        The list is cached until the next mutation; every call returns a new
        list holding the cached records.

        """
        return list(self._cache.edges)

    def successors(self, node_id):
        """Direct successors of a node, sorted.

        Parameters
        ----------
        node_id : str

        Returns
        -------
        list[str]

        Raises
        ------
        NotFoundError
            If the node does not exist.

        """
        idx = self._require_node(node_id, "successors")
        return sorted(self._ids.ids_of(self._succ[idx]))

    def predecessors(self, node_id):
        """Direct predecessors of a node, sorted.

        Parameters
        ----------
        node_id : str

        Returns
        -------
        list[str]

        Raises
        ------
        NotFoundError
            If the node does not exist.

        """
        idx = self._require_node(node_id, "predecessors")
        return sorted(self._ids.ids_of(self._pred[idx]))

    def has_node(self, node_id) -> bool:
        return node_id in self._ids

    def has_edge(self, u, v) -> bool:
        ui = self._ids.get(u)
        vi = self._ids.get(v)
        if ui is None or vi is None:
            return False
        return vi in self._succ[ui]

    def node_attrs(self, node_id):
        idx = self._require_node(node_id, "node_attrs")
        return dict(self._node_attrs[idx])

    def edge_attrs(self, u, v):
        key = self._require_edge(u, v, "edge_attrs")
        return dict(self._edge_attrs[key])

    # Build graph

    def add_node(self, node_id, attrs=None, **attributes):
        """Add (or upsert) a node.

        Parameters
        ----------
        node_id : str
            Node ID. Existing nodes keep their index.
        attrs : dict, optional
            Attributes to merge in.
        **attributes
            More attributes; win over ``attrs`` on collision.

        Returns
        -------
        str
            The node ID (echoed).

        Notes
        -----
        Merge, not replace: supplied keys overwrite existing values, existing
        keys not supplied are kept. Use :meth:`set_node_attrs` to replace.

        """
        idx = self._ensure_node(node_id)
        merged = _merge_attrs(attrs, attributes)
        if merged:
            self._node_attrs[idx].update(merged)
        self._cache.invalidate()
        return node_id

    def add_edge(self, u, v, attrs=None, **attributes):
        """Add an edge ``u -> v``, creating missing endpoints.

        Parameters
        ----------
        u, v : str
            Source and target node IDs.
        attrs : dict, optional
            Edge attributes.
        **attributes
            More attributes; win over ``attrs`` on collision.

        Returns
        -------
        tuple[str, str]
            ``(u, v)``.

        Notes
        -----
        - Re-adding an existing edge replaces its attributes (no merge) and
          does not create a duplicate.
        - Undirected graphs also record ``v -> u`` with the same attribute
          dict, unless ``u == v``.

        """
        ui = self._ensure_node(u)
        vi = self._ensure_node(v)
        stored = _merge_attrs(attrs, attributes)

        self._succ[ui][vi] = None
        self._pred[vi][ui] = None
        self._edge_attrs[(ui, vi)] = stored

        if not self._directed and ui != vi:
            self._succ[vi][ui] = None
            self._pred[ui][vi] = None
            self._edge_attrs[(vi, ui)] = stored

        self._cache.invalidate()
        return (u, v)

    def add_nodes(self, nodes):
        """Add many nodes; items are IDs or ``(id, attrs)`` pairs.

        Returns
        -------
        list[str]

        """
        out = []
        for item in nodes:
            if isinstance(item, tuple) and len(item) == 2 and isinstance(item[1], dict):
                out.append(self.add_node(item[0], item[1]))
            else:
                out.append(self.add_node(item))
        return out

    def add_edges(self, edges):
        """Add many edges from ``(u, v)`` or ``(u, v, attrs)`` tuples."""
        out = []
        for item in edges:
            u, v, *rest = item
            out.append(self.add_edge(u, v, rest[0] if rest else None))
        return out

    # Attributes

    def set_node_attrs(self, node_id, attrs):
        """Replace all attributes of an existing node.

        Raises
        ------
        NotFoundError
            If the node does not exist.

        """
        idx = self._require_node(node_id, "set_node_attrs")
        self._node_attrs[idx] = dict(attrs)
        self._cache.invalidate()

    def set_edge_attrs(self, u, v, attrs):
        """Replace all attributes of an existing edge (both directions if undirected).

        Raises
        ------
        NotFoundError
            If the edge does not exist.

        """
        ui, vi = self._require_edge(u, v, "set_edge_attrs")
        stored = dict(attrs)
        self._edge_attrs[(ui, vi)] = stored
        if not self._directed and ui != vi:
            self._edge_attrs[(vi, ui)] = stored
        self._cache.invalidate()

    # Internals

    def _ensure_node(self, node_id):
        idx = self._ids.index_of(node_id)
        if idx == len(self._succ):
            self._succ.append({})
            self._pred.append({})
            self._node_attrs.append({})
        return idx

    def _require_node(self, node_id, op):
        idx = self._ids.get(node_id)
        if idx is None:
            raise NotFoundError("node", (node_id,), op)
        return idx

    def _require_edge(self, u, v, op):
        ui = self._ids.get(u)
        vi = self._ids.get(v)
        if ui is None or vi is None or vi not in self._succ[ui]:
            raise NotFoundError("edge", (u, v), op)
        return (ui, vi)

    def _build_edges(self):
        """INTERNAL: Rebuild the edge list from adjacency.

        Notes
        -----
        For undirected graphs only the entry with ``source <= target`` (by
        ``str`` order) is kept; self-loops are kept once.

        """
        ids = self._ids.all_ids()
        edge_attrs = self._edge_attrs
        directed = self._directed
        out = []
        for ui, succ in enumerate(self._succ):
            u = ids[ui]
            for vi in succ:
                v = ids[vi]
                if not directed and u > v:
                    continue
                out.append(Edge(u, v, dict(edge_attrs[(ui, vi)])))
        return out

    def _build_adjacency(self, weight=None):
        """INTERNAL: Build the CSR adjacency matrix (rows/cols = dense indices)."""
        n = len(self._succ)
        rows, cols, data = [], [], []
        for ui, succ in enumerate(self._succ):
            for vi in succ:
                rows.append(ui)
                cols.append(vi)
                if weight is None:
                    data.append(1.0)
                    continue
                w = self._edge_attrs[(ui, vi)].get(weight, 1.0)
                try:
                    data.append(float(w))
                except (TypeError, ValueError):
                    raise TypeError(f"weight must be numeric, got {type(w).__name__}") from None
        return sp.csr_matrix(
            (
                np.asarray(data, dtype=np.float64),
                (np.asarray(rows, dtype=np.int64), np.asarray(cols, dtype=np.int64)),
            ),
            shape=(n, n),
        )

    # Matrices / copying / accounting

    def adjacency_matrix(self, weight=None):
        """Sparse adjacency matrix.

        Parameters
        ----------
        weight : str, optional
            Edge attribute used as the entry value (missing -> 1.0). If None,
            every edge counts 1.0.

        Returns
        -------
        scipy.sparse.csr_matrix
            Shape ``(n, n)``; row and column ``i`` belong to ``idx.id_of(i)``.
            Symmetric for undirected graphs.

        Raises
        ------
        TypeError
            If a ``weight`` value is not numeric.

        """
        return self._cache.adjacency(weight)

    def copy(self):
        """Independent copy with the same IDs, index order and attributes.

        History is not copied.
        """
        new = Graph(directed=self._directed, history=self._history_enabled)
        new._ids = self._ids.copy()
        new._succ = [dict(s) for s in self._succ]
        new._pred = [dict(p) for p in self._pred]
        new._node_attrs = [dict(a) for a in self._node_attrs]
        # keep undirected pairs sharing one dict
        memo = {}
        for key, attrs in self._edge_attrs.items():
            copied = memo.get(id(attrs))
            if copied is None:
                copied = memo[id(attrs)] = dict(attrs)
            new._edge_attrs[key] = copied
        return new

    @property
    def idx(self):
        """The ID <-> index map."""
        return self._ids

    @property
    def cache(self):
        """The :class:`CacheManager`."""
        return self._cache

    def __len__(self):
        return len(self._ids)

    def __contains__(self, node_id):
        return node_id in self._ids

    def __repr__(self):
        kind = "directed" if self._directed else "undirected"
        return f"Graph({kind}, nodes={len(self)}, edges={self.number_of_edges()})"

    # History and Timeline

    def _utcnow_iso(self) -> str:
        return datetime.now(UTC).isoformat(timespec="microseconds").replace("+00:00", "Z")

    def _jsonify(self, x):
        # Make args/return JSON-safe & compact.
        if x is None or isinstance(x, (bool, int, float, str)):
            return x
        if isinstance(x, (set, frozenset)):
            return sorted(self._jsonify(v) for v in x)
        if isinstance(x, (list, tuple)):
            return [self._jsonify(v) for v in x]
        if isinstance(x, dict):
            return {str(k): self._jsonify(v) for k, v in x.items()}
        # NumPy scalars
        if isinstance(x, np.generic):
            return x.item()
        t = type(x).__name__
        return f"<<{t}>>"

    def _log_event(self, op: str, **fields):
        if not self._history_enabled:
            return
        self._version += 1
        evt = {
            "version": self._version,
            "ts_utc": self._utcnow_iso(),  # ISO-8601 with Z
            "mono_ns": time.perf_counter_ns() - self._history_clock0,
            "op": op,
        }
        for k, v in fields.items():
            evt[k] = self._jsonify(v)
        self._history.append(evt)

    def _log_mutation(self, name=None):
        def deco(fn):
            op = name or fn.__name__
            sig = inspect.signature(fn)

            @wraps(fn)
            def wrapper(*args, **kwargs):
                bound = sig.bind(*args, **kwargs)
                bound.apply_defaults()
                result = fn(*args, **kwargs)
                payload = {}
                for k, v in bound.arguments.items():
                    if k != "self":
                        payload[k] = v
                payload["result"] = result
                self._log_event(op, **payload)
                return result

            return wrapper

        return deco

    def _install_history_hooks(self):
        # Mutating methods to wrap. Add here if you add new mutators.
        to_wrap = ["add_node", "add_edge", "set_node_attrs", "set_edge_attrs"]
        for name in to_wrap:
            fn = getattr(self, name)
            # Avoid double-wrapping
            if getattr(fn, "__wrapped__", None) is None:
                setattr(self, name, self._log_mutation(name)(fn))

    def history(self, as_df: bool = False):
        """Return the append-only mutation history.

        Parameters
        ----------
        as_df : bool, default False
            If True, return a Polars DF [DataFrame]; otherwise return a list of dicts.

        Returns
        -------
        list[dict] or polars.DataFrame
            Each event includes: 'version', 'ts_utc', 'mono_ns' (monotonic
            nanoseconds since graph creation), 'op', the call arguments and
            'result'.

        """
        if as_df:
            # containers become JSON text so every column has one dtype
            rows = [
                {k: json.dumps(v) if isinstance(v, (dict, list)) else v for k, v in evt.items()}
                for evt in self._history
            ]
            return pl.DataFrame(rows, infer_schema_length=None)
        return list(self._history)

    def enable_history(self, flag: bool = True):
        """Enable or disable in-memory mutation logging."""
        self._history_enabled = bool(flag)

    def clear_history(self):
        """Clear the in-memory mutation log."""
        self._history.clear()

    def mark(self, label: str):
        """Insert a manual marker (``op='mark'``) into the mutation history."""
        self._log_event("mark", label=label)
