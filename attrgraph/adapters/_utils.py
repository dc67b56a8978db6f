# ---- shared helpers for exporters (keep in sync across adapters) ----
import json
from collections.abc import Mapping
from enum import Enum

import numpy as np


def collect_attribute_keys(graph, kind):
    """Ordered union of attribute keys over all nodes or all edges.

    Parameters
    ----------
    graph : GraphReader
    kind : {'node', 'edge'}

    Returns
    -------
    list[str]
        Keys in first-seen order (nodes in ``graph.nodes()`` order, edges in
        ``graph.edges()`` order).

    """
    if kind not in ("node", "edge"):
        raise ValueError(f"kind must be 'node' or 'edge', got {kind!r}")
    keys = {}
    if kind == "node":
        for node_id in graph.nodes():
            keys.update(dict.fromkeys(graph.node_attrs(node_id)))
    else:
        for edge in graph.edges():
            keys.update(dict.fromkeys(edge.attributes))
    return list(keys)


def _jsonable(v):
    if isinstance(v, Enum):
        return v.name
    if isinstance(v, np.generic):
        return v.item()
    if isinstance(v, Mapping):
        return {str(k): _jsonable(x) for k, x in v.items()}
    if isinstance(v, (list, tuple)):
        return [_jsonable(x) for x in v]
    if isinstance(v, (set, frozenset)):
        return sorted((_jsonable(x) for x in v), key=str)
    return v


def _serialize_value(v):
    """Coerce one attribute value to a scalar the XML writers accept.

    ``str``/``int``/``float``/``bool`` pass through, numpy scalars are
    unwrapped, enums become their name, containers become JSON text and
    anything else its ``str()``.
    """
    if isinstance(v, np.generic):
        v = v.item()
    if isinstance(v, Enum):
        return v.name
    if isinstance(v, (bool, int, float, str)):
        return v
    if isinstance(v, (Mapping, list, tuple, set, frozenset)):
        return json.dumps(_jsonable(v), default=str)
    return str(v)


def _serialize_attrs(attrs, rename=None):
    """Serialize an attribute dict for XML export; ``None`` values are dropped."""
    out = {}
    for k, v in attrs.items():
        if v is None:
            continue
        k = str(k)
        if rename and k in rename:
            k = "_" + k
        out[k] = _serialize_value(v)
    return out


# widening order for mixed-type attribute columns; bool only joins str
_KIND_RANK = {int: 0, float: 1, str: 2}


def _scalar_kind(v):
    if isinstance(v, bool):
        return bool
    if isinstance(v, int):
        return int
    if isinstance(v, float):
        return float
    return str


def _widen(a, b):
    if a is b:
        return a
    if a is bool or b is bool:
        return str
    return max(a, b, key=_KIND_RANK.__getitem__)


def _coerce_scalar(v, kind):
    if kind is str:
        if isinstance(v, bool):
            return "true" if v else "false"
        return v if isinstance(v, str) else str(v)
    if kind is float:
        return float(v)
    return v


def _unify_attr_types(rows):
    """Give every attribute name one scalar type across ``rows``, in place.

    ``rows`` are serialized attribute dicts (see :func:`_serialize_attrs`).
    Mixed columns widen ``int -> float -> str``; ``bool`` mixed with anything
    else becomes ``str``. Returns ``{name: type}``.
    """
    kinds = {}
    for row in rows:
        for k, v in row.items():
            kind = _scalar_kind(v)
            prev = kinds.get(k)
            kinds[k] = kind if prev is None else _widen(prev, kind)
    for row in rows:
        for k, v in row.items():
            row[k] = _coerce_scalar(v, kinds[k])
    return kinds
