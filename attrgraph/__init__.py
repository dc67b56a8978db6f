"""attrgraph: single import, full API."""
from __future__ import annotations

from importlib import import_module
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _pkg_version
from typing import Any

from .core import (
    Edge,
    EdgeType,
    Graph,
    GraphReader,
    IndexMap,
    MutableGraph,
    NotFoundError,
    SubgraphView,
)

# Lazily exposed submodules (imported on first attribute access)
_lazy_submodules = {
    "adapters": "attrgraph.adapters",
    "core": "attrgraph.core",
    "cytoscape": "attrgraph.adapters.cytoscape",
    "graphml": "attrgraph.adapters.GraphML_adapter",
    "networkx": "attrgraph.adapters.networkx",
    "dataframe": "attrgraph.adapters.dataframe_adapter",
}

# Curated top-level symbols (lazy). name -> (module, attribute)
_lazy_symbols: dict[str, tuple[str, str]] = {
    # Cytoscape.js elements
    "to_cytoscape": ("attrgraph.adapters.cytoscape", "to_cytoscape"),
    # GraphML / GEXF
    "to_graphml": ("attrgraph.adapters.GraphML_adapter", "to_graphml"),
    "to_gexf": ("attrgraph.adapters.GraphML_adapter", "to_gexf"),
    # NetworkX
    "to_nx": ("attrgraph.adapters.networkx", "to_nx"),
    "from_nx": ("attrgraph.adapters.networkx", "from_nx"),
    # Polars tables
    "to_dataframes": ("attrgraph.adapters.dataframe_adapter", "to_dataframes"),
    "from_dataframes": ("attrgraph.adapters.dataframe_adapter", "from_dataframes"),
    # Registry
    "load_exporter": ("attrgraph.adapters", "load_exporter"),
    "available_exporters": ("attrgraph.adapters", "available_exporters"),
}

__all__ = sorted(
    set(list(_lazy_submodules) + list(_lazy_symbols))
    | {
        "Edge",
        "EdgeType",
        "Graph",
        "GraphReader",
        "IndexMap",
        "MutableGraph",
        "NotFoundError",
        "SubgraphView",
    }
)


def __getattr__(name: str) -> Any:  # PEP 562: lazy attribute resolution
    if name in _lazy_submodules:
        return import_module(_lazy_submodules[name])
    if name in _lazy_symbols:
        mod, attr = _lazy_symbols[name]
        return getattr(import_module(mod), attr)
    raise AttributeError(name)


def __dir__() -> list[str]:
    return sorted(list(globals().keys()) + list(__all__))


try:
    __version__ = _pkg_version("attrgraph")
except PackageNotFoundError:
    __version__ = "0.0.0"
