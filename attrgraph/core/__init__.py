from ._index import IndexMap
from .contracts import GraphReader, MutableGraph
from .errors import NotFoundError
from .graph import CacheManager, Graph
from .structure import Edge, EdgeType
from .views import SubgraphView

__all__ = [
    "CacheManager",
    "Edge",
    "EdgeType",
    "Graph",
    "GraphReader",
    "IndexMap",
    "MutableGraph",
    "NotFoundError",
    "SubgraphView",
]
