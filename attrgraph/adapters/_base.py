from abc import ABC, abstractmethod
from typing import Any

from ..core.contracts import GraphReader


class GraphExporter(ABC):
    """Exporter over the read-only graph contract.

    Implementations must only call :class:`GraphReader` methods, so any graph
    or view can be exported.
    """

    name = None

    @abstractmethod
    def export(self, graph: GraphReader) -> Any:
        pass

    def __call__(self, graph: GraphReader) -> Any:
        return self.export(graph)
