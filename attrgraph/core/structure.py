from dataclasses import dataclass, field
from enum import Enum


class EdgeType(str, Enum):
    """Edge type (DIRECTED, UNDIRECTED).

    Attributes:
        DIRECTED: Represents a directed edge
        UNDIRECTED: Represents an undirected edge
    """

    DIRECTED = "directed"
    UNDIRECTED = "undirected"

    @classmethod
    def of(cls, directed: bool) -> "EdgeType":
        return cls.DIRECTED if directed else cls.UNDIRECTED


@dataclass(frozen=True)
class Edge:
    """Immutable edge record: endpoints plus a snapshot of the attribute map.

    For undirected graphs ``source`` is the endpoint that sorts first.
    """

    source: str
    target: str
    attributes: dict = field(default_factory=dict, hash=False)

    def __iter__(self):
        # allows ``for u, v, attrs in graph.edges()``
        yield self.source
        yield self.target
        yield self.attributes

    def endpoints(self):
        return (self.source, self.target)
