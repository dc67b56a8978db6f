class NotFoundError(KeyError):
    """A node, edge or index required by an operation does not exist.

    Subclasses ``KeyError`` so callers written against plain mapping lookups
    keep working.

    Attributes
    ----------
    kind : str
        ``"node"``, ``"edge"`` or ``"index"``.
    ids : tuple
        The offending identifier(s): one node ID, a ``(source, target)`` pair,
        or one index.
    op : str or None
        Name of the operation that failed.
    scope : str
        ``"graph"`` or ``"subgraph view"``.

    """

    def __init__(self, kind, ids, op=None, scope="graph"):
        self.kind = kind
        self.ids = tuple(ids)
        self.op = op
        self.scope = scope
        super().__init__(self._message())

    def _message(self):
        if self.kind == "edge":
            u, v = self.ids
            msg = f"Edge from '{u}' to '{v}' does not exist in the {self.scope}"
        elif self.kind == "index":
            msg = f"No ID found for index: {self.ids[0]}"
        else:
            msg = f"Node '{self.ids[0]}' does not exist in the {self.scope}"
        if self.op:
            msg += f" ({self.op})"
        return msg

    def __str__(self):
        # KeyError.__str__ would repr() the message
        return self._message()
