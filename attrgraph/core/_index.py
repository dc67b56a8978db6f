import sys

from .errors import NotFoundError


class IndexMap:
    """Bidirectional mapping between node IDs and dense row indices (0..n-1).

    Indices are handed out in first-seen order and never reused or renumbered.
    This is the only string-keyed lookup in a graph; every other structure is
    addressed by index.
    """

    def __init__(self):
        self._id_to_idx = {}  # node_id -> index
        self._idx_to_id = []  # index -> node_id

    # ==================== ID -> Index ====================

    def index_of(self, node_id):
        """Return the index for ``node_id``, allocating the next one if unseen."""
        idx = self._id_to_idx.get(node_id)
        if idx is None:
            # Intern for cheaper dict ops
            if isinstance(node_id, str):
                node_id = sys.intern(node_id)
            idx = len(self._idx_to_id)
            self._id_to_idx[node_id] = idx
            self._idx_to_id.append(node_id)
        return idx

    def get(self, node_id, default=None):
        """Return the index for ``node_id`` without allocating."""
        return self._id_to_idx.get(node_id, default)

    # ==================== Index -> ID ====================

    def id_of(self, index):
        """Map an index back to its node ID.

        Raises
        ------
        NotFoundError
            If ``index`` was never allocated.

        """
        if not 0 <= index < len(self._idx_to_id):
            raise NotFoundError("index", (index,), "id_of")
        return self._idx_to_id[index]

    def ids_of(self, indices):
        """Batch convert indices to node IDs."""
        idx_to_id = self._idx_to_id
        return [idx_to_id[i] for i in indices]

    # ==================== Utilities ====================

    def has_id(self, node_id) -> bool:
        return node_id in self._id_to_idx

    def has_index(self, index) -> bool:
        return 0 <= index < len(self._idx_to_id)

    def all_ids(self):
        """All known IDs in allocation order."""
        return list(self._idx_to_id)

    def copy(self):
        other = IndexMap()
        other._id_to_idx = dict(self._id_to_idx)
        other._idx_to_id = list(self._idx_to_id)
        return other

    def __contains__(self, node_id):
        return node_id in self._id_to_idx

    def __len__(self):
        return len(self._idx_to_id)

    def __iter__(self):
        return iter(self._idx_to_id)

    def __repr__(self):
        return f"IndexMap({len(self)} ids)"
