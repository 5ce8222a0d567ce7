"""
k-d tree over prey positions for nearest-neighbour lookup in 2D space.
"""

from typing import Iterable, List, Sequence, Tuple

import numpy as np
from scipy.spatial import cKDTree


# (payload index into the prey sequence, squared distance)
Neighbor = Tuple[int, float]

LEAFSIZE = 16


def _as_points(positions: Iterable) -> np.ndarray:
    points = np.array([(p[0], p[1]) for p in positions], dtype=np.float64)
    return points.reshape(-1, 2)


class SpatialIndex:
    """
    Immutable nearest-neighbour index over one snapshot of positions.

    Payloads are offsets into the position sequence the index was built
    from. They are only meaningful for that snapshot: once the population
    is replaced the index must be rebuilt, never reused.
    """

    def __init__(self, points: np.ndarray):
        self._points = points
        self._tree = cKDTree(points, leafsize=LEAFSIZE) if len(points) else None

    @classmethod
    def build(cls, positions: Iterable) -> "SpatialIndex":
        """
        Build an index from a sequence of 2D positions.

        Args:
            positions: Sequence of (x, y) pairs or pygame.Vector2

        Returns:
            New SpatialIndex whose payloads are positions' offsets
        """
        return cls(_as_points(positions))

    def __len__(self) -> int:
        return len(self._points)

    def k_nearest(self, query: Sequence[float], k: int) -> List[Neighbor]:
        """
        Find the k closest indexed points to a query point.

        Args:
            query: Query position (x, y)
            k: Maximum number of neighbours to return

        Returns:
            List of (index, squared distance) ordered by ascending distance,
            of length min(k, len(self))
        """
        k = min(k, len(self))
        if k <= 0:
            return []

        q = np.array([query[0], query[1]], dtype=np.float64)
        _, indices = self._tree.query(q, k=k)
        indices = np.atleast_1d(indices)
        offsets = self._points[indices] - q
        squared = np.einsum('ij,ij->i', offsets, offsets)
        return [(int(i), float(d)) for i, d in zip(indices, squared)]

    def k_nearest_batch(self, queries: Iterable, k: int) -> List[List[Neighbor]]:
        """
        Run k_nearest for every query point in one vectorised tree query.

        Args:
            queries: Sequence of query positions
            k: Maximum number of neighbours per query

        Returns:
            One neighbour list per query, each as k_nearest would return it
        """
        q = _as_points(queries)
        k = min(k, len(self))
        if k <= 0:
            return [[] for _ in range(len(q))]
        if len(q) == 0:
            return []

        _, indices = self._tree.query(q, k=k)
        indices = np.asarray(indices).reshape(len(q), k)
        offsets = self._points[indices] - q[:, np.newaxis, :]
        squared = np.einsum('ijk,ijk->ij', offsets, offsets)

        return [
            [(int(i), float(d)) for i, d in zip(row_idx, row_dist)]
            for row_idx, row_dist in zip(indices, squared)
        ]
