# mcmf/algorithms/flow_network.py
import logging
from typing import Iterator, Tuple

import numpy as np

from mcmf.algorithms.errors import ConstructionError, EdgeRangeError, InvalidEdgeError

logger = logging.getLogger(__name__)

INT64_MAX = int(np.iinfo(np.int64).max)


class FlowNetwork:
    """
    Dense matrix representation of a capacitated network with per-unit costs.

    `original_capacity` is the capacity as inserted and is never touched by
    augmentation. `residual` starts as a copy of it and is the only matrix the
    engine mutates: forward entries shrink and reverse entries grow as flow is
    pushed. `cost` is antisymmetric for every inserted pair so that reverse
    residual edges cancel the cost of the flow they undo.
    """

    def __init__(self, vertex_count: int):
        if isinstance(vertex_count, bool) or not isinstance(vertex_count, (int, np.integer)):
            raise ConstructionError(f"Vertex count must be an integer, got {vertex_count!r}")
        if vertex_count < 1:
            raise ConstructionError(f"Vertex count must be at least 1, got {vertex_count}")

        self.vertex_count = int(vertex_count)
        self.source = 0
        self.sink = self.vertex_count - 1

        shape = (self.vertex_count, self.vertex_count)
        try:
            self._original = np.zeros(shape, dtype=np.int64)
            self.residual = np.zeros(shape, dtype=np.int64)
            self.cost = np.zeros(shape, dtype=np.int64)
        except (ValueError, OverflowError, MemoryError) as e:
            raise ConstructionError(
                f"Cannot allocate matrices for {self.vertex_count} vertices: {e}"
            ) from e

    @property
    def original_capacity(self) -> np.ndarray:
        """Read-only view of the capacities as inserted."""
        view = self._original.view()
        view.flags.writeable = False
        return view

    def _check_vertex(self, vertex: int, role: str):
        if not 0 <= vertex < self.vertex_count:
            raise EdgeRangeError(
                f"Edge {role} {vertex} out of range [0, {self.vertex_count})"
            )

    def add_edge(self, u: int, v: int, capacity: int, cost: int):
        """Record the directed edge u -> v. Reverse capacity is left untouched."""
        self._check_vertex(u, "source")
        self._check_vertex(v, "destination")
        if capacity < 0:
            raise InvalidEdgeError(f"Edge {u} -> {v} has negative capacity {capacity}")
        if capacity > INT64_MAX or abs(cost) > INT64_MAX:
            raise InvalidEdgeError(
                f"Edge {u} -> {v} capacity {capacity} or cost {cost} exceeds the 64-bit range"
            )

        if u == v:
            # never on an augmenting path; a zero cost keeps cost[u][u] == -cost[u][u]
            logger.debug(f"Self-loop on vertex {u} recorded with cost 0")
            self._original[u][u] = capacity
            self.residual[u][u] = capacity
            self.cost[u][u] = 0
            return

        if self._original[v][u] > 0 and self.cost[v][u] != -cost:
            logger.warning(
                f"Edge {u} -> {v} (cost {cost}) overrides the cost of the opposite edge {v} -> {u}"
            )

        self._original[u][v] = capacity
        self.residual[u][v] = capacity
        self.cost[u][v] = cost
        self.cost[v][u] = -cost

    def capacity(self, u: int, v: int) -> int:
        return int(self.residual[u][v])

    def edge_cost(self, u: int, v: int) -> int:
        return int(self.cost[u][v])

    def edges(self) -> Iterator[Tuple[int, int, int, int]]:
        """Yields (u, v, capacity, cost) for every inserted edge with positive capacity."""
        for u, v in zip(*np.nonzero(self._original > 0)):
            yield int(u), int(v), int(self._original[u][v]), int(self.cost[u][v])

    def edge_count(self) -> int:
        return int(np.count_nonzero(self._original > 0))

    def flow_matrix(self) -> np.ndarray:
        """Net flow pushed so far: original capacity minus residual capacity."""
        return self._original - self.residual

    def source_capacity(self) -> int:
        return int(self._original[self.source].sum())

    def sink_capacity(self) -> int:
        return int(self._original[:, self.sink].sum())

    def reset(self):
        """Discards all flow, restoring residual capacities from the original snapshot."""
        self.residual = self._original.copy()

    def __repr__(self) -> str:
        return (
            f"FlowNetwork(vertices={self.vertex_count}, edges={self.edge_count()}, "
            f"source={self.source}, sink={self.sink})"
        )


def build_network(vertex_count: int) -> FlowNetwork:
    return FlowNetwork(vertex_count)
