# mcmf/algorithms/min_cost_flow.py
import logging
from typing import Iterator, List, NamedTuple, Optional, Tuple

import numpy as np

from mcmf.algorithms.errors import DegeneratePathError, NegativeCycleError
from mcmf.algorithms.flow_network import FlowNetwork

INF = float("inf")
NO_PREDECESSOR = -1


class EdgeFlow(NamedTuple):
    source: int
    target: int
    amount: int
    cost: int


class PathResult:
    """Outcome of one cheapest-path search: the predecessor trace and distances from the source."""

    def __init__(self, found: bool, predecessors: List[int], distances: List[float], source: int, sink: int):
        self.found = found
        self.predecessors = predecessors
        self.distances = distances
        self.source = source
        self.sink = sink

    @property
    def cost(self) -> int:
        """Per-unit cost of the path."""
        if not self.found:
            raise DegeneratePathError("No augmenting path was found, the path has no cost")
        return int(self.distances[self.sink])

    def edges(self) -> List[Tuple[int, int]]:
        """Edges of the path in source-to-sink order."""
        if not self.found:
            raise DegeneratePathError("No augmenting path was found")

        path = []
        v = self.sink
        while v != self.source:
            u = self.predecessors[v]
            if u == NO_PREDECESSOR or len(path) >= len(self.predecessors):
                raise DegeneratePathError(f"Predecessor trace breaks at vertex {v}")
            path.append((u, v))
            v = u
        if not path:
            raise DegeneratePathError("Augmenting path is empty")
        path.reverse()
        return path

    def vertices(self) -> List[int]:
        edges = self.edges()
        return [edges[0][0]] + [v for _, v in edges]

    def __repr__(self) -> str:
        if not self.found:
            return "PathResult(found=False)"
        return f"PathResult(found=True, path={self.vertices()}, cost={self.cost})"


class MinCostFlowEngine:
    """
    Successive cheapest augmenting paths over a FlowNetwork.

    Each search is a Bellman-Ford relaxation over the residual edges, which
    handles the negative costs of reverse edges. The network is mutated in
    place by `augment`, `max_flow` and `report_flow_per_edge`.
    """

    def __init__(self, network: FlowNetwork, logger: Optional[logging.Logger] = None,
                 detect_negative_cycles: bool = True):
        self.network = network
        self.logger = logger or logging.getLogger(__name__)
        self.detect_negative_cycles = detect_negative_cycles

        self.total_flow = 0
        self.total_cost = 0
        self.augmentations = 0

    def find_augmenting_path(self) -> PathResult:
        """Cheapest source-to-sink path over edges with positive residual capacity."""
        network = self.network
        n = network.vertex_count
        source, sink = network.source, network.sink

        predecessors = [NO_PREDECESSOR] * n
        distances = [INF] * n
        distances[source] = 0

        if source == sink:
            return PathResult(False, predecessors, distances, source, sink)

        # self-loops never lie on a path
        neighbours = [
            [v for v in np.flatnonzero(row > 0).tolist() if v != u]
            for u, row in enumerate(network.residual)
        ]
        costs = network.cost.tolist()

        def relax() -> bool:
            updated = False
            for u in range(n):
                if distances[u] == INF:
                    continue
                for v in neighbours[u]:
                    candidate = distances[u] + costs[u][v]
                    if candidate < distances[v]:
                        distances[v] = candidate
                        predecessors[v] = u
                        updated = True
            return updated

        converged = False
        for _ in range(n - 1):
            if not relax():
                converged = True
                break

        if not converged and self.detect_negative_cycles and relax():
            raise NegativeCycleError(
                "Residual graph contains a negative-cost cycle reachable from the source"
            )

        found = distances[sink] != INF
        return PathResult(found, predecessors, distances, source, sink)

    def bottleneck(self, path: PathResult) -> int:
        residual = self.network.residual
        return min(int(residual[u][v]) for u, v in path.edges())

    def augment(self, path: PathResult, amount: int):
        residual = self.network.residual
        for u, v in path.edges():
            residual[u][v] -= amount
            residual[v][u] += amount

    def max_flow(self) -> int:
        """Augments along cheapest paths until none is left and returns the total flow."""
        while True:
            path = self.find_augmenting_path()
            if not path.found:
                break

            amount = self.bottleneck(path)
            self.augment(path, amount)

            self.total_flow += amount
            self.total_cost += amount * path.cost
            self.augmentations += 1
            self.logger.debug(
                f"Augmentation {self.augmentations}: path {path.vertices()} "
                f"carries {amount} at unit cost {path.cost}"
            )

        self.logger.debug(
            f"No augmenting path left after {self.augmentations} augmentations, "
            f"total flow {self.total_flow}, total cost {self.total_cost}"
        )
        return self.total_flow

    def report_flow_per_edge(self) -> Iterator[EdgeFlow]:
        """
        Draining walk over cheapest paths.

        Every edge of each path is reported with whatever capacity it has left
        and is then zeroed, instead of being reduced by the path bottleneck. The
        result is an approximate account of flow per edge, useful as a
        diagnostic only. Consumes the network's residual capacity.
        """
        while True:
            path = self.find_augmenting_path()
            if not path.found:
                return
            for u, v in path.edges():
                residual = self.network.residual
                amount = int(residual[u][v])
                residual[u][v] = 0
                yield EdgeFlow(u, v, amount, self.network.edge_cost(u, v))

    def edge_flows(self) -> List[EdgeFlow]:
        """Exact flow on every original edge, derived from original minus residual capacity."""
        residual = self.network.residual
        flows = []
        for u, v, capacity, cost in self.network.edges():
            amount = max(capacity - int(residual[u][v]), 0)
            flows.append(EdgeFlow(u, v, amount, cost))
        return flows

    def flow_cost(self) -> int:
        return sum(flow.amount * flow.cost for flow in self.edge_flows())


def compute_max_flow(network: FlowNetwork, detect_negative_cycles: bool = True) -> int:
    return MinCostFlowEngine(network, detect_negative_cycles=detect_negative_cycles).max_flow()


def report_flow_per_edge(network: FlowNetwork, detect_negative_cycles: bool = True) -> Iterator[EdgeFlow]:
    return MinCostFlowEngine(network, detect_negative_cycles=detect_negative_cycles).report_flow_per_edge()
