# mcmf/data/network_reader.py
import os
import re
import logging
import networkx as nx
from typing import Dict, Any, List, Tuple

from mcmf.algorithms.errors import FlowError, MalformedNetworkError, NegativeCycleError
from mcmf.algorithms.flow_network import FlowNetwork

logger = logging.getLogger(__name__)

INTEGER_TOKEN = re.compile(r"[+-]?\d+")


class NetworkData:
    """A container for the flow network and its metadata."""
    def __init__(self, network: FlowNetwork, info: Dict[str, Any]):
        self.network = network
        self.source = network.source
        self.sink = network.sink
        self.info = info

    def get_max_possible_flow(self) -> int:
        """Returns the trivial upper bound on the flow, capped by source/sink capacity."""
        return min(self.info.get('total_source_capacity', 0), self.info.get('total_sink_capacity', 0))


def parse_network(text: str, name: str = "<string>") -> FlowNetwork:
    """
    Parses a graph description: the vertex count followed by `u v capacity cost`
    quadruples, whitespace-delimited, up to the end of the input.
    """
    tokens = text.split()
    if not tokens:
        raise MalformedNetworkError(f"{name}: empty graph description")

    for token in tokens:
        if not INTEGER_TOKEN.fullmatch(token):
            raise MalformedNetworkError(f"{name}: non-integer token {token!r}")
    values = [int(token) for token in tokens]

    vertex_count, edge_values = values[0], values[1:]
    if len(edge_values) % 4 != 0:
        raise MalformedNetworkError(
            f"{name}: trailing incomplete edge, {len(edge_values) % 4} value(s) left over"
        )

    try:
        network = FlowNetwork(vertex_count)
        for u, v, capacity, cost in _quadruples(edge_values):
            network.add_edge(u, v, capacity, cost)
    except FlowError as e:
        raise MalformedNetworkError(f"{name}: {e}") from e

    return network


def _quadruples(values: List[int]) -> List[Tuple[int, int, int, int]]:
    return [tuple(values[i:i + 4]) for i in range(0, len(values), 4)]


def read_network(filepath: str) -> NetworkData:
    """
    Reads a network file and returns a NetworkData object.
    """
    if not os.path.exists(filepath):
        raise FileNotFoundError(f"File not found: {filepath}")

    with open(filepath, 'r') as file:
        network = parse_network(file.read(), name=os.path.basename(filepath))

    info = {
        'filename': os.path.basename(filepath),
        'num_nodes': network.vertex_count,
        'num_edges': network.edge_count(),
        'source': network.source,
        'sink': network.sink,
        'total_source_capacity': network.source_capacity(),
        'total_sink_capacity': network.sink_capacity(),
    }
    logger.debug(f"Loaded {network!r} from {filepath}")
    return NetworkData(network, info)


def to_networkx(network: FlowNetwork) -> nx.DiGraph:
    """Builds a DiGraph of the original edges with `capacity` and `weight` attributes, without self-loops."""
    graph = nx.DiGraph()
    graph.add_nodes_from(range(network.vertex_count))
    for u, v, capacity, cost in network.edges():
        if u == v:
            continue
        graph.add_edge(u, v, capacity=capacity, weight=cost)
    return graph


def compute_reference_max_flow(network_data: NetworkData) -> Tuple[int, int]:
    """Computes the max flow and its minimum cost with networkx for validation."""
    network = network_data.network
    if network.source == network.sink:
        return 0, 0
    graph = to_networkx(network)
    try:
        flow_dict = nx.max_flow_min_cost(graph, network.source, network.sink)
    except nx.NetworkXUnbounded as e:
        raise NegativeCycleError(f"Reference solver: {e}") from e
    flow_value = sum(flow_dict[network.source].values()) - sum(
        flow_dict[u][network.source] for u in graph.predecessors(network.source)
    )
    return int(flow_value), int(nx.cost_of_flow(graph, flow_dict))
