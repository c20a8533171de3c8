import logging

import matplotlib
import pytest

from mcmf.algorithms.flow_network import FlowNetwork
from mcmf.utils.logging_utils import close_handlers

matplotlib.use("Agg")


def make_network(vertex_count, edges):
    network = FlowNetwork(vertex_count)
    for u, v, capacity, cost in edges:
        network.add_edge(u, v, capacity, cost)
    return network


@pytest.fixture
def diamond():
    """Two cost-5 routes from 0 to 3 with capacities 10 and 5."""
    return make_network(4, [(0, 1, 10, 2), (1, 3, 10, 3), (0, 2, 5, 1), (2, 3, 5, 4)])


@pytest.fixture
def crossing():
    """The cheapest first path uses 1 -> 2, which the second path must cancel."""
    return make_network(4, [(0, 1, 1, 1), (0, 2, 1, 3), (1, 2, 1, 1), (1, 3, 1, 3), (2, 3, 1, 1)])


@pytest.fixture
def restore_root_logger():
    yield
    close_handlers(logging.getLogger())
