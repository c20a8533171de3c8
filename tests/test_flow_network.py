import numpy as np
import pytest

from mcmf.algorithms.errors import ConstructionError, EdgeRangeError, FlowError, InvalidEdgeError
from mcmf.algorithms.flow_network import FlowNetwork, build_network


def test_construction_defaults():
    network = build_network(5)
    assert network.vertex_count == 5
    assert network.source == 0
    assert network.sink == 4
    for matrix in (network.original_capacity, network.residual, network.cost):
        assert matrix.shape == (5, 5)
        assert not matrix.any()


def test_single_vertex_network_is_valid():
    network = FlowNetwork(1)
    assert network.source == network.sink == 0


@pytest.mark.parametrize("count", [0, -3, 2.5, True, "4"])
def test_construction_rejects_invalid_vertex_count(count):
    with pytest.raises(ConstructionError):
        FlowNetwork(count)


def test_add_edge_sets_antisymmetric_cost_and_no_reverse_capacity():
    network = FlowNetwork(3)
    network.add_edge(0, 2, 7, 4)
    assert network.capacity(0, 2) == 7
    assert network.capacity(2, 0) == 0
    assert network.edge_cost(0, 2) == 4
    assert network.edge_cost(2, 0) == -4
    assert network.original_capacity[0][2] == 7


@pytest.mark.parametrize("u, v", [(-1, 1), (0, 3), (3, 0), (1, -2)])
def test_add_edge_out_of_range_does_not_mutate(u, v):
    network = FlowNetwork(3)
    network.add_edge(0, 1, 2, 2)
    before = (network.residual.copy(), network.cost.copy())

    with pytest.raises(EdgeRangeError) as excinfo:
        network.add_edge(u, v, 5, 1)

    assert isinstance(excinfo.value, FlowError)
    assert np.array_equal(network.residual, before[0])
    assert np.array_equal(network.cost, before[1])


def test_add_edge_rejects_negative_capacity():
    network = FlowNetwork(2)
    with pytest.raises(InvalidEdgeError):
        network.add_edge(0, 1, -1, 0)
    assert not network.residual.any()
    assert not network.cost.any()


def test_original_capacity_is_read_only(diamond):
    with pytest.raises(ValueError):
        diamond.original_capacity[0][1] = 99


def test_edges_and_capacity_totals(diamond):
    assert list(diamond.edges()) == [(0, 1, 10, 2), (0, 2, 5, 1), (1, 3, 10, 3), (2, 3, 5, 4)]
    assert diamond.edge_count() == 4
    assert diamond.source_capacity() == 15
    assert diamond.sink_capacity() == 15


def test_zero_capacity_edge_is_not_listed():
    network = FlowNetwork(2)
    network.add_edge(0, 1, 0, 5)
    assert list(network.edges()) == []
    assert network.edge_cost(1, 0) == -5


def test_reset_restores_residual(diamond):
    diamond.residual[0][1] = 0
    diamond.residual[1][0] = 10
    assert diamond.flow_matrix()[0][1] == 10

    diamond.reset()
    assert np.array_equal(diamond.residual, diamond.original_capacity)
    assert not diamond.flow_matrix().any()


def test_self_loop_is_recorded_with_zero_cost():
    network = FlowNetwork(3)
    network.add_edge(1, 1, 4, 2)
    assert network.capacity(1, 1) == 4
    assert network.edge_cost(1, 1) == 0
    assert list(network.edges()) == [(1, 1, 4, 0)]


@pytest.mark.parametrize("capacity, cost", [(2 ** 63, 1), (5, 2 ** 63), (5, -(2 ** 63)), (10 ** 23, 1)])
def test_add_edge_rejects_values_beyond_int64(capacity, cost):
    network = FlowNetwork(2)
    with pytest.raises(InvalidEdgeError):
        network.add_edge(0, 1, capacity, cost)
    assert not network.residual.any()
    assert not network.cost.any()


def test_add_edge_accepts_int64_extremes():
    network = FlowNetwork(2)
    network.add_edge(0, 1, 2 ** 63 - 1, -(2 ** 63 - 1))
    assert network.capacity(0, 1) == 2 ** 63 - 1
    assert network.edge_cost(1, 0) == 2 ** 63 - 1


@pytest.mark.parametrize("count", [10 ** 11, 10 ** 30])
def test_construction_rejects_unallocatable_vertex_count(count):
    with pytest.raises(ConstructionError):
        FlowNetwork(count)
