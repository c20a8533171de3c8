#!/usr/bin/env python3
"""
Writes a small sample network for quick testing
"""

import os

from mcmf.data.network_reader import read_network
from mcmf.algorithms.min_cost_flow import MinCostFlowEngine


def create_sample_network(path: str = "data/networks/network_sample.txt"):
    """Writes a 6-vertex sample network (source=0, sink=5) and solves it"""

    content = """6
0 1 10 1
0 2 8 2
1 3 5 3
1 4 8 1
2 3 3 1
2 4 2 2
3 5 10 1
4 5 10 2
"""

    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, 'w') as f:
        f.write(content)

    engine = MinCostFlowEngine(read_network(path).network)
    max_flow = engine.max_flow()

    print(f"Sample network created: {path}")
    print("   6 nodes, source=0, sink=5")
    print(f"   Max flow: {max_flow}, min cost: {engine.total_cost}")


if __name__ == "__main__":
    create_sample_network()
