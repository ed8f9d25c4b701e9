#!/usr/bin/env python3
"""
Demo: Interactive Network

Opens a window with the running simulation. Drag to rotate the network;
release to let it spin slowly on its own.

Pass two CSV files (positions with x,y,z and edges with src,dest) to use
your own graph; otherwise a 50-node sphere graph is generated.
"""

import logging
import sys

import numpy as np

from carriersim.core import CarrierPool, SimulationClock, SimulationConfig, ViewState
from carriersim.loader import create_sphere_graph, load_graph
from carriersim.logging_config import setup_logging
from carriersim.viz import NetworkAnimation


def main():
    setup_logging(logging.INFO)
    rng = np.random.default_rng()
    config = SimulationConfig()

    if len(sys.argv) == 3:
        graph = load_graph(sys.argv[1], sys.argv[2], scale=config.sphere_size)
    else:
        graph = create_sphere_graph(n_nodes=50, k_neighbors=3, radius=config.sphere_size)

    pool = CarrierPool.spawn(graph, config.n_carriers, rng)
    clock = SimulationClock(graph=graph, pool=pool, view=ViewState(), rng=rng, config=config)

    NetworkAnimation(clock).show()


if __name__ == "__main__":
    main()
