#!/usr/bin/env python3
"""
Demo: Congestion-Driven Rewiring

Runs the simulation headless and shows how traffic reshapes the network:
1. Build a 50-node sphere graph
2. Release 150 carriers
3. Run until edges start breaking and rewiring
4. Plot the final frame and the hop / rewire history

Output: output/demo_congestion/
"""

import logging
from pathlib import Path

import numpy as np
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

from carriersim.core import CarrierPool, SimulationClock, SimulationConfig, ViewState
from carriersim.loader import create_sphere_graph
from carriersim.logging_config import setup_logging
from carriersim.viz import plot_congestion_history, plot_frame, save_figure


def main():
    setup_logging(logging.INFO)
    rng = np.random.default_rng(42)
    output_dir = Path("output/demo_congestion")

    print("=" * 60)
    print("  CONGESTION-DRIVEN REWIRING")
    print("=" * 60)

    config = SimulationConfig(break_threshold=5, n_carriers=150)
    graph = create_sphere_graph(n_nodes=50, k_neighbors=3, radius=config.sphere_size)
    pool = CarrierPool.spawn(graph, config.n_carriers, rng)
    clock = SimulationClock(graph=graph, pool=pool, view=ViewState(), rng=rng, config=config)

    print(f"\n1. Setup:")
    print(f"   Nodes: {graph.n_nodes}, edges: {graph.n_edges}")
    print(f"   Carriers: {len(pool)}, break threshold: {config.break_threshold}")

    print("\n2. Running 600 ticks...")
    summary = clock.run(600)
    for key, value in summary.items():
        print(f"   {key}: {value}")

    print("\n3. Plotting...")
    fig, axes = plt.subplots(1, 2, figsize=(16, 8))
    plot_frame(clock.snapshot(), ax=axes[0], show_synthetic=True, title=f"Tick {clock.current_tick}")
    plot_congestion_history(clock.history, ax=axes[1])
    save_figure(fig, output_dir / "congestion.png")
    plt.close(fig)
    print(f"   Saved {output_dir / 'congestion.png'}")


if __name__ == "__main__":
    main()
