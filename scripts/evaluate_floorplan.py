#!/usr/bin/env python3
"""
Evaluate a floorplan with the power-blurring thermal analyzer, then run a
random block-swap search that uses the normalized max temperature as cost.

Usage: evaluate_floorplan.py [floorplan.yaml] [iterations]
"""

import copy
import random
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from powerblur.config_loader import get_analyzer_config
from powerblur.core.block import create_blocks_from_floorplan_config
from powerblur.models.config import load_floorplan_config
from powerblur.solvers.thermal_analyzer import ThermalAnalyzer

DEFAULT_FLOORPLAN = Path(__file__).parent.parent / "configs" / "floorplans" / "two_die_stack.yaml"


def swap_power_densities(blocks, rng):
    """Swap the power densities of two random blocks on the same layer."""
    candidates = copy.deepcopy(blocks)
    layer = rng.choice([b.layer for b in candidates])
    same_layer = [b for b in candidates if b.layer == layer]
    if len(same_layer) < 2:
        return candidates

    a, b = rng.sample(same_layer, 2)
    a.power_density, b.power_density = b.power_density, a.power_density
    return candidates


def main():
    floorplan_path = Path(sys.argv[1]) if len(sys.argv) > 1 else DEFAULT_FLOORPLAN
    iterations = int(sys.argv[2]) if len(sys.argv) > 2 else 50

    floorplan = load_floorplan_config(str(floorplan_path))
    layers = floorplan.layers
    outline_x, outline_y = floorplan.outline_x, floorplan.outline_y

    print("=" * 70)
    print(f"Floorplan: {floorplan.name} ({layers} layers, {outline_x}x{outline_y})")
    print("=" * 70)

    analyzer = ThermalAnalyzer(get_analyzer_config())
    analyzer.init_power_maps(layers, outline_x, outline_y)
    analyzer.init_thermal_masks(layers)

    blocks = create_blocks_from_floorplan_config(floorplan)
    analyzer.generate_power_maps(layers, blocks, outline_x, outline_y)

    baseline = analyzer.capture_max_cost_temp(layers)
    stats = analyzer.grid.get_statistics()
    hotspot = analyzer.grid.hotspot_location()

    print(f"Max temperature:  {stats['max']:.2f} K")
    print(f"Mean temperature: {stats['mean']:.2f} K (std {stats['std']:.2f} K)")
    print(f"Hotspot at:       ({hotspot[0]:.1f}, {hotspot[1]:.1f})")
    print(f"Blurring time:    {analyzer.blur_time * 1e3:.2f} ms")

    # Random search over power-density swaps, cost normalized to the baseline
    rng = random.Random(0)
    best_blocks, best_cost = blocks, 1.0

    print(f"\n{'Iter':>6} {'Cost':>10} {'Best':>10}")
    print("-" * 30)

    for iteration in range(iterations):
        candidate = swap_power_densities(best_blocks, rng)
        analyzer.generate_power_maps(layers, candidate, outline_x, outline_y)
        cost = analyzer.perform_power_blurring(layers, max_cost_temp=baseline)

        if cost < best_cost:
            best_blocks, best_cost = candidate, cost

        if iteration % 10 == 0 or iteration == iterations - 1:
            print(f"{iteration:>6} {cost:>10.4f} {best_cost:>10.4f}")

    print(f"\nBest normalized cost: {best_cost:.4f} "
          f"({best_cost * baseline:.2f} K vs {baseline:.2f} K baseline)")


if __name__ == "__main__":
    main()
