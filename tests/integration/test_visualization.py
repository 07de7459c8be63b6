"""Integration tests for Plotly figures built from analyzer buffers"""

import numpy as np
import plotly.graph_objects as go

from powerblur.visualization.plotly_viz import ThermalMapVisualizer


def test_thermal_map_figure(small_analyzer, make_block):
    blocks = [make_block("a", 0.0, 0.0, 5.0, 5.0, 2.0), make_block("b", 5.0, 5.0, 5.0, 5.0, 1.0)]
    small_analyzer.generate_power_maps(1, blocks, 10.0, 10.0)
    small_analyzer.perform_power_blurring(1)

    viz = ThermalMapVisualizer(small_analyzer.grid)
    fig = viz.plot_thermal_map(small_analyzer.thermal_map, blocks=blocks)

    assert isinstance(fig, go.Figure)
    assert len(fig.data) == 1
    assert np.shape(fig.data[0].z) == (4, 4)
    assert len(fig.layout.shapes) == 2


def test_power_maps_figure(small_analyzer):
    small_analyzer.generate_power_maps(1, [], 10.0, 10.0)

    viz = ThermalMapVisualizer(small_analyzer.grid)
    fig = viz.plot_power_maps(small_analyzer.power_maps)

    assert len(fig.data) == 1
    assert np.shape(fig.data[0].z) == (6, 6)
    # Visible-area outline
    assert len(fig.layout.shapes) == 1


def test_thermal_masks_figure(small_analyzer):
    masks = small_analyzer.init_thermal_masks(3)

    fig = ThermalMapVisualizer(small_analyzer.grid).plot_thermal_masks(masks)

    assert len(fig.data) == 3
    assert list(fig.data[0].x) == [-1, 0, 1]
