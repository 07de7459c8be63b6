"""Integration tests: blocks -> power maps -> masks -> thermal map"""

import logging
import math
from pathlib import Path

import numpy as np
import pytest

from powerblur.config_loader import get_analyzer_config
from powerblur.core.block import create_blocks_from_floorplan_config
from powerblur.models.config import (
    GridConfig,
    MaskParameters,
    PowerBlurringConfig,
    ThermalAnalyzerConfig,
    load_floorplan_config,
)
from powerblur.solvers.thermal_analyzer import ThermalAnalyzer

FLOORPLAN = Path(__file__).parents[2] / "configs" / "floorplans" / "two_die_stack.yaml"


def test_single_block_full_outline_scenario(small_analyzer, make_block):
    """One block covering a 10x10 outline heats the chip uniformly"""
    block = make_block("chip", 0.0, 0.0, 10.0, 10.0, 5.0)

    small_analyzer.generate_power_maps(1, [block], 10.0, 10.0)

    np.testing.assert_allclose(small_analyzer.power_maps[0, 1:5, 1:5], 5.0)

    max_temp = small_analyzer.perform_power_blurring(1)
    thermal_map = small_analyzer.thermal_map
    room = small_analyzer.config.grid.room_temperature_k

    assert np.all(thermal_map > room)
    np.testing.assert_allclose(thermal_map, thermal_map[0, 0])
    assert thermal_map[1:3, 1:3].min() >= thermal_map[0, 0] - 1e-9
    assert max_temp == pytest.approx(thermal_map.max())


def test_full_outline_without_extension_is_hotter_in_center(small_analyzer, make_block):
    block = make_block("chip", 0.0, 0.0, 10.0, 10.0, 5.0)

    small_analyzer.generate_power_maps(
        1, [block], 10.0, 10.0, extend_boundary_blocks_into_padding_zone=False
    )
    small_analyzer.perform_power_blurring(1)
    thermal_map = small_analyzer.thermal_map

    assert thermal_map[1, 1] > thermal_map[0, 0]
    assert small_analyzer.grid.hotspot_index() in {(1, 1), (1, 2), (2, 1), (2, 2)}


def test_zero_power_gives_room_temperature(small_analyzer):
    small_analyzer.generate_power_maps(1, [], 10.0, 10.0)

    max_temp = small_analyzer.perform_power_blurring(1)

    assert max_temp == small_analyzer.config.grid.room_temperature_k


def test_normalization_round_trip(small_analyzer, make_block):
    """Capturing a baseline and normalizing the same inputs gives exactly 1.0"""
    blocks = [
        make_block("a", 0.0, 0.0, 4.0, 6.0, 3.0),
        make_block("b", 5.0, 2.0, 3.0, 3.0, 1.0),
    ]
    small_analyzer.generate_power_maps(1, blocks, 10.0, 10.0)

    baseline = small_analyzer.capture_max_cost_temp(1)
    normalized = small_analyzer.perform_power_blurring(1, max_cost_temp=baseline)

    assert normalized == 1.0


def test_normalization_reflects_improvement(small_analyzer, make_block):
    hot = [make_block("a", 2.5, 2.5, 2.5, 2.5, 8.0)]
    cool = [make_block("a", 2.5, 2.5, 2.5, 2.5, 2.0)]

    small_analyzer.generate_power_maps(1, hot, 10.0, 10.0)
    baseline = small_analyzer.capture_max_cost_temp(1)

    small_analyzer.generate_power_maps(1, cool, 10.0, 10.0)
    cost = small_analyzer.perform_power_blurring(1, max_cost_temp=baseline)

    assert 0.0 < cost < 1.0


def test_zero_baseline_is_not_guarded(small_analyzer):
    small_analyzer.generate_power_maps(1, [], 10.0, 10.0)

    with pytest.warns(RuntimeWarning):
        cost = small_analyzer.perform_power_blurring(1, max_cost_temp=0.0)

    assert math.isinf(cost)


def test_calls_are_idempotent(small_analyzer, make_block):
    block = make_block("a", 1.0, 3.0, 4.0, 2.0, 2.0)

    small_analyzer.generate_power_maps(1, [block], 10.0, 10.0)
    first = small_analyzer.perform_power_blurring(1)
    first_map = small_analyzer.thermal_map.copy()

    small_analyzer.generate_power_maps(1, [block], 10.0, 10.0)
    second = small_analyzer.perform_power_blurring(1)

    assert first == second
    np.testing.assert_array_equal(first_map, small_analyzer.thermal_map)


def test_stacked_layers_add_heat(make_block):
    """Power on a second die raises the temperature estimate"""
    config = ThermalAnalyzerConfig(
        grid=GridConfig(thermal_map_dim=8, mask_center=2, padded_bins=2),
        mask=MaskParameters(impulse_factor=1.0, mask_boundary_value=0.1),
        blurring=PowerBlurringConfig(extend_boundary_blocks_into_padding_zone=False),
    )
    analyzer = ThermalAnalyzer(config)
    analyzer.init_power_maps(2, 8.0, 8.0)
    analyzer.init_thermal_masks(2)

    bottom = make_block("bottom", 3.0, 3.0, 2.0, 2.0, 1.0, layer=0)
    top = make_block("top", 3.0, 3.0, 2.0, 2.0, 1.0, layer=1)

    analyzer.generate_power_maps(2, [bottom], 8.0, 8.0)
    single = analyzer.perform_power_blurring(2)

    analyzer.generate_power_maps(2, [bottom, top], 8.0, 8.0)
    stacked = analyzer.perform_power_blurring(2)

    assert stacked > single


def test_requires_initialization(small_grid_config, make_block):
    analyzer = ThermalAnalyzer(ThermalAnalyzerConfig(grid=small_grid_config))
    block = make_block("a", 2.5, 2.5, 2.5, 2.5, 1.0)

    with pytest.raises(ValueError):
        analyzer.generate_power_maps(1, [block], 10.0, 10.0)

    analyzer.init_power_maps(1, 10.0, 10.0)
    analyzer.generate_power_maps(1, [block], 10.0, 10.0)

    with pytest.raises(ValueError):
        analyzer.perform_power_blurring(1)


def test_invalid_outline_fails_fast():
    analyzer = ThermalAnalyzer()

    with pytest.raises(ValueError):
        analyzer.init_power_maps(1, 0.0, 10.0)
    with pytest.raises(ValueError):
        analyzer.init_power_maps(0, 10.0, 10.0)


def test_call_tracing_with_injected_logger(small_grid_config, caplog, make_block):
    logger = logging.getLogger("powerblur.test.analyzer")
    analyzer = ThermalAnalyzer(ThermalAnalyzerConfig(grid=small_grid_config), logger=logger)

    with caplog.at_level(logging.DEBUG, logger="powerblur.test.analyzer"):
        analyzer.init_power_maps(1, 10.0, 10.0)
        analyzer.init_thermal_masks(1, log=True)
        analyzer.generate_power_maps(1, [make_block("a", 0.0, 0.0, 1.0, 1.0, 1.0)], 10.0, 10.0)
        analyzer.perform_power_blurring(1)

    messages = [record.getMessage() for record in caplog.records]
    assert any(m.startswith("init_power_maps") for m in messages)
    assert any("Initializing thermal masks" in m for m in messages)
    assert any(m.startswith("perform_power_blurring") for m in messages)


def test_evaluate_example_floorplan():
    """Default configuration on the shipped two-die floorplan"""
    floorplan = load_floorplan_config(str(FLOORPLAN))
    analyzer = ThermalAnalyzer(get_analyzer_config())

    max_temp = analyzer.evaluate(floorplan)

    room = analyzer.config.grid.room_temperature_k
    assert max_temp > room
    assert analyzer.thermal_map.shape == (64, 64)
    assert analyzer.power_maps.shape == (2, 74, 74)
    assert analyzer.thermal_masks.shape == (2, 11)

    # Same inputs through the explicit API
    blocks = create_blocks_from_floorplan_config(floorplan)
    analyzer.generate_power_maps(2, blocks, floorplan.outline_x, floorplan.outline_y)
    assert analyzer.perform_power_blurring(2, max_cost_temp=max_temp) == 1.0


def test_non_square_outline_hotspot(small_grid_config, make_block):
    """Heat on the upper strip of a 10x20 chip peaks in the upper visible row"""
    analyzer = ThermalAnalyzer(ThermalAnalyzerConfig(grid=small_grid_config))
    analyzer.init_power_maps(1, 10.0, 20.0)
    analyzer.init_thermal_masks(1)

    strip = make_block("strip", 0.0, 15.0, 10.0, 5.0, 1.0)
    analyzer.generate_power_maps(
        1, [strip], 10.0, 20.0, extend_boundary_blocks_into_padding_zone=False
    )
    analyzer.perform_power_blurring(1)

    x, y = analyzer.grid.hotspot_index()
    assert y == 3
    assert x in {1, 2}
    assert analyzer.grid.hotspot_location()[1] == pytest.approx(17.5)
