"""Shared fixtures for power-blurring tests."""

import numpy as np
import pytest

from powerblur.core.block import Block
from powerblur.core.geometry import Rect
from powerblur.models.config import (
    GridConfig,
    MaskParameters,
    PowerBlurringConfig,
    ThermalAnalyzerConfig,
)
from powerblur.solvers.thermal_analyzer import ThermalAnalyzer


@pytest.fixture
def small_grid_config():
    """4x4 thermal map, one padded bin per side (6x6 power maps), 3-entry masks."""
    return GridConfig(thermal_map_dim=4, mask_center=1, padded_bins=1)


@pytest.fixture
def mask_parameters():
    return MaskParameters(
        impulse_factor=1.0,
        impulse_factor_scaling_exponent=1.0,
        mask_boundary_value=0.1,
    )


@pytest.fixture
def small_analyzer(small_grid_config, mask_parameters):
    """Analyzer on the small grid, configured for a 10x10 single-layer chip."""
    config = ThermalAnalyzerConfig(
        grid=small_grid_config,
        mask=mask_parameters,
        blurring=PowerBlurringConfig(),
    )
    analyzer = ThermalAnalyzer(config)
    analyzer.init_power_maps(1, 10.0, 10.0)
    analyzer.init_thermal_masks(1)
    return analyzer


def _make_block(id, x, y, width, height, power_density, layer=0):
    return Block(id, Rect.from_origin_and_size(x, y, width, height), power_density, layer)


def _reference_power_blurring(power_maps, thermal_masks, layers, grid_config):
    """Direct nested-loop separable convolution, indexed like the padded grid."""
    P = grid_config.power_map_dim
    T = grid_config.thermal_map_dim
    pad = grid_config.padded_bins
    center = grid_config.mask_center

    tmp = np.zeros((P, P))
    thermal_map = np.full((T, T), grid_config.room_temperature_k)

    for layer in range(layers):
        for y in range(P):
            for x in range(pad, T + pad):
                for m in range(grid_config.mask_dim):
                    i = x + m - center
                    tmp[x][y] += power_maps[layer][i][y] * thermal_masks[layer][m]

    for layer in range(layers):
        for x in range(pad, T + pad):
            for y in range(pad, T + pad):
                for m in range(grid_config.mask_dim):
                    i = y + m - center
                    thermal_map[x - pad][y - pad] += tmp[x][i] * thermal_masks[layer][m]

    return thermal_map


@pytest.fixture
def make_block():
    """Factory for blocks given by lower-left corner and extent."""
    return _make_block


@pytest.fixture
def reference_power_blurring():
    """Nested-loop reference of the separable convolution."""
    return _reference_power_blurring
