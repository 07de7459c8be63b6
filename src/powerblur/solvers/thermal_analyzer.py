"""
Thermal analyzer based on power blurring.

Estimates the temperature of a stacked chip by convolving per-layer power
maps with Gaussian thermal masks instead of solving the heat equation.
Intended as a cost function inside floorplanning loops: geometry and masks
are configured once, then power maps and the thermal map are rebuilt on
every call.

One analyzer instance owns mutable buffers and must not be shared between
threads; use one instance per thread.
"""

import logging
import time
from typing import Iterable, Optional

import numpy as np

from ..core.block import Block, create_blocks_from_floorplan_config
from ..core.grid import PowerMapGrid
from ..core.power_map import PowerMapBuilder
from ..core.thermal_mask import ThermalMaskGenerator
from ..models.config import FloorplanConfig, MaskParameters, ThermalAnalyzerConfig
from .convolution import ConvolutionEngine


class ThermalAnalyzer:
    """
    Power-blurring thermal analyzer.

    Typical use:

        analyzer = ThermalAnalyzer(config)
        analyzer.init_power_maps(layers, outline_x, outline_y)
        analyzer.init_thermal_masks(layers)
        analyzer.generate_power_maps(layers, blocks, outline_x, outline_y)
        baseline = analyzer.capture_max_cost_temp(layers)
        ...
        cost = analyzer.perform_power_blurring(layers, max_cost_temp=baseline)
    """

    def __init__(self, config: Optional[ThermalAnalyzerConfig] = None,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize thermal analyzer.

        Args:
            config: ThermalAnalyzerConfig; defaults for all sections if omitted
            logger: Optional logger for call tracing; defaults to the module logger
        """
        self.config = config if config is not None else ThermalAnalyzerConfig()
        self.logger = logger if logger is not None else logging.getLogger(__name__)

        self.grid = PowerMapGrid(self.config.grid)
        self.power_map_builder = PowerMapBuilder(self.grid)
        self.mask_generator = ThermalMaskGenerator(self.config.grid, logger=self.logger)
        self.engine = ConvolutionEngine(self.config.grid)

        self.thermal_masks: Optional[np.ndarray] = None

        # Statistics of the latest convolution
        self.blur_time = 0.0

    @property
    def power_maps(self) -> np.ndarray:
        """Padded power maps, (layers, power_map_dim, power_map_dim)."""
        return self.grid.power_maps

    @property
    def thermal_map(self) -> np.ndarray:
        """Thermal map of the latest convolution, (thermal_map_dim, thermal_map_dim) in K."""
        return self.grid.thermal_map

    def init_power_maps(self, layers: int, outline_x: float, outline_y: float):
        """
        Configure the padded grid for a chip outline and allocate power maps.

        Raises:
            ValueError: If layers or outline dimensions are not positive
        """
        self.logger.debug("init_power_maps(%s, %s, %s)", layers, outline_x, outline_y)
        self.grid.configure(layers, outline_x, outline_y)

    def init_thermal_masks(self, layers: int, parameters: Optional[MaskParameters] = None,
                           log: bool = False) -> np.ndarray:
        """
        Generate the thermal masks for all layer distances.

        Args:
            layers: Number of layers
            parameters: MaskParameters; config defaults if omitted
            log: Report progress at info level

        Returns:
            Masks array of shape (layers, mask_dim)
        """
        if parameters is None:
            parameters = self.config.mask

        self.logger.debug("init_thermal_masks(%s, %s)", layers, log)
        self.thermal_masks = self.mask_generator.init_thermal_masks(layers, parameters, log=log)
        return self.thermal_masks

    def generate_power_maps(self, layers: int, blocks: Iterable[Block],
                            outline_x: float, outline_y: float,
                            power_density_scaling_padding_zone: Optional[float] = None,
                            extend_boundary_blocks_into_padding_zone: Optional[bool] = None):
        """
        Rebuild the power maps from the placed blocks.

        Args:
            layers: Number of layers
            blocks: Placed blocks; blocks on layers outside [0, layers) are skipped
            outline_x, outline_y: Chip outline; must match init_power_maps()
            power_density_scaling_padding_zone: Config default if omitted
            extend_boundary_blocks_into_padding_zone: Config default if omitted

        Raises:
            ValueError: If power maps haven't been initialized
        """
        if not self.grid.is_configured:
            raise ValueError("Power maps not initialized; call init_power_maps() first")

        blurring = self.config.blurring
        if power_density_scaling_padding_zone is None:
            power_density_scaling_padding_zone = blurring.power_density_scaling_padding_zone
        if extend_boundary_blocks_into_padding_zone is None:
            extend_boundary_blocks_into_padding_zone = (
                blurring.extend_boundary_blocks_into_padding_zone
            )

        self.logger.debug(
            "generate_power_maps(%s, %s, %s, %s, %s)",
            layers, outline_x, outline_y,
            power_density_scaling_padding_zone, extend_boundary_blocks_into_padding_zone
        )
        self.power_map_builder.generate_power_maps(
            layers, blocks, outline_x, outline_y,
            power_density_scaling_padding_zone,
            extend_boundary_blocks_into_padding_zone,
        )

    def _blur(self, layers: int) -> float:
        if self.thermal_masks is None:
            raise ValueError("Thermal masks not initialized; call init_thermal_masks() first")

        start_time = time.time()
        self.grid.reset_thermal_map()
        max_temp = self.engine.perform_power_blurring(
            self.grid.power_maps, self.thermal_masks, layers, self.grid.thermal_map
        )
        self.blur_time = time.time() - start_time
        return max_temp

    def capture_max_cost_temp(self, layers: int) -> float:
        """
        Run power blurring and return its maximum as a normalization baseline.

        Typically called once on an initial floorplan; pass the result as
        max_cost_temp to later perform_power_blurring() calls.
        """
        max_temp = self._blur(layers)
        self.logger.debug("capture_max_cost_temp(%s) : %s", layers, max_temp)
        return max_temp

    def perform_power_blurring(self, layers: int,
                               max_cost_temp: Optional[float] = None) -> float:
        """
        Convolve power maps and masks into the thermal map.

        Args:
            layers: Number of layers
            max_cost_temp: Baseline from capture_max_cost_temp(); if given,
                the result is normalized by it. Must be non-zero.

        Returns:
            Maximum temperature (K), or its ratio to max_cost_temp

        Raises:
            ValueError: If thermal masks haven't been initialized
        """
        max_temp = self._blur(layers)

        if max_cost_temp is not None:
            max_temp = float(np.float64(max_temp) / max_cost_temp)

        self.logger.debug(
            "perform_power_blurring(%s, %s) : %s", layers, max_cost_temp, max_temp
        )
        return max_temp

    def evaluate(self, floorplan: FloorplanConfig,
                 max_cost_temp: Optional[float] = None) -> float:
        """
        One-shot convenience API: floorplan -> power maps -> max temperature.

        Reconfigures geometry and masks for the floorplan's outline and
        layer count.

        Args:
            floorplan: FloorplanConfig
            max_cost_temp: Optional normalization baseline

        Returns:
            Maximum (optionally normalized) temperature
        """
        layers = floorplan.layers
        self.init_power_maps(layers, floorplan.outline_x, floorplan.outline_y)
        if self.thermal_masks is None or self.thermal_masks.shape[0] != layers:
            self.init_thermal_masks(layers)

        blocks = create_blocks_from_floorplan_config(floorplan)
        self.generate_power_maps(layers, blocks, floorplan.outline_x, floorplan.outline_y)
        return self.perform_power_blurring(layers, max_cost_temp=max_cost_temp)

    def __repr__(self) -> str:
        """String representation."""
        return f"ThermalAnalyzer(grid={self.grid!r})"
