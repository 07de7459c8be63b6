"""
Padded power-map grid and thermal-map buffers.

This module provides the geometry shared by all layers of a stacked chip:
the bin pitch derived from the chip outline, the padding margin around the
visible area, bin boundary tables, and the working buffers that are
rebuilt on every analysis call.
"""

from typing import Dict, Optional, Tuple
import numpy as np
from ..models.config import GridConfig
from .geometry import Rect


class PowerMapGrid:
    """
    Square padded grid for power blurring.

    The visible chip area is discretized into thermal_map_dim bins per
    axis. Power maps extend it by padded_bins on each side so that the
    convolution mask never reads outside a map.

    Attributes:
        thermal_map_dim: Side length of the visible thermal map (bins)
        padded_bins: Padding margin on each side (bins)
        power_map_dim: thermal_map_dim + 2 * padded_bins
        dim_x, dim_y: Bin pitch along each axis
        blocks_offset_x, blocks_offset_y: Translation of chip coordinates
            into padded-grid coordinates
        padding_right_boundary_blocks_distance,
        padding_upper_boundary_blocks_distance: Max distance of a block's
            upper/right edge to the outline for extending it into padding
        bins_ll_x, bins_ll_y: Lower-left bin coordinates, length
            power_map_dim + 1; the last entry is the upper boundary
        bin_area: Area of one bin
        power_maps: (layers, power_map_dim, power_map_dim) array
        thermal_map: (thermal_map_dim, thermal_map_dim) array in K
    """

    def __init__(self, config: GridConfig):
        """
        Initialize grid dimensions from configuration.

        Geometry is undefined until configure() is called with an outline.

        Args:
            config: GridConfig instance with validated parameters
        """
        self.config = config
        self.thermal_map_dim = config.thermal_map_dim
        self.padded_bins = config.padded_bins
        self.power_map_dim = config.power_map_dim
        self.room_temperature_k = config.room_temperature_k

        self.layers = 0
        self.outline_x = 0.0
        self.outline_y = 0.0
        self.dim_x = 0.0
        self.dim_y = 0.0
        self.blocks_offset_x = 0.0
        self.blocks_offset_y = 0.0
        self.padding_right_boundary_blocks_distance = 0.0
        self.padding_upper_boundary_blocks_distance = 0.0
        self.bin_area = 0.0
        self.bins_ll_x = np.zeros(self.power_map_dim + 1, dtype=np.float64)
        self.bins_ll_y = np.zeros(self.power_map_dim + 1, dtype=np.float64)

        # Bins in the outer padded_bins margin on any axis
        self.padding_zone = np.ones((self.power_map_dim, self.power_map_dim), dtype=bool)
        core = slice(self.padded_bins, self.power_map_dim - self.padded_bins)
        self.padding_zone[core, core] = False

        self.power_maps = np.zeros((0, self.power_map_dim, self.power_map_dim), dtype=np.float64)
        self.thermal_map = np.full(
            (self.thermal_map_dim, self.thermal_map_dim),
            self.room_temperature_k,
            dtype=np.float64,
        )

    @property
    def is_configured(self) -> bool:
        """True once an outline has been set."""
        return self.layers > 0

    def configure(self, layers: int, outline_x: float, outline_y: float):
        """
        Derive the padded-grid geometry for a chip outline and allocate power maps.

        Must be called again whenever the outline or layer count changes.

        Args:
            layers: Number of stacked dies
            outline_x: Chip outline width
            outline_y: Chip outline height

        Raises:
            ValueError: If layers or outline dimensions are not positive
        """
        if layers <= 0:
            raise ValueError(f"Layer count must be positive, got {layers}")
        if outline_x <= 0 or outline_y <= 0:
            raise ValueError(
                f"Outline dimensions must be positive, got ({outline_x}, {outline_y})"
            )

        self.layers = layers
        self.outline_x = float(outline_x)
        self.outline_y = float(outline_y)

        self.power_maps = np.zeros(
            (layers, self.power_map_dim, self.power_map_dim), dtype=np.float64
        )

        # Scale bins to the thermal map, so padding doesn't distort block outlines
        self.dim_x = self.outline_x / self.thermal_map_dim
        self.dim_y = self.outline_y / self.thermal_map_dim

        self.blocks_offset_x = self.dim_x * self.padded_bins
        self.blocks_offset_y = self.dim_y * self.padded_bins

        limit = self.config.padding_zone_blocks_distance_limit
        self.padding_right_boundary_blocks_distance = limit * self.outline_x
        self.padding_upper_boundary_blocks_distance = limit * self.outline_y

        self.bin_area = self.dim_x * self.dim_y
        bins = np.arange(self.power_map_dim + 1, dtype=np.float64)
        self.bins_ll_x = bins * self.dim_x
        self.bins_ll_y = bins * self.dim_y

    def clear_power_maps(self):
        """Reset all power maps to zero (this also zeroes the padding)."""
        self.power_maps.fill(0.0)

    def reset_thermal_map(self):
        """Reset the thermal map to room temperature."""
        self.thermal_map.fill(self.room_temperature_k)

    def bin_rect(self, x: int, y: int) -> Rect:
        """
        Real coordinates of a power-map bin in padded-grid space.

        Args:
            x, y: Bin indices in [0, power_map_dim)

        Returns:
            Rect spanning the bin
        """
        return Rect(
            self.bins_ll_x[x],
            self.bins_ll_y[y],
            self.bins_ll_x[x + 1],
            self.bins_ll_y[y + 1],
        )

    def is_padding_bin(self, x: int, y: int) -> bool:
        """True if the bin lies in the padding zone on any axis."""
        return bool(self.padding_zone[x, y])

    def thermal_map_bin_centers(self) -> Tuple[np.ndarray, np.ndarray]:
        """
        Chip coordinates of the visible bin centers along each axis.

        Returns:
            (x_centers, y_centers), each of length thermal_map_dim
        """
        idx = np.arange(self.thermal_map_dim, dtype=np.float64) + 0.5
        return idx * self.dim_x, idx * self.dim_y

    def hotspot_index(self) -> Tuple[int, int]:
        """Thermal-map indices (x, y) of the hottest visible bin."""
        flat = int(np.argmax(self.thermal_map))
        x, y = np.unravel_index(flat, self.thermal_map.shape)
        return int(x), int(y)

    def hotspot_location(self) -> Optional[Tuple[float, float]]:
        """
        Chip coordinates of the hottest bin's center.

        Returns:
            (x, y) or None if the grid is not configured
        """
        if not self.is_configured:
            return None
        x, y = self.hotspot_index()
        return (x + 0.5) * self.dim_x, (y + 0.5) * self.dim_y

    def get_statistics(self) -> Dict[str, float]:
        """
        Compute statistics for the thermal map.

        Returns:
            Dictionary with min, max, mean, std (K)
        """
        return {
            'min': float(np.min(self.thermal_map)),
            'max': float(np.max(self.thermal_map)),
            'mean': float(np.mean(self.thermal_map)),
            'std': float(np.std(self.thermal_map)),
        }

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"PowerMapGrid(thermal_map_dim={self.thermal_map_dim}, "
            f"power_map_dim={self.power_map_dim}, layers={self.layers}, "
            f"pitch=({self.dim_x}, {self.dim_y}))"
        )
