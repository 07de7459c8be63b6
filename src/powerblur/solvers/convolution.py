"""
Separable convolution of padded power maps with thermal masks.

The 2D convolution is performed as two 1D passes, horizontal then vertical.
No kernel flipping is required since masks are symmetric.

Index spaces:
- power maps and the horizontal buffer use padded indices [0, power_map_dim)
- the thermal map uses visible indices [0, thermal_map_dim), where visible
  index v corresponds to padded index v + padded_bins
"""

import numpy as np
from scipy.ndimage import correlate1d

from ..models.config import GridConfig


class ConvolutionEngine:
    """
    Two-pass separable power blurring.

    Since padded_bins >= mask_center, every mask tap for a visible bin lands
    inside the padded power map; zero-filled ('constant') borders are never
    read for the bins that are kept.
    """

    def __init__(self, config: GridConfig):
        """
        Initialize engine.

        Args:
            config: GridConfig with map and mask dimensions
        """
        self.thermal_map_dim = config.thermal_map_dim
        self.power_map_dim = config.power_map_dim
        self.padded_bins = config.padded_bins
        self.mask_center = config.mask_center
        self.mask_dim = config.mask_dim

        # Visible range in padded indices
        self.visible = slice(self.padded_bins, self.padded_bins + self.thermal_map_dim)

    def _check_inputs(self, power_maps: np.ndarray, thermal_masks: np.ndarray, layers: int):
        dim = self.power_map_dim
        if power_maps.shape[1:] != (dim, dim):
            raise ValueError(
                f"Power maps must be {dim}x{dim}, got {power_maps.shape[1:]}"
            )
        if thermal_masks.shape[1] != self.mask_dim:
            raise ValueError(
                f"Thermal masks must have {self.mask_dim} entries, got {thermal_masks.shape[1]}"
            )
        if layers > power_maps.shape[0] or layers > thermal_masks.shape[0]:
            raise ValueError(
                f"Requested {layers} layers, but got {power_maps.shape[0]} power maps "
                f"and {thermal_masks.shape[0]} thermal masks"
            )

    def horizontal_pass(self, power_maps: np.ndarray, thermal_masks: np.ndarray,
                        layers: int) -> np.ndarray:
        """
        Horizontal 1D convolution, summed over layers.

        Only visible columns x are computed, but every padded row y is
        walked, so the vertical pass can model heat in the padding zone.

        Args:
            power_maps: (layers, power_map_dim, power_map_dim) array
            thermal_masks: (layers, mask_dim) array
            layers: Number of layers to convolve

        Returns:
            (power_map_dim, power_map_dim) buffer; non-visible x rows stay zero
        """
        buffer = np.zeros((self.power_map_dim, self.power_map_dim), dtype=np.float64)

        for layer in range(layers):
            # buffer[x][y] += sum_m power_map[x + m - center][y] * mask[m]
            convolved = correlate1d(
                power_maps[layer], thermal_masks[layer], axis=0, mode='constant', cval=0.0
            )
            buffer[self.visible, :] += convolved[self.visible, :]

        return buffer

    def vertical_pass(self, buffer: np.ndarray, thermal_masks: np.ndarray,
                      layers: int, thermal_map: np.ndarray):
        """
        Vertical 1D convolution of the horizontal buffer into the thermal map.

        Each layer's mask is applied to the layer-summed horizontal buffer
        and accumulated into thermal_map in place.

        Args:
            buffer: Output of horizontal_pass
            thermal_masks: (layers, mask_dim) array
            layers: Number of layers to convolve
            thermal_map: (thermal_map_dim, thermal_map_dim) array, pre-seeded
        """
        rows = buffer[self.visible, :]

        for layer in range(layers):
            # thermal_map[x - pad][y - pad] += sum_m buffer[x][y + m - center] * mask[m]
            convolved = correlate1d(
                rows, thermal_masks[layer], axis=1, mode='constant', cval=0.0
            )
            thermal_map += convolved[:, self.visible]

    def perform_power_blurring(self, power_maps: np.ndarray, thermal_masks: np.ndarray,
                               layers: int, thermal_map: np.ndarray) -> float:
        """
        Convolve power maps with masks into the thermal map.

        Args:
            power_maps: (layers, power_map_dim, power_map_dim) array
            thermal_masks: (layers, mask_dim) array
            layers: Number of layers
            thermal_map: Thermal map seeded with room temperature; updated in place

        Returns:
            Maximum value of the thermal map

        Raises:
            ValueError: If array shapes don't match the grid configuration
        """
        self._check_inputs(power_maps, thermal_masks, layers)

        buffer = self.horizontal_pass(power_maps, thermal_masks, layers)
        self.vertical_pass(buffer, thermal_masks, layers, thermal_map)

        return float(np.max(thermal_map))
