"""
Gaussian thermal masks for power blurring.

Each mask is the 1D component of the thermal impulse response of a point
source at a given layer distance. Masks are centered, i.e. f(x=0) sits in
the middle of the odd-length array, and are applied twice (horizontally
and vertically) during the separable convolution.
"""

import logging
from typing import Optional
import numpy as np
from ..models.config import GridConfig, MaskParameters

# A constant spread suffices; the fit has only two free parameters
SPREAD = 1.0


def gauss1d(x, amplitude: float, spread: float):
    """
    One-dimensional Gaussian.

    f(x) = amplitude * exp(-x² / (2 * spread²))

    Args:
        x: Position (scalar or array)
        amplitude: Peak value at x = 0
        spread: Standard deviation

    Returns:
        Gaussian value(s), same shape as x
    """
    return amplitude * np.exp(-(x ** 2) / (2.0 * spread ** 2))


class ThermalMaskGenerator:
    """
    Derives one 1D mask per layer distance.

    Row i of the generated array holds the mask for heat sources i + 1
    layers away; all rows share the length mask_dim.
    """

    def __init__(self, config: GridConfig, logger: Optional[logging.Logger] = None):
        """
        Initialize generator.

        Args:
            config: GridConfig providing the mask dimensions
            logger: Optional logger; defaults to the module logger
        """
        self.mask_center = config.mask_center
        self.mask_dim = config.mask_dim
        self.logger = logger if logger is not None else logging.getLogger(__name__)

    def mask_scale(self, parameters: MaskParameters) -> float:
        """
        Scale factor such that mask_boundary_value is reached at the mask boundary.

        Solves gauss2D(x=y) = mask_boundary_value for the outermost mask
        index of the same-layer mask, normalized by the mask half width.

        Raises:
            ValueError: If mask_boundary_value is not in (0, impulse_factor)
        """
        if not 0.0 < parameters.mask_boundary_value < parameters.impulse_factor:
            raise ValueError(
                f"mask_boundary_value ({parameters.mask_boundary_value}) must lie in "
                f"(0, impulse_factor={parameters.impulse_factor})"
            )

        scale = np.sqrt(
            SPREAD * np.log(parameters.impulse_factor / parameters.mask_boundary_value)
        ) / np.sqrt(2.0)
        return float(scale / self.mask_center)

    def init_thermal_masks(self, layers: int, parameters: MaskParameters,
                           log: bool = False) -> np.ndarray:
        """
        Generate masks for layer distances 1..layers.

        The impulse factor is attenuated with layer distance i as
        impulse_factor / i**impulse_factor_scaling_exponent. Its square root
        is used as mask amplitude since the separable convolution multiplies
        two 1D masks.

        Args:
            layers: Number of layers
            parameters: MaskParameters
            log: Report progress at info level

        Returns:
            Array of shape (layers, mask_dim)

        Raises:
            ValueError: If layers is not positive or the mask parameters are inconsistent
        """
        if layers <= 0:
            raise ValueError(f"Layer count must be positive, got {layers}")

        if log:
            self.logger.info("Initializing thermal masks for power blurring ...")

        scale = self.mask_scale(parameters)
        positions = np.arange(-self.mask_center, self.mask_center + 1, dtype=np.float64)

        masks = np.empty((layers, self.mask_dim), dtype=np.float64)
        for i in range(1, layers + 1):
            layer_impulse_factor = (
                parameters.impulse_factor / i ** parameters.impulse_factor_scaling_exponent
            )
            masks[i - 1] = gauss1d(positions * scale, np.sqrt(layer_impulse_factor), SPREAD)

        if self.logger.isEnabledFor(logging.DEBUG):
            for i in range(layers):
                self.logger.debug(
                    "Thermal 1D mask for point source at layer distance %d: %s",
                    i + 1, np.array2string(masks[i], precision=6, separator=', ')
                )

        if log:
            self.logger.info("Done")

        return masks
