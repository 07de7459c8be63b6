"""
Configuration loader for analyzer defaults.

Provides centralized access to the default grid, mask and blurring
parameters so scripts, the demo app and tests agree on them.
"""

import yaml
from pathlib import Path
from typing import Dict, Any

from .models.config import (
    GridConfig,
    MaskParameters,
    PowerBlurringConfig,
    ThermalAnalyzerConfig,
)

_CONFIG_DIR = Path(__file__).parent / "configs"
_DEFAULTS_FILE = _CONFIG_DIR / "thermal_defaults.yaml"

# Cache the config to avoid repeated file reads
_cached_config: Dict[str, Any] = None


def load_defaults() -> Dict[str, Any]:
    """
    Load analyzer defaults from YAML config.

    Returns:
        Dict with all default parameters
    """
    global _cached_config

    if _cached_config is None:
        with open(_DEFAULTS_FILE) as f:
            _cached_config = yaml.safe_load(f)

    return _cached_config


def get_grid_config() -> GridConfig:
    """Default grid dimensions."""
    return GridConfig(**load_defaults()["grid"])


def get_mask_parameters(preset: str = None) -> MaskParameters:
    """
    Get thermal mask parameters.

    Args:
        preset: Optional preset name ("sharp", "default", "wide")
                If None, uses default from config

    Returns:
        MaskParameters instance
    """
    config = load_defaults()

    if preset:
        return MaskParameters(**config["mask"]["presets"][preset])
    return MaskParameters(**config["mask"]["parameters"])


def get_blurring_config() -> PowerBlurringConfig:
    """Default power-map rasterization policy."""
    return PowerBlurringConfig(**load_defaults()["blurring"])


def get_analyzer_config(mask_preset: str = None) -> ThermalAnalyzerConfig:
    """
    Assemble the complete analyzer configuration from defaults.

    Args:
        mask_preset: Optional mask parameter preset

    Returns:
        ThermalAnalyzerConfig instance
    """
    return ThermalAnalyzerConfig(
        grid=get_grid_config(),
        mask=get_mask_parameters(mask_preset),
        blurring=get_blurring_config(),
    )


if __name__ == "__main__":
    # Test config loading
    print("=== Thermal Analyzer Configuration ===")
    grid = get_grid_config()
    print(f"Thermal map: {grid.thermal_map_dim}x{grid.thermal_map_dim} bins")
    print(f"Power maps: {grid.power_map_dim}x{grid.power_map_dim} bins "
          f"({grid.padded_bins} padded bins per side)")
    print(f"Mask: {grid.mask_dim} entries")
    print(f"Mask parameters: {get_mask_parameters()}")
    print(f"Blurring: {get_blurring_config()}")
