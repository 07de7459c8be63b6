"""Core power-blurring components."""

from .geometry import Rect
from .block import Block, create_blocks_from_floorplan_config
from .grid import PowerMapGrid
from .power_map import PowerMapBuilder
from .thermal_mask import ThermalMaskGenerator, gauss1d

__all__ = [
    'Rect',
    'Block',
    'create_blocks_from_floorplan_config',
    'PowerMapGrid',
    'PowerMapBuilder',
    'ThermalMaskGenerator',
    'gauss1d',
]
