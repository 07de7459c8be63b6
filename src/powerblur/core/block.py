"""
Placed circuit blocks: the power sources of the thermal analysis.
"""

from typing import List
from ..models.config import BlockConfig
from .geometry import Rect


class Block:
    """
    A placed block with uniform power density on one die layer.

    Blocks are read-only inputs to the analyzer; nothing in this package
    mutates them.
    """

    def __init__(self, id: str, bb: Rect, power_density: float, layer: int = 0):
        """
        Initialize block.

        Args:
            id: Block identifier
            bb: Bounding box in chip coordinates
            power_density: Power density (non-negative)
            layer: Die layer index
        """
        self.id = id
        self.bb = bb
        self.power_density = power_density
        self.layer = layer

    @classmethod
    def from_config(cls, config: BlockConfig) -> 'Block':
        """Create a block from its validated configuration."""
        return cls(
            id=config.id,
            bb=Rect.from_origin_and_size(config.x, config.y, config.width, config.height),
            power_density=config.power_density,
            layer=config.layer,
        )

    @property
    def power(self) -> float:
        """Total power dissipated by the block."""
        return self.power_density * self.bb.area

    def __repr__(self) -> str:
        return (
            f"Block(id='{self.id}', bb={self.bb}, "
            f"power_density={self.power_density}, layer={self.layer})"
        )


def create_blocks_from_floorplan_config(floorplan_config) -> List[Block]:
    """
    Create blocks from a floorplan configuration.

    Args:
        floorplan_config: FloorplanConfig instance

    Returns:
        List of Block instances in configuration order
    """
    return [Block.from_config(block_config) for block_config in floorplan_config.blocks]
