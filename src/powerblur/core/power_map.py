"""
Rasterization of block power densities onto padded per-layer power maps.

Blocks are translated into padded-grid coordinates and spread over the
bins they cover. Fully covered bins receive the block's power density;
partially covered boundary bins receive it weighted by the covered share
of the bin area.
"""

import logging
from typing import Iterable, Iterator, List, Tuple

from .block import Block
from .geometry import Rect
from .grid import PowerMapGrid

logger = logging.getLogger(__name__)


class PowerMapBuilder:
    """
    Builds the power maps held by a PowerMapGrid.

    Maps are rebuilt from scratch on every call; contributions of blocks
    sharing a bin accumulate.
    """

    def __init__(self, grid: PowerMapGrid):
        """
        Initialize builder.

        Args:
            grid: Configured PowerMapGrid owning the power-map buffers
        """
        self.grid = grid

    def offset_block_rect(self, block: Block, outline_x: float, outline_y: float,
                          extend_boundary_blocks_into_padding_zone: bool) -> Rect:
        """
        Translate a block's bounding box into padded-grid coordinates.

        With boundary extension enabled, lower/left edges at the chip origin
        are not shifted, so the block reaches into the lower/left padding
        zone. Upper/right edges close to the outline are extended to the far
        end of the upper/right padding zone.

        Args:
            block: Block to translate
            outline_x, outline_y: Chip outline
            extend_boundary_blocks_into_padding_zone: Boundary-extension policy

        Returns:
            Offset bounding box
        """
        grid = self.grid
        bb = block.bb
        offset = bb.copy()
        extend = extend_boundary_blocks_into_padding_zone

        if not (extend and bb.ll_x == 0.0):
            offset.ll_x += grid.blocks_offset_x
        if not (extend and bb.ll_y == 0.0):
            offset.ll_y += grid.blocks_offset_y

        if extend and abs(outline_x - bb.ur_x) < grid.padding_right_boundary_blocks_distance:
            offset.ur_x = outline_x + 2.0 * grid.blocks_offset_x
        else:
            offset.ur_x += grid.blocks_offset_x

        if extend and abs(outline_y - bb.ur_y) < grid.padding_upper_boundary_blocks_distance:
            offset.ur_y = outline_y + 2.0 * grid.blocks_offset_y
        else:
            offset.ur_y += grid.blocks_offset_y

        return offset

    def covered_bin_range(self, offset: Rect) -> Tuple[int, int, int, int]:
        """
        Bin index ranges covered by an offset rectangle.

        Lower bounds are the truncated bin index of the lower-left corner;
        upper bounds are exclusive (truncated index + 1), so at least one bin
        is covered. Ranges are clipped to the padded grid.

        Returns:
            (x_lower, x_upper, y_lower, y_upper)
        """
        grid = self.grid
        dim = grid.power_map_dim

        x_lower = int(offset.ll_x / grid.dim_x)
        y_lower = int(offset.ll_y / grid.dim_y)
        x_upper = int(offset.ur_x / grid.dim_x) + 1
        y_upper = int(offset.ur_y / grid.dim_y) + 1

        x_lower = min(max(x_lower, 0), dim - 1)
        y_lower = min(max(y_lower, 0), dim - 1)
        x_upper = min(max(x_upper, x_lower + 1), dim)
        y_upper = min(max(y_upper, y_lower + 1), dim)

        return x_lower, x_upper, y_lower, y_upper

    def generate_power_maps(self, layers: int, blocks: Iterable[Block],
                            outline_x: float, outline_y: float,
                            power_density_scaling_padding_zone: float,
                            extend_boundary_blocks_into_padding_zone: bool):
        """
        Build the power map of every layer from the placed blocks.

        Args:
            layers: Number of layers to build (blocks on other layers are skipped)
            blocks: Placed blocks
            outline_x, outline_y: Chip outline
            power_density_scaling_padding_zone: Scaling of densities in padding bins
            extend_boundary_blocks_into_padding_zone: Boundary-extension policy

        Raises:
            ValueError: If the grid holds fewer power maps than requested layers
        """
        grid = self.grid
        if layers > grid.power_maps.shape[0]:
            raise ValueError(
                f"Power maps are allocated for {grid.power_maps.shape[0]} layers, "
                f"requested {layers}"
            )

        blocks = list(blocks)
        skipped = [block.id for block in blocks if not 0 <= block.layer < layers]
        if skipped:
            logger.debug("Skipping blocks on layers outside [0, %d): %s", layers, skipped)

        for layer in range(layers):
            grid.power_maps[layer].fill(0.0)

            for block in blocks:
                if block.layer != layer:
                    continue

                offset = self.offset_block_rect(
                    block, outline_x, outline_y, extend_boundary_blocks_into_padding_zone
                )
                self._rasterize_block(
                    layer, block, offset, power_density_scaling_padding_zone
                )

    def _rasterize_block(self, layer: int, block: Block, offset: Rect,
                         padding_scale: float):
        """Add one block's contribution to a layer's power map."""
        grid = self.grid
        power_map = grid.power_maps[layer]
        density = block.power_density
        x_lower, x_upper, y_lower, y_upper = self.covered_bin_range(offset)

        # Fully covered bins: every bin strictly inside the covered range
        if x_upper - x_lower > 2 and y_upper - y_lower > 2:
            xs = slice(x_lower + 1, x_upper - 1)
            ys = slice(y_lower + 1, y_upper - 1)
            scale = grid.padding_zone[xs, ys] * (padding_scale - 1.0) + 1.0
            power_map[xs, ys] += density * scale

        # Partially covered bins: scale by intersection with the bin
        for x, y in _boundary_bins(x_lower, x_upper, y_lower, y_upper):
            intersect = Rect.determine_intersection(grid.bin_rect(x, y), offset)

            if grid.padding_zone[x, y]:
                power_map[x, y] += density * padding_scale * (intersect.area / grid.bin_area)
            else:
                power_map[x, y] += density * (intersect.area / grid.bin_area)


def _boundary_bins(x_lower: int, x_upper: int,
                   y_lower: int, y_upper: int) -> Iterator[Tuple[int, int]]:
    """Bins in the first/last row or column of a covered index range."""
    edge_ys: List[int] = sorted({y_lower, y_upper - 1})
    for x in range(x_lower, x_upper):
        if x == x_lower or x == x_upper - 1:
            for y in range(y_lower, y_upper):
                yield x, y
        else:
            for y in edge_ys:
                yield x, y
