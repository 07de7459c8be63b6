"""
Configuration models for the power-blurring thermal analyzer using Pydantic.

These models validate and load YAML configuration files for the analyzer
grid, thermal masks and floorplans. Invalid values fail here, at the
configuration boundary, never inside the convolution loops.
"""

from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, model_validator


# =============================================================================
# Grid Configuration
# =============================================================================

class GridConfig(BaseModel):
    """Padded power-map grid and thermal-map grid dimensions."""

    thermal_map_dim: int = Field(
        64,
        gt=0,
        description="Side length of the visible (unpadded) thermal map in bins"
    )
    mask_center: int = Field(
        5,
        ge=1,
        description="Half width of the 1D thermal mask (mask_dim = 2*mask_center + 1)"
    )
    padded_bins: int = Field(
        5,
        ge=0,
        description="Padding margin of power maps on each side, in bins"
    )
    room_temperature_k: float = Field(
        293.0,
        gt=0,
        description="Baseline temperature of the thermal map (K)"
    )
    padding_zone_blocks_distance_limit: float = Field(
        0.01,
        ge=0,
        lt=1,
        description="Fraction of the outline within which upper/right block edges "
                    "are extended into the padding zone"
    )

    @model_validator(mode='after')
    def validate_padding(self):
        """Padding must cover the mask half width so convolution never leaves the map."""
        if self.padded_bins < self.mask_center:
            raise ValueError(
                f"padded_bins ({self.padded_bins}) must be >= mask_center "
                f"({self.mask_center})"
            )
        return self

    @property
    def power_map_dim(self) -> int:
        """Side length of the padded power maps."""
        return self.thermal_map_dim + 2 * self.padded_bins

    @property
    def mask_dim(self) -> int:
        """Length of each 1D thermal mask (always odd)."""
        return 2 * self.mask_center + 1


# =============================================================================
# Thermal Mask and Blurring Parameters
# =============================================================================

class MaskParameters(BaseModel):
    """Parameters of the Gaussian thermal impulse response."""

    model_config = ConfigDict(validate_assignment=True)

    impulse_factor: float = Field(
        1.0,
        gt=0,
        description="Peak of the 2D impulse response for a point source on the same layer"
    )
    impulse_factor_scaling_exponent: float = Field(
        1.0,
        description="Exponent for attenuating the impulse factor with layer distance"
    )
    mask_boundary_value: float = Field(
        0.1,
        gt=0,
        description="Value the 2D impulse response reaches at the mask boundary"
    )

    @model_validator(mode='after')
    def validate_boundary_value(self):
        """The boundary value must lie below the peak, otherwise log() is non-positive."""
        if self.mask_boundary_value >= self.impulse_factor:
            raise ValueError(
                f"mask_boundary_value ({self.mask_boundary_value}) must be less than "
                f"impulse_factor ({self.impulse_factor})"
            )
        return self


class PowerBlurringConfig(BaseModel):
    """Policy for rasterizing blocks onto padded power maps."""

    power_density_scaling_padding_zone: float = Field(
        1.0,
        ge=0,
        description="Scaling factor for power densities placed in the padding zone"
    )
    extend_boundary_blocks_into_padding_zone: bool = Field(
        True,
        description="Let blocks at the chip boundary bleed into the padding zone"
    )


class ThermalAnalyzerConfig(BaseModel):
    """Complete analyzer configuration."""

    grid: GridConfig = Field(default_factory=GridConfig)
    mask: MaskParameters = Field(default_factory=MaskParameters)
    blurring: PowerBlurringConfig = Field(default_factory=PowerBlurringConfig)


# =============================================================================
# Floorplan Configuration
# =============================================================================

class FloorplanMetadata(BaseModel):
    """Metadata for a floorplan."""

    name: str
    description: Optional[str] = None


class BlockConfig(BaseModel):
    """A placed block; coordinates are its lower-left corner."""

    id: str = Field(..., description="Unique identifier for this block")
    x: float = Field(..., ge=0, description="Lower-left x coordinate")
    y: float = Field(..., ge=0, description="Lower-left y coordinate")
    width: float = Field(..., gt=0, description="Block width")
    height: float = Field(..., gt=0, description="Block height")
    power_density: float = Field(..., ge=0, description="Power density of the block")
    layer: int = Field(0, ge=0, description="Die layer the block is assigned to")


class FloorplanConfig(BaseModel):
    """Stacked-die floorplan: outline, layer count and placed blocks."""

    metadata: FloorplanMetadata
    layers: int = Field(..., ge=1, description="Number of stacked dies")
    outline_x: float = Field(..., gt=0, description="Chip outline width")
    outline_y: float = Field(..., gt=0, description="Chip outline height")
    blocks: List[BlockConfig] = Field(default_factory=list)

    @property
    def name(self) -> str:
        """Floorplan name from metadata."""
        return self.metadata.name


# =============================================================================
# Utility Functions
# =============================================================================

def load_floorplan_config(filepath: str) -> FloorplanConfig:
    """Load and validate a floorplan from a YAML file."""
    import yaml

    with open(filepath, 'r') as f:
        data = yaml.safe_load(f)

    return FloorplanConfig(**data)


def load_analyzer_config(filepath: str) -> ThermalAnalyzerConfig:
    """Load and validate an analyzer configuration from a YAML file."""
    import yaml

    with open(filepath, 'r') as f:
        data = yaml.safe_load(f)

    return ThermalAnalyzerConfig(**(data or {}))
