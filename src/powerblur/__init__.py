"""Power-blurring thermal analysis for 3D floorplanning."""

__version__ = "0.1.0"
