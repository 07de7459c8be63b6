"""
Plotly-based visualization for power-blurring results.

Provides interactive visualizations for:
- Thermal map heatmaps with block outlines
- Per-layer padded power maps
- Thermal mask profiles per layer distance
"""

from typing import Optional, Sequence
import numpy as np
import plotly.graph_objects as go
from plotly.subplots import make_subplots

from ..core.block import Block
from ..core.grid import PowerMapGrid


class ThermalMapVisualizer:
    """
    Interactive visualization of analyzer buffers.

    Creates Plotly figures from a configured PowerMapGrid.
    """

    def __init__(self, grid: PowerMapGrid):
        """
        Initialize visualizer.

        Args:
            grid: Configured PowerMapGrid instance
        """
        self.grid = grid

    def plot_thermal_map(self,
                         thermal_map: np.ndarray,
                         blocks: Optional[Sequence[Block]] = None,
                         title: str = "Thermal Map",
                         colorscale: str = "Jet",
                         show_colorbar: bool = True) -> go.Figure:
        """
        Create thermal map heatmap.

        Args:
            thermal_map: Thermal map (shape: thermal_map_dim x thermal_map_dim)
            blocks: Optional blocks whose outlines are drawn on top
            title: Plot title
            colorscale: Plotly colorscale name
            show_colorbar: Whether to show colorbar

        Returns:
            Plotly Figure
        """
        x, y = self.grid.thermal_map_bin_centers()

        fig = go.Figure(data=go.Heatmap(
            z=thermal_map.T,  # Transpose: maps are indexed [x, y]
            x=x,
            y=y,
            colorscale=colorscale,
            colorbar=dict(title="K") if show_colorbar else None,
            hoverongaps=False,
            hovertemplate='x: %{x:.2f}<br>y: %{y:.2f}<br>T: %{z:.2f} K<extra></extra>'
        ))

        for block in blocks or []:
            bb = block.bb
            fig.add_shape(
                type="rect",
                x0=bb.ll_x, y0=bb.ll_y, x1=bb.ur_x, y1=bb.ur_y,
                line=dict(color="white", width=1),
            )

        fig.update_layout(
            title=title,
            xaxis_title="X",
            yaxis_title="Y",
            width=800,
            height=700,
            template="plotly_white"
        )

        # Equal aspect ratio
        fig.update_yaxes(scaleanchor="x", scaleratio=1)

        return fig

    def plot_power_maps(self,
                        power_maps: np.ndarray,
                        layers: Optional[int] = None,
                        title: str = "Power Maps") -> go.Figure:
        """
        Plot padded power maps side by side, one panel per layer.

        The visible chip area is outlined; bins outside it form the padding zone.

        Args:
            power_maps: (layers, power_map_dim, power_map_dim) array
            layers: Number of layers to show (all if None)
            title: Plot title

        Returns:
            Plotly Figure with subplots
        """
        if layers is None:
            layers = power_maps.shape[0]

        fig = make_subplots(
            rows=1, cols=layers,
            subplot_titles=[f"Layer {i}" for i in range(layers)],
            horizontal_spacing=0.08
        )

        pad = self.grid.padded_bins
        visible_end = pad + self.grid.thermal_map_dim

        for layer in range(layers):
            fig.add_trace(
                go.Heatmap(
                    z=power_maps[layer].T,
                    colorscale='Viridis',
                    showscale=(layer == layers - 1),
                    hovertemplate='bin x: %{x}<br>bin y: %{y}<br>p: %{z:.3g}<extra></extra>'
                ),
                row=1, col=layer + 1
            )
            fig.add_shape(
                type="rect",
                x0=pad - 0.5, y0=pad - 0.5, x1=visible_end - 0.5, y1=visible_end - 0.5,
                line=dict(color="red", width=1, dash="dash"),
                row=1, col=layer + 1
            )

        fig.update_layout(
            title=title,
            width=450 * layers,
            height=450,
            template="plotly_white"
        )

        return fig

    def plot_thermal_masks(self,
                           thermal_masks: np.ndarray,
                           title: str = "Thermal Masks") -> go.Figure:
        """
        Plot 1D mask profiles, one line per layer distance.

        Args:
            thermal_masks: (layers, mask_dim) array
            title: Plot title

        Returns:
            Plotly Figure
        """
        center = thermal_masks.shape[1] // 2
        positions = np.arange(-center, center + 1)

        fig = go.Figure()
        for i, mask in enumerate(thermal_masks):
            fig.add_trace(go.Scatter(
                x=positions,
                y=mask,
                mode='lines+markers',
                name=f"Layer distance {i + 1}"
            ))

        fig.update_layout(
            title=title,
            xaxis_title="Mask index (relative to center)",
            yaxis_title="Weight",
            template="plotly_white"
        )

        return fig
