#!/usr/bin/env python3
"""
Power-Blurring Thermal Analysis

Interactive exploration of the power-blurring thermal analyzer on a
stacked-die floorplan: mask parameters, padding policy, and the resulting
power maps and thermal map.
"""

import streamlit as st
from pathlib import Path
import sys

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent / "src"))
from powerblur.config_loader import get_analyzer_config
from powerblur.core.block import create_blocks_from_floorplan_config
from powerblur.models.config import MaskParameters, load_floorplan_config
from powerblur.solvers.thermal_analyzer import ThermalAnalyzer
from powerblur.visualization.plotly_viz import ThermalMapVisualizer

FLOORPLAN_DIR = Path(__file__).parent / "configs" / "floorplans"

st.set_page_config(
    page_title="Power-Blurring Thermal Analysis",
    page_icon="🌡️",
    layout="wide",
)

st.title("Power-Blurring Thermal Analysis")
st.caption("Separable Gaussian convolution of padded power maps for 3D floorplanning")

floorplan_files = sorted(FLOORPLAN_DIR.glob("*.yaml"))
if not floorplan_files:
    st.error(f"No floorplans found in {FLOORPLAN_DIR}")
    st.stop()

defaults = get_analyzer_config()

with st.sidebar:
    floorplan_path = st.selectbox(
        "Floorplan", floorplan_files, format_func=lambda p: p.stem
    )
    st.subheader("Thermal masks")
    impulse_factor = st.slider(
        "Impulse factor", 0.1, 5.0, float(defaults.mask.impulse_factor), 0.1
    )
    scaling_exponent = st.slider(
        "Impulse-factor scaling exponent", 0.0, 4.0,
        float(defaults.mask.impulse_factor_scaling_exponent), 0.1
    )
    boundary_value = st.slider(
        "Mask boundary value", 0.001, 0.99, float(defaults.mask.mask_boundary_value), 0.001
    )
    st.subheader("Padding zone")
    padding_scale = st.slider(
        "Power-density scaling in padding zone", 0.0, 2.0,
        float(defaults.blurring.power_density_scaling_padding_zone), 0.05
    )
    extend_blocks = st.checkbox(
        "Extend boundary blocks into padding zone",
        value=defaults.blurring.extend_boundary_blocks_into_padding_zone
    )

try:
    mask_parameters = MaskParameters(
        impulse_factor=impulse_factor,
        impulse_factor_scaling_exponent=scaling_exponent,
        mask_boundary_value=boundary_value,
    )
except ValueError as e:
    st.error(f"Invalid mask parameters: {e}")
    st.stop()

floorplan = load_floorplan_config(str(floorplan_path))
layers = floorplan.layers
blocks = create_blocks_from_floorplan_config(floorplan)

analyzer = ThermalAnalyzer(defaults)
analyzer.init_power_maps(layers, floorplan.outline_x, floorplan.outline_y)
analyzer.init_thermal_masks(layers, mask_parameters)
analyzer.generate_power_maps(
    layers, blocks, floorplan.outline_x, floorplan.outline_y,
    power_density_scaling_padding_zone=padding_scale,
    extend_boundary_blocks_into_padding_zone=extend_blocks,
)
max_temp = analyzer.perform_power_blurring(layers)
stats = analyzer.grid.get_statistics()

col1, col2, col3 = st.columns(3)
col1.metric("Max temperature", f"{max_temp:.2f} K")
col2.metric("Mean temperature", f"{stats['mean']:.2f} K")
col3.metric("Blurring time", f"{analyzer.blur_time * 1e3:.1f} ms")

viz = ThermalMapVisualizer(analyzer.grid)
layer0_blocks = [b for b in blocks if b.layer == 0]

st.plotly_chart(
    viz.plot_thermal_map(analyzer.thermal_map, blocks=layer0_blocks,
                         title=f"Thermal map: {floorplan.name}"),
    use_container_width=True
)
st.plotly_chart(viz.plot_power_maps(analyzer.power_maps, layers), use_container_width=True)
st.plotly_chart(viz.plot_thermal_masks(analyzer.thermal_masks), use_container_width=True)
