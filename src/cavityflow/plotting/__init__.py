"""Rendering of solver output: contours, streamlines, vector fields, convergence."""

from .convergence import plot_convergence
from .fields import plot_contour, plot_streamlines, plot_vector_field
from .orchestrator import generate_plots
from .style import apply_style, cavity_colormap

__all__ = [
    "plot_convergence",
    "plot_contour",
    "plot_streamlines",
    "plot_vector_field",
    "generate_plots",
    "apply_style",
    "cavity_colormap",
]
