"""
Field Visualization Plots for the cavity.

Contour plots of the velocity components and magnitude, seeded streamlines
and a normalised vector field. All functions read a Fields dataclass only.
"""

import logging
from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np

from .style import cavity_colormap

log = logging.getLogger(__name__)

N_LEVELS = 23


def _finish_axes(ax, L: float):
    ax.set_xlabel(r"$x$")
    ax.set_ylabel(r"$y$")
    ax.set_xlim(0.0, L)
    ax.set_ylim(0.0, L)
    ax.set_aspect("equal")


def _save(fig, output_dir: Path, name: str, fmt: str) -> Path:
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    output_path = output_dir / f"{name}.{fmt}"
    fig.savefig(output_path, dpi=300, bbox_inches="tight", transparent=True)
    plt.close(fig)
    log.info(f"Saved {output_path}")
    return output_path


def plot_contour(fields, quantity: str, output_dir: Path, fmt: str = "pdf") -> Path:
    """Filled contour plot of "u", "v" or "magnitude" with a west-side colour bar."""
    if quantity == "u":
        values, label = fields.u, r"$u$"
    elif quantity == "v":
        values, label = fields.v, r"$v$"
    elif quantity == "magnitude":
        values = np.sqrt(fields.u**2 + fields.v**2 + np.finfo(float).eps)
        label = r"$|\mathbf{u}|$"
    else:
        raise ValueError(f"Unknown quantity: {quantity}. Use 'u', 'v' or 'magnitude'")

    X, Y = np.meshgrid(fields.x, fields.y, indexing="ij")
    L = float(fields.x[-1])

    fig, ax = plt.subplots(figsize=(6, 5))
    cf = ax.contourf(X, Y, values, levels=N_LEVELS, cmap=cavity_colormap())
    fig.colorbar(cf, ax=ax, location="left", label=label)
    _finish_axes(ax, L)

    name = "velocity_magnitude" if quantity == "magnitude" else f"{quantity}_contour"
    return _save(fig, output_dir, name, fmt)


def plot_streamlines(fields, output_dir: Path, n_seeds: int = 1000, seed: int = 0,
                     fmt: str = "pdf") -> Path:
    """Black streamlines started from ``n_seeds`` random points.

    Seed points come from ``numpy.random.default_rng(seed)`` so the figure is
    reproducible.
    """
    rng = np.random.default_rng(seed)
    L = float(fields.x[-1])
    start_points = rng.uniform(0.0, L, size=(n_seeds, 2))

    fig, ax = plt.subplots(figsize=(6, 6))
    # streamplot expects arrays indexed [y, x]
    ax.streamplot(
        fields.x,
        fields.y,
        fields.u.T,
        fields.v.T,
        start_points=start_points,
        color="k",
        linewidth=0.5,
        arrowsize=0.5,
        integration_direction="both",
    )
    _finish_axes(ax, L)

    return _save(fig, output_dir, "streamlines", fmt)


def plot_vector_field(fields, output_dir: Path, arrow_scale: float = 0.4,
                      fmt: str = "pdf") -> Path:
    """Unit-length velocity arrows, drawn ``arrow_scale`` grid spacings long."""
    magnitude = np.sqrt(fields.u**2 + fields.v**2 + np.finfo(float).eps)
    X, Y = np.meshgrid(fields.x, fields.y, indexing="ij")
    L = float(fields.x[-1])
    h = float(fields.x[1] - fields.x[0])

    fig, ax = plt.subplots(figsize=(6, 6))
    ax.quiver(
        X,
        Y,
        fields.u / magnitude,
        fields.v / magnitude,
        color="k",
        angles="xy",
        scale_units="xy",
        scale=1.0 / (arrow_scale * h),
    )
    _finish_axes(ax, L)

    return _save(fig, output_dir, "vector_field", fmt)
