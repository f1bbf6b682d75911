"""
Plot generation for a finished solver run.

Reads only the solver's exposed fields, parameters and time series.
"""

import logging
from pathlib import Path

from .convergence import plot_convergence
from .fields import plot_contour, plot_streamlines, plot_vector_field
from .style import apply_style

log = logging.getLogger(__name__)


def generate_plots(solver, output_dir: Path, seed: int = 0, n_seeds: int = 1000,
                   usetex: bool = False, fmt: str = "pdf") -> list:
    """Generate all figures for a solved run.

    Returns
    -------
    list of Path
        Paths of the written figures.
    """
    if solver.time_series is None:
        raise ValueError("Solver has no results; call solve() before plotting")

    apply_style(usetex=usetex)
    output_dir = Path(output_dir)
    fields = solver.fields

    paths = [
        plot_contour(fields, "u", output_dir, fmt=fmt),
        plot_contour(fields, "v", output_dir, fmt=fmt),
        plot_streamlines(fields, output_dir, n_seeds=n_seeds, seed=seed, fmt=fmt),
        plot_vector_field(fields, output_dir, fmt=fmt),
        plot_contour(fields, "magnitude", output_dir, fmt=fmt),
    ]

    convergence_path = plot_convergence(
        solver.time_series.to_dataframe(), solver.params.Re, solver.params.ni, output_dir, fmt=fmt
    )
    if convergence_path is not None:
        paths.append(convergence_path)

    log.info(f"Generated {len(paths)} figures in {output_dir}")
    return paths
