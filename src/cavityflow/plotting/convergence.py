"""
Convergence Plots for the cavity solver.

Generates convergence history plots showing the vorticity change and the
integral quantities per iteration.
"""

import logging
from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import seaborn as sns

log = logging.getLogger(__name__)


def plot_convergence(
    timeseries_df: pd.DataFrame, Re: float, N: int, output_dir: Path, fmt: str = "pdf"
) -> Path:
    """Plot convergence history (error and quantities over iterations)."""
    if timeseries_df.empty:
        log.warning("No timeseries data available for convergence plot")
        return None

    sns.set_style("darkgrid")

    fig, ax = plt.subplots()

    for col in timeseries_df.columns:
        if col == "iteration":
            continue
        # Signed errors can be zero or negative; semilogy shows magnitudes
        data = timeseries_df[col].abs().replace(0.0, np.nan).dropna()
        if len(data) > 0:
            ax.semilogy(timeseries_df.loc[data.index, "iteration"], data, label=col.capitalize())

    ax.set_xlabel(r"Iteration")
    ax.set_ylabel(r"Value")
    ax.set_title(rf"Convergence History, $N={N}$, $\mathrm{{Re}}={Re:.0f}$")
    ax.legend(frameon=True)

    # Transparent figure, but keep darkgrid axes background
    fig.patch.set_alpha(0.0)

    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    output_path = output_dir / f"convergence.{fmt}"
    fig.savefig(output_path, facecolor=(0, 0, 0, 0))
    plt.close(fig)

    return output_path
