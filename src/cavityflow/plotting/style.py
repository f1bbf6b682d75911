"""
Plotting Style Configuration for cavity plots.

Uses seaborn darkgrid theme; LaTeX rendering is opt-in because it needs a
TeX installation.
"""

import logging
import math

import matplotlib
import matplotlib.pyplot as plt
import numpy as np
import seaborn as sns
from matplotlib.colors import ListedColormap

log = logging.getLogger(__name__)


def apply_style(usetex: bool = False):
    """Apply the shared rcParams and seaborn theme."""
    plt.rcParams.update(
        {
            "text.usetex": usetex,
            "font.family": "serif",
            "axes.labelsize": 12,
            "font.size": 11,
            "legend.fontsize": 10,
            "xtick.labelsize": 10,
            "ytick.labelsize": 10,
        }
    )
    # After rcParams to preserve LaTeX settings
    sns.set_theme(style="darkgrid", rc={"text.usetex": usetex})
    log.debug(f"Plot style applied (usetex={usetex})")


def cavity_colormap(n_colors: int = 100, fraction: float = 0.7) -> ListedColormap:
    """HSV colormap truncated to its first ``fraction`` and reversed.

    Samples ceil(n_colors/fraction) HSV colours, keeps the first n_colors and
    flips the order, so low values are magenta/blue and high values red.
    """
    n_total = math.ceil(n_colors / fraction)
    colors = matplotlib.colormaps["hsv"](np.linspace(0.0, 1.0, n_total))[:n_colors]
    return ListedColormap(colors[::-1], name="cavity_hsv")
