"""Convergence monitoring for the pseudo-time iteration."""

import logging

import numpy as np

from .datastructures import CRITERIA

log = logging.getLogger(__name__)


class ConvergenceMonitor:
    """Measures the vorticity change per iteration and decides when to stop.

    The change is checked only after ``warmup`` iterations. Two criteria:

    - "signed": err = max(w - w_prev) over all nodes. This is the literal
      reference criterion. A field that only decreases keeps err <= 0 and
      passes the check even while it is still changing.
    - "absolute": err = max|w - w_prev|.

    Parameters
    ----------
    tolerance : float
        Stop when err < tolerance.
    warmup : int
        Number of leading iterations that are never checked.
    criterion : str
        "signed" or "absolute".
    """

    def __init__(self, tolerance: float, warmup: int = 10, criterion: str = "signed"):
        if criterion not in CRITERIA:
            raise ValueError(f"Unknown criterion: {criterion}. Use 'signed' or 'absolute'")
        self.tolerance = tolerance
        self.warmup = warmup
        self.criterion = criterion

        self.iterations = []
        self.errors = []

    def measure(self, vorticity: np.ndarray, vorticity_prev: np.ndarray) -> float:
        """Vorticity change between two iterates under the chosen criterion."""
        diff = vorticity - vorticity_prev
        if self.criterion == "absolute":
            return float(np.max(np.abs(diff)))
        return float(np.max(diff))

    def update(self, iteration: int, vorticity: np.ndarray, vorticity_prev: np.ndarray) -> bool:
        """Record the error of ``iteration`` (1-based) and return True once converged."""
        if iteration <= self.warmup:
            return False

        err = self.measure(vorticity, vorticity_prev)
        self.iterations.append(iteration)
        self.errors.append(err)
        log.debug(f"Iteration {iteration}: err={err:.6e}")

        return err < self.tolerance

    @property
    def last_error(self) -> float:
        return self.errors[-1] if self.errors else float("inf")
