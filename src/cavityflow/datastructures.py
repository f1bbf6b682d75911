"""Data structures for solver configuration and results.

This module defines the configuration and result data structures
for the streamfunction-vorticity lid-driven cavity solver.

Structure:
- Parameters: Input configuration (validated on construction, logged to MLflow)
- Metrics: Output results (logged to MLflow at end)
- Fields: Spatial solution data
- TimeSeries: Convergence history
- SolverFields: Internal solver state (current fields and snapshots)
"""

from dataclasses import dataclass, asdict
from enum import Enum
from typing import Optional, List

import numpy as np
import pandas as pd


class ConfigurationError(ValueError):
    """Raised when a solver parameter is outside its valid range."""

    def __init__(self, parameter: str, message: str):
        self.parameter = parameter
        super().__init__(f"Invalid parameter '{parameter}': {message}")


SWEEPS = ("gauss_seidel", "jacobi")
CRITERIA = ("signed", "absolute")


def _is_int(value) -> bool:
    return isinstance(value, (int, np.integer)) and not isinstance(value, bool)


class TerminationState(str, Enum):
    """How the iteration loop ended."""

    CONVERGED = "Converged"
    REACHED_MAX_ITERATIONS = "ReachedMaxIterations"
    DIVERGED = "Diverged"


# ========================================================
# Parameters (Input Configuration)
# ========================================================


@dataclass(frozen=True)
class Parameters:
    """Solver parameters - physics, grid and iteration settings.

    Invalid values raise ConfigurationError before any field is allocated.
    """

    L: float = 1.0
    lid_velocity: float = 1.0
    rho: float = 1.0
    mu: float = 0.01
    dt: float = 0.001
    ni: int = 81
    nj: int = 81
    max_iterations: int = 50000
    tolerance: float = 1e-7
    sweep: str = "gauss_seidel"  # "gauss_seidel" or "jacobi"
    criterion: str = "signed"  # "signed" or "absolute"
    warmup_iterations: int = 10
    method: str = "FD-StreamVorticity"

    def __post_init__(self):
        if not self.L > 0:
            raise ConfigurationError("L", f"cavity length must be positive, got {self.L}")
        for name in ("ni", "nj"):
            value = getattr(self, name)
            if not _is_int(value) or value < 3:
                raise ConfigurationError(name, f"need an integer >= 3, got {value}")
        if self.ni != self.nj:
            raise ConfigurationError(
                "nj", f"square uniform mesh needs ni == nj, got ni={self.ni}, nj={self.nj}"
            )
        if not self.rho > 0:
            raise ConfigurationError("rho", f"density must be positive, got {self.rho}")
        if not self.mu > 0:
            raise ConfigurationError("mu", f"viscosity must be positive, got {self.mu}")
        if not self.dt > 0:
            raise ConfigurationError("dt", f"time step must be positive, got {self.dt}")
        if not self.tolerance > 0:
            raise ConfigurationError(
                "tolerance", f"tolerance must be positive, got {self.tolerance}"
            )
        if not _is_int(self.max_iterations) or self.max_iterations < 1:
            raise ConfigurationError(
                "max_iterations", f"need a positive integer, got {self.max_iterations}"
            )
        if not _is_int(self.warmup_iterations) or self.warmup_iterations < 0:
            raise ConfigurationError(
                "warmup_iterations", f"need a non-negative integer, got {self.warmup_iterations}"
            )
        if self.sweep not in SWEEPS:
            raise ConfigurationError("sweep", f"expected one of {SWEEPS}, got '{self.sweep}'")
        if self.criterion not in CRITERIA:
            raise ConfigurationError(
                "criterion", f"expected one of {CRITERIA}, got '{self.criterion}'"
            )

    @property
    def nu(self) -> float:
        """Kinematic viscosity mu/rho."""
        return self.mu / self.rho

    @property
    def Re(self) -> float:
        """Reynolds number based on lid speed and cavity length."""
        return self.rho * self.lid_velocity * self.L / self.mu

    def to_dataframe(self):
        return pd.DataFrame([asdict(self)])

    def to_mlflow(self) -> dict:
        params = asdict(self)
        params["Re"] = self.Re
        return params


# ========================================================
# Metrics (Output Results)
# ========================================================


@dataclass
class Metrics:
    """Solver metrics - output results computed during/after solving."""

    status: str = ""
    iterations: int = 0
    converged: bool = False
    final_residual: float = float("inf")
    last_finite_iteration: int = 0
    wall_time_seconds: float = 0.0
    final_energy: float = 0.0
    final_enstrophy: float = 0.0
    poisson_residual: float = 0.0

    def to_dataframe(self):
        return pd.DataFrame([asdict(self)])

    def to_mlflow(self) -> dict:
        """Numeric metrics only (MLflow rejects strings)."""
        metrics = asdict(self)
        metrics.pop("status")
        metrics["converged"] = int(self.converged)
        return metrics


# ========================================================
# Fields (Spatial Solution Data)
# ========================================================


@dataclass
class Fields:
    """Final solution fields on the (ni, nj) grid, indexed [i, j] -> (x[i], y[j])."""

    streamfunction: np.ndarray
    vorticity: np.ndarray
    u: np.ndarray
    v: np.ndarray
    x: np.ndarray
    y: np.ndarray

    @property
    def velocity_magnitude(self) -> np.ndarray:
        return np.sqrt(self.u**2 + self.v**2)

    def to_dataframe(self) -> pd.DataFrame:
        """Convert to DataFrame with one row per grid point."""
        X, Y = np.meshgrid(self.x, self.y, indexing="ij")
        return pd.DataFrame(
            {
                "x": X.ravel(),
                "y": Y.ravel(),
                "streamfunction": self.streamfunction.ravel(),
                "vorticity": self.vorticity.ravel(),
                "u": self.u.ravel(),
                "v": self.v.ravel(),
            }
        )


# ========================================================
# Time Series (Convergence History)
# ========================================================


@dataclass
class TimeSeries:
    """Convergence history (one value per iteration after warm-up)."""

    iteration: List[int]
    residual: List[float]
    energy: Optional[List[float]] = None
    enstrophy: Optional[List[float]] = None

    def to_dataframe(self) -> pd.DataFrame:
        """Convert to DataFrame with one row per iteration."""
        return pd.DataFrame({k: v for k, v in asdict(self).items() if v is not None})

    def to_mlflow_batch(self) -> list:
        """Build MLflow Metric entities, one per recorded iteration."""
        import time

        from mlflow.entities import Metric

        timestamp = int(time.time() * 1000)
        batch = []
        for name in ("residual", "energy", "enstrophy"):
            values = getattr(self, name)
            if not values:
                continue
            for step, value in zip(self.iteration, values):
                if np.isfinite(value):
                    batch.append(Metric(f"{name}_history", float(value), timestamp, int(step)))
        return batch


# =============================================================
# Internal solver state
# ============================================================


@dataclass
class SolverFields:
    """Internal solver arrays - current fields and per-iteration snapshots.

    vorticity_prev is a full copy of vorticity taken once per iteration before
    the interior update; streamfunction_prev is taken before the relaxation
    sweep. Neither is written during the rest of the iteration.
    """

    vorticity: np.ndarray
    vorticity_prev: np.ndarray
    streamfunction: np.ndarray
    streamfunction_prev: np.ndarray
    u: np.ndarray
    v: np.ndarray

    @classmethod
    def allocate(cls, ni: int, nj: int):
        """Allocate all arrays as zeros with shape (ni, nj)."""
        shape = (ni, nj)
        return cls(
            vorticity=np.zeros(shape),
            vorticity_prev=np.zeros(shape),
            streamfunction=np.zeros(shape),
            streamfunction_prev=np.zeros(shape),
            u=np.zeros(shape),
            v=np.zeros(shape),
        )
