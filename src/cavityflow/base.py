"""Abstract base solver for lid-driven cavity problem."""

from abc import ABC, abstractmethod
import logging
import time

import numpy as np
import mlflow

from .convergence import ConvergenceMonitor
from .datastructures import (
    ConfigurationError,
    Fields,
    Metrics,
    TerminationState,
    TimeSeries,
)

log = logging.getLogger(__name__)


class LidDrivenCavitySolver(ABC):
    """Abstract base solver for lid-driven cavity problem.

    Handles:
    - Parameter management (input configuration)
    - Metrics tracking (output results)
    - Iteration loop with convergence, divergence and iteration-limit exits
    - Live MLflow logging when a run is active

    Subclasses must:
    - Set Parameters class attribute
    - Implement step() - perform one iteration, return False on non-finite fields
    - Call _init_fields(x, y) after setting up grid
    - Implement _update_velocity() and _compute_algebraic_residuals()
    """

    Parameters = None  # Subclasses set this to their parameter dataclass

    def __init__(self, params=None, **kwargs):
        """Initialize solver with parameters.

        Parameters
        ----------
        params : Parameters, optional
            Parameters object. If not provided, kwargs are used to create params.
        **kwargs
            Configuration parameters passed to Parameters class if params is None.
        """
        if params is None:
            if self.Parameters is None:
                raise ValueError("Subclass must define Parameters class attribute")
            params = self.Parameters(**kwargs)

        self.params = params
        self.metrics = Metrics()
        self.fields = None  # Initialized by subclass via _init_fields()
        self.time_series = None  # Populated after solve()

    def _init_fields(self, x: np.ndarray, y: np.ndarray):
        """Initialize output fields with grid coordinates.

        Parameters
        ----------
        x : np.ndarray
            X coordinates of the grid lines (1D array, length ni)
        y : np.ndarray
            Y coordinates of the grid lines (1D array, length nj)
        """
        shape = (len(x), len(y))
        self.fields = Fields(
            streamfunction=np.zeros(shape),
            vorticity=np.zeros(shape),
            u=np.zeros(shape),
            v=np.zeros(shape),
            x=x.copy(),
            y=y.copy(),
        )

    @abstractmethod
    def step(self) -> bool:
        """Perform one iteration of the solver.

        Returns
        -------
        bool
            True if all fields are finite after the iteration. On False the
            solver has already restored the last finite fields.
        """
        pass

    @abstractmethod
    def _update_velocity(self):
        """Recompute self.arrays.u and self.arrays.v from the current state."""
        pass

    @abstractmethod
    def _compute_algebraic_residuals(self):
        """Compute algebraic residuals of the discretized equations.

        Returns
        -------
        dict
            Residual name -> value, stored on Metrics.
        """
        pass

    def _finalize_fields(self):
        """Copy final solution from internal arrays to read-only output fields."""
        self._update_velocity()
        for name in ("streamfunction", "vorticity", "u", "v"):
            values = getattr(self.arrays, name).copy()
            values.flags.writeable = False
            setattr(self.fields, name, values)

    def _store_results(self, monitor, status, final_iter_count, last_finite_iteration,
                       wall_time, energy_history=None, enstrophy_history=None,
                       max_timeseries_points: int = 1000):
        """Store solve results in self.fields, self.time_series, and self.metrics."""
        self._finalize_fields()

        # Downsample time series to max_timeseries_points
        def downsample(data):
            if data is None or len(data) <= max_timeseries_points:
                return data
            indices = np.linspace(0, len(data) - 1, max_timeseries_points, dtype=int)
            return [data[i] for i in indices]

        self.time_series = TimeSeries(
            iteration=downsample(list(monitor.iterations)),
            residual=downsample(list(monitor.errors)),
            energy=downsample(energy_history),
            enstrophy=downsample(enstrophy_history),
        )

        residuals = self._compute_algebraic_residuals()

        # Use FINAL values, not downsampled
        self.metrics = Metrics(
            status=status.value,
            iterations=final_iter_count,
            converged=status is TerminationState.CONVERGED,
            final_residual=monitor.last_error,
            last_finite_iteration=last_finite_iteration,
            wall_time_seconds=wall_time,
            final_energy=energy_history[-1] if energy_history else 0.0,
            final_enstrophy=enstrophy_history[-1] if enstrophy_history else 0.0,
            **residuals,
        )

    def solve(self, tolerance: float = None, max_iter: int = None) -> TerminationState:
        """Iterate until convergence, divergence or the iteration limit.

        Stores results in solver attributes:
        - self.fields : Fields dataclass with solution fields
        - self.time_series : TimeSeries dataclass with convergence history
        - self.metrics : Metrics dataclass with solver metrics

        Parameters
        ----------
        tolerance : float, optional
            Convergence tolerance. If None, uses params.tolerance.
        max_iter : int, optional
            Maximum iterations. If None, uses params.max_iterations.

        Returns
        -------
        TerminationState
            CONVERGED, REACHED_MAX_ITERATIONS or DIVERGED.
        """
        if tolerance is None:
            tolerance = self.params.tolerance
        if max_iter is None:
            max_iter = self.params.max_iterations
        if not tolerance > 0:
            raise ConfigurationError("tolerance", f"tolerance must be positive, got {tolerance}")
        if max_iter < 1:
            raise ConfigurationError("max_iterations", f"need a positive integer, got {max_iter}")

        monitor = ConvergenceMonitor(
            tolerance,
            warmup=self.params.warmup_iterations,
            criterion=self.params.criterion,
        )

        # Quantity tracking (energy, enstrophy)
        energy_history = []
        enstrophy_history = []

        time_start = time.time()
        mlflow_time = 0.0  # Track time spent on MLflow logging
        final_iter_count = 0
        last_finite_iteration = 0
        status = TerminationState.REACHED_MAX_ITERATIONS

        for i in range(max_iter):
            iteration = i + 1
            final_iter_count = iteration

            if not self.step():
                status = TerminationState.DIVERGED
                log.warning(
                    f"Non-finite field at iteration {iteration}; "
                    f"keeping fields of iteration {last_finite_iteration}"
                )
                break
            last_finite_iteration = iteration

            is_converged = monitor.update(
                iteration, self.arrays.vorticity, self.arrays.vorticity_prev
            )

            # Only record quantities after warmup, alongside the error history
            if iteration > monitor.warmup:
                with np.errstate(over="ignore", invalid="ignore"):
                    self._update_velocity()
                    energy_history.append(self._compute_energy())
                    enstrophy_history.append(self._compute_enstrophy())

            if i % 50 == 0 or is_converged:
                log.info(f"Iteration {iteration}: err={monitor.last_error:.6e}")

                # Live MLflow logging every 50 iterations (timed separately)
                if mlflow.active_run() and monitor.errors:
                    t_log_start = time.time()
                    mlflow.log_metrics(
                        {
                            "residual": monitor.last_error,
                            "energy": energy_history[-1],
                            "enstrophy": enstrophy_history[-1],
                        },
                        step=iteration,
                    )
                    mlflow_time += time.time() - t_log_start

            if is_converged:
                status = TerminationState.CONVERGED
                log.info(f"Converged at iteration {iteration}")
                break

        if status is TerminationState.REACHED_MAX_ITERATIONS:
            log.warning(
                f"Reached max_iterations={max_iter} without convergence "
                f"(err={monitor.last_error:.6e}, tol={tolerance:.1e})"
            )

        wall_time = time.time() - time_start - mlflow_time  # Exclude MLflow logging time
        log.info(f"Solver finished in {wall_time:.2f} seconds (excl. {mlflow_time:.2f}s logging).")

        self._store_results(
            monitor, status, final_iter_count, last_finite_iteration, wall_time,
            energy_history, enstrophy_history,
        )
        return status

    def save(self, filepath):
        """Save complete solver state to HDF5 file.

        Saves params, metrics, time_series, and fields for later analysis.

        Parameters
        ----------
        filepath : str or Path
            Output file path (use .h5 extension).
        """
        from pathlib import Path

        filepath = Path(filepath)
        filepath.parent.mkdir(parents=True, exist_ok=True)

        import pandas as pd
        with pd.HDFStore(filepath, mode='w', complevel=5) as store:
            store['params'] = self.params.to_dataframe()
            store['metrics'] = self.metrics.to_dataframe()
            store['time_series'] = self.time_series.to_dataframe()
            store['fields'] = self.fields.to_dataframe()

    # =========================================================================
    # Integral quantities
    # =========================================================================

    def _compute_energy(self) -> float:
        """Compute kinetic energy: E = 0.5 * ∫ (u² + v²) dA."""
        u = self.arrays.u
        v = self.arrays.v
        dA = self._get_cell_area()
        return 0.5 * float(np.sum(u * u + v * v) * dA)

    def _compute_enstrophy(self) -> float:
        """Compute enstrophy: Z = 0.5 * ∫ ω² dA."""
        omega = self.arrays.vorticity
        dA = self._get_cell_area()
        return 0.5 * float(np.sum(omega * omega) * dA)

    def _get_cell_area(self) -> float:
        """Get cell area for integration. Subclasses should override."""
        n = self.arrays.u.size
        return self.params.L**2 / n
