"""Streamfunction-vorticity finite-difference solver for lid-driven cavity.

Each outer iteration:
1. Snapshot of vorticity, completed with Thom wall values from the current
   streamfunction (explicit right-hand side and convergence check)
2. Forward-Euler vorticity transport on interior nodes (double-buffered)
3. Numeric-health check
4. One relaxation sweep of the streamfunction Poisson equation, health check
5. Wall values copied over from the snapshot

A failed health check restores both fields to the previous iteration.

The coupled fixed-point iteration, not an inner Poisson solve, drives the
system to steady state.
"""

import logging

import numpy as np

from .base import LidDrivenCavitySolver
from .datastructures import Parameters, SolverFields
from .discretization import (
    advance_vorticity,
    apply_wall_vorticity,
    boundary_is_finite,
    copy_boundary,
    poisson_residual,
    relax_streamfunction,
    stable_time_step,
)
from .grid import Grid
from .velocity import extract_velocity

log = logging.getLogger(__name__)


class StreamVorticitySolver(LidDrivenCavitySolver):
    """Finite-difference streamfunction-vorticity solver.

    Parameters
    ----------
    params : Parameters
        Physics (L, lid velocity, rho, mu), grid (ni, nj) and iteration
        settings (dt, tolerance, max_iterations, sweep, criterion).
    """

    Parameters = Parameters

    def __init__(self, **kwargs):
        """Initialize grid and zeroed solver state."""
        super().__init__(**kwargs)

        self.grid = Grid.from_parameters(self.params)
        self.h = self.grid.h
        self.nu = self.params.nu

        # Allocate internal solver arrays
        self.arrays = SolverFields.allocate(self.grid.ni, self.grid.nj)

        # Initialize output fields (base class handles this)
        self._init_fields(x=self.grid.x, y=self.grid.y)

        dt_limit = stable_time_step(self.h, self.nu, self.params.lid_velocity, safety=1.0)
        if self.params.dt > dt_limit:
            log.warning(
                f"dt={self.params.dt:.3e} exceeds the explicit stability limit "
                f"{dt_limit:.3e}; the iteration may diverge"
            )

        log.info(
            f"Grid {self.grid.ni}x{self.grid.nj}, h={self.h:.4e}, Re={self.params.Re:.1f}, "
            f"sweep={self.params.sweep}, criterion={self.params.criterion}"
        )

    def step(self) -> bool:
        """Perform one outer iteration.

        Returns
        -------
        bool
            False if the update produced a non-finite value. Vorticity and
            streamfunction are restored to the previous iteration before
            returning.
        """
        a = self.arrays  # Shorthand for readability
        p = self.params

        # Overflow is reported through the finiteness checks below
        with np.errstate(over="ignore", invalid="ignore"):
            # Snapshot with this iteration's wall values; read-only from here on.
            # a.vorticity keeps the last finite state until the update succeeds.
            np.copyto(a.vorticity_prev, a.vorticity)
            apply_wall_vorticity(a.vorticity_prev, a.streamfunction, self.h, p.lid_velocity)
            if not boundary_is_finite(a.vorticity_prev):
                return False

            advance_vorticity(
                a.vorticity_prev, a.streamfunction, self.h, self.nu, p.dt, out=a.vorticity
            )
            if not np.all(np.isfinite(a.vorticity[1:-1, 1:-1])):
                a.vorticity[1:-1, 1:-1] = a.vorticity_prev[1:-1, 1:-1]
                return False

            # The sweep reads interior vorticity only
            np.copyto(a.streamfunction_prev, a.streamfunction)
            relax_streamfunction(
                a.streamfunction, a.streamfunction_prev, a.vorticity, self.h, sweep=p.sweep
            )
            if not np.all(np.isfinite(a.streamfunction)):
                np.copyto(a.streamfunction, a.streamfunction_prev)
                a.vorticity[1:-1, 1:-1] = a.vorticity_prev[1:-1, 1:-1]
                return False

            # Commit this iteration's wall values
            copy_boundary(a.vorticity_prev, a.vorticity)

        return True

    def _update_velocity(self):
        extract_velocity(
            self.arrays.streamfunction,
            self.h,
            self.params.lid_velocity,
            out_u=self.arrays.u,
            out_v=self.arrays.v,
        )

    def _compute_algebraic_residuals(self):
        """Max-norm residual of lap(psi) = -w for the final fields."""
        with np.errstate(over="ignore", invalid="ignore"):
            residual = poisson_residual(
                self.arrays.streamfunction, self.arrays.vorticity, self.h
            )
        return {"poisson_residual": residual}

    def _get_cell_area(self) -> float:
        return self.h * self.h
