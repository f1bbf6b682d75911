"""Finite-difference kernels for the streamfunction-vorticity formulation."""

from .boundary import apply_wall_vorticity, boundary_is_finite, copy_boundary
from .transport import advance_vorticity, stable_time_step
from .poisson import (
    gauss_seidel_sweep,
    jacobi_sweep,
    relax_streamfunction,
    poisson_residual,
)

__all__ = [
    "apply_wall_vorticity",
    "boundary_is_finite",
    "copy_boundary",
    "advance_vorticity",
    "stable_time_step",
    "gauss_seidel_sweep",
    "jacobi_sweep",
    "relax_streamfunction",
    "poisson_residual",
]
