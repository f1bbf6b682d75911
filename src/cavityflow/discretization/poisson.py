"""Single relaxation sweep for the streamfunction Poisson equation.

Solves lap(psi) = -w with the 5-point stencil

    psi[i,j] = (w[i,j]*h^2 + psi[i+1,j] + psi[i,j+1] + psi[i-1,j] + psi[i,j-1]) / 4

on interior nodes. Boundary values of psi are never written.

Two sweep strategies:
- "gauss_seidel": lexicographic order (i outer, j inner), in place. Nodes
  (i-1, j) and (i, j-1) have already been updated in this sweep.
- "jacobi": every neighbour comes from the previous-sweep snapshot.
"""

import numpy as np
from numba import njit


@njit(cache=True)
def gauss_seidel_sweep(psi, vorticity, h2):
    """One in-place lexicographic Gauss-Seidel sweep."""
    ni, nj = psi.shape
    for i in range(1, ni - 1):
        for j in range(1, nj - 1):
            psi[i, j] = (
                vorticity[i, j] * h2
                + psi[i + 1, j]
                + psi[i, j + 1]
                + psi[i - 1, j]
                + psi[i, j - 1]
            ) / 4.0
    return psi


def jacobi_sweep(psi_prev, vorticity, h2, out):
    """One Jacobi sweep reading psi_prev, writing the interior of out."""
    out[1:-1, 1:-1] = (
        vorticity[1:-1, 1:-1] * h2
        + psi_prev[2:, 1:-1]
        + psi_prev[1:-1, 2:]
        + psi_prev[:-2, 1:-1]
        + psi_prev[1:-1, :-2]
    ) / 4.0
    return out


def relax_streamfunction(streamfunction, streamfunction_prev, vorticity, h, sweep="gauss_seidel"):
    """Perform exactly one relaxation sweep on ``streamfunction``.

    ``streamfunction_prev`` must hold a copy of ``streamfunction`` taken before
    the call; the Jacobi sweep reads from it.
    """
    h2 = h * h
    if sweep == "gauss_seidel":
        return gauss_seidel_sweep(streamfunction, vorticity, h2)
    if sweep == "jacobi":
        return jacobi_sweep(streamfunction_prev, vorticity, h2, out=streamfunction)
    raise ValueError(f"Unknown sweep: {sweep}. Use 'gauss_seidel' or 'jacobi'")


def poisson_residual(streamfunction, vorticity, h):
    """Max-norm of lap(psi) + w over interior nodes."""
    psi = streamfunction
    lap = (
        psi[2:, 1:-1] + psi[:-2, 1:-1] + psi[1:-1, 2:] + psi[1:-1, :-2] - 4.0 * psi[1:-1, 1:-1]
    ) / (h * h)
    return float(np.max(np.abs(lap + vorticity[1:-1, 1:-1])))
