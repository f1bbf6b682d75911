"""Explicit vorticity transport (advection-diffusion) step.

Central differences on the uniform grid, forward Euler in pseudo-time:

    w_new = w + dt * ( -u dw/dx - v dw/dy + nu * lap(w) )

with u = dpsi/dy and v = -dpsi/dx evaluated from the streamfunction.
"""

import numpy as np


def advance_vorticity(vorticity_prev, streamfunction, h, nu, dt, out):
    """Advance interior vorticity one pseudo-time step.

    Parameters
    ----------
    vorticity_prev : np.ndarray
        Snapshot (ni, nj) of vorticity with wall values already applied.
        Only read.
    streamfunction : np.ndarray
        Current streamfunction (ni, nj). Only read.
    h : float
        Grid spacing.
    nu : float
        Kinematic viscosity mu/rho.
    dt : float
        Pseudo-time step.
    out : np.ndarray
        Destination (ni, nj); only interior entries are written.

    Returns
    -------
    out : np.ndarray
    """
    w = vorticity_prev
    psi = streamfunction
    two_h = 2.0 * h

    w_c = w[1:-1, 1:-1]
    w_e, w_w = w[2:, 1:-1], w[:-2, 1:-1]
    w_n, w_s = w[1:-1, 2:], w[1:-1, :-2]

    u = (psi[1:-1, 2:] - psi[1:-1, :-2]) / two_h
    v = -(psi[2:, 1:-1] - psi[:-2, 1:-1]) / two_h

    dw_dx = (w_e - w_w) / two_h
    dw_dy = (w_n - w_s) / two_h
    lap_w = (w_e + w_w + w_n + w_s - 4.0 * w_c) / (h * h)

    out[1:-1, 1:-1] = w_c + dt * (-u * dw_dx - v * dw_dy + nu * lap_w)
    return out


def stable_time_step(h, nu, lid_velocity, safety=0.5):
    """Largest dt satisfying the explicit diffusion and advection limits.

    Diffusion: nu*dt/h^2 <= 1/4. Advection: |U|*dt/h <= 1 with the lid speed
    as the velocity scale. The result is scaled by ``safety``.
    """
    dt_diffusion = h * h / (4.0 * nu)
    dt_advection = h / abs(lid_velocity) if lid_velocity else np.inf
    return safety * min(dt_diffusion, dt_advection)
