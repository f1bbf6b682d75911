"""Velocity recovery from the streamfunction."""

import numpy as np


def extract_velocity(streamfunction, h, lid_velocity, out_u=None, out_v=None):
    """Velocity components u = dpsi/dy, v = -dpsi/dx by central differences.

    Interior nodes use the streamfunction; the lid row (j = nj-1) carries
    u = lid_velocity, v = 0 at every i. Remaining wall nodes stay zero (no-slip).

    Returns
    -------
    u, v : np.ndarray
        Arrays with the shape of ``streamfunction``.
    """
    psi = streamfunction
    u = np.zeros_like(psi) if out_u is None else out_u
    v = np.zeros_like(psi) if out_v is None else out_v
    u.fill(0.0)
    v.fill(0.0)

    two_h = 2.0 * h
    u[1:-1, 1:-1] = (psi[1:-1, 2:] - psi[1:-1, :-2]) / two_h
    v[1:-1, 1:-1] = (-psi[2:, 1:-1] + psi[:-2, 1:-1]) / two_h

    u[:, -1] = lid_velocity
    v[:, -1] = 0.0

    return u, v
