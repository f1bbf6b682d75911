import numpy as np


def apply_wall_vorticity(vorticity, streamfunction, h, lid_velocity):
    """
    In-place Thom wall-vorticity condition on all four walls.

    Row pass (lid, bottom) runs before the column pass (left, right), so each
    corner node ends up with the value of its side wall.
    """
    h2 = h * h

    # Lid (j = nj-1), moving with tangential speed lid_velocity
    vorticity[:, -1] = -2.0 * streamfunction[:, -2] / h2 - 2.0 * lid_velocity / h
    # Bottom (j = 0)
    vorticity[:, 0] = -2.0 * streamfunction[:, 1] / h2
    # Left (i = 0)
    vorticity[0, :] = -2.0 * streamfunction[1, :] / h2
    # Right (i = ni-1)
    vorticity[-1, :] = -2.0 * streamfunction[-2, :] / h2

    return vorticity


def copy_boundary(src, dst):
    """Copy the wall entries of src into dst, leaving the interior of dst alone."""
    dst[0, :] = src[0, :]
    dst[-1, :] = src[-1, :]
    dst[:, 0] = src[:, 0]
    dst[:, -1] = src[:, -1]
    return dst


def boundary_is_finite(field) -> bool:
    return bool(
        np.all(np.isfinite(field[0, :]))
        and np.all(np.isfinite(field[-1, :]))
        and np.all(np.isfinite(field[:, 0]))
        and np.all(np.isfinite(field[:, -1]))
    )
