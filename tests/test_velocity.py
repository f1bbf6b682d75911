"""Tests for velocity recovery from the streamfunction."""

import numpy as np
import pytest

from cavityflow import Grid, extract_velocity


class TestExtractVelocity:
    def test_linear_streamfunction(self):
        # psi = 2y - 3x gives u = 2, v = 3 exactly at interior nodes
        grid = Grid(L=1.0, ni=9, nj=9)
        X, Y = grid.meshgrid()
        psi = 2.0 * Y - 3.0 * X

        u, v = extract_velocity(psi, grid.h, lid_velocity=1.0)

        np.testing.assert_allclose(u[1:-1, 1:-1], 2.0, rtol=0, atol=1e-12)
        np.testing.assert_allclose(v[1:-1, 1:-1], 3.0, rtol=0, atol=1e-12)

    def test_wall_values(self, rng):
        psi = rng.standard_normal((7, 7))
        u, v = extract_velocity(psi, 0.1, lid_velocity=1.5)

        np.testing.assert_array_equal(u[:, -1], 1.5)
        np.testing.assert_array_equal(v[:, -1], 0.0)
        for field in (u, v):
            assert not field[0, :-1].any()
            assert not field[-1, :-1].any()
            assert not field[:, 0].any()

    def test_writes_into_given_arrays(self, rng):
        psi = rng.standard_normal((5, 5))
        out_u = np.full((5, 5), np.nan)
        out_v = np.full((5, 5), np.nan)

        u, v = extract_velocity(psi, 0.25, 1.0, out_u=out_u, out_v=out_v)

        assert u is out_u and v is out_v
        assert np.all(np.isfinite(u)) and np.all(np.isfinite(v))

    @pytest.mark.parametrize("lid_velocity", [0.0, -1.0])
    def test_lid_speed_passed_through(self, lid_velocity):
        u, _ = extract_velocity(np.zeros((4, 4)), 1.0 / 3, lid_velocity)
        np.testing.assert_array_equal(u[:, -1], lid_velocity)
