"""Tests for cavity figure rendering."""

import numpy as np
import pytest

from cavityflow import StreamVorticitySolver
from cavityflow.plotting import (
    cavity_colormap,
    generate_plots,
    plot_contour,
    plot_convergence,
    plot_streamlines,
)


@pytest.fixture(scope="module")
def solved_solver():
    params = dict(
        L=1.0, lid_velocity=1.0, rho=1.0, mu=0.1, dt=0.005, ni=11, nj=11,
        max_iterations=200, tolerance=1e-6,
    )
    solver = StreamVorticitySolver(**params)
    solver.solve()
    return solver


class TestColormap:
    def test_truncated_reversed_hsv(self):
        import matplotlib

        cmap = cavity_colormap()
        assert cmap.N == 100

        hsv = matplotlib.colormaps["hsv"](np.linspace(0.0, 1.0, 143))
        np.testing.assert_allclose(cmap(0), hsv[99])
        np.testing.assert_allclose(cmap(99), hsv[0])


class TestFieldPlots:
    @pytest.mark.parametrize(
        "quantity,name",
        [("u", "u_contour"), ("v", "v_contour"), ("magnitude", "velocity_magnitude")],
    )
    def test_contour_written(self, solved_solver, tmp_path, quantity, name):
        path = plot_contour(solved_solver.fields, quantity, tmp_path, fmt="png")
        assert path == tmp_path / f"{name}.png"
        assert path.stat().st_size > 0

    def test_unknown_quantity(self, solved_solver, tmp_path):
        with pytest.raises(ValueError, match="Unknown quantity"):
            plot_contour(solved_solver.fields, "pressure", tmp_path)

    def test_streamlines_seeded(self, solved_solver, tmp_path):
        path = plot_streamlines(solved_solver.fields, tmp_path, n_seeds=20, seed=3, fmt="png")
        assert path.exists()


class TestConvergencePlot:
    def test_empty_history(self, tmp_path):
        import pandas as pd

        assert plot_convergence(pd.DataFrame(), Re=100, N=11, output_dir=tmp_path) is None

    def test_written(self, solved_solver, tmp_path):
        df = solved_solver.time_series.to_dataframe()
        path = plot_convergence(df, Re=10, N=11, output_dir=tmp_path, fmt="png")
        assert path.exists()


class TestGeneratePlots:
    def test_all_figures(self, solved_solver, tmp_path):
        paths = generate_plots(solved_solver, tmp_path / "plots", n_seeds=20, fmt="png")

        names = {p.stem for p in paths}
        assert names == {
            "u_contour", "v_contour", "streamlines", "vector_field",
            "velocity_magnitude", "convergence",
        }
        assert all(p.exists() for p in paths)

    def test_requires_solved_solver(self, tmp_path):
        solver = StreamVorticitySolver(ni=5, nj=5)
        with pytest.raises(ValueError, match="call solve"):
            generate_plots(solver, tmp_path)
