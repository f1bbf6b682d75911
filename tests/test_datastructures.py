"""Tests for parameters, metrics and result containers."""

import numpy as np
import pytest

from cavityflow import (
    ConfigurationError,
    Fields,
    Metrics,
    Parameters,
    SolverFields,
    TerminationState,
    TimeSeries,
)


class TestParameters:
    """Validation and derived quantities."""

    def test_defaults_reproduce_re100_case(self):
        params = Parameters()
        assert params.ni == params.nj == 81
        assert params.Re == pytest.approx(100.0)
        assert params.nu == pytest.approx(0.01)
        assert params.sweep == "gauss_seidel"
        assert params.criterion == "signed"
        assert params.warmup_iterations == 10

    def test_kinematic_viscosity(self):
        params = Parameters(rho=2.0, mu=0.04)
        assert params.nu == pytest.approx(0.02)

    @pytest.mark.parametrize(
        "kwargs,parameter",
        [
            ({"L": 0.0}, "L"),
            ({"ni": 2, "nj": 2}, "ni"),
            ({"ni": 11.0, "nj": 11}, "ni"),
            ({"ni": 11, "nj": 13}, "nj"),
            ({"rho": 0.0}, "rho"),
            ({"mu": -0.01}, "mu"),
            ({"dt": 0.0}, "dt"),
            ({"tolerance": 0.0}, "tolerance"),
            ({"max_iterations": 0}, "max_iterations"),
            ({"warmup_iterations": -1}, "warmup_iterations"),
            ({"sweep": "sor"}, "sweep"),
            ({"criterion": "l2"}, "criterion"),
        ],
    )
    def test_invalid_parameter_named(self, kwargs, parameter):
        with pytest.raises(ConfigurationError) as excinfo:
            Parameters(**kwargs)
        assert excinfo.value.parameter == parameter
        assert parameter in str(excinfo.value)

    def test_configuration_error_is_value_error(self):
        with pytest.raises(ValueError):
            Parameters(dt=-1.0)

    def test_parameters_are_immutable(self):
        params = Parameters()
        with pytest.raises(AttributeError):
            params.dt = 1.0

    def test_to_mlflow_includes_reynolds_number(self):
        logged = Parameters(mu=0.02).to_mlflow()
        assert logged["Re"] == pytest.approx(50.0)
        assert logged["sweep"] == "gauss_seidel"

    def test_to_dataframe_single_row(self):
        df = Parameters().to_dataframe()
        assert len(df) == 1
        assert df["ni"].iloc[0] == 81


class TestResultContainers:
    """Metrics, fields and time series conversions."""

    def test_metrics_to_mlflow_is_numeric(self):
        metrics = Metrics(status=TerminationState.CONVERGED.value, iterations=11, converged=True)
        logged = metrics.to_mlflow()
        assert "status" not in logged
        assert logged["converged"] == 1
        assert all(isinstance(v, (int, float)) for v in logged.values())

    def test_fields_dataframe_one_row_per_node(self):
        x = np.linspace(0.0, 1.0, 3)
        u = np.arange(9.0).reshape(3, 3)
        fields = Fields(
            streamfunction=np.zeros((3, 3)),
            vorticity=np.zeros((3, 3)),
            u=u,
            v=np.zeros((3, 3)),
            x=x,
            y=x,
        )
        df = fields.to_dataframe()

        assert len(df) == 9
        # Row for [i=2, j=1] sits at x=1.0, y=0.5
        row = df[(df["x"] == 1.0) & (df["y"] == 0.5)]
        assert row["u"].iloc[0] == u[2, 1]

    def test_velocity_magnitude(self):
        fields = Fields(
            streamfunction=np.zeros((2, 2)),
            vorticity=np.zeros((2, 2)),
            u=np.full((2, 2), 3.0),
            v=np.full((2, 2), 4.0),
            x=np.zeros(2),
            y=np.zeros(2),
        )
        np.testing.assert_allclose(fields.velocity_magnitude, 5.0)

    def test_time_series_dataframe_drops_missing(self):
        ts = TimeSeries(iteration=[11, 12], residual=[1e-3, 1e-4])
        df = ts.to_dataframe()
        assert list(df.columns) == ["iteration", "residual"]

    def test_time_series_mlflow_batch(self):
        ts = TimeSeries(iteration=[11, 12], residual=[1e-3, 1e-4], energy=[0.1, 0.2])
        batch = ts.to_mlflow_batch()
        assert len(batch) == 4
        assert {m.key for m in batch} == {"residual_history", "energy_history"}
        assert sorted({m.step for m in batch}) == [11, 12]

    def test_solver_fields_zero_initialized(self):
        arrays = SolverFields.allocate(5, 5)
        for name in ("vorticity", "vorticity_prev", "streamfunction", "streamfunction_prev", "u", "v"):
            values = getattr(arrays, name)
            assert values.shape == (5, 5)
            assert not values.any()
        assert arrays.vorticity is not arrays.vorticity_prev
