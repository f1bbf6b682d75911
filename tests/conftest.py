"""Pytest configuration and fixtures for cavity solver tests."""

import sys
from pathlib import Path

import matplotlib
import pytest

matplotlib.use("Agg")

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


@pytest.fixture
def stable_params():
    """Re=10 on an 11x11 grid - converges in well under a thousand iterations."""
    return {
        "L": 1.0,
        "lid_velocity": 1.0,
        "rho": 1.0,
        "mu": 0.1,
        "dt": 0.005,
        "ni": 11,
        "nj": 11,
        "max_iterations": 20000,
        "tolerance": 1e-6,
    }


@pytest.fixture
def still_lid_params(stable_params):
    """Lid at rest: the zero field is already the steady state."""
    return {**stable_params, "lid_velocity": 0.0}


@pytest.fixture
def unstable_params():
    """dt far above the diffusion limit h^2/(4 nu) = 0.0625 on a 21x21 grid."""
    return {
        "L": 1.0,
        "lid_velocity": 1.0,
        "rho": 1.0,
        "mu": 0.01,
        "dt": 1.0,
        "ni": 21,
        "nj": 21,
        "max_iterations": 5000,
        "tolerance": 1e-6,
    }


@pytest.fixture
def rng():
    import numpy as np

    return np.random.default_rng(1234)
