"""Lid-driven cavity flow in the streamfunction-vorticity formulation.

Solver Hierarchy:
-----------------
LidDrivenCavitySolver (abstract base - defines problem and iteration loop)
└── StreamVorticitySolver (finite differences, Thom walls, pseudo-time relaxation)
"""

from .base import LidDrivenCavitySolver
from .convergence import ConvergenceMonitor
from .datastructures import (
    ConfigurationError,
    Parameters,
    Metrics,
    Fields,
    TimeSeries,
    SolverFields,
    TerminationState,
)
from .grid import Grid
from .solver import StreamVorticitySolver
from .velocity import extract_velocity

__all__ = [
    # Base solver
    "LidDrivenCavitySolver",
    # Data structures
    "ConfigurationError",
    "Parameters",
    "Metrics",
    "Fields",
    "TimeSeries",
    "SolverFields",
    "TerminationState",
    # Components
    "Grid",
    "ConvergenceMonitor",
    "extract_velocity",
    # Concrete solver
    "StreamVorticitySolver",
]
