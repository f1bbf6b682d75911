"""Uniform square grid for the finite-difference cavity solver.

Indexing Conventions:
- Fields are (ni, nj) arrays; entry [i, j] lives at (x[i], y[j]).
- Axis 0 runs along x (left to right), axis 1 along y (bottom to top).
- Boundary nodes: i in {0, ni-1} or j in {0, nj-1}. Interior: 1..n-2.
"""

from dataclasses import dataclass, field

import numpy as np

from .datastructures import ConfigurationError, _is_int


@dataclass(frozen=True, eq=False)
class Grid:
    """Uniform mesh on [0, L] x [0, L] with spacing h = L/(ni-1)."""

    L: float
    ni: int
    nj: int
    h: float = field(init=False)
    x: np.ndarray = field(init=False, repr=False)
    y: np.ndarray = field(init=False, repr=False)

    def __post_init__(self):
        if not self.L > 0:
            raise ConfigurationError("L", f"cavity length must be positive, got {self.L}")
        for name in ("ni", "nj"):
            value = getattr(self, name)
            if not _is_int(value) or value < 3:
                raise ConfigurationError(name, f"need an integer >= 3, got {value}")
        if self.ni != self.nj:
            raise ConfigurationError(
                "nj", f"square uniform mesh needs ni == nj, got ni={self.ni}, nj={self.nj}"
            )

        h = self.L / (self.ni - 1)
        x = np.linspace(0.0, self.L, self.ni)
        y = np.linspace(0.0, self.L, self.nj)
        x.flags.writeable = False
        y.flags.writeable = False

        # frozen dataclass: derived attributes set once here
        object.__setattr__(self, "h", h)
        object.__setattr__(self, "x", x)
        object.__setattr__(self, "y", y)

    @classmethod
    def from_parameters(cls, params):
        return cls(L=params.L, ni=params.ni, nj=params.nj)

    @property
    def shape(self) -> tuple:
        return (self.ni, self.nj)

    @property
    def interior(self) -> tuple:
        """Slices selecting interior nodes i = 1..ni-2, j = 1..nj-2."""
        return (slice(1, self.ni - 1), slice(1, self.nj - 1))

    def meshgrid(self):
        """2D coordinate arrays X[i, j] = x[i], Y[i, j] = y[j]."""
        return np.meshgrid(self.x, self.y, indexing="ij")
