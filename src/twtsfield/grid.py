#--------------------------------------------------------------------------------------#
# Copyright (c) 2026 TWTSField                                                         #
# This file is part of TWTSField.                                                      #
# See README.md for details.                                                           #
#--------------------------------------------------------------------------------------#

"""
Simulation-side collaborators of the TWTS field functors.

The hosting PIC code owns the domain, the unit system and the staggered-grid
convention. These read-only descriptions are injected into the functors at
construction instead of being looked up from a global simulation environment.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence, Tuple

import numpy as np

from .params import Dimensionality, TWTSConfigurationError
from .units import SPEED_OF_LIGHT_SI

__all__ = ["SimulationGrid", "YeeCellOffsets"]


@dataclass(frozen=True)
class SimulationGrid:
    """
    Global simulation domain and unit system.

    Parameters
    ----------
    global_size : sequence of int
        Number of cells of the global domain per axis, ``(nx, ny)`` or
        ``(nx, ny, nz)``. The y-axis is the longitudinal axis (direction of the
        sliding window).
    cell_size_si : sequence of float
        Cell extent per axis [m] (cell width, height and depth).
    dt_si : float
        Time step [s].
    """

    global_size: Tuple[int, ...]
    cell_size_si: Tuple[float, ...]
    dt_si: float

    def __post_init__(self):
        size = tuple(int(n) for n in self.global_size)
        cell = tuple(float(d) for d in self.cell_size_si)
        object.__setattr__(self, "global_size", size)
        object.__setattr__(self, "cell_size_si", cell)
        object.__setattr__(self, "dt_si", float(self.dt_si))

        Dimensionality.from_value(len(size))
        if len(cell) != len(size):
            raise TWTSConfigurationError(
                f"cell_size_si has {len(cell)} entries but global_size has {len(size)}."
            )
        if any(n <= 0 for n in size):
            raise TWTSConfigurationError(
                f"global_size must contain positive cell counts, got {size}."
            )
        if any(not math.isfinite(d) or d <= 0.0 for d in cell):
            raise TWTSConfigurationError(
                f"cell_size_si must be positive and finite, got {cell}."
            )
        if not math.isfinite(self.dt_si) or self.dt_si <= 0.0:
            raise TWTSConfigurationError(f"dt_si must be positive, got {self.dt_si!r}.")

    @classmethod
    def from_courant(
        cls,
        global_size: Sequence[int],
        cell_size_si: Sequence[float],
        courant: float = 0.995,
    ) -> "SimulationGrid":
        """
        Build a grid whose time step satisfies the Yee CFL condition.

        Parameters
        ----------
        global_size : sequence of int
            Number of cells per axis.
        cell_size_si : sequence of float
            Cell extent per axis [m].
        courant : float, default: 0.995
            Fraction of the CFL limit ``1 / (c * sqrt(sum(1/d_i^2)))``.

        Returns
        -------
        SimulationGrid
        """
        if not (0.0 < courant <= 1.0):
            raise TWTSConfigurationError(f"courant must lie in (0, 1], got {courant!r}.")
        inv = sum(1.0 / float(d) ** 2 for d in cell_size_si)
        dt = courant / (SPEED_OF_LIGHT_SI * math.sqrt(inv))
        return cls(global_size=tuple(global_size), cell_size_si=tuple(cell_size_si), dt_si=dt)

    @property
    def dimensions(self) -> Dimensionality:
        return Dimensionality(len(self.global_size))

    @property
    def half_size(self) -> np.ndarray:
        """Half of the global domain size in cells (integer division)."""
        return np.asarray(self.global_size, dtype=int) // 2

    @property
    def cell_size(self) -> np.ndarray:
        return np.asarray(self.cell_size_si, dtype=float)

    @property
    def unit_length_si(self) -> float:
        """Length travelled by light within one time step [m]."""
        return self.dt_si * SPEED_OF_LIGHT_SI


def _as_offsets(name: str, values, dim: int) -> Tuple[Tuple[float, ...], ...]:
    rows = tuple(tuple(float(v) for v in row) for row in values)
    if len(rows) != 3:
        raise TWTSConfigurationError(
            f"{name} needs offsets for 3 field components, got {len(rows)}."
        )
    for row in rows:
        if len(row) != dim:
            raise TWTSConfigurationError(
                f"{name} offsets must have {dim} entries, got {row}."
            )
    return rows


@dataclass(frozen=True)
class YeeCellOffsets:
    """
    Fractional in-cell positions of the field components on the staggered grid.

    Parameters
    ----------
    efield : sequence of 3 sequences of float
        Offsets of Ex, Ey and Ez in units of the cell size.
    bfield : sequence of 3 sequences of float
        Offsets of Bx, By and Bz in units of the cell size.
    """

    efield: Tuple[Tuple[float, ...], ...]
    bfield: Tuple[Tuple[float, ...], ...]

    def __post_init__(self):
        efield = tuple(self.efield)
        dim = len(efield[0]) if efield else 0
        Dimensionality.from_value(dim)
        object.__setattr__(self, "efield", _as_offsets("efield", self.efield, dim))
        object.__setattr__(self, "bfield", _as_offsets("bfield", self.bfield, dim))

    @classmethod
    def standard(cls, dimensions=Dimensionality.THREE) -> "YeeCellOffsets":
        """
        Offsets of the standard Yee cell.

        E components sit on the cell edges, B components on the cell faces. In
        2D the third (z) entry is dropped.

        Parameters
        ----------
        dimensions : int or Dimensionality, default: 3

        Returns
        -------
        YeeCellOffsets
        """
        dim = int(Dimensionality.from_value(dimensions))
        efield = ((0.5, 0.0, 0.0), (0.0, 0.5, 0.0), (0.0, 0.0, 0.5))
        bfield = ((0.0, 0.5, 0.5), (0.5, 0.0, 0.5), (0.5, 0.5, 0.0))
        return cls(
            efield=tuple(row[:dim] for row in efield),
            bfield=tuple(row[:dim] for row in bfield),
        )

    @property
    def dimensions(self) -> Dimensionality:
        return Dimensionality(len(self.efield[0]))

    def check_compatible(self, grid: SimulationGrid):
        """Raise if the offsets do not match the grid dimensionality."""
        if self.dimensions != grid.dimensions:
            raise TWTSConfigurationError(
                f"Yee offsets are {int(self.dimensions)}D but the grid is "
                f"{int(grid.dimensions)}D."
            )
