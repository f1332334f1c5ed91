#--------------------------------------------------------------------------------------#
# Copyright (c) 2026 TWTSField                                                         #
# This file is part of TWTSField.                                                      #
# See README.md for details.                                                           #
#--------------------------------------------------------------------------------------#

"""
Mapping of grid cells onto laser-frame SI positions of the field components.
"""

from __future__ import annotations

from typing import List, Sequence

import numpy as np

from .grid import SimulationGrid, YeeCellOffsets
from .params import Dimensionality
from .rotation import rotate_position

__all__ = ["FieldPositionMapper"]


class FieldPositionMapper:
    """
    Convert cell indices plus Yee offsets into rotated SI positions.

    The TWTS laser coordinate origin is centred transversally with respect to the
    global simulation volume and defined longitudinally by the laser centre in y
    (usually the maximum of intensity).
    """

    def __init__(self, grid: SimulationGrid, focus_y_si: float, phi: float):
        """
        Parameters
        ----------
        grid : SimulationGrid
            Global domain and unit system.
        focus_y_si : float
            Distance to the laser focus in y-direction [m].
        phi : float
            Interaction angle [rad].
        """
        self.grid = grid
        self.dimensions = grid.dimensions
        self.phi = float(phi)
        self.cell_dimensions = grid.cell_size

        laser_origin = grid.half_size.astype(float)
        laser_origin[1] = float(focus_y_si) / self.cell_dimensions[1]
        self.laser_origin = laser_origin

    def _cells(self, cell_index) -> np.ndarray:
        raw = np.asarray(cell_index)
        if raw.ndim == 0 or raw.shape[-1] != int(self.dimensions):
            raise ValueError(
                f"cell_index must have {int(self.dimensions)} entries on its last axis, "
                f"got shape {raw.shape}."
            )
        cells = raw.astype(float)
        if not np.issubdtype(raw.dtype, np.integer) and np.any(cells != np.round(cells)):
            raise ValueError(f"cell_index must contain integer cell indices, got {cell_index!r}.")
        return cells

    def position(self, cell_index, offset: Sequence[float]) -> np.ndarray:
        """
        Laser-frame SI position of one field component.

        Parameters
        ----------
        cell_index : array-like of int, shape (..., dim)
            Global cell indices.
        offset : sequence of float, length dim
            Fractional in-cell offset of the field component.

        Returns
        -------
        numpy.ndarray of float, shape (..., 3)
            Rotated position relative to the laser origin [m].
        """
        cells = self._cells(cell_index)
        position_si = (cells + np.asarray(offset, dtype=float) - self.laser_origin) * self.cell_dimensions
        return rotate_position(position_si, self.phi, self.dimensions)

    def positions(self, cell_index, offsets: Sequence[Sequence[float]]) -> List[np.ndarray]:
        """Laser-frame SI positions for several components of the same cells."""
        cells = self._cells(cell_index)
        return [self.position(cells, offset) for offset in offsets]

    def efield_positions(self, cell_index, yee: YeeCellOffsets) -> List[np.ndarray]:
        """
        Positions needed by the E-field functor.

        In 3D the Ex position is returned. In 2D the Ex field of the laser frame
        becomes Ez of the simulation, so the Ez offset is used.
        """
        if self.dimensions == Dimensionality.THREE:
            return self.positions(cell_index, [yee.efield[0]])
        return self.positions(cell_index, [yee.efield[2]])

    def bfield_positions(self, cell_index, yee: YeeCellOffsets) -> List[np.ndarray]:
        """
        Positions needed by the B-field functor, ``[By position, second position]``.

        The second position is the Bz offset in 3D. In 2D, Bz of the laser frame
        becomes -Bx of the simulation, so the Bx offset is used.
        """
        if self.dimensions == Dimensionality.THREE:
            return self.positions(cell_index, [yee.bfield[1], yee.bfield[2]])
        return self.positions(cell_index, [yee.bfield[1], yee.bfield[0]])
