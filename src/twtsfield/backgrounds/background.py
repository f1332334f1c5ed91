#--------------------------------------------------------------------------------------#
# Copyright (c) 2026 TWTSField                                                         #
# This file is part of TWTSField.                                                      #
# See README.md for details.                                                           #
#--------------------------------------------------------------------------------------#

"""
E and B background of one TWTS pulse in SI units.
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from ..grid import SimulationGrid, YeeCellOffsets
from ..params import PulseParameters, TWTSConfigurationError
from ..units import SPEED_OF_LIGHT_SI
from .twts_b import TWTSFieldB
from .twts_e import TWTSFieldE

__all__ = ["TWTSBackground"]


class TWTSBackground:
    r"""
    Pair of TWTS E- and B-field functors sharing one parameter set.

    The functors return fields normalized to the peak amplitude. This class applies
    the physical scale

    .. math::

        \mathbf{E} = E_0\,\hat{\mathbf{E}}, \qquad \mathbf{B} = \frac{E_0}{c}\,\hat{\mathbf{B}}

    with :math:`E_0` given by ``amplitude_si``.

    ``influence_particle_pusher`` is metadata for the hosting solver only: it
    records whether the background should also act on the particle pusher and
    does not change the returned fields.
    """

    def __init__(
        self,
        params: PulseParameters,
        grid: SimulationGrid,
        amplitude_si: float,
        yee_offsets: Optional[YeeCellOffsets] = None,
        precision: str = "float64",
        influence_particle_pusher: bool = True,
        verbose: bool = True,
    ):
        """
        Parameters
        ----------
        params : PulseParameters
            Physical pulse description.
        grid : SimulationGrid
            Global domain and unit system.
        amplitude_si : float
            Peak electric field amplitude [V/m].
        yee_offsets : YeeCellOffsets, optional
            Staggered-grid convention; defaults to the standard Yee cell.
        precision : {"float64", "float32"}, default: "float64"
            Floating point precision of the field evaluation.
        influence_particle_pusher : bool, default: True
            Whether the hosting solver should apply the background to the particle pusher.
        verbose : bool, default: True
            Print the computed time delays at construction.
        """
        amplitude = float(amplitude_si)
        if not np.isfinite(amplitude):
            raise TWTSConfigurationError(f"amplitude_si must be finite, got {amplitude_si!r}.")
        self.amplitude_si = amplitude
        self.influence_particle_pusher = bool(influence_particle_pusher)

        self.efield_functor = TWTSFieldE(
            params, grid, yee_offsets=yee_offsets, precision=precision, verbose=verbose
        )
        self.bfield_functor = TWTSFieldB(
            params, grid, yee_offsets=yee_offsets, precision=precision, verbose=verbose
        )

    @property
    def tdelay(self) -> float:
        return self.efield_functor.tdelay

    def efield(self, cell_index, current_step) -> np.ndarray:
        """
        Electric field [V/m].

        Parameters
        ----------
        cell_index : array-like of int, shape (dim,) or (..., dim)
            Global cell index or a batch of indices.
        current_step : int
            Non-negative simulation time step.

        Returns
        -------
        numpy.ndarray, shape (3,) or (..., 3)
        """
        return self.amplitude_si * self.efield_functor(cell_index, current_step)

    def bfield(self, cell_index, current_step) -> np.ndarray:
        """
        Magnetic field [T]; see :meth:`efield` for the parameters.
        """
        return (self.amplitude_si / SPEED_OF_LIGHT_SI) * self.bfield_functor(
            cell_index, current_step
        )
