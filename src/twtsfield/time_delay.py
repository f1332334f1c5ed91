#--------------------------------------------------------------------------------------#
# Copyright (c) 2026 TWTSField                                                         #
# This file is part of TWTSField.                                                      #
# See README.md for details.                                                           #
#--------------------------------------------------------------------------------------#

"""
Time delay that keeps the TWTS pulse outside the simulation volume at step 0.
"""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np

from .params import Dimensionality
from .units import SPEED_OF_LIGHT_SI

__all__ = ["estimate_time_delay", "time_delay_in_steps"]

# Fudge factor so the pulse starts to impact the simulation volume at low intensity.
PULSE_LENGTH_MARGIN = 3.0


def estimate_time_delay(
    auto_tdelay: bool,
    tdelay_user_si: float,
    half_sim_size: Sequence[int],
    cell_size_si: Sequence[float],
    pulselength_si: float,
    focus_y_si: float,
    phi: float,
    beta_0: float,
) -> float:
    """
    Obtain the SI time delay that later enters the field calculations as t.

    Parameters
    ----------
    auto_tdelay : bool
        Calculate the delay such that the pulse is not inside the simulation
        volume at timestep 0.
    tdelay_user_si : float
        Manual time delay [s], returned unchanged if ``auto_tdelay`` is False.
    half_sim_size : sequence of int
        Centre of the simulation volume in number of cells, 2 or 3 entries.
    cell_size_si : sequence of float
        Cell extent per axis [m].
    pulselength_si : float
        Sigma of the std. gauss for the intensity (E^2) [s].
    focus_y_si : float
        Distance to the laser focus in y-direction [m].
    phi : float
        Interaction angle between laser propagation and the y-axis [rad].
    beta_0 : float
        Propagation speed of the overlap normalized to the speed of light.

    Returns
    -------
    float
        Time delay [s].
    """
    if not auto_tdelay:
        return float(tdelay_user_si)

    dim = Dimensionality.from_value(len(half_sim_size))
    # angle between the laser pulse front and the y-axis; good approximation for beta_0 ~ 1
    eta = math.pi / 2 - (phi / 2)
    # projected half-depth (z) in 3D, half-width (x) in 2D gives the y-walkoff of the pulse;
    # abs() keeps the offset correct for phi beyond 90 degree
    axis = 2 if dim == Dimensionality.THREE else 0
    y1 = float(half_sim_size[axis] * cell_size_si[axis]) * abs(math.cos(eta))
    # approximate cross section of the pulse through the y-axis
    y2 = PULSE_LENGTH_MARGIN * (pulselength_si * SPEED_OF_LIGHT_SI) / math.cos(eta)
    # y-position of the laser coordinate origin within the simulation
    y3 = focus_y_si
    return (y1 + y2 + y3) / (SPEED_OF_LIGHT_SI * beta_0)


def time_delay_in_steps(tdelay_si: float, dt_si: float) -> int:
    """Number of time steps closest to ``tdelay_si``."""
    return int(np.rint(tdelay_si / dt_si))
