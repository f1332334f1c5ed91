#--------------------------------------------------------------------------------------#
# Copyright (c) 2026 TWTSField                                                         #
# This file is part of TWTSField.                                                      #
# See README.md for details.                                                           #
#--------------------------------------------------------------------------------------#

"""
Quick a-priori diagnostics of a TWTS pulse setup.
"""

from __future__ import annotations

import math

from ..backgrounds.base import pulse_front_tilt_angle
from ..params import PulseParameters
from ..time_delay import time_delay_in_steps

__all__ = ["rayleigh_length", "pulse_front_tilt", "delay_in_steps"]


def rayleigh_length(params: PulseParameters) -> float:
    """Rayleigh length ``pi * w_x^2 / lambda`` of the pulse [m]."""
    return math.pi * params.w_x_si * params.w_x_si / params.wavelength_si


def pulse_front_tilt(params: PulseParameters) -> float:
    """Pulse front tilt angle ``phiT`` entering the field formulas [rad]."""
    return pulse_front_tilt_angle(params.phi, params.beta_0)


def delay_in_steps(functor) -> int:
    """Time delay of a TWTS functor in simulation steps."""
    return time_delay_in_steps(functor.tdelay, functor.dt)
