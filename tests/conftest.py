#--------------------------------------------------------------------------------------#
# Copyright (c) 2026 TWTSField                                                         #
# This file is part of TWTSField.                                                      #
# See README.md for details.                                                           #
#--------------------------------------------------------------------------------------#

from __future__ import annotations

import math

import pytest

from twtsfield.grid import SimulationGrid
from twtsfield.params import PulseParameters

CELL_SIZE_SI = 0.1e-6


def make_params(**changes) -> PulseParameters:
    """800 nm, 30 fs TWTS pulse at 30 degree with the focus at y = 0."""
    values = dict(
        focus_y_si=0.0,
        wavelength_si=0.8e-6,
        pulselength_si=30e-15,
        w_x_si=5e-6,
        w_y_si=5e-6,
        phi=30.0 * math.pi / 180.0,
        beta_0=1.0,
        tdelay_user_si=0.0,
        auto_tdelay=True,
    )
    values.update(changes)
    return PulseParameters(**values)


@pytest.fixture
def params_factory():
    return make_params


@pytest.fixture
def pulse_params() -> PulseParameters:
    return make_params()


@pytest.fixture
def grid_3d() -> SimulationGrid:
    return SimulationGrid.from_courant((16, 16, 16), (CELL_SIZE_SI,) * 3)


@pytest.fixture
def grid_2d() -> SimulationGrid:
    return SimulationGrid.from_courant((16, 16), (CELL_SIZE_SI,) * 2)
