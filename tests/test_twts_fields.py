#--------------------------------------------------------------------------------------#
# Copyright (c) 2026 TWTSField                                                         #
# This file is part of TWTSField.                                                      #
# See README.md for details.                                                           #
#--------------------------------------------------------------------------------------#

import cmath
import math

import numpy as np
import pytest

import twtsfield as twts
from twtsfield.backgrounds.base import TWTSCoefficients, pulse_front_tilt_angle
from twtsfield.backgrounds.twts_b import (
    TWTSFieldB,
    calc_twts_by,
    calc_twts_by_complex,
    calc_twts_bz,
    calc_twts_bz_complex,
)
from twtsfield.backgrounds.twts_e import TWTSFieldE, calc_twts_ex, calc_twts_ex_complex
from twtsfield.params import TWTSConfigurationError, TWTSNumericalError

ORIGIN = np.zeros(3)
CENTRE_VALUE = cmath.exp(-0.25j * math.pi)


# ----------------------------------------------------------------------------------
# Analytic field evaluator
# ----------------------------------------------------------------------------------
def test_phi_t_equals_phi_for_beta_1():
    assert pulse_front_tilt_angle(math.pi / 2, 1.0) == math.pi / 2


@pytest.mark.parametrize("phi", np.linspace(0.1, math.pi - 0.1, 9))
def test_phi_t_tends_to_phi_near_beta_1(phi):
    assert pulse_front_tilt_angle(phi, 1.0 - 1e-12) == pytest.approx(phi, abs=1e-9)


def test_phi_t_grows_for_slower_overlap():
    phi = math.pi / 6
    assert pulse_front_tilt_angle(phi, 0.9) > phi


@pytest.mark.parametrize(
    "phi, beta_0",
    [(math.pi / 6, 1.0), (math.pi / 2, 1.0), (2.5, 1.0), (math.pi / 3, 0.95)],
)
def test_reference_values_at_pulse_centre(params_factory, grid_3d, phi, beta_0):
    """
    At x = y = z = t = 0 the closed forms reduce to exp(-i pi/4) for Ex and By
    (unit peak amplitude) and to zero for Bz, independent of tilt and beta_0.
    """
    coeffs = TWTSCoefficients.from_parameters(
        params_factory(phi=phi, beta_0=beta_0), grid_3d.dt_si
    )
    ex = complex(calc_twts_ex_complex(ORIGIN, 0.0, coeffs))
    by = complex(calc_twts_by_complex(ORIGIN, 0.0, coeffs))
    bz = complex(calc_twts_bz_complex(ORIGIN, 0.0, coeffs))

    assert abs(ex - CENTRE_VALUE) < 1e-12
    assert abs(by - CENTRE_VALUE) < 1e-12
    assert abs(bz) == 0.0


@pytest.mark.parametrize(
    "offset_si, dt_si",
    [
        ((1e-6, 0.0, 0.0), 0.0),
        ((-1e-6, 0.0, 0.0), 0.0),
        ((0.0, 0.0, 0.0), 10e-15),
        ((0.0, 0.0, 0.0), -10e-15),
        ((0.5e-6, 0.0, 0.0), 5e-15),
    ],
)
def test_ex_envelope_is_maximal_at_pulse_centre(pulse_params, grid_3d, offset_si, dt_si):
    coeffs = TWTSCoefficients.from_parameters(pulse_params, grid_3d.dt_si)
    centre = abs(calc_twts_ex_complex(ORIGIN, 0.0, coeffs))
    displaced = abs(calc_twts_ex_complex(np.asarray(offset_si), dt_si, coeffs))
    assert centre == pytest.approx(1.0)
    assert displaced < centre


def test_ex_decays_far_from_pulse(pulse_params, grid_3d):
    coeffs = TWTSCoefficients.from_parameters(pulse_params, grid_3d.dt_si)
    far = calc_twts_ex(np.array([20e-6, 0.0, 0.0]), 0.0, coeffs)
    late = calc_twts_ex(ORIGIN, 300e-15, coeffs)
    assert abs(far) < 1e-6
    assert abs(late) < 1e-6


def test_evaluator_is_vectorized(pulse_params, grid_3d):
    coeffs = TWTSCoefficients.from_parameters(pulse_params, grid_3d.dt_si)
    positions = np.array([[0.0, 0.0, 0.0], [0.2e-6, -0.1e-6, 0.3e-6], [1e-6, 1e-6, -1e-6]])
    batched = calc_twts_ex(positions, 2e-15, coeffs)
    assert batched.shape == (3,)
    for value, pos in zip(batched, positions):
        assert value == pytest.approx(calc_twts_ex(pos, 2e-15, coeffs), rel=1e-12, abs=1e-15)


# ----------------------------------------------------------------------------------
# Entry-point functors
# ----------------------------------------------------------------------------------
@pytest.mark.parametrize("grid_name", ["grid_3d", "grid_2d"])
def test_end_to_end_reference_pulse(request, pulse_params, grid_name):
    """
    800 nm, 30 fs, 5 um waists, phi = 30 deg, beta_0 = 1, focus at y = 0 and
    automatic delay: the delay is positive and finite and the fields at the
    domain centre at step round(delay/dt) are finite and not all zero.
    """
    grid = request.getfixturevalue(grid_name)
    efield = TWTSFieldE(pulse_params, grid, verbose=False)
    bfield = TWTSFieldB(pulse_params, grid, verbose=False)

    assert efield.tdelay > 0.0 and math.isfinite(efield.tdelay)
    assert bfield.tdelay == efield.tdelay

    step = round(efield.tdelay / grid.dt_si)
    centre = tuple(grid.half_size)
    e = efield.evaluate(centre, step)
    b = bfield.evaluate(centre, step)

    assert e.shape == (3,) and b.shape == (3,)
    assert np.all(np.isfinite(e)) and np.all(np.isfinite(b))
    assert np.any(e != 0.0)
    assert np.any(b != 0.0)


def test_component_slots_3d(pulse_params, grid_3d):
    efield = TWTSFieldE(pulse_params, grid_3d, verbose=False)
    bfield = TWTSFieldB(pulse_params, grid_3d, verbose=False)
    step = round(efield.tdelay / grid_3d.dt_si)
    e = efield(tuple(grid_3d.half_size), step)
    b = bfield(tuple(grid_3d.half_size), step)
    assert e[1] == 0.0 and e[2] == 0.0
    assert b[0] == 0.0


def test_component_slots_2d(pulse_params, grid_2d):
    efield = TWTSFieldE(pulse_params, grid_2d, verbose=False)
    bfield = TWTSFieldB(pulse_params, grid_2d, verbose=False)
    step = round(efield.tdelay / grid_2d.dt_si)
    e = efield(tuple(grid_2d.half_size), step)
    b = bfield(tuple(grid_2d.half_size), step)
    # Ex -> Ez, Bz -> -Bx
    assert e[0] == 0.0 and e[1] == 0.0
    assert b[2] == 0.0


def test_batch_evaluation_equals_per_cell(pulse_params, grid_3d):
    efield = TWTSFieldE(pulse_params, grid_3d, verbose=False)
    bfield = TWTSFieldB(pulse_params, grid_3d, verbose=False)
    step = round(efield.tdelay / grid_3d.dt_si)
    cells = np.array([[8, 8, 8], [0, 3, 15], [12, 1, 4], [5, 15, 9]])

    e_batch = efield.evaluate(cells, step)
    b_batch = bfield.evaluate(cells, step)
    assert e_batch.shape == (4, 3) and b_batch.shape == (4, 3)
    for i, cell in enumerate(cells):
        np.testing.assert_allclose(e_batch[i], efield.evaluate(cell, step), rtol=1e-12, atol=1e-15)
        np.testing.assert_allclose(b_batch[i], bfield.evaluate(cell, step), rtol=1e-12, atol=1e-15)


def test_ex_matches_evaluator_at_mapped_position(pulse_params, grid_3d):
    efield = TWTSFieldE(pulse_params, grid_3d, verbose=False)
    step = 1234
    cell = (3, 9, 12)
    (pos,) = efield.mapper.efield_positions(cell, efield.yee_offsets)
    expected = calc_twts_ex(pos, step * grid_3d.dt_si - efield.tdelay, efield.coefficients)
    assert efield.evaluate(cell, step)[0] == pytest.approx(expected, rel=1e-12, abs=1e-15)


def _laser_frame_b(bfield, cell, step):
    """Laser-frame (By, Bz) at the two staggered positions used for B."""
    pos_y, pos_other = bfield.mapper.bfield_positions(cell, bfield.yee_offsets)
    time_si = step * bfield.dt - bfield.tdelay
    coeffs = bfield.coefficients
    return (
        calc_twts_by(pos_y, time_si, coeffs),
        calc_twts_bz(pos_y, time_si, coeffs),
        calc_twts_by(pos_other, time_si, coeffs),
        calc_twts_bz(pos_other, time_si, coeffs),
    )


@pytest.mark.parametrize("cell", [(8, 8, 8), (6, 10, 9), (11, 5, 7)])
def test_b_assembly_3d(pulse_params, grid_3d, cell):
    bfield = TWTSFieldB(pulse_params, grid_3d, verbose=False)
    step = round(bfield.tdelay / grid_3d.dt_si)
    by_y, bz_y, by_z, bz_z = _laser_frame_b(bfield, cell, step)
    assert max(abs(bz_y), abs(bz_z)) > 1e-7

    sin_phi, cos_phi = math.sin(pulse_params.phi), math.cos(pulse_params.phi)
    expected = [
        0.0,
        -sin_phi * by_y + cos_phi * bz_y,
        -cos_phi * by_z - sin_phi * bz_z,
    ]
    np.testing.assert_allclose(bfield.evaluate(cell, step), expected, rtol=1e-12, atol=1e-15)


@pytest.mark.parametrize("cell", [(8, 8), (6, 10), (11, 5)])
def test_b_assembly_2d(pulse_params, grid_2d, cell):
    bfield = TWTSFieldB(pulse_params, grid_2d, verbose=False)
    step = round(bfield.tdelay / grid_2d.dt_si)
    by_y, bz_y, by_x, bz_x = _laser_frame_b(bfield, cell, step)
    assert max(abs(bz_y), abs(bz_x)) > 1e-7

    # laser-frame Bz is -Bx of the simulation
    sin_phi, cos_phi = math.sin(pulse_params.phi), math.cos(pulse_params.phi)
    expected = [
        -cos_phi * by_x + sin_phi * bz_x,
        -sin_phi * by_y - cos_phi * bz_y,
        0.0,
    ]
    np.testing.assert_allclose(bfield.evaluate(cell, step), expected, rtol=1e-12, atol=1e-15)


def test_user_time_delay(params_factory, grid_3d):
    params = params_factory(auto_tdelay=False, tdelay_user_si=1.5e-13)
    efield = TWTSFieldE(params, grid_3d, verbose=False)
    assert efield.tdelay == 1.5e-13
    assert efield._time_si(0) == -1.5e-13


def test_field_vanishes_before_pulse_enters(pulse_params, grid_3d):
    """With the automatic delay the pulse is far away from the domain at step 0."""
    efield = TWTSFieldE(pulse_params, grid_3d, verbose=False)
    bfield = TWTSFieldB(pulse_params, grid_3d, verbose=False)
    centre = tuple(grid_3d.half_size)
    assert np.max(np.abs(efield(centre, 0))) < 1e-6
    assert np.max(np.abs(bfield(centre, 0))) < 1e-6


def test_float32_precision(pulse_params, grid_3d):
    efield = TWTSFieldE(pulse_params, grid_3d, precision="float32", verbose=False)
    bfield = TWTSFieldB(pulse_params, grid_3d, precision="float32", verbose=False)
    step = round(efield.tdelay / grid_3d.dt_si)
    e = efield(tuple(grid_3d.half_size), step)
    b = bfield(tuple(grid_3d.half_size), step)
    assert e.dtype == np.float32 and b.dtype == np.float32
    assert np.all(np.isfinite(e)) and np.all(np.isfinite(b))


# ----------------------------------------------------------------------------------
# Errors, warnings and logging
# ----------------------------------------------------------------------------------
@pytest.mark.parametrize("step", [-1, 1.5])
def test_invalid_step_is_rejected(pulse_params, grid_3d, step):
    efield = TWTSFieldE(pulse_params, grid_3d, verbose=False)
    with pytest.raises(ValueError, match="current_step"):
        efield.evaluate((8, 8, 8), step)


def test_invalid_cell_index_is_rejected(pulse_params, grid_3d):
    bfield = TWTSFieldB(pulse_params, grid_3d, verbose=False)
    with pytest.raises(ValueError, match="cell_index"):
        bfield.evaluate((8, 8), 10)
    with pytest.raises(ValueError, match="cell_index"):
        bfield.evaluate((8.5, 8, 8), 10)


def test_invalid_construction(pulse_params, grid_3d):
    with pytest.raises(TWTSConfigurationError, match="precision"):
        TWTSFieldE(pulse_params, grid_3d, precision="float16", verbose=False)
    with pytest.raises(TWTSConfigurationError, match="PulseParameters"):
        TWTSFieldE({"phi": 0.5}, grid_3d, verbose=False)
    with pytest.raises(TWTSConfigurationError, match="SimulationGrid"):
        TWTSFieldB(pulse_params, (16, 16, 16), verbose=False)
    with pytest.raises(TWTSConfigurationError):
        TWTSFieldB(
            pulse_params, grid_3d, yee_offsets=twts.YeeCellOffsets.standard(2), verbose=False
        )


def test_non_finite_field_is_surfaced(pulse_params, grid_3d):
    efield = TWTSFieldE(pulse_params, grid_3d, verbose=False)
    with pytest.raises(TWTSNumericalError):
        efield._check_finite(np.array([0.0, np.nan, 0.0]))
    with pytest.raises(FloatingPointError):
        efield._check_finite(np.array([np.inf, 0.0, 0.0]))


def test_beta_0_below_one_warns(params_factory, grid_3d):
    with pytest.warns(UserWarning, match="beta_0"):
        TWTSFieldB(params_factory(beta_0=0.9), grid_3d, verbose=False)


def test_construction_reports_delay(pulse_params, grid_3d, capsys):
    efield = TWTSFieldE(pulse_params, grid_3d)
    out = capsys.readouterr().out
    assert "[TWTSFieldE]" in out and "time delay (auto)" in out

    efield.units_helper()
    out = capsys.readouterr().out
    assert "unit of length" in out and "phiT" in out
