#--------------------------------------------------------------------------------------#
# Copyright (c) 2026 TWTSField                                                         #
# This file is part of TWTSField.                                                      #
# See README.md for details.                                                           #
#--------------------------------------------------------------------------------------#

"""
Electric field of the TWTS laser pulse.
"""

from __future__ import annotations

import numpy as np

from ..params import Dimensionality
from .base import TWTSCoefficients, TWTSFieldBase

__all__ = ["calc_twts_ex_complex", "calc_twts_ex", "TWTSFieldE"]


def calc_twts_ex_complex(pos_si, time_si, coeffs: TWTSCoefficients) -> np.ndarray:
    """
    Complex Ex(r, t) of the TWTS pulse in the laser frame.

    The expression is the exact paraxial solution with built-in pulse front tilt
    and dispersion. It is singular for ``phiT`` at 0 or pi (``sinPhi`` and
    ``cosPhi2`` in denominators), which the pulse parameters exclude.

    Parameters
    ----------
    pos_si : array-like, shape (..., 3)
        Laser-frame position of the Ex component [m].
    time_si : float
        Absolute time including all offsets and transformations [s].
    coeffs : TWTSCoefficients
        Dimensionless pulse parameters.

    Returns
    -------
    numpy.ndarray of complex
        Ex normalized to unit peak amplitude, before taking the real part.
    """
    x, y, z, t = coeffs.dimensionless(pos_si, time_si)
    cspeed = coeffs.cspeed
    om0 = coeffs.om0
    tauG = coeffs.tauG
    rho0 = coeffs.rho0
    wy = coeffs.wy
    k = coeffs.k

    sinPhi = coeffs.sinPhi
    cosPhi = coeffs.cosPhi
    sinPhi2 = coeffs.sinPhi2
    cosPhi2 = coeffs.cosPhi2
    tanPhi2 = coeffs.tanPhi2
    cotPhi = coeffs.cotPhi

    # The helpVar terms decrease the nesting level of the evaluated expression and keep
    # its grouping auditable against the derivation.
    helpVar1 = 1j * rho0 - y * cosPhi - z * sinPhi
    helpVar2 = (
        -1j * cspeed * om0 * tauG * tauG
        - y * cosPhi / cosPhi2 / cosPhi2 * tanPhi2
        - 2.0 * z * tanPhi2 * tanPhi2
    )
    helpVar3 = 1j * rho0 - y * cosPhi - z * sinPhi

    helpVar4 = (
        -(cspeed * cspeed * k * om0 * tauG * tauG * wy * wy * x * x)
        - 2.0 * cspeed * cspeed * om0 * t * t * wy * wy * rho0
        + 2j * cspeed * cspeed * om0 * om0 * t * tauG * tauG * wy * wy * rho0
        - 2.0 * cspeed * cspeed * om0 * tauG * tauG * y * y * rho0
        + 4.0 * cspeed * om0 * t * wy * wy * z * rho0
        - 2j * cspeed * om0 * om0 * tauG * tauG * wy * wy * z * rho0
        - 2.0 * om0 * wy * wy * z * z * rho0
        - 8j * om0 * wy * wy * y * (cspeed * t - z) * z * sinPhi2 * sinPhi2
        + 8j / sinPhi * (
            +2.0 * z * z * (cspeed * om0 * t * wy * wy + 1j * cspeed * y * y - om0 * wy * wy * z)
            + y * (
                +cspeed * k * wy * wy * x * x
                - 2j * cspeed * om0 * t * wy * wy * rho0
                + 2.0 * cspeed * y * y * rho0
                + 2j * om0 * wy * wy * z * rho0
            ) * cotPhi / sinPhi
        ) * sinPhi2 * sinPhi2 * sinPhi2 * sinPhi2
        - 2j * cspeed * cspeed * om0 * t * t * wy * wy * z * sinPhi
        - 2.0 * cspeed * cspeed * om0 * om0 * t * tauG * tauG * wy * wy * z * sinPhi
        - 2j * cspeed * cspeed * om0 * tauG * tauG * y * y * z * sinPhi
        + 4j * cspeed * om0 * t * wy * wy * z * z * sinPhi
        + 2.0 * cspeed * om0 * om0 * tauG * tauG * wy * wy * z * z * sinPhi
        - 2j * om0 * wy * wy * z * z * z * sinPhi
        - 4.0 * cspeed * om0 * t * wy * wy * y * rho0 * tanPhi2
        + 4.0 * om0 * wy * wy * y * z * rho0 * tanPhi2
        + 2j * y * y * (
            +cspeed * om0 * t * wy * wy + 1j * cspeed * y * y - om0 * wy * wy * z
        ) * cosPhi * cosPhi / cosPhi2 / cosPhi2 * tanPhi2
        + 2j * cspeed * k * wy * wy * x * x * z * tanPhi2 * tanPhi2
        - 2.0 * om0 * wy * wy * y * y * rho0 * tanPhi2 * tanPhi2
        + 4.0 * cspeed * om0 * t * wy * wy * z * rho0 * tanPhi2 * tanPhi2
        + 4j * cspeed * y * y * z * rho0 * tanPhi2 * tanPhi2
        - 4.0 * om0 * wy * wy * z * z * rho0 * tanPhi2 * tanPhi2
        - 2j * om0 * wy * wy * y * y * z * sinPhi * tanPhi2 * tanPhi2
        - 2.0 * y * cosPhi * (
            +om0 * (
                +cspeed * cspeed * (
                    1j * t * t * wy * wy
                    + om0 * t * tauG * tauG * wy * wy
                    + 1j * tauG * tauG * y * y
                )
                - cspeed * (2j * t + om0 * tauG * tauG) * wy * wy * z
                + 1j * wy * wy * z * z
            )
            + 2j * om0 * wy * wy * y * (cspeed * t - z) * tanPhi2
            + 1j * tanPhi2 * tanPhi2 * (
                -4j * cspeed * y * y * z
                + om0 * wy * wy * (y * y - 4.0 * (cspeed * t - z) * z)
            )
        )
    ) / (2.0 * cspeed * wy * wy * helpVar1 * helpVar2)

    helpVar5 = (
        cspeed * om0 * tauG * tauG
        - 8j * y * cotPhi / sinPhi / sinPhi * sinPhi2 * sinPhi2 * sinPhi2 * sinPhi2
        - 2j * z * tanPhi2 * tanPhi2
    )
    return (
        np.exp(helpVar4) * tauG * np.sqrt((cspeed * om0 * rho0) / helpVar3)
    ) / np.sqrt(helpVar5)


def calc_twts_ex(pos_si, time_si, coeffs: TWTSCoefficients) -> np.ndarray:
    """
    Real Ex(r, t) of the TWTS pulse, normalized to unit peak amplitude.

    See :func:`calc_twts_ex_complex` for the parameters.
    """
    return np.real(calc_twts_ex_complex(pos_si, time_si, coeffs)).astype(coeffs.dtype)


class TWTSFieldE(TWTSFieldBase):
    r"""
    Background E-field of a TWTS laser pulse.

    The pulse is an obliquely incident, pulse-front-tilted Gaussian beam. Only the
    laser-frame Ex component is non-zero; it occupies the x-slot in 3D and, after
    the 2D axis remap :math:`E_x \to E_z`, the z-slot in 2D.
    """

    _tag = "[TWTSFieldE]"

    def evaluate(self, cell_index, current_step) -> np.ndarray:
        time_si = self._time_si(current_step)
        (pos,) = self.mapper.efield_positions(cell_index, self.yee_offsets)
        ex = calc_twts_ex(pos, time_si, self.coefficients)

        field = self._new_field(ex.shape)
        if self.dimensions == Dimensionality.THREE:
            field[..., 0] = ex
        else:
            # Ex -> Ez in 2D
            field[..., 2] = ex
        return self._check_finite(field)
