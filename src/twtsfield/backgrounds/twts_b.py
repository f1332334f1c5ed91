#--------------------------------------------------------------------------------------#
# Copyright (c) 2026 TWTSField                                                         #
# This file is part of TWTSField.                                                      #
# See README.md for details.                                                           #
#--------------------------------------------------------------------------------------#

"""
Magnetic field of the TWTS laser pulse.

By and Bz follow from Maxwell's curl relations applied to the same scalar
potential as Ex; each has its own algebraic structure but shares the parameter
derivation of :class:`~twtsfield.backgrounds.base.TWTSCoefficients`.
"""

from __future__ import annotations

import numpy as np

from ..params import Dimensionality
from ..rotation import back_rotate_field
from .base import TWTSCoefficients, TWTSFieldBase

__all__ = [
    "calc_twts_by_complex",
    "calc_twts_bz_complex",
    "calc_twts_by",
    "calc_twts_bz",
    "TWTSFieldB",
]


def calc_twts_by_complex(pos_si, time_si, coeffs: TWTSCoefficients) -> np.ndarray:
    """
    Complex By(r, t) of the TWTS pulse in the laser frame.

    Parameters
    ----------
    pos_si : array-like, shape (..., 3)
        Laser-frame position of the field component [m].
    time_si : float
        Absolute time including all offsets and transformations [s].
    coeffs : TWTSCoefficients
        Dimensionless pulse parameters.

    Returns
    -------
    numpy.ndarray of complex
        By normalized to unit peak amplitude, before taking the real part.
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
    cosPhi2 = coeffs.cosPhi2
    tanPhi2 = coeffs.tanPhi2
    cotPhi = coeffs.cotPhi

    helpVar1 = rho0 + 1j * y * cosPhi + 1j * z * sinPhi
    helpVar2 = cspeed * om0 * tauG * tauG + 2j * (-z - y * cotPhi) * tanPhi2 * tanPhi2
    helpVar3 = 1j * rho0 - y * cosPhi - z * sinPhi

    helpVar4 = -1.0 * (
        cspeed * cspeed * k * om0 * tauG * tauG * wy * wy * x * x
        + 2.0 * cspeed * cspeed * om0 * t * t * wy * wy * rho0
        - 2j * cspeed * cspeed * om0 * om0 * t * tauG * tauG * wy * wy * rho0
        + 2.0 * cspeed * cspeed * om0 * tauG * tauG * y * y * rho0
        - 4.0 * cspeed * om0 * t * wy * wy * z * rho0
        + 2j * cspeed * om0 * om0 * tauG * tauG * wy * wy * z * rho0
        + 2.0 * om0 * wy * wy * z * z * rho0
        + 4.0 * cspeed * om0 * t * wy * wy * y * rho0 * tanPhi2
        - 4.0 * om0 * wy * wy * y * z * rho0 * tanPhi2
        - 2j * cspeed * k * wy * wy * x * x * z * tanPhi2 * tanPhi2
        + 2.0 * om0 * wy * wy * y * y * rho0 * tanPhi2 * tanPhi2
        - 4.0 * cspeed * om0 * t * wy * wy * z * rho0 * tanPhi2 * tanPhi2
        - 4j * cspeed * y * y * z * rho0 * tanPhi2 * tanPhi2
        + 4.0 * om0 * wy * wy * z * z * rho0 * tanPhi2 * tanPhi2
        - 2j * cspeed * k * wy * wy * x * x * y * cotPhi * tanPhi2 * tanPhi2
        - 4.0 * cspeed * om0 * t * wy * wy * y * rho0 * cotPhi * tanPhi2 * tanPhi2
        - 4j * cspeed * y * y * y * rho0 * cotPhi * tanPhi2 * tanPhi2
        + 4.0 * om0 * wy * wy * y * z * rho0 * cotPhi * tanPhi2 * tanPhi2
        + 2.0 * z * sinPhi * (
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
                -2j * cspeed * y * y * z
                + om0 * wy * wy * (y * y - 2.0 * (cspeed * t - z) * z)
            )
        )
        + 2.0 * y * cosPhi * (
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
            + 1j * (
                -4j * cspeed * y * y * z
                + om0 * wy * wy * (y * y - 4.0 * (cspeed * t - z) * z)
                - 2.0 * y * (
                    +cspeed * om0 * t * wy * wy
                    + 1j * cspeed * y * y
                    - om0 * wy * wy * z
                ) * cotPhi
            ) * tanPhi2 * tanPhi2
        )
    ) / (2.0 * cspeed * wy * wy * helpVar1 * helpVar2)

    helpVar5 = -1j * cspeed * om0 * tauG * tauG + (-z - y * cotPhi) * tanPhi2 * tanPhi2 * 2.0
    helpVar6 = (
        cspeed * (cspeed * om0 * tauG * tauG + 2j * (-z - y * cotPhi) * tanPhi2 * tanPhi2)
    ) / (om0 * rho0)
    return (
        np.exp(helpVar4) * tauG / cosPhi2 / cosPhi2
        * (rho0 + 1j * y * cosPhi + 1j * z * sinPhi)
        * (
            2j * cspeed * t + cspeed * om0 * tauG * tauG - 4j * z
            + cspeed * (2j * t + om0 * tauG * tauG) * cosPhi
            + 2j * y * tanPhi2
        )
        * np.power(helpVar3, -1.5)
    ) / (2.0 * helpVar5 * np.sqrt(helpVar6))


def calc_twts_bz_complex(pos_si, time_si, coeffs: TWTSCoefficients) -> np.ndarray:
    """
    Complex Bz(r, t) of the TWTS pulse in the laser frame.

    Parameters
    ----------
    pos_si : array-like, shape (..., 3)
        Laser-frame position of the field component [m].
    time_si : float
        Absolute time including all offsets and transformations [s].
    coeffs : TWTSCoefficients
        Dimensionless pulse parameters.

    Returns
    -------
    numpy.ndarray of complex
        Bz normalized to unit peak amplitude, before taking the real part.
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

    helpVar1 = -(cspeed * z) - cspeed * y * cotPhi + 1j * cspeed * rho0 / sinPhi
    helpVar2 = 1j * rho0 - y * cosPhi - z * sinPhi
    helpVar3 = helpVar2 * cspeed
    helpVar4 = (
        cspeed * om0 * tauG * tauG
        - 1j * y * cosPhi / cosPhi2 / cosPhi2 * tanPhi2
        - 2j * z * tanPhi2 * tanPhi2
    )
    helpVar5 = (
        2.0 * cspeed * t - 1j * cspeed * om0 * tauG * tauG
        - 2.0 * z + 8.0 * y / sinPhi / sinPhi / sinPhi * sinPhi2 * sinPhi2 * sinPhi2 * sinPhi2
        - 2.0 * z * tanPhi2 * tanPhi2
    )

    helpVar6 = (
        (om0 * y * rho0 / cosPhi2 / cosPhi2 / cosPhi2 / cosPhi2) / helpVar1
        - (2j * k * x * x) / helpVar2
        - (1j * om0 * om0 * tauG * tauG * rho0) / helpVar2
        - (4j * y * y * rho0) / (wy * wy * helpVar2)
        + (om0 * om0 * tauG * tauG * y * cosPhi) / helpVar2
        + (4.0 * y * y * y * cosPhi) / (wy * wy * helpVar2)
        + (om0 * om0 * tauG * tauG * z * sinPhi) / helpVar2
        + (4.0 * y * y * z * sinPhi) / (wy * wy * helpVar2)
        + (2j * om0 * y * y * cosPhi / cosPhi2 / cosPhi2 * tanPhi2) / helpVar3
        + (om0 * y * rho0 * cosPhi / cosPhi2 / cosPhi2 * tanPhi2) / helpVar3
        + (1j * om0 * y * y * cosPhi * cosPhi / cosPhi2 / cosPhi2 * tanPhi2) / helpVar3
        + (4j * om0 * y * z * tanPhi2 * tanPhi2) / helpVar3
        - (2.0 * om0 * z * rho0 * tanPhi2 * tanPhi2) / helpVar3
        - (2j * om0 * z * z * sinPhi * tanPhi2 * tanPhi2) / helpVar3
        - (om0 * helpVar5 * helpVar5) / (cspeed * helpVar4)
    ) / 4.0

    helpVar7 = (
        cspeed * om0 * tauG * tauG
        - 1j * y * cosPhi / cosPhi2 / cosPhi2 * tanPhi2
        - 2j * z * tanPhi2 * tanPhi2
    )
    return (
        2j * np.exp(helpVar6) * tauG * tanPhi2
        * (cspeed * t - z + y * tanPhi2)
        * np.sqrt((om0 * rho0) / helpVar3)
    ) / np.power(helpVar7, 1.5)


def calc_twts_by(pos_si, time_si, coeffs: TWTSCoefficients) -> np.ndarray:
    """Real By(r, t), normalized to unit peak amplitude."""
    return np.real(calc_twts_by_complex(pos_si, time_si, coeffs)).astype(coeffs.dtype)


def calc_twts_bz(pos_si, time_si, coeffs: TWTSCoefficients) -> np.ndarray:
    """Real Bz(r, t), normalized to unit peak amplitude."""
    return np.real(calc_twts_bz_complex(pos_si, time_si, coeffs)).astype(coeffs.dtype)


class TWTSFieldB(TWTSFieldBase):
    """
    Background B-field of a TWTS laser pulse.

    By and Bz are computed in the laser frame at the positions of two staggered
    components and rotated back into simulation axes. In 3D the result is
    ``(0, By, Bz)``. In 2D the laser-frame Bz becomes -Bx of the simulation and the
    result is ``(Bx, By, 0)``.
    """

    _tag = "[TWTSFieldB]"

    def evaluate(self, cell_index, current_step) -> np.ndarray:
        time_si = self._time_si(current_step)
        pos_y, pos_other = self.mapper.bfield_positions(cell_index, self.yee_offsets)
        coeffs = self.coefficients

        # laser-frame components at the By position and at the Bz (3D) / Bx (2D) position
        by_at_y = calc_twts_by(pos_y, time_si, coeffs)
        bz_at_y = calc_twts_bz(pos_y, time_si, coeffs)
        by_at_other = calc_twts_by(pos_other, time_si, coeffs)
        bz_at_other = calc_twts_bz(pos_other, time_si, coeffs)

        if self.dimensions == Dimensionality.TWO:
            # Bz -> -Bx, the sign is necessary
            bz_at_y = -bz_at_y
            bz_at_other = -bz_at_other

        # positions were rotated before the field calls, so rotate the field pair back
        b_y, b_other = back_rotate_field(
            by_at_y, bz_at_y, by_at_other, bz_at_other, self.phi
        )

        field = self._new_field(b_y.shape)
        field[..., 1] = b_y
        if self.dimensions == Dimensionality.THREE:
            field[..., 2] = b_other
        else:
            field[..., 0] = b_other
        return self._check_finite(field)
