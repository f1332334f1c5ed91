#--------------------------------------------------------------------------------------#
# Copyright (c) 2026 TWTSField                                                         #
# This file is part of TWTSField.                                                      #
# See README.md for details.                                                           #
#--------------------------------------------------------------------------------------#

"""
Laser pulse parameters of the TWTS background field.

The parameters are validated once at construction so that a misconfigured pulse
(e.g. a singular interaction angle) fails before any cell is evaluated.
"""

from __future__ import annotations

import dataclasses
import enum
import math
from dataclasses import dataclass

from .units import DEG_TO_RAD

__all__ = [
    "Dimensionality",
    "TWTSConfigurationError",
    "TWTSNumericalError",
    "PulseParameters",
]


class Dimensionality(enum.IntEnum):
    """Simulation dimensionality the TWTS functors are specialized for."""

    TWO = 2
    THREE = 3

    @classmethod
    def from_value(cls, value) -> "Dimensionality":
        """
        Normalize an int or ``Dimensionality`` to ``Dimensionality``.

        Parameters
        ----------
        value : int or Dimensionality
            ``2`` or ``3``.

        Returns
        -------
        Dimensionality

        Raises
        ------
        TWTSConfigurationError
            If ``value`` is neither 2 nor 3.
        """
        try:
            return cls(int(value))
        except (TypeError, ValueError):
            raise TWTSConfigurationError(
                f"TWTS fields only support 2D and 3D simulations, got dimensions={value!r}."
            ) from None


class TWTSConfigurationError(ValueError):
    """Raised when TWTS pulse or grid parameters are unusable."""


class TWTSNumericalError(FloatingPointError):
    """Raised when a field evaluation produces NaN or infinite values."""


def _require_positive(name: str, value: float):
    if not math.isfinite(value) or value <= 0.0:
        raise TWTSConfigurationError(f"{name} must be positive and finite, got {value!r}.")


def _require_finite(name: str, value: float):
    if not math.isfinite(value):
        raise TWTSConfigurationError(f"{name} must be finite, got {value!r}.")


@dataclass(frozen=True)
class PulseParameters:
    """
    Physical description of a TWTS laser pulse in SI units.

    Parameters
    ----------
    focus_y_si : float
        Distance to the laser focus in y-direction [m].
    wavelength_si : float
        Central wavelength [m].
    pulselength_si : float
        Sigma of the std. gauss for the intensity (E^2) [s].
    w_x_si : float
        Beam waist, i.e. distance from the axis where the intensity drops to
        1/e^2 of its maximum [m].
    w_y_si : float
        Width of the TWTS pulse in y [m].
    phi : float, default: pi/2
        Interaction angle between the TWTS laser propagation vector and the
        y-axis [rad]. Must lie strictly inside ``(0, pi)``.
    beta_0 : float, default: 1.0
        Propagation speed of the overlap region normalized to the speed of light.
    tdelay_user_si : float, default: 0.0
        Manual time delay [s], used if ``auto_tdelay`` is False.
    auto_tdelay : bool, default: True
        Calculate the time delay such that the TWTS pulse is not inside the
        simulation volume at timestep 0.

    Raises
    ------
    TWTSConfigurationError
        If any parameter is out of its valid range.
    """

    focus_y_si: float
    wavelength_si: float
    pulselength_si: float
    w_x_si: float
    w_y_si: float
    phi: float = 0.5 * math.pi
    beta_0: float = 1.0
    tdelay_user_si: float = 0.0
    auto_tdelay: bool = True

    def __post_init__(self):
        for f in dataclasses.fields(self):
            if f.name == "auto_tdelay":
                object.__setattr__(self, f.name, bool(self.auto_tdelay))
                continue
            try:
                object.__setattr__(self, f.name, float(getattr(self, f.name)))
            except (TypeError, ValueError):
                raise TWTSConfigurationError(
                    f"{f.name} must be a real number, got {getattr(self, f.name)!r}."
                ) from None

        _require_finite("focus_y_si", self.focus_y_si)
        _require_positive("wavelength_si", self.wavelength_si)
        _require_positive("pulselength_si", self.pulselength_si)
        _require_positive("w_x_si", self.w_x_si)
        _require_positive("w_y_si", self.w_y_si)
        _require_finite("tdelay_user_si", self.tdelay_user_si)

        # sin(phiT) and cos(phiT/2) appear in denominators of the field formulas
        if not (0.0 < self.phi < math.pi):
            raise TWTSConfigurationError(
                f"phi must lie strictly inside (0, pi), got {self.phi!r}; "
                "the TWTS field is singular at phi = 0 and phi = pi."
            )
        if not (0.0 < self.beta_0 <= 1.0):
            raise TWTSConfigurationError(
                f"beta_0 must lie in (0, 1], got {self.beta_0!r}."
            )

    @classmethod
    def from_degrees(cls, phi_deg: float, **kwargs) -> "PulseParameters":
        """
        Build parameters with the interaction angle given in degrees.

        Parameters
        ----------
        phi_deg : float
            Interaction angle [deg].
        **kwargs
            Remaining ``PulseParameters`` fields.

        Returns
        -------
        PulseParameters
        """
        return cls(phi=float(phi_deg) * DEG_TO_RAD, **kwargs)

    def replace(self, **changes) -> "PulseParameters":
        """Return a validated copy with ``changes`` applied."""
        return dataclasses.replace(self, **changes)
