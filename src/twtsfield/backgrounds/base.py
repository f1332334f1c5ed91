#--------------------------------------------------------------------------------------#
# Copyright (c) 2026 TWTSField                                                         #
# This file is part of TWTSField.                                                      #
# See README.md for details.                                                           #
#--------------------------------------------------------------------------------------#

"""
Shared machinery of the TWTS E- and B-field functors.

The field formulas run in a dimensionless unit system: the speed of light is 1,
the unit of time is the simulation time step and the unit of length is the
distance light travels within one step. :class:`TWTSCoefficients` holds the pulse
parameters converted to this system once, so that Ex, By and Bz share exactly the
same parameter derivation.
"""

from __future__ import annotations

import math
import warnings
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from ..field_positions import FieldPositionMapper
from ..grid import SimulationGrid, YeeCellOffsets
from ..params import PulseParameters, TWTSConfigurationError, TWTSNumericalError
from ..time_delay import estimate_time_delay, time_delay_in_steps
from ..units import SPEED_OF_LIGHT_SI

__all__ = [
    "pulse_front_tilt_angle",
    "TWTSCoefficients",
    "TWTSFieldBase",
]

_PRECISIONS = {
    "float64": (np.float64, np.complex128),
    "float32": (np.float32, np.complex64),
}


def pulse_front_tilt_angle(phi: float, beta_0: float) -> float:
    r"""
    Pulse front tilt angle used inside the TWTS field formulas.

    .. math::

        \phi_T = 2 \arctan\frac{1 - \beta_0 \cos\phi}{\beta_0 \sin\phi}

    For ``beta_0 = 1`` this equals ``phi``. For other values ``phi`` is still
    responsible for pulse front tilt and dispersion only, so the dispersion is
    (although physically correct) slightly off the ideal TWTS pulse; the model is
    designed for scenarios close to ``beta_0 = 1``.

    Parameters
    ----------
    phi : float
        Interaction angle [rad].
    beta_0 : float
        Propagation speed of the overlap normalized to the speed of light.

    Returns
    -------
    float
        ``phiT`` [rad].
    """
    if beta_0 == 1.0:
        return float(phi)
    alpha_tilt = math.atan2(1.0 - beta_0 * math.cos(phi), beta_0 * math.sin(phi))
    return 2.0 * alpha_tilt


@dataclass(frozen=True)
class TWTSCoefficients:
    """
    Dimensionless pulse parameters and trigonometric shortcuts.

    Build with :meth:`from_parameters`; all attributes are scalars of ``dtype``.
    """

    unit_time: float
    unit_length: float
    dtype: type
    cspeed: float
    lambda0: float
    om0: float
    tauG: float
    w0: float
    rho0: float
    wy: float
    k: float
    phiT: float
    sinPhi: float
    cosPhi: float
    sinPhi2: float
    cosPhi2: float
    tanPhi2: float
    cotPhi: float

    @classmethod
    def from_parameters(
        cls, params: PulseParameters, dt_si: float, dtype=np.float64
    ) -> "TWTSCoefficients":
        """
        Convert ``params`` into the dimensionless unit system of time step ``dt_si``.

        Parameters
        ----------
        params : PulseParameters
        dt_si : float
            Simulation time step [s], the unit of time.
        dtype : numpy floating type, default: numpy.float64
            Precision of the coefficients.

        Returns
        -------
        TWTSCoefficients
        """
        unit_time = float(dt_si)
        unit_length = unit_time * SPEED_OF_LIGHT_SI

        phiT = pulse_front_tilt_angle(params.phi, params.beta_0)
        cspeed = 1.0
        lambda0 = params.wavelength_si / unit_length
        om0 = 2.0 * math.pi * cspeed / lambda0
        # factor 2 in tauG arises from the definition convention in the laser formula
        tauG = params.pulselength_si * 2.0 / unit_time
        # w0 is wx here
        w0 = params.w_x_si / unit_length
        rho0 = math.pi * w0 * w0 / lambda0
        # wy is the width of the TWTS pulse
        wy = params.w_y_si / unit_length
        k = 2.0 * math.pi / lambda0

        cast = np.dtype(dtype).type
        return cls(
            unit_time=unit_time,
            unit_length=unit_length,
            dtype=cast,
            cspeed=cast(cspeed),
            lambda0=cast(lambda0),
            om0=cast(om0),
            tauG=cast(tauG),
            w0=cast(w0),
            rho0=cast(rho0),
            wy=cast(wy),
            k=cast(k),
            phiT=cast(phiT),
            sinPhi=cast(math.sin(phiT)),
            cosPhi=cast(math.cos(phiT)),
            sinPhi2=cast(math.sin(phiT / 2.0)),
            cosPhi2=cast(math.cos(phiT / 2.0)),
            tanPhi2=cast(math.tan(phiT / 2.0)),
            cotPhi=cast(math.tan(math.pi / 2.0 - phiT)),
        )

    def dimensionless(self, pos_si, time_si) -> Tuple[np.ndarray, ...]:
        """
        Convert laser-frame SI positions and SI time to ``(x, y, z, t)`` in unit-system values.

        Parameters
        ----------
        pos_si : array-like, shape (..., 3)
            Laser-frame positions [m].
        time_si : float or array-like
            Absolute time including all offsets [s]; broadcast against ``pos_si``.

        Returns
        -------
        tuple of numpy.ndarray
            ``(x, y, z, t)`` with a common broadcast shape.
        """
        pos = np.asarray(pos_si, dtype=np.float64) / self.unit_length
        pos = pos.astype(self.dtype, copy=False)
        t = (np.asarray(time_si, dtype=np.float64) / self.unit_time).astype(self.dtype)
        x, y, z, t = np.broadcast_arrays(pos[..., 0], pos[..., 1], pos[..., 2], t)
        return x, y, z, t


class TWTSFieldBase:
    """
    Common state of the TWTS E- and B-field functors.

    Holds the pulse parameters, the simulation grid, the time delay and the
    position mapper. All state is fixed at construction, so a single instance can
    be evaluated concurrently for any number of cells.
    """

    _tag = "[TWTS]"

    def __init__(
        self,
        params: PulseParameters,
        grid: SimulationGrid,
        yee_offsets: Optional[YeeCellOffsets] = None,
        precision: str = "float64",
        verbose: bool = True,
    ):
        """
        Parameters
        ----------
        params : PulseParameters
            Physical pulse description.
        grid : SimulationGrid
            Global domain size, cell size and time step of the hosting simulation.
        yee_offsets : YeeCellOffsets, optional
            Staggered-grid convention; defaults to the standard Yee cell.
        precision : {"float64", "float32"}, default: "float64"
            Floating point precision of the field evaluation.
        verbose : bool, default: True
            Print the computed time delay at construction.
        """
        if not isinstance(params, PulseParameters):
            raise TWTSConfigurationError(
                f"params must be a PulseParameters instance, got {type(params).__name__}."
            )
        if not isinstance(grid, SimulationGrid):
            raise TWTSConfigurationError(
                f"grid must be a SimulationGrid instance, got {type(grid).__name__}."
            )
        if precision not in _PRECISIONS:
            raise TWTSConfigurationError(
                f"Unsupported precision {precision!r}, only supports {list(_PRECISIONS)}."
            )

        self.params = params
        self.grid = grid
        self.dimensions = grid.dimensions
        self.yee_offsets = (
            yee_offsets if yee_offsets is not None else YeeCellOffsets.standard(self.dimensions)
        )
        self.yee_offsets.check_compatible(grid)
        self.precision = precision
        self.dtype, self.complex_dtype = _PRECISIONS[precision]

        self.dt = grid.dt_si
        self.phi = params.phi
        self.half_sim_size = grid.half_size
        self.tdelay = estimate_time_delay(
            params.auto_tdelay,
            params.tdelay_user_si,
            self.half_sim_size,
            grid.cell_size_si,
            params.pulselength_si,
            params.focus_y_si,
            params.phi,
            params.beta_0,
        )
        self.mapper = FieldPositionMapper(grid, params.focus_y_si, params.phi)
        self.coefficients = TWTSCoefficients.from_parameters(params, self.dt, self.dtype)

        if params.beta_0 != 1.0:
            warnings.warn(
                f"beta_0={params.beta_0} != 1: the TWTS dispersion is only approximately "
                "that of the ideal pulse.",
                UserWarning,
            )
        if verbose:
            mode = "auto" if params.auto_tdelay else "user"
            print(
                f"{self._tag} {int(self.dimensions)}D, time delay ({mode}) = {self.tdelay:.6e} s "
                f"= {time_delay_in_steps(self.tdelay, self.dt)} steps"
            )

    # ------------------------------------------------------------------
    # Core helpers
    # ------------------------------------------------------------------
    def _time_si(self, current_step) -> float:
        """
        Absolute SI time of ``current_step`` including the time delay.

        Raises
        ------
        ValueError
            If ``current_step`` is not a non-negative integer.
        """
        step = int(current_step)
        if step != current_step or step < 0:
            raise ValueError(f"current_step must be a non-negative integer, got {current_step!r}.")
        return float(step) * self.dt - self.tdelay

    def _new_field(self, shape) -> np.ndarray:
        return np.zeros(tuple(shape) + (3,), dtype=self.dtype)

    def _check_finite(self, field: np.ndarray) -> np.ndarray:
        if not np.all(np.isfinite(field)):
            raise TWTSNumericalError(
                f"{self._tag} field evaluation produced non-finite values; "
                "check the pulse and grid parameters."
            )
        return field

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def evaluate(self, cell_index, current_step) -> np.ndarray:
        """
        Normalized field at ``cell_index`` and ``current_step``.

        Parameters
        ----------
        cell_index : array-like of int, shape (dim,) or (..., dim)
            Global cell index or a batch of indices.
        current_step : int
            Non-negative simulation time step.

        Returns
        -------
        numpy.ndarray, shape (3,) or (..., 3)
            Field normalized to the peak amplitude.
        """
        raise NotImplementedError

    def __call__(self, cell_index, current_step) -> np.ndarray:
        return self.evaluate(cell_index, current_step)

    def units_helper(self):
        """
        Print a summary of the dimensionless unit system used by the field formulas.
        """
        c = self.coefficients
        print(f"{self._tag} ######### TWTS unit system #########")
        print(f"{self._tag} unit of time   = {c.unit_time:.6e} s (time step)")
        print(f"{self._tag} unit of length = {c.unit_length:.6e} m (c * dt)")
        print(f"{self._tag} lambda0 = {float(c.lambda0):.6e}, om0 = {float(c.om0):.6e}")
        print(f"{self._tag} tauG = {float(c.tauG):.6e}, rho0 = {float(c.rho0):.6e}")
        print(f"{self._tag} w0 = {float(c.w0):.6e}, wy = {float(c.wy):.6e}, k = {float(c.k):.6e}")
        print(f"{self._tag} phi = {self.phi:.6f} rad, phiT = {float(c.phiT):.6f} rad")
        print(f"{self._tag} precision = {self.precision}")
