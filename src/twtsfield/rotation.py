#--------------------------------------------------------------------------------------#
# Copyright (c) 2026 TWTSField                                                         #
# This file is part of TWTSField.                                                      #
# See README.md for details.                                                           #
#--------------------------------------------------------------------------------------#

"""
Rotations between the simulation frame and the TWTS laser frame.

The laser propagation direction encloses an angle ``phi`` with the simulation
y-axis (direction of the sliding window). Position vectors are therefore rotated
around the simulation x-axis before the TWTS field functions are called, which
are defined in the non-rotated frame and only use ``phi`` to determine the
amount of pulse front tilt. The rotation is ``RotationMatrix[pi/2 + phi]`` on
``(y, z)``; the 180 degree flip at ``phi = pi/2`` stems from the laser frame being
oriented the other way round.

All functions operate on the last axis of numpy arrays, so whole batches of
positions are transformed at once.
"""

from __future__ import annotations

from typing import Tuple

import numpy as np

from .params import Dimensionality

__all__ = [
    "rotate_position",
    "back_rotate_field",
    "remap_2d",
    "unmap_2d",
]


def remap_2d(vector) -> np.ndarray:
    r"""
    Rotate by 90 degree around the y-axis so that the laser propagates in the 2D plane.

    .. math::

        x \to z,\quad y \to y,\quad z \to -x

    Parameters
    ----------
    vector : array-like, shape (..., 3)

    Returns
    -------
    numpy.ndarray, shape (..., 3)
        ``(-z, y, x)``.
    """
    v = np.asarray(vector)
    return np.stack((-v[..., 2], v[..., 1], v[..., 0]), axis=-1)


def unmap_2d(vector) -> np.ndarray:
    """
    Inverse of :func:`remap_2d`, i.e. ``(x, y, z) -> (z, y, -x)``.

    Parameters
    ----------
    vector : array-like, shape (..., 3)

    Returns
    -------
    numpy.ndarray, shape (..., 3)
    """
    v = np.asarray(vector)
    return np.stack((v[..., 2], v[..., 1], -v[..., 0]), axis=-1)


def _rotate_yz(vector: np.ndarray, phi: float) -> np.ndarray:
    sin_phi = np.sin(phi)
    cos_phi = np.cos(phi)
    x = vector[..., 0]
    y = vector[..., 1]
    z = vector[..., 2]
    return np.stack(
        (
            x,
            -sin_phi * y - cos_phi * z,
            +cos_phi * y - sin_phi * z,
        ),
        axis=-1,
    )


def rotate_position(position, phi: float, dimensions=Dimensionality.THREE) -> np.ndarray:
    """
    Rotate simulation positions into the TWTS laser frame.

    Parameters
    ----------
    position : array-like, shape (..., 2) or (..., 3)
        Positions relative to the laser origin, with as many entries on the
        last axis as the simulation has dimensions.
    phi : float
        Interaction angle between laser propagation and the simulation y-axis [rad].
    dimensions : int or Dimensionality, default: 3
        Simulation dimensionality.

    Returns
    -------
    numpy.ndarray of float, shape (..., 3)
        Laser-frame positions. In 2D the simulation x-axis is mapped onto the
        laser z-axis before rotating, so the laser x-component (the
        non-existing simulation z-coordinate) is zero.
    """
    pos = np.asarray(position, dtype=float)
    dim = Dimensionality.from_value(dimensions)
    if pos.shape[-1] != int(dim):
        raise ValueError(
            f"Expected positions with {int(dim)} components, got shape {pos.shape}."
        )

    if dim == Dimensionality.THREE:
        return _rotate_yz(pos, phi)

    # embed (x, y) as (x, y, 0); the x-axis of rotation now holds the simulation z
    embedded = np.concatenate((pos, np.zeros(pos.shape[:-1] + (1,))), axis=-1)
    return _rotate_yz(remap_2d(embedded), phi)


def back_rotate_field(
    f_y_at_y,
    f_z_at_y,
    f_y_at_z,
    f_z_at_z,
    phi: float,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Rotate laser-frame field components back into simulation axes.

    Applies ``RotationMatrix[-(pi/2 + phi)]`` to the ``(F_y, F_z)`` pair. Since the
    staggered grid samples each component at its own position, the laser-frame
    pair is evaluated twice: once at the position of the simulation
    y-component and once at the position of the other component.

    Parameters
    ----------
    f_y_at_y, f_z_at_y : array-like
        Laser-frame y and z field components at the y-component position.
    f_y_at_z, f_z_at_z : array-like
        Laser-frame y and z field components at the z-component position.
    phi : float
        Interaction angle [rad].

    Returns
    -------
    tuple of numpy.ndarray
        ``(F_y, F_z)`` in simulation axes.
    """
    sin_phi = np.sin(phi)
    cos_phi = np.cos(phi)
    f_y = -sin_phi * np.asarray(f_y_at_y) + cos_phi * np.asarray(f_z_at_y)
    f_z = -cos_phi * np.asarray(f_y_at_z) - sin_phi * np.asarray(f_z_at_z)
    return f_y, f_z
