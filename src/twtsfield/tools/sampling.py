#--------------------------------------------------------------------------------------#
# Copyright (c) 2026 TWTSField                                                         #
# This file is part of TWTSField.                                                      #
# See README.md for details.                                                           #
#--------------------------------------------------------------------------------------#

"""
Vectorized sampling of TWTS field functors over planes of the global domain.
"""

from __future__ import annotations

from typing import Optional, Sequence, Tuple, Union

import numpy as np

__all__ = ["sample_plane", "plane_cell_indices"]


def _axis_to_index(axis: Union[int, str]) -> int:
    """
    Normalize an axis specification to an integer index.

    Parameters
    ----------
    axis : int or str
        Axis specification. Accepted values: ``0``, ``1``, ``2`` or
        ``"x"``, ``"y"``, ``"z"`` (case-insensitive).

    Returns
    -------
    int
        Axis index in ``{0, 1, 2}``.
    """

    if isinstance(axis, (int, np.integer)):
        if axis not in (0, 1, 2):
            raise ValueError("Axis index must be 0 (x), 1 (y), or 2 (z).")
        return int(axis)
    lookup = {"x": 0, "y": 1, "z": 2}
    idx = lookup.get(str(axis).lower())
    if idx is None:
        raise ValueError("Axis must be 0, 1, 2 or one of 'x', 'y', 'z'.")
    return idx


def plane_cell_indices(
    global_size: Sequence[int],
    axes: Tuple[Union[int, str], Union[int, str]] = ("x", "y"),
    fixed_index: Optional[int] = None,
) -> np.ndarray:
    """
    Cell indices of a plane spanned by two axes of the global domain.

    Parameters
    ----------
    global_size : sequence of int
        Number of cells per axis (2 or 3 entries).
    axes : tuple of two axes, default: ("x", "y")
        The axes spanning the plane, in output order.
    fixed_index : int, optional
        Index along the remaining axis in 3D; defaults to the domain centre.

    Returns
    -------
    numpy.ndarray of int, shape (n_a, n_b, dim)
    """
    size = [int(n) for n in global_size]
    dim = len(size)
    a, b = (_axis_to_index(ax) for ax in axes)
    if a == b or a >= dim or b >= dim:
        raise ValueError(f"Invalid plane axes {axes} for a {dim}D domain.")

    grids = np.meshgrid(np.arange(size[a]), np.arange(size[b]), indexing="ij")
    cells = np.zeros(grids[0].shape + (dim,), dtype=int)
    cells[..., a] = grids[0]
    cells[..., b] = grids[1]
    if dim == 3:
        (c,) = {0, 1, 2} - {a, b}
        cells[..., c] = size[c] // 2 if fixed_index is None else int(fixed_index)
    return cells


def sample_plane(
    functor,
    current_step: int,
    axes: Tuple[Union[int, str], Union[int, str]] = ("x", "y"),
    fixed_index: Optional[int] = None,
) -> np.ndarray:
    """
    Evaluate a TWTS functor for every cell of a plane in one call.

    Parameters
    ----------
    functor : TWTSFieldE or TWTSFieldB
        Field functor to sample.
    current_step : int
        Simulation time step.
    axes : tuple of two axes, default: ("x", "y")
        The axes spanning the plane.
    fixed_index : int, optional
        Index along the remaining axis in 3D; defaults to the domain centre.

    Returns
    -------
    numpy.ndarray, shape (n_a, n_b, 3)
        Normalized field on the plane.
    """
    cells = plane_cell_indices(functor.grid.global_size, axes, fixed_index)
    return functor.evaluate(cells, current_step)
