from .sampling import sample_plane, plane_cell_indices
from .diagnostics import rayleigh_length, pulse_front_tilt, delay_in_steps

__all__ = [
    "sample_plane",
    "plane_cell_indices",
    "rayleigh_length",
    "pulse_front_tilt",
    "delay_in_steps",
]
