from .base import TWTSCoefficients, TWTSFieldBase, pulse_front_tilt_angle
from .twts_e import TWTSFieldE, calc_twts_ex, calc_twts_ex_complex
from .twts_b import (
    TWTSFieldB,
    calc_twts_by,
    calc_twts_by_complex,
    calc_twts_bz,
    calc_twts_bz_complex,
)
from .background import TWTSBackground

__all__ = [
    "TWTSCoefficients",
    "TWTSFieldBase",
    "pulse_front_tilt_angle",
    "TWTSFieldE",
    "calc_twts_ex",
    "calc_twts_ex_complex",
    "TWTSFieldB",
    "calc_twts_by",
    "calc_twts_by_complex",
    "calc_twts_bz",
    "calc_twts_bz_complex",
    "TWTSBackground",
]
