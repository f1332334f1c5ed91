from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("twtsfield")
except PackageNotFoundError:
    __version__ = "0.0.0"

__all__ = [
    "PulseParameters",
    "Dimensionality",
    "TWTSConfigurationError",
    "TWTSNumericalError",
    "SimulationGrid",
    "YeeCellOffsets",
    "rotate_position",
    "back_rotate_field",
    "estimate_time_delay",
    "FieldPositionMapper",
    "TWTSFieldE",
    "TWTSFieldB",
    "TWTSBackground",
]


# Lazy attribute loader: import submodules *only when accessed*.
def __getattr__(name):
    """
    Lazy attribute loader that imports and returns public classes on demand.

    Parameters
    ----------
    name : str
        The attribute name requested (e.g., ``"TWTSFieldE"``, ``"SimulationGrid"``).

    Returns
    -------
    object
        The requested class or function.

    Raises
    ------
    AttributeError
        If the requested attribute is not part of the public API.
    """
    if name in {
        "PulseParameters",
        "Dimensionality",
        "TWTSConfigurationError",
        "TWTSNumericalError",
    }:
        from .params import (
            PulseParameters,
            Dimensionality,
            TWTSConfigurationError,
            TWTSNumericalError,
        )

        return locals()[name]

    if name in {"SimulationGrid", "YeeCellOffsets"}:
        from .grid import SimulationGrid, YeeCellOffsets

        return locals()[name]

    if name in {"rotate_position", "back_rotate_field"}:
        from .rotation import rotate_position, back_rotate_field

        return locals()[name]

    if name == "estimate_time_delay":
        from .time_delay import estimate_time_delay

        return estimate_time_delay

    if name == "FieldPositionMapper":
        from .field_positions import FieldPositionMapper

        return FieldPositionMapper

    if name == "TWTSFieldE":
        from .backgrounds.twts_e import TWTSFieldE

        return TWTSFieldE
    if name == "TWTSFieldB":
        from .backgrounds.twts_b import TWTSFieldB

        return TWTSFieldB
    if name == "TWTSBackground":
        from .backgrounds.background import TWTSBackground

        return TWTSBackground
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
