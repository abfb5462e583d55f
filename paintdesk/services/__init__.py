from .units import (
    MeasurementUnit,
    UnsupportedUnitError,
    convert,
    from_feet,
    to_feet,
)

__all__ = [
    "MeasurementUnit",
    "UnsupportedUnitError",
    "convert",
    "from_feet",
    "to_feet",
]
