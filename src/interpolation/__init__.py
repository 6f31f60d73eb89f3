"""
Daily Temperature Interpolation Module

Estimates sub-daily air temperature from daily minimum/maximum records,
anchoring a four-segment curve on sunrise and sunset (Interpol.T model).

Main entry point is TemperatureSeries; DayTemperatureModel holds the
per-day curve.
"""

from common.errors import (
    InterpolationError,
    InvalidParameterError,
    DuplicateDateError,
    MissingNeighborDataError,
    NoDataForDateError,
    RecordFormatError,
    SolarLookupError,
)
from .parameters import CurveParameters, load_default_parameters
from .daily import DayTemperatureModel
from .schemas import QueryStatus, TemperatureEstimate
from .series import TemperatureSeries

__all__ = [
    # Errors
    "InterpolationError",
    "InvalidParameterError",
    "DuplicateDateError",
    "MissingNeighborDataError",
    "NoDataForDateError",
    "RecordFormatError",
    "SolarLookupError",
    # Parameters
    "CurveParameters",
    "load_default_parameters",
    # Models
    "DayTemperatureModel",
    "QueryStatus",
    "TemperatureEstimate",
    "TemperatureSeries",
]
