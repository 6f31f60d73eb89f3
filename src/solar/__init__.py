"""
Solar Time Module

Sunrise/sunset lookups used to anchor the daily temperature curve.
Providers are injected into TemperatureSeries; this package does no
astronomy of its own.
"""

from .schemas import Location, SolarTimes
from .provider import SolarTimeProvider, FixedSolarTimeProvider
from .open_meteo import OpenMeteoSolarClient

__all__ = [
    "Location",
    "SolarTimes",
    "SolarTimeProvider",
    "FixedSolarTimeProvider",
    "OpenMeteoSolarClient",
]
