"""
Station Settings

Environment-driven settings for building a TemperatureSeries for one
station. Values are read from the process environment after loading a
.env file (python-dotenv):

    DTI_DATA_PATH      Path to the NCDC daily CSV export (required)
    DTI_LATITUDE       Station latitude (required)
    DTI_LONGITUDE      Station longitude (required)
    DTI_UTC_OFFSET     Local standard time offset from UTC, hours (default 0)
    DTI_PROFILE        Curve parameter profile from interpolation.yaml (optional)
    DTI_CONFIG_PATH    Alternative interpolation.yaml (optional)
    DTI_SOLAR_SOURCE   "open-meteo" (default) or "fixed"
"""

import logging
import os
from pathlib import Path
from typing import Literal, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from solar.open_meteo import OpenMeteoSolarClient
from solar.provider import FixedSolarTimeProvider, SolarTimeProvider
from solar.schemas import Location

from .parameters import CurveParameters, load_default_parameters
from .series import TemperatureSeries

logger = logging.getLogger(__name__)


class StationSettings(BaseModel):
    """Everything needed to build a series for one station."""

    data_path: Path = Field(..., description="NCDC daily CSV export")
    latitude: float = Field(..., description="Station latitude", ge=-90, le=90)
    longitude: float = Field(..., description="Station longitude", ge=-180, le=180)
    utc_offset_hours: float = Field(default=0.0, description="Local standard time offset from UTC", ge=-14, le=14)
    profile: Optional[str] = Field(None, description="Curve parameter profile")
    config_path: Optional[Path] = Field(None, description="Alternative interpolation.yaml")
    solar_source: Literal["open-meteo", "fixed"] = Field(default="open-meteo", description="Sunrise/sunset provider")

    @property
    def location(self) -> Location:
        return Location(latitude=self.latitude, longitude=self.longitude)


def load_station_settings(env_file: Optional[Path] = None) -> StationSettings:
    """
    Load station settings from the environment.

    Args:
        env_file: Optional .env file (default: search from the working directory)

    Returns:
        StationSettings

    Raises:
        ValueError: If a required variable is missing or invalid
    """
    load_dotenv(dotenv_path=env_file)

    required = ["DTI_DATA_PATH", "DTI_LATITUDE", "DTI_LONGITUDE"]
    missing = [name for name in required if not os.getenv(name)]
    if missing:
        raise ValueError(f"Missing required environment variables: {missing}")

    return StationSettings(
        data_path=os.getenv("DTI_DATA_PATH"),
        latitude=os.getenv("DTI_LATITUDE"),
        longitude=os.getenv("DTI_LONGITUDE"),
        utc_offset_hours=os.getenv("DTI_UTC_OFFSET", "0"),
        profile=os.getenv("DTI_PROFILE") or None,
        config_path=os.getenv("DTI_CONFIG_PATH") or None,
        solar_source=os.getenv("DTI_SOLAR_SOURCE", "open-meteo"),
    )


def load_parameters(settings: StationSettings) -> CurveParameters:
    """Curve parameters for the configured profile and config file."""
    if settings.config_path is not None:
        return CurveParameters.from_yaml(settings.config_path, profile=settings.profile)
    return load_default_parameters(profile=settings.profile)


def create_solar_provider(settings: StationSettings) -> SolarTimeProvider:
    if settings.solar_source == "fixed":
        return FixedSolarTimeProvider()
    return OpenMeteoSolarClient()


def build_series(settings: StationSettings) -> TemperatureSeries:
    """
    Build a TemperatureSeries from station settings.

    Raises:
        InterpolationError: If the series cannot be built
    """
    logger.info(
        f"Building series from {settings.data_path} at "
        f"({settings.latitude:.4f}, {settings.longitude:.4f}), "
        f"UTC{settings.utc_offset_hours:+g}, solar source {settings.solar_source}"
    )

    return TemperatureSeries(
        settings.data_path,
        solar_provider=create_solar_provider(settings),
        location=settings.location,
        utc_offset=settings.utc_offset_hours,
        parameters=load_parameters(settings),
    )
