"""
Solar Time Data Models

Pydantic schemas for station locations and per-day sunrise/sunset times.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, validator


class Location(BaseModel):
    """Geographic position of a weather station."""

    latitude: float = Field(..., description="Station latitude", ge=-90, le=90)
    longitude: float = Field(..., description="Station longitude", ge=-180, le=180)
    elevation_m: Optional[float] = Field(None, description="Station elevation (meters)")
    name: Optional[str] = Field(None, description="Station name")


class SolarTimes(BaseModel):
    """
    Sunrise and sunset for one calendar day.

    Both times are naive datetimes in the station's local standard time.
    """

    sunrise: datetime = Field(..., description="Sunrise (local standard time)")
    sunset: datetime = Field(..., description="Sunset (local standard time)")

    @validator('sunset')
    def sunset_after_sunrise(cls, v, values):
        """Ensure sunset follows sunrise."""
        sunrise = values.get('sunrise')
        if sunrise is not None and v <= sunrise:
            raise ValueError(f"sunset {v} must be after sunrise {sunrise}")
        return v

    @property
    def day_length_hours(self) -> float:
        """Hours of daylight."""
        return (self.sunset - self.sunrise).total_seconds() / 3600
