"""
Solar Time Providers

Interface for sunrise/sunset lookups plus a deterministic provider with
fixed clock times.

The interpolation core never computes solar positions itself: it asks a
provider for the sunrise and sunset of each day, passing the UTC instant
of local solar noon so that the provider cannot pick the wrong day.
"""

import logging
from datetime import datetime, time, timedelta
from typing import Protocol

from .schemas import Location, SolarTimes

logger = logging.getLogger(__name__)


class SolarTimeProvider(Protocol):
    """Anything that can resolve sunrise and sunset for a day."""

    def solar_times_for(
        self,
        when: datetime,
        location: Location,
        utc_offset: timedelta
    ) -> SolarTimes:
        """
        Resolve sunrise and sunset.

        Args:
            when: UTC instant within the requested day (local solar noon)
            location: Station location
            utc_offset: Local standard time offset from UTC

        Returns:
            SolarTimes in local standard time for the calendar day of
            when + utc_offset

        Raises:
            SolarLookupError: If the times cannot be resolved
        """
        ...


def local_date(when: datetime, utc_offset: timedelta):
    """Calendar date of a UTC instant in local standard time."""
    return (when + utc_offset).date()


class FixedSolarTimeProvider:
    """
    Provider returning the same clock times every day.

    Useful for tests, synthetic series and stations where only a rough
    daylight window is known.
    """

    def __init__(self, sunrise: time = time(6, 0), sunset: time = time(18, 0)):
        """
        Initialize provider.

        Args:
            sunrise: Local clock time of sunrise
            sunset: Local clock time of sunset

        Raises:
            ValueError: If sunset is not after sunrise
        """
        if sunset <= sunrise:
            raise ValueError(f"sunset {sunset} must be after sunrise {sunrise}")
        self.sunrise = sunrise
        self.sunset = sunset

    def solar_times_for(
        self,
        when: datetime,
        location: Location,
        utc_offset: timedelta
    ) -> SolarTimes:
        day = local_date(when, utc_offset)
        return SolarTimes(
            sunrise=datetime.combine(day, self.sunrise),
            sunset=datetime.combine(day, self.sunset),
        )
