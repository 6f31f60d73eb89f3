"""
Open-Meteo Solar Time Client

Fetches daily sunrise/sunset for a station from the Open-Meteo
historical weather API.

API Documentation: https://open-meteo.com/en/docs/historical-weather-api

Times are requested in GMT and shifted to the station's local standard
time, so DST never enters the picture. A whole calendar year (plus one day
either side) is requested on each cache miss; building a multi-year series
therefore costs one request per year.
"""

import logging
from datetime import date, datetime, timedelta
from typing import Dict, Optional, Set, Tuple

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from common.errors import SolarLookupError

from .provider import local_date
from .schemas import Location, SolarTimes

logger = logging.getLogger(__name__)


class OpenMeteoSolarClient:
    """Solar time provider backed by the Open-Meteo archive API."""

    HISTORICAL_URL = "https://archive-api.open-meteo.com/v1/archive"
    TIMEOUT = 30  # seconds

    def __init__(self, timeout: int = TIMEOUT, max_retries: int = 3):
        """
        Initialize Open-Meteo client.

        Args:
            timeout: Request timeout in seconds
            max_retries: Maximum number of retry attempts
        """
        self.timeout = timeout
        self.session = self._create_session(max_retries)
        self._cache: Dict[Tuple[float, float, timedelta], Dict[date, SolarTimes]] = {}
        self._fetched_years: Set[Tuple[float, float, timedelta, int]] = set()

    def _create_session(self, max_retries: int) -> requests.Session:
        """Create requests session with retry logic."""
        session = requests.Session()

        retry_strategy = Retry(
            total=max_retries,
            backoff_factor=1,
            status_forcelist=[429, 500, 502, 503, 504],
            allowed_methods=["GET"],
        )

        adapter = HTTPAdapter(max_retries=retry_strategy)
        session.mount("https://", adapter)
        session.mount("http://", adapter)

        return session

    def solar_times_for(
        self,
        when: datetime,
        location: Location,
        utc_offset: timedelta
    ) -> SolarTimes:
        """
        Resolve sunrise and sunset for the local day containing `when`.

        Args:
            when: UTC instant within the requested day
            location: Station location
            utc_offset: Local standard time offset from UTC

        Returns:
            SolarTimes in local standard time

        Raises:
            SolarLookupError: If the API request fails or returns no times
                for the day (e.g. polar day or night)
        """
        day = local_date(when, utc_offset)
        key = (location.latitude, location.longitude, utc_offset)
        days = self._cache.setdefault(key, {})

        if key + (day.year,) not in self._fetched_years:
            days.update(self.fetch_year(location, day.year, utc_offset))
            self._fetched_years.add(key + (day.year,))

        times = days.get(day)
        if times is None:
            raise SolarLookupError(
                f"No sunrise/sunset for {day} at "
                f"({location.latitude:.4f}, {location.longitude:.4f})"
            )
        return times

    def fetch_year(
        self,
        location: Location,
        year: int,
        utc_offset: timedelta
    ) -> Dict[date, SolarTimes]:
        """
        Fetch sunrise/sunset for every day of a year.

        Args:
            location: Station location
            year: Calendar year (local standard time)
            utc_offset: Local standard time offset from UTC

        Returns:
            Mapping of local calendar date to SolarTimes

        Raises:
            SolarLookupError: If the request fails
        """
        # One extra GMT day either side covers days that straddle midnight GMT
        params = {
            "latitude": location.latitude,
            "longitude": location.longitude,
            "start_date": (date(year, 1, 1) - timedelta(days=1)).isoformat(),
            "end_date": (date(year, 12, 31) + timedelta(days=1)).isoformat(),
            "daily": ["sunrise", "sunset"],
            "timezone": "GMT",
        }

        try:
            logger.debug(
                f"Fetching sunrise/sunset for ({location.latitude:.4f}, "
                f"{location.longitude:.4f}), year={year}"
            )

            response = self.session.get(
                self.HISTORICAL_URL,
                params=params,
                timeout=self.timeout,
            )

            response.raise_for_status()
            data = response.json()

        except requests.exceptions.RequestException as e:
            logger.error(f"Failed to fetch solar times for {year}: {e}")
            raise SolarLookupError(f"Failed to fetch solar times for {year}: {e}") from e

        days = self._parse_daily(data.get("daily") or {}, utc_offset)

        logger.info(
            f"Fetched sunrise/sunset for {len(days)} days of {year} "
            f"at ({location.latitude:.4f}, {location.longitude:.4f})"
        )
        return days

    @staticmethod
    def _parse_daily(daily: dict, utc_offset: timedelta) -> Dict[date, SolarTimes]:
        """Shift GMT sunrise/sunset lists to local time and pair them by local date."""
        sunrises = OpenMeteoSolarClient._to_local(daily.get("sunrise", []), utc_offset)
        sunsets = OpenMeteoSolarClient._to_local(daily.get("sunset", []), utc_offset)

        sunrise_by_day = {t.date(): t for t in sunrises}
        sunset_by_day = {t.date(): t for t in sunsets}

        days = {}
        for day, sunrise in sunrise_by_day.items():
            sunset = sunset_by_day.get(day)
            if sunset is None or sunset <= sunrise:
                continue
            days[day] = SolarTimes(sunrise=sunrise, sunset=sunset)

        return days

    @staticmethod
    def _to_local(values: list, utc_offset: timedelta) -> list:
        local = []
        for value in values:
            parsed = _parse_time(value)
            if parsed is not None:
                local.append(parsed + utc_offset)
        return local

    def close(self):
        """Close the session."""
        self.session.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()


def _parse_time(value) -> Optional[datetime]:
    # Open-Meteo returns null for days without a sunrise or sunset
    if not value:
        return None
    return datetime.fromisoformat(value).replace(tzinfo=None)
