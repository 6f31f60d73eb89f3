"""
Daily Temperature Curve

Interpolates air temperature within one calendar day from the day's
minimum and maximum, its sunrise and sunset, and the neighboring days'
minimum / sunset temperatures.

The day is split into four segments:
1. Minimum (shortly before sunrise) to maximum - half-sine rise
2. Maximum to sunset - sine decay towards the sunset temperature
3. Sunset to midnight - power-law cooling towards the next day's minimum
4. Midnight to minimum - the previous evening's cooling, continued

References:
- Eccel, E. & Cordano, E. (2013). Interpol.T: Hourly interpolation of
  multiple temperature daily series. R package.
- Eccel, E. (2010). What we can ask to hourly temperature recording.
  Part II: Hourly interpolation of temperatures for climatology and
  modelling. Italian Journal of Agrometeorology, 2, 45-50.
- Cesaraccio, C., Spano, D., Duce, P., & Snyder, R. L. (2001). An improved
  model for determining degree-day values from daily temperature data.
  Int. J. Biometeorol., 45, 161-169.
"""

import logging
import weakref
from datetime import date as date_type, datetime, time, timedelta
from typing import Optional, Union

import numpy as np

from common.errors import InvalidParameterError, MissingNeighborDataError
from .parameters import DEFAULT_PARAMETERS

logger = logging.getLogger(__name__)

ONE_DAY = timedelta(hours=24)


def total_hours(delta: timedelta) -> float:
    """Length of a timedelta in (fractional) hours."""
    return delta.total_seconds() / 3600.0


def _midnight(day: Union[date_type, datetime]) -> datetime:
    """Truncate a date or datetime to midnight, keeping any tzinfo."""
    if isinstance(day, datetime):
        return datetime.combine(day.date(), time(), tzinfo=day.tzinfo)
    return datetime.combine(day, time())


class DayTemperatureModel:
    """
    Temperature curve for a single calendar day.

    Instances are built and linked by TemperatureSeries and are immutable
    once linked. Neighbor links are weak: the series owns every day. A day
    model kept after its series has been dropped loses its neighbors, so
    evening and pre-dawn queries on it raise MissingNeighborDataError.
    Keep a reference to the series for as long as its days are queried.

    Attributes:
        min_temp: Daily minimum temperature (°C)
        max_temp: Daily maximum temperature (°C)
        date: Calendar day, truncated to midnight
        sunrise: Sunrise on this day
        sunset: Sunset on this day
        c: Sunset temperature offset (fraction of the daily range)
        z: Night cooling exponent, in (0, 1]
        max_lag_hours: Hours between the daily maximum and sunset
        min_lag_hours: Hours between the daily minimum and sunrise
    """

    def __init__(
        self,
        min_temp: float,
        max_temp: float,
        date: Union[date_type, datetime],
        sunrise: datetime,
        sunset: datetime,
        c: float = DEFAULT_PARAMETERS['c'],
        z: float = DEFAULT_PARAMETERS['z'],
        max_lag_hours: float = DEFAULT_PARAMETERS['max_lag_hours'],
        min_lag_hours: float = DEFAULT_PARAMETERS['min_lag_hours']
    ):
        self.min_temp = float(min_temp)
        self.max_temp = float(max_temp)
        self.date = _midnight(date)
        self.sunrise = sunrise
        self.sunset = sunset
        self.c = float(c)
        self.z = float(z)
        self.max_lag_hours = float(max_lag_hours)
        self.min_lag_hours = float(min_lag_hours)

        self._previous_ref = None
        self._next_ref = None

        self._validate()

    def _validate(self):
        """Reject inputs that would make the curve undefined or wrong."""
        label = f"{self.date:%Y-%m-%d}"

        if np.isnan(self.min_temp) or np.isnan(self.max_temp):
            raise InvalidParameterError(f"{label}: temperatures must not be NaN")

        if not self.z > 0:
            raise InvalidParameterError(f"{label}: z must be > 0, got {self.z}")

        if self.min_temp > self.max_temp:
            raise InvalidParameterError(
                f"{label}: min_temp {self.min_temp} exceeds max_temp {self.max_temp}"
            )

        if self.sunrise < self.day_start:
            raise InvalidParameterError(
                f"{label}: sunrise {self.sunrise} is before the start of the day"
            )

        if self.sunset > self.day_end:
            raise InvalidParameterError(
                f"{label}: sunset {self.sunset} is after the end of the day"
            )

        # A zero-length rising segment would divide by zero in temperature_at;
        # time_of_max == sunset only empties the falling segment
        if not self.time_of_min < self.time_of_max <= self.sunset:
            raise InvalidParameterError(
                f"{label}: segment boundaries must satisfy "
                f"time_of_min < time_of_max <= sunset "
                f"(time_of_min={self.time_of_min}, time_of_max={self.time_of_max}, "
                f"sunset={self.sunset})"
            )

    # -------------------------------------------------------------------------
    # Chronological neighbors
    # -------------------------------------------------------------------------

    def _link(
        self,
        previous_day: Optional['DayTemperatureModel'] = None,
        next_day: Optional['DayTemperatureModel'] = None
    ):
        """Attach neighbor links. Only called by TemperatureSeries while building."""
        if previous_day is not None:
            self._previous_ref = weakref.ref(previous_day)
        if next_day is not None:
            self._next_ref = weakref.ref(next_day)

    @property
    def previous_day(self) -> Optional['DayTemperatureModel']:
        """The chronologically preceding day, or None at the start of a series."""
        return self._previous_ref() if self._previous_ref is not None else None

    @property
    def next_day(self) -> Optional['DayTemperatureModel']:
        """The chronologically following day, or None at the end of a series."""
        return self._next_ref() if self._next_ref is not None else None

    # -------------------------------------------------------------------------
    # Derived quantities
    # -------------------------------------------------------------------------

    @property
    def next_min_temp(self) -> Optional[float]:
        next_day = self.next_day
        return next_day.min_temp if next_day is not None else None

    @property
    def sunset_temp(self) -> float:
        """Temperature at sunset: a fraction c of the way from max down to min."""
        return self.max_temp - self.c * (self.max_temp - self.min_temp)

    @property
    def time_of_max(self) -> datetime:
        return self.sunset - timedelta(hours=self.max_lag_hours)

    @property
    def time_of_min(self) -> datetime:
        return self.sunrise - timedelta(hours=self.min_lag_hours)

    @property
    def time_of_next_min(self) -> Optional[datetime]:
        next_day = self.next_day
        if next_day is None:
            return None
        return next_day.sunrise - timedelta(hours=self.min_lag_hours)

    @property
    def day_start(self) -> datetime:
        return self.date

    @property
    def day_end(self) -> datetime:
        return self.date + ONE_DAY

    @property
    def night_hours(self) -> float:
        """Hours from sunset to the next morning's minimum (at this day's clock time)."""
        return total_hours(self.time_of_min + ONE_DAY - self.sunset)

    # -------------------------------------------------------------------------
    # Interpolation
    # -------------------------------------------------------------------------

    def temperature_at(self, instant: datetime) -> float:
        """
        Estimate the air temperature at an instant within this day.

        Segments are half-open on the left: lower < instant <= upper.

        Args:
            instant: Time within [day_start, day_end]

        Returns:
            Estimated temperature (°C)

        Raises:
            ValueError: If instant is outside this day
            MissingNeighborDataError: If the instant falls after sunset on the
                last day of a series, or before the minimum on the first day
        """
        if instant < self.day_start or instant > self.day_end:
            raise ValueError(
                f"{instant} is outside the day {self.date:%Y-%m-%d}"
            )

        t_min = self.time_of_min
        t_max = self.time_of_max
        sunset = self.sunset
        tn = self.min_temp
        tx = self.max_temp
        ts = self.sunset_temp

        if t_min < instant <= t_max:
            # Minimum to maximum
            t_frac = total_hours(instant - t_min) / total_hours(t_max - t_min)
            value = tn + ((tx - tn) / 2.0) * (1.0 + np.sin(np.pi * t_frac - np.pi / 2.0))

        elif t_max < instant <= sunset:
            # Maximum to sunset
            t_frac = total_hours(instant - t_max) / total_hours(sunset - t_max)
            value = ts + (tx - ts) * np.sin((np.pi / 2.0) * (1.0 + t_frac))

        elif sunset < instant <= self.day_end:
            # Sunset to midnight
            next_day = self.next_day
            if next_day is None:
                raise MissingNeighborDataError(self.date, "next")
            rate = (next_day.min_temp - ts) / np.power(self.night_hours, self.z)
            value = ts + rate * np.power(total_hours(instant - sunset), self.z)

        else:
            # Midnight to minimum, continuing the previous evening
            previous_day = self.previous_day
            if previous_day is None:
                raise MissingNeighborDataError(self.date, "previous")
            ts_prev = previous_day.sunset_temp
            rate = (tn - ts_prev) / np.power(self.night_hours, self.z)
            value = ts_prev + rate * np.power(total_hours(instant + ONE_DAY - sunset), self.z)

        return float(value)

    __call__ = temperature_at

    def __repr__(self):
        return (
            f"DayTemperatureModel(date={self.date:%Y-%m-%d}, "
            f"min_temp={self.min_temp:.1f}, max_temp={self.max_temp:.1f}, "
            f"sunrise={self.sunrise:%H:%M}, sunset={self.sunset:%H:%M})"
        )


# Example usage
if __name__ == "__main__":
    print("Daily Temperature Curve - Example")
    print("=" * 60)

    day1 = DayTemperatureModel(
        min_temp=5.0, max_temp=20.0, date=datetime(2015, 6, 16),
        sunrise=datetime(2015, 6, 16, 6, 0), sunset=datetime(2015, 6, 16, 18, 0)
    )
    day2 = DayTemperatureModel(
        min_temp=6.0, max_temp=22.0, date=datetime(2015, 6, 17),
        sunrise=datetime(2015, 6, 17, 6, 0), sunset=datetime(2015, 6, 17, 18, 0)
    )
    day1._link(next_day=day2)
    day2._link(previous_day=day1)

    for hour in range(6, 24):
        instant = day1.date + timedelta(hours=hour)
        print(f"{instant:%H:%M}  {day1(instant):6.2f} °C")
