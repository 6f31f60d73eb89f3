"""
Daily Temperature Series

Builds a chronological chain of DayTemperatureModel objects from daily
station records and answers temperature queries at arbitrary instants.

Design Principles:
- Everything is loaded eagerly: records are read and sunrise/sunset
  resolved once, during construction
- Construction either completes or raises; there is no partial series
- Read-only after construction, so queries need no locking
- Query misses never raise: they are logged and returned as explicit
  "no value" results
"""

import logging
from datetime import date as date_type, datetime, time, timedelta
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, Mapping, Optional, Set, Union

import numpy as np
import pandas as pd
import pytz

from common.errors import (
    DuplicateDateError,
    MissingNeighborDataError,
    NoDataForDateError,
    RecordFormatError,
)
from ncdc.reader import iter_records
from ncdc.schemas import DailyRecord
from solar.provider import SolarTimeProvider
from solar.schemas import Location

from .daily import DayTemperatureModel
from .parameters import CurveParameters, load_default_parameters
from .schemas import QueryStatus, TemperatureEstimate

logger = logging.getLogger(__name__)

SOLAR_NOON = timedelta(hours=12)

RecordSource = Union[str, Path, Iterable[Mapping[str, str]]]


def as_utc_offset(value: Union[timedelta, float, int]) -> timedelta:
    """Accept a UTC offset as a timedelta or as (fractional) hours."""
    if isinstance(value, timedelta):
        return value
    return timedelta(hours=float(value))


class TemperatureSeries:
    """
    Sub-daily air temperature estimates for a run of station days.

    Example:
        >>> series = TemperatureSeries(
        ...     "KenaiDailyTemperature.csv",
        ...     solar_provider=OpenMeteoSolarClient(),
        ...     location=Location(latitude=60.55, longitude=-151.26),
        ...     utc_offset=-9,
        ... )
        >>> series.temperature_at(datetime(2015, 6, 16, 14, 30))
        17.8
    """

    def __init__(
        self,
        source: RecordSource,
        solar_provider: SolarTimeProvider,
        location: Location,
        utc_offset: Union[timedelta, float, int] = timedelta(0),
        parameters: Optional[CurveParameters] = None
    ):
        """
        Build the series.

        Args:
            source: Path to an NCDC daily export, or an iterable of raw
                records with DATE, TMIN and TMAX fields, in chronological order
            solar_provider: Resolves sunrise/sunset per day
            location: Station location
            utc_offset: Local standard time offset from UTC (timedelta or hours)
            parameters: Curve parameters (defaults from config/interpolation.yaml)

        Raises:
            RecordFormatError: If a record is malformed or out of order
            DuplicateDateError: If two records share a date
            InvalidParameterError: If a day's inputs are outside their domain
            SolarLookupError: If sunrise/sunset cannot be resolved
        """
        self.location = location
        self.utc_offset = as_utc_offset(utc_offset)
        self.parameters = parameters if parameters is not None else load_default_parameters()

        self._records: Dict[date_type, DayTemperatureModel] = {}
        self._build(iter_records(source), solar_provider)

    def _build(self, rows: Iterable[Mapping[str, str]], solar_provider: SolarTimeProvider):
        """Read every record, resolve its solar times and link it to the previous day."""
        last: Optional[DayTemperatureModel] = None
        last_seen: Optional[date_type] = None
        seen: Set[date_type] = set()
        skipped = 0

        for row in rows:
            record = DailyRecord.from_raw(row, scale_factor=self.parameters.scale_factor)

            # Incomplete records still count for the duplicate and order checks
            if record.day in seen:
                raise DuplicateDateError(record.day)

            if last_seen is not None and record.day < last_seen:
                raise RecordFormatError(
                    f"Records must be in chronological order: "
                    f"{record.day} follows {last_seen}"
                )

            seen.add(record.day)
            last_seen = record.day

            if not record.is_complete:
                logger.warning(f"Skipping {record.day}: TMIN or TMAX is missing")
                skipped += 1
                continue

            day = self._build_day(record, solar_provider)
            self._records[record.day] = day

            if last is not None:
                last._link(next_day=day)
                day._link(previous_day=last)
            last = day

        if self._records:
            logger.info(
                f"Loaded {len(self._records)} days "
                f"({self.first_date} to {self.last_date}), skipped {skipped}"
            )
        else:
            logger.warning(f"No usable records loaded (skipped {skipped})")

    def _build_day(self, record: DailyRecord, solar_provider: SolarTimeProvider) -> DayTemperatureModel:
        # Ask for local solar noon (in UTC) so the provider resolves the right day
        midnight = datetime.combine(record.day, time())
        solar_noon = midnight - self.utc_offset + SOLAR_NOON
        solar = solar_provider.solar_times_for(solar_noon, self.location, self.utc_offset)

        return DayTemperatureModel(
            min_temp=record.tmin,
            max_temp=record.tmax,
            date=midnight,
            sunrise=solar.sunrise,
            sunset=solar.sunset,
            **self.parameters.as_model_kwargs()
        )

    # -------------------------------------------------------------------------
    # Collection access
    # -------------------------------------------------------------------------

    @property
    def records(self) -> Mapping[date_type, DayTemperatureModel]:
        """Read-only mapping of calendar date to day model, in chronological order."""
        return MappingProxyType(self._records)

    @property
    def first_date(self) -> Optional[date_type]:
        return next(iter(self._records), None)

    @property
    def last_date(self) -> Optional[date_type]:
        return next(reversed(self._records), None)

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, day) -> bool:
        if isinstance(day, datetime):
            day = day.date()
        return day in self._records

    def __getitem__(self, day) -> DayTemperatureModel:
        if isinstance(day, datetime):
            day = day.date()
        return self._records[day]

    def __iter__(self) -> Iterator[DayTemperatureModel]:
        return iter(self._records.values())

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def to_local(self, instant: datetime) -> datetime:
        """
        Express an instant as a naive local standard time.

        Naive instants are assumed to already be local standard time;
        timezone-aware instants are converted using the series' UTC offset.
        """
        if isinstance(instant, pd.Timestamp):
            instant = instant.to_pydatetime()
        if instant.tzinfo is not None:
            instant = instant.astimezone(pytz.UTC).replace(tzinfo=None) + self.utc_offset
        return instant

    def day_for(self, instant: datetime) -> DayTemperatureModel:
        """
        Find the day model owning an instant.

        Raises:
            NoDataForDateError: If the series has no record for that date
        """
        day = self.to_local(instant).date()
        model = self._records.get(day)
        if model is None:
            raise NoDataForDateError(day)
        return model

    def lookup(self, instant: datetime) -> TemperatureEstimate:
        """
        Estimate the temperature at an instant, with the query outcome.

        Args:
            instant: Naive local standard time, or a timezone-aware datetime

        Returns:
            TemperatureEstimate whose status is OK, NO_DATA_FOR_DATE or
            MISSING_NEIGHBOR_DATA
        """
        return self._lookup(instant, warn=True)

    def _lookup(self, instant: datetime, warn: bool) -> TemperatureEstimate:
        local = self.to_local(instant)

        try:
            value = self.day_for(local).temperature_at(local)
        except NoDataForDateError as e:
            if warn:
                logger.warning(str(e))
            return TemperatureEstimate(instant=local, status=QueryStatus.NO_DATA_FOR_DATE)
        except MissingNeighborDataError as e:
            if warn:
                logger.warning(f"Cannot interpolate {local}: {e}")
            return TemperatureEstimate(instant=local, status=QueryStatus.MISSING_NEIGHBOR_DATA)

        return TemperatureEstimate(instant=local, value=value, status=QueryStatus.OK)

    def temperature_at(self, instant: datetime) -> Optional[float]:
        """
        Estimate the temperature at an instant.

        Args:
            instant: Naive local standard time, or a timezone-aware datetime

        Returns:
            Temperature (°C), or None if the date is not loaded or the
            instant needs a neighboring day that is not loaded
        """
        return self.lookup(instant).value

    __call__ = temperature_at

    def sample(
        self,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        freq: str = "1h"
    ) -> pd.Series:
        """
        Evaluate the series on a regular time grid.

        Args:
            start: First instant (default: midnight of the first day)
            end: End of the grid, exclusive (default: midnight after the last day)
            freq: pandas offset alias for the grid spacing

        Returns:
            Series of temperatures (°C) indexed by local standard time,
            NaN where no value is available
        """
        if not self._records:
            return pd.Series([], index=pd.DatetimeIndex([]), dtype=float, name="temperature")

        if start is None:
            start = datetime.combine(self.first_date, time())
        if end is None:
            end = datetime.combine(self.last_date, time()) + timedelta(days=1)

        index = pd.date_range(self.to_local(start), self.to_local(end), freq=freq, inclusive="left")

        values = []
        misses = 0
        for instant in index:
            estimate = self._lookup(instant.to_pydatetime(), warn=False)
            if estimate.has_value:
                values.append(estimate.value)
            else:
                values.append(np.nan)
                misses += 1

        if misses:
            logger.warning(f"No value for {misses} of {len(index)} sampled instants")

        return pd.Series(values, index=index, dtype=float, name="temperature")

    def __repr__(self):
        return (
            f"TemperatureSeries(days={len(self)}, first={self.first_date}, "
            f"last={self.last_date})"
        )
