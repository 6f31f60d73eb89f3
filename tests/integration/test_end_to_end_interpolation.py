"""
End-to-End Interpolation Test

Tests the complete pipeline on a ten-day Kenai NCDC export:
1. Read the CSV (one day has a -9999 TMAX)
2. Resolve sunrise/sunset with a fixed provider
3. Build and link the day models
4. Sample an hourly grid and check curve anchors and gaps
5. Write the hourly CSV the way scripts/interpolate_hourly.py does
"""

import logging
import sys
from datetime import date, datetime, time, timedelta
from pathlib import Path

import numpy as np
import pandas as pd
import pytest
import pytz

# Add src to path
src_path = Path(__file__).parent.parent.parent / 'src'
sys.path.insert(0, str(src_path))

from interpolation import (
    CurveParameters,
    QueryStatus,
    TemperatureSeries,
)
from interpolation.settings import StationSettings, build_series
from solar import FixedSolarTimeProvider, Location

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

FIXTURE_CSV = Path(__file__).parent.parent / 'fixtures' / 'kenai_daily_sample.csv'
KENAI = Location(latitude=60.5725, longitude=-151.2386, name="Kenai Municipal Airport")
GAP_DAY = date(2015, 6, 13)


@pytest.fixture(scope="module")
def series():
    """Kenai series with a 05:00-21:00 daylight window"""
    return TemperatureSeries(
        FIXTURE_CSV,
        solar_provider=FixedSolarTimeProvider(sunrise=time(5, 0), sunset=time(21, 0)),
        location=KENAI,
        utc_offset=-9,
        parameters=CurveParameters(),
    )


@pytest.fixture(scope="module")
def hourly(series):
    return series.sample()


def test_series_loaded(series):
    """Test every complete day is loaded and the -9999 day is skipped"""
    assert len(series) == 9
    assert series.first_date == date(2015, 6, 10)
    assert series.last_date == date(2015, 6, 19)
    assert GAP_DAY not in series

    assert series[date(2015, 6, 12)].next_day is series[date(2015, 6, 14)], \
        "Days on either side of a gap are linked to each other"


def test_hourly_grid(hourly):
    """Test the default grid covers every hour of the loaded range"""
    assert len(hourly) == 240
    assert hourly.index[0] == pd.Timestamp("2015-06-10 00:00")
    assert hourly.index[-1] == pd.Timestamp("2015-06-19 23:00")
    assert hourly.name == "temperature"


def test_hourly_gaps(hourly):
    """Test NaN appears only where a value cannot be computed"""
    missing = hourly[hourly.isna()]

    # 00:00-04:00 on the first day, the whole gap day, 22:00-23:00 on the last day
    assert len(missing) == 31

    first_day = missing[missing.index < pd.Timestamp("2015-06-11")]
    assert list(first_day.index.hour) == [0, 1, 2, 3, 4]

    gap_day = missing[missing.index.normalize() == pd.Timestamp(GAP_DAY)]
    assert len(gap_day) == 24

    last_day = missing[missing.index >= pd.Timestamp("2015-06-19")]
    assert list(last_day.index.hour) == [22, 23]


def test_daily_maximum_at_peak(series, hourly):
    """Test the curve reaches TMAX at 17:00 (four hours before sunset)"""
    for model in series:
        peak = hourly[model.date + timedelta(hours=17)]
        assert peak == pytest.approx(model.max_temp), f"Peak mismatch on {model.date:%Y-%m-%d}"


def test_daily_minimum_before_sunrise(series, hourly):
    """Test the curve reaches TMIN at 04:00 whenever a previous day is loaded"""
    for model in series:
        if model.previous_day is None:
            continue
        trough = hourly[model.date + timedelta(hours=4)]
        assert trough == pytest.approx(model.min_temp), f"Trough mismatch on {model.date:%Y-%m-%d}"


def test_values_within_neighbor_range(series, hourly):
    """Test no hourly value leaves the range spanned by the day and its neighbors"""
    for model in series:
        day_values = hourly[hourly.index.normalize() == pd.Timestamp(model.date)].dropna()
        neighbors = [model] + [d for d in (model.previous_day, model.next_day) if d is not None]
        low = min(d.min_temp for d in neighbors)
        high = max(d.max_temp for d in neighbors)

        assert day_values.min() >= low - 1e-9
        assert day_values.max() <= high + 1e-9


def test_midnight_continuity(series):
    """Test the curve is continuous across midnight"""
    for model in series:
        if model.next_day is None or model.next_day.date != model.day_end:
            continue
        evening = model.temperature_at(model.day_end - timedelta(seconds=1))
        morning = model.next_day.temperature_at(model.day_end + timedelta(seconds=1))
        assert evening == pytest.approx(morning, abs=0.01)


def test_query_outcomes(series):
    """Test each query status is reported"""
    ok = series.lookup(datetime(2015, 6, 16, 14, 0))
    gap = series.lookup(datetime(2015, 6, 13, 14, 0))
    edge = series.lookup(datetime(2015, 6, 19, 23, 0))
    outside = series.lookup(datetime(2016, 1, 1, 12, 0))

    assert ok.status == QueryStatus.OK and ok.has_value
    assert gap.status == QueryStatus.NO_DATA_FOR_DATE
    assert edge.status == QueryStatus.MISSING_NEIGHBOR_DATA
    assert outside.status == QueryStatus.NO_DATA_FOR_DATE
    assert series.temperature_at(datetime(2015, 6, 13, 14, 0)) is None


def test_aware_instant_matches_local(series):
    """Test a UTC instant is read in local standard time"""
    local = datetime(2015, 6, 16, 14, 0)
    utc = datetime(2015, 6, 16, 23, 0, tzinfo=pytz.UTC)

    assert series(utc) == pytest.approx(series(local))


def test_hourly_csv_export(hourly, tmp_path):
    """Test the sampled series writes and reads back as CSV"""
    output = tmp_path / "kenai_hourly.csv"
    frame = hourly.round(2).to_frame()
    frame.index.name = "time"
    frame.to_csv(output)

    written = pd.read_csv(output, parse_dates=["time"], index_col="time")

    assert len(written) == 240
    assert written["temperature"].isna().sum() == 31
    assert np.allclose(
        written["temperature"].dropna().values,
        hourly.dropna().round(2).values
    )


def test_build_from_settings():
    """Test the settings-driven build matches a direct build"""
    settings = StationSettings(
        data_path=FIXTURE_CSV,
        latitude=KENAI.latitude,
        longitude=KENAI.longitude,
        utc_offset_hours=-9,
        solar_source="fixed",
    )

    series = build_series(settings)

    assert len(series) == 9
    # Fixed provider default window is 06:00-18:00, so the peak is at 14:00
    model = series[date(2015, 6, 16)]
    assert series(datetime(2015, 6, 16, 14, 0)) == pytest.approx(model.max_temp)


if __name__ == "__main__":
    # Run tests with pytest
    pytest.main([__file__, "-v", "--tb=short"])
