"""
NCDC Daily Record Schema

Pydantic model for one parsed row of a NOAA NCDC (GHCN-Daily) export.

Raw rows carry DATE as YYYYMMDD and TMIN/TMAX in tenths of a degree
Celsius. NCDC marks missing values with -9999.
"""

import math
from datetime import date as date_type, datetime
from typing import Mapping, Optional

from pydantic import BaseModel, Field, validator

from common.errors import RecordFormatError

MISSING_VALUE = -9999
REQUIRED_FIELDS = ("DATE", "TMIN", "TMAX")


class DailyRecord(BaseModel):
    """Daily minimum and maximum temperature for one station day."""

    day: date_type = Field(..., description="Calendar day")
    tmin: Optional[float] = Field(None, description="Minimum temperature (°C), None if missing")
    tmax: Optional[float] = Field(None, description="Maximum temperature (°C), None if missing")

    @validator('tmin', 'tmax')
    def must_be_finite(cls, v):
        """Reject NaN and infinite temperatures."""
        if v is not None and not math.isfinite(v):
            raise ValueError(f"temperature must be finite, got {v}")
        return v

    @property
    def is_complete(self) -> bool:
        """True when both temperatures are present."""
        return self.tmin is not None and self.tmax is not None

    @classmethod
    def from_raw(cls, row: Mapping[str, str], scale_factor: float = 0.1) -> 'DailyRecord':
        """
        Parse a raw record.

        Args:
            row: Mapping with string fields DATE, TMIN and TMAX
            scale_factor: Multiplier converting raw values to °C

        Returns:
            DailyRecord with tmin/tmax set to None where the source marks
            the value as missing

        Raises:
            RecordFormatError: If a field is absent or malformed
        """
        missing = [name for name in REQUIRED_FIELDS if name not in row]
        if missing:
            raise RecordFormatError(f"Record is missing fields {missing}: {dict(row)}")

        try:
            return cls(
                day=parse_date(row["DATE"]),
                tmin=_scale(row["TMIN"], scale_factor),
                tmax=_scale(row["TMAX"], scale_factor),
            )
        except ValueError as e:
            raise RecordFormatError(f"Malformed record {dict(row)}: {e}") from e


def parse_date(value: str) -> date_type:
    """Parse an NCDC DATE field (YYYYMMDD)."""
    text = str(value).strip()
    if len(text) != 8 or not text.isdigit():
        raise ValueError(f"DATE must be YYYYMMDD, got '{value}'")
    return datetime.strptime(text, "%Y%m%d").date()


def _scale(value, scale_factor: float) -> Optional[float]:
    if value is None:
        return None
    text = str(value).strip()
    if not text:
        return None
    raw = float(text)
    if raw == MISSING_VALUE:
        return None
    return raw * scale_factor
