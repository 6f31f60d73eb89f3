"""
Interpolation Result Models

Pydantic schemas for temperature query results.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class QueryStatus(str, Enum):
    """
    Outcome of a temperature query.

    Only OK carries a value; the other two say why there is none.
    """
    OK = "ok"
    NO_DATA_FOR_DATE = "no_data_for_date"
    MISSING_NEIGHBOR_DATA = "missing_neighbor_data"


class TemperatureEstimate(BaseModel):
    """Interpolated air temperature at one instant."""

    instant: datetime = Field(..., description="Queried instant (local standard time)")
    value: Optional[float] = Field(None, description="Estimated air temperature (°C)")
    status: QueryStatus = Field(..., description="Query outcome")

    @property
    def has_value(self) -> bool:
        """Check if a temperature was computed."""
        return self.status == QueryStatus.OK
