"""
NCDC Station Data Module

Reads NOAA NCDC daily minimum/maximum temperature exports and parses
their rows into DailyRecord objects.
"""

from .schemas import DailyRecord, MISSING_VALUE, parse_date
from .reader import DailyRecordReader, NCDCDailyReader, iter_records

__all__ = [
    "DailyRecord",
    "MISSING_VALUE",
    "parse_date",
    "DailyRecordReader",
    "NCDCDailyReader",
    "iter_records",
]
