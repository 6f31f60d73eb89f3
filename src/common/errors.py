"""
Interpolation Errors

Exception hierarchy shared by the interpolation core, the NCDC record
parsing and the solar time providers.

Construction-time errors (invalid parameters, duplicate dates, malformed
records, failed solar lookups) propagate and abort building a series.
Query-time misses (missing neighbor, missing date) are caught by
TemperatureSeries and returned as explicit "no value" results.
"""


class InterpolationError(Exception):
    """Base class for all daily temperature interpolation errors."""


class InvalidParameterError(InterpolationError, ValueError):
    """A curve parameter or day input is outside its valid domain."""


class DuplicateDateError(InterpolationError, KeyError):
    """Two raw records resolve to the same calendar date."""

    def __init__(self, date):
        self.date = date
        super().__init__(f"Series already contains date {date:%Y-%m-%d}")

    def __str__(self):
        return self.args[0]


class MissingNeighborDataError(InterpolationError, LookupError):
    """A query needs the previous or next day, which is not loaded."""

    def __init__(self, date, direction: str):
        self.date = date
        self.direction = direction
        super().__init__(
            f"No {direction} day available to interpolate {date:%Y-%m-%d}"
        )


class NoDataForDateError(InterpolationError, LookupError):
    """The series holds no record for the queried calendar date."""

    def __init__(self, date):
        self.date = date
        super().__init__(f"Series does not contain date {date:%Y-%m-%d}")


class RecordFormatError(InterpolationError, ValueError):
    """A raw daily record (or its source) cannot be parsed."""


class SolarLookupError(InterpolationError):
    """Sunrise/sunset could not be resolved for a date."""
