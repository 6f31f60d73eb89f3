"""
NCDC Daily Record Reader

Reads daily station exports from the NOAA National Climatic Data Center
(https://www.ncdc.noaa.gov/data-access/land-based-station-data).

The export is a comma-delimited file with one row per station day. Only
the DATE, TMIN and TMAX columns are used; everything else is ignored.
Values are handed on as strings so that parsing, scaling and missing-value
handling stay in one place (ncdc.schemas.DailyRecord).
"""

import logging
from pathlib import Path
from typing import Dict, Iterable, Iterator, Mapping, Protocol, Union

import pandas as pd

from common.errors import RecordFormatError

from .schemas import REQUIRED_FIELDS

logger = logging.getLogger(__name__)


class DailyRecordReader(Protocol):
    """Forward-only source of raw daily records."""

    def __iter__(self) -> Iterator[Mapping[str, str]]:
        ...


class NCDCDailyReader:
    """
    Reader for NCDC daily CSV exports.

    Each iteration re-reads the file, so the reader can be iterated more
    than once.
    """

    def __init__(self, path: Union[str, Path], delimiter: str = ","):
        """
        Initialize reader.

        Args:
            path: Path to the CSV export
            delimiter: Field delimiter
        """
        self.path = Path(path)
        self.delimiter = delimiter

    def read_frame(self) -> pd.DataFrame:
        """
        Load the required columns as strings.

        Returns:
            DataFrame with DATE, TMIN and TMAX columns, in file order

        Raises:
            RecordFormatError: If the file cannot be read or a required
                column is missing
        """
        try:
            df = pd.read_csv(
                self.path,
                sep=self.delimiter,
                dtype=str,
                keep_default_na=False,
                skipinitialspace=True,
            )
        except (OSError, pd.errors.ParserError, pd.errors.EmptyDataError) as e:
            raise RecordFormatError(f"Cannot read {self.path}: {e}") from e

        df.columns = [str(col).strip() for col in df.columns]

        missing = [col for col in REQUIRED_FIELDS if col not in df.columns]
        if missing:
            raise RecordFormatError(
                f"{self.path} is missing required columns {missing}. "
                f"Found: {list(df.columns)}"
            )

        logger.debug(f"Read {len(df)} rows from {self.path}")
        return df[list(REQUIRED_FIELDS)]

    def __iter__(self) -> Iterator[Dict[str, str]]:
        df = self.read_frame()
        for row in df.itertuples(index=False):
            yield dict(zip(REQUIRED_FIELDS, row))


def iter_records(source: Union[str, Path, Iterable[Mapping[str, str]]]) -> Iterable[Mapping[str, str]]:
    """
    Normalize a record source.

    Args:
        source: Path to an NCDC export, or any iterable of raw records

    Returns:
        Iterable of raw record mappings
    """
    if isinstance(source, (str, Path)):
        return NCDCDailyReader(source)
    return source
