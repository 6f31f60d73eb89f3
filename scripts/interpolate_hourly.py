#!/usr/bin/env python3
"""
Hourly Temperature Interpolation Script

Builds a temperature series for the station configured in the environment
(.env, see src/interpolation/settings.py) and writes interpolated
temperatures on a regular grid as CSV.

Usage:
    python scripts/interpolate_hourly.py [--start YYYY-MM-DD] [--end YYYY-MM-DD]
                                         [--freq 1h] [--output FILE]

Options:
    --start DATE     First day to sample (default: first day in the data)
    --end DATE       Last day to sample, inclusive (default: last day in the data)
    --freq ALIAS     pandas offset alias for the grid spacing (default: 1h)
    --output FILE    Write CSV here instead of stdout
    --env-file FILE  Alternative .env file
"""

import argparse
import logging
import sys
from datetime import datetime, timedelta
from pathlib import Path

# Add src to path
src_path = Path(__file__).parent.parent / 'src'
sys.path.insert(0, str(src_path))

from interpolation import InterpolationError
from interpolation.settings import build_series, load_station_settings

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def parse_day(value: str) -> datetime:
    """argparse type for YYYY-MM-DD dates."""
    try:
        return datetime.strptime(value, "%Y-%m-%d")
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM-DD, got '{value}'")


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Interpolate sub-daily air temperature from daily min/max records"
    )
    parser.add_argument(
        '--start',
        type=parse_day,
        default=None,
        help='First day to sample (default: first day in the data)',
    )
    parser.add_argument(
        '--end',
        type=parse_day,
        default=None,
        help='Last day to sample, inclusive (default: last day in the data)',
    )
    parser.add_argument(
        '--freq',
        default='1h',
        help='Grid spacing as a pandas offset alias (default: 1h)',
    )
    parser.add_argument(
        '--output',
        type=Path,
        default=None,
        help='Output CSV file (default: stdout)',
    )
    parser.add_argument(
        '--env-file',
        type=Path,
        default=None,
        help='Alternative .env file',
    )

    args = parser.parse_args()

    if args.start and args.end and args.end < args.start:
        logger.error("--end must not be before --start")
        sys.exit(1)

    try:
        settings = load_station_settings(args.env_file)
        series = build_series(settings)
    except (ValueError, InterpolationError) as e:
        logger.error(f"Could not build temperature series: {e}")
        sys.exit(1)

    end = args.end + timedelta(days=1) if args.end else None
    temperatures = series.sample(start=args.start, end=end, freq=args.freq)

    frame = temperatures.round(2).to_frame()
    frame.index.name = "time"

    if args.output:
        frame.to_csv(args.output)
        logger.info(f"Wrote {len(frame)} rows to {args.output}")
    else:
        frame.to_csv(sys.stdout)

    missing = int(temperatures.isna().sum())
    if missing:
        logger.warning(f"{missing} of {len(temperatures)} instants have no value")

    sys.exit(0)


if __name__ == "__main__":
    main()
