#!/usr/bin/env python3
"""
Index File Time Ranges - Applicability Window of the IRI2007 Model

================================================================================
PURPOSE
================================================================================
IRI2007 is driven by two tabulated solar/geomagnetic index files. Outside the
dates they cover the model silently falls back to climatology (or garbage),
so the physics correction checks every epoch against their windows:

    ap.dat      Short-period geomagnetic activity (daily Ap).
                Epoch outside -> DataOutOfRange (fatal)

    ig_rz.dat   Long-period ionospheric indices (monthly IG12 / Rz12).
                Epoch outside -> one RangeWarning, computation proceeds

================================================================================
FILE FORMATS
================================================================================
ap.dat - one row per day, whitespace delimited, two-digit year first:

    58  1  1  18 27 20 ...
    ...
    24 12 31   7  5 ...

    First and last non-empty rows define [min, max]. Years >= 58 are 19xx.

ig_rz.dat - blank lines and a creation-date marker, then the range line:

    Dec 12, 2023
    1,1958,12,2024

    (month_min, year_min, month_max, year_max). The window runs from the
    first day of the min month to the last day of the max month.
"""

import calendar
import logging
from pathlib import Path
from typing import Iterator, Optional, Tuple

from ..exceptions import DataFileMissing, InvalidTimeRange
from ..interfaces.correction_result import TimeRange
from .constants import (
    AP_YEAR_PIVOT,
    DEFAULT_AP_FILE,
    DEFAULT_IGRZ_FILE,
    IONOSPHERE_DATA_DIR,
)

logger = logging.getLogger(__name__)


def normalize_ap_year(year: int) -> int:
    """Two-digit ap.dat year to four digits (pivot 58)."""
    if year >= AP_YEAR_PIVOT:
        return 1900 + year
    return 2000 + year


def last_day_of_month(year: int, month: int) -> int:
    """Last calendar day, Gregorian leap rule."""
    return calendar.monthrange(year, month)[1]


def _open_lines(path: Path) -> Iterator[str]:
    try:
        with open(path, 'r') as f:
            for line in f:
                yield line.rstrip('\n')
    except OSError as e:
        raise DataFileMissing(str(path)) from e
    except UnicodeDecodeError as e:
        raise InvalidTimeRange(str(path), 0, 0) from e


def _parse_ap_date(line: str, path: Path) -> int:
    fields = line.split()
    if len(fields) < 3:
        raise InvalidTimeRange(str(path), 0, 0)
    try:
        year, month, day = (int(v) for v in fields[:3])
    except ValueError as e:
        raise InvalidTimeRange(str(path), 0, 0) from e
    return normalize_ap_year(year) * 10000 + month * 100 + day


def read_ap_range(path: Path) -> TimeRange:
    """Window covered by an ap.dat file."""
    first: Optional[str] = None
    last: Optional[str] = None
    for line in _open_lines(path):
        if not line.strip():
            continue
        if first is None:
            first = line
        last = line

    if first is None:
        raise InvalidTimeRange(str(path), 0, 0)

    time_range = TimeRange(
        min_date=_parse_ap_date(first, path),
        max_date=_parse_ap_date(last, path),
        source=str(path),
    )
    if not time_range.is_valid:
        raise InvalidTimeRange(str(path), time_range.min_date, time_range.max_date)
    return time_range


def _parse_igrz_range_line(line: str, path: Path) -> Tuple[int, int, int, int]:
    fields = [v.strip() for v in line.split(',')]
    if len(fields) < 4:
        raise InvalidTimeRange(str(path), 0, 0)
    try:
        month_min, year_min, month_max, year_max = (int(v) for v in fields[:4])
    except ValueError as e:
        raise InvalidTimeRange(str(path), 0, 0) from e
    return month_min, year_min, month_max, year_max


def read_igrz_range(path: Path) -> TimeRange:
    """Window covered by an ig_rz.dat file."""
    content = (line.strip() for line in _open_lines(path))
    content = [line for line in content if line]

    # content[0] is the creation-date marker
    if len(content) < 2:
        raise InvalidTimeRange(str(path), 0, 0)

    month_min, year_min, month_max, year_max = _parse_igrz_range_line(content[1], path)
    if not (1 <= month_min <= 12 and 1 <= month_max <= 12):
        raise InvalidTimeRange(str(path), 0, 0)

    time_range = TimeRange(
        min_date=year_min * 10000 + month_min * 100 + 1,
        max_date=(year_max * 10000 + month_max * 100
                  + last_day_of_month(year_max, month_max)),
        source=str(path),
    )
    if not time_range.is_valid:
        raise InvalidTimeRange(str(path), time_range.min_date, time_range.max_date)
    return time_range


class TimeRangeValidator:
    """
    Lazily loads and holds the ap.dat and ig_rz.dat validity windows.

    The ranges are read once per instance and never refreshed; build a new
    validator to pick up replaced files.
    """

    def __init__(
        self,
        data_path,
        ap_file: str = DEFAULT_AP_FILE,
        igrz_file: str = DEFAULT_IGRZ_FILE
    ):
        """
        Args:
            data_path: Root data directory; files live in <data_path>/IonosphereData
            ap_file: Short-period index file name
            igrz_file: Long-period index file name
        """
        data_dir = Path(data_path) / IONOSPHERE_DATA_DIR
        self.ap_path = data_dir / ap_file
        self.igrz_path = data_dir / igrz_file

        self.ap_range: Optional[TimeRange] = None
        self.igrz_range: Optional[TimeRange] = None

    @property
    def is_initialized(self) -> bool:
        return self.ap_range is not None and self.igrz_range is not None

    def initialize_time_ranges(self):
        """Read both index files; no-op once done."""
        if self.is_initialized:
            return

        ap_range = read_ap_range(self.ap_path)
        igrz_range = read_igrz_range(self.igrz_path)

        self.ap_range = ap_range
        self.igrz_range = igrz_range

        logger.info(f"ap.dat range: {ap_range.min_date} - {ap_range.max_date}")
        logger.info(f"ig_rz.dat range: {igrz_range.min_date} - {igrz_range.max_date}")
