"""
Epoch conversions between Modified Julian Date and calendar time.

Epochs are UTC Modified Julian Dates (JD - 2400000.5). Conversion between
time systems is left to the caller.
"""

from datetime import datetime, timedelta, timezone
from typing import Tuple

MJD_EPOCH = datetime(1858, 11, 17, tzinfo=timezone.utc)
MJD_JD_OFFSET = 2400000.5


def julian_day(year: int, month: int, day: int,
               hour: int = 0, minute: int = 0, second: float = 0.0) -> float:
    """
    Calendar date to Julian Day (Vallado, Algorithm 14).

    Valid for the years 1900-2100, which covers every two-digit-year token
    the correction files can carry.
    """
    jd = (367 * year
          - int(7 * (year + int((month + 9) / 12)) / 4)
          + int(275 * month / 9)
          + day + 1721013.5)
    return jd + ((second / 60.0 + minute) / 60.0 + hour) / 24.0


def modified_julian_date(year: int, month: int, day: int,
                         hour: int = 0, minute: int = 0, second: float = 0.0) -> float:
    """Calendar date to Modified Julian Date."""
    return julian_day(year, month, day, hour, minute, second) - MJD_JD_OFFSET


def mjd_to_datetime(mjd: float) -> datetime:
    """Modified Julian Date to a timezone-aware UTC datetime."""
    return MJD_EPOCH + timedelta(days=mjd)


def calendar_fields(mjd: float) -> Tuple[int, int, float]:
    """
    Split an epoch into the (year, mmdd, decimal hours) triple used by the
    electron-density provider and the index-file range checks.
    """
    dt = mjd_to_datetime(mjd)
    hours = (dt.hour + dt.minute / 60.0 + dt.second / 3600.0
             + dt.microsecond / 3.6e9)
    return dt.year, dt.month * 100 + dt.day, hours


def format_yyyymmdd(packed: int) -> str:
    """Packed YYYYMMDD integer to M/D/YYYY for log and error messages."""
    year, md = divmod(packed, 10000)
    month, day = divmod(md, 100)
    return f"{month}/{day}/{year}"
