"""
TRK-2-23 media calibration records.

Each record is one row of at least eight fields:

    [signal_type, model_type, coefficients, record_type,
     valid_start, valid_end, facility, spacecraft]

e.g.

    RANGE,NRMPOW,"(0.45,-0.12,0.03)",CHPART,"23 03 14 00 00","23 03 15 00 00",DSN(C10),SCID(99)

Time tokens are fixed-width "YY MM DD HH MM[ SS.sss]" with a two-digit year
pivot of 69 (69-99 -> 19xx, 00-68 -> 20xx).
"""

import csv
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, List, Sequence, Tuple

from ..exceptions import RecordFormatError
from .constants import TRK223_YEAR_PIVOT
from .epochs import modified_julian_date

logger = logging.getLogger(__name__)

MIN_RECORD_FIELDS = 8

_COEFFICIENT_SPLIT = re.compile(r'[,\s]+')


def normalize_trk223_year(year: int) -> int:
    """Two-digit TRK-2-23 year to four digits (pivot 69)."""
    if TRK223_YEAR_PIVOT <= year < 1000:
        return year + 1900
    if year < TRK223_YEAR_PIVOT:
        return year + 2000
    return year


def parse_trk223_time(token: str) -> float:
    """
    "YY MM DD HH MM[ SS.sss]" -> Modified Julian Date.

    Raises:
        RecordFormatError: token is too short or not numeric
    """
    if len(token) < 14:
        raise RecordFormatError(f"time token '{token}' is shorter than 'YY MM DD HH MM'")
    try:
        year = normalize_trk223_year(int(token[0:2]))
        month = int(token[3:5])
        day = int(token[6:8])
        hour = int(token[9:11])
        minute = int(token[12:14])
        second = float(token[15:]) if len(token) > 14 and token[15:].strip() else 0.0
    except ValueError as e:
        raise RecordFormatError(f"time token '{token}' is not numeric") from e

    return modified_julian_date(year, month, day, hour, minute, second)


def parse_coefficients(text: str) -> Tuple[float, ...]:
    """'(1.0, 2.5e-3, -4)' or '1.0,2.5e-3,-4' -> tuple of floats."""
    body = text.strip().strip('()[]{}')
    parts = [p for p in _COEFFICIENT_SPLIT.split(body) if p]
    try:
        return tuple(float(p) for p in parts)
    except ValueError as e:
        raise RecordFormatError(f"coefficient list '{text}' is not numeric") from e


@dataclass(frozen=True)
class CorrectionRecord:
    """One TRK-2-23 calibration record (read-only reference data)."""
    signal_type: str                 # DOPRNG, RANGE, ...
    model_type: str                  # CONST, TRIG, NRMPOW
    coefficients: Tuple[float, ...]
    record_type: str                 # CHPART for the calibration partition
    valid_start: float               # MJD
    valid_end: float                 # MJD
    facility: str                    # DSN(C10), DSN(014), ...
    spacecraft: str                  # SCID(nn)

    @classmethod
    def from_fields(cls, fields: Sequence[str]) -> "CorrectionRecord":
        if len(fields) < MIN_RECORD_FIELDS:
            raise RecordFormatError(
                f"record has {len(fields)} fields, at least {MIN_RECORD_FIELDS} required"
            )
        fields = [f.strip() for f in fields]
        coefficients = parse_coefficients(fields[2])
        if not coefficients:
            raise RecordFormatError("record has an empty coefficient list")

        model_type = fields[1]
        if model_type == "TRIG" and (len(coefficients) < 2 or coefficients[0] == 0.0):
            raise RecordFormatError(
                f"TRIG record needs a non-zero period and a constant term, got {fields[2]}"
            )

        valid_start = parse_trk223_time(fields[4])
        valid_end = parse_trk223_time(fields[5])
        if valid_end <= valid_start:
            raise RecordFormatError(
                f"record window ends ({fields[5]}) at or before it starts ({fields[4]})"
            )

        return cls(
            signal_type=fields[0],
            model_type=model_type,
            coefficients=coefficients,
            record_type=fields[3],
            valid_start=valid_start,
            valid_end=valid_end,
            facility=fields[6],
            spacecraft=fields[7],
        )

    def covers(self, epoch: float) -> bool:
        """True when valid_start <= epoch <= valid_end."""
        return self.valid_start <= epoch <= self.valid_end


class CorrectionTable:
    """
    In-memory table of correction records, scanned linearly.

    Loaded once and treated as immutable afterwards; may be shared between
    model instances.
    """

    def __init__(self, records: Iterable[CorrectionRecord] = ()):
        self._records: List[CorrectionRecord] = list(records)

    @classmethod
    def from_rows(cls, rows: Iterable[Sequence[str]]) -> "CorrectionTable":
        return cls(CorrectionRecord.from_fields(row) for row in rows)

    @classmethod
    def from_files(cls, paths: Iterable) -> "CorrectionTable":
        table = cls()
        for path in paths:
            table.load_file(path)
        return table

    def load_file(self, path) -> int:
        """
        Append records from a CSV record file.

        Blank lines and lines starting with '#' are skipped.

        Returns:
            Number of records read
        """
        path = Path(path)
        count = 0
        for line_no, row in _read_rows(path):
            try:
                self._records.append(CorrectionRecord.from_fields(row))
            except RecordFormatError as e:
                raise RecordFormatError(f"{path}:{line_no}: {e}") from e
            count += 1
        logger.info(f"Loaded {count} correction records from {path}")
        return count

    def __iter__(self) -> Iterator[CorrectionRecord]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)


def _read_rows(path: Path) -> Iterator[Tuple[int, List[str]]]:
    with open(path, 'r', newline='') as f:
        reader = csv.reader(f, skipinitialspace=True)
        try:
            for row in reader:
                if not row or not ''.join(row).strip():
                    continue
                if row[0].lstrip().startswith('#'):
                    continue
                yield reader.line_num, row
        except UnicodeDecodeError as e:
            raise RecordFormatError(f"{path}:{reader.line_num + 1}: not a text record file") from e
