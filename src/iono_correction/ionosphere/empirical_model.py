#!/usr/bin/env python3
"""
TRK-2-23 Ionospheric Correction - DSN Media Calibration Records

================================================================================
MODEL
================================================================================
The DSN publishes ionospheric range calibrations as piecewise parametric
records, each valid over a time window for one spacecraft and either a whole
complex or a single station. Values are tabulated for the S-band reference
frequency (2295 MHz) and scaled for the actual signal:

    Δρ(f) = Δρ_table × (2295 MHz / f)²

A correction is the complex-level record plus, when present, the
station-level record for the same spacecraft and epoch.

================================================================================
MATH MODELS
================================================================================
CONST   Δρ = c0

TRIG    x  = 2π (t - t_start) / c0            (t in seconds)
        Δρ = c1 + Σ_k [ c(2k) cos(k x) + c(2k+1) sin(k x) ],  k = 1, 2, ...

NRMPOW  x  = 2 (t - t_start) / (t_end - t_start) - 1     (x in [-1, 1])
        Δρ = Σ_i c_i x^i

================================================================================
STATION KEYS
================================================================================
    "GDS" / "CAN" / "MAD"  -> DSN(C10) / DSN(C40) / DSN(C60) (complex only)
    "14"                   -> station DSN(014), complex DSN(C10)
    "C43" / "43"           -> station DSN(C43) / DSN(043), complex DSN(C40)
    "63"                   -> station DSN(063), complex DSN(C60)

Station numbers below 30 belong to Goldstone, 30-49 to Canberra and 50 and
above to Madrid.
"""

import logging
import math
from typing import Dict, Optional, Sequence, Tuple

from ..exceptions import RecordNotFound, UnsupportedModel
from ..interfaces.correction_model import CorrectionModel
from ..interfaces.correction_result import CorrectionContext, CorrectionResult
from .constants import (
    CALIBRATION_PARTITION,
    CANBERRA_FIRST_STATION,
    COMPLEX_ABBREVIATIONS,
    COMPLEX_CANBERRA,
    COMPLEX_GOLDSTONE,
    COMPLEX_MADRID,
    MADRID_FIRST_STATION,
    MODEL_TRK223,
    S_BAND_REFERENCE_FREQ_HZ,
    SECONDS_PER_DAY,
    SIGNAL_TYPES,
    SPEED_OF_LIGHT,
)
from .epochs import mjd_to_datetime
from .records import CorrectionRecord, CorrectionTable

logger = logging.getLogger(__name__)


def complex_for_station(station_number: int) -> str:
    if station_number < CANBERRA_FIRST_STATION:
        return COMPLEX_GOLDSTONE
    if station_number < MADRID_FIRST_STATION:
        return COMPLEX_CANBERRA
    return COMPLEX_MADRID


def normalize_station(station_id: str) -> Tuple[str, str]:
    """
    Map a ground-station identifier to its (station_key, complex_key).

    Raises:
        RecordNotFound: identifier is neither an abbreviation nor numeric
    """
    station_id = station_id.strip()
    if station_id in COMPLEX_ABBREVIATIONS:
        key = COMPLEX_ABBREVIATIONS[station_id]
        return key, key

    digits = station_id[1:] if station_id.startswith("C") else station_id
    try:
        station_number = int(digits)
    except ValueError:
        raise RecordNotFound(
            f"Ground station id '{station_id}' is not a DSN station number "
            f"or complex abbreviation"
        ) from None

    if len(station_id) < 3:
        station_key = f"DSN(0{station_id})"
    else:
        station_key = f"DSN({station_id})"

    return station_key, complex_for_station(station_number)


def spacecraft_key(spacecraft_id) -> str:
    return "SCID(" + "".join(str(spacecraft_id).split()) + ")"


def evaluate_trig(coefficients: Sequence[float], elapsed_seconds: float) -> float:
    """Truncated Fourier series; coefficients[0] is the period in seconds."""
    x = 2.0 * math.pi * elapsed_seconds / coefficients[0]
    value = coefficients[1]
    harmonic = 1
    for i in range(2, len(coefficients) - 1, 2):
        value += (coefficients[i] * math.cos(harmonic * x)
                  + coefficients[i + 1] * math.sin(harmonic * x))
        harmonic += 1
    return value


def evaluate_nrmpow(coefficients: Sequence[float], normalized_time: float) -> float:
    """Power series in normalized time x in [-1, 1]."""
    value = 0.0
    for i, coefficient in enumerate(coefficients):
        value += coefficient * normalized_time ** i
    return value


def evaluate_record(record: CorrectionRecord, epoch: float) -> float:
    """
    Evaluate a record's math model at epoch (MJD), unscaled.

    Raises:
        UnsupportedModel: model type is not CONST, TRIG or NRMPOW
    """
    model_type = record.model_type
    coefficients = record.coefficients

    if model_type == "CONST":
        return coefficients[0]

    elapsed = (epoch - record.valid_start) * SECONDS_PER_DAY

    if model_type == "TRIG":
        return evaluate_trig(coefficients, elapsed)

    if model_type == "NRMPOW":
        span = (record.valid_end - record.valid_start) * SECONDS_PER_DAY
        return evaluate_nrmpow(coefficients, 2.0 * elapsed / span - 1.0)

    raise UnsupportedModel(model_type)


def frequency_scale(frequency: float) -> float:
    """(2295 MHz / f)² rescaling of S-band tabulated corrections."""
    ratio = S_BAND_REFERENCE_FREQ_HZ / frequency
    return ratio * ratio


class TRK223Model(CorrectionModel):
    """
    Empirical ionospheric correction from DSN calibration records.

    Usage:
        table = CorrectionTable.from_files(["iono.csp.csv"])
        model = TRK223Model(table)
        result = model.compute_correction(context)
    """

    name = MODEL_TRK223

    def __init__(self, table: Optional[CorrectionTable] = None, record_files: Sequence = ()):
        """
        Args:
            table: Pre-loaded correction records (shared, read-only)
            record_files: Record files to load on initialize() when no table is given
        """
        self.table = table
        self.record_files = list(record_files)

        self.stats = {
            'corrections': 0,
            'records_matched': 0,
        }

    def initialize(self):
        if self.table is not None:
            return
        self.table = CorrectionTable.from_files(self.record_files)
        logger.info(f"{self.name}: {len(self.table)} records from {len(self.record_files)} files")

    def find_records(
        self,
        station_key: str,
        complex_key: str,
        scid: str,
        epoch: float
    ) -> Tuple[Optional[CorrectionRecord], Optional[CorrectionRecord]]:
        """
        Scan for the (complex-level, station-level) records covering epoch.

        Later matches replace earlier ones in each slot.
        """
        complex_record = None
        station_record = None

        for record in self.table:
            if record.spacecraft != scid:
                continue
            if record.signal_type not in SIGNAL_TYPES:
                continue
            if record.record_type != CALIBRATION_PARTITION:
                continue
            if not record.covers(epoch):
                continue

            if record.facility == complex_key:
                complex_record = record
            elif record.facility == station_key:
                station_record = record

        return complex_record, station_record

    def compute_correction(self, context: CorrectionContext) -> CorrectionResult:
        self.initialize()

        station_key, complex_key = normalize_station(context.station_id)
        scid = spacecraft_key(context.spacecraft_id)
        epoch = context.epoch

        complex_record, station_record = self.find_records(station_key, complex_key, scid, epoch)

        if complex_record is None:
            raise RecordNotFound(
                f"Unable to find ionospheric correction for {station_key} in DSN Complex "
                f"{complex_key} and {scid} at {mjd_to_datetime(epoch).isoformat()}"
            )

        scale = frequency_scale(context.frequency)

        correction = evaluate_record(complex_record, epoch) * scale
        matched = 1
        if station_record is not None:
            correction += evaluate_record(station_record, epoch) * scale
            matched += 1

        self.stats['corrections'] += 1
        self.stats['records_matched'] += matched

        logger.debug(f"{self.name}: {scid} at {complex_key}/{station_key}: "
                     f"drho={correction:.6f} m from {matched} record(s)")

        # Sign convention: positive for range (wide-band) calibrations
        return CorrectionResult(correction, 0.0, correction / SPEED_OF_LIGHT)

    def get_stats(self) -> Dict:
        return dict(self.stats)
