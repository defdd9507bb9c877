"""
Correction Data Models

These dataclasses define the contract between the ionospheric correction
models and the estimation pipeline that consumes them. The CorrectionResult
is the only output; the CorrectionContext is the engine state a caller fills
in with setters before asking for a correction.

Units:
    positions   km, body-fixed
    wavelength  m
    epoch       UTC Modified Julian Date
    corrections (m, rad, s)
"""

from dataclasses import dataclass, field
from typing import NamedTuple, Optional
import json

import numpy as np

from ..exceptions import WavelengthNotSet
from ..ionosphere.constants import (
    SPEED_OF_LIGHT,
    DEFAULT_BODY_RADIUS_KM,
    DEFAULT_BODY_FLATTENING,
)


class CorrectionResult(NamedTuple):
    """Ordered (range, angle, time) ionospheric correction."""
    range_correction: float   # m
    angle_correction: float   # rad (elevation)
    time_correction: float    # s

    @classmethod
    def zero(cls) -> "CorrectionResult":
        return cls(0.0, 0.0, 0.0)

    def to_dict(self) -> dict:
        return {
            "range_correction_m": self.range_correction,
            "angle_correction_rad": self.angle_correction,
            "time_correction_s": self.time_correction,
        }

    def to_json(self) -> str:
        """Serialize to JSON for the command-line output."""
        return json.dumps(self.to_dict(), indent=2)


@dataclass(frozen=True)
class TimeRange:
    """
    Validity window of one auxiliary index file.

    Dates are packed YYYYMMDD integers. The window is half-open:
    min_date <= date < max_date.
    """
    min_date: int
    max_date: int
    source: str = ""

    @property
    def is_valid(self) -> bool:
        return self.max_date > self.min_date

    def contains(self, yyyymmdd: int) -> bool:
        return self.min_date <= yyyymmdd < self.max_date


@dataclass
class RaySegment:
    """Portion of the station-spacecraft line inside the ionospheric shell."""
    start: Optional[np.ndarray] = None
    end: Optional[np.ndarray] = None

    @property
    def is_empty(self) -> bool:
        return self.start is None or self.end is None

    @property
    def vector(self) -> np.ndarray:
        return self.end - self.start

    @property
    def length_km(self) -> float:
        if self.is_empty:
            return 0.0
        return float(np.linalg.norm(self.vector))


@dataclass
class CorrectionContext:
    """
    Geometry, signal and time state for one correction call.

    Held by the engine across calls and mutated only through its setters;
    every model reads it without modifying it. Not safe to share between
    threads.
    """
    station_position: np.ndarray = field(default_factory=lambda: np.zeros(3))
    spacecraft_position: np.ndarray = field(default_factory=lambda: np.zeros(3))
    wavelength: float = 0.0               # m; 0 means "not set"
    epoch: float = 0.0                    # UTC MJD

    # Calendar breakdown of epoch (filled by the engine's set_time)
    year: int = 0
    mmdd: int = 0
    hours: float = 0.0

    body_radius: float = DEFAULT_BODY_RADIUS_KM
    body_flattening: float = DEFAULT_BODY_FLATTENING

    # Identifiers for the TRK-2-23 database lookup
    station_id: str = ""
    spacecraft_id: str = ""

    @property
    def frequency(self) -> float:
        """Signal frequency in Hz."""
        if self.wavelength <= 0.0:
            raise WavelengthNotSet(
                "signal wavelength must be set before computing a "
                "frequency-dependent correction"
            )
        return SPEED_OF_LIGHT / self.wavelength

    @property
    def yyyymmdd(self) -> int:
        return self.year * 10000 + self.mmdd
