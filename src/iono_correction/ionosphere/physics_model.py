#!/usr/bin/env python3
"""
IRI2007 Ionospheric Correction - Electron Density Integrated Along the Ray

================================================================================
MODEL
================================================================================
For a signal of frequency f crossing the ionosphere:

    TEC  = ∫ Ne ds                         (electrons/m², midpoint rule)
    Δρ   = 40.3 × TEC / f²                 (m, Montenbruck & Gill eq. 6.69)
    Δt   = Δρ / c                          (s)
    Δβ   = -Σ dθ                           (rad, see integration.py)

Only the part of the path below IONOSPHERE_MAX_ALTITUDE_KM contributes.

================================================================================
APPLICABILITY
================================================================================
The density provider is driven by two index files (see time_ranges.py):

    epoch outside ap.dat     -> DataOutOfRange, no correction
    epoch outside ig_rz.dat  -> logged once per model instance, then the
                                correction proceeds with whatever the
                                provider returns outside its index range

Whether the second case should also be fatal is an open question; the
behavior is kept as-is and surfaced through stats['range_warnings'].
"""

import logging
import warnings
from pathlib import Path
from typing import Dict

from ..exceptions import DataOutOfRange, DensityProviderError, RangeWarning
from ..interfaces.correction_model import CorrectionModel
from ..interfaces.correction_result import CorrectionContext, CorrectionResult
from .constants import (
    DEFAULT_AP_FILE,
    DEFAULT_IGRZ_FILE,
    IONO_REFRACTIVITY,
    MODEL_IRI2007,
    SPEED_OF_LIGHT,
)
from .electron_density import ElectronDensityAdapter, ElectronDensityProvider
from .epochs import format_yyyymmdd
from .integration import RayPathIntegrator
from .time_ranges import TimeRangeValidator

logger = logging.getLogger(__name__)


class IRI2007Model(CorrectionModel):
    """
    Physics-based ionospheric correction.

    Usage:
        model = IRI2007Model(provider=Iri2016Provider(), data_path="/opt/gmat/data")
        result = model.compute_correction(context)
        print(f"Range delay: {result.range_correction:.3f} m")
    """

    name = MODEL_IRI2007

    def __init__(
        self,
        provider: ElectronDensityProvider,
        data_path,
        ap_file: str = DEFAULT_AP_FILE,
        igrz_file: str = DEFAULT_IGRZ_FILE
    ):
        """
        Args:
            provider: Electron-density provider (injected)
            data_path: Root data directory holding IonosphereData/
            ap_file: Short-period index file name
            igrz_file: Long-period index file name
        """
        self.provider = provider
        self.data_path = Path(data_path)
        self.time_ranges = TimeRangeValidator(self.data_path, ap_file, igrz_file)
        self.density = ElectronDensityAdapter(provider)
        self.integrator = RayPathIntegrator(self.density)

        self._initialized = False
        self._igrz_warning_count = 0

        self.stats = {
            'corrections': 0,
            'density_calls': 0,
            'range_warnings': 0,
        }

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    def initialize(self):
        if self._initialized:
            return

        self.time_ranges.initialize_time_ranges()

        status, message = self.provider.load_data_files(self.data_path)
        if status != 0:
            raise DensityProviderError(status, message or None)

        self._initialized = True
        logger.info(f"{self.name} model initialized from {self.data_path}")

    def _check_epoch(self, context: CorrectionContext):
        date = context.yyyymmdd
        igrz = self.time_ranges.igrz_range
        ap = self.time_ranges.ap_range

        if not igrz.contains(date):
            if self._igrz_warning_count == 0:
                message = (
                    f"The epoch ({context.epoch:.12f} MJD) is out of the time range "
                    f"of the ionosphere {self.time_ranges.igrz_path.name} file "
                    f"({format_yyyymmdd(igrz.min_date)} to {format_yyyymmdd(igrz.max_date)}). "
                    f"Ionospheric corrections are degraded."
                )
                logger.warning(message)
                warnings.warn(message, RangeWarning, stacklevel=3)
                self.stats['range_warnings'] += 1
            self._igrz_warning_count += 1

        if not ap.contains(date):
            raise DataOutOfRange(
                f"Epoch is out of range. Time range for Ionosphere calculation is "
                f"from {format_yyyymmdd(ap.min_date)} to {format_yyyymmdd(ap.max_date)}"
            )

    def compute_tec(self, context: CorrectionContext) -> float:
        return self.integrator.compute_tec(context)

    def compute_bending_angle(self, context: CorrectionContext) -> float:
        return self.integrator.compute_bending_angle(context)

    def compute_correction(self, context: CorrectionContext) -> CorrectionResult:
        self.initialize()
        self._check_epoch(context)

        calls_before = self.density.calls

        frequency = context.frequency
        tec = self.compute_tec(context)                              # el/m²
        drho = IONO_REFRACTIVITY * tec / (frequency * frequency)     # m
        dphi = self.compute_bending_angle(context)                   # rad
        dtime = drho / SPEED_OF_LIGHT                                # s

        self.stats['corrections'] += 1
        self.stats['density_calls'] += self.density.calls - calls_before

        logger.debug(f"{self.name}: freq={frequency / 1e6:.6f} MHz, tec={tec / 1e16:.6f}e16, "
                     f"drho={drho:.6f} m, dphi={dphi:.3e} rad, dtime={dtime:.3e} s")

        return CorrectionResult(drho, dphi, dtime)

    def get_stats(self) -> Dict:
        return dict(self.stats)
