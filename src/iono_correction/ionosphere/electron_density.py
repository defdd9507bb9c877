#!/usr/bin/env python3
"""
Electron Density Provider Boundary and Adapter

================================================================================
PURPOSE
================================================================================
The IRI2007 correction needs electron density (electrons/m³) at arbitrary
points along the signal path. The density model itself is external: the
reference implementation is the IRI Fortran library, reached through a
single blocking call that takes 30 computation flags, a geodetic location,
a date and an altitude range and returns a status code plus an output
array.

This module models that boundary as an injected strategy:

    ElectronDensityProvider     abstract interface (load_data_files, compute)
    ├── Iri2016Provider         the iri2016 package (Fortran, imported lazily)
    ├── ChapmanDensityProvider  single Chapman layer, no external data
    └── ConstantDensityProvider fixed density, for tests and dry runs

    ElectronDensityAdapter      position + epoch -> DensityRequest -> Ne

================================================================================
STATUS CODES
================================================================================
    0           success
    1 - 999     provider-reported message (DensityProviderError)
    >= 1000     provider could not open its data files (DensityProviderError)

================================================================================
REFERENCES
================================================================================
1. Bilitza, D. (2008). "IRI 2007 - Report on the Workshop."
   IRISUB.FOR documents the JF(1:30) flags.
2. Rishbeth, H. & Garriott, O.K. (1969). "Introduction to Ionospheric
   Physics." Academic Press. Chapman layer profile.
"""

import logging
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Optional, Sequence, Tuple

import numpy as np

from ..exceptions import DensityProviderError
from ..interfaces.correction_result import CorrectionContext
from .constants import DISABLED_IRI_FLAGS, NUM_IRI_FLAGS
from .geometry import cartesian_to_geodetic

logger = logging.getLogger(__name__)

# Added to the decimal hour to mark it as universal time (IRI convention)
UNIVERSAL_TIME_OFFSET_HOURS = 25.0


def default_iri_flags() -> Tuple[bool, ...]:
    """The fixed JF(1:30) computation flags, index 0 holding JF(1)."""
    return tuple(
        (i + 1) not in DISABLED_IRI_FLAGS for i in range(NUM_IRI_FLAGS)
    )


@dataclass(frozen=True)
class DensityRequest:
    """Arguments of one call across the provider boundary."""
    latitude: float               # deg
    longitude: float              # deg
    year: int
    mmdd: int
    hour: float                   # decimal hours, +25 for universal time
    height_begin: float           # km
    height_end: float             # km
    height_step: float = 1.0      # km
    jmag: int = 0                 # 0 geographic, 1 geomagnetic
    ivar: int = 1                 # vary altitude
    flags: Tuple[bool, ...] = field(default_factory=default_iri_flags)

    @property
    def is_universal_time(self) -> bool:
        return self.hour >= UNIVERSAL_TIME_OFFSET_HOURS

    @property
    def utc_datetime(self) -> datetime:
        """Requested instant as a UTC datetime."""
        hour = self.hour
        if self.is_universal_time:
            hour -= UNIVERSAL_TIME_OFFSET_HOURS
        month, day = divmod(self.mmdd, 100)
        base = datetime(self.year, month, day, tzinfo=timezone.utc)
        return base + timedelta(hours=hour)


@dataclass
class DensityOutput:
    """Result of one provider call: status plus the output array."""
    status: int
    values: Sequence[float] = ()
    message: Optional[str] = None


class ElectronDensityProvider(ABC):
    """
    Interface to an electron-density model.

    Implementations block until the value is available; there is no
    cancellation or timeout.
    """

    @abstractmethod
    def load_data_files(self, data_path) -> Tuple[int, str]:
        """
        Load the model's data files once, before the first compute().

        Returns:
            (status, message) with the status codes described above
        """
        pass

    @abstractmethod
    def compute(self, request: DensityRequest) -> DensityOutput:
        """
        Evaluate the model; values[0] is electron density (el/m³) at
        request.height_begin.
        """
        pass


class ConstantDensityProvider(ElectronDensityProvider):
    """Same density everywhere."""

    def __init__(self, density: float):
        self.density = float(density)

    def load_data_files(self, data_path) -> Tuple[int, str]:
        return 0, ""

    def compute(self, request: DensityRequest) -> DensityOutput:
        return DensityOutput(status=0, values=(self.density,))


class ChapmanDensityProvider(ElectronDensityProvider):
    """
    Single Chapman layer, horizontally uniform.

        Ne(h) = NmF2 × exp(0.5 × (1 - z - exp(-z))),  z = (h - hmF2) / H
    """

    def __init__(
        self,
        peak_density: float = 1.0e12,
        peak_height_km: float = 300.0,
        scale_height_km: float = 50.0
    ):
        self.peak_density = peak_density
        self.peak_height_km = peak_height_km
        self.scale_height_km = scale_height_km

    def density(self, altitude_km: float) -> float:
        z = (altitude_km - self.peak_height_km) / self.scale_height_km
        # exp(-z) overflows well below the surface
        if z < -50.0 or z > 50.0:
            return 0.0
        return self.peak_density * math.exp(0.5 * (1.0 - z - math.exp(-z)))

    def load_data_files(self, data_path) -> Tuple[int, str]:
        return 0, ""

    def compute(self, request: DensityRequest) -> DensityOutput:
        return DensityOutput(status=0, values=(self.density(request.height_begin),))


class Iri2016Provider(ElectronDensityProvider):
    """
    Electron density from the iri2016 package.

    The package wraps the IRI Fortran code and compiles it on first use, so it
    is imported lazily in load_data_files(). It ships its own index files;
    data_path is only logged. The JF flags are fixed inside that build, so
    request.flags is not forwarded.
    """

    def __init__(self):
        self._iri_module = None

    def load_data_files(self, data_path) -> Tuple[int, str]:
        if self._iri_module is not None:
            return 0, ""
        try:
            import iri2016
        except ImportError as e:
            return 1000, (
                f"iri2016 not available (pip install iri2016 + gfortran required): {e}"
            )
        self._iri_module = iri2016
        logger.info(f"IRI-2016 model loaded (data path {data_path} not used)")
        return 0, ""

    def compute(self, request: DensityRequest) -> DensityOutput:
        if self._iri_module is None:
            return DensityOutput(status=1000, message="IRI-2016 data files not loaded")

        try:
            result = self._iri_module.IRI(
                time=request.utc_datetime,
                altkmrange=(request.height_begin,
                            request.height_begin + request.height_step,
                            request.height_step),
                glat=request.latitude,
                glon=request.longitude
            )
        except OSError as e:
            return DensityOutput(status=1000, message=f"IRI-2016 data files not found: {e}")
        except (RuntimeError, ValueError) as e:
            return DensityOutput(status=1, message=f"IRI-2016 calculation failed: {e}")

        ne = np.asarray(result['ne'], dtype=float).ravel()
        if ne.size == 0:
            return DensityOutput(status=1, message="IRI-2016 returned no density")
        # IRI flags unavailable values with -1
        value = float(ne[0]) if np.isfinite(ne[0]) else -1.0
        return DensityOutput(status=0, values=(value,))


class ElectronDensityAdapter:
    """
    Converts a body-fixed position and the context epoch into a provider
    request and returns the (non-negative) electron density.
    """

    def __init__(self, provider: ElectronDensityProvider):
        self.provider = provider
        self.calls = 0

    def build_request(self, position: np.ndarray, context: CorrectionContext) -> DensityRequest:
        latitude, longitude, altitude = cartesian_to_geodetic(
            position, context.body_radius, context.body_flattening
        )
        # Heights below 1 km and below sea level are passed through as-is
        return DensityRequest(
            latitude=latitude,
            longitude=longitude,
            year=context.year,
            mmdd=context.mmdd,
            hour=context.hours + UNIVERSAL_TIME_OFFSET_HOURS,
            height_begin=altitude,
            height_end=altitude,
        )

    def density_at(self, position: np.ndarray, context: CorrectionContext) -> float:
        """
        Electron density (el/m³) at a body-fixed position (km).

        Raises:
            DensityProviderError: provider returned a non-zero status
        """
        request = self.build_request(position, context)
        self.calls += 1

        output = self.provider.compute(request)
        if output.status != 0:
            raise DensityProviderError(output.status, output.message)

        density = float(output.values[0])
        if density < 0.0:
            density = 0.0

        return density
