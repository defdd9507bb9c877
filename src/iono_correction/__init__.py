"""
iono-correction: Ionospheric Media Corrections for Radiometric Tracking

This package computes the ionospheric range, elevation-angle and time
corrections of a tracking signal between a ground station and a spacecraft,
for use by an orbit-determination pipeline. Two models are provided:

    1. IRI2007  - electron density from an injected provider (IRI-2016 by
                  default) integrated along the station-spacecraft ray
    2. TRK-2-23 - DSN media calibration records (CONST, TRIG, NRMPOW)

Usage:
    engine = IonosphereEngine.from_config(IonosphereConfig.from_dict(config))
    engine.set_station_position(station_km)
    engine.set_spacecraft_position(spacecraft_km)
    engine.set_wavelength(wavelength_m)
    engine.set_time(epoch_mjd)
    range_m, angle_rad, time_s = engine.correction()

Version: 1.0.0
"""

__version__ = "1.0.0"

from .config import IonosphereConfig, MeasurementConfig, load_config
from .engine.ionosphere_engine import IonosphereEngine
from .exceptions import (
    IonosphereCorrectionError,
    DataFileMissing,
    InvalidTimeRange,
    DataOutOfRange,
    DensityProviderError,
    RecordNotFound,
    RecordFormatError,
    UnsupportedModel,
    UnrecognizedModel,
    WavelengthNotSet,
    RangeWarning,
)
from .interfaces.correction_result import CorrectionContext, CorrectionResult

__all__ = [
    "IonosphereEngine",
    "IonosphereConfig",
    "MeasurementConfig",
    "load_config",
    "CorrectionContext",
    "CorrectionResult",
    "IonosphereCorrectionError",
    "DataFileMissing",
    "InvalidTimeRange",
    "DataOutOfRange",
    "DensityProviderError",
    "RecordNotFound",
    "RecordFormatError",
    "UnsupportedModel",
    "UnrecognizedModel",
    "WavelengthNotSet",
    "RangeWarning",
    "__version__",
]
