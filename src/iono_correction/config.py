"""
Configuration loading.

Configuration lives in a TOML file:

    [ionosphere]
    model = "IRI2007"                 # or "TRK-2-23"
    data_path = "/opt/gmat/data"      # holds IonosphereData/ap.dat, ig_rz.dat
    provider = "iri2016"              # "iri2016", "chapman" or "constant"
    constant_density = 1.0e11         # el/m³, provider = "constant"
    record_files = ["iono_2023.csv"]  # TRK-2-23 records
    body_radius_km = 6378.1363
    body_flattening = 0.0033527

    [measurement]
    station_position = [-2353.6, -4641.3, 3677.0]    # km, body-fixed
    spacecraft_position = [-2853.6, -6641.3, 5677.0]
    wavelength_m = 0.13
    epoch_mjd = 60000.5
    station_id = "14"
    spacecraft_id = "99"
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import toml

from .ionosphere.constants import (
    DEFAULT_AP_FILE,
    DEFAULT_BODY_FLATTENING,
    DEFAULT_BODY_RADIUS_KM,
    DEFAULT_IGRZ_FILE,
    MODEL_IRI2007,
)

logger = logging.getLogger(__name__)


def load_config(path) -> Dict[str, Any]:
    """Read a TOML configuration file into a dict."""
    path = Path(path)
    config = toml.load(path)
    logger.info(f"Loaded config from {path}")
    return config


@dataclass
class IonosphereConfig:
    """The [ionosphere] table with defaults applied."""
    model: str = MODEL_IRI2007
    data_path: str = "."
    ap_file: str = DEFAULT_AP_FILE
    igrz_file: str = DEFAULT_IGRZ_FILE
    provider: str = "iri2016"
    constant_density: float = 0.0
    record_files: List[str] = field(default_factory=list)
    body_radius_km: float = DEFAULT_BODY_RADIUS_KM
    body_flattening: float = DEFAULT_BODY_FLATTENING

    @classmethod
    def from_dict(cls, config: Dict[str, Any]) -> "IonosphereConfig":
        section = config.get('ionosphere', {})
        return cls(
            model=section.get('model', MODEL_IRI2007),
            data_path=section.get('data_path', '.'),
            ap_file=section.get('ap_file', DEFAULT_AP_FILE),
            igrz_file=section.get('igrz_file', DEFAULT_IGRZ_FILE),
            provider=section.get('provider', 'iri2016'),
            constant_density=float(section.get('constant_density', 0.0)),
            record_files=list(section.get('record_files', [])),
            body_radius_km=float(section.get('body_radius_km', DEFAULT_BODY_RADIUS_KM)),
            body_flattening=float(section.get('body_flattening', DEFAULT_BODY_FLATTENING)),
        )


@dataclass
class MeasurementConfig:
    """The [measurement] table used by the command-line tool."""
    station_position: List[float] = field(default_factory=lambda: [0.0, 0.0, 0.0])
    spacecraft_position: List[float] = field(default_factory=lambda: [0.0, 0.0, 0.0])
    wavelength_m: Optional[float] = None
    epoch_mjd: Optional[float] = None
    station_id: str = ""
    spacecraft_id: str = ""

    @classmethod
    def from_dict(cls, config: Dict[str, Any]) -> "MeasurementConfig":
        section = config.get('measurement', {})
        return cls(
            station_position=[float(v) for v in section.get('station_position', [0.0, 0.0, 0.0])],
            spacecraft_position=[float(v) for v in section.get('spacecraft_position', [0.0, 0.0, 0.0])],
            wavelength_m=section.get('wavelength_m'),
            epoch_mjd=section.get('epoch_mjd'),
            station_id=str(section.get('station_id', '')),
            spacecraft_id=str(section.get('spacecraft_id', '')),
        )
