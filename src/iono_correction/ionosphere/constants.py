#!/usr/bin/env python3
"""
Ionospheric Correction Constants - Central Reference for the Correction Models

================================================================================
PURPOSE
================================================================================
Single source of truth for the physical constants, integration parameters,
auxiliary file names and database keys shared by the IRI2007 (physics) and
TRK-2-23 (empirical) correction models.

================================================================================
PROPAGATION PHYSICS
================================================================================
SPEED OF LIGHT:   299,792,458 m/s (scipy.constants.c)

IONOSPHERIC GROUP DELAY (Montenbruck & Gill, eq. 6.69):
    Δρ = 40.3 × TEC / f²     (meters, TEC in electrons/m², f in Hz)

REFRACTIVE INDEX (phase, first order):
    n = 1 - 40.3 × Ne / f²

The modeled ionosphere is bounded by a spherical shell 2000 km above the
reference body's equatorial radius.

================================================================================
TRK-2-23 MEDIA CALIBRATION
================================================================================
Tabulated corrections are normalized to the S-band downlink reference of
2295 MHz and rescaled by (f_ref / f)² for the actual signal frequency.

DSN complexes:
    DSN(C10) - Goldstone   (stations  0-29)
    DSN(C40) - Canberra    (stations 30-49)
    DSN(C60) - Madrid      (stations 50+)

================================================================================
REFERENCES
================================================================================
- Montenbruck, O. & Gill, E. (2000). "Satellite Orbits." Springer. §6.4.
- Bilitza, D. (2007). "International Reference Ionosphere 2007."
- DSN 820-013 TRK-2-23, "Media Calibration Interface."
"""

from typing import Dict, FrozenSet, Tuple

from scipy.constants import c as SPEED_OF_LIGHT   # m/s

# =============================================================================
# PHYSICAL CONSTANTS
# =============================================================================

KM_TO_M = 1000.0
SECONDS_PER_DAY = 86400.0

# Ionospheric refractivity constant (m³/s²)
IONO_REFRACTIVITY = 40.3

# =============================================================================
# REFERENCE BODY (Earth defaults, km)
# =============================================================================

DEFAULT_BODY_RADIUS_KM = 6378.1363
DEFAULT_BODY_FLATTENING = 0.0033527

# =============================================================================
# IRI2007 PATH INTEGRATION
# =============================================================================

NUM_OF_INTERVALS = 200
IONOSPHERE_MAX_ALTITUDE_KM = 2000.0

# Two-digit year pivot used by the ap.dat geomagnetic index file
AP_YEAR_PIVOT = 58

DEFAULT_AP_FILE = "ap.dat"
DEFAULT_IGRZ_FILE = "ig_rz.dat"
IONOSPHERE_DATA_DIR = "IonosphereData"

# 1-based provider computation flags that are switched off; all others on
DISABLED_IRI_FLAGS: FrozenSet[int] = frozenset({
    2,   # Te, Ti not computed
    3,   # Ni not computed
    5,   # foF2 from CCIR, not URSI
    6,   # Ni from Danilov-Yaichnikov-Smironova, not DS-95/TTS-03
    12,  # no messages to unit 6
    21,  # ion drift not computed
    23,  # Te topside from TBT-2011, not Intercosmos
    28,  # spread-F probability not computed
    29,  # no new options as defined by JF(30)
    30,  # NeQuick topside disabled
})
NUM_IRI_FLAGS = 30

# =============================================================================
# TRK-2-23 EMPIRICAL MODEL
# =============================================================================

MODEL_IRI2007 = "IRI2007"
MODEL_TRK223 = "TRK-2-23"
SUPPORTED_MODELS: Tuple[str, ...] = (MODEL_IRI2007, MODEL_TRK223)

S_BAND_REFERENCE_FREQ_HZ = 2295.0e6

# Two-digit year pivot used by TRK-2-23 time tokens
TRK223_YEAR_PIVOT = 69

SIGNAL_TYPES: FrozenSet[str] = frozenset({"DOPRNG", "RANGE"})
CALIBRATION_PARTITION = "CHPART"

COMPLEX_GOLDSTONE = "DSN(C10)"
COMPLEX_CANBERRA = "DSN(C40)"
COMPLEX_MADRID = "DSN(C60)"

# Common station abbreviations that name a whole complex
COMPLEX_ABBREVIATIONS: Dict[str, str] = {
    "GDS": COMPLEX_GOLDSTONE,
    "CAN": COMPLEX_CANBERRA,
    "MAD": COMPLEX_MADRID,
}

# Upper (exclusive) station-number bound for each complex
CANBERRA_FIRST_STATION = 30
MADRID_FIRST_STATION = 50
