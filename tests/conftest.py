"""
Pytest configuration and fixtures for iono-correction tests.
"""

import pytest
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / 'src'))

EARTH_RADIUS_KM = 6378.1363

AP_DAT = """\
58  1  1  18 27 20 13 13  7 13 20 18  17
58  1  2   7  5  3  4  7  9 12 15  8  12
90  6 15   4  3  3  5  4  6  7  5  5   6
24 12 30   5  4  3  3  2  4  6  5  4   5
24 12 31   7  5  3  4  2  3  5  6  4   4

"""

IG_RZ_DAT = """\

Dec 12, 2023
1,1958,12,2022
-1.0,-1.0,-1.0,-1.0,-1.0,-1.0,-1.0,-1.0,-1.0,-1.0,-1.0,-1.0
"""


@pytest.fixture
def data_dir(tmp_path):
    """Root data directory with IonosphereData/ap.dat and ig_rz.dat.

    ap.dat covers 1958-01-01 to 2024-12-31, ig_rz.dat 1958-01-01 to 2022-12-31.
    """
    iono_dir = tmp_path / 'IonosphereData'
    iono_dir.mkdir()
    (iono_dir / 'ap.dat').write_text(AP_DAT)
    (iono_dir / 'ig_rz.dat').write_text(IG_RZ_DAT)
    return tmp_path


@pytest.fixture
def station_position():
    """Station on the equator at the prime meridian, on the surface (km)."""
    return [EARTH_RADIUS_KM, 0.0, 0.0]


@pytest.fixture
def zenith_spacecraft():
    """Spacecraft 20000 km straight above the station."""
    return [EARTH_RADIUS_KM + 20000.0, 0.0, 0.0]


@pytest.fixture
def slant_spacecraft():
    """Spacecraft seen from the station at 45° elevation."""
    return [EARTH_RADIUS_KM + 20000.0, 20000.0, 0.0]


@pytest.fixture
def s_band_wavelength():
    """Wavelength (m) of the 2295 MHz S-band reference frequency."""
    from scipy.constants import c
    return c / 2295.0e6


@pytest.fixture
def in_range_epoch():
    """2020-03-15 12:00 UTC, inside both index files."""
    from iono_correction.ionosphere.epochs import modified_julian_date
    return modified_julian_date(2020, 3, 15, 12)


@pytest.fixture
def context_factory(station_position, zenith_spacecraft, s_band_wavelength, in_range_epoch):
    """Build a CorrectionContext; keyword arguments override the defaults."""
    import numpy as np
    from iono_correction.interfaces.correction_result import CorrectionContext
    from iono_correction.ionosphere.epochs import calendar_fields

    def make(station=None, spacecraft=None, wavelength=None, epoch=None, **kwargs):
        epoch = in_range_epoch if epoch is None else epoch
        year, mmdd, hours = calendar_fields(epoch)
        return CorrectionContext(
            station_position=np.asarray(station_position if station is None else station, dtype=float),
            spacecraft_position=np.asarray(zenith_spacecraft if spacecraft is None else spacecraft, dtype=float),
            wavelength=s_band_wavelength if wavelength is None else wavelength,
            epoch=epoch,
            year=year,
            mmdd=mmdd,
            hours=hours,
            **kwargs
        )

    return make
