"""
TEC and bending-angle integration along the clipped signal path.

Both integrals use a fixed number of equal steps (NUM_OF_INTERVALS = 200)
so that results are exactly reproducible for identical inputs. A path that
misses the ionospheric shell yields exactly 0 for both.
"""

import logging
import math

import numpy as np

from ..interfaces.correction_result import CorrectionContext, RaySegment
from .constants import IONO_REFRACTIVITY, KM_TO_M, NUM_OF_INTERVALS
from .electron_density import ElectronDensityAdapter
from .geometry import clip_to_shell, shell_radius, unit_vector

logger = logging.getLogger(__name__)


def refractive_index(density: float, frequency: float) -> float:
    """First-order ionospheric refractive index n = 1 - 40.3 Ne / f²."""
    return 1.0 - IONO_REFRACTIVITY * density / (frequency * frequency)


def _incidence_angle(range_unit: np.ndarray, position: np.ndarray) -> float:
    cos_theta = float(np.dot(range_unit, unit_vector(position)))
    return math.acos(min(1.0, max(-1.0, cos_theta)))


class RayPathIntegrator:
    """Integrates electron density along the station-spacecraft ray."""

    def __init__(self, density: ElectronDensityAdapter):
        self.density = density

    def ray_segment(self, context: CorrectionContext) -> RaySegment:
        return clip_to_shell(
            context.station_position,
            context.spacecraft_position,
            shell_radius(context.body_radius)
        )

    def compute_tec(self, context: CorrectionContext,
                    num_intervals: int = NUM_OF_INTERVALS) -> float:
        """
        Total electron content (electrons/m²) by the midpoint rule.

        The segment inside the shell is split into num_intervals equal
        pieces; each contributes Ne(midpoint) × piece length.
        """
        segment = self.ray_segment(context)
        if segment.is_empty:
            return 0.0

        step = segment.vector / num_intervals
        ds = float(np.linalg.norm(step)) * KM_TO_M

        tec = 0.0
        p1 = segment.start
        for _ in range(num_intervals):
            p2 = p1 + step
            tec += self.density.density_at((p1 + p2) / 2.0, context) * ds
            p1 = p2

        logger.debug(f"TEC = {tec / 1e16:.6f} TECU over {segment.length_km:.1f} km")
        return tec

    def compute_bending_angle(self, context: CorrectionContext,
                              num_intervals: int = NUM_OF_INTERVALS) -> float:
        """
        Elevation-angle correction (rad) from refraction along the path.

        Marches from the spacecraft end of the segment back to the station
        end. At each step the incidence-angle change is

            dθ = ((n_prev - n) / n) × tan(θ_prev)

        where prev is the sample one step farther from the station, and the
        incidence angle used for the next step is reduced by the running
        sum. The elevation correction is the negative of the total.
        """
        segment = self.ray_segment(context)
        if segment.is_empty:
            return 0.0

        frequency = context.frequency
        range_vec = segment.vector
        range_unit = unit_vector(range_vec)
        step = range_vec / num_intervals

        r_prev = segment.end
        theta_prev = _incidence_angle(range_unit, r_prev)
        n_prev = refractive_index(self.density.density_at(r_prev, context), frequency)

        dtheta_total = 0.0
        for _ in range(num_intervals):
            r = r_prev - step
            n = refractive_index(self.density.density_at(r, context), frequency)

            dtheta_total += ((n_prev - n) / n) * math.tan(theta_prev)

            r_prev = r
            theta_prev = _incidence_angle(range_unit, r_prev) - dtheta_total
            n_prev = n

        return -dtheta_total
