#!/usr/bin/env python3
"""
Ionosphere Engine - Set-Then-Call Front End for the Correction Models

================================================================================
USAGE
================================================================================
The estimation pipeline configures the engine once per measurement and then
asks for the correction:

    engine = IonosphereEngine.from_config(IonosphereConfig.from_dict(config))

    engine.set_station_position([-2353.6, -4641.3, 3677.0])     # km
    engine.set_spacecraft_position([-2853.6, -6641.3, 5677.0])  # km
    engine.set_wavelength(0.1306)                                # m
    engine.set_time(60000.5)                                     # UTC MJD

    drho, dphi, dt = engine.correction()

The configured model name picks the implementation:

    "IRI2007"   IRI2007Model  (electron density integrated along the ray)
    "TRK-2-23"  TRK223Model   (DSN media calibration records)

================================================================================
THREADING
================================================================================
The engine and its models carry mutable state (context, lazy initialization,
one-time warnings, statistics). Use one engine per thread.
"""

import logging
from typing import Dict, Optional, Sequence

import numpy as np

from ..config import IonosphereConfig
from ..exceptions import UnrecognizedModel
from ..interfaces.correction_model import CorrectionModel
from ..interfaces.correction_result import CorrectionContext, CorrectionResult
from ..ionosphere.constants import MODEL_IRI2007, MODEL_TRK223, SUPPORTED_MODELS
from ..ionosphere.electron_density import (
    ChapmanDensityProvider,
    ConstantDensityProvider,
    ElectronDensityProvider,
    Iri2016Provider,
)
from ..ionosphere.empirical_model import TRK223Model
from ..ionosphere.epochs import calendar_fields
from ..ionosphere.physics_model import IRI2007Model
from ..ionosphere.records import CorrectionTable

logger = logging.getLogger(__name__)


def create_provider(config: IonosphereConfig) -> ElectronDensityProvider:
    """Build the electron-density provider named in the config."""
    name = config.provider.lower()
    if name == 'iri2016':
        return Iri2016Provider()
    if name == 'chapman':
        return ChapmanDensityProvider()
    if name == 'constant':
        return ConstantDensityProvider(config.constant_density)
    raise ValueError(f"Unknown electron density provider '{config.provider}'")


def create_models(
    config: IonosphereConfig,
    provider: Optional[ElectronDensityProvider] = None,
    table: Optional[CorrectionTable] = None
) -> Dict[str, CorrectionModel]:
    """
    Build every supported model. Construction does no I/O; data files are
    read on each model's first correction.
    """
    if provider is None:
        provider = create_provider(config)

    return {
        MODEL_IRI2007: IRI2007Model(
            provider=provider,
            data_path=config.data_path,
            ap_file=config.ap_file,
            igrz_file=config.igrz_file
        ),
        MODEL_TRK223: TRK223Model(table=table, record_files=config.record_files),
    }


class IonosphereEngine:
    """
    Holds the correction context and dispatches to the selected model.
    """

    def __init__(
        self,
        model_name: str = MODEL_IRI2007,
        models: Optional[Dict[str, CorrectionModel]] = None,
        context: Optional[CorrectionContext] = None
    ):
        """
        Args:
            model_name: Name of the model correction() dispatches to
            models: Model instances keyed by name (owned by this engine)
            context: Initial context (default: empty)
        """
        self.model_name = model_name
        self.models: Dict[str, CorrectionModel] = dict(models or {})
        self.context = context or CorrectionContext()

    @classmethod
    def from_config(
        cls,
        config: IonosphereConfig,
        provider: Optional[ElectronDensityProvider] = None,
        table: Optional[CorrectionTable] = None
    ) -> "IonosphereEngine":
        engine = cls(model_name=config.model, models=create_models(config, provider, table))
        engine.set_body_shape(config.body_radius_km, config.body_flattening)
        return engine

    # -------------------------------------------------------------------------
    # Context setters
    # -------------------------------------------------------------------------

    def set_station_position(self, position: Sequence[float]):
        """Station position, body-fixed (km)."""
        self.context.station_position = np.asarray(position, dtype=float).reshape(3)

    def set_spacecraft_position(self, position: Sequence[float]):
        """Spacecraft position, body-fixed (km)."""
        self.context.spacecraft_position = np.asarray(position, dtype=float).reshape(3)

    def set_wavelength(self, wavelength: float):
        """Signal wavelength (m); must be positive."""
        if wavelength <= 0.0:
            raise ValueError(f"Wavelength must be positive, got {wavelength}")
        self.context.wavelength = float(wavelength)

    def set_time(self, epoch: float):
        """Measurement epoch (UTC MJD)."""
        self.context.epoch = float(epoch)
        self.context.year, self.context.mmdd, self.context.hours = calendar_fields(epoch)

    def set_body_shape(self, radius: float, flattening: float):
        """Reference body equatorial radius (km) and flattening."""
        self.context.body_radius = float(radius)
        self.context.body_flattening = float(flattening)

    def set_station_id(self, station_id):
        self.context.station_id = str(station_id)

    def set_spacecraft_id(self, spacecraft_id):
        self.context.spacecraft_id = str(spacecraft_id)

    # -------------------------------------------------------------------------
    # Dispatch
    # -------------------------------------------------------------------------

    @property
    def model(self) -> CorrectionModel:
        """
        The configured model.

        Raises:
            UnrecognizedModel: model_name is not supported
        """
        model = self.models.get(self.model_name)
        if model is None:
            error = UnrecognizedModel(self.model_name, SUPPORTED_MODELS)
            logger.error(str(error))
            raise error
        return model

    def correction(self) -> CorrectionResult:
        """
        Ionospheric correction for the current context.

        Returns:
            CorrectionResult(range m, angle rad, time s)
        """
        result = self.model.compute_correction(self.context)
        logger.debug(f"{self.model_name} correction: range={result.range_correction:.6f} m, "
                     f"angle={result.angle_correction:.3e} rad, time={result.time_correction:.3e} s")
        return result

    def get_stats(self) -> Dict[str, Dict]:
        return {name: model.get_stats() for name, model in self.models.items()}
