"""
Correction Model Interface

Defines the contract shared by the ionospheric correction models. The
engine selects one implementation by name and never needs to know which
one it is talking to.
"""

from abc import ABC, abstractmethod
from typing import Dict

from .correction_result import CorrectionContext, CorrectionResult


class CorrectionModel(ABC):
    """
    Interface for an ionospheric media correction model.

    Implementations:
        IRI2007Model  - electron density integrated along the ray path
        TRK223Model   - DSN media calibration records (TRK-2-23)

    Threading:
        Models hold mutable state (lazy initialization flags, one-time
        warning counters, statistics). Use one instance per thread.
    """

    name: str = ""

    @abstractmethod
    def initialize(self):
        """
        Load reference data. Idempotent: later calls are no-ops.

        Raises:
            IonosphereCorrectionError subclass if reference data is unusable
        """
        pass

    @abstractmethod
    def compute_correction(self, context: CorrectionContext) -> CorrectionResult:
        """
        Compute the (range, angle, time) correction for the context.

        Initializes the model first if needed. Either returns a complete
        result or raises; there are no partial results.
        """
        pass

    @abstractmethod
    def get_stats(self) -> Dict:
        """Get model usage statistics."""
        pass
