"""
Error taxonomy for ionospheric corrections.

Every fatal condition aborts the current correction call by raising one of
these; nothing in the package retries. The one non-fatal condition (epoch
outside the ig_rz.dat window) is logged with the RangeWarning category
instead of being raised.
"""

from typing import Optional


class IonosphereCorrectionError(Exception):
    """Base class for all ionospheric correction failures."""


class DataFileMissing(IonosphereCorrectionError):
    """An auxiliary index file does not exist or cannot be opened."""

    def __init__(self, filename: str):
        self.filename = filename
        super().__init__(f"{filename} file does not exist or cannot open")


class InvalidTimeRange(IonosphereCorrectionError):
    """An index file yields max date <= min date."""

    def __init__(self, filename: str, min_date: int, max_date: int):
        self.filename = filename
        self.min_date = min_date
        self.max_date = max_date
        super().__init__(
            f"time range specified from {filename} file is invalid "
            f"({min_date} to {max_date})"
        )


class DataOutOfRange(IonosphereCorrectionError):
    """Epoch falls outside the ap.dat validity window."""


class DensityProviderError(IonosphereCorrectionError):
    """The electron-density provider reported a non-zero status.

    Status codes at or above MISSING_FILE_STATUS report a missing data file;
    1-999 carry a provider message.
    """

    MISSING_FILE_STATUS = 1000

    def __init__(self, status: int, message: Optional[str] = None):
        self.status = status
        if message is None:
            if self.is_missing_file:
                message = "can't open Ionosphere data file"
            else:
                message = "Ionosphere data files not found"
        super().__init__(f"{message} (status {status})")

    @property
    def is_missing_file(self) -> bool:
        return self.status >= self.MISSING_FILE_STATUS


class RecordNotFound(IonosphereCorrectionError):
    """No TRK-2-23 record covers the station, spacecraft and epoch."""


class RecordFormatError(IonosphereCorrectionError):
    """A correction-record row is malformed."""


class UnsupportedModel(IonosphereCorrectionError):
    """A correction record names a math model other than CONST/TRIG/NRMPOW."""

    def __init__(self, model_type: str):
        self.model_type = model_type
        super().__init__(
            f"Math Format, {model_type}, does not match the allowed types "
            f"NRMPOW, TRIG, or CONST"
        )


class UnrecognizedModel(IonosphereCorrectionError):
    """The configured ionosphere model name is not supported."""

    def __init__(self, model_name: str, supported):
        self.model_name = model_name
        super().__init__(
            f"Unrecognized Ionosphere model {model_name} used. "
            f"Supported models are {' and '.join(supported)}"
        )


class WavelengthNotSet(IonosphereCorrectionError):
    """A frequency-dependent correction was requested before set_wavelength()."""


class RangeWarning(UserWarning):
    """Epoch is outside the ig_rz.dat window; corrections are degraded."""
