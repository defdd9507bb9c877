"""Data contracts shared by the correction models and their callers."""

from .correction_result import (
    CorrectionContext,
    CorrectionResult,
    RaySegment,
    TimeRange,
)

__all__ = ['CorrectionContext', 'CorrectionResult', 'RaySegment', 'TimeRange']
