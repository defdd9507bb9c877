"""Correction engine - holds the context and dispatches to a model.

Contains:
- IonosphereEngine: set-then-call front end selecting IRI2007 or TRK-2-23
"""

from .ionosphere_engine import IonosphereEngine, create_models, create_provider

__all__ = ['IonosphereEngine', 'create_models', 'create_provider']
