"""
Ionospheric correction models.

IRI2007 path integration (physics) and TRK-2-23 media calibration records
(empirical), plus the geometry, index-file and electron-density helpers they
share. Import the concrete modules directly; the public API is re-exported
from the top-level package.
"""
