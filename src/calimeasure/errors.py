"""
Exception types raised by calimeasure.

The measurement collector defines none of its own; these belong to the
concrete calibrations and the project loader.
"""


class CalimeasureError(ValueError):
    """Base class for calimeasure errors."""


class CalibrationError(CalimeasureError):
    """Calibration input is degenerate or a point cannot be mapped."""


class ConfigError(CalimeasureError):
    """Project file is malformed or references an unknown option."""
