"""
Calibration module for calimeasure.

Each calibration is an immutable dataclass implementing CalibrationContext.
No threading, no state changes after construction.
"""

from .base import (
    CalibrationContext,
    convert_angle,
)

from .distortion import (
    LensDistortion,
    undistort_point,
    undistort_points,
)

from .line import (
    IdentityCalibration,
    LineCalibration,
)

from .plane import (
    PlaneCalibration,
    compute_homography,
)

__all__ = [
    # Interface
    "CalibrationContext",
    "convert_angle",
    # Distortion
    "LensDistortion",
    "undistort_point",
    "undistort_points",
    # Calibrations
    "IdentityCalibration",
    "LineCalibration",
    "PlaneCalibration",
    "compute_homography",
]
