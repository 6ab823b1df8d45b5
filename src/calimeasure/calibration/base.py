"""
Calibration context interface and the angle conversion shared by every
calibration.
"""

from __future__ import annotations

import math
from typing import Protocol, runtime_checkable

from ..types import AngleConvention, Point


@runtime_checkable
class CalibrationContext(Protocol):
    """
    Maps image-space geometry to calibrated real-world values.
    """

    def get_point(self, point: Point) -> tuple[float, float]:
        """Map an image point into calibrated coordinates."""
        ...

    def convert_angle(self, angle: float) -> float:
        """Convert a calibrated angle reading into the display convention."""
        ...


def convert_angle(angle: float, convention: AngleConvention) -> float:
    """
    Apply sign, range and unit conventions to a calibrated angle.

    Args:
        angle: Degrees, counter-clockwise positive
        convention: Target presentation

    Returns:
        Angle in [0, 360) or (-180, 180], in degrees or radians
    """
    if convention.clockwise:
        angle = -angle

    angle = angle % 360.0
    if angle >= 360.0:
        angle = 0.0
    if convention.signed and angle > 180.0:
        angle -= 360.0

    if convention.unit == "radian":
        return math.radians(angle)
    return angle
