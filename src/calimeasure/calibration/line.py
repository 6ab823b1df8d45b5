"""
Uniform-scale calibrations: none at all, or a known reference length.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ..errors import CalibrationError
from ..geometry import get_distance
from ..types import AngleConvention, Point
from .base import convert_angle
from .distortion import LensDistortion, undistort_point


@dataclass(frozen=True, slots=True)
class IdentityCalibration:
    """
    Pixels in, pixels out. Used when no calibration has been set.
    """

    angle_convention: AngleConvention = field(default_factory=AngleConvention)
    distortion: LensDistortion | None = None

    def get_point(self, point: Point) -> tuple[float, float]:
        x, y = undistort_point(point, self.distortion)
        return float(x), float(y)

    def convert_angle(self, angle: float) -> float:
        return convert_angle(angle, self.angle_convention)


@dataclass(frozen=True, slots=True)
class LineCalibration:
    """
    Single scale factor derived from a line of known length.

    Coordinates are relative to origin. With y_up, the y axis points up
    the frame instead of down the pixel rows.
    """

    origin: tuple[float, float]
    pixels_per_unit: float
    y_up: bool = True
    angle_convention: AngleConvention = field(default_factory=AngleConvention)
    distortion: LensDistortion | None = None

    def __post_init__(self):
        if not self.pixels_per_unit > 0:
            raise CalibrationError(
                f"pixels_per_unit must be positive, got {self.pixels_per_unit}"
            )

    @classmethod
    def from_reference(
        cls,
        p1: Point,
        p2: Point,
        length: float,
        origin: Point | None = None,
        y_up: bool = True,
        angle_convention: AngleConvention | None = None,
        distortion: LensDistortion | None = None,
    ) -> LineCalibration:
        """
        Build from a reference segment drawn on the image.

        Args:
            p1, p2: Segment end points in image space
            length: Real-world length of the segment
            origin: Image point used as (0, 0); defaults to p1
            y_up: Flip the y axis so it points up
            angle_convention: Angle presentation, default degrees CCW [0, 360)
            distortion: Optional lens model applied before scaling

        Returns:
            LineCalibration
        """
        a = undistort_point(p1, distortion)
        b = undistort_point(p2, distortion)
        pixel_length = get_distance(a, b)

        if pixel_length == 0:
            raise CalibrationError("Reference segment has zero length")
        if not length > 0:
            raise CalibrationError(f"Reference length must be positive, got {length}")

        if origin is None:
            origin = p1
        ox, oy = undistort_point(origin, distortion)

        return cls(
            origin=(float(ox), float(oy)),
            pixels_per_unit=pixel_length / length,
            y_up=y_up,
            angle_convention=angle_convention or AngleConvention(),
            distortion=distortion,
        )

    def get_point(self, point: Point) -> tuple[float, float]:
        x, y = undistort_point(point, self.distortion)
        dx = x - self.origin[0]
        dy = y - self.origin[1]
        if self.y_up:
            dy = -dy
        return float(dx / self.pixels_per_unit), float(dy / self.pixels_per_unit)

    def convert_angle(self, angle: float) -> float:
        return convert_angle(angle, self.angle_convention)
