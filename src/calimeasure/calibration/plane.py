"""
Perspective calibration from a quadrilateral of known real-world size.

Handles planes seen at an angle, where a single scale factor would be
wrong across the frame.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import cv2
import numpy as np

from ..errors import CalibrationError
from ..types import AngleConvention, Point
from .base import convert_angle
from .distortion import LensDistortion, undistort_point

# Homogeneous w below this means the point is on the plane's horizon
_HORIZON_EPSILON = 1e-12


def _validate_quad(quad: np.ndarray) -> None:
    """Raise if the quad is not four points forming a convex, non-flat shape."""
    if quad.shape != (4, 2):
        raise CalibrationError(f"Expected 4 image corners, got shape {quad.shape}")
    if not np.all(np.isfinite(quad)):
        raise CalibrationError("Image corners must be finite")

    # Signed area of each corner's triangle; all same sign for a convex quad
    crosses = []
    for i in range(4):
        a, b, c = quad[i], quad[(i + 1) % 4], quad[(i + 2) % 4]
        ab, bc = b - a, c - b
        crosses.append(ab[0] * bc[1] - ab[1] * bc[0])
    crosses = np.array(crosses)

    if np.any(np.abs(crosses) < 1e-9) or not (
        np.all(crosses > 0) or np.all(crosses < 0)
    ):
        raise CalibrationError("Image corners do not form a convex quadrilateral")


def compute_homography(quad: np.ndarray, width: float, height: float) -> np.ndarray:
    """
    3x3 homography taking the image quad onto the real-world rectangle.

    Corners map in order to (0, 0), (width, 0), (width, height), (0, height).
    """
    if not (width > 0 and height > 0):
        raise CalibrationError(
            f"Rectangle size must be positive, got {width} x {height}"
        )
    _validate_quad(quad)

    target = np.array(
        [[0.0, 0.0], [width, 0.0], [width, height], [0.0, height]],
        dtype=np.float32,
    )
    return cv2.getPerspectiveTransform(quad.astype(np.float32), target)


@dataclass(frozen=True, eq=False)  # No slots - homography is derived in __post_init__
class PlaneCalibration:
    """
    Maps image points onto a real-world plane through a homography.

    List image_quad starting from the corner that should be the origin,
    going towards the +x corner. Listing the bottom edge first, left to
    right, gives a y axis that points up the frame.
    """

    image_quad: np.ndarray  # (4, 2) image corners
    width: float  # Real-world length of the first edge
    height: float  # Real-world length of the second edge
    angle_convention: AngleConvention = field(default_factory=AngleConvention)
    distortion: LensDistortion | None = None
    homography: np.ndarray = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        quad = np.array(self.image_quad, dtype=np.float64)
        object.__setattr__(self, "image_quad", quad)

        if self.distortion is not None and quad.shape == (4, 2):
            quad = np.array([undistort_point(c, self.distortion) for c in quad])
        object.__setattr__(
            self, "homography", compute_homography(quad, self.width, self.height)
        )

    def get_point(self, point: Point) -> tuple[float, float]:
        x, y = undistort_point(point, self.distortion)
        mapped = self.homography @ np.array([x, y, 1.0])

        if abs(mapped[2]) < _HORIZON_EPSILON:
            raise CalibrationError(f"Point {tuple(point)} lies on the plane horizon")

        return float(mapped[0] / mapped[2]), float(mapped[1] / mapped[2])

    def convert_angle(self, angle: float) -> float:
        return convert_angle(angle, self.angle_convention)
