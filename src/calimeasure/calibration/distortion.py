"""
Lens distortion removal for image-space annotation points.

Pure functions operating on dataclasses.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from ..types import Point


@dataclass(frozen=True, slots=True, eq=False)
class LensDistortion:
    """
    Camera intrinsics needed to undistort image points.

    Holds arrays, so equality and hashing are by identity.
    """

    matrix: np.ndarray  # 3x3 camera matrix
    coefficients: np.ndarray  # (k1, k2, p1, p2, k3)


def undistort_points(
    points: np.ndarray,
    distortion: LensDistortion,
    iterations: int = 5,
) -> np.ndarray:
    """
    Undistort 2D points using the Brown-Conrady model.

    Iterative inversion; more accurate near the frame edges than
    cv2.undistortPoints with its default settings.
    Based on: https://yangyushi.github.io/code/2020/03/04/opencv-undistort.html

    Args:
        points: (n, 2) array of distorted image coordinates
        distortion: Camera matrix and distortion coefficients
        iterations: Number of refinement iterations

    Returns:
        (n, 2) array of undistorted image coordinates
    """
    if points.size == 0:
        return points.copy()

    coefficients = np.zeros(5, dtype=np.float64)
    given = np.asarray(distortion.coefficients, dtype=np.float64).ravel()[:5]
    coefficients[: given.size] = given
    k1, k2, p1, p2, k3 = coefficients

    fx, fy = distortion.matrix[0, 0], distortion.matrix[1, 1]
    cx, cy = distortion.matrix[0, 2], distortion.matrix[1, 2]

    x = (points[:, 0] - cx) / fx
    y = (points[:, 1] - cy) / fy
    x0, y0 = x.copy(), y.copy()

    for _ in range(iterations):
        r2 = x**2 + y**2
        k_inv = 1 / (1 + k1 * r2 + k2 * r2**2 + k3 * r2**3)
        delta_x = 2 * p1 * x * y + p2 * (r2 + 2 * x**2)
        delta_y = p1 * (r2 + 2 * y**2) + 2 * p2 * x * y
        x = (x0 - delta_x) * k_inv
        y = (y0 - delta_y) * k_inv

    return np.column_stack([x * fx + cx, y * fy + cy])


def undistort_point(point: Point, distortion: LensDistortion | None) -> np.ndarray:
    """
    Undistort a single point. Returns a new (2,) array; input is untouched.
    """
    p = np.array(point, dtype=np.float64).reshape(1, 2)
    if distortion is None:
        return p[0]
    return undistort_points(p, distortion)[0]
