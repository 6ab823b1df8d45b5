"""
Plane geometry on calibrated points.

Pure functions operating on 2-sequences of reals.
"""

from __future__ import annotations

import math

import numpy as np

from .types import Point


def get_distance(a: Point, b: Point) -> float:
    """
    Euclidean distance between two points.

    Symmetric and never negative.
    """
    delta = np.asarray(b, dtype=np.float64) - np.asarray(a, dtype=np.float64)
    return float(np.hypot(delta[0], delta[1]))


def get_angle(origin: Point, leg1: Point, leg2: Point) -> float:
    """
    Counter-clockwise angle from leg1 to leg2 around origin.

    Args:
        origin: Vertex of the angle
        leg1: End of the first leg
        leg2: End of the second leg

    Returns:
        Angle in degrees in [0, 360). 0.0 if either leg has zero length.
    """
    o = np.asarray(origin, dtype=np.float64)
    v1 = np.asarray(leg1, dtype=np.float64) - o
    v2 = np.asarray(leg2, dtype=np.float64) - o

    if not v1.any() or not v2.any():
        return 0.0

    cross = v1[0] * v2[1] - v1[1] * v2[0]
    dot = v1[0] * v2[0] + v1[1] * v2[1]
    angle = math.degrees(math.atan2(cross, dot)) % 360.0
    # -1e-17 % 360 rounds to 360.0
    return 0.0 if angle >= 360.0 else angle
