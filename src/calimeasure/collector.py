"""
Measurement collection: image-space annotations to calibrated records.

Pure functions - no state is kept between calls. Faults raised by the
calibration, geometry or angle source propagate unchanged.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .formatting import format_value
from .geometry import get_distance
from .types import (
    AngleRecord,
    DistanceRecord,
    NumberFormat,
    Point,
    PositionRecord,
)

if TYPE_CHECKING:
    from .angle import AngleSource
    from .calibration import CalibrationContext


def _require_calibration(calibration: CalibrationContext | None) -> None:
    if calibration is None:
        raise ValueError("A calibration context is required")


def collect_position(
    name: str,
    point: Point,
    calibration: CalibrationContext,
    *,
    number_format: NumberFormat | None = None,
) -> PositionRecord:
    """
    Calibrated coordinates of a point annotation.

    Args:
        name: Label copied verbatim into the record
        point: (x, y) in image space
        calibration: Maps the point into real-world coordinates
        number_format: Display convention; None uses the active locale

    Returns:
        PositionRecord
    """
    _require_calibration(calibration)
    if number_format is None:
        number_format = NumberFormat.current()

    x, y = calibration.get_point(point)
    return PositionRecord(
        name=name,
        x=x,
        y=y,
        x_display=format_value(x, number_format),
        y_display=format_value(y, number_format),
    )


def collect_distance(
    name: str,
    point1: Point,
    point2: Point,
    calibration: CalibrationContext,
    *,
    number_format: NumberFormat | None = None,
) -> DistanceRecord:
    """
    Calibrated length of a line annotation.

    Both ends are calibrated before measuring, since the calibration may
    not be uniform across the image.
    """
    _require_calibration(calibration)
    if number_format is None:
        number_format = NumberFormat.current()

    a = calibration.get_point(point1)
    b = calibration.get_point(point2)
    length = get_distance(a, b)
    return DistanceRecord(
        name=name,
        value=length,
        value_display=format_value(length, number_format),
    )


def collect_angle(
    name: str,
    angle_source: AngleSource,
    calibration: CalibrationContext,
    *,
    number_format: NumberFormat | None = None,
) -> AngleRecord:
    """
    Angle annotation in the calibration's display convention.

    The source supplies the calibrated magnitude; the calibration decides
    sign, range and unit.
    """
    _require_calibration(calibration)
    if number_format is None:
        number_format = NumberFormat.current()

    angle = calibration.convert_angle(angle_source.calibrated_angle)
    return AngleRecord(
        name=name,
        value=angle,
        value_display=format_value(angle, number_format),
    )
