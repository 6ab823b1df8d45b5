"""
Angle annotations and the calibrated reading they expose.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from .geometry import get_angle
from .types import Point

if TYPE_CHECKING:
    from .calibration import CalibrationContext


@runtime_checkable
class AngleSource(Protocol):
    """Anything that can report a calibrated angle right now."""

    @property
    def calibrated_angle(self) -> float: ...


@dataclass(frozen=True)
class AngleTracker:
    """
    Three-point angle annotation: a vertex and the ends of two legs.

    The reading is measured in the calibrated plane, so perspective and
    axis orientation are already accounted for. It is the raw magnitude:
    degrees, counter-clockwise from leg1 to leg2, in [0, 360).
    """

    origin: Point
    leg1: Point
    leg2: Point
    calibration: CalibrationContext

    @property
    def calibrated_angle(self) -> float:
        return get_angle(
            self.calibration.get_point(self.origin),
            self.calibration.get_point(self.leg1),
            self.calibration.get_point(self.leg2),
        )
