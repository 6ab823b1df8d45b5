"""
Core data structures for calimeasure.

Records are frozen dataclasses with slots for immutability and performance.
Logic is in separate pure functions - these are data containers only.
"""

from __future__ import annotations

import locale
from dataclasses import dataclass
from typing import ClassVar, Literal, Sequence, Union

# Any 2-sequence of reals: tuple, list, or a (2,) numpy array
Point = Sequence[float]


# ============================================================================
# Measurement Records
# ============================================================================


@dataclass(frozen=True, slots=True)
class PositionRecord:
    """
    Calibrated coordinates of a single point annotation.
    """

    kind: ClassVar[str] = "position"

    name: str
    x: float
    y: float
    x_display: str
    y_display: str


@dataclass(frozen=True, slots=True)
class DistanceRecord:
    """
    Calibrated length between two point annotations.
    """

    kind: ClassVar[str] = "distance"

    name: str
    value: float  # Always >= 0
    value_display: str


@dataclass(frozen=True, slots=True)
class AngleRecord:
    """
    Angle annotation converted to the display convention.
    """

    kind: ClassVar[str] = "angle"

    name: str
    value: float  # Degrees or radians, see AngleConvention
    value_display: str


MeasurementRecord = Union[PositionRecord, DistanceRecord, AngleRecord]


# ============================================================================
# Annotations (image space)
# ============================================================================


@dataclass(frozen=True, slots=True)
class PositionAnnotation:
    name: str
    point: tuple[float, float]


@dataclass(frozen=True, slots=True)
class DistanceAnnotation:
    name: str
    start: tuple[float, float]
    end: tuple[float, float]


@dataclass(frozen=True, slots=True)
class AngleAnnotation:
    name: str
    origin: tuple[float, float]
    leg1: tuple[float, float]
    leg2: tuple[float, float]


# ============================================================================
# Formatting
# ============================================================================


@dataclass(frozen=True, slots=True)
class NumberFormat:
    """
    Numeric rendering convention for display strings.

    Only the separators vary; the number of fractional digits is fixed.
    """

    decimal_separator: str = "."
    thousands_separator: str = ""

    def __post_init__(self):
        if not isinstance(self.decimal_separator, str) or not self.decimal_separator:
            raise ValueError("decimal_separator must be a non-empty string")
        if not isinstance(self.thousands_separator, str):
            raise ValueError("thousands_separator must be a string")
        if self.decimal_separator == self.thousands_separator:
            raise ValueError(
                f"decimal and thousands separators are both {self.decimal_separator!r}"
            )

    @classmethod
    def current(cls) -> NumberFormat:
        """Number format of the process's active LC_NUMERIC locale, read now."""
        conv = locale.localeconv()
        return cls(
            decimal_separator=conv["decimal_point"] or ".",
            thousands_separator=conv["thousands_sep"],
        )

    @classmethod
    def from_config(cls, data: dict) -> NumberFormat:
        """
        Build from a [format] config section.

        Recognized keys: decimal_separator, thousands_separator, locale.
        locale = "current" reads the active locale; "C" is the plain format.
        Explicit separators override whatever the locale provides.
        """
        if not isinstance(data, dict):
            raise ValueError(f"Expected a table of format options, got {data!r}")

        locale_name = data.get("locale", "C")
        if locale_name == "current":
            base = cls.current()
        elif locale_name == "C":
            base = cls()
        else:
            raise ValueError(f"Unsupported locale option: {locale_name!r}")

        if "decimal_separator" in data:
            base = base.with_decimal_separator(data["decimal_separator"])
        if "thousands_separator" in data:
            base = cls(base.decimal_separator, data["thousands_separator"])
        return base

    def with_decimal_separator(self, separator: str) -> NumberFormat:
        """
        Same format with another decimal separator.

        Grouping is dropped when it would collide with the new separator.
        """
        thousands = self.thousands_separator
        if thousands == separator:
            thousands = ""
        return NumberFormat(separator, thousands)


# ============================================================================
# Calibration Conventions
# ============================================================================


@dataclass(frozen=True, slots=True)
class AngleConvention:
    """
    How calibrated angles are presented.

    Input angles are degrees, counter-clockwise positive.
    """

    unit: Literal["degree", "radian"] = "degree"
    clockwise: bool = False  # Clockwise positive instead of counter-clockwise
    signed: bool = False  # (-180, 180] instead of [0, 360)
