"""
Project file loading/saving.

Pure functions operating on dataclasses.
- TOML for measurement projects (format, calibration, annotations)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

import numpy as np
import rtoml

from .angle import AngleTracker
from .calibration import (
    CalibrationContext,
    IdentityCalibration,
    LensDistortion,
    LineCalibration,
    PlaneCalibration,
)
from .collector import collect_angle, collect_distance, collect_position
from .errors import ConfigError
from .types import (
    AngleAnnotation,
    AngleConvention,
    DistanceAnnotation,
    MeasurementRecord,
    NumberFormat,
    PositionAnnotation,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MeasurementProject:
    """
    Everything needed to produce measurement records for one frame.

    number_format of None means the active locale at collection time.
    """

    calibration: CalibrationContext = field(default_factory=IdentityCalibration)
    number_format: NumberFormat | None = None
    positions: tuple[PositionAnnotation, ...] = ()
    distances: tuple[DistanceAnnotation, ...] = ()
    angles: tuple[AngleAnnotation, ...] = ()


# ============================================================================
# Parsing helpers
# ============================================================================


def _point(value, what: str) -> tuple[float, float]:
    try:
        x, y = value
        return float(x), float(y)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"{what}: expected [x, y], got {value!r}") from e


def _points(value, count: int, what: str) -> list[tuple[float, float]]:
    if not isinstance(value, list) or len(value) != count:
        raise ConfigError(f"{what}: expected {count} points, got {value!r}")
    return [_point(p, what) for p in value]


def _number(value, what: str) -> float:
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"{what}: expected a number, got {value!r}") from e


def _table(value, what: str) -> dict:
    if not isinstance(value, dict):
        raise ConfigError(f"{what}: expected a table, got {value!r}")
    return value


def _entries(data: dict, key: str) -> list[dict]:
    """Array-of-tables section, e.g. [[positions]]; missing means empty."""
    value = data.get(key, [])
    if not isinstance(value, list):
        raise ConfigError(f"{key}: expected an array of tables, got {value!r}")
    return [_table(entry, key) for entry in value]


def _name(entry: dict, what: str) -> str:
    if "name" not in entry:
        raise ConfigError(f"{what}: missing 'name'")
    return str(entry["name"])


# ============================================================================
# Calibration section
# ============================================================================


def parse_angle_convention(data: dict) -> AngleConvention:
    data = _table(data, "calibration.angle")
    unit = data.get("unit", "degree")
    if unit not in ("degree", "radian"):
        raise ConfigError(f"Unknown angle unit: {unit!r}")
    return AngleConvention(
        unit=unit,
        clockwise=bool(data.get("clockwise", False)),
        signed=bool(data.get("signed", False)),
    )


def parse_distortion(data: dict | None) -> LensDistortion | None:
    if not data:
        return None

    data = _table(data, "calibration.distortion")
    try:
        matrix = np.array(data.get("matrix", []), dtype=np.float64)
        coefficients = np.array(data.get("coefficients", []), dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"calibration.distortion: {e}") from e
    if matrix.shape != (3, 3):
        raise ConfigError(f"Distortion matrix must be 3x3, got shape {matrix.shape}")
    if coefficients.ndim != 1 or not 1 <= coefficients.size <= 5:
        raise ConfigError("Distortion coefficients must be a list of 1 to 5 numbers")

    return LensDistortion(matrix=matrix, coefficients=coefficients)


def build_calibration(data: dict) -> CalibrationContext:
    """
    Create a calibration context from a [calibration] section.

    Args:
        data: Parsed section; "type" is identity, line or plane

    Returns:
        CalibrationContext
    """
    data = _table(data, "calibration")
    kind = data.get("type", "identity")
    convention = parse_angle_convention(data.get("angle", {}))
    distortion = parse_distortion(data.get("distortion"))

    if kind == "identity":
        return IdentityCalibration(angle_convention=convention, distortion=distortion)

    if kind == "line":
        y_up = bool(data.get("y_up", True))
        if "reference" in data:
            p1, p2 = _points(data["reference"], 2, "calibration.reference")
            if "length" not in data:
                raise ConfigError("calibration.length is required with a reference")
            origin = data.get("origin")
            return LineCalibration.from_reference(
                p1,
                p2,
                _number(data["length"], "calibration.length"),
                origin=None if origin is None else _point(origin, "calibration.origin"),
                y_up=y_up,
                angle_convention=convention,
                distortion=distortion,
            )
        if "pixels_per_unit" not in data:
            raise ConfigError(
                "Line calibration needs either reference + length or pixels_per_unit"
            )
        return LineCalibration(
            origin=_point(data.get("origin", [0.0, 0.0]), "calibration.origin"),
            pixels_per_unit=_number(
                data["pixels_per_unit"], "calibration.pixels_per_unit"
            ),
            y_up=y_up,
            angle_convention=convention,
            distortion=distortion,
        )

    if kind == "plane":
        quad = _points(data.get("quad"), 4, "calibration.quad")
        try:
            width, height = data["size"]
        except (KeyError, TypeError, ValueError) as e:
            raise ConfigError("Plane calibration needs size = [width, height]") from e
        return PlaneCalibration(
            image_quad=np.array(quad),
            width=_number(width, "calibration.size"),
            height=_number(height, "calibration.size"),
            angle_convention=convention,
            distortion=distortion,
        )

    raise ConfigError(f"Unknown calibration type: {kind!r}")


def calibration_to_dict(calibration: CalibrationContext) -> dict:
    """
    Inverse of build_calibration for the built-in calibrations.
    """
    if isinstance(calibration, IdentityCalibration):
        data = {"type": "identity"}
    elif isinstance(calibration, LineCalibration):
        data = {
            "type": "line",
            "origin": list(calibration.origin),
            "pixels_per_unit": calibration.pixels_per_unit,
            "y_up": calibration.y_up,
        }
    elif isinstance(calibration, PlaneCalibration):
        data = {
            "type": "plane",
            "quad": calibration.image_quad.tolist(),
            "size": [calibration.width, calibration.height],
        }
    else:
        raise ConfigError(f"Cannot save calibration of type {type(calibration).__name__}")

    convention = calibration.angle_convention
    data["angle"] = {
        "unit": convention.unit,
        "clockwise": convention.clockwise,
        "signed": convention.signed,
    }

    if calibration.distortion is not None:
        data["distortion"] = {
            "matrix": calibration.distortion.matrix.tolist(),
            "coefficients": np.asarray(calibration.distortion.coefficients).tolist(),
        }

    return data


# ============================================================================
# TOML Project Files
# ============================================================================


def load_project(path: Path) -> MeasurementProject:
    """
    Load a measurement project from a TOML file.

    Args:
        path: Path to project .toml file

    Returns:
        MeasurementProject dataclass
    """
    try:
        data = rtoml.load(path)
    except rtoml.TomlParsingError as e:
        raise ConfigError(f"{path}: {e}") from e

    number_format = None
    if "format" in data:
        try:
            number_format = NumberFormat.from_config(data["format"])
        except ValueError as e:
            raise ConfigError(str(e)) from e

    calibration = build_calibration(data.get("calibration", {}))

    positions = tuple(
        PositionAnnotation(
            name=_name(entry, "positions"),
            point=_point(entry.get("point"), "positions.point"),
        )
        for entry in _entries(data, "positions")
    )
    distances = []
    for entry in _entries(data, "distances"):
        start, end = _points(entry.get("points"), 2, "distances.points")
        distances.append(
            DistanceAnnotation(name=_name(entry, "distances"), start=start, end=end)
        )
    angles = []
    for entry in _entries(data, "angles"):
        origin, leg1, leg2 = _points(entry.get("points"), 3, "angles.points")
        angles.append(
            AngleAnnotation(
                name=_name(entry, "angles"), origin=origin, leg1=leg1, leg2=leg2
            )
        )

    logger.debug(
        "Loaded %s: %d positions, %d distances, %d angles",
        path,
        len(positions),
        len(distances),
        len(angles),
    )

    return MeasurementProject(
        calibration=calibration,
        number_format=number_format,
        positions=positions,
        distances=tuple(distances),
        angles=tuple(angles),
    )


def save_project(project: MeasurementProject, path: Path) -> None:
    """
    Save a measurement project to a TOML file.

    Args:
        project: MeasurementProject dataclass
        path: Path to save the project .toml
    """
    data = {"calibration": calibration_to_dict(project.calibration)}

    if project.number_format is not None:
        data["format"] = {
            "decimal_separator": project.number_format.decimal_separator,
            "thousands_separator": project.number_format.thousands_separator,
        }

    data["positions"] = [
        {"name": a.name, "point": list(a.point)} for a in project.positions
    ]
    data["distances"] = [
        {"name": a.name, "points": [list(a.start), list(a.end)]}
        for a in project.distances
    ]
    data["angles"] = [
        {"name": a.name, "points": [list(a.origin), list(a.leg1), list(a.leg2)]}
        for a in project.angles
    ]

    # Ensure parent directory exists
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w") as f:
        rtoml.dump(data, f)


def collect_project(
    project: MeasurementProject,
    number_format: NumberFormat | None = None,
) -> list[MeasurementRecord]:
    """
    Run every annotation in the project through the collector.

    Args:
        project: Loaded project
        number_format: Overrides the project's format when given

    Returns:
        Records in order: positions, distances, angles
    """
    if number_format is None:
        number_format = project.number_format or NumberFormat.current()

    calibration = project.calibration
    records: list[MeasurementRecord] = []

    for a in project.positions:
        records.append(
            collect_position(a.name, a.point, calibration, number_format=number_format)
        )
    for a in project.distances:
        records.append(
            collect_distance(
                a.name, a.start, a.end, calibration, number_format=number_format
            )
        )
    for a in project.angles:
        tracker = AngleTracker(a.origin, a.leg1, a.leg2, calibration)
        records.append(
            collect_angle(a.name, tracker, calibration, number_format=number_format)
        )

    return records
