# calimeasure - Calibrated measurements from image-space annotations

__version__ = "0.1.0"

# Core types
from calimeasure.types import (
    PositionRecord,
    DistanceRecord,
    AngleRecord,
    NumberFormat,
    AngleConvention,
    PositionAnnotation,
    DistanceAnnotation,
    AngleAnnotation,
)

# Errors
from calimeasure.errors import (
    CalimeasureError,
    CalibrationError,
    ConfigError,
)

# Calibration
from calimeasure.calibration import (
    CalibrationContext,
    IdentityCalibration,
    LineCalibration,
    PlaneCalibration,
    LensDistortion,
)

# Geometry and angles
from calimeasure.geometry import get_distance, get_angle
from calimeasure.angle import AngleSource, AngleTracker

# Collection
from calimeasure.formatting import format_value
from calimeasure.collector import (
    collect_position,
    collect_distance,
    collect_angle,
)

# Projects and export
from calimeasure.config import (
    MeasurementProject,
    load_project,
    save_project,
    collect_project,
)
from calimeasure.export import record_to_row, write_csv

__all__ = [
    # Records
    "PositionRecord",
    "DistanceRecord",
    "AngleRecord",
    # Conventions
    "NumberFormat",
    "AngleConvention",
    # Annotations
    "PositionAnnotation",
    "DistanceAnnotation",
    "AngleAnnotation",
    # Errors
    "CalimeasureError",
    "CalibrationError",
    "ConfigError",
    # Calibration
    "CalibrationContext",
    "IdentityCalibration",
    "LineCalibration",
    "PlaneCalibration",
    "LensDistortion",
    # Geometry
    "get_distance",
    "get_angle",
    "AngleSource",
    "AngleTracker",
    # Collection
    "format_value",
    "collect_position",
    "collect_distance",
    "collect_angle",
    # Projects
    "MeasurementProject",
    "load_project",
    "save_project",
    "collect_project",
    "write_csv",
    "record_to_row",
]
