"""
Pytest configuration and shared fixtures.
"""

import tempfile
from pathlib import Path

import numpy as np
import pytest


@pytest.fixture
def temp_dir():
    """Provide a temporary directory that's cleaned up after test."""
    with tempfile.TemporaryDirectory() as td:
        yield Path(td)


@pytest.fixture
def plain_format():
    """Point decimal, no grouping - independent of the machine locale."""
    from calimeasure.types import NumberFormat
    return NumberFormat()


@pytest.fixture
def comma_format():
    """Continental style: comma decimal, dot grouping."""
    from calimeasure.types import NumberFormat
    return NumberFormat(decimal_separator=",", thousands_separator=".")


@pytest.fixture
def identity_calibration():
    from calimeasure.calibration import IdentityCalibration
    return IdentityCalibration()


@pytest.fixture
def line_calibration():
    """100 px per unit, origin at (100, 400), y axis up."""
    from calimeasure.calibration import LineCalibration
    return LineCalibration.from_reference((100.0, 400.0), (300.0, 400.0), 2.0)


@pytest.fixture
def trapezoid_quad():
    """Unit square seen in perspective: bottom edge wider than top."""
    return np.array([
        [0.0, 100.0],
        [100.0, 100.0],
        [75.0, 0.0],
        [25.0, 0.0],
    ], dtype=np.float64)


@pytest.fixture
def plane_calibration(trapezoid_quad):
    from calimeasure.calibration import PlaneCalibration
    return PlaneCalibration(image_quad=trapezoid_quad, width=1.0, height=1.0)


@pytest.fixture
def sample_intrinsics_matrix():
    """Typical camera intrinsics matrix."""
    return np.array([
        [800.0, 0.0, 640.0],
        [0.0, 800.0, 360.0],
        [0.0, 0.0, 1.0],
    ], dtype=np.float64)


@pytest.fixture
def sample_distortion():
    """Typical distortion coefficients (k1, k2, p1, p2, k3)."""
    return np.array([0.1, -0.25, 0.001, -0.001, 0.1], dtype=np.float64)


@pytest.fixture
def sample_lens(sample_intrinsics_matrix, sample_distortion):
    from calimeasure.calibration import LensDistortion
    return LensDistortion(matrix=sample_intrinsics_matrix, coefficients=sample_distortion)


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Detach handlers added by setup_logging so streams and files close."""
    import logging
    yield
    logger = logging.getLogger("calimeasure")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
