"""
Tests for calimeasure.calibration.
"""

import math

import numpy as np
import pytest

from calimeasure.calibration import (
    CalibrationContext,
    IdentityCalibration,
    LensDistortion,
    LineCalibration,
    PlaneCalibration,
    compute_homography,
    convert_angle,
    undistort_points,
)
from calimeasure.errors import CalibrationError
from calimeasure.types import AngleConvention


class TestConvertAngle:
    def test_default_is_identity_in_range(self):
        assert convert_angle(45.0, AngleConvention()) == 45.0

    def test_wraps_into_range(self):
        assert convert_angle(-30.0, AngleConvention()) == pytest.approx(330.0)
        assert convert_angle(360.0, AngleConvention()) == 0.0
        assert convert_angle(725.0, AngleConvention()) == pytest.approx(5.0)

    def test_clockwise(self):
        assert convert_angle(90.0, AngleConvention(clockwise=True)) == pytest.approx(270.0)

    def test_signed(self):
        convention = AngleConvention(signed=True)
        assert convert_angle(270.0, convention) == pytest.approx(-90.0)
        assert convert_angle(180.0, convention) == pytest.approx(180.0)
        assert convert_angle(90.0, convention) == pytest.approx(90.0)

    def test_clockwise_signed(self):
        convention = AngleConvention(clockwise=True, signed=True)
        assert convert_angle(90.0, convention) == pytest.approx(-90.0)

    def test_radians(self):
        convention = AngleConvention(unit="radian")
        assert convert_angle(180.0, convention) == pytest.approx(math.pi)


class TestIdentityCalibration:
    def test_passthrough(self, identity_calibration):
        assert identity_calibration.get_point((10, 20)) == (10.0, 20.0)

    def test_protocol(self, identity_calibration):
        assert isinstance(identity_calibration, CalibrationContext)

    def test_angle_convention(self):
        calibration = IdentityCalibration(angle_convention=AngleConvention(unit="radian"))
        assert calibration.convert_angle(90.0) == pytest.approx(math.pi / 2)


class TestLineCalibration:
    def test_from_reference_scale(self, line_calibration):
        assert line_calibration.pixels_per_unit == 100.0
        assert line_calibration.origin == (100.0, 400.0)

    def test_y_up(self, line_calibration):
        x, y = line_calibration.get_point((200.0, 300.0))
        assert x == pytest.approx(1.0)
        assert y == pytest.approx(1.0)

    def test_y_down(self):
        calibration = LineCalibration.from_reference(
            (100.0, 400.0), (300.0, 400.0), 2.0, y_up=False
        )
        assert calibration.get_point((200.0, 300.0)) == pytest.approx((1.0, -1.0))

    def test_explicit_origin(self):
        calibration = LineCalibration.from_reference(
            (0.0, 0.0), (0.0, 50.0), 1.0, origin=(10.0, 10.0)
        )
        assert calibration.get_point((60.0, 10.0)) == pytest.approx((1.0, 0.0))

    def test_does_not_mutate_input(self, line_calibration):
        point = np.array([250.0, 150.0])
        line_calibration.get_point(point)
        np.testing.assert_array_equal(point, [250.0, 150.0])

    def test_zero_length_reference(self):
        with pytest.raises(CalibrationError):
            LineCalibration.from_reference((5.0, 5.0), (5.0, 5.0), 1.0)

    def test_non_positive_length(self):
        with pytest.raises(CalibrationError):
            LineCalibration.from_reference((0.0, 0.0), (10.0, 0.0), 0.0)

    def test_non_positive_scale(self):
        with pytest.raises(CalibrationError):
            LineCalibration(origin=(0.0, 0.0), pixels_per_unit=0.0)

    def test_calibration_error_is_value_error(self):
        with pytest.raises(ValueError):
            LineCalibration(origin=(0.0, 0.0), pixels_per_unit=-1.0)


class TestPlaneCalibration:
    def test_rectangle_is_affine(self):
        quad = np.array([[0, 100], [200, 100], [200, 0], [0, 0]], dtype=np.float64)
        calibration = PlaneCalibration(image_quad=quad, width=2.0, height=1.0)
        x, y = calibration.get_point((100.0, 50.0))
        assert x == pytest.approx(1.0, abs=1e-6)
        assert y == pytest.approx(0.5, abs=1e-6)

    def test_corners_map_to_rectangle(self, plane_calibration, trapezoid_quad):
        expected = [(0.0, 0.0), (1.0, 0.0), (1.0, 1.0), (0.0, 1.0)]
        for corner, target in zip(trapezoid_quad, expected):
            assert plane_calibration.get_point(corner) == pytest.approx(target, abs=1e-5)

    def test_perspective_is_not_uniform(self, plane_calibration):
        # Halfway up the image is not halfway across the plane
        _, y = plane_calibration.get_point((50.0, 50.0))
        assert y != pytest.approx(0.5, abs=1e-3)
        assert 0.0 < y < 1.0

    def test_homography_shape(self, plane_calibration):
        assert plane_calibration.homography.shape == (3, 3)

    def test_collinear_corners(self):
        quad = np.array([[0, 0], [50, 0], [100, 0], [0, 100]], dtype=np.float64)
        with pytest.raises(CalibrationError):
            PlaneCalibration(image_quad=quad, width=1.0, height=1.0)

    def test_self_intersecting(self):
        quad = np.array([[0, 0], [100, 100], [100, 0], [0, 100]], dtype=np.float64)
        with pytest.raises(CalibrationError):
            PlaneCalibration(image_quad=quad, width=1.0, height=1.0)

    def test_wrong_corner_count(self):
        with pytest.raises(CalibrationError):
            compute_homography(np.zeros((3, 2)), 1.0, 1.0)

    def test_non_positive_size(self, trapezoid_quad):
        with pytest.raises(CalibrationError):
            PlaneCalibration(image_quad=trapezoid_quad, width=0.0, height=1.0)

    def test_accepts_lists(self):
        quad = [[0, 100], [200, 100], [200, 0], [0, 0]]
        calibration = PlaneCalibration(image_quad=quad, width=2.0, height=1.0)
        assert calibration.image_quad.shape == (4, 2)


class TestUndistortPoints:
    def test_no_distortion(self, sample_intrinsics_matrix):
        """Points should be nearly unchanged with zero distortion."""
        lens = LensDistortion(matrix=sample_intrinsics_matrix, coefficients=np.zeros(5))
        points = np.array([[640, 360], [320, 180], [960, 540]], dtype=np.float64)
        np.testing.assert_array_almost_equal(undistort_points(points, lens), points)

    def test_principal_point_unchanged(self, sample_lens):
        points = np.array([[640.0, 360.0]])
        np.testing.assert_array_almost_equal(undistort_points(points, sample_lens), points)

    def test_empty_input(self, sample_lens):
        points = np.array([], dtype=np.float64).reshape(0, 2)
        assert undistort_points(points, sample_lens).shape == (0, 2)

    def test_short_coefficients(self, sample_intrinsics_matrix):
        lens = LensDistortion(matrix=sample_intrinsics_matrix, coefficients=np.zeros(2))
        points = np.array([[100.0, 100.0]])
        np.testing.assert_array_almost_equal(undistort_points(points, lens), points)

    def test_calibration_uses_lens(self, sample_lens):
        plain = IdentityCalibration()
        corrected = IdentityCalibration(distortion=sample_lens)
        corner = (1200.0, 700.0)
        assert corrected.get_point(corner) != pytest.approx(plain.get_point(corner))


class TestCalibrationEquality:
    def test_lens_compares_by_identity(self, sample_intrinsics_matrix, sample_distortion):
        a = LensDistortion(matrix=sample_intrinsics_matrix, coefficients=sample_distortion)
        b = LensDistortion(matrix=sample_intrinsics_matrix, coefficients=sample_distortion)
        assert a == a
        assert a != b
        assert len({a, b}) == 2

    def test_calibrations_with_lens_compare(self, sample_lens):
        first = LineCalibration(origin=(0.0, 0.0), pixels_per_unit=2.0, distortion=sample_lens)
        same = LineCalibration(origin=(0.0, 0.0), pixels_per_unit=2.0, distortion=sample_lens)
        assert first == same
        assert hash(first) == hash(same)

    def test_plane_compares_by_identity(self, trapezoid_quad):
        a = PlaneCalibration(image_quad=trapezoid_quad, width=1.0, height=1.0)
        b = PlaneCalibration(image_quad=trapezoid_quad, width=1.0, height=1.0)
        assert a == a
        assert a != b
        hash(a)
