import pytest
from errors import InvalidInputError
from models import AffineMatrix, Bounds, Point, PointPair
from migrate import (
    calibrate,
    migrate_points,
    recommended_tolerance,
    to_normalized,
    to_pixels,
)


SOURCE_MAP = Bounds(1000, 800)
TARGET_MAP = Bounds(2000, 1600)


class TestCoordinateConversion:
    def test_to_pixels(self):
        assert to_pixels(Point(0.5, 0.25), SOURCE_MAP) == Point(500, 200)

    def test_to_normalized(self):
        assert to_normalized(Point(500, 200), SOURCE_MAP) == Point(0.5, 0.25)

    def test_to_normalized_zero_bounds(self):
        with pytest.raises(InvalidInputError, match="zero-sized"):
            to_normalized(Point(1, 1), Bounds(0, 100))

    def test_accepts_mappings(self):
        assert to_pixels({"x": 1, "y": 1}, {"width": 640, "height": 480}) == Point(640, 480)


class TestCalibrate:
    def test_same_layout_scaled_map(self):
        # replacement image is the same map at twice the resolution
        pairs = [
            PointPair(Point(0.1, 0.1), Point(0.1, 0.1)),
            PointPair(Point(0.9, 0.1), Point(0.9, 0.1)),
            PointPair(Point(0.1, 0.9), Point(0.1, 0.9)),
            PointPair(Point(0.8, 0.7), Point(0.8, 0.7)),
        ]
        result, assessment = calibrate(pairs, SOURCE_MAP, TARGET_MAP)
        assert not result.is_degenerate
        assert result.matrix.a == pytest.approx(2.0)
        assert result.matrix.d == pytest.approx(2.0)
        assert result.matrix.e == pytest.approx(0.0, abs=1e-6)
        assert assessment.rmse == pytest.approx(0.0, abs=1e-6)
        assert assessment.grade == "good"
        assert assessment.warnings == ()

    def test_shifted_map(self):
        pairs = [
            ((0.0, 0.0), (0.05, 0.05)),
            ((0.5, 0.0), (0.55, 0.05)),
            ((0.0, 0.5), (0.05, 0.55)),
        ]
        result, _ = calibrate(pairs, SOURCE_MAP, SOURCE_MAP)
        assert result.matrix.e == pytest.approx(50.0)
        assert result.matrix.f == pytest.approx(40.0)

    def test_aspect_change_warns(self, caplog):
        pairs = [
            ((0.0, 0.0), (0.0, 0.0)),
            ((1.0, 0.0), (1.0, 0.0)),
            ((0.0, 1.0), (0.0, 1.0)),
        ]
        with caplog.at_level("WARNING", logger="migrate"):
            _, assessment = calibrate(pairs, Bounds(1000, 1000), Bounds(1000, 500))
        assert any("Unequal scaling" in w for w in assessment.warnings)
        assert "Unequal scaling" in caplog.text

    def test_collinear_pairs_degenerate(self):
        pairs = [((0.1, 0.1), (0.1, 0.1)), ((0.2, 0.2), (0.2, 0.2)), ((0.3, 0.3), (0.3, 0.3))]
        result, assessment = calibrate(pairs, SOURCE_MAP, SOURCE_MAP)
        assert result.is_degenerate
        assert not assessment.is_acceptable

    def test_too_few_pairs(self):
        with pytest.raises(InvalidInputError):
            calibrate([((0, 0), (0, 0))], SOURCE_MAP, TARGET_MAP)


class TestMigratePoints:
    def test_inside_bounds(self):
        matrix = AffineMatrix(2, 0, 0, 2, 0, 0)
        result = migrate_points([Point(10, 20), Point(400, 300)], matrix, TARGET_MAP)
        assert result.points == (Point(20, 40), Point(800, 600))
        assert result.out_of_bounds == ()

    def test_clamps_outside_points(self):
        matrix = AffineMatrix(1, 0, 0, 1, -50, 100)
        result = migrate_points([Point(10, 10), Point(500, 500), Point(1000, 790)], matrix, SOURCE_MAP)
        assert result.out_of_bounds == (0, 2)
        assert result.points[0] == Point(0, 110)
        assert result.points[1] == Point(450, 600)
        assert result.points[2] == Point(950, 800)

    def test_no_clamp_keeps_positions(self):
        matrix = AffineMatrix(1, 0, 0, 1, -50, 0)
        result = migrate_points([Point(10, 10)], matrix, SOURCE_MAP, clamp=False)
        assert result.points == (Point(-40, 10),)
        assert result.out_of_bounds == (0,)

    def test_edges_are_inside(self):
        result = migrate_points([Point(0, 0), Point(1000, 800)], AffineMatrix.identity(), SOURCE_MAP)
        assert result.out_of_bounds == ()

    def test_logs_clamped_markers(self, caplog):
        with caplog.at_level("WARNING", logger="migrate"):
            migrate_points([Point(-5, 0)], AffineMatrix.identity(), SOURCE_MAP)
        assert "1 marker(s) fall outside" in caplog.text

    def test_empty(self):
        result = migrate_points([], AffineMatrix.identity(), SOURCE_MAP)
        assert result.points == ()
        assert result.out_of_bounds == ()


class TestRecommendedTolerance:
    @pytest.mark.parametrize("rmse, expected", [
        (0.0, 5),
        (1.0, 5),
        (2.1, 6),
        (4.0, 10),
        (12.3, 31),
        (None, 13),
    ])
    def test_values(self, rmse, expected):
        assert recommended_tolerance(rmse) == expected
