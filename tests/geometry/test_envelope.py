"""Unit tests for envelope generation."""

import pytest

from roadnet.errors import DegenerateSegmentError, InvalidParameterError
from roadnet.geometry.envelope import Envelope, cap_angles
from roadnet.geometry.primitives import Point, Segment, distance


class TestEnvelope:
    """Test suite for Envelope."""

    def test_zero_roundness_is_rectangle(self):
        """Roundness 0 gives the rectangle spanning the skeleton."""
        env = Envelope(Segment(Point(0, 0), Point(10, 0)), 4, 0)
        assert list(env.poly.points) == [
            Point(0, 2), Point(0, -2), Point(10, -2), Point(10, 2),
        ]

    def test_rectangle_does_not_extend_beyond_skeleton(self):
        env = Envelope(Segment(Point(0, 0), Point(10, 0)), 4, 0)
        xs = [p.x for p in env.poly.points]
        ys = [p.y for p in env.poly.points]
        assert min(xs) == pytest.approx(0.0, abs=1e-9)
        assert max(xs) == pytest.approx(10.0)
        assert max(ys) - min(ys) == pytest.approx(4.0)

    @pytest.mark.parametrize("roundness, expected", [(0, 4), (1, 4), (2, 6), (10, 22)])
    def test_vertex_count(self, roundness, expected):
        env = Envelope(Segment(Point(0, 0), Point(10, 0)), 4, roundness)
        assert len(env.poly.points) == expected

    def test_vertex_count_non_decreasing(self):
        skeleton = Segment(Point(-3, 7), Point(12, 1))
        counts = [len(Envelope(skeleton, 5, r).poly.points) for r in range(0, 17)]
        assert counts == sorted(counts)
        assert min(counts) >= 4

    @pytest.mark.parametrize("roundness", [0, 1, 3, 8, 16])
    def test_vertices_at_half_width(self, roundness):
        """Every vertex lies width / 2 from its nearer skeleton endpoint."""
        skeleton = Segment(Point(3, 4), Point(20, -7))
        env = Envelope(skeleton, 6, roundness)
        for p in env.poly.points:
            nearest = min(distance(p, skeleton.p1), distance(p, skeleton.p2))
            assert nearest == pytest.approx(3.0)

    def test_cap_angles_include_last_angle(self):
        angles = cap_angles(0.0, 16)
        assert len(angles) == 17
        assert angles[-1] == pytest.approx(angles[0] + 3.141592653589793)

    @pytest.mark.parametrize("width", [0, -1, float("nan")])
    def test_invalid_width(self, width):
        with pytest.raises(InvalidParameterError):
            Envelope(Segment(Point(0, 0), Point(1, 0)), width, 1)

    @pytest.mark.parametrize("roundness", [-1, 2.5])
    def test_invalid_roundness(self, roundness):
        with pytest.raises(InvalidParameterError):
            Envelope(Segment(Point(0, 0), Point(1, 0)), 2, roundness)

    def test_degenerate_skeleton(self):
        with pytest.raises(DegenerateSegmentError):
            Envelope(Segment(Point(1, 1), Point(1, 1)), 2, 1)

    def test_same_inputs_give_equal_envelopes(self):
        skeleton = Segment(Point(1, 2), Point(30, 9))
        assert Envelope(skeleton, 7, 5) == Envelope(skeleton, 7, 5)

    def test_with_segments(self):
        env = Envelope(Segment(Point(0, 0), Point(10, 0)), 4, 0)
        pruned = env.with_segments(env.poly.segments[:2])
        assert len(pruned.poly.segments) == 2
        assert pruned.poly.points == env.poly.points
        assert pruned.skeleton == env.skeleton
        assert len(env.poly.segments) == 4
