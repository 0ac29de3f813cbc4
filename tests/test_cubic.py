"""
Tests for cubic polynomials and canonical splines.
"""

from __future__ import annotations

import math

import pytest

from bendspline.cubic import (
    CanonicalSpline2d,
    Cubic2d,
    CubicPoly,
    map_nonuniform_to_segment,
    map_uniform_to_segment,
)
from bendspline.exceptions import ConstructionError, DomainError, EmptySplineError

from conftest import assert_point


def line_cubic(x0, y0, x1, y1) -> Cubic2d:
    """Cubic2d for the straight line (x0,y0)->(x1,y1) at constant speed."""
    return Cubic2d(CubicPoly(x0, x1 - x0, 0, 0), CubicPoly(y0, y1 - y0, 0, 0))


class TestCubicPoly:
    """Tests for scalar cubic polynomials."""

    def test_horner_evaluation(self):
        """Should evaluate a + b*u + c*u^2 + d*u^3."""
        cub = CubicPoly(1, 2, 3, 4)
        assert cub.at(0) == 1
        assert cub.at(1) == 10
        assert cub.at(0.5) == pytest.approx(1 + 1 + 0.75 + 0.5)

    def test_not_clamped(self):
        """Parameters outside [0, 1] are evaluated as given."""
        cub = CubicPoly(0, 0, 1, 0)
        assert cub.at(2) == 4
        assert cub.at(-1) == 1

    def test_derivatives(self):
        """First and second derivative in u."""
        cub = CubicPoly(1, 2, 3, 4)
        assert cub.deriv(0.5) == pytest.approx(2 + 2 * 3 * 0.5 + 3 * 4 * 0.25)
        assert cub.deriv2(0.5) == pytest.approx(2 * 3 + 6 * 4 * 0.5)

    def test_immutable(self):
        """Coefficients cannot be reassigned."""
        cub = CubicPoly(1, 2, 3, 4)
        with pytest.raises(AttributeError):
            cub.a = 5

    def test_fn(self):
        """fn() returns the evaluation function."""
        cub = CubicPoly(0, 1, 0, 0)
        assert cub.fn()(0.25) == 0.25


class TestCubic2d:
    """Tests for 2-D cubics."""

    def test_at_evaluates_both_axes(self):
        """Should evaluate x and y polynomials together."""
        cub = Cubic2d(CubicPoly(0, 1, 0, 0), CubicPoly(0, 0, 1, 0))
        assert cub.at(0.5) == (0.5, 0.25)
        assert cub.deriv(0.5) == (1, 1)
        assert cub.deriv2(0.5) == (0, 2)


class TestUniformMapping:
    """Tests for mapping t onto segments with uniform knots."""

    def test_integer_and_fraction(self):
        """t splits into segment number and local u."""
        segment_no, u = map_uniform_to_segment(1.25, 3)
        assert segment_no == 1
        assert u == pytest.approx(0.25)

    def test_start(self):
        """t == 0 is the start of segment 0."""
        assert map_uniform_to_segment(0, 3) == (0, 0.0)

    def test_upper_bound_maps_to_last_segment(self):
        """t == segment count maps to the last segment at u == 1."""
        assert map_uniform_to_segment(3, 3) == (2, 1.0)

    def test_interior_knot_starts_next_segment(self):
        """An integer t inside the domain is u == 0 of its own segment."""
        assert map_uniform_to_segment(2.0, 3) == (2, 0.0)

    @pytest.mark.parametrize("t", [-0.001, 3.001, 10])
    def test_out_of_domain(self, t):
        """t outside [0, segment count] is a domain error."""
        with pytest.raises(DomainError) as excinfo:
            map_uniform_to_segment(t, 3)
        assert excinfo.value.t == t
        assert excinfo.value.tend == 3

    def test_nan_is_domain_error(self):
        """NaN lies in no segment."""
        with pytest.raises(DomainError):
            map_uniform_to_segment(math.nan, 3)


class TestNonUniformMapping:
    """Tests for mapping t onto segments with explicit knots."""

    KNOTS = [0.0, 1.0, 3.0, 3.5]

    def test_inside_segment(self):
        """Local u is relative to the segment's knots."""
        segment_no, u = map_nonuniform_to_segment(2.0, self.KNOTS)
        assert segment_no == 1
        assert u == pytest.approx(0.5)

    def test_first_knot(self):
        """The first knot is u == 0 of segment 0."""
        assert map_nonuniform_to_segment(0.0, self.KNOTS) == (0, 0.0)

    def test_last_knot(self):
        """The last knot is u == 1 of the last segment."""
        assert map_nonuniform_to_segment(3.5, self.KNOTS) == (2, 1.0)

    @pytest.mark.parametrize("t,segment_no", [(1.0, 0), (3.0, 1)])
    def test_interior_knot_resolves_to_earlier_segment(self, t, segment_no):
        """An interior knot is u == 1 of the earlier segment, on every call."""
        for _ in range(3):
            assert map_nonuniform_to_segment(t, self.KNOTS) == (segment_no, 1.0)

    def test_matches_linear_scan(self):
        """Binary search agrees with the first segment whose right knot >= t."""
        for i in range(0, 351):
            t = i / 100
            expected = next(
                k for k in range(len(self.KNOTS) - 1) if t <= self.KNOTS[k + 1]
            )
            assert map_nonuniform_to_segment(t, self.KNOTS)[0] == expected

    @pytest.mark.parametrize("t", [-0.5, 3.51])
    def test_out_of_domain(self, t):
        """t outside [first knot, last knot] is a domain error."""
        with pytest.raises(DomainError):
            map_nonuniform_to_segment(t, self.KNOTS)

    def test_nan_is_domain_error(self):
        """NaN is reported instead of giving a NaN point."""
        with pytest.raises(DomainError):
            map_nonuniform_to_segment(math.nan, self.KNOTS)

    def test_single_knot(self):
        """Fewer than two knots cannot be mapped."""
        with pytest.raises(DomainError):
            map_nonuniform_to_segment(0.0, [0.0])


class TestCanonicalSpline2d:
    """Tests for canonical splines."""

    def test_construction_fails_for_knot_mismatch(self):
        """3 segments with 3 knots (needs 4) is a construction error."""
        cubics = [line_cubic(0, 0, 1, 1)] * 3
        with pytest.raises(ConstructionError) as excinfo:
            CanonicalSpline2d(cubics, [0, 1, 2])
        assert excinfo.value.details["segment_count"] == 3
        assert excinfo.value.details["knot_count"] == 3

    def test_construction_with_matching_knots(self):
        """segment count + 1 knots are accepted."""
        spline = CanonicalSpline2d([line_cubic(0, 0, 1, 1)] * 3, [0, 1, 2, 4])
        assert spline.segment_count() == 3
        assert not spline.knots().is_uniform()

    def test_uniform_evaluation(self):
        """Uniform splines delegate to the segment at the integer part of t."""
        spline = CanonicalSpline2d([line_cubic(0, 0, 1, 1), line_cubic(1, 1, 3, 1)])
        assert_point(spline.at(0.5), (0.5, 0.5))
        assert_point(spline.at(1.5), (2, 1))
        assert_point(spline.at(2), (3, 1))

    def test_nonuniform_evaluation(self):
        """Non-uniform splines rescale t into each segment."""
        spline = CanonicalSpline2d(
            [line_cubic(0, 0, 1, 1), line_cubic(1, 1, 3, 1)], [0, 2, 3]
        )
        assert_point(spline.at(1), (0.5, 0.5))
        assert_point(spline.at(2), (1, 1))
        assert_point(spline.at(2.5), (2, 1))

    def test_out_of_domain(self):
        """Evaluation outside the domain is reported, not clamped."""
        spline = CanonicalSpline2d([line_cubic(0, 0, 1, 1)])
        with pytest.raises(DomainError):
            spline.at(1.5)

    @pytest.mark.parametrize("tknots", [None, [0, 1, 3]])
    def test_nan_parameter(self, tknots):
        """at(NaN) raises for uniform and explicit knots."""
        cubics = [line_cubic(0, 0, 1, 1), line_cubic(1, 1, 3, 1)]
        with pytest.raises(DomainError):
            CanonicalSpline2d(cubics, tknots).at(math.nan)

    def test_empty_spline(self):
        """An empty spline reports an error instead of a made-up point."""
        spline = CanonicalSpline2d([])
        assert spline.segment_count() == 0
        with pytest.raises(EmptySplineError):
            spline.at(0)

    def test_empty_spline_is_domain_error(self):
        """Callers handling DomainError also handle empty splines."""
        assert issubclass(EmptySplineError, DomainError)
