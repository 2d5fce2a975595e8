"""
Unit tests for B-spline curves: evaluation and editing.
"""

import pytest
import numpy as np
from numpy.testing import assert_array_almost_equal, assert_array_equal

from watfCAGD.discretization.knot_vector import generate_knots
from watfCAGD.errors import (
    DegenerateKnotSpanError, EmptyCurveError,
    GeometryConstructionError, ParameterDomainError
)
from watfCAGD.geometry.curve import BSplineCurve


class TestBSplineCurveConstruction:
    """Tests for curve construction invariants."""

    def test_too_few_points(self):
        """Test that n must exceed the degree."""
        with pytest.raises(GeometryConstructionError):
            BSplineCurve(3, [(0, 0), (1, 1), (2, 0)])

    def test_knot_count_mismatch(self):
        """Test that the knot count must be n + p + 1."""
        with pytest.raises(GeometryConstructionError):
            BSplineCurve(1, [(0, 0), (1, 1)], [0, 0, 1])

    def test_negative_degree(self):
        """Test that the degree must be non-negative."""
        with pytest.raises(GeometryConstructionError):
            BSplineCurve(-1, [(0, 0)])

    def test_generated_knots(self):
        """Test that missing knots give a clamped knot vector."""
        points = [(0, 0), (1, 1), (2, 0), (3, 1)]
        for knots in (None, []):
            curve = BSplineCurve(3, points, knots)
            assert_array_equal(curve.knots, [0, 0, 0, 0, 1, 1, 1, 1])
            assert curve.is_clamped()

    def test_knots_sorted(self, cubic_points):
        """Test that knots given out of order are sorted."""
        curve = BSplineCurve(3, cubic_points, [2, 0, 2, 0, 0, 2, 0, 2])
        assert_array_equal(curve.knots, [0, 0, 0, 0, 2, 2, 2, 2])

    def test_empty_placeholder(self):
        """Test the placeholder state of a curve awaiting input."""
        curve = BSplineCurve.empty()
        assert curve.is_empty
        assert curve.degree == 0
        assert curve.max_possible_degree == 0
        assert len(curve.knots) == 0
        with pytest.raises(EmptyCurveError):
            curve.point(0.0)
        with pytest.raises(EmptyCurveError):
            curve.knot_domain()


class TestBSplineCurveEvaluation:
    """Tests for de Boor evaluation."""

    def test_clamped_end_interpolation(self, cubic_curve):
        """Test that a clamped curve starts and ends at its end points."""
        assert_array_equal(cubic_curve.point(0.0), [-1.5, -1.5])
        assert_array_equal(cubic_curve.point(2.0), [1.5, 1.5])

    def test_bezier_equivalence(self, cubic_curve, cubic_points):
        """Test that a single-segment clamped curve is a Bezier curve."""
        from watfCAGD.geometry.bezier import BezierCurve
        bezier = BezierCurve(cubic_points)
        for t in [0.25, 0.5, 1.2, 1.9]:
            assert_array_almost_equal(cubic_curve.point(t), bezier.point(t / 2.0))

    def test_domain_ends_finite(self, rng):
        """Test that both domain ends evaluate to finite points."""
        for degree in range(4):
            for clamped in (True, False):
                n = degree + 3
                knots = generate_knots(n + degree + 1, degree, clamped, clamped)
                curve = BSplineCurve(degree, rng.uniform(-1, 1, size=(n, 3)), knots)
                lo, hi = curve.knot_domain()
                assert np.all(np.isfinite(curve.point(lo)))
                assert np.all(np.isfinite(curve.point(hi)))

    def test_linear_precision(self):
        """Test that control points at Greville abscissae reproduce a line."""
        knots = generate_knots(8, 2)
        greville = np.array([0.0, 0.5, 1.5, 2.5, 3.0])
        curve = BSplineCurve(2, np.column_stack([greville, 2 * greville]), knots)
        for t in np.linspace(0, 3, 13):
            assert_array_almost_equal(curve.point(t), [t, 2 * t])

    def test_out_of_domain(self, cubic_curve):
        """Test that parameters outside the knot domain are rejected."""
        with pytest.raises(ParameterDomainError):
            cubic_curve.point(2.5)
        with pytest.raises(ParameterDomainError):
            cubic_curve.point(-1e-9)

    def test_degenerate_span(self):
        """Test that a zero-length evaluation span fails loudly."""
        curve = BSplineCurve(1, [(0, 0), (1, 1)], [0, 0, 0, 1])
        with pytest.raises(DegenerateKnotSpanError):
            curve.point(0.0)

    def test_breakpoints(self):
        """Test distinct knots inside the domain."""
        curve = BSplineCurve(2, np.zeros((5, 2)), generate_knots(8, 2))
        assert_array_equal(curve.breakpoints(), [0, 1, 2, 3])

    def test_sample(self, cubic_curve):
        """Test regular sampling across the knot domain."""
        samples = cubic_curve.sample(0.5)
        assert samples.shape == (5, 2)
        assert_array_equal(samples[0], [-1.5, -1.5])
        assert_array_equal(samples[-1], [1.5, 1.5])


class TestBSplineCurveEditing:
    """Tests for degree, clamp and control point edits."""

    def test_set_clamped(self, cubic_curve):
        """Test that is_clamped follows set_clamped."""
        cubic_curve.set_clamped(False)
        assert not cubic_curve.is_clamped()
        assert_array_equal(cubic_curve.knots, np.arange(8))

        cubic_curve.set_clamped(True)
        assert cubic_curve.is_clamped()
        assert_array_equal(cubic_curve.knots, [0, 0, 0, 0, 1, 1, 1, 1])

    def test_set_degree_preserves_clamp_state(self):
        """Test that each end keeps its clamp state on degree change."""
        points = np.random.default_rng(0).uniform(size=(5, 2))
        curve = BSplineCurve(2, points, generate_knots(8, 2, True, False))
        curve.set_degree(3)
        assert curve.degree == 3
        assert_array_equal(curve.knots, generate_knots(9, 3, True, False))
        assert curve.knot_vector.is_clamped_start
        assert not curve.knot_vector.is_clamped_end

    def test_set_degree_invalid(self, cubic_curve):
        """Test that the degree is bounded by the point count."""
        with pytest.raises(ValueError):
            cubic_curve.set_degree(4)
        with pytest.raises(ValueError):
            cubic_curve.set_degree(-1)

    def test_degree_round_trip(self, rng):
        """Test that lowering and restoring the degree restores the shape."""
        points = rng.uniform(-1, 1, size=(6, 2))
        curve = BSplineCurve(3, points)
        lo, hi = curve.knot_domain()
        fractions = np.linspace(0, 1, 9)
        before = [curve.point(lo + f * (hi - lo)) for f in fractions]

        curve.set_degree(1)
        curve.set_degree(3)
        lo, hi = curve.knot_domain()
        after = [curve.point(lo + f * (hi - lo)) for f in fractions]
        assert_array_almost_equal(before, after)

    def test_remove_at_minimum_count(self, cubic_curve):
        """Test that removing below the degree lowers it by one."""
        cubic_curve.remove_point(1)
        assert cubic_curve.degree == 2
        assert cubic_curve.n_control_points == 3
        assert len(cubic_curve.knots) == cubic_curve.n_control_points + cubic_curve.degree + 1
        assert cubic_curve.is_clamped()
        assert_array_equal(cubic_curve.control_points[1], [0.5, -1.5])

    def test_remove_keeps_degree(self):
        """Test that removing above the minimum keeps the degree."""
        curve = BSplineCurve(2, np.zeros((5, 2)))
        curve.set_clamped(False)
        curve.remove_point(0)
        assert curve.degree == 2
        assert len(curve.knots) == 7
        assert not curve.is_clamped()

    def test_remove_to_empty(self):
        """Test that removing every point leaves a placeholder curve."""
        curve = BSplineCurve(1, [(0, 0), (1, 0)])
        curve.remove_point(0)
        assert curve.degree == 0
        assert len(curve.knots) == 2
        curve.remove_point(0)
        assert curve.is_empty
        with pytest.raises(EmptyCurveError):
            curve.point(0.0)

    def test_remove_invalid_index(self, cubic_curve):
        """Test that a bad index raises."""
        with pytest.raises(IndexError):
            cubic_curve.remove_point(4)

    def test_insert_point(self, cubic_curve):
        """Test insertion next to the nearest segment."""
        index = cubic_curve.insert_point((0.0, 0.0))
        assert index == 2
        assert cubic_curve.n_control_points == 5
        assert cubic_curve.degree == 3
        assert_array_equal(cubic_curve.knots, generate_knots(9, 3))

    def test_insert_preserves_open_state(self, cubic_curve):
        """Test that insertion keeps an open knot vector open."""
        cubic_curve.set_clamped(False)
        cubic_curve.insert_point((2.0, 2.0))
        assert not cubic_curve.is_clamped()
        assert_array_equal(cubic_curve.knots, np.arange(9))

    def test_insert_into_empty(self):
        """Test building a curve point by point."""
        curve = BSplineCurve.empty()
        assert curve.insert_point((0.0, 0.0)) == 0
        assert curve.insert_point((1.0, 0.0)) == 1
        assert curve.insert_point((-1.0, 0.0)) == 0
        assert curve.n_control_points == 3
        assert curve.max_possible_degree == 2
        curve.set_degree(2)
        assert_array_equal(curve.point(0.0), [-1.0, 0.0])
        assert_array_equal(curve.point(1.0), [1.0, 0.0])

    def test_move_point(self, cubic_curve):
        """Test moving a control point keeps the knots."""
        knots = cubic_curve.knots
        cubic_curve.move_point(0, (-2.0, -2.0))
        assert_array_equal(cubic_curve.point(0.0), [-2.0, -2.0])
        assert_array_equal(cubic_curve.knots, knots)
