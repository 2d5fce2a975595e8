"""
Unit tests for display sampling of curves and surfaces.
"""

import numpy as np
from numpy.testing import assert_array_almost_equal, assert_array_equal

from watfCAGD.geometry.bezier import BezierCurve
from watfCAGD.geometry.curve import BSplineCurve
from watfCAGD.geometry.surface import BSplineSurface
from watfCAGD.io.config import SamplingConfig
from watfCAGD.postprocess.sampling import (
    merge_parameters, parameter_steps, sample_bezier, sample_break_points,
    sample_curve, sample_surface_isolines
)


class TestParameterSteps:
    """Tests for regular parameter stepping."""

    def test_exact_steps(self):
        assert_array_equal(parameter_steps((0.0, 1.0), 0.25), [0, 0.25, 0.5, 0.75, 1.0])

    def test_end_not_on_step(self):
        """Test that the domain end is skipped when not on a step."""
        assert_array_almost_equal(parameter_steps((0.0, 1.0), 0.3), [0, 0.3, 0.6, 0.9])

    def test_never_leaves_domain(self):
        """Test that accumulated round-off stays inside the domain."""
        steps = parameter_steps((0.0, 3.0), 0.1)
        assert steps[-1] <= 3.0
        assert np.all(np.diff(steps) >= 0)

    def test_merge(self):
        """Test sorted union without duplicates."""
        merged = merge_parameters([0.0, 0.5, 1.0], np.array([0.5, 0.25]), [])
        assert_array_equal(merged, [0.0, 0.25, 0.5, 1.0])


class TestCurveSampling:
    """Tests for curve display geometry."""

    def test_empty_curve(self):
        """Test that a placeholder curve samples to nothing."""
        curve = BSplineCurve.empty()
        assert len(sample_curve(curve)) == 0
        assert len(sample_break_points(curve)) == 0

    def test_sample_curve(self, cubic_curve):
        samples = sample_curve(cubic_curve, 0.25)
        assert samples.shape == (9, 2)
        assert_array_equal(samples[0], [-1.5, -1.5])

    def test_break_points(self):
        """Test one break point per distinct knot in the domain."""
        curve = BSplineCurve(3, [(0, 0), (1, 1), (2, 0), (3, 1), (4, 0)])
        points = sample_break_points(curve)
        assert points.shape == (3, 2)
        assert_array_almost_equal(points[0], [0, 0])
        assert_array_almost_equal(points[-1], [4, 0])

    def test_sample_bezier(self, cubic_points):
        samples = sample_bezier(BezierCurve(cubic_points), 11)
        assert samples.shape == (11, 2)
        assert_array_almost_equal(samples[-1], cubic_points[-1])


class TestSurfaceIsolines:
    """Tests for surface isoline families."""

    def test_bilinear_families(self):
        """Test isoline counts and sample counts on a bilinear patch."""
        mesh = [
            [(0, 0, 0), (1, 0, 0)],
            [(0, 1, 0), (1, 1, 1)],
        ]
        surface = BSplineSurface(1, 1, [0, 0, 1, 1], [0, 0, 1, 1], mesh)
        config = SamplingConfig(step_size=0.25, isoline_step=0.5)
        isolines = sample_surface_isolines(surface, config)

        assert len(isolines.greville_u) == 2
        assert len(isolines.knot_v) == 2
        assert len(isolines.plain_u) == 1
        assert len(isolines.plain_v) == 1
        assert isolines.n_isolines == 10
        for line in isolines.plain_u + isolines.greville_v + isolines.knot_u:
            assert line.shape == (5, 3)
        assert isolines.control_points.shape == (4, 3)

        # Plain isoline along u at v = 0.5: S(u, 0.5) = (0.5, u, u / 2)
        assert_array_almost_equal(isolines.plain_u[0][2], [0.5, 0.5, 0.25])
