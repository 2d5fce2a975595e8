"""
Unit tests for basis function evaluation and plotting.
"""

import numpy as np
from numpy.testing import assert_array_almost_equal

from watfCAGD.geometry.bspline import BSplineBasis
from watfCAGD.visualization.basis import BasisVisualizer, evaluate_basis_functions


class TestBasisVisualizer:
    """Tests for BasisVisualizer."""

    def test_evaluate_shapes(self):
        basis = BSplineBasis.clamped_uniform(2, 5)
        grid, values = evaluate_basis_functions(basis, n_points=50)
        assert grid.shape == (50,)
        assert values.shape == (5, 50)
        assert grid[0] == 0.0
        assert grid[-1] == 3.0

    def test_partition_of_unity(self):
        """Test partition of unity for clamped and open knot vectors."""
        for knots in ([0, 0, 0, 0, 1, 2, 2, 2, 2], list(range(9))):
            viz = BasisVisualizer(BSplineBasis(3, knots), n_points=64)
            assert viz.check_partition_of_unity()

    def test_stats(self):
        viz = BasisVisualizer(BSplineBasis.clamped_uniform(3, 6))
        stats = viz.get_partition_of_unity_stats()
        assert abs(stats['min'] - 1.0) < 1e-10
        assert abs(stats['max'] - 1.0) < 1e-10

    def test_evaluation_cached(self):
        viz = BasisVisualizer(BSplineBasis.clamped_uniform(1, 3))
        _, first = viz.evaluate_all()
        _, second = viz.evaluate_all()
        assert first is second
        assert_array_almost_equal(viz.compute_basis_sum(), np.ones(100))

    def test_plot_saves_figure(self, tmp_path):
        """Test plotting without a display."""
        import matplotlib
        matplotlib.use("Agg")
        import matplotlib.pyplot as plt

        viz = BasisVisualizer(BSplineBasis.clamped_uniform(2, 4), n_points=40)
        path = tmp_path / "basis.png"
        fig = viz.plot(save_path=str(path), show=False)
        assert path.exists()
        plt.close(fig)
