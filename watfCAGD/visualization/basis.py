"""
B-spline basis function evaluation and visualization.

This module provides functions to:
1. Evaluate every basis function of a BSplineBasis over its knot domain
2. Check partition of unity
3. Plot the basis functions (and their sum) with matplotlib

The evaluation functions have no matplotlib dependency and can be used
independently for numerical analysis.

Example:
    from watfCAGD.geometry.bspline import BSplineBasis
    from watfCAGD.visualization.basis import BasisVisualizer

    basis = BSplineBasis(3, [0, 0, 0, 0, 1, 2, 2, 2, 2])
    viz = BasisVisualizer(basis, n_points=200)
    assert viz.check_partition_of_unity()
    viz.plot(save_path="basis.png", show=False)
"""

from typing import TYPE_CHECKING, Dict, Optional, Tuple
import numpy as np

if TYPE_CHECKING:
    from ..geometry.bspline import BSplineBasis

__all__ = [
    'evaluate_basis_functions',
    'BasisVisualizer',
]


def evaluate_basis_functions(
    basis: 'BSplineBasis',
    n_points: int = 100
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Evaluate all basis functions over a uniform grid on the knot domain.

    Parameters:
        basis: Basis to evaluate
        n_points: Number of grid points (domain ends included)

    Returns:
        (grid, values) where grid has shape (n_points,) and values has
        shape (n_basis, n_points)
    """
    lo, hi = basis.knot_domain()
    grid = np.linspace(lo, hi, n_points)
    values = np.zeros((basis.n_basis, n_points))
    for k, t in enumerate(grid):
        values[:, k] = basis.eval_all(t)
    return grid, values


class BasisVisualizer:
    """
    Evaluate and plot the basis functions of a univariate B-spline basis.
    """

    def __init__(self, basis: 'BSplineBasis', n_points: int = 100):
        """
        Parameters:
            basis: BSplineBasis to visualize
            n_points: Number of evaluation points across the knot domain
        """
        self.basis = basis
        self.n_points = n_points

        # Cache for evaluated basis functions
        self._grid: Optional[np.ndarray] = None
        self._values: Optional[np.ndarray] = None

    def evaluate_all(self) -> Tuple[np.ndarray, np.ndarray]:
        """Evaluate (and cache) every basis function on the grid."""
        if self._values is None:
            self._grid, self._values = evaluate_basis_functions(self.basis, self.n_points)
        return self._grid, self._values

    def compute_basis_sum(self) -> np.ndarray:
        """Sum of all basis functions at each grid point."""
        _, values = self.evaluate_all()
        return values.sum(axis=0)

    def check_partition_of_unity(self, atol: float = 1e-10) -> bool:
        """
        Check if partition of unity holds (sum of all basis = 1).

        Parameters:
            atol: Absolute tolerance for comparison
        """
        return bool(np.allclose(self.compute_basis_sum(), 1.0, atol=atol))

    def get_partition_of_unity_stats(self) -> Dict[str, float]:
        """Get statistics about the partition of unity."""
        basis_sum = self.compute_basis_sum()
        return {
            'min': float(basis_sum.min()),
            'max': float(basis_sum.max()),
            'mean': float(basis_sum.mean()),
        }

    def plot(
        self,
        plot_sum: bool = True,
        plot_greville: bool = True,
        save_path: Optional[str] = None,
        show: bool = True
    ):
        """
        Plot all basis functions on one axis.

        Parameters:
            plot_sum: Whether to include the partition of unity sum
            plot_greville: Mark the Greville abscissae on the parameter axis
            save_path: If provided, save figure to this path
            show: Whether to call plt.show()

        Returns:
            matplotlib Figure object
        """
        import matplotlib.pyplot as plt

        grid, values = self.evaluate_all()

        fig, ax = plt.subplots(figsize=(8, 4))
        for i, N in enumerate(values):
            ax.plot(grid, N, label=f"N{i}")

        if plot_sum:
            basis_sum = values.sum(axis=0)
            ax.plot(grid, basis_sum, 'k--', linewidth=1,
                    label=f"sum (min={basis_sum.min():.4f})")

        if plot_greville:
            greville = self.basis.greville_abscissa()
            ax.plot(greville, np.zeros_like(greville), 'kx', label='Greville')

        for knot in self.basis.knot_vector.breakpoints:
            ax.axvline(knot, color='0.8', linewidth=0.5)

        ax.set_xlabel('t')
        ax.set_ylim(-0.05, 1.1)
        ax.set_title(f'Degree {self.basis.degree} B-spline basis')
        ax.legend(fontsize=7, ncol=2)

        plt.tight_layout()

        if save_path:
            fig.savefig(save_path, dpi=150, bbox_inches='tight')

        if show:
            plt.show()

        return fig
