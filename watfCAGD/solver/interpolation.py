"""
Nodal surface interpolation through a family of B-spline curves.

Given N input curves sharing one degree and knot vector, find a control
mesh whose surface passes through the inputs at the Greville nodes of a
synthetic "across-family" basis.

Setup:
    basis_u: the input curves' basis (along each curve)
    basis_v: clamped uniform, degree 1, N functions (across the family)
    F[i, j] = basis_v.N_j(g_i), g = Greville abscissae of basis_v

For every coordinate axis a separately, the right-hand side R_a has one row
per input curve and one column per control point:

    R_a[i, k] = a-coordinate of control point k of curve i
    F @ X_a = R_a

F is LU-factored once and reused for every column and axis.

The output surface puts the across-family direction on the mesh rows:

    degree_u, knots_u = basis_v    (rows, one per input curve)
    degree_v, knots_v = basis_u    (columns, along each curve)

so that surface.isoline_v(g_i) has the control points of input curve i.
"""

import logging
import numpy as np
from scipy.linalg import lu_factor, lu_solve
from typing import List, Sequence

from ..errors import GeometryConstructionError, SingularSystemError
from ..geometry.bspline import BSplineBasis
from ..geometry.curve import BSplineCurve
from ..geometry.surface import BSplineSurface

logger = logging.getLogger(__name__)

# Interpolation across the curve family is always linear
CROSS_FAMILY_DEGREE = 1


class NodalSurfaceInterpolation:
    """
    Solver fitting a B-spline surface through a family of curves.

    Attributes:
        curves: Input curves (rows of the virtual control mesh)
        basis_u: Basis along each input curve
        basis_v: Clamped uniform basis across the curve family
    """

    def __init__(self, curves: Sequence[BSplineCurve], pivot_tol: float = 1e-12):
        """
        Initialize the solver.

        Parameters:
            curves: At least two curves with the same degree, knot vector
                    and number of control points
            pivot_tol: Pivots of the LU factorization with absolute value
                       below this are treated as singular
        """
        self.curves: List[BSplineCurve] = list(curves)
        self.pivot_tol = pivot_tol
        self._validate()

        first = self.curves[0]
        self.basis_u = BSplineBasis(first.degree, first.knots)
        self.basis_v = BSplineBasis.clamped_uniform(CROSS_FAMILY_DEGREE, len(self.curves))

        # Storage for the factored system
        self._lu = None
        self._piv = None

    def _validate(self):
        """Check that the curves form a consistent family."""
        if len(self.curves) <= CROSS_FAMILY_DEGREE:
            raise GeometryConstructionError(
                f"Surface interpolation needs at least {CROSS_FAMILY_DEGREE + 1} curves, "
                f"got {len(self.curves)}"
            )
        first = self.curves[0]
        if first.is_empty:
            raise GeometryConstructionError("Input curves must have control points")
        for idx, curve in enumerate(self.curves[1:], start=1):
            if curve.degree != first.degree:
                raise GeometryConstructionError(
                    f"Curve {idx} has degree {curve.degree}, expected {first.degree}"
                )
            if curve.control_points.shape != first.control_points.shape:
                raise GeometryConstructionError(
                    f"Curve {idx} has control points of shape {curve.control_points.shape}, "
                    f"expected {first.control_points.shape}"
                )
            if not np.array_equal(curve.knots, first.knots):
                raise GeometryConstructionError(
                    f"Curve {idx} knot vector differs from the first curve's"
                )

    @property
    def greville_v(self) -> np.ndarray:
        """Greville abscissae across the curve family."""
        return self.basis_v.greville_abscissa()

    def collocation_matrix(self) -> np.ndarray:
        """F[i, j] = basis_v.N_j(greville_v[i]), square."""
        greville = self.greville_v
        F = self.basis_v.collocation_matrix(greville)
        if F.shape[0] != F.shape[1]:
            raise SingularSystemError(
                f"Collocation matrix is {F.shape[0]}x{F.shape[1]}, expected square"
            )
        return F

    def factor(self):
        """LU-factor the collocation matrix (once)."""
        if self._lu is not None:
            return

        F = self.collocation_matrix()
        lu, piv = lu_factor(F, check_finite=True)
        pivots = np.abs(np.diag(lu))
        if np.any(pivots < self.pivot_tol):
            raise SingularSystemError(
                f"Interpolation matrix is singular (smallest pivot {pivots.min():.3e})"
            )
        self._lu, self._piv = lu, piv
        logger.debug("Factored %dx%d interpolation matrix", F.shape[0], F.shape[1])

    def solve_axis(self, axis: int) -> np.ndarray:
        """
        Solve F @ X = R for one coordinate axis.

        Returns:
            X of shape (n_curves, n_control_points)
        """
        self.factor()
        R = np.array([curve.control_points[:, axis] for curve in self.curves])
        return lu_solve((self._lu, self._piv), R)

    def solve(self) -> BSplineSurface:
        """
        Compute the interpolating surface.

        Returns:
            BSplineSurface whose rows run across the curve family
        """
        n_dim = self.curves[0].n_dim_physical
        results = [self.solve_axis(axis) for axis in range(n_dim)]
        mesh = np.stack(results, axis=-1)

        logger.debug("Solved control mesh of shape %s", mesh.shape)
        return BSplineSurface(
            self.basis_v.degree, self.basis_u.degree,
            self.basis_v.knots, self.basis_u.knots,
            mesh,
        )


def interpolate_surface(curves: Sequence[BSplineCurve]) -> BSplineSurface:
    """Fit a B-spline surface through a family of curves."""
    return NodalSurfaceInterpolation(curves).solve()
