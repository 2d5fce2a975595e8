"""
B-spline basis function evaluation.

B-splines are piecewise polynomial functions defined by:
1. A knot vector (non-decreasing sequence of parametric values)
2. A polynomial degree p

The i-th B-spline basis function of degree p is defined recursively
(Cox-de Boor):

    N_{i,0}(xi) = 1 if xi_i <= xi < xi_{i+1}, else 0

    N_{i,p}(xi) = (xi - xi_i)/(xi_{i+p} - xi_i) * N_{i,p-1}(xi)
                + (xi_{i+p+1} - xi)/(xi_{i+p+1} - xi_{i+1}) * N_{i+1,p-1}(xi)

A quotient with a zero-length denominator (repeated knots) is taken as 0.

The half-open degree-0 rule makes every function vanish at the right end
of the domain. To keep the partition of unity there, the degree-0 function
on the last span of the knot domain is closed on the right. For clamped
knot vectors this is the last non-empty span (the "modified knot").

Properties:
- Partition of unity: sum of all basis functions = 1 on the knot domain
- Non-negativity: N_{i,p}(xi) >= 0
- Local support: N_{i,p} is non-zero only on [xi_i, xi_{i+p+1}]

The basis is independent of any control points; the nodal interpolation
solver uses it to build its collocation matrix.
"""

import numpy as np
from typing import Sequence, Tuple

from ..discretization.knot_vector import KnotVector, generate_knots
from ..errors import ParameterDomainError


class BSplineBasis:
    """
    Encapsulates a univariate B-spline basis.

    Attributes:
        knot_vector: The underlying KnotVector (sorted)
        degree: Polynomial degree
        n_basis: Number of basis functions
        modified_knot_index: Last index i with knots[i] < knots[i+1]
    """

    def __init__(self, degree: int, knots: Sequence[float]):
        """
        Initialize a B-spline basis.

        Parameters:
            degree: Polynomial degree p
            knots: Knot values, sorted ascending on construction
        """
        self.knot_vector = KnotVector(np.asarray(knots, dtype=np.float64), degree)
        self._knots = self.knot_vector.knots
        self._modified_knot = self.knot_vector.modified_knot_index

    @classmethod
    def clamped_uniform(cls, degree: int, num_points: int) -> 'BSplineBasis':
        """
        Make a basis with a generated clamped uniform knot vector.

        Parameters:
            degree: Polynomial degree p
            num_points: Number of basis functions, must exceed p

        Returns:
            BSplineBasis with num_points + p + 1 integer knots
        """
        if num_points <= degree:
            raise ValueError(
                f"Need more than {degree} points for a degree {degree} basis, "
                f"got {num_points}"
            )
        knots = generate_knots(num_points + degree + 1, degree, True, True)
        return cls(degree, knots)

    @property
    def degree(self) -> int:
        return self.knot_vector.degree

    @property
    def knots(self) -> np.ndarray:
        return self._knots.copy()

    @property
    def n_basis(self) -> int:
        return self.knot_vector.n_basis

    @property
    def modified_knot_index(self) -> int:
        return self._modified_knot

    def knot_domain(self) -> Tuple[float, float]:
        return self.knot_vector.domain

    def greville_abscissa(self) -> np.ndarray:
        """Greville abscissae inside the knot domain."""
        return self.knot_vector.greville_abscissae()

    def eval(self, t: float, i: int) -> float:
        """
        Evaluate the i-th basis function at t.

        Parameters:
            t: Parameter value inside the knot domain
            i: Basis function index in [0, n_basis)

        Returns:
            N_{i,p}(t)
        """
        if not self.knot_vector.contains(t):
            raise ParameterDomainError(t, self.knot_domain())
        if not 0 <= i < self.n_basis:
            raise IndexError(f"Basis function index {i} out of range [0, {self.n_basis})")
        return self.evaluate_basis(t, i, self.degree)

    def eval_all(self, t: float) -> np.ndarray:
        """Evaluate every basis function at t, shape (n_basis,)."""
        return np.array([self.eval(t, i) for i in range(self.n_basis)])

    def evaluate_basis(self, t: float, i: int, k: int) -> float:
        """Cox-de Boor recursion for N_{i,k}(t)."""
        knots = self._knots

        if k == 0:
            # Same span as de Boor evaluation: the last span of the domain
            # is closed on the right
            return 1.0 if i == self.knot_vector.find_span(t) - 1 else 0.0

        if not knots[i] <= t <= knots[i + k + 1]:
            return 0.0

        a = _safe_ratio(t - knots[i], knots[i + k] - knots[i])
        b = _safe_ratio(knots[i + k + 1] - t, knots[i + k + 1] - knots[i + 1])
        return (a * self.evaluate_basis(t, i, k - 1)
                + b * self.evaluate_basis(t, i + 1, k - 1))

    def collocation_matrix(self, params: Sequence[float]) -> np.ndarray:
        """
        Collocation matrix F[r, j] = N_j(params[r]).

        Parameters:
            params: Parameter values inside the knot domain

        Returns:
            Array of shape (len(params), n_basis)
        """
        F = np.zeros((len(params), self.n_basis))
        for r, t in enumerate(params):
            for j in range(self.n_basis):
                F[r, j] = self.eval(t, j)
        return F

    def __repr__(self) -> str:
        return f"BSplineBasis(degree={self.degree}, knots={self._knots.tolist()})"


def _safe_ratio(num: float, denom: float) -> float:
    """num / denom, with non-finite results (zero-length spans) replaced by 0."""
    if denom == 0.0:
        return 0.0
    ratio = num / denom
    return ratio if np.isfinite(ratio) else 0.0
