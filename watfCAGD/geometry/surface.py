"""
Tensor-product B-spline surfaces.

A B-spline surface S(u, v) is defined by:
- Degrees p_u, p_v and knot vectors in the u and v directions
- A rectangular control mesh P_{i,j}: rows i run along u, columns j along v

The surface is evaluated by collapsing one axis at a time. Fixing u, each
column of the mesh is a B-spline curve in u; evaluating all columns at u
gives the control polygon of the isoline along v:

    isoline_v(u)(v) = sum_j N_j(v) * (sum_i N_i(u) * P_{i,j}) = S(u, v)

and symmetrically for isoline_u(v).
"""

import logging
import numpy as np
from typing import Sequence, Tuple

from ..discretization.knot_vector import KnotVector
from ..errors import GeometryConstructionError
from .curve import BSplineCurve

logger = logging.getLogger(__name__)


class BSplineSurface:
    """
    Tensor-product B-spline surface.

    Attributes:
        degree_u, degree_v: Polynomial degrees
        knots_u, knots_v: Knot vectors (sorted)
        control_mesh: Array of shape (n_u, n_v, d)
    """

    def __init__(self, degree_u: int, degree_v: int,
                 knots_u: Sequence[float], knots_v: Sequence[float],
                 control_mesh):
        """
        Initialize a B-spline surface.

        Parameters:
            degree_u: Degree along the mesh rows' direction (u)
            degree_v: Degree along the mesh columns' direction (v)
            knots_u: Knots along u, len = n_u + degree_u + 1
            knots_v: Knots along v, len = n_v + degree_v + 1
            control_mesh: Nested sequence of shape (n_u, n_v, d)

        Raises:
            GeometryConstructionError: if the mesh is empty or not rectangular.
            Knot counts are checked lazily, when isolines are built.
        """
        if len(control_mesh) == 0 or any(len(row) == 0 for row in control_mesh):
            raise GeometryConstructionError("Surface control mesh cannot be empty")
        row_lengths = {len(row) for row in control_mesh}
        if len(row_lengths) != 1:
            raise GeometryConstructionError(
                f"Surface control mesh rows must have equal length, got {sorted(row_lengths)}"
            )

        mesh = np.asarray(control_mesh, dtype=np.float64)
        if mesh.ndim != 3:
            raise GeometryConstructionError(
                f"Control mesh must have shape (n_u, n_v, d), got {mesh.shape}"
            )

        self._kv_u = KnotVector(np.asarray(knots_u, dtype=np.float64), degree_u)
        self._kv_v = KnotVector(np.asarray(knots_v, dtype=np.float64), degree_v)
        self._control_mesh = mesh

    @property
    def degree_u(self) -> int:
        return self._kv_u.degree

    @property
    def degree_v(self) -> int:
        return self._kv_v.degree

    @property
    def knots_u(self) -> np.ndarray:
        return self._kv_u.knots.copy()

    @property
    def knots_v(self) -> np.ndarray:
        return self._kv_v.knots.copy()

    @property
    def knot_vectors(self) -> Tuple[KnotVector, KnotVector]:
        return (self._kv_u, self._kv_v)

    @property
    def control_mesh(self) -> np.ndarray:
        return self._control_mesh.copy()

    @property
    def n_control_points_per_dir(self) -> Tuple[int, int]:
        """Number of control points in each direction (n_u, n_v)."""
        return self._control_mesh.shape[0], self._control_mesh.shape[1]

    @property
    def n_dim_physical(self) -> int:
        return self._control_mesh.shape[2]

    def knot_domain_u(self) -> Tuple[float, float]:
        return self._kv_u.domain

    def knot_domain_v(self) -> Tuple[float, float]:
        return self._kv_v.domain

    def breakpoints_u(self) -> np.ndarray:
        return self._kv_u.breakpoints

    def breakpoints_v(self) -> np.ndarray:
        return self._kv_v.breakpoints

    def greville_abscissa_u(self) -> np.ndarray:
        """Greville abscissae along u, restricted to the knot domain."""
        return self._kv_u.greville_abscissae()

    def greville_abscissa_v(self) -> np.ndarray:
        """Greville abscissae along v, restricted to the knot domain."""
        return self._kv_v.greville_abscissae()

    def isoline_v(self, u: float) -> BSplineCurve:
        """
        Compute the isoline along v for a fixed value of u.

        Each mesh column is evaluated as a degree_u curve at u; the
        resulting points are the control polygon of the isoline.
        """
        n_v = self._control_mesh.shape[1]
        iso_points = []
        for j in range(n_v):
            column = BSplineCurve(self.degree_u, self._control_mesh[:, j], self._kv_u.knots)
            iso_points.append(column.point(u))
        logger.debug("Isoline along v at u=%g: %d control points", u, n_v)
        return BSplineCurve(self.degree_v, np.array(iso_points), self._kv_v.knots)

    def isoline_u(self, v: float) -> BSplineCurve:
        """
        Compute the isoline along u for a fixed value of v.

        Each mesh row is evaluated as a degree_v curve at v; the resulting
        points are the control polygon of the isoline.
        """
        n_u = self._control_mesh.shape[0]
        iso_points = []
        for i in range(n_u):
            row = BSplineCurve(self.degree_v, self._control_mesh[i], self._kv_v.knots)
            iso_points.append(row.point(v))
        logger.debug("Isoline along u at v=%g: %d control points", v, n_u)
        return BSplineCurve(self.degree_u, np.array(iso_points), self._kv_u.knots)

    def point(self, u: float, v: float) -> np.ndarray:
        """Evaluate S(u, v)."""
        return self.isoline_v(u).point(v)

    def __repr__(self) -> str:
        n_u, n_v = self.n_control_points_per_dir
        return (f"BSplineSurface(degree=({self.degree_u}, {self.degree_v}), "
                f"n_control_points=({n_u}, {n_v}))")
