"""
Bezier curves.

A Bezier curve of degree n-1 is defined by n control points and evaluated
on t in [0, 1] with de Casteljau's algorithm:

    B(t, 0, i) = P_i
    B(t, r, i) = (1 - t) * B(t, r-1, i) + t * B(t, r-1, i+1)
    C(t) = B(t, n-1, 0)

The recursion is computed bottom up with a working buffer, one level at a
time, which gives the same values as the recursive form.
"""

import numpy as np

from ..errors import GeometryConstructionError, ParameterDomainError
from .point import as_point, as_points, insertion_index, interpolate


class BezierCurve:
    """
    Bezier curve through de Casteljau evaluation.

    Attributes:
        control_points: Array of shape (n, d), n >= 1
        degree: n - 1
    """

    def __init__(self, control_points):
        points = as_points(control_points)
        if points.shape[0] == 0:
            raise GeometryConstructionError("A Bezier curve needs at least one control point")
        self._control_points = points

    @property
    def control_points(self) -> np.ndarray:
        return self._control_points.copy()

    @property
    def n_control_points(self) -> int:
        return self._control_points.shape[0]

    @property
    def degree(self) -> int:
        return self.n_control_points - 1

    def point(self, t: float) -> np.ndarray:
        """
        Compute a point on the curve.

        Parameters:
            t: Parameter value in [0, 1]

        Returns:
            Point coordinates as (d,) array
        """
        if not 0.0 <= t <= 1.0:
            raise ParameterDomainError(t, (0.0, 1.0))

        tmp = [p.copy() for p in self._control_points]
        for r in range(self.degree, 0, -1):
            for i in range(r):
                tmp[i] = interpolate(tmp[i], tmp[i + 1], t)
        return tmp[0]

    def sample(self, n_points: int = 101) -> np.ndarray:
        """Evaluate the curve at n_points evenly spaced parameters."""
        return np.array([self.point(t) for t in np.linspace(0.0, 1.0, n_points)])

    def insert_point(self, p) -> int:
        """
        Insert a control point near the closest control polygon segment.

        Returns:
            Index of the inserted point
        """
        p = as_point(p)
        if len(p) != self._control_points.shape[1]:
            raise ValueError(
                f"Point has {len(p)} coordinates, curve has {self._control_points.shape[1]}"
            )
        index = insertion_index(self._control_points, p)
        self._control_points = np.insert(self._control_points, index, p, axis=0)
        return index

    def __repr__(self) -> str:
        return f"BezierCurve(degree={self.degree})"
