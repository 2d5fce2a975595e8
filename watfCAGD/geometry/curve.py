"""
B-spline curve representation and editing.

A B-spline curve C(t) is defined by:
- A polynomial degree p
- Control points P_0 ... P_{n-1} in R^d
- A knot vector of n + p + 1 non-decreasing values

and is only defined over the knot domain [xi_p, xi_{n}]. Points are
evaluated with the iterative de Boor algorithm, i.e. repeated linear
interpolation of the p+1 control points active on the knot span.

The curve is also the unit of interactive editing: control points can be
inserted (next to the closest control polygon segment), removed or moved,
and the degree and the clamped/open state of the ends can be changed.
Every structural edit regenerates a uniform integer knot vector, keeping
the clamp state of each end.

A curve with no control points is a placeholder awaiting user input
(see BSplineCurve.empty); it can be edited but not evaluated.
"""

import logging
import numpy as np
from typing import Optional, Sequence, Tuple

from ..discretization.knot_vector import KnotVector, generate_knots
from ..errors import (
    DegenerateKnotSpanError,
    EmptyCurveError,
    GeometryConstructionError,
    ParameterDomainError,
)
from .point import as_point, as_points, insertion_index, interpolate

logger = logging.getLogger(__name__)


class BSplineCurve:
    """
    B-spline curve in arbitrary dimensional space.

    Attributes:
        degree: Polynomial degree p
        control_points: Array of shape (n, d)
        knots: Array of n + p + 1 sorted knot values
    """

    def __init__(self, degree: int, control_points,
                 knots: Optional[Sequence[float]] = None):
        """
        Initialize a B-spline curve.

        Parameters:
            degree: Polynomial degree p (>= 0)
            control_points: Array-like of shape (n, d), n > p
            knots: Knot values (n + p + 1 of them); sorted if out of order.
                   If None or empty, a clamped uniform knot vector is generated.

        Raises:
            GeometryConstructionError: on too few control points or a knot
                count mismatch
        """
        points = as_points(control_points)
        n = points.shape[0]

        if degree < 0:
            raise GeometryConstructionError(f"Degree must be non-negative, got {degree}")
        if n <= degree:
            raise GeometryConstructionError(
                f"Too few control points for curve: degree {degree} needs more than "
                f"{degree}, got {n}"
            )

        if knots is None or len(knots) == 0:
            knots = generate_knots(n + degree + 1, degree, True, True)
        elif len(knots) != n + degree + 1:
            raise GeometryConstructionError(
                f"Invalid number of knots, got {len(knots)}, expected {n + degree + 1}"
            )

        self._degree = degree
        self._control_points = points
        self._knot_vector = KnotVector(np.asarray(knots, dtype=np.float64), degree)

    @classmethod
    def empty(cls) -> 'BSplineCurve':
        """Create a placeholder curve with no control points."""
        curve = cls.__new__(cls)
        curve._degree = 0
        curve._control_points = np.zeros((0, 0))
        curve._knot_vector = None
        return curve

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def degree(self) -> int:
        return self._degree

    @property
    def control_points(self) -> np.ndarray:
        return self._control_points.copy()

    @property
    def knots(self) -> np.ndarray:
        if self._knot_vector is None:
            return np.zeros(0)
        return self._knot_vector.knots.copy()

    @property
    def knot_vector(self) -> Optional[KnotVector]:
        return self._knot_vector

    @property
    def n_control_points(self) -> int:
        return self._control_points.shape[0]

    @property
    def n_dim_physical(self) -> int:
        return self._control_points.shape[1]

    @property
    def is_empty(self) -> bool:
        return self.n_control_points == 0

    @property
    def max_possible_degree(self) -> int:
        """Highest degree the current control points support."""
        return max(self.n_control_points - 1, 0)

    def knot_domain(self) -> Tuple[float, float]:
        """
        Parameter range (min, max) over which the curve is defined.

        The curve is only defined over the inclusive range [min, max];
        point() raises ParameterDomainError outside of it.
        """
        return self._require_knots().domain

    def breakpoints(self) -> np.ndarray:
        """Distinct knot values inside the knot domain."""
        return self._require_knots().breakpoints

    def is_clamped(self) -> bool:
        """
        Whether both ends are clamped.

        The first p+1 knots must equal the minimum knot and the last p+1
        the maximum one. A placeholder curve reports True, which is the
        state its first knot vector will be generated in.
        """
        if self._knot_vector is None:
            return True
        return self._knot_vector.is_clamped

    # ------------------------------------------------------------------
    # Evaluation
    # ------------------------------------------------------------------

    def point(self, t: float) -> np.ndarray:
        """
        Compute a point on the curve.

        Parameters:
            t: Parameter value inside knot_domain()

        Returns:
            Point coordinates as (d,) array
        """
        kv = self._require_knots()
        if not kv.contains(t):
            raise ParameterDomainError(t, kv.domain)
        return self.de_boor_iterative(t, kv.find_span(t))

    def de_boor_iterative(self, t: float, i_start: int) -> np.ndarray:
        """
        Iterative de Boor evaluation on the span ending at knot i_start.

        Computes the recursive de Boor tree bottom up. At each level the
        results of the previous level are blended pairwise and stored in
        the slots that are no longer needed.
        """
        p = self._degree
        knots = self._knot_vector.knots
        tmp = [self._control_points[j + i_start - p - 1].copy() for j in range(p + 1)]

        for lvl in range(p):
            k = lvl + 1
            for j in range(p - lvl):
                i = j + k + i_start - p
                denom = knots[i + p - k] - knots[i - 1]
                if denom == 0.0:
                    raise DegenerateKnotSpanError(
                        f"Zero-length knot span [{knots[i - 1]}, {knots[i + p - k]}] "
                        f"while evaluating t={t}"
                    )
                alpha = (t - knots[i - 1]) / denom
                tmp[j] = interpolate(tmp[j], tmp[j + 1], alpha)

        return tmp[0]

    def sample(self, step: float = 0.01) -> np.ndarray:
        """
        Evaluate the curve at regular steps across its knot domain.

        Returns:
            Array of shape (n_samples, d)
        """
        lo, hi = self.knot_domain()
        n_steps = int((hi - lo) / step)
        return np.array([self.point(min(lo + step * s, hi)) for s in range(n_steps + 1)])

    # ------------------------------------------------------------------
    # Editing
    # ------------------------------------------------------------------

    def set_degree(self, degree: int) -> None:
        """
        Change the curve degree, regenerating the knot vector.

        Each end keeps its clamped/open state.
        """
        if not 0 <= degree <= self.max_possible_degree:
            raise ValueError(
                f"Degree {degree} not supported by {self.n_control_points} "
                f"control points (max {self.max_possible_degree})"
            )
        start, end = self._clamp_state()
        self._degree = degree
        self._regenerate_knots(start, end)

    def set_clamped(self, clamped: bool) -> None:
        """Regenerate the knot vector with both ends clamped (or open)."""
        self._regenerate_knots(clamped, clamped)

    def insert_point(self, p) -> int:
        """
        Insert a control point next to the nearest control polygon segment.

        Parameters:
            p: New control point coordinates

        Returns:
            Index of the inserted point
        """
        p = as_point(p)
        start, end = self._clamp_state()

        if self.is_empty:
            self._control_points = p.reshape(1, -1).copy()
            self._regenerate_knots(start, end)
            return 0

        if len(p) != self.n_dim_physical:
            raise ValueError(
                f"Point has {len(p)} coordinates, curve has {self.n_dim_physical}"
            )
        index = insertion_index(self._control_points, p)
        self._control_points = np.insert(self._control_points, index, p, axis=0)
        self._regenerate_knots(start, end)
        logger.debug("Inserted control point %s at index %d", p, index)
        return index

    def remove_point(self, index: int) -> None:
        """
        Remove the control point at index.

        If the remaining points no longer support the degree, the degree
        drops by one. Removing the last point leaves an empty curve.
        """
        if not 0 <= index < self.n_control_points:
            raise IndexError(
                f"Control point index {index} out of range [0, {self.n_control_points})"
            )
        start, end = self._clamp_state()
        self._control_points = np.delete(self._control_points, index, axis=0)

        if self.is_empty:
            self._control_points = np.zeros((0, 0))
            self._degree = 0
            self._knot_vector = None
            return

        if self.n_control_points <= self._degree:
            self._degree -= 1
        self._regenerate_knots(start, end)

    def move_point(self, index: int, p) -> None:
        """Move control point index to p; the knot vector is unchanged."""
        p = as_point(p)
        if len(p) != self.n_dim_physical:
            raise ValueError(
                f"Point has {len(p)} coordinates, curve has {self.n_dim_physical}"
            )
        self._control_points[index] = p

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _require_knots(self) -> KnotVector:
        if self._knot_vector is None:
            raise EmptyCurveError("Curve has no control points")
        return self._knot_vector

    def _clamp_state(self) -> Tuple[bool, bool]:
        if self._knot_vector is None:
            return True, True
        return self._knot_vector.is_clamped_start, self._knot_vector.is_clamped_end

    def _regenerate_knots(self, clamped_start: bool, clamped_end: bool) -> None:
        if self.is_empty:
            return
        n_knots = self.n_control_points + self._degree + 1
        knots = generate_knots(n_knots, self._degree, clamped_start, clamped_end)
        self._knot_vector = KnotVector(knots, self._degree)

    def __repr__(self) -> str:
        return (f"BSplineCurve(degree={self._degree}, "
                f"n_control_points={self.n_control_points}, knots={self.knots.tolist()})")
