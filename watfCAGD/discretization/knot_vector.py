"""
Knot vector utilities.

A knot vector is a non-decreasing sequence of real numbers that partitions
the parametric domain of a B-spline into polynomial segments.

Mathematical background:
- The number of basis functions n = len(knots) - p - 1
- The curve is only defined over the knot domain [xi_p, xi_{len-1-p}]
- A clamped end has p+1 equal knots, so the curve starts (ends) exactly at
  its first (last) control point; an open ("floating") end does not

Fresh knot vectors are generated as integer sequences 0, 1, 2, ... with the
clamped ends held constant. Editing operations regenerate the whole vector
rather than inserting knots, preserving the clamp state of each end.
"""

import numpy as np
from typing import List, Optional, Tuple
from dataclasses import dataclass


def generate_knots(n_knots: int, degree: int,
                   clamped_start: bool = True,
                   clamped_end: bool = True) -> np.ndarray:
    """
    Generate an integer-spaced knot vector.

    Parameters:
        n_knots: Total number of knots (n_basis + degree + 1)
        degree: Polynomial degree p
        clamped_start: Repeat the first knot p+1 times
        clamped_end: Repeat the last knot p+1 times

    Returns:
        Array of n_knots non-decreasing values starting at 0

    Example:
        generate_knots(8, 3) -> [0, 0, 0, 0, 1, 1, 1, 1]
        generate_knots(8, 3, False, False) -> [0, 1, 2, 3, 4, 5, 6, 7]
    """
    knots = np.zeros(n_knots)
    x = 0.0
    for i in range(n_knots):
        knots[i] = x
        hold_start = clamped_start and i < degree
        hold_end = clamped_end and i >= n_knots - 1 - degree
        if not (hold_start or hold_end):
            x += 1.0
    return knots


def upper_bound(knots: np.ndarray, value: float) -> int:
    """
    Index of the first knot strictly greater than value.

    The knots must be sorted. Returns len(knots) if no knot is greater.
    """
    return int(np.searchsorted(knots, value, side='right'))


@dataclass
class KnotVector:
    """
    Represents a univariate knot vector.

    Attributes:
        knots: The knot values (sorted ascending on construction)
        degree: Polynomial degree p

    Properties computed:
        n_basis: Number of basis functions
        domain: Knot domain (xi_p, xi_{len-1-p})
        breakpoints: Distinct knot values inside the domain
    """
    knots: np.ndarray
    degree: int

    def __post_init__(self):
        self.knots = np.sort(np.asarray(self.knots, dtype=np.float64))
        self._validate()

    def _validate(self):
        """Validate knot vector properties."""
        if self.degree < 0:
            raise ValueError(f"Degree must be non-negative, got {self.degree}.")
        if len(self.knots) < self.degree + 2:
            raise ValueError(
                f"Knot vector too short for degree {self.degree}. "
                f"Need at least {self.degree + 2} knots, got {len(self.knots)}."
            )
        if not np.all(np.isfinite(self.knots)):
            raise ValueError("Knot values must be finite.")

    @property
    def n_basis(self) -> int:
        """Number of basis functions."""
        return len(self.knots) - self.degree - 1

    @property
    def domain(self) -> Tuple[float, float]:
        """Knot domain, the only parameter range where evaluation is valid."""
        return (float(self.knots[self.degree]),
                float(self.knots[len(self.knots) - 1 - self.degree]))

    @property
    def unique_knots(self) -> np.ndarray:
        """Unique knot values."""
        return np.unique(self.knots)

    @property
    def breakpoints(self) -> np.ndarray:
        """Unique knot values inside the knot domain (segment joints)."""
        lo, hi = self.domain
        unique = self.unique_knots
        return unique[(unique >= lo) & (unique <= hi)]

    @property
    def modified_knot_index(self) -> int:
        """
        Last index i with knots[i] < knots[i+1].

        The degree-0 basis function on this span is treated as closed on the
        right, so the last basis function stays 1 at the domain's right end.
        """
        increasing = np.nonzero(np.diff(self.knots) > 0)[0]
        return int(increasing[-1]) if len(increasing) else 0

    @property
    def is_clamped_start(self) -> bool:
        """First p+1 knots all equal the minimum knot."""
        head = self.knots[:self.degree + 1]
        return bool(np.all(head == self.knots[0]))

    @property
    def is_clamped_end(self) -> bool:
        """Last p+1 knots all equal the maximum knot."""
        tail = self.knots[-(self.degree + 1):]
        return bool(np.all(tail == self.knots[-1]))

    @property
    def is_clamped(self) -> bool:
        """Clamped at both ends."""
        return self.is_clamped_start and self.is_clamped_end

    def contains(self, t: float) -> bool:
        """Whether t lies in the (closed) knot domain."""
        lo, hi = self.domain
        return lo <= t <= hi

    def find_span(self, t: float) -> int:
        """
        Find the knot span index used by de Boor evaluation.

        Returns i such that knots[i-1] <= t < knots[i], clamped to
        [p, len(knots) - p - 1] so both domain ends map to a valid span.
        """
        ceiling = len(self.knots) - self.degree - 1
        i = upper_bound(self.knots, t)
        if i == 0:
            return self.degree
        return min(i, ceiling)

    def greville_abscissae(self) -> np.ndarray:
        """
        Compute Greville abscissae (nodal parameters for basis functions).

        The i-th Greville abscissa is the average of p consecutive knots:
        xi_i = (xi_{i+1} + xi_{i+2} + ... + xi_{i+p}) / p

        Values outside the knot domain (open knot vectors) are dropped.
        For p = 0 the midpoint of the basis function's span is used.

        Returns:
            Array of at most n Greville abscissae, non-decreasing
        """
        p = self.degree
        n = self.n_basis
        lo, hi = self.domain
        abscissae: List[float] = []

        for i in range(n):
            if p == 0:
                g = 0.5 * (self.knots[i] + self.knots[i + 1])
            else:
                g = np.sum(self.knots[i + 1:i + p + 1]) / p
            if lo <= g <= hi:
                abscissae.append(float(g))

        return np.array(abscissae)


def make_knot_vector(n_basis: int, degree: int, clamped: bool = True,
                     clamped_end: Optional[bool] = None) -> KnotVector:
    """
    Create a uniform integer knot vector for n_basis functions.

    Parameters:
        n_basis: Number of basis functions (control points)
        degree: Polynomial degree p
        clamped: Clamp state of the start (and of the end, unless
                 clamped_end is given)
        clamped_end: Clamp state of the end

    Returns:
        KnotVector with n_basis + degree + 1 knots
    """
    if n_basis <= degree:
        raise ValueError(
            f"Cannot create knot vector: n_basis={n_basis} too small for degree={degree}"
        )
    if clamped_end is None:
        clamped_end = clamped
    knots = generate_knots(n_basis + degree + 1, degree, clamped, clamped_end)
    return KnotVector(knots, degree)
