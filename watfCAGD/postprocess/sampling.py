"""
Curve and surface sampling for display.

After every edit the rendering layer needs flat point sequences: the curve
itself, its break points, and for surfaces several families of isolines.
Everything is recomputed eagerly; nothing is cached between edits.

Surface isolines come in three families per direction:
- plain isolines every `isoline_step` across the knot domain
- isolines at the Greville abscissae
- isolines at the knot values inside the domain

All isolines along one direction are sampled at the same merged parameter
set (regular steps plus every isoline position on that axis), so lines of
the two directions share their crossing points exactly.
"""

import numpy as np
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple

from ..geometry.bezier import BezierCurve
from ..geometry.curve import BSplineCurve
from ..geometry.surface import BSplineSurface
from ..io.config import SamplingConfig


def parameter_steps(domain: Tuple[float, float], step: float) -> np.ndarray:
    """
    Regular parameter values start + step * s for s = 0 .. floor(len/step).

    The end of the domain is only included if it falls on a step. Values
    are clipped to the domain so round-off never leaves it.
    """
    lo, hi = domain
    n_steps = int((hi - lo) / step)
    return np.minimum(lo + step * np.arange(n_steps + 1), hi)


def merge_parameters(*groups: Iterable[float]) -> np.ndarray:
    """Sorted, de-duplicated union of parameter values."""
    merged = np.concatenate([np.asarray(list(g), dtype=np.float64) for g in groups])
    return np.unique(merged)


def sample_curve(curve: BSplineCurve, step: float = 0.01) -> np.ndarray:
    """
    Sample a B-spline curve across its knot domain.

    Returns:
        Array of shape (n_samples, d); empty for a placeholder curve
    """
    if curve.is_empty:
        return np.zeros((0, 0))
    return curve.sample(step)


def sample_break_points(curve: BSplineCurve) -> np.ndarray:
    """Curve points at each distinct knot inside the domain."""
    if curve.is_empty:
        return np.zeros((0, 0))
    return np.array([curve.point(t) for t in curve.breakpoints()])


def sample_bezier(curve: BezierCurve, n_points: int = 101) -> np.ndarray:
    """Sample a Bezier curve at n_points evenly spaced parameters."""
    return curve.sample(n_points)


def sample_isoline(curve: BSplineCurve, params: np.ndarray) -> np.ndarray:
    """Evaluate an isoline curve at the given parameters."""
    return np.array([curve.point(t) for t in params])


@dataclass
class SurfaceIsolines:
    """
    Sampled isoline families of a surface.

    Each entry is an (n_samples, d) array. The `_u` lists hold isolines
    along u (fixed v), the `_v` lists isolines along v (fixed u).
    """
    plain_u: List[np.ndarray] = field(default_factory=list)
    plain_v: List[np.ndarray] = field(default_factory=list)
    greville_u: List[np.ndarray] = field(default_factory=list)
    greville_v: List[np.ndarray] = field(default_factory=list)
    knot_u: List[np.ndarray] = field(default_factory=list)
    knot_v: List[np.ndarray] = field(default_factory=list)
    control_points: Optional[np.ndarray] = None

    @property
    def n_isolines(self) -> int:
        return (len(self.plain_u) + len(self.plain_v) + len(self.greville_u)
                + len(self.greville_v) + len(self.knot_u) + len(self.knot_v))


def sample_surface_isolines(surface: BSplineSurface,
                            config: Optional[SamplingConfig] = None) -> SurfaceIsolines:
    """
    Sample the isoline families of a surface.

    Parameters:
        surface: Surface to sample
        config: Step sizes (defaults to SamplingConfig())

    Returns:
        SurfaceIsolines with all families and the flattened control mesh
    """
    config = config or SamplingConfig()

    domain_u = surface.knot_domain_u()
    domain_v = surface.knot_domain_v()
    greville_u = surface.greville_abscissa_u()
    greville_v = surface.greville_abscissa_v()
    knots_u = surface.breakpoints_u()
    knots_v = surface.breakpoints_v()

    # Every value along each axis where an isoline will be drawn
    plain_u_vals = parameter_steps(domain_u, config.isoline_step)
    plain_v_vals = parameter_steps(domain_v, config.isoline_step)
    lines_u = merge_parameters(plain_u_vals, greville_u, knots_u)
    lines_v = merge_parameters(plain_v_vals, greville_v, knots_v)

    # Sample positions along an isoline include every crossing line
    t_along_u = merge_parameters(parameter_steps(domain_u, config.step_size), lines_u)
    t_along_v = merge_parameters(parameter_steps(domain_v, config.step_size), lines_v)

    result = SurfaceIsolines()

    for u in greville_u:
        result.greville_u.append(sample_isoline(surface.isoline_v(u), t_along_v))
    for v in greville_v:
        result.greville_v.append(sample_isoline(surface.isoline_u(v), t_along_u))

    for u in knots_u:
        result.knot_u.append(sample_isoline(surface.isoline_v(u), t_along_v))
    for v in knots_v:
        result.knot_v.append(sample_isoline(surface.isoline_u(v), t_along_u))

    special_u = set(greville_u.tolist()) | set(knots_u.tolist())
    special_v = set(greville_v.tolist()) | set(knots_v.tolist())

    for v in plain_v_vals:
        if v not in special_v:
            result.plain_u.append(sample_isoline(surface.isoline_u(v), t_along_u))
    for u in plain_u_vals:
        if u not in special_u:
            result.plain_v.append(sample_isoline(surface.isoline_v(u), t_along_v))

    result.control_points = surface.control_mesh.reshape(-1, surface.n_dim_physical)
    return result
