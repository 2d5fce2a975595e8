"""
CAGD - Bezier / B-spline curve and surface kernel

Evaluation and editing kernel for an interactive curve and surface editor.
The rendering, windowing and file layers sit on top of it, calling the
evaluation methods after every edit and pushing edited control points back.

Key modules:
- geometry: Bezier curves, B-spline basis, curves and surfaces
- discretization: Knot vectors (generation, clamping, spans, Greville)
- solver: Nodal surface interpolation through a family of curves
- postprocess: Sampling curves and surface isolines for display
- interaction: Headless curve editing session
- io: Sampling / picking configuration

Quick start (curve):
    from watfCAGD.geometry.curve import BSplineCurve

    curve = BSplineCurve(3, [(-1.5, -1.5), (-0.5, 1.5), (0.5, -1.5), (1.5, 1.5)])
    curve.point(0.5)
    curve.insert_point((0.0, 0.0))
    curve.set_clamped(False)

Quick start (surface interpolation):
    from watfCAGD.solver.interpolation import interpolate_surface

    surface = interpolate_surface(curves)
    isoline = surface.isoline_v(surface.greville_abscissa_u()[0])
"""

__version__ = "0.1.0"
__author__ = "Wataru Fukuda"

# Core imports for convenience
from .errors import (
    GeometryConstructionError,
    ParameterDomainError,
    EmptyCurveError,
    DegenerateGeometryError,
    DegenerateKnotSpanError,
    DegenerateSegmentError,
    SingularSystemError,
)
from .discretization.knot_vector import KnotVector, generate_knots, make_knot_vector
from .geometry.bezier import BezierCurve
from .geometry.bspline import BSplineBasis
from .geometry.curve import BSplineCurve
from .geometry.surface import BSplineSurface
from .solver.interpolation import NodalSurfaceInterpolation, interpolate_surface
from .io.config import SamplingConfig, load_config
