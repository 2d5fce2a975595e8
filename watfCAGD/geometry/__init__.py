"""
Geometry module for Bezier and B-spline curves and surfaces.
"""

from .point import interpolate, project_to_segment
from .bezier import BezierCurve
from .bspline import BSplineBasis
from .curve import BSplineCurve
from .surface import BSplineSurface
