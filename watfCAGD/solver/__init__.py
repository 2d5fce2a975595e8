"""
Solvers operating on families of curves.
"""

from .interpolation import NodalSurfaceInterpolation, interpolate_surface
