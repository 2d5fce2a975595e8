"""
Interactive editing on top of the geometry kernel (no rendering).
"""

from .editor import CurveEditor
