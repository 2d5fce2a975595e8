"""
Discretization module.

Provides:
- KnotVector: Knot vector representation (domain, spans, clamping, Greville)
- generate_knots / make_knot_vector: Uniform integer knot vectors
"""

from .knot_vector import KnotVector, generate_knots, make_knot_vector, upper_bound
