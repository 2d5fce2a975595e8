"""
Pytest configuration and shared fixtures for the curve/surface kernel tests.
"""

import pytest
import numpy as np
import sys
from pathlib import Path

# Add the parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))


@pytest.fixture
def tolerance():
    """Default tolerance for floating point comparisons."""
    return 1e-12


@pytest.fixture
def cubic_points():
    """Control points of the reference clamped cubic curve."""
    return np.array([
        [-1.5, -1.5],
        [-0.5, 1.5],
        [0.5, -1.5],
        [1.5, 1.5],
    ])


@pytest.fixture
def cubic_curve(cubic_points):
    """Clamped cubic curve on [0, 2] with a single polynomial segment."""
    from watfCAGD.geometry.curve import BSplineCurve
    return BSplineCurve(3, cubic_points, [0, 0, 0, 0, 2, 2, 2, 2])


@pytest.fixture
def rng():
    """Seeded random generator for control point data."""
    return np.random.default_rng(1234)
