"""
Visualization module.

Provides B-spline basis function evaluation and plotting.

Usage:
    from watfCAGD.visualization import BasisVisualizer

    viz = BasisVisualizer(basis, n_points=200)
    viz.plot(save_path="basis.png")
    print(f"Partition of unity: {viz.check_partition_of_unity()}")
"""

from .basis import evaluate_basis_functions, BasisVisualizer

__all__ = [
    'evaluate_basis_functions',
    'BasisVisualizer',
]
