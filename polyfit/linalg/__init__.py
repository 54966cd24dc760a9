"""
Dense linear-system solvers used by the fitting core.

Modules:
    lu:
        Scaled partial-pivoting LU decomposition with a permutation vector
        in place of physical row swaps, plus back substitution.
"""

from .lu import (
    PivotedLU,
    back_substitute,
    lu_decompose,
    scale_factors,
    solve,
)

__all__ = [
    "PivotedLU",
    "back_substitute",
    "lu_decompose",
    "scale_factors",
    "solve",
]
