"""
A Python package for least-squares polynomial curve fitting.

Fits a polynomial of fixed order to paired samples by solving the normal
equations with scaled partial-pivoting LU decomposition, evaluates it by
Horner's method and reports the mean squared error over the residual degrees
of freedom.

Modules:
    - moments: Builds the moment matrix and right-hand side of the normal equations.
    - linalg: Scaled partial-pivoting LU decomposition and back substitution.
    - horner: Polynomial evaluation.
    - polynomial: The Polynomial class tying the stages together.
    - stats: Residuals, mean squared error and regression diagnostics.
    - data_processing, reporting, output, plotting: Loading, formatting and exporting fits.
"""

__version__ = "1.0.0"

from .compare import approx, approx_sequence
from .data_processing import load_samples, samples_from_frame
from .exceptions import DimensionMismatchError, PolyfitError, SingularMatrixError
from .horner import horner
from .linalg import lu_decompose, solve
from .moments import assemble_moments
from .polynomial import Polynomial
from .stats import mean_squared_error, residuals
from .stats.regression import polynomial_regression

__all__ = [
    # Core
    "Polynomial",
    "assemble_moments",
    "lu_decompose",
    "solve",
    "horner",
    "mean_squared_error",
    "residuals",
    # Errors
    "PolyfitError",
    "DimensionMismatchError",
    "SingularMatrixError",
    # Diagnostics and I/O
    "polynomial_regression",
    "load_samples",
    "samples_from_frame",
    "approx",
    "approx_sequence",
]
