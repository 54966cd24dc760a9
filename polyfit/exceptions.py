"""Exception types raised by the fitting core."""

from __future__ import annotations

import numpy as np


class PolyfitError(Exception):
    """Base exception for all polynomial fitting errors."""

    pass


class DimensionMismatchError(PolyfitError, ValueError):
    """Raised when sample arrays are not one-dimensional or differ in length."""

    pass


class SingularMatrixError(PolyfitError, np.linalg.LinAlgError):
    """Raised when LU decomposition meets a zero or near-zero pivot.

    Typical causes are fewer distinct ``x`` values than coefficients, or no
    samples at all.

    Attributes:
        column: Pivot column at which elimination broke down, or ``None``
            when the matrix was rejected before elimination started.
    """

    def __init__(self, message: str, column: int | None = None):
        super().__init__(message)
        self.column = column
