"""Residual and mean-squared-error computation for a fitted polynomial."""

from __future__ import annotations

import numpy as np

from ..horner import horner
from ..moments import as_sample_arrays


def _as_coefficients(coefficients) -> np.ndarray:
    c = np.asarray(coefficients)
    if not np.issubdtype(c.dtype, np.floating):
        c = c.astype(np.float64)
    return c


def residuals(coefficients, x, y) -> np.ndarray:
    """Return ``p(x_i) - y_i`` for each sample.

    Raises:
        DimensionMismatchError: If ``x`` and ``y`` are not paired 1-D arrays.
    """
    c = _as_coefficients(coefficients)
    x_arr, y_arr = as_sample_arrays(x, y, dtype=c.dtype)
    return horner(c, x_arr) - y_arr


def mean_squared_error(coefficients, x, y):
    """Return the mean squared residual over the residual degrees of freedom.

    The squared residuals are summed and divided by ``M - N`` (samples minus
    coefficients) rather than ``M``, since ``N`` parameters were estimated
    from the same data.

    Args:
        coefficients: Fitted coefficients, lowest power first.
        x: Independent-axis sample values.
        y: Observed values paired with ``x``.

    Returns:
        The mean squared error as a scalar of the coefficients' dtype. Exactly
        zero when ``M <= N``: with no spare degrees of freedom the fit is
        exact or under-determined.

    Raises:
        DimensionMismatchError: If ``x`` and ``y`` are not paired 1-D arrays.
    """
    c = _as_coefficients(coefficients)
    x_arr, y_arr = as_sample_arrays(x, y, dtype=c.dtype)
    m, n = x_arr.shape[0], c.shape[0]
    if m <= n:
        return c.dtype.type(0)

    e = horner(c, x_arr) - y_arr
    return (e * e).sum(dtype=c.dtype) / c.dtype.type(m - n)
