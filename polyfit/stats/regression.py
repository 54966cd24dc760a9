"""Provide regression diagnostics for least-squares polynomial fits.

This module supports:
- coefficient fitting on finite sample pairs,
- goodness-of-fit summaries (SSE, R^2, MSE over residual degrees of freedom),
- per-coefficient standard errors and 95% confidence half-widths.
"""

from __future__ import annotations

import importlib.util
import math
import warnings
from typing import Dict, Optional

import numpy as np

from ..linalg.lu import lu_decompose
from ..moments import as_sample_arrays, assemble_moments
from ..polynomial import Polynomial
from .residuals import mean_squared_error, residuals

HAVE_SCIPY = importlib.util.find_spec("scipy") is not None
if HAVE_SCIPY:
    from scipy.stats import t as student_t


def _inverse_diagonal(x: np.ndarray, order_count: int) -> np.ndarray:
    """Diagonal of the inverse moment matrix, one LU solve per unit vector."""
    A, _ = assemble_moments(x, np.zeros_like(x), order_count, dtype=x.dtype)
    factors = lu_decompose(A, overwrite=True)
    diag = np.empty(order_count, dtype=x.dtype)
    for k in range(order_count):
        e = np.zeros(order_count, dtype=x.dtype)
        e[k] = 1
        diag[k] = factors.solve(e)[k]
    return diag


def polynomial_regression(
    x: np.ndarray,
    y: np.ndarray,
    order_count: int,
    min_points: Optional[int] = None,
    dtype=np.float64,
) -> Dict[str, object]:
    """Fit a least-squares polynomial to finite data pairs and summarise it.

    Args:
        x (numpy.ndarray): Independent-axis values.
        y (numpy.ndarray): Observed values paired with ``x``.
        order_count (int): Number of coefficients (degree plus one).
        min_points (int, optional): Minimum number of finite paired
            observations required. Defaults to ``order_count``.
        dtype: Floating dtype used for the fit. Defaults to ``float64``.

    Returns:
        dict[str, object]: Regression diagnostics with keys ``polynomial``,
        ``coefficients``, ``fitted``, ``residuals``, ``sse``, ``sst``,
        ``r2``, ``n``, ``dof``, ``mse``, ``se`` (per-coefficient standard
        errors), ``ci95`` (95% half-widths) and ``x``/``y`` (the finite
        samples used).

    Raises:
        DimensionMismatchError: If ``x`` and ``y`` are not paired 1-D arrays.
        ValueError: If there are insufficient valid points.
        SingularMatrixError: If there are fewer distinct ``x`` values than
            coefficients.

    Note:
        ``mse`` is normalised by ``n - order_count``. When that is not
        positive the fit is exact or under-determined: ``mse`` is reported
        as zero, standard errors are NaN and a ``UserWarning`` is issued.
        Confidence half-widths require scipy and are NaN without it. ``r2``
        is NaN when ``y`` is constant.
    """
    x_arr, y_arr = as_sample_arrays(x, y, dtype=dtype)
    mask = np.isfinite(x_arr) & np.isfinite(y_arr)
    x_arr = x_arr[mask]
    y_arr = y_arr[mask]
    n = int(len(x_arr))
    if min_points is None:
        min_points = order_count
    if n < max(min_points, 1):
        raise ValueError("Insufficient valid data for regression.")

    poly = Polynomial(order_count, dtype=dtype).fit(x_arr, y_arr)
    coefficients = np.array(poly.coefficients)
    yhat = poly.value(x_arr)
    resid = residuals(coefficients, x_arr, y_arr)

    sse = float(np.sum(resid**2))
    sst = float(np.sum((y_arr - y_arr.mean()) ** 2))
    r2 = 1.0 - sse / sst if sst > 0 else math.nan

    dof = n - order_count
    mse = float(mean_squared_error(coefficients, x_arr, y_arr))

    se = np.full(order_count, math.nan)
    ci95 = np.full(order_count, math.nan)

    if dof > 0:
        inv_diag = _inverse_diagonal(x_arr, order_count).astype(float)
        se = np.sqrt(mse * np.clip(inv_diag, 0.0, None))
        if HAVE_SCIPY:
            t_crit = float(student_t.ppf(0.975, dof))
            ci95 = t_crit * se
    else:
        warnings.warn(
            f"{n} points for {order_count} coefficients leaves no residual "
            f"degrees of freedom; MSE reported as zero.",
            UserWarning,
            stacklevel=2,
        )

    return {
        "polynomial": poly,
        "coefficients": coefficients,
        "fitted": yhat,
        "residuals": resid,
        "sse": sse,
        "sst": sst,
        "r2": float(r2),
        "n": n,
        "dof": dof,
        "mse": mse,
        "se": se,
        "ci95": ci95,
        "x": x_arr,
        "y": y_arr,
    }
