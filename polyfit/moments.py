"""Assemble the normal equations of a polynomial least-squares fit.

For samples ``(x_i, y_i)`` and ``N`` coefficients the normal equations are
``A @ c = b`` with

    A[j, k] = sum_i x_i ** (j + k)
    b[k]    = sum_i y_i * x_i ** k

``A`` is a Hankel matrix: every cell on an anti-diagonal ``j + k == p`` holds
the same power sum. Each of the ``2N - 1`` power sums is therefore computed
once and written to the whole anti-diagonal.

Powers are accumulated by repeated multiplication rather than ``**`` so the
moments are bit-reproducible for a given dtype.
"""

from __future__ import annotations

from typing import Optional, Tuple

import numpy as np

from .exceptions import DimensionMismatchError

DEFAULT_DTYPE = np.float64


def as_sample_arrays(x, y, dtype=None) -> Tuple[np.ndarray, np.ndarray]:
    """Convert paired samples to one-dimensional arrays of a common dtype.

    Args:
        x: Independent-axis values.
        y: Observed values paired with ``x``.
        dtype: Target floating dtype. Defaults to ``DEFAULT_DTYPE``.

    Returns:
        tuple[numpy.ndarray, numpy.ndarray]: ``(x, y)`` as 1-D arrays.

    Raises:
        DimensionMismatchError: If either input is not 1-D or the lengths
            differ.
    """
    dtype = DEFAULT_DTYPE if dtype is None else dtype
    x_arr = np.asarray(x, dtype=dtype)
    y_arr = np.asarray(y, dtype=dtype)
    if x_arr.ndim != 1 or y_arr.ndim != 1:
        raise DimensionMismatchError(
            f"Samples must be one-dimensional, got shapes {x_arr.shape} and {y_arr.shape}."
        )
    if x_arr.shape[0] != y_arr.shape[0]:
        raise DimensionMismatchError(
            f"x and y must have equal length, got {x_arr.shape[0]} and {y_arr.shape[0]}."
        )
    return x_arr, y_arr


def ipow(x, n: int):
    """Return ``x`` to the non-negative integer power ``n`` by repeated multiplication."""
    if n < 0:
        raise ValueError("Exponent must be non-negative.")
    r = np.ones_like(x) if isinstance(x, np.ndarray) else type(x)(1)
    for _ in range(n):
        r = r * x
    return r


def assemble_moments(
    x,
    y,
    order_count: int,
    dtype=None,
    out: Optional[Tuple[np.ndarray, np.ndarray]] = None,
) -> Tuple[np.ndarray, np.ndarray]:
    """Build the moment matrix and right-hand side for a polynomial fit.

    Args:
        x: Independent-axis sample values, length ``M``.
        y: Observed values, length ``M``.
        order_count: Number of coefficients ``N`` (degree plus one).
        dtype: Floating dtype of the result. When ``out`` is given its dtype
            wins; otherwise defaults to ``DEFAULT_DTYPE``.
        out: Optional ``(A, B)`` buffers of shape ``(N, N)`` and ``(N,)`` to
            overwrite instead of allocating.

    Returns:
        tuple[numpy.ndarray, numpy.ndarray]: The symmetric ``N x N`` moment
        matrix ``A`` and the length-``N`` vector ``B``.

    Raises:
        ValueError: If ``order_count`` is less than one or ``out`` has the
            wrong shape.
        DimensionMismatchError: If ``x`` and ``y`` are not paired 1-D arrays.

    Note:
        With no samples every sum is zero. The resulting singular matrix is
        not rejected here; the solver reports it.
    """
    n = int(order_count)
    if n < 1:
        raise ValueError("order_count must be at least 1.")

    if out is not None:
        A, B = out
        if A.shape != (n, n) or B.shape != (n,):
            raise ValueError(
                f"Output buffers must have shapes {(n, n)} and {(n,)}, "
                f"got {A.shape} and {B.shape}."
            )
        dtype = A.dtype
    else:
        dtype = DEFAULT_DTYPE if dtype is None else dtype
        A = np.empty((n, n), dtype=dtype)
        B = np.empty(n, dtype=dtype)

    x_arr, y_arr = as_sample_arrays(x, y, dtype=dtype)

    # term holds x_i ** p for the current power p
    term = np.ones_like(x_arr)
    for p in range(2 * n - 1):
        s = term.sum(dtype=dtype)
        if p < n:
            B[p] = (y_arr * term).sum(dtype=dtype)
        for j in range(max(0, p - n + 1), min(p, n - 1) + 1):
            A[j, p - j] = s
        term = term * x_arr

    return A, B
