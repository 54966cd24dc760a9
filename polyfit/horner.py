"""Polynomial evaluation."""

from __future__ import annotations

import numpy as np


def horner(coefficients, x):
    """Evaluate ``sum_i coefficients[i] * x ** i`` with Horner's method.

    Starting from the leading coefficient, the accumulator is multiplied by
    ``x`` and the next lower coefficient added, which takes ``N - 1``
    multiplications and ``N - 1`` additions for ``N`` coefficients.

    Args:
        coefficients: Sequence of ``N`` coefficients, lowest power first.
        x: Scalar or array of evaluation points.

    Returns:
        The polynomial value(s), with the broadcast shape of ``x``.

    Raises:
        ValueError: If ``coefficients`` is empty.
    """
    c = np.asarray(coefficients)
    if c.ndim != 1 or c.shape[0] == 0:
        raise ValueError("At least one coefficient is required for evaluation.")
    if not np.isscalar(x):
        x = np.asarray(x)

    r = c[-1]
    for i in range(c.shape[0] - 2, -1, -1):
        r = r * x + c[i]
    if np.ndim(x) and np.ndim(r) == 0:
        return np.full(np.shape(x), r)
    return r


def power_sum(coefficients, x):
    """Evaluate the polynomial term by term; used to cross-check :func:`horner`."""
    c = np.asarray(coefficients)
    total = np.zeros_like(np.asarray(x, dtype=c.dtype))
    term = np.ones_like(total)
    for ci in c:
        total = total + ci * term
        term = term * x
    return total
