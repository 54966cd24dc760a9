"""Approximate equality checks used to compare fits against reference values."""

from __future__ import annotations

from typing import Sequence

import numpy as np

DEFAULT_RTOL = 1e-6


def approx(actual: float, expected: float, rtol: float = DEFAULT_RTOL) -> bool:
    """Return True when ``expected`` lies within ``rtol`` relative error of ``actual``.

    The error is taken relative to ``actual``; when ``actual`` is exactly zero,
    ``expected`` must be exactly zero as well.
    """
    actual = float(actual)
    expected = float(expected)
    if actual == 0:
        return expected == 0
    return abs((actual - expected) / actual) < rtol


def approx_sequence(
    actual: Sequence[float], expected: Sequence[float], rtol: float = DEFAULT_RTOL
) -> bool:
    """Element-wise :func:`approx`; sequences of different length never match."""
    a = np.ravel(np.asarray(actual, dtype=float))
    e = np.ravel(np.asarray(expected, dtype=float))
    if a.shape != e.shape:
        return False
    return all(approx(ai, ei, rtol) for ai, ei in zip(a, e))
