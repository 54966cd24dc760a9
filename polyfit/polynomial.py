"""Least-squares polynomial of fixed order.

A :class:`Polynomial` owns its coefficient vector together with the working
storage needed to fit it: the ``N x N`` moment matrix (overwritten in place by
its LU factors), the right-hand side, the row scale factors and the pivot
permutation. All buffers are allocated once in the constructor and reused by
every call to :meth:`Polynomial.fit`.

Instances are not thread-safe; use one instance per concurrent fit.
"""

from __future__ import annotations

from typing import Iterator

import numpy as np

from .exceptions import SingularMatrixError
from .horner import horner
from .linalg.lu import back_substitute, lu_decompose
from .moments import DEFAULT_DTYPE, as_sample_arrays, assemble_moments
from .stats.residuals import mean_squared_error


def _floating_dtype(dtype) -> np.dtype:
    dt = np.dtype(dtype)
    if not np.issubdtype(dt, np.floating):
        raise TypeError(f"Polynomial scalar type must be floating point, got {dt}.")
    return dt


class Polynomial:
    """Polynomial with ``order_count`` coefficients, fitted by least squares.

    ``p[i]`` is the coefficient of ``x ** i``.

    Example:
        >>> p = Polynomial(3)
        >>> p.fit([0, 1, 2, 3], [2.1, 0.7, -0.1, 1.3])  # doctest: +ELLIPSIS
        Polynomial(...)
        >>> round(float(p.value(1.0)), 6)
        0.46
    """

    def __init__(self, order_count: int, dtype=DEFAULT_DTYPE):
        n = int(order_count)
        if n < 1:
            raise ValueError("order_count must be at least 1.")
        self._dtype = _floating_dtype(dtype)
        self._n = n
        self._A = np.zeros((n, n), dtype=self._dtype)
        self._B = np.zeros(n, dtype=self._dtype)
        self._C = np.zeros(n, dtype=self._dtype)
        self._S = np.zeros(n, dtype=self._dtype)
        self._P = np.arange(n)
        self._fitted = False

    @classmethod
    def from_coefficients(cls, coefficients, dtype=DEFAULT_DTYPE) -> "Polynomial":
        """Build a polynomial pre-seeded with ``coefficients`` (lowest power first)."""
        c = np.asarray(coefficients, dtype=_floating_dtype(dtype))
        if c.ndim != 1:
            raise ValueError("Coefficients must be a one-dimensional sequence.")
        poly = cls(c.shape[0], dtype=dtype)
        poly._C[:] = c
        return poly

    @property
    def order_count(self) -> int:
        """Number of coefficients (degree plus one)."""
        return self._n

    @property
    def degree(self) -> int:
        return self._n - 1

    @property
    def dtype(self) -> np.dtype:
        return self._dtype

    @property
    def fitted(self) -> bool:
        """True once :meth:`fit` has completed successfully."""
        return self._fitted

    @property
    def coefficients(self) -> np.ndarray:
        """Read-only view of the coefficients, lowest power first."""
        view = self._C.view()
        view.flags.writeable = False
        return view

    def fit(self, x, y) -> "Polynomial":
        """Fit the coefficients to samples ``(x, y)`` by least squares.

        The moment matrix and right-hand side are rebuilt from scratch on
        every call, then solved by scaled partial-pivoting LU decomposition.

        Args:
            x: Independent-axis sample values.
            y: Observed values paired with ``x``.

        Returns:
            Polynomial: ``self``.

        Raises:
            DimensionMismatchError: If ``x`` and ``y`` are not paired 1-D
                sequences.
            ValueError: If any sample is not finite.
            SingularMatrixError: If the normal equations are singular to
                working precision, e.g. fewer distinct ``x`` values than
                coefficients.

        Note:
            On failure the previous coefficients are left unchanged.
        """
        x_arr, y_arr = as_sample_arrays(x, y, dtype=self._dtype)
        if not (np.all(np.isfinite(x_arr)) and np.all(np.isfinite(y_arr))):
            raise ValueError("Samples must be finite.")

        assemble_moments(x_arr, y_arr, self._n, out=(self._A, self._B))
        factors = lu_decompose(
            self._A, self._B, overwrite=True, perm=self._P, scale=self._S
        )
        C = back_substitute(factors.lu, self._B, factors.perm)
        if not np.all(np.isfinite(C)):
            raise SingularMatrixError("Fit produced non-finite coefficients.")

        self._C[:] = C
        self._fitted = True
        return self

    def value(self, x):
        """Evaluate the polynomial at ``x`` (scalar or array) by Horner's method."""
        if np.isscalar(x):
            x = self._dtype.type(x)
        else:
            x = np.asarray(x, dtype=self._dtype)
        return horner(self._C, x)

    __call__ = value

    def mse(self, x, y):
        """Mean squared error of the current coefficients over ``(x, y)``.

        Normalised by ``M - N`` degrees of freedom; zero when ``M <= N``.
        """
        return mean_squared_error(self._C, x, y)

    def __len__(self) -> int:
        return self._n

    def __getitem__(self, i):
        return self._C[i]

    def __setitem__(self, i, value) -> None:
        self._C[i] = value

    def __iter__(self) -> Iterator:
        return iter(self.coefficients)

    def __array__(self, dtype=None, copy=None):
        if dtype is None:
            return self._C.copy()
        return self._C.astype(dtype)

    def __repr__(self) -> str:
        coeffs = np.array2string(self._C, separator=", ")
        return f"Polynomial(order_count={self._n}, coefficients={coeffs})"
