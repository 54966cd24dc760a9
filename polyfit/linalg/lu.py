"""Scaled partial-pivoting LU decomposition for small dense systems.

Polynomial moment matrices are badly balanced: low powers of ``x`` give small
entries, high powers give huge ones. Plain partial pivoting would let the
high-power rows win every pivot regardless of how significant the candidate is
within its own row. Each row is therefore ranked by its pivot candidate
divided by the row's largest magnitude (its scale factor).

Rows are never swapped physically. A permutation vector ``perm`` records the
pivot order and every row access goes through it, so ``lu[perm[i]]`` is the
``i``-th row of the factored system.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import numpy as np

from ..exceptions import DimensionMismatchError, SingularMatrixError


def scale_factors(A: np.ndarray, out: Optional[np.ndarray] = None) -> np.ndarray:
    """Return the largest absolute entry of each row of ``A``."""
    if out is None:
        return np.max(np.abs(A), axis=1)
    np.max(np.abs(A), axis=1, out=out)
    return out


def _check_square(A: np.ndarray) -> int:
    if A.ndim != 2 or A.shape[0] != A.shape[1]:
        raise DimensionMismatchError(f"Matrix must be square, got shape {A.shape}.")
    if A.shape[0] == 0:
        raise DimensionMismatchError("Matrix must have at least one row.")
    return A.shape[0]


def _check_rhs(B: np.ndarray, n: int) -> None:
    if B.shape != (n,):
        raise DimensionMismatchError(
            f"Right-hand side must have shape {(n,)}, got {B.shape}."
        )


@dataclass
class PivotedLU:
    """Result of :func:`lu_decompose`.

    Attributes:
        lu: Factored matrix. Through ``perm``, entries above and on the
            diagonal form ``U``; entries below hold the unit-lower ``L``
            multipliers.
        perm: Pivot order; ``perm[i]`` is the storage row used as row ``i``.
        scale: Per-row scale factors of the original matrix.
    """

    lu: np.ndarray
    perm: np.ndarray
    scale: np.ndarray

    @property
    def size(self) -> int:
        return self.lu.shape[0]

    def forward_substitute(self, b) -> np.ndarray:
        """Apply the stored elimination to a fresh right-hand side.

        Returns a vector in storage-row order, ready for back substitution.
        """
        y = np.array(b, dtype=self.lu.dtype)
        _check_rhs(y, self.size)
        P = self.perm
        for k in range(self.size - 1):
            rows = P[k + 1 :]
            y[rows] -= self.lu[rows, k] * y[P[k]]
        return y

    def solve(self, b) -> np.ndarray:
        """Solve ``A @ c = b`` for the original matrix ``A``."""
        return back_substitute(self.lu, self.forward_substitute(b), self.perm)

    def unpack(self):
        """Return ``(P, L, U)`` as dense matrices with ``P @ A == L @ U``."""
        n = self.size
        permuted = self.lu[self.perm]
        L = np.tril(permuted, -1) + np.eye(n, dtype=self.lu.dtype)
        U = np.triu(permuted)
        P = np.eye(n, dtype=self.lu.dtype)[self.perm]
        return P, L, U


def lu_decompose(
    A: np.ndarray,
    B: Optional[np.ndarray] = None,
    pivot_tol: float = 0.0,
    overwrite: bool = True,
    perm: Optional[np.ndarray] = None,
    scale: Optional[np.ndarray] = None,
) -> PivotedLU:
    """Factor ``A`` in place with scaled partial pivoting.

    Args:
        A: Square floating-point matrix. Overwritten with the factors unless
            ``overwrite`` is False.
        B: Optional right-hand side, eliminated alongside ``A`` (and
            overwritten under the same rule).
        pivot_tol: Cancellation threshold. A pivot that elimination has
            reduced to ``pivot_tol`` times its original magnitude or less is
            treated as singular. The default of 0 rejects only exact zeros.
        overwrite: Factor ``A`` and ``B`` in place when True; work on copies
            otherwise.
        perm: Optional integer buffer of length ``N`` for the pivot order.
        scale: Optional floating buffer of length ``N`` for scale factors.

    Returns:
        PivotedLU: The factors, pivot order and scale factors.

    Raises:
        DimensionMismatchError: If ``A`` is not square or ``B`` does not match.
        SingularMatrixError: If a row is entirely zero, or a pivot is zero,
            non-finite or cancelled below ``pivot_tol``.
    """
    if not overwrite:
        A = np.array(A, copy=True)
        if B is not None:
            B = np.array(B, copy=True)
    n = _check_square(A)
    if B is not None:
        _check_rhs(B, n)

    S = scale_factors(A, out=scale)
    if not np.all(np.isfinite(S)):
        raise SingularMatrixError("Matrix contains non-finite entries.")
    zero_rows = np.flatnonzero(S == 0)
    if zero_rows.size:
        raise SingularMatrixError(
            f"Matrix is singular: row {int(zero_rows[0])} is entirely zero."
        )

    if perm is None:
        P = np.arange(n)
    else:
        P = perm
        P[:] = np.arange(n)
    initial = np.abs(A) if pivot_tol > 0 else None

    for k in range(n):
        # strict comparison keeps the earliest row on ties
        j = k
        best = abs(A[P[k], k]) / S[P[k]]
        for i in range(k + 1, n):
            ratio = abs(A[P[i], k]) / S[P[i]]
            if ratio > best:
                j, best = i, ratio
        P[k], P[j] = P[j], P[k]

        pivot_row = P[k]
        # scale factors only rank candidates; they say nothing about singularity
        pivot = abs(A[pivot_row, k])
        cancelled = initial is not None and pivot <= pivot_tol * initial[pivot_row, k]
        if not np.isfinite(pivot) or pivot == 0 or cancelled:
            raise SingularMatrixError(
                f"Matrix is singular to working precision at pivot column {k} "
                f"(pivot {pivot:.3g}).",
                column=k,
            )

        rows = P[k + 1 :]
        if rows.size == 0:
            continue
        m = A[rows, k] / A[pivot_row, k]
        A[np.ix_(rows, np.arange(k + 1, n))] -= np.outer(m, A[pivot_row, k + 1 :])
        A[rows, k] = m
        if B is not None:
            B[rows] -= m * B[pivot_row]

    return PivotedLU(lu=A, perm=P, scale=S)


def back_substitute(
    A: np.ndarray, B: np.ndarray, perm: np.ndarray, out: Optional[np.ndarray] = None
) -> np.ndarray:
    """Solve the permuted upper-triangular system left by elimination.

    ``C[i] = (B[P[i]] - sum_{j>i} A[P[i], j] * C[j]) / A[P[i], i]`` for ``i``
    from ``N - 1`` down to ``0``.
    """
    n = A.shape[0]
    C = np.empty(n, dtype=A.dtype) if out is None else out
    for i in range(n - 1, -1, -1):
        row = perm[i]
        C[i] = (B[row] - np.dot(A[row, i + 1 :], C[i + 1 :])) / A[row, i]
    return C


def solve(
    A: np.ndarray,
    B: np.ndarray,
    pivot_tol: float = 0.0,
    overwrite: bool = False,
) -> np.ndarray:
    """Solve ``A @ C = B`` by scaled partial-pivoting LU decomposition.

    Raises:
        SingularMatrixError: If the system is singular to working precision.
    """
    convert = np.asarray if overwrite else np.array
    A = convert(A, dtype=_float_dtype(A))
    B = convert(B, dtype=A.dtype)
    factors = lu_decompose(A, B, pivot_tol=pivot_tol, overwrite=True)
    return back_substitute(factors.lu, B, factors.perm)


def _float_dtype(A) -> np.dtype:
    dtype = np.asarray(A).dtype
    return dtype if np.issubdtype(dtype, np.floating) else np.dtype(np.float64)
