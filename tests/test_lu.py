import numpy as np
import pytest

from polyfit.exceptions import DimensionMismatchError, SingularMatrixError

from polyfit.linalg.lu import (
    back_substitute,
    lu_decompose,
    scale_factors,
    solve,
)
from polyfit.moments import assemble_moments


def _well_conditioned(n, seed=0):
    rng = np.random.default_rng(seed)
    A = rng.normal(size=(n, n))
    return A + n * np.eye(n), rng.normal(size=n)


def test_solve_matches_numpy():
    A, b = _well_conditioned(6)
    c = solve(A, b)
    assert np.allclose(c, np.linalg.solve(A, b))


def test_solve_does_not_modify_inputs_by_default():
    A, b = _well_conditioned(4, seed=1)
    A_before, b_before = A.copy(), b.copy()
    solve(A, b)
    assert np.array_equal(A, A_before)
    assert np.array_equal(b, b_before)


def test_solve_accepts_integer_matrices():
    c = solve([[2, 0], [0, 4]], [2, 8])
    assert c.dtype == np.float64
    assert np.allclose(c, [1.0, 2.0])


def test_scale_factors_are_row_maxima():
    A = np.array([[1.0, -5.0, 2.0], [0.5, 0.25, -0.75], [3.0, 3.0, 3.0]])
    assert np.array_equal(scale_factors(A), [5.0, 0.75, 3.0])


def test_pivot_selection_uses_scaled_magnitude():
    # Unscaled partial pivoting would pick row 0 (2 > 1); relative to its
    # row, row 1 is the stronger candidate.
    A = np.array([[2.0, 1000.0], [1.0, 1.0]])
    factors = lu_decompose(A.copy())
    assert list(factors.perm) == [1, 0]


def test_pivot_ties_keep_earliest_row():
    A = np.array([[1.0, 2.0], [2.0, -4.0]])
    factors = lu_decompose(A.copy())
    assert factors.perm[0] == 0


def test_factors_reconstruct_permuted_matrix():
    A, _ = _well_conditioned(5, seed=3)
    factors = lu_decompose(A, overwrite=False)
    P, L, U = factors.unpack()
    assert np.allclose(P @ A, L @ U)
    assert np.allclose(np.diag(L), 1.0)


def test_rows_are_not_physically_swapped():
    A = np.array([[2.0, 1000.0], [1.0, 1.0]])
    factors = lu_decompose(A.copy())
    # storage row 1 is the first pivot row and keeps its original entries
    assert factors.lu[1, 0] == 1.0
    assert factors.lu[1, 1] == 1.0


def test_right_hand_side_eliminated_alongside():
    A, b = _well_conditioned(4, seed=5)
    A_work, b_work = A.copy(), b.copy()
    factors = lu_decompose(A_work, b_work)
    c = back_substitute(factors.lu, b_work, factors.perm)
    assert np.allclose(A @ c, b)


def test_factors_solve_additional_right_hand_sides():
    A, _ = _well_conditioned(4, seed=9)
    factors = lu_decompose(A, overwrite=False)
    for k in range(4):
        e = np.zeros(4)
        e[k] = 1.0
        assert np.allclose(A @ factors.solve(e), e)


def test_back_substitute_upper_triangular():
    U = np.array([[2.0, 1.0, -1.0], [0.0, 3.0, 2.0], [0.0, 0.0, 4.0]])
    b = np.array([1.0, 13.0, 8.0])
    c = back_substitute(U, b, np.arange(3))
    assert np.allclose(U @ c, b)


def test_singular_matrix_raises_with_column():
    A = np.array([[1.0, 2.0], [2.0, 4.0]])
    with pytest.raises(SingularMatrixError) as excinfo:
        lu_decompose(A)
    assert excinfo.value.column == 1


def test_zero_row_raises_before_elimination():
    A = np.array([[1.0, 2.0], [0.0, 0.0]])
    with pytest.raises(SingularMatrixError) as excinfo:
        solve(A, np.ones(2))
    assert excinfo.value.column is None


def test_singular_error_is_linalg_error():
    with pytest.raises(np.linalg.LinAlgError):
        solve(np.zeros((3, 3)), np.zeros(3))


def test_non_square_matrix_raises():
    with pytest.raises(DimensionMismatchError):
        lu_decompose(np.zeros((2, 3)))


def test_right_hand_side_length_checked():
    A, _ = _well_conditioned(3)
    with pytest.raises(DimensionMismatchError):
        lu_decompose(A, np.ones(4))



def _offset_moment_system(order_count=6):
    x = np.linspace(1900.0, 2020.0, 40)
    y = np.cos((x - 1900.0) / 20.0)
    return assemble_moments(x, y, order_count)


def test_small_pivot_against_huge_row_entries_is_accepted():
    # Both first-column candidates are 1e-18 of their row maxima.
    A = np.array([[1.0, 1.0e18], [1.0, -1.0e18]])
    c = solve(A, np.array([1.0e18, -1.0e18]))
    assert np.allclose(c, [0.0, 1.0])


def test_offset_moment_matrix_factors_without_error():
    A, _ = _offset_moment_system()
    # the first pivot, 40 samples, is ~1e-17 of its row's largest moment
    assert A[0, 0] / np.max(np.abs(A[0])) < 1e-16
    factors = lu_decompose(A, overwrite=False)
    assert np.all(np.isfinite(factors.lu))


def test_offset_moment_system_has_small_backward_error():
    A, B = _offset_moment_system()
    factors = lu_decompose(A, overwrite=False)
    C = factors.solve(B)
    assert np.all(np.isfinite(C))

    P, L, U = factors.unpack()
    residual = np.abs(P @ (A @ C - B))
    bound = np.abs(L) @ np.abs(U) @ np.abs(C) + np.abs(P @ B)
    assert np.all(residual <= 1e-10 * bound)


def test_solve_and_factor_solve_agree_on_ill_conditioned_system():
    A, B = _offset_moment_system()
    assert np.array_equal(solve(A, B), lu_decompose(A, overwrite=False).solve(B))


def test_single_precision_moment_matrix_solves():
    x = np.linspace(0.0, 100.0, 40, dtype=np.float32)
    A, B = assemble_moments(x, np.sin(x / 15.0), 5, dtype=np.float32)
    factors = lu_decompose(A, overwrite=False)
    C = factors.solve(B)
    assert C.dtype == np.float32
    assert np.all(np.isfinite(C))

    P, L, U = factors.unpack()
    residual = np.abs(P @ (A @ C - B))
    bound = np.abs(L) @ np.abs(U) @ np.abs(C) + np.abs(P @ B)
    assert np.all(residual <= 1e-3 * bound)


def test_cancellation_threshold_rejects_near_singular_matrix():
    A = np.array([[1.0, 1.0], [1.0, 1.0 + 1.0e-15]])
    b = np.array([2.0, 2.0])
    assert np.all(np.isfinite(solve(A, b)))
    with pytest.raises(SingularMatrixError) as excinfo:
        solve(A, b, pivot_tol=1e-12)
    assert excinfo.value.column == 1

