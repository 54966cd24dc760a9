import numpy as np
import pytest

from polyfit.exceptions import DimensionMismatchError
from polyfit.stats.residuals import mean_squared_error, residuals

REFERENCE_COEFFICIENTS = [2.18, -2.42, 0.7]


def test_reference_mse(reference_samples):
    x, y = reference_samples
    assert np.isclose(mean_squared_error(REFERENCE_COEFFICIENTS, x, y), 0.128)


def test_residual_sign_is_fit_minus_observation(reference_samples):
    x, y = reference_samples
    r = residuals(REFERENCE_COEFFICIENTS, x, y)
    assert np.allclose(r, [0.08, -0.24, 0.24, -0.08])


def test_mse_zero_without_spare_degrees_of_freedom():
    # far from the data, but M <= N
    assert mean_squared_error([100.0, 0.0, 0.0], [0.0, 1.0, 2.0], [1.0, 5.0, -3.0]) == 0
    assert mean_squared_error([100.0, 0.0, 0.0], [0.0, 1.0], [1.0, 5.0]) == 0
    assert mean_squared_error([1.0], [], []) == 0


def test_mse_divides_by_degrees_of_freedom():
    # constant 0 against y = [1, 1, 1, 1]: SSE = 4, dof = 4 - 1
    assert np.isclose(mean_squared_error([0.0], [0, 1, 2, 3], [1, 1, 1, 1]), 4.0 / 3.0)


def test_mse_keeps_coefficient_dtype(reference_samples):
    x, y = reference_samples
    c = np.asarray(REFERENCE_COEFFICIENTS, dtype=np.float32)
    assert mean_squared_error(c, x, y).dtype == np.float32


def test_integer_coefficients_are_promoted():
    assert np.isclose(mean_squared_error([0, 1], [0, 1, 2, 3], [0, 1, 2, 4]), 0.5)


def test_mismatched_lengths_raise():
    with pytest.raises(DimensionMismatchError):
        mean_squared_error(REFERENCE_COEFFICIENTS, [0.0, 1.0], [1.0])
    with pytest.raises(DimensionMismatchError):
        residuals(REFERENCE_COEFFICIENTS, [0.0, 1.0], [1.0])
