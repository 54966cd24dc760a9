import numpy as np
import pytest

from polyfit.exceptions import SingularMatrixError
from polyfit.moments import assemble_moments
from polyfit.stats.regression import HAVE_SCIPY, polynomial_regression


def test_reference_regression_diagnostics(reference_samples):
    x, y = reference_samples
    fit = polynomial_regression(x, y, 3)

    assert np.allclose(fit["coefficients"], [2.18, -2.42, 0.7])
    assert fit["n"] == 4
    assert fit["dof"] == 1
    assert np.isclose(fit["mse"], 0.128)
    assert np.isclose(fit["sse"], 0.128)
    assert np.isclose(fit["sst"], 2.6)
    assert np.isclose(fit["r2"], 1.0 - 0.128 / 2.6)
    assert np.allclose(fit["residuals"], fit["fitted"] - y)


def test_standard_errors_from_inverse_moment_matrix(reference_samples):
    x, y = reference_samples
    fit = polynomial_regression(x, y, 3)
    A, _ = assemble_moments(x, y, 3)
    expected = np.sqrt(0.128 * np.diag(np.linalg.inv(A)))
    assert np.allclose(fit["se"], expected)
    if HAVE_SCIPY:
        assert np.all(fit["ci95"] > fit["se"])
    else:
        assert np.all(np.isnan(fit["ci95"]))


def test_exact_quadratic_has_unit_r2():
    x = np.linspace(0.0, 4.0, 9)
    y = 1.0 + 2.0 * x - 0.5 * x**2
    fit = polynomial_regression(x, y, 3)
    assert np.isclose(fit["r2"], 1.0)
    assert fit["mse"] < 1e-20
    assert np.allclose(fit["coefficients"], [1.0, 2.0, -0.5])


def test_nonfinite_pairs_are_dropped(reference_samples):
    x, y = reference_samples
    x = np.append(x, [np.nan, 4.0])
    y = np.append(y, [1.0, np.inf])
    fit = polynomial_regression(x, y, 3)
    assert fit["n"] == 4
    assert np.allclose(fit["coefficients"], [2.18, -2.42, 0.7])


def test_insufficient_points_raise():
    with pytest.raises(ValueError, match="Insufficient valid data"):
        polynomial_regression([0.0, 1.0], [1.0, 2.0], 3)


def test_min_points_can_be_raised(reference_samples):
    x, y = reference_samples
    with pytest.raises(ValueError):
        polynomial_regression(x, y, 3, min_points=5)


def test_constant_data_fits_with_undefined_r2():
    fit = polynomial_regression([0.0, 1.0, 2.0, 3.0], [1.0, 1.0, 1.0, 1.0], 2)
    assert np.allclose(fit["coefficients"], [1.0, 0.0], atol=1e-12)
    assert fit["sst"] == 0.0
    assert np.isnan(fit["r2"])
    assert fit["mse"] < 1e-20
    assert np.allclose(fit["fitted"], 1.0)


def test_exact_fit_warns_and_reports_zero_mse():
    with pytest.warns(UserWarning, match="no residual degrees of freedom"):
        fit = polynomial_regression([0.0, 1.0, 2.0], [1.0, 0.0, 5.0], 3)
    assert fit["mse"] == 0.0
    assert np.all(np.isnan(fit["se"]))


def test_repeated_x_values_are_singular():
    with pytest.raises(SingularMatrixError):
        polynomial_regression([1.0, 1.0, 2.0, 2.0], [0.0, 1.0, 2.0, 3.0], 3)
