"""
Statistical utilities for polynomial fits.

Modules:
    residuals:
        Residuals and mean squared error over the residual degrees of
        freedom. Depends only on a coefficient vector.

    regression:
        Fit diagnostics (R^2, coefficient standard errors, confidence
        half-widths) built on :class:`polyfit.polynomial.Polynomial`. Import
        it as ``polyfit.stats.regression``; it is not re-exported here
        because the polynomial module itself depends on ``residuals``.
"""

from .residuals import mean_squared_error, residuals

__all__ = ["mean_squared_error", "residuals"]
