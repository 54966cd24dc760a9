"""Reference check of the fitting core against a known quadratic fit.

Fits a quadratic to four samples and compares the coefficients, the fitted
values and the mean squared error with published reference numbers.
"""

from __future__ import annotations

import logging

import numpy as np

from .compare import DEFAULT_RTOL, approx, approx_sequence
from .polynomial import Polynomial
from .reporting import format_vector

logger = logging.getLogger(__name__)

REFERENCE_X = (0.0, 1.0, 2.0, 3.0)
REFERENCE_Y = (2.1, 0.7, -0.1, 1.3)
REFERENCE_COEFFICIENTS = (2.18, -2.42, 0.7)
REFERENCE_VALUES = (2.18, 0.46, 0.14, 1.22)
REFERENCE_MSE = 0.128


def run_reference_check(dtype=np.float64, rtol: float = DEFAULT_RTOL) -> bool:
    """Run the three-stage reference check.

    Args:
        dtype: Floating dtype to fit in.
        rtol: Relative tolerance for every comparison. Single precision needs
            a looser tolerance than the default.

    Returns:
        bool: True when every stage matches its reference.
    """
    x = np.asarray(REFERENCE_X, dtype=dtype)
    y = np.asarray(REFERENCE_Y, dtype=dtype)

    logger.info("Check 1: quadratic fit coefficients")
    p = Polynomial(len(REFERENCE_COEFFICIENTS), dtype=dtype).fit(x, y)
    logger.info(
        "C = %s, expecting %s",
        format_vector(p.coefficients),
        format_vector(REFERENCE_COEFFICIENTS),
    )
    if not approx_sequence(p.coefficients, REFERENCE_COEFFICIENTS, rtol):
        logger.error("Coefficient check failed")
        return False

    logger.info("Check 2: values of the fitted polynomial at the sample points")
    values = p.value(x)
    logger.info(
        "pY = %s, expecting %s",
        format_vector(values),
        format_vector(REFERENCE_VALUES),
    )
    if not approx_sequence(values, REFERENCE_VALUES, rtol):
        logger.error("Value check failed")
        return False

    logger.info("Check 3: mean squared error")
    mse = p.mse(x, y)
    logger.info("mse = %.6g, expecting %.6g", float(mse), REFERENCE_MSE)
    if not approx(mse, REFERENCE_MSE, rtol):
        logger.error("MSE check failed")
        return False

    return True
