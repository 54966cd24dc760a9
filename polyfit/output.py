"""Write fitted coefficients and per-sample residuals to CSV files.

This module is the output boundary between in-memory fits and tabular
artifacts.
"""

from __future__ import annotations

import os
from typing import Tuple

import numpy as np
import pandas as pd

from .reporting import coefficient_table


def _fitted_values_table(result: dict) -> pd.DataFrame:
    """Build the per-sample table of observations, fitted values and residuals."""
    return pd.DataFrame(
        {
            "x": np.asarray(result["x"], dtype=float),
            "y": np.asarray(result["y"], dtype=float),
            "Fitted": np.asarray(result["fitted"], dtype=float),
            "Residual": np.asarray(result["residuals"], dtype=float),
        }
    )


def save_fit_to_csv(result: dict, output_dir: str = "output") -> Tuple[str, str]:
    """Save coefficients and fitted values from a regression result.

    Args:
        result (dict): Output from
            :func:`polyfit.stats.regression.polynomial_regression`.
        output_dir (str): Directory where CSV outputs are written.

    Returns:
        tuple[str, str]: Paths to ``coefficients.csv`` and
        ``fitted_values.csv``.

    Raises:
        ValueError: If the fitted-value columns differ in length.
    """
    lengths = {len(result[key]) for key in ("x", "y", "fitted", "residuals")}
    if len(lengths) != 1:
        raise ValueError("Fitted-value columns must all have the same length.")

    os.makedirs(output_dir, exist_ok=True)

    coefficients_path = os.path.join(output_dir, "coefficients.csv")
    fitted_path = os.path.join(output_dir, "fitted_values.csv")

    coefficient_table(result).to_csv(coefficients_path, index=False)
    _fitted_values_table(result).to_csv(fitted_path, index=False)

    print(f"Saved coefficients to {coefficients_path}")
    print(f"Saved fitted values to {fitted_path}")

    return coefficients_path, fitted_path
