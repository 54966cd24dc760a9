"""Format fitted polynomials and their diagnostics for display and export.

This module is used after fitting to present coefficients consistently on the
console and in exported tables.
"""

from __future__ import annotations

import math
from typing import Iterable

import numpy as np
import pandas as pd


def error_decimals(se: float, sig_figs: int = 2) -> int | None:
    """Decimal places that show ``se`` to ``sig_figs`` significant figures.

    Returns None when ``se`` is not a positive finite number, which is the
    case for exact and under-determined fits.
    """
    se = float(se)
    if not np.isfinite(se) or se <= 0:
        return None
    return max(0, sig_figs - 1 - math.floor(math.log10(se)))


def format_vector(values: Iterable[float], precision: int = 6) -> str:
    """Join values with single spaces using ``precision`` significant digits."""
    return " ".join(f"{float(v):.{precision}g}" for v in values)


def format_polynomial(coefficients: Iterable[float], precision: int = 6, var: str = "x") -> str:
    """Render coefficients (lowest power first) as ``c0 + c1*x + c2*x^2``.

    Zero coefficients are omitted unless every coefficient is zero.
    """
    terms = []
    for power, c in enumerate(coefficients):
        c = float(c)
        if c == 0:
            continue
        magnitude = f"{abs(c):.{precision}g}"
        if power == 0:
            body = magnitude
        elif power == 1:
            body = f"{magnitude}*{var}"
        else:
            body = f"{magnitude}*{var}^{power}"
        if not terms:
            terms.append(f"-{body}" if c < 0 else body)
        else:
            terms.append(f"- {body}" if c < 0 else f"+ {body}")
    return " ".join(terms) if terms else "0"


def format_coefficient_with_error(value: float, se: float, sig_figs: int = 2) -> str:
    """Format a coefficient as ``value ± se``.

    The standard error keeps ``sig_figs`` significant figures and the
    coefficient is printed to the same decimal place. Without a usable
    standard error only the value is shown, to six significant digits.
    """
    decimals = error_decimals(se, sig_figs)
    if decimals is None:
        return f"{float(value):.6g}"
    return f"{float(value):.{decimals}f} ± {float(se):.{decimals}f}"


def coefficient_table(result: dict) -> pd.DataFrame:
    """Tabulate coefficients from a ``polynomial_regression`` result.

    Returns:
        pandas.DataFrame: Columns ``Power``, ``Coefficient``, ``Standard
        Error``, ``CI95 Half-Width`` and ``Reported``.
    """
    coefficients = np.asarray(result["coefficients"], dtype=float)
    n = len(coefficients)
    se = np.asarray(result.get("se", np.full(n, np.nan)), dtype=float)
    ci95 = np.asarray(result.get("ci95", np.full(n, np.nan)), dtype=float)
    return pd.DataFrame(
        {
            "Power": np.arange(n),
            "Coefficient": coefficients,
            "Standard Error": se,
            "CI95 Half-Width": ci95,
            "Reported": [
                format_coefficient_with_error(c, s) for c, s in zip(coefficients, se)
            ],
        }
    )


def fit_summary_lines(result: dict) -> list[str]:
    """Build a human-readable summary of a ``polynomial_regression`` result."""
    coefficients = result["coefficients"]
    lines = [
        f"Polynomial (degree {len(coefficients) - 1}): p(x) = {format_polynomial(coefficients)}",
        f"C = {format_vector(coefficients)}",
    ]
    for _, row in coefficient_table(result).iterrows():
        lines.append(f"  c{int(row['Power'])} = {row['Reported']}")
    lines.append(
        f"n = {result['n']}, dof = {result['dof']}, "
        f"mse = {result['mse']:.6g}, R^2 = {result['r2']:.6f}"
    )
    return lines


def print_fit_summary(result: dict) -> None:
    """Print :func:`fit_summary_lines` to stdout."""
    print("\nFit summary:")
    for line in fit_summary_lines(result):
        print(f"  {line}")
