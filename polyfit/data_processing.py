"""
Loads paired samples from CSV files and DataFrames.
"""

import numpy as np
import pandas as pd


def samples_from_frame(df, x_col="x", y_col="y", drop_nonfinite=True):
    """Extract paired ``(x, y)`` samples from a DataFrame.

    Both columns are coerced to numeric; unparseable cells become NaN. Rows
    where either value is missing or non-finite are dropped unless
    ``drop_nonfinite`` is False.

    Args:
        df: :class:`pandas.DataFrame` holding the samples.
        x_col: Column with independent-axis values.
        y_col: Column with observed values.
        drop_nonfinite: Drop incomplete rows instead of passing NaN through.

    Returns:
        tuple[numpy.ndarray, numpy.ndarray]: Float arrays of equal length.

    Raises:
        ValueError: If either column is missing.
    """
    missing = [col for col in (x_col, y_col) if col not in df.columns]
    if missing:
        raise ValueError(f"Sample data is missing column(s): {', '.join(missing)}")

    x = pd.to_numeric(df[x_col], errors="coerce").to_numpy(dtype=float)
    y = pd.to_numeric(df[y_col], errors="coerce").to_numpy(dtype=float)

    if drop_nonfinite:
        valid = np.isfinite(x) & np.isfinite(y)
        x = x[valid]
        y = y[valid]

    return x, y


def load_samples(filepath, x_col="x", y_col="y", drop_nonfinite=True):
    """Load paired samples from a CSV file with a header row.

    Column names are stripped of surrounding whitespace before lookup, so
    spreadsheet exports such as ``"x , y"`` still resolve.
    """
    df = pd.read_csv(filepath)
    df.columns = [str(col).strip() for col in df.columns]
    return samples_from_frame(df, x_col, y_col, drop_nonfinite=drop_nonfinite)
