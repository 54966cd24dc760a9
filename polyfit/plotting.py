"""
Plotting for polynomial fits.

Each figure has two panels: the samples with the fitted curve evaluated on a
dense grid, and the residuals ``p(x) - y`` against ``x``.
"""

from __future__ import annotations

import os

import matplotlib.pyplot as plt
import numpy as np

from .reporting import format_polynomial


# Sized for the 8x8 inch figure: a 3:1 fit-over-residual split sharing x.
FIT_FIGURE_STYLE = {
    "font.family": "sans-serif",
    "font.size": 11,
    "figure.titlesize": 13,
    "axes.labelsize": 12,
    "legend.fontsize": 10,
    "xtick.direction": "in",
    "ytick.direction": "in",
    "axes.spines.top": False,
    "axes.spines.right": False,
    "axes.grid": True,
    "grid.alpha": 0.3,
    "grid.linewidth": 0.6,
    "legend.frameon": False,
    "figure.constrained_layout.use": True,
    "savefig.dpi": 150,
}


def _dense_grid(x: np.ndarray, n_points: int) -> np.ndarray:
    lo, hi = float(np.min(x)), float(np.max(x))
    if lo == hi:
        lo, hi = lo - 0.5, hi + 0.5
    pad = 0.02 * (hi - lo)
    return np.linspace(lo - pad, hi + pad, n_points)


def plot_fit(
    poly,
    x,
    y,
    output_dir: str = "output",
    filename: str = "polynomial_fit.png",
    n_points: int = 400,
    title: str | None = None,
) -> str:
    """Save a two-panel figure of a fitted polynomial and its residuals.

    Args:
        poly: Fitted :class:`polyfit.polynomial.Polynomial`.
        x: Sample ``x`` values.
        y: Sample ``y`` values.
        output_dir: Directory for the PNG.
        filename: Output file name.
        n_points: Number of points used to draw the fitted curve.
        title: Figure title; defaults to the polynomial expression.

    Returns:
        str: Path of the saved PNG.

    Raises:
        ValueError: If there are no samples or ``x`` and ``y`` differ in length.
    """
    x = np.asarray(x, dtype=float)
    y = np.asarray(y, dtype=float)
    if x.size == 0 or x.shape != y.shape:
        raise ValueError("Plotting requires equal-length, non-empty sample arrays.")

    os.makedirs(output_dir, exist_ok=True)
    x_dense = _dense_grid(x, n_points)
    y_dense = np.asarray(poly.value(x_dense), dtype=float)
    resid = np.asarray(poly.value(x), dtype=float) - y
    out_path = os.path.join(output_dir, filename)

    with plt.rc_context(FIT_FIGURE_STYLE):
        _draw_fit(poly, x, y, x_dense, y_dense, resid, title, out_path)
    return out_path


def _draw_fit(poly, x, y, x_dense, y_dense, resid, title, out_path):
    fig, (ax1, ax2) = plt.subplots(
        2, 1, figsize=(8, 8), sharex=True, gridspec_kw={"height_ratios": [3, 1]}
    )
    fig.suptitle(title or f"p(x) = {format_polynomial(poly.coefficients, precision=4)}")

    ax1.plot(
        x,
        y,
        "o",
        markersize=6,
        markerfacecolor="white",
        markeredgecolor="black",
        label="Samples",
    )
    ax1.plot(x_dense, y_dense, color="black", linewidth=2.0, label=f"Degree {poly.degree} fit")
    ax1.set_ylabel("y")
    ax1.legend(loc="best")

    ax2.axhline(0.0, color="black", linewidth=1.0, linestyle="--")
    ax2.plot(x, resid, "s", color="black", markersize=5)
    ax2.set_xlabel("x")
    ax2.set_ylabel("Residual")

    fig.savefig(out_path)
    plt.close(fig)
