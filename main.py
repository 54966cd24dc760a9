#!/usr/bin/env python3
"""
Command-line entry point for least-squares polynomial fitting.
"""

# Usage:
#   python main.py selftest [--dtype float32]
#   python main.py fit samples.csv --order 3 [--x-col x] [--y-col y] [--plot]
#
# `fit` loads paired samples, fits a polynomial with `--order` coefficients
# (degree plus one), prints the coefficients with their standard errors and
# the MSE over the residual degrees of freedom, and exports CSV tables.

import argparse
import logging
import os
import sys
import time

import numpy as np

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from polyfit.compare import DEFAULT_RTOL
from polyfit.data_processing import load_samples
from polyfit.exceptions import PolyfitError
from polyfit.output import save_fit_to_csv
from polyfit.plotting import plot_fit
from polyfit.reporting import print_fit_summary
from polyfit.selftest import run_reference_check
from polyfit.stats.regression import polynomial_regression

DTYPES = {"float32": np.float32, "float64": np.float64, "longdouble": np.longdouble}


def configure_logging(log_file=None):
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode="w"))
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=handlers,
        force=True,
    )


def build_parser():
    parser = argparse.ArgumentParser(
        description="Least-squares polynomial curve fitting."
    )
    parser.add_argument("--log-file", default=None, help="Also write the log here.")
    sub = parser.add_subparsers(dest="command", required=True)

    check = sub.add_parser("selftest", help="Run the reference quadratic fit check.")
    check.add_argument("--dtype", choices=sorted(DTYPES), default="float64")
    check.add_argument(
        "--rtol",
        type=float,
        default=None,
        help=f"Relative tolerance (default {DEFAULT_RTOL:g}; 1e-3 for float32).",
    )

    fit = sub.add_parser("fit", help="Fit a polynomial to samples from a CSV file.")
    fit.add_argument("csv", help="CSV file with a header row.")
    fit.add_argument(
        "--order",
        type=int,
        required=True,
        help="Number of coefficients (polynomial degree plus one).",
    )
    fit.add_argument("--x-col", default="x")
    fit.add_argument("--y-col", default="y")
    fit.add_argument("--dtype", choices=sorted(DTYPES), default="float64")
    fit.add_argument("--output-dir", default="output")
    fit.add_argument("--plot", action="store_true", help="Save a fit/residual figure.")
    return parser


def run_selftest(args):
    rtol = args.rtol
    if rtol is None:
        rtol = 1e-3 if args.dtype == "float32" else DEFAULT_RTOL
    logging.info("Running reference check in %s (rtol=%g)", args.dtype, rtol)
    if not run_reference_check(dtype=DTYPES[args.dtype], rtol=rtol):
        logging.error("FAILED!")
        return 1
    logging.info("PASSED!")
    return 0


def run_fit(args):
    start_time = time.time()
    logging.info("Loading samples from %s", args.csv)
    try:
        x, y = load_samples(args.csv, x_col=args.x_col, y_col=args.y_col)
    except (OSError, ValueError) as e:
        logging.error("Could not load samples: %s", e)
        return 1
    logging.info("Loaded %d finite sample pairs", len(x))

    step_start = time.time()
    try:
        result = polynomial_regression(x, y, args.order, dtype=DTYPES[args.dtype])
    except (PolyfitError, ValueError) as e:
        logging.error("Fit failed: %s", e)
        return 1
    logging.info("Fit completed in %.4f seconds", time.time() - step_start)

    print_fit_summary(result)

    coefficients_csv, fitted_csv = save_fit_to_csv(result, args.output_dir)
    logging.info("Generated output files:")
    logging.info("  - Coefficients: %s", coefficients_csv)
    logging.info("  - Fitted values: %s", fitted_csv)

    if args.plot:
        plot_path = plot_fit(result["polynomial"], result["x"], result["y"], args.output_dir)
        logging.info("  - Figure: %s", plot_path)

    logging.info(f"Total execution time: {time.time() - start_time:.2f} seconds")
    return 0


def main(argv=None):
    args = build_parser().parse_args(argv)
    configure_logging(args.log_file)
    if args.command == "selftest":
        return run_selftest(args)
    return run_fit(args)


if __name__ == "__main__":
    sys.exit(main())
