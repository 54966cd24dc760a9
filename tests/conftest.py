"""Pytest configuration for repository-relative imports."""

import os
import sys

import matplotlib
import numpy as np
import pytest

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

matplotlib.use("Agg")


@pytest.fixture
def reference_samples():
    """Four samples with a known least-squares quadratic."""
    x = np.array([0.0, 1.0, 2.0, 3.0])
    y = np.array([2.1, 0.7, -0.1, 1.3])
    return x, y
