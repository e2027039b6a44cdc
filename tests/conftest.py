from __future__ import annotations

import numpy as np
import pytest


@pytest.fixture
def mixed_scalar():
    """One parameter, three subjects, hand-computed lambda = 1/4."""
    X1 = np.array([1.0, 2.0, 3.0])
    X2 = np.array([1.0, 2.0, 5.0])
    Xodd = np.array([0.0, 0.0, 0.0])
    Xeven = np.array([0.0, 0.0, 1.0])
    return X1, X2, Xodd, Xeven


@pytest.fixture
def matrix_population():
    """Four (3, 3, 6) arrays with a constant unit diagonal."""
    rng = np.random.default_rng(0)
    arrays = []
    base = rng.normal(size=(3, 3, 6))
    for _ in range(4):
        X = base + 0.5 * rng.normal(size=(3, 3, 6))
        X = (X + X.transpose(1, 0, 2)) / 2.0
        idx = np.arange(3)
        X[idx, idx, :] = 1.0
        arrays.append(X)
    return tuple(arrays)
