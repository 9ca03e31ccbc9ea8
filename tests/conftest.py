"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


def symmetric_from_pairs(pairs, n_features):
    """Symmetric matrix whose strict lower triangle is ``pairs``."""
    mat = np.ones((n_features, n_features))
    rows, cols = np.tril_indices(n_features, k=-1)
    mat[rows, cols] = pairs
    mat[cols, rows] = pairs
    return mat


@pytest.fixture
def make_symmetric():
    return symmetric_from_pairs
