from __future__ import annotations

import numpy as np
import pytest


def _rook_weights(n_rows: int, n_cols: int) -> np.ndarray:
    n = n_rows * n_cols
    w = np.zeros((n, n), dtype=float)
    for r in range(n_rows):
        for c in range(n_cols):
            i = r * n_cols + c
            if r + 1 < n_rows:
                j = (r + 1) * n_cols + c
                w[i, j] = w[j, i] = 1.0
            if c + 1 < n_cols:
                j = r * n_cols + c + 1
                w[i, j] = w[j, i] = 1.0
    return w


@pytest.fixture
def rook_weights():
    """Binary up/down/left/right contiguity for a row-major grid, no wraparound."""
    return _rook_weights


@pytest.fixture
def half_split_grid() -> np.ndarray:
    grid = np.zeros((4, 4), dtype=float)
    grid[:, 2:] = 1.0
    return grid


@pytest.fixture
def checkerboard_grid() -> np.ndarray:
    return np.indices((4, 4)).sum(axis=0) % 2 * 3.0 + 2.0
