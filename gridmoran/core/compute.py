"""Global Moran's I computation (no plotting, no filesystem I/O)."""

from __future__ import annotations

import numpy as np
import scipy.sparse as sp

from gridmoran.core.grid import check_min_observations, flatten_grid
from gridmoran.core.types import MoranConfig, MoranResult
from gridmoran.errors import DomainError
from gridmoran.weights import (
    as_weights,
    check_weights_shape,
    row_standardize as _row_standardize,
    weights_sum,
)


def expected_moran(n: int) -> float:
    """Expected Moran's I under no spatial autocorrelation, -1/(n-1)."""
    n_i = check_min_observations(n)
    return -1.0 / float(n_i - 1)


def _prepare(
    values: np.ndarray,
    weights,
    *,
    row_standardize: bool,
    nan_policy: str,
) -> tuple[np.ndarray, sp.csr_matrix, float, float, tuple[int, ...]]:
    """Validate inputs and return ``(z, w, s0, den, shape)``."""
    x, shape = flatten_grid(values, nan_policy=nan_policy)
    n = check_min_observations(x.size)

    w = as_weights(weights)
    check_weights_shape(w, n)
    if row_standardize:
        w = _row_standardize(w)

    z = x - float(np.mean(x))
    den = float(np.dot(z, z))
    if np.ptp(x) == 0.0 or den <= 0.0:
        raise DomainError("Variance of values is zero; Moran's I undefined.")

    s0 = weights_sum(w)
    # Cancelling signed weights leave rounding residue in S0.
    s0_tol = np.finfo(float).eps * n * float(np.abs(w.data).sum())
    if abs(s0) <= s0_tol:
        raise DomainError("Sum of weights S0 is zero; Moran's I undefined.")
    return z, w, s0, den, shape


def _moran_from_centered(z: np.ndarray, w: sp.csr_matrix, s0: float, den: float) -> float:
    num = float(np.dot(z, w.dot(z)))
    return float((z.size / s0) * (num / den))


def morans_i(
    values: np.ndarray,
    weights,
    row_standardize: bool = False,
    nan_policy: str = "raise",
) -> float:
    """Compute the global Moran's I statistic.

    ``I = (N / S0) * sum_ij w_ij d_i d_j / sum_i d_i^2`` with ``d = x - mean(x)``
    and ``S0 = sum_ij w_ij``.

    Args:
        values: R x C observation grid, flattened row-major (a 1D vector is
            taken as already flattened).
        weights: N x N weights matrix, dense or scipy sparse, with
            N = R * C. Entry (i, j) is the influence of unit j on unit i.
        row_standardize: Whether to row-standardize the weights first.
        nan_policy: ``"raise"`` or ``"zero"``; see `flatten_grid`.

    Returns:
        Moran's I value.

    Raises:
        InsufficientDataError: fewer than two observations.
        ShapeMismatchError: weights are not N x N.
        DomainError: constant values or zero total weight.
    """
    z, w, s0, den, _ = _prepare(
        values, weights, row_standardize=row_standardize, nan_policy=nan_policy
    )
    return _moran_from_centered(z, w, s0, den)


def compute_moran(
    values: np.ndarray,
    weights,
    config: MoranConfig | None = None,
) -> MoranResult:
    """Compute Moran's I and return it with its bookkeeping quantities."""
    cfg = config if config is not None else MoranConfig()
    z, w, s0, den, shape = _prepare(
        values,
        weights,
        row_standardize=cfg.row_standardize,
        nan_policy=cfg.nan_policy,
    )
    return MoranResult(
        I=_moran_from_centered(z, w, s0, den),
        expected_I=expected_moran(z.size),
        n=int(z.size),
        S0=s0,
        grid_shape=shape,
        row_standardized=bool(cfg.row_standardize),
        metadata={"nan_policy": cfg.nan_policy, "nnz_weights": int(w.nnz)},
    )
