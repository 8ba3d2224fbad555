"""Spatial weights coercion and normalization."""

from __future__ import annotations

import numpy as np
import scipy.sparse as sp

from gridmoran.errors import ShapeMismatchError


def as_weights(weights) -> sp.csr_matrix:
    """Coerce a dense or sparse square weights matrix to float CSR.

    Args:
        weights: numpy array, nested list, or scipy sparse matrix (N x N).

    Returns:
        A CSR copy; the caller's matrix is never modified.
    """
    if weights is None:
        raise TypeError("weights must be a 2D numeric matrix, got None.")
    if sp.issparse(weights):
        w = sp.csr_matrix(weights, dtype=float, copy=True)
    else:
        arr = np.asarray(weights, dtype=float)
        if arr.ndim != 2:
            raise ShapeMismatchError(f"weights must be 2D, got {arr.ndim}D.")
        w = sp.csr_matrix(arr)

    if w.shape[0] != w.shape[1]:
        raise ShapeMismatchError(f"weights must be square, got shape {w.shape}.")
    if not np.isfinite(w.data).all():
        raise ValueError("weights contain NaN or infinite values.")
    return w


def row_standardize(w: sp.spmatrix) -> sp.csr_matrix:
    """Scale each row to sum to one; all-zero rows stay zero."""
    w_csr = sp.csr_matrix(w, dtype=float, copy=True)
    row_sum = np.asarray(w_csr.sum(axis=1)).ravel()
    scale = np.zeros_like(row_sum, dtype=float)
    nz = row_sum != 0
    scale[nz] = 1.0 / row_sum[nz]
    if np.any(nz):
        w_csr = sp.csr_matrix(sp.diags(scale).dot(w_csr))
    return w_csr


def weights_sum(w: sp.spmatrix) -> float:
    return float(w.sum())


def check_weights_shape(w: sp.spmatrix, n: int) -> None:
    if w.shape != (n, n):
        raise ShapeMismatchError(
            f"weights shape {w.shape} does not match {n} observations; expected ({n}, {n})."
        )
