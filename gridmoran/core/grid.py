"""Coercion of observation grids into flat value vectors."""

from __future__ import annotations

import numpy as np

from gridmoran.core.types import NAN_POLICIES
from gridmoran.errors import InsufficientDataError


def flatten_grid(
    values: np.ndarray, nan_policy: str = "raise"
) -> tuple[np.ndarray, tuple[int, ...]]:
    """Flatten an observation grid in row-major order.

    Args:
        values: R x C grid, or a 1D sequence that is already flattened.
        nan_policy: ``"raise"`` rejects NaN/inf; ``"zero"`` replaces them
            with 0.0, matching how missing raster cells are usually filled.

    Returns:
        ``(x, shape)`` where ``x`` is a new float vector of length R*C and
        ``shape`` is the original grid shape.
    """
    if nan_policy not in NAN_POLICIES:
        raise ValueError(f"nan_policy must be one of {NAN_POLICIES}, got '{nan_policy}'.")

    arr = np.asarray(values, dtype=float)
    if arr.ndim > 2:
        raise ValueError(f"values must be a 1D or 2D grid, got {arr.ndim}D.")
    shape = tuple(int(s) for s in arr.shape)
    x = np.array(arr, dtype=float, order="C").ravel(order="C")

    finite = np.isfinite(x)
    if not finite.all():
        if nan_policy == "raise":
            raise ValueError(
                f"values contain {int((~finite).sum())} NaN/inf entries; "
                "use nan_policy='zero' to fill them."
            )
        x[~finite] = 0.0
    return x, shape


def check_min_observations(n: int, minimum: int = 2) -> int:
    if isinstance(n, (bool, np.bool_)) or not isinstance(n, (int, np.integer)):
        raise ValueError(f"Observation count must be an integer, got {n!r}.")
    n_i = int(n)
    if n_i < minimum:
        raise InsufficientDataError(
            f"Moran's I needs at least {minimum} observations, got {n_i}."
        )
    return n_i
