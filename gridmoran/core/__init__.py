"""Core compute subpackage."""

from gridmoran.core.compute import compute_moran, expected_moran, morans_i
from gridmoran.core.grid import flatten_grid
from gridmoran.core.types import MoranConfig, MoranResult, PermutationResult

__all__ = [
    "MoranConfig",
    "MoranResult",
    "PermutationResult",
    "compute_moran",
    "expected_moran",
    "flatten_grid",
    "morans_i",
]
