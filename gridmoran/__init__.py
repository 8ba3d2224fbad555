"""gridmoran public API."""

from gridmoran._version import __version__
from gridmoran.core.compute import compute_moran, expected_moran, morans_i
from gridmoran.core.types import MoranConfig, MoranResult, PermutationResult
from gridmoran.errors import (
    DomainError,
    InsufficientDataError,
    MoranError,
    ShapeMismatchError,
)
from gridmoran.stats.permutation import perm_null_moran


def run_smoke(*args, **kwargs):
    """Lazy wrapper to avoid importing pandas/matplotlib at import time."""
    from gridmoran.cli import smoke_moran_main as _smoke_moran_main

    return _smoke_moran_main(*args, **kwargs)


__all__ = [
    "__version__",
    "morans_i",
    "compute_moran",
    "expected_moran",
    "perm_null_moran",
    "MoranConfig",
    "MoranResult",
    "PermutationResult",
    "MoranError",
    "ShapeMismatchError",
    "InsufficientDataError",
    "DomainError",
    "run_smoke",
]
