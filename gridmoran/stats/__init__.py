"""Statistical inference for Moran's I."""

from gridmoran.stats.permutation import perm_null_moran, plot_null_distribution

__all__ = [
    "perm_null_moran",
    "plot_null_distribution",
]
