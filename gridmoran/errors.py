"""Exception taxonomy for Moran's I computations."""

from __future__ import annotations


class MoranError(ValueError):
    """Base class for invalid Moran's I inputs."""


class ShapeMismatchError(MoranError):
    """Weights matrix is not N x N for the N flattened observations."""


class InsufficientDataError(MoranError):
    """Fewer than two observations."""


class DomainError(MoranError):
    """Moran's I is undefined (zero variance or zero total weight)."""
