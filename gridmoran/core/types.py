"""Typed configuration and result containers for Moran's I computations."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import numpy as np

NAN_POLICIES: tuple[str, ...] = ("raise", "zero")
ALTERNATIVES: tuple[str, ...] = ("greater", "less", "two-sided")


def _is_count(value: Any) -> bool:
    if isinstance(value, (bool, np.bool_)):
        return False
    return isinstance(value, (int, np.integer)) and value >= 0


@dataclass(frozen=True)
class MoranConfig:
    """Options for one Moran's I computation."""

    row_standardize: bool = False
    nan_policy: str = "raise"
    n_perm: int = 0
    seed: int = 0
    alternative: str = "greater"

    def __post_init__(self) -> None:
        if self.nan_policy not in NAN_POLICIES:
            raise ValueError(
                f"nan_policy must be one of {NAN_POLICIES}, got '{self.nan_policy}'."
            )
        if self.alternative not in ALTERNATIVES:
            raise ValueError(
                f"alternative must be one of {ALTERNATIVES}, got '{self.alternative}'."
            )
        if not _is_count(self.n_perm):
            raise ValueError(f"n_perm must be a non-negative integer, got {self.n_perm!r}.")
        if not _is_count(self.seed):
            raise ValueError(f"seed must be a non-negative integer, got {self.seed!r}.")


@dataclass(frozen=True)
class MoranResult:
    """Output of `compute_moran`.

    - `I`: the Moran's I statistic.
    - `expected_I`: -1/(N-1), the expectation under no autocorrelation.
    - `S0`: sum of all (possibly row-standardized) weights.
    """

    I: float
    expected_I: float
    n: int
    S0: float
    grid_shape: tuple[int, ...]
    row_standardized: bool
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class PermutationResult:
    """Output of `perm_null_moran`."""

    null_I: np.ndarray
    I_obs: float
    expected_I: float
    p_sim: float
    z_sim: float
    alternative: str
    n_perm: int
    seed: int
