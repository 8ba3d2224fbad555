"""Command-line interfaces for gridmoran smoke tests."""

from __future__ import annotations

import argparse
import logging
import math
from pathlib import Path
from typing import Iterable

import numpy as np
import pandas as pd

from gridmoran.config import load_json_config, moran_config_from_dict
from gridmoran.core.compute import compute_moran, expected_moran
from gridmoran.core.types import MoranConfig
from gridmoran.io import (
    close_logger,
    ensure_dir,
    load_grid_inputs,
    setup_logger,
    write_json,
)
from gridmoran.stats.permutation import perm_null_moran, plot_null_distribution


def _safe_moran(
    *,
    values: np.ndarray,
    weights,
    config: MoranConfig,
    logger: logging.Logger,
    label: str,
) -> dict[str, float | int]:
    """Compute Moran's I with explicit warning for expected data issues."""
    try:
        res = compute_moran(values, weights, config)
    except (ValueError, TypeError) as exc:
        logger.warning("Moran skipped: label=%s reason=%s", label, exc)
        return {"moran_I": float("nan"), "expected_I": float("nan"), "n": 0, "S0": float("nan")}
    return {
        "moran_I": res.I,
        "expected_I": res.expected_I,
        "n": res.n,
        "S0": res.S0,
    }


def smoke_moran_main(argv: Iterable[str] | None = None) -> int:
    """Run Moran's I smoke test on a JSON-described grid.

    Args:
        argv: Command-line arguments (if None, uses sys.argv).

    Returns:
        Exit code (0 for success).
    """
    parser = argparse.ArgumentParser(description="gridmoran Moran's I smoke test")
    parser.add_argument("--config", required=True, help="Path to .json run config")
    parser.add_argument("--outdir", default=".", help="Output directory root")
    parser.add_argument(
        "--n-perm", type=int, default=None, help="Override config n_perm"
    )
    parser.add_argument("--seed", type=int, default=None, help="Override config seed")
    args = parser.parse_args(list(argv) if argv is not None else None)

    config_path = Path(args.config)
    raw = load_json_config(config_path)
    overrides = {}
    if args.n_perm is not None:
        overrides["n_perm"] = args.n_perm
    if args.seed is not None:
        overrides["seed"] = args.seed
    cfg = moran_config_from_dict({**raw, **overrides})
    label = str(raw.get("label", config_path.stem))

    outdir = Path(args.outdir)
    ensure_dir(outdir)
    logger = setup_logger(outdir / "logs" / "moran.log", "gridmoran.smoke", run_label=label)
    try:
        values, weights = load_grid_inputs(raw, base_dir=config_path.parent)
        logger.info(
            "Loaded label=%s values_shape=%s weights_shape=%s",
            label,
            tuple(values.shape),
            tuple(np.shape(weights)),
        )

        stats: dict[str, object] = {
            "label": label,
            "row_standardize": bool(cfg.row_standardize),
        }
        stats.update(
            _safe_moran(values=values, weights=weights, config=cfg, logger=logger, label=label)
        )

        if cfg.n_perm > 0 and math.isfinite(stats["moran_I"]):
            perm = perm_null_moran(
                values,
                weights,
                n_perm=cfg.n_perm,
                seed=cfg.seed,
                alternative=cfg.alternative,
                row_standardize=cfg.row_standardize,
                nan_policy=cfg.nan_policy,
            )
            stats.update(
                {
                    "p_sim": perm.p_sim,
                    "z_sim": perm.z_sim,
                    "n_perm": perm.n_perm,
                    "alternative": perm.alternative,
                }
            )
            fig_dir = outdir / "figures"
            ensure_dir(fig_dir)
            plot_null_distribution(
                perm.null_I,
                perm.I_obs,
                fig_dir / "null_moran.png",
                title=f"Null Moran's I: {label}",
            )
            logger.info("Permutation done: n_perm=%d p_sim=%.4g", perm.n_perm, perm.p_sim)

        write_json(outdir / "stats.json", stats)
        pd.DataFrame([stats]).to_csv((outdir / "moran.csv").as_posix(), index=False)
        logger.info("Wrote %s", (outdir / "stats.json").as_posix())
    finally:
        close_logger(logger)

    print(f"label={label}")
    print(f"moran_I={stats['moran_I']}")
    if math.isfinite(stats["moran_I"]):
        print(f"expected_I={expected_moran(stats['n'])}")
    if "p_sim" in stats:
        print(f"p_sim={stats['p_sim']}")
    return 0


def main(argv: Iterable[str] | None = None) -> int:
    """Main CLI entry point.

    Args:
        argv: Command-line arguments (if None, uses sys.argv).

    Returns:
        Exit code.
    """
    parser = argparse.ArgumentParser(description="gridmoran CLI")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("smoke-moran", help="Run Moran's I smoke test")

    args, remainder = parser.parse_known_args(list(argv) if argv is not None else None)
    if args.command == "smoke-moran":
        return smoke_moran_main(remainder)
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
