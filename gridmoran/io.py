"""I/O, logging, and input loading helpers."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import numpy as np
import scipy.sparse as sp


def ensure_dir(path: str | Path) -> Path:
    """Create ``path`` (and parents) and return it as a `Path`."""
    p = Path(path)
    p.mkdir(parents=True, exist_ok=True)
    return p


def _to_jsonable(obj: Any) -> Any:
    if isinstance(obj, np.generic):
        return obj.item()
    if isinstance(obj, np.ndarray):
        return obj.tolist()
    if isinstance(obj, tuple):
        return list(obj)
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable.")


def write_json(path: str | Path, payload: dict[str, Any]) -> None:
    """Write run statistics; numpy scalars and arrays become plain JSON."""
    out = ensure_dir(Path(path).parent) / Path(path).name
    with out.open("w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2, sort_keys=True, default=_to_jsonable)


def setup_logger(log_path: Path, logger_name: str, run_label: str | None = None) -> logging.Logger:
    """Log to ``log_path`` and stderr; records carry the run label when given."""
    ensure_dir(log_path.parent)
    logger = logging.getLogger(logger_name)
    logger.setLevel(logging.INFO)
    logger.handlers.clear()
    prefix = f"[{run_label}] ".replace("%", "%%") if run_label else ""
    formatter = logging.Formatter(f"%(asctime)s | %(levelname)s | %(name)s | {prefix}%(message)s")
    handlers: list[logging.Handler] = [
        logging.FileHandler(log_path, mode="w", encoding="utf-8"),
        logging.StreamHandler(),
    ]
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    return logger


def close_logger(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)


def load_weights_file(path: str | Path):
    """Load a weights matrix from ``.npy`` (dense) or ``.npz`` (scipy sparse)."""
    weights_path = Path(path)
    if not weights_path.exists():
        raise FileNotFoundError(f"Weights file not found: {weights_path}")
    suffix = weights_path.suffix.lower()
    if suffix == ".npy":
        return np.load(weights_path, allow_pickle=False)
    if suffix == ".npz":
        return sp.load_npz(weights_path)
    raise ValueError(
        f"Unsupported weights format for '{weights_path}'. Use .npy or .npz."
    )


def load_grid_inputs(
    config: dict[str, Any], base_dir: str | Path | None = None
) -> tuple[np.ndarray, Any]:
    """Resolve ``(values, weights)`` from a loaded config.

    Relative ``weights_path`` entries are resolved against ``base_dir``
    (normally the config file's directory).
    """
    if "values" not in config:
        raise KeyError("Config must define 'values'.")
    values = np.asarray(config["values"], dtype=float)

    has_inline = "weights" in config
    has_path = "weights_path" in config
    if has_inline == has_path:
        raise KeyError("Config must define exactly one of 'weights' or 'weights_path'.")
    if has_inline:
        return values, np.asarray(config["weights"], dtype=float)

    weights_path = Path(config["weights_path"])
    if not weights_path.is_absolute() and base_dir is not None:
        weights_path = Path(base_dir) / weights_path
    return values, load_weights_file(weights_path)
