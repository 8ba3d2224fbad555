"""JSON run configs for Moran's I smoke runs."""

from __future__ import annotations

import json
from dataclasses import fields
from pathlib import Path
from typing import Any

from gridmoran.core.types import MoranConfig

# Keys describing the data itself; everything else must map onto MoranConfig.
INPUT_KEYS: tuple[str, ...] = ("values", "weights", "weights_path", "label")


def load_json_config(path: str | Path) -> dict[str, Any]:
    """Read a Moran run config: a JSON object holding the grid and run options.

    Raises:
        FileNotFoundError: the file does not exist.
        ValueError: wrong suffix, malformed JSON, or a non-object root.
    """
    config_path = Path(path)
    if not config_path.is_file():
        raise FileNotFoundError(f"Moran run config not found: {config_path}")
    if config_path.suffix.lower() != ".json":
        raise ValueError(
            f"Moran run config '{config_path.name}' has suffix '{config_path.suffix}'. "
            "Use a .json config file."
        )

    text = config_path.read_text(encoding="utf-8")
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ValueError(
            f"Moran run config '{config_path.name}' is not valid JSON at line {exc.lineno}, "
            f"column {exc.colno}: {exc.msg}"
        ) from exc

    if not isinstance(data, dict):
        raise ValueError(
            f"Moran run config '{config_path.name}' must be a JSON object mapping "
            f"option names to values; expected JSON object, got {type(data).__name__}."
        )
    return data


def moran_config_from_dict(data: dict[str, Any]) -> MoranConfig:
    """Build a `MoranConfig` from a loaded config, ignoring input keys."""
    allowed = {f.name for f in fields(MoranConfig)}
    options = {k: v for k, v in data.items() if k not in INPUT_KEYS}
    unknown = sorted(set(options) - allowed)
    if unknown:
        raise ValueError(
            f"Unknown config keys: {', '.join(unknown)}. "
            f"Allowed: {', '.join(sorted(allowed | set(INPUT_KEYS)))}."
        )
    if "row_standardize" in options and not isinstance(options["row_standardize"], bool):
        raise ValueError("row_standardize must be true or false.")
    return MoranConfig(**options)
