"""Build histograms from YAML layout documents."""
from __future__ import annotations

import difflib
import logging
import math
from typing import Any, Dict

import yaml

from . import axes as ax
from .histNd import HistND

logger = logging.getLogger(__name__)

_TRANSFORMS = {
    None: lambda cfg: None,
    "identity": lambda cfg: ax.Identity(),
    "log": lambda cfg: ax.Log(),
    "sqrt": lambda cfg: ax.Sqrt(),
    "pow": lambda cfg: ax.Pow(_require(cfg, "power")),
}


def get_by_path(d, dotted, default=None):
    cur = d
    for p in dotted.split("."):
        if not isinstance(cur, dict) or p not in cur:
            return default
        cur = cur[p]
    return cur


def _require(cfg: Dict[str, Any], key: str) -> Any:
    if key not in cfg:
        raise ValueError(f"axis of type {cfg.get('type')!r} needs {key!r}")
    return cfg[key]


def _regular(cfg):
    name = cfg.get("transform")
    if name not in _TRANSFORMS:
        raise ValueError(f"unknown transform {name!r}")
    return ax.Regular(
        _require(cfg, "bins"),
        _require(cfg, "lower"),
        _require(cfg, "upper"),
        label=cfg.get("label", ""),
        uoflow=cfg.get("uoflow", True),
        transform=_TRANSFORMS[name](cfg),
    )


_AXIS_TYPES = {
    "regular": _regular,
    "circular": lambda cfg: ax.Circular(
        _require(cfg, "bins"),
        phase=cfg.get("phase", 0.0),
        perimeter=cfg.get("perimeter", 2.0 * math.pi),
        label=cfg.get("label", ""),
    ),
    "variable": lambda cfg: ax.Variable(
        _require(cfg, "edges"),
        label=cfg.get("label", ""),
        uoflow=cfg.get("uoflow", True),
    ),
    "integer": lambda cfg: ax.Integer(
        _require(cfg, "lower"),
        _require(cfg, "upper"),
        label=cfg.get("label", ""),
        uoflow=cfg.get("uoflow", True),
    ),
    "category": lambda cfg: ax.Category(
        _require(cfg, "categories"),
        label=cfg.get("label", ""),
    ),
}


def axis_from_config(cfg: Dict[str, Any]):
    """Create one axis from a mapping with a ``type`` key."""
    if not isinstance(cfg, dict):
        raise ValueError(f"axis entry must be a mapping, got {type(cfg).__name__}")
    kind = cfg.get("type")
    if kind not in _AXIS_TYPES:
        msg = f"unknown axis type {kind!r}"
        suggestion = difflib.get_close_matches(str(kind), list(_AXIS_TYPES), n=1)
        if suggestion:
            msg += f", did you mean {suggestion[0]!r}?"
        raise ValueError(msg)
    return _AXIS_TYPES[kind](cfg)


def hist_from_config(cfg: Dict[str, Any]) -> HistND:
    axes_cfg = get_by_path(cfg, "axes", [])
    if not isinstance(axes_cfg, list) or not axes_cfg:
        raise ValueError("layout needs a non-empty 'axes' list")
    axes = [axis_from_config(a) for a in axes_cfg]
    return HistND(
        axes,
        dtype=cfg.get("dtype", "float"),
        track_variance=cfg.get("track_variance", False),
    )


def load_layout(path) -> HistND:
    """Read a YAML layout file and build an empty histogram from it."""
    with open(path, "r") as f:
        cfg = yaml.safe_load(f) or {}
    if not isinstance(cfg, dict):
        raise ValueError(f"layout {path} must be a mapping")
    h = hist_from_config(cfg)
    logger.debug("loaded layout %s: %d axes, %d cells", path, h.dim, h.size)
    return h
