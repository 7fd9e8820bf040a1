"""
Writers for generated tool paths (CSV, JSON, minimal G-code).
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, Optional, Union

import numpy as np

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def _as_points(points) -> np.ndarray:
    arr = np.asarray(points, dtype=float)
    if arr.size == 0:
        return np.zeros((0, 3), dtype=float)
    if arr.ndim != 2 or arr.shape[1] != 3:
        raise ValueError(f"Expected an (N, 3) point array, got shape {arr.shape}")
    return arr


def write_points_csv(points, path: PathLike) -> Path:
    """Write ``x,y,z`` rows with a header line."""
    arr = _as_points(points)
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    np.savetxt(out, arr, delimiter=",", header="x,y,z", comments="", fmt="%.6f")
    logger.info("Wrote %d points to %s", len(arr), out)
    return out


def write_points_json(
    points,
    path: PathLike,
    metadata: Optional[Dict[str, object]] = None,
) -> Path:
    """Write ``{"points": [[x, y, z], ...], "metadata": {...}}``."""
    arr = _as_points(points)
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    payload = {
        "points": arr.tolist(),
        "metadata": dict(metadata or {}),
    }
    out.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")
    logger.info("Wrote %d points to %s", len(arr), out)
    return out


def gcode_lines(
    points,
    safe_z: float,
    feed: float = 600.0,
    plunge_feed: Optional[float] = None,
) -> list:
    """G-code for a single continuous pass through *points*.

    Rapid to *safe_z*, rapid over the first point, plunge at
    *plunge_feed*, cut through the rest at *feed*, retract.
    """
    arr = _as_points(points)
    if plunge_feed is None:
        plunge_feed = max(feed / 3.0, 100.0)

    out = ["G21", "G90", f"G0 Z{safe_z:.3f}"]
    if len(arr):
        x0, y0, z0 = arr[0]
        out.append(f"G0 X{x0:.3f} Y{y0:.3f}")
        out.append(f"G1 Z{z0:.3f} F{plunge_feed:.0f}")
        for x, y, z in arr[1:]:
            out.append(f"G1 X{x:.3f} Y{y:.3f} Z{z:.3f} F{feed:.0f}")
        out.append(f"G0 Z{safe_z:.3f}")
    out.append("M2")
    return out


def write_gcode(
    points,
    path: PathLike,
    safe_z: float,
    feed: float = 600.0,
    plunge_feed: Optional[float] = None,
) -> Path:
    lines = gcode_lines(points, safe_z, feed=feed, plunge_feed=plunge_feed)
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text("\n".join(lines) + "\n", encoding="utf-8")
    logger.info("Wrote %d G-code lines to %s", len(lines), out)
    return out
