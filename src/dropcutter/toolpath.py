"""
Tool-path generation on top of the plunge solver.

A path pattern enumerates (x, y) samples over the mesh footprint; each
sample is then dropped onto the surface with ``find_contact_z``. Samples
are independent, so they run on a thread pool and each one writes only
its own row of the output array.
"""

from __future__ import annotations

import logging
import math
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Optional, Union

import numpy as np

from dropcutter.cutters import Cutter
from dropcutter.mesh import Mesh
from dropcutter.primitives import AxisAlignedBox
from dropcutter.solver import DEFAULT_PRECISION, find_contact_z

logger = logging.getLogger(__name__)


class UnsupportedPathTypeError(ValueError):
    """Path pattern selector is not a known pattern."""
    pass


class ToolPathType(Enum):
    """Available path patterns."""
    CROSS = "cross"


@dataclass(frozen=True)
class ToolPathConfig:
    """Parameters for one tool-path run."""

    step: float                     # spacing between samples and between passes
    start_z: float                  # clearance height, top of every plunge search
    end_z: float                    # plunge floor, bottom of every search
    precision: float = DEFAULT_PRECISION
    max_workers: Optional[int] = None  # None = ThreadPoolExecutor default
    path_type: Union[ToolPathType, str] = ToolPathType.CROSS

    def validate(self) -> None:
        if not (math.isfinite(self.step) and self.step > 0.0):
            raise ValueError(f"step must be a finite positive number, got {self.step!r}")
        if not (math.isfinite(self.precision) and self.precision > 0.0):
            raise ValueError(
                f"precision must be a finite positive number, got {self.precision!r}"
            )
        if self.max_workers is not None and self.max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {self.max_workers!r}")
        resolve_path_type(self.path_type)


def resolve_path_type(value: Union[ToolPathType, str]) -> ToolPathType:
    if isinstance(value, ToolPathType):
        return value
    try:
        return ToolPathType(value)
    except ValueError:
        raise UnsupportedPathTypeError(f"Unsupported tool path type: {value!r}") from None


def _axis_samples(lo: float, hi: float, step: float) -> np.ndarray:
    """Evenly spaced samples from *lo* up to (at most) *hi*."""
    if hi < lo:
        return np.zeros(0)
    count = int(math.floor((hi - lo) / step + 1e-9)) + 1
    return lo + step * np.arange(count, dtype=float)


def cross_path_points(bounds: AxisAlignedBox, step: float) -> np.ndarray:
    """(N, 2) samples for the cross pattern over the XY extent of *bounds*.

    First a serpentine of rows along X (rows *step* apart in Y), then a
    serpentine of columns along Y (columns *step* apart in X), the first
    column running from max Y down to min Y.
    """
    xs = _axis_samples(bounds.min_corner[0], bounds.max_corner[0], step)
    ys = _axis_samples(bounds.min_corner[1], bounds.max_corner[1], step)

    points = []
    for i, y in enumerate(ys):
        row = xs if i % 2 == 0 else xs[::-1]
        points.extend((x, y) for x in row)
    for j, x in enumerate(xs):
        column = ys[::-1] if j % 2 == 0 else ys
        points.extend((x, y) for y in column)

    return np.array(points, dtype=float).reshape(-1, 2)


_PATH_GENERATORS: Dict[ToolPathType, Callable[[AxisAlignedBox, float], np.ndarray]] = {
    ToolPathType.CROSS: cross_path_points,
}


def create_tool_path(cutter: Cutter, mesh: Mesh, config: ToolPathConfig) -> np.ndarray:
    """Generate a tool path as an (N, 3) array of (x, y, z) points.

    Every point starts at ``config.end_z`` and is raised to the plunge
    depth found by the solver; points without contact stay at the floor.

    Raises:
        UnsupportedPathTypeError: If ``config.path_type`` is unknown.
        ValueError: If the config is otherwise invalid.
    """
    config.validate()
    path_type = resolve_path_type(config.path_type)

    if mesh.triangle_count == 0:
        logger.warning("Empty mesh, no tool path generated")
        return np.zeros((0, 3), dtype=float)

    xy = _PATH_GENERATORS[path_type](mesh.bounding_box, config.step)
    path = np.column_stack([xy, np.full(len(xy), float(config.end_z))])
    if len(path) == 0:
        return path

    logger.info(
        "Generating %s path: %d samples, %s, z %.3f -> %.3f",
        path_type.value,
        len(path),
        cutter.describe(),
        config.start_z,
        config.end_z,
    )

    def _plunge(i: int) -> bool:
        z = find_contact_z(
            cutter,
            mesh,
            float(path[i, 0]),
            float(path[i, 1]),
            config.start_z,
            config.end_z,
            config.precision,
        )
        if z is None:
            return False
        path[i, 2] = z
        return True

    t0 = time.time()
    with ThreadPoolExecutor(max_workers=config.max_workers) as pool:
        hits = sum(pool.map(_plunge, range(len(path))))

    logger.info(
        "Tool path done: %d/%d samples in contact (%.2fs)",
        hits,
        len(path),
        time.time() - t0,
    )
    return path
