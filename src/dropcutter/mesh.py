"""
Read-only triangle container consumed by the collision engine.

The mesh keeps its triangles both as ``Triangle`` objects (for the exact
tests) and as a contiguous (N, 3, 3) array with per-triangle min/max
corners, so box pruning can run vectorised over the whole surface.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Iterator, Sequence, Tuple, Union

import numpy as np
import trimesh

from dropcutter.primitives import AxisAlignedBox, Triangle

logger = logging.getLogger(__name__)


class Mesh:
    """Ordered, immutable collection of triangles plus its bounding box.

    Duplicates and degenerate triangles are kept as given; use
    ``cleaned()`` to drop them.
    """

    def __init__(self, triangles: Iterable[Triangle] = ()):
        self._triangles: Tuple[Triangle, ...] = tuple(triangles)
        if self._triangles:
            array = np.stack([t.vertices for t in self._triangles]).astype(float)
        else:
            array = np.zeros((0, 3, 3), dtype=float)
        self._array = array
        self._tri_min = array.min(axis=1) if len(array) else np.zeros((0, 3))
        self._tri_max = array.max(axis=1) if len(array) else np.zeros((0, 3))
        for arr in (self._array, self._tri_min, self._tri_max):
            arr.setflags(write=False)

        if self._triangles:
            self._bbox = AxisAlignedBox(self._tri_min.min(axis=0), self._tri_max.max(axis=0))
        else:
            self._bbox = AxisAlignedBox.empty()

    # ─── Constructors ────────────────────────────────────────────────────

    @classmethod
    def from_array(cls, triangles: Union[np.ndarray, Sequence]) -> "Mesh":
        """Build from an (N, 3, 3) array of triangle vertices."""
        arr = np.asarray(triangles, dtype=float)
        if arr.size == 0:
            return cls()
        if arr.ndim != 3 or arr.shape[1:] != (3, 3):
            raise ValueError(f"Expected an (N, 3, 3) triangle array, got shape {arr.shape}")
        return cls(Triangle(t[0], t[1], t[2]) for t in arr)

    @classmethod
    def from_trimesh(cls, mesh: trimesh.Trimesh) -> "Mesh":
        return cls.from_array(np.asarray(mesh.triangles, dtype=float))

    # ─── Accessors ───────────────────────────────────────────────────────

    @property
    def triangles(self) -> Tuple[Triangle, ...]:
        return self._triangles

    @property
    def triangle_count(self) -> int:
        return len(self._triangles)

    @property
    def bounding_box(self) -> AxisAlignedBox:
        """Aggregate box (empty-box sentinel when there are no triangles)."""
        return self._bbox.copy()

    @property
    def vertex_array(self) -> np.ndarray:
        """Read-only (N, 3, 3) vertex array."""
        return self._array

    @property
    def triangle_min_corners(self) -> np.ndarray:
        return self._tri_min

    @property
    def triangle_max_corners(self) -> np.ndarray:
        return self._tri_max

    def __len__(self) -> int:
        return len(self._triangles)

    def __iter__(self) -> Iterator[Triangle]:
        return iter(self._triangles)

    def __repr__(self) -> str:
        return f"Mesh(triangles={self.triangle_count}, bbox={self._bbox!r})"

    # ─── Cleanup ─────────────────────────────────────────────────────────

    def cleaned(self) -> "Mesh":
        """Copy without zero-area and exactly duplicated triangles."""
        if not self._triangles:
            return Mesh()

        cross = np.cross(self._array[:, 1] - self._array[:, 0], self._array[:, 2] - self._array[:, 0])
        keep = np.linalg.norm(cross, axis=1) > 0.0

        seen = set()
        kept = []
        for tri, ok in zip(self._triangles, keep):
            if not ok:
                continue
            key = tri.vertices.tobytes()
            if key in seen:
                continue
            seen.add(key)
            kept.append(tri)

        dropped = self.triangle_count - len(kept)
        if dropped:
            logger.info("Dropped %d degenerate/duplicate triangles", dropped)
        return Mesh(kept)


def load_mesh(path: Union[str, Path]) -> Mesh:
    """Load an STL (binary or ASCII) or any other trimesh-readable mesh.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file holds no triangles.
    """
    p = Path(path)
    if not p.is_file():
        raise FileNotFoundError(f"Mesh file not found: {p}")

    loaded = trimesh.load(str(p), force="mesh")
    if not isinstance(loaded, trimesh.Trimesh):
        raise ValueError(f"Unsupported type from trimesh.load: {type(loaded)}")
    if loaded.is_empty or len(loaded.faces) == 0:
        raise ValueError(f"Loaded mesh is empty: {p}")

    mesh = Mesh.from_trimesh(loaded)
    bbox = mesh.bounding_box
    logger.info(
        "Loaded %s: %d triangles, extents %.3f x %.3f x %.3f",
        p.name,
        mesh.triangle_count,
        *bbox.size,
    )
    return mesh
