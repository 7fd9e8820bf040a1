"""
Geometric value types for drop-cutter collision queries.

Provides the axis-aligned box used for pruning, the triangle type the mesh
is made of, and the point/segment/triangle distance helpers used by the
ball-nose contact test. Vectors are plain ``numpy`` arrays of shape (3,).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence

import numpy as np

Vec3 = np.ndarray


def as_vec3(value: Sequence[float]) -> Vec3:
    """Coerce any 3-sequence to a float64 (3,) array."""
    arr = np.asarray(value, dtype=float).reshape(3)
    return arr


@dataclass(eq=False)
class AxisAlignedBox:
    """Axis-aligned bounding box with inclusive bounds.

    The ``empty()`` box (min=+inf, max=-inf) is the identity for ``union``
    and for the ``expand_*`` mutators. Everything except the mutators
    returns new boxes.
    """

    min_corner: Vec3
    max_corner: Vec3

    def __post_init__(self) -> None:
        self.min_corner = as_vec3(self.min_corner)
        self.max_corner = as_vec3(self.max_corner)

    # ─── Constructors ────────────────────────────────────────────────────

    @classmethod
    def empty(cls) -> "AxisAlignedBox":
        return cls(np.full(3, np.inf), np.full(3, -np.inf))

    @classmethod
    def infinite(cls) -> "AxisAlignedBox":
        return cls(np.full(3, -np.inf), np.full(3, np.inf))

    @classmethod
    def from_point(cls, point: Sequence[float]) -> "AxisAlignedBox":
        p = as_vec3(point)
        return cls(p.copy(), p.copy())

    @classmethod
    def from_points(cls, points: Iterable[Sequence[float]]) -> "AxisAlignedBox":
        pts = np.asarray(list(points), dtype=float).reshape(-1, 3)
        if len(pts) == 0:
            raise ValueError("Cannot build a bounding box from an empty point set")
        return cls(pts.min(axis=0), pts.max(axis=0))

    @classmethod
    def from_triangle(cls, triangle: "Triangle") -> "AxisAlignedBox":
        verts = triangle.vertices
        return cls(verts.min(axis=0), verts.max(axis=0))

    @classmethod
    def from_triangles(cls, triangles: Iterable["Triangle"]) -> "AxisAlignedBox":
        stacked = [t.vertices for t in triangles]
        if not stacked:
            raise ValueError("Cannot build a bounding box from an empty triangle set")
        return cls.from_points(np.concatenate(stacked, axis=0))

    # ─── Derived quantities ──────────────────────────────────────────────

    @property
    def center(self) -> Vec3:
        return (self.min_corner + self.max_corner) * 0.5

    @property
    def size(self) -> Vec3:
        return self.max_corner - self.min_corner

    @property
    def volume(self) -> float:
        if not self.is_valid:
            return 0.0
        return float(np.prod(self.size))

    @property
    def surface_area(self) -> float:
        if not self.is_valid:
            return 0.0
        sx, sy, sz = self.size
        return float(2.0 * (sx * sy + sy * sz + sz * sx))

    @property
    def is_valid(self) -> bool:
        return bool(np.all(self.min_corner <= self.max_corner))

    def corners(self) -> np.ndarray:
        """All 8 corners as an (8, 3) array."""
        lo, hi = self.min_corner, self.max_corner
        return np.array(
            [
                [x, y, z]
                for x in (lo[0], hi[0])
                for y in (lo[1], hi[1])
                for z in (lo[2], hi[2])
            ],
            dtype=float,
        )

    # ─── Queries ─────────────────────────────────────────────────────────

    def contains_point(self, point: Sequence[float]) -> bool:
        p = as_vec3(point)
        return bool(np.all(p >= self.min_corner) and np.all(p <= self.max_corner))

    def contains_box(self, other: "AxisAlignedBox") -> bool:
        return bool(
            np.all(other.min_corner >= self.min_corner)
            and np.all(other.max_corner <= self.max_corner)
        )

    def intersects(self, other: "AxisAlignedBox") -> bool:
        """Inclusive overlap test on all three axes (touching boxes intersect)."""
        return bool(
            np.all(self.max_corner >= other.min_corner)
            and np.all(self.min_corner <= other.max_corner)
        )

    def intersection(self, other: "AxisAlignedBox") -> Optional["AxisAlignedBox"]:
        """Overlap region, or None when the boxes are disjoint."""
        if not self.intersects(other):
            return None
        return AxisAlignedBox(
            np.maximum(self.min_corner, other.min_corner),
            np.minimum(self.max_corner, other.max_corner),
        )

    def union(self, other: "AxisAlignedBox") -> "AxisAlignedBox":
        return AxisAlignedBox(
            np.minimum(self.min_corner, other.min_corner),
            np.maximum(self.max_corner, other.max_corner),
        )

    def closest_point(self, point: Sequence[float]) -> Vec3:
        return np.clip(as_vec3(point), self.min_corner, self.max_corner)

    def distance_squared(self, point: Sequence[float]) -> float:
        p = as_vec3(point)
        delta = p - self.closest_point(p)
        return float(delta @ delta)

    def distance(self, point: Sequence[float]) -> float:
        return float(np.sqrt(self.distance_squared(point)))

    # ─── Mutators ────────────────────────────────────────────────────────

    def expand_to_point(self, point: Sequence[float]) -> None:
        p = as_vec3(point)
        self.min_corner = np.minimum(self.min_corner, p)
        self.max_corner = np.maximum(self.max_corner, p)

    def expand_to_box(self, other: "AxisAlignedBox") -> None:
        self.min_corner = np.minimum(self.min_corner, other.min_corner)
        self.max_corner = np.maximum(self.max_corner, other.max_corner)

    def expand_by(self, margin: float) -> None:
        self.min_corner = self.min_corner - margin
        self.max_corner = self.max_corner + margin

    def copy(self) -> "AxisAlignedBox":
        return AxisAlignedBox(self.min_corner.copy(), self.max_corner.copy())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AxisAlignedBox):
            return NotImplemented
        return bool(
            np.array_equal(self.min_corner, other.min_corner)
            and np.array_equal(self.max_corner, other.max_corner)
        )

    def __repr__(self) -> str:
        lo = ", ".join(f"{v:g}" for v in self.min_corner)
        hi = ", ".join(f"{v:g}" for v in self.max_corner)
        return f"AxisAlignedBox(min=({lo}), max=({hi}))"


@dataclass(frozen=True, eq=False)
class Triangle:
    """Triangle with ordered vertices A, B, C.

    Winding decides the normal direction: normal = unit(AB x AC).
    """

    a: Vec3
    b: Vec3
    c: Vec3
    _vertices: np.ndarray = field(init=False, repr=False)

    def __post_init__(self) -> None:
        # frozen dataclass: write through object.__setattr__
        a, b, c = as_vec3(self.a), as_vec3(self.b), as_vec3(self.c)
        verts = np.stack([a, b, c])
        verts.setflags(write=False)
        object.__setattr__(self, "a", verts[0])
        object.__setattr__(self, "b", verts[1])
        object.__setattr__(self, "c", verts[2])
        object.__setattr__(self, "_vertices", verts)

    @property
    def vertices(self) -> np.ndarray:
        """(3, 3) read-only array of A, B, C."""
        return self._vertices

    def _cross(self) -> Vec3:
        return np.cross(self.b - self.a, self.c - self.a)

    def area(self) -> float:
        return float(0.5 * np.linalg.norm(self._cross()))

    def normal(self) -> Vec3:
        """Unit normal; a zero vector for a degenerate triangle."""
        n = self._cross()
        length = np.linalg.norm(n)
        if length == 0.0:
            return np.zeros(3)
        return n / length

    def bounding_box(self) -> AxisAlignedBox:
        return AxisAlignedBox.from_triangle(self)

    def contains_point(self, point: Sequence[float]) -> bool:
        """Barycentric containment for a point already in the triangle's plane.

        Returns False for a degenerate triangle (zero denominator).
        """
        v0 = self.c - self.a
        v1 = self.b - self.a
        v2 = as_vec3(point) - self.a

        dot00 = v0 @ v0
        dot01 = v0 @ v1
        dot02 = v0 @ v2
        dot11 = v1 @ v1
        dot12 = v1 @ v2

        denom = dot00 * dot11 - dot01 * dot01
        if denom == 0.0:
            return False

        u = (dot11 * dot02 - dot01 * dot12) / denom
        v = (dot00 * dot12 - dot01 * dot02) / denom
        return bool(u >= 0.0 and v >= 0.0 and u + v <= 1.0)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Triangle):
            return NotImplemented
        return bool(np.array_equal(self._vertices, other._vertices))

    def __hash__(self) -> int:
        return hash(self._vertices.tobytes())


def point_segment_distance(
    point: Sequence[float],
    start: Sequence[float],
    end: Sequence[float],
) -> float:
    """Distance from *point* to the closed segment [start, end].

    A zero-length segment falls back to the distance to *start*.
    """
    p = as_vec3(point)
    s = as_vec3(start)
    e = as_vec3(end)

    line = e - s
    length = float(np.linalg.norm(line))
    if length == 0.0:
        return float(np.linalg.norm(p - s))

    direction = line / length
    projection = float((p - s) @ direction)
    if projection <= 0.0:
        return float(np.linalg.norm(p - s))
    if projection >= length:
        return float(np.linalg.norm(p - e))

    closest = s + projection * direction
    return float(np.linalg.norm(p - closest))


def point_triangle_distance(point: Sequence[float], triangle: Triangle) -> float:
    """Shortest distance from *point* to *triangle*.

    Uses the perpendicular plane offset when the projection lands inside
    the triangle, otherwise the nearest of the three edges.
    """
    p = as_vec3(point)
    normal = triangle.normal()
    offset = float((p - triangle.a) @ normal)
    projected = p - offset * normal

    if triangle.contains_point(projected):
        return abs(offset)

    return min(
        point_segment_distance(p, triangle.a, triangle.b),
        point_segment_distance(p, triangle.b, triangle.c),
        point_segment_distance(p, triangle.c, triangle.a),
    )
