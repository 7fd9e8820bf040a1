"""
Milling cutter shapes.

A cutter is one of four frozen dataclasses; ``Cutter`` is their union.
Contact dispatch in ``collision.py`` is an exhaustive isinstance switch
over these types, so adding a shape means adding a branch there too.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


class UnsupportedCutterError(ValueError):
    """Cutter selector or object is not one of the known shapes."""
    pass


class CutterType(Enum):
    """Tool-table cutter kinds."""
    BALL_NOSE = "ball_nose"
    CYLINDER = "cylinder"
    CONE = "cone"
    TAPERED_BALL_NOSE = "tapered_ball_nose"


def _require_positive(name: str, value: float) -> None:
    if not value > 0.0:
        raise ValueError(f"{name} must be > 0, got {value!r}")


def _require_non_negative(name: str, value: float) -> None:
    if not value >= 0.0:
        raise ValueError(f"{name} must be >= 0, got {value!r}")


@dataclass(frozen=True)
class BallNose:
    """Spherical tip; the reference point is the bottom of the sphere."""

    radius: float

    def __post_init__(self) -> None:
        _require_positive("radius", self.radius)

    @property
    def kind(self) -> CutterType:
        return CutterType.BALL_NOSE

    def describe(self) -> str:
        return f"ball-nose r={self.radius:g}"


@dataclass(frozen=True)
class Cylinder:
    """Flat end mill; the reference point is the bottom-face center."""

    radius: float
    length: float

    def __post_init__(self) -> None:
        _require_positive("radius", self.radius)
        _require_non_negative("length", self.length)

    @property
    def kind(self) -> CutterType:
        return CutterType.CYLINDER

    def describe(self) -> str:
        return f"cylinder r={self.radius:g} L={self.length:g}"


@dataclass(frozen=True)
class Cone:
    """V-bit with its tip at the reference point and base at ``height``."""

    base_radius: float
    height: float

    def __post_init__(self) -> None:
        _require_positive("base_radius", self.base_radius)
        _require_non_negative("height", self.height)

    @property
    def kind(self) -> CutterType:
        return CutterType.CONE

    def describe(self) -> str:
        return f"cone R={self.base_radius:g} h={self.height:g}"


@dataclass(frozen=True)
class TaperedBallNose:
    """Ball tip on a tapered shank. Only the tip sphere takes part in contact."""

    tip_radius: float

    def __post_init__(self) -> None:
        _require_positive("tip_radius", self.tip_radius)

    @property
    def kind(self) -> CutterType:
        return CutterType.TAPERED_BALL_NOSE

    def describe(self) -> str:
        return f"tapered ball-nose tip r={self.tip_radius:g}"


Cutter = Union[BallNose, Cylinder, Cone, TaperedBallNose]


def make_cutter(
    kind: Union[CutterType, str],
    diameter: float,
    tip_radius: float = 0.0,
    length: float = 0.0,
) -> Cutter:
    """Build a cutter from tool-table parameters.

    Args:
        kind: ``CutterType`` or its string value.
        diameter: Tool diameter; ball-nose, cylinder and cone use half of it.
        tip_radius: Tip sphere radius (tapered ball-nose only).
        length: Cutting length (cylinder) or cone height.

    Raises:
        UnsupportedCutterError: If *kind* is not a known cutter type.
        ValueError: If a dimension used by the chosen shape is invalid.
    """
    if not isinstance(kind, CutterType):
        try:
            kind = CutterType(kind)
        except ValueError:
            raise UnsupportedCutterError(f"Unsupported cutter type: {kind!r}") from None

    radius = diameter / 2.0
    if kind is CutterType.BALL_NOSE:
        return BallNose(radius=radius)
    if kind is CutterType.CYLINDER:
        return Cylinder(radius=radius, length=length)
    if kind is CutterType.CONE:
        return Cone(base_radius=radius, height=length)
    if kind is CutterType.TAPERED_BALL_NOSE:
        return TaperedBallNose(tip_radius=tip_radius)
    raise UnsupportedCutterError(f"Unsupported cutter type: {kind!r}")
