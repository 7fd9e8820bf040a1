"""
Plunge-depth solver.

Finds the highest Z at which a cutter moving straight down at a fixed
(x, y) first contacts the mesh, by bisecting a boolean contact test.
The search assumes contact is a single downward step along Z (false
above, true below). Overhangs or stacked sheets break that assumption
and may yield a deeper contact than the true first one.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional

import numpy as np

from dropcutter.collision import touches
from dropcutter.cutters import Cutter
from dropcutter.mesh import Mesh

logger = logging.getLogger(__name__)

DEFAULT_PRECISION = 0.01


class ContactStatus(Enum):
    """Outcome of a single plunge query."""
    CONTACT = "contact"
    TOP_CONTACT = "top_contact"
    NO_CONTACT = "no_contact"
    EMPTY_MESH = "empty_mesh"
    INVALID_INTERVAL = "invalid_interval"


@dataclass(frozen=True)
class ContactResult:
    """Plunge query result.

    ``z`` is None unless ``status`` is CONTACT or TOP_CONTACT.
    ``evaluations`` counts contact-predicate calls.
    """

    z: Optional[float]
    status: ContactStatus
    evaluations: int = 0

    @property
    def found(self) -> bool:
        return self.z is not None


def solve_contact(
    cutter: Cutter,
    mesh: Mesh,
    x: float,
    y: float,
    start_z: float,
    end_z: float,
    precision: float = DEFAULT_PRECISION,
) -> ContactResult:
    """Bisect [end_z, start_z] for the highest contact height at (x, y).

    Args:
        cutter: Tool shape.
        mesh: Surface to plunge into (read only).
        x, y: Tool axis position.
        start_z: Top of the search interval (must be above *end_z*).
        end_z: Bottom of the search interval.
        precision: Bisection stops once the bracket is at most this wide.

    Returns:
        ContactResult; "no contact" outcomes carry ``z=None``.

    Raises:
        ValueError: If *precision* is not a finite positive number.
    """
    if not (math.isfinite(precision) and precision > 0.0):
        raise ValueError(f"precision must be a finite positive number, got {precision!r}")

    if mesh.triangle_count == 0:
        return ContactResult(None, ContactStatus.EMPTY_MESH)
    if start_z <= end_z:
        return ContactResult(None, ContactStatus.INVALID_INTERVAL)

    high = float(start_z)
    low = float(end_z)

    def contact_at(z: float) -> bool:
        return touches(cutter, np.array([x, y, z], dtype=float), mesh)

    evaluations = 2
    at_end = contact_at(low)
    at_start = contact_at(high)

    if not at_end:
        return ContactResult(None, ContactStatus.NO_CONTACT, evaluations)
    if at_start:
        return ContactResult(high, ContactStatus.TOP_CONTACT, evaluations)

    while high - low > precision:
        mid = (high + low) * 0.5
        if mid <= low or mid >= high:
            # bracket is below float resolution
            break
        evaluations += 1
        if contact_at(mid):
            low = mid
        else:
            high = mid

    return ContactResult(low, ContactStatus.CONTACT, evaluations)


def find_contact_z(
    cutter: Cutter,
    mesh: Mesh,
    x: float,
    y: float,
    start_z: float,
    end_z: float,
    precision: float = DEFAULT_PRECISION,
) -> Optional[float]:
    """Highest contact Z within *precision*, or None when there is no contact."""
    result = solve_contact(cutter, mesh, x, y, start_z, end_z, precision)
    logger.debug(
        "plunge (%.4f, %.4f): %s z=%s after %d evaluations",
        x,
        y,
        result.status.value,
        result.z,
        result.evaluations,
    )
    return result.z
