"""Capsule shaped envelopes around skeleton segments.

An envelope pads a skeleton segment by half the road width on every
side.  Each end is capped by a fan of points on a half circle; the
roundness is the number of facets per cap.  With ``roundness=0`` (or
1) each cap collapses to its two corner points and the envelope is the
plain rectangle spanning the skeleton, which is what markings use.
"""

from __future__ import annotations

import copy
import math
import numbers
from dataclasses import dataclass, field
from typing import Iterable, List

import numpy as np

from ..errors import InvalidParameterError
from .polygon import Polygon
from .primitives import Point, Segment, angle, subtract, translate


def validate_width(width: float) -> float:
    """Return ``width`` as a float, rejecting non-positive values."""
    if isinstance(width, bool) or not isinstance(width, numbers.Real):
        raise InvalidParameterError(f"width must be a number, got {width!r}")
    if not math.isfinite(width) or width <= 0:
        raise InvalidParameterError(f"width must be positive, got {width}")
    return float(width)


def validate_roundness(roundness: int) -> int:
    """Return ``roundness`` as an int, rejecting negative or fractional values."""
    if isinstance(roundness, bool) or not isinstance(roundness, numbers.Integral):
        raise InvalidParameterError(f"roundness must be an integer, got {roundness!r}")
    if roundness < 0:
        raise InvalidParameterError(f"roundness must be >= 0, got {roundness}")
    return int(roundness)


def cap_angles(alpha: float, roundness: int) -> np.ndarray:
    """Angles of one cap fan, from ``alpha - pi/2`` to ``alpha + pi/2``.

    The upper bound is widened by half a step so that the last angle is
    kept despite rounding.  Angles are computed from their index rather
    than accumulated, which keeps the fan identical between runs.
    """
    start = alpha - math.pi / 2
    stop = alpha + math.pi / 2
    step = math.pi / max(1, roundness)
    count = int(math.floor((stop + step / 2 - start) / step)) + 1
    return start + step * np.arange(count)


@dataclass(frozen=True)
class Envelope:
    """Padded polygon around a skeleton segment.

    Parameters
    ----------
    skeleton : Segment
        Medial axis of the envelope.
    width : float
        Full width; every vertex lies ``width / 2`` from the nearer
        skeleton endpoint.
    roundness : int
        Facets per rounded cap; 0 gives a rectangle.
    """

    skeleton: Segment
    width: float
    roundness: int = 1
    poly: Polygon = field(init=False)

    def __post_init__(self):
        object.__setattr__(self, "width", validate_width(self.width))
        object.__setattr__(self, "roundness", validate_roundness(self.roundness))
        object.__setattr__(self, "poly", self._generate_polygon())

    def _generate_polygon(self) -> Polygon:
        p1, p2 = self.skeleton.p1, self.skeleton.p2
        radius = self.width / 2
        alpha = angle(subtract(p1, p2))

        thetas = cap_angles(alpha, self.roundness)
        points: List[Point] = [translate(p1, float(theta), radius) for theta in thetas]
        points.extend(translate(p2, math.pi + float(theta), radius) for theta in thetas)
        return Polygon(points)

    def with_segments(self, segments: Iterable[Segment]) -> Envelope:
        """Copy of this envelope whose polygon keeps only ``segments``."""
        merged = copy.copy(self)
        object.__setattr__(merged, "poly", self.poly.with_segments(segments))
        return merged
