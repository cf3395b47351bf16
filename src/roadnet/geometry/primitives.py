"""Planar geometry primitives.

Points double as 2D vectors, so the vector helpers (`add`, `subtract`,
`scale`, ...) accept and return `Point` instances.  Segments are
unordered pairs of distinct points.  All comparisons go through the
module level `EPSILON` so that values produced by trigonometry compare
equal to the exact coordinates they approximate.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Tuple

from ..errors import DegenerateSegmentError

EPSILON = 1e-9


@dataclass(frozen=True, eq=False)
class Point:
    """An immutable point (or vector) in the plane."""

    x: float
    y: float

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Point):
            return NotImplemented
        return abs(self.x - other.x) <= EPSILON and abs(self.y - other.y) <= EPSILON

    # Tolerant equality cannot be made consistent with hashing.
    __hash__ = None  # type: ignore[assignment]

    def __iter__(self):
        yield self.x
        yield self.y

    def to_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)


Vector = Point


def add(a: Point, b: Point) -> Point:
    return Point(a.x + b.x, a.y + b.y)


def subtract(a: Point, b: Point) -> Point:
    return Point(a.x - b.x, a.y - b.y)


def scale(p: Point, k: float) -> Point:
    return Point(p.x * k, p.y * k)


def average(a: Point, b: Point) -> Point:
    return Point((a.x + b.x) / 2, (a.y + b.y) / 2)


def dot(a: Point, b: Point) -> float:
    return a.x * b.x + a.y * b.y


def magnitude(v: Vector) -> float:
    return math.hypot(v.x, v.y)


def normalize(v: Vector) -> Vector:
    """Return the unit vector pointing along ``v``.

    Raises
    ------
    DegenerateSegmentError
        If ``v`` is the zero vector.
    """
    mag = magnitude(v)
    if mag <= EPSILON:
        raise DegenerateSegmentError("cannot normalise a zero-length vector")
    return scale(v, 1.0 / mag)


def perpendicular(v: Vector) -> Vector:
    """Rotate ``v`` by +90 degrees."""
    return Point(-v.y, v.x)


def distance(a: Point, b: Point) -> float:
    return math.hypot(a.x - b.x, a.y - b.y)


def angle(v: Vector) -> float:
    """Direction of ``v`` in radians, measured from the +x axis.

    Raises
    ------
    DegenerateSegmentError
        If ``v`` is the zero vector, whose direction is undefined.
    """
    if abs(v.x) <= EPSILON and abs(v.y) <= EPSILON:
        raise DegenerateSegmentError("angle of a zero vector is undefined")
    return math.atan2(v.y, v.x)


def translate(p: Point, theta: float, offset: float) -> Point:
    """Move ``p`` by ``offset`` in direction ``theta`` (radians)."""
    return Point(p.x + math.cos(theta) * offset, p.y + math.sin(theta) * offset)


def lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def lerp_2d(a: Point, b: Point, t: float) -> Point:
    return Point(lerp(a.x, b.x, t), lerp(a.y, b.y, t))


@dataclass(frozen=True, eq=False)
class Segment:
    """A straight segment between two distinct points.

    Equality ignores the endpoint order, so ``Segment(a, b)`` equals
    ``Segment(b, a)``.  The stored order is kept for iteration and
    direction queries.
    """

    p1: Point
    p2: Point

    def __post_init__(self):
        if self.p1 == self.p2:
            raise DegenerateSegmentError(
                f"segment endpoints coincide at ({self.p1.x}, {self.p1.y})"
            )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Segment):
            return NotImplemented
        return (self.p1 == other.p1 and self.p2 == other.p2) or (
            self.p1 == other.p2 and self.p2 == other.p1
        )

    __hash__ = None  # type: ignore[assignment]

    @property
    def length(self) -> float:
        return distance(self.p1, self.p2)

    @property
    def midpoint(self) -> Point:
        return average(self.p1, self.p2)

    @property
    def direction(self) -> Vector:
        """Unit vector from ``p1`` towards ``p2``."""
        return normalize(subtract(self.p2, self.p1))

    def includes(self, point: Point) -> bool:
        """True if ``point`` is one of the endpoints."""
        return self.p1 == point or self.p2 == point

    def point_at(self, t: float) -> Point:
        return lerp_2d(self.p1, self.p2, t)

    def distance_to_point(self, point: Point) -> float:
        """Shortest distance from ``point`` to any point of the segment."""
        d = subtract(self.p2, self.p1)
        length_sq = dot(d, d)
        t = dot(subtract(point, self.p1), d) / length_sq
        t = min(1.0, max(0.0, t))
        return distance(point, self.point_at(t))

    def split_at(self, point: Point) -> Tuple[Segment, Segment]:
        """Split the segment in two at an interior ``point``."""
        return Segment(self.p1, point), Segment(point, self.p2)


@dataclass(frozen=True)
class Intersection:
    """A crossing of two segments.

    ``t`` and ``u`` are the parameters of the crossing along the first
    and second segment respectively, both strictly inside (0, 1).
    """

    point: Point
    t: float
    u: float


def intersect(seg_a: Segment, seg_b: Segment) -> Optional[Intersection]:
    """Find where the open interiors of two segments cross.

    Solves ``a1 + t (a2 - a1) = b1 + u (b2 - b1)`` for ``t`` and ``u``.
    Only crossings with both parameters inside ``(EPSILON, 1 - EPSILON)``
    count, so segments that merely touch at an endpoint do not
    intersect.  Parallel and collinear pairs (a determinant that is
    near zero relative to the segment lengths) return ``None`` as well.

    Parameters
    ----------
    seg_a, seg_b : Segment
        Segments to test.

    Returns
    -------
    Intersection or None
        The crossing point and both parameters, or ``None``.
    """
    a1, a2 = seg_a.p1, seg_a.p2
    b1, b2 = seg_b.p1, seg_b.p2
    da = subtract(a2, a1)
    db = subtract(b2, b1)

    bottom = db.y * da.x - db.x * da.y
    if abs(bottom) <= EPSILON * magnitude(da) * magnitude(db):
        return None

    t_top = (b2.x - b1.x) * (a1.y - b1.y) - (b2.y - b1.y) * (a1.x - b1.x)
    u_top = (b1.y - a1.y) * (a1.x - a2.x) - (b1.x - a1.x) * (a1.y - a2.y)
    t = t_top / bottom
    u = u_top / bottom

    if EPSILON < t < 1 - EPSILON and EPSILON < u < 1 - EPSILON:
        return Intersection(point=lerp_2d(a1, a2, t), t=t, u=u)
    return None
