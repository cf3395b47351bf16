"""Closed polygons with a kept-edge subset.

A `Polygon` stores its vertex ring and, separately, the subset of
boundary segments that survived a merge (`segments`).  The ring is
never modified: containment queries always run against the full ring
so that a polygon whose kept edges were pruned still classifies points
the same way.  Merging produces new polygons via `with_segments`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from functools import cached_property
from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np

from ..errors import InvalidParameterError
from .primitives import EPSILON, Point, Segment, add, perpendicular, scale

# Points closer to the ring than this fraction of the polygon extent
# count as lying on the boundary.
BOUNDARY_TOLERANCE = 1e-9


class Location(Enum):
    """Where a point lies relative to a polygon."""

    OUTSIDE = 0
    BOUNDARY = 1
    INSIDE = 2


@dataclass(frozen=True)
class Polygon:
    """A closed polygon.

    Parameters
    ----------
    points : sequence of Point
        Vertex ring in order; the closing edge from the last vertex back
        to the first is implied.  At least three vertices are required.
    segments : sequence of Segment, optional
        Kept edges.  Defaults to the full edge ring.  May be empty.
    """

    points: Tuple[Point, ...]
    segments: Optional[Tuple[Segment, ...]] = None

    def __post_init__(self):
        points = tuple(self.points)
        if len(points) < 3:
            raise InvalidParameterError(
                f"a polygon needs at least 3 vertices, got {len(points)}"
            )
        object.__setattr__(self, "points", points)
        if self.segments is None:
            object.__setattr__(self, "segments", self.edges)
        else:
            object.__setattr__(self, "segments", tuple(self.segments))

    @cached_property
    def edges(self) -> Tuple[Segment, ...]:
        """Full edge ring, including the closing edge."""
        n = len(self.points)
        return tuple(Segment(self.points[i], self.points[(i + 1) % n]) for i in range(n))

    @cached_property
    def _ring(self) -> np.ndarray:
        return np.array([p.to_tuple() for p in self.points], dtype=float)

    @cached_property
    def signed_area(self) -> float:
        """Shoelace area; positive for counter-clockwise rings."""
        xs = self._ring[:, 0]
        ys = self._ring[:, 1]
        return float(0.5 * np.sum(xs * np.roll(ys, -1) - np.roll(xs, -1) * ys))

    @cached_property
    def bbox(self) -> Tuple[float, float, float, float]:
        """Bounding box ``(xmin, ymin, xmax, ymax)`` of the ring."""
        mins = self._ring.min(axis=0)
        maxs = self._ring.max(axis=0)
        return (float(mins[0]), float(mins[1]), float(maxs[0]), float(maxs[1]))

    @cached_property
    def extent(self) -> float:
        """Longer side of the bounding box."""
        xmin, ymin, xmax, ymax = self.bbox
        return max(xmax - xmin, ymax - ymin)

    @cached_property
    def tolerance(self) -> float:
        """Boundary tolerance scaled to this polygon's size."""
        return BOUNDARY_TOLERANCE * self.extent

    def to_array(self) -> np.ndarray:
        """Vertex ring as an ``(N, 2)`` array."""
        return self._ring.copy()

    def with_segments(self, segments: Iterable[Segment]) -> Polygon:
        """Copy of this polygon with a different kept-edge set."""
        return Polygon(self.points, tuple(segments))

    def locate(self, point: Point, tolerance: Optional[float] = None) -> Location:
        """Classify ``point`` as inside, outside or on the ring.

        Uses an even-odd ray cast along +x over every ring edge at once.
        Points within ``tolerance`` of the ring (default: `tolerance`
        of this polygon) are on the boundary.
        """
        if tolerance is None:
            tolerance = self.tolerance
        ring = self._ring
        start = ring
        end = np.roll(ring, -1, axis=0)
        px, py = point.x, point.y

        # Distance from the point to every edge, for the boundary check.
        d = end - start
        length_sq = np.einsum("ij,ij->i", d, d)
        rel = np.array([px, py]) - start
        t = np.clip(np.einsum("ij,ij->i", rel, d) / length_sq, 0.0, 1.0)
        nearest = start + d * t[:, None]
        gaps = np.hypot(nearest[:, 0] - px, nearest[:, 1] - py)
        if gaps.min() <= tolerance:
            return Location.BOUNDARY

        y1 = start[:, 1]
        y2 = end[:, 1]
        straddles = (y1 > py) != (y2 > py)
        with np.errstate(divide="ignore", invalid="ignore"):
            x_cross = start[:, 0] + (py - y1) * d[:, 0] / d[:, 1]
        crossings = np.count_nonzero(straddles & (px < x_cross))
        return Location.INSIDE if crossings % 2 == 1 else Location.OUTSIDE

    def contains_point(self, point: Point) -> bool:
        """True if ``point`` is strictly inside; boundary points are not."""
        return self.locate(point) is Location.INSIDE

    def contains_segment(self, segment: Segment) -> bool:
        """True if the midpoint of ``segment`` is strictly inside."""
        return self.contains_point(segment.midpoint)

    def inward_normal(self, segment: Segment) -> Point:
        """Unit normal of an edge (or sub-edge) pointing into the polygon."""
        normal = perpendicular(segment.direction)
        if self.signed_area < 0:
            normal = scale(normal, -1.0)
        return normal

    def probe(self, segment: Segment, offset: float) -> Point:
        """Point just inside the polygon next to the midpoint of an edge."""
        return add(segment.midpoint, scale(self.inward_normal(segment), offset))


def edges_of(polygon: Polygon) -> List[Segment]:
    """Ordered edge list of ``polygon``, closing edge last."""
    return list(polygon.edges)


def contains_point(polygon: Polygon, point: Point) -> bool:
    return polygon.contains_point(point)


def contains_segment(polygon: Polygon, segment: Segment) -> bool:
    return polygon.contains_segment(segment)


def boxes_overlap(a: Sequence[float], b: Sequence[float]) -> bool:
    """True if two ``(xmin, ymin, xmax, ymax)`` boxes overlap or touch."""
    return not (
        a[2] < b[0] - EPSILON
        or b[2] < a[0] - EPSILON
        or a[3] < b[1] - EPSILON
        or b[3] < a[1] - EPSILON
    )
