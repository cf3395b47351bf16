"""Boundary merge algebra.

Overlapping polygons are merged by cutting their edges wherever they
cross and dropping every piece that ends up inside another polygon.
Edges are also cut at the other polygon's vertices where those lie on
them, so that partially shared runs are judged piece by piece.  What is
left is the outline of the union with no seams inside the overlap
regions.

All functions here are pure: they take polygons and return new
polygons with updated kept-edge sets, leaving their inputs untouched.
Output order follows input polygon order, then ring order within each
polygon.

Edges that lie on another polygon's boundary need a tie-break.  When
the interiors of both polygons lie on the same side of the shared edge
(the polygons overlap there) the edge is kept once, by the polygon that
comes first.  When the interiors lie on opposite sides (the polygons
only touch) both edges are kept.

Tolerances scale with the smaller extent of the two polygons involved,
so tiny and huge geometry classify alike.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence, Tuple

import numpy as np

from ..errors import GenerationCancelled
from ..utils.logging import get_logger
from .polygon import BOUNDARY_TOLERANCE, Location, Polygon, boxes_overlap
from .primitives import Intersection, Point, Segment, intersect

logger = get_logger(__name__)

# Distance, as a fraction of the polygon extent, of the probe used to
# find on which side of a shared edge the polygon interior lies.  Must
# stay well above BOUNDARY_TOLERANCE.
PROBE_OFFSET = 1e-7

CancelCallback = Callable[[], bool]


@dataclass(frozen=True)
class BreakResult:
    """Outcome of breaking two polygons against each other."""

    a: Polygon
    b: Polygon
    points: List[Point] = field(default_factory=list)


@dataclass(frozen=True)
class MultiBreakResult:
    """Outcome of breaking a whole collection of polygons."""

    polygons: List[Polygon]
    points: List[Point] = field(default_factory=list)

    @property
    def segments(self) -> List[Segment]:
        """All kept edges, flattened in polygon order."""
        return [seg for poly in self.polygons for seg in poly.segments]


def _shared_scale(a: Polygon, b: Polygon) -> float:
    """Length scale for tolerances between two polygons: the smaller extent."""
    return min(a.extent, b.extent)


def is_interior(segment: Segment, own: Polygon, other: Polygon, other_first: bool) -> bool:
    """Decide whether a piece of ``own``'s boundary is interior to ``other``.

    Parameters
    ----------
    segment : Segment
        Edge or sub-edge of ``own``.
    own : Polygon
        Polygon the segment belongs to.
    other : Polygon
        Polygon to test against.
    other_first : bool
        True if ``other`` precedes ``own`` in the merge order; decides
        which copy of a coincident overlapping edge survives.

    Returns
    -------
    bool
        True if the segment should be dropped.
    """
    size = _shared_scale(own, other)
    tolerance = BOUNDARY_TOLERANCE * size
    location = other.locate(segment.midpoint, tolerance)
    if location is Location.INSIDE:
        return True
    if location is Location.OUTSIDE or not other_first:
        return False
    probe = own.probe(segment, PROBE_OFFSET * size)
    return other.locate(probe, tolerance) is Location.INSIDE


def _vertex_cuts(segment: Segment, other: Polygon, tolerance: float) -> List[Tuple[float, Point]]:
    """Vertices of ``other`` lying on the open interior of ``segment``.

    `intersect` ignores endpoints, so an edge running through a vertex of
    ``other`` (or along one of its edges) is only cut at that vertex here.
    """
    ring = other.to_array()
    start = np.array(segment.p1.to_tuple())
    d = np.array(segment.p2.to_tuple()) - start
    length = float(np.hypot(d[0], d[1]))
    t = (ring - start) @ d / (length * length)
    nearest = start + t[:, None] * d
    gaps = np.hypot(ring[:, 0] - nearest[:, 0], ring[:, 1] - nearest[:, 1])
    margin = tolerance / length
    on_segment = (gaps <= tolerance) & (t > margin) & (t < 1 - margin)
    return [(float(t[k]), other.points[k]) for k in np.flatnonzero(on_segment)]


def _split(segment: Segment, cuts: List[Tuple[float, Point]]) -> List[Segment]:
    """Cut ``segment`` at every ``(t, point)``, in order along the segment."""
    pieces: List[Segment] = []
    start = segment.p1
    for _, point in sorted(cuts, key=lambda cut: cut[0]):
        if point == start:
            continue
        pieces.append(Segment(start, point))
        start = point
    if start == segment.p2:
        # Last cut landed on the far endpoint within tolerance.
        return pieces
    pieces.append(Segment(start, segment.p2))
    return pieces


def _cut(poly: Polygon, other: Polygon) -> Tuple[List[Tuple[Segment, List[Segment]]], List[Point]]:
    """Split ``poly``'s kept edges where they cross or touch ``other``'s ring.

    Returns each kept edge with its pieces, and the crossing points.
    """
    tolerance = BOUNDARY_TOLERANCE * _shared_scale(poly, other)
    groups: List[Tuple[Segment, List[Segment]]] = []
    points: List[Point] = []
    for seg in poly.segments:
        cuts = []
        for edge in other.edges:
            hit = intersect(seg, edge)
            if hit is not None:
                cuts.append((hit.t, hit.point))
                points.append(hit.point)
        cuts.extend(_vertex_cuts(seg, other, tolerance))
        groups.append((seg, _split(seg, cuts) if cuts else [seg]))
    return groups, points


def _prune(
    groups: List[Tuple[Segment, List[Segment]]],
    own: Polygon,
    other: Polygon,
    other_first: bool,
) -> List[Segment]:
    kept: List[Segment] = []
    for seg, pieces in groups:
        survivors = [p for p in pieces if not is_interior(p, own, other, other_first)]
        # An edge that only touches ``other`` stays in one piece.
        kept.extend([seg] if len(survivors) == len(pieces) else survivors)
    return kept


def break_polygons(poly_a: Polygon, poly_b: Polygon) -> BreakResult:
    """Remove the edges of two polygons that fall inside each other.

    Every kept edge of each polygon is cut at its crossings with the
    other polygon's ring and at the other polygon's vertices lying on
    it, then the pieces lying inside the other polygon are discarded.
    An edge none of whose pieces is discarded is kept whole.  ``poly_a``
    wins ties on coincident edges.

    Parameters
    ----------
    poly_a, poly_b : Polygon
        Polygons to break.  Neither is modified.

    Returns
    -------
    BreakResult
        Both polygons with updated kept edges, and the crossing points
        in (edge of ``poly_a``, edge of ``poly_b``) order.
    """
    if not boxes_overlap(poly_a.bbox, poly_b.bbox):
        return BreakResult(poly_a, poly_b, [])

    groups_a, points = _cut(poly_a, poly_b)
    groups_b, _ = _cut(poly_b, poly_a)

    kept_a = _prune(groups_a, poly_a, poly_b, False)
    kept_b = _prune(groups_b, poly_b, poly_a, True)
    return BreakResult(poly_a.with_segments(kept_a), poly_b.with_segments(kept_b), points)


def _check_cancel(cancel: Optional[CancelCallback]) -> None:
    if cancel is not None and cancel():
        raise GenerationCancelled("polygon merge cancelled")


def multi_break(
    polygons: Sequence[Polygon],
    cancel: Optional[CancelCallback] = None,
) -> MultiBreakResult:
    """Break every pair of polygons and prune edges interior to any other.

    Pairs are visited as ``(i, j)`` with ``i < j`` in lexicographic
    order.  Afterwards each surviving edge is checked against every
    other polygon, since with three or more overlapping shapes an edge
    can be outside its pair partner and still inside a third polygon.

    Parameters
    ----------
    polygons : sequence of Polygon
        Polygons to merge.  Not modified.
    cancel : callable, optional
        Polled between pairs; when it returns true the merge stops with
        `GenerationCancelled`.

    Returns
    -------
    MultiBreakResult
        New polygons in input order and all crossing points found.
    """
    started = time.perf_counter()
    polys = list(polygons)
    points: List[Point] = []

    for i in range(len(polys)):
        for j in range(i + 1, len(polys)):
            _check_cancel(cancel)
            result = break_polygons(polys[i], polys[j])
            polys[i], polys[j] = result.a, result.b
            points.extend(result.points)

    merged: List[Polygon] = []
    for i, poly in enumerate(polys):
        _check_cancel(cancel)
        others = [
            (j, other) for j, other in enumerate(polys)
            if j != i and boxes_overlap(poly.bbox, other.bbox)
        ]
        kept = [
            seg for seg in poly.segments
            if not any(is_interior(seg, poly, other, j < i) for j, other in others)
        ]
        merged.append(poly.with_segments(kept))

    logger.debug(
        "multi_break: %d polygons, %d crossings, %d kept edges in %.3f s",
        len(merged),
        len(points),
        sum(len(p.segments) for p in merged),
        time.perf_counter() - started,
    )
    return MultiBreakResult(merged, points)


def union(polygons: Sequence[Polygon], cancel: Optional[CancelCallback] = None) -> List[Segment]:
    """Merge ``polygons`` and return their outline as one flat edge list."""
    return multi_break(polygons, cancel=cancel).segments


def find_crossings(segments: Sequence[Segment]) -> List[Tuple[int, int, Intersection]]:
    """Brute-force list of every pair of segments whose interiors cross.

    Returns ``(i, j, intersection)`` triples with ``i < j``.  An empty
    result means the segments form a seam-free boundary.
    """
    crossings = []
    for i in range(len(segments)):
        for j in range(i + 1, len(segments)):
            hit = intersect(segments[i], segments[j])
            if hit is not None:
                crossings.append((i, j, hit))
    return crossings
