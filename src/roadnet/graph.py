"""Read-only graph snapshot.

The road network is built from whatever graph the editor maintains.
The core only needs an ordered sequence of segments, described by the
`GraphLike` protocol.  `Graph` is a small immutable implementation used
by tests, the demo and callers that do not bring their own graph.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Protocol, Sequence, Tuple

from .geometry.primitives import Point, Segment


class GraphLike(Protocol):
    """Anything exposing an ordered sequence of segments."""

    @property
    def segments(self) -> Sequence[Segment]:
        ...


@dataclass(frozen=True)
class Graph:
    """Immutable snapshot of graph points and segments.

    Segment order is significant: envelopes and boundary edges are
    produced in the same order.
    """

    points: Tuple[Point, ...] = ()
    segments: Tuple[Segment, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "points", tuple(self.points))
        object.__setattr__(self, "segments", tuple(self.segments))

    @classmethod
    def from_segments(cls, segments: Iterable[Segment]) -> Graph:
        """Build a graph whose points are the distinct segment endpoints."""
        segments = tuple(segments)
        points: List[Point] = []
        for seg in segments:
            for p in (seg.p1, seg.p2):
                if p not in points:
                    points.append(p)
        return cls(tuple(points), segments)

    @classmethod
    def from_coordinates(
        cls, pairs: Iterable[Tuple[Tuple[float, float], Tuple[float, float]]]
    ) -> Graph:
        """Build a graph from ``((x1, y1), (x2, y2))`` pairs."""
        return cls.from_segments(Segment(Point(*a), Point(*b)) for a, b in pairs)

    def __len__(self) -> int:
        return len(self.segments)
