"""Road network geometry.

Builds drawable road outlines from a graph of segments: every segment
is padded into a capsule shaped envelope and overlapping envelopes are
merged into a single seam-free boundary.
"""

from .errors import (
    DegenerateSegmentError,
    GenerationCancelled,
    InvalidParameterError,
    RoadNetError,
)
from .geometry import Envelope, Point, Polygon, Segment, break_polygons, multi_break, union
from .graph import Graph
from .world import MergePolicy, RoadConfig, World

__all__ = [
    "DegenerateSegmentError",
    "GenerationCancelled",
    "InvalidParameterError",
    "RoadNetError",
    "Envelope",
    "Point",
    "Polygon",
    "Segment",
    "break_polygons",
    "multi_break",
    "union",
    "Graph",
    "MergePolicy",
    "RoadConfig",
    "World",
]
