"""Geometry core: primitives, polygons, envelopes and boundary merging."""

from .primitives import (
    EPSILON,
    Intersection,
    Point,
    Segment,
    Vector,
    add,
    angle,
    average,
    distance,
    dot,
    intersect,
    lerp,
    lerp_2d,
    magnitude,
    normalize,
    perpendicular,
    scale,
    subtract,
    translate,
)
from .polygon import Location, Polygon, contains_point, contains_segment, edges_of
from .envelope import Envelope
from .boundary import (
    BreakResult,
    MultiBreakResult,
    break_polygons,
    find_crossings,
    multi_break,
    union,
)

__all__ = [
    "EPSILON",
    "Intersection",
    "Point",
    "Segment",
    "Vector",
    "add",
    "angle",
    "average",
    "distance",
    "dot",
    "intersect",
    "lerp",
    "lerp_2d",
    "magnitude",
    "normalize",
    "perpendicular",
    "scale",
    "subtract",
    "translate",
    "Location",
    "Polygon",
    "contains_point",
    "contains_segment",
    "edges_of",
    "Envelope",
    "BreakResult",
    "MultiBreakResult",
    "break_polygons",
    "find_crossings",
    "multi_break",
    "union",
]
