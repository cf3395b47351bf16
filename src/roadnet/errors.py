"""Exceptions raised by the road network geometry core.

Geometry construction errors are local to the envelope or polygon
being built.  `World.generate` lets them propagate so that a bad
segment fails the whole generation instead of leaving a partially
merged boundary behind.  A pair of segments that does not cross is
not an error: `intersect` simply returns ``None``.
"""


class RoadNetError(Exception):
    """Base class for all road network errors."""


class DegenerateSegmentError(RoadNetError, ValueError):
    """A segment has coincident endpoints, so its direction is undefined."""


class InvalidParameterError(RoadNetError, ValueError):
    """A width, roundness, vertex count or configuration value is out of range."""


class GenerationCancelled(RoadNetError):
    """The cancel callback passed to a long running merge returned true."""
