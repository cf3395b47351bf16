"""Road markings.

A marking is an oriented rectangle laid on the road: a support segment
of length ``height`` along the marking direction, padded to ``width``
by a square-capped envelope.  Concrete kinds are registered by name so
that editors can create them without a hand-written switch.

Road dimensions come from an explicit `World` argument
(`marking_for_world`); nothing here reads global state.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Dict, List, Tuple, Type

from .errors import InvalidParameterError
from .geometry.envelope import Envelope, validate_width
from .geometry.primitives import Point, Segment, Vector, angle, translate

if TYPE_CHECKING:
    from .world import World

MARKING_KINDS: Dict[str, Type["Marking"]] = {}


def register_marking(kind: str) -> Callable[[Type["Marking"]], Type["Marking"]]:
    """Class decorator adding a marking class to the kind registry."""
    def decorator(cls: Type[Marking]) -> Type[Marking]:
        if kind in MARKING_KINDS:
            raise InvalidParameterError(f"marking kind {kind!r} already registered")
        cls.kind = kind
        MARKING_KINDS[kind] = cls
        return cls
    return decorator


@register_marking("marking")
class Marking:
    """Oriented rectangular marking.

    Parameters
    ----------
    center : Point
        Centre of the marking.
    direction : Vector
        Direction of the support segment (any non-zero length).
    width : float
        Extent across the support segment.
    height : float
        Length of the support segment.
    """

    kind = "marking"
    # Default (width, height) as fractions of the road width.
    size_factors: Tuple[float, float] = (0.5, 0.5)

    def __init__(self, center: Point, direction: Vector, width: float, height: float):
        self.center = center
        self.direction = direction
        self.width = validate_width(width)
        self.height = validate_width(height)

        theta = angle(direction)
        self.support = Segment(
            translate(center, theta, self.height / 2),
            translate(center, theta, -self.height / 2),
        )
        self.poly = Envelope(self.support, self.width, 0).poly

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(center=({self.center.x}, {self.center.y}), "
            f"width={self.width}, height={self.height})"
        )


@register_marking("zebra")
class Zebra(Marking):
    size_factors = (1.0, 0.5)


@register_marking("stop")
class Stop(Marking):
    pass


@register_marking("start")
class Start(Marking):
    pass


@register_marking("light")
class Light(Marking):
    size_factors = (0.5, 1 / 18)


@register_marking("parking")
class Parking(Marking):
    size_factors = (1.0, 0.5)


@register_marking("target")
class Target(Marking):
    pass


@register_marking("yield")
class Yield(Marking):
    pass


def _marking_class(kind: str) -> Type[Marking]:
    try:
        return MARKING_KINDS[kind]
    except KeyError:
        known = ", ".join(sorted(MARKING_KINDS))
        raise InvalidParameterError(f"unknown marking kind {kind!r}; known kinds: {known}") from None


def create_marking(kind: str, center: Point, direction: Vector, width: float, height: float) -> Marking:
    """Instantiate the marking class registered under ``kind``."""
    return _marking_class(kind)(center, direction, width, height)


def marking_for_world(kind: str, world: World, center: Point, direction: Vector) -> Marking:
    """Create a marking sized from ``world``'s road width.

    A zebra crossing, for example, spans the full road width and is half
    a road width deep.
    """
    cls = _marking_class(kind)
    width_factor, height_factor = cls.size_factors
    return cls(center, direction, world.road_width * width_factor, world.road_width * height_factor)


def marking_kinds() -> List[str]:
    return sorted(MARKING_KINDS)
