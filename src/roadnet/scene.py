"""Hand-off of generated geometry to a renderer.

The core does not draw.  `build_layers` packages a world's geometry
into ordered layers, each paired with a `Style` that a canvas renderer
can apply.  The geometry in a layer never depends on its style, so a
renderer may restyle freely.  `edges_frame` flattens segments into a
table for renderers and tools that prefer columnar data.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

import pandas as pd

from .geometry.polygon import Polygon
from .geometry.primitives import Segment
from .world import World


@dataclass(frozen=True)
class Style:
    """Drawing options understood by the renderer."""

    color: Optional[str] = None
    width: Optional[float] = None
    dash: Tuple[float, ...] = ()
    fill: Optional[str] = None
    stroke: Optional[str] = None
    line_width: Optional[float] = None


DEFAULT_STYLES: Dict[str, Style] = {
    "envelopes": Style(fill="#BBB", stroke="#BBB", line_width=15),
    "skeleton": Style(color="white", width=3, dash=(10, 10)),
    "boundary": Style(color="white", width=4),
}


@dataclass(frozen=True)
class Layer:
    """One drawable layer: polygons and/or segments plus their style."""

    name: str
    style: Style
    polygons: Tuple[Polygon, ...] = ()
    segments: Tuple[Segment, ...] = ()


def build_layers(world: World, styles: Optional[Mapping[str, Style]] = None) -> List[Layer]:
    """Layers for ``world`` in drawing order: envelopes, skeleton, boundary.

    Parameters
    ----------
    world : World
        A generated world.
    styles : mapping, optional
        Overrides for entries of `DEFAULT_STYLES`, keyed by layer name.

    Returns
    -------
    list of Layer
    """
    chosen = dict(DEFAULT_STYLES)
    if styles:
        chosen.update(styles)
    return [
        Layer("envelopes", chosen["envelopes"], polygons=tuple(env.poly for env in world.envelopes)),
        Layer("skeleton", chosen["skeleton"], segments=tuple(world.graph.segments)),
        Layer("boundary", chosen["boundary"], segments=tuple(world.boundary)),
    ]


def edges_frame(segments: Sequence[Segment]) -> pd.DataFrame:
    """Segments as a DataFrame with columns ``x1, y1, x2, y2``, in order."""
    rows = [(s.p1.x, s.p1.y, s.p2.x, s.p2.y) for s in segments]
    return pd.DataFrame(rows, columns=["x1", "y1", "x2", "y2"], dtype=float)
