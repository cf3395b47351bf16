"""World orchestration.

`World` turns a graph snapshot into drawable road geometry: one
envelope per graph segment, merged into a seamless outline.  Nothing
is observed or cached across graph edits; callers re-run `generate`
after changing the graph or the road parameters.

Two merge policies are available:

``MULTI_BREAK`` (default)
    Each envelope keeps its own pruned edge set; `World.boundary` holds
    the same edges flattened in envelope order.
``UNION``
    Envelopes keep their full polygons and only `World.boundary`
    carries the merged outline.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, replace
from enum import Enum
from pathlib import Path
from typing import Any, List, Mapping, Optional, Union

from .errors import InvalidParameterError, RoadNetError
from .geometry.boundary import CancelCallback, multi_break, union
from .geometry.envelope import Envelope, validate_roundness, validate_width
from .geometry.primitives import Point, Segment
from .graph import GraphLike
from .utils.config import load_config
from .utils.logging import get_logger, resolve_level

logger = get_logger(__name__)

# Loggers whose level follows `RoadConfig.log_level`.
CONFIGURABLE_LOGGERS = (__name__, "roadnet.geometry.boundary")


class MergePolicy(str, Enum):
    """How `World.generate` merges envelopes."""

    MULTI_BREAK = "multi_break"
    UNION = "union"

    @classmethod
    def parse(cls, value: Union[str, MergePolicy]) -> MergePolicy:
        try:
            return cls(value)
        except ValueError as exc:
            choices = ", ".join(p.value for p in cls)
            raise InvalidParameterError(
                f"unknown merge policy {value!r}; expected one of {choices}"
            ) from exc


@dataclass(frozen=True)
class RoadConfig:
    """Validated road generation parameters.

    ``log_level`` (a level name such as ``"DEBUG"``) is applied to the
    generation loggers when a `World` is built; ``None`` leaves them as
    they are.
    """

    road_width: float = 100.0
    road_roundness: int = 10
    merge_policy: MergePolicy = MergePolicy.MULTI_BREAK
    log_level: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "road_width", validate_width(self.road_width))
        object.__setattr__(self, "road_roundness", validate_roundness(self.road_roundness))
        object.__setattr__(self, "merge_policy", MergePolicy.parse(self.merge_policy))
        if self.log_level is not None:
            object.__setattr__(self, "log_level", logging.getLevelName(resolve_level(self.log_level)))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> RoadConfig:
        """Build from a mapping such as the one in ``configs/world.yaml``.

        Accepts either the full file layout (keys under ``road``, plus an
        optional ``logging`` section) or the ``road`` section itself.
        Missing keys fall back to defaults.
        """
        section = data.get("road", data)
        if not isinstance(section, Mapping):
            raise InvalidParameterError("'road' section must be a mapping")
        log_section = data.get("logging") or {}
        if not isinstance(log_section, Mapping):
            raise InvalidParameterError("'logging' section must be a mapping")
        defaults = cls()
        return cls(
            road_width=section.get("width", defaults.road_width),
            road_roundness=section.get("roundness", defaults.road_roundness),
            merge_policy=section.get("merge_policy", defaults.merge_policy),
            log_level=log_section.get("level"),
        )

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> RoadConfig:
        return cls.from_dict(load_config(path))


class World:
    """Road geometry generated from a graph snapshot.

    Parameters
    ----------
    graph : GraphLike
        Source of the ordered segments.  Never modified.
    road_width : float
        Full road width.
    road_roundness : int
        Facets per rounded envelope cap.
    merge_policy : MergePolicy or str
        ``"multi_break"`` (default) or ``"union"``.
    log_level : str, optional
        Level for the generation loggers, e.g. ``"DEBUG"``.

    The constructor runs `generate` once, so a new world is ready to
    draw.
    """

    def __init__(
        self,
        graph: GraphLike,
        road_width: float = 100,
        road_roundness: int = 10,
        merge_policy: Union[MergePolicy, str] = MergePolicy.MULTI_BREAK,
        log_level: Optional[str] = None,
    ):
        self.graph = graph
        self.config = RoadConfig(road_width, road_roundness, merge_policy, log_level)
        if self.config.log_level is not None:
            for name in CONFIGURABLE_LOGGERS:
                get_logger(name, self.config.log_level)

        self.envelopes: List[Envelope] = []
        self.boundary: List[Segment] = []
        self.intersections: List[Point] = []
        self.generated = False

        self.generate()

    @classmethod
    def from_config(cls, graph: GraphLike, config: Union[RoadConfig, Mapping[str, Any]]) -> World:
        if not isinstance(config, RoadConfig):
            config = RoadConfig.from_dict(config)
        return cls(
            graph, config.road_width, config.road_roundness, config.merge_policy, config.log_level
        )

    @property
    def road_width(self) -> float:
        return self.config.road_width

    @road_width.setter
    def road_width(self, value: float) -> None:
        self.config = replace(self.config, road_width=value)

    @property
    def road_roundness(self) -> int:
        return self.config.road_roundness

    @road_roundness.setter
    def road_roundness(self, value: int) -> None:
        self.config = replace(self.config, road_roundness=value)

    @property
    def merge_policy(self) -> MergePolicy:
        return self.config.merge_policy

    @merge_policy.setter
    def merge_policy(self, value: Union[MergePolicy, str]) -> None:
        self.config = replace(self.config, merge_policy=value)

    def _build_envelopes(self) -> List[Envelope]:
        envelopes = []
        for index, seg in enumerate(self.graph.segments):
            try:
                envelopes.append(Envelope(seg, self.road_width, self.road_roundness))
            except RoadNetError:
                logger.error("Cannot build envelope for segment %d (%s)", index, seg)
                raise
        return envelopes

    def generate(self, cancel: Optional[CancelCallback] = None) -> List[Segment]:
        """Rebuild envelopes and boundary from the current graph.

        Previous results are replaced only once the new generation has
        completed, so a failure or cancellation leaves them untouched.

        Parameters
        ----------
        cancel : callable, optional
            Polled during the merge; returning true aborts with
            `GenerationCancelled`.

        Returns
        -------
        list of Segment
            The new boundary.
        """
        started = time.perf_counter()
        envelopes = self._build_envelopes()
        intersections: List[Point] = []

        if len(envelopes) == 0:
            boundary: List[Segment] = []
        elif len(envelopes) == 1:
            boundary = list(envelopes[0].poly.segments)
        elif self.merge_policy is MergePolicy.UNION:
            boundary = union([env.poly for env in envelopes], cancel=cancel)
        else:
            result = multi_break([env.poly for env in envelopes], cancel=cancel)
            envelopes = [
                env.with_segments(poly.segments)
                for env, poly in zip(envelopes, result.polygons)
            ]
            boundary = result.segments
            intersections = result.points

        self.envelopes = envelopes
        self.boundary = boundary
        self.intersections = intersections
        self.generated = True

        logger.info(
            "Generated %d envelopes, %d boundary edges (%s)",
            len(self.envelopes),
            len(self.boundary),
            self.merge_policy.value,
        )
        logger.debug("generate() took %.3f s", time.perf_counter() - started)
        return self.boundary
