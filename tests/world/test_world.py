"""Unit tests for World generation."""

import logging
from types import SimpleNamespace

import pytest

from roadnet.errors import (
    DegenerateSegmentError,
    GenerationCancelled,
    InvalidParameterError,
)
from roadnet.geometry.boundary import find_crossings
from roadnet.geometry.primitives import Point, Segment
from roadnet.graph import Graph
from roadnet.world import MergePolicy, RoadConfig, World


def crossing_graph():
    return Graph.from_coordinates([((0, 0), (20, 0)), ((10, -10), (10, 10))])


def runs_at(segments, y):
    """Sorted x-intervals of the horizontal segments lying on the line at ``y``."""
    return sorted(
        tuple(sorted((s.p1.x, s.p2.x)))
        for s in segments
        if s.p1.y == pytest.approx(y) and s.p2.y == pytest.approx(y)
    )


def endpoint_degrees(segments):
    degrees = {}
    for seg in segments:
        for p in (seg.p1, seg.p2):
            key = (round(p.x, 6), round(p.y, 6))
            degrees[key] = degrees.get(key, 0) + 1
    return degrees


class MutableGraph:
    """Graph stand-in whose segment list can be edited between generations."""

    def __init__(self, segments):
        self.segments = list(segments)


class TestWorld:
    """Test suite for World."""

    def test_empty_graph(self):
        world = World(Graph(), road_width=4, road_roundness=0)
        assert world.envelopes == []
        assert world.boundary == []
        assert world.generated

    def test_single_segment(self):
        graph = Graph.from_coordinates([((0, 0), (10, 0))])
        world = World(graph, road_width=4, road_roundness=0)
        assert len(world.envelopes) == 1
        assert world.boundary == list(world.envelopes[0].poly.edges)

    def test_touching_segments_keep_all_edges(self):
        """Two collinear roads meeting at (10, 0) have no seam to remove."""
        graph = Graph.from_coordinates([((0, 0), (10, 0)), ((10, 0), (20, 0))])
        world = World(graph, road_width=4, road_roundness=0)
        assert [len(env.poly.segments) for env in world.envelopes] == [4, 4]
        assert len(world.boundary) == 8
        assert world.intersections == []

    def test_crossing_segments_are_merged(self):
        world = World(crossing_graph(), road_width=4, road_roundness=0)
        assert len(world.boundary) == 12
        assert len(world.intersections) == 4
        assert find_crossings(world.boundary) == []
        horizontal, vertical = world.envelopes
        for seg in horizontal.poly.segments:
            assert not vertical.poly.contains_segment(seg)

    @pytest.mark.parametrize(
        "second, span",
        [
            (((-50, 0), (60, 0)), (-50, 100)),
            (((50, 0), (150, 0)), (0, 150)),
        ],
    )
    def test_partially_overlapping_skeletons(self, second, span):
        """Collinear envelopes merge into one outline without gaps or doubled runs."""
        graph = Graph.from_coordinates([((0, 0), (100, 0)), second])
        world = World(graph, road_width=20, road_roundness=0)

        for y in (10, -10):
            runs = runs_at(world.boundary, y)
            assert runs[0][0] == pytest.approx(span[0])
            assert runs[-1][1] == pytest.approx(span[1])
            # Consecutive runs meet end to end
            for (_, end), (start, _) in zip(runs, runs[1:]):
                assert start == pytest.approx(end)
            assert sum(b - a for a, b in runs) == pytest.approx(span[1] - span[0])

        assert find_crossings(world.boundary) == []
        # A closed outline visits every vertex an even number of times
        assert all(d % 2 == 0 for d in endpoint_degrees(world.boundary).values())

    def test_envelopes_follow_graph_order(self):
        graph = crossing_graph()
        world = World(graph, road_width=4, road_roundness=2)
        assert [env.skeleton for env in world.envelopes] == list(graph.segments)
        assert world.boundary == [
            seg for env in world.envelopes for seg in env.poly.segments
        ]

    def test_generate_is_deterministic(self):
        graph = Graph.from_coordinates([
            ((0, 0), (30, 0)), ((30, 0), (30, 30)), ((0, 0), (30, 30)), ((15, -5), (15, 35)),
        ])
        world = World(graph, road_width=6, road_roundness=5)
        first = (list(world.envelopes), list(world.boundary))
        world.generate()
        second = (list(world.envelopes), list(world.boundary))
        assert first == second
        assert World(graph, road_width=6, road_roundness=5).boundary == first[1]

    def test_union_policy(self):
        graph = crossing_graph()
        merged = World(graph, road_width=4, road_roundness=3)
        flat = World(graph, road_width=4, road_roundness=3, merge_policy="union")
        assert flat.merge_policy is MergePolicy.UNION
        assert flat.boundary == merged.boundary
        # Envelopes keep their full polygons under the union policy
        for env in flat.envelopes:
            assert env.poly.segments == env.poly.edges

    def test_graph_is_not_modified(self):
        graph = crossing_graph()
        before = graph.segments
        World(graph, road_width=4, road_roundness=0)
        assert graph.segments is before

    def test_regenerate_after_graph_edit(self):
        graph = MutableGraph([Segment(Point(0, 0), Point(10, 0))])
        world = World(graph, road_width=4, road_roundness=0)
        assert len(world.boundary) == 4

        # No automatic invalidation
        graph.segments.append(Segment(Point(5, -10), Point(5, 10)))
        assert len(world.envelopes) == 1

        world.generate()
        assert len(world.envelopes) == 2
        assert len(world.boundary) == 12

    def test_parameter_change_then_generate(self):
        world = World(crossing_graph(), road_width=4, road_roundness=0)
        world.road_width = 8
        world.generate()
        assert all(env.width == 8 for env in world.envelopes)

    def test_failed_generation_keeps_previous_state(self):
        graph = MutableGraph([Segment(Point(0, 0), Point(10, 0))])
        world = World(graph, road_width=4, road_roundness=0)
        boundary = list(world.boundary)

        graph.segments.append(SimpleNamespace(p1=Point(3, 3), p2=Point(3, 3)))
        with pytest.raises(DegenerateSegmentError):
            world.generate()
        assert world.boundary == boundary
        assert len(world.envelopes) == 1

    def test_cancelled_generation_keeps_previous_state(self):
        world = World(crossing_graph(), road_width=4, road_roundness=0)
        boundary = list(world.boundary)
        with pytest.raises(GenerationCancelled):
            world.generate(cancel=lambda: True)
        assert world.boundary == boundary

    @pytest.mark.parametrize("kwargs", [
        {"road_width": 0},
        {"road_width": -5},
        {"road_roundness": -1},
        {"merge_policy": "bogus"},
    ])
    def test_invalid_parameters(self, kwargs):
        with pytest.raises(InvalidParameterError):
            World(Graph(), **kwargs)


class TestRoadConfig:
    """Test suite for RoadConfig."""

    def test_defaults(self):
        config = RoadConfig()
        assert config.road_width == 100.0
        assert config.road_roundness == 10
        assert config.merge_policy is MergePolicy.MULTI_BREAK

    def test_from_dict(self):
        config = RoadConfig.from_dict({"road": {"width": 4, "roundness": 0, "merge_policy": "union"}})
        assert config == RoadConfig(4.0, 0, MergePolicy.UNION)
        # The road section alone is accepted too
        assert RoadConfig.from_dict({"width": 4, "roundness": 0, "merge_policy": "union"}) == config

    def test_from_dict_partial(self):
        config = RoadConfig.from_dict({"road": {"width": 12}})
        assert config.road_width == 12.0
        assert config.road_roundness == 10

    def test_from_dict_invalid(self):
        with pytest.raises(InvalidParameterError):
            RoadConfig.from_dict({"road": {"roundness": 1.5}})
        with pytest.raises(InvalidParameterError):
            RoadConfig.from_dict({"road": [1, 2]})

    def test_world_from_config(self):
        world = World.from_config(crossing_graph(), {"road": {"width": 4, "roundness": 0}})
        assert world.road_width == 4.0
        assert len(world.boundary) == 12

    def test_log_level_from_config(self, caplog):
        names = ("roadnet.world", "roadnet.geometry.boundary")
        previous = {name: logging.getLogger(name).level for name in names}
        try:
            config = {"road": {"width": 4, "roundness": 0}, "logging": {"level": "debug"}}
            assert RoadConfig.from_dict(config).log_level == "DEBUG"
            with caplog.at_level(logging.DEBUG):
                World.from_config(crossing_graph(), config)
            for name in names:
                assert logging.getLogger(name).level == logging.DEBUG
            assert any(r.message.startswith("multi_break:") for r in caplog.records)
        finally:
            for name, level in previous.items():
                logging.getLogger(name).setLevel(level)

    def test_invalid_log_level(self):
        with pytest.raises(InvalidParameterError):
            RoadConfig(log_level="loud")
        with pytest.raises(InvalidParameterError):
            RoadConfig.from_dict({"road": {}, "logging": ["DEBUG"]})
