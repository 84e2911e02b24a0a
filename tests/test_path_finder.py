"""
Unit tests for patrol path generation.

Tests proximity deduplication, shuffling, the round-robin cursor and the
path finder interface.
"""

from collections import Counter
from itertools import combinations

import pytest
import numpy as np

from chinook_patrol.core.types import Location
from chinook_patrol.navigation import (
    MIN_WAYPOINT_SEPARATION,
    HostPathFinder,
    PathFinder,
    PatrolPath,
    PatrolPathGenerator,
    deduplicate_by_proximity,
)
from chinook_patrol.planning import EligibleWaypointSet


def at(x, z, y=0.0):
    return Location(float(x), float(y), float(z))


@pytest.fixture
def spread_points():
    """Create six waypoints far apart from each other."""
    return EligibleWaypointSet(tuple(at(x * 500.0, z * 500.0) for x in range(3) for z in range(2)))


@pytest.fixture
def clustered_points():
    """Create waypoints where several lie close together."""
    rng = np.random.default_rng(7)
    return EligibleWaypointSet(tuple(
        at(x, z) for x, z in rng.uniform(-400.0, 400.0, size=(40, 2))
    ))


class TestDeduplicateByProximity:
    """Test proximity deduplication."""

    def test_far_points_kept(self, spread_points):
        assert deduplicate_by_proximity(spread_points.points) == list(spread_points.points)

    def test_close_pair_keeps_earlier(self):
        first, second = at(0, 0), at(50, 0)
        assert deduplicate_by_proximity([first, second]) == [first]
        assert deduplicate_by_proximity([second, first]) == [second]

    def test_height_ignored(self):
        assert len(deduplicate_by_proximity([at(0, 0, y=0), at(0, 0, y=900)])) == 1

    def test_threshold_is_exclusive(self):
        assert len(deduplicate_by_proximity([at(0, 0), at(MIN_WAYPOINT_SEPARATION, 0)])) == 2
        assert len(deduplicate_by_proximity([at(0, 0), at(99.9, 0)])) == 1

    def test_chain_removed_from_the_end(self):
        """
        A, B, C spaced 80 apart on a line.

        C is removed for being near B, then B for being near A, so only A
        survives even though A and C are 160 apart.
        """
        a, b, c = at(0, 0), at(80, 0), at(160, 0)
        assert deduplicate_by_proximity([a, b, c]) == [a]

    def test_later_conflict_with_first(self):
        a, b, c = at(0, 0), at(150, 0), at(75, 0)
        assert deduplicate_by_proximity([a, b, c]) == [a, b]

    def test_exact_duplicates(self):
        point = at(10, 10)
        assert deduplicate_by_proximity([point, point, point]) == [point]

    def test_empty(self):
        assert deduplicate_by_proximity([]) == []

    def test_input_not_modified(self):
        points = [at(0, 0), at(10, 0)]
        deduplicate_by_proximity(points)
        assert len(points) == 2

    def test_custom_separation(self):
        points = [at(0, 0), at(150, 0)]
        assert len(deduplicate_by_proximity(points, min_separation=200.0)) == 1

    def test_postcondition(self, clustered_points):
        """Test that no two survivors are closer than the separation."""
        result = deduplicate_by_proximity(clustered_points.points)
        assert 0 < len(result) < len(clustered_points)
        for p, q in combinations(result, 2):
            assert p.distance_2d(q) >= MIN_WAYPOINT_SEPARATION


class TestPatrolPathGenerator:
    """Test path generation."""

    def test_contains_only_input_points(self, clustered_points):
        generator = PatrolPathGenerator(np.random.default_rng(1))
        for _ in range(20):
            path = generator.generate(clustered_points)
            assert set(path.sequence) <= set(clustered_points.points)
            assert len(set(path.sequence)) == len(path)
            for p, q in combinations(path.sequence, 2):
                assert p.distance_2d(q) >= MIN_WAYPOINT_SEPARATION

    def test_spread_points_all_visited(self, spread_points):
        path = PatrolPathGenerator(np.random.default_rng(3)).generate(spread_points)
        assert sorted(path.sequence, key=lambda p: (p.x, p.z)) == list(spread_points.points)

    def test_close_pair_keeps_one(self):
        """Two points 50 apart produce a path with exactly one of them."""
        x, y = at(0, 0), at(30, 40)
        for seed in range(20):
            path = PatrolPathGenerator(np.random.default_rng(seed)).generate(
                EligibleWaypointSet((x, y))
            )
            assert len(path) == 1
            assert path.sequence[0] in (x, y)

    def test_eligible_set_not_modified(self, spread_points):
        before = spread_points.points
        PatrolPathGenerator(np.random.default_rng(0)).generate(spread_points)
        assert spread_points.points == before

    def test_empty_eligible_set(self):
        path = PatrolPathGenerator(np.random.default_rng(0)).generate(EligibleWaypointSet())
        assert len(path) == 0

    def test_same_seed_same_path(self, spread_points):
        first = PatrolPathGenerator(np.random.default_rng(11)).generate(spread_points)
        second = PatrolPathGenerator(np.random.default_rng(11)).generate(spread_points)
        assert first.sequence == second.sequence

    def test_orderings_vary_across_seeds(self, spread_points):
        orderings = {
            PatrolPathGenerator(np.random.default_rng(seed)).generate(spread_points).sequence
            for seed in range(50)
        }
        assert len(orderings) > 1

    def test_sequential_paths_are_independent(self, spread_points):
        """Paths generated one after another from one generator differ."""
        generator = PatrolPathGenerator(np.random.default_rng(0))
        paths = [generator.generate(spread_points) for _ in range(5)]
        assert len({path.sequence for path in paths}) > 1
        assert len({id(path) for path in paths}) == 5

    def test_shuffle_is_uniform(self):
        """Each point leads the path about equally often."""
        points = EligibleWaypointSet((at(0, 0), at(500, 0), at(1000, 0)))
        generator = PatrolPathGenerator(np.random.default_rng(2024))
        trials = 3000

        leaders = Counter(generator.generate(points).sequence[0] for _ in range(trials))

        assert set(leaders) == set(points.points)
        for count in leaders.values():
            assert abs(count - trials / 3) < 150


class TestPatrolPath:
    """Test the round-robin cursor."""

    def test_returns_in_order(self):
        points = [at(0, 0), at(500, 0), at(1000, 0)]
        path = PatrolPath(points)
        assert [path.next_waypoint() for _ in range(3)] == points

    def test_wraparound(self):
        """Call N+1 returns the same point as call 1."""
        points = [at(0, 0), at(500, 0), at(1000, 0), at(0, 500)]
        path = PatrolPath(points)
        results = [path.next_waypoint() for _ in range(len(points) + 1)]
        assert results[0] == results[-1]
        assert results[:len(points)] == points

    def test_cursor_wraps_lazily(self):
        path = PatrolPath([at(0, 0), at(500, 0)])
        path.next_waypoint()
        path.next_waypoint()
        assert path.cursor == 2
        assert path.next_waypoint() == at(0, 0)
        assert path.cursor == 1

    def test_many_cycles(self):
        points = [at(0, 0), at(500, 0), at(1000, 0)]
        path = PatrolPath(points)
        results = [path.next_waypoint() for _ in range(3 * 100)]
        assert results == points * 100

    def test_single_point(self):
        path = PatrolPath([at(5, 5)])
        assert [path.next_waypoint() for _ in range(3)] == [at(5, 5)] * 3

    def test_empty_path_returns_sentinel(self):
        path = PatrolPath([])
        for _ in range(10):
            assert path.next_waypoint() == Location.ZERO
        assert path.cursor == 0

    def test_sequence_read_only(self):
        path = PatrolPath([at(0, 0)])
        assert isinstance(path.sequence, tuple)


class TestPathFinderInterface:
    """Test that path finders are interchangeable."""

    def test_abstract(self):
        with pytest.raises(TypeError):
            PathFinder()

    @pytest.mark.parametrize("factory", [
        lambda points: PatrolPath(points),
        lambda points: HostPathFinder(points, np.random.default_rng(0)),
    ])
    def test_implementations(self, factory):
        points = [at(0, 0), at(500, 0)]
        finder = factory(points)
        assert isinstance(finder, PathFinder)
        assert finder.next_waypoint() in points

    def test_host_path_finder_empty(self):
        assert HostPathFinder([], np.random.default_rng(0)).next_waypoint() == Location.ZERO
