"""
Testy dla budowy ścieżki.

Testuje:
- A* (find_path): najkrótsza trasa, omijanie goblinów, brak trasy
- random walk: długość, unikalność, sąsiedztwo, determinizm
- A* z punktami pośrednimi i tryb jawny start/goal
- Błędy konfiguracji i PathGenerationFailed
"""

import heapq
import itertools
import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from hexdungeon.core.errors import ConfigurationError, PathGenerationFailed
from hexdungeon.core.hex_coord import HexCoord
from hexdungeon.core.hex_grid import HexGrid
from hexdungeon.core.pathfinding import (
    DEFAULT_STEP_TOLERANCE, _PathNode, build_astar_path, build_path,
    build_random_walk_path, find_path,
)
from hexdungeon.core.rng import GameRNG


# ═══════════════════════════════════════════════════════════════════════════
# FIXTURES
# ═══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def rng():
    """Deterministyczny RNG."""
    return GameRNG(seed=12345)


@pytest.fixture
def grid():
    return HexGrid.generate(radius=6, cell_size=2.5)


def idx(grid, q, r):
    return grid.cell_at(HexCoord(q, r)).index


def assert_valid_path(grid, path, length):
    """Niezmienniki ścieżki: długość, unikalność, sąsiedztwo, oznaczenia."""
    cells = list(path)
    assert len(cells) == length
    assert len(set(cells)) == length
    for a, b in zip(cells, cells[1:]):
        assert grid.world_distance(a, b) <= path.step_limit
    for position, cell_index in enumerate(cells):
        assert grid[cell_index].is_path
        assert grid[cell_index].path_index == position
    assert sum(1 for c in grid if c.is_path) == length


# ═══════════════════════════════════════════════════════════════════════════
# TEST: A*
# ═══════════════════════════════════════════════════════════════════════════

def test_find_path_straight_line(grid):
    route = find_path(grid, grid.center_cell().index, idx(grid, -6, 0))
    assert len(route) == 7
    assert route[0] == grid.center_cell().index
    assert route[-1] == idx(grid, -6, 0)


def test_find_path_same_cell(grid):
    assert find_path(grid, 5, 5) == [5]


def test_find_path_blocked_goal(grid):
    assert find_path(grid, 0, 10, blocked={10}) == []


def test_find_path_does_not_mutate_cells(grid):
    find_path(grid, 0, 100)
    assert not any(c.is_path for c in grid)


def test_find_path_avoids_expensive_hazard(grid):
    start, goal, middle = idx(grid, 0, 0), idx(grid, 2, 0), idx(grid, 1, 0)

    direct = find_path(grid, start, goal)
    assert direct == [start, middle, goal]

    detour = find_path(grid, start, goal, hazard_cells=frozenset({middle}), hazard_cost=10.0)
    assert middle not in detour
    assert len(detour) == 4


def test_path_node_tie_prefers_latest_entry():
    """Przy równym f_cost heap zwraca węzeł dodany najpóźniej."""
    sequence = itertools.count()
    heap = []
    for index in (10, 11, 12):
        heapq.heappush(heap, _PathNode(2.0, -next(sequence), 1.0, index))
    heapq.heappush(heap, _PathNode(1.5, -next(sequence), 1.0, 99))

    assert [heapq.heappop(heap).index for _ in range(4)] == [99, 12, 11, 10]


def test_find_path_equal_routes_use_latest_relaxed(grid):
    # Dwie trasy o identycznym koszcie: przez (1, -1) albo przez (1, 0)
    start, goal = idx(grid, 0, 0), idx(grid, 2, -1)
    upper, lower = idx(grid, 1, -1), idx(grid, 1, 0)

    neighbours = grid.adjacency(grid.neighbor_spacing * DEFAULT_STEP_TOLERANCE)[start]
    latest = max(upper, lower, key=neighbours.index)

    assert find_path(grid, start, goal) == [start, latest, goal]


def test_find_path_unreachable_when_walled_off(grid):
    corner = idx(grid, 6, 0)
    wall = {n.index for n in grid if n.coord.distance(HexCoord(6, 0)) == 1}
    assert find_path(grid, grid.center_cell().index, corner, blocked=wall) == []


# ═══════════════════════════════════════════════════════════════════════════
# TEST: RANDOM WALK
# ═══════════════════════════════════════════════════════════════════════════

def test_random_walk_builds_full_path(grid, rng):
    path = build_random_walk_path(grid, 50, rng)
    assert_valid_path(grid, path, 50)
    assert path.algorithm == "random_walk"


def test_random_walk_is_deterministic():
    a = build_random_walk_path(HexGrid.generate(6, 2.5), 50, GameRNG(99))
    b = build_random_walk_path(HexGrid.generate(6, 2.5), 50, GameRNG(99))
    assert a.cell_indices == b.cell_indices


def test_random_walk_uses_start_index(grid, rng):
    start = grid.center_cell().index
    path = build_random_walk_path(grid, 6, rng, start_index=start)
    assert path.start == start


def test_random_walk_fails_loudly(grid, rng):
    """Próg mniejszy niż odstęp sąsiadów = brak kandydatów."""
    with pytest.raises(PathGenerationFailed) as info:
        build_random_walk_path(grid, 10, rng, step_limit=0.1, max_attempts=5)
    assert info.value.target_length == 10
    assert info.value.best_length == 1
    assert not any(c.is_path for c in grid)


def test_random_walk_rejects_zero_candidates(grid, rng):
    with pytest.raises(ConfigurationError):
        build_random_walk_path(grid, 10, rng, candidates=0)


# ═══════════════════════════════════════════════════════════════════════════
# TEST: A* ŚCIEŻKA PLANSZY
# ═══════════════════════════════════════════════════════════════════════════

def test_astar_waypoints_build_full_path(grid, rng):
    path = build_astar_path(grid, 50, rng)
    assert_valid_path(grid, path, 50)
    assert path.algorithm == "astar"
    assert grid[path.start] in grid.extremal_cells()


def test_astar_explicit_endpoints(grid, rng):
    start, goal = grid.center_cell().index, idx(grid, -6, 0)
    path = build_astar_path(grid, 7, rng, start_index=start, goal_index=goal)
    assert_valid_path(grid, path, 7)
    assert (path.start, path.goal) == (start, goal)


def test_astar_explicit_endpoints_wrong_length(grid, rng):
    start, goal = grid.center_cell().index, idx(grid, -6, 0)
    with pytest.raises(PathGenerationFailed):
        build_astar_path(grid, 8, rng, start_index=start, goal_index=goal)


# ═══════════════════════════════════════════════════════════════════════════
# TEST: DISPATCH I WALIDACJA
# ═══════════════════════════════════════════════════════════════════════════

@pytest.mark.parametrize("algorithm", ["random_walk", "astar"])
def test_build_path_dispatch(grid, rng, algorithm):
    path = build_path(grid, 30, rng, algorithm=algorithm)
    assert_valid_path(grid, path, 30)


def test_build_path_unknown_algorithm(grid, rng):
    with pytest.raises(ConfigurationError):
        build_path(grid, 10, rng, algorithm="dijkstra")


@pytest.mark.parametrize("length", [0, 1, 128])
def test_build_path_rejects_bad_length(grid, rng, length):
    with pytest.raises(ConfigurationError):
        build_path(grid, length, rng)


def test_rebuilding_clears_previous_marks(grid, rng):
    first = build_path(grid, 20, rng)
    second = build_path(grid, 20, rng)
    assert sum(1 for c in grid if c.is_path) == 20
    for cell_index in set(first) - set(second):
        assert grid[cell_index].path_index is None


def test_path_helpers(grid, rng):
    path = build_path(grid, 12, rng)
    assert path[0] == path.start
    assert path[11] == path.goal
    assert path.position_of(path.goal) == 11
    assert path.to_dict()["length"] == 12
