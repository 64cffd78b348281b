"""
Testy dla siatki hexagonalnej.

Testuje:
- HexCoord (odległość, sąsiedzi, pozycja w świecie)
- Generowanie siatki (liczba komórek, niezmiennik promienia, indeksy)
- Sąsiedztwo po odległości euklidesowej
"""

import math
import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from hexdungeon.core.errors import ConfigurationError
from hexdungeon.core.hex_coord import HexCoord, SQRT3, coords_in_radius
from hexdungeon.core.hex_grid import HexGrid


# ═══════════════════════════════════════════════════════════════════════════
# FIXTURES
# ═══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def grid():
    """Siatka R=6, size=2.5."""
    return HexGrid.generate(radius=6, cell_size=2.5)


# ═══════════════════════════════════════════════════════════════════════════
# TEST: HEX COORD
# ═══════════════════════════════════════════════════════════════════════════

def test_distance_is_symmetric():
    a, b = HexCoord(0, 0), HexCoord(2, 1)
    assert a.distance(b) == 3
    assert b.distance(a) == 3


def test_neighbors_are_one_step_away():
    center = HexCoord(1, -2)
    neighbors = center.neighbors()
    assert len(set(neighbors)) == 6
    assert all(center.distance(n) == 1 for n in neighbors)


def test_cube_coordinate_sums_to_zero():
    coord = HexCoord(3, -5)
    assert coord.q + coord.r + coord.s == 0


def test_to_world_flat_top_formula():
    """x = size * 3/2 * q, z = size * (√3/2 * q + √3 * r)."""
    x, z = HexCoord(2, -1).to_world(2.0)
    assert x == pytest.approx(6.0)
    assert z == pytest.approx(2.0 * (SQRT3 / 2 * 2 + SQRT3 * -1))


def test_neighbor_centers_are_size_sqrt3_apart():
    size = 2.5
    x0, z0 = HexCoord(0, 0).to_world(size)
    for n in HexCoord(0, 0).neighbors():
        x, z = n.to_world(size)
        assert math.hypot(x - x0, z - z0) == pytest.approx(size * SQRT3)


@pytest.mark.parametrize("radius, expected", [(1, 7), (2, 19), (6, 127)])
def test_coords_in_radius_count(radius, expected):
    """3R(R+1) + 1 komórek."""
    assert len(coords_in_radius(radius)) == expected


# ═══════════════════════════════════════════════════════════════════════════
# TEST: GENEROWANIE SIATKI
# ═══════════════════════════════════════════════════════════════════════════

def test_generate_satisfies_radius_invariant(grid):
    for cell in grid:
        q, r = cell.coord.q, cell.coord.r
        assert abs(q) <= 6 and abs(r) <= 6 and abs(q + r) <= 6


def test_generate_coordinates_unique(grid):
    coords = [cell.coord for cell in grid]
    assert len(coords) == len(set(coords)) == 127


def test_indices_follow_generation_order(grid):
    assert [cell.index for cell in grid] == list(range(len(grid)))


def test_generation_order_is_fixed():
    a = HexGrid.generate(4, 1.0)
    b = HexGrid.generate(4, 1.0)
    assert [c.coord for c in a] == [c.coord for c in b]


def test_positions_match_coordinates(grid):
    for cell in grid:
        assert cell.position == cell.coord.to_world(2.5)


def test_cell_lookup_by_coord(grid):
    assert grid[0].coord == HexCoord(-6, 0)
    assert grid.cell_at(HexCoord(0, 0)).index == 63
    assert grid.center_cell().index == 63
    assert grid.cell_at(HexCoord(7, 0)) is None


def test_new_cells_are_plain(grid):
    assert not any(cell.is_path or cell.is_hazard for cell in grid)


@pytest.mark.parametrize("radius, size", [(0, 1.0), (-2, 1.0), (3, 0.0), (3, -1.0)])
def test_generate_rejects_bad_parameters(radius, size):
    with pytest.raises(ConfigurationError):
        HexGrid.generate(radius, size)


# ═══════════════════════════════════════════════════════════════════════════
# TEST: SĄSIEDZTWO
# ═══════════════════════════════════════════════════════════════════════════

def test_center_has_six_neighbors(grid):
    adjacency = grid.adjacency(grid.neighbor_spacing * 1.05)
    assert len(adjacency[grid.center_cell().index]) == 6


def test_corner_has_three_neighbors(grid):
    adjacency = grid.adjacency(grid.neighbor_spacing * 1.05)
    corner = grid.cell_at(HexCoord(6, 0)).index
    assert len(adjacency[corner]) == 3


def test_adjacency_is_cached(grid):
    limit = grid.neighbor_spacing * 1.05
    assert grid.adjacency(limit) is grid.adjacency(limit)


def test_wider_threshold_adds_second_ring(grid):
    narrow = grid.adjacency(grid.neighbor_spacing * 1.05)
    wide = grid.adjacency(grid.neighbor_spacing * 1.05 * SQRT3)
    center = grid.center_cell().index
    assert len(wide[center]) == 12
    assert set(narrow[center]) < set(wide[center])


def test_extremal_cells_form_outer_ring(grid):
    ring = grid.extremal_cells()
    assert len(ring) == 36
    assert all(c.coord.distance(HexCoord(0, 0)) == 6 for c in ring)


def test_debug_print_shape(grid):
    lines = grid.debug_print().splitlines()
    assert len(lines) == 13
    assert "G" not in grid.debug_print()
