"""
Testy dla mgły wojny.

Testuje:
- visible = odległość <= promień
- fade = clamp(1 - d / r, 0, 1)
- VisibilityTracker liczy od nowa przy każdym ruchu
"""

import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from hexdungeon.board.visibility import VisibilityTracker, compute_visibility, visible_indices
from hexdungeon.core.errors import ConfigurationError
from hexdungeon.core.hex_coord import HexCoord
from hexdungeon.core.hex_grid import Cell, HexGrid


# ═══════════════════════════════════════════════════════════════════════════
# FIXTURES
# ═══════════════════════════════════════════════════════════════════════════

def make_cell(index, x, z):
    return Cell(index=index, coord=HexCoord(index, 0), position=(x, z))


@pytest.fixture
def cells():
    return [
        make_cell(0, 0.0, 0.0),
        make_cell(1, 5.0, 0.0),
        make_cell(2, 0.0, 25.0),
        make_cell(3, 12.0, 16.0),   # dokładnie 20
    ]


# ═══════════════════════════════════════════════════════════════════════════
# TEST: compute_visibility
# ═══════════════════════════════════════════════════════════════════════════

def test_far_cell_hidden(cells):
    vis = compute_visibility((0.0, 0.0), cells, 20.0)
    assert vis[2].visible is False
    assert vis[2].fade == 0.0


def test_near_cell_visible_with_fade(cells):
    vis = compute_visibility((0.0, 0.0), cells, 20.0)
    assert vis[1].visible is True
    assert vis[1].fade == pytest.approx(0.75)


def test_observer_cell_fully_visible(cells):
    vis = compute_visibility((0.0, 0.0), cells, 20.0)
    assert vis[0].visible and vis[0].fade == 1.0


def test_boundary_is_inclusive(cells):
    vis = compute_visibility((0.0, 0.0), cells, 20.0)
    assert vis[3].visible is True
    assert vis[3].fade == pytest.approx(0.0)


def test_every_cell_reported(cells):
    assert set(compute_visibility((100.0, 100.0), cells, 20.0)) == {0, 1, 2, 3}
    assert visible_indices(compute_visibility((100.0, 100.0), cells, 20.0)) == []


@pytest.mark.parametrize("radius", [0.0, -5.0])
def test_bad_radius(cells, radius):
    with pytest.raises(ConfigurationError):
        compute_visibility((0.0, 0.0), cells, radius)


# ═══════════════════════════════════════════════════════════════════════════
# TEST: VisibilityTracker
# ═══════════════════════════════════════════════════════════════════════════

def test_tracker_recomputes_from_scratch():
    grid = HexGrid.generate(6, 2.5)
    tracker = VisibilityTracker(radius=5.0)

    at_center = visible_indices(tracker.compute(grid.center_cell(), grid.cells))
    at_corner = visible_indices(tracker.compute(grid.cell_at(HexCoord(6, 0)), grid.cells))

    assert grid.center_cell().index in at_center
    assert grid.center_cell().index not in at_corner
    assert visible_indices(tracker.last) == at_corner


def test_tracker_to_dict():
    grid = HexGrid.generate(2, 1.0)
    tracker = VisibilityTracker(radius=20.0)
    tracker.compute(grid.center_cell(), grid.cells)
    data = tracker.to_dict()
    assert data["radius"] == 20.0
    assert len(data["visible"]) == len(grid)
