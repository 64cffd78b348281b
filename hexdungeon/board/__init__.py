"""
Board module - plansza gry.

Zawiera:
- Board, build_board: Pipeline siatka -> ścieżka -> gobliny
- place_hazards, name_hazards: Rozmieszczanie i nazywanie goblinów
- VisibilityTracker, compute_visibility: Mgła wojny
"""

from .board import Board, build_board
from .hazards import place_hazards, name_hazards
from .visibility import CellVisibility, VisibilityTracker, compute_visibility, visible_indices

__all__ = [
    "Board", "build_board", "place_hazards", "name_hazards",
    "CellVisibility", "VisibilityTracker", "compute_visibility", "visible_indices",
]
