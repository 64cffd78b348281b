"""
Plansza gry - wynik sekwencyjnego pipeline'u budowy.

Pipeline (ściśle po kolei, każdy etap dostaje gotowy wynik poprzedniego):

    HexGrid.generate()  ->  build_path()  ->  place_hazards()  ->  name_hazards()

Jeśli którykolwiek etap rzuci ConfigurationError / PathGenerationFailed,
wyjątek leci dalej i żadna częściowa plansza nie jest zwracana.

Po zbudowaniu Board jest tylko do odczytu - silnik tur nie zmienia
komórek, ścieżki ani goblinów.
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging
from typing import Any, Dict, FrozenSet, List, TYPE_CHECKING

from ..core.hex_grid import Cell, HexGrid
from ..core.pathfinding import Path, build_path
from ..core.rng import GameRNG
from .hazards import place_hazards, name_hazards

if TYPE_CHECKING:
    from ..game.config import GameConfig

logger = logging.getLogger(__name__)


@dataclass
class Board:
    """
    Siatka + ścieżka + gobliny.

    Attributes:
        grid (HexGrid): Wszystkie komórki
        path (Path): Ścieżka od wejścia do wyjścia
        hazards (FrozenSet[int]): path_index pól z goblinami
        hazard_names (Dict[int, str]): path_index -> imię goblina
    """
    grid: HexGrid
    path: Path
    hazards: FrozenSet[int]
    hazard_names: Dict[int, str] = field(default_factory=dict)

    @property
    def path_length(self) -> int:
        return len(self.path)

    @property
    def goal_index(self) -> int:
        """Ostatni path_index - wejście na niego wygrywa grę."""
        return len(self.path) - 1

    def cell_at(self, path_index: int) -> Cell:
        """Komórka na danej pozycji ścieżki."""
        return self.grid[self.path[path_index]]

    def is_hazard(self, path_index: int) -> bool:
        return path_index in self.hazards

    def hazard_cell_indices(self) -> FrozenSet[int]:
        """Indeksy KOMÓREK (nie pozycji na ścieżce) z goblinami."""
        return frozenset(self.path[i] for i in self.hazards)

    def path_cells(self) -> List[Cell]:
        return [self.grid[i] for i in self.path]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "radius": self.grid.radius,
            "cell_size": self.grid.cell_size,
            "cells": [cell.to_dict() for cell in self.grid.cells],
            "path": self.path.to_dict(),
            "hazards": sorted(self.hazards),
            "hazard_names": {str(k): v for k, v in sorted(self.hazard_names.items())},
        }


def build_board(config: "GameConfig", rng: GameRNG) -> Board:
    """
    Buduje planszę z konfiguracji.

    Args:
        config: Zwalidowana konfiguracja gry
        rng: Generator przeznaczony dla planszy (zwykle rng.fork())

    Returns:
        Board: Gotowa plansza

    Raises:
        ConfigurationError: Niepoprawne parametry siatki / ścieżki / goblinów
        PathGenerationFailed: Nie udało się zbudować ścieżki
    """
    grid = HexGrid.generate(config.grid_radius, config.cell_size)
    step_limit = grid.neighbor_spacing * config.step_tolerance

    if config.path_algorithm == "astar":
        options: Dict[str, Any] = {
            "step_limit": step_limit,
            "hazard_cost": config.hazard_step_cost,
        }
    else:
        options = {
            "step_limit": step_limit,
            "candidates": config.walk_candidates,
            "max_attempts": config.path_max_attempts,
        }

    path = build_path(grid, config.path_length, rng, algorithm=config.path_algorithm, **options)
    hazards = place_hazards(grid, path, config.hazard_count, rng)
    names = name_hazards(
        grid, path, hazards, rng,
        config.hazard_name_prefixes, config.hazard_name_suffixes,
    )

    logger.info(
        "Board ready: %d cells, path of %d (%s), %d hazards",
        len(grid), len(path), path.algorithm, len(hazards),
    )
    return Board(grid=grid, path=path, hazards=hazards, hazard_names=names)
