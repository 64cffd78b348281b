"""
Core module - podstawowe komponenty silnika.

Zawiera:
- HexCoord: System współrzędnych hexagonalnych (axial)
- HexGrid, Cell: Siatka hexagonalna i jej komórki
- pathfinding: A* i losowe błądzenie, budowa ścieżki planszy
- GameRNG: Deterministyczny generator losowości
- ConfigLoader: Wczytywanie konfiguracji z defaults
- errors: Wyjątki budowy gry
"""

from .hex_coord import HexCoord
from .hex_grid import HexGrid, Cell
from .pathfinding import Path, find_path, build_path, PATH_BUILDERS
from .rng import GameRNG
from .config_loader import ConfigLoader
from .errors import HexDungeonError, ConfigurationError, PathGenerationFailed

__all__ = [
    "HexCoord", "HexGrid", "Cell", "Path", "find_path", "build_path", "PATH_BUILDERS",
    "GameRNG", "ConfigLoader",
    "HexDungeonError", "ConfigurationError", "PathGenerationFailed",
]
