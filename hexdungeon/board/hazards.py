"""
Rozmieszczanie goblinów (hazardów) na ścieżce.

Gobliny siedzą wyłącznie we WNĘTRZU ścieżki - nigdy na wejściu
(path_index 0) ani na wyjściu (ostatni path_index). Losowanie bez
zwracania, więc jedna komórka ma co najwyżej jednego goblina.

To jedyne miejsce, które ustawia Cell.is_hazard.

Przykład:
    >>> hazards = place_hazards(grid, path, count=7, rng=rng)
    >>> len(hazards)
    7
    >>> 0 in hazards or len(path) - 1 in hazards
    False
"""

from __future__ import annotations
from typing import Dict, FrozenSet, Sequence

from ..core.errors import ConfigurationError
from ..core.hex_grid import HexGrid
from ..core.pathfinding import Path
from ..core.rng import GameRNG


def place_hazards(grid: HexGrid, path: Path, count: int, rng: GameRNG) -> FrozenSet[int]:
    """
    Losuje `count` pozycji z wnętrza ścieżki i oznacza je jako gobliny.

    Args:
        grid: Siatka (komórki ścieżki już oznaczone)
        path: Zbudowana ścieżka
        count: Liczba goblinów
        rng: Generator losowości

    Returns:
        FrozenSet[int]: Pozycje na ścieżce (path_index) z goblinami

    Raises:
        ConfigurationError: count < 0 lub count >= len(path) - 2
    """
    interior = len(path) - 2
    if count < 0 or count >= interior:
        raise ConfigurationError(
            f"Hazard count {count} must be in [0, {interior}) for path length {len(path)}"
        )

    for cell in grid.cells:
        cell.is_hazard = False
        cell.hazard_name = None

    chosen = rng.sample(range(1, len(path) - 1), count)
    for path_index in chosen:
        grid[path[path_index]].is_hazard = True

    return frozenset(chosen)


def generate_hazard_name(rng: GameRNG, prefixes: Sequence[str], suffixes: Sequence[str]) -> str:
    """Imię goblina: "<prefix> <suffix>", np. "Grunk the Cruel"."""
    return f"{rng.choice(prefixes)} {rng.choice(suffixes)}"


def name_hazards(
    grid: HexGrid,
    path: Path,
    hazards: FrozenSet[int],
    rng: GameRNG,
    prefixes: Sequence[str],
    suffixes: Sequence[str],
) -> Dict[int, str]:
    """
    Nadaje imiona goblinom (tylko do wyświetlania, bez wpływu na grę).

    Kolejność losowania jest po rosnącym path_index, więc wynik
    zależy tylko od seeda.

    Returns:
        Dict[int, str]: path_index -> imię goblina
    """
    names: Dict[int, str] = {}
    for path_index in sorted(hazards):
        name = generate_hazard_name(rng, prefixes, suffixes)
        grid[path[path_index]].hazard_name = name
        names[path_index] = name
    return names
