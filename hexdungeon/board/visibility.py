"""
Mgła wojny - widoczność komórek wokół obserwatora.

Widoczność jest liczona OD NOWA po każdym ruchu (czysta funkcja
pozycji obserwatora i promienia). Nic nie jest aktualizowane
przyrostowo, więc nie ma nieaktualnych wpisów.

    visible = odległość <= radius
    fade    = clamp(1 - odległość / radius, 0, 1)

`fade` służy tylko warstwie prezentacji (przezroczystość).
Logika gry patrzy wyłącznie na `visible`.
"""

from __future__ import annotations
from dataclasses import dataclass
import math
from typing import Dict, Iterable, List, Tuple

from ..core.errors import ConfigurationError
from ..core.hex_grid import Cell


@dataclass(frozen=True)
class CellVisibility:
    """Widoczność pojedynczej komórki."""
    visible: bool
    fade: float

    def to_dict(self) -> Dict[str, object]:
        return {"visible": self.visible, "fade": round(self.fade, 4)}


def compute_visibility(
    observer_position: Tuple[float, float],
    cells: Iterable[Cell],
    radius: float,
) -> Dict[int, CellVisibility]:
    """
    Liczy widoczność wszystkich komórek względem obserwatora.

    Args:
        observer_position: Pozycja (x, z) obserwatora w świecie
        cells: Komórki do sprawdzenia
        radius: Promień widzenia (> 0)

    Returns:
        Dict[int, CellVisibility]: index komórki -> widoczność

    Raises:
        ConfigurationError: radius <= 0

    Example:
        >>> vis = compute_visibility((0.0, 0.0), grid.cells, 20.0)
        >>> vis[grid.center_cell().index].fade
        1.0
    """
    if radius <= 0:
        raise ConfigurationError(f"Visibility radius must be positive, got {radius}")

    ox, oz = observer_position
    result: Dict[int, CellVisibility] = {}
    for cell in cells:
        x, z = cell.position
        distance = math.hypot(x - ox, z - oz)
        fade = min(1.0, max(0.0, 1.0 - distance / radius))
        result[cell.index] = CellVisibility(visible=distance <= radius, fade=fade)
    return result


def visible_indices(visibility: Dict[int, CellVisibility]) -> List[int]:
    """Zwraca posortowane indeksy widocznych komórek."""
    return sorted(index for index, entry in visibility.items() if entry.visible)


class VisibilityTracker:
    """
    Stały promień widzenia + ostatnio policzony zestaw.

    `last` jest tylko podglądem dla API/debugowania - każde
    compute() liczy wszystko od zera.
    """

    def __init__(self, radius: float):
        if radius <= 0:
            raise ConfigurationError(f"Visibility radius must be positive, got {radius}")
        self.radius = radius
        self.last: Dict[int, CellVisibility] = {}

    def compute(self, observer: Cell, cells: Iterable[Cell]) -> Dict[int, CellVisibility]:
        self.last = compute_visibility(observer.position, cells, self.radius)
        return self.last

    def clear(self) -> None:
        self.last = {}

    def to_dict(self) -> Dict[str, object]:
        return {
            "radius": self.radius,
            "visible": visible_indices(self.last),
            "cells": {str(i): v.to_dict() for i, v in sorted(self.last.items())},
        }
