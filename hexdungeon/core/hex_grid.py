"""
Siatka hexagonalna (HexGrid) - zbiór komórek planszy.

HexGrid jest budowany RAZ na początku gry:
- Generuje wszystkie komórki w promieniu R (axial -> pozycja w świecie)
- Nadaje każdej komórce unikalny `index` w kolejności generowania
- Udostępnia bezpośredni dostęp po indeksie i po współrzędnej

Po zbudowaniu planszy zmieniają się wyłącznie flagi `is_path` / `is_hazard`
(i tylko podczas przygotowania planszy, nigdy w trakcie gry).

Sąsiedztwo:
    Dwie komórki są sąsiadami na grafie, jeśli odległość euklidesowa
    ich środków <= max_distance. Dla max_distance ≈ size * √3
    są to dokładnie sąsiedzi hex (6 kierunków).

Przykład użycia:
    >>> grid = HexGrid.generate(radius=6, cell_size=2.5)
    >>> len(grid)
    127
    >>> grid[0].coord
    HexCoord(q=-6, r=0)
    >>> grid.cell_at(HexCoord(0, 0)).index
    63
"""

from __future__ import annotations
from dataclasses import dataclass, field
import math
from typing import Dict, Iterator, List, Optional, Tuple, Any

from .hex_coord import HexCoord, SQRT3, coords_in_radius
from .errors import ConfigurationError


@dataclass
class Cell:
    """
    Pojedyncza komórka planszy.

    Attributes:
        index (int): Unikalny numer nadany przy tworzeniu
        coord (HexCoord): Współrzędne axial
        position (Tuple[float, float]): Pozycja (x, z) w świecie
        is_path (bool): Czy komórka należy do ścieżki
        is_hazard (bool): Czy na komórce czai się goblin
        path_index (Optional[int]): Pozycja na ścieżce (None poza ścieżką)
        hazard_name (Optional[str]): Imię goblina (tylko do wyświetlania)
    """
    index: int
    coord: HexCoord
    position: Tuple[float, float]
    is_path: bool = False
    is_hazard: bool = False
    path_index: Optional[int] = None
    hazard_name: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Serializuje komórkę do słownika (dla warstwy prezentacji)."""
        result = {
            "index": self.index,
            "coord": [self.coord.q, self.coord.r],
            "position": [round(self.position[0], 3), round(self.position[1], 3)],
            "is_path": self.is_path,
            "is_hazard": self.is_hazard,
        }
        if self.path_index is not None:
            result["path_index"] = self.path_index
        if self.hazard_name:
            result["hazard_name"] = self.hazard_name
        return result


@dataclass
class HexGrid:
    """
    Siatka hexagonalna o promieniu `radius`.

    Attributes:
        radius (int): Promień siatki (w krokach hex)
        cell_size (float): Rozmiar komórki
        cells (List[Cell]): Komórki w kolejności generowania
        _by_coord (Dict[HexCoord, Cell]): Mapa współrzędna -> komórka
        _adjacency_cache (Dict[float, Dict[int, List[int]]]): Sąsiedztwo per próg

    Note:
        Twórz przez HexGrid.generate() - waliduje parametry.
    """
    radius: int
    cell_size: float
    cells: List[Cell] = field(default_factory=list)
    _by_coord: Dict[HexCoord, Cell] = field(default_factory=dict, repr=False)
    _adjacency_cache: Dict[float, Dict[int, List[int]]] = field(
        default_factory=dict, repr=False
    )

    # ─────────────────────────────────────────────────────────────────────────
    # GENEROWANIE
    # ─────────────────────────────────────────────────────────────────────────

    @classmethod
    def generate(cls, radius: int, cell_size: float) -> "HexGrid":
        """
        Generuje wszystkie komórki siatki o danym promieniu.

        Kolejność jest stała (skan po q, potem po r), więc wynik
        jest deterministyczny bez użycia RNG.

        Args:
            radius: Promień siatki (> 0)
            cell_size: Rozmiar komórki (> 0)

        Returns:
            HexGrid: Nowa siatka z 3R(R+1)+1 komórkami

        Raises:
            ConfigurationError: Jeśli radius <= 0 lub cell_size <= 0
        """
        if radius <= 0:
            raise ConfigurationError(f"Grid radius must be positive, got {radius}")
        if cell_size <= 0:
            raise ConfigurationError(f"Cell size must be positive, got {cell_size}")

        grid = cls(radius=radius, cell_size=cell_size)
        for coord in coords_in_radius(radius):
            cell = Cell(
                index=len(grid.cells),
                coord=coord,
                position=coord.to_world(cell_size),
            )
            grid.cells.append(cell)
            grid._by_coord[coord] = cell
        return grid

    # ─────────────────────────────────────────────────────────────────────────
    # DOSTĘP
    # ─────────────────────────────────────────────────────────────────────────

    def __len__(self) -> int:
        return len(self.cells)

    def __iter__(self) -> Iterator[Cell]:
        return iter(self.cells)

    def __getitem__(self, index: int) -> Cell:
        return self.cells[index]

    def cell_at(self, coord: HexCoord) -> Optional[Cell]:
        """
        Zwraca komórkę o danej współrzędnej.

        Args:
            coord: Współrzędne axial

        Returns:
            Optional[Cell]: Komórka lub None jeśli poza siatką
        """
        return self._by_coord.get(coord)

    def center_cell(self) -> Cell:
        """Zwraca komórkę środkową (0, 0)."""
        return self._by_coord[HexCoord(0, 0)]

    def extremal_cells(self) -> List[Cell]:
        """
        Zwraca komórki najbardziej oddalone od środka (zewnętrzny pierścień).

        Returns:
            List[Cell]: Komórki w odległości `radius` od (0, 0), wg indeksu
        """
        center = HexCoord(0, 0)
        return [c for c in self.cells if c.coord.distance(center) == self.radius]

    # ─────────────────────────────────────────────────────────────────────────
    # ODLEGŁOŚCI I SĄSIEDZTWO
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def neighbor_spacing(self) -> float:
        """Odległość środków sąsiednich hexów: size * √3."""
        return self.cell_size * SQRT3

    def world_distance(self, a: int, b: int) -> float:
        """
        Odległość euklidesowa między środkami dwóch komórek.

        Args:
            a: Indeks pierwszej komórki
            b: Indeks drugiej komórki

        Returns:
            float: Odległość w jednostkach świata
        """
        ax, az = self.cells[a].position
        bx, bz = self.cells[b].position
        return math.hypot(bx - ax, bz - az)

    def adjacency(self, max_distance: float) -> Dict[int, List[int]]:
        """
        Zwraca graf sąsiedztwa dla danego progu odległości.

        Wynik jest cache'owany per próg - budowa planszy odpytuje
        ten sam próg wielokrotnie.

        Args:
            max_distance: Maksymalna odległość środków (włącznie)

        Returns:
            Dict[int, List[int]]: index -> sąsiedzi posortowani po
                                  (odległość, index)
        """
        cached = self._adjacency_cache.get(max_distance)
        if cached is not None:
            return cached

        graph: Dict[int, List[int]] = {}
        for cell in self.cells:
            near = []
            for other in self.cells:
                if other.index == cell.index:
                    continue
                dist = self.world_distance(cell.index, other.index)
                if dist <= max_distance:
                    near.append((dist, other.index))
            near.sort()
            graph[cell.index] = [idx for _, idx in near]

        self._adjacency_cache[max_distance] = graph
        return graph

    # ─────────────────────────────────────────────────────────────────────────
    # DEBUG
    # ─────────────────────────────────────────────────────────────────────────

    def debug_print(self) -> str:
        """
        Zwraca tekstową reprezentację siatki do debugowania.

        Legenda:
            . = zwykła komórka
            o = ścieżka
            G = goblin na ścieżce

        Returns:
            str: Wiersze wg r, kolumny wg q
        """
        lines = []
        for r in range(-self.radius, self.radius + 1):
            row = []
            for q in range(-self.radius, self.radius + 1):
                cell = self._by_coord.get(HexCoord(q, r))
                if cell is None:
                    row.append(" ")
                elif cell.is_hazard:
                    row.append("G")
                elif cell.is_path:
                    row.append("o")
                else:
                    row.append(".")
            lines.append(" ".join(row).rstrip())
        return "\n".join(lines)
