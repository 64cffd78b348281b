"""
System współrzędnych hexagonalnych (Axial Coordinates).

Używamy Axial Coordinates (q, r) gdzie:
- q = kolumna
- r = wiersz (oś ukośna)

Konwersja do Cube Coordinates:
    s = -q - r
    Cube: (q, r, s) gdzie q + r + s = 0

Układ sąsiadów (kolejność stała, zgodnie z zegarem):
    Kierunek   (dq, dr)
    ─────────────────────
    0          (+1,  0)
    1          ( 0, +1)
    2          (-1, +1)
    3          (-1,  0)
    4          ( 0, -1)
    5          (+1, -1)

Odległość między hexami:
    distance = max(|dq|, |dr|, |dq + dr|)

Pozycja w świecie (flat-top, płaszczyzna XZ):
    x = size * 3/2 * q
    z = size * (√3/2 * q + √3 * r)

    Środki sąsiednich hexów są odległe o size * √3.

Siatka o promieniu R:
    Zawiera dokładnie te (q, r), dla których
        |q| <= R,  |r| <= R,  |q + r| <= R
    Liczba komórek: 3R(R+1) + 1  (R=6 -> 127)

Przykład użycia:
    >>> a = HexCoord(0, 0)
    >>> a.distance(HexCoord(2, 1))
    3
    >>> HexCoord(1, 0).to_world(2.0)
    (3.0, 1.7320508075688772)
"""

from __future__ import annotations
from dataclasses import dataclass
import math
from typing import List, Tuple


# Kierunki sąsiadów w układzie axial
HEX_DIRECTIONS: List[Tuple[int, int]] = [
    (+1, 0),
    (0, +1),
    (-1, +1),
    (-1, 0),
    (0, -1),
    (+1, -1),
]

SQRT3 = math.sqrt(3)


@dataclass(frozen=True)
class HexCoord:
    """
    Współrzędna hexagonalna w systemie axial (q, r).

    Klasa jest niemutowalna (frozen=True), więc może być kluczem
    w słowniku lub elementem zbioru.

    Attributes:
        q (int): Współrzędna kolumny
        r (int): Współrzędna wiersza (oś ukośna)
    """
    q: int
    r: int

    # ─────────────────────────────────────────────────────────────────────────
    # WŁAŚCIWOŚCI
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def s(self) -> int:
        """
        Trzecia współrzędna w systemie cube.

        Returns:
            int: Wartość s spełniająca q + r + s = 0
        """
        return -self.q - self.r

    @property
    def axial(self) -> Tuple[int, int]:
        """Współrzędne axial jako krotka (q, r)."""
        return (self.q, self.r)

    # ─────────────────────────────────────────────────────────────────────────
    # ODLEGŁOŚĆ I SĄSIEDZI
    # ─────────────────────────────────────────────────────────────────────────

    def distance(self, other: HexCoord) -> int:
        """
        Oblicza odległość w krokach hex między dwoma polami.

        Args:
            other: Druga współrzędna hexagonalna

        Returns:
            int: Odległość w liczbie kroków

        Example:
            >>> HexCoord(0, 0).distance(HexCoord(2, 1))
            3
        """
        dq = abs(self.q - other.q)
        dr = abs(self.r - other.r)
        ds = abs(self.s - other.s)
        return max(dq, dr, ds)

    def neighbors(self) -> List[HexCoord]:
        """
        Zwraca listę 6 sąsiednich hexów (kolejność wg HEX_DIRECTIONS).

        Returns:
            List[HexCoord]: Lista 6 sąsiadów
        """
        return [
            HexCoord(self.q + dq, self.r + dr)
            for dq, dr in HEX_DIRECTIONS
        ]

    def within_radius(self, radius: int) -> bool:
        """
        Sprawdza czy hex należy do siatki o danym promieniu.

        Args:
            radius: Promień siatki (R)

        Returns:
            bool: True jeśli |q| <= R, |r| <= R i |q + r| <= R
        """
        return (
            abs(self.q) <= radius
            and abs(self.r) <= radius
            and abs(self.q + self.r) <= radius
        )

    # ─────────────────────────────────────────────────────────────────────────
    # POZYCJA W ŚWIECIE
    # ─────────────────────────────────────────────────────────────────────────

    def to_world(self, cell_size: float) -> Tuple[float, float]:
        """
        Konwertuje współrzędne axial na punkt (x, z) na płaszczyźnie.

        Wzór (flat-top):
            x = size * 3/2 * q
            z = size * (√3/2 * q + √3 * r)

        Args:
            cell_size: Rozmiar komórki (promień hexa)

        Returns:
            Tuple[float, float]: Pozycja (x, z)
        """
        x = cell_size * 1.5 * self.q
        z = cell_size * (SQRT3 / 2 * self.q + SQRT3 * self.r)
        return (x, z)

    # ─────────────────────────────────────────────────────────────────────────
    # REPREZENTACJA
    # ─────────────────────────────────────────────────────────────────────────

    def __repr__(self) -> str:
        return f"HexCoord(q={self.q}, r={self.r})"

    def __str__(self) -> str:
        return f"({self.q}, {self.r})"


# ─────────────────────────────────────────────────────────────────────────────
# FUNKCJE POMOCNICZE
# ─────────────────────────────────────────────────────────────────────────────

def coords_in_radius(radius: int) -> List[HexCoord]:
    """
    Zwraca wszystkie hexy siatki o danym promieniu w stałej kolejności.

    Skanuje q od -R do R, a dla każdego q tylko te r, które spełniają
    |q + r| <= R. Każda współrzędna pojawia się dokładnie raz.

    Args:
        radius: Promień siatki (>= 0)

    Returns:
        List[HexCoord]: 3R(R+1) + 1 współrzędnych

    Example:
        >>> len(coords_in_radius(1))
        7
    """
    result = []
    for q in range(-radius, radius + 1):
        for r in range(max(-radius, -q - radius), min(radius, -q + radius) + 1):
            result.append(HexCoord(q, r))
    return result
