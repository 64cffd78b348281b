"""
Budowa ścieżki na siatce hexagonalnej.

Ścieżka to uporządkowana sekwencja indeksów komórek, po której
poruszają się gracz i bot: pierwsza komórka to wejście, ostatnia to wyjście.

Niezmienniki ścieżki:
    - długość == target_length
    - brak powtórzonych indeksów
    - kolejne komórki są sąsiadami (odległość <= step_limit)

Dostępne algorytmy (PATH_BUILDERS):
═══════════════════════════════════════════════════════════════════

    random_walk - ograniczone losowe błądzenie
    ─────────────────────────────────────────────────────────────
    1. Zacznij od komórki startowej (seed)
    2. Zbierz nieodwiedzonych sąsiadów w zasięgu step_limit
    3. Wybierz losowo jednego spośród K najbliższych
    4. Powtarzaj aż ścieżka ma target_length komórek
    5. Utknięcie -> nowa próba z innego seeda; po wyczerpaniu prób
       próg jest luzowany (x√3, dopuszcza drugi pierścień)

    astar - najkrótsze ścieżki A*
    ─────────────────────────────────────────────────────────────
    Jawne start i goal: jeden przebieg A*, długość musi się zgadzać.
    Bez jawnego celu: start na zewnętrznym pierścieniu, trasa
    przedłużana odcinkami A* do losowych punktów pośrednich
    (bez wchodzenia na już użyte komórki), ucięta do target_length.

Jak działa A*:
    1. Utrzymuj open (do sprawdzenia) i closed (sprawdzone)
    2. Dla każdego node'a:
       - g_cost: koszt od startu (1 za krok, hazard_cost za wejście na goblina)
       - h_cost: odległość euklidesowa do celu / step_limit
       - f_cost: g_cost + h_cost
    3. Zawsze eksploruj node z najniższym f_cost; przy remisie
       ten, który został zrelaksowany najpóźniej
    4. Komórka trafia do closed co najwyżej raz

Przykład użycia:
    >>> grid = HexGrid.generate(6, 2.5)
    >>> path = build_path(grid, 50, GameRNG(7))
    >>> len(path)
    50
    >>> grid[path.goal].path_index
    49
"""

from __future__ import annotations
from dataclasses import dataclass, field
import heapq
import itertools
import logging
from typing import Callable, Dict, FrozenSet, Iterator, List, Optional, Sequence, Set, Tuple, Any

from .hex_coord import SQRT3
from .hex_grid import HexGrid
from .rng import GameRNG
from .errors import ConfigurationError, PathGenerationFailed

logger = logging.getLogger(__name__)

# Próg sąsiedztwa = odstęp sąsiadów * tolerancja (błędy zmiennoprzecinkowe)
DEFAULT_STEP_TOLERANCE = 1.05

# Kolejne mnożniki progu przy luzowaniu random walk
RELAXATION_FACTORS: Tuple[float, ...] = (1.0, SQRT3)


@dataclass(frozen=True)
class Path:
    """
    Ścieżka planszy - niemutowalna po zbudowaniu.

    Attributes:
        cell_indices (Tuple[int, ...]): Indeksy komórek od wejścia do wyjścia
        step_limit (float): Próg sąsiedztwa użyty przy budowie
        algorithm (str): Nazwa algorytmu ("random_walk" / "astar")
    """
    cell_indices: Tuple[int, ...]
    step_limit: float
    algorithm: str = "random_walk"

    def __len__(self) -> int:
        return len(self.cell_indices)

    def __getitem__(self, path_index: int) -> int:
        return self.cell_indices[path_index]

    def __iter__(self) -> Iterator[int]:
        return iter(self.cell_indices)

    @property
    def start(self) -> int:
        """Indeks komórki wejściowej."""
        return self.cell_indices[0]

    @property
    def goal(self) -> int:
        """Indeks komórki wyjściowej (cel gry)."""
        return self.cell_indices[-1]

    def position_of(self, cell_index: int) -> Optional[int]:
        """Zwraca pozycję komórki na ścieżce lub None."""
        try:
            return self.cell_indices.index(cell_index)
        except ValueError:
            return None

    def to_dict(self) -> Dict[str, Any]:
        """Serializuje ścieżkę do słownika."""
        return {
            "cells": list(self.cell_indices),
            "length": len(self.cell_indices),
            "step_limit": round(self.step_limit, 3),
            "algorithm": self.algorithm,
        }


@dataclass(order=True)
class _PathNode:
    """
    Węzeł w algorytmie A*.

    Sortowanie po (f_cost, tie). `tie` to ujemny numer kolejny wpisu,
    więc przy równym f_cost heap zwraca najpóźniej zrelaksowany węzeł.

    Attributes:
        f_cost: Całkowity szacowany koszt (g + h)
        tie: -numer wpisu do kolejki
        g_cost: Koszt od startu
        index: Indeks komórki (nie używany w sortowaniu)
    """
    f_cost: float
    tie: int
    g_cost: float = field(compare=False)
    index: int = field(compare=False)


# ─────────────────────────────────────────────────────────────────────────────
# A*
# ─────────────────────────────────────────────────────────────────────────────

def find_path(
    grid: HexGrid,
    start: int,
    goal: int,
    step_limit: Optional[float] = None,
    blocked: Optional[Set[int]] = None,
    hazard_cells: Optional[FrozenSet[int]] = None,
    hazard_cost: float = 2.0,
    max_iterations: int = 10000,
) -> List[int]:
    """
    Znajduje najtańszą ścieżkę między dwiema komórkami.

    Args:
        grid: Siatka hexagonalna
        start: Indeks komórki startowej
        goal: Indeks komórki docelowej
        step_limit: Maksymalna odległość kroku (domyślnie sąsiedzi hex)
        blocked: Indeksy komórek, na które nie wolno wejść
        hazard_cells: Komórki z goblinami znanymi z góry
        hazard_cost: Koszt wejścia na komórkę z goblinem (zamiast 1)
        max_iterations: Maksymalna liczba iteracji (zabezpieczenie)

    Returns:
        List[int]: Indeksy od start do goal (włącznie z oboma).
                   Pusta lista jeśli ścieżka nie istnieje.

    Edge cases:
        - start == goal: zwraca [start]
        - goal zablokowany: zwraca []

    Example:
        >>> path = find_path(grid, grid.center_cell().index, 0)
        >>> len(path)  # (0, 0) -> (-6, 0): 6 kroków
        7
    """
    limit = step_limit if step_limit is not None else grid.neighbor_spacing * DEFAULT_STEP_TOLERANCE
    blocked = blocked or set()
    hazards = hazard_cells or frozenset()

    if start == goal:
        return [start]
    if goal in blocked:
        return []

    adjacency = grid.adjacency(limit)
    sequence = itertools.count()

    open_set: List[_PathNode] = []
    g_costs: Dict[int, float] = {start: 0.0}
    closed_set: Set[int] = set()
    parents: Dict[int, int] = {}

    start_h = grid.world_distance(start, goal) / limit
    heapq.heappush(open_set, _PathNode(start_h, -next(sequence), 0.0, start))

    iterations = 0

    while open_set and iterations < max_iterations:
        iterations += 1

        current = heapq.heappop(open_set)

        # Jeśli już przetworzony - pomiń
        if current.index in closed_set:
            continue
        closed_set.add(current.index)

        if current.index == goal:
            return _reconstruct_path(parents, start, goal)

        for neighbor in adjacency[current.index]:
            if neighbor in closed_set or neighbor in blocked:
                continue

            step_cost = hazard_cost if neighbor in hazards else 1.0
            tentative_g = current.g_cost + step_cost

            if neighbor not in g_costs or tentative_g < g_costs[neighbor]:
                g_costs[neighbor] = tentative_g
                parents[neighbor] = current.index

                h_cost = grid.world_distance(neighbor, goal) / limit
                heapq.heappush(
                    open_set,
                    _PathNode(tentative_g + h_cost, -next(sequence), tentative_g, neighbor),
                )

    return []


def _reconstruct_path(parents: Dict[int, int], start: int, goal: int) -> List[int]:
    """
    Odtwarza ścieżkę od goal do start używając mapy rodziców.

    Returns:
        List[int]: Ścieżka od start do goal
    """
    path = [goal]
    current = goal

    while current != start:
        current = parents[current]
        path.append(current)

    path.reverse()
    return path


# ─────────────────────────────────────────────────────────────────────────────
# BUDOWNICZOWIE ŚCIEŻKI
# ─────────────────────────────────────────────────────────────────────────────

def build_random_walk_path(
    grid: HexGrid,
    target_length: int,
    rng: GameRNG,
    step_limit: Optional[float] = None,
    candidates: int = 3,
    max_attempts: int = 200,
    start_index: Optional[int] = None,
    relaxation: Sequence[float] = RELAXATION_FACTORS,
) -> Path:
    """
    Buduje ścieżkę losowym błądzeniem bez powrotów.

    Args:
        grid: Siatka hexagonalna
        target_length: Wymagana liczba komórek
        rng: Generator losowości
        step_limit: Bazowy próg sąsiedztwa (domyślnie sąsiedzi hex)
        candidates: K - ilu najbliższych kandydatów bierze udział w losowaniu
        max_attempts: Liczba prób na każdy próg
        start_index: Komórka startowa pierwszej próby (potem losowe)
        relaxation: Kolejne mnożniki progu

    Returns:
        Path: Ścieżka o długości target_length

    Raises:
        ConfigurationError: target_length < 2 lub > liczba komórek
        PathGenerationFailed: Wszystkie próby i progi wyczerpane
    """
    _validate_target(grid, target_length)
    if candidates < 1:
        raise ConfigurationError(f"Walk candidate count must be >= 1, got {candidates}")

    base_limit = step_limit if step_limit is not None else grid.neighbor_spacing * DEFAULT_STEP_TOLERANCE
    best_length = 0
    total_attempts = 0

    for level, factor in enumerate(relaxation):
        limit = base_limit * factor
        adjacency = grid.adjacency(limit)

        for attempt in range(max_attempts):
            total_attempts += 1
            if attempt == 0 and level == 0 and start_index is not None:
                seed_cell = start_index
            else:
                seed_cell = rng.randint(0, len(grid) - 1)

            route = _random_walk(grid, adjacency, seed_cell, target_length, rng, candidates)
            if len(route) == target_length:
                logger.debug(
                    "Random walk path found after %d attempts (step limit %.2f)",
                    total_attempts, limit,
                )
                return _finalize_path(grid, route, limit, "random_walk")
            best_length = max(best_length, len(route))

        if level < len(relaxation) - 1:
            logger.warning(
                "Random walk stuck %d times (best %d/%d cells), relaxing step limit to %.2f",
                max_attempts, best_length, target_length, base_limit * relaxation[level + 1],
            )

    raise PathGenerationFailed(
        f"Random walk could not collect {target_length} cells "
        f"(best {best_length}) after {total_attempts} attempts",
        target_length=target_length,
        attempts=total_attempts,
        best_length=best_length,
    )


def _random_walk(
    grid: HexGrid,
    adjacency: Dict[int, List[int]],
    seed_cell: int,
    target_length: int,
    rng: GameRNG,
    candidates: int,
) -> List[int]:
    """Pojedyncza próba błądzenia; zwraca trasę (może być za krótka)."""
    route = [seed_cell]
    visited = {seed_cell}

    while len(route) < target_length:
        current = route[-1]
        options = [n for n in adjacency[current] if n not in visited]
        if not options:
            break

        # Tasowanie przed sortowaniem = losowy wybór przy równych odległościach
        rng.shuffle(options)
        options.sort(key=lambda n: round(grid.world_distance(current, n), 6))

        next_cell = rng.choice(options[:candidates])
        route.append(next_cell)
        visited.add(next_cell)

    return route


def build_astar_path(
    grid: HexGrid,
    target_length: int,
    rng: GameRNG,
    step_limit: Optional[float] = None,
    start_index: Optional[int] = None,
    goal_index: Optional[int] = None,
    hazard_cells: Optional[FrozenSet[int]] = None,
    hazard_cost: float = 2.0,
    max_attempts: int = 50,
    max_leg_failures: int = 10,
) -> Path:
    """
    Buduje ścieżkę z odcinków A*.

    Tryb jawny (start_index i goal_index podane):
        Jeden przebieg A*. Jeśli trasa nie ma dokładnie target_length
        komórek -> PathGenerationFailed.

    Tryb punktów pośrednich (domyślny):
        Start na zewnętrznym pierścieniu siatki. Trasa jest przedłużana
        odcinkami A* do losowych wolnych komórek; użyte komórki są
        zablokowane dla kolejnych odcinków. Po zebraniu target_length
        komórek trasa jest ucinana - ostatnia komórka staje się celem.

    Args:
        grid: Siatka hexagonalna
        target_length: Wymagana liczba komórek
        rng: Generator losowości
        step_limit: Próg sąsiedztwa (domyślnie sąsiedzi hex)
        start_index: Jawna komórka startowa
        goal_index: Jawna komórka docelowa (wymaga start_index)
        hazard_cells: Komórki z goblinami znanymi z góry (droższe)
        hazard_cost: Koszt wejścia na komórkę z goblinem
        max_attempts: Liczba prób w trybie punktów pośrednich
        max_leg_failures: Ile nieudanych odcinków kończy próbę

    Returns:
        Path: Ścieżka o długości target_length

    Raises:
        ConfigurationError: target_length < 2 lub > liczba komórek
        PathGenerationFailed: Nie udało się uzyskać wymaganej długości
    """
    _validate_target(grid, target_length)
    limit = step_limit if step_limit is not None else grid.neighbor_spacing * DEFAULT_STEP_TOLERANCE

    if start_index is not None and goal_index is not None:
        route = find_path(
            grid, start_index, goal_index, limit,
            hazard_cells=hazard_cells, hazard_cost=hazard_cost,
        )
        if len(route) != target_length:
            raise PathGenerationFailed(
                f"A* route {start_index} -> {goal_index} has {len(route)} cells, "
                f"expected {target_length}",
                target_length=target_length,
                attempts=1,
                best_length=len(route),
            )
        return _finalize_path(grid, route, limit, "astar")

    extremal = [cell.index for cell in grid.extremal_cells()]
    best_length = 0

    for attempt in range(max_attempts):
        start = start_index if start_index is not None else rng.choice(extremal)
        route = [start]
        used = {start}
        failures = 0

        while len(route) < target_length and failures < max_leg_failures:
            free = [cell.index for cell in grid.cells if cell.index not in used]
            if not free:
                break
            waypoint = rng.choice(free)
            leg = find_path(
                grid, route[-1], waypoint, limit,
                blocked=used, hazard_cells=hazard_cells, hazard_cost=hazard_cost,
            )
            if len(leg) < 2:
                failures += 1
                continue
            route.extend(leg[1:])
            used.update(leg[1:])

        if len(route) >= target_length:
            logger.debug("A* path assembled on attempt %d", attempt + 1)
            return _finalize_path(grid, route[:target_length], limit, "astar")

        best_length = max(best_length, len(route))

    raise PathGenerationFailed(
        f"A* legs could not collect {target_length} cells "
        f"(best {best_length}) after {max_attempts} attempts",
        target_length=target_length,
        attempts=max_attempts,
        best_length=best_length,
    )


# Registry algorytmów - klucz z konfiguracji -> funkcja
PATH_BUILDERS: Dict[str, Callable[..., Path]] = {
    "random_walk": build_random_walk_path,
    "astar": build_astar_path,
}


def build_path(
    grid: HexGrid,
    target_length: int,
    rng: GameRNG,
    algorithm: str = "random_walk",
    **options: Any,
) -> Path:
    """
    Buduje ścieżkę wybranym algorytmem.

    Args:
        grid: Siatka hexagonalna
        target_length: Wymagana liczba komórek
        rng: Generator losowości
        algorithm: Klucz z PATH_BUILDERS
        **options: Parametry przekazywane do budowniczego

    Returns:
        Path: Zbudowana ścieżka (komórki oznaczone is_path / path_index)

    Raises:
        ConfigurationError: Nieznany algorytm
    """
    builder = PATH_BUILDERS.get(algorithm)
    if builder is None:
        raise ConfigurationError(
            f"Unknown path algorithm '{algorithm}'. "
            f"Available: {', '.join(sorted(PATH_BUILDERS))}"
        )
    return builder(grid, target_length, rng, **options)


# ─────────────────────────────────────────────────────────────────────────────
# HELPERY
# ─────────────────────────────────────────────────────────────────────────────

def _validate_target(grid: HexGrid, target_length: int) -> None:
    if target_length < 2:
        raise ConfigurationError(f"Path length must be at least 2, got {target_length}")
    if target_length > len(grid):
        raise ConfigurationError(
            f"Path length {target_length} exceeds cell count {len(grid)} "
            f"(grid radius {grid.radius})"
        )


def _finalize_path(grid: HexGrid, route: List[int], step_limit: float, algorithm: str) -> Path:
    """
    Oznacza komórki trasy i tworzy Path.

    Wywoływane tylko dla udanej trasy - nieudane próby nie zostawiają
    śladów na komórkach.
    """
    for cell in grid.cells:
        if cell.is_path:
            cell.is_path = False
            cell.path_index = None

    for path_index, cell_index in enumerate(route):
        cell = grid[cell_index]
        cell.is_path = True
        cell.path_index = path_index

    return Path(cell_indices=tuple(route), step_limit=step_limit, algorithm=algorithm)
