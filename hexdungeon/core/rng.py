"""
Deterministyczny generator liczb losowych (RNG).

Ten sam seed musi zawsze dawać tę samą planszę i te same rzuty.
To pozwala na:
- Odtwarzanie partii z logu
- Debugowanie konkretnej planszy
- Testy jednostkowe

GameRNG opakowuje Pythonowy random.Random z metodami
przydatnymi w grze (kostka, obrażenia goblina).

Jak używać:
    - Każda sesja gry ma WŁASNĄ instancję GameRNG
    - Budowa planszy dostaje osobny generator (fork), więc
      liczba prób budowy ścieżki nie zmienia sekwencji rzutów kostką
    - NIE używaj globalnego random

Przykład użycia:
    >>> rng = GameRNG(seed=12345)
    >>> rng.roll_dice()       # rzut k6
    3
    >>> rng.roll_damage(1, 3) # obrażenia goblina
    2
"""

from __future__ import annotations
import random
from typing import List, TypeVar, Sequence

T = TypeVar('T')


class GameRNG:
    """
    Deterministyczny generator losowości dla sesji gry.

    Attributes:
        seed (int): Ziarno użyte do inicjalizacji
        _rng (random.Random): Wewnętrzny generator

    Example:
        >>> rng1 = GameRNG(42)
        >>> rng2 = GameRNG(42)
        >>> rng1.random() == rng2.random()  # ten sam seed = te same wyniki
        True
    """

    def __init__(self, seed: int):
        """
        Tworzy nowy generator z podanym seedem.

        Args:
            seed: Ziarno losowości. Ten sam seed = te same wyniki.
        """
        self.seed = seed
        self._rng = random.Random(seed)

    # ─────────────────────────────────────────────────────────────────────────
    # PODSTAWOWE METODY
    # ─────────────────────────────────────────────────────────────────────────

    def random(self) -> float:
        """Zwraca losową liczbę z przedziału [0.0, 1.0)."""
        return self._rng.random()

    def randint(self, a: int, b: int) -> int:
        """
        Zwraca losową liczbę całkowitą z przedziału [a, b] (włącznie).

        Args:
            a: Dolna granica (włącznie)
            b: Górna granica (włącznie)

        Returns:
            int: Losowa liczba całkowita
        """
        return self._rng.randint(a, b)

    def choice(self, seq: Sequence[T]) -> T:
        """
        Wybiera losowy element z sekwencji.

        Raises:
            IndexError: Jeśli sekwencja jest pusta
        """
        return self._rng.choice(seq)

    def sample(self, seq: Sequence[T], k: int) -> List[T]:
        """
        Wybiera k unikalnych losowych elementów (bez zwracania).

        Args:
            seq: Sekwencja do wyboru z
            k: Ile elementów wybrać (k <= len(seq))

        Returns:
            List[T]: Lista unikalnych elementów

        Raises:
            ValueError: Jeśli k > len(seq)
        """
        return self._rng.sample(list(seq), k)

    def shuffle(self, seq: List[T]) -> None:
        """Tasuje listę w miejscu (modyfikuje oryginalną)."""
        self._rng.shuffle(seq)

    # ─────────────────────────────────────────────────────────────────────────
    # METODY SPECYFICZNE DLA GRY
    # ─────────────────────────────────────────────────────────────────────────

    def roll_dice(self, sides: int = 6) -> int:
        """
        Rzut kostką - równomiernie z [1, sides].

        Args:
            sides: Liczba ścianek (domyślnie k6)

        Returns:
            int: Wynik rzutu
        """
        return self.randint(1, sides)

    def roll_damage(self, min_damage: int, max_damage: int) -> int:
        """
        Losuje obrażenia goblina z przedziału [min, max] (włącznie).

        Losowane ŚWIEŻO przy każdym wejściu na pole z goblinem -
        obrażenia nie są zapisane na komórce.

        Args:
            min_damage: Minimalne obrażenia
            max_damage: Maksymalne obrażenia

        Returns:
            int: Obrażenia
        """
        return self.randint(min_damage, max_damage)

    # ─────────────────────────────────────────────────────────────────────────
    # STAN
    # ─────────────────────────────────────────────────────────────────────────

    def fork(self) -> "GameRNG":
        """
        Tworzy nowy RNG z seedem bazowanym na aktualnym stanie.

        Używane dla budowy planszy: pod-generator nie wpływa
        na główną sekwencję rzutów kostką.

        Returns:
            GameRNG: Nowy generator
        """
        new_seed = self.randint(0, 2**31 - 1)
        return GameRNG(new_seed)

    def __repr__(self) -> str:
        return f"GameRNG(seed={self.seed})"
