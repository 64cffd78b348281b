"""
Agent - gracz albo bot idący po ścieżce.

Agent zna tylko swoją pozycję na ścieżce i HP. Nie zna planszy:
co stoi na polu docelowym rozstrzyga silnik tur (TurnEngine)
i moduł combat.

Niezmienniki:
═══════════════════════════════════════════════════════════════════

    POZYCJA
    ─────────────────────────────────────────────────────────────
    position_index w [0, path_length - 1], nigdy nie maleje.
    Ruch jest ucinany na celu:
        path_length=50, pozycja 48, 6 kroków -> 49 (nie 54)

    HP
    ─────────────────────────────────────────────────────────────
    hit_points >= 0. Obrażenia ponad stan zatrzymują się na 0:
        HP 2, apply_damage(3) -> 0
    Agent z HP 0 dalej gra (nie ma reguły eliminacji).

Cykl życia:
    Tworzony na starcie gry, zmieniany tylko przez TurnEngine,
    nigdy nie usuwany - jedynie reset().

Przykład:
    >>> agent = Agent(AgentId.PLAYER, path_length=50, max_hp=15)
    >>> agent.advance(4)
    4
    >>> agent.apply_damage(3)
    12
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class AgentId(Enum):
    """Identyfikator agenta (i jednocześnie czyja jest tura)."""

    PLAYER = "player"
    BOT = "bot"

    @property
    def other(self) -> "AgentId":
        """Przeciwnik - kolejna tura po tej."""
        return AgentId.BOT if self is AgentId.PLAYER else AgentId.PLAYER

    def __str__(self) -> str:
        return self.value


@dataclass
class Agent:
    """
    Uczestnik gry.

    Attributes:
        id (AgentId): Gracz lub bot
        path_length (int): Długość ścieżki (cel = path_length - 1)
        max_hp (int): HP startowe
        position_index (int): Aktualna pozycja na ścieżce
        hit_points (int): Aktualne HP
    """
    id: AgentId
    path_length: int
    max_hp: int
    position_index: int = 0
    hit_points: Optional[int] = None

    def __post_init__(self):
        if self.path_length < 2:
            raise ValueError(f"Path length must be at least 2, got {self.path_length}")
        if self.hit_points is None:
            self.hit_points = self.max_hp

    # ─────────────────────────────────────────────────────────────────────────
    # RUCH
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def goal_index(self) -> int:
        return self.path_length - 1

    def target_index(self, steps: int) -> int:
        """
        Pozycja po `steps` krokach - bez zmiany stanu.

        Raises:
            ValueError: steps < 0 (agent nie cofa się)
        """
        if steps < 0:
            raise ValueError(f"Steps cannot be negative, got {steps}")
        return min(self.position_index + steps, self.goal_index)

    def advance(self, steps: int) -> int:
        """
        Przesuwa agenta o `steps` pól (ucięte na celu).

        Returns:
            int: Nowa pozycja
        """
        self.position_index = self.target_index(steps)
        return self.position_index

    @property
    def at_goal(self) -> bool:
        return self.position_index == self.goal_index

    # ─────────────────────────────────────────────────────────────────────────
    # HP
    # ─────────────────────────────────────────────────────────────────────────

    def apply_damage(self, amount: int) -> int:
        """
        Zadaje obrażenia, HP nie spada poniżej 0.

        Returns:
            int: HP po obrażeniach

        Raises:
            ValueError: amount < 0
        """
        if amount < 0:
            raise ValueError(f"Damage cannot be negative, got {amount}")
        self.hit_points = max(0, self.hit_points - amount)
        return self.hit_points

    @property
    def is_down(self) -> bool:
        """HP spadło do 0 (informacyjnie - agent dalej gra)."""
        return self.hit_points == 0

    # ─────────────────────────────────────────────────────────────────────────
    # STAN
    # ─────────────────────────────────────────────────────────────────────────

    def reset(self) -> None:
        """Powrót na start z pełnym HP."""
        self.position_index = 0
        self.hit_points = self.max_hp

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id.value,
            "position_index": self.position_index,
            "hit_points": self.hit_points,
            "max_hp": self.max_hp,
            "at_goal": self.at_goal,
        }

    def __repr__(self) -> str:
        return (
            f"Agent({self.id.value}, pos={self.position_index}/{self.goal_index}, "
            f"hp={self.hit_points}/{self.max_hp})"
        )
