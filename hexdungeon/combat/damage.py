"""
Rozstrzyganie spotkań z goblinami.

SPOTKANIE Z GOBLINEM:
═══════════════════════════════════════════════════════════════════

    Wyzwalane gdy agent WEJDZIE na pole z goblinem.
    Ruch o 0 pól (bot z rzutem 1 przy niskim HP) nie wyzwala
    ponownie goblina, na którym agent już stoi.

    Sekwencja:
    1. Losuj obrażenia z [damage_min, damage_max] (świeżo, per wejście)
    2. agent.apply_damage(obrażenia) - HP nie spada poniżej 0
    3. Zwróć HazardEncounter (do logu i warstwy prezentacji)

    Przykład (damage 1-3, HP 15):
        Rzut obrażeń = 2
        HP 15 -> 13

    Goblin zostaje na polu - kolejny agent, który tam wejdzie,
    też dostanie obrażenia.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Optional, TYPE_CHECKING

from ..core.rng import GameRNG
from ..agents.agent import Agent, AgentId

if TYPE_CHECKING:
    from ..board.board import Board


@dataclass
class HazardEncounter:
    """
    Wynik spotkania z goblinem.

    Attributes:
        agent_id (AgentId): Kto wszedł na goblina
        path_index (int): Pozycja goblina na ścieżce
        damage (int): Zadane obrażenia
        hp_before (int): HP przed
        hp_after (int): HP po
        hazard_name (Optional[str]): Imię goblina
    """
    agent_id: AgentId
    path_index: int
    damage: int
    hp_before: int
    hp_after: int
    hazard_name: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        result = {
            "agent_id": self.agent_id.value,
            "path_index": self.path_index,
            "damage": self.damage,
            "hp_before": self.hp_before,
            "hp_after": self.hp_after,
        }
        if self.hazard_name:
            result["hazard_name"] = self.hazard_name
        return result


def roll_hazard_damage(rng: GameRNG, damage_min: int, damage_max: int) -> int:
    """
    Losuje obrażenia goblina z [damage_min, damage_max].

    Raises:
        ValueError: damage_min > damage_max
    """
    if damage_min > damage_max:
        raise ValueError(f"Invalid damage range [{damage_min}, {damage_max}]")
    return rng.roll_damage(damage_min, damage_max)


def resolve_hazard(
    agent: Agent,
    board: "Board",
    path_index: int,
    rng: GameRNG,
    damage_min: int = 1,
    damage_max: int = 3,
) -> Optional[HazardEncounter]:
    """
    Rozstrzyga wejście agenta na pole `path_index`.

    Args:
        agent: Agent, który wszedł na pole
        board: Plansza
        path_index: Pole, na które agent wszedł
        rng: Generator (obrażenia)
        damage_min: Minimalne obrażenia
        damage_max: Maksymalne obrażenia

    Returns:
        Optional[HazardEncounter]: None jeśli na polu nie ma goblina
    """
    if not board.is_hazard(path_index):
        return None

    damage = roll_hazard_damage(rng, damage_min, damage_max)
    hp_before = agent.hit_points
    hp_after = agent.apply_damage(damage)

    return HazardEncounter(
        agent_id=agent.id,
        path_index=path_index,
        damage=damage,
        hp_before=hp_before,
        hp_after=hp_after,
        hazard_name=board.hazard_names.get(path_index),
    )
