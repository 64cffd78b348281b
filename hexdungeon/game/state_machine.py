"""
Maszyna stanów tury.

W danej chwili trwa co najwyżej JEDNA tura. Każde żądanie spoza
oczekiwanej fazy (podwójny klik, rzut w trakcie animacji) jest
ignorowane - transition_to() zwraca False, nic nie jest rzucane.

FAZY:
═══════════════════════════════════════════════════════════════════

    IDLE (Oczekiwanie)
    ─────────────────────────────────────────────────────────────
    Czeka na rzut agenta, którego jest tura.
    Wyjście:
        -> ROLLING (żądanie rzutu)

    ROLLING (Rzut)
    ─────────────────────────────────────────────────────────────
    Kostka rzucona, liczony cel ruchu.
    Wyjście:
        -> MOVING (cel policzony)

    MOVING (Ruch)
    ─────────────────────────────────────────────────────────────
    Warstwa prezentacji animuje ruch; silnik CZEKA na sygnał
    zakończenia (jedyny punkt zawieszenia w silniku).
    Wyjście:
        -> RESOLVING_HAZARD (ruch zakończony)
        -> IDLE (ruch anulowany, pozycja i HP bez zmian)

    RESOLVING_HAZARD (Goblin)
    ─────────────────────────────────────────────────────────────
    Pozycja zatwierdzona; jeśli pole ma goblina, obrażenia.
    Wyjście:
        -> IDLE (tura przechodzi na przeciwnika)
        -> GAME_OVER (agent stoi na celu)

    GAME_OVER (Koniec)
    ─────────────────────────────────────────────────────────────
    Stan końcowy. Wyjście tylko przez reset().

DIAGRAM:
═══════════════════════════════════════════════════════════════════

    IDLE ──► ROLLING ──► MOVING ──► RESOLVING_HAZARD ──► IDLE
     ▲                     │                │
     └──────anulowanie─────┘                └──cel──► GAME_OVER
"""

from __future__ import annotations
from enum import Enum, auto
import logging
from typing import Any, Dict, FrozenSet, Optional

from ..agents.agent import AgentId

logger = logging.getLogger(__name__)


class TurnPhase(Enum):
    """Faza aktualnej tury."""

    IDLE = auto()
    ROLLING = auto()
    MOVING = auto()
    RESOLVING_HAZARD = auto()
    GAME_OVER = auto()

    def accepts_roll(self) -> bool:
        """Czy w tej fazie można rzucić kostką."""
        return self == TurnPhase.IDLE

    def is_terminal(self) -> bool:
        return self == TurnPhase.GAME_OVER

    def __str__(self) -> str:
        return self.name


ALLOWED_TRANSITIONS: Dict[TurnPhase, FrozenSet[TurnPhase]] = {
    TurnPhase.IDLE: frozenset({TurnPhase.ROLLING}),
    TurnPhase.ROLLING: frozenset({TurnPhase.MOVING}),
    TurnPhase.MOVING: frozenset({TurnPhase.RESOLVING_HAZARD, TurnPhase.IDLE}),
    TurnPhase.RESOLVING_HAZARD: frozenset({TurnPhase.IDLE, TurnPhase.GAME_OVER}),
    TurnPhase.GAME_OVER: frozenset(),
}


class TurnState:
    """
    Stan tury jednej sesji gry.

    Attributes:
        phase (TurnPhase): Aktualna faza
        current_turn (AgentId): Czyja tura
        winner (Optional[AgentId]): Zwycięzca (po GAME_OVER)
        last_roll (Optional[int]): Ostatni wynik kostki
        turn_number (int): Numer tury (od 1)

    Example:
        >>> state = TurnState()
        >>> state.transition_to(TurnPhase.MOVING)
        False
        >>> state.transition_to(TurnPhase.ROLLING)
        True
    """

    def __init__(self, first_turn: AgentId = AgentId.PLAYER):
        self.first_turn = first_turn
        self.reset()

    def reset(self) -> None:
        """Stan początkowy: IDLE, tura pierwszego agenta, brak zwycięzcy."""
        self.phase: TurnPhase = TurnPhase.IDLE
        self.current_turn: AgentId = self.first_turn
        self.winner: Optional[AgentId] = None
        self.last_roll: Optional[int] = None
        self.turn_number: int = 1

    def can_transition(self, new_phase: TurnPhase) -> bool:
        return new_phase in ALLOWED_TRANSITIONS[self.phase]

    def transition_to(self, new_phase: TurnPhase) -> bool:
        """
        Przechodzi do nowej fazy.

        Returns:
            bool: True jeśli tranzycja dozwolona (False = zignorowana)
        """
        if not self.can_transition(new_phase):
            logger.debug("Ignored transition %s -> %s", self.phase, new_phase)
            return False
        self.phase = new_phase
        return True

    def end_turn(self) -> bool:
        """
        Oddaje turę przeciwnikowi (RESOLVING_HAZARD -> IDLE).

        Returns:
            bool: False jeśli nie jesteśmy w fazie rozstrzygania
        """
        if self.phase != TurnPhase.RESOLVING_HAZARD:
            return False
        self.transition_to(TurnPhase.IDLE)
        self.current_turn = self.current_turn.other
        self.turn_number += 1
        return True

    def declare_winner(self, agent_id: AgentId) -> bool:
        """Kończy grę zwycięstwem agenta (RESOLVING_HAZARD -> GAME_OVER)."""
        if not self.transition_to(TurnPhase.GAME_OVER):
            return False
        self.winner = agent_id
        return True

    @property
    def is_over(self) -> bool:
        return self.phase.is_terminal()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "phase": self.phase.name,
            "current_turn": self.current_turn.value,
            "winner": self.winner.value if self.winner else None,
            "last_roll": self.last_roll,
            "turn_number": self.turn_number,
        }

    def __repr__(self) -> str:
        return (
            f"TurnState({self.phase.name}, turn={self.current_turn.value}, "
            f"#{self.turn_number})"
        )
