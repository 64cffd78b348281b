"""
Dziennik zdarzeń partii w formacie JSON (do odtworzenia gry).

Każde zdarzenie w grze (rzut, ruch, goblin, zmiana tury) jest
zapisywane z numerem tury i danymi. Log może posłużyć warstwie
prezentacji do odtworzenia partii krok po kroku.

TYPY ZDARZEŃ:
═══════════════════════════════════════════════════════════════════

    GAME_START
    ─────────────────────────────────────────────────────────────
    Start partii.
    Data: seed, agents (lista snapshotów)

    BOARD_READY
    ─────────────────────────────────────────────────────────────
    Plansza zbudowana.
    Data: path (indeksy komórek), hazards (path_index), algorithm

    DICE_ROLL
    ─────────────────────────────────────────────────────────────
    Rzut kostką.
    Data: roll, steps (po decyzji AI bota)

    AGENT_MOVE
    ─────────────────────────────────────────────────────────────
    Zatwierdzony ruch agenta.
    Data: from, to (path_index), from_cell, to_cell (indeksy komórek)

    HAZARD_TRIGGERED
    ─────────────────────────────────────────────────────────────
    Agent wszedł na goblina.
    Data: path_index, damage, hp_before, hp_after, hazard_name

    TURN_CHANGED
    ─────────────────────────────────────────────────────────────
    Przekazanie tury.
    Data: current_turn

    VISIBILITY_CHANGED
    ─────────────────────────────────────────────────────────────
    Przeliczona mgła wojny.
    Data: observer, visible_count

    MOVE_CANCELLED
    ─────────────────────────────────────────────────────────────
    Ruch przerwany przed zatwierdzeniem.
    Data: target

    GAME_OVER
    ─────────────────────────────────────────────────────────────
    Koniec partii.
    Data: winner, agents

    GAME_RESET
    ─────────────────────────────────────────────────────────────
    Nowa partia w tej samej sesji.
    Data: seed

FORMAT LOGU:
═══════════════════════════════════════════════════════════════════

{
    "metadata": {
        "version": "1.0",
        "seed": 12345,
        "path_length": 50,
        "timestamp": "2024-01-01T12:00:00"
    },
    "initial_state": {"agents": [...]},
    "events": [
        {"turn": 1, "type": "DICE_ROLL", "agent_id": "player", "data": {"roll": 4, "steps": 4}},
        ...
    ],
    "final_state": {"winner": "player", "turns": 17, "agents": [...]}
}
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, List, Optional
from datetime import datetime
import json
from pathlib import Path


class EventType(Enum):
    """Typ zdarzenia w grze."""

    # Partia
    GAME_START = auto()
    BOARD_READY = auto()
    GAME_OVER = auto()
    GAME_RESET = auto()

    # Tura
    DICE_ROLL = auto()
    AGENT_MOVE = auto()
    MOVE_CANCELLED = auto()
    HAZARD_TRIGGERED = auto()
    TURN_CHANGED = auto()

    # Prezentacja
    VISIBILITY_CHANGED = auto()


@dataclass
class GameEvent:
    """
    Pojedyncze zdarzenie w grze.

    Attributes:
        turn (int): Numer tury, w której zdarzenie nastąpiło
        event_type (EventType): Typ zdarzenia
        agent_id (Optional[str]): "player" / "bot" (jeśli dotyczy agenta)
        data (Dict): Dane specyficzne dla typu zdarzenia
    """
    turn: int
    event_type: EventType
    agent_id: Optional[str] = None
    data: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Serializuje zdarzenie do słownika."""
        result = {
            "turn": self.turn,
            "type": self.event_type.name,
        }

        if self.agent_id:
            result["agent_id"] = self.agent_id
        if self.data:
            result["data"] = self.data

        return result


class EventLogger:
    """
    Dziennik zdarzeń partii.

    Attributes:
        events (List[GameEvent]): Wszystkie zdarzenia
        metadata (Dict): Metadane partii
        initial_state (Dict): Stan początkowy
        final_state (Dict): Stan końcowy

    Example:
        >>> log = EventLogger(seed=12345, path_length=50)
        >>> log.log_dice_roll(turn=1, agent_id="player", roll=4, steps=4)
        >>> log.save("output/game_12345.json")
    """

    def __init__(self, seed: int, path_length: int = 0):
        self.events: List[GameEvent] = []
        self.metadata: Dict[str, Any] = {
            "version": "1.0",
            "seed": seed,
            "path_length": path_length,
            "timestamp": datetime.now().isoformat(),
        }
        self.initial_state: Dict[str, Any] = {}
        self.final_state: Dict[str, Any] = {}

    # ─────────────────────────────────────────────────────────────────────────
    # LOGOWANIE OGÓLNE
    # ─────────────────────────────────────────────────────────────────────────

    def log(self, event: GameEvent) -> None:
        self.events.append(event)

    def log_event(
        self,
        turn: int,
        event_type: EventType,
        agent_id: Optional[str] = None,
        **data: Any,
    ) -> GameEvent:
        """
        Tworzy i loguje zdarzenie.

        Args:
            turn: Numer tury
            event_type: Typ zdarzenia
            agent_id: "player" / "bot"
            **data: Dodatkowe dane

        Returns:
            GameEvent: Utworzone zdarzenie
        """
        event = GameEvent(
            turn=turn,
            event_type=event_type,
            agent_id=agent_id,
            data=dict(data),
        )
        self.log(event)
        return event

    # ─────────────────────────────────────────────────────────────────────────
    # POMOCNICZE METODY LOGOWANIA
    # ─────────────────────────────────────────────────────────────────────────

    def log_game_start(self, turn: int, agents: List[Dict]) -> None:
        """Loguje start partii."""
        self.initial_state = {"agents": agents}
        self.log_event(turn, EventType.GAME_START, seed=self.metadata["seed"], agents=agents)

    def log_board_ready(
        self,
        turn: int,
        path: List[int],
        hazards: List[int],
        algorithm: str,
    ) -> None:
        """Loguje gotową planszę."""
        self.metadata["path_length"] = len(path)
        self.log_event(
            turn, EventType.BOARD_READY,
            path=path, hazards=hazards, algorithm=algorithm,
        )

    def log_dice_roll(self, turn: int, agent_id: str, roll: int, steps: int) -> None:
        """Loguje rzut kostką (steps może być mniejsze od roll dla bota)."""
        self.log_event(turn, EventType.DICE_ROLL, agent_id=agent_id, roll=roll, steps=steps)

    def log_move(
        self,
        turn: int,
        agent_id: str,
        from_index: int,
        to_index: int,
        from_cell: int,
        to_cell: int,
    ) -> None:
        """Loguje zatwierdzony ruch."""
        self.log_event(
            turn,
            EventType.AGENT_MOVE,
            agent_id=agent_id,
            **{"from": from_index, "to": to_index, "from_cell": from_cell, "to_cell": to_cell},
        )

    def log_hazard(self, turn: int, agent_id: str, encounter: Dict[str, Any]) -> None:
        """Loguje spotkanie z goblinem."""
        data = {k: v for k, v in encounter.items() if k != "agent_id"}
        self.log_event(turn, EventType.HAZARD_TRIGGERED, agent_id=agent_id, **data)

    def log_turn_changed(self, turn: int, current_turn: str) -> None:
        self.log_event(turn, EventType.TURN_CHANGED, current_turn=current_turn)

    def log_visibility(self, turn: int, observer: str, visible_count: int) -> None:
        self.log_event(
            turn, EventType.VISIBILITY_CHANGED,
            agent_id=observer, visible_count=visible_count,
        )

    def log_move_cancelled(self, turn: int, agent_id: str, target: int) -> None:
        self.log_event(turn, EventType.MOVE_CANCELLED, agent_id=agent_id, target=target)

    def log_game_over(self, turn: int, winner: str, agents: List[Dict]) -> None:
        """Loguje koniec partii."""
        self.final_state = {
            "winner": winner,
            "turns": turn,
            "agents": agents,
        }
        self.log_event(turn, EventType.GAME_OVER, agent_id=winner, winner=winner)

    def log_game_reset(self, turn: int, seed: int) -> None:
        """Loguje reset; wynik poprzedniej partii przestaje być aktualny."""
        self.final_state = {}
        self.log_event(turn, EventType.GAME_RESET, seed=seed)

    # ─────────────────────────────────────────────────────────────────────────
    # SERIALIZACJA
    # ─────────────────────────────────────────────────────────────────────────

    def to_dict(self) -> Dict[str, Any]:
        """
        Serializuje cały log do słownika.

        Returns:
            Dict: Pełny log w formacie dla JSON
        """
        return {
            "metadata": self.metadata,
            "initial_state": self.initial_state,
            "events": [e.to_dict() for e in self.events],
            "final_state": self.final_state,
        }

    def save(self, filepath: str) -> None:
        """
        Zapisuje log do pliku JSON (tworzy brakujące foldery).

        Args:
            filepath: Ścieżka do pliku
        """
        path = Path(filepath)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, 'w', encoding='utf-8') as f:
            json.dump(self.to_dict(), f, indent=2, ensure_ascii=False)

    def to_json(self, indent: Optional[int] = 2) -> str:
        """
        Zwraca log jako string JSON.

        Args:
            indent: Wcięcie (None = compact)
        """
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    # ─────────────────────────────────────────────────────────────────────────
    # FILTRY
    # ─────────────────────────────────────────────────────────────────────────

    def get_event_count(self) -> int:
        return len(self.events)

    def get_events_by_type(self, event_type: EventType) -> List[GameEvent]:
        """Filtruje zdarzenia po typie."""
        return [e for e in self.events if e.event_type == event_type]

    def get_events_for_agent(self, agent_id: str) -> List[GameEvent]:
        """Filtruje zdarzenia dla agenta."""
        return [e for e in self.events if e.agent_id == agent_id]

    def get_events_in_turn(self, turn: int) -> List[GameEvent]:
        return [e for e in self.events if e.turn == turn]
