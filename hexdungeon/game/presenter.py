"""
Styk silnika z warstwą prezentacji.

Silnik woła hooki Presentera (wychodzące), a prezentacja odpowiada
metodami silnika (przychodzące):

    silnik -> prezentacja            prezentacja -> silnik
    ────────────────────────         ─────────────────────────
    on_board_ready                   request_roll(agent_id)
    on_move_requested  ...czeka...   notify_move_complete(agent_id)
    on_hazard_triggered              reset_game()
    on_turn_changed
    on_game_over
    on_visibility_changed

Po on_move_requested silnik czeka, aż prezentacja wywoła
engine.notify_move_complete(). Hooki nie zmieniają stanu gry.
Prezentacja trzyma własną mapę index -> obiekt wizualny; silnik
nie zna obiektów wizualnych.
"""

from __future__ import annotations
from typing import Any, Dict, FrozenSet, List, Optional, Sequence, Tuple, TYPE_CHECKING

from ..agents.agent import AgentId

if TYPE_CHECKING:
    from ..board.visibility import CellVisibility
    from ..core.hex_grid import Cell
    from ..core.pathfinding import Path
    from .turn_engine import TurnEngine


class Presenter:
    """
    Bazowy presenter - wszystkie hooki są no-op.

    Podklasa nadpisuje tylko to, czego potrzebuje. UWAGA: presenter,
    który nie wywoła notify_move_complete, zostawi silnik w MOVING.
    """

    def __init__(self):
        self.engine: Optional["TurnEngine"] = None

    def attach(self, engine: "TurnEngine") -> None:
        """Wywoływane przez silnik przy tworzeniu."""
        self.engine = engine

    def on_board_ready(self, cells: Sequence["Cell"], path: "Path", hazards: FrozenSet[int]) -> None:
        pass

    def on_move_requested(self, agent_id: AgentId, from_cell: int, to_cell: int) -> None:
        pass

    def on_hazard_triggered(self, agent_id: AgentId, damage: int, new_hp: int) -> None:
        pass

    def on_turn_changed(self, current_turn: AgentId) -> None:
        pass

    def on_game_over(self, winner: AgentId) -> None:
        pass

    def on_visibility_changed(self, visibility: Dict[int, "CellVisibility"]) -> None:
        pass


class HeadlessPresenter(Presenter):
    """
    Presenter bez animacji: zapisuje każde wywołanie i od razu
    kończy ruch. Używany przez CLI, play_out() i testy.

    Attributes:
        calls (List[Tuple[str, Tuple]]): (nazwa hooka, argumenty) w kolejności
        auto_complete (bool): Czy od razu wołać notify_move_complete
    """

    def __init__(self, auto_complete: bool = True):
        super().__init__()
        self.auto_complete = auto_complete
        self.calls: List[Tuple[str, Tuple[Any, ...]]] = []

    def calls_named(self, name: str) -> List[Tuple[Any, ...]]:
        return [args for hook, args in self.calls if hook == name]

    def on_board_ready(self, cells, path, hazards) -> None:
        self.calls.append(("on_board_ready", (len(cells), len(path), len(hazards))))

    def on_move_requested(self, agent_id, from_cell, to_cell) -> None:
        self.calls.append(("on_move_requested", (agent_id, from_cell, to_cell)))
        if self.auto_complete and self.engine is not None:
            self.engine.notify_move_complete(agent_id)

    def on_hazard_triggered(self, agent_id, damage, new_hp) -> None:
        self.calls.append(("on_hazard_triggered", (agent_id, damage, new_hp)))

    def on_turn_changed(self, current_turn) -> None:
        self.calls.append(("on_turn_changed", (current_turn,)))

    def on_game_over(self, winner) -> None:
        self.calls.append(("on_game_over", (winner,)))

    def on_visibility_changed(self, visibility) -> None:
        self.calls.append(("on_visibility_changed", (len(visibility),)))
