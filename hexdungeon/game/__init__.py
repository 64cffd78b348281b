"""
Game module - przebieg partii.

Zawiera:
- GameConfig, load_game_config: Konfiguracja gry
- TurnPhase, TurnState: Maszyna stanów tury
- Presenter, HeadlessPresenter: Styk z warstwą prezentacji
- TurnEngine, TurnResult: Silnik tur
- GameSession: Jedna sesja gry (bez globalnego stanu)
"""

from .config import GameConfig, load_game_config
from .state_machine import TurnPhase, TurnState
from .presenter import Presenter, HeadlessPresenter
from .turn_engine import TurnEngine, TurnResult, MoveRequest
from .session import GameSession

__all__ = [
    "GameConfig", "load_game_config", "TurnPhase", "TurnState",
    "Presenter", "HeadlessPresenter", "TurnEngine", "TurnResult", "MoveRequest",
    "GameSession",
]
