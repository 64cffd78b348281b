"""
Sesja gry - jawny obiekt zamiast globalnej "aktualnej gry".

GameSession posiada wszystko, czego potrzebuje jedna partia:
konfigurację, RNG, planszę, silnik tur i dziennik zdarzeń.
Komponenty dostają referencje do sesji / jej części - nic nie
jest trzymane w zmiennych modułu.

Reset:
    reset_game() buduje NOWĄ planszę (z nowego forka RNG) i nowy
    silnik. Stary silnik jest zamykany (anulowana tura bota).

Przykład:
    >>> session = GameSession(GameConfig(bot_turn_delay=0), seed=42)
    >>> winner = asyncio.run(session.play_out())
"""

from __future__ import annotations
import asyncio
import logging
from typing import Any, Callable, Dict, Optional

from ..agents.agent import AgentId
from ..board.board import Board, build_board
from ..core.rng import GameRNG
from ..events.event_logger import EventLogger
from .config import GameConfig
from .presenter import Presenter
from .turn_engine import TurnEngine, TurnResult

logger = logging.getLogger(__name__)


class GameSession:
    """
    Jedna sesja gry (może obejmować wiele partii przez reset).

    Attributes:
        config (GameConfig): Konfiguracja (zwalidowana)
        seed (int): Ziarno sesji
        rng (GameRNG): Główny generator (kostka, obrażenia)
        presenter (Optional[Presenter]): Warstwa prezentacji
        board (Board): Aktualna plansza
        engine (TurnEngine): Aktualny silnik tur
        events (EventLogger): Dziennik zdarzeń całej sesji
        games_played (int): Liczba rozpoczętych partii

    Raises:
        ConfigurationError / PathGenerationFailed: przy budowie planszy;
        sesja nie powstaje z częściową planszą.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: int = 0,
        presenter: Optional[Presenter] = None,
        dice: Optional[Callable[[], int]] = None,
    ):
        self.config = (config or GameConfig()).validate()
        self.seed = seed
        self.rng = GameRNG(seed)
        self.presenter = presenter
        self._dice = dice
        self.events = EventLogger(seed=seed, path_length=self.config.path_length)
        self.games_played = 0

        self.board: Board = self._build_board()
        self.engine: TurnEngine = self._new_engine()

    def _build_board(self) -> Board:
        # Osobny generator: liczba prób budowy ścieżki nie przesuwa rzutów
        return build_board(self.config, self.rng.fork())

    def _new_engine(self) -> TurnEngine:
        engine = TurnEngine(
            self.board,
            self.config,
            self.rng,
            presenter=self.presenter,
            event_logger=self.events,
            dice=self._dice,
        )
        self.games_played += 1
        engine.start()
        return engine

    # ─────────────────────────────────────────────────────────────────────────
    # WEJŚCIA
    # ─────────────────────────────────────────────────────────────────────────

    async def request_roll(self, agent_id: AgentId = AgentId.PLAYER) -> Optional[TurnResult]:
        return await self.engine.request_roll(agent_id)

    def notify_move_complete(self, agent_id: AgentId) -> bool:
        return self.engine.notify_move_complete(agent_id)

    def reset_game(self) -> TurnEngine:
        """
        Nowa partia: nowa plansza, agenci na starcie, tura gracza.

        Jeśli budowa nowej planszy się nie uda, stara partia zostaje
        nietknięta i wyjątek leci dalej.

        Returns:
            TurnEngine: Nowy silnik
        """
        board = self._build_board()
        self.engine.shutdown()
        self.board = board
        self.events.log_game_reset(self.engine.state.turn_number, self.seed)
        self.engine = self._new_engine()
        logger.info("Game reset (game #%d)", self.games_played)
        return self.engine

    def shutdown(self) -> None:
        self.engine.shutdown()

    # ─────────────────────────────────────────────────────────────────────────
    # TRYB BEZ PREZENTACJI
    # ─────────────────────────────────────────────────────────────────────────

    async def play_out(self, max_turns: int = 1000) -> Optional[AgentId]:
        """
        Rozgrywa partię do końca: gracz rzuca od razu, bot w swoim tasku.

        Wymaga presentera, który sam kończy ruchy (HeadlessPresenter).

        Args:
            max_turns: Limit tur (zabezpieczenie)

        Returns:
            Optional[AgentId]: Zwycięzca albo None po przekroczeniu limitu
        """
        engine = self.engine
        while not engine.state.is_over and engine.state.turn_number <= max_turns:
            if engine.state.current_turn is AgentId.PLAYER:
                result = await engine.request_roll(AgentId.PLAYER)
                if result is None:
                    await asyncio.sleep(0)
            elif engine.bot_task is not None and not engine.bot_task.done():
                await engine.wait_for_bot()
            else:
                await engine.request_roll(AgentId.BOT)

        if not engine.state.is_over:
            logger.warning("Game not finished after %d turns", max_turns)
        return engine.state.winner

    # ─────────────────────────────────────────────────────────────────────────
    # DEBUG
    # ─────────────────────────────────────────────────────────────────────────

    def snapshot(self) -> Dict[str, Any]:
        data = self.engine.snapshot()
        data["seed"] = self.seed
        data["games_played"] = self.games_played
        data["algorithm"] = self.board.path.algorithm
        return data
