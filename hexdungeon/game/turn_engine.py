"""
Silnik tur - jedyne miejsce, które zmienia agentów i stan tury.

PRZEBIEG TURY:
═══════════════════════════════════════════════════════════════════

    1. request_roll(agent_id)       IDLE -> ROLLING
       - ignorowane poza IDLE albo gdy to nie tura tego agenta
       - rzut kostką, bot może skrócić ruch (choose_bot_steps)

    2. Ruch                         ROLLING -> MOVING
       - presenter.on_move_requested(agent, from_cell, to_cell)
       - silnik CZEKA na notify_move_complete(agent_id)
         (jedyny punkt zawieszenia w silniku)
       - cancel_move() wraca do IDLE bez zmiany pozycji i HP

    3. Rozstrzygnięcie              MOVING -> RESOLVING_HAZARD
       - pozycja zatwierdzona
       - goblin na polu -> obrażenia, on_hazard_triggered
       - mgła wojny przeliczona dla gracza

    4. Koniec tury
       - agent na celu   -> GAME_OVER, on_game_over (dokładnie raz)
       - w przeciwnym razie tura przeciwnika, on_turn_changed;
         tura bota startuje sama po bot_turn_delay sekundach

Współbieżność:
    Jeden wątek, asyncio. Najwyżej jedna tura w locie - pilnuje tego
    faza TurnState, więc żadne blokady nie są potrzebne.

Przykład:
    >>> engine = TurnEngine(board, config, GameRNG(42))
    >>> engine.start()
    >>> result = await engine.request_roll(AgentId.PLAYER)
    >>> engine.state.current_turn
    <AgentId.BOT: 'bot'>
"""

from __future__ import annotations
import asyncio
from dataclasses import dataclass
import logging
from typing import Any, Callable, Dict, Optional, TYPE_CHECKING

from ..agents.agent import Agent, AgentId
from ..agents.bot_ai import choose_bot_steps
from ..board.board import Board
from ..board.visibility import CellVisibility, VisibilityTracker, visible_indices
from ..combat.damage import HazardEncounter, resolve_hazard
from ..core.rng import GameRNG
from ..events.event_logger import EventLogger
from .presenter import HeadlessPresenter, Presenter
from .state_machine import TurnPhase, TurnState

if TYPE_CHECKING:
    from .config import GameConfig

logger = logging.getLogger(__name__)


@dataclass
class MoveRequest:
    """Ruch czekający na potwierdzenie warstwy prezentacji."""
    agent_id: AgentId
    roll: int
    steps: int
    from_index: int
    to_index: int
    from_cell: int
    to_cell: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "agent_id": self.agent_id.value,
            "roll": self.roll,
            "steps": self.steps,
            "from_index": self.from_index,
            "to_index": self.to_index,
            "from_cell": self.from_cell,
            "to_cell": self.to_cell,
        }


@dataclass
class TurnResult:
    """
    Wynik jednej zakończonej tury.

    Attributes:
        agent_id (AgentId): Kto się ruszał
        roll (int): Wynik kostki
        steps (int): Faktyczna liczba kroków (bot może skrócić)
        from_index (int): Pozycja przed ruchem
        to_index (int): Pozycja po ruchu
        encounter (Optional[HazardEncounter]): Spotkanie z goblinem
        winner (Optional[AgentId]): Zwycięzca, jeśli ruch zakończył grę
    """
    agent_id: AgentId
    roll: int
    steps: int
    from_index: int
    to_index: int
    encounter: Optional[HazardEncounter] = None
    winner: Optional[AgentId] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "agent_id": self.agent_id.value,
            "roll": self.roll,
            "steps": self.steps,
            "from_index": self.from_index,
            "to_index": self.to_index,
            "encounter": self.encounter.to_dict() if self.encounter else None,
            "winner": self.winner.value if self.winner else None,
        }


class TurnEngine:
    """
    Maszyna tur dla gracza i bota.

    Attributes:
        board (Board): Plansza (tylko odczyt)
        config (GameConfig): Konfiguracja
        rng (GameRNG): Generator (kostka i obrażenia)
        presenter (Presenter): Warstwa prezentacji
        events (EventLogger): Dziennik zdarzeń
        state (TurnState): Faza i czyja tura
        agents (Dict[AgentId, Agent]): Gracz i bot
        visibility (VisibilityTracker): Mgła wojny (obserwator = gracz)
        pending_move (Optional[MoveRequest]): Ruch w trakcie animacji
    """

    FOG_OBSERVER = AgentId.PLAYER

    def __init__(
        self,
        board: Board,
        config: "GameConfig",
        rng: GameRNG,
        presenter: Optional[Presenter] = None,
        event_logger: Optional[EventLogger] = None,
        dice: Optional[Callable[[], int]] = None,
    ):
        self.board = board
        self.config = config
        self.rng = rng
        self.presenter = presenter if presenter is not None else HeadlessPresenter()
        self.events = event_logger if event_logger is not None else EventLogger(
            seed=rng.seed, path_length=board.path_length,
        )
        self._dice = dice if dice is not None else (lambda: self.rng.roll_dice(config.dice_sides))

        self.state = TurnState()
        self.agents: Dict[AgentId, Agent] = {
            agent_id: Agent(agent_id, board.path_length, config.starting_hp)
            for agent_id in AgentId
        }
        self.visibility = VisibilityTracker(config.visibility_radius)

        self.pending_move: Optional[MoveRequest] = None
        self.last_result: Optional[TurnResult] = None
        self._move_future: Optional[asyncio.Future] = None
        self._bot_task: Optional[asyncio.Task] = None
        self._closed = False

        self.presenter.attach(self)

    # ─────────────────────────────────────────────────────────────────────────
    # START
    # ─────────────────────────────────────────────────────────────────────────

    def start(self) -> None:
        """Ogłasza planszę i początkową widoczność (bez zmiany stanu gry)."""
        turn = self.state.turn_number
        self.events.log_game_start(turn, [a.to_dict() for a in self.agents.values()])
        self.events.log_board_ready(
            turn, list(self.board.path), sorted(self.board.hazards), self.board.path.algorithm,
        )
        self.presenter.on_board_ready(self.board.grid.cells, self.board.path, self.board.hazards)
        self._publish_visibility()
        self.presenter.on_turn_changed(self.state.current_turn)

    @property
    def bot_task(self) -> Optional[asyncio.Task]:
        """Zaplanowana tura bota (None jeśli nie ma)."""
        return self._bot_task

    # ─────────────────────────────────────────────────────────────────────────
    # WEJŚCIA (prezentacja -> silnik)
    # ─────────────────────────────────────────────────────────────────────────

    async def request_roll(self, agent_id: AgentId) -> Optional[TurnResult]:
        """
        Rozgrywa całą turę agenta.

        Args:
            agent_id: Agent, który chce rzucić

        Returns:
            Optional[TurnResult]: None jeśli żądanie zignorowano
                                  albo ruch został anulowany
        """
        if self._closed or not self.state.phase.accepts_roll():
            logger.debug("Roll from %s ignored in phase %s", agent_id, self.state.phase)
            return None
        if agent_id != self.state.current_turn:
            logger.debug("Roll from %s ignored, it is %s's turn", agent_id, self.state.current_turn)
            return None

        self.state.transition_to(TurnPhase.ROLLING)
        agent = self.agents[agent_id]
        turn = self.state.turn_number

        roll = self._dice()
        self.state.last_roll = roll
        steps = roll
        if agent_id is AgentId.BOT and self.config.bot_avoid_hazards:
            steps = choose_bot_steps(roll, agent, self.board, self.config.bot_low_health_threshold)
        self.events.log_dice_roll(turn, agent_id.value, roll, steps)
        logger.debug("%s rolled %d (moving %d)", agent_id, roll, steps)

        from_index = agent.position_index
        to_index = agent.target_index(steps)
        move = MoveRequest(
            agent_id=agent_id,
            roll=roll,
            steps=steps,
            from_index=from_index,
            to_index=to_index,
            from_cell=self.board.path[from_index],
            to_cell=self.board.path[to_index],
        )

        self.state.transition_to(TurnPhase.MOVING)
        self.pending_move = move
        self._move_future = asyncio.get_running_loop().create_future()
        future = self._move_future
        self.presenter.on_move_requested(agent_id, move.from_cell, move.to_cell)

        try:
            completed = await future
        finally:
            if self._move_future is future:
                self._move_future = None
                self.pending_move = None
        if not completed:
            return None

        return self._finish_turn(agent, move)

    def notify_move_complete(self, agent_id: AgentId) -> bool:
        """
        Sygnał z prezentacji: animacja ruchu skończona.

        Returns:
            bool: False jeśli nie ma ruchu tego agenta w toku
        """
        future = self._move_future
        if self.state.phase != TurnPhase.MOVING or future is None or future.done():
            logger.debug("Move completion from %s ignored, no move in flight", agent_id)
            return False
        if agent_id != self.state.current_turn:
            logger.debug("Move completion from %s ignored, it is %s's move", agent_id, self.state.current_turn)
            return False
        future.set_result(True)
        return True

    def cancel_move(self) -> bool:
        """
        Przerywa ruch w toku: powrót do IDLE, pozycja i HP bez zmian.

        Returns:
            bool: False jeśli nie ma ruchu w toku
        """
        future = self._move_future
        if self.state.phase != TurnPhase.MOVING or future is None or future.done():
            return False

        move = self.pending_move
        self.pending_move = None
        self._move_future = None
        self.state.transition_to(TurnPhase.IDLE)
        self.events.log_move_cancelled(self.state.turn_number, move.agent_id.value, move.to_index)
        logger.info("Move of %s to %d cancelled", move.agent_id, move.to_index)
        future.set_result(False)

        if self.state.current_turn is AgentId.BOT:
            self._schedule_bot_turn()
        return True

    # ─────────────────────────────────────────────────────────────────────────
    # ROZSTRZYGANIE
    # ─────────────────────────────────────────────────────────────────────────

    def _finish_turn(self, agent: Agent, move: MoveRequest) -> TurnResult:
        """MOVING -> RESOLVING_HAZARD -> IDLE / GAME_OVER."""
        agent.advance(move.steps)
        self.state.transition_to(TurnPhase.RESOLVING_HAZARD)
        turn = self.state.turn_number
        self.events.log_move(
            turn, agent.id.value, move.from_index, move.to_index, move.from_cell, move.to_cell,
        )

        encounter = None
        if move.to_index != move.from_index:
            encounter = resolve_hazard(
                agent, self.board, move.to_index, self.rng,
                self.config.damage_min, self.config.damage_max,
            )
        if encounter is not None:
            self.events.log_hazard(turn, agent.id.value, encounter.to_dict())
            logger.info(
                "%s hit %s at %d: -%d HP (%d left)",
                agent.id, encounter.hazard_name or "a goblin", move.to_index,
                encounter.damage, encounter.hp_after,
            )
            self.presenter.on_hazard_triggered(agent.id, encounter.damage, encounter.hp_after)

        self._publish_visibility()

        result = TurnResult(
            agent_id=agent.id,
            roll=move.roll,
            steps=move.steps,
            from_index=move.from_index,
            to_index=move.to_index,
            encounter=encounter,
        )
        self.last_result = result

        if agent.at_goal:
            self.state.declare_winner(agent.id)
            result.winner = agent.id
            self.events.log_game_over(turn, agent.id.value, [a.to_dict() for a in self.agents.values()])
            logger.info("%s reached the exit on turn %d", agent.id, turn)
            self.presenter.on_game_over(agent.id)
            return result

        self.state.end_turn()
        next_turn = self.state.current_turn
        self.events.log_turn_changed(self.state.turn_number, next_turn.value)
        self.presenter.on_turn_changed(next_turn)
        if next_turn is AgentId.BOT:
            self._schedule_bot_turn()
        return result

    def _publish_visibility(self) -> Dict[int, CellVisibility]:
        observer = self.agents[self.FOG_OBSERVER]
        visibility = self.visibility.compute(
            self.board.cell_at(observer.position_index), self.board.grid.cells,
        )
        self.events.log_visibility(
            self.state.turn_number, observer.id.value, len(visible_indices(visibility)),
        )
        self.presenter.on_visibility_changed(visibility)
        return visibility

    # ─────────────────────────────────────────────────────────────────────────
    # BOT
    # ─────────────────────────────────────────────────────────────────────────

    def _schedule_bot_turn(self) -> None:
        if self._closed:
            return
        previous = self._bot_task
        if previous is not None and not previous.done() and previous is not asyncio.current_task():
            previous.cancel()
        self._bot_task = asyncio.get_running_loop().create_task(self._run_bot_turn())
        self._bot_task.add_done_callback(self._on_bot_task_done)

    async def _run_bot_turn(self) -> Optional[TurnResult]:
        await asyncio.sleep(self.config.bot_turn_delay)
        return await self.request_roll(AgentId.BOT)

    @staticmethod
    def _on_bot_task_done(task: asyncio.Task) -> None:
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Bot turn failed", exc_info=exc)

    async def wait_for_bot(self) -> Optional[TurnResult]:
        """
        Czeka na zaplanowaną turę bota.

        Returns:
            Optional[TurnResult]: Wynik tury bota (None gdy nie było tury)
        """
        task = self._bot_task
        if task is None:
            return None
        return await task

    def shutdown(self) -> None:
        """Anuluje zaplanowaną turę bota i ruch w toku. Silnik nie przyjmuje już rzutów."""
        self._closed = True
        if self._bot_task is not None and not self._bot_task.done():
            self._bot_task.cancel()
        if self._move_future is not None and not self._move_future.done():
            self._move_future.cancel()

    # ─────────────────────────────────────────────────────────────────────────
    # DEBUG
    # ─────────────────────────────────────────────────────────────────────────

    def snapshot(self) -> Dict[str, Any]:
        """Zrzut stanu silnika (debug / API)."""
        return {
            "state": self.state.to_dict(),
            "agents": {a.id.value: a.to_dict() for a in self.agents.values()},
            "path_length": self.board.path_length,
            "hazards": sorted(self.board.hazards),
            "pending_move": self.pending_move.to_dict() if self.pending_move else None,
            "last_result": self.last_result.to_dict() if self.last_result else None,
            "bot_turn_scheduled": self._bot_task is not None and not self._bot_task.done(),
        }
