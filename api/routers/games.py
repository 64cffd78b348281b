"""
Games router - sesje gry dla przeglądarkowej warstwy prezentacji.

Przebieg tury przez HTTP:
    1. POST /games/{id}/roll            -> ruch czeka na animację
    2. klient animuje pending_move
    3. POST /games/{id}/move-complete   -> goblin, zmiana tury
    Tura bota rusza sama po bot_turn_delay; jej ruch klient
    potwierdza tak samo (agent="bot").
"""

import asyncio
import logging
from typing import Any, Dict, List, Literal, Optional, Set
import uuid

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from pydantic import BaseModel

from hexdungeon.agents.agent import AgentId
from hexdungeon.core.errors import ConfigurationError, PathGenerationFailed
from hexdungeon.events.event_logger import EventType
from hexdungeon.game.config import load_game_config
from hexdungeon.game.presenter import Presenter
from hexdungeon.game.session import GameSession


router = APIRouter()
logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════════════
# PRESENTER + REJESTR SESJI
# ═══════════════════════════════════════════════════════════════════════════

class WebPresenter(Presenter):
    """
    Presenter HTTP: zbiera powiadomienia dla klienta i NIE kończy
    ruchów sam - czeka na POST move-complete.
    """

    def __init__(self):
        super().__init__()
        self.notifications: List[Dict[str, Any]] = []

    def _push(self, kind: str, **data: Any) -> None:
        self.notifications.append({"type": kind, **data})

    def on_move_requested(self, agent_id, from_cell, to_cell) -> None:
        self._push("move_requested", agent_id=agent_id.value, from_cell=from_cell, to_cell=to_cell)

    def on_hazard_triggered(self, agent_id, damage, new_hp) -> None:
        self._push("hazard_triggered", agent_id=agent_id.value, damage=damage, hit_points=new_hp)

    def on_turn_changed(self, current_turn) -> None:
        self._push("turn_changed", current_turn=current_turn.value)

    def on_game_over(self, winner) -> None:
        self._push("game_over", winner=winner.value)


class SessionRegistry:
    """Sesje HTTP i ich zadania w tle (rzuty czekające na animację)."""

    def __init__(self):
        self.sessions: Dict[str, GameSession] = {}
        self._tasks: Dict[str, Set[asyncio.Task]] = {}

    def add(self, session: GameSession) -> str:
        game_id = uuid.uuid4().hex[:12]
        self.sessions[game_id] = session
        self._tasks[game_id] = set()
        return game_id

    def get(self, game_id: str) -> GameSession:
        session = self.sessions.get(game_id)
        if session is None:
            raise HTTPException(status_code=404, detail=f"Game '{game_id}' not found")
        return session

    def track(self, game_id: str, task: asyncio.Task) -> None:
        tasks = self._tasks[game_id]
        tasks.add(task)
        task.add_done_callback(tasks.discard)

    def cancel_tasks(self, game_id: str) -> None:
        for task in list(self._tasks.get(game_id, ())):
            task.cancel()

    def shutdown(self) -> None:
        for game_id, session in self.sessions.items():
            session.shutdown()
            self.cancel_tasks(game_id)
        self.sessions.clear()


def get_registry(request: Request) -> SessionRegistry:
    return request.app.state.sessions


# ═══════════════════════════════════════════════════════════════════════════
# REQUEST/RESPONSE MODELS
# ═══════════════════════════════════════════════════════════════════════════

class CreateGameRequest(BaseModel):
    """Parametry nowej gry (brak = wartość z defaults.yaml)."""
    seed: Optional[int] = None
    algorithm: Optional[str] = None
    grid_radius: Optional[int] = None
    cell_size: Optional[float] = None
    path_length: Optional[int] = None
    hazard_count: Optional[int] = None
    starting_hp: Optional[int] = None
    visibility_radius: Optional[float] = None
    bot_turn_delay: Optional[float] = None


class AgentRequest(BaseModel):
    """Agent wykonujący akcję."""
    agent: Literal["player", "bot"] = "player"


def _overrides(request: CreateGameRequest) -> Dict[str, Dict[str, Any]]:
    mapping = {
        ("board", "path_algorithm"): request.algorithm,
        ("board", "grid_radius"): request.grid_radius,
        ("board", "cell_size"): request.cell_size,
        ("board", "path_length"): request.path_length,
        ("hazards", "count"): request.hazard_count,
        ("agents", "starting_hp"): request.starting_hp,
        ("visibility", "radius"): request.visibility_radius,
        ("bot", "turn_delay"): request.bot_turn_delay,
    }
    overrides: Dict[str, Dict[str, Any]] = {}
    for (section, key), value in mapping.items():
        if value is not None:
            overrides.setdefault(section, {})[key] = value
    return overrides


def _game_view(game_id: str, session: GameSession) -> Dict[str, Any]:
    presenter = session.presenter
    return {
        "id": game_id,
        **session.snapshot(),
        "notifications": list(presenter.notifications) if isinstance(presenter, WebPresenter) else [],
    }


# ═══════════════════════════════════════════════════════════════════════════
# ENDPOINTS
# ═══════════════════════════════════════════════════════════════════════════

@router.post("/games", status_code=201)
async def create_game(
    request: CreateGameRequest,
    registry: SessionRegistry = Depends(get_registry),
) -> Dict[str, Any]:
    """
    Tworzy nową grę (plansza budowana od razu).

    Raises:
        422: Niepoprawna konfiguracja albo nieudana budowa ścieżki
    """
    seed = request.seed if request.seed is not None else uuid.uuid4().int % 1_000_000
    try:
        config = load_game_config(_overrides(request))
        session = GameSession(config, seed=seed, presenter=WebPresenter())
    except (ConfigurationError, PathGenerationFailed) as exc:
        raise HTTPException(status_code=422, detail=str(exc))

    game_id = registry.add(session)
    logger.info("Game %s created (seed %d)", game_id, seed)
    return _game_view(game_id, session)


@router.get("/games/{game_id}")
async def get_game(game_id: str, registry: SessionRegistry = Depends(get_registry)) -> Dict[str, Any]:
    """Stan gry: faza, tura, agenci, ruch w toku, powiadomienia."""
    return _game_view(game_id, registry.get(game_id))


@router.get("/games/{game_id}/board")
async def get_board(game_id: str, registry: SessionRegistry = Depends(get_registry)) -> Dict[str, Any]:
    """Wszystkie komórki, ścieżka i gobliny."""
    return registry.get(game_id).board.to_dict()


@router.get("/games/{game_id}/visibility")
async def get_visibility(game_id: str, registry: SessionRegistry = Depends(get_registry)) -> Dict[str, Any]:
    """Ostatnio policzona mgła wojny (obserwator = gracz)."""
    return registry.get(game_id).engine.visibility.to_dict()


@router.get("/games/{game_id}/events")
async def get_events(
    game_id: str,
    event_type: Optional[str] = Query(None, alias="type"),
    registry: SessionRegistry = Depends(get_registry),
) -> Dict[str, Any]:
    """Dziennik zdarzeń (opcjonalnie filtrowany po typie, np. ?type=DICE_ROLL)."""
    events = registry.get(game_id).events
    if event_type is None:
        return events.to_dict()
    try:
        wanted = EventType[event_type]
    except KeyError:
        raise HTTPException(status_code=422, detail=f"Unknown event type '{event_type}'")
    return {"events": [e.to_dict() for e in events.get_events_by_type(wanted)]}


@router.post("/games/{game_id}/roll")
async def roll(
    game_id: str,
    request: AgentRequest,
    registry: SessionRegistry = Depends(get_registry),
) -> Dict[str, Any]:
    """
    Rzut kostką. Ruch zostaje w toku aż do POST move-complete.

    Rzut poza fazą IDLE albo nie w swojej turze jest ignorowany
    (accepted = false), nie jest błędem.
    """
    session = registry.get(game_id)
    engine = session.engine
    agent_id = AgentId(request.agent)

    if not engine.state.phase.accepts_roll() or engine.state.current_turn != agent_id:
        return {"accepted": False, "game": _game_view(game_id, session)}

    registry.track(game_id, asyncio.create_task(session.request_roll(agent_id)))
    # Oddaj sterowanie: tura dochodzi do MOVING i czeka na animację
    await asyncio.sleep(0)

    move = engine.pending_move
    return {
        "accepted": True,
        "move": move.to_dict() if move else None,
        "game": _game_view(game_id, session),
    }


@router.post("/games/{game_id}/move-complete")
async def move_complete(
    game_id: str,
    request: AgentRequest,
    registry: SessionRegistry = Depends(get_registry),
) -> Dict[str, Any]:
    """Klient skończył animację ruchu - silnik rozstrzyga turę."""
    session = registry.get(game_id)
    accepted = session.notify_move_complete(AgentId(request.agent))
    if accepted:
        await asyncio.sleep(0)

    last = session.engine.last_result
    return {
        "accepted": accepted,
        "result": last.to_dict() if accepted and last else None,
        "game": _game_view(game_id, session),
    }


@router.post("/games/{game_id}/reset")
async def reset(game_id: str, registry: SessionRegistry = Depends(get_registry)) -> Dict[str, Any]:
    """Nowa partia w tej samej sesji (nowa plansza)."""
    session = registry.get(game_id)
    presenter = session.presenter if isinstance(session.presenter, WebPresenter) else None
    previous = list(presenter.notifications) if presenter else []
    if presenter:
        presenter.notifications.clear()
    try:
        session.reset_game()
    except (ConfigurationError, PathGenerationFailed) as exc:
        # Stara partia zostaje nietknięta (łącznie z rzutem w toku)
        if presenter:
            presenter.notifications[:] = previous
        raise HTTPException(status_code=422, detail=str(exc))
    registry.cancel_tasks(game_id)
    return _game_view(game_id, session)
