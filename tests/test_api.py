"""
Testy dla HTTP API (FastAPI TestClient).

Testuje:
- tworzenie gry i błędy konfiguracji
- turę przez HTTP: roll -> move-complete -> tura bota
- ignorowane żądania (podwójny rzut, zły agent)
- mgłę wojny, dziennik zdarzeń, reset
"""

import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from fastapi.testclient import TestClient

from api.main import app
from hexdungeon.core.errors import PathGenerationFailed


# ═══════════════════════════════════════════════════════════════════════════
# FIXTURES
# ═══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def client():
    # Kontekst utrzymuje pętlę zdarzeń (i zadania tur) między żądaniami
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def game(client):
    """Gra z botem, który sam nie rzuci w trakcie testu."""
    response = client.post("/api/games", json={"seed": 12345, "bot_turn_delay": 1000})
    assert response.status_code == 201
    return response.json()


# ═══════════════════════════════════════════════════════════════════════════
# TEST: TWORZENIE GRY
# ═══════════════════════════════════════════════════════════════════════════

def test_health(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


def test_create_game(game):
    assert game["seed"] == 12345
    assert game["games_played"] == 1
    assert game["state"]["phase"] == "IDLE"
    assert game["state"]["current_turn"] == "player"
    assert game["agents"]["player"]["position_index"] == 0
    assert game["agents"]["bot"]["hit_points"] == 15
    assert game["notifications"] == [{"type": "turn_changed", "current_turn": "player"}]


def test_board(client, game):
    board = client.get(f"/api/games/{game['id']}/board").json()
    assert len(board["path"]["cells"]) == 50
    assert len(board["hazards"]) == 7
    assert len(board["cells"]) == 127
    assert set(board["hazard_names"]) == {str(h) for h in board["hazards"]}


def test_invalid_config_rejected(client):
    response = client.post("/api/games", json={"hazard_count": 100})
    assert response.status_code == 422


def test_unknown_algorithm_rejected(client):
    response = client.post("/api/games", json={"algorithm": "dijkstra"})
    assert response.status_code == 422


def test_unknown_game(client):
    assert client.get("/api/games/nope").status_code == 404
    assert client.post("/api/games/nope/roll", json={"agent": "player"}).status_code == 404


# ═══════════════════════════════════════════════════════════════════════════
# TEST: TURA PRZEZ HTTP
# ═══════════════════════════════════════════════════════════════════════════

def test_roll_waits_for_move_complete(client, game):
    game_id = game["id"]

    response = client.post(f"/api/games/{game_id}/roll", json={"agent": "player"}).json()
    assert response["accepted"] is True
    move = response["move"]
    assert move["agent_id"] == "player"
    assert move["from_index"] == 0
    assert 1 <= move["roll"] <= 6
    assert response["game"]["state"]["phase"] == "MOVING"
    assert response["game"]["agents"]["player"]["position_index"] == 0

    # Drugi klik w trakcie animacji
    again = client.post(f"/api/games/{game_id}/roll", json={"agent": "player"}).json()
    assert again["accepted"] is False

    done = client.post(f"/api/games/{game_id}/move-complete", json={"agent": "player"}).json()
    assert done["accepted"] is True
    assert done["result"]["to_index"] == move["to_index"]
    state = done["game"]["state"]
    assert state["phase"] == "IDLE"
    assert state["current_turn"] == "bot"
    assert done["game"]["agents"]["player"]["position_index"] == move["to_index"]
    assert done["game"]["bot_turn_scheduled"] is True


def test_move_complete_without_move(client, game):
    response = client.post(f"/api/games/{game['id']}/move-complete", json={"agent": "player"}).json()
    assert response["accepted"] is False
    assert response["result"] is None


def test_bot_roll_on_player_turn_ignored(client, game):
    response = client.post(f"/api/games/{game['id']}/roll", json={"agent": "bot"}).json()
    assert response["accepted"] is False
    assert response["game"]["state"]["phase"] == "IDLE"


def test_unknown_agent_rejected(client, game):
    response = client.post(f"/api/games/{game['id']}/roll", json={"agent": "wizard"})
    assert response.status_code == 422


# ═══════════════════════════════════════════════════════════════════════════
# TEST: MGŁA, ZDARZENIA, RESET
# ═══════════════════════════════════════════════════════════════════════════

def test_visibility(client, game):
    fog = client.get(f"/api/games/{game['id']}/visibility").json()
    assert fog["radius"] == 20.0
    assert len(fog["cells"]) == 127
    assert fog["visible"]


def test_events_filtered_by_type(client, game):
    game_id = game["id"]
    client.post(f"/api/games/{game_id}/roll", json={"agent": "player"})

    events = client.get(f"/api/games/{game_id}/events", params={"type": "DICE_ROLL"}).json()
    assert len(events["events"]) == 1
    assert events["events"][0]["agent_id"] == "player"

    full = client.get(f"/api/games/{game_id}/events").json()
    assert full["metadata"]["seed"] == 12345


def test_events_unknown_type(client, game):
    response = client.get(f"/api/games/{game['id']}/events", params={"type": "TELEPORT"})
    assert response.status_code == 422


def test_reset(client, game):
    game_id = game["id"]
    client.post(f"/api/games/{game_id}/roll", json={"agent": "player"})
    client.post(f"/api/games/{game_id}/move-complete", json={"agent": "player"})

    fresh = client.post(f"/api/games/{game_id}/reset").json()
    assert fresh["games_played"] == 2
    assert fresh["state"]["phase"] == "IDLE"
    assert fresh["state"]["current_turn"] == "player"
    assert fresh["agents"]["player"]["position_index"] == 0
    assert fresh["bot_turn_scheduled"] is False


def test_failed_reset_keeps_move_in_flight(client, game, monkeypatch):
    game_id = game["id"]
    client.post(f"/api/games/{game_id}/roll", json={"agent": "player"})
    session = app.state.sessions.get(game_id)

    def broken_board():
        raise PathGenerationFailed("no route", target_length=50, attempts=200, best_length=31)

    monkeypatch.setattr(session, "_build_board", broken_board)
    response = client.post(f"/api/games/{game_id}/reset")
    assert response.status_code == 422

    view = client.get(f"/api/games/{game_id}").json()
    assert view["games_played"] == 1
    assert view["state"]["phase"] == "MOVING"
    assert view["notifications"][-1]["type"] == "move_requested"

    done = client.post(f"/api/games/{game_id}/move-complete", json={"agent": "player"}).json()
    assert done["accepted"] is True
    assert done["game"]["state"]["current_turn"] == "bot"
