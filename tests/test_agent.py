"""
Testy dla agentów i AI bota.

Testuje:
- advance (monotoniczność, ucięcie na celu)
- apply_damage (HP >= 0)
- reset / serializacja
- choose_bot_steps (skracanie ruchu przed goblinem przy niskim HP)
"""

import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from hexdungeon.agents.agent import Agent, AgentId
from hexdungeon.agents.bot_ai import choose_bot_steps
from hexdungeon.board.board import build_board
from hexdungeon.core.rng import GameRNG
from hexdungeon.game.config import GameConfig


# ═══════════════════════════════════════════════════════════════════════════
# FIXTURES
# ═══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def player():
    return Agent(AgentId.PLAYER, path_length=50, max_hp=15)


@pytest.fixture
def board():
    config = GameConfig(grid_radius=6, cell_size=2.5, path_length=50, hazard_count=7)
    return build_board(config, GameRNG(12345))


# ═══════════════════════════════════════════════════════════════════════════
# TEST: RUCH
# ═══════════════════════════════════════════════════════════════════════════

def test_agent_starts_at_entry_with_full_hp(player):
    assert player.position_index == 0
    assert player.hit_points == 15


def test_advance_moves_forward(player):
    assert player.advance(4) == 4
    assert player.advance(6) == 10


def test_advance_clamps_at_goal(player):
    """Pozycja 48 + 6 kroków -> 49, nie 54."""
    player.position_index = 48
    assert player.advance(6) == 49
    assert player.at_goal


def test_advance_zero_steps(player):
    player.advance(3)
    assert player.advance(0) == 3


def test_advance_is_monotonic(player):
    positions = [player.advance(s) for s in (1, 6, 2, 6, 6, 6, 6, 6, 6, 6, 6)]
    assert positions == sorted(positions)
    assert positions[-1] == 49


def test_target_index_does_not_move(player):
    assert player.target_index(5) == 5
    assert player.position_index == 0


def test_negative_steps_rejected(player):
    with pytest.raises(ValueError):
        player.advance(-1)


# ═══════════════════════════════════════════════════════════════════════════
# TEST: HP
# ═══════════════════════════════════════════════════════════════════════════

def test_apply_damage_reduces_hp(player):
    assert player.apply_damage(3) == 12


def test_apply_damage_floors_at_zero():
    """HP 2, apply_damage(3) -> 0."""
    agent = Agent(AgentId.BOT, path_length=50, max_hp=15, hit_points=2)
    assert agent.apply_damage(3) == 0
    assert agent.is_down


def test_agent_at_zero_hp_keeps_moving():
    agent = Agent(AgentId.BOT, path_length=50, max_hp=15, hit_points=0)
    assert agent.advance(3) == 3


def test_negative_damage_rejected(player):
    with pytest.raises(ValueError):
        player.apply_damage(-2)


def test_reset(player):
    player.advance(20)
    player.apply_damage(5)
    player.reset()
    assert (player.position_index, player.hit_points) == (0, 15)


def test_agent_id_other():
    assert AgentId.PLAYER.other is AgentId.BOT
    assert AgentId.BOT.other is AgentId.PLAYER


def test_to_dict(player):
    assert player.to_dict() == {
        "id": "player", "position_index": 0, "hit_points": 15, "max_hp": 15, "at_goal": False,
    }


# ═══════════════════════════════════════════════════════════════════════════
# TEST: AI BOTA
# ═══════════════════════════════════════════════════════════════════════════

def _bot_before_hazard(board, hp, distance=5):
    hazard = max(board.hazards)
    return Agent(
        AgentId.BOT, path_length=board.path_length, max_hp=15,
        position_index=hazard - distance, hit_points=hp,
    )


def test_bot_halves_roll_before_hazard_when_low(board):
    bot = _bot_before_hazard(board, hp=3)
    assert choose_bot_steps(5, bot, board, low_health_threshold=3) == 2


def test_bot_keeps_roll_when_healthy(board):
    bot = _bot_before_hazard(board, hp=4)
    assert choose_bot_steps(5, bot, board, low_health_threshold=3) == 5


def test_bot_keeps_roll_when_target_is_safe(board):
    bot = _bot_before_hazard(board, hp=1)
    safe_roll = next(
        r for r in range(1, 7) if not board.is_hazard(bot.target_index(r))
    )
    assert choose_bot_steps(safe_roll, bot, board, low_health_threshold=3) == safe_roll


def test_bot_policy_is_pure(board):
    bot = _bot_before_hazard(board, hp=2)
    before = bot.to_dict()
    choose_bot_steps(5, bot, board, low_health_threshold=3)
    assert bot.to_dict() == before
