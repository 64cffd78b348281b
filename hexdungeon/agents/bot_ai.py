"""
AI bota - wybór liczby kroków po rzucie.

Jedna reguła: jeśli bot ma mało HP, a pole docelowe to goblin,
idzie o połowę rzutu (zaokrąglone w dół). Funkcja jest czysta -
nie rusza agenta ani planszy.
"""

from __future__ import annotations
from typing import TYPE_CHECKING

from .agent import Agent

if TYPE_CHECKING:
    from ..board.board import Board


def choose_bot_steps(roll: int, agent: Agent, board: "Board", low_health_threshold: int) -> int:
    """
    Zwraca liczbę kroków, o które bot się przesunie.

    Args:
        roll: Wynik rzutu kostką
        agent: Bot (tylko odczyt)
        board: Plansza (tylko odczyt)
        low_health_threshold: HP <= próg = "mało HP"

    Returns:
        int: roll albo roll // 2

    Example:
        >>> bot.hit_points = 3
        >>> board.is_hazard(bot.target_index(5))
        True
        >>> choose_bot_steps(5, bot, board, 3)
        2
    """
    if agent.hit_points <= low_health_threshold and board.is_hazard(agent.target_index(roll)):
        return roll // 2
    return roll
