"""
Agents module - uczestnicy gry.

Zawiera:
- AgentId: Gracz / bot
- Agent: Pozycja na ścieżce i HP
- choose_bot_steps: Decyzja AI bota
"""

from .agent import Agent, AgentId
from .bot_ai import choose_bot_steps

__all__ = ["Agent", "AgentId", "choose_bot_steps"]
