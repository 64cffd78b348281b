"""
Combat module - spotkania z goblinami.

Zawiera:
- HazardEncounter: Wynik spotkania (obrażenia, HP przed/po)
- roll_hazard_damage: Losowanie obrażeń
- resolve_hazard: Rozstrzygnięcie wejścia na pole
"""

from .damage import HazardEncounter, roll_hazard_damage, resolve_hazard

__all__ = ["HazardEncounter", "roll_hazard_damage", "resolve_hazard"]
