"""
Wyjątki silnika planszy.

Hierarchia:
    HexDungeonError
    ├── ConfigurationError   (błędna konfiguracja - fatalny przy budowie gry)
    └── PathGenerationFailed (nie udało się zbudować ścieżki)

Odrzucone tranzycje tury (klik w trakcie animacji itp.) NIE są wyjątkami -
TurnEngine po prostu je ignoruje.
"""

from __future__ import annotations
from typing import Optional


class HexDungeonError(Exception):
    """Bazowy wyjątek pakietu."""


class ConfigurationError(HexDungeonError, ValueError):
    """
    Niepoprawne wartości konfiguracji.

    Przykłady: promień siatki <= 0, liczba goblinów >= długość wnętrza ścieżki,
    docelowa długość ścieżki większa niż liczba komórek.
    """


class PathGenerationFailed(HexDungeonError, RuntimeError):
    """
    Budowa ścieżki nie powiodła się po wyczerpaniu prób.

    Attributes:
        target_length (int): Wymagana długość ścieżki
        attempts (int): Liczba wykonanych prób
        best_length (int): Najdłuższa uzyskana ścieżka
    """

    def __init__(
        self,
        message: str,
        target_length: int,
        attempts: int = 0,
        best_length: Optional[int] = None,
    ):
        super().__init__(message)
        self.target_length = target_length
        self.attempts = attempts
        self.best_length = best_length
