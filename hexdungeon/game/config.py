"""
Konfiguracja gry - wszystkie stałe czytane przy budowie sesji.

Wartości domyślne odpowiadają data/defaults.yaml. Plik YAML jest
zagnieżdżony w sekcje (board, hazards, agents, bot, visibility),
GameConfig jest płaski - mapowanie robi GameConfig.from_dict().
"""

from __future__ import annotations
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from ..core.config_loader import ConfigLoader
from ..core.errors import ConfigurationError
from ..core.pathfinding import PATH_BUILDERS


# Folder data/ w katalogu głównym repozytorium
DEFAULT_DATA_PATH = Path(__file__).resolve().parents[2] / "data"

# Sekcja YAML -> klucz YAML -> pole GameConfig
_SECTION_FIELDS: Dict[str, Dict[str, str]] = {
    "board": {
        "grid_radius": "grid_radius",
        "cell_size": "cell_size",
        "path_length": "path_length",
        "path_algorithm": "path_algorithm",
        "walk_candidates": "walk_candidates",
        "path_max_attempts": "path_max_attempts",
        "step_tolerance": "step_tolerance",
    },
    "hazards": {
        "count": "hazard_count",
        "damage_min": "damage_min",
        "damage_max": "damage_max",
        "step_cost": "hazard_step_cost",
        "name_prefixes": "hazard_name_prefixes",
        "name_suffixes": "hazard_name_suffixes",
    },
    "agents": {
        "starting_hp": "starting_hp",
        "dice_sides": "dice_sides",
    },
    "bot": {
        "turn_delay": "bot_turn_delay",
        "low_health_threshold": "bot_low_health_threshold",
        "avoid_hazards": "bot_avoid_hazards",
    },
    "visibility": {
        "radius": "visibility_radius",
    },
}


@dataclass
class GameConfig:
    """
    Konfiguracja jednej sesji gry.

    Attributes:
        grid_radius (int): Promień siatki hex
        cell_size (float): Rozmiar komórki
        path_length (int): Liczba komórek ścieżki (N)
        path_algorithm (str): "random_walk" lub "astar"
        walk_candidates (int): K najbliższych kandydatów w random walk
        path_max_attempts (int): Próby budowy ścieżki (na próg)
        step_tolerance (float): Mnożnik odstępu sąsiadów dla progu sąsiedztwa
        hazard_count (int): Liczba goblinów
        damage_min (int): Minimalne obrażenia goblina
        damage_max (int): Maksymalne obrażenia goblina
        hazard_step_cost (float): Koszt A* wejścia na znanego goblina
        starting_hp (int): HP na starcie
        dice_sides (int): Ścianki kostki
        bot_turn_delay (float): Opóźnienie automatycznego rzutu bota (s)
        bot_low_health_threshold (int): Próg "niskiego HP" dla AI bota
        bot_avoid_hazards (bool): Czy bot skraca ruch przed goblinem
        visibility_radius (float): Promień mgły wojny
    """
    grid_radius: int = 6
    cell_size: float = 2.0
    path_length: int = 50
    path_algorithm: str = "random_walk"
    walk_candidates: int = 3
    path_max_attempts: int = 200
    step_tolerance: float = 1.05

    hazard_count: int = 7
    damage_min: int = 1
    damage_max: int = 3
    hazard_step_cost: float = 2.0
    hazard_name_prefixes: Tuple[str, ...] = ("Grunk", "Snark", "Thrak", "Gork", "Mork")
    hazard_name_suffixes: Tuple[str, ...] = (
        "the Cruel", "Bonecrusher", "Shadowstalker", "Doombringer",
    )

    starting_hp: int = 15
    dice_sides: int = 6

    bot_turn_delay: float = 1.0
    bot_low_health_threshold: int = 3
    bot_avoid_hazards: bool = True

    visibility_radius: float = 20.0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GameConfig":
        """
        Tworzy konfigurację z zagnieżdżonego słownika (format defaults.yaml).

        Nieznane sekcje i klucze są błędem - literówka w YAML nie może
        po cichu zostawić wartości domyślnej.

        Raises:
            ConfigurationError: Nieznana sekcja lub klucz
        """
        values: Dict[str, Any] = {}
        for section, entries in data.items():
            fields_map = _SECTION_FIELDS.get(section)
            if fields_map is None:
                raise ConfigurationError(f"Unknown config section '{section}'")
            for key, value in (entries or {}).items():
                if key not in fields_map:
                    raise ConfigurationError(f"Unknown config key '{section}.{key}'")
                if isinstance(value, list):
                    value = tuple(value)
                values[fields_map[key]] = value
        return cls(**values)

    def validate(self) -> "GameConfig":
        """
        Sprawdza spójność konfiguracji.

        Returns:
            GameConfig: self (do łańcuchowania)

        Raises:
            ConfigurationError: Pierwsza znaleziona niepoprawna wartość
        """
        if self.grid_radius <= 0:
            raise ConfigurationError(f"Grid radius must be positive, got {self.grid_radius}")
        if self.cell_size <= 0:
            raise ConfigurationError(f"Cell size must be positive, got {self.cell_size}")
        if self.path_length < 2:
            raise ConfigurationError(f"Path length must be at least 2, got {self.path_length}")
        if self.path_algorithm not in PATH_BUILDERS:
            raise ConfigurationError(f"Unknown path algorithm '{self.path_algorithm}'")
        if self.hazard_count < 0 or self.hazard_count >= self.path_length - 2:
            raise ConfigurationError(
                f"Hazard count {self.hazard_count} must be in [0, {self.path_length - 2}) "
                f"for path length {self.path_length}"
            )
        if self.damage_min < 0 or self.damage_min > self.damage_max:
            raise ConfigurationError(
                f"Invalid damage range [{self.damage_min}, {self.damage_max}]"
            )
        if self.starting_hp <= 0:
            raise ConfigurationError(f"Starting HP must be positive, got {self.starting_hp}")
        if self.dice_sides < 1:
            raise ConfigurationError(f"Dice needs at least one side, got {self.dice_sides}")
        if self.visibility_radius <= 0:
            raise ConfigurationError(
                f"Visibility radius must be positive, got {self.visibility_radius}"
            )
        if self.bot_turn_delay < 0:
            raise ConfigurationError(f"Bot delay cannot be negative, got {self.bot_turn_delay}")
        if not self.hazard_name_prefixes or not self.hazard_name_suffixes:
            raise ConfigurationError("Hazard name lists cannot be empty")
        return self

    def to_dict(self) -> Dict[str, Any]:
        """Serializuje konfigurację (płasko)."""
        result = asdict(self)
        result["hazard_name_prefixes"] = list(self.hazard_name_prefixes)
        result["hazard_name_suffixes"] = list(self.hazard_name_suffixes)
        return result


def load_game_config(
    overrides: Optional[Dict[str, Any]] = None,
    data_path: str = str(DEFAULT_DATA_PATH),
    config_file: Optional[str] = None,
) -> GameConfig:
    """
    Wczytuje defaults.yaml, nakłada nadpisania i waliduje wynik.

    Args:
        overrides: Zagnieżdżony słownik w formacie defaults.yaml
        data_path: Folder z defaults.yaml
        config_file: Opcjonalny plik YAML użytkownika (nakładany przed overrides)

    Returns:
        GameConfig: Zwalidowana konfiguracja

    Raises:
        FileNotFoundError: Brak defaults.yaml lub pliku użytkownika
        ConfigurationError: Niepoprawne wartości
    """
    loader = ConfigLoader(data_path)
    if config_file:
        settings = loader.load_settings_file(config_file)
    else:
        settings = loader.get_defaults()
    settings = ConfigLoader._deep_merge(settings, overrides or {})
    return GameConfig.from_dict(settings).validate()
