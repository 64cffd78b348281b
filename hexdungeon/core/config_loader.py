"""
Loader konfiguracji z automatycznym uzupełnianiem wartości domyślnych.

Konfiguracja gry jest w plikach YAML:
- defaults.yaml: wszystkie stałe gry pogrupowane w sekcje
- (opcjonalnie) plik użytkownika nadpisujący wybrane wartości

Logika merge (uzupełniania defaults):
    1. Wczytaj defaults.yaml
    2. Wczytaj nadpisania (plik lub słownik)
    3. Zagnieżdżone sekcje są łączone rekurencyjnie -
       nadpisanie jednego klucza nie kasuje reszty sekcji

Przykład:
    defaults.yaml:
        hazards:
            count: 7
            damage_min: 1
            damage_max: 3

    overrides:
        hazards:
            count: 10   # nadpisuje default
            # damage_min / damage_max -> z defaults

Użycie:
    >>> loader = ConfigLoader("data/")
    >>> settings = loader.load_settings({"hazards": {"count": 10}})
    >>> settings["hazards"]["damage_max"]
    3
"""

from __future__ import annotations
from pathlib import Path
from typing import Dict, Any, Optional
import yaml
import copy


class ConfigLoader:
    """
    Ładuje konfigurację z plików YAML z automatycznym merge defaults.

    Attributes:
        data_path (Path): Ścieżka do folderu data/
        _defaults (Dict): Cache wczytanych defaults

    Example:
        >>> loader = ConfigLoader("data/")
        >>> loader.get_section("board")["path_length"]
        50
    """

    DEFAULTS_FILE = "defaults.yaml"

    def __init__(self, data_path: str = "data/"):
        """
        Inicjalizuje loader ze ścieżką do danych.

        Args:
            data_path: Ścieżka do folderu z plikami YAML
        """
        self.data_path = Path(data_path)
        self._defaults: Optional[Dict] = None

    # ─────────────────────────────────────────────────────────────────────────
    # WCZYTYWANIE PLIKÓW
    # ─────────────────────────────────────────────────────────────────────────

    def _load_yaml(self, filepath: Path) -> Dict:
        """
        Wczytuje plik YAML.

        Args:
            filepath: Pełna ścieżka do pliku

        Returns:
            Dict: Zawartość pliku YAML (pusty plik -> {})

        Raises:
            FileNotFoundError: Jeśli plik nie istnieje
        """
        with open(filepath, 'r', encoding='utf-8') as f:
            return yaml.safe_load(f) or {}

    def get_defaults(self) -> Dict:
        """
        Zwraca słownik z wartościami domyślnymi.

        Cache'uje wczytany plik - kolejne wywołania są szybkie.

        Returns:
            Dict: Zawartość defaults.yaml
        """
        if self._defaults is None:
            self._defaults = self._load_yaml(self.data_path / self.DEFAULTS_FILE)
        return self._defaults

    def get_section(self, name: str) -> Dict:
        """
        Zwraca jedną sekcję defaults (kopię).

        Raises:
            KeyError: Jeśli sekcja nie istnieje
        """
        defaults = self.get_defaults()
        if name not in defaults:
            raise KeyError(f"Section '{name}' not found in {self.DEFAULTS_FILE}")
        return copy.deepcopy(defaults[name])

    # ─────────────────────────────────────────────────────────────────────────
    # MERGE
    # ─────────────────────────────────────────────────────────────────────────

    def load_settings(self, overrides: Optional[Dict[str, Any]] = None) -> Dict:
        """
        Zwraca defaults połączone z nadpisaniami.

        Args:
            overrides: Zagnieżdżony słownik w formacie defaults.yaml

        Returns:
            Dict: Pełna konfiguracja (nowy obiekt, cache nietknięty)
        """
        return self._deep_merge(self.get_defaults(), overrides or {})

    def load_settings_file(self, filepath: str) -> Dict:
        """
        Zwraca defaults połączone z plikiem YAML użytkownika.

        Args:
            filepath: Ścieżka do pliku z nadpisaniami

        Raises:
            FileNotFoundError: Jeśli plik nie istnieje
        """
        return self.load_settings(self._load_yaml(Path(filepath)))

    # ─────────────────────────────────────────────────────────────────────────
    # HELPERY
    # ─────────────────────────────────────────────────────────────────────────

    @staticmethod
    def _deep_merge(base: Dict, override: Dict) -> Dict:
        """
        Głęboko łączy dwa słowniki.

        Override nadpisuje wartości w base.
        Nested dicts są merge'owane rekurencyjnie.

        Args:
            base: Słownik bazowy (domyślne wartości)
            override: Słownik nadpisujący

        Returns:
            Dict: Połączony słownik
        """
        result = copy.deepcopy(base)

        for key, value in override.items():
            if (
                key in result
                and isinstance(result[key], dict)
                and isinstance(value, dict)
            ):
                result[key] = ConfigLoader._deep_merge(result[key], value)
            else:
                result[key] = copy.deepcopy(value)

        return result

    def reload(self) -> None:
        """
        Czyści cache i wymusza ponowne wczytanie plików.

        Przydatne podczas edycji plików YAML w runtime.
        """
        self._defaults = None
