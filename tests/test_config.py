"""
Testy dla konfiguracji.

Testuje:
- ConfigLoader (defaults.yaml, deep merge, plik użytkownika)
- GameConfig.from_dict / validate
- load_game_config
"""

import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from hexdungeon.core.config_loader import ConfigLoader
from hexdungeon.core.errors import ConfigurationError
from hexdungeon.game.config import DEFAULT_DATA_PATH, GameConfig, load_game_config


# ═══════════════════════════════════════════════════════════════════════════
# FIXTURES
# ═══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def loader():
    return ConfigLoader(str(DEFAULT_DATA_PATH))


# ═══════════════════════════════════════════════════════════════════════════
# TEST: ConfigLoader
# ═══════════════════════════════════════════════════════════════════════════

def test_defaults_sections(loader):
    defaults = loader.get_defaults()
    assert set(defaults) == {"board", "hazards", "agents", "bot", "visibility"}


def test_get_section_returns_copy(loader):
    section = loader.get_section("hazards")
    section["count"] = 99
    assert loader.get_section("hazards")["count"] == 7


def test_get_missing_section(loader):
    with pytest.raises(KeyError):
        loader.get_section("goblins")


def test_deep_merge_keeps_untouched_keys(loader):
    settings = loader.load_settings({"hazards": {"count": 10}})
    assert settings["hazards"]["count"] == 10
    assert settings["hazards"]["damage_max"] == 3
    assert loader.get_defaults()["hazards"]["count"] == 7


def test_missing_data_folder(tmp_path):
    with pytest.raises(FileNotFoundError):
        ConfigLoader(str(tmp_path)).get_defaults()


def test_reload_rereads_file(tmp_path):
    (tmp_path / "defaults.yaml").write_text("board:\n  grid_radius: 3\n", encoding="utf-8")
    loader = ConfigLoader(str(tmp_path))
    assert loader.get_section("board")["grid_radius"] == 3

    (tmp_path / "defaults.yaml").write_text("board:\n  grid_radius: 4\n", encoding="utf-8")
    assert loader.get_section("board")["grid_radius"] == 3
    loader.reload()
    assert loader.get_section("board")["grid_radius"] == 4


# ═══════════════════════════════════════════════════════════════════════════
# TEST: GameConfig
# ═══════════════════════════════════════════════════════════════════════════

def test_load_defaults_match_dataclass():
    assert load_game_config() == GameConfig()


def test_default_values():
    config = load_game_config()
    assert config.path_length == 50
    assert config.hazard_count == 7
    assert config.starting_hp == 15
    assert (config.damage_min, config.damage_max) == (1, 3)
    assert config.bot_low_health_threshold == 3
    assert config.visibility_radius == 20.0
    assert isinstance(config.hazard_name_prefixes, tuple)


def test_overrides_applied():
    config = load_game_config({"board": {"path_algorithm": "astar"}, "hazards": {"count": 3}})
    assert config.path_algorithm == "astar"
    assert config.hazard_count == 3
    assert config.damage_max == 3


def test_config_file(tmp_path):
    user = tmp_path / "game.yaml"
    user.write_text("agents:\n  starting_hp: 30\n", encoding="utf-8")
    config = load_game_config(config_file=str(user))
    assert config.starting_hp == 30
    assert config.path_length == 50


def test_unknown_key_rejected():
    with pytest.raises(ConfigurationError):
        load_game_config({"hazards": {"cuont": 3}})


def test_unknown_section_rejected():
    with pytest.raises(ConfigurationError):
        GameConfig.from_dict({"dragons": {}})


@pytest.mark.parametrize("changes", [
    {"grid_radius": 0},
    {"cell_size": 0.0},
    {"path_length": 1},
    {"path_algorithm": "bfs"},
    {"hazard_count": 48},
    {"hazard_count": -1},
    {"damage_min": 4},
    {"starting_hp": 0},
    {"dice_sides": 0},
    {"visibility_radius": 0.0},
    {"bot_turn_delay": -1.0},
    {"hazard_name_prefixes": ()},
])
def test_validate_rejects(changes):
    with pytest.raises(ConfigurationError):
        GameConfig(**changes).validate()


def test_validate_returns_self():
    config = GameConfig()
    assert config.validate() is config


def test_to_dict_roundtrip_values():
    data = GameConfig().to_dict()
    assert data["hazard_name_prefixes"][0] == "Grunk"
    assert data["path_length"] == 50
