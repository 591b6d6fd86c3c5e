import pytest

from asteroid_field.config import GameConfig
from asteroid_field.simulation import create_state


def test_defaults_are_valid():
    config = GameConfig()
    assert config.validate() is config
    assert config.center == (400.0, 300.0)


def test_with_size_keeps_other_settings():
    config = GameConfig(hit_damage=5).with_size(640, 368)
    assert (config.width, config.height) == (640.0, 368.0)
    assert config.hit_damage == 5


@pytest.mark.parametrize('overrides', [
    {'width': 0},
    {'height': -10},
    {'min_asteroid_radius': 0},
    {'min_asteroid_radius': 80, 'max_asteroid_radius': 70},
    {'hit_damage': 0},
    {'spawn_interval_ms': 0},
    {'game_over_delay_ms': -1},
    {'seed_spawn_delays_ms': (0.0, -5.0)},
    {'spawn_pattern': 'spiral'},
])
def test_invalid_settings_are_rejected(overrides):
    with pytest.raises(ValueError):
        GameConfig(**overrides).validate()


def test_create_state_refuses_bad_config():
    with pytest.raises(ValueError):
        create_state(GameConfig(width=-1))
