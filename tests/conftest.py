import random

import pytest

from asteroid_field.config import GameConfig
from asteroid_field.simulation import create_state


@pytest.fixture
def config():
    return GameConfig(width=800, height=600)


@pytest.fixture
def empty_state(config):
    """A playing session with the ship at the centre and no asteroids."""
    return create_state(config, rng=random.Random(1234), seed_asteroids=False)


class FakeKey(str):
    """Stand-in for blessed's Keystroke."""

    def __new__(cls, text, name=None):
        key = super().__new__(cls, text)
        key.name = name
        key.is_sequence = name is not None
        return key


class FakeTerminal:
    """Just enough of blessed.Terminal for the renderer."""

    def __init__(self, width=80, height=24):
        self.width = width
        self.height = height
        self.normal = ''

    def move_xy(self, x, y):
        return ''

    def color(self, code):
        return ''


@pytest.fixture
def terminal():
    return FakeTerminal()


@pytest.fixture
def make_key():
    return FakeKey
