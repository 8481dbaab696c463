"""
Shared fixtures for the tabletop tests.

Provides a seeded table, a recording paint surface and helpers to locate
cards on screen without touching a real display.
"""
import os
import random

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import pygame
import pytest

from tabletop.config import TableConfig
from tabletop.interaction import InteractionEngine
from tabletop.models import Deck
from tabletop.paint import StrokeMode
from tabletop.resources import standard_card_faces
from tabletop.viewport import Viewport


class RecordingPaint:
    """Paint surface double that remembers every call."""

    def __init__(self):
        self.segments = []
        self.clears = 0

    def stroke_segment(self, start, end, mode: StrokeMode) -> None:
        self.segments.append((pygame.Vector2(start), pygame.Vector2(end), mode))

    def clear(self) -> None:
        self.clears += 1
        self.segments.clear()


@pytest.fixture
def config():
    return TableConfig()


@pytest.fixture
def deck(config):
    return Deck.standard(standard_card_faces(), config=config, rng=random.Random(1234))


@pytest.fixture
def viewport(config):
    return Viewport(config)


@pytest.fixture
def paint():
    return RecordingPaint()


@pytest.fixture
def engine(deck, viewport, paint, config):
    return InteractionEngine(deck, viewport, paint, config)


@pytest.fixture
def spread_deck(deck):
    """Lay the first three cards out so they overlap in a known way.

    Card ``a`` sits at (100, 100), ``b`` at (150, 120) overlapping it, and
    ``c`` far away at (900, 100). The rest stay in the pile at the centre.
    """
    a, b, c = deck.ids()[:3]
    deck.set_position(a, (100, 100))
    deck.set_position(b, (150, 120))
    deck.set_position(c, (900, 100))
    return deck, a, b, c


@pytest.fixture
def card_centre(deck, viewport, config):
    """Return a function giving the screen-space centre of a card."""
    def _centre(card_id):
        card = deck.get(card_id)
        world = pygame.Vector2(card.position) + pygame.Vector2(config.card_size) / 2
        return viewport.to_screen(world)
    return _centre
