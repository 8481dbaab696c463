"""Shared table state and the actions exposed to the controls."""

from __future__ import annotations

import logging
import random
from typing import Iterable

import pygame

from .config import TableConfig
from .interaction import InteractionEngine
from .models import Card, Deck
from .paint import PaintLayer, PaintSurface
from .resources import standard_card_faces
from .viewport import Viewport


logger = logging.getLogger(__name__)


class Tabletop:
    """Wire the deck, viewport, paint layer and interaction engine together."""

    def __init__(
        self,
        config: TableConfig | None = None,
        *,
        faces: Iterable[tuple[str, str]] | None = None,
        seed: int | None = None,
        paint: PaintSurface | None = None,
    ) -> None:
        self.config = config or TableConfig()
        if faces is None:
            faces = standard_card_faces(self.config.jokers)
        self.deck = Deck.standard(faces, config=self.config, rng=random.Random(seed))
        self.viewport = Viewport(self.config)
        self.paint = paint if paint is not None else PaintLayer(self.config)
        self.engine = InteractionEngine(self.deck, self.viewport, self.paint, self.config)
        self._dice = random.Random(None if seed is None else seed + 1)
        self.last_roll: int | None = None
        logger.info("Dealt %d cards", len(self.deck))

    # Rendering accessors -----------------------------------------------

    @property
    def cards(self) -> list[Card]:
        """Cards in draw order, bottom first."""

        return self.deck.cards

    @property
    def scale(self) -> float:
        return self.viewport.scale

    @property
    def pan(self) -> pygame.Vector2:
        return pygame.Vector2(self.viewport.pan)

    @property
    def paint_mode(self) -> bool:
        return self.engine.paint_mode

    @property
    def eraser_mode(self) -> bool:
        return self.engine.eraser_mode

    def card_screen_rect(self, card: Card) -> pygame.Rect:
        left, top, width, height = self.viewport.world_rect_to_screen(
            card.position, self.config.card_size
        )
        return pygame.Rect(
            int(round(left)),
            int(round(top)),
            max(1, int(round(width))),
            max(1, int(round(height))),
        )

    # Controls ----------------------------------------------------------

    def flip_all(self) -> None:
        self.deck.flip_all()

    def shuffle(self) -> None:
        self.deck.shuffle()

    def clear_paint(self) -> None:
        self.paint.clear()

    def set_paint_mode(self, enabled: bool) -> None:
        self.engine.set_paint_mode(enabled)

    def toggle_paint_mode(self) -> None:
        self.engine.set_paint_mode(not self.engine.paint_mode)

    def set_eraser_mode(self, enabled: bool) -> None:
        self.engine.set_eraser_mode(enabled)

    def toggle_eraser_mode(self) -> None:
        self.engine.set_eraser_mode(not self.engine.eraser_mode)

    def set_zoom(self, scale: float, anchor=None) -> None:
        self.viewport.set_zoom(scale, anchor)

    def reset_view(self) -> None:
        """Cancel any gesture and return to unit zoom with no pan."""

        self.engine.pointer_leave()
        self.viewport.reset()

    def roll_die(self) -> int:
        """Roll a six-sided die; the table state is not touched."""

        self.last_roll = self._dice.randint(1, 6)
        logger.info("Rolled a %d", self.last_roll)
        return self.last_roll

    def resize(self, size: tuple[int, int]) -> None:
        """Match the paint layer to a new window size, dropping strokes."""

        if isinstance(self.paint, PaintLayer):
            self.paint.resize(size)
        else:
            self.paint.clear()
