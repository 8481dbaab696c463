"""Pointer and touch gesture handling for the tabletop.

A single :class:`InteractionEngine` turns raw pointer events into one of four
gestures: dragging a card, painting, panning the table or pinch-zooming.
Pointers are identified by any hashable id (``"mouse"`` for the mouse, the
finger id for touches). At most two pointers are tracked at once.
"""

from __future__ import annotations

import enum
import logging
import math
from dataclasses import dataclass, field
from typing import Hashable

import pygame

from .config import TableConfig
from .models import Card, Deck
from .paint import PaintSurface, StrokeMode
from .viewport import Viewport


logger = logging.getLogger(__name__)


def _is_finite(point: pygame.Vector2) -> bool:
    return math.isfinite(point.x) and math.isfinite(point.y)


class InputMode(enum.Enum):
    """What a pointer press on empty table (or a card) should do."""

    IDLE = "idle"
    PAINT = "paint"
    ERASE = "erase"


class Gesture(enum.Enum):
    IDLE = "idle"
    DRAGGING_CARD = "dragging_card"
    PAINTING = "painting"
    PANNING = "panning"
    PINCH_ZOOMING = "pinch_zooming"


@dataclass(slots=True)
class Session:
    """State of the gesture currently in flight."""

    mode: Gesture = Gesture.IDLE
    card_id: int | None = None
    grab_offset: pygame.Vector2 = field(default_factory=pygame.Vector2)
    start_screen: pygame.Vector2 | None = None
    last_point: pygame.Vector2 | None = None
    stroke_mode: StrokeMode | None = None
    anchor: pygame.Vector2 | None = None
    anchor_distance: float = 0.0
    anchor_midpoint: pygame.Vector2 | None = None


class InteractionEngine:
    """Classify pointer input and apply it to the deck, viewport and paint."""

    MAX_POINTERS = 2

    def __init__(
        self,
        deck: Deck,
        viewport: Viewport,
        paint: PaintSurface,
        config: TableConfig | None = None,
    ) -> None:
        self.deck = deck
        self.viewport = viewport
        self.paint = paint
        self.config = config or deck.config
        self.input_mode = InputMode.IDLE
        self.session = Session()
        self.pointers: dict[Hashable, pygame.Vector2] = {}

    @property
    def mode(self) -> Gesture:
        return self.session.mode

    @property
    def paint_mode(self) -> bool:
        return self.input_mode is InputMode.PAINT

    @property
    def eraser_mode(self) -> bool:
        return self.input_mode is InputMode.ERASE

    def set_paint_mode(self, enabled: bool) -> None:
        """Enable or disable painting; enabling turns the eraser off."""

        if enabled:
            self.input_mode = InputMode.PAINT
        elif self.input_mode is InputMode.PAINT:
            self.input_mode = InputMode.IDLE

    def set_eraser_mode(self, enabled: bool) -> None:
        """Enable or disable erasing; enabling turns painting off."""

        if enabled:
            self.input_mode = InputMode.ERASE
        elif self.input_mode is InputMode.ERASE:
            self.input_mode = InputMode.IDLE

    def card_at(self, screen_point) -> Card | None:
        """Return the top-most card whose on-screen rectangle holds the point."""

        point = pygame.Vector2(screen_point)
        for card in reversed(self.deck.cards):
            left, top, width, height = self.viewport.world_rect_to_screen(
                card.position, self.config.card_size
            )
            if left <= point.x <= left + width and top <= point.y <= top + height:
                return card
        return None

    # Pointer events ----------------------------------------------------

    def pointer_down(self, pointer_id: Hashable, position) -> None:
        position = pygame.Vector2(position)
        if pointer_id in self.pointers:
            self.pointers[pointer_id] = position
            return
        if len(self.pointers) >= self.MAX_POINTERS:
            logger.debug("Ignoring extra pointer %r", pointer_id)
            return

        self.pointers[pointer_id] = position
        if len(self.pointers) == 2:
            self._begin_pinch()
        else:
            self._begin_single(position)

    def pointer_move(self, pointer_id: Hashable, position) -> None:
        if pointer_id not in self.pointers:
            return
        position = pygame.Vector2(position)
        self.pointers[pointer_id] = position

        session = self.session
        if session.mode is Gesture.PINCH_ZOOMING:
            self._update_pinch()
        elif session.mode is Gesture.DRAGGING_CARD:
            world = self.viewport.to_world(position)
            target = world - session.grab_offset
            self.deck.set_position(session.card_id, (target.x, target.y))
        elif session.mode is Gesture.PAINTING:
            world = self.viewport.to_world(position)
            if not _is_finite(world):
                logger.debug("Skipping non-finite paint point %r", position)
                return
            start = session.last_point if session.last_point is not None else world
            self.paint.stroke_segment(start, world, session.stroke_mode)
            session.last_point = world
        elif session.mode is Gesture.PANNING:
            self.viewport.pan_to(position - session.anchor)

    def pointer_up(self, pointer_id: Hashable, position=None) -> None:
        if pointer_id not in self.pointers:
            return
        if position is not None:
            self.pointer_move(pointer_id, position)
        release = self.pointers.pop(pointer_id)
        session = self.session

        if session.mode is Gesture.PINCH_ZOOMING:
            self.viewport.end_pinch()
            self.session = Session()
            if self.pointers:
                remaining = next(iter(self.pointers.values()))
                self._begin_single(remaining)
            return

        if session.mode is Gesture.DRAGGING_CARD:
            self._finish_drag(session, release)
        self.session = Session()

    def pointer_leave(self) -> None:
        """Abort whatever gesture is running; nothing counts as a tap."""

        if self.session.mode is not Gesture.IDLE:
            logger.debug("Cancelling %s gesture", self.session.mode.value)
        self.pointers.clear()
        self.viewport.end_pinch()
        self.session = Session()

    # Internal helpers -------------------------------------------------

    def _begin_single(self, position: pygame.Vector2) -> None:
        world = self.viewport.to_world(position)
        card = self.card_at(position)

        if card is not None and self.input_mode is InputMode.IDLE:
            self.deck.bring_to_front(card.identifier)
            self.session = Session(
                mode=Gesture.DRAGGING_CARD,
                card_id=card.identifier,
                grab_offset=world - pygame.Vector2(card.position),
                start_screen=pygame.Vector2(position),
            )
        elif self.input_mode is not InputMode.IDLE:
            stroke_mode = (
                StrokeMode.PAINT if self.input_mode is InputMode.PAINT else StrokeMode.ERASE
            )
            self.session = Session(mode=Gesture.PAINTING, stroke_mode=stroke_mode)
            if _is_finite(world):
                self.session.last_point = world
                self.paint.stroke_segment(world, world, stroke_mode)
            else:
                logger.debug("Stroke starts without a point at %r", position)
        else:
            self.session = Session(
                mode=Gesture.PANNING,
                anchor=pygame.Vector2(position) - self.viewport.pan,
            )
        logger.debug("Began %s gesture", self.session.mode.value)

    def _tracked_pair(self) -> tuple[pygame.Vector2, pygame.Vector2]:
        first, second = list(self.pointers.values())[:2]
        return first, second

    def _begin_pinch(self) -> None:
        first, second = self._tracked_pair()
        distance = first.distance_to(second)
        midpoint = (first + second) / 2
        self.session = Session(
            mode=Gesture.PINCH_ZOOMING,
            anchor_distance=distance,
            anchor_midpoint=midpoint,
        )
        self.viewport.begin_pinch(distance)
        logger.debug("Began pinch at distance %.1f", distance)

    def _update_pinch(self) -> None:
        first, second = self._tracked_pair()
        self.viewport.apply_pinch(first.distance_to(second), (first + second) / 2)

    def _finish_drag(self, session: Session, release: pygame.Vector2) -> None:
        start = session.start_screen
        if start is None or session.card_id is None:
            return
        threshold = self.config.tap_threshold
        delta = release - start
        if abs(delta.x) < threshold and abs(delta.y) < threshold:
            self.deck.register_click(session.card_id)
