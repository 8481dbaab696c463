"""Freehand paint layer drawn underneath the cards."""

from __future__ import annotations

import enum
import logging
import math
from typing import Protocol

import pygame

from .config import TableConfig


logger = logging.getLogger(__name__)

TRANSPARENT = (0, 0, 0, 0)


class StrokeMode(enum.Enum):
    PAINT = "paint"
    ERASE = "erase"


class PaintSurface(Protocol):
    """Anything the interaction engine can stroke onto."""

    def stroke_segment(self, start, end, mode: StrokeMode) -> None:
        ...

    def clear(self) -> None:
        ...


class PaintLayer:
    """Write-only raster covering the table, addressed in world units.

    Ink is written with full alpha; erasing writes transparent pixels so the
    table background shows through again.

    The raster spans world ``[0, width] x [0, height]`` only. When zoomed out
    or panned, strokes over the window area outside that rectangle are
    clipped.
    """

    def __init__(self, config: TableConfig | None = None) -> None:
        self.config = config or TableConfig()
        self.surface = self._create_surface((self.config.width, self.config.height))

    @staticmethod
    def _create_surface(size: tuple[int, int]) -> pygame.Surface:
        width = max(1, int(size[0]))
        height = max(1, int(size[1]))
        surface = pygame.Surface((width, height), pygame.SRCALPHA)
        surface.fill(TRANSPARENT)
        return surface

    @property
    def size(self) -> tuple[int, int]:
        return self.surface.get_size()

    def stroke_segment(self, start, end, mode: StrokeMode) -> None:
        """Draw a round-capped line from *start* to *end*."""

        if mode is StrokeMode.ERASE:
            color = TRANSPARENT
            radius = self.config.eraser_radius
        else:
            color = (*self.config.ink_color, 255)
            radius = self.config.brush_radius

        start_vec = pygame.Vector2(start)
        end_vec = pygame.Vector2(end)
        if not all(math.isfinite(value) for value in (*start_vec, *end_vec)):
            logger.debug("Ignoring non-finite segment %r -> %r", start, end)
            return
        start_point = (int(round(start_vec.x)), int(round(start_vec.y)))
        end_point = (int(round(end_vec.x)), int(round(end_vec.y)))

        if start_point != end_point:
            pygame.draw.line(self.surface, color, start_point, end_point, radius * 2)
        # Round caps also cover the joins between consecutive segments.
        pygame.draw.circle(self.surface, color, start_point, radius)
        pygame.draw.circle(self.surface, color, end_point, radius)

    def clear(self) -> None:
        self.surface.fill(TRANSPARENT)

    def resize(self, size: tuple[int, int]) -> None:
        """Replace the raster with a blank one of *size*; strokes are dropped."""

        logger.debug("Resizing paint layer to %s, clearing strokes", size)
        self.surface = self._create_surface(size)
