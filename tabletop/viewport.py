"""Pan and zoom transform between screen and world coordinates."""

from __future__ import annotations

import logging
import math

import pygame

from .config import TableConfig


logger = logging.getLogger(__name__)

MIN_PINCH_DISTANCE = 1e-3


def _is_finite(vector: pygame.Vector2) -> bool:
    return math.isfinite(vector.x) and math.isfinite(vector.y)


class Viewport:
    """Affine camera: ``screen = world * scale + pan``."""

    def __init__(self, config: TableConfig | None = None) -> None:
        self.config = config or TableConfig()
        self.min_zoom = self.config.min_zoom
        self.max_zoom = self.config.max_zoom
        self.scale = self.clamp(1.0)
        self.pan = pygame.Vector2(0, 0)
        self._pinch_distance: float | None = None

    def clamp(self, scale: float) -> float:
        return max(self.min_zoom, min(self.max_zoom, scale))

    def reset(self) -> None:
        """Return to the identity transform."""

        self.scale = self.clamp(1.0)
        self.pan = pygame.Vector2(0, 0)
        self._pinch_distance = None

    # Coordinate helpers ----------------------------------------------

    def to_screen(self, point) -> pygame.Vector2:
        """Convert a world-space *point* to screen-space coordinates."""

        return pygame.Vector2(point) * self.scale + self.pan

    def to_world(self, point) -> pygame.Vector2:
        """Convert a screen-space *point* to world-space coordinates."""

        return (pygame.Vector2(point) - self.pan) / self.scale

    def world_rect_to_screen(
        self, position, size
    ) -> tuple[float, float, float, float]:
        """Map a world rectangle to ``(left, top, width, height)`` on screen."""

        top_left = self.to_screen(position)
        return (top_left.x, top_left.y, size[0] * self.scale, size[1] * self.scale)

    # Zoom --------------------------------------------------------------

    def set_zoom(self, scale: float, anchor=None) -> None:
        """Set an absolute zoom level, clamped to the configured range.

        Without *anchor* the pan offset is left alone. With an *anchor*
        screen point, the world point under it stays put.
        """

        if not math.isfinite(scale):
            logger.debug("set_zoom ignored non-finite scale %r", scale)
            return
        self._rescale(self.clamp(scale), anchor)

    def zoom_by_steps(self, steps: int, anchor) -> None:
        """Modify the zoom level by *steps* scroll increments around *anchor*."""

        if steps == 0:
            return
        factor = self.config.wheel_zoom_step ** steps
        self._rescale(self.clamp(self.scale * factor), anchor)

    def begin_pinch(self, distance: float) -> None:
        """Record the baseline finger distance for a new pinch gesture."""

        if not math.isfinite(distance) or distance < MIN_PINCH_DISTANCE:
            self._pinch_distance = None
            return
        self._pinch_distance = distance

    def apply_pinch(self, distance: float, midpoint) -> None:
        """Zoom by the ratio to the previous distance, anchored at *midpoint*."""

        if not math.isfinite(distance) or distance < MIN_PINCH_DISTANCE:
            logger.debug("Skipping pinch frame with distance %r", distance)
            return
        previous = self._pinch_distance
        self._pinch_distance = distance
        if previous is None:
            return
        self._rescale(self.clamp(self.scale * (distance / previous)), midpoint)

    def end_pinch(self) -> None:
        self._pinch_distance = None

    @property
    def pinching(self) -> bool:
        return self._pinch_distance is not None

    # Pan ---------------------------------------------------------------

    def pan_by(self, delta) -> None:
        delta = pygame.Vector2(delta)
        if not _is_finite(delta):
            return
        self.pan += delta

    def pan_to(self, position) -> None:
        position = pygame.Vector2(position)
        if not _is_finite(position):
            return
        self.pan = position

    # Internal helpers -------------------------------------------------

    def _rescale(self, new_scale: float, anchor) -> None:
        if abs(new_scale - self.scale) < 1e-9:
            return
        if anchor is not None:
            anchor = pygame.Vector2(anchor)
            if not _is_finite(anchor):
                return
            new_pan = anchor - (anchor - self.pan) * (new_scale / self.scale)
            if not _is_finite(new_pan):
                return
            self.pan = new_pan
        self.scale = new_scale
