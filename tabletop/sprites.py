"""Card artwork for the tabletop renderer."""

from __future__ import annotations

from typing import Tuple

import pygame

from .resources import CARD_BACK, ResourceManager, label_from_image


Color = Tuple[int, int, int]

CARD_PADDING = 3
RENDER_SCALE = 4

SUIT_SYMBOLS = {"S": "♠", "H": "♥", "D": "♦", "C": "♣"}
SUIT_COLORS = {
    "S": (20, 20, 20),
    "C": (20, 20, 20),
    "H": (200, 16, 46),
    "D": (200, 16, 46),
}
JOKER_COLORS = {"RJ": (200, 16, 46), "BJ": (20, 20, 20)}


def load_font(size: int, bold: bool = False) -> pygame.font.Font:
    """Load a font that supports suit glyphs with sensible fallbacks."""

    if not pygame.font.get_init():
        pygame.font.init()
    preferred_fonts = [
        "dejavusans",
        "arialunicode",
        "arial",
        "liberationsans",
    ]
    for name in preferred_fonts:
        path = pygame.font.match_font(name, bold=bold)
        if path:
            return pygame.font.Font(path, size)
    return pygame.font.Font(None, size)


def split_label(label: str) -> tuple[str, str]:
    """Split ``"10H"`` into ``("10", "H")``; unknown labels have no suit."""

    if label and label[-1] in SUIT_SYMBOLS:
        return label[:-1] or label, label[-1]
    return label, ""


def create_front_surface(label: str, size: tuple[int, int]) -> pygame.Surface:
    """Draw a face-up card for *label* at *size*."""

    width, height = size
    surface = pygame.Surface((width, height), pygame.SRCALPHA)
    surface.fill((0, 0, 0, 0))

    scale = max(1, width // 100)
    border_radius = 8 * scale
    card_rect = surface.get_rect().inflate(-2 * CARD_PADDING * scale, -2 * CARD_PADDING * scale)
    outline_color = (24, 24, 24)
    pygame.draw.rect(surface, (246, 246, 246), card_rect, border_radius=border_radius)
    pygame.draw.rect(surface, outline_color, card_rect, width=2 * scale, border_radius=border_radius)

    value, suit = split_label(label)
    padding = 6 * scale
    if suit:
        color = SUIT_COLORS[suit]
        value_surface = load_font(height // 6, bold=True).render(value, True, color)
        surface.blit(value_surface, (card_rect.left + padding, card_rect.top + padding))

        suit_surface = load_font(height // 3).render(SUIT_SYMBOLS[suit], True, color)
        surface.blit(suit_surface, suit_surface.get_rect(center=card_rect.center))

        corner = load_font(height // 7).render(SUIT_SYMBOLS[suit], True, color)
        corner_rect = corner.get_rect()
        corner_rect.bottomright = (card_rect.right - padding, card_rect.bottom - padding)
        surface.blit(corner, corner_rect)
    else:
        text = "JOKER" if label in JOKER_COLORS else label
        color = JOKER_COLORS.get(label, outline_color)
        rendered = load_font(height // 8, bold=True).render(text, True, color)
        surface.blit(rendered, rendered.get_rect(center=card_rect.center))

    return surface


def create_back_surface(size: tuple[int, int]) -> pygame.Surface:
    """Draw the shared card back at *size*."""

    width, height = size
    surface = pygame.Surface((width, height), pygame.SRCALPHA)
    surface.fill((0, 0, 0, 0))

    scale = max(1, width // 100)
    border_radius = 8 * scale
    card_rect = surface.get_rect().inflate(-2 * CARD_PADDING * scale, -2 * CARD_PADDING * scale)
    pygame.draw.rect(surface, (120, 0, 0), card_rect, border_radius=border_radius)

    inner_rect = card_rect.inflate(-12 * scale, -12 * scale)
    gradient_surface = pygame.Surface(inner_rect.size, pygame.SRCALPHA)
    top_color = pygame.Color(210, 60, 60)
    bottom_color = pygame.Color(90, 0, 0)
    for y in range(inner_rect.height):
        ratio = y / max(inner_rect.height - 1, 1)
        color = (
            int(top_color.r + (bottom_color.r - top_color.r) * ratio),
            int(top_color.g + (bottom_color.g - top_color.g) * ratio),
            int(top_color.b + (bottom_color.b - top_color.b) * ratio),
        )
        pygame.draw.line(gradient_surface, color, (0, y), (inner_rect.width, y))

    spacing = 10 * scale
    pattern_color = (255, 215, 215, 70)
    line_width = max(1, scale)
    for offset in range(-inner_rect.height, inner_rect.width, spacing):
        pygame.draw.line(
            gradient_surface,
            pattern_color,
            (offset, 0),
            (offset + inner_rect.height, inner_rect.height),
            width=line_width,
        )
    for offset in range(0, inner_rect.width + inner_rect.height, spacing):
        pygame.draw.line(
            gradient_surface,
            pattern_color,
            (offset, 0),
            (offset - inner_rect.height, inner_rect.height),
            width=line_width,
        )
    surface.blit(gradient_surface, inner_rect.topleft)

    pygame.draw.rect(
        surface,
        (30, 0, 0),
        card_rect,
        width=max(1, 2 * scale),
        border_radius=border_radius,
    )
    pygame.draw.rect(
        surface,
        (230, 200, 200),
        card_rect.inflate(-8 * scale, -8 * scale),
        width=max(1, scale),
        border_radius=max(border_radius - 3 * scale, 0),
    )
    return surface


class CardArtwork:
    """Cache of card images, scaled to the current zoom on demand."""

    def __init__(self, resources: ResourceManager, card_size: tuple[float, float]) -> None:
        self.resources = resources
        self.card_size = (int(round(card_size[0])), int(round(card_size[1])))
        self._sources: dict[str, pygame.Surface] = {}
        self._scaled: dict[tuple[str, int, int], pygame.Surface] = {}

    def source(self, image: str) -> pygame.Surface:
        """Return the hi-res artwork for *image*, generating it if needed."""

        cached = self._sources.get(image)
        if cached is not None:
            return cached

        loaded = self.resources.load_image(image)
        if loaded is not None:
            surface = loaded
        else:
            hi_res = (self.card_size[0] * RENDER_SCALE, self.card_size[1] * RENDER_SCALE)
            label = label_from_image(image)
            if label == label_from_image(CARD_BACK):
                surface = create_back_surface(hi_res)
            else:
                surface = create_front_surface(label, hi_res)
        self._sources[image] = surface
        return surface

    def scaled(self, image: str, size: tuple[int, int]) -> pygame.Surface:
        """Return *image* smoothly scaled to *size*."""

        key = (image, size[0], size[1])
        cached = self._scaled.get(key)
        if cached is not None:
            return cached
        # Zooming produces many sizes; keep the cache bounded.
        if len(self._scaled) > 512:
            self._scaled.clear()
        surface = pygame.transform.smoothscale(self.source(image), size)
        self._scaled[key] = surface
        return surface
