"""Card asset discovery helpers."""

from __future__ import annotations

import logging
from pathlib import Path

import pygame

from .config import AssetConfig


logger = logging.getLogger(__name__)

CARD_VALUES = ["A", "2", "3", "4", "5", "6", "7", "8", "9", "10", "J", "Q", "K"]
CARD_SUITS = ["S", "H", "C", "D"]
JOKERS = ["RJ", "BJ"]
CARD_BACK = "back.png"


def standard_card_faces(jokers: bool = False) -> list[tuple[str, str]]:
    """Return ``(front, back)`` image names for a standard deck."""

    labels = [f"{value}{suit}" for suit in CARD_SUITS for value in CARD_VALUES]
    if jokers:
        labels.extend(JOKERS)
    return [(f"{label}.png", CARD_BACK) for label in labels]


def label_from_image(name: str) -> str:
    """Return the card label (``"10H"``) encoded in an image name."""

    return Path(name).stem


class ResourceManager:
    """Utility to locate and load optional asset files."""

    def __init__(self, config: AssetConfig | None = None) -> None:
        self.config = config or AssetConfig()
        self._images: dict[str, pygame.Surface | None] = {}

    def resolve(self, path: Path | str) -> Path:
        """Resolve a card image name relative to the card directory."""

        candidate = Path(path)
        if not candidate.is_absolute():
            candidate = self.config.card_path(str(candidate))
        return candidate

    def require(self, path: Path | str) -> Path:
        """Ensure that the given asset exists on disk."""

        resolved = self.resolve(path)
        if not resolved.exists():
            raise FileNotFoundError(f"Asset not found: {resolved}")
        return resolved

    def load_image(self, name: str) -> pygame.Surface | None:
        """Load and cache *name*, returning ``None`` when it is unavailable."""

        if name in self._images:
            return self._images[name]

        image: pygame.Surface | None = None
        try:
            path = self.require(name)
        except FileNotFoundError:
            logger.debug("No image for %s, using generated artwork", name)
        else:
            try:
                image = pygame.image.load(str(path))
            except pygame.error as exc:
                logger.warning("Could not load %s: %s", path, exc)
        self._images[name] = image
        return image
