"""Configuration helpers for the tabletop."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


Color = tuple[int, int, int]


@dataclass(frozen=True)
class DisplayConfig:
    """Visual settings for the pygame display."""

    width: int = 1200
    height: int = 800
    caption: str = "Howard's Table"
    frame_rate: int = 60
    fullscreen: bool = False
    background: Color = (230, 220, 255)


@dataclass(frozen=True)
class AssetConfig:
    """Configuration for locating local assets."""

    root: Path = Path("assets")
    cards: Path = Path("cards")
    fonts: Path = Path("fonts")

    def card_path(self, name: str) -> Path:
        """Return the full path for a card image."""

        return self.root / self.cards / name

    def font_path(self, name: str) -> Path:
        """Return the full path for a font asset."""

        return self.root / self.fonts / name


@dataclass(frozen=True)
class TableConfig:
    """Geometry and interaction tuning for the shared table state.

    ``width`` and ``height`` describe the world-space table that cards are
    dealt onto and that the paint layer covers.
    """

    width: int = 1200
    height: int = 800
    card_width: float = 100.0
    card_height: float = 145.0
    jokers: bool = False
    deal_jitter: float = 5.0
    min_zoom: float = 0.5
    max_zoom: float = 2.0
    wheel_zoom_step: float = 1.2
    tap_threshold: float = 5.0
    brush_radius: int = 8
    eraser_radius: int = 8
    ink_color: Color = (0, 0, 0)

    def __post_init__(self) -> None:
        if self.min_zoom <= 0:
            raise ValueError(f"min_zoom must be positive, got {self.min_zoom}")
        if self.min_zoom > self.max_zoom:
            raise ValueError(
                f"min_zoom ({self.min_zoom}) exceeds max_zoom ({self.max_zoom})"
            )
        if self.card_width <= 0 or self.card_height <= 0:
            raise ValueError("card dimensions must be positive")
        if self.deal_jitter < 0:
            raise ValueError("deal_jitter cannot be negative")
        if self.width <= 0 or self.height <= 0:
            raise ValueError("table dimensions must be positive")

    @property
    def card_size(self) -> tuple[float, float]:
        return (self.card_width, self.card_height)

    @property
    def deal_origin(self) -> tuple[float, float]:
        """Top-left corner that centres a card on the table."""

        return (
            self.width / 2 - self.card_width / 2,
            self.height / 2 - self.card_height / 2,
        )


@dataclass(frozen=True)
class GameConfig:
    """High-level configuration structure for the application."""

    display: DisplayConfig = field(default_factory=DisplayConfig)
    assets: AssetConfig = field(default_factory=AssetConfig)
    table: TableConfig = field(default_factory=TableConfig)
    seed: int | None = None
