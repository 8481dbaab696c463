"""Pygame application bootstrap for the tabletop."""

from __future__ import annotations

import logging

import pygame

from .config import GameConfig
from .resources import ResourceManager
from .sprites import CardArtwork, load_font
from .table import Tabletop


logger = logging.getLogger(__name__)

MOUSE_POINTER = "mouse"

HELP_TEXT = "F flip all  S shuffle  P paint  E eraser  C clear  D roll die  +/- zoom  0 reset view  Esc quit"


class TabletopApp:
    """Minimal pygame wrapper that feeds input into the table engine."""

    def __init__(self, config: GameConfig | None = None) -> None:
        self.config = config or GameConfig()
        self.resources = ResourceManager(self.config.assets)
        self.table = Tabletop(self.config.table, seed=self.config.seed)
        self.artwork = CardArtwork(self.resources, self.config.table.card_size)
        self.screen: pygame.Surface | None = None
        self.clock: pygame.time.Clock | None = None
        self.font: pygame.font.Font | None = None
        self.running = False
        self._cursor: int | None = None

    def setup(self) -> None:
        """Initialise pygame and the display surface."""

        pygame.init()
        display = self.config.display
        flags = pygame.RESIZABLE
        size = (display.width, display.height)

        if display.fullscreen:
            flags = pygame.FULLSCREEN
            if display.width <= 0 or display.height <= 0:
                info = pygame.display.Info()
                size = (info.current_w, info.current_h)

        self.screen = pygame.display.set_mode(size, flags)
        pygame.display.set_caption(display.caption)
        self.clock = pygame.time.Clock()
        self.font = load_font(16)
        self.table.resize(self.screen.get_size())
        self.running = True
        logger.info("Display ready at %dx%d", *self.screen.get_size())

    def handle_events(self) -> None:
        """Consume pygame events."""

        engine = self.table.engine
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.KEYDOWN:
                self._handle_key(event)
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                if not getattr(event, "touch", False):
                    engine.pointer_down(MOUSE_POINTER, event.pos)
            elif event.type == pygame.MOUSEMOTION:
                if not getattr(event, "touch", False):
                    engine.pointer_move(MOUSE_POINTER, event.pos)
            elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
                if not getattr(event, "touch", False):
                    engine.pointer_up(MOUSE_POINTER, event.pos)
            elif event.type == pygame.FINGERDOWN:
                engine.pointer_down(self._finger_id(event), self._finger_pos(event))
            elif event.type == pygame.FINGERMOTION:
                engine.pointer_move(self._finger_id(event), self._finger_pos(event))
            elif event.type == pygame.FINGERUP:
                engine.pointer_up(self._finger_id(event), self._finger_pos(event))
            elif event.type in (pygame.WINDOWLEAVE, pygame.WINDOWFOCUSLOST):
                engine.pointer_leave()
            elif event.type == pygame.MOUSEWHEEL:
                self.table.viewport.zoom_by_steps(event.y, pygame.mouse.get_pos())
            elif event.type == pygame.WINDOWSIZECHANGED:
                engine.pointer_leave()
                self.table.resize((event.x, event.y))

    def draw(self) -> None:
        """Render the current frame."""

        assert self.screen is not None
        self.screen.fill(self.config.display.background)
        self._draw_paint(self.screen)
        for card in self.table.cards:
            rect = self.table.card_screen_rect(card)
            if not rect.colliderect(self.screen.get_rect()):
                continue
            self.screen.blit(self.artwork.scaled(card.image, rect.size), rect)
        self._draw_status(self.screen)
        pygame.display.flip()

    def run(self) -> None:
        """Run the main loop until the app stops."""

        if not self.running:
            self.setup()

        assert self.clock is not None
        display = self.config.display

        while self.running:
            self.handle_events()
            self._update_cursor()
            self.draw()
            self.clock.tick(display.frame_rate)

        pygame.quit()

    # Internal helpers -------------------------------------------------

    def _handle_key(self, event: pygame.event.Event) -> None:
        table = self.table
        if event.key == pygame.K_ESCAPE:
            self.running = False
        elif event.key in (pygame.K_0, pygame.K_KP0):
            table.reset_view()
        elif event.key == pygame.K_f:
            table.flip_all()
        elif event.key == pygame.K_s:
            table.shuffle()
        elif event.key == pygame.K_p:
            table.toggle_paint_mode()
        elif event.key == pygame.K_e:
            table.toggle_eraser_mode()
        elif event.key == pygame.K_c:
            table.clear_paint()
        elif event.key == pygame.K_d:
            table.roll_die()
        elif event.key in (pygame.K_PLUS, pygame.K_EQUALS, pygame.K_KP_PLUS):
            self._step_zoom(1)
        elif event.key in (pygame.K_MINUS, pygame.K_KP_MINUS):
            self._step_zoom(-1)

    def _step_zoom(self, steps: int) -> None:
        """Zoom around the window centre like the zoom slider."""

        assert self.screen is not None
        center = pygame.Vector2(self.screen.get_size()) / 2
        step = self.config.table.wheel_zoom_step ** steps
        self.table.set_zoom(self.table.scale * step, anchor=center)

    def _finger_id(self, event: pygame.event.Event) -> tuple[int, int]:
        return (event.touch_id, event.finger_id)

    def _finger_pos(self, event: pygame.event.Event) -> pygame.Vector2:
        """Convert normalised finger coordinates to window pixels."""

        assert self.screen is not None
        width, height = self.screen.get_size()
        return pygame.Vector2(event.x * width, event.y * height)

    def _draw_paint(self, surface: pygame.Surface) -> None:
        paint = self.table.paint.surface
        left, top, width, height = self.table.viewport.world_rect_to_screen(
            (0, 0), paint.get_size()
        )
        size = (max(1, int(round(width))), max(1, int(round(height))))
        if size != paint.get_size():
            paint = pygame.transform.scale(paint, size)
        surface.blit(paint, (int(round(left)), int(round(top))))

    def _draw_status(self, surface: pygame.Surface) -> None:
        assert self.font is not None
        table = self.table
        if table.paint_mode:
            mode = "Paint"
        elif table.eraser_mode:
            mode = "Eraser"
        else:
            mode = "Move"
        parts = [f"Mode: {mode}", f"Zoom: {table.scale:.2f}x"]
        if table.last_roll is not None:
            parts.append(f"Die: {table.last_roll}")
        status = self.font.render("   ".join(parts), True, (40, 30, 60))
        surface.blit(status, (10, 10))
        hint = self.font.render(HELP_TEXT, True, (90, 80, 110))
        surface.blit(hint, (10, surface.get_height() - hint.get_height() - 10))

    def _update_cursor(self) -> None:
        if self.table.paint_mode or self.table.eraser_mode:
            cursor = pygame.SYSTEM_CURSOR_CROSSHAIR
        else:
            cursor = pygame.SYSTEM_CURSOR_ARROW
        if cursor != self._cursor:
            pygame.mouse.set_cursor(cursor)
            self._cursor = cursor
