"""
Tests for the table facade, asset naming and command line parsing.
"""
import random

import pygame
import pytest

from tabletop.__main__ import build_parser, parse_config
from tabletop.config import AssetConfig, TableConfig
from tabletop.interaction import Gesture
from tabletop.paint import PaintLayer, StrokeMode
from tabletop.resources import ResourceManager, label_from_image, standard_card_faces
from tabletop.table import Tabletop


@pytest.fixture
def table():
    return Tabletop(seed=42)


class TestTabletop:

    def test_initial_table(self, table):
        assert len(table.cards) == 52
        assert all(not card.face_up for card in table.cards)
        assert table.scale == 1.0
        assert table.pan == pygame.Vector2(0, 0)
        assert not table.paint_mode and not table.eraser_mode
        assert isinstance(table.paint, PaintLayer)

    def test_jokers_from_config(self):
        table = Tabletop(TableConfig(jokers=True), seed=1)
        assert len(table.cards) == 54

    def test_flip_all_and_shuffle(self, table):
        table.flip_all()
        assert all(card.face_up for card in table.cards)
        ids = {card.identifier for card in table.cards}
        table.shuffle()
        assert all(not card.face_up for card in table.cards)
        assert {card.identifier for card in table.cards} == ids

    def test_mode_toggles(self, table):
        table.toggle_paint_mode()
        assert table.paint_mode
        table.toggle_eraser_mode()
        assert table.eraser_mode and not table.paint_mode
        table.toggle_eraser_mode()
        assert not table.eraser_mode and not table.paint_mode
        table.set_paint_mode(True)
        table.set_eraser_mode(False)
        assert table.paint_mode

    def test_set_zoom_clamped(self, table):
        table.set_zoom(0.5)
        assert table.scale == 0.5
        table.set_zoom(2)
        assert table.scale == 2.0
        table.set_zoom(5)
        assert table.scale == 2.0

    def test_set_zoom_with_window_centre(self, table):
        centre = (600, 400)
        before = table.viewport.to_world(centre)
        table.set_zoom(1.6, anchor=centre)
        assert table.viewport.to_world(centre).distance_to(before) < 1e-9

    def test_roll_die_range_and_independence(self, table):
        ids = [card.identifier for card in table.cards]
        positions = [card.position for card in table.cards]
        rolls = {table.roll_die() for _ in range(300)}
        assert rolls == {1, 2, 3, 4, 5, 6}
        assert table.last_roll in rolls
        assert [card.identifier for card in table.cards] == ids
        assert [card.position for card in table.cards] == positions

    def test_die_stream_differs_from_deal_stream(self):
        table = Tabletop(seed=3)
        expected = random.Random(4)
        assert [table.roll_die() for _ in range(20)] == [expected.randint(1, 6) for _ in range(20)]

    def test_reset_view_cancels_gesture(self, table):
        table.set_zoom(1.5)
        table.viewport.pan_to((30, 40))
        table.engine.pointer_down("mouse", (5, 5))
        table.reset_view()
        assert table.scale == 1.0
        assert table.pan == pygame.Vector2(0, 0)
        assert table.engine.mode is Gesture.IDLE

    def test_clear_paint(self, table):
        table.paint.stroke_segment((10, 10), (50, 10), StrokeMode.PAINT)
        table.clear_paint()
        assert table.paint.surface.get_at((30, 10)).a == 0

    def test_resize_clears_paint(self, table):
        table.paint.stroke_segment((10, 10), (50, 10), StrokeMode.PAINT)
        table.resize((640, 480))
        assert table.paint.size == (640, 480)
        assert table.paint.surface.get_at((30, 10)).a == 0

    def test_card_screen_rect_follows_viewport(self, table):
        card = table.cards[-1]
        table.deck.set_position(card.identifier, (100, 50))
        table.set_zoom(2.0)
        table.viewport.pan_to((10, 20))
        assert table.card_screen_rect(card) == pygame.Rect(210, 120, 200, 290)

    def test_pointer_drag_through_facade(self, table):
        top = table.cards[-1]
        rect = table.card_screen_rect(top)
        engine = table.engine
        engine.pointer_down("mouse", rect.center)
        assert engine.mode is Gesture.DRAGGING_CARD
        engine.pointer_move("mouse", (rect.centerx + 100, rect.centery))
        engine.pointer_up("mouse", (rect.centerx + 100, rect.centery))
        assert table.cards[-1] is top
        assert top.position[0] == pytest.approx(rect.x + 100, abs=1)

    def test_paint_through_facade(self, table):
        table.set_paint_mode(True)
        table.engine.pointer_down("mouse", (20, 20))
        table.engine.pointer_move("mouse", (60, 20))
        table.engine.pointer_up("mouse", (60, 20))
        assert table.paint.surface.get_at((40, 20)).a == 255


class TestResources:

    def test_standard_faces(self):
        faces = standard_card_faces()
        assert len(faces) == 52
        assert faces[0] == ("AS.png", "back.png")
        assert faces[-1] == ("KD.png", "back.png")
        assert len({front for front, _ in faces}) == 52
        assert standard_card_faces(jokers=True)[-2:] == [
            ("RJ.png", "back.png"),
            ("BJ.png", "back.png"),
        ]

    def test_label_from_image(self):
        assert label_from_image("10H.png") == "10H"

    def test_missing_asset(self, tmp_path):
        manager = ResourceManager(AssetConfig(root=tmp_path))
        assert manager.resolve("AS.png") == tmp_path / "cards" / "AS.png"
        with pytest.raises(FileNotFoundError):
            manager.require("AS.png")
        assert manager.load_image("AS.png") is None

    def test_loads_existing_image(self, tmp_path):
        (tmp_path / "cards").mkdir()
        image = pygame.Surface((10, 14))
        image.fill((255, 0, 0))
        pygame.image.save(image, str(tmp_path / "cards" / "AS.bmp"))
        manager = ResourceManager(AssetConfig(root=tmp_path))
        loaded = manager.load_image("AS.bmp")
        assert loaded is not None
        assert loaded.get_size() == (10, 14)
        assert manager.load_image("AS.bmp") is loaded


class TestConfig:

    def test_invalid_zoom_bounds(self):
        with pytest.raises(ValueError):
            TableConfig(min_zoom=0)
        with pytest.raises(ValueError):
            TableConfig(min_zoom=3, max_zoom=2)

    def test_invalid_card_size(self):
        with pytest.raises(ValueError):
            TableConfig(card_width=0)

    def test_negative_jitter(self):
        with pytest.raises(ValueError):
            TableConfig(deal_jitter=-1)

    def test_deal_origin(self):
        assert TableConfig().deal_origin == (550, 327.5)


class TestCommandLine:

    def test_defaults(self):
        config = parse_config(build_parser().parse_args([]))
        assert config.display.width == 1200
        assert config.table.width == 1200
        assert config.table.jokers is False
        assert config.seed is None
        assert config.display.fullscreen is False

    def test_overrides(self, tmp_path):
        args = build_parser().parse_args(
            ["--width", "800", "--height", "600", "--jokers", "--seed", "9",
             "--fullscreen", "--assets", str(tmp_path), "--log-level", "DEBUG"]
        )
        config = parse_config(args)
        assert (config.display.width, config.display.height) == (800, 600)
        assert (config.table.width, config.table.height) == (800, 600)
        assert config.table.jokers is True
        assert config.seed == 9
        assert config.display.fullscreen is True
        assert config.assets.root == tmp_path
