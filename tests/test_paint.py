"""
Tests for the raster paint layer.

Pixels are inspected directly on the layer's SRCALPHA surface.
"""
import pytest

from tabletop.config import TableConfig
from tabletop.paint import PaintLayer, StrokeMode


@pytest.fixture
def layer():
    return PaintLayer(TableConfig(width=200, height=100, brush_radius=3, eraser_radius=6))


def alpha_at(layer, point):
    return layer.surface.get_at(point).a


class TestPaintLayer:

    def test_starts_transparent(self, layer):
        assert layer.size == (200, 100)
        assert alpha_at(layer, (50, 50)) == 0

    def test_segment_has_no_gaps(self, layer):
        layer.stroke_segment((10, 50), (190, 50), StrokeMode.PAINT)
        for x in range(10, 191, 5):
            assert alpha_at(layer, (x, 50)) == 255
        assert layer.surface.get_at((100, 50))[:3] == (0, 0, 0)
        assert alpha_at(layer, (100, 80)) == 0

    def test_zero_length_segment_leaves_a_dot(self, layer):
        layer.stroke_segment((40, 40), (40, 40), StrokeMode.PAINT)
        assert alpha_at(layer, (40, 40)) == 255
        assert alpha_at(layer, (42, 40)) == 255

    def test_eraser_clears_ink(self, layer):
        layer.stroke_segment((10, 50), (190, 50), StrokeMode.PAINT)
        layer.stroke_segment((100, 50), (100, 50), StrokeMode.ERASE)
        assert alpha_at(layer, (100, 50)) == 0
        assert alpha_at(layer, (20, 50)) == 255

    def test_clear(self, layer):
        layer.stroke_segment((10, 50), (190, 50), StrokeMode.PAINT)
        layer.clear()
        assert alpha_at(layer, (100, 50)) == 0

    def test_resize_discards_strokes(self, layer):
        layer.stroke_segment((10, 50), (190, 50), StrokeMode.PAINT)
        layer.resize((300, 120))
        assert layer.size == (300, 120)
        assert alpha_at(layer, (100, 50)) == 0

    def test_off_surface_segments_are_clipped(self, layer):
        layer.stroke_segment((-500, -500), (-400, -300), StrokeMode.PAINT)
        layer.stroke_segment((150, 50), (5000, 50), StrokeMode.PAINT)
        assert alpha_at(layer, (199, 50)) == 255

    def test_ink_color_configurable(self):
        layer = PaintLayer(TableConfig(width=50, height=50, ink_color=(200, 10, 10)))
        layer.stroke_segment((25, 25), (25, 25), StrokeMode.PAINT)
        assert tuple(layer.surface.get_at((25, 25))) == (200, 10, 10, 255)

    def test_non_finite_segment_is_ignored(self, layer):
        layer.stroke_segment((float("nan"), 10), (20, 10), StrokeMode.PAINT)
        layer.stroke_segment((10, 10), (float("inf"), 10), StrokeMode.PAINT)
        assert alpha_at(layer, (10, 10)) == 0
