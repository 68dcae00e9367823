"""
Tests for the feather mask and in-place compositing.
"""
import numpy as np
import pytest

from face_enhancer.models.image import Image
from face_enhancer.models.rect import Rect
from face_enhancer.services.compositing_service import CompositingService

from .conftest import make_textured_pixels

TOL = 1e-5


@pytest.fixture
def compositor():
    return CompositingService(min_radius=3, radius_divisor=20)


def _non_increasing(values):
    return bool(np.all(np.diff(values) <= TOL))


class TestFeatherMask:
    """Shape, range and monotonicity."""

    @pytest.mark.parametrize("height,width,radius", [(120, 100, 5), (160, 124, 6), (31, 47, 3)])
    def test_spans_unit_range(self, height, width, radius):
        mask = CompositingService.feather_mask(height, width, radius)
        assert mask.shape == (height, width)
        assert mask.dtype == np.float32
        assert mask.min() == pytest.approx(0.0, abs=1e-6)
        assert mask.max() == pytest.approx(1.0, abs=1e-6)

    @pytest.mark.parametrize("height,width,radius", [(120, 100, 5), (31, 47, 3), (64, 64, 12)])
    def test_decays_from_center(self, height, width, radius):
        mask = CompositingService.feather_mask(height, width, radius)
        cy, cx = height // 2, width // 2
        # right, left, down, up
        assert _non_increasing(mask[cy, cx:])
        assert _non_increasing(mask[cy, :cx + 1][::-1])
        assert _non_increasing(mask[cy:, cx])
        assert _non_increasing(mask[:cy + 1, cx][::-1])
        # diagonals
        n = min(height - cy, width - cx)
        assert _non_increasing(np.array([mask[cy + i, cx + i] for i in range(n)]))
        n = min(cy + 1, cx + 1)
        assert _non_increasing(np.array([mask[cy - i, cx - i] for i in range(n)]))

    def test_interior_near_one_border_zero(self):
        mask = CompositingService.feather_mask(200, 200, 10)
        assert mask[100, 100] > 0.99
        border = np.concatenate([mask[0, :], mask[-1, :], mask[:, 0], mask[:, -1]])
        assert border.max() < 1e-6
        assert mask.min() >= 0.0

    @pytest.mark.parametrize("height,width,radius", [(160, 124, 6), (31, 47, 3), (9, 200, 10)])
    def test_every_border_pixel_is_zero(self, height, width, radius):
        mask = CompositingService.feather_mask(height, width, radius)
        edges = max(mask[0, :].max(), mask[-1, :].max(), mask[:, 0].max(), mask[:, -1].max())
        assert edges < 1e-6

    def test_degenerate_size_is_all_zero(self):
        assert not CompositingService.feather_mask(1, 30, 3).any()

    def test_radius_scales_with_width(self, compositor):
        assert compositor.feather_radius(Rect(0, 0, 40, 40)) == 3
        assert compositor.feather_radius(Rect(0, 0, 200, 40)) == 10

    def test_radius_floor_of_one(self):
        mask = CompositingService.feather_mask(20, 20, 0)
        assert mask.max() == pytest.approx(1.0, abs=1e-6)


class TestBlend:
    """Per-pixel alpha blend."""

    def test_mask_one_keeps_source(self):
        src = make_textured_pixels(20, 30, seed=1)
        dst = make_textured_pixels(20, 30, seed=2)
        out = CompositingService.blend(src, dst, np.ones((20, 30), np.float32))
        assert np.array_equal(out, src)

    def test_mask_zero_keeps_destination(self):
        src = make_textured_pixels(20, 30, seed=1)
        dst = make_textured_pixels(20, 30, seed=2)
        out = CompositingService.blend(src, dst, np.zeros((20, 30), np.float32))
        assert np.array_equal(out, dst)

    def test_half_mask_is_rounded_mean(self):
        src = np.full((2, 2, 3), 101, np.uint8)
        dst = np.full((2, 2, 3), 200, np.uint8)
        out = CompositingService.blend(src, dst, np.full((2, 2), 0.5, np.float32))
        assert np.all(out == 150) or np.all(out == 151)


class TestPasteWithFeather:
    """Writes only inside the target rectangle."""

    def test_outside_rect_untouched(self, compositor):
        original = make_textured_pixels(120, 150, seed=4)
        canvas = Image(pixels=original.copy())
        rect = Rect(30, 20, 60, 70)
        region = np.full((140, 120, 3), 255, np.uint8)  # different size on purpose

        out = compositor.paste_with_feather(region, rect, canvas)

        assert out is canvas
        outside = np.ones(original.shape[:2], bool)
        outside[rect.y:rect.bottom, rect.x:rect.right] = False
        assert np.array_equal(out.pixels[outside], original[outside])
        inside = out.pixels[rect.y:rect.bottom, rect.x:rect.right]
        assert not np.array_equal(inside, original[rect.y:rect.bottom, rect.x:rect.right])

    def test_corners_keep_original(self, compositor):
        original = make_textured_pixels(100, 100, seed=5)
        canvas = Image(pixels=original.copy())
        rect = Rect(10, 10, 80, 80)
        compositor.paste_with_feather(np.zeros((80, 80, 3), np.uint8), rect, canvas)
        assert np.array_equal(canvas.pixels[10, 10], original[10, 10])
        assert np.array_equal(canvas.pixels[89, 89], original[89, 89])
        # center is essentially the pasted content
        assert canvas.pixels[50, 50].max() <= 2

    def test_mid_edge_keeps_original(self, compositor):
        original = make_textured_pixels(100, 100, seed=6)
        canvas = Image(pixels=original.copy())
        rect = Rect(10, 10, 80, 80)
        compositor.paste_with_feather(np.zeros((80, 80, 3), np.uint8), rect, canvas)
        assert np.array_equal(canvas.pixels[10, 50], original[10, 50])
        assert np.array_equal(canvas.pixels[50, 89], original[50, 89])


class TestExplicitZeroSettings:
    """Explicit zeros override the environment instead of being ignored."""

    def test_zero_min_radius(self, monkeypatch):
        monkeypatch.setenv("FEATHER_MIN_RADIUS", "7")
        compositor = CompositingService(min_radius=0, radius_divisor=20)
        assert compositor.min_radius == 0
        assert compositor.feather_radius(Rect(0, 0, 40, 40)) == 2
