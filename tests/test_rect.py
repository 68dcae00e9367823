"""
Tests for the Rect value object.
"""
from face_enhancer.models.rect import Rect


class TestRect:
    """Geometry helpers."""

    def test_empty_is_sentinel(self):
        assert Rect.empty().is_empty()
        assert Rect.empty().area == 0

    def test_negative_extent_has_no_area(self):
        assert Rect(5, 5, -3, 10).area == 0

    def test_from_xyxy(self):
        assert Rect.from_xyxy(10.4, 20.6, 50.2, 80.0) == Rect(10, 21, 40, 59)

    def test_contains(self):
        outer = Rect(0, 0, 100, 100)
        assert outer.contains(Rect(10, 10, 20, 20))
        assert outer.contains(outer)
        assert not outer.contains(Rect(90, 90, 20, 20))

    def test_clip_to_image(self):
        assert Rect(-10, -5, 50, 50).clip_to(30, 30) == Rect(0, 0, 30, 30)

    def test_clip_outside_image_is_sentinel(self):
        assert Rect(200, 200, 10, 10).clip_to(100, 100).is_empty()

    def test_fits_in(self):
        assert Rect(0, 0, 10, 10).fits_in(10, 10)
        assert not Rect(1, 0, 10, 10).fits_in(10, 10)
        assert not Rect.empty().fits_in(10, 10)
