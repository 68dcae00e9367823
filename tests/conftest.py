"""
Pytest configuration and shared fixtures for the face enhancer tests.
"""
import os
import sys

import numpy as np
import pytest

# Make the package importable without installing it
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from face_enhancer.models.image import Image
from face_enhancer.models.rect import Rect


class FakeDetector:
    """Detector returning a fixed candidate list, whatever the image."""
    name = "fake"

    def __init__(self, rects=()):
        self.rects = list(rects)
        self.calls = 0

    def locate(self, image):
        self.calls += 1
        return list(self.rects)


def make_textured_pixels(height, width, seed=0):
    """Smooth gradient plus noise, so every enhancement stage has something to change."""
    rng = np.random.default_rng(seed)
    yy, xx = np.mgrid[0:height, 0:width]
    base = np.stack([
        60 + 120 * xx / max(1, width - 1),
        80 + 100 * yy / max(1, height - 1),
        100 + 50 * np.sin(xx / 9.0) * np.cos(yy / 7.0),
    ], axis=-1)
    noisy = base + rng.normal(0, 12, size=base.shape)
    return np.clip(noisy, 0, 255).astype(np.uint8)


@pytest.fixture
def textured_image():
    """400x400 RGB test image."""
    return Image(pixels=make_textured_pixels(400, 400))


@pytest.fixture
def face_rect():
    return Rect(100, 100, 100, 120)


@pytest.fixture
def fake_detector(face_rect):
    return FakeDetector([face_rect])


@pytest.fixture
def empty_detector():
    return FakeDetector([])


@pytest.fixture
def malformed_model_file(tmp_path):
    """A file named like an EDSR model whose contents are garbage."""
    path = tmp_path / "EDSR_x2.pb"
    path.write_bytes(b"definitely not a tensorflow graph")
    return path


@pytest.fixture
def app(fake_detector, monkeypatch):
    """Flask test application with a stub detector."""
    from face_enhancer.api_server import app as flask_app
    flask_app.config['TESTING'] = True
    monkeypatch.delenv("SR_MODEL_PATH", raising=False)
    flask_app.config['DETECTOR'] = fake_detector
    flask_app.config['UPSAMPLING_MODEL'] = None
    yield flask_app
    flask_app.config['DETECTOR'] = None
    flask_app.config['UPSAMPLING_MODEL'] = None


@pytest.fixture
def client(app):
    """Create Flask test client."""
    return app.test_client()
