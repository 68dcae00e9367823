"""Face detectors: anything with ``locate(image) -> list[Rect]``."""
from __future__ import annotations
from typing import List, Protocol
import logging

import cv2

from .face_engine import FaceEngine
from .image import Image
from .rect import Rect

logger = logging.getLogger(__name__)


class Detector(Protocol):
    """Protocol for single-image face detectors."""

    name: str

    def locate(self, image: Image) -> List[Rect]:
        """
        Args:
            image: RGB Image.

        Returns:
            Candidate face rectangles in image coordinates, possibly empty.
            Order is detector-defined.
        """
        ...


class HaarCascadeDetector:
    """
    Viola-Jones cascade over an equalized luma image.
    Multi-scale sliding window: scale step 1.2, 5 neighbour votes, 40x40 minimum.
    """
    name = "haar"

    def __init__(self,
                 classifier: cv2.CascadeClassifier,
                 scale_factor: float = 1.2,
                 min_neighbors: int = 5,
                 min_size: int = 40):
        self.classifier = classifier
        self.scale_factor = scale_factor
        self.min_neighbors = min_neighbors
        self.min_size = min_size

    @staticmethod
    def _to_equalized_luma(pixels):
        gray = cv2.cvtColor(pixels, cv2.COLOR_RGB2GRAY)
        return cv2.equalizeHist(gray)

    def locate(self, image: Image) -> List[Rect]:
        gray = self._to_equalized_luma(image.pixels)
        found = self.classifier.detectMultiScale(
            gray,
            scaleFactor=self.scale_factor,
            minNeighbors=self.min_neighbors,
            flags=cv2.CASCADE_SCALE_IMAGE,
            minSize=(self.min_size, self.min_size),
        )
        # detectMultiScale returns an empty tuple when nothing is found
        return [Rect(int(x), int(y), int(w), int(h)) for (x, y, w, h) in found]


class InsightFaceDetector:
    """
    RetinaFace boxes from the shared FaceEngine.
    Boxes can spill past the frame, so they are clipped; fully outside boxes are dropped.
    """
    name = "insightface"

    def __init__(self, engine: FaceEngine | None = None):
        self.engine = engine if engine is not None else FaceEngine()

    def locate(self, image: Image) -> List[Rect]:
        img_bgr = cv2.cvtColor(image.pixels, cv2.COLOR_RGB2BGR)
        raw_faces = self.engine.app.get(img_bgr)
        rects = []
        for raw in raw_faces:
            rect = Rect.from_xyxy(*raw.bbox[:4]).clip_to(image.width, image.height)
            if rect.is_empty():
                logger.debug(f"Dropping out-of-frame box {tuple(raw.bbox[:4])}")
                continue
            rects.append(rect)
        return rects
