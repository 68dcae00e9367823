from typing import Iterable
import logging

from ..models.detector import Detector
from ..models.image import Image
from ..models.rect import Rect

logger = logging.getLogger(__name__)


class RegionLocatorService:
    """
    Runs a detector and keeps the single largest face.
    """

    def __init__(self, detector: Detector):
        self.detector = detector

    @staticmethod
    def pick_largest(candidates: Iterable[Rect]) -> Rect:
        """
        Largest area wins; equal areas go to the lowest y, then the lowest x.
        Returns the zero-area sentinel for an empty candidate set.
        """
        best = Rect.empty()
        for rect in candidates:
            if rect.is_empty():
                continue
            if best.is_empty() or (-rect.area, rect.y, rect.x) < (-best.area, best.y, best.x):
                best = rect
        return best

    def locate(self, image: Image) -> Rect:
        candidates = self.detector.locate(image)
        logger.info(f"{self.detector.name}: {len(candidates)} face candidate(s)")
        return self.pick_largest(candidates)
