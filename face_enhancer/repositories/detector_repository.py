from pathlib import Path
from typing import Union
import logging
import os
import cv2
from dotenv import load_dotenv

from ..errors import DetectorLoadError
from ..models.detector import Detector, HaarCascadeDetector, InsightFaceDetector

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_CASCADE = Path(cv2.data.haarcascades) / "haarcascade_frontalface_default.xml"


class DetectorRepository:
    """
    Builds ready-to-use face detectors from files / model packs.
    """

    @staticmethod
    def load_cascade(path: Union[str, Path, None] = None) -> HaarCascadeDetector:
        path = Path(path or os.getenv("FACE_CASCADE_PATH") or DEFAULT_CASCADE)
        classifier = cv2.CascadeClassifier()
        # load() returns False for a missing file; cv2.error for a malformed one
        try:
            loaded = classifier.load(str(path))
        except cv2.error as err:
            raise DetectorLoadError(path, reason=str(err)) from err
        if not loaded or classifier.empty():
            raise DetectorLoadError(path)

        logger.info(f"Loaded cascade: {path}")
        return HaarCascadeDetector(
            classifier,
            scale_factor=float(os.getenv("DETECT_SCALE_FACTOR", "1.2")),
            min_neighbors=int(os.getenv("DETECT_MIN_NEIGHBORS", "5")),
            min_size=int(os.getenv("DETECT_MIN_SIZE", "40")),
        )

    @staticmethod
    def load_insightface() -> InsightFaceDetector:
        return InsightFaceDetector()

    def load(self, kind: str = None, cascade_path: Union[str, Path, None] = None) -> Detector:
        kind = (kind or os.getenv("FACE_DETECTOR", "haar")).lower()
        if kind == "haar":
            return self.load_cascade(cascade_path)
        if kind == "insightface":
            return self.load_insightface()
        raise ValueError(f"Unknown detector kind: {kind}")
