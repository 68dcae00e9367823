import logging
import os
import cv2
import numpy as np
from dotenv import load_dotenv

from ..models.image import Image
from ..models.rect import Rect

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)


class CompositingService:
    """
    Pastes an enhanced crop back into the full image with a feathered alpha
    so the rectangle edge does not show.
    """

    def __init__(self, min_radius: int = None, radius_divisor: int = None):
        self.min_radius = min_radius if min_radius is not None else int(os.getenv("FEATHER_MIN_RADIUS", "3"))
        self.radius_divisor = radius_divisor if radius_divisor is not None else int(os.getenv("FEATHER_RADIUS_DIVISOR", "20"))

    def feather_radius(self, rect: Rect) -> int:
        return max(self.min_radius, rect.width // self.radius_divisor)

    @staticmethod
    def _edge_profile(length: int, kernel: np.ndarray) -> np.ndarray:
        """1-D Gaussian-blurred ones (zero outside), min-max normalised: 0 at both ends."""
        line = cv2.sepFilter2D(np.ones((1, length), dtype=np.float32), -1,
                               kernel, np.ones((1, 1), dtype=np.float32),
                               borderType=cv2.BORDER_CONSTANT).ravel()
        lo, hi = float(line.min()), float(line.max())
        if hi - lo <= 1e-12:
            return np.zeros(length, dtype=np.float32)
        return (line - lo) / (hi - lo)

    @classmethod
    def feather_mask(cls, height: int, width: int, radius: int) -> np.ndarray:
        """
        Separable Gaussian feather: each axis profile is normalised to [0, 1]
        on its own and the mask is their product. 1 in the interior, 0 on
        every border pixel, non-increasing from the centre outwards.

        Returns:
            float32 (height, width)
        """
        r = max(1, radius)
        kernel = cv2.getGaussianKernel(2 * r + 1, r, cv2.CV_32F)
        mask = np.outer(cls._edge_profile(height, kernel), cls._edge_profile(width, kernel))
        return np.clip(mask, 0.0, 1.0).astype(np.float32)

    @staticmethod
    def blend(src: np.ndarray, dst: np.ndarray, mask: np.ndarray) -> np.ndarray:
        """src * mask + dst * (1 - mask) in [0, 1] floats, back to rounded uint8."""
        mask3 = cv2.merge([mask, mask, mask])
        src_f = src.astype(np.float32) / 255.0
        dst_f = dst.astype(np.float32) / 255.0
        blended = src_f * mask3 + dst_f * (1.0 - mask3)
        return np.clip(np.rint(blended * 255.0), 0, 255).astype(np.uint8)

    def paste_with_feather(self, region: np.ndarray, rect: Rect, canvas: Image) -> Image:
        """
        Writes region into canvas[rect] in place and returns canvas.
        Pixels outside rect are untouched.
        """
        resized = cv2.resize(region, (rect.width, rect.height), interpolation=cv2.INTER_CUBIC)
        mask = self.feather_mask(rect.height, rect.width, self.feather_radius(rect))

        dst_roi = canvas.pixels[rect.y:rect.bottom, rect.x:rect.right]
        dst_roi[...] = self.blend(resized, dst_roi, mask)
        return canvas
