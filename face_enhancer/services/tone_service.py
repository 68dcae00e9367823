import logging
import os
import cv2
import numpy as np
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)

# (upper bound on amount, Gaussian kernel size)
_SHARPEN_KERNELS = ((0.75, 3), (1.5, 5), (2.5, 7))
_SHARPEN_KERNEL_MAX = 9


class ToneService:
    """
    Local tone corrections for an upscaled face crop, applied in this order:
    unsharp mask -> CLAHE on luma -> colored non-local-means denoise.
    Every step takes RGB uint8 and returns a new RGB uint8 array of the same size.
    """

    def __init__(self,
                 clahe_clip_limit: float = None,
                 clahe_tile_grid: int = None,
                 denoise_h: float = None,
                 denoise_h_color: float = None,
                 denoise_template_window: int = None,
                 denoise_search_window: int = None):
        self.clahe_clip_limit = clahe_clip_limit if clahe_clip_limit is not None else float(os.getenv("CLAHE_CLIP_LIMIT", "2.0"))
        self.clahe_tile_grid = clahe_tile_grid if clahe_tile_grid is not None else int(os.getenv("CLAHE_TILE_GRID", "8"))
        self.denoise_h = denoise_h if denoise_h is not None else float(os.getenv("DENOISE_H", "3"))
        self.denoise_h_color = denoise_h_color if denoise_h_color is not None else float(os.getenv("DENOISE_H_COLOR", "3"))
        self.denoise_template_window = denoise_template_window if denoise_template_window is not None else int(os.getenv("DENOISE_TEMPLATE_WINDOW", "7"))
        self.denoise_search_window = denoise_search_window if denoise_search_window is not None else int(os.getenv("DENOISE_SEARCH_WINDOW", "21"))

    # ─── Unsharp mask ──────────────────────────────────────────────
    @staticmethod
    def sharpen_kernel_size(amount: float) -> int:
        for upper, ksize in _SHARPEN_KERNELS:
            if amount < upper:
                return ksize
        return _SHARPEN_KERNEL_MAX

    def unsharp_mask(self, pixels: np.ndarray, amount: float) -> np.ndarray:
        """out = in * (1 + amount) - blur(in) * amount, saturated to uint8."""
        if amount <= 0.0:
            return pixels.copy()
        k = self.sharpen_kernel_size(amount)
        blurred = cv2.GaussianBlur(pixels, (k, k), 0)
        return cv2.addWeighted(pixels, 1.0 + amount, blurred, -amount, 0)

    # ─── Contrast ──────────────────────────────────────────────────
    def equalize_luma(self, pixels: np.ndarray) -> np.ndarray:
        """CLAHE on Y only; Cr/Cb pass through untouched."""
        ycrcb = cv2.cvtColor(pixels, cv2.COLOR_RGB2YCrCb)
        clahe = cv2.createCLAHE(clipLimit=self.clahe_clip_limit,
                                tileGridSize=(self.clahe_tile_grid, self.clahe_tile_grid))
        ycrcb[:, :, 0] = clahe.apply(np.ascontiguousarray(ycrcb[:, :, 0]))
        return cv2.cvtColor(ycrcb, cv2.COLOR_YCrCb2RGB)

    # ─── Denoise ───────────────────────────────────────────────────
    def denoise(self, pixels: np.ndarray) -> np.ndarray:
        # fastNlMeansDenoisingColored expects BGR (it works in Lab internally)
        bgr = cv2.cvtColor(pixels, cv2.COLOR_RGB2BGR)
        denoised = cv2.fastNlMeansDenoisingColored(
            bgr, None,
            self.denoise_h, self.denoise_h_color,
            self.denoise_template_window, self.denoise_search_window,
        )
        return cv2.cvtColor(denoised, cv2.COLOR_BGR2RGB)

    def enhance(self, pixels: np.ndarray, sharpen_amount: float) -> np.ndarray:
        sharp = self.unsharp_mask(pixels, sharpen_amount)
        contrasted = self.equalize_luma(sharp)
        return self.denoise(contrasted)
