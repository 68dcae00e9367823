import logging
import os
from dotenv import load_dotenv

from ..models.rect import Rect

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)


class RegionExpanderService:
    """
    Grows a detected face box to take in hair and chin, which detectors tend to cut off.
    Padding per side is width // pad_x_divisor and height // pad_y_divisor.
    """

    def __init__(self, pad_x_divisor: int = None, pad_y_divisor: int = None):
        self.pad_x_divisor = pad_x_divisor if pad_x_divisor is not None else int(os.getenv("REGION_PAD_X_DIVISOR", "8"))
        self.pad_y_divisor = pad_y_divisor if pad_y_divisor is not None else int(os.getenv("REGION_PAD_Y_DIVISOR", "6"))

    def get_padding_sizes(self, rect: Rect):
        return rect.width // self.pad_x_divisor, rect.height // self.pad_y_divisor

    def expand(self, rect: Rect, img_width: int, img_height: int) -> Rect:
        rect = rect.clip_to(img_width, img_height)
        if rect.is_empty():
            return rect

        pad_x, pad_y = self.get_padding_sizes(rect)

        # Origin shifts first; extent is then capped by what is left on that side
        x = max(0, rect.x - pad_x)
        y = max(0, rect.y - pad_y)
        width = min(rect.width + 2 * pad_x, img_width - x)
        height = min(rect.height + 2 * pad_y, img_height - y)

        expanded = Rect(x, y, width, height)
        logger.debug(f"Expanded {rect.as_tuple()} -> {expanded.as_tuple()}")
        return expanded
