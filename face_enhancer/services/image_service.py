from pathlib import Path
from typing import Union
import base64
import logging
import numpy as np

from ..models.image import Image
from ..models.rect import Rect
from ..repositories.image_repository import ImageRepository

logger = logging.getLogger(__name__)


class ImageService:
    """I/O and buffer helpers.  No enhancement logic here."""
    def __init__(self):
        self.image_repository = ImageRepository()

    def create_image(self, pixels: np.ndarray, path: Union[str, Path] = None) -> Image:
        return self.image_repository.create_image(pixels, path)

    def load(self, path: Union[str, Path]) -> Image:
        """Load a single image from disk into an Image object."""
        return self.image_repository.load(path)

    def decode(self, data: bytes, source: str = "<upload>") -> Image:
        return self.image_repository.decode(data, source)

    def save(self, image: Image) -> None:
        self.image_repository.save(image)

    def get_image_dimensions(self, img: Image):
        return self.image_repository.retrieve_image_dimensions(img)

    def crop_pixels(self, img: Image, rect: Rect) -> np.ndarray:
        """
        Returns an owned copy of the pixels inside rect.
        """
        height, width = self.get_image_dimensions(img)
        if not rect.fits_in(width, height):
            raise ValueError(f"Invalid crop {rect.as_tuple()} for {width}x{height} image")
        return img.pixels[rect.y:rect.bottom, rect.x:rect.right].copy()

    def working_copy(self, img: Image) -> Image:
        """Fresh full-resolution buffer the compositor may write into."""
        return self.create_image(img.pixels.copy(), img.path)

    def to_base64(self, image: Image) -> str:
        """Convert Image object to a PNG data URL for JSON responses."""
        png_bytes = self.image_repository.encode(image, fmt="PNG")
        return f"data:image/png;base64,{base64.b64encode(png_bytes).decode('utf-8')}"
