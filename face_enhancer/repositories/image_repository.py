from pathlib import Path
from typing import Union
from io import BytesIO
import numpy as np
import cv2
from PIL import Image as PILImage

from ..errors import ImageDecodeError, ImageEncodeError
from ..models.image import Image


class ImageRepository:
    """
    Handles file I/O and encoding for Image entities.
    """

    @staticmethod
    def create_image(pixels: np.ndarray, path: Union[str, Path] = None) -> Image:
        if path is None:
            return Image(pixels)
        return Image(pixels=pixels, path=Path(path))

    @staticmethod
    def retrieve_image_dimensions(img: Image):
        return img.pixels.shape[:2]

    @staticmethod
    def load(path: Union[str, Path]) -> Image:
        path = Path(path)
        arr_bgr = cv2.imread(str(path), cv2.IMREAD_COLOR)
        if arr_bgr is None:
            raise ImageDecodeError(path)
        return Image(pixels=cv2.cvtColor(arr_bgr, cv2.COLOR_BGR2RGB), path=path)

    @staticmethod
    def decode(data: bytes, source: str = "<bytes>") -> Image:
        buf = np.frombuffer(data, dtype=np.uint8)
        arr_bgr = cv2.imdecode(buf, cv2.IMREAD_COLOR) if buf.size else None
        if arr_bgr is None:
            raise ImageDecodeError(source, reason="not a decodable image")
        return Image(pixels=cv2.cvtColor(arr_bgr, cv2.COLOR_BGR2RGB))

    @staticmethod
    def save(image: Image) -> None:
        try:
            PILImage.fromarray(image.pixels).save(image.path)
        except (OSError, ValueError) as err:
            raise ImageEncodeError(image.path, reason=str(err)) from err

    @staticmethod
    def encode(image: Image, fmt: str = "PNG") -> bytes:
        buffer = BytesIO()
        PILImage.fromarray(image.pixels).save(buffer, format=fmt)
        return buffer.getvalue()
