"""
Face Enhancer Pipeline
Locate the largest face, enhance it, and feather it back into a copy of the image.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import List
import logging

from ..models.detector import Detector
from ..models.enhancement_parameters import EnhancementParameters
from ..models.image import Image
from ..models.rect import Rect
from ..services.compositing_service import CompositingService
from ..services.image_service import ImageService
from ..services.region_expander_service import RegionExpanderService
from ..services.region_locator_service import RegionLocatorService
from ..services.resolution_service import ResolutionService
from ..services.tone_service import ToneService

logger = logging.getLogger(__name__)


@dataclass
class EnhancementResult:
    image: Image
    region: Rect = field(default_factory=Rect.empty)   # expanded ROI, sentinel if no face
    enhanced: bool = False
    diagnostics: List[str] = field(default_factory=list)


def enhance_face(
    image: Image,
    detector: Detector,
    params: EnhancementParameters | None = None,
    *,
    image_service: ImageService | None = None,
    expander_service: RegionExpanderService | None = None,
    resolution_service: ResolutionService | None = None,
    tone_service: ToneService | None = None,
    compositing_service: CompositingService | None = None,
) -> EnhancementResult:
    """
    Run the region-targeted enhancement on a single image.

    The input Image is never modified. When no face is found the result holds
    an identical copy of the input and ``enhanced`` is False.

    Args:
        image: RGB Image to enhance
        detector: anything implementing ``locate(image) -> list[Rect]``
        params: sharpen amount, super-resolution scale and optional model

    Returns:
        EnhancementResult
    """
    params = params or EnhancementParameters()
    image_service = image_service or ImageService()
    expander_service = expander_service or RegionExpanderService()
    resolution_service = resolution_service or ResolutionService()
    tone_service = tone_service or ToneService()
    compositing_service = compositing_service or CompositingService()

    face_rect = RegionLocatorService(detector).locate(image)
    if face_rect.is_empty():
        logger.warning("No face detected. Passing the original through.")
        return EnhancementResult(image=image_service.working_copy(image))

    height, width = image_service.get_image_dimensions(image)
    roi = expander_service.expand(face_rect, width, height)
    logger.info(f"Face {face_rect.as_tuple()} -> ROI {roi.as_tuple()}")

    face = image_service.crop_pixels(image, roi)
    face, diagnostics = resolution_service.upscale(face, params)
    face = tone_service.enhance(face, params.sharpen_amount)

    result = image_service.working_copy(image)
    compositing_service.paste_with_feather(face, roi, result)

    return EnhancementResult(image=result, region=roi, enhanced=True, diagnostics=diagnostics)
