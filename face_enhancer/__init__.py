from .models.image import Image
from .models.rect import Rect
from .models.enhancement_parameters import EnhancementParameters, SuperResAlgorithm
from .pipeline.enhance_face import EnhancementResult, enhance_face

__all__ = [
    "Image", "Rect",
    "EnhancementParameters", "SuperResAlgorithm",
    "EnhancementResult", "enhance_face",
]
