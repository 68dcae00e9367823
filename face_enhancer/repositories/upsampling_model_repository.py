from pathlib import Path
from typing import Union
import logging

from ..errors import ModelNotFoundError
from ..models.upsampling_model import SuperResAlgorithm, UpsamplingModel

logger = logging.getLogger(__name__)


class UpsamplingModelRepository:
    """
    Resolves a super-resolution model file into an UpsamplingModel handle.
    The weights themselves are read lazily by ResolutionService.
    """

    @staticmethod
    def load(path: Union[str, Path]) -> UpsamplingModel:
        path = Path(path)
        if not path.is_file():
            raise ModelNotFoundError(path)
        algorithm = SuperResAlgorithm.from_model_name(path.name)
        if algorithm is SuperResAlgorithm.UNKNOWN:
            logger.info(f"Unrecognised model family for {path.name}; will run it as EDSR")
        return UpsamplingModel(path=path, algorithm=algorithm)
