from __future__ import annotations
from typing import List, Tuple
import logging
import math

import cv2
import numpy as np

from ..models.enhancement_parameters import EnhancementParameters
from ..models.upsampling_model import (
    UpsampleErr,
    UpsampleOk,
    UpsampleOutcome,
    UpsamplingModel,
)

logger = logging.getLogger(__name__)

MODEL_MIN_SCALE = 1.5
UNITY_TOLERANCE = 1.01


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def scaled_size(pixels: np.ndarray, scale: float) -> Tuple[int, int]:
    """(width, height) of pixels scaled by scale, never smaller than the input."""
    height, width = pixels.shape[:2]
    return (max(width, round_half_up(width * scale)),
            max(height, round_half_up(height * scale)))


def bicubic_upscale(pixels: np.ndarray, scale: float) -> np.ndarray:
    """Deterministic fallback: plain bicubic resize at the requested scale."""
    return cv2.resize(pixels, scaled_size(pixels, scale), interpolation=cv2.INTER_CUBIC)


class ResolutionService:
    """
    Raises the pixel count of a face crop.
    A trained network is tried first when one is supplied and the scale is
    at least 1.5; any failure there degrades to bicubic and is reported as a
    diagnostic, never raised.
    """

    @staticmethod
    def run_model(pixels: np.ndarray, model: UpsamplingModel, scale: float) -> UpsampleOutcome:
        """Invoke the network at the nearest integer scale. RGB in, RGB out."""
        int_scale = round_half_up(scale)
        algorithm = model.algorithm.resolved()
        try:
            sr = cv2.dnn_superres.DnnSuperResImpl_create()
            sr.readModel(str(model.path))
            sr.setModel(algorithm.value, int_scale)
            up_bgr = sr.upsample(cv2.cvtColor(pixels, cv2.COLOR_RGB2BGR))
        except Exception as err:  # any failure here means "use bicubic"
            return UpsampleErr(reason=str(err) or type(err).__name__)

        height, width = pixels.shape[:2]
        if up_bgr is None or up_bgr.shape[:2] != (height * int_scale, width * int_scale):
            got = None if up_bgr is None else up_bgr.shape[:2]
            return UpsampleErr(reason=f"unexpected output shape {got} from {algorithm.value} x{int_scale}")
        return UpsampleOk(pixels=cv2.cvtColor(up_bgr, cv2.COLOR_BGR2RGB), scale=int_scale)

    def upscale(self, pixels: np.ndarray, params: EnhancementParameters) -> Tuple[np.ndarray, List[str]]:
        """
        Returns:
            (upscaled RGB pixels, diagnostics)
        """
        diagnostics: List[str] = []
        scale = params.sr_scale
        model = params.upsampling_model

        if model is not None and scale >= MODEL_MIN_SCALE:
            outcome = self.run_model(pixels, model, scale)
            if isinstance(outcome, UpsampleOk):
                logger.info(f"Super-resolved {pixels.shape[1]}x{pixels.shape[0]} with "
                            f"{model.algorithm.resolved().value} x{outcome.scale}")
                return outcome.pixels, diagnostics

            message = f"Super-resolution failed: {outcome.reason}. Using bicubic."
            logger.warning(message)
            diagnostics.append(message)
            return bicubic_upscale(pixels, scale), diagnostics

        if scale > UNITY_TOLERANCE:
            return bicubic_upscale(pixels, scale), diagnostics

        # Resampling at ~1x would only blur
        return pixels.copy(), diagnostics
