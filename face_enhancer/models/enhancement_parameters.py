from __future__ import annotations
from dataclasses import dataclass
import os
from dotenv import load_dotenv

from .upsampling_model import SuperResAlgorithm, UpsamplingModel

# Load environment variables
load_dotenv()


@dataclass(frozen=True)
class EnhancementParameters:
    """
    Immutable knobs for one pipeline run.
        sharpen_amount: unsharp-mask strength, >= 0 (typical 0..3)
        sr_scale:       requested super-resolution factor, >= 1.0
        upsampling_model: optional trained network; bicubic is used without it
    """
    sharpen_amount: float = 1.0
    sr_scale: float = 2.0
    upsampling_model: UpsamplingModel | None = None

    @classmethod
    def from_env(cls, upsampling_model: UpsamplingModel | None = None) -> "EnhancementParameters":
        return cls(
            sharpen_amount=float(os.getenv("SHARPEN_AMOUNT", "1.0")),
            sr_scale=float(os.getenv("SR_SCALE", "2.0")),
            upsampling_model=upsampling_model,
        )


__all__ = ["EnhancementParameters", "SuperResAlgorithm", "UpsamplingModel"]
