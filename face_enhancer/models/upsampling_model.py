from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Union
import numpy as np


class SuperResAlgorithm(Enum):
    """Model family of a super-resolution network (names match cv2.dnn_superres)."""
    EDSR = "edsr"
    LAPSRN = "lapsrn"
    UNKNOWN = "unknown"

    @classmethod
    def from_model_name(cls, name: str) -> "SuperResAlgorithm":
        lower = name.lower()
        if "edsr" in lower:
            return cls.EDSR
        if "lapsrn" in lower:
            return cls.LAPSRN
        return cls.UNKNOWN

    def resolved(self) -> "SuperResAlgorithm":
        # EDSR is the highest-quality family we know how to drive
        return SuperResAlgorithm.EDSR if self is SuperResAlgorithm.UNKNOWN else self


@dataclass(frozen=True)
class UpsamplingModel:
    """
    Handle to a trained super-resolution network on disk.
    The family is resolved once by the loader; the weights are only read
    when the model is invoked, so a corrupt file surfaces as an UpsampleErr.
    """
    path: Path
    algorithm: SuperResAlgorithm = SuperResAlgorithm.UNKNOWN


@dataclass
class UpsampleOk:
    pixels: np.ndarray  # RGB, already upscaled
    scale: int


@dataclass
class UpsampleErr:
    reason: str


UpsampleOutcome = Union[UpsampleOk, UpsampleErr]
