from __future__ import annotations
import logging
import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)


class FaceEngine:
    """
    Singleton wrapper around InsightFace's FaceAnalysis (RetinaFace detector only).

    Loads the model once per process. InsightFace is an optional dependency
    (``pip install face-region-enhancer[insightface]``) and is imported here,
    on first construction, so the Haar path never needs it.
    """

    _instance: FaceEngine | None = None  # Class-level cache for singleton

    def __new__(cls, *args, **kwargs):
        if cls._instance is None:
            instance = super().__new__(cls)
            instance._init_engine(*args, **kwargs)
            cls._instance = instance
        return cls._instance

    def _init_engine(self, model_name: str = None, ctx_id: int = None):
        """
        Args:
            model_name (str): Model pack from the InsightFace model zoo. Defaults to env var.
            ctx_id (int): -1 = CPU, 0+ = GPU index. Defaults to env var.
        """
        from insightface.app import FaceAnalysis

        if model_name is None:
            model_name = os.getenv("FACE_ENGINE_MODEL", "buffalo_l")
        if ctx_id is None:
            ctx_id = int(os.getenv("FACE_ENGINE_CTX_ID", "0"))

        logger.info(f"Loading InsightFace '{model_name}' (ctx_id={ctx_id})")
        self.app = FaceAnalysis(name=model_name, allowed_modules=["detection"])
        self.app.prepare(ctx_id=ctx_id)
