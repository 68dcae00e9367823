"""
Error hierarchy shared by the repositories, CLI and API server.
Model invocation failures are not here: they never leave ResolutionService.
"""


class EnhancerError(Exception):
    """Base exception for enhancer errors"""
    def __init__(self, message, error_code, details=None):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self):
        """Convert error to JSON-serializable dict"""
        return {
            "success": False,
            "error": self.message,
            "error_code": self.error_code,
            "details": self.details
        }


class ImageDecodeError(EnhancerError):
    """Input image missing or not decodable"""
    def __init__(self, source, reason=None):
        super().__init__(
            message=f"Image not found or unreadable: {source}",
            error_code="IMAGE_UNREADABLE",
            details={"source": str(source), "reason": reason}
        )


class ImageEncodeError(EnhancerError):
    """Output image could not be written"""
    def __init__(self, destination, reason=None):
        super().__init__(
            message=f"Failed to write output: {destination}",
            error_code="IMAGE_WRITE_FAILED",
            details={"destination": str(destination), "reason": reason}
        )


class DetectorLoadError(EnhancerError):
    """Face detector could not be loaded"""
    def __init__(self, source, reason=None):
        super().__init__(
            message=f"Failed to load cascade: {source}",
            error_code="DETECTOR_LOAD_FAILED",
            details={"source": str(source), "reason": reason}
        )


class ModelNotFoundError(EnhancerError):
    """Super-resolution model file does not exist"""
    def __init__(self, path):
        super().__init__(
            message=f"Super-resolution model not found: {path}",
            error_code="SR_MODEL_NOT_FOUND",
            details={"path": str(path), "suggestion": "Check --sr_model / SR_MODEL_PATH"}
        )
