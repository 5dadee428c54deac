"""Exception types raised by the slip OCR pipeline."""


class SlipOCRError(Exception):
    """Base exception for slip OCR failures."""


class ImageDecodeError(SlipOCRError):
    """Raised when the uploaded bytes cannot be decoded as an image."""


class RecognitionError(SlipOCRError):
    """Raised when the OCR engine fails; carries the engine's message."""


class PipelineError(SlipOCRError):
    """Raised when a pipeline stage fails.

    Wraps the first failing stage's error. The underlying exception is
    available as ``cause`` and is also chained as ``__cause__``.

    Args:
        stage: Name of the failing stage (``"normalize"`` or ``"recognize"``).
        cause: The underlying error.
    """

    def __init__(self, stage: str, cause: Exception) -> None:
        super().__init__(f"OCR processing failed at {stage}: {cause}")
        self.stage = stage
        self.cause = cause
