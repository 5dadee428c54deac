"""Tesseract recognition adapter for Lao payment slips.

Runs Tesseract with a fixed Lao + English language profile and returns
the raw recognized text. No cleanup, confidence filtering, or retries
happen here; the extractors work on the text exactly as returned.
"""

import io
import shutil
from collections.abc import Callable

import pytesseract
from PIL import Image, UnidentifiedImageError

from slip_ocr.errors import RecognitionError
from slip_ocr.preprocessing.normalizer import NormalizedImage
from slip_ocr.utils.logger import get_logger

logger = get_logger(__name__)

ProgressObserver = Callable[[dict[str, object]], None]

DEFAULT_LANG = "lao+eng"


def log_progress(event: dict[str, object]) -> None:
    """Default progress observer: log engine events at DEBUG."""
    logger.debug("Tesseract progress: %s", event)


def tesseract_available() -> bool:
    """Return whether the Tesseract binary is on the PATH."""
    return shutil.which(pytesseract.pytesseract.tesseract_cmd) is not None


class TesseractEngine:
    """Wrapper around Tesseract OCR for slip text recognition.

    Args:
        tesseract_cmd: Path to the Tesseract executable.
            If ``None``, uses the system default.
        lang: Tesseract language profile used for every call.
        psm: Tesseract page segmentation mode.
        observer: Callback receiving progress events. Its failures are
            logged and never change the recognized text.
    """

    def __init__(
        self,
        tesseract_cmd: str | None = None,
        lang: str = DEFAULT_LANG,
        psm: int = 3,
        observer: ProgressObserver | None = log_progress,
    ) -> None:
        if tesseract_cmd:
            pytesseract.pytesseract.tesseract_cmd = tesseract_cmd
        self.lang = lang
        self.psm = psm
        self.observer = observer

    def _notify(self, status: str, progress: float) -> None:
        if self.observer is None:
            return
        try:
            self.observer({"status": status, "progress": progress})
        except Exception as exc:
            logger.warning("Progress observer failed: %s", exc)

    def recognize(self, image: NormalizedImage) -> str:
        """Recognize the text in a normalized slip image.

        Args:
            image: PNG-encoded image from the normalizer.

        Returns:
            The recognized text, possibly empty, mixing Lao and Latin script.

        Raises:
            RecognitionError: If the image cannot be read or Tesseract fails.
        """
        self._notify("recognizing text", 0.0)
        try:
            with Image.open(io.BytesIO(image.data)) as pil_image:
                text = pytesseract.image_to_string(
                    pil_image,
                    lang=self.lang,
                    config=f"--psm {self.psm}",
                )
        except pytesseract.TesseractNotFoundError as exc:
            raise RecognitionError(f"Tesseract is not installed: {exc}") from exc
        except pytesseract.TesseractError as exc:
            raise RecognitionError(f"Tesseract failed: {exc}") from exc
        except (UnidentifiedImageError, OSError) as exc:
            raise RecognitionError(f"Cannot read image for recognition: {exc}") from exc
        self._notify("recognizing text", 1.0)

        logger.info(
            "Recognized %d characters (%d lines) with lang=%s",
            len(text),
            text.count("\n") + 1 if text else 0,
            self.lang,
        )
        return text
