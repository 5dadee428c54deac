"""Image normalizer for payment slip OCR.

Decodes an uploaded image and runs the fixed preparation chain:
resize to a maximum width, grayscale, contrast stretch, sharpen.
The order is part of the contract since each step changes the input
of the next.
"""

from dataclasses import dataclass

import cv2
import numpy as np

from slip_ocr.errors import ImageDecodeError
from slip_ocr.utils.config import PreprocessingConfig
from slip_ocr.utils.logger import get_logger

from .filters import (
    calculate_contrast,
    calculate_sharpness,
    resize_to_max_width,
    sharpen,
    stretch_contrast,
    to_grayscale,
)

logger = get_logger(__name__)


@dataclass(frozen=True)
class NormalizedImage:
    """A PNG-encoded image ready for recognition."""

    data: bytes
    width: int
    height: int


def decode_image(raw: bytes) -> np.ndarray:
    """Decode encoded image bytes (JPEG, PNG, WebP, ...) into a BGR array.

    Raises:
        ImageDecodeError: If the bytes are empty or not a decodable image.
    """
    if not raw:
        raise ImageDecodeError("Image buffer is empty")

    buffer = np.frombuffer(raw, dtype=np.uint8)
    try:
        image = cv2.imdecode(buffer, cv2.IMREAD_COLOR)
    except cv2.error as exc:
        raise ImageDecodeError(f"Failed to decode image: {exc}") from exc

    if image is None:
        raise ImageDecodeError("Unsupported or corrupt image data")
    return image


class ImageNormalizer:
    """Prepares raw slip images for Tesseract.

    Args:
        config: Preprocessing configuration. Resizing always runs;
            the remaining steps can be switched off individually.
    """

    def __init__(self, config: PreprocessingConfig | None = None) -> None:
        self.config = config or PreprocessingConfig()

    def process(self, image: np.ndarray) -> np.ndarray:
        """Run the preparation chain on a decoded image."""
        result = resize_to_max_width(image, self.config.max_width)

        if self.config.grayscale_enabled:
            result = to_grayscale(result)

        if self.config.contrast_enabled:
            result = stretch_contrast(result)

        if self.config.sharpen_enabled:
            result = sharpen(
                result,
                sigma=self.config.sharpen_sigma,
                amount=self.config.sharpen_amount,
            )
        return result

    def normalize(self, raw: bytes) -> NormalizedImage:
        """Decode, prepare, and re-encode an uploaded slip image.

        Args:
            raw: Encoded image bytes as uploaded.

        Returns:
            The normalized image as PNG bytes with its dimensions.

        Raises:
            ImageDecodeError: If ``raw`` cannot be decoded or the result
                cannot be encoded.
        """
        image = decode_image(raw)
        result = self.process(image)

        ok, encoded = cv2.imencode(".png", result)
        if not ok:
            raise ImageDecodeError("Failed to encode normalized image")

        height, width = result.shape[:2]
        logger.info(
            "Normalized %dx%d -> %dx%d: sharpness %.1f->%.1f, contrast %.1f->%.1f",
            image.shape[1],
            image.shape[0],
            width,
            height,
            calculate_sharpness(image),
            calculate_sharpness(result),
            calculate_contrast(image),
            calculate_contrast(result),
        )
        return NormalizedImage(data=encoded.tobytes(), width=width, height=height)
