"""Image operations used to prepare slip photos and screenshots for OCR.

Each function takes and returns a numpy image so the normalizer can
chain them in a fixed order. Quality metrics are provided for logging
the effect of the chain.
"""

import cv2
import numpy as np

from slip_ocr.utils.logger import get_logger

logger = get_logger(__name__)


def resize_to_max_width(image: np.ndarray, max_width: int) -> np.ndarray:
    """Downscale an image so its width does not exceed ``max_width``.

    The aspect ratio is preserved. Images already at or below the cap
    are returned unchanged, never enlarged.

    Args:
        image: Input image (BGR, BGRA or grayscale).
        max_width: Maximum output width in pixels.

    Returns:
        The resized image, or the input when no resize was needed.
    """
    height, width = image.shape[:2]
    if width <= max_width:
        return image

    scale = max_width / width
    new_height = max(1, round(height * scale))
    result = cv2.resize(image, (max_width, new_height), interpolation=cv2.INTER_AREA)
    logger.debug("Resized %dx%d -> %dx%d", width, height, max_width, new_height)
    return result


def to_grayscale(image: np.ndarray) -> np.ndarray:
    """Convert an image to a single channel.

    Args:
        image: Input image (BGR, BGRA or grayscale).

    Returns:
        Grayscale image.
    """
    if image.ndim == 2:
        return image
    if image.shape[2] == 4:
        return cv2.cvtColor(image, cv2.COLOR_BGRA2GRAY)
    return cv2.cvtColor(image, cv2.COLOR_BGR2GRAY)


def stretch_contrast(image: np.ndarray) -> np.ndarray:
    """Stretch intensities so the darkest pixel becomes 0 and the brightest 255.

    A uniform image has no range to stretch and is returned unchanged.

    Args:
        image: Grayscale image.

    Returns:
        Contrast-normalized image.
    """
    low, high = int(image.min()), int(image.max())
    if low == high:
        return image

    result = cv2.normalize(image, None, 0, 255, cv2.NORM_MINMAX)
    logger.debug("Stretched intensity range %d..%d to 0..255", low, high)
    return result


def sharpen(image: np.ndarray, sigma: float = 1.0, amount: float = 1.0) -> np.ndarray:
    """Sharpen an image with an unsharp mask.

    Args:
        image: Input image.
        sigma: Gaussian blur sigma used to build the mask.
        amount: Strength of the sharpening; 0 leaves the image as-is.

    Returns:
        Sharpened image with the input's dtype.
    """
    if amount == 0:
        return image

    blurred = cv2.GaussianBlur(image, (0, 0), sigma)
    result = cv2.addWeighted(image, 1.0 + amount, blurred, -amount, 0)
    logger.debug("Applied unsharp mask (sigma=%.1f, amount=%.1f)", sigma, amount)
    return result


def calculate_sharpness(image: np.ndarray) -> float:
    """Calculate image sharpness as the variance of the Laplacian."""
    return float(cv2.Laplacian(to_grayscale(image), cv2.CV_64F).var())


def calculate_contrast(image: np.ndarray) -> float:
    """Calculate image contrast as the standard deviation of intensities."""
    return float(to_grayscale(image).std())
