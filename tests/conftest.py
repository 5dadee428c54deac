"""Shared test fixtures for the slip OCR test suite."""

import io
from pathlib import Path

import numpy as np
import pytest
from PIL import Image


def _encode_image(width: int, height: int, fmt: str = "PNG") -> bytes:
    """Encode a synthetic RGB slip-like image (light with a dark bar)."""
    array = np.full((height, width, 3), 230, dtype=np.uint8)
    array[height // 3 : height // 2, width // 8 : width - width // 8] = 40
    buf = io.BytesIO()
    Image.fromarray(array).save(buf, format=fmt)
    return buf.getvalue()


@pytest.fixture
def wide_image_bytes() -> bytes:
    """A 1600x400 PNG, wider than the default width cap."""
    return _encode_image(1600, 400)


@pytest.fixture
def narrow_image_bytes() -> bytes:
    """A 300x200 PNG, narrower than the default width cap."""
    return _encode_image(300, 200)


@pytest.fixture
def moneygram_text() -> str:
    return (
        "MoneyGram\n"
        "Transfer Completed\n"
        "Amount 150,000 LAK\n"
        "Service fee 0 LAK\n"
        "25/09/24 22:43:06\n"
    )


@pytest.fixture
def ldb_text() -> str:
    return (
        "ໂອນເງິນສຳເລັດ\n"
        "ຈ້ານວນເງິນ: K 500,000\n"
        "ເລກທີ FT24075ABC12\n"
        "2024-03-15 10:20:30\n"
    )


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def make_image_bytes():
    """Factory fixture encoding a synthetic slip image of a given size."""
    return _encode_image
