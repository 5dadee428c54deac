"""Configuration management for the slip OCR service.

Loads and validates YAML configuration with defaults tuned for
Lao payment slips: image normalization, Tesseract language profile,
and the HTTP host settings.
"""

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("configs/config.yaml")


class PreprocessingConfig(BaseModel):
    """Configuration for the image normalization steps."""

    max_width: int = Field(default=1200, gt=0)
    grayscale_enabled: bool = True
    contrast_enabled: bool = True
    sharpen_enabled: bool = True
    sharpen_sigma: float = Field(default=1.0, gt=0)
    sharpen_amount: float = Field(default=1.0, ge=0)


class OCRConfig(BaseModel):
    """Configuration for the Tesseract recognition adapter."""

    tesseract_cmd: str | None = None
    lang: str = "lao+eng"
    psm: int = 3


class ServerConfig(BaseModel):
    """Configuration for the HTTP host."""

    host: str = "0.0.0.0"
    port: int = 3000
    max_upload_mb: int = Field(default=10, gt=0)

    @property
    def max_upload_bytes(self) -> int:
        return self.max_upload_mb * 1024 * 1024


class AppConfig(BaseModel):
    """Top-level application configuration."""

    preprocessing: PreprocessingConfig = Field(default_factory=PreprocessingConfig)
    ocr: OCRConfig = Field(default_factory=OCRConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    log_level: str = "INFO"


def load_config(path: Path | None = None) -> AppConfig:
    """Load configuration from a YAML file.

    Args:
        path: Path to the YAML configuration file.
            Defaults to configs/config.yaml.

    Returns:
        Validated application configuration, or defaults when the
        file does not exist.
    """
    if path is None:
        path = DEFAULT_CONFIG_PATH

    if path.exists():
        logger.info("Loading configuration from %s", path)
        with open(path, encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
        return AppConfig(**raw)

    logger.info("No config file found at %s, using defaults", path)
    return AppConfig()
