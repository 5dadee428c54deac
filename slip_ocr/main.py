"""Application entry point for the Lao Slip OCR API server."""

import uvicorn

from slip_ocr.api.app import app
from slip_ocr.utils.config import load_config
from slip_ocr.utils.logger import setup_logging


def main() -> None:
    """Start the FastAPI application server."""
    config = load_config()
    setup_logging(config.log_level)
    uvicorn.run(app, host=config.server.host, port=config.server.port)


if __name__ == "__main__":
    main()
