"""FastAPI application for the Lao Slip OCR API.

Accepts a slip image upload, validates it, and relays the pipeline's
structured result. Input problems are 400s, pipeline failures are 500s,
and a field that could not be extracted is ``null`` in a 200 response.
"""

from typing import Annotated

from fastapi import FastAPI, File, HTTPException, UploadFile
from fastapi.middleware.cors import CORSMiddleware

from slip_ocr.errors import PipelineError
from slip_ocr.ocr.tesseract_engine import tesseract_available
from slip_ocr.pipeline import SlipPipeline
from slip_ocr.utils.config import AppConfig, load_config
from slip_ocr.utils.logger import get_logger

from .schemas import HealthResponse, SlipData, SlipResponse

logger = get_logger(__name__)

VERSION = "1.0.0"

app = FastAPI(
    title="Lao Slip OCR API",
    description="Extract amount, date, and issuer from Lao payment slips",
    version=VERSION,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _get_components() -> tuple[AppConfig, SlipPipeline]:
    """Load configuration and build the processing pipeline."""
    config = load_config()
    return config, SlipPipeline.from_config(config)


@app.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Return service health status."""
    config = load_config()
    return HealthResponse(
        status="healthy",
        version=VERSION,
        tesseract_available=tesseract_available(),
        languages=config.ocr.lang,
    )


@app.post("/ocr/slip", response_model=SlipResponse)
def process_slip(
    image: Annotated[UploadFile | None, File()] = None,
) -> SlipResponse:
    """Run OCR on an uploaded payment slip.

    Args:
        image: Uploaded slip image (any ``image/*`` type).

    Returns:
        The extracted amount, date, institution, and raw text.
    """
    if image is None:
        raise HTTPException(status_code=400, detail="No image file provided")

    if not (image.content_type or "").startswith("image/"):
        raise HTTPException(status_code=400, detail="Only image files are allowed")

    config, pipeline = _get_components()
    limit = config.server.max_upload_bytes
    content = image.file.read(limit + 1)
    if len(content) > limit:
        raise HTTPException(
            status_code=400,
            detail=f"Image file must be less than {config.server.max_upload_mb}MB",
        )

    try:
        result = pipeline.run(content)
    except PipelineError as exc:
        logger.error("OCR processing error for %s: %s", image.filename, exc)
        raise HTTPException(
            status_code=500, detail=f"OCR processing failed: {exc.cause}"
        ) from exc

    return SlipResponse(success=True, data=SlipData(**result.to_dict()))
