"""Pydantic response schemas for the FastAPI endpoints."""

from pydantic import BaseModel, ConfigDict, Field


class SlipData(BaseModel):
    """Fields extracted from a slip. Missing fields are ``null``."""

    model_config = ConfigDict(populate_by_name=True)

    amount: str | None = None
    date: str | None = None
    institution: str | None = None
    raw_text: str = Field(alias="rawText")


class SlipResponse(BaseModel):
    """Response schema for a successful slip OCR request."""

    success: bool
    data: SlipData


class HealthResponse(BaseModel):
    """Response schema for the health check endpoint."""

    status: str
    version: str
    tesseract_available: bool
    languages: str
