"""
Data Models for Material Extraction

Defines:
1. SourceType / ExtractionMethod - provenance enums
2. Segment - a unit of extracted text before chunking
3. OcrResult / PageOcrResult / PdfOcrResult - raw OCR engine output

Design Principles:
- Pydantic v2 for validation and serialization
- Immutable value objects (frozen=True); equality is structural
- Segments carry provenance that every derived chunk inherits unchanged
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class SourceType(str, Enum):
    """Where in the source document a segment came from."""

    PAGE = "page"
    SLIDE = "slide"
    PARAGRAPH = "paragraph"
    OTHER = "other"


class ExtractionMethod(str, Enum):
    """How the segment text was obtained."""

    TEXT = "text"
    OCR = "ocr"


class Segment(BaseModel):
    """
    A provenance-tagged unit of extracted document text.

    Produced by the extraction step, consumed only by the chunker.
    """

    text: str = Field(
        ...,
        description="Raw extracted text (may be empty or whitespace-only)",
    )
    source_type: SourceType = Field(
        ...,
        description="Kind of source unit (page, slide, paragraph, other)",
    )
    source_index: int = Field(
        ...,
        ge=1,
        description="1-based position within the source document",
    )
    section_title: Optional[str] = Field(
        None,
        description="Section heading, if the extractor found one",
    )
    extraction_method: ExtractionMethod = Field(
        ExtractionMethod.TEXT,
        description="Text layer or OCR",
    )
    quality_score: Optional[float] = Field(
        None,
        ge=0.0,
        le=1.0,
        description="OCR confidence scaled to 0-1 (OCR segments only)",
    )

    model_config = {"frozen": True}


class OcrResult(BaseModel):
    """Text and engine confidence (0-100) for one recognized image."""

    text: str
    confidence: float = Field(..., ge=0.0, le=100.0)

    model_config = {"frozen": True}


class PageOcrResult(OcrResult):
    """OCR output for a single rendered PDF page."""

    page_number: int = Field(..., ge=1)
    image_bytes: bytes = Field(
        b"",
        description="PNG rendering of the page, kept for a raw-image fallback",
    )


class PdfOcrResult(BaseModel):
    """OCR output for the first ``page_count`` pages of a PDF."""

    results: list[PageOcrResult] = Field(default_factory=list)
    page_count: int = Field(0, ge=0, description="Pages actually recognized")
    total_pages: int = Field(0, ge=0, description="Pages in the document")

    model_config = {"frozen": True}
