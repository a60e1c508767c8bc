"""
Extraction Module - Segments and OCR quality gating for course materials

Quick Start:
    from extraction import SegmentExtractor, is_low_quality_text

    segments = SegmentExtractor().extract(data, "slides.pdf")
"""

from .config import OcrConfig
from .exceptions import ExtractionError, OCRError, UnsupportedMaterialError
from .models import (
    ExtractionMethod,
    OcrResult,
    PageOcrResult,
    PdfOcrResult,
    Segment,
    SourceType,
)
from .ocr import OcrEngine, run_ocr_on_image, run_ocr_on_pdf
from .quality import OcrQualityThresholds, is_low_quality_text
from .segments import SegmentExtractor, segment_from_ocr

__all__ = [
    "OcrConfig",
    "ExtractionError",
    "OCRError",
    "UnsupportedMaterialError",
    "ExtractionMethod",
    "OcrResult",
    "PageOcrResult",
    "PdfOcrResult",
    "Segment",
    "SourceType",
    "OcrEngine",
    "run_ocr_on_image",
    "run_ocr_on_pdf",
    "OcrQualityThresholds",
    "is_low_quality_text",
    "SegmentExtractor",
    "segment_from_ocr",
]
