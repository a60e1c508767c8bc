"""
Segment extraction for uploaded course materials.

Turns a PDF or an image upload into provenance-tagged Segments:
1. PDF pages use the embedded text layer when it has enough content.
2. Pages without a usable text layer, and standalone images, go through OCR.
3. Every OCR result passes the quality gate; rejected results are dropped.

DOCX/PPTX uploads are accepted by the upload form but are extracted
elsewhere; their segments reach the chunker directly.

Usage:
    from extraction.segments import SegmentExtractor

    extractor = SegmentExtractor()
    segments = extractor.extract(data, "lecture-01.pdf")
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Optional

import fitz  # PyMuPDF

from .exceptions import ExtractionError, UnsupportedMaterialError
from .models import ExtractionMethod, OcrResult, Segment, SourceType
from .ocr import OcrEngine
from .quality import DEFAULT_THRESHOLDS, OcrQualityThresholds, is_low_quality_text

logger = logging.getLogger(__name__)

MAX_MATERIAL_BYTES = 20 * 1024 * 1024

PDF_MIME_TYPE = "application/pdf"
DOCX_MIME_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
PPTX_MIME_TYPE = "application/vnd.openxmlformats-officedocument.presentationml.presentation"
IMAGE_MIME_TYPES = ("image/png", "image/jpeg", "image/webp", "image/gif")

ALLOWED_MIME_TYPES = (PDF_MIME_TYPE, DOCX_MIME_TYPE, PPTX_MIME_TYPE) + IMAGE_MIME_TYPES
ALLOWED_EXTENSIONS = (".pdf", ".docx", ".pptx", ".png", ".jpg", ".jpeg", ".webp", ".gif")
IMAGE_EXTENSIONS = (".png", ".jpg", ".jpeg", ".webp", ".gif")


def segment_from_ocr(
    result: OcrResult,
    source_type: SourceType,
    source_index: int,
    thresholds: OcrQualityThresholds = DEFAULT_THRESHOLDS,
) -> Optional[Segment]:
    """Wrap an OCR result into a Segment, or return None if the gate rejects it."""
    if is_low_quality_text(result.text, result.confidence, thresholds):
        logger.warning(
            f"Dropping low-quality OCR text for {source_type.value} {source_index} "
            f"(confidence {result.confidence:.1f})"
        )
        return None
    return Segment(
        text=result.text,
        source_type=source_type,
        source_index=source_index,
        extraction_method=ExtractionMethod.OCR,
        quality_score=round(result.confidence / 100, 4),
    )


class SegmentExtractor:
    def __init__(
        self,
        ocr_engine: Optional[OcrEngine] = None,
        thresholds: OcrQualityThresholds = DEFAULT_THRESHOLDS,
        min_text_chars: int = 20,
        ocr_enabled: bool = True,
    ):
        self.ocr_engine = ocr_engine or OcrEngine()
        self.thresholds = thresholds
        self.min_text_chars = min_text_chars
        self.ocr_enabled = ocr_enabled

    def extract(self, data: bytes, filename: str, mime_type: Optional[str] = None) -> list[Segment]:
        """
        Extract segments from an uploaded file.

        Raises:
            UnsupportedMaterialError: If the file type has no extraction path here.
            ExtractionError: If the file is too large or cannot be opened.
        """
        if len(data) > MAX_MATERIAL_BYTES:
            raise ExtractionError(
                f"Material exceeds {MAX_MATERIAL_BYTES // (1024 * 1024)} MB limit",
                details=filename,
            )

        suffix = Path(filename).suffix.lower()
        if mime_type == PDF_MIME_TYPE or suffix == ".pdf":
            return self.extract_pdf(data)
        if mime_type in IMAGE_MIME_TYPES or suffix in IMAGE_EXTENSIONS:
            return self.extract_image(data)
        raise UnsupportedMaterialError(filename, mime_type)

    def extract_pdf(self, data: bytes) -> list[Segment]:
        try:
            doc = fitz.open(stream=data, filetype="pdf")
        except RuntimeError as exc:
            raise ExtractionError("PDF is corrupted or unreadable", details=str(exc)) from exc

        with doc:
            page_texts = [page.get_text() for page in doc]

        segments: list[Segment] = []
        needs_ocr: list[int] = []
        for page_number, raw_text in enumerate(page_texts, start=1):
            text = _clean_text(raw_text)
            if len(text) >= self.min_text_chars:
                segments.append(Segment(
                    text=text,
                    source_type=SourceType.PAGE,
                    source_index=page_number,
                    extraction_method=ExtractionMethod.TEXT,
                ))
            else:
                needs_ocr.append(page_number)

        if needs_ocr and self.ocr_enabled:
            logger.info(f"{len(needs_ocr)} page(s) without a text layer; running OCR")
            ocr_result = self.ocr_engine.recognize_pdf(data, page_numbers=needs_ocr)
            for page in ocr_result.results:
                segment = segment_from_ocr(
                    page, SourceType.PAGE, page.page_number, self.thresholds
                )
                if segment is not None:
                    segments.append(segment)

        segments.sort(key=lambda s: s.source_index)
        logger.info(f"Extracted {len(segments)} segment(s) from {len(page_texts)} page(s)")
        return segments

    def extract_image(self, data: bytes) -> list[Segment]:
        if not self.ocr_enabled:
            return []
        result = self.ocr_engine.recognize_image(data)
        segment = segment_from_ocr(result, SourceType.OTHER, 1, self.thresholds)
        return [segment] if segment is not None else []


def _clean_text(text: str) -> str:
    if not text:
        return ""
    cleaned = text.replace("\r\n", "\n").replace("\r", "\n")
    # De-hyphenate line breaks: "lec-\nture" -> "lecture"
    cleaned = re.sub(r"(?<=\w)-\n(?=\w)", "", cleaned)
    cleaned = re.sub(r"[ \t]+", " ", cleaned)
    cleaned = re.sub(r"\n{3,}", "\n\n", cleaned)
    return cleaned.strip()
