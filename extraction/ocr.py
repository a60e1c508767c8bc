"""
OCR adapter.

Renders PDF pages with PyMuPDF and recognizes them with Tesseract via
pytesseract. Each result carries the engine's mean word confidence
(0-100) so the quality gate can judge it.

Usage:
    from extraction.ocr import OcrEngine

    engine = OcrEngine(OcrConfig(language="deu", max_pdf_pages=5))
    result = engine.recognize_pdf(pdf_bytes)
    for page in result.results:
        print(page.page_number, page.confidence)
"""

from __future__ import annotations

import io
import logging
import shutil
from typing import Optional, Sequence

import fitz  # PyMuPDF
import pytesseract
from PIL import Image, UnidentifiedImageError
from pytesseract import TesseractNotFoundError

from .config import OcrConfig
from .exceptions import ExtractionError, OCRError
from .models import OcrResult, PageOcrResult, PdfOcrResult

logger = logging.getLogger(__name__)


class OcrEngine:
    def __init__(self, config: Optional[OcrConfig] = None):
        self.config = config or OcrConfig()
        self.zoom = self.config.dpi / 72  # 72 is the default PDF DPI
        tesseract_cmd = self.config.tesseract_cmd or shutil.which("tesseract")
        if tesseract_cmd:
            pytesseract.pytesseract.tesseract_cmd = tesseract_cmd

    @property
    def tesseract_config(self) -> str:
        return f"--oem {self.config.oem} --psm {self.config.psm}"

    def recognize_image(self, image_bytes: bytes, page_number: Optional[int] = None) -> OcrResult:
        """Recognize a single image and return its text and mean confidence."""
        try:
            image = Image.open(io.BytesIO(image_bytes))
        except UnidentifiedImageError as exc:
            raise OCRError("Unreadable image", page_number=page_number, original_error=exc) from exc

        try:
            data = pytesseract.image_to_data(
                image,
                lang=self.config.language,
                config=self.tesseract_config,
                output_type=pytesseract.Output.DICT,
            )
        except TesseractNotFoundError as exc:
            raise OCRError("Tesseract not found", page_number=page_number, original_error=exc) from exc
        except RuntimeError as exc:
            raise OCRError(page_number=page_number, original_error=exc) from exc

        return OcrResult(text=_join_words(data), confidence=_mean_confidence(data))

    def recognize_pdf(
        self,
        pdf_bytes: bytes,
        page_numbers: Optional[Sequence[int]] = None,
    ) -> PdfOcrResult:
        """
        Render and recognize PDF pages.

        Args:
            pdf_bytes: Raw PDF content.
            page_numbers: 1-indexed pages to recognize. Defaults to every page.
                At most ``max_pdf_pages`` of them are processed.

        Returns:
            PdfOcrResult with one entry per recognized page.
        """
        try:
            doc = fitz.open(stream=pdf_bytes, filetype="pdf")
        except RuntimeError as exc:
            raise ExtractionError("PDF is corrupted or unreadable", details=str(exc)) from exc

        with doc:
            total_pages = len(doc)
            wanted = list(page_numbers) if page_numbers is not None else list(range(1, total_pages + 1))
            wanted = [p for p in wanted if 1 <= p <= total_pages]
            limit = max(self.config.max_pdf_pages, 0)
            if len(wanted) > limit:
                logger.info(f"OCR limited to {limit} of {len(wanted)} pages")
                wanted = wanted[:limit]

            results: list[PageOcrResult] = []
            for page_number in wanted:
                image_bytes = self._render_page(doc[page_number - 1])
                recognized = self.recognize_image(image_bytes, page_number=page_number)
                logger.debug(
                    f"Page {page_number}: OCR confidence {recognized.confidence:.1f}"
                )
                results.append(PageOcrResult(
                    page_number=page_number,
                    text=recognized.text,
                    confidence=recognized.confidence,
                    image_bytes=image_bytes,
                ))

        return PdfOcrResult(
            results=results,
            page_count=len(results),
            total_pages=total_pages,
        )

    def _render_page(self, page: fitz.Page) -> bytes:
        matrix = fitz.Matrix(self.zoom, self.zoom)
        pixmap = page.get_pixmap(matrix=matrix)
        return pixmap.tobytes("png")


def _join_words(data: dict) -> str:
    """Rebuild text from image_to_data output: words by line, blank line between blocks."""
    blocks: list[list[str]] = []
    lines: dict[tuple[int, int, int], list[str]] = {}
    order: list[tuple[int, int, int]] = []

    for idx, word in enumerate(data.get("text", [])):
        if not word or not str(word).strip():
            continue
        key = (data["block_num"][idx], data["par_num"][idx], data["line_num"][idx])
        if key not in lines:
            lines[key] = []
            order.append(key)
        lines[key].append(str(word).strip())

    current_block = None
    for key in order:
        if key[0] != current_block:
            blocks.append([])
            current_block = key[0]
        blocks[-1].append(" ".join(lines[key]))

    return "\n\n".join("\n".join(block) for block in blocks)


def _mean_confidence(data: dict) -> float:
    confidences: list[float] = []
    for word, conf in zip(data.get("text", []), data.get("conf", [])):
        if not word or not str(word).strip():
            continue
        value = float(conf)
        if value >= 0:
            confidences.append(value)
    if not confidences:
        return 0.0
    return min(100.0, sum(confidences) / len(confidences))


def run_ocr_on_image(image_bytes: bytes, config: Optional[OcrConfig] = None) -> OcrResult:
    """Convenience wrapper: recognize one image."""
    return OcrEngine(config).recognize_image(image_bytes)


def run_ocr_on_pdf(pdf_bytes: bytes, config: Optional[OcrConfig] = None) -> PdfOcrResult:
    """Convenience wrapper: recognize up to ``max_pdf_pages`` pages of a PDF."""
    return OcrEngine(config).recognize_pdf(pdf_bytes)
