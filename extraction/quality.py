"""
OCR quality gate.

Decides whether text recognized from an image or PDF page is trustworthy
enough to keep. The gate never fixes text; a rejected result is handed back
to the caller, which may retry with different settings or fall back to the
raw page image.

Usage:
    from extraction.quality import is_low_quality_text

    if is_low_quality_text(result.text, result.confidence):
        ...
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class OcrQualityThresholds:
    min_chars: int = 10
    short_text_confidence: float = 60.0
    min_confidence: float = 55.0
    max_noise_ratio: float = 0.3


DEFAULT_THRESHOLDS = OcrQualityThresholds()


def noise_ratio(text: str) -> float:
    """Share of characters that are neither alphanumeric nor whitespace."""
    if not text:
        return 0.0
    noisy = sum(1 for c in text if not c.isalnum() and not c.isspace())
    return noisy / len(text)


def is_low_quality_text(
    text: str,
    confidence: float,
    thresholds: OcrQualityThresholds = DEFAULT_THRESHOLDS,
) -> bool:
    """
    Classify OCR output as low quality.

    Args:
        text: Recognized text.
        confidence: Engine confidence on a 0-100 scale.
        thresholds: Cut-offs to apply.

    Returns:
        True if the text is short and not highly confident, if confidence is
        below the hard floor, or if the text is dominated by symbols.
    """
    if len(text.strip()) < thresholds.min_chars and confidence < thresholds.short_text_confidence:
        return True
    if confidence < thresholds.min_confidence:
        return True
    return noise_ratio(text) > thresholds.max_noise_ratio
