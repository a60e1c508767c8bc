"""
Custom Exceptions for Material Extraction.

Exception Hierarchy:
    ExtractionError (base)
    ├── UnsupportedMaterialError
    └── OCRError

Low-quality OCR output is not an error: the quality gate reports it and
the segment builder drops it.
"""

from __future__ import annotations

from typing import Optional


class ExtractionError(Exception):
    """
    Base exception for all extraction-related errors.

    Attributes:
        message: Human-readable error description
        details: Additional technical details (optional)
    """

    def __init__(
        self,
        message: str = "An extraction error occurred",
        details: Optional[str] = None,
    ):
        self.message = message
        self.details = details

        full_message = message
        if details:
            full_message = f"{message} | Details: {details}"

        super().__init__(full_message)


class UnsupportedMaterialError(ExtractionError):
    """
    Raised when an upload's type has no extraction path.

    Attributes:
        filename: Name of the rejected file
    """

    def __init__(self, filename: str, mime_type: Optional[str] = None):
        self.filename = filename
        self.mime_type = mime_type
        super().__init__(
            message=f"Unsupported material type: {filename}",
            details=mime_type,
        )


class OCRError(ExtractionError):
    """
    Raised when the OCR engine cannot run at all.

    Attributes:
        page_number: Page being recognized, if any (1-indexed)
        original_error: The underlying engine error
    """

    def __init__(
        self,
        message: str = "OCR failed",
        page_number: Optional[int] = None,
        original_error: Optional[Exception] = None,
    ):
        self.page_number = page_number
        self.original_error = original_error
        if page_number is not None:
            message = f"{message} on page {page_number}"
        details = str(original_error) if original_error else None
        super().__init__(message, details)


def format_error_chain(error: Exception) -> str:
    """
    Format an exception and its chain for logging.

    Returns a multi-line string showing the error hierarchy.
    """
    lines = []
    current = error
    depth = 0

    while current is not None:
        prefix = "  " * depth + ("└─ " if depth > 0 else "")
        lines.append(f"{prefix}{type(current).__name__}: {current}")

        if getattr(current, "original_error", None):
            current = current.original_error
            depth += 1
        elif current.__cause__:
            current = current.__cause__
            depth += 1
        else:
            break

    return "\n".join(lines)
