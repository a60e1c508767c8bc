"""
Custom Exceptions for Material Retrieval.

Exception Hierarchy:
    RetrievalError (base)
    ├── EmbeddingError
    └── SimilaritySearchError

These wrap failures of the embedding and similarity-search backends. The
retrieval service never recovers from them; callers treat them as fatal for
the current request.
"""

from __future__ import annotations

from typing import Optional


class RetrievalError(Exception):
    """
    Base exception for all retrieval-related errors.

    Attributes:
        message: Human-readable error description
        details: Additional technical details (optional)
    """

    def __init__(
        self,
        message: str = "A retrieval error occurred",
        details: Optional[str] = None,
    ):
        self.message = message
        self.details = details

        full_message = message
        if details:
            full_message = f"{message} | Details: {details}"

        super().__init__(full_message)


class EmbeddingError(RetrievalError):
    """
    Raised when the query embedding cannot be produced.

    Attributes:
        model: Embedding model that was asked
    """

    def __init__(
        self,
        message: str = "Embedding failed",
        model: Optional[str] = None,
        details: Optional[str] = None,
    ):
        self.model = model
        if model:
            message = f"{message} [{model}]"
        super().__init__(message, details)


class SimilaritySearchError(RetrievalError):
    """Raised when the similarity-search backend fails."""

    pass
