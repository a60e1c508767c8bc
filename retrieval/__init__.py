"""
Retrieval component for course material RAG.

Selects a token-budgeted, per-material-capped subset of similarity-ranked
chunks and renders it as prompt context.

Quick Start:
    from retrieval import select_chunks, build_context

    selected = select_chunks(candidates, token_budget=2400, per_source_cap=4)
    context = build_context(selected)
"""

__version__ = "1.0.0"

from .config import RetrievalConfig
from .context_builder import (
    ContextBudgetAllocator,
    build_context,
    effective_token_count,
    select_chunks,
)
from .embedder import OllamaEmbedder
from .exceptions import EmbeddingError, RetrievalError, SimilaritySearchError
from .models import ContextBuildResult, EmbedderHealth, RetrievedChunk
from .service import MaterialRetrievalService
from .vector_index import ChromaMaterialIndex

__all__ = [
    "__version__",
    "RetrievalConfig",
    "ContextBudgetAllocator",
    "build_context",
    "effective_token_count",
    "select_chunks",
    "OllamaEmbedder",
    "EmbeddingError",
    "RetrievalError",
    "SimilaritySearchError",
    "ContextBuildResult",
    "EmbedderHealth",
    "RetrievedChunk",
    "MaterialRetrievalService",
    "ChromaMaterialIndex",
]
