"""
Chunking Module - Token-bounded sliding window chunking for course materials

Splits extracted Segments into overlapping chunks that keep each segment's
provenance (source type, index, section title, extraction method, OCR score).

Quick Start:
    from chunking import SegmentChunker, ChunkingConfig

    chunker = SegmentChunker(ChunkingConfig(chunk_token_limit=500))
    chunks = chunker.chunk(segments)
"""

__version__ = "1.0.0"

from .chunker import SegmentChunker, chunk_segments
from .service import ChunkingService
from .config import ChunkingServiceConfig
from .models import (
    Chunk,
    ChunkingConfig,
    ChunkingResult,
    ChunkingStats,
)
from .token_counter import count_tokens, count_tokens_batch

__all__ = [
    "__version__",
    "SegmentChunker",
    "chunk_segments",
    "ChunkingService",
    "ChunkingServiceConfig",
    "Chunk",
    "ChunkingConfig",
    "ChunkingResult",
    "ChunkingStats",
    "count_tokens",
    "count_tokens_batch",
]
