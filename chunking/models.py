"""
Data Models for the Chunking Pipeline

Defines:
1. ChunkingConfig - chunk token limit and overlap, resolved once at startup
2. Chunk - a token-bounded slice of one Segment, carrying its provenance
3. ChunkingResult - all chunks from one call, with statistics
4. Request/response models for the chunking HTTP API

Design Principles:
- Pydantic v2 for validation and serialization (consistent with extraction)
- Chunks are immutable once created
- Save/load pattern for offline inspection of chunking runs

Usage:
    config = ChunkingConfig(chunk_token_limit=500, chunk_overlap_tokens=50)
    result = SegmentChunker(config).chunk_with_stats(segments)
    result.save("chunks.json")
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from course_rag.env import env_float, env_int
from extraction.models import ExtractionMethod, Segment, SourceType


class ChunkingConfig(BaseModel):
    """
    Configuration for the chunking pipeline.

    Values are not range-checked: a zero or negative limit degrades to one
    word per chunk, and a non-positive or non-finite overlap disables overlap.
    """
    chunk_token_limit: int = Field(
        1000,
        description="Maximum estimated tokens per chunk",
    )
    chunk_overlap_tokens: float = Field(
        100,
        description="Target overlap in tokens between consecutive chunks of one segment",
    )

    model_config = {"frozen": True}

    @classmethod
    def from_env(cls) -> "ChunkingConfig":
        return cls(
            chunk_token_limit=env_int("CHUNK_TOKENS", 1000),
            chunk_overlap_tokens=env_float("CHUNK_OVERLAP", 100),
        )


class Chunk(BaseModel):
    """
    A token-bounded slice of one Segment's text, ready for embedding.
    """
    text: str = Field(
        ...,
        description="The chunk text content",
        min_length=1,
    )
    source_type: SourceType
    source_index: int = Field(..., ge=1)
    section_title: Optional[str] = None
    extraction_method: ExtractionMethod
    quality_score: Optional[float] = None
    token_count: int = Field(
        ...,
        description="Estimated tokens in this chunk",
        ge=1,
    )

    model_config = {"frozen": True}

    @field_validator("text")
    @classmethod
    def _text_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("chunk text must not be blank")
        return value

    @classmethod
    def from_segment(cls, segment: Segment, text: str, token_count: int) -> "Chunk":
        """Create a chunk that inherits the segment's provenance unchanged."""
        return cls(
            text=text,
            source_type=segment.source_type,
            source_index=segment.source_index,
            section_title=segment.section_title,
            extraction_method=segment.extraction_method,
            quality_score=segment.quality_score,
            token_count=token_count,
        )

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json")


class ChunkingStats(BaseModel):
    """Statistics about the chunking process."""
    total_chunks: int = 0
    total_tokens: int = 0
    avg_chunk_tokens: float = 0.0
    min_chunk_tokens: int = 0
    max_chunk_tokens: int = 0
    segments_processed: int = 0
    segments_skipped: int = 0


class ChunkingResult(BaseModel):
    """
    Complete result of chunking a list of segments.

    Ready for downstream embedding and vector store ingestion.
    """
    config: ChunkingConfig = Field(
        ...,
        description="Configuration used for chunking",
    )
    chunks: list[Chunk] = Field(
        default_factory=list,
        description="All chunks, in segment order",
    )
    stats: ChunkingStats = Field(
        default_factory=ChunkingStats,
        description="Chunking statistics",
    )
    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="When chunking was performed",
    )

    @property
    def total_chunks(self) -> int:
        return len(self.chunks)

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json")

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=indent)

    def save(self, path: str) -> None:
        """Save chunking result to a JSON file."""
        Path(path).write_text(self.to_json(), encoding="utf-8")

    @classmethod
    def load(cls, path: str) -> "ChunkingResult":
        """Load chunking result from a JSON file."""
        data = json.loads(Path(path).read_text(encoding="utf-8"))
        return cls.model_validate(data)


class ChunkRequest(BaseModel):
    segments: list[Segment] = Field(default_factory=list)


class ChunkResponse(BaseModel):
    chunks: list[Chunk]
    stats: ChunkingStats


class QualityRequest(BaseModel):
    text: str
    confidence: float = Field(..., ge=0.0, le=100.0)


class QualityResponse(BaseModel):
    low_quality: bool
