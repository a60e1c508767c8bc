"""
Segment Chunker - Core chunking logic for the RAG pipeline

Takes the Segments produced by extraction and splits them into
token-bounded, overlapping Chunks that keep each Segment's provenance.

Algorithm (per segment):
1. Skip segments whose text is blank.
2. If the whole segment fits the token limit, emit it verbatim as one chunk.
3. Otherwise split on whitespace and greedily pack words while the joined
   text stays within the limit.
4. A single word that alone exceeds the limit becomes its own chunk and the
   window advances by exactly one word.
5. Sliding window: the next chunk starts some words back from the end of the
   previous one. The word count is derived from the overlap token target and
   is clamped so every window advances by at least one word.

Usage:
    from chunking import SegmentChunker, ChunkingConfig

    chunker = SegmentChunker(ChunkingConfig(chunk_token_limit=500))
    chunks = chunker.chunk(segments)
"""

import logging
import math
from typing import Optional, Sequence

from extraction.models import Segment

from .models import Chunk, ChunkingConfig, ChunkingResult, ChunkingStats
from .token_counter import CHARS_PER_TOKEN, count_tokens

logger = logging.getLogger(__name__)


class SegmentChunker:
    """
    Splits extracted segments into overlapping, word-aligned chunks.
    """

    def __init__(self, config: Optional[ChunkingConfig] = None):
        self.config = config or ChunkingConfig()

    def chunk(self, segments: Sequence[Segment]) -> list[Chunk]:
        """
        Chunk segments in order.

        Args:
            segments: Extracted segments; blank ones contribute nothing.

        Returns:
            Chunks for all segments, in segment order.
        """
        chunks: list[Chunk] = []
        for segment in segments:
            chunks.extend(self.chunk_segment(segment))
        return chunks

    def chunk_with_stats(self, segments: Sequence[Segment]) -> ChunkingResult:
        """Chunk segments and attach statistics about the run."""
        chunks: list[Chunk] = []
        skipped = 0
        for segment in segments:
            if not segment.text.strip():
                skipped += 1
                continue
            chunks.extend(self.chunk_segment(segment))

        stats = self._compute_stats(chunks, processed=len(segments) - skipped, skipped=skipped)
        logger.info(
            f"Chunked {stats.segments_processed} segment(s) into {stats.total_chunks} chunk(s) "
            f"({stats.total_tokens} tokens, {skipped} blank segment(s) skipped)"
        )
        return ChunkingResult(config=self.config, chunks=chunks, stats=stats)

    def chunk_segment(self, segment: Segment) -> list[Chunk]:
        """Chunk a single segment."""
        text = segment.text
        if not text.strip():
            return []

        token_count = count_tokens(text)
        if token_count <= self.config.chunk_token_limit:
            return [Chunk.from_segment(segment, text, token_count)]

        words = text.split()
        logger.debug(
            f"Splitting {segment.source_type.value} {segment.source_index}: "
            f"{token_count} tokens, {len(words)} words"
        )
        return [
            Chunk.from_segment(segment, piece, count_tokens(piece))
            for piece in self._split_words(words)
        ]

    # -------------------------------------------------------------------------
    # Internal methods
    # -------------------------------------------------------------------------

    def _split_words(self, words: list[str]) -> list[str]:
        """
        Pack words into windows of at most ``chunk_token_limit`` tokens.

        Returns:
            Chunk texts, each a space-joined contiguous run of ``words``.
        """
        limit = self.config.chunk_token_limit
        pieces: list[str] = []
        total_words = len(words)
        start = 0

        while start < total_words:
            end = start
            current = ""
            while end < total_words:
                candidate = f"{current} {words[end]}" if current else words[end]
                if count_tokens(candidate) > limit:
                    break
                current = candidate
                end += 1

            if not current:
                # Overlong word: emit it alone, advance by one, no overlap.
                pieces.append(words[start])
                start += 1
                continue

            pieces.append(current)
            if end >= total_words:
                break

            overlap = self._count_overlap_words(words, end)
            overlap = min(overlap, end - start - 1)
            start = end - overlap

        return pieces

    def _count_overlap_words(self, words: list[str], end: int) -> int:
        """
        Count trailing words (ending before ``end``) that make up the overlap.

        Walks backward adding word lengths plus one separator between words
        until the estimated tokens reach ``chunk_overlap_tokens``.
        """
        overlap_tokens = self.config.chunk_overlap_tokens
        if not math.isfinite(overlap_tokens) or overlap_tokens <= 0:
            return 0

        overlap_chars = 0
        overlap_words = 0
        for index in range(end - 1, -1, -1):
            overlap_chars += len(words[index]) + (1 if overlap_words > 0 else 0)
            overlap_words += 1
            if math.ceil(overlap_chars / CHARS_PER_TOKEN) >= overlap_tokens:
                break
        return overlap_words

    def _compute_stats(self, chunks: list[Chunk], processed: int, skipped: int) -> ChunkingStats:
        """Compute statistics about the chunking result."""
        if not chunks:
            return ChunkingStats(segments_processed=processed, segments_skipped=skipped)

        token_counts = [c.token_count for c in chunks]
        return ChunkingStats(
            total_chunks=len(chunks),
            total_tokens=sum(token_counts),
            avg_chunk_tokens=sum(token_counts) / len(token_counts),
            min_chunk_tokens=min(token_counts),
            max_chunk_tokens=max(token_counts),
            segments_processed=processed,
            segments_skipped=skipped,
        )


def chunk_segments(
    segments: Sequence[Segment],
    chunk_token_limit: Optional[int] = None,
    chunk_overlap_tokens: Optional[float] = None,
) -> list[Chunk]:
    """
    Convenience wrapper: chunk segments with explicit limits.

    Omitted limits use the ChunkingConfig defaults (1000 / 100).
    """
    overrides: dict = {}
    if chunk_token_limit is not None:
        overrides["chunk_token_limit"] = chunk_token_limit
    if chunk_overlap_tokens is not None:
        overrides["chunk_overlap_tokens"] = chunk_overlap_tokens
    return SegmentChunker(ChunkingConfig(**overrides)).chunk(segments)
