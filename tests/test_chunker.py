"""Tests for chunking.chunker."""

import math

import pytest

from chunking import ChunkingConfig, SegmentChunker, chunk_segments
from chunking.token_counter import count_tokens
from extraction.models import ExtractionMethod, Segment, SourceType


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _make_segment(text: str, **overrides) -> Segment:
    defaults = dict(text=text, source_type=SourceType.PAGE, source_index=1)
    defaults.update(overrides)
    return Segment(**defaults)


def _chunk_texts(text: str, limit: int, overlap: float) -> list[str]:
    chunker = SegmentChunker(ChunkingConfig(chunk_token_limit=limit, chunk_overlap_tokens=overlap))
    return [c.text for c in chunker.chunk([_make_segment(text)])]


def _word_ranges(words: list[str], pieces: list[str]) -> list[tuple[int, int]]:
    """Locate each piece as a contiguous run of (unique) words."""
    ranges = []
    for piece in pieces:
        piece_words = piece.split()
        start = words.index(piece_words[0])
        assert words[start:start + len(piece_words)] == piece_words
        ranges.append((start, start + len(piece_words)))
    return ranges


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------

class TestBasicChunking:
    def test_empty_input(self):
        assert SegmentChunker().chunk([]) == []

    def test_whitespace_only_segment(self):
        chunks = SegmentChunker().chunk([_make_segment("   \n\t  ")])
        assert chunks == []

    def test_empty_text_segment(self):
        assert SegmentChunker().chunk([_make_segment("")]) == []

    def test_short_segment_is_verbatim(self):
        text = "Line one\n\n  Line two  "
        chunks = SegmentChunker().chunk([_make_segment(text)])

        assert len(chunks) == 1
        assert chunks[0].text == text
        assert chunks[0].token_count == count_tokens(text)

    def test_segment_at_exact_limit_is_not_split(self):
        text = "abcd efgh ij"  # 12 chars -> 3 tokens
        chunker = SegmentChunker(ChunkingConfig(chunk_token_limit=3, chunk_overlap_tokens=1))
        chunks = chunker.chunk([_make_segment(text)])

        assert [c.text for c in chunks] == [text]

    def test_segments_keep_order(self):
        segments = [
            _make_segment("first page", source_index=1),
            _make_segment("second page", source_index=2),
        ]
        chunks = SegmentChunker().chunk(segments)

        assert [c.source_index for c in chunks] == [1, 2]


class TestWordSplitting:
    def test_one_word_overlap(self):
        assert _chunk_texts("alpha bravo charl delta", limit=3, overlap=1) == [
            "alpha bravo",
            "bravo charl",
            "charl delta",
        ]

    def test_overlap_clamped_to_advance(self):
        assert _chunk_texts("aaaa bbbbb cccc dddd", limit=4, overlap=3) == [
            "aaaa bbbbb cccc",
            "bbbbb cccc dddd",
        ]

    def test_overlong_word_emitted_alone(self):
        long_word = "a" * 50
        assert _chunk_texts(f"{long_word} ok", limit=2, overlap=1) == [long_word, "ok"]

    def test_overlong_word_in_the_middle(self):
        long_word = "x" * 30
        pieces = _chunk_texts(f"ab cd {long_word} ef gh", limit=2, overlap=0)

        assert long_word in pieces
        assert pieces[0] == "ab cd"
        assert pieces[-1] == "ef gh"

    def test_whitespace_is_normalized_in_split_chunks(self):
        pieces = _chunk_texts("alpha\n\nbravo\tcharl   delta", limit=3, overlap=0)
        assert pieces == ["alpha bravo", "charl delta"]

    def test_chunks_respect_limit(self):
        text = " ".join(f"word{i}" for i in range(300))
        chunker = SegmentChunker(ChunkingConfig(chunk_token_limit=25, chunk_overlap_tokens=5))
        chunks = chunker.chunk([_make_segment(text)])

        assert len(chunks) > 1
        assert all(c.token_count <= 25 for c in chunks)
        assert all(c.token_count == count_tokens(c.text) for c in chunks)

    def test_distinct_ranges_reconstruct_words(self):
        words = [f"w{i}" for i in range(200)]
        pieces = _chunk_texts(" ".join(words), limit=20, overlap=5)
        ranges = _word_ranges(words, pieces)

        assert ranges[0][0] == 0
        assert ranges[-1][1] == len(words)

        rebuilt = list(words[ranges[0][0]:ranges[0][1]])
        for (prev_start, prev_end), (start, end) in zip(ranges, ranges[1:]):
            assert prev_start < start <= prev_end
            rebuilt.extend(words[prev_end:end])
        assert rebuilt == words

    def test_overlap_stays_within_target(self):
        words = [f"w{i:03d}" for i in range(120)]  # 4 chars each
        pieces = _chunk_texts(" ".join(words), limit=20, overlap=3)
        ranges = _word_ranges(words, pieces)

        for (_, prev_end), (start, _) in zip(ranges, ranges[1:]):
            shared = words[start:prev_end]
            # Trailing words are added until their estimate reaches the target.
            assert math.ceil(len(" ".join(shared)) / 4) >= 3
            assert math.ceil(len(" ".join(shared[1:])) / 4) < 3


class TestOverlapDisabled:
    @pytest.mark.parametrize("overlap", [0, -5, float("nan"), float("inf")])
    def test_no_overlap(self, overlap):
        assert _chunk_texts("alpha bravo charl delta", limit=3, overlap=overlap) == [
            "alpha bravo",
            "charl delta",
        ]


class TestDegenerateLimits:
    @pytest.mark.parametrize("limit", [0, -1])
    def test_one_word_per_chunk(self, limit):
        assert _chunk_texts("ab cd ef", limit=limit, overlap=1) == ["ab", "cd", "ef"]


class TestProvenance:
    def test_chunks_inherit_segment_provenance(self):
        segment = _make_segment(
            " ".join(f"token{i}" for i in range(50)),
            source_type=SourceType.SLIDE,
            source_index=3,
            section_title="Introduction",
            extraction_method=ExtractionMethod.OCR,
            quality_score=0.82,
        )
        chunker = SegmentChunker(ChunkingConfig(chunk_token_limit=10, chunk_overlap_tokens=2))
        chunks = chunker.chunk([segment])

        assert len(chunks) > 1
        for chunk in chunks:
            assert chunk.source_type == SourceType.SLIDE
            assert chunk.source_index == 3
            assert chunk.section_title == "Introduction"
            assert chunk.extraction_method == ExtractionMethod.OCR
            assert chunk.quality_score == 0.82

    def test_text_segment_has_no_quality_score(self):
        chunks = SegmentChunker().chunk([_make_segment("plain text layer")])
        assert chunks[0].extraction_method == ExtractionMethod.TEXT
        assert chunks[0].quality_score is None


class TestChunkWithStats:
    def test_stats(self):
        chunker = SegmentChunker(ChunkingConfig(chunk_token_limit=3, chunk_overlap_tokens=1))
        result = chunker.chunk_with_stats([
            _make_segment("hello world", source_index=1),
            _make_segment("   ", source_index=2),
            _make_segment("alpha bravo charl delta", source_index=3),
        ])

        assert result.total_chunks == 4
        assert result.stats.total_chunks == 4
        assert result.stats.total_tokens == 12
        assert result.stats.avg_chunk_tokens == 3.0
        assert result.stats.min_chunk_tokens == 3
        assert result.stats.max_chunk_tokens == 3
        assert result.stats.segments_processed == 2
        assert result.stats.segments_skipped == 1
        assert result.config.chunk_token_limit == 3

    def test_stats_for_no_chunks(self):
        result = SegmentChunker().chunk_with_stats([])
        assert result.total_chunks == 0
        assert result.stats.total_tokens == 0
        assert result.stats.segments_processed == 0


class TestChunkSegmentsFunction:
    def test_explicit_limits(self):
        chunks = chunk_segments(
            [_make_segment("alpha bravo charl delta")],
            chunk_token_limit=3,
            chunk_overlap_tokens=1,
        )
        assert [c.text for c in chunks] == ["alpha bravo", "bravo charl", "charl delta"]

    def test_defaults(self):
        chunks = chunk_segments([_make_segment("alpha bravo charl delta")])
        assert [c.text for c in chunks] == ["alpha bravo charl delta"]
