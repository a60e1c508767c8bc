from typing import Optional

from extraction.models import Segment
from extraction.ocr import OcrEngine
from extraction.segments import SegmentExtractor

from .chunker import SegmentChunker
from .config import ChunkingServiceConfig
from .models import ChunkingResult


class ChunkingService:
    def __init__(
        self,
        config: Optional[ChunkingServiceConfig] = None,
        extractor: Optional[SegmentExtractor] = None,
    ):
        self.config = config or ChunkingServiceConfig()
        self.chunker = SegmentChunker(self.config.chunking)
        self.extractor = extractor or SegmentExtractor(
            ocr_engine=OcrEngine(self.config.ocr),
            ocr_enabled=self.config.ocr_enabled,
        )

    def chunk_segments(self, segments: list[Segment]) -> ChunkingResult:
        return self.chunker.chunk_with_stats(segments)

    def chunk_material(
        self, data: bytes, filename: str, mime_type: Optional[str] = None
    ) -> ChunkingResult:
        segments = self.extractor.extract(data, filename, mime_type)
        return self.chunker.chunk_with_stats(segments)
