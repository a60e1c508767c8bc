"""
Process-wide pipeline settings.

Resolved once at startup and passed into each component at construction.
Nothing in the pipeline reads the environment after this point.

Usage:
    from course_rag.settings import PipelineSettings

    settings = PipelineSettings.from_env()
    chunker = SegmentChunker(settings.chunking)
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from chunking.models import ChunkingConfig
from extraction.config import OcrConfig
from retrieval.config import RetrievalConfig


@dataclass(frozen=True)
class PipelineSettings:
    chunking: ChunkingConfig = field(default_factory=ChunkingConfig)
    ocr: OcrConfig = field(default_factory=OcrConfig)
    retrieval: RetrievalConfig = field(default_factory=RetrievalConfig)

    @classmethod
    def from_env(cls, env_file: Optional[Path] = None) -> "PipelineSettings":
        """
        Build settings from environment variables.

        Args:
            env_file: Optional ``.env`` file to load first. Variables already
                present in the environment take precedence.
        """
        if env_file is not None:
            load_dotenv(env_file)
        else:
            load_dotenv()
        return cls(
            chunking=ChunkingConfig.from_env(),
            ocr=OcrConfig.from_env(),
            retrieval=RetrievalConfig.from_env(),
        )
