from dataclasses import dataclass, field

from extraction.config import OcrConfig

from .models import ChunkingConfig


@dataclass(frozen=True)
class ChunkingServiceConfig:
    chunking: ChunkingConfig = field(default_factory=ChunkingConfig)
    ocr: OcrConfig = field(default_factory=OcrConfig)
    ocr_enabled: bool = True

    @classmethod
    def from_env(cls) -> "ChunkingServiceConfig":
        return cls(chunking=ChunkingConfig.from_env(), ocr=OcrConfig.from_env())
