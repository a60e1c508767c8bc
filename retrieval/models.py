from typing import Optional

from pydantic import BaseModel, Field, field_validator

from extraction.models import SourceType


class RetrievedChunk(BaseModel):
    """A stored chunk returned by similarity search, most similar first."""

    id: str = Field(..., min_length=1)
    material_id: str = Field(..., min_length=1)
    material_title: str = ""
    source_type: SourceType
    source_index: int = Field(..., ge=1)
    section_title: Optional[str] = None
    text: str
    token_count: Optional[int] = Field(
        0,
        description="Stored token estimate; 0 or null when the index does not keep it",
    )
    similarity: float

    model_config = {"frozen": True}


class EmbedderHealth(BaseModel):
    """Reachability of the Ollama server and the embedding model."""

    model: str
    healthy: bool = False
    ollama_running: bool = False
    model_available: bool = False
    error: str = ""


class ContextBuildResult(BaseModel):
    context_text: str
    selected_chunks: list[RetrievedChunk] = Field(default_factory=list)
    used_tokens: int = 0
    token_budget: int = 0


class ContextRequest(BaseModel):
    candidates: list[RetrievedChunk] = Field(default_factory=list)
    token_budget: int
    per_source_cap: int


class RetrieveRequest(BaseModel):
    class_id: str = Field(..., min_length=1)
    query: str = Field(..., min_length=1)
    token_budget: Optional[int] = None

    @field_validator("query")
    @classmethod
    def _query_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("query must not be blank")
        return value
