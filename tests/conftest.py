"""
Pytest fixtures for the course materials pipeline tests.
"""

import io
import uuid
from unittest.mock import MagicMock

import chromadb
import pytest
from PIL import Image

from extraction.models import SourceType
from retrieval.config import RetrievalConfig
from retrieval.models import EmbedderHealth, RetrievedChunk


def _retrieved(
    chunk_id: str,
    material_id: str,
    text: str = "Alpha",
    token_count: int | None = 4,
    similarity: float = 0.9,
    source_index: int = 1,
    material_title: str | None = None,
) -> RetrievedChunk:
    return RetrievedChunk(
        id=chunk_id,
        material_id=material_id,
        material_title=material_title or f"Doc {material_id}",
        source_type=SourceType.PAGE,
        source_index=source_index,
        text=text,
        token_count=token_count,
        similarity=similarity,
    )


@pytest.fixture
def make_retrieved():
    """Factory for RetrievedChunk objects with sensible defaults."""
    return _retrieved


@pytest.fixture
def sample_candidates():
    """Four candidates, three from one material, sorted by similarity."""
    return [
        _retrieved("c1", "m1", "Alpha", similarity=0.9, source_index=1, material_title="Doc A"),
        _retrieved("c2", "m1", "Beta", similarity=0.8, source_index=2, material_title="Doc A"),
        _retrieved("c3", "m1", "Gamma", similarity=0.7, source_index=3, material_title="Doc A"),
        _retrieved("c4", "m2", "Delta", similarity=0.6, source_index=1, material_title="Doc B"),
    ]


@pytest.fixture
def retrieval_config():
    return RetrievalConfig(match_count=5, max_per_material=2, context_token_budget=10)


@pytest.fixture
def mock_embedder():
    """Query embedder returning a fixed two-dimensional vector."""
    embedder = MagicMock()
    embedder.embed.return_value = [0.1, 0.2]
    embedder.health_check.return_value = EmbedderHealth(
        model="nomic-embed-text",
        healthy=True,
        ollama_running=True,
        model_available=True,
    )
    return embedder


@pytest.fixture
def mock_index(sample_candidates):
    """Similarity search returning the sample candidates."""
    index = MagicMock()
    index.search.return_value = sample_candidates
    return index


@pytest.fixture
def chroma_client():
    return chromadb.Client()


@pytest.fixture
def collection_name():
    return f"test_{uuid.uuid4().hex[:12]}"


@pytest.fixture
def png_bytes():
    """A small blank PNG image."""
    buffer = io.BytesIO()
    Image.new("RGB", (40, 20), color="white").save(buffer, format="PNG")
    return buffer.getvalue()
