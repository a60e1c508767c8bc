"""Tests for retrieval.embedder: OllamaEmbedder."""

import ollama
import pytest
from unittest.mock import MagicMock, patch

from retrieval.embedder import OllamaEmbedder
from retrieval.exceptions import EmbeddingError


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

FAKE_EMBEDDING = [0.1] * 768  # 768-dimensional fake embedding


@pytest.fixture
def mock_client():
    """Create a mock Ollama client."""
    with patch("retrieval.embedder.ollama.Client") as MockClient:
        client = MockClient.return_value
        client.embed.return_value = {
            "embeddings": [FAKE_EMBEDDING],
        }
        client.list.return_value = MagicMock(
            models=[
                MagicMock(model="nomic-embed-text:latest"),
                MagicMock(model="llama3:latest"),
            ]
        )
        yield client


@pytest.fixture
def embedder(mock_client):
    """Create an embedder with mocked Ollama client."""
    return OllamaEmbedder(model="nomic-embed-text")


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------

class TestEmbed:
    def test_single_text(self, embedder, mock_client):
        result = embedder.embed("What is osmosis?")
        assert result == FAKE_EMBEDDING
        mock_client.embed.assert_called_once_with(
            model="nomic-embed-text", input="What is osmosis?"
        )

    def test_empty_text_raises(self, embedder):
        with pytest.raises(ValueError, match="empty"):
            embedder.embed("")

    def test_whitespace_only_raises(self, embedder):
        with pytest.raises(ValueError, match="empty"):
            embedder.embed("   ")

    def test_no_vector_returned(self, embedder, mock_client):
        mock_client.embed.return_value = {"embeddings": []}
        with pytest.raises(EmbeddingError, match="no vector"):
            embedder.embed("Test")

    def test_connection_error(self, embedder, mock_client):
        mock_client.embed.side_effect = ConnectionError("refused")
        with pytest.raises(EmbeddingError, match="Cannot connect to Ollama"):
            embedder.embed("Test")

    def test_response_error(self, embedder, mock_client):
        mock_client.embed.side_effect = ollama.ResponseError("model not found", 404)
        with pytest.raises(EmbeddingError, match=r"\[nomic-embed-text\]") as exc_info:
            embedder.embed("Test")
        assert exc_info.value.model == "nomic-embed-text"


class TestHealthCheck:
    def test_healthy(self, embedder):
        result = embedder.health_check()
        assert result.healthy is True
        assert result.ollama_running is True
        assert result.model_available is True
        assert result.error == ""

    def test_model_missing(self, mock_client):
        embedder = OllamaEmbedder(model="mxbai-embed-large")
        result = embedder.health_check()
        assert result.healthy is False
        assert result.ollama_running is True
        assert result.model_available is False
        assert "ollama pull mxbai-embed-large" in result.error

    def test_ollama_down(self, embedder, mock_client):
        mock_client.list.side_effect = ConnectionError("refused")
        result = embedder.health_check()
        assert result.healthy is False
        assert result.ollama_running is False
        assert "Cannot reach Ollama" in result.error
