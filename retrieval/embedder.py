import logging

import ollama

from .exceptions import EmbeddingError
from .models import EmbedderHealth

logger = logging.getLogger(__name__)


class OllamaEmbedder:
    """Embeds retrieval queries with a local Ollama model."""

    def __init__(
        self,
        model: str = "nomic-embed-text",
        base_url: str = "http://localhost:11434",
    ):
        self.model = model
        self.base_url = base_url
        self._client = ollama.Client(host=base_url)

    def embed(self, text: str) -> list[float]:
        """
        Embed one query.

        Raises:
            ValueError: If the text is blank.
            EmbeddingError: If Ollama fails or returns no vector.
        """
        if not text or not text.strip():
            raise ValueError("Cannot embed empty text")
        embeddings = self._request_embeddings(text)
        if not embeddings or not embeddings[0]:
            raise EmbeddingError("Embedding response contained no vector", model=self.model)
        return list(embeddings[0])

    def _request_embeddings(self, text: str) -> list:
        try:
            response = self._client.embed(model=self.model, input=text)
            return list(response["embeddings"])
        except ollama.ResponseError as e:
            raise EmbeddingError(
                "Ollama embedding failed", model=self.model, details=str(e)
            ) from e
        except Exception as e:
            if "Connection" in type(e).__name__ or "refused" in str(e).lower():
                raise EmbeddingError(
                    f"Cannot connect to Ollama at {self.base_url}",
                    model=self.model,
                    details="Is Ollama running? Start it with: ollama serve",
                ) from e
            raise EmbeddingError("Embedding generation failed", model=self.model, details=str(e)) from e

    def health_check(self) -> EmbedderHealth:
        """Report whether Ollama answers and the embedding model is pulled."""
        try:
            listed = self._client.list()
        except Exception as e:
            logger.warning(f"Ollama health check failed: {e}")
            return EmbedderHealth(
                model=self.model,
                error=f"Cannot reach Ollama at {self.base_url}: {e}",
            )

        names = [m.model for m in listed.models]
        if not any(name.startswith(self.model) for name in names):
            return EmbedderHealth(
                model=self.model,
                ollama_running=True,
                error=f"Embedding model not pulled; run: ollama pull {self.model}",
            )
        return EmbedderHealth(
            model=self.model,
            healthy=True,
            ollama_running=True,
            model_available=True,
        )
