import logging
from typing import Optional, Protocol

from .config import RetrievalConfig
from .context_builder import ContextBudgetAllocator
from .embedder import OllamaEmbedder
from .exceptions import EmbeddingError
from .models import ContextBuildResult, EmbedderHealth, RetrievedChunk
from .vector_index import ChromaMaterialIndex

logger = logging.getLogger(__name__)


class QueryEmbedder(Protocol):
    def embed(self, text: str) -> list[float]: ...

    def health_check(self) -> EmbedderHealth: ...


class SimilaritySearch(Protocol):
    def search(
        self, query_embedding: list[float], class_id: str, match_count: int
    ) -> list[RetrievedChunk]: ...


class MaterialRetrievalService:
    """
    Builds the material context for one generation request.

    Embedding and search failures propagate to the caller unchanged.
    """

    def __init__(
        self,
        config: RetrievalConfig,
        embedder: QueryEmbedder,
        index: SimilaritySearch,
    ):
        self.config = config
        self.embedder = embedder
        self.index = index

    @classmethod
    def from_config(cls, config: RetrievalConfig) -> "MaterialRetrievalService":
        return cls(
            config,
            OllamaEmbedder(model=config.embedding_model, base_url=config.ollama_base_url),
            ChromaMaterialIndex(
                persist_directory=config.chroma_dir,
                collection_name=config.collection_name,
            ),
        )

    def embedder_health(self) -> EmbedderHealth:
        return self.embedder.health_check()

    def retrieve_candidates(self, class_id: str, query: str) -> list[RetrievedChunk]:
        embedding = self.embedder.embed(query)
        if not embedding:
            raise EmbeddingError("Embedding response contained no vector")
        return self.index.search(embedding, class_id, self.config.match_count)

    def retrieve(
        self,
        class_id: str,
        query: str,
        token_budget: Optional[int] = None,
    ) -> ContextBuildResult:
        budget = self.config.context_token_budget if token_budget is None else token_budget
        candidates = self.retrieve_candidates(class_id, query)
        allocator = ContextBudgetAllocator(budget, self.config.max_per_material)
        result = allocator.build(candidates)
        logger.info(
            f"Selected {len(result.selected_chunks)} of {len(candidates)} candidate(s) "
            f"for class {class_id} ({result.used_tokens}/{budget} tokens)"
        )
        return result

    def retrieve_context(
        self,
        class_id: str,
        query: str,
        token_budget: Optional[int] = None,
    ) -> str:
        """Context text for a prompt; "" means no grounding is available."""
        return self.retrieve(class_id, query, token_budget).context_text
