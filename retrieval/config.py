from dataclasses import dataclass

from course_rag.env import env_int, env_str


@dataclass(frozen=True)
class RetrievalConfig:
    match_count: int = 12
    max_per_material: int = 4
    context_token_budget: int = 2400
    embedding_model: str = "nomic-embed-text"
    ollama_base_url: str = "http://localhost:11434"
    chroma_dir: str = "data/retrieval/chroma"
    collection_name: str = "material_chunks"

    @classmethod
    def from_env(cls) -> "RetrievalConfig":
        return cls(
            match_count=env_int("RAG_MATCH_COUNT", cls.match_count),
            max_per_material=env_int("RAG_MAX_PER_MATERIAL", cls.max_per_material),
            context_token_budget=env_int("RAG_CONTEXT_TOKENS", cls.context_token_budget),
            embedding_model=env_str("EMBEDDING_MODEL", cls.embedding_model),
            ollama_base_url=env_str("OLLAMA_BASE_URL", cls.ollama_base_url),
            chroma_dir=env_str("RAG_CHROMA_DIR", cls.chroma_dir),
            collection_name=env_str("RAG_COLLECTION", cls.collection_name),
        )
