import logging
from typing import Any, Optional

import chromadb

from extraction.models import SourceType

from .exceptions import SimilaritySearchError
from .models import RetrievedChunk

logger = logging.getLogger(__name__)


class ChromaMaterialIndex:
    """
    Read side of the material chunk index.

    Each stored chunk carries ``class_id``, ``material_id``, ``material_title``,
    ``source_type``, ``source_index``, ``section_title`` and ``token_count``
    metadata. Writing chunks is the ingestion pipeline's job.
    """

    def __init__(
        self,
        persist_directory: str,
        collection_name: str,
        chroma_client: Optional[chromadb.ClientAPI] = None,
    ):
        self._client = chroma_client or chromadb.PersistentClient(path=persist_directory)
        self._collection = self._client.get_or_create_collection(
            name=collection_name,
            metadata={"hnsw:space": "cosine"},
        )

    def search(
        self,
        query_embedding: list[float],
        class_id: str,
        match_count: int,
    ) -> list[RetrievedChunk]:
        """Return up to ``match_count`` chunks of one class, most similar first."""
        if match_count <= 0:
            return []
        try:
            results = self._collection.query(
                query_embeddings=[query_embedding],
                n_results=match_count,
                where={"class_id": class_id},
                include=["documents", "metadatas", "distances"],
            )
        except Exception as exc:
            raise SimilaritySearchError("Similarity search failed", details=str(exc)) from exc

        hits: list[RetrievedChunk] = []
        if not results["ids"] or not results["ids"][0]:
            return hits
        for idx, chunk_id in enumerate(results["ids"][0]):
            distance = results["distances"][0][idx]
            metadata = results["metadatas"][0][idx] or {}
            hits.append(self._to_chunk(
                chunk_id,
                results["documents"][0][idx] or "",
                metadata,
                similarity=1 - float(distance),
            ))

        hits.sort(key=lambda hit: hit.similarity, reverse=True)
        logger.debug(f"Similarity search for class {class_id} returned {len(hits)} hit(s)")
        return hits

    @staticmethod
    def _to_chunk(
        chunk_id: str,
        text: str,
        metadata: dict[str, Any],
        similarity: float,
    ) -> RetrievedChunk:
        return RetrievedChunk(
            id=chunk_id,
            material_id=str(metadata.get("material_id", "")),
            material_title=str(metadata.get("material_title", "")),
            source_type=SourceType(metadata.get("source_type", SourceType.OTHER.value)),
            source_index=int(metadata.get("source_index", 1)),
            section_title=metadata.get("section_title") or None,
            text=text,
            token_count=int(metadata.get("token_count", 0) or 0),
            similarity=similarity,
        )
