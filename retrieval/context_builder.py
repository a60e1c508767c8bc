from __future__ import annotations

from typing import Sequence

from chunking.token_counter import count_tokens

from .config import RetrievalConfig
from .models import ContextBuildResult, RetrievedChunk

CONTEXT_SEPARATOR = "\n\n---\n\n"


def effective_token_count(chunk: RetrievedChunk) -> int:
    """Stored token count when present, otherwise the estimate from the text."""
    if chunk.token_count and chunk.token_count > 0:
        return chunk.token_count
    return count_tokens(chunk.text)


def select_chunks(
    candidates: Sequence[RetrievedChunk],
    token_budget: int,
    per_source_cap: int,
) -> list[RetrievedChunk]:
    """
    Pick chunks for a prompt context in one greedy pass.

    Candidates are walked in the order given (most similar first). A chunk is
    taken when its material is still under ``per_source_cap`` and it fits in
    what is left of ``token_budget``. A chunk that does not fit is skipped and
    never revisited; later, smaller chunks may still be taken.
    """
    selected: list[RetrievedChunk] = []
    per_material: dict[str, int] = {}
    used = 0

    for chunk in candidates:
        if per_material.get(chunk.material_id, 0) >= per_source_cap:
            continue
        tokens = effective_token_count(chunk)
        if used + tokens > token_budget:
            continue
        selected.append(chunk)
        per_material[chunk.material_id] = per_material.get(chunk.material_id, 0) + 1
        used += tokens

    return selected


def _chunk_block(idx: int, chunk: RetrievedChunk) -> str:
    header = f"Source {idx} | {chunk.material_title} | {chunk.source_type.value} {chunk.source_index}"
    return f"{header}\n{chunk.text}"


def build_context(selected: Sequence[RetrievedChunk]) -> str:
    """Render selected chunks as numbered source blocks; empty selection gives ""."""
    return CONTEXT_SEPARATOR.join(
        _chunk_block(idx, chunk) for idx, chunk in enumerate(selected, start=1)
    )


class ContextBudgetAllocator:
    def __init__(self, token_budget: int, per_source_cap: int):
        self.token_budget = token_budget
        self.per_source_cap = per_source_cap

    @classmethod
    def from_config(cls, config: RetrievalConfig) -> "ContextBudgetAllocator":
        return cls(config.context_token_budget, config.max_per_material)

    def select(self, candidates: Sequence[RetrievedChunk]) -> list[RetrievedChunk]:
        return select_chunks(candidates, self.token_budget, self.per_source_cap)

    def assemble(self, selected: Sequence[RetrievedChunk]) -> str:
        return build_context(selected)

    def build(self, candidates: Sequence[RetrievedChunk]) -> ContextBuildResult:
        selected = self.select(candidates)
        return ContextBuildResult(
            context_text=self.assemble(selected),
            selected_chunks=selected,
            used_tokens=sum(effective_token_count(c) for c in selected),
            token_budget=self.token_budget,
        )
