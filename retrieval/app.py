from typing import Optional

from fastapi import FastAPI, HTTPException

from course_rag.settings import PipelineSettings

from .context_builder import ContextBudgetAllocator
from .exceptions import RetrievalError
from .models import ContextBuildResult, ContextRequest, RetrieveRequest
from .service import MaterialRetrievalService


def create_app(service: Optional[MaterialRetrievalService] = None) -> FastAPI:
    """
    Build the retrieval API.

    Run with ``uvicorn retrieval.app:create_app --factory``.
    """
    if service is None:
        settings = PipelineSettings.from_env()
        service = MaterialRetrievalService.from_config(settings.retrieval)

    app = FastAPI(
        title="Retrieval Service",
        version="1.0.0",
        description="Token-budgeted material context for generation requests.",
    )

    @app.get("/health")
    def health() -> dict:
        embedder = service.embedder_health()
        return {
            "status": "ok" if embedder.healthy else "degraded",
            "embedder": embedder.model_dump(),
        }

    @app.post("/context", response_model=ContextBuildResult)
    def context(request: ContextRequest) -> ContextBuildResult:
        allocator = ContextBudgetAllocator(request.token_budget, request.per_source_cap)
        return allocator.build(request.candidates)

    @app.post("/retrieve", response_model=ContextBuildResult)
    def retrieve(request: RetrieveRequest) -> ContextBuildResult:
        try:
            return service.retrieve(request.class_id, request.query, request.token_budget)
        except RetrievalError as exc:
            raise HTTPException(status_code=502, detail=str(exc)) from exc
        except ValueError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        except Exception as exc:
            raise HTTPException(status_code=500, detail=str(exc)) from exc

    return app
