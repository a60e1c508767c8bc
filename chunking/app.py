from typing import Optional

from fastapi import FastAPI, File, HTTPException, UploadFile

from course_rag.settings import PipelineSettings
from extraction.exceptions import ExtractionError, UnsupportedMaterialError
from extraction.quality import is_low_quality_text

from .config import ChunkingServiceConfig
from .models import ChunkRequest, ChunkResponse, QualityRequest, QualityResponse
from .service import ChunkingService


def create_app(service: Optional[ChunkingService] = None) -> FastAPI:
    if service is None:
        settings = PipelineSettings.from_env()
        service = ChunkingService(
            ChunkingServiceConfig(chunking=settings.chunking, ocr=settings.ocr)
        )
    app = FastAPI(
        title="Chunking Service",
        version="1.0.0",
        description="Segment chunking and OCR quality gating for course materials.",
    )

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    @app.post("/chunk", response_model=ChunkResponse)
    def chunk(request: ChunkRequest) -> ChunkResponse:
        result = service.chunk_segments(request.segments)
        return ChunkResponse(chunks=result.chunks, stats=result.stats)

    @app.post("/materials", response_model=ChunkResponse)
    def chunk_material(file: UploadFile = File(...)) -> ChunkResponse:
        try:
            data = file.file.read()
            result = service.chunk_material(data, file.filename or "", file.content_type)
            return ChunkResponse(chunks=result.chunks, stats=result.stats)
        except UnsupportedMaterialError as exc:
            raise HTTPException(status_code=415, detail=str(exc)) from exc
        except ExtractionError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc

    @app.post("/ocr/quality", response_model=QualityResponse)
    def ocr_quality(request: QualityRequest) -> QualityResponse:
        return QualityResponse(low_quality=is_low_quality_text(request.text, request.confidence))

    return app


app = create_app()
