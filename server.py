# server.py
"""HTTP API for the HAL / HAEMO-QoL-A scoring engine.

The questionnaire front end and the doctor export view call these
endpoints; the engine itself stays pure (no storage, no file writing).
"""

import uuid
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from typing import Annotated, Any, cast

from fastapi import Depends, FastAPI, HTTPException, Request, Response
from fastapi.middleware.cors import CORSMiddleware

import haemo_scoring
from haemo_scoring.config import ExportSettings, Settings, get_settings
from haemo_scoring.domain.exceptions import DomainError
from haemo_scoring.infrastructure.logging import (
    bind_context,
    get_logger,
    setup_logging,
    unbind_context,
)
from haemo_scoring.schemas import (
    AnalyzeRequest,
    ExportRequest,
    ExportResponse,
    analysis_to_dict,
)
from haemo_scoring.scoring import analyze, unanswered_questions
from haemo_scoring.services.export import ExportService

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifecycle resources."""
    settings = get_settings()
    setup_logging(settings.logging)

    app.state.settings = settings
    app.state.export_service = ExportService(settings.export)
    logger.info("Scoring API started", version=haemo_scoring.__version__)
    yield


app = FastAPI(
    title="Haemo Scoring",
    version=haemo_scoring.__version__,
    description="Scoring and export rows for HAL and HAEMO-QoL-A",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().api.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def request_context(
    request: Request,
    call_next: Callable[[Request], Awaitable[Response]],
) -> Response:
    """Bind a request id to every log event of the request."""
    request_id = request.headers.get("x-request-id") or uuid.uuid4().hex
    bind_context(request_id=request_id)
    try:
        response = await call_next(request)
    finally:
        unbind_context("request_id")
    response.headers["x-request-id"] = request_id
    return response


# --- Dependency Injection ---
def get_app_settings(request: Request) -> Settings:
    """Get initialized Settings."""
    settings = getattr(request.app.state, "settings", None)
    if settings is None:
        raise HTTPException(status_code=503, detail="Settings not initialized")
    return cast("Settings", settings)


def get_export_service(request: Request) -> ExportService:
    """Get initialized ExportService."""
    service = getattr(request.app.state, "export_service", None)
    if service is None:
        raise HTTPException(status_code=503, detail="Export service not initialized")
    return cast("ExportService", service)


# --- Endpoints ---
@app.get("/health")
async def health_check(
    app_settings: Annotated[Settings, Depends(get_app_settings)],
) -> dict[str, Any]:
    """Health check endpoint."""
    export_settings: ExportSettings = app_settings.export
    return {
        "status": "healthy",
        "version": haemo_scoring.__version__,
        "export_column_labels": export_settings.column_labels,
    }


@app.post("/analyze")
async def analyze_answers(request: AnalyzeRequest) -> dict[str, Any]:
    """Score one answer set."""
    try:
        result = analyze(request.instrument, request.answers)
    except DomainError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e

    payload = analysis_to_dict(result)
    payload["unanswered"] = unanswered_questions(request.instrument, request.answers)
    return payload


@app.post("/export/rows", response_model=ExportResponse)
async def export_rows(
    request: ExportRequest,
    export_service: Annotated[ExportService, Depends(get_export_service)],
) -> ExportResponse:
    """Build export rows for a batch of patients."""
    try:
        rows = export_service.build_rows(record.to_entity() for record in request.records)
    except DomainError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e

    logger.info("Export rows served", rows=len(rows))
    return ExportResponse(headers=export_service.headers(), rows=[list(row) for row in rows])


if __name__ == "__main__":
    import uvicorn

    api_settings = get_settings().api
    uvicorn.run("server:app", host=api_settings.host, port=api_settings.port)
