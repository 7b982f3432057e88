"""
FastAPI application entry point.

Wires the scoring services to HTTP: document submission and job polling
under ``/api/v1/detect``, the scoring / segmentation endpoints, and the
read-only dashboard and investigation views.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from dataclasses import asdict, is_dataclass

from fastapi import BackgroundTasks, Depends, FastAPI, File, HTTPException, Query, Request, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from fraudscope.config import ALLOWED_CONTENT_TYPES, MAX_UPLOAD_BYTES
from fraudscope.exceptions import ScoringError
from fraudscope.logger import get_logger
from fraudscope.models import AnalysisJob, AnalysisResult, HighlightedSegment, ModelVote
from fraudscope.schemas import (
    AlertsResponse,
    AnalysisResultSchema,
    ClassifyRequest,
    ClassifyResponse,
    DashboardResponse,
    HeatmapResponse,
    InvestigationResponse,
    JobStatusResponse,
    ScoreRequest,
    ScoreResponse,
    SegmentsRequest,
    SegmentsResponse,
    UploadResponse,
)
from fraudscope.services import (
    composite_scorer,
    dashboard_engine,
    investigation,
    repository,
    risk_classifier,
    segment_builder,
)
from fraudscope.services.job_store import InMemoryJobStore, JobStore, progress_step_label

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("service_started", max_upload_bytes=MAX_UPLOAD_BYTES)
    yield
    logger.info("service_stopped")


app = FastAPI(
    title="Fraud Score Review Service",
    version="1.0.0",
    lifespan=lifespan,
)

# -- CORS (allow all origins for local / dev usage) -------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


# -- Stores ------------------------------------------------------------------

_job_store = InMemoryJobStore()
_repository = repository.DemoRepository()


def get_job_store() -> JobStore:
    return _job_store


def get_repository() -> repository.DemoRepository:
    return _repository


# -- Errors ------------------------------------------------------------------

@app.exception_handler(ScoringError)
async def scoring_error_handler(request: Request, exc: ScoringError):
    logger.warning(
        "scoring_input_rejected", path=request.url.path, code=exc.code, detail=str(exc)
    )
    return JSONResponse(status_code=422, content={"error": exc.code, "detail": str(exc)})


# -- Helpers -----------------------------------------------------------------

def _plain(value):
    """Recursively turn dataclasses into dicts so schemas can validate them."""
    if is_dataclass(value) and not isinstance(value, type):
        return asdict(value)
    if isinstance(value, dict):
        return {k: _plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    return value


def _result_schema(result: AnalysisResult) -> AnalysisResultSchema:
    score = composite_scorer.composite_score(result.model_votes)
    return AnalysisResultSchema(
        id=result.id,
        source_text=result.source_text,
        composite_score=score,
        risk_level=risk_classifier.classify(score),
        model_votes=[_plain(v) for v in result.model_votes],
        timestamp=result.timestamp,
        metadata=_plain(result.metadata),
    )


def _run_analysis(store: JobStore, repo: repository.DemoRepository, job: AnalysisJob) -> None:
    # No inference backend: every upload resolves to the sample analysis
    try:
        analysis = repository.sample_analysis(f"analysis_{job.job_id}", file_type=job.content_type)
        repo.add_analysis(analysis)
        store.complete(job.job_id, analysis)
    except Exception as exc:
        logger.exception("analysis_failed", job_id=job.job_id)
        store.fail(job.job_id, str(exc))


def _reject_oversized(filename: str, size: int) -> None:
    logger.info("upload_rejected", filename=filename, size=size)
    raise HTTPException(
        status_code=400,
        detail=f"File size exceeds {MAX_UPLOAD_BYTES // (1024 * 1024)}MB limit",
    )


# -- Jobs --------------------------------------------------------------------

@app.post("/api/v1/detect", response_model=UploadResponse, status_code=202)
async def submit_document(
    background_tasks: BackgroundTasks,
    file: UploadFile | None = File(None),
    store: JobStore = Depends(get_job_store),
    repo: repository.DemoRepository = Depends(get_repository),
):
    """Accept a document upload and queue it for analysis."""
    if file is None:
        raise HTTPException(status_code=400, detail="No file provided")

    filename = file.filename or ""
    content_type = file.content_type or ""

    if content_type not in ALLOWED_CONTENT_TYPES:
        logger.info("upload_rejected", filename=filename, content_type=content_type)
        raise HTTPException(
            status_code=400,
            detail="Invalid file type. Only TXT, PDF, and DOCX files are supported.",
        )

    # Reject on the size reported by the multipart parser before buffering
    if file.size is not None and file.size > MAX_UPLOAD_BYTES:
        _reject_oversized(filename, file.size)

    content = await file.read()
    if len(content) > MAX_UPLOAD_BYTES:
        _reject_oversized(filename, len(content))

    job = store.create(filename, content_type, len(content))
    background_tasks.add_task(_run_analysis, store, repo, job)

    return UploadResponse(
        job_id=job.job_id,
        status=job.status,
        message="File received and queued for analysis",
        timestamp=job.created_at,
    )


@app.get("/api/v1/detect", response_model=JobStatusResponse)
async def job_status(
    job_id: str | None = Query(None, alias="jobId"),
    store: JobStore = Depends(get_job_store),
):
    """Poll a job; the analysis result is included once it has completed."""
    if not job_id:
        raise HTTPException(status_code=400, detail="Job ID is required")

    job = store.get(job_id)
    if job is None:
        raise HTTPException(status_code=404, detail=f"Unknown job: {job_id}")

    return JobStatusResponse(
        job_id=job.job_id,
        status=job.status,
        progress=job.progress,
        current_step=progress_step_label(job.progress),
        result=_result_schema(job.result) if job.result is not None else None,
        error=job.error,
    )


# -- Scoring -----------------------------------------------------------------

@app.post("/api/v1/score", response_model=ScoreResponse)
async def score_votes(payload: ScoreRequest):
    """Weighted-mean composite score of the submitted model votes."""
    votes = [ModelVote(v.model_name, v.score, v.weight) for v in payload.votes]
    score = composite_scorer.composite_score(votes)
    return ScoreResponse(composite_score=score, risk_level=risk_classifier.classify(score))


@app.post("/api/v1/classify", response_model=ClassifyResponse)
async def classify_score(payload: ClassifyRequest):
    return ClassifyResponse(
        score=payload.score, risk_level=risk_classifier.classify(payload.score)
    )


@app.post("/api/v1/segments", response_model=SegmentsResponse)
async def segment_text(payload: SegmentsRequest):
    """Split source text into plain and highlighted segments."""
    highlights = [
        HighlightedSegment(
            text=h.text,
            start_index=h.start_index,
            end_index=h.end_index,
            confidence=h.confidence,
            reason=h.reason,
        )
        for h in payload.highlights
    ]
    segments = segment_builder.build_segments(payload.source_text, highlights)
    return SegmentsResponse.model_validate(
        {"segments": _plain(segment_builder.annotate(segments))}
    )


# -- Views -------------------------------------------------------------------

@app.get("/api/v1/investigations/{analysis_id}", response_model=InvestigationResponse)
async def get_investigation(
    analysis_id: str,
    repo: repository.DemoRepository = Depends(get_repository),
):
    analysis = repo.get_analysis(analysis_id)
    if analysis is None:
        raise HTTPException(status_code=404, detail=f"Unknown analysis: {analysis_id}")
    report = investigation.build_investigation(analysis)
    return InvestigationResponse.model_validate(_plain(report))


@app.get("/api/v1/dashboard", response_model=DashboardResponse)
async def dashboard(repo: repository.DemoRepository = Depends(get_repository)):
    return DashboardResponse.model_validate(
        {
            "stats": repo.dashboard_stats(),
            "alert_summary": dashboard_engine.summarize_alerts(repo.list_alerts()),
        }
    )


@app.get("/api/v1/alerts", response_model=AlertsResponse)
async def recent_alerts(repo: repository.DemoRepository = Depends(get_repository)):
    return AlertsResponse.model_validate(
        {"alerts": dashboard_engine.annotate_alerts(repo.list_alerts())}
    )


@app.get("/api/v1/heatmap", response_model=HeatmapResponse)
async def risk_heatmap(repo: repository.DemoRepository = Depends(get_repository)):
    return HeatmapResponse.model_validate(
        dashboard_engine.build_heatmap(repo.heatmap_observations())
    )


@app.get("/health", include_in_schema=False)
async def health():
    return {"status": "ok"}
