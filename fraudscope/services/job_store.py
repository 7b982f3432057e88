"""
Analysis job store.

Tracks uploaded documents from submission until their analysis result is
attached.  ``JobStore`` is the interface the HTTP layer depends on;
``InMemoryJobStore`` keeps jobs in a process-local dict.
"""

from __future__ import annotations

import secrets
import string
import threading
import time
from dataclasses import replace
from datetime import datetime, timezone
from typing import Protocol

from fraudscope.config import PROGRESS_STEPS
from fraudscope.logger import get_logger
from fraudscope.models import AnalysisJob, AnalysisResult

logger = get_logger(__name__)

_ID_ALPHABET = string.digits + string.ascii_lowercase


def new_job_id() -> str:
    """``job_<epoch millis>_<9 base36 chars>``."""
    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(9))
    return f"job_{int(time.time() * 1000)}_{suffix}"


def progress_step_label(progress: int) -> str:
    """Label of the highest progress step reached by *progress*."""
    for threshold, label in reversed(PROGRESS_STEPS):
        if progress >= threshold:
            return label
    return PROGRESS_STEPS[0][1]


class JobStore(Protocol):
    def create(self, filename: str, content_type: str, size: int) -> AnalysisJob: ...

    def get(self, job_id: str) -> AnalysisJob | None: ...

    def complete(self, job_id: str, result: AnalysisResult) -> AnalysisJob: ...

    def fail(self, job_id: str, error: str) -> AnalysisJob: ...


class InMemoryJobStore:
    def __init__(self) -> None:
        self._jobs: dict[str, AnalysisJob] = {}
        self._lock = threading.Lock()

    def create(self, filename: str, content_type: str, size: int) -> AnalysisJob:
        job = AnalysisJob(
            job_id=new_job_id(),
            status="pending",
            progress=0,
            filename=filename,
            content_type=content_type,
            size=size,
            created_at=datetime.now(timezone.utc),
        )
        with self._lock:
            self._jobs[job.job_id] = job
        logger.info("job_created", job_id=job.job_id, filename=filename, size=size)
        return job

    def get(self, job_id: str) -> AnalysisJob | None:
        with self._lock:
            return self._jobs.get(job_id)

    def _update(self, job_id: str, **changes) -> AnalysisJob:
        with self._lock:
            job = self._jobs.get(job_id)
            if job is None:
                raise KeyError(job_id)
            job = replace(job, **changes)
            self._jobs[job_id] = job
        return job

    def complete(self, job_id: str, result: AnalysisResult) -> AnalysisJob:
        job = self._update(job_id, status="completed", progress=100, result=result)
        logger.info("job_completed", job_id=job_id, analysis_id=result.id)
        return job

    def fail(self, job_id: str, error: str) -> AnalysisJob:
        job = self._update(job_id, status="failed", error=error)
        logger.warning("job_failed", job_id=job_id, error=error)
        return job
