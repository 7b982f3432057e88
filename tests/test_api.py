"""
Pytest tests for the HTTP layer (FastAPI TestClient).

Stores are replaced per test through dependency overrides in conftest.
"""

from __future__ import annotations

import pytest
from starlette.datastructures import UploadFile as StarletteUploadFile

from fraudscope.config import MAX_UPLOAD_BYTES
from fraudscope.services.repository import DEMO_ANALYSIS_ID, SAMPLE_TEXT, DemoRepository

DOCX = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


def _upload(client, name="memo.txt", body=b"Dear customer, verify now.", content_type="text/plain"):
    return client.post("/api/v1/detect", files={"file": (name, body, content_type)})


# -- Jobs --------------------------------------------------------------------

def test_upload_returns_pending_job(client, job_store):
    r = _upload(client)
    assert r.status_code == 202
    data = r.json()
    assert data["jobId"].startswith("job_")
    assert data["status"] == "pending"
    assert data["message"] == "File received and queued for analysis"
    assert "timestamp" in data
    assert job_store.get(data["jobId"]) is not None


@pytest.mark.parametrize(
    "name,content_type",
    [("memo.docx", DOCX), ("memo.pdf", "application/pdf"), ("notes.md", "text/plain")],
)
def test_upload_accepts_supported_content_types(client, name, content_type):
    r = _upload(client, name=name, content_type=content_type)
    assert r.status_code == 202


def test_upload_without_file(client):
    r = client.post("/api/v1/detect")
    assert r.status_code == 400
    assert r.json()["detail"] == "No file provided"


@pytest.mark.parametrize(
    "name,content_type",
    [("photo.png", "image/png"), ("memo.txt", "application/octet-stream")],
)
def test_upload_rejects_unsupported_type(client, name, content_type):
    r = _upload(client, name=name, content_type=content_type)
    assert r.status_code == 400
    assert "Only TXT, PDF, and DOCX" in r.json()["detail"]


def test_upload_rejects_oversized_file(client):
    r = _upload(client, body=b"x" * (MAX_UPLOAD_BYTES + 1))
    assert r.status_code == 400
    assert "exceeds" in r.json()["detail"]


def test_oversized_file_rejected_before_it_is_read(client, monkeypatch):
    """The reported part size is checked before the body is buffered."""

    async def fail_read(self, size=-1):
        raise AssertionError("oversized upload was read")

    monkeypatch.setattr(StarletteUploadFile, "read", fail_read)
    r = _upload(client, body=b"x" * (MAX_UPLOAD_BYTES + 1))
    assert r.status_code == 400
    assert "exceeds" in r.json()["detail"]


def test_failed_analysis_marks_job_failed(client):
    """An error in the background analysis leaves the job failed, not pending."""
    from fraudscope.main import app, get_repository

    class BrokenRepository(DemoRepository):
        def add_analysis(self, analysis):
            raise RuntimeError("analysis store unavailable")

    broken = BrokenRepository()
    app.dependency_overrides[get_repository] = lambda: broken
    job_id = _upload(client).json()["jobId"]

    data = client.get("/api/v1/detect", params={"jobId": job_id}).json()
    assert data["status"] == "failed"
    assert data["error"] == "analysis store unavailable"
    assert data["result"] is None


def test_job_completes_with_result(client):
    job_id = _upload(client, name="memo.pdf", content_type="application/pdf").json()["jobId"]

    r = client.get("/api/v1/detect", params={"jobId": job_id})
    assert r.status_code == 200
    data = r.json()
    assert data["jobId"] == job_id
    assert data["status"] == "completed"
    assert data["progress"] == 100
    assert data["currentStep"] == "Analysis complete!"

    result = data["result"]
    assert result["id"] == f"analysis_{job_id}"
    assert result["compositeScore"] == pytest.approx(2.995 / 3.5)
    assert result["riskLevel"] == "critical"
    assert result["metadata"] == {"fileType": "application/pdf", "wordCount": len(SAMPLE_TEXT.split())}
    assert [v["modelName"] for v in result["modelVotes"]] == [
        "OpenAI GPT-4 Classifier",
        "Anthropic Claude Detector",
        "Specialized Fraud Detector",
    ]


def test_completed_job_result_is_investigable(client):
    job_id = _upload(client).json()["jobId"]
    r = client.get(f"/api/v1/investigations/analysis_{job_id}")
    assert r.status_code == 200
    assert r.json()["id"] == f"analysis_{job_id}"


def test_job_status_requires_job_id(client):
    r = client.get("/api/v1/detect")
    assert r.status_code == 400
    assert r.json()["detail"] == "Job ID is required"


def test_unknown_job_is_404(client):
    r = client.get("/api/v1/detect", params={"jobId": "job_0_nothere00"})
    assert r.status_code == 404


# -- Scoring -----------------------------------------------------------------

def test_score_votes(client):
    r = client.post(
        "/api/v1/score",
        json={"votes": [
            {"modelName": "a", "score": 0.5, "weight": 1},
            {"modelName": "b", "score": 1.0, "weight": 1},
        ]},
    )
    assert r.status_code == 200
    assert r.json() == {"compositeScore": 0.75, "riskLevel": "high"}


def test_score_empty_votes_is_422_with_error_code(client):
    r = client.post("/api/v1/score", json={"votes": []})
    assert r.status_code == 422
    assert r.json() == {"error": "invalid_input", "detail": "empty vote set"}


def test_score_rejects_non_positive_weight(client):
    r = client.post("/api/v1/score", json={"votes": [{"modelName": "a", "score": 0.5, "weight": 0}]})
    assert r.status_code == 422


def test_score_huge_weights(client):
    r = client.post(
        "/api/v1/score",
        json={"votes": [
            {"modelName": "a", "score": 0.5, "weight": 1e308},
            {"modelName": "b", "score": 1.0, "weight": 1e308},
        ]},
    )
    assert r.status_code == 200
    assert r.json()["compositeScore"] == pytest.approx(0.75)


@pytest.mark.parametrize("weight", ["Infinity", "NaN"])
def test_score_rejects_non_finite_weight(client, weight):
    body = '{"votes": [{"modelName": "a", "score": 0.5, "weight": %s}]}' % weight
    r = client.post("/api/v1/score", content=body, headers={"content-type": "application/json"})
    assert r.status_code == 422


def test_classify_rejects_nan(client):
    r = client.post("/api/v1/classify", content='{"score": NaN}', headers={"content-type": "application/json"})
    assert r.status_code == 422


@pytest.mark.parametrize("score,level", [(0.2, "low"), (0.8, "critical"), (-1.0, "safe")])
def test_classify(client, score, level):
    r = client.post("/api/v1/classify", json={"score": score})
    assert r.status_code == 200
    assert r.json() == {"score": score, "riskLevel": level}


# -- Segments ----------------------------------------------------------------

def test_segments_split_source(client):
    r = client.post(
        "/api/v1/segments",
        json={
            "sourceText": "hello world",
            "highlights": [
                {"text": "world", "startIndex": 6, "endIndex": 11, "confidence": 0.9, "reason": "x"}
            ],
        },
    )
    assert r.status_code == 200
    segments = r.json()["segments"]
    assert segments[0] == {"text": "hello ", "highlight": None, "riskLevel": None, "tone": None}
    assert segments[1]["text"] == "world"
    assert segments[1]["highlight"]["startIndex"] == 6
    assert segments[1]["riskLevel"] == "critical"
    assert segments[1]["tone"] == "danger"


def test_segments_without_highlights(client):
    r = client.post("/api/v1/segments", json={"sourceText": "hello world"})
    assert r.json()["segments"] == [
        {"text": "hello world", "highlight": None, "riskLevel": None, "tone": None}
    ]


@pytest.mark.parametrize(
    "highlights,code",
    [
        ([{"text": "world", "startIndex": 6, "endIndex": 12, "confidence": 0.5}], "out_of_range"),
        ([{"text": "earth", "startIndex": 6, "endIndex": 11, "confidence": 0.5}], "text_mismatch"),
        (
            [
                {"text": "hello wo", "startIndex": 0, "endIndex": 8, "confidence": 0.5},
                {"text": "o world", "startIndex": 4, "endIndex": 11, "confidence": 0.5},
            ],
            "overlap",
        ),
    ],
)
def test_segments_reject_bad_spans(client, highlights, code):
    r = client.post("/api/v1/segments", json={"sourceText": "hello world", "highlights": highlights})
    assert r.status_code == 422
    assert r.json()["error"] == code


# -- Views -------------------------------------------------------------------

def test_demo_investigation(client):
    r = client.get(f"/api/v1/investigations/{DEMO_ANALYSIS_ID}")
    assert r.status_code == 200
    data = r.json()
    assert data["riskLevel"] == "critical"
    assert data["summary"]["fraudConfidence"] == "85.6%"
    assert data["summary"]["suspiciousSegments"] == 5
    assert data["breakdown"]["modelCount"] == 3
    assert data["breakdown"]["votes"][2]["weightedScore"] == pytest.approx(139.5)
    assert "".join(s["text"] for s in data["segments"]) == SAMPLE_TEXT
    assert len(data["highlights"]) == 5


def test_unknown_investigation_is_404(client):
    assert client.get("/api/v1/investigations/analysis_missing").status_code == 404


def test_dashboard(client):
    data = client.get("/api/v1/dashboard").json()
    assert len(data["stats"]) == 4
    summary = data["alertSummary"]
    assert summary["total"] == 5
    assert summary["byStatus"] == {"new": 2, "investigating": 1, "false_positive": 1, "resolved": 1}
    assert summary["byRiskLevel"] == {"critical": 3, "high": 1, "low": 1}


def test_alerts_newest_first(client):
    alerts = client.get("/api/v1/alerts").json()["alerts"]
    assert [a["id"] for a in alerts] == ["alert_001", "alert_002", "alert_003", "alert_004", "alert_005"]
    assert alerts[0]["riskLevel"] == "critical"
    assert alerts[3]["statusLabel"] == "False Positive"


def test_heatmap(client):
    data = client.get("/api/v1/heatmap").json()
    assert len(data["cells"]) == len(data["days"]) * len(data["hours"])
    populated = [c for c in data["cells"] if c["count"]]
    assert len(populated) == 15
    thu9 = next(c for c in populated if c["day"] == "Thu" and c["hour"] == 9)
    assert thu9["riskLevel"] == "critical"


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}
