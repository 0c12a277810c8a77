"""Tests for the raw PCM HTTP endpoints."""

import numpy as np

from tests.conftest import generate_click_track


def _pcm(audio: np.ndarray) -> bytes:
    return np.asarray(audio, dtype="<f4").tobytes()


def test_health_endpoint(client):
    """GET /api/health should return ok."""
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_bpm_endpoint(client):
    """POST /api/bpm should return tempo and debug histograms."""
    audio = generate_click_track(bpm=120, duration_seconds=10)
    response = client.post("/api/bpm", params={"sample_rate": 22050}, content=_pcm(audio))

    assert response.status_code == 200
    data = response.json()
    assert abs(data["bpm"] - 120) <= 2.0
    assert data["sample_rate"] == 22050
    assert data["duration"] == len(audio) / 22050
    assert len(data["debug"]["occurrence"]) == 11025
    assert len(data["debug"]["amplitude"]) == 11025


def test_bpm_endpoint_without_debug(client, click_120):
    response = client.post(
        "/api/bpm",
        params={"sample_rate": 22050, "debug": "false"},
        content=_pcm(click_120),
    )
    assert response.status_code == 200
    assert response.json()["debug"] is None


def test_bpm_endpoint_requires_sample_rate(client, click_120):
    response = client.post("/api/bpm", content=_pcm(click_120))
    assert response.status_code == 422


def test_bpm_endpoint_rejects_non_positive_sample_rate(client, click_120):
    response = client.post("/api/bpm", params={"sample_rate": 0}, content=_pcm(click_120))
    assert response.status_code == 422


def test_bpm_endpoint_rejects_truncated_samples(client):
    response = client.post("/api/bpm", params={"sample_rate": 22050}, content=b"\x00" * 7)
    assert response.status_code == 400
    assert "float32" in response.json()["detail"]


def test_bpm_endpoint_rejects_empty_body(client):
    response = client.post("/api/bpm", params={"sample_rate": 22050}, content=b"")
    assert response.status_code == 400


def test_bpm_endpoint_reports_missing_tempo(client, silence):
    response = client.post("/api/bpm", params={"sample_rate": 22050}, content=_pcm(silence))
    assert response.status_code == 422
    assert response.json()["detail"] == "No confident tempo found"


def test_bpm_endpoint_rejects_oversized_body(client, monkeypatch):
    """Endpoint should reject bodies larger than configured limit."""
    from wavebpm.config import settings

    monkeypatch.setattr(settings, "max_upload_mb", 1)
    payload = b"\x00" * (1024 * 1024 + 4)

    response = client.post("/api/bpm", params={"sample_rate": 22050}, content=payload)

    assert response.status_code == 400
    assert "too large" in response.json()["detail"]


def test_bpm_endpoint_failure_returns_generic_error(client, monkeypatch, click_120):
    """Endpoint should not leak internal exception details."""
    import wavebpm.api.analyze as analyze_module

    def _raise(*args, **kwargs):
        raise RuntimeError("boom")

    monkeypatch.setattr(analyze_module, "compute", _raise)

    response = client.post("/api/bpm", params={"sample_rate": 22050}, content=_pcm(click_120))

    assert response.status_code == 500
    assert response.json()["detail"] == "Analysis failed"


def test_dynamic_range_endpoint(client):
    audio = np.full(1000, -0.5, dtype=np.float32)
    response = client.post("/api/dynamic-range", content=_pcm(audio))

    assert response.status_code == 200
    assert abs(response.json()["rms"] - 0.5) < 1e-6


def test_dynamic_range_endpoint_rejects_empty_body(client):
    response = client.post("/api/dynamic-range", content=b"")
    assert response.status_code == 400
