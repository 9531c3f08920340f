"""
Integration tests for the explainability REST API.

Runs the FastAPI app in-process with TestClient; no server needed.
"""

import pytest
from fastapi.testclient import TestClient

from lesson_adapt import __version__
from lesson_adapt.api.main import app

ALGEBRA_REQUEST = {
    "topic": "Algebra basics",
    "priorKnowledge": "Basic",
    "confidence": 3,
    "delta": 50,
    "startingStyle": "visual",
}


@pytest.fixture(scope="module")
def client():
    with TestClient(app) as test_client:
        yield test_client


class TestHealth:
    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert response.json() == {"service": "lesson-adapt", "version": __version__, "status": "ok"}

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "policy": "v1.3.0 — confidence-weighted"}


class TestExplainEndpoint:
    def test_algebra(self, client):
        response = client.post("/api/explain", json=ALGEBRA_REQUEST)
        assert response.status_code == 200
        body = response.json()
        assert body["decision"] == "Shift toward practice with quizzes"
        assert body["nextStyle"] == "quiz"
        assert len(body["reasons"]) == 3
        assert body["decisionTrace"] == (
            "policy=v1.3.0 — confidence-weighted • start=visual → next=quiz • "
            "conf=3/5(medium) • knowledge=beginner • delta=+50(large) • top=delta,priorKnowledge"
        )
        assert body["topSignals"] == ["delta", "priorKnowledge"]

    def test_unknown_starting_style_rejected(self, client):
        response = client.post("/api/explain", json={**ALGEBRA_REQUEST, "startingStyle": "cartoon"})
        assert response.status_code == 422

    def test_missing_delta_is_estimated(self, client):
        request = {key: value for key, value in ALGEBRA_REQUEST.items() if key != "delta"}
        response = client.post("/api/explain", json=request)
        assert response.status_code == 200
        assert "delta=+32(moderate)" in response.json()["decisionTrace"]

    def test_missing_confidence_uses_default(self, client):
        request = {key: value for key, value in ALGEBRA_REQUEST.items() if key != "confidence"}
        response = client.post("/api/explain", json=request)
        assert "conf=3/5(medium)" in response.json()["decisionTrace"]

    def test_out_of_range_values_are_clamped(self, client):
        response = client.post("/api/explain", json={**ALGEBRA_REQUEST, "confidence": 12, "delta": -8})
        assert response.status_code == 200
        trace = response.json()["decisionTrace"]
        assert "conf=5/5(high)" in trace
        assert "delta=+0(small)" in trace

    def test_nan_confidence_uses_default(self, client):
        response = client.post(
            "/api/adapt",
            content='{"topic": "Fractions", "priorKnowledge": "Basic", "confidence": NaN}',
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 200
        body = response.json()
        assert "conf=3/5(medium)" in body["decisionTrace"]
        assert body["preScore"] == 38

    def test_empty_body_uses_defaults(self, client):
        response = client.post("/api/explain", json={})
        assert response.status_code == 200
        assert "start=text" in response.json()["decisionTrace"]


class TestTutorInsightEndpoint:
    def test_ten_lines(self, client):
        response = client.post("/api/tutor-insight", json=ALGEBRA_REQUEST)
        assert response.status_code == 200
        lines = response.json()["tutorInsight"].split("\n")
        assert len(lines) == 10
        assert lines[0] == "You made a strong jump on Algebra basics."


class TestAdaptEndpoint:
    def test_full_record(self, client):
        response = client.post("/api/adapt", json=ALGEBRA_REQUEST)
        assert response.status_code == 200
        body = response.json()
        assert body["nextStyle"] == "quiz"
        assert body["knowledgeLabel"] == "beginner"
        assert body["calibration"]["deltaBand"] == "large"
        assert body["scores"]["quiz"] == pytest.approx(0.55)
        assert body["preScore"] is None
        assert body["postScore"] is None

    def test_estimate_is_reported(self, client):
        request = {key: value for key, value in ALGEBRA_REQUEST.items() if key != "delta"}
        body = client.post("/api/adapt", json=request).json()
        assert body["preScore"] == 38
        assert body["postScore"] == 70


class TestPolicyEndpoint:
    def test_policy(self, client):
        response = client.get("/api/policy")
        assert response.status_code == 200
        body = response.json()
        assert body["version"] == "v1.3.0 — confidence-weighted"
        assert body["weights"] == {
            "delta": 0.45,
            "confidence": 0.35,
            "priorKnowledge": 0.15,
            "startingStyle": 0.05,
        }
        assert body["thresholds"]["smallDeltaLimit"] == 20
        assert body["thresholds"]["moderateDeltaLimit"] == 40
