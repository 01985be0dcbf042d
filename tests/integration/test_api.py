"""Integration tests for API endpoints"""

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, patch
from sqlalchemy.orm import Session
from fastapi.testclient import TestClient
from agrimrv.domain.exceptions import AIServiceError
from agrimrv.domain.models import AIAnalysisResult
from agrimrv.infrastructure.database.models import CreditProfileSnapshot


def test_health_endpoint(client: TestClient):
    """Test health check endpoint"""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_metrics_endpoint(client: TestClient):
    """Test Prometheus metrics endpoint"""
    response = client.get("/metrics")
    assert response.status_code == 200
    assert "agrimrv_scoring" in response.text


def test_score_endpoint_with_supplied_results(client: TestClient, score_payload: dict):
    """Test POST /v1/credit/score with AI results in the body"""
    response = client.post("/v1/credit/score", json=score_payload)

    assert response.status_code == 200
    data = response.json()
    assert data["snapshot_id"]
    assert abs(data["plot_area_hectares"] - 1.2321) < 1e-6
    assert data["carbon"]["score"] == 64
    assert data["mrv_reliability"] == 86
    assert data["credit_profile"] == {
        "credit_score": 71,
        "carbon_performance": 64,
        "mrv_reliability": 86,
        "grade": "C",
        "eligible_loan_amount": 500,
        "monthly_change_delta": 0,
    }
    assert data["explanatory_grade"] == "B"
    assert data["findings"][0]["credit_impact_points"] == 12

    by_key = {entry["category_key"]: entry for entry in data["breakdown"]}
    assert by_key["rice_farming"]["impact"] == "high"
    assert by_key["rice_farming"]["trend"] == "up"
    assert by_key["evidence_quality"]["impact"] == "medium"
    assert by_key["declaration_completion"]["trend"] == "down"
    assert data["recommendations"][-1]["title"] == "Connect with Banks"
    assert "X-Request-ID" in response.headers


@patch("agrimrv.infrastructure.clients.ai_service.AIServiceClient.get_results")
def test_score_endpoint_fetches_results_when_omitted(mock_ai: AsyncMock, client: TestClient, score_payload: dict):
    """Test POST /v1/credit/score falls back to the AI service"""
    mock_ai.return_value = [AIAnalysisResult(image_score=85, credit_risk_score=72, yield_risk=18)]
    del score_payload["ai_results"]

    response = client.post("/v1/credit/score", json=score_payload)

    assert response.status_code == 200
    mock_ai.assert_awaited_once_with("farm_001")
    assert response.json()["credit_profile"]["credit_score"] == 71


@patch("agrimrv.infrastructure.clients.ai_service.AIServiceClient.get_results")
def test_score_endpoint_ai_service_down(mock_ai: AsyncMock, client: TestClient, score_payload: dict):
    """Test POST /v1/credit/score returns 503 when the AI service fails"""
    mock_ai.side_effect = AIServiceError("AI service timeout after 5.0s")
    del score_payload["ai_results"]

    response = client.post("/v1/credit/score", json=score_payload)

    assert response.status_code == 503
    assert client.get("/v1/credit/profile/farm_001").status_code == 404


def test_score_endpoint_incomplete_declaration(client: TestClient, score_payload: dict):
    """Test completeness check rejects declarations before scoring"""
    score_payload["validate_completeness"] = True
    score_payload["plot_coordinates"] = []
    score_payload["declaration"]["agroforestry"]["species"] = []

    response = client.post("/v1/credit/score", json=score_payload)

    assert response.status_code == 422
    assert "plot_coordinates" in response.json()["detail"]


def test_score_endpoint_tolerates_missing_numbers(client: TestClient):
    """Missing areas and ratios score as zero instead of failing"""
    response = client.post(
        "/v1/credit/score",
        json={"profile_id": "farm_empty", "declaration": {}, "ai_results": []},
    )

    assert response.status_code == 200
    profile = response.json()["credit_profile"]
    assert profile["credit_score"] == 0
    assert profile["grade"] == "F"
    assert profile["eligible_loan_amount"] == 0


def test_score_endpoint_rejects_unknown_cycle(client: TestClient, score_payload: dict):
    score_payload["declaration"]["rice_awd"]["wet_dry_cycle"] = "3W3D"
    response = client.post("/v1/credit/score", json=score_payload)
    assert response.status_code == 422


def test_get_profile_endpoint(client: TestClient, score_payload: dict):
    """Test GET /v1/credit/profile/{profile_id} returns the latest snapshot"""
    score_payload["categories"]["soil_carbon"] = {"score": 50, "impact": 5, "trend": "good"}
    client.post("/v1/credit/score", json=score_payload)

    response = client.get("/v1/credit/profile/farm_001")

    assert response.status_code == 200
    data = response.json()
    assert data["credit_profile"]["credit_score"] == 71
    assert data["credit_profile"]["grade"] == "C"
    assert abs(data["carbon_reduction"] - 1.9338) < 1e-6
    by_key = {entry["category_key"]: entry for entry in data["breakdown"]}
    assert by_key["agroforestry"]["display_name"] == "Agroforestry System"
    assert by_key["soil_carbon"]["icon"] == "help-circle"


def test_get_profile_not_found(client: TestClient):
    response = client.get("/v1/credit/profile/nobody")
    assert response.status_code == 404


def test_get_history_endpoint(client: TestClient, score_payload: dict):
    """Test GET /v1/credit/score-history keeps one point per month"""
    client.post("/v1/credit/score", json=score_payload)
    score_payload["verification_history_ratio"] = 100
    client.post("/v1/credit/score", json=score_payload)

    response = client.get("/v1/credit/score-history?profile_id=farm_001")

    assert response.status_code == 200
    data = response.json()
    assert data["profile_id"] == "farm_001"
    assert len(data["history"]) == 1
    assert data["history"][0]["score"] == 72  # second run: mrv 90.92
    assert data["monthly_change"] == 0
    assert data["trend"] == "good"


def test_area_endpoint(client: TestClient):
    response = client.post(
        "/v1/geometry/area",
        json={"points": [{"latitude": 0, "longitude": 0}, {"latitude": 0, "longitude": 0.001}]},
    )
    assert response.status_code == 200
    assert response.json()["area_hectares"] == 0


def test_findings_endpoint(client: TestClient):
    response = client.post(
        "/v1/ai/findings",
        json={"image_score": 85, "credit_risk_score": 72, "yield_risk": 45},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["findings"]["authenticity"] == 97
    assert data["status"] == "needs_review"
    assert data["confidence"] == 72


def test_stored_monthly_change_matches_history(client: TestClient, db: Session, score_payload: dict):
    """The snapshot's monthly change is this run's score minus last month's"""
    last_month = datetime.now(timezone.utc).replace(day=1) - timedelta(days=1)
    db.add(
        CreditProfileSnapshot(
            profile_id="farm_001",
            credit_score=40,
            carbon_performance=40,
            mrv_reliability=40,
            grade="F",
            explanatory_grade="D",
            eligible_loan_amount=0,
            estimated_tco2e=1.0,
            plot_area_hectares=1.0,
            created_at=last_month,
        )
    )
    db.commit()

    score = client.post("/v1/credit/score", json=score_payload).json()
    history = client.get("/v1/credit/score-history?profile_id=farm_001").json()

    assert score["credit_profile"]["monthly_change_delta"] == 31  # 71 - 40
    assert history["monthly_change"] == 31
    assert client.get("/v1/credit/profile/farm_001").json()["credit_profile"]["monthly_change_delta"] == 31


def test_caller_request_id_is_echoed(client: TestClient):
    response = client.get("/health", headers={"X-Request-ID": "mobile-7f3a:42"})
    assert response.headers["X-Request-ID"] == "mobile-7f3a:42"


def test_malformed_request_id_is_replaced(client: TestClient):
    response = client.get("/health", headers={"X-Request-ID": "bad id\twith spaces"})
    returned = response.headers["X-Request-ID"]
    assert returned != "bad id\twith spaces"
    assert len(returned) == 36


def test_mock_ai_server_serves_and_filters_stub_results():
    from mock.ai_server.main import app as ai_app

    ai_client = TestClient(ai_app)

    response = ai_client.get("/ai/results", params={"profile_id": "farm_good"})
    assert response.status_code == 200
    assert len(response.json()["results"]) == 2

    recent = ai_client.get("/ai/results", params={"profile_id": "farm_good", "since": "2026-09-15T00:00:00Z"})
    assert [r["credit_score"] for r in recent.json()["results"]] == [80]

    assert ai_client.get("/ai/results", params={"profile_id": "unknown_farm"}).status_code == 404
    assert ai_client.get("/ai/results", params={"profile_id": "../ai_stub/results_farm_good"}).status_code == 404
