"""
Tests for Adherence API
=======================

Tests the adherence summary endpoint.
"""

import pytest
from datetime import timedelta
from fastapi import status
from fastapi.testclient import TestClient

from api.schemas.adherence import AdherenceSummaryResponse
from models import DayStatus
from services import clock
from services.adherence_engine import compute

from tests.conftest import TODAY


class TestAdherenceSummary:
    """Tests for GET /adherence/summary"""

    @pytest.mark.api
    def test_summary_for_history(self, client: TestClient, auth_headers, two_week_history):
        response = client.get(
            "/api/v1/adherence/summary",
            params={"reference_date": TODAY.isoformat()},
            headers=auth_headers
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["period_start"] == "2024-03-01"
        assert data["period_end"] == "2024-03-31"
        assert data["streak"] == 3
        assert data["adherence_rate"] == 87
        assert data["today_status"] is True
        assert len(data["day_status"]) == 31
        assert data["day_status"]["2024-03-12"] == "missed"
        assert data["day_status"]["2024-03-01"] == "none"
        assert data["day_status"]["2024-03-14"] == "taken"
        assert data["missed_dates"] == ["2024-03-12"]
        assert len(data["taken_dates"]) == 13

    @pytest.mark.api
    def test_summary_without_records(self, client: TestClient, auth_headers):
        response = client.get(
            "/api/v1/adherence/summary",
            params={"reference_date": TODAY.isoformat()},
            headers=auth_headers
        )

        data = response.json()
        assert data["streak"] == 0
        assert data["adherence_rate"] == 0
        assert set(data["day_status"].values()) == {"none"}

    @pytest.mark.api
    def test_summary_defaults_to_current_month(self, client: TestClient, auth_headers):
        response = client.get("/api/v1/adherence/summary", headers=auth_headers)

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["period_start"] == clock.today().replace(day=1).isoformat()

    @pytest.mark.api
    def test_summary_custom_period(self, client: TestClient, auth_headers, make_record):
        for n in range(3):
            make_record(TODAY - timedelta(days=n), taken=True)

        response = client.get(
            "/api/v1/adherence/summary",
            params={
                "reference_date": TODAY.isoformat(),
                "period_start": (TODAY - timedelta(days=2)).isoformat(),
                "period_end": TODAY.isoformat(),
            },
            headers=auth_headers
        )

        data = response.json()
        assert data["adherence_rate"] == 100
        assert len(data["day_status"]) == 3

    @pytest.mark.api
    def test_summary_inverted_period(self, client: TestClient, auth_headers):
        response = client.get(
            "/api/v1/adherence/summary",
            params={"period_start": "2024-03-31", "period_end": "2024-03-01"},
            headers=auth_headers
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    @pytest.mark.api
    def test_summary_requires_owner(self, client: TestClient):
        response = client.get("/api/v1/adherence/summary")

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


class TestSummarySchema:
    """Tests for the summary response model"""

    @pytest.mark.unit
    def test_day_status_uses_model_enum(self, make_record):
        records = [
            make_record(TODAY, taken=True),
            make_record(TODAY - timedelta(days=1), taken=False),
        ]
        summary = compute(records, TODAY, TODAY - timedelta(days=2), TODAY)

        response = AdherenceSummaryResponse.from_summary(summary)

        assert response.day_status[TODAY.isoformat()] is DayStatus.TAKEN
        assert response.day_status[(TODAY - timedelta(days=1)).isoformat()] is DayStatus.MISSED
        assert response.day_status[(TODAY - timedelta(days=2)).isoformat()] is DayStatus.NONE
        assert response.model_dump(mode="json")["day_status"][TODAY.isoformat()] == "taken"


class TestSystemEndpoints:
    """Tests for health and root"""

    @pytest.mark.api
    def test_health(self, client: TestClient):
        response = client.get("/health")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["status"] == "healthy"
