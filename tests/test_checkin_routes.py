"""
Tests for the personal check-in insight routes.
"""
import pytest
from datetime import date
from unittest.mock import AsyncMock, patch
from huma.core.errors import PeriodValidationError
from huma.services.insights import CheckinRow, get_period_factors, get_period_summary
from huma.services.bucketing import build_history
from huma.services.periods import PeriodRange

WEEK = PeriodRange(date(2026, 2, 16), date(2026, 2, 20))


class TestCheckinSummaryRoute:
    """Test GET /api/checkins/summary."""

    def test_summary_payload_uses_wire_names(self, sync_client, auth_headers):
        """Test that the week summary is serialized with camelCase field names."""
        summary = get_period_summary([CheckinRow(date(2026, 2, 16), 70)], "week", WEEK)

        with patch("huma.services.subjects.user_period_summary", new=AsyncMock(return_value=summary)) as mock_summary:
            response = sync_client.get("/api/checkins/summary?weekStart=2026-02-16", headers=auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert set(data) == {"weekStart", "weekEnd", "period", "participation", "averageMood", "daily", "stats"}
        assert data["weekStart"] == "2026-02-16"
        assert data["weekEnd"] == "2026-02-20"
        assert data["averageMood"] == 7.0
        assert data["daily"][0] == {"date": "2026-02-16", "moodValue": 70, "label": "Jour excellent"}
        assert data["daily"][1]["moodValue"] is None
        assert data["stats"] == {"excellentDays": 1, "correctDays": 0, "difficultDays": 0, "missingDays": 4}

        kwargs = mock_summary.await_args.kwargs
        assert kwargs["week_start"] == "2026-02-16"
        assert kwargs["period"] == "week"

    def test_year_summary_payload(self, sync_client, auth_headers):
        """Test that the year summary returns one monthly entry per month."""
        year = PeriodRange(date(2026, 1, 1), date(2026, 12, 31))
        summary = get_period_summary([CheckinRow(date(2026, 1, 5), 64), CheckinRow(date(2026, 1, 6), 65)], "year", year)

        with patch("huma.services.subjects.user_period_summary", new=AsyncMock(return_value=summary)):
            response = sync_client.get("/api/checkins/summary?period=year&date=2026", headers=auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["period"] == "year"
        assert len(data["daily"]) == 12
        assert data["daily"][0] == {"month": "2026-01", "averageMood": 6.5, "participation": 2}

    def test_missing_user_header(self, sync_client):
        """Test that a request without X-User-Id is rejected with 401."""
        response = sync_client.get("/api/checkins/summary")

        assert response.status_code == 401
        assert "X-User-Id" in response.json()["detail"]

    def test_invalid_user_header(self, sync_client):
        """Test that a non-UUID X-User-Id is rejected with 401."""
        response = sync_client.get("/api/checkins/summary", headers={"X-User-Id": "not-a-uuid"})

        assert response.status_code == 401

    def test_unknown_period(self, sync_client, auth_headers):
        """Test that an unknown period is a 400 validation error."""
        response = sync_client.get("/api/checkins/summary?period=decade", headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["error_code"] == "VALIDATION_ERROR"

    def test_malformed_week_start(self, sync_client, auth_headers):
        """Test that weekStart outside YYYY-MM-DD is a 400 validation error."""
        response = sync_client.get("/api/checkins/summary?weekStart=16-02-2026", headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["error_code"] == "VALIDATION_ERROR"

    def test_anchor_validation_error_propagates(self, sync_client, auth_headers):
        """Test that an anchor validation error keeps its message in the response."""
        error = PeriodValidationError("date must be in YYYY-MM format for period=month")
        with patch("huma.services.subjects.user_period_summary", new=AsyncMock(side_effect=error)):
            response = sync_client.get("/api/checkins/summary?period=month&date=2026-02-16", headers=auth_headers)

        assert response.status_code == 400
        data = response.json()
        assert data["error_code"] == "VALIDATION_ERROR"
        assert data["error"] == "date must be in YYYY-MM format for period=month"

    def test_month_anchor_rejected_end_to_end(self, sync_client, auth_headers):
        """The real service rejects the anchor before any query runs."""
        response = sync_client.get("/api/checkins/summary?period=month&date=2026-02-16", headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["error_code"] == "VALIDATION_ERROR"


class TestCheckinFactorsRoute:
    """Test GET /api/checkins/factors."""

    def test_factors_payload(self, sync_client, auth_headers):
        """Test the factors payload shape and histogram buckets."""
        rows = [
            CheckinRow(date(2026, 2, 16), 80, '["WORKLOAD","BALANCE"]'),
            CheckinRow(date(2026, 2, 17), 30, '["WORKLOAD"]'),
        ]
        factors = get_period_factors(rows, "week", WEEK)

        with patch("huma.services.subjects.user_period_factors", new=AsyncMock(return_value=factors)):
            response = sync_client.get("/api/checkins/factors", headers=auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert set(data) == {"weekStart", "weekEnd", "period", "availableCauses", "summary", "byCause"}
        assert data["availableCauses"] == ["WORKLOAD", "BALANCE"]
        assert data["summary"]["totalCheckins"] == 2
        assert data["summary"]["buckets"][1] == {"label": "Sous tension", "range": [21, 40], "count": 1, "percent": 50}
        assert data["byCause"]["BALANCE"]["totalCheckins"] == 1


class TestCheckinHistoryRoute:
    """Test GET /api/checkins/history."""

    def test_history_payload(self, sync_client, auth_headers):
        """Test that history is returned newest first with completed and missed days."""
        history = build_history({"2026-10-19": 61}, today=date(2026, 10, 19), days=2)

        with patch("huma.services.subjects.user_history", new=AsyncMock(return_value=history)) as mock_history:
            response = sync_client.get("/api/checkins/history?days=2", headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == [
            {"date": "2026-10-19", "status": "completed", "moodValue": 61},
            {"date": "2026-10-18", "status": "missed", "moodValue": None},
        ]
        assert mock_history.await_args.kwargs["days"] == 2

    def test_history_window_out_of_range(self, sync_client, auth_headers):
        """Test that a zero-day history window is a 400 validation error."""
        response = sync_client.get("/api/checkins/history?days=0", headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["error_code"] == "VALIDATION_ERROR"
