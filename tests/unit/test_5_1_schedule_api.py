"""
Unit tests for the schedule API (Subtask 5.1).

Tests cover:
- JSON and CSV schedule endpoints
- Upload validation errors
- Upload size limit
"""

import csv
import io

import pytest
from fastapi import status

from src.core.config import settings
from src.timetable.export import CSV_HEADER


def _upload(content: bytes):
    return {"input": ("arrivals.csv", content, "text/csv")}


class TestScheduleEndpoint:
    """Test suite for POST /api/v1/schedule."""

    def test_returns_sixteen_trains(self, client, sample_csv):
        response = client.post("/api/v1/schedule", files=_upload(sample_csv))
        assert response.status_code == status.HTTP_200_OK

        data = response.json()
        assert len(data) == 16
        assert [e["TrainNum"] for e in data] == list(range(1, 17))
        assert {e["TrainType"] for e in data} <= {"L4", "L8"}

    def test_entries_use_wall_clock_times(self, client, sample_csv):
        data = client.post("/api/v1/schedule", files=_upload(sample_csv)).json()
        for entry in data:
            for key in ("AArrivalTime", "BArrivalTime", "CArrivalTime", "UArrivalTime"):
                hours, minutes = entry[key].split(":")
                assert len(minutes) == 2

    def test_everyone_is_carried(self, client, sample_csv):
        data = client.post("/api/v1/schedule", files=_upload(sample_csv)).json()
        assert sum(e["UOffloading"] for e in data) == 185

    def test_capacity_invariants(self, client, sample_csv):
        data = client.post("/api/v1/schedule", files=_upload(sample_csv)).json()
        for e in data:
            assert e["AAvailCap"] >= e["ABoarding"] >= 0
            assert e["BAvailCap"] >= e["BBoarding"] >= 0
            assert e["CAvailCap"] >= e["CBoarding"] >= 0
            assert e["UOffloading"] == e["ABoarding"] + e["BBoarding"] + e["CBoarding"]

    def test_single_row_upload(self, client):
        response = client.post("/api/v1/schedule", files=_upload(b"A,7:00,5\n"))
        assert response.status_code == status.HTTP_200_OK
        assert sum(e["UOffloading"] for e in response.json()) == 5

    def test_missing_input_field(self, client):
        response = client.post("/api/v1/schedule", files={"other": ("a.csv", b"A,7:00,1", "text/csv")})
        assert response.status_code == 422

    @pytest.mark.parametrize("content", [
        b"",
        b"Z,7:00,3\n",
        b"A,7:00,three\n",
        b"A,noon,3\n",
        "A,7:00,²\n".encode(),
    ])
    def test_invalid_upload(self, client, content):
        response = client.post("/api/v1/schedule", files=_upload(content))
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["status_code"] == 400

    def test_upload_too_large(self, client, monkeypatch):
        monkeypatch.setattr(settings, "max_upload_size_mb", 1)
        content = b"A,7:00,1\n" * (1024 * 1024 // 9 + 10)

        response = client.post("/api/v1/schedule", files=_upload(content))
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "exceeds maximum" in response.json()["error"]


class TestScheduleCsvEndpoint:
    """Test suite for POST /api/v1/schedule/csv."""

    def test_returns_csv(self, client, sample_csv):
        response = client.post("/api/v1/schedule/csv", files=_upload(sample_csv))

        assert response.status_code == status.HTTP_200_OK
        assert response.headers["content-type"].startswith("text/csv")
        assert "schedule.csv" in response.headers["content-disposition"]

        rows = list(csv.reader(io.StringIO(response.text)))
        assert rows[0] == CSV_HEADER
        assert len(rows) == 17

    def test_invalid_upload(self, client):
        response = client.post("/api/v1/schedule/csv", files=_upload(b"A,7:00\n"))
        assert response.status_code == status.HTTP_400_BAD_REQUEST
