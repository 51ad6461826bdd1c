"""Tests for FastAPI main application."""

from unittest.mock import MagicMock, patch

import pytest
from fastapi.testclient import TestClient


@pytest.fixture
def client():
    """Create test client without a feedback generator."""
    from main import app

    with patch("main.feedback_generator", None):
        with TestClient(app) as client:
            yield client


def part_payload(part, text, duration, confidence=0.95):
    words = []
    t = 0.0
    for token in text.split():
        words.append({"word": token, "confidence": confidence, "start": t, "end": t + 0.3})
        t += 0.4
    return {
        "part": part,
        "transcription": {
            "transcript": text,
            "words": words,
            "overall_confidence": confidence,
            "audio_duration": duration,
            "audio_quality": "good",
        },
        "questions": [],
    }


class TestHealthEndpoint:
    """Tests for health check endpoint."""

    def test_health_returns_ok(self, client):
        """Test health endpoint returns healthy status."""
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestEvaluateEndpoint:
    """Tests for the evaluate endpoint."""

    def test_evaluate_parts(self, client, part1_text, part2_text, part3_text):
        """Test a full evaluation round trip."""
        payload = {
            "parts": [
                part_payload(1, part1_text, 40.0),
                part_payload(2, part2_text, 110.0),
                part_payload(3, part3_text, 50.0),
            ],
            "cue_card_topic": "Describe a journey you remember",
            "part3_theme": "Tourism",
        }
        response = client.post("/evaluate", json=payload)

        assert response.status_code == 200
        data = response.json()
        assert data["confidence"] == "high"
        assert data["evaluated_at"] is not None
        assert data["overall_feedback"] is None
        assert data["total_speaking_time"] == 200.0
        assert data["transcripts"]["part2"] == part2_text
        assert data["pronunciation_analysis"]["note"]
        assert 1.0 <= data["estimated_band"] <= 9.0

    def test_empty_parts_returns_low_confidence(self, client):
        """Test missing input is not an error."""
        response = client.post("/evaluate", json={"parts": []})
        assert response.status_code == 200
        data = response.json()
        assert data["confidence"] == "low"
        assert "No recordings were provided." in data["warnings"]

    def test_duplicate_parts_rejected(self, client, part1_text):
        """Test that a part may only be submitted once."""
        payload = {"parts": [part_payload(1, part1_text, 40.0), part_payload(1, part1_text, 40.0)]}
        response = client.post("/evaluate", json=payload)
        assert response.status_code == 400

    def test_invalid_part_number_rejected(self, client, part1_text):
        """Test validation of the part number."""
        response = client.post("/evaluate", json={"parts": [part_payload(4, part1_text, 40.0)]})
        assert response.status_code == 422

    def test_feedback_generator_used_when_configured(self, part1_text):
        """Test narrative feedback is attached when a generator exists."""
        from main import app

        generator = MagicMock()
        generator.generate_feedback.return_value = "Nice work."
        with patch("main.feedback_generator", generator):
            with TestClient(app) as client:
                response = client.post(
                    "/evaluate", json={"parts": [part_payload(1, part1_text, 40.0)]}
                )

        assert response.status_code == 200
        assert response.json()["overall_feedback"] == "Nice work."
        generator.generate_feedback.assert_called_once()
