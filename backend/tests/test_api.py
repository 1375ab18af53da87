"""Tests for FastAPI endpoints."""
import pytest
from fastapi.testclient import TestClient

from app import main
from app.main import app, get_report_generator
from app.ui.sessions import PageSessionStore

from conftest import StubReportGenerator


@pytest.fixture
def generator():
    return StubReportGenerator(report="Accuracy: 0.91...\nF1-score: 0.88")


@pytest.fixture
def client(monkeypatch, generator):
    """Create a test client with a stubbed report generator and fresh sessions."""
    monkeypatch.setattr(main, "PAGE_SESSIONS", PageSessionStore())
    app.dependency_overrides[get_report_generator] = lambda: generator
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestAPI:
    """Test suite for API endpoints."""

    def test_health_endpoint(self, client):
        response = client.get("/api/health")
        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "GLUE Benchmark Evaluator API"
        assert "version" in data

    def test_generate_report_success(self, client, generator, model_outputs):
        response = client.post(
            "/api/generate-report",
            json={"modelOutputs": model_outputs, "glueDataset": "MRPC"},
        )
        assert response.status_code == 200
        assert response.json() == {"success": True, "report": generator.report}

    def test_generate_report_invalid_input(self, client, generator):
        response = client.post(
            "/api/generate-report",
            json={"modelOutputs": "short", "glueDataset": "MRPC"},
        )
        assert response.status_code == 200
        assert response.json() == {"success": False, "error": "Invalid input."}
        assert generator.requests == []

    def test_generate_report_malformed_body(self, client, generator):
        response = client.post(
            "/api/generate-report",
            content=b"not json",
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 200
        assert response.json() == {"success": False, "error": "Invalid input."}
        assert generator.requests == []

    def test_generate_report_generator_failure(self, client, generator, model_outputs):
        generator.error = RuntimeError("upstream exploded")
        response = client.post(
            "/api/generate-report",
            json={"modelOutputs": model_outputs, "glueDataset": "MRPC"},
        )
        data = response.json()
        assert data["success"] is False
        assert "upstream exploded" not in data["error"]
        assert data["error"].startswith("An unexpected error occurred")


class TestEvaluatorFlow:
    """End-to-end page flows through the form endpoints."""

    def test_initial_page_is_idle(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert "Your Report Awaits" in response.text
        assert "session_id" in response.cookies

    def test_submit_then_download(self, client, generator, model_outputs):
        client.get("/")
        response = client.post(
            "/",
            data={"modelOutputs": model_outputs, "glueDataset": "MRPC"},
        )

        assert response.status_code == 200
        assert response.history and response.history[0].status_code == 303
        assert "Submitted Data" in response.text
        assert '<p class="submitted-dataset">MRPC</p>' in response.text
        assert "Accuracy: 0.91..." in response.text
        assert "Benchmark report generated successfully." in response.text

        download = client.get("/report/download")
        assert download.status_code == 200
        assert download.headers["content-type"].startswith("text/markdown")
        assert 'filename="benchmark-report.md"' in download.headers["content-disposition"]
        assert download.text == generator.report

        # Toasts are only shown once.
        assert "Benchmark report generated successfully." not in client.get("/").text

    def test_short_outputs_never_reach_handler(self, client, generator):
        response = client.post("/", data={"modelOutputs": "0123456789", "glueDataset": "MRPC"})

        assert response.status_code == 422
        assert "Model output must be at least 50 characters." in response.text
        assert "0123456789" in response.text
        assert generator.requests == []

    def test_unknown_dataset_is_rejected(self, client, generator, model_outputs):
        response = client.post("/", data={"modelOutputs": model_outputs, "glueDataset": "ImageNet"})

        assert response.status_code == 422
        assert "Please select a GLUE dataset." in response.text
        assert generator.requests == []

    def test_failed_generation_shows_error_toast(self, client, generator, model_outputs):
        generator.report = ""
        response = client.post("/", data={"modelOutputs": model_outputs, "glueDataset": "QNLI"})

        assert response.status_code == 200
        assert "The AI failed to generate a report. Please try again." in response.text
        assert "Your Report Awaits" in response.text
        assert client.get("/report/download").status_code == 204

    def test_failed_generation_keeps_submitted_input(self, client, generator, model_outputs):
        generator.report = ""
        response = client.post("/", data={"modelOutputs": model_outputs, "glueDataset": "QNLI"})

        assert "The AI failed to generate a report. Please try again." in response.text
        assert f">{model_outputs}</textarea>" in response.text
        assert '<option value="QNLI" selected>' in response.text

        # The input survives a plain reload too.
        reloaded = client.get("/").text
        assert f">{model_outputs}</textarea>" in reloaded
        assert '<option value="QNLI" selected>' in reloaded

    def test_download_without_report_is_noop(self, client):
        response = client.get("/report/download")
        assert response.status_code == 204
        assert response.content == b""
