from fastapi.testclient import TestClient

from app.core.config import Settings
from app.main import create_app


def test_create_app_creates_upload_directory(tmp_path):
    upload_dir = tmp_path / "nested" / "uploads"
    settings = Settings(
        _env_file=None,
        EMAIL_USER="relay@example.com",
        EMAIL_PASS="app-password",
        UPLOAD_DIR=str(upload_dir),
    )

    create_app(settings)

    assert upload_dir.is_dir()


def test_health(client, settings):
    resp = client.get("/health")

    assert resp.status_code == 200
    assert resp.json() == {
        "status": "healthy",
        "version": settings.VERSION,
        "environment": settings.ENVIRONMENT,
    }


def test_unknown_route_uses_message_payload(client):
    resp = client.get("/api/nope")

    assert resp.status_code == 404
    assert resp.json() == {"message": "Not Found"}


def test_wrong_method_uses_message_payload(client):
    resp = client.get("/api/submit-form")

    assert resp.status_code == 405
    assert "message" in resp.json()


def test_unhandled_error_hides_details(settings, monkeypatch):
    app = create_app(settings)

    async def _boom(self, form, resume):
        raise RuntimeError("secret internals")

    monkeypatch.setattr("app.services.submission_service.SubmissionService.submit", _boom)

    with TestClient(app, raise_server_exceptions=False) as client:
        resp = client.post(
            "/api/submit-form",
            files={"resume": ("resume.pdf", b"%PDF", "application/pdf")},
        )

    assert resp.status_code == 500
    assert resp.json() == {"message": "Server error"}


def test_startup_is_logged(settings, caplog):
    caplog.set_level("INFO", logger="app.main")

    with TestClient(create_app(settings)):
        pass

    assert "Server running on http://localhost:5001" in caplog.text
