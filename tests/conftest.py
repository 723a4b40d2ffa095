from email.message import EmailMessage
from pathlib import Path
from typing import List, Optional

import pytest
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.core.email import DeliveryReceipt
from app.main import create_app

ALLOWED_ORIGIN = "https://www.modvisorconsultants.com"
MAILBOX = "relay@example.com"

# -----------------------------------------------------------------------------
# Mail gateway fake
# -----------------------------------------------------------------------------


class RecordingGateway:
    """Stands in for the SMTP gateway and remembers every message it got."""

    __test__ = False

    def __init__(self):
        self.messages: List[EmailMessage] = []
        self.error: Optional[Exception] = None

    def fail_with(self, error: Exception) -> None:
        self.error = error

    async def send(self, message: EmailMessage, settings: Settings) -> DeliveryReceipt:
        self.messages.append(message)
        if self.error is not None:
            raise self.error
        return DeliveryReceipt(
            message_id=message.get("Message-ID"),
            recipients=(message["To"],),
        )


# -----------------------------------------------------------------------------
# Settings & App Fixtures
# -----------------------------------------------------------------------------


@pytest.fixture
def upload_dir(tmp_path) -> Path:
    return tmp_path / "uploads"


@pytest.fixture
def settings(upload_dir) -> Settings:
    return Settings(
        _env_file=None,
        EMAIL_USER=MAILBOX,
        EMAIL_PASS="app-password",
        UPLOAD_DIR=str(upload_dir),
        ALLOWED_ORIGINS=[ALLOWED_ORIGIN],
    )


@pytest.fixture
def gateway(monkeypatch) -> RecordingGateway:
    fake = RecordingGateway()
    monkeypatch.setattr("app.services.submission_service.send_email", fake.send)
    return fake


@pytest.fixture
def client(settings, gateway):
    """TestClient around a freshly built app; lifespan events run."""
    with TestClient(create_app(settings)) as c:
        yield c


@pytest.fixture
def uploaded_files(upload_dir):
    """Callable listing what the app has written to the uploads directory."""

    def _list() -> List[Path]:
        if not upload_dir.exists():
            return []
        return sorted(p for p in upload_dir.iterdir() if p.is_file())

    return _list
