from __future__ import annotations

import logging
from dataclasses import dataclass
from email.message import EmailMessage
from email.utils import make_msgid
from enum import Enum
from pathlib import Path
from typing import Optional

from app.core.config import Settings
from app.core.email import DeliveryReceipt, send_email
from app.core.uploads import ResumeUpload
from app.schemas.submission import StoredFile, SubmissionForm
from app.services.storage_service import LocalUploadStorage

logger = logging.getLogger(__name__)

SUBJECT_PREFIX = "New Submission: "
SUCCESS_MESSAGE = "Form submitted and email sent successfully!"
MISSING_RESUME_MESSAGE = "Resume file is required"


class FailureKind(str, Enum):
    MISSING_RESUME = "missing_resume"
    STORAGE = "storage"
    COMPOSITION = "composition"
    DELIVERY = "delivery"


@dataclass
class SubmissionFailure:
    """Why a submission was not relayed."""

    kind: FailureKind
    message: str


@dataclass
class SubmissionResult:
    """Outcome of one pass through the submission pipeline."""

    stored_file: Optional[StoredFile] = None
    receipt: Optional[DeliveryReceipt] = None
    failure: Optional[SubmissionFailure] = None

    @property
    def success(self) -> bool:
        return self.failure is None


def _field(value: Optional[str]) -> str:
    return "" if value is None else value


class SubmissionService:
    """Stores a resume, composes the notification email and relays it."""

    def __init__(self, settings: Settings, storage: LocalUploadStorage):
        self.settings = settings
        self.storage = storage

    def build_email_message(
        self, form: SubmissionForm, stored_file: StoredFile
    ) -> EmailMessage:
        msg = EmailMessage()
        msg["From"] = self.settings.EMAIL_USER
        msg["To"] = self.settings.EMAIL_USER
        msg["Subject"] = f"{SUBJECT_PREFIX}{_field(form.subject)}"
        msg["Message-ID"] = make_msgid()

        body_lines = [
            f"Name: {_field(form.name)}",
            f"Number: {_field(form.number)}",
            f"Email: {_field(form.email)}",
            f"Message: {_field(form.message)}",
        ]
        msg.set_content("\n".join(body_lines))

        maintype, subtype = ("application", "pdf")
        mime_type = stored_file.mime_type.split(";", 1)[0].strip()
        if "/" in mime_type:
            maintype, subtype = mime_type.split("/", 1)
        msg.add_attachment(
            Path(stored_file.stored_path).read_bytes(),
            maintype=maintype,
            subtype=subtype,
            filename=stored_file.original_name,
        )
        return msg

    async def send_submission_email(self, message: EmailMessage) -> DeliveryReceipt:
        return await send_email(message, self.settings)

    async def submit(
        self, form: SubmissionForm, resume: Optional[ResumeUpload]
    ) -> SubmissionResult:
        """Run store -> compose -> send for one submission.

        Every stage failure ends the pipeline; an already stored file stays
        on disk.
        """
        if resume is None:
            return SubmissionResult(
                failure=SubmissionFailure(
                    FailureKind.MISSING_RESUME, MISSING_RESUME_MESSAGE
                )
            )

        logger.info(
            "Received form subject=%s resume=%s size=%s",
            form.subject,
            resume.original_name,
            resume.size_bytes,
            extra={
                "submitter_name": form.name,
                "submitter_number": form.number,
                "submitter_email": form.email,
                "subject": form.subject,
                "resume_filename": resume.original_name,
                "resume_size": resume.size_bytes,
                "resume_content_type": resume.content_type,
            },
        )

        try:
            stored_file = self.storage.save(
                resume.original_name, resume.content, resume.content_type
            )
        except Exception as exc:
            logger.error("Error: %s", exc)
            return SubmissionResult(
                failure=SubmissionFailure(FailureKind.STORAGE, str(exc))
            )

        try:
            message = self.build_email_message(form, stored_file)
        except Exception as exc:
            logger.error("Error: %s", exc)
            return SubmissionResult(
                stored_file=stored_file,
                failure=SubmissionFailure(FailureKind.COMPOSITION, str(exc)),
            )

        try:
            receipt = await self.send_submission_email(message)
        except Exception as exc:
            logger.error("Error: %s", exc)
            return SubmissionResult(
                stored_file=stored_file,
                failure=SubmissionFailure(FailureKind.DELIVERY, str(exc)),
            )

        logger.info("Email sent: %s", receipt.response)
        return SubmissionResult(stored_file=stored_file, receipt=receipt)
