"""
Upload layer for the submission endpoint.

Parses the ``resume`` file field and enforces the PDF-only and size
constraints before the route body runs. Rejected files are never stored.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import PurePosixPath, PureWindowsPath
from typing import Optional

from fastapi import Depends, File, UploadFile, status

from app.api.deps import get_app_settings
from app.core.config import Settings

logger = logging.getLogger(__name__)

PDF_CONTENT_TYPE = "application/pdf"


class UploadRejected(Exception):
    """An uploaded file violates the upload constraints."""

    def __init__(self, message: str, status_code: int):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


@dataclass
class ResumeUpload:
    """A validated resume upload, held in memory until it is stored."""

    original_name: str
    content_type: str
    content: bytes

    @property
    def size_bytes(self) -> int:
        return len(self.content)


def safe_basename(filename: str) -> str:
    """Strip any client-supplied directory part from an upload filename."""
    name = PureWindowsPath(PurePosixPath(filename).name).name
    if name in ("", ".", ".."):
        return "upload.pdf"
    return name


def validate_content_type(content_type: Optional[str]) -> None:
    if not (content_type or "").startswith(PDF_CONTENT_TYPE):
        raise UploadRejected(
            "Only PDF files are allowed!", status.HTTP_400_BAD_REQUEST
        )


async def read_limited(upload: UploadFile, max_bytes: int) -> bytes:
    content = await upload.read(max_bytes + 1)
    if len(content) > max_bytes:
        raise UploadRejected(
            "File too large", status.HTTP_413_REQUEST_ENTITY_TOO_LARGE
        )
    return content


async def get_resume_upload(
    resume: Optional[UploadFile] = File(None),
    settings: Settings = Depends(get_app_settings),
) -> Optional[ResumeUpload]:
    """Return the validated resume, or None when the field is absent."""
    if resume is None:
        return None

    # Browsers post an unnamed, empty part when no file was picked.
    if not resume.filename and not resume.size:
        await resume.close()
        return None

    try:
        validate_content_type(resume.content_type)
        content = await read_limited(resume, settings.MAX_UPLOAD_BYTES)
    except UploadRejected as exc:
        logger.warning(
            "Upload rejected filename=%s content_type=%s reason=%s",
            resume.filename,
            resume.content_type,
            exc.message,
        )
        raise
    finally:
        await resume.close()

    return ResumeUpload(
        original_name=safe_basename(resume.filename or "resume.pdf"),
        content_type=resume.content_type or PDF_CONTENT_TYPE,
        content=content,
    )
