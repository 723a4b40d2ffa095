"""
Form submission endpoint.

Receives the contact fields plus a PDF resume, stores the PDF and relays the
submission by email to the configured mailbox.
"""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Form, status
from fastapi.responses import JSONResponse

from app.api.deps import get_app_settings
from app.core.config import Settings
from app.core.errors import SERVER_ERROR_MESSAGE
from app.core.uploads import ResumeUpload, get_resume_upload
from app.schemas.submission import (
    SubmissionErrorResponse,
    SubmissionForm,
    SubmissionResponse,
)
from app.services.storage_service import LocalUploadStorage
from app.services.submission_service import (
    SUCCESS_MESSAGE,
    FailureKind,
    SubmissionFailure,
    SubmissionService,
)

router = APIRouter()

FAILURE_STATUS = {
    FailureKind.MISSING_RESUME: status.HTTP_400_BAD_REQUEST,
    FailureKind.STORAGE: status.HTTP_500_INTERNAL_SERVER_ERROR,
    FailureKind.COMPOSITION: status.HTTP_500_INTERNAL_SERVER_ERROR,
    FailureKind.DELIVERY: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def get_submission_service(
    settings: Settings = Depends(get_app_settings),
) -> SubmissionService:
    """Return the submission service bound to the process settings."""
    return SubmissionService(settings, LocalUploadStorage(settings.UPLOAD_DIR))


def failure_response(failure: SubmissionFailure) -> JSONResponse:
    status_code = FAILURE_STATUS[failure.kind]
    if status_code < status.HTTP_500_INTERNAL_SERVER_ERROR:
        content = {"message": failure.message}
    else:
        content = {"message": SERVER_ERROR_MESSAGE, "error": failure.message}
    return JSONResponse(status_code=status_code, content=content)


@router.post(
    "/submit-form",
    response_model=SubmissionResponse,
    summary="Submit the contact form with a PDF resume",
    responses={
        400: {"model": SubmissionErrorResponse, "description": "Missing or rejected file"},
        403: {"model": SubmissionErrorResponse, "description": "Origin not allowed"},
        413: {"model": SubmissionErrorResponse, "description": "File too large"},
        500: {"model": SubmissionErrorResponse, "description": "Storage or delivery failed"},
    },
)
async def submit_form(
    name: Optional[str] = Form(None),
    number: Optional[str] = Form(None),
    email: Optional[str] = Form(None),
    subject: Optional[str] = Form(None),
    message: Optional[str] = Form(None),
    resume: Optional[ResumeUpload] = Depends(get_resume_upload),
    service: SubmissionService = Depends(get_submission_service),
):
    """Store the resume, email it to the configured mailbox and report back."""
    form = SubmissionForm(
        name=name,
        number=number,
        email=email,
        subject=subject,
        message=message,
    )

    result = await service.submit(form, resume)
    if not result.success:
        return failure_response(result.failure)

    return SubmissionResponse(message=SUCCESS_MESSAGE)
