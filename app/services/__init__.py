"""
Submission Relay services.

Services:
    - LocalUploadStorage: append-only local storage for uploaded resumes
    - SubmissionService: store, compose and relay one form submission
"""

from .storage_service import LocalUploadStorage, StorageError, StorageWriteError
from .submission_service import (
    FailureKind,
    SubmissionFailure,
    SubmissionResult,
    SubmissionService,
)

__all__ = [
    "FailureKind",
    "LocalUploadStorage",
    "StorageError",
    "StorageWriteError",
    "SubmissionFailure",
    "SubmissionResult",
    "SubmissionService",
]
