"""
Local upload storage.

Uploaded resumes are written into a single append-only directory. Each file
gets a name that is unique per submission:

    {epoch_millis}-{random 0..1e9}-{original basename}

Files are never removed by the service.
"""

import logging
import random
import time
from pathlib import Path
from typing import Union

from app.core.uploads import safe_basename
from app.schemas.submission import StoredFile

logger = logging.getLogger(__name__)

RANDOM_SUFFIX_MAX = 10**9


# =============================================================================
# EXCEPTIONS
# =============================================================================


class StorageError(Exception):
    """Base storage error."""

    pass


class StorageWriteError(StorageError):
    """The file could not be written."""

    pass


# =============================================================================
# HELPERS
# =============================================================================


def unique_filename(original_name: str) -> str:
    unique_suffix = f"{int(time.time() * 1000)}-{random.randint(0, RANDOM_SUFFIX_MAX)}"
    return f"{unique_suffix}-{safe_basename(original_name)}"


# =============================================================================
# SERVICE
# =============================================================================


class LocalUploadStorage:
    """Append-only storage for uploaded files on the local filesystem."""

    def __init__(self, directory: Union[str, Path]):
        self.directory = Path(directory)

    def ensure_directory(self) -> Path:
        self.directory.mkdir(parents=True, exist_ok=True)
        return self.directory

    def save(
        self, original_name: str, content: bytes, content_type: str
    ) -> StoredFile:
        """Write ``content`` under a fresh unique name and describe the result.

        Raises:
            StorageWriteError: the directory is missing or the write failed.
        """
        target = self.directory / unique_filename(original_name)
        try:
            # "xb" never overwrites an existing upload
            with open(target, "xb") as fh:
                fh.write(content)
        except OSError as exc:
            raise StorageWriteError(
                f"Failed to store upload {original_name!r}: {exc.strerror or exc}"
            ) from exc

        logger.info(
            "Upload stored path=%s size=%s content_type=%s",
            target.name,
            len(content),
            content_type,
        )

        return StoredFile(
            original_name=original_name,
            stored_path=str(target),
            mime_type=content_type,
            size_bytes=len(content),
        )
